"""HTTP API for richtext2md."""
