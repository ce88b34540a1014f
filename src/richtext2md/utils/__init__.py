"""Utility helpers for richtext2md."""
