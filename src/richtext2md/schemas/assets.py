"""Embedded asset models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AssetDescriptor(BaseModel):
    """An asset referenced from a document, optionally resolved.

    Attributes:
        id: Asset reference as found in the document.
        url: Location of the binary, when the reference was resolved.
        title: Asset title, when the reference was resolved.
        content_type: MIME type of the binary, when the reference was resolved.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    url: str | None = None
    title: str | None = None
    content_type: str | None = None
