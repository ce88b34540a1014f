"""Conversion output model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from richtext2md.schemas.assets import AssetDescriptor


class ConversionResult(BaseModel):
    """Markdown body and asset manifest for one rich-text document."""

    markdown: str
    assets: list[AssetDescriptor] = Field(default_factory=list)
