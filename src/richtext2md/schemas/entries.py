"""Blog entry models shared by the Contentful, CSV and Strapi layers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from richtext2md.schemas.assets import AssetDescriptor


class BlogEntry(BaseModel):
    """A blog post ready to be written to the destination store.

    Serializes with camelCase keys (``blogText``, ``publishedDate``...) to
    match the Strapi collection schema; construct with either spelling.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = "Untitled"
    slug: str = ""
    blog_text: str = ""
    contentful_rich_text: dict[str, Any] | None = None
    tags: list[str] = Field(default_factory=list)
    status: str = "draft"
    content_type: str = "Blog"
    author: str | None = None
    last_updated_by: str | None = None
    published_date: str | None = None
    embedded_assets: list[AssetDescriptor] = Field(default_factory=list)
    contentful_id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def is_published(self) -> bool:
        return self.status == "published"


class ImportFailure(BaseModel):
    """One entry the destination store did not accept."""

    name: str
    slug: str = ""
    message: str


class ImportReport(BaseModel):
    """Outcome of a bulk import into the destination store.

    Attributes:
        success_count: Entries accepted by the destination.
        error_count: Entries rejected or not sent.
        failures: One record per failed entry, in import order.
    """

    success_count: int = 0
    error_count: int = 0
    failures: list[ImportFailure] = Field(default_factory=list)
