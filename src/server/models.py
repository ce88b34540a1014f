"""Pydantic models for the conversion API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConvertRequest(BaseModel):
    """Request model for the /api/convert endpoint.

    Attributes
    ----------
    document : dict[str, Any]
        The rich-text document, as returned by the Contentful API.
    includes : dict[str, Any] | None
        The ``includes`` block of the same response, used to resolve
        embedded assets.

    """

    model_config = ConfigDict(extra="ignore")

    document: dict[str, Any] = Field(..., description="Rich-text document JSON")
    includes: dict[str, Any] | None = Field(default=None, description="Contentful includes block")

    @field_validator("document")
    @classmethod
    def validate_document(cls, v: dict[str, Any]) -> dict[str, Any]:
        """Validate that ``document`` looks like a rich-text node."""
        if "nodeType" not in v:
            err = "document must be a rich-text node with a nodeType"
            raise ValueError(err)
        return v


class ConvertErrorResponse(BaseModel):
    """Error response model for the /api/convert endpoint."""

    error: str = Field(..., description="Error message")
