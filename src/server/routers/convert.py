"""Convert endpoint for the API."""

from fastapi import APIRouter

from richtext2md.assets import build_asset_resolver, collect_embedded_assets
from richtext2md.markdown import convert_rich_text_to_markdown
from richtext2md.rich_text import parse_rich_text
from richtext2md.schemas import ConversionResult
from richtext2md.utils.logging_config import get_logger
from server.models import ConvertErrorResponse, ConvertRequest

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/api/convert",
    response_model=ConversionResult,
    responses={422: {"model": ConvertErrorResponse, "description": "Invalid request body"}},
)
async def api_convert(convert_request: ConvertRequest) -> ConversionResult:
    """Convert a rich-text document to Markdown and list its embedded assets.

    **Parameters**

    - **convert_request** (`ConvertRequest`): the document and, optionally, the
      ``includes`` block used to resolve asset URLs, titles and content types

    **Returns**

    - **ConversionResult**: the Markdown body and the asset manifest in document order

    """
    document = parse_rich_text(convert_request.document)
    resolve = build_asset_resolver(convert_request.includes) if convert_request.includes else None
    result = ConversionResult(
        markdown=convert_rich_text_to_markdown(document),
        assets=collect_embedded_assets(document, resolve),
    )
    logger.info(
        "Converted document",
        extra={"markdown_chars": len(result.markdown), "asset_count": len(result.assets)},
    )
    return result


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}
