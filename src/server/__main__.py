"""Run the conversion API with ``python -m server``."""

import uvicorn

from richtext2md.config import RICHTEXT2MD_HOST, RICHTEXT2MD_PORT, RICHTEXT2MD_RELOAD
from richtext2md.utils.logging_config import get_logger

logger = get_logger(__name__)


def run() -> None:
    logger.info("Starting richtext2md server on %s:%d", RICHTEXT2MD_HOST, RICHTEXT2MD_PORT)
    uvicorn.run(
        "server.main:app",
        host=RICHTEXT2MD_HOST,
        port=RICHTEXT2MD_PORT,
        reload=RICHTEXT2MD_RELOAD,
        log_config=None,  # keep the handler installed by configure_logging
    )


if __name__ == "__main__":
    run()
