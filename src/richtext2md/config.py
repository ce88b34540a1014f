"""Local configuration for richtext2md."""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_DATA_DIR = "data"
DEFAULT_CONTENTFUL_CDN_URL = "https://cdn.contentful.com"
DEFAULT_CONTENTFUL_ENVIRONMENT = "master"
DEFAULT_CONTENTFUL_CONTENT_TYPE = "blog"
DEFAULT_CONTENTFUL_PAGE_LIMIT = 1000
DEFAULT_STRAPI_URL = "http://localhost:1337"
DEFAULT_FETCH_TIMEOUT_S = 10.0
DEFAULT_FETCH_MAX_RETRIES = 2
DEFAULT_FETCH_BACKOFF_S = 0.5
DEFAULT_USER_AGENT = "richtext2md/0.1"
DEFAULT_LOG_LEVEL = "INFO"

# Source: Contentful Delivery API.
CONTENTFUL_SPACE_ID = os.getenv("CONTENTFUL_SPACE_ID", "")
CONTENTFUL_ACCESS_TOKEN = os.getenv("CONTENTFUL_ACCESS_TOKEN", "")
CONTENTFUL_ENVIRONMENT = os.getenv("CONTENTFUL_ENVIRONMENT", DEFAULT_CONTENTFUL_ENVIRONMENT)
CONTENTFUL_CDN_URL = os.getenv("CONTENTFUL_CDN_URL", DEFAULT_CONTENTFUL_CDN_URL).rstrip("/")
CONTENTFUL_CONTENT_TYPE = os.getenv("CONTENTFUL_CONTENT_TYPE", DEFAULT_CONTENTFUL_CONTENT_TYPE)
CONTENTFUL_PAGE_LIMIT = int(os.getenv("CONTENTFUL_PAGE_LIMIT", str(DEFAULT_CONTENTFUL_PAGE_LIMIT)))

# Destination: Strapi REST API.
STRAPI_URL = os.getenv("STRAPI_URL", DEFAULT_STRAPI_URL).rstrip("/")
STRAPI_API_TOKEN = os.getenv("STRAPI_API_TOKEN", "")

# Intermediate JSON files (migration output, parsed CSV, exports).
RICHTEXT2MD_DATA_PATH = Path(os.getenv("RICHTEXT2MD_DATA_PATH", DEFAULT_DATA_DIR)).expanduser().resolve()
RICHTEXT2MD_FETCH_TIMEOUT_S = float(os.getenv("RICHTEXT2MD_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
RICHTEXT2MD_FETCH_MAX_RETRIES = int(os.getenv("RICHTEXT2MD_FETCH_MAX_RETRIES", str(DEFAULT_FETCH_MAX_RETRIES)))
RICHTEXT2MD_FETCH_BACKOFF_S = float(os.getenv("RICHTEXT2MD_FETCH_BACKOFF_S", str(DEFAULT_FETCH_BACKOFF_S)))
RICHTEXT2MD_USER_AGENT = os.getenv("RICHTEXT2MD_USER_AGENT", DEFAULT_USER_AGENT)
RICHTEXT2MD_LOG_LEVEL = os.getenv("RICHTEXT2MD_LOG_LEVEL", DEFAULT_LOG_LEVEL)

# Conversion API server.
RICHTEXT2MD_HOST = os.getenv("HOST", "0.0.0.0")  # noqa: S104
RICHTEXT2MD_PORT = int(os.getenv("PORT", "8000"))
RICHTEXT2MD_RELOAD = os.getenv("RELOAD", "false").lower() == "true"
