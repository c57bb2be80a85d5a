"""
Storage dependencies shared by the routers
"""

import logging
from functools import lru_cache

from app.core.config import settings
from app.services.image_host import GitHubImageHost
from app.services.row_store import InMemoryRowStore, RowStore
from app.services.sheets_client import GoogleSheetsRowStore

logger = logging.getLogger(__name__)


def use_google_sheets() -> bool:
    return settings.USE_GOOGLE_SHEETS is True


@lru_cache(maxsize=1)
def get_store() -> RowStore:
    """Return the process-wide row store for the configured backend"""
    if use_google_sheets():
        logger.info("Using Google Sheets row store")
        return GoogleSheetsRowStore()
    logger.warning("USE_GOOGLE_SHEETS is off; data lives in process memory only")
    return InMemoryRowStore()


@lru_cache(maxsize=1)
def get_image_host() -> GitHubImageHost | None:
    if not (settings.GITHUB_TOKEN and settings.GITHUB_REPO_OWNER and settings.GITHUB_REPO_NAME):
        logger.warning("GitHub image hosting is not configured; uploaded images will be ignored")
        return None
    return GitHubImageHost(
        token=settings.GITHUB_TOKEN,
        owner=settings.GITHUB_REPO_OWNER,
        repo=settings.GITHUB_REPO_NAME,
        branch=settings.GITHUB_BRANCH,
        api_url=settings.GITHUB_API_URL,
    )
