"""
Sessionize feed download with retry logic.

All network interaction with the feed is centralized here so that retry policy and error mapping
are applied consistently.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog
from pydantic import ValidationError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
)

from agenda.management.commands._sessionize.exceptions import FeedError
from agenda.management.commands._sessionize.schema import SessionizeData
from agenda.management.commands._sessionize.types import VerbosityLevel


if TYPE_CHECKING:
    from agenda.management.commands._sessionize.context import ImportContext


logger = structlog.get_logger(__name__)


def fetch_feed(
    url: str,
    ctx: ImportContext,
    client: httpx.Client | None = None,
) -> SessionizeData:
    """
    Download the feed at *url* and validate it against :class:`SessionizeData`.

    Transport errors are retried with exponential back-off up to ``ctx.max_retries`` attempts.
    Every failure, including HTTP error statuses and schema mismatches, surfaces as
    :class:`FeedError`; nothing has been staged at that point.
    """
    owns_client = client is None
    http = client or httpx.Client(timeout=ctx.timeout, follow_redirects=True)

    @retry(
        stop=stop_after_attempt(max(ctx.max_retries, 1)),
        wait=ctx.retry_wait,
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True,
    )
    def _do_fetch() -> httpx.Response:
        response = http.get(url, headers={"Accept": "application/json"})
        response.raise_for_status()
        return response

    ctx.log(f"Fetching Sessionize feed from {url}...", VerbosityLevel.NORMAL)
    try:
        response = _do_fetch()
        feed = SessionizeData.model_validate_json(response.content)
    except httpx.HTTPStatusError as exc:
        raise FeedError(url, f"HTTP {exc.response.status_code}") from exc
    except httpx.HTTPError as exc:
        raise FeedError(url, str(exc) or type(exc).__name__) from exc
    except ValidationError as exc:
        raise FeedError(url, f"invalid feed document ({exc.error_count()} errors)") from exc
    finally:
        if owns_client:
            http.close()

    logger.info(
        "sessionize_feed_fetched",
        url=url,
        sessions=len(feed.sessions),
        speakers=len(feed.speakers),
        categories=len(feed.categories),
        rooms=len(feed.rooms),
    )
    return feed
