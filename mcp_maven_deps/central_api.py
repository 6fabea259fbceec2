"""Maven Central search: query construction and the HTTP client.

- Query builder: coordinate -> Solr parameters for the newest GAV record
- MavenCentralHttpClient: thin wrapper over one shared httpx.AsyncClient
- HTTPS-only guard on the base URL

Notes:
- No retries, backoff or caching; one logical request per lookup.
- Redirects are followed; a 3xx answer is not reported as an error.
- httpx errors are raised to the caller unchanged; classifying them is the
  tool's job.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from .config import Settings
from .models import MavenCoordinate, SearchQuery, SearchResponse

_logger = logging.getLogger(__name__)


def build_ga_query(group_id: str, artifact_id: str) -> str:
    """Build the Solr `q` for an exact group/artifact match.

    Example:
        q = g:"org.springframework" AND a:"spring-core"

    Parts are interpolated verbatim. An embedded double quote ends the Solr
    literal early and yields a malformed query; nothing escapes it yet.
    """
    return f'g:"{group_id}" AND a:"{artifact_id}"'


def build_latest_version_query(coordinate: MavenCoordinate) -> SearchQuery:
    """Query for the single most recently published version of a coordinate.

    Ordering is delegated to Maven Central (``sort=timestamp desc``, ``rows=1``).
    """
    return SearchQuery(
        q=build_ga_query(coordinate.group_id, coordinate.artifact_id),
        core="gav",
        rows=1,
        wt="json",
        sort="timestamp desc",
    )


def extract_error_message(exc: httpx.HTTPError) -> str:
    """Best message for an httpx failure.

    Solr reports query problems as ``{"error": {"msg": "..."}}``; when the
    failed response carries such a body its ``msg`` wins, otherwise the
    exception's own text is used.
    """
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            body: Any = exc.response.json()
        except ValueError:
            body = None
        error = body.get("error") if isinstance(body, dict) else None
        msg = error.get("msg") if isinstance(error, dict) else None
        if isinstance(msg, str):
            return msg
    return str(exc)


class MavenCentralHttpClient:
    """Async client for the Maven Central search API.

    Parameters are sourced from Settings by default, but can be overridden
    for testability. The wrapped httpx client is long-lived; call
    :meth:`aclose` once on shutdown.
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout_seconds: Optional[float] = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        s = Settings()
        self._base_url = base_url or s.MAVEN_CENTRAL_BASE_URL
        if not self._base_url.lower().startswith("https://"):
            raise ValueError("Base URL must be HTTPS")

        timeout = timeout_seconds if timeout_seconds is not None else s.HTTP_TIMEOUT_SECONDS
        if client is None:
            if timeout is not None:
                client = httpx.AsyncClient(timeout=timeout, follow_redirects=True)
            else:
                client = httpx.AsyncClient(follow_redirects=True)
        self._client = client

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        await self._client.aclose()

    async def search(self, query: SearchQuery) -> SearchResponse:
        """Run a search and parse the documented response shape.

        Raises httpx.HTTPError for transport failures and non-2xx statuses.
        A body that is not JSON raises ValueError and an unexpected JSON shape
        raises pydantic.ValidationError.
        """
        # Only log operation, not full URL + params at info level
        _logger.debug("HTTP GET search", extra={"op": "search", "rows": query.rows})
        resp = await self._client.get(self._base_url, params=query.to_params())
        resp.raise_for_status()
        return SearchResponse.model_validate(resp.json())


__all__ = [
    "MavenCentralHttpClient",
    "build_ga_query",
    "build_latest_version_query",
    "extract_error_message",
]
