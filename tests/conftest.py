from __future__ import annotations

from collections.abc import AsyncIterator, Iterator

import pytest
import respx

from mcp_maven_deps.central_api import MavenCentralHttpClient
from mcp_maven_deps.config import Settings


@pytest.fixture
def respx_router() -> Iterator[respx.Router]:
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def respx_search_mock(respx_router: respx.Router):
    """Prepare a route on the Maven Central search URL.

    Tests can call `.mock(return_value=...)` and inspect `.called`/`.calls`.
    """

    base_url = Settings().MAVEN_CENTRAL_BASE_URL
    return respx_router.get(base_url)


@pytest.fixture
async def central_client() -> AsyncIterator[MavenCentralHttpClient]:
    client = MavenCentralHttpClient()
    try:
        yield client
    finally:
        await client.aclose()


@pytest.fixture
def search_payload():
    """Factory for Maven Central search bodies: response.docs[] with 'v' as version."""

    def _f(*versions: str) -> dict:
        docs = [
            {"id": f"g:a:{v}", "g": "g", "a": "a", "v": v, "timestamp": 1700000000000 - i}
            for i, v in enumerate(versions)
        ]
        return {"responseHeader": {"status": 0}, "response": {"numFound": len(docs), "docs": docs}}

    return _f
