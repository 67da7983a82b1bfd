"""HTTP Enrichment Client — looks up supplementary question fields from a scripted web service.

Invariants:
    - One POST per lookup: the URL list is sent as a JSON array
    - Bounded timeout on every call; no retries
    - Transport errors, timeouts, non-2xx statuses and malformed payloads
      all raise EnrichmentServiceError (core/errors.py)
    - An empty URL list never touches the network

Design Decisions:
    - follow_redirects=True: scripted endpoints answer POSTs with a redirect
      to the rendered result
    - Singleton initialized on startup only when ENRICHMENT_URL is configured;
      get_enrichment_client() returns None otherwise (enrichment disabled)
    - Injected via FastAPI dependency so tests substitute a fake client
"""

import logging

import httpx

from thoughtcode.core.enrichment_merge import index_enrichment_payload
from thoughtcode.core.errors import EnrichmentServiceError
from thoughtcode.core.repository_protocols import EnrichmentClient

logger = logging.getLogger(__name__)


class HttpEnrichmentClient:
    """Wraps httpx.AsyncClient with timeout and error mapping."""

    def __init__(
        self,
        endpoint_url: str,
        timeout_seconds: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.endpoint_url = endpoint_url
        self.client = httpx.AsyncClient(
            timeout=timeout_seconds,
            follow_redirects=True,
            transport=transport,
        )

    async def lookup(self, description_urls: list[str]) -> dict[str, dict]:
        """POST the URL list and index the response by description URL."""
        if not description_urls:
            return {}
        try:
            response = await self.client.post(
                self.endpoint_url, json=description_urls,
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as e:
            raise EnrichmentServiceError(str(e) or "request timed out", "timeout")
        except httpx.HTTPStatusError as e:
            raise EnrichmentServiceError(
                f"HTTP {e.response.status_code}", "http_status",
            )
        except httpx.HTTPError as e:
            raise EnrichmentServiceError(str(e), "connection_error")
        except ValueError as e:
            raise EnrichmentServiceError(str(e), "malformed_response")

        try:
            entries = index_enrichment_payload(payload)
        except ValueError as e:
            raise EnrichmentServiceError(str(e), "malformed_response")
        logger.info(
            "Enrichment lookup succeeded",
            extra={"url_count": len(description_urls)},
        )
        return entries

    async def aclose(self) -> None:
        await self.client.aclose()


# Singleton (initialized on startup)
enrichment_client: EnrichmentClient | None = None


def init_enrichment_client(
    endpoint_url: str | None, timeout_seconds: float = 5.0,
) -> EnrichmentClient | None:
    global enrichment_client
    if endpoint_url:
        enrichment_client = HttpEnrichmentClient(endpoint_url, timeout_seconds)
    else:
        enrichment_client = None
    return enrichment_client


async def close_enrichment_client() -> None:
    global enrichment_client
    if enrichment_client:
        await enrichment_client.aclose()
        enrichment_client = None


def get_enrichment_client() -> EnrichmentClient | None:
    """FastAPI dependency for the enrichment collaborator (None when disabled)."""
    return enrichment_client
