"""Fake Enrichment Client — in-memory stand-in for the scripted lookup service.

Invariants:
    - Records every lookup call (calls list) for assertions
    - entries, error and delay configure the next lookups
"""

import asyncio


class FakeEnrichmentClient:
    def __init__(self, entries=None):
        self.entries: dict[str, dict] = entries or {}
        self.error: Exception | None = None
        self.delay_seconds: float = 0.0
        self.calls: list[list[str]] = []
        self.closed = False

    async def lookup(self, description_urls):
        self.calls.append(list(description_urls))
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        if self.error:
            raise self.error
        return {
            url: self.entries[url]
            for url in description_urls if url in self.entries
        }

    async def aclose(self):
        self.closed = True
