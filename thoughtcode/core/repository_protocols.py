"""Boundary Protocols — contracts between the question routes and external collaborators.

Invariants:
    - Routes and services depend on the Protocol, never on a concrete client
    - Implementations provided by infrastructure via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do network IO
"""

from typing import Protocol


class EnrichmentClient(Protocol):
    """Contract for supplementary-field lookup keyed by description URL."""

    async def lookup(self, description_urls: list[str]) -> dict[str, dict]:
        """Return URL → supplementary fields. Raises EnrichmentServiceError on failure."""
        ...

    async def aclose(self) -> None: ...
