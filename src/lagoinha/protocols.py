from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from lagoinha.models import LookupResult, Source


@runtime_checkable
class ProviderProtocol(Protocol):
    """Protocol for CEP provider implementations.

    Implementations query one external data source and translate its answer
    into an Address, reporting every failure as a classified error instead
    of raising.
    """

    @property
    def source(self) -> Source:
        """Source tag carried by every result of this provider."""
        ...

    async def lookup(self, cep: str) -> LookupResult:
        """Resolve a CEP.

        Args:
            cep: Raw CEP, bare ("70150903") or hyphenated ("70150-903").

        Returns:
            LookupResult holding the address or this provider's error.
        """
        ...
