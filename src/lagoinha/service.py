from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Optional

from lagoinha.aggregator import aggregate
from lagoinha.config import LookupConfig
from lagoinha.dispatcher import dispatch
from lagoinha.models import LookupResult
from lagoinha.protocols import ProviderProtocol
from lagoinha.services import default_providers

logger = logging.getLogger(__name__)


class LookupService:
    """Race a fixed set of providers for each CEP lookup.

    Each call to ``get_address`` owns its own queue and tasks, so a service
    may be shared by concurrent lookups.

    Example:
        >>> service = LookupService()
        >>> result = await service.get_address("70150-903")
        >>> print(result.address.city)  # "Brasília"
    """

    def __init__(
        self,
        providers: Optional[Sequence[ProviderProtocol]] = None,
        *,
        config: Optional[LookupConfig] = None,
    ) -> None:
        self.config = config or LookupConfig()
        self.providers = (
            list(providers) if providers is not None else default_providers(self.config)
        )

    async def get_address(self, cep: str) -> LookupResult:
        """Resolve a CEP through every provider concurrently.

        Args:
            cep: Raw CEP, bare or hyphenated.

        Returns:
            The first successful result read, otherwise a result holding the
            composite error of every provider.

        Raises:
            ValueError: If the service has no providers.
        """
        handle = dispatch(cep, self.providers)
        try:
            return await aggregate(handle)
        finally:
            if self.config.cancel_pending:
                handle.cancel()


async def get_address(cep: str, *, config: Optional[LookupConfig] = None) -> LookupResult:
    """Resolve a CEP using the default providers (ViaCEP, CepLá, Correios).

    Args:
        cep: Raw CEP, e.g. "70150903" or "70150-903".
        config: Optional settings; defaults are read from the environment.

    Returns:
        LookupResult with the address, or with the composite error when every
        provider failed.
    """
    return await LookupService(config=config).get_address(cep)


def get_address_sync(cep: str, *, config: Optional[LookupConfig] = None) -> LookupResult:
    """Blocking wrapper around ``get_address`` for code without an event loop."""
    return asyncio.run(get_address(cep, config=config))
