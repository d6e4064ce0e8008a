from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from lagoinha.config import LookupConfig
from lagoinha.core import normalize_cep
from lagoinha.models import Address, LagoinhaError, LookupResult, Source

logger = logging.getLogger(__name__)


class BaseProvider(ABC):
    """Abstract base class for CEP providers.

    Provides the shared request flow, error classification, logging and
    statistics. Subclasses describe their request (``_build_request``) and
    how to read their payload (``_parse_body``).

    Every failure becomes a LagoinhaError tagged with ``self.source``:

    - transport failures: unexpected library error
    - non-2xx statuses: client / server / unknown server error
    - failures while reading the body: missing body error
    - payloads that do not translate into an Address: body parsing error
    """

    def __init__(self, config: Optional[LookupConfig] = None) -> None:
        self._config = config or LookupConfig()
        self._lookup_count = 0
        self._error_count = 0

    @property
    @abstractmethod
    def source(self) -> Source:
        """Source tag of this provider."""
        ...

    @abstractmethod
    def _build_request(self, client: httpx.AsyncClient, cep: str) -> httpx.Request:
        """Build the single outbound request for a normalized CEP."""
        ...

    @abstractmethod
    def _parse_body(self, content: bytes) -> Address:
        """Translate a 2xx response body into an Address.

        Raises:
            ValueError: If the body does not describe an address. Pydantic's
                ValidationError and json's JSONDecodeError qualify.
        """
        ...

    async def _fetch(self, cep: str) -> Address:
        async with self._config.client() as client:
            try:
                request = self._build_request(client, cep)
                response = await client.send(request, stream=True)
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                raise LagoinhaError.unexpected(self.source, str(exc)) from exc

            try:
                status_error = LagoinhaError.from_status(self.source, response.status_code)
                if status_error is not None:
                    raise status_error
                try:
                    content = await response.aread()
                except httpx.HTTPError as exc:
                    raise LagoinhaError.missing_body(self.source, str(exc)) from exc
            finally:
                await response.aclose()

        try:
            return self._parse_body(content)
        except (ValueError, TypeError) as exc:
            raise LagoinhaError.body_parsing(self.source, str(exc), content) from exc

    async def lookup(self, cep: str) -> LookupResult:
        """Resolve a CEP with this provider.

        Args:
            cep: Raw CEP, bare or hyphenated.

        Returns:
            LookupResult with the address, or with this provider's error.
        """
        self._lookup_count += 1
        request_cep = normalize_cep(cep)

        try:
            address = await self._fetch(request_cep)
        except LagoinhaError as e:
            self._error_count += 1
            logger.warning("%s lookup failed for %r: %s", self.source.value, cep, e)
            return LookupResult.failed(cep, e)
        except Exception as e:
            self._error_count += 1
            logger.warning(
                "%s lookup raised unexpectedly for %r: %s", self.source.value, cep, e
            )
            return LookupResult.failed(cep, LagoinhaError.unexpected(self.source, str(e)))

        logger.debug("%s resolved %r", self.source.value, cep)
        return LookupResult.ok(cep, address, self.source)

    @property
    def stats(self) -> dict[str, int]:
        """Get lookup statistics.

        Returns:
            Dict with lookup_count and error_count.
        """
        return {
            "lookup_count": self._lookup_count,
            "error_count": self._error_count,
        }

    def reset_stats(self) -> None:
        """Reset lookup statistics."""
        self._lookup_count = 0
        self._error_count = 0
