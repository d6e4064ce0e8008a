"""Result class for lookup operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lagoinha.models.address import Address
    from lagoinha.models.enums import Source
    from lagoinha.models.errors import LagoinhaError


@dataclass(frozen=True)
class LookupResult:
    """Outcome of a CEP lookup: an address or a classified error.

    Exactly one of ``address`` and ``error`` is set. ``source`` names the
    provider that answered (or ``Source.LAGOINHA`` for composite failures).
    """

    cep: str
    address: Address | None = None
    error: LagoinhaError | None = None
    source: Source | None = None

    def __post_init__(self) -> None:
        if (self.address is None) == (self.error is None):
            raise ValueError("LookupResult needs exactly one of address or error")

    @classmethod
    def ok(cls, cep: str, address: Address, source: Source) -> LookupResult:
        return cls(cep=cep, address=address, source=source)

    @classmethod
    def failed(cls, cep: str, error: LagoinhaError) -> LookupResult:
        return cls(cep=cep, error=error, source=error.source)

    @property
    def is_ok(self) -> bool:
        """Check if the lookup produced an address."""
        return self.address is not None

    def unwrap(self) -> Address:
        """Return the address or raise the contained error.

        Raises:
            LagoinhaError: If the lookup failed.
        """
        if self.error is not None:
            raise self.error
        if self.address is None:
            raise ValueError("LookupResult holds neither address nor error")
        return self.address

    def to_dict(self) -> dict[str, object]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "cep": self.cep,
            "source": self.source.value if self.source else None,
            "address": self.address.to_dict() if self.address else None,
            "error": str(self.error) if self.error else None,
        }
