from __future__ import annotations

from typing import Optional

from lagoinha.config import LookupConfig
from lagoinha.services.base import BaseProvider
from lagoinha.services.cepla import CeplaProvider
from lagoinha.services.correios import CorreiosProvider
from lagoinha.services.viacep import ViaCepProvider


def default_providers(config: Optional[LookupConfig] = None) -> list[BaseProvider]:
    """The fixed provider set queried by every lookup."""
    return [
        ViaCepProvider(config),
        CeplaProvider(config),
        CorreiosProvider(config),
    ]


__all__ = [
    "BaseProvider",
    "CeplaProvider",
    "CorreiosProvider",
    "ViaCepProvider",
    "default_providers",
]
