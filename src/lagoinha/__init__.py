"""lagoinha: Brazilian postal code (CEP) lookup over several providers.

Every lookup queries ViaCEP, CepLá and Correios concurrently and returns the
first address one of them resolves. Failing or slow providers are tolerated;
only when all of them fail does the caller get an error, a composite one
embedding each provider's failure.

Quick Start:
    >>> import asyncio
    >>> from lagoinha import get_address
    >>> result = asyncio.run(get_address("70150903"))
    >>> print(result.address.city)  # "Brasília"

    # Check for failure
    >>> if result.is_ok:
    ...     print(result.address.state)
    ... else:
    ...     print(result.error.messages)

    # Raise instead of checking
    >>> address = result.unwrap()
"""

from __future__ import annotations

__version__ = "0.2.0"
__package_name__ = "lagoinha"

# Import order is intentional to avoid circular imports - do not auto-fix
from lagoinha.config import LookupConfig  # noqa: E402
from lagoinha.core import CepNormalizer, CepResult, normalize_cep  # noqa: E402
from lagoinha.models import (  # noqa: E402
    PACKAGE_NAME,
    Address,
    ErrorKind,
    LagoinhaError,
    LookupResult,
    Source,
)
from lagoinha.protocols import ProviderProtocol  # noqa: E402
from lagoinha.services import (  # noqa: E402
    BaseProvider,
    CeplaProvider,
    CorreiosProvider,
    ViaCepProvider,
    default_providers,
)
from lagoinha.dispatcher import Dispatch, dispatch  # noqa: E402
from lagoinha.aggregator import aggregate  # noqa: E402
from lagoinha.service import LookupService, get_address, get_address_sync  # noqa: E402

__all__ = [
    # Version
    "__version__",
    # Primary interface
    "get_address",
    "get_address_sync",
    "LookupService",
    "LookupConfig",
    # Models
    "Address",
    "LookupResult",
    # Errors
    "PACKAGE_NAME",
    "ErrorKind",
    "LagoinhaError",
    "Source",
    # Providers
    "ProviderProtocol",
    "BaseProvider",
    "CeplaProvider",
    "CorreiosProvider",
    "ViaCepProvider",
    "default_providers",
    # Race engine
    "Dispatch",
    "dispatch",
    "aggregate",
    # CEP utilities
    "CepNormalizer",
    "CepResult",
    "normalize_cep",
]
