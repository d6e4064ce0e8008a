"""Lookup models package.

Re-exports the address model, the error taxonomy and the result type.
"""

from __future__ import annotations

from lagoinha.models.address import Address
from lagoinha.models.enums import ErrorKind, Source
from lagoinha.models.errors import PACKAGE_NAME, UNDECODABLE_BODY, LagoinhaError
from lagoinha.models.results import LookupResult

__all__ = [
    # Errors
    "PACKAGE_NAME",
    "UNDECODABLE_BODY",
    "LagoinhaError",
    # Enums
    "ErrorKind",
    "Source",
    # Models
    "Address",
    "LookupResult",
]
