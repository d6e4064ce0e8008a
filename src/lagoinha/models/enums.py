"""Provider and error-kind enumerations."""

from __future__ import annotations

from enum import Enum


class Source(str, Enum):
    """Origin of a lookup result or error."""

    VIACEP = "viacep"
    CEPLA = "cepla"
    CORREIOS = "correios"
    # The dispatcher/aggregator itself
    LAGOINHA = "lagoinha"


class ErrorKind(str, Enum):
    """Classification of a lookup failure."""

    UNEXPECTED_LIBRARY_ERROR = "unexpected_library_error"
    MISSING_BODY_ERROR = "missing_body_error"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    UNKNOWN_SERVER_ERROR = "unknown_server_error"
    BODY_PARSING_ERROR = "body_parsing_error"
    ALL_SERVICES_RETURNED_ERRORS = "all_services_returned_errors"


# Kinds that carry an HTTP status code
STATUS_KINDS: frozenset[ErrorKind] = frozenset(
    {ErrorKind.CLIENT_ERROR, ErrorKind.SERVER_ERROR, ErrorKind.UNKNOWN_SERVER_ERROR}
)
