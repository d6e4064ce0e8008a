"""Lookup error classes.

Every failure is represented by a single exception type carrying the
originating ``Source`` and an ``ErrorKind`` plus the payload of that kind.
Errors are passed around as values inside ``LookupResult`` and only raised
when a caller asks for it (``LookupResult.unwrap``).
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from lagoinha.models.enums import STATUS_KINDS, ErrorKind, Source

# Package identifier for error context
PACKAGE_NAME = "lagoinha"

# Used when a response body is not valid UTF-8 text
UNDECODABLE_BODY = "Failed to produce string body"


class LagoinhaError(Exception):
    """Classified lookup failure.

    Args:
        source: Provider (or the library itself) that produced the error.
        kind: Failure classification.
        code: HTTP status code for status kinds.
        error: Decode error message (body parsing) or free-form detail.
        body: Raw response body text (body parsing).
        errors: Sub-errors of a composite failure.
    """

    def __init__(
        self,
        source: Source,
        kind: ErrorKind,
        *,
        code: int | None = None,
        error: str | None = None,
        body: str | None = None,
        errors: Iterable[LagoinhaError] = (),
    ) -> None:
        self.source = Source(source)
        self.kind = ErrorKind(kind)
        self.code = code
        self.error = error
        self.body = body
        self.errors: tuple[LagoinhaError, ...] = tuple(errors)

        self.context: dict[str, Any] = {
            "package": PACKAGE_NAME,
            "source": self.source.value,
            "kind": self.kind.value,
        }
        if code is not None:
            self.context["code"] = code
        if error is not None:
            self.context["error"] = error
        if body is not None:
            self.context["body"] = body
        if self.errors:
            self.context["errors"] = list(self.messages)

        super().__init__(self._message())

    # ------------------------------------------------------------------
    # Constructors, one per kind
    # ------------------------------------------------------------------

    @classmethod
    def unexpected(cls, source: Source, detail: str | None = None) -> LagoinhaError:
        """Transport or internal failure not attributable to the remote server."""
        return cls(source, ErrorKind.UNEXPECTED_LIBRARY_ERROR, error=detail)

    @classmethod
    def missing_body(cls, source: Source, detail: str | None = None) -> LagoinhaError:
        """A response arrived but its body could not be read."""
        return cls(source, ErrorKind.MISSING_BODY_ERROR, error=detail)

    @classmethod
    def client_error(cls, source: Source, code: int) -> LagoinhaError:
        return cls(source, ErrorKind.CLIENT_ERROR, code=code)

    @classmethod
    def server_error(cls, source: Source, code: int) -> LagoinhaError:
        return cls(source, ErrorKind.SERVER_ERROR, code=code)

    @classmethod
    def unknown_status(cls, source: Source, code: int) -> LagoinhaError:
        return cls(source, ErrorKind.UNKNOWN_SERVER_ERROR, code=code)

    @classmethod
    def body_parsing(cls, source: Source, error: str, body: bytes | str) -> LagoinhaError:
        """The body could not be decoded into an address.

        Args:
            source: Provider that returned the body.
            error: Message of the decode/validation error.
            body: Raw body. Bytes that are not valid UTF-8 are replaced by a
                fixed placeholder.
        """
        if isinstance(body, bytes):
            try:
                body = body.decode("utf-8")
            except UnicodeDecodeError:
                body = UNDECODABLE_BODY
        return cls(source, ErrorKind.BODY_PARSING_ERROR, error=error, body=body)

    @classmethod
    def all_services_failed(cls, errors: Iterable[LagoinhaError]) -> LagoinhaError:
        """Composite failure embedding every provider's error, in read order."""
        return cls(Source.LAGOINHA, ErrorKind.ALL_SERVICES_RETURNED_ERRORS, errors=errors)

    @classmethod
    def from_status(cls, source: Source, code: int) -> LagoinhaError | None:
        """Classify an HTTP status code.

        Returns:
            None for 2xx, otherwise a client (4xx), server (5xx) or
            unknown-status error.
        """
        if 200 <= code <= 299:
            return None
        if 400 <= code <= 499:
            return cls.client_error(source, code)
        if 500 <= code <= 599:
            return cls.server_error(source, code)
        return cls.unknown_status(source, code)

    # ------------------------------------------------------------------

    @property
    def is_composite(self) -> bool:
        return self.kind is ErrorKind.ALL_SERVICES_RETURNED_ERRORS

    @property
    def messages(self) -> tuple[str, ...]:
        """String representation of each sub-error of a composite failure."""
        return tuple(str(err) for err in self.errors)

    def _message(self) -> str:
        kind = self.kind
        if kind in STATUS_KINDS:
            label = {
                ErrorKind.CLIENT_ERROR: "client error",
                ErrorKind.SERVER_ERROR: "server error",
                ErrorKind.UNKNOWN_SERVER_ERROR: "unknown server error",
            }[kind]
            return f"[{self.source.value}] {label}, status code {self.code}"
        if kind is ErrorKind.BODY_PARSING_ERROR:
            return (
                f"[{self.source.value}] failed to parse response body: {self.error}. "
                f"Body: {self.body}"
            )
        if kind is ErrorKind.ALL_SERVICES_RETURNED_ERRORS:
            joined = "; ".join(self.messages)
            return f"[{self.source.value}] all services returned errors: {joined}"
        if kind is ErrorKind.MISSING_BODY_ERROR:
            message = f"[{self.source.value}] failed to read response body"
        else:
            message = f"[{self.source.value}] unexpected library error"
        return f"{message}: {self.error}" if self.error else message

    def _key(self) -> tuple[Any, ...]:
        return (self.source, self.kind, self.code, self.error, self.body, self.errors)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LagoinhaError):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"LagoinhaError({self.source.value!r}, {self.kind.value!r}, context={self.context})"
