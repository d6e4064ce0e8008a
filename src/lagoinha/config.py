from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

import httpx

DEFAULT_TIMEOUT = 10.0


def _env_flag(name: str, default: str = "1") -> bool:
    value = os.getenv(name, default)
    return value.lower() not in {"0", "false", "no"}


def _env_timeout(name: str = "LAGOINHA_TIMEOUT") -> Optional[float]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return DEFAULT_TIMEOUT
    if value.strip().lower() in {"0", "none", "off"}:
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(
            f"{name} must be a number of seconds, 0 or 'none'; got {value!r}"
        ) from exc


def _default_user_agent() -> str:
    from lagoinha import __version__

    return f"lagoinha/{__version__}"


@dataclass
class LookupConfig:
    """Settings shared by every provider of a lookup.

    ``timeout`` applies per HTTP request; None disables it. ``transport``
    replaces the network (tests pass an ``httpx.MockTransport``).
    """

    timeout: Optional[float] = field(default_factory=_env_timeout)
    cancel_pending: bool = field(
        default_factory=lambda: _env_flag("LAGOINHA_CANCEL_PENDING", "1")
    )
    user_agent: str = field(
        default_factory=lambda: os.getenv("LAGOINHA_USER_AGENT") or _default_user_agent()
    )
    transport: Optional[httpx.AsyncBaseTransport] = None

    def client(self) -> httpx.AsyncClient:
        """Create a fresh async HTTP client for one lookup."""
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self.transport,
            headers={"User-Agent": self.user_agent},
        )
