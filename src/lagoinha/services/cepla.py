"""CepLá service: http://cep.la/

The service only answers with JSON when asked through the ``Accept`` header.
Its response headers do not follow RFC 2616 section 4.2 capitalization;
httpx reads them case-insensitively.
Unknown or malformed CEPs get an empty or non-object body.
"""

from __future__ import annotations

import json

import httpx

from lagoinha.models import Address, Source
from lagoinha.services.base import BaseProvider

CEPLA_URL = "http://cep.la/{cep}"


class CeplaProvider(BaseProvider):
    """Provider backed by the CepLá API."""

    @property
    def source(self) -> Source:
        return Source.CEPLA

    def _build_request(self, client: httpx.AsyncClient, cep: str) -> httpx.Request:
        return client.build_request(
            "GET",
            CEPLA_URL.format(cep=cep),
            headers={"Accept": "application/json"},
        )

    def _parse_body(self, content: bytes) -> Address:
        payload = json.loads(content)
        if not isinstance(payload, dict):
            raise ValueError(f"expected an address object, got {type(payload).__name__}")
        return Address.model_validate(payload)
