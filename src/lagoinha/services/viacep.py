"""ViaCEP service: https://viacep.com.br/

Unknown but well formed CEPs are answered with status 200 and the payload
``{"erro": true}``; malformed ones with status 400.
"""

from __future__ import annotations

import json

import httpx

from lagoinha.models import Address, Source
from lagoinha.services.base import BaseProvider

VIACEP_URL = "https://viacep.com.br/ws/{cep}/json/"


class ViaCepProvider(BaseProvider):
    """Provider backed by the ViaCEP JSON API."""

    @property
    def source(self) -> Source:
        return Source.VIACEP

    def _build_request(self, client: httpx.AsyncClient, cep: str) -> httpx.Request:
        return client.build_request("GET", VIACEP_URL.format(cep=cep))

    def _parse_body(self, content: bytes) -> Address:
        payload = json.loads(content)
        if not isinstance(payload, dict):
            raise ValueError("ViaCEP returned a non-object payload")
        if payload.get("erro") in (True, "true"):
            raise ValueError("CEP not found")
        return Address.model_validate(payload)
