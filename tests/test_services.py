from __future__ import annotations

import asyncio
import json
from collections.abc import Callable

import httpx
import pytest

from lagoinha.config import LookupConfig
from lagoinha.models import UNDECODABLE_BODY, ErrorKind, LookupResult, Source
from lagoinha.protocols import ProviderProtocol
from lagoinha.services import (
    BaseProvider,
    CeplaProvider,
    CorreiosProvider,
    ViaCepProvider,
    default_providers,
)
from tests.strategies import (
    CEP,
    CEP_HYPHENATED,
    CEPLA_BODY,
    CORREIOS_FAULT_XML,
    CORREIOS_XML,
    EXPECTED_ADDRESS,
    MALFORMED_CEP,
    VIACEP_BODY,
)

Handler = Callable[[httpx.Request], httpx.Response]


class BrokenStream(httpx.AsyncByteStream):
    """Body stream failing mid-read."""

    async def __aiter__(self):
        raise httpx.ReadError("connection reset by peer")
        yield b""  # pragma: no cover


def _config(handler: Handler) -> LookupConfig:
    return LookupConfig(timeout=5.0, transport=httpx.MockTransport(handler))


def _lookup(provider_cls: type[BaseProvider], handler: Handler, cep: str = CEP) -> LookupResult:
    provider = provider_cls(_config(handler))
    return asyncio.run(provider.lookup(cep))


def _respond(status: int, content: bytes = b"") -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, content=content)

    return handler


ALL_PROVIDERS = [ViaCepProvider, CeplaProvider, CorreiosProvider]


def test_default_providers_fixed_set() -> None:
    providers = default_providers()

    assert [p.source for p in providers] == [Source.VIACEP, Source.CEPLA, Source.CORREIOS]
    assert all(isinstance(p, ProviderProtocol) for p in providers)


# =============================================================================
# ViaCEP
# =============================================================================


def test_viacep_success() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.host == "viacep.com.br"
        assert request.url.path == f"/ws/{CEP}/json/"
        return httpx.Response(200, content=VIACEP_BODY)

    result = _lookup(ViaCepProvider, handler)

    assert result.is_ok
    assert result.source is Source.VIACEP
    assert result.address is not None
    assert result.address.same_location(EXPECTED_ADDRESS)


def test_viacep_accepts_hyphen() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        return httpx.Response(200, content=VIACEP_BODY)

    result = _lookup(ViaCepProvider, handler, CEP_HYPHENATED)

    assert result.is_ok
    assert result.cep == CEP_HYPHENATED
    assert seen == [f"/ws/{CEP}/json/"]


def test_viacep_not_found_payload() -> None:
    result = _lookup(ViaCepProvider, _respond(200, b'{"erro": true}'))

    assert result.error is not None
    assert result.error.kind is ErrorKind.BODY_PARSING_ERROR
    assert result.error.source is Source.VIACEP
    assert result.error.body == '{"erro": true}'


def test_viacep_malformed_cep_is_client_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == f"/ws/{MALFORMED_CEP}/json/"
        return httpx.Response(400, content=b"<html>Bad Request</html>")

    result = _lookup(ViaCepProvider, handler, MALFORMED_CEP)

    assert result.error is not None
    assert result.error.kind is ErrorKind.CLIENT_ERROR
    assert result.error.code == 400


# =============================================================================
# CepLá
# =============================================================================


def test_cepla_success_sends_accept_header() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.host == "cep.la"
        assert request.url.path == f"/{CEP}"
        assert request.headers["accept"] == "application/json"
        return httpx.Response(200, content=CEPLA_BODY)

    result = _lookup(CeplaProvider, handler, CEP_HYPHENATED)

    assert result.is_ok
    assert result.address is not None
    assert result.address.details.startswith("Palácio da Alvorada")


@pytest.mark.parametrize("body", [b"", b"[]", b"<html>not found</html>", b"{}"])
def test_cepla_unusable_body_is_parsing_error(body: bytes) -> None:
    result = _lookup(CeplaProvider, _respond(200, body), MALFORMED_CEP)

    assert result.error is not None
    assert result.error.source is Source.CEPLA
    assert result.error.kind is ErrorKind.BODY_PARSING_ERROR
    assert result.error.body == body.decode()


def test_cepla_undecodable_body_placeholder() -> None:
    result = _lookup(CeplaProvider, _respond(200, b"\xff\xfe\x00garbage"))

    assert result.error is not None
    assert result.error.kind is ErrorKind.BODY_PARSING_ERROR
    assert result.error.body == UNDECODABLE_BODY


# =============================================================================
# Correios
# =============================================================================


def test_correios_success() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.url.host == "apps.correios.com.br"
        assert f"<cep>{CEP}</cep>".encode() in request.content
        assert request.headers["content-type"].startswith("text/xml")
        return httpx.Response(200, content=CORREIOS_XML)

    result = _lookup(CorreiosProvider, handler, CEP_HYPHENATED)

    assert result.is_ok
    assert result.address is not None
    assert result.address.address == "SPP"
    assert result.address.details == "- Palácio da Alvorada"
    assert result.address.same_location(EXPECTED_ADDRESS)


def test_correios_fault_is_server_error() -> None:
    result = _lookup(CorreiosProvider, _respond(500, CORREIOS_FAULT_XML), MALFORMED_CEP)

    assert result.error is not None
    assert result.error.kind is ErrorKind.SERVER_ERROR
    assert result.error.code == 500


@pytest.mark.parametrize("body", [b"not xml", b"<envelope><body/></envelope>"])
def test_correios_unusable_body_is_parsing_error(body: bytes) -> None:
    result = _lookup(CorreiosProvider, _respond(200, body))

    assert result.error is not None
    assert result.error.kind is ErrorKind.BODY_PARSING_ERROR


def test_correios_escapes_input() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert b"<cep>&lt;x&gt;</cep>" in request.content
        return httpx.Response(500)

    result = _lookup(CorreiosProvider, handler, "<x>")

    assert result.error is not None


# =============================================================================
# Shared classification
# =============================================================================


@pytest.mark.parametrize("provider_cls", ALL_PROVIDERS)
@pytest.mark.parametrize(
    ("status", "kind"),
    [
        (302, ErrorKind.UNKNOWN_SERVER_ERROR),
        (404, ErrorKind.CLIENT_ERROR),
        (429, ErrorKind.CLIENT_ERROR),
        (502, ErrorKind.SERVER_ERROR),
    ],
)
def test_status_classification(
    provider_cls: type[BaseProvider], status: int, kind: ErrorKind
) -> None:
    provider = provider_cls(_config(_respond(status)))
    result = asyncio.run(provider.lookup(CEP))

    assert result.error is not None
    assert result.error.kind is kind
    assert result.error.code == status
    assert result.error.source is provider.source


@pytest.mark.parametrize("provider_cls", ALL_PROVIDERS)
def test_transport_failure_is_unexpected_library_error(provider_cls: type[BaseProvider]) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("name resolution failed", request=request)

    provider = provider_cls(_config(handler))
    result = asyncio.run(provider.lookup(CEP))

    assert result.error is not None
    assert result.error.kind is ErrorKind.UNEXPECTED_LIBRARY_ERROR
    assert result.error.source is provider.source
    assert "name resolution failed" in str(result.error)


@pytest.mark.parametrize("provider_cls", ALL_PROVIDERS)
def test_unreadable_body_is_missing_body_error(provider_cls: type[BaseProvider]) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, stream=BrokenStream())

    result = _lookup(provider_cls, handler)

    assert result.error is not None
    assert result.error.kind is ErrorKind.MISSING_BODY_ERROR


def test_stats_track_lookups_and_errors() -> None:
    bodies = iter([VIACEP_BODY, b"{}"])

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=next(bodies))

    provider = ViaCepProvider(_config(handler))

    async def scenario() -> None:
        await provider.lookup(CEP)
        await provider.lookup(CEP)

    asyncio.run(scenario())

    assert provider.stats == {"lookup_count": 2, "error_count": 1}
    provider.reset_stats()
    assert provider.stats == {"lookup_count": 0, "error_count": 0}


def test_user_agent_header() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["user-agent"] == "lagoinha-tests"
        return httpx.Response(200, content=json.dumps({"cep": CEP}).encode())

    config = LookupConfig(user_agent="lagoinha-tests", transport=httpx.MockTransport(handler))
    result = asyncio.run(ViaCepProvider(config).lookup(CEP))

    assert result.is_ok
