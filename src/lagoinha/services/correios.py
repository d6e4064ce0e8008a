"""Correios service: SIGEP web service ``consultaCEP`` SOAP operation.

Lookups are SOAP envelopes POSTed to the AtendeCliente endpoint. SOAP
faults (unknown or malformed CEP) come back with status 500 and are
classified by status like any other server error.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from xml.sax.saxutils import escape

import httpx

from lagoinha.models import Address, Source
from lagoinha.services.base import BaseProvider

CORREIOS_URL = (
    "https://apps.correios.com.br/SigepMasterJPA/AtendeClienteService/AtendeCliente"
)

SOAP_ENVELOPE = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    '<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/" '
    'xmlns:cli="http://cliente.bean.master.sigep.bsb.correios.com.br/">'
    "<soapenv:Header/>"
    "<soapenv:Body>"
    "<cli:consultaCEP><cep>{cep}</cep></cli:consultaCEP>"
    "</soapenv:Body>"
    "</soapenv:Envelope>"
)

# Children of <return> copied onto the Address
RETURN_FIELDS = ("cep", "end", "complemento2", "bairro", "cidade", "uf")


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


class CorreiosProvider(BaseProvider):
    """Provider backed by the Correios SIGEP SOAP service."""

    @property
    def source(self) -> Source:
        return Source.CORREIOS

    def _build_request(self, client: httpx.AsyncClient, cep: str) -> httpx.Request:
        return client.build_request(
            "POST",
            CORREIOS_URL,
            content=SOAP_ENVELOPE.format(cep=escape(cep)).encode("utf-8"),
            headers={"Content-Type": "text/xml; charset=utf-8", "SOAPAction": ""},
        )

    def _parse_body(self, content: bytes) -> Address:
        try:
            root = ET.fromstring(content)
        except ET.ParseError as exc:
            # ParseError derives from SyntaxError
            raise ValueError(f"invalid XML: {exc}") from exc

        returned = next((el for el in root.iter() if _local_name(el.tag) == "return"), None)
        if returned is None:
            raise ValueError("response has no <return> element")

        payload = {
            _local_name(child.tag): (child.text or "")
            for child in returned
            if _local_name(child.tag) in RETURN_FIELDS
        }
        return Address.model_validate(payload)
