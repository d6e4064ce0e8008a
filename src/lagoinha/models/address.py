"""Address model.

This module contains the provider-agnostic Address Pydantic model. Each
provider's payload keys are accepted through validation aliases, so a
provider translates its response with a plain ``Address.model_validate``.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from lagoinha.core.cep_normalizer import CepNormalizer


class Address(BaseModel):
    """Resolved Brazilian postal address.

    Field values are kept as the provider supplied them (the CEP may come
    hyphenated or bare), so compare results from different providers with
    ``same_location`` rather than ``==``.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",  # Providers return more keys than we keep
        str_strip_whitespace=True,
    )

    cep: str = Field(
        ...,
        min_length=1,
        description="Postal code (CEP) in the provider's formatting",
    )
    address: str = Field(
        default="",
        description="Street or primary address line",
        validation_alias=AliasChoices("address", "logradouro", "end"),
    )
    details: str = Field(
        default="",
        description="Supplementary details, may be empty",
        validation_alias=AliasChoices("details", "complemento", "complemento2", "aux"),
    )
    neighborhood: str = Field(
        default="",
        description="Neighborhood or district (bairro)",
        validation_alias=AliasChoices("neighborhood", "bairro"),
    )
    city: str = Field(
        default="",
        description="City (localidade)",
        validation_alias=AliasChoices("city", "localidade", "cidade"),
    )
    state: str = Field(
        default="",
        description="Two-letter state code (UF)",
        validation_alias=AliasChoices("state", "uf"),
    )

    @property
    def digits(self) -> str:
        """CEP with its formatting removed."""
        return CepNormalizer.digits_only(self.cep)

    def same_location(self, other: Address) -> bool:
        """Check that two addresses name the same place.

        Providers disagree on CEP formatting and on the details line, so only
        city, state and neighborhood are compared.
        """
        return (
            self.city == other.city
            and self.state == other.state
            and self.neighborhood == other.neighborhood
        )

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary of address fields."""
        return self.model_dump()
