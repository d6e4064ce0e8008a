"""CEP normalization utilities.

Consolidates the postal code clean-up every provider applies before
building its request.
"""

from __future__ import annotations

from dataclasses import dataclass

CEP_LENGTH = 8
# Position of the optional hyphen in "70150-903"
HYPHEN_POSITION = 5


@dataclass
class CepResult:
    """Result of CEP parsing.

    Attributes:
        raw: The input as given.
        value: The value to send to a provider. Equals the 8 bare digits when
            the input is well formed, otherwise the stripped input unchanged.
        formatted: "12345-678" form when well formed, None otherwise.
        is_valid: True if the input is a well formed CEP.
        error: Error message if malformed, None otherwise.
    """

    raw: str
    value: str
    formatted: str | None
    is_valid: bool
    error: str | None


class CepNormalizer:
    """Parses and normalizes Brazilian postal codes.

    Accepts bare ("70150903") and hyphenated ("70150-903") forms. Malformed
    input is not rejected here: it is passed through so the provider can
    report it as a classified error.

    Example:
        >>> result = CepNormalizer().parse("70150-903")
        >>> print(result.value)  # "70150903"
        >>> print(result.formatted)  # "70150-903"
    """

    @staticmethod
    def digits_only(cep: str) -> str:
        return "".join(ch for ch in cep if ch.isdigit())

    @staticmethod
    def format(digits: str) -> str:
        """Format 8 bare digits as "12345-678"."""
        return f"{digits[:HYPHEN_POSITION]}-{digits[HYPHEN_POSITION:]}"

    def parse(self, cep: str | None) -> CepResult:
        """Parse a CEP string into its normalized forms.

        Handles the following formats:
        - 8 digits: "70150903"
        - 8 digits with a hyphen at position 5: "70150-903"

        Args:
            cep: The raw CEP string.

        Returns:
            CepResult with the normalized value and validation status.
        """
        if not cep or not isinstance(cep, str):
            return CepResult(
                raw=cep or "",
                value="",
                formatted=None,
                is_valid=False,
                error="Missing CEP",
            )

        stripped = cep.strip()
        candidate = stripped
        if len(stripped) == CEP_LENGTH + 1 and stripped[HYPHEN_POSITION] == "-":
            candidate = stripped[:HYPHEN_POSITION] + stripped[HYPHEN_POSITION + 1 :]

        if len(candidate) == CEP_LENGTH and candidate.isascii() and candidate.isdigit():
            return CepResult(
                raw=cep,
                value=candidate,
                formatted=self.format(candidate),
                is_valid=True,
                error=None,
            )

        return CepResult(
            raw=cep,
            value=stripped,
            formatted=None,
            is_valid=False,
            error=f"Invalid CEP format: {cep}",
        )


# Module-level singleton for convenience
_default_normalizer: CepNormalizer | None = None


def get_cep_normalizer() -> CepNormalizer:
    """Get the default CepNormalizer singleton.

    Returns:
        Shared CepNormalizer instance.
    """
    global _default_normalizer
    if _default_normalizer is None:
        _default_normalizer = CepNormalizer()
    return _default_normalizer


def normalize_cep(cep: str) -> str:
    """Value to send to a provider for a raw CEP."""
    return get_cep_normalizer().parse(cep).value
