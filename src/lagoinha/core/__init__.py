"""Lagoinha core - domain-agnostic helpers shared by the providers.

Usage:
    from lagoinha.core import CepNormalizer, normalize_cep
"""

from __future__ import annotations

from lagoinha.core.cep_normalizer import (
    CepNormalizer,
    CepResult,
    get_cep_normalizer,
    normalize_cep,
)

__all__ = [
    "CepNormalizer",
    "CepResult",
    "get_cep_normalizer",
    "normalize_cep",
]
