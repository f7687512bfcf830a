"""
Canonical Brazilian federative units and region-name normalization.

Shared by the regional statistics aggregator and the directory search so both
agree on what counts as the same region.
"""

import unicodedata
from typing import Optional, Tuple

BRAZILIAN_STATES: Tuple[str, ...] = (
    "Acre", "Alagoas", "Amapá", "Amazonas", "Bahia", "Ceará", "Distrito Federal",
    "Espírito Santo", "Goiás", "Maranhão", "Mato Grosso", "Mato Grosso do Sul",
    "Minas Gerais", "Pará", "Paraíba", "Paraná", "Pernambuco", "Piauí",
    "Rio de Janeiro", "Rio Grande do Norte", "Rio Grande do Sul", "Rondônia",
    "Roraima", "Santa Catarina", "São Paulo", "Sergipe", "Tocantins",
)

UNMATCHED_REGION = ""


def fold(value: str) -> str:
    """Case- and accent-insensitive form of a string ("São Paulo" -> "sao paulo")."""
    decomposed = unicodedata.normalize("NFD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return unicodedata.normalize("NFC", stripped).casefold()


_STATES_BY_FOLDED = {fold(state): state for state in BRAZILIAN_STATES}


def canonicalize(region: Optional[str]) -> Optional[str]:
    """
    Map a free-text region to its canonical name, or None when it matches no state.

    Input is trimmed and NFC-normalized, then compared case- and
    diacritic-insensitively, so " são paulo ", "SÃO PAULO" and "Sao Paulo"
    all resolve to "São Paulo".
    """
    if region is None:
        return None
    raw = unicodedata.normalize("NFC", str(region).strip())
    if not raw:
        return None
    return _STATES_BY_FOLDED.get(fold(raw))


def collation_key(value: str) -> Tuple[str, str]:
    # Accents and case only break ties, close to pt-BR localeCompare ordering
    return fold(value), value
