"""Harmonized System code helpers — pure, no DB dependency."""

import re

_HS_DIGITS = re.compile(r"^\d{6}$")
_HS_GROUPS = re.compile(r"(\d{2})(\d{2})(\d{2})")

PHYTO_HS_PREFIXES = ("09", "18")


def format_hs_code(code: str) -> str:
    """Left-pad an HS code to 6 digits (e.g. 90111 -> 090111)."""
    return code.strip().zfill(6)


def validate_hs_code(code: str) -> bool:
    """True if the code is exactly 6 digits once whitespace is removed."""
    return bool(_HS_DIGITS.match(re.sub(r"\s", "", code)))


def abbreviate_hs(code: str) -> str:
    """Space an HS code by chapter/heading/subheading: 090111 -> 09 01 11."""
    return _HS_GROUPS.sub(r"\1 \2 \3", code, count=1)


def is_phyto_hs(code: str) -> bool:
    """Coffee (09) and cocoa (18) always need a phytosanitary certificate."""
    return code.startswith(PHYTO_HS_PREFIXES)


def hs_chapter(code: str | None) -> str | None:
    """Return the 2-digit chapter of an HS code, or None if it has no digits."""
    if not code:
        return None
    cleaned = re.sub(r"\D", "", code)
    if len(cleaned) < 2:
        return None
    return cleaned[:2]
