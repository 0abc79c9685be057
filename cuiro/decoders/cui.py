"""Romanian CUI/CIF (Cod Unic de Identificare) validator.

Pure Python, no I/O and no shared state. Normalizes user input, strips the
optional "RO" VAT prefix and verifies the control digit.

CUI format: [RO] D{1,9} C
  - RO:  optional VAT prefix (any case); marks a VAT identification number
  - D:   1 to 9 body digits (leading zeros are significant)
  - C:   control digit

Control digit: body left-padded with zeros to 9 digits, weighted with the
key 753217532, summed, times 10, mod 11 (10 maps to 0).

Reference: ANAF, algoritm de validare a codului de identificare fiscala.
"""

from __future__ import annotations

import re

from cuiro.schemas.cui import CuiValidationResult

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MIN_CUI_LENGTH = 2
MAX_CUI_LENGTH = 10
VAT_PREFIX = "RO"

CHECKSUM_KEY: tuple[int, ...] = (7, 5, 3, 2, 1, 7, 5, 3, 2)

_SEPARATORS = re.compile(r"[\s\-_./]")
_DIGITS = re.compile(r"[0-9]+")


# ---------------------------------------------------------------------------
# Checksum
# ---------------------------------------------------------------------------


def compute_control_digit(body: str) -> int:
    """Return the control digit for a CUI body (the digits before the control digit).

    Args:
        body: Up to 9 ASCII digits. An empty body is padded like any other.

    Raises:
        ValueError: If ``body`` is longer than 9 characters or not all digits.
    """
    if len(body) > len(CHECKSUM_KEY) or (body and not _DIGITS.fullmatch(body)):
        msg = f"CUI body must be at most {len(CHECKSUM_KEY)} digits: {body!r}"
        raise ValueError(msg)

    padded = body.rjust(len(CHECKSUM_KEY), "0")
    total = sum(int(digit) * weight for digit, weight in zip(padded, CHECKSUM_KEY))
    remainder = (total * 10) % 11
    return 0 if remainder == 10 else remainder


def validate_cui_checksum(cui: str) -> bool:
    """Check the control digit of an already-normalized CUI (digits only)."""
    if not MIN_CUI_LENGTH <= len(cui) <= MAX_CUI_LENGTH or not _DIGITS.fullmatch(cui):
        return False
    return int(cui[-1]) == compute_control_digit(cui[:-1])


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_cui(value: str | None) -> CuiValidationResult:
    """Validate a Romanian CUI/CIF.

    Accepts an optional "RO" prefix (case-insensitive), 2 to 10 digits, and
    whitespace or ``- _ . /`` separators anywhere in the string.

    Args:
        value: Raw user input, may be None. Non-string input fails validation.

    Returns:
        CuiValidationResult with the normalized digit string on success,
        or the first failing check as ``error``.
    """
    if value is None:
        return CuiValidationResult.failure("CUI cannot be null")

    if not isinstance(value, str):
        return CuiValidationResult.failure(f"CUI must be a string, got {type(value).__name__}")

    if not value.strip():
        return CuiValidationResult.failure("CUI cannot be empty")

    cleaned = _SEPARATORS.sub("", value)

    has_vat_prefix = cleaned.upper().startswith(VAT_PREFIX)
    if has_vat_prefix:
        cleaned = cleaned[len(VAT_PREFIX):]

    if not _DIGITS.fullmatch(cleaned):
        return CuiValidationResult.failure(
            "CUI must contain only digits (optionally prefixed with 'RO')"
        )

    if len(cleaned) < MIN_CUI_LENGTH:
        return CuiValidationResult.failure(f"CUI must have at least {MIN_CUI_LENGTH} digits")
    if len(cleaned) > MAX_CUI_LENGTH:
        return CuiValidationResult.failure(f"CUI must have at most {MAX_CUI_LENGTH} digits")

    if not validate_cui_checksum(cleaned):
        return CuiValidationResult.failure("CUI checksum is invalid")

    return CuiValidationResult.success(cleaned, has_vat_prefix)


def normalize_cui(value: str | None) -> str | None:
    """Return the canonical digit string of a valid CUI, or None."""
    result = validate_cui(value)
    return result.normalized if result.valid else None
