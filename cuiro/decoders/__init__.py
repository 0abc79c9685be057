"""Deterministic identifier decoders: CUI validation."""

from cuiro.decoders.cui import compute_control_digit, normalize_cui, validate_cui

__all__ = ["compute_control_digit", "normalize_cui", "validate_cui"]
