"""Pydantic schemas for the CUI validator.

Pure data classes, no I/O. Used as the output of ``cuiro.decoders.cui``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator


class CuiValidationResult(BaseModel):
    """Result of validating a Romanian CUI/CIF."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    normalized: str | None = None     # digits only, no "RO", e.g. "18547290"
    vat_prefix_present: bool = False
    error: str | None = None

    @model_validator(mode="after")
    def check_outcome(self) -> CuiValidationResult:
        """A result carries either a normalized CUI or an error, never both."""
        if self.valid:
            if self.normalized is None or self.error is not None:
                msg = "a valid result needs a normalized CUI and no error"
                raise ValueError(msg)
        elif self.error is None or self.normalized is not None:
            msg = "an invalid result needs an error and no normalized CUI"
            raise ValueError(msg)
        return self

    @classmethod
    def success(cls, normalized: str, vat_prefix_present: bool) -> CuiValidationResult:
        return cls(valid=True, normalized=normalized, vat_prefix_present=vat_prefix_present)

    @classmethod
    def failure(cls, error: str) -> CuiValidationResult:
        return cls(valid=False, error=error)
