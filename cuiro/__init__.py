"""Romanian CUI/CIF validation and ANAF registry lookup."""

from cuiro.decoders.cui import validate_cui
from cuiro.integrations.anaf import AnafClient, AnafClientError, CompanyInfo
from cuiro.observability import configure_logging
from cuiro.schemas.cui import CuiValidationResult

__all__ = [
    "AnafClient",
    "AnafClientError",
    "CompanyInfo",
    "CuiValidationResult",
    "configure_logging",
    "validate_cui",
]

__version__ = "0.1.0"
