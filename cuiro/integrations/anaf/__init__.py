"""ANAF VAT registry integration."""

from cuiro.integrations.anaf.client import AnafClient, AnafClientError, build_anaf_client
from cuiro.integrations.anaf.schemas import CompanyInfo

__all__ = ["AnafClient", "AnafClientError", "CompanyInfo", "build_anaf_client"]
