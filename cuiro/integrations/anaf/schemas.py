"""Pydantic schemas for the ANAF VAT registry API (PlatitorTvaRest).

Wire models keep ANAF's Romanian field names as aliases and ignore any
field they do not declare. Dates stay textual on the wire models; the
client parses them one by one so a malformed value only loses that field.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

logger = logging.getLogger(__name__)


def _text_or_none(value: Any) -> str | None:
    """Keep textual dates; any other wire type is logged and dropped."""
    if value is None or isinstance(value, str):
        return value
    logger.warning("Ignoring non-text date value: %r", value)
    return None


def _literal_bool(value: Any) -> bool | None:
    """Keep JSON booleans only; anything else counts as absent."""
    return value if isinstance(value, bool) else None


WireDate = Annotated[str | None, BeforeValidator(_text_or_none)]
WireFlag = Annotated[bool | None, BeforeValidator(_literal_bool)]

# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


class AnafRequestItem(BaseModel):
    """One line of the batched request body: ``{"cui": 123, "data": "YYYY-MM-DD"}``."""

    model_config = ConfigDict(populate_by_name=True)

    cui: int
    reference_date: date = Field(alias="data")


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------


class AnafGeneralData(BaseModel):
    """``date_generale`` block of a found company."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    cui: int | None = None
    reference_date: WireDate = Field(default=None, alias="data")
    company_name: str | None = Field(default=None, alias="denumire")
    address: str | None = Field(default=None, alias="adresa")
    trade_register_number: str | None = Field(default=None, alias="nrRegCom")
    phone_number: str | None = Field(default=None, alias="telefon")
    postal_code: str | None = Field(default=None, alias="codPostal")
    registration_state: str | None = Field(default=None, alias="stare_inregistrare")
    registration_date: WireDate = Field(default=None, alias="data_inregistrare")
    is_vat_payer: WireFlag = Field(default=None, alias="scpTVA")
    vat_registration_date: WireDate = Field(default=None, alias="data_inceput_ScpTVA")
    split_vat_start_date: WireDate = Field(default=None, alias="dataInceputTvaInc")
    is_inactive: WireFlag = Field(default=None, alias="statusInactivi")


class AnafCompanyData(BaseModel):
    """Entry of the ``found`` list."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    general_data: AnafGeneralData | None = Field(default=None, alias="date_generale")


class AnafNotFoundData(BaseModel):
    """Entry of the ``notfound`` list."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    cui: int | None = None
    reference_date: WireDate = Field(default=None, alias="data")


class AnafResponse(BaseModel):
    """Top-level ANAF response."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status_code: int | None = Field(default=None, alias="cod")
    message: str | None = None
    found: list[AnafCompanyData] | None = None
    not_found: list[AnafNotFoundData] | None = Field(default=None, alias="notfound")


# ---------------------------------------------------------------------------
# Public result
# ---------------------------------------------------------------------------


class CompanyInfo(BaseModel):
    """Company data resolved from the ANAF registry.

    When ``found_in_registry`` is False only ``cui`` and ``reference_date``
    are populated.
    """

    model_config = ConfigDict(frozen=True)

    cui: int | None
    reference_date: date | None = None
    company_name: str | None = None
    registration_date: date | None = None
    address: str | None = None
    phone_number: str | None = None
    postal_code: str | None = None
    trade_register_number: str | None = None   # e.g. "J40/1234/2020"
    registration_state: str | None = None      # e.g. "INREGISTRAT"
    is_vat_payer: bool = False
    vat_registration_date: date | None = None
    is_split_vat: bool = False
    is_inactive: bool = False
    found_in_registry: bool = False

    @classmethod
    def not_found(cls, cui: int, reference_date: date) -> CompanyInfo:
        """Build the record for a CUI the registry does not know."""
        return cls(cui=cui, reference_date=reference_date, found_in_registry=False)
