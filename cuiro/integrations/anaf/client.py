"""Sync httpx client for the ANAF VAT registry (PlatitorTvaRest) API."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from datetime import date

import httpx

from cuiro.config import AnafSettings, settings
from cuiro.decoders.cui import validate_cui
from cuiro.integrations.anaf.schemas import (
    AnafGeneralData,
    AnafRequestItem,
    AnafResponse,
    CompanyInfo,
)

logger = logging.getLogger(__name__)

# Backoff between attempts, in seconds
INITIAL_BACKOFF = 0.5
MAX_BACKOFF = 2.0


class AnafClientError(Exception):
    """Raised when the ANAF registry cannot be queried."""

    def __init__(self, message: str, attempts: int = 0) -> None:
        super().__init__(message)
        self.attempts = attempts


class AnafClient:
    """Batched lookup of Romanian companies in the ANAF VAT registry.

    Endpoint: POST {base_url}
    Body: [{"cui": 18547290, "data": "2026-01-19"}, ...]
    Auth: none (public API)

    CUIs are validated and de-duplicated before any request is made. The
    request is retried with exponential backoff (0.5s doubling, max 2s).
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        max_batch_size: int | None = None,
        *,
        http_client: httpx.Client | None = None,
        log: logging.Logger | None = None,
        sleep: Callable[[float], None] = time.sleep,
        today: Callable[[], date] = date.today,
    ) -> None:
        anaf = settings.anaf
        self._base_url = base_url or anaf.anaf_base_url
        self._timeout = httpx.Timeout(timeout if timeout is not None else anaf.anaf_timeout)
        self._max_retries = max_retries if max_retries is not None else anaf.anaf_max_retries
        self._max_batch_size = (
            max_batch_size if max_batch_size is not None else anaf.anaf_max_batch_size
        )
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.Client(
            timeout=self._timeout,
            headers={"Accept": "application/json"},
        )
        self._log = log or logger
        self._sleep = sleep
        self._today = today

    @property
    def max_retries(self) -> int:
        return self._max_retries

    @property
    def max_batch_size(self) -> int:
        return self._max_batch_size

    # ── Lifecycle ────────────────────────────────────────────────────

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http_client:
            self._http.close()

    def __enter__(self) -> AnafClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ── Public API ───────────────────────────────────────────────────

    def lookup(self, cui: str) -> CompanyInfo:
        """Look up a single CUI (with or without the RO prefix).

        Raises:
            ValueError: If the CUI is not valid.
            AnafClientError: If ANAF cannot be reached or returns no entry.
        """
        self._log.debug("Looking up CUI: %s", cui)

        results = self.lookup_batch([cui])
        if not results:
            msg = f"ANAF returned no entry for CUI {cui}"
            raise AnafClientError(msg)
        return results[0]

    def lookup_batch(self, cuis: Sequence[str] | None) -> list[CompanyInfo]:
        """Look up many CUIs with a single ANAF request.

        Found companies come first, then the CUIs ANAF does not know. The
        order of the input is NOT preserved and ANAF may omit or repeat
        entries; use :meth:`lookup_batch_by_cui` to re-key by CUI.

        Raises:
            TypeError: If a single string is passed instead of a sequence.
            ValueError: If the list is empty, too long, or holds an invalid CUI.
            AnafClientError: If every attempt to query ANAF failed.
        """
        if isinstance(cuis, str):
            msg = "Expected a sequence of CUIs, got a single string"
            raise TypeError(msg)

        if not cuis:
            msg = "CUI list cannot be null or empty"
            raise ValueError(msg)

        if len(cuis) > self._max_batch_size:
            msg = f"Batch size {len(cuis)} exceeds maximum allowed {self._max_batch_size}"
            raise ValueError(msg)

        self._log.debug("Looking up %d CUIs in batch", len(cuis))

        # Canonical CUI -> first original input that produced it
        requested: dict[int, str] = {}
        for cui in cuis:
            requested.setdefault(self._validate_and_normalize(cui), cui)

        reference_date = self._today()
        items = [AnafRequestItem(cui=cui, reference_date=reference_date) for cui in requested]

        response = self._execute_with_retry(items)
        return self._map_response(response, reference_date)

    def lookup_batch_by_cui(self, cuis: Sequence[str] | None) -> dict[int, CompanyInfo]:
        """Same as :meth:`lookup_batch`, keyed by numeric CUI.

        CUIs missing from the ANAF response are missing from the dict; for a
        repeated CUI the last entry wins.
        """
        return {info.cui: info for info in self.lookup_batch(cuis) if info.cui is not None}

    # ── Internals ────────────────────────────────────────────────────

    def _validate_and_normalize(self, cui: str) -> int:
        result = validate_cui(cui)
        if not result.valid:
            msg = f"Invalid CUI: {cui} - {result.error}"
            raise ValueError(msg)
        return int(result.normalized)

    def _execute_with_retry(self, items: list[AnafRequestItem]) -> AnafResponse:
        """POST the batch, retrying on any transport or decoding failure."""
        attempts = self._max_retries + 1
        backoff = INITIAL_BACKOFF
        last_error: Exception | None = None

        for attempt in range(attempts):
            if attempt > 0:
                self._log.warning(
                    "Retrying ANAF request, attempt %d/%d", attempt, self._max_retries
                )
                try:
                    self._sleep(backoff)
                except KeyboardInterrupt as exc:
                    raise AnafClientError("ANAF request interrupted", attempts=attempt) from exc
                backoff = min(backoff * 2, MAX_BACKOFF)

            try:
                return self._post(items)
            except Exception as exc:
                last_error = exc
                self._log.warning(
                    "ANAF request failed (attempt %d/%d): %s", attempt + 1, attempts, exc
                )

        self._log.error("Failed to query ANAF API after %d attempts", attempts)
        msg = f"Failed to query ANAF API after {attempts} attempts"
        raise AnafClientError(msg, attempts=attempts) from last_error

    def _post(self, items: list[AnafRequestItem]) -> AnafResponse:
        body = [item.model_dump(mode="json", by_alias=True) for item in items]

        response = self._http.post(self._base_url, json=body)
        response.raise_for_status()
        payload = response.json()

        if payload is None:
            msg = "Received null response from ANAF"
            raise AnafClientError(msg)

        return AnafResponse.model_validate(payload)

    def _map_response(self, response: AnafResponse, reference_date: date) -> list[CompanyInfo]:
        """Found companies first, then not-found CUIs, in ANAF's order."""
        results: list[CompanyInfo] = []

        for company in response.found or []:
            if company.general_data is not None:
                results.append(self._map_company(company.general_data))

        for missing in response.not_found or []:
            if missing.cui is not None:
                results.append(CompanyInfo.not_found(missing.cui, reference_date))

        return results

    def _map_company(self, data: AnafGeneralData) -> CompanyInfo:
        return CompanyInfo(
            cui=data.cui,
            reference_date=self._parse_date(data.reference_date),
            company_name=data.company_name,
            registration_date=self._parse_date(data.registration_date),
            address=data.address,
            phone_number=data.phone_number,
            postal_code=data.postal_code,
            trade_register_number=data.trade_register_number,
            registration_state=data.registration_state,
            is_vat_payer=data.is_vat_payer is True,
            vat_registration_date=self._parse_date(data.vat_registration_date),
            is_split_vat=data.split_vat_start_date is not None,
            is_inactive=data.is_inactive is True,
            found_in_registry=True,
        )

    def _parse_date(self, raw: str | None) -> date | None:
        if raw is None or not raw.strip():
            return None
        try:
            # ANAF returns ISO date strings "YYYY-MM-DD"
            return date.fromisoformat(raw.strip())
        except ValueError:
            self._log.warning("Failed to parse date: %s", raw)
            return None


def build_anaf_client(anaf_settings: AnafSettings | None = None) -> AnafClient | None:
    """Build a client from settings, or None when ``anaf_enabled`` is off."""
    anaf = anaf_settings or settings.anaf
    if not anaf.anaf_enabled:
        logger.info("ANAF client disabled by configuration")
        return None

    logger.info("Configuring ANAF client with base URL: %s", anaf.anaf_base_url)
    logger.debug(
        "ANAF configuration: timeout=%ss, maxRetries=%d, maxBatchSize=%d",
        anaf.anaf_timeout,
        anaf.anaf_max_retries,
        anaf.anaf_max_batch_size,
    )
    return AnafClient(
        base_url=anaf.anaf_base_url,
        timeout=anaf.anaf_timeout,
        max_retries=anaf.anaf_max_retries,
        max_batch_size=anaf.anaf_max_batch_size,
    )
