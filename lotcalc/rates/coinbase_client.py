"""Coinbase exchange-rates async client.

Fetches conversion rates from one currency to every other currency Coinbase
knows about.  Response shape::

    {"data": {"currency": "NZD", "rates": {"USD": "0.62", "EUR": "0.57", ...}}}
"""

import asyncio
import logging
from typing import Optional, Protocol

import httpx

from lotcalc.config import Config
from lotcalc.errors import RateLookupFailed

logger = logging.getLogger("lotcalc")

# Retry settings
_RETRY_BASE_DELAY = 1.0  # seconds; doubles each attempt
_RETRYABLE_STATUS_CODES = {502, 503, 504, 429}


class RateLookup(Protocol):
    """Anything that can return conversion rates for a currency."""

    async def get_rates(self, currency: str) -> dict[str, float]:
        ...


class CoinbaseRateClient:
    """Async client wrapping the Coinbase ``/v2/exchange-rates`` endpoint."""

    def __init__(
        self,
        config: Config,
        retry_base_delay: float = _RETRY_BASE_DELAY,
    ) -> None:
        self._url = config.rate_api_url
        self._timeout = config.rate_timeout_seconds
        self._max_retries = config.rate_max_retries
        self._retry_base_delay = retry_base_delay

    # ── Retry helper ─────────────────────────────────────────────────────

    async def _get_with_retry(self, params: dict) -> httpx.Response:
        """GET the rates endpoint with exponential-backoff retry.

        Retries on transient server errors (502, 503, 504), rate-limits
        (429) and transport errors.  Anything else fails immediately.
        """
        last_exc: Optional[Exception] = None

        for attempt in range(self._max_retries):
            try:
                async with httpx.AsyncClient() as client:
                    resp = await client.get(
                        self._url,
                        params=params,
                        timeout=self._timeout,
                    )

                if resp.status_code in _RETRYABLE_STATUS_CODES:
                    delay = self._retry_base_delay * (2 ** attempt)
                    logger.warning(
                        "Rate lookup %s returned %d, retry %d/%d in %.1fs",
                        params, resp.status_code,
                        attempt + 1, self._max_retries, delay,
                    )
                    last_exc = httpx.HTTPStatusError(
                        f"Server error '{resp.status_code}'",
                        request=resp.request,
                        response=resp,
                    )
                    await asyncio.sleep(delay)
                    continue

                resp.raise_for_status()
                return resp

            except httpx.TransportError as exc:
                delay = self._retry_base_delay * (2 ** attempt)
                logger.warning(
                    "Rate lookup %s transport error (%s), retry %d/%d in %.1fs",
                    params, exc,
                    attempt + 1, self._max_retries, delay,
                )
                last_exc = exc
                await asyncio.sleep(delay)

            except httpx.HTTPStatusError as exc:
                raise RateLookupFailed(
                    f"Rate lookup failed with HTTP {exc.response.status_code}."
                ) from exc

        raise RateLookupFailed(
            f"Rate lookup failed after {self._max_retries} attempt(s)."
        ) from last_exc

    # ── Rates ────────────────────────────────────────────────────────────

    async def get_rates(self, currency: str) -> dict[str, float]:
        """Return ``{target_code: rate}`` for converting *currency*.

        Raises:
            RateLookupFailed: Network failure, non-success status, or a
                response body without a ``data.rates`` mapping.
        """
        resp = await self._get_with_retry({"currency": currency.upper()})

        try:
            raw_rates = resp.json()["data"]["rates"]
            return {
                code.upper(): float(value)
                for code, value in raw_rates.items()
            }
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise RateLookupFailed(
                f"Malformed rate response for {currency.upper()}."
            ) from exc
