import logging
from decimal import Decimal, InvalidOperation
import httpx
from lpwatch.core.interfaces import PriceProvider
from lpwatch.core.errors import PriceFetchError

logger = logging.getLogger(__name__)


class BirdeyePriceAdapter(PriceProvider):
    """Spot prices from Birdeye's public price endpoint. No cache, no retry."""

    def __init__(self, http_client: httpx.AsyncClient, api_key: str, price_url: str = "https://public-api.birdeye.so/defi/price"):
        self._http_client = http_client
        self.api_key = api_key
        self.price_url = price_url

    async def get_usd_price(self, mint: str) -> Decimal:
        headers = {
            "X-API-KEY": self.api_key,
            "x-chain": "solana",
            "accept": "application/json",
        }
        try:
            resp = await self._http_client.get(self.price_url, params={"address": mint}, headers=headers)
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPError as e:
            raise PriceFetchError(f"Birdeye request failed: {e}") from e
        except ValueError as e:
            raise PriceFetchError(f"Birdeye returned invalid JSON: {e}") from e

        data = body.get("data") if isinstance(body, dict) else None
        value = data.get("value") if isinstance(data, dict) else None
        if value is None:
            raise PriceFetchError(f"Birdeye response has no price for {mint}")

        try:
            price = Decimal(str(value))
        except InvalidOperation as e:
            raise PriceFetchError(f"Birdeye price is not numeric: {value!r}") from e
        if not price.is_finite() or price < 0:
            raise PriceFetchError(f"Birdeye price out of range: {value!r}")
        return price
