import logging
from decimal import Decimal, InvalidOperation, ROUND_DOWN, ROUND_HALF_UP
from typing import Sequence
from lpwatch.core.interfaces import PriceProvider
from lpwatch.core.events import TokenTransfer
from lpwatch.core.models import REFERENCE_MINT
from lpwatch.core.errors import PriceFetchError, ReferenceTransferNotFoundError, ValuationError

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


class ValuationService:
    """
    Values the SOL side of a pool funding in USD.

    Two arithmetic modes exist:
        truncate: floor(amount) * floor(price), the historical alert math.
        precise:  amount * price, rounded half-up to cents.
    """

    def __init__(self, price: PriceProvider, mode: str = "truncate", reference_mint: str = REFERENCE_MINT):
        if mode not in ("truncate", "precise"):
            raise ValueError(f"Unknown valuation mode: {mode}")
        self.price = price
        self.mode = mode
        self.reference_mint = reference_mint

    def resolve_reference_amount(self, transfers: Sequence[TokenTransfer]) -> Decimal:
        for t in transfers:
            if t.mint == self.reference_mint:
                return t.token_amount
        raise ReferenceTransferNotFoundError("No wSOL transfer in event")

    async def fetch_reference_spot_price(self) -> Decimal:
        try:
            raw = await self.price.get_usd_price(self.reference_mint)
        except PriceFetchError:
            raise
        except Exception as e:
            raise PriceFetchError(f"Price lookup failed: {e}") from e
        try:
            price = Decimal(raw).quantize(CENTS, rounding=ROUND_HALF_UP)
        except (InvalidOperation, TypeError, ValueError) as e:
            raise PriceFetchError(f"Unusable SOL price from oracle: {raw!r}") from e
        logger.debug(f"SOL spot price: ${price}")
        return price

    def compute_usd_value(self, amount: Decimal, price: Decimal) -> Decimal:
        return compute_usd_value(amount, price, self.mode)

    async def value_event(self, transfers: Sequence[TokenTransfer]) -> Decimal:
        # Amount first: a malformed event must not cost an oracle call.
        amount = self.resolve_reference_amount(transfers)
        price = await self.fetch_reference_spot_price()
        return self.compute_usd_value(amount, price)


def compute_usd_value(amount: Decimal, price: Decimal, mode: str = "truncate") -> Decimal:
    amount = Decimal(amount)
    price = Decimal(price)
    try:
        if mode == "truncate":
            value = amount.to_integral_value(rounding=ROUND_DOWN) * price.to_integral_value(rounding=ROUND_DOWN)
        else:
            value = amount * price
        return max(value, Decimal("0")).quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        # quantize needs the result to fit the context precision (28 digits)
        raise ValuationError(f"USD value out of range for amount {amount} at ${price}") from e
