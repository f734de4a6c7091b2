from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from lpwatch.core.errors import PriceFetchError, ReferenceTransferNotFoundError, ValuationError
from lpwatch.core.events import TokenTransfer
from lpwatch.core.models import REFERENCE_MINT
from lpwatch.services.threshold_gate import ThresholdGate
from lpwatch.services.valuation import ValuationService, compute_usd_value


def price_returning(value=None, error=None):
    mock = MagicMock()
    mock.get_usd_price = AsyncMock(return_value=value, side_effect=error)
    return mock


class TestComputeUsdValue:
    def test_scenario_a_meets_threshold(self):
        assert compute_usd_value(Decimal("20"), Decimal("75.00")) == Decimal("1500.00")

    def test_scenario_b_below_threshold(self):
        assert compute_usd_value(Decimal("20"), Decimal("74.00")) == Decimal("1480.00")

    def test_truncate_mode_floors_both_inputs(self):
        assert compute_usd_value(Decimal("20.9"), Decimal("75.99")) == Decimal("1500.00")
        assert compute_usd_value(Decimal("0.99"), Decimal("180.50")) == Decimal("0.00")

    def test_precise_mode_rounds_product_to_cents(self):
        assert compute_usd_value(Decimal("20.9"), Decimal("75.99"), mode="precise") == Decimal("1588.19")

    def test_result_has_two_fraction_digits(self):
        assert compute_usd_value(Decimal("3"), Decimal("5")).as_tuple().exponent == -2

    def test_is_deterministic(self):
        results = {compute_usd_value(Decimal("12.5"), Decimal("99.99"), mode="precise") for _ in range(5)}
        assert results == {Decimal("1249.88")}

    @pytest.mark.parametrize("mode", ["truncate", "precise"])
    def test_value_beyond_decimal_precision_is_valuation_error(self, mode):
        with pytest.raises(ValuationError, match="out of range"):
            compute_usd_value(Decimal(10**30), Decimal("75.00"), mode=mode)


def test_resolve_reference_amount_scans_all_transfers():
    svc = ValuationService(price_returning(Decimal("1")))
    items = [TokenTransfer(mint="TKN", tokenAmount=5000), TokenTransfer(mint=REFERENCE_MINT, tokenAmount=20)]
    assert svc.resolve_reference_amount(items) == Decimal("20")


def test_resolve_reference_amount_missing():
    svc = ValuationService(price_returning(Decimal("1")))
    items = [TokenTransfer(mint="AAA", tokenAmount=1), TokenTransfer(mint="BBB", tokenAmount=2)]
    with pytest.raises(ReferenceTransferNotFoundError):
        svc.resolve_reference_amount(items)


@pytest.mark.asyncio
async def test_spot_price_rounded_half_up():
    provider = price_returning(Decimal("74.995"))
    price = await ValuationService(provider).fetch_reference_spot_price()

    assert price == Decimal("75.00")
    provider.get_usd_price.assert_awaited_once_with(REFERENCE_MINT)


@pytest.mark.asyncio
async def test_spot_price_failure_is_price_fetch_error():
    with pytest.raises(PriceFetchError):
        await ValuationService(price_returning(error=PriceFetchError("503"))).fetch_reference_spot_price()


@pytest.mark.asyncio
async def test_unexpected_provider_error_is_wrapped():
    with pytest.raises(PriceFetchError, match="boom"):
        await ValuationService(price_returning(error=RuntimeError("boom"))).fetch_reference_spot_price()


@pytest.mark.asyncio
async def test_value_event_skips_oracle_without_reference_leg():
    provider = price_returning(Decimal("75"))
    items = [TokenTransfer(mint="AAA", tokenAmount=1), TokenTransfer(mint="BBB", tokenAmount=2)]
    with pytest.raises(ReferenceTransferNotFoundError):
        await ValuationService(provider).value_event(items)
    provider.get_usd_price.assert_not_awaited()


def test_unknown_mode_rejected():
    with pytest.raises(ValueError):
        ValuationService(price_returning(Decimal("1")), mode="round")


def test_threshold_gate_is_inclusive():
    gate = ThresholdGate(Decimal("1500"))
    assert gate.passes(Decimal("1500.00"))
    assert not gate.passes(Decimal("1499.99"))


@pytest.mark.asyncio
async def test_infinite_price_is_price_fetch_error():
    with pytest.raises(PriceFetchError, match="Unusable"):
        await ValuationService(price_returning(Decimal("Infinity"))).fetch_reference_spot_price()
