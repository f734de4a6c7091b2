"""
Shared fixtures: Helius-shaped webhook bodies and an AlertPipeline wired to
mocked price / metadata / notifier providers.
"""
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from lpwatch.core.models import REFERENCE_MINT, TokenMetadata, TokenExtensions
from lpwatch.services.event_parser import EventParser
from lpwatch.services.mint_resolver import MintResolver
from lpwatch.services.valuation import ValuationService
from lpwatch.services.threshold_gate import ThresholdGate
from lpwatch.services.message_composer import MessageComposer
from lpwatch.services.pipeline import AlertPipeline

TOKEN_MINT = "TKN123"
SIGNATURE = "5xSigAbc123"
TIMESTAMP = 1700000000  # 2023-11-14 22:13:20 UTC


def make_body(transfers=None, source="RAYDIUM", signature=SIGNATURE, timestamp=TIMESTAMP):
    if transfers is None:
        transfers = [(REFERENCE_MINT, 20), (TOKEN_MINT, 5000)]
    return [{
        "feePayer": "FeePayer1111",
        "source": source,
        "signature": signature,
        "timestamp": timestamp,
        "type": "CREATE_POOL",
        "tokenTransfers": [{"mint": m, "tokenAmount": a} for m, a in transfers],
    }]


@pytest.fixture
def body():
    return make_body()


@pytest.fixture
def metadata():
    return TokenMetadata(
        symbol="TKN",
        description="A token",
        image="https://img.example/tkn.png",
        extensions=TokenExtensions(website="https://x.io"),
    )


@pytest.fixture
def price():
    mock = MagicMock()
    mock.get_usd_price = AsyncMock(return_value=Decimal("75.00"))
    return mock


@pytest.fixture
def metadata_provider(metadata):
    mock = MagicMock()
    mock.get_metadata = AsyncMock(return_value=metadata)
    return mock


@pytest.fixture
def notifier():
    mock = MagicMock()
    mock.send = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def pipeline(price, metadata_provider, notifier):
    return AlertPipeline(
        parser=EventParser(),
        resolver=MintResolver(),
        valuation=ValuationService(price),
        gate=ThresholdGate(Decimal("1500")),
        metadata=metadata_provider,
        composer=MessageComposer(),
        notifier=notifier,
    )
