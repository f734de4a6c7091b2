import pytest

from lpwatch.core.errors import AmbiguousMintError
from lpwatch.core.events import TokenTransfer
from lpwatch.core.models import REFERENCE_MINT, ResolutionStatus
from lpwatch.services.mint_resolver import MintResolver


def transfers(*mints):
    return [TokenTransfer(mint=m, tokenAmount=1) for m in mints]


@pytest.mark.parametrize("order", [
    (REFERENCE_MINT, "TKN123"),
    ("TKN123", REFERENCE_MINT),
])
def test_resolves_token_regardless_of_position(order):
    assert MintResolver().resolve(transfers(*order)) == "TKN123"


def test_repeated_token_mint_is_still_one_party():
    resolution = MintResolver().classify(transfers("TKN123", REFERENCE_MINT, "TKN123"))
    assert resolution.status == ResolutionStatus.FOUND
    assert resolution.traded_mint == "TKN123"


def test_no_reference_transfer_is_not_found():
    resolver = MintResolver()
    resolution = resolver.classify(transfers("AAA", "BBB"))

    assert resolution.status == ResolutionStatus.NOT_FOUND
    assert resolution.traded_mint is None
    with pytest.raises(AmbiguousMintError):
        resolver.resolve(transfers("AAA", "BBB"))


def test_reference_on_both_legs_is_ambiguous():
    resolution = MintResolver().classify(transfers(REFERENCE_MINT, REFERENCE_MINT))
    assert resolution.status == ResolutionStatus.AMBIGUOUS
    with pytest.raises(AmbiguousMintError):
        MintResolver().resolve(transfers(REFERENCE_MINT, REFERENCE_MINT))


def test_two_candidate_tokens_is_ambiguous():
    resolution = MintResolver().classify(transfers(REFERENCE_MINT, "AAA", "BBB"))
    assert resolution.status == ResolutionStatus.AMBIGUOUS
    assert "2 candidate" in resolution.reason
