from typing import Sequence
from lpwatch.core.events import TokenTransfer
from lpwatch.core.models import REFERENCE_MINT, MintResolution, ResolutionStatus
from lpwatch.core.errors import AmbiguousMintError


class MintResolver:
    def __init__(self, reference_mint: str = REFERENCE_MINT):
        self.reference_mint = reference_mint

    def classify(self, transfers: Sequence[TokenTransfer]) -> MintResolution:
        """
        Splits the transfers into the wSOL leg and the traded token.

        Every transfer is inspected; position in the list carries no meaning.
        A valid pool funding has exactly one wSOL transfer and exactly one
        other mint.
        """
        reference_legs = [t for t in transfers if t.mint == self.reference_mint]
        others = []
        for t in transfers:
            if t.mint != self.reference_mint and t.mint not in others:
                others.append(t.mint)

        if not reference_legs:
            return MintResolution(status=ResolutionStatus.NOT_FOUND, reason="no wSOL transfer")
        if len(reference_legs) > 1:
            return MintResolution(status=ResolutionStatus.AMBIGUOUS, reason=f"{len(reference_legs)} wSOL transfers")
        if len(others) != 1:
            return MintResolution(status=ResolutionStatus.AMBIGUOUS, reason=f"{len(others)} candidate token mints")

        return MintResolution(status=ResolutionStatus.FOUND, traded_mint=others[0])

    def resolve(self, transfers: Sequence[TokenTransfer]) -> str:
        resolution = self.classify(transfers)
        if not resolution.found:
            raise AmbiguousMintError(f"Cannot resolve traded mint ({resolution.status.value}): {resolution.reason}")
        return resolution.traded_mint
