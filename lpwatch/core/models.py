from decimal import Decimal
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

# Wrapped SOL: the reference leg of every pool we watch.
REFERENCE_MINT = "So11111111111111111111111111111111111111112"

class ResolutionStatus(str, Enum):
    FOUND = "FOUND"
    AMBIGUOUS = "AMBIGUOUS"
    NOT_FOUND = "NOT_FOUND"

class PipelineStatus(str, Enum):
    DISPATCHED = "DISPATCHED"
    BELOW_THRESHOLD = "BELOW_THRESHOLD"
    FAILED = "FAILED"

class MintResolution(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: ResolutionStatus
    traded_mint: Optional[str] = None
    reason: str = ""

    @property
    def found(self) -> bool:
        return self.status == ResolutionStatus.FOUND

class TokenExtensions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    website: Optional[str] = None
    twitter: Optional[str] = None
    telegram: Optional[str] = None

class TokenMetadata(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    symbol: str
    description: Optional[str] = None
    image: Optional[str] = None
    extensions: Optional[TokenExtensions] = None

class LiquidityAlert(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str
    signature: str
    timestamp: str  # already localized for display
    traded_mint: str
    usd_value: Decimal = Field(..., ge=0)
    metadata: TokenMetadata

class PipelineResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    status: PipelineStatus
    signature: Optional[str] = None
    traded_mint: Optional[str] = None
    usd_value: Optional[Decimal] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.status != PipelineStatus.FAILED
