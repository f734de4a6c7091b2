from decimal import Decimal
from typing import List
from pydantic import BaseModel, ConfigDict, Field

# 9999-12-31T00:00:00Z: still representable after any timezone offset
MAX_TIMESTAMP = 253402214400

class TokenTransfer(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    mint: str = Field(..., min_length=1)
    token_amount: Decimal = Field(..., alias="tokenAmount", ge=0)

class TransactionEvent(BaseModel):
    """One Helius enhanced-transaction record, as delivered by the webhook."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    fee_payer: str = Field(default="", alias="feePayer")
    source: str = Field(default="UNKNOWN")
    signature: str
    timestamp: int = Field(..., ge=0, le=MAX_TIMESTAMP)  # seconds since epoch
    token_transfers: List[TokenTransfer] = Field(..., alias="tokenTransfers", min_length=2)
