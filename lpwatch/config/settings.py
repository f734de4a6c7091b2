from decimal import Decimal
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, SecretStr, field_validator

class Settings(BaseSettings):
    # Server
    HOST: str = Field(default="0.0.0.0", description="Listen address for the webhook server")
    PORT: int = Field(default=8787, description="Listen port for the webhook server")

    # Outbound credentials / endpoints
    DISCORD_WEBHOOK_URL: str = Field(..., description="Discord webhook that receives LP alerts")
    BE_KEY: SecretStr = Field(..., description="Birdeye API key (price oracle)")
    HELIUS_API: SecretStr = Field(..., description="Helius RPC API key (metadata lookups)")
    HELIUS_RPC_URL: str = Field(default="https://mainnet.helius-rpc.com/", description="Helius RPC base URL")
    BIRDEYE_PRICE_URL: str = Field(default="https://public-api.birdeye.so/defi/price", description="Birdeye price endpoint")

    # Alerting policy
    MIN_USD_THRESHOLD: Decimal = Field(default=Decimal("1500"), ge=0, description="Minimum SOL-side liquidity in USD")
    VALUATION_MODE: Literal["truncate", "precise"] = Field(default="truncate", description="truncate = floor(amount) * floor(price)")
    ALERT_TIMEZONE: str = Field(default="Asia/Manila", description="Timezone used for alert timestamps")

    # Runtime
    HTTP_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0, description="Timeout applied to every outbound call")
    DRY_RUN: bool = Field(default=False, description="If True, alerts are logged instead of posted")
    LOG_LEVEL: str = Field(default="INFO")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore", frozen=True)

    @field_validator("ALERT_TIMEZONE")
    @classmethod
    def known_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v!r}") from e
        return v

    @property
    def rpc_endpoint(self) -> str:
        return f"{self.HELIUS_RPC_URL}?api-key={self.HELIUS_API.get_secret_value()}"
