"""
Message Composer

Builds the Discord webhook payload for a LiquidityAlert. Everything here is
pure: the same alert always renders to the same bytes.
"""

import json
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List
from zoneinfo import ZoneInfo
from lpwatch.core.events import TransactionEvent
from lpwatch.core.models import LiquidityAlert, TokenMetadata

BIRDEYE_TOKEN_URL = "https://birdeye.so/token/{mint}?chain=solana"
SOLSCAN_TX_URL = "https://solscan.io/tx/{signature}"

# (field name, TokenExtensions attribute), in display order
OPTIONAL_LINKS = (
    ("Website", "website"),
    ("Twitter", "twitter"),
    ("Telegram", "telegram"),
)


def format_timestamp(ts: int, tz_name: str = "Asia/Manila") -> str:
    """Epoch seconds -> en-US style local time, e.g. '3/9/2024, 8:05:01 PM'."""
    local = datetime.fromtimestamp(ts, tz=timezone.utc).astimezone(ZoneInfo(tz_name))
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{local.month}/{local.day}/{local.year}, {hour}:{local.minute:02d}:{local.second:02d} {meridiem}"


def _field(name: str, value: str, inline: bool = True) -> Dict[str, Any]:
    return {"name": name, "value": value, "inline": inline}


class MessageComposer:
    def __init__(self, tz_name: str = "Asia/Manila"):
        self.tz_name = tz_name

    def build_alert(
        self,
        event: TransactionEvent,
        traded_mint: str,
        usd_value: Decimal,
        metadata: TokenMetadata
    ) -> LiquidityAlert:
        return LiquidityAlert(
            source=event.source,
            signature=event.signature,
            timestamp=format_timestamp(event.timestamp, self.tz_name),
            traded_mint=traded_mint,
            usd_value=usd_value,
            metadata=metadata,
        )

    def compose(self, alert: LiquidityAlert) -> Dict[str, Any]:
        md = alert.metadata
        fields: List[Dict[str, Any]] = [
            _field("Token address", alert.traded_mint, inline=False),
            _field("Birdeye", f"[Birdeye]({BIRDEYE_TOKEN_URL.format(mint=alert.traded_mint)})"),
            _field("Solscan", f"[Solscan]({SOLSCAN_TX_URL.format(signature=alert.signature)})"),
            _field("SOL LP", f"${alert.usd_value:.2f}"),
        ]

        if md.extensions is not None:
            for label, attr in OPTIONAL_LINKS:
                url = getattr(md.extensions, attr)
                if url is not None:
                    fields.append(_field(label, f"[{label}]({url})"))

        embed: Dict[str, Any] = {"title": md.symbol}
        if md.description is not None:
            embed["description"] = md.description
        embed["fields"] = fields
        if md.image is not None:
            embed["image"] = {"url": md.image}
        embed["footer"] = {"text": alert.timestamp}

        return {
            "content": f"New {alert.source} LP",
            "embeds": [embed],
        }

    @staticmethod
    def render(payload: Dict[str, Any]) -> bytes:
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
