import json
import logging
from collections import deque
from typing import Any, Deque, Dict
from lpwatch.core.interfaces import AlertNotifier

logger = logging.getLogger(__name__)


class LoggingNotifier(AlertNotifier):
    """DRY_RUN notifier: logs alerts instead of posting them and keeps the latest ones for inspection."""

    def __init__(self, keep: int = 100):
        self.sent: Deque[Dict[str, Any]] = deque(maxlen=keep)

    async def send(self, payload: Dict[str, Any]) -> None:
        self.sent.append(payload)
        logger.info(f"👻 [DRY RUN] Alert not posted:\n{json.dumps(payload, indent=2)[:1500]}")
