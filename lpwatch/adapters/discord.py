import logging
from typing import Any, Dict
import httpx
from lpwatch.core.interfaces import AlertNotifier
from lpwatch.core.errors import DispatchError
from lpwatch.services.message_composer import MessageComposer

logger = logging.getLogger(__name__)


class DiscordWebhookNotifier(AlertNotifier):
    def __init__(self, http_client: httpx.AsyncClient, webhook_url: str):
        self._http_client = http_client
        self.webhook_url = webhook_url

    async def send(self, payload: Dict[str, Any]) -> None:
        body = MessageComposer.render(payload)
        try:
            resp = await self._http_client.post(
                self.webhook_url,
                content=body,
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            raise DispatchError(f"Discord webhook unreachable: {e}") from e

        if not resp.is_success:
            raise DispatchError(f"Discord webhook answered {resp.status_code}: {resp.text[:200]}")
        logger.debug(f"Discord accepted alert ({resp.status_code})")
