import logging
from typing import Any
from pydantic import ValidationError
from lpwatch.core.events import TransactionEvent
from lpwatch.core.errors import MalformedPayloadError

logger = logging.getLogger(__name__)


class EventParser:
    """Turns a raw Helius webhook body into a TransactionEvent."""

    def parse(self, body: Any) -> TransactionEvent:
        if not isinstance(body, list) or not body:
            raise MalformedPayloadError("Webhook body must be a non-empty list of transactions")

        # Helius batches transactions; only the first one is handled per call.
        if len(body) > 1:
            logger.debug(f"Ignoring {len(body) - 1} extra transaction(s) in webhook batch")

        data = body[0]
        if not isinstance(data, dict):
            raise MalformedPayloadError("First transaction is not an object")

        transfers = data.get("tokenTransfers")
        if transfers is None:
            raise MalformedPayloadError("Transaction has no tokenTransfers")
        if not isinstance(transfers, list) or len(transfers) < 2:
            raise MalformedPayloadError("Transaction needs at least 2 token transfers")

        try:
            return TransactionEvent.model_validate(data)
        except ValidationError as e:
            raise MalformedPayloadError(f"Invalid transaction: {e.error_count()} validation error(s)") from e
