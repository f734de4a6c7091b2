from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Dict
from .models import TokenMetadata

class PriceProvider(ABC):

    @abstractmethod
    async def get_usd_price(self, mint: str) -> Decimal:
        """
        Returns the current USD spot price of `mint`, unrounded.

        Raises:
            PriceFetchError: on any transport, HTTP or payload failure.
        """
        pass


class MetadataProvider(ABC):
    """Resolves descriptive token metadata for a mint."""

    @abstractmethod
    async def get_metadata(self, mint: str) -> TokenMetadata:
        """
        Raises:
            MetadataNotFoundError: the mint has no registered metadata.
            MetadataServiceError: the chain or metadata host failed.
        """
        pass


class AlertNotifier(ABC):

    @abstractmethod
    async def send(self, payload: Dict[str, Any]) -> None:
        """Delivers one composed alert. Raises DispatchError on failure."""
        pass
