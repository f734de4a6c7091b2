class LpWatchError(Exception):
    """
    Base exception for every anticipated failure of the alert pipeline.

    Each failure is local to the webhook call that triggered it. The HTTP
    layer answers with `status_code`.
    """
    status_code = 502

class MalformedPayloadError(LpWatchError):
    """
    Raised when the inbound webhook body is not a non-empty list whose first
    element is a transaction event with at least two token transfers.
    """
    status_code = 400

class TransferShapeError(LpWatchError):
    """
    Raised when the token transfers do not look like a two-party
    (wrapped SOL + token) pool funding.
    """
    pass

class AmbiguousMintError(TransferShapeError):
    """
    Raised when the traded mint cannot be told apart from the reference leg.

    Examples: no wSOL transfer at all, wSOL on both legs, or more than
    one candidate token mint.
    """
    pass

class ReferenceTransferNotFoundError(TransferShapeError):
    """Raised when no transfer carries the wrapped SOL mint, so nothing can be valued."""
    pass

class PriceFetchError(LpWatchError):
    """
    Raised when the price oracle (Birdeye) cannot deliver a SOL/USD price.

    Covers timeouts, 4xx/5xx answers and payloads without `data.value`.
    """
    pass

class ValuationError(LpWatchError):
    """Raised when the reported amount and price give a USD value that cannot be represented in cents."""
    status_code = 400

class MetadataError(LpWatchError):
    """Base for token metadata lookup failures."""
    pass

class MetadataNotFoundError(MetadataError):
    """Raised when the chain has no Metaplex metadata account for the mint."""
    pass

class MetadataServiceError(MetadataError):
    """
    Raised when the RPC node or the off-chain metadata host fails, or when
    the metadata account cannot be decoded.
    """
    pass

class DispatchError(LpWatchError):
    """Raised when the Discord webhook rejects the alert or cannot be reached."""
    pass
