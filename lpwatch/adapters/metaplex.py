"""
Metaplex Metadata Adapter

Implements MetadataProvider on top of a Solana RPC node (Helius):
the metadata PDA is derived from the mint, its account is read over RPC,
the Borsh header gives the on-chain symbol and URI, and the URI's JSON
supplies description, image and social links.
"""

import logging
import struct
from typing import Any, Dict, Optional, Tuple
import httpx
from pydantic import ValidationError
from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.core import RPCException
from solders.pubkey import Pubkey
from lpwatch.core.interfaces import MetadataProvider
from lpwatch.core.models import TokenMetadata, TokenExtensions
from lpwatch.core.errors import MetadataNotFoundError, MetadataServiceError

logger = logging.getLogger(__name__)

TOKEN_METADATA_PROGRAM_ID = Pubkey.from_string("metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bgLTP2bs")

# key (u8) + update authority (32) + mint (32)
_HEADER_LEN = 1 + 32 + 32


def metadata_pda(mint: Pubkey) -> Pubkey:
    pda, _bump = Pubkey.find_program_address(
        [b"metadata", bytes(TOKEN_METADATA_PROGRAM_ID), bytes(mint)],
        TOKEN_METADATA_PROGRAM_ID,
    )
    return pda


def _read_string(data: bytes, offset: int) -> Tuple[str, int]:
    if offset + 4 > len(data):
        raise ValueError("truncated string length")
    (length,) = struct.unpack_from("<I", data, offset)
    offset += 4
    if offset + length > len(data):
        raise ValueError("truncated string body")
    raw = data[offset:offset + length]
    # Metaplex pads name/symbol/uri with NUL bytes
    return raw.decode("utf-8", errors="replace").rstrip("\x00").strip(), offset + length


def decode_metadata_account(data: bytes) -> Dict[str, str]:
    """Returns name, symbol and uri from a Metadata account's Borsh data."""
    if len(data) < _HEADER_LEN:
        raise ValueError("metadata account too short")
    offset = _HEADER_LEN
    name, offset = _read_string(data, offset)
    symbol, offset = _read_string(data, offset)
    uri, offset = _read_string(data, offset)
    return {"name": name, "symbol": symbol, "uri": uri}


class MetaplexMetadataAdapter(MetadataProvider):
    def __init__(self, rpc_client: AsyncClient, http_client: httpx.AsyncClient):
        self._rpc = rpc_client
        self._http_client = http_client

    async def get_metadata(self, mint: str) -> TokenMetadata:
        try:
            mint_key = Pubkey.from_string(mint)
        except ValueError as e:
            raise MetadataNotFoundError(f"Not a valid mint address: {mint}") from e

        pda = metadata_pda(mint_key)
        try:
            resp = await self._rpc.get_account_info(pda)
        except (SolanaRpcException, RPCException, httpx.HTTPError) as e:
            raise MetadataServiceError(f"RPC getAccountInfo failed for {mint}: {e}") from e

        account = resp.value
        if account is None:
            raise MetadataNotFoundError(f"No Metaplex metadata for mint {mint}")

        try:
            on_chain = decode_metadata_account(bytes(account.data))
        except ValueError as e:
            raise MetadataServiceError(f"Undecodable metadata account for {mint}: {e}") from e

        off_chain = await self._fetch_json(on_chain["uri"]) if on_chain["uri"] else None
        logger.debug(f"Metadata for {mint}: symbol={on_chain['symbol']!r} uri={on_chain['uri'] or '-'}")
        return self._merge(on_chain, off_chain)

    async def _fetch_json(self, uri: str) -> Dict[str, Any]:
        try:
            resp = await self._http_client.get(uri, follow_redirects=True)
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPError as e:
            raise MetadataServiceError(f"Metadata JSON fetch failed ({uri}): {e}") from e
        except ValueError as e:
            raise MetadataServiceError(f"Metadata JSON is invalid ({uri}): {e}") from e
        if not isinstance(body, dict):
            raise MetadataServiceError(f"Metadata JSON is not an object ({uri})")
        return body

    @staticmethod
    def _merge(on_chain: Dict[str, str], off_chain: Optional[Dict[str, Any]]) -> TokenMetadata:
        if not off_chain:
            return TokenMetadata(symbol=on_chain["symbol"])

        extensions = off_chain.get("extensions")
        try:
            return TokenMetadata(
                symbol=off_chain.get("symbol") or on_chain["symbol"],
                description=off_chain.get("description"),
                image=off_chain.get("image"),
                extensions=TokenExtensions.model_validate(extensions) if isinstance(extensions, dict) else None,
            )
        except ValidationError as e:
            raise MetadataServiceError(f"Unexpected metadata JSON shape: {e.error_count()} error(s)") from e
