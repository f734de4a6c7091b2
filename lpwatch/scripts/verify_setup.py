import asyncio
import sys
import logging
import httpx
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Confirmed

from lpwatch.config.settings import Settings
from lpwatch.core.errors import LpWatchError
from lpwatch.adapters.birdeye import BirdeyePriceAdapter
from lpwatch.adapters.metaplex import MetaplexMetadataAdapter
from lpwatch.services.valuation import ValuationService

# Setup basic logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("VERIFY")

# USDC always carries Metaplex metadata
PROBE_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"

async def verify():
    settings = Settings()
    print("-" * 40)
    print(f"🔧 Verifying Setup (DRY_RUN={settings.DRY_RUN})...")
    print("-" * 40)

    async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS) as http_client:
        rpc = AsyncClient(settings.rpc_endpoint, commitment=Confirmed, timeout=settings.HTTP_TIMEOUT_SECONDS)
        try:
            price = BirdeyePriceAdapter(http_client, settings.BE_KEY.get_secret_value(), settings.BIRDEYE_PRICE_URL)
            sol = await ValuationService(price).fetch_reference_spot_price()
            print(f"✅ Birdeye reachable - SOL: ${sol}")

            md = await MetaplexMetadataAdapter(rpc, http_client).get_metadata(PROBE_MINT)
            print(f"✅ Helius RPC reachable - {PROBE_MINT[:8]}... is {md.symbol}")

            print("\n🚀 Verification Successful!")
        except LpWatchError as e:
            print(f"\n❌ Verification Failed: {type(e).__name__}: {e}")
            sys.exit(1)
        finally:
            await rpc.close()

if __name__ == "__main__":
    asyncio.run(verify())
