"""
Webhook server.

  POST /   → Helius enhanced-transaction webhook (list of transactions)

Any other method on / answers 405, any other path 404.
"""

import logging
from contextlib import asynccontextmanager
from json import JSONDecodeError
from typing import Optional
import httpx
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Confirmed
from starlette.exceptions import HTTPException as StarletteHTTPException
from lpwatch.config.settings import Settings
from lpwatch.core.interfaces import AlertNotifier
from lpwatch.core.models import PipelineStatus
from lpwatch.adapters.birdeye import BirdeyePriceAdapter
from lpwatch.adapters.metaplex import MetaplexMetadataAdapter
from lpwatch.services.event_parser import EventParser
from lpwatch.services.mint_resolver import MintResolver
from lpwatch.services.valuation import ValuationService
from lpwatch.services.threshold_gate import ThresholdGate
from lpwatch.services.message_composer import MessageComposer
from lpwatch.services.pipeline import AlertPipeline

logger = logging.getLogger(__name__)

OK_BODY = "Logged POST request body."


def build_notifier(settings: Settings, http_client: httpx.AsyncClient) -> AlertNotifier:
    if settings.DRY_RUN:
        from lpwatch.adapters.mock_notifier import LoggingNotifier
        return LoggingNotifier()
    from lpwatch.adapters.discord import DiscordWebhookNotifier
    return DiscordWebhookNotifier(http_client, settings.DISCORD_WEBHOOK_URL)


def build_pipeline(settings: Settings, http_client: httpx.AsyncClient, rpc_client: AsyncClient) -> AlertPipeline:
    price = BirdeyePriceAdapter(
        http_client,
        api_key=settings.BE_KEY.get_secret_value(),
        price_url=settings.BIRDEYE_PRICE_URL
    )
    return AlertPipeline(
        parser=EventParser(),
        resolver=MintResolver(),
        valuation=ValuationService(price, mode=settings.VALUATION_MODE),
        gate=ThresholdGate(settings.MIN_USD_THRESHOLD),
        metadata=MetaplexMetadataAdapter(rpc_client, http_client),
        composer=MessageComposer(tz_name=settings.ALERT_TIMEZONE),
        notifier=build_notifier(settings, http_client)
    )


def create_app(settings: Settings, pipeline: Optional[AlertPipeline] = None) -> FastAPI:
    """
    Builds the FastAPI app. When `pipeline` is given it is used as-is and no
    outbound clients are created.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if pipeline is not None:
            yield
            return

        # Shared pools; httpx and solana-py clients are safe for concurrent use.
        timeout = httpx.Timeout(settings.HTTP_TIMEOUT_SECONDS, connect=min(5.0, settings.HTTP_TIMEOUT_SECONDS))
        http_client = httpx.AsyncClient(
            timeout=timeout,
            limits=httpx.Limits(max_connections=100, max_keepalive_connections=20)
        )
        rpc_client = AsyncClient(settings.rpc_endpoint, commitment=Confirmed, timeout=settings.HTTP_TIMEOUT_SECONDS)
        app.state.pipeline = build_pipeline(settings, http_client, rpc_client)
        logger.info("✅ Webhook ready on / (RPC + price + notifier clients open)")
        try:
            yield
        finally:
            await rpc_client.close()
            await http_client.aclose()
            logger.info("👋 Outbound clients closed.")

    # POST / is the only route; no generated docs or schema endpoints.
    app = FastAPI(title="lpwatch", lifespan=lifespan, docs_url=None, redoc_url=None, openapi_url=None)
    app.state.pipeline = pipeline

    @app.exception_handler(StarletteHTTPException)
    async def plain_http_error(request: Request, exc: StarletteHTTPException):
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=getattr(exc, "headers", None))

    @app.post("/", response_class=PlainTextResponse)
    async def receive_webhook(request: Request):
        try:
            body = await request.json()
        except (JSONDecodeError, UnicodeDecodeError):
            logger.error("❌ Webhook body is not valid JSON")
            return PlainTextResponse("Invalid JSON body.", status_code=400)

        try:
            result = await request.app.state.pipeline.process(body)
        except Exception as e:
            logger.exception(f"Unexpected error while processing webhook: {e}")
            return PlainTextResponse("Internal error.", status_code=500)

        if result.status == PipelineStatus.FAILED:
            return PlainTextResponse(f"{type(result.error).__name__}: {result.error}", status_code=result.error.status_code)
        return PlainTextResponse(OK_BODY, status_code=200)

    return app
