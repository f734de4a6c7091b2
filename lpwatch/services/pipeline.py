import logging
from typing import Any
from lpwatch.core.interfaces import AlertNotifier, MetadataProvider
from lpwatch.core.models import PipelineResult, PipelineStatus
from lpwatch.core.errors import LpWatchError, MetadataServiceError, DispatchError
from lpwatch.services.event_parser import EventParser
from lpwatch.services.mint_resolver import MintResolver
from lpwatch.services.valuation import ValuationService
from lpwatch.services.threshold_gate import ThresholdGate
from lpwatch.services.message_composer import MessageComposer

logger = logging.getLogger(__name__)


class AlertPipeline:
    """
    Processes one webhook call end to end:

        parse -> resolve mint -> value SOL leg -> threshold gate
              -> metadata -> compose -> dispatch

    Holds no per-request state, so one instance serves concurrent calls.
    Every anticipated failure comes back as a FAILED PipelineResult; later
    stages are never reached.
    """

    def __init__(
        self,
        parser: EventParser,
        resolver: MintResolver,
        valuation: ValuationService,
        gate: ThresholdGate,
        metadata: MetadataProvider,
        composer: MessageComposer,
        notifier: AlertNotifier
    ):
        self.parser = parser
        self.resolver = resolver
        self.valuation = valuation
        self.gate = gate
        self.metadata = metadata
        self.composer = composer
        self.notifier = notifier

    async def process(self, body: Any) -> PipelineResult:
        signature = None
        traded_mint = None
        usd_value = None
        try:
            event = self.parser.parse(body)
            signature = event.signature

            traded_mint = self.resolver.resolve(event.token_transfers)
            usd_value = await self.valuation.value_event(event.token_transfers)

            if not self.gate.passes(usd_value):
                logger.info(f"💤 Low LP skipped: {event.source} {traded_mint} ${usd_value} < ${self.gate.min_usd} (sig {signature[:12]}...)")
                return PipelineResult(
                    status=PipelineStatus.BELOW_THRESHOLD,
                    signature=signature,
                    traded_mint=traded_mint,
                    usd_value=usd_value
                )

            try:
                metadata = await self.metadata.get_metadata(traded_mint)
            except LpWatchError:
                raise
            except Exception as e:
                raise MetadataServiceError(f"Metadata lookup crashed: {e}") from e

            alert = self.composer.build_alert(event, traded_mint, usd_value, metadata)
            payload = self.composer.compose(alert)

            try:
                await self.notifier.send(payload)
            except LpWatchError:
                raise
            except Exception as e:
                raise DispatchError(f"Notifier crashed: {e}") from e

        except LpWatchError as e:
            logger.error(f"❌ {type(e).__name__} (sig {signature or 'n/a'}): {e}")
            return PipelineResult(
                status=PipelineStatus.FAILED,
                signature=signature,
                traded_mint=traded_mint,
                usd_value=usd_value,
                error=e
            )

        logger.info(f"🚨 LP alert sent: {metadata.symbol} ({traded_mint}) ${usd_value} via {event.source}")
        return PipelineResult(
            status=PipelineStatus.DISPATCHED,
            signature=signature,
            traded_mint=traded_mint,
            usd_value=usd_value
        )
