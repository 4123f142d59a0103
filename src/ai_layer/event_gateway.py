"""
Event/advisory gateway.

Intent handlers and the tick post requests into an outbox; the gateway
turns them into asyncio tasks that call the oracle. Game state that led to
a request is already committed, so a slow or failed oracle call only
affects the advisory text (and, for shocks, a small eco-score penalty
applied when the response lands). Responses are applied in completion
order: the last one to arrive wins.
"""

import asyncio
import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Set

from src.ai_layer.advisor import AdvisoryOracle
from src.simulation_layer.clock import Clock
from src.simulation_layer.errors import OracleError
from src.simulation_layer.ledger import EconomyLedger
from src.simulation_layer.models import EconomicEvent

logger = logging.getLogger(__name__)

INITIAL_ADVICE = (
    "¡Pura Vida! Don Carlos here. Don't forget, our Pueblo is building a National Park. "
    "Every colon you donate helps our environment!"
)


@dataclass
class AdvisoryRequest:
    """A queued oracle call."""

    kind: str  # 'shock', 'advice'
    stats: dict
    requested_at: int
    action: Optional[str] = None


class AdvisoryGateway:
    """Owns the advisory text and the current event."""

    def __init__(
        self,
        oracle: AdvisoryOracle,
        ledger: EconomyLedger,
        clock: Clock,
        event_interval_ms: int = 45000,
        eco_penalty: int = 5,
        initial_text: str = INITIAL_ADVICE,
    ):
        self.oracle = oracle
        self.ledger = ledger
        self.clock = clock
        self.event_interval_ms = event_interval_ms
        self.eco_penalty = eco_penalty

        self.advisory_text = initial_text
        self.current_event: Optional[EconomicEvent] = None
        self.last_event_time = clock.now_ms()
        self.failures = 0

        self._outbox: Deque[AdvisoryRequest] = deque()
        self._in_flight: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._outbox)

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    # ========== Posting ==========

    def say(self, text: str) -> None:
        """Replace the advisory text with a local message."""
        self.advisory_text = text

    def check_periodic(self) -> bool:
        """Queue a shock if the interval has elapsed since the last trigger."""
        now = self.clock.now_ms()
        if now - self.last_event_time < self.event_interval_ms:
            return False

        # Measured from trigger time, so overlapping calls are possible
        self.last_event_time = now
        self._post(AdvisoryRequest("shock", self.ledger.stats.snapshot(), now))
        return True

    def post_action(self, description: str) -> None:
        """Queue advice for an action that has already been committed."""
        self._post(
            AdvisoryRequest(
                "advice", self.ledger.stats.snapshot(), self.clock.now_ms(), action=description
            )
        )

    def _post(self, request: AdvisoryRequest) -> None:
        self._outbox.append(request)
        self.dispatch()

    # ========== Dispatch ==========

    def dispatch(self) -> List[asyncio.Task]:
        """Start tasks for queued requests. No-op outside a running event loop."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return []

        tasks = []
        while self._outbox:
            request = self._outbox.popleft()
            task = loop.create_task(self._handle(request))
            self._in_flight.add(task)
            task.add_done_callback(self._in_flight.discard)
            tasks.append(task)
        return tasks

    async def flush(self) -> None:
        """Dispatch everything queued and wait for all in-flight calls."""
        self.dispatch()
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight))

    async def _handle(self, request: AdvisoryRequest) -> None:
        try:
            if request.kind == "shock":
                event = await self.oracle.generate_shock(request.stats)
                self._apply_event(event)
            else:
                self.advisory_text = await self.oracle.get_advice(request.action, request.stats)
        except OracleError as e:
            # Keep the last advisory text and event in place
            self.failures += 1
            logger.warning("Advisory %s request failed: %s", request.kind, e)

    def _apply_event(self, event: EconomicEvent) -> None:
        self.current_event = event
        self.advisory_text = event.description
        logger.info("Event: %s (%s, %s)", event.title, event.concept, event.scope)

        if event.is_negative:
            eco = self.ledger.apply_eco_penalty(self.eco_penalty)
            logger.info("Negative event: eco-score now %d", eco)
