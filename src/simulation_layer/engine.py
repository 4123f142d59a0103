"""
Game engine: one game session.
Owns the ledger, slot scheduler, booking generator, community simulator and
advisory gateway, and is the only place player intents and clock ticks enter.

All mutation happens on a single logical thread (the asyncio loop or the
caller); oracle calls are fire-and-forget and never roll back an intent.
"""

import asyncio
import logging
import random
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

import pandas as pd

from config import Settings, get_settings
from src.ai_layer.advisor import AdvisoryOracle
from src.ai_layer.event_gateway import AdvisoryGateway
from src.data_layer.catalog import INITIAL_PEERS, Catalog, get_catalog
from src.simulation_layer.booking_generator import BookingGenerator
from src.simulation_layer.clock import Clock, SystemClock
from src.simulation_layer.community import CommunitySimulator, build_community
from src.simulation_layer.errors import GameError
from src.simulation_layer.ledger import EconomyLedger
from src.simulation_layer.models import BookingRequest, PlayerStats
from src.simulation_layer.slot_scheduler import SlotScheduler

logger = logging.getLogger(__name__)


@dataclass
class IntentResult:
    """Outcome of a player intent as seen by the presentation layer."""

    ok: bool
    code: str = "ok"
    message: str = ""
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass
class TickReport:
    """What happened during one clock tick."""

    now_ms: int
    ready_slots: List[int]
    community_drifted: bool
    event_triggered: bool


class GameEngine:
    """
    Main game session.
    Intents are synchronous and return an IntentResult; tick() advances the
    background processes; run() drives tick() from an asyncio loop.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
        oracle: Optional[AdvisoryOracle] = None,
        catalog: Optional[Catalog] = None,
    ):
        self.settings = settings or get_settings()
        sim = self.settings.simulation
        econ = self.settings.economy
        community = self.settings.community

        self.clock = clock or SystemClock()
        self.rng = rng or random.Random(sim.seed)
        self.catalog = catalog or get_catalog()

        stats = PlayerStats(
            money=econ.starting_money,
            eco_score=econ.starting_eco_score,
            reputation=econ.starting_reputation,
            inventory=dict(econ.starting_inventory),
            upgrades={service_id: 1 for service_id in self.catalog.service_ids},
        )
        self.ledger = EconomyLedger(
            stats,
            self.catalog,
            history_limit=sim.history_limit,
            reputation_per_service=econ.reputation_per_service,
            reputation_cap=econ.reputation_cap,
        )
        self.scheduler = SlotScheduler(self.ledger, self.clock, slot_count=sim.slot_count)
        self.bookings = BookingGenerator(
            self.catalog,
            self.rng,
            batch_size=sim.booking_batch_size,
            markup_max=sim.booking_markup_max,
            quantity_max=sim.booking_quantity_max,
        )
        self.community = CommunitySimulator(
            build_community(
                community.project_goal,
                community.project_start,
                community.global_eco_status,
                INITIAL_PEERS,
            ),
            self.rng,
            drift_probability=sim.community_drift_probability,
            contribution_probability=sim.peer_contribution_probability,
            project_drift_max=sim.project_drift_max,
            score_drift_max=sim.peer_score_drift_max,
            contribution_step=sim.peer_contribution_step,
        )
        self.gateway = AdvisoryGateway(
            oracle or AdvisoryOracle(),
            self.ledger,
            self.clock,
            event_interval_ms=int(sim.event_interval_seconds * 1000),
            eco_penalty=econ.shock_eco_penalty,
        )

        self._running = False
        self.bookings.generate(self.stats.upgrades)

    # ========== Read access ==========

    @property
    def stats(self) -> PlayerStats:
        return self.ledger.stats

    @property
    def slots(self):
        return self.scheduler.slots

    @property
    def pending_bookings(self) -> List[BookingRequest]:
        return list(self.bookings.pending)

    @property
    def history(self):
        return self.ledger.history

    @property
    def advisory_text(self) -> str:
        return self.gateway.advisory_text

    @property
    def current_event(self):
        return self.gateway.current_event

    def history_frame(self) -> pd.DataFrame:
        """History samples as a DataFrame (time, revenue, eco_score)."""
        return pd.DataFrame(
            [asdict(sample) for sample in self.history],
            columns=["time", "revenue", "eco_score"],
        )

    # ========== Intents ==========

    def _reject(self, intent: str, error: GameError) -> IntentResult:
        self.gateway.say(error.advisory)
        logger.info("%s rejected: %s (%s)", intent, error.code, error)
        return IntentResult(ok=False, code=error.code, message=error.advisory)

    def assign(self, slot_id: int, service_id: str, guest_name: Optional[str] = None) -> IntentResult:
        try:
            service = self.scheduler.assign(slot_id, service_id, guest_name)
        except GameError as e:
            return self._reject("assign", e)

        slot = self.scheduler.get(slot_id)
        self.gateway.post_action(
            f"Started {service.name} (Tier {service.tier}) for {slot.guest_name}"
        )
        return IntentResult(
            ok=True,
            message=f"{service.name} started",
            payload={"slot_id": slot_id, "end_time": slot.end_time, "tier": service.tier},
        )

    def complete(self, slot_id: int) -> IntentResult:
        try:
            sample = self.scheduler.complete(slot_id)
        except GameError as e:
            return self._reject("complete", e)

        return IntentResult(
            ok=True,
            message=f"Earned ${sample.revenue}",
            payload={
                "slot_id": slot_id,
                "revenue": sample.revenue,
                "eco_score": self.stats.eco_score,
            },
        )

    def accept_booking(self, booking_id: str) -> IntentResult:
        try:
            request = self.bookings.find(booking_id)
            slot = self.bookings.accept(request, self.scheduler)
        except GameError as e:
            return self._reject("accept_booking", e)

        service = self.catalog.get(slot.service_id, slot.tier)
        self.gateway.post_action(
            f"Started {service.name} (Tier {service.tier}) for {slot.guest_name}"
        )
        return IntentResult(
            ok=True,
            message=f"{request.group_name} seated in slot {slot.id}",
            payload={"slot_id": slot.id, "booking_id": booking_id},
        )

    def refresh_bookings(self) -> IntentResult:
        requests = self.bookings.generate(self.stats.upgrades)
        return IntentResult(ok=True, payload={"count": len(requests)})

    def donate(self, amount: int) -> IntentResult:
        """Move money from the player to the park fund as one operation."""
        try:
            self.ledger.check_donation(amount)
        except GameError as e:
            return self._reject("donate", e)

        # Both halves are validated above and cannot fail past this point
        self.ledger.donate(amount)
        self.community.record_donation(amount)

        message = (
            f"¡Excelente! Donating {amount} to the National Park fund. "
            "You're a true Pura Vida leader!"
        )
        self.gateway.say(message)
        logger.info("Donated $%d, project at %d", amount, self.community.stats.project_current)
        return IntentResult(
            ok=True,
            message=message,
            payload={"project_current": self.community.stats.project_current},
        )

    def purchase_inventory(self, resource: str) -> IntentResult:
        econ = self.settings.economy
        try:
            self.ledger.purchase_inventory(
                resource, unit_cost=econ.inventory_unit_cost, quantity=econ.inventory_batch
            )
        except GameError as e:
            return self._reject("purchase_inventory", e)

        return IntentResult(
            ok=True,
            message=f"Restocked {resource}",
            payload={"resource": resource, "count": self.stats.inventory[resource]},
        )

    def upgrade_service(self, service_id: str) -> IntentResult:
        try:
            tier = self.ledger.upgrade_service(service_id)
        except GameError as e:
            return self._reject("upgrade_service", e)

        service = self.catalog.get(service_id, tier)
        return IntentResult(
            ok=True,
            message=f"Upgraded to {service.name}",
            payload={"service_id": service_id, "tier": tier},
        )

    # ========== Clock ==========

    def tick(self) -> TickReport:
        """One driver step: readiness scan, community drift, event check."""
        ready = self.scheduler.ready_slots()
        drifted = self.community.tick()
        triggered = self.gateway.check_periodic()
        return TickReport(
            now_ms=self.clock.now_ms(),
            ready_slots=ready,
            community_drifted=drifted,
            event_triggered=triggered,
        )

    async def run(self, ticks: Optional[int] = None) -> int:
        """Tick every tick_seconds until stop() or `ticks` ticks have run."""
        interval = self.settings.simulation.tick_seconds
        self._running = True
        count = 0
        try:
            while self._running and (ticks is None or count < ticks):
                self.tick()
                self.gateway.dispatch()
                count += 1
                await asyncio.sleep(interval)
        finally:
            self._running = False
        return count

    def stop(self) -> None:
        self._running = False

    @property
    def running(self) -> bool:
        return self._running
