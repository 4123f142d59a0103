"""
Slot scheduler: a fixed set of service bays, each Empty or Occupied.
"Ready to collect" is derived from the clock, never stored, and a ready
slot stays occupied until the player collects it.
"""

import logging
from typing import Dict, List, Optional

from src.data_layer.catalog import WALK_IN_GUEST, ServiceDefinition
from src.simulation_layer.clock import Clock
from src.simulation_layer.errors import NotReady, SlotEmpty, SlotOccupied, UnknownSlot
from src.simulation_layer.ledger import EconomyLedger
from src.simulation_layer.models import HistorySample, ServiceSlot

logger = logging.getLogger(__name__)


class SlotScheduler:
    """Assigns services to bays and collects them once their time is up."""

    def __init__(self, ledger: EconomyLedger, clock: Clock, slot_count: int = 6):
        self.ledger = ledger
        self.clock = clock
        self.slots: List[ServiceSlot] = [ServiceSlot(id=i) for i in range(slot_count)]

    def get(self, slot_id: int) -> ServiceSlot:
        if not 0 <= slot_id < len(self.slots):
            raise UnknownSlot(slot_id)
        return self.slots[slot_id]

    def first_empty(self) -> Optional[ServiceSlot]:
        for slot in self.slots:
            if slot.is_empty:
                return slot
        return None

    def assign(
        self, slot_id: int, service_id: str, guest_name: Optional[str] = None
    ) -> ServiceDefinition:
        """Start a service in an empty bay at the player's current tier."""
        slot = self.get(slot_id)
        if not slot.is_empty:
            raise SlotOccupied(slot_id)

        service = self.ledger.apply_service_cost(service_id)
        now = self.clock.now_ms()

        slot.service_id = service.id
        slot.guest_name = guest_name or WALK_IN_GUEST
        slot.start_time = now
        slot.end_time = now + service.duration_ms
        slot.tier = service.tier

        logger.info(
            "Slot %d: %s (tier %d) for %s until %d",
            slot_id, service.name, service.tier, slot.guest_name, slot.end_time,
        )
        return service

    def complete(self, slot_id: int) -> HistorySample:
        """Collect a finished service, paying out at the snapshotted tier."""
        slot = self.get(slot_id)
        if slot.is_empty:
            raise SlotEmpty(slot_id)

        now = self.clock.now_ms()
        if not slot.is_ready(now):
            raise NotReady(slot_id, slot.remaining_ms(now))

        service = self.ledger.service_for(slot.service_id, slot.tier)
        sample = self.ledger.apply_service_completion(service, self.clock.label())
        self._reset(slot)

        logger.info("Slot %d: collected %s, +$%d", slot_id, service.name, service.base_price)
        return sample

    def ready_slots(self) -> List[int]:
        """Ids of occupied slots whose service time has elapsed."""
        now = self.clock.now_ms()
        return [s.id for s in self.slots if not s.is_empty and s.is_ready(now)]

    def get_stats(self) -> Dict[str, int]:
        """Summary counts for logging."""
        occupied = sum(1 for s in self.slots if not s.is_empty)
        return {
            "slots": len(self.slots),
            "occupied": occupied,
            "ready": len(self.ready_slots()),
        }

    @staticmethod
    def _reset(slot: ServiceSlot) -> None:
        slot.service_id = None
        slot.guest_name = None
        slot.start_time = None
        slot.end_time = None
        slot.tier = None
