"""
Booking generator: batches of guest requests that can be matched to free slots.
A new batch replaces the previous one; requests never expire on their own.
"""

import logging
import random
from typing import Dict, List, Optional, Sequence

from src.data_layer.catalog import GUEST_GROUP_NAMES, Catalog
from src.simulation_layer.errors import NoCapacity, UnknownBooking
from src.simulation_layer.models import BookingRequest, ServiceSlot
from src.simulation_layer.slot_scheduler import SlotScheduler

logger = logging.getLogger(__name__)


class BookingGenerator:
    """Generates and tracks the pending booking requests."""

    def __init__(
        self,
        catalog: Catalog,
        rng: random.Random,
        batch_size: int = 4,
        markup_max: float = 0.5,
        quantity_max: int = 2,
        group_names: Sequence[str] = GUEST_GROUP_NAMES,
    ):
        self.catalog = catalog
        self.rng = rng
        self.batch_size = batch_size
        self.markup_max = markup_max
        self.quantity_max = quantity_max
        self.group_names = list(group_names)
        self.pending: List[BookingRequest] = []
        self._batch = 0

    def generate(self, player_upgrades: Dict[str, int]) -> List[BookingRequest]:
        """Replace the pending set with a fresh batch."""
        self._batch += 1
        service_ids = self.catalog.service_ids
        requests = []

        for i in range(self.batch_size):
            service_id = self.rng.choice(service_ids)
            tier = player_upgrades.get(service_id, 1)
            service = self.catalog.get(service_id, tier)

            requests.append(
                BookingRequest(
                    id=f"b-{self._batch}-{i}",
                    group_name=self.group_names[i % len(self.group_names)],
                    service_id=service_id,
                    quantity=self.rng.randint(1, self.quantity_max),
                    total_pay=round(service.base_price * (1 + self.rng.random() * self.markup_max), 2),
                    urgency="high" if self.rng.random() > 0.5 else "low",
                )
            )

        self.pending = requests
        logger.debug("Generated booking batch %d: %d requests", self._batch, len(requests))
        return list(requests)

    def find(self, booking_id: str) -> BookingRequest:
        for request in self.pending:
            if request.id == booking_id:
                return request
        raise UnknownBooking(booking_id)

    def accept(self, request: BookingRequest, scheduler: SlotScheduler) -> ServiceSlot:
        """
        Seat a request in the first empty slot.

        Raises NoCapacity if every slot is occupied; scheduler errors such
        as InsufficientResource propagate. The request stays pending on
        any failure and is removed only after a successful assignment.
        """
        slot: Optional[ServiceSlot] = scheduler.first_empty()
        if slot is None:
            raise NoCapacity()

        scheduler.assign(slot.id, request.service_id, request.group_name)
        self.pending = [r for r in self.pending if r.id != request.id]
        return slot
