"""
Economy ledger: the only writer of PlayerStats.
Every operation validates first and commits in one step, so a rejected
call leaves the stats untouched.
"""

import logging
from collections import deque
from typing import Deque, List, Optional

from src.data_layer.catalog import Catalog, ServiceDefinition
from src.simulation_layer.errors import (
    InsufficientFunds,
    InsufficientResource,
    InvalidAmount,
    MaxTierReached,
    UnknownResource,
    UnknownService,
)
from src.simulation_layer.models import HistorySample, PlayerStats

logger = logging.getLogger(__name__)

ECO_MIN, ECO_MAX = 0, 100


def clamp(value: int, low: Optional[int], high: Optional[int]) -> int:
    if low is not None:
        value = max(low, value)
    if high is not None:
        value = min(high, value)
    return value


class EconomyLedger:
    """Owns money, eco-score, reputation, inventory, upgrades and history."""

    def __init__(
        self,
        stats: PlayerStats,
        catalog: Catalog,
        history_limit: int = 20,
        reputation_per_service: int = 2,
        reputation_cap: Optional[int] = None,
    ):
        self.stats = stats
        self.catalog = catalog
        self.reputation_per_service = reputation_per_service
        self.reputation_cap = reputation_cap
        self._history: Deque[HistorySample] = deque(maxlen=history_limit)

    @property
    def history(self) -> List[HistorySample]:
        return list(self._history)

    def service_for(self, service_id: str, tier: Optional[int] = None) -> ServiceDefinition:
        """Resolve a service at the given tier, or the player's current tier."""
        if not self.catalog.has_service(service_id):
            raise UnknownService(service_id)
        if tier is None:
            tier = self.stats.tier_of(service_id)
        return self.catalog.get(service_id, tier)

    # ========== Resources ==========

    def check_service_cost(self, service: ServiceDefinition) -> None:
        """Raise InsufficientResource for the first short resource."""
        for resource, qty in service.requirements.items():
            available = self.stats.inventory.get(resource, 0)
            if available < qty:
                raise InsufficientResource(resource, qty, available)

    def apply_service_cost(self, service_id: str, tier: Optional[int] = None) -> ServiceDefinition:
        """Deduct every requirement of a service, or nothing at all."""
        service = self.service_for(service_id, tier)
        self.check_service_cost(service)

        inventory = dict(self.stats.inventory)
        for resource, qty in service.requirements.items():
            inventory[resource] = inventory.get(resource, 0) - qty
        self.stats.inventory = inventory
        return service

    def purchase_inventory(self, resource: str, unit_cost: int = 50, quantity: int = 5) -> None:
        """Buy a fixed batch of a resource regardless of current stock."""
        if resource not in self.catalog.resources():
            raise UnknownResource(resource)
        if self.stats.money < unit_cost:
            raise InsufficientFunds(unit_cost, self.stats.money)

        self.stats.money -= unit_cost
        self.stats.inventory[resource] = self.stats.inventory.get(resource, 0) + quantity
        logger.info("Bought %d %s for $%d", quantity, resource, unit_cost)

    # ========== Revenue / impact ==========

    def apply_service_completion(self, service: ServiceDefinition, time_label: str) -> HistorySample:
        """Pay out a finished service and record a history sample.

        The sample records the eco-score from before this service's impact.
        """
        eco_before = self.stats.eco_score
        self.stats.money += service.base_price
        self.stats.eco_score = clamp(self.stats.eco_score + service.eco_impact, ECO_MIN, ECO_MAX)
        self.stats.reputation = clamp(
            self.stats.reputation + self.reputation_per_service, 0, self.reputation_cap
        )

        sample = HistorySample(
            time=time_label,
            revenue=service.base_price,
            eco_score=eco_before,
        )
        self._history.append(sample)
        return sample

    def apply_eco_penalty(self, amount: int) -> int:
        self.stats.eco_score = clamp(self.stats.eco_score - amount, ECO_MIN, ECO_MAX)
        return self.stats.eco_score

    # ========== Spending ==========

    def check_donation(self, amount: int) -> None:
        if amount <= 0:
            raise InvalidAmount(amount)
        if self.stats.money < amount:
            raise InsufficientFunds(amount, self.stats.money)

    def donate(self, amount: int) -> None:
        """Ledger half of a donation. Use GameEngine.donate for the full transfer."""
        self.check_donation(amount)
        self.stats.money -= amount
        self.stats.total_donated += amount

    def upgrade_service(self, service_id: str) -> int:
        """Raise a service by one tier. Returns the new tier."""
        if not self.catalog.has_service(service_id):
            raise UnknownService(service_id)

        current = self.stats.tier_of(service_id)
        if current >= self.catalog.max_tier(service_id):
            raise MaxTierReached(service_id, current)

        cost = self.catalog.upgrade_cost(service_id)
        if self.stats.money < cost:
            raise InsufficientFunds(cost, self.stats.money)

        self.stats.money -= cost
        self.stats.upgrades[service_id] = current + 1
        logger.info("Upgraded %s to tier %d for $%d", service_id, current + 1, cost)
        return current + 1
