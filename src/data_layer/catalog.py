"""
Static game data: service tiers, upgrade costs, seed peers and guest names.
Pure lookup tables; immutable for the process lifetime.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

CATEGORIES = ("accommodation", "tour", "transport")


@dataclass(frozen=True)
class ServiceDefinition:
    """One tier of a sellable service."""

    id: str
    name: str
    base_price: int
    duration_seconds: int
    category: str  # 'accommodation', 'tour', 'transport'
    eco_impact: int  # signed delta applied to eco-score on completion
    requirements: Mapping[str, int] = field(default_factory=dict)
    tier: int = 1

    @property
    def duration_ms(self) -> int:
        return self.duration_seconds * 1000


@dataclass(frozen=True)
class PeerSeed:
    """Starting record for a simulated classmate."""

    id: str
    name: str
    avatar: str
    score: int
    eco_score: int
    contribution: int


def _service(service_id, tier, name, price, duration, category, eco, requirements):
    return ServiceDefinition(
        id=service_id,
        name=name,
        base_price=price,
        duration_seconds=duration,
        category=category,
        eco_impact=eco,
        requirements=MappingProxyType(dict(requirements)),
        tier=tier,
    )


SERVICE_TIERS: Dict[str, Dict[int, ServiceDefinition]] = {
    "lodge": {
        1: _service("lodge", 1, "Eco-Lodge Stay", 200, 60, "accommodation", -2, {"permit": 1}),
        2: _service("lodge", 2, "Luxury Jungle Suite", 480, 60, "accommodation", -5, {"permit": 1}),
    },
    "zipline": {
        1: _service("zipline", 1, "Canopy Zipline", 85, 30, "tour", -1, {"gear": 1}),
        2: _service("zipline", 2, "Mega-Circuit Zipline", 195, 30, "tour", -3, {"gear": 1}),
    },
    "coffee": {
        1: _service("coffee", 1, "Coffee Farm Tour", 45, 20, "tour", 2, {"beans": 1}),
        2: _service("coffee", 2, "Organic Roastery Exp", 125, 20, "tour", 5, {"beans": 1}),
    },
    "shuttle": {
        1: _service("shuttle", 1, "Airport Shuttle", 120, 45, "transport", -3, {"fuel": 1}),
        2: _service("shuttle", 2, "VIP Electric Van", 280, 45, "transport", 2, {"fuel": 1}),
    },
}

UPGRADE_COSTS: Dict[str, int] = {
    "lodge": 1200,
    "zipline": 750,
    "coffee": 600,
    "shuttle": 900,
}

INITIAL_PEERS: Tuple[PeerSeed, ...] = (
    PeerSeed("p1", "Student Mateo", "🎒", 2400, 92, 500),
    PeerSeed("p2", "Manager Sofia", "🌿", 1800, 88, 200),
    PeerSeed("p3", "Capitán Diego", "🛶", 3200, 45, 50),
    PeerSeed("p4", "Elena Eco", "🦋", 1500, 98, 800),
)

GUEST_GROUP_NAMES: Tuple[str, ...] = (
    "The Miller Family",
    "Backpacker Ben",
    "Gourmet Travelers",
    "Adventure Squad",
)

WALK_IN_GUEST = "Walk-in Guest"


class Catalog:
    """Read-only view over the service tier tables."""

    def __init__(
        self,
        tiers: Optional[Dict[str, Dict[int, ServiceDefinition]]] = None,
        upgrade_costs: Optional[Dict[str, int]] = None,
    ):
        self._tiers = tiers if tiers is not None else SERVICE_TIERS
        self._upgrade_costs = upgrade_costs if upgrade_costs is not None else UPGRADE_COSTS

    @property
    def service_ids(self) -> List[str]:
        return list(self._tiers.keys())

    def has_service(self, service_id: str) -> bool:
        return service_id in self._tiers

    def get(self, service_id: str, tier: int = 1) -> ServiceDefinition:
        """Look up a service tier. Raises KeyError for unknown ids or tiers."""
        return self._tiers[service_id][tier]

    def max_tier(self, service_id: str) -> int:
        return max(self._tiers[service_id].keys())

    def upgrade_cost(self, service_id: str) -> int:
        return self._upgrade_costs[service_id]

    def resources(self) -> List[str]:
        """All resource names referenced by any tier, in first-seen order."""
        seen: List[str] = []
        for tiers in self._tiers.values():
            for service in tiers.values():
                for resource in service.requirements:
                    if resource not in seen:
                        seen.append(resource)
        return seen


_catalog: Optional[Catalog] = None


def get_catalog() -> Catalog:
    global _catalog
    if _catalog is None:
        _catalog = Catalog()
    return _catalog
