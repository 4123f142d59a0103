"""
Data Layer - static game catalog.

Provides:
- Catalog: service tier and upgrade cost lookups
- ServiceDefinition: one tier of a service
- Seed data for peers and guest groups
"""

from src.data_layer.catalog import (
    CATEGORIES,
    GUEST_GROUP_NAMES,
    INITIAL_PEERS,
    SERVICE_TIERS,
    UPGRADE_COSTS,
    WALK_IN_GUEST,
    Catalog,
    PeerSeed,
    ServiceDefinition,
    get_catalog,
)

__all__ = [
    "CATEGORIES",
    "GUEST_GROUP_NAMES",
    "INITIAL_PEERS",
    "SERVICE_TIERS",
    "UPGRADE_COSTS",
    "WALK_IN_GUEST",
    "Catalog",
    "PeerSeed",
    "ServiceDefinition",
    "get_catalog",
]
