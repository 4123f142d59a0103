"""
Community simulator: the shared park project and a cohort of simulated
classmates that drift forward on their own, independent of the player.
"""

import logging
import random
from typing import Iterable

from src.data_layer.catalog import PeerSeed
from src.simulation_layer.errors import InvalidAmount
from src.simulation_layer.models import CommunityStats, Peer

logger = logging.getLogger(__name__)


def build_community(
    goal: int, current: int, global_eco_status: int, peers: Iterable[PeerSeed]
) -> CommunityStats:
    return CommunityStats(
        project_goal=goal,
        project_current=current,
        global_eco_status=global_eco_status,
        peers=[
            Peer(
                id=p.id,
                name=p.name,
                avatar=p.avatar,
                score=p.score,
                eco_score=p.eco_score,
                contribution=p.contribution,
            )
            for p in peers
        ],
    )


class CommunitySimulator:
    """Owns CommunityStats. Never reads the player's stats."""

    def __init__(
        self,
        stats: CommunityStats,
        rng: random.Random,
        drift_probability: float = 0.05,
        contribution_probability: float = 0.2,
        project_drift_max: int = 50,
        score_drift_max: int = 20,
        contribution_step: int = 10,
    ):
        self.stats = stats
        self.rng = rng
        self.drift_probability = drift_probability
        self.contribution_probability = contribution_probability
        self.project_drift_max = project_drift_max
        self.score_drift_max = score_drift_max
        self.contribution_step = contribution_step

    def tick(self) -> bool:
        """Maybe drift the project and every peer. Returns True if it drifted."""
        if self.rng.random() >= self.drift_probability:
            return False

        self.stats.project_current += self.rng.randrange(self.project_drift_max)
        for peer in self.stats.peers:
            peer.score += self.rng.randrange(self.score_drift_max)
            if self.rng.random() < self.contribution_probability:
                peer.contribution += self.contribution_step

        logger.debug("Community drift: project at %d", self.stats.project_current)
        return True

    def record_donation(self, amount: int) -> None:
        if amount <= 0:
            raise InvalidAmount(amount)
        self.stats.project_current += amount
