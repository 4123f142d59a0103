"""
Shared data models for the simulation layer.
"""

from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional


@dataclass
class PlayerStats:
    """The player's business. Mutated only through EconomyLedger."""

    money: int
    eco_score: int  # 0~100
    reputation: int  # >= 0
    inventory: Dict[str, int] = field(default_factory=dict)
    upgrades: Dict[str, int] = field(default_factory=dict)
    total_donated: int = 0

    def tier_of(self, service_id: str) -> int:
        return self.upgrades.get(service_id, 1)

    def snapshot(self) -> dict:
        """Plain-dict copy handed to the advisory oracle."""
        return asdict(self)


@dataclass
class ServiceSlot:
    """
    A service bay. The occupancy fields are all set or all None.
    """

    id: int
    service_id: Optional[str] = None
    guest_name: Optional[str] = None
    start_time: Optional[int] = None  # epoch ms
    end_time: Optional[int] = None  # epoch ms
    tier: Optional[int] = None  # tier snapshotted at assignment

    @property
    def is_empty(self) -> bool:
        return self.service_id is None

    def is_ready(self, now_ms: int) -> bool:
        return self.end_time is not None and now_ms >= self.end_time

    def remaining_ms(self, now_ms: int) -> int:
        if self.end_time is None:
            return 0
        return max(0, self.end_time - now_ms)

    def progress(self, now_ms: int) -> float:
        """Completion percentage 0~100."""
        if self.start_time is None or self.end_time is None:
            return 0.0
        span = self.end_time - self.start_time
        if span <= 0:
            return 100.0
        return min(100.0, max(0.0, (now_ms - self.start_time) / span * 100))

    def is_consistent(self) -> bool:
        fields = (self.service_id, self.guest_name, self.start_time, self.end_time, self.tier)
        return all(f is None for f in fields) or all(f is not None for f in fields)


@dataclass
class BookingRequest:
    """A guest group asking for one service."""

    id: str
    group_name: str
    service_id: str
    quantity: int  # informational
    total_pay: float
    urgency: str  # 'low', 'high'


@dataclass
class Peer:
    """A simulated classmate on the leaderboard."""

    id: str
    name: str
    avatar: str
    score: int
    eco_score: int
    contribution: int


@dataclass
class CommunityStats:
    """Shared village state: the cooperative project and the peer cohort."""

    project_goal: int
    project_current: int
    global_eco_status: int
    peers: List[Peer] = field(default_factory=list)

    @property
    def progress_percent(self) -> float:
        if self.project_goal <= 0:
            return 100.0
        return self.project_current / self.project_goal * 100

    def leaderboard(self) -> List[Peer]:
        return sorted(self.peers, key=lambda p: p.score, reverse=True)


@dataclass
class EconomicEvent:
    """An oracle-produced shock event."""

    title: str
    description: str
    impact: str
    concept: str
    scope: str  # 'local', 'community'

    @property
    def is_negative(self) -> bool:
        return "negative" in self.concept.lower()


@dataclass
class HistorySample:
    """One completed service, for the revenue trend."""

    time: str
    revenue: int
    eco_score: int
