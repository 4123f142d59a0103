"""
Pydantic models for API request/response.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from src.simulation_layer.engine import GameEngine, IntentResult


class AssignRequest(BaseModel):
    service_id: str
    guest_name: Optional[str] = None


class DonateRequest(BaseModel):
    amount: int = Field(gt=0)


class IntentResponse(BaseModel):
    ok: bool
    code: str
    message: str
    payload: Dict[str, Any] = {}
    advisory_text: str

    @classmethod
    def from_result(cls, result: IntentResult, engine: GameEngine) -> "IntentResponse":
        return cls(
            ok=result.ok,
            code=result.code,
            message=result.message,
            payload=result.payload,
            advisory_text=engine.advisory_text,
        )


class PlayerStatsResponse(BaseModel):
    money: int
    eco_score: int
    reputation: int
    inventory: Dict[str, int]
    upgrades: Dict[str, int]
    total_donated: int


class SlotResponse(BaseModel):
    id: int
    service_id: Optional[str]
    service_name: Optional[str]
    guest_name: Optional[str]
    tier: Optional[int]
    start_time: Optional[int]
    end_time: Optional[int]
    ready: bool
    progress: float
    remaining_ms: int


class BookingResponse(BaseModel):
    id: str
    group_name: str
    service_id: str
    service_name: str
    quantity: int
    total_pay: float
    urgency: str


class PeerResponse(BaseModel):
    id: str
    name: str
    avatar: str
    score: int
    eco_score: int
    contribution: int


class CommunityResponse(BaseModel):
    project_goal: int
    project_current: int
    progress_percent: float
    global_eco_status: int
    leaderboard: List[PeerResponse]
    donation_presets: List[int]


class EventResponse(BaseModel):
    title: str
    description: str
    impact: str
    concept: str
    scope: str


class HistoryResponse(BaseModel):
    time: str
    revenue: int
    eco_score: int


class GameStateResponse(BaseModel):
    now_ms: int
    stats: PlayerStatsResponse
    slots: List[SlotResponse]
    bookings: List[BookingResponse]
    community: CommunityResponse
    history: List[HistoryResponse]
    advisory_text: str
    current_event: Optional[EventResponse]
