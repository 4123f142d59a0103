"""
FastAPI dependency injection providers.
"""

from dataclasses import asdict
from functools import lru_cache

from fastapi import Request

from config import Settings, get_settings
from src.app_layer.schemas import (
    BookingResponse,
    CommunityResponse,
    EventResponse,
    GameStateResponse,
    HistoryResponse,
    PeerResponse,
    PlayerStatsResponse,
    SlotResponse,
)
from src.simulation_layer.engine import GameEngine


@lru_cache
def get_cached_settings() -> Settings:
    return get_settings()


def get_engine(request: Request) -> GameEngine:
    return request.app.state.engine


def build_state(engine: GameEngine) -> GameStateResponse:
    """Snapshot everything the presentation layer may read."""
    now = engine.clock.now_ms()
    catalog = engine.catalog

    slots = []
    for slot in engine.slots:
        name = catalog.get(slot.service_id, slot.tier).name if not slot.is_empty else None
        slots.append(
            SlotResponse(
                id=slot.id,
                service_id=slot.service_id,
                service_name=name,
                guest_name=slot.guest_name,
                tier=slot.tier,
                start_time=slot.start_time,
                end_time=slot.end_time,
                ready=slot.is_ready(now),
                progress=slot.progress(now),
                remaining_ms=slot.remaining_ms(now),
            )
        )

    bookings = [
        BookingResponse(
            **asdict(b),
            service_name=catalog.get(b.service_id, engine.stats.tier_of(b.service_id)).name,
        )
        for b in engine.pending_bookings
    ]

    community = engine.community.stats
    event = engine.current_event

    return GameStateResponse(
        now_ms=now,
        stats=PlayerStatsResponse(**asdict(engine.stats)),
        slots=slots,
        bookings=bookings,
        community=CommunityResponse(
            project_goal=community.project_goal,
            project_current=community.project_current,
            progress_percent=round(community.progress_percent, 1),
            global_eco_status=community.global_eco_status,
            leaderboard=[PeerResponse(**asdict(p)) for p in community.leaderboard()],
            donation_presets=engine.settings.economy.donation_presets,
        ),
        history=[HistoryResponse(**asdict(h)) for h in engine.history],
        advisory_text=engine.advisory_text,
        current_event=EventResponse(**asdict(event)) if event else None,
    )
