"""
Service slot and guest booking endpoints.
"""

from fastapi import APIRouter, Depends

from src.app_layer.dependencies import get_engine
from src.app_layer.schemas import AssignRequest, IntentResponse
from src.simulation_layer.engine import GameEngine

router = APIRouter()


@router.post("/slots/{slot_id}/assign", response_model=IntentResponse)
async def assign_service(
    slot_id: int, request: AssignRequest, engine: GameEngine = Depends(get_engine)
):
    result = engine.assign(slot_id, request.service_id, request.guest_name)
    return IntentResponse.from_result(result, engine)


@router.post("/slots/{slot_id}/complete", response_model=IntentResponse)
async def complete_service(slot_id: int, engine: GameEngine = Depends(get_engine)):
    result = engine.complete(slot_id)
    return IntentResponse.from_result(result, engine)


@router.post("/bookings/{booking_id}/accept", response_model=IntentResponse)
async def accept_booking(booking_id: str, engine: GameEngine = Depends(get_engine)):
    result = engine.accept_booking(booking_id)
    return IntentResponse.from_result(result, engine)


@router.post("/bookings/refresh", response_model=IntentResponse)
async def refresh_bookings(engine: GameEngine = Depends(get_engine)):
    result = engine.refresh_bookings()
    return IntentResponse.from_result(result, engine)
