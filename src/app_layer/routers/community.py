"""
Community project endpoints.
"""

from fastapi import APIRouter, Depends

from src.app_layer.dependencies import get_engine
from src.app_layer.schemas import DonateRequest, IntentResponse
from src.simulation_layer.engine import GameEngine

router = APIRouter()


@router.post("/donate", response_model=IntentResponse)
async def donate(request: DonateRequest, engine: GameEngine = Depends(get_engine)):
    """Donate to the National Park fund."""
    result = engine.donate(request.amount)
    return IntentResponse.from_result(result, engine)
