"""
Session read endpoints.
"""

from fastapi import APIRouter, Depends

from src.app_layer.dependencies import build_state, get_engine
from src.app_layer.schemas import GameStateResponse
from src.simulation_layer.engine import GameEngine

router = APIRouter()


@router.get("/state", response_model=GameStateResponse)
async def get_state(engine: GameEngine = Depends(get_engine)):
    """Everything the presentation layer renders."""
    return build_state(engine)


@router.get("/history")
async def get_history(engine: GameEngine = Depends(get_engine)):
    """Revenue trend samples, oldest first."""
    return engine.history_frame().to_dict(orient="records")
