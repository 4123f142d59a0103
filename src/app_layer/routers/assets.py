"""
Inventory and upgrade endpoints.
"""

from fastapi import APIRouter, Depends

from src.app_layer.dependencies import get_engine
from src.app_layer.schemas import IntentResponse
from src.simulation_layer.engine import GameEngine

router = APIRouter()


@router.post("/inventory/{resource}/purchase", response_model=IntentResponse)
async def purchase_inventory(resource: str, engine: GameEngine = Depends(get_engine)):
    result = engine.purchase_inventory(resource)
    return IntentResponse.from_result(result, engine)


@router.post("/services/{service_id}/upgrade", response_model=IntentResponse)
async def upgrade_service(service_id: str, engine: GameEngine = Depends(get_engine)):
    result = engine.upgrade_service(service_id)
    return IntentResponse.from_result(result, engine)
