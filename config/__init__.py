from config.settings import (
    CommunitySettings,
    EconomySettings,
    LLMSettings,
    PathSettings,
    Settings,
    SimulationSettings,
    get_settings,
    reset_settings,
)
from config.logging_config import setup_logging

__all__ = [
    "CommunitySettings",
    "EconomySettings",
    "LLMSettings",
    "PathSettings",
    "Settings",
    "SimulationSettings",
    "get_settings",
    "reset_settings",
    "setup_logging",
]
