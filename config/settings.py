"""
Centralized configuration using pydantic-settings.
Loads from .env file and provides typed access to all game constants.
"""

from pathlib import Path
from typing import Dict, List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class SimulationSettings(BaseSettings):
    """Clock, scheduler and background-process parameters."""

    slot_count: int = Field(default=6, description="Number of service bays")
    tick_seconds: float = Field(default=1.0, description="Driver tick interval")
    event_interval_seconds: float = Field(
        default=45.0, description="Minimum gap between periodic shock events"
    )

    community_drift_probability: float = Field(default=0.05)
    peer_contribution_probability: float = Field(default=0.2)
    project_drift_max: int = Field(default=50, description="Exclusive upper bound of funding drift")
    peer_score_drift_max: int = Field(default=20)
    peer_contribution_step: int = Field(default=10)

    booking_batch_size: int = Field(default=4)
    booking_markup_max: float = Field(default=0.5, description="Max random markup over base price")
    booking_quantity_max: int = Field(default=2)

    history_limit: int = Field(default=20)
    seed: Optional[int] = Field(default=None, description="Seed for the shared random source")

    model_config = {"env_prefix": "SIM_", "env_file": ".env", "extra": "ignore"}


class EconomySettings(BaseSettings):
    """Starting balances and ledger constants."""

    starting_money: int = Field(default=1500)
    starting_eco_score: int = Field(default=85)
    starting_reputation: int = Field(default=50)
    starting_inventory: Dict[str, int] = Field(
        default_factory=lambda: {"gear": 5, "permit": 5, "beans": 10, "fuel": 5}
    )

    reputation_per_service: int = Field(default=2)
    reputation_cap: Optional[int] = Field(
        default=None, description="Upper bound for reputation (None = unbounded)"
    )
    shock_eco_penalty: int = Field(default=5)

    inventory_unit_cost: int = Field(default=50, description="Price of one restock batch")
    inventory_batch: int = Field(default=5, description="Units added per restock")
    donation_presets: List[int] = Field(default_factory=lambda: [50, 200, 500])

    model_config = {"env_prefix": "ECON_", "env_file": ".env", "extra": "ignore"}


class CommunitySettings(BaseSettings):
    """Shared village project."""

    project_goal: int = Field(default=10000)
    project_start: int = Field(default=1550)
    global_eco_status: int = Field(default=72)

    model_config = {"env_prefix": "COMMUNITY_", "env_file": ".env", "extra": "ignore"}


class PathSettings(BaseSettings):
    """File path configuration."""

    project_root: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent
    )

    @property
    def prompt_templates_dir(self) -> Path:
        return self.project_root / "src" / "ai_layer" / "prompt_templates"

    model_config = {"env_prefix": "PATH_", "env_file": ".env", "extra": "ignore"}


class LLMSettings(BaseSettings):
    """Advisory oracle configuration. Default: Gemini."""

    provider: str = Field(
        default="gemini", description="LLM provider: gemini | openai | anthropic | groq"
    )
    model_name: str = Field(
        default="gemini-2.5-flash",
        description="Model name. Gemini: gemini-2.5-flash. OpenAI: gpt-4o-mini. Groq: llama-3.1-8b-instant"
    )
    api_key: str = Field(default="", description="Provider API key")
    temperature: float = Field(default=0.8)
    max_tokens: int = Field(default=256)
    timeout_seconds: float = Field(default=30.0)

    model_config = {"env_prefix": "LLM_", "env_file": ".env", "extra": "ignore"}


class Settings(BaseSettings):
    """Root settings aggregator."""

    simulation: SimulationSettings = Field(default_factory=SimulationSettings)
    economy: EconomySettings = Field(default_factory=EconomySettings)
    community: CommunitySettings = Field(default_factory=CommunitySettings)
    paths: PathSettings = Field(default_factory=PathSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
