"""
Shared fixtures: a manual clock, seeded randomness and a scripted LLM.
"""

import random
from collections import deque

import pytest

from config import LLMSettings, Settings, SimulationSettings
from src.ai_layer.advisor import AdvisoryOracle
from src.ai_layer.llm_client import LLMClient
from src.simulation_layer.clock import ManualClock
from src.simulation_layer.engine import GameEngine

START_MS = 1_700_000_000_000


class ScriptedLLMClient(LLMClient):
    """Returns queued responses in order; queued exceptions are raised."""

    def __init__(self, *responses):
        super().__init__(LLMSettings(api_key="test-key"))
        self.responses = deque(responses)
        self.calls = []

    def queue(self, *responses):
        self.responses.extend(responses)

    async def generate(self, prompt, system_prompt=None, json_mode=False, temperature=None):
        self.calls.append({"prompt": prompt, "system_prompt": system_prompt, "json_mode": json_mode})
        response = self.responses.popleft()
        if isinstance(response, Exception):
            raise response
        return response


def make_settings(**simulation) -> Settings:
    simulation.setdefault("community_drift_probability", 0.0)
    simulation.setdefault("tick_seconds", 0.0)
    return Settings(simulation=SimulationSettings(**simulation))


@pytest.fixture
def clock():
    return ManualClock(start_ms=START_MS)


@pytest.fixture
def llm():
    return ScriptedLLMClient()


@pytest.fixture
def make_engine(clock, llm):
    def _make(**simulation):
        return GameEngine(
            settings=make_settings(**simulation),
            clock=clock,
            rng=random.Random(1234),
            oracle=AdvisoryOracle(client=llm),
        )

    return _make


@pytest.fixture
def engine(make_engine):
    return make_engine()
