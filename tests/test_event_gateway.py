import asyncio
import json

import httpx
import pytest

from src.ai_layer.advisor import AdvisoryOracle
from src.ai_layer.event_gateway import INITIAL_ADVICE, AdvisoryGateway
from src.data_layer.catalog import Catalog
from src.simulation_layer.ledger import EconomyLedger
from src.simulation_layer.models import PlayerStats

from conftest import ScriptedLLMClient


def event_json(concept="Public Goods", description="The village pitches in."):
    return json.dumps(
        {
            "title": "Trail Cleanup",
            "description": description,
            "impact": "Everyone benefits.",
            "concept": concept,
            "scope": "local",
        }
    )


@pytest.fixture
def ledger():
    stats = PlayerStats(money=1500, eco_score=85, reputation=50, inventory={"gear": 5})
    return EconomyLedger(stats, Catalog())


@pytest.fixture
def gateway(ledger, clock, llm):
    return AdvisoryGateway(AdvisoryOracle(llm), ledger, clock, event_interval_ms=45000)


def test_periodic_trigger_waits_for_interval(gateway, clock):
    clock.advance(44999)
    assert gateway.check_periodic() is False
    clock.advance(1)
    assert gateway.check_periodic() is True
    assert gateway.pending == 1
    # Interval restarts from the trigger time
    clock.advance(44999)
    assert gateway.check_periodic() is False


def test_dispatch_outside_loop_keeps_requests_queued(gateway):
    gateway.post_action("Started Coffee Farm Tour")
    assert gateway.dispatch() == []
    assert gateway.pending == 1


def test_shock_sets_event_and_text(gateway, clock, llm, ledger):
    llm.queue(event_json(description="Neighbors share the trail."))
    clock.advance(45000)
    gateway.check_periodic()
    asyncio.run(gateway.flush())

    assert gateway.current_event.title == "Trail Cleanup"
    assert gateway.advisory_text == "Neighbors share the trail."
    assert ledger.stats.eco_score == 85


@pytest.mark.parametrize("concept", ["Negative Externality", "NEGATIVE feedback", "a negative spiral"])
def test_negative_concept_costs_eco_score(gateway, clock, llm, ledger, concept):
    llm.queue(event_json(concept=concept))
    clock.advance(45000)
    gateway.check_periodic()
    asyncio.run(gateway.flush())
    assert ledger.stats.eco_score == 80


def test_negative_penalty_clamped(gateway, clock, llm, ledger):
    ledger.stats.eco_score = 2
    llm.queue(event_json(concept="Negative Externality"))
    clock.advance(45000)
    gateway.check_periodic()
    asyncio.run(gateway.flush())
    assert ledger.stats.eco_score == 0


def test_failures_keep_previous_text_and_event(gateway, clock, llm, ledger):
    llm.queue(event_json(description="First event"))
    clock.advance(45000)
    gateway.check_periodic()
    asyncio.run(gateway.flush())
    first_event = gateway.current_event

    llm.queue(httpx.ReadTimeout("slow"), "{not json")
    gateway.post_action("Started Canopy Zipline")
    clock.advance(45000)
    gateway.check_periodic()
    asyncio.run(gateway.flush())

    assert gateway.advisory_text == "First event"
    assert gateway.current_event is first_event
    assert gateway.failures == 2
    assert ledger.stats.eco_score == 85


def test_action_advice_replaces_text(gateway, llm):
    llm.queue("The village depends on you.")
    gateway.post_action("Started Eco-Lodge Stay (Tier 1) for Walk-in Guest")
    asyncio.run(gateway.flush())
    assert gateway.advisory_text == "The village depends on you."


def test_initial_text(gateway):
    assert gateway.advisory_text == INITIAL_ADVICE
    assert gateway.current_event is None


class DelayedClient(ScriptedLLMClient):
    """Answers each action after its own delay."""

    def __init__(self, replies):
        super().__init__()
        self.replies = replies

    async def generate(self, prompt, system_prompt=None, json_mode=False, temperature=None):
        for action, (delay, text) in self.replies.items():
            if f'Action: "{action}"' in prompt:
                await asyncio.sleep(delay)
                return text
        raise AssertionError(f"unexpected prompt: {prompt}")


def test_last_response_to_arrive_wins(ledger, clock):
    client = DelayedClient({"first": (0.05, "advice for first"), "second": (0.0, "advice for second")})
    gateway = AdvisoryGateway(AdvisoryOracle(client), ledger, clock)

    async def scenario():
        gateway.post_action("first")
        gateway.post_action("second")
        await gateway.flush()

    asyncio.run(scenario())
    assert gateway.advisory_text == "advice for first"
    assert gateway.in_flight == 0


def test_missing_template_keeps_previous_text(gateway, ledger, monkeypatch):
    def missing(name, **variables):
        raise FileNotFoundError(name)

    monkeypatch.setattr("src.ai_layer.advisor.render_template", missing)
    gateway.post_action("Started Canopy Zipline")
    asyncio.run(gateway.flush())

    assert gateway.advisory_text == INITIAL_ADVICE
    assert gateway.failures == 1
