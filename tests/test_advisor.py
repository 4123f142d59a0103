import asyncio
import json

import httpx
import pytest

from src.ai_layer.advisor import AdvisoryOracle
from src.simulation_layer.errors import OracleMalformed, OracleUnavailable

from conftest import ScriptedLLMClient

EVENT = {
    "title": "Dry Season Water Rationing",
    "description": "The river is low and every lodge is pumping hard.",
    "impact": "Shared wells run dry faster when everyone overuses them.",
    "concept": "Negative Externality",
    "scope": "community",
}


def run(coro):
    return asyncio.run(coro)


def test_shock_event_parsed():
    client = ScriptedLLMClient(json.dumps(EVENT))
    event = run(AdvisoryOracle(client).generate_shock({"money": 1500}))

    assert event.title == EVENT["title"]
    assert event.scope == "community"
    assert event.is_negative
    assert client.calls[0]["json_mode"] is True
    assert '"money": 1500' in client.calls[0]["prompt"]


def test_shock_event_inside_code_fence():
    raw = "Here you go:\n```json\n" + json.dumps(EVENT) + "\n```"
    event = run(AdvisoryOracle(ScriptedLLMClient(raw)).generate_shock({}))
    assert event.concept == "Negative Externality"


def test_shock_event_missing_field_is_malformed():
    partial = {k: v for k, v in EVENT.items() if k != "impact"}
    with pytest.raises(OracleMalformed):
        run(AdvisoryOracle(ScriptedLLMClient(json.dumps(partial))).generate_shock({}))


def test_shock_event_bad_scope_is_malformed():
    bad = dict(EVENT, scope="global")
    with pytest.raises(OracleMalformed):
        run(AdvisoryOracle(ScriptedLLMClient(json.dumps(bad))).generate_shock({}))


def test_shock_event_not_json_is_malformed():
    with pytest.raises(OracleMalformed):
        run(AdvisoryOracle(ScriptedLLMClient("Pura vida!")).generate_shock({}))


def test_transport_error_is_unavailable():
    client = ScriptedLLMClient(httpx.ConnectError("connection refused"))
    with pytest.raises(OracleUnavailable):
        run(AdvisoryOracle(client).generate_shock({}))


def test_advice_uses_mentor_persona():
    client = ScriptedLLMClient("  Somos un equipo, amigo.  ")
    text = run(AdvisoryOracle(client).get_advice("Started Canopy Zipline", {"money": 10}))

    assert text == "Somos un equipo, amigo."
    call = client.calls[0]
    assert "Don Carlos" in call["system_prompt"]
    assert 'Action: "Started Canopy Zipline"' in call["prompt"]


def test_empty_advice_is_malformed():
    with pytest.raises(OracleMalformed):
        run(AdvisoryOracle(ScriptedLLMClient("   ")).get_advice("x", {}))


def test_missing_template_is_unavailable(monkeypatch):
    def missing(name, **variables):
        raise FileNotFoundError(f"Prompt template not found: {name}.txt")

    monkeypatch.setattr("src.ai_layer.advisor.render_template", missing)
    client = ScriptedLLMClient(json.dumps(EVENT))

    with pytest.raises(OracleUnavailable):
        run(AdvisoryOracle(client).generate_shock({}))
    assert client.calls == []


def test_broken_persona_template_is_unavailable(monkeypatch):
    def broken(name):
        raise KeyError("persona")

    monkeypatch.setattr("src.ai_layer.advisor.load_template", broken)
    with pytest.raises(OracleUnavailable):
        run(AdvisoryOracle(ScriptedLLMClient("hola")).get_advice("x", {}))
