"""
Advisory oracle: the mentor persona backed by an LLM.

Two requests:
- generate_shock(stats) -> EconomicEvent, schema-validated
- get_advice(action, stats) -> free text

Transport failures raise OracleUnavailable; output that does not fit the
event schema raises OracleMalformed. Nothing is retried here.
"""

import json
import re
from typing import Literal, Optional

import httpx
from pydantic import BaseModel, ValidationError

from src.ai_layer.llm_client import LLMClient, create_llm_client
from src.ai_layer.prompt_templates import (
    ACTION_ADVICE,
    MENTOR_SYSTEM,
    SHOCK_EVENT,
    load_template,
    render_template,
)
from src.simulation_layer.errors import OracleMalformed, OracleUnavailable
from src.simulation_layer.models import EconomicEvent


class EconomicEventSchema(BaseModel):
    """Wire schema for a shock event; all fields required."""

    title: str
    description: str
    impact: str
    concept: str
    scope: Literal["local", "community"]

    model_config = {"extra": "ignore"}


class AdvisoryOracle:
    """Builds prompts, calls the LLM and validates what comes back."""

    ADVICE_TEMPERATURE = 0.8

    def __init__(self, client: Optional[LLMClient] = None):
        self.client = client

    def _get_client(self) -> LLMClient:
        if self.client is None:
            self.client = create_llm_client()
        return self.client

    async def generate_shock(self, stats: dict) -> EconomicEvent:
        prompt = self._render(SHOCK_EVENT, stats=json.dumps(stats, ensure_ascii=False))
        raw = await self._call(prompt, json_mode=True)
        return self._parse_event(raw)

    async def get_advice(self, action: str, stats: dict) -> str:
        prompt = self._render(
            ACTION_ADVICE, action=action, stats=json.dumps(stats, ensure_ascii=False)
        )
        raw = await self._call(
            prompt,
            system_prompt=self._render(MENTOR_SYSTEM).strip(),
            temperature=self.ADVICE_TEMPERATURE,
        )
        text = raw.strip() if isinstance(raw, str) else ""
        if not text:
            raise OracleMalformed("Empty advice response")
        return text

    @staticmethod
    def _render(template_name: str, **variables) -> str:
        try:
            if not variables:
                return load_template(template_name)
            return render_template(template_name, **variables)
        except (OSError, KeyError, IndexError, ValueError) as e:
            raise OracleUnavailable(f"Prompt template {template_name} unusable: {e}") from e

    async def _call(self, prompt: str, **kwargs) -> str:
        try:
            client = self._get_client()
            return await client.generate(prompt, **kwargs)
        except (httpx.HTTPError, OSError, KeyError, IndexError, TypeError, ValueError) as e:
            raise OracleUnavailable(f"Oracle request failed: {e}") from e

    @staticmethod
    def _clean_response(response: str) -> str:
        """Strip control characters and code fences, keep the JSON object."""
        response = re.sub(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]", "", response)

        if "```json" in response:
            response = response.split("```json")[1].split("```")[0]
        elif "```" in response:
            response = response.split("```")[1].split("```")[0]

        match = re.search(r"\{.*\}", response, re.DOTALL)
        if match:
            return match.group()
        return response.strip()

    def _parse_event(self, response: str) -> EconomicEvent:
        if not isinstance(response, str):
            raise OracleMalformed("Event response is not text")
        try:
            data = EconomicEventSchema.model_validate_json(self._clean_response(response))
        except ValidationError as e:
            raise OracleMalformed(f"Event response failed validation: {e.error_count()} errors") from e

        return EconomicEvent(
            title=data.title,
            description=data.description,
            impact=data.impact,
            concept=data.concept,
            scope=data.scope,
        )
