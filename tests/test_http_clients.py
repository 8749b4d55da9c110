"""Tests for HTTP-based adapters."""

import asyncio
import json

import pytest

from pantry_pace.adapters.openai_recipe_client import OpenAIRecipeClient


class _FakeResponses:
    def __init__(self, output_text: str) -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str) -> None:
        self.responses = _FakeResponses(output_text)


def test_openai_recipe_client_parses_output() -> None:
    fake = _FakeOpenAI(json.dumps({"recipes": []}))
    client = OpenAIRecipeClient(client=fake)

    result = asyncio.run(
        client.generate(
            model="gpt-5.2",
            reasoning_effort="medium",
            store=False,
            schema={"type": "object"},
            prompt="Suggest recipes",
        )
    )

    assert result == {"recipes": []}
    payload = fake.responses.last_payload
    assert payload is not None
    assert payload["reasoning"] == {"effort": "medium"}
    assert payload["text"]["format"]["name"] == "recipe_suggestions"


def test_openai_recipe_client_omits_reasoning_when_unset() -> None:
    fake = _FakeOpenAI(json.dumps({"recipes": []}))
    client = OpenAIRecipeClient(client=fake)

    asyncio.run(
        client.generate(
            model="gpt-5.2",
            reasoning_effort=None,
            store=True,
            schema={"type": "object"},
            prompt="Suggest recipes",
        )
    )

    assert "reasoning" not in fake.responses.last_payload


def test_openai_recipe_client_empty_output() -> None:
    client = OpenAIRecipeClient(client=_FakeOpenAI(""))

    with pytest.raises(RuntimeError, match="empty"):
        asyncio.run(
            client.generate(
                model="gpt-5.2",
                reasoning_effort=None,
                store=False,
                schema={"type": "object"},
                prompt="Suggest recipes",
            )
        )
