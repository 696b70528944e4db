"""
Tests for the OpenAI advisor wrapper (no network calls)
"""

from types import SimpleNamespace

import pytest

from pedigree_flow import config
from pedigree_flow.llm import (
    AdvisorError,
    OpenAIAdvisor,
    build_advisor,
    build_global_prompt,
    build_pet_prompt,
    sanitize_pet,
)


def fake_client(content=None, error=None):
    calls = []

    def create(**kwargs):
        calls.append(kwargs)
        if error:
            raise error
        message = SimpleNamespace(content=content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    return client, calls


def test_sanitize_pet_drops_ids(store):
    pet = store.pets[2]
    clean = sanitize_pet(pet)
    assert clean["name"] == "Apollo"
    assert "id" not in clean
    assert "father_id" not in clean
    assert sanitize_pet(None) is None


@pytest.mark.asyncio
async def test_pet_prompt_has_no_internal_ids(store):
    apollo = await store.get_pet("p-apollo")
    thunder = await store.get_pet("p-thunder")
    prompt = build_pet_prompt("how is his health", {
        "pet": apollo,
        "parents": {"father": thunder, "mother": None},
        "owner": {"id": "u-somchai", "full_name": "Somchai Kennel", "phone": "081-234-5678"},
        "documents": [{"title": "Vaccination Record", "document_type": "vaccine"}],
    })
    assert "Apollo" in prompt
    assert "Somchai Kennel" in prompt
    assert "p-apollo" not in prompt
    assert "u-somchai" not in prompt
    assert prompt.endswith("USER QUESTION:\nhow is his health")


def test_global_prompt_notes_multiple_matches():
    prompt = build_global_prompt("find ridgeback", "en",
                                 search_results=[{"name": "Apollo"}, {"name": "Luna"}],
                                 market={"avg_price": 38250})
    assert "Multiple matches found" in prompt
    assert '"avg_price": 38250' in prompt
    assert "MARKET_DATA_JSON: null" in build_global_prompt("hello", "en")


def test_advisor_requires_a_key(monkeypatch):
    monkeypatch.setattr(config, "OPENAI_API_KEY", None)
    with pytest.raises(ValueError):
        OpenAIAdvisor()
    assert build_advisor() is None


@pytest.mark.asyncio
async def test_advisor_returns_stripped_answer():
    advisor = OpenAIAdvisor(api_key="sk-test")
    advisor.client, calls = fake_client(content="  ราคาเฉลี่ย 38,250 บาท \n")
    answer = await advisor.ask_global("ราคาเท่าไหร่", lang="th", market={"avg_price": 38250})
    assert answer == "ราคาเฉลี่ย 38,250 บาท"
    system = calls[0]["messages"][0]["content"]
    assert "PetDegree Advisor" in system
    assert calls[0]["model"] == advisor.model


@pytest.mark.asyncio
async def test_advisor_wraps_request_errors():
    advisor = OpenAIAdvisor(api_key="sk-test")
    advisor.client, _ = fake_client(error=TimeoutError("timed out"))
    with pytest.raises(AdvisorError):
        await advisor.ask_pet("how is his health", "en", {"pet": {"name": "Apollo"}})


@pytest.mark.asyncio
async def test_advisor_rejects_empty_answers():
    advisor = OpenAIAdvisor(api_key="sk-test")
    advisor.client, _ = fake_client(content="   ")
    with pytest.raises(AdvisorError):
        await advisor.ask_global("hello")
