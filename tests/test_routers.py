"""
Tests for the global and pet-context routers
"""

from datetime import date

import pytest

from pedigree_flow.context_memory import ConversationContext
from pedigree_flow.entity_extractor import PetNameMatcher
from pedigree_flow.faq_cache import drain_background_tasks
from pedigree_flow.global_router import GlobalQueryRouter
from pedigree_flow.models import ActivePet
from pedigree_flow.pending_actions import PendingActionStore
from pedigree_flow.pet_router import PetContextRouter, age_display, format_birth_date


@pytest.fixture
def make_global(store, faq_cache, clock):
    def _make(advisor=None, enable_query_pool=False):
        matcher = PetNameMatcher(store, clock=clock)
        return GlobalQueryRouter(store, matcher, faq_cache, advisor=advisor, enable_query_pool=enable_query_pool)
    return _make


@pytest.fixture
def make_pet_router(store, faq_cache):
    def _make(advisor=None):
        return PetContextRouter(store, faq_cache, advisor=advisor)
    return _make


# ---------------------------------------------------------------------------
# GLOBAL ROUTER
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_global_greeting(make_global):
    response = await make_global().process_global_query("hi")
    assert response.text.startswith("Hello!")
    assert response.intent is None


@pytest.mark.asyncio
async def test_global_small_talk(make_global):
    response = await make_global().process_global_query("555")
    assert response.text.startswith("😄")


@pytest.mark.asyncio
async def test_market_without_advisor_uses_summary(make_global):
    response = await make_global().process_global_query("ราคาตลาดเท่าไหร่")
    assert "สรุปตลาด" in response.text
    assert response.intent == "analysis"


@pytest.mark.asyncio
async def test_market_with_advisor_passes_snapshot(make_global, make_advisor):
    advisor = make_advisor(answer="ราคาเฉลี่ยประมาณ 38,250 บาทครับ")
    response = await make_global(advisor=advisor).process_global_query("ราคาตลาดเท่าไหร่")
    assert response.text == "ราคาเฉลี่ยประมาณ 38,250 บาทครับ"
    assert advisor.calls[0]["lang"] == "th"
    assert advisor.calls[0]["market"]["samples"] == 4


@pytest.mark.asyncio
async def test_registration_offers_the_form(make_global):
    response = await make_global().process_global_query("I want to register my new puppy")
    assert response.primary_action.type == "event"
    assert response.primary_action.value == "openRegisterPet"


@pytest.mark.asyncio
async def test_search_by_name(make_global):
    response = await make_global().process_global_query("find Apollo")
    assert response.type == "pet_list"
    assert [p["name"] for p in response.pets] == ["Apollo"]
    assert response.pets[0]["father"]["name"] == "Thunder"
    assert response.intent == "search"


@pytest.mark.asyncio
async def test_search_by_breed_returns_many(make_global):
    response = await make_global().process_global_query("search ridgeback")
    assert len(response.pets) == 5
    assert response.query == "ridgeback"


@pytest.mark.asyncio
async def test_no_results_is_logged_to_query_pool(store, make_global):
    response = await make_global(enable_query_pool=True).process_global_query("find Zeus")
    assert response.text == 'No results found for "zeus".'
    await drain_background_tasks()
    assert store.query_pool[0]["result"] == "no_match"
    assert store.query_pool[0]["normalized_query"] == "zeus"


@pytest.mark.asyncio
async def test_relation_question_without_a_pet_asks_for_target(make_global):
    response = await make_global().process_global_query("who is the father")
    assert response.text.startswith("Please provide a pet name")
    assert response.intent == "relationship"


@pytest.mark.asyncio
async def test_static_faq_in_global_scope(make_global):
    response = await make_global().process_global_query("how long is a dog pregnancy")
    assert "63 days" in response.text


@pytest.mark.asyncio
async def test_advisor_failure_returns_unavailable_text(store, make_global, make_advisor):
    advisor = make_advisor(fail=True)
    response = await make_global(advisor=advisor).process_global_query(
        "tell me something interesting about ridgebacks")
    assert response.text.startswith("AI is temporarily unavailable")
    assert len(advisor.calls) == 1
    await drain_background_tasks()
    assert store.faq_entries == []


@pytest.mark.asyncio
async def test_advisor_answer_is_captured_as_draft(store, make_global, make_advisor):
    advisor = make_advisor(answer="Senior dogs do well on lower-calorie, high-protein food.")
    response = await make_global(advisor=advisor).process_global_query("what should I feed a senior dog")
    assert response.text == advisor.answer
    await drain_background_tasks()
    draft = store.faq_entries[0]
    assert draft["status"] == "draft"
    assert draft["scope"] == "global"
    assert draft["source"] == "llm_fallback"
    assert draft["question_en"] == "what should I feed a senior dog"


@pytest.mark.asyncio
async def test_topic_shortcut_arms_pending_action(make_global):
    pending = PendingActionStore(ttl_seconds=60)
    router = make_global()
    response = await router.process_global_query("Apollo documents", pending=pending,
                                                 context=ConversationContext())
    assert "Would you like to view them?" in response.text
    assert pending.get_pending_action().value == "/pedigree/p-apollo#documents"

    confirmed = await router.process_global_query("yes", pending=pending)
    assert confirmed.primary_action.value == "/pedigree/p-apollo#documents"


# ---------------------------------------------------------------------------
# PET ROUTER
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_owner_text(store, make_pet_router):
    apollo = await store.get_pet("p-apollo")
    response = await make_pet_router().process_pet_query("who is the owner", apollo)
    assert response.text == "The registered owner is Somchai Kennel. (Phone: 081-234-5678)"


@pytest.mark.asyncio
async def test_documents_text(store, make_pet_router):
    apollo = await store.get_pet("p-apollo")
    response = await make_pet_router().process_pet_query("documents", apollo)
    assert response.text == "I found documents: Pedigree Certificate, Vaccination Record."


@pytest.mark.asyncio
async def test_family_tree(store, make_pet_router):
    apollo = await store.get_pet("p-apollo")
    response = await make_pet_router().process_pet_query("family tree", apollo)
    assert "Father: Thunder (Thai Ridgeback)" in response.text
    assert "Mother: Storm (Thai Ridgeback)" in response.text
    assert "Paternal GF: Unknown" in response.text


@pytest.mark.asyncio
async def test_siblings_list(store, make_pet_router):
    apollo = await store.get_pet("p-apollo")
    response = await make_pet_router().process_pet_query("siblings", apollo)
    assert [p["name"] for p in response.pets] == ["Luna"]
    assert response.intent == "relationship"


@pytest.mark.asyncio
async def test_share_link_has_copy_action(store, make_pet_router):
    apollo = await store.get_pet("p-apollo")
    response = await make_pet_router().process_pet_query("share", apollo)
    action = response.primary_action
    assert action.type == "copy"
    assert action.value.endswith("/pedigree/p-apollo")
    assert action.value in response.text


@pytest.mark.asyncio
async def test_sale_status_with_market_insight(store, make_pet_router):
    apollo = await store.get_pet("p-apollo")
    response = await make_pet_router().process_pet_query("price", apollo)
    assert response.text.startswith("Yes, this pet is currently listed for sale! Asking price: 45,000 THB.")
    assert "in line with the breed average" in response.text
    assert response.primary_action.value == "#contact"


@pytest.mark.asyncio
async def test_offspring_for_a_sire(store, make_pet_router):
    thunder = await store.get_pet("p-thunder")
    response = await make_pet_router().process_pet_query("children", thunder)
    assert response.type == "pet_list"
    assert [p["name"] for p in response.pets] == ["Apollo", "Luna"]


@pytest.mark.asyncio
async def test_breed_with_runs_before_advisor(store, make_pet_router, make_advisor):
    advisor = make_advisor()
    apollo = await store.get_pet("p-apollo")
    response = await make_pet_router(advisor=advisor).process_pet_query("breed with Luna", apollo)
    assert "Inbreeding" in response.text
    assert advisor.calls == []


@pytest.mark.asyncio
async def test_pet_advisor_failure_falls_back_to_local_intent(store, make_pet_router, make_advisor):
    advisor = make_advisor(fail=True)
    apollo = await store.get_pet("p-apollo")
    response = await make_pet_router(advisor=advisor).process_pet_query("who is the owner", apollo)
    assert response.text.startswith("The registered owner is Somchai Kennel.")
    assert len(advisor.calls) == 1


@pytest.mark.asyncio
async def test_pet_advisor_gets_context_and_general_answers_are_captured(store, make_pet_router, make_advisor):
    advisor = make_advisor()
    apollo = await store.get_pet("p-apollo")
    response = await make_pet_router(advisor=advisor).process_pet_query("how should I plan his diet", apollo)
    assert response.text == advisor.answer
    context = advisor.calls[0]["context"]
    assert context["parents"]["father"]["name"] == "Thunder"
    assert context["owner"]["full_name"] == "Somchai Kennel"
    assert context["market"]["samples"] == 3

    await drain_background_tasks()
    draft = store.faq_entries[0]
    assert draft["scope"] == "pet"
    assert draft["status"] == "draft"
    assert draft["source"] == "llm_pet_context"
    assert draft["category"] == "health"


@pytest.mark.asyncio
async def test_bare_name_search_in_pet_context(store, make_pet_router):
    apollo = await store.get_pet("p-apollo")
    response = await make_pet_router().process_pet_query("Thunder", apollo)
    assert response.text == "I found these matches."
    assert [p["name"] for p in response.pets] == ["Thunder"]


@pytest.mark.asyncio
async def test_pet_fallback(store, make_pet_router):
    apollo = await store.get_pet("p-apollo")
    response = await make_pet_router().process_pet_query("blah", apollo)
    assert response.text == "I'm not sure how to answer that yet."


@pytest.mark.asyncio
async def test_pet_small_talk_mentions_the_pet(store, make_pet_router):
    apollo = await store.get_pet("p-apollo")
    response = await make_pet_router().process_pet_query("thanks", apollo)
    assert "Apollo" in response.text


def test_birth_date_formats():
    assert format_birth_date("2021-05-20", "en") == "5/20/2021"
    assert format_birth_date("2021-05-20", "th") == "20/5/2564"
    assert age_display("2021-05-20", "en", today=date(2023, 8, 1)) == "2 years 3 months"
    assert age_display(None, "en") == ""


def test_active_pet_from_record():
    assert ActivePet.from_record({"id": 7, "name": "Zeus"}) == ActivePet(id="7", name="Zeus")
