"""
Tests for the pending yes/no slot and the conversation context
"""

import pytest

from pedigree_flow.context_memory import (
    ConversationContext,
    ExtractedContext,
    detect_topic,
    extract_context,
    get_suggested_action,
    is_shortcut_eligible,
    strip_clear_tokens,
    wants_context_clear,
)
from pedigree_flow.entity_extractor import PetNameMatcher
from pedigree_flow.models import ActivePet, AIResponse, PendingAction
from pedigree_flow.pending_actions import PendingActionStore, is_confirmation, is_rejection


def make_action():
    return PendingAction(type="link", value="/pedigree/p-apollo#documents", label="View Documents",
                         related_pet_id="p-apollo", related_pet_name="Apollo", topic="documents")


# ---------------------------------------------------------------------------
# PENDING ACTIONS
# ---------------------------------------------------------------------------
def test_confirmation_and_rejection_words():
    assert is_confirmation("Yes")
    assert is_confirmation("ได้เลยครับ")
    assert is_rejection("no")
    assert is_rejection("ไม่เอาครับ")
    assert not is_confirmation("maybe")


def test_confirm_consumes_the_slot(clock):
    store = PendingActionStore(ttl_seconds=60, clock=clock)
    store.set_pending_action(make_action())

    result = store.process_pending_response("yes")
    assert result.confirmed
    assert result.action.value == "/pedigree/p-apollo#documents"
    assert not store.has_pending_action()


def test_thai_negation_is_not_read_as_confirmation(clock):
    store = PendingActionStore(ttl_seconds=60, clock=clock)
    store.set_pending_action(make_action())

    result = store.process_pending_response("ไม่ได้")
    assert result.confirmed is False
    assert result.action is None
    assert not store.has_pending_action()


def test_other_replies_leave_the_offer_armed(clock):
    store = PendingActionStore(ttl_seconds=60, clock=clock)
    store.set_pending_action(make_action())

    assert store.process_pending_response("maybe") is None
    assert store.has_pending_action()
    assert store.get_pending_action().topic == "documents"


def test_pending_action_expires(clock):
    store = PendingActionStore(ttl_seconds=60, clock=clock)
    store.set_pending_action(make_action())
    clock.advance(59)
    assert store.has_pending_action()
    clock.advance(2)
    assert not store.has_pending_action()
    assert store.process_pending_response("yes") is None


# ---------------------------------------------------------------------------
# CONVERSATION CONTEXT
# ---------------------------------------------------------------------------
def test_single_pet_result_focuses_that_pet():
    context = ConversationContext()
    response = AIResponse(text="found", type="pet_list", data=[{"id": "p-apollo", "name": "Apollo"}])
    context.apply_result(response, had_pet_before=False)
    assert context.active_pet == ActivePet(id="p-apollo", name="Apollo")


def test_multi_pet_result_clears_only_without_prior_focus():
    many = AIResponse(text="found", type="pet_list",
                      data=[{"id": "p-apollo", "name": "Apollo"}, {"id": "p-luna", "name": "Luna"}])

    context = ConversationContext(ActivePet(id="p-bella", name="Bella"))
    context.apply_result(many, had_pet_before=True)
    assert context.active_pet.name == "Bella"

    context.apply_result(many, had_pet_before=False)
    assert context.active_pet is None


def test_text_result_keeps_focus():
    context = ConversationContext(ActivePet(id="p-bella", name="Bella"))
    context.apply_result(AIResponse(text="hello"), had_pet_before=True)
    assert context.has_pet


def test_clear_tokens():
    assert wants_context_clear("reset")
    assert wants_context_clear("เปลี่ยนเรื่อง")
    assert not wants_context_clear("who is the owner")
    assert strip_clear_tokens("clear and find Luna") == "and find Luna"
    assert strip_clear_tokens("reset") == ""


def test_detect_topic_prefers_higher_priority():
    assert detect_topic("vet documents") == "vet"
    assert detect_topic("documents") == "documents"
    assert detect_topic("family tree") == "pedigree"
    assert detect_topic("hello there") == "general"


def test_shortcut_eligibility():
    assert is_shortcut_eligible("documents")
    assert is_shortcut_eligible("Apollo vet records")
    assert not is_shortcut_eligible("show me the vet records")
    assert not is_shortcut_eligible("")


@pytest.mark.asyncio
async def test_extract_context_smart_matches_the_pet(store, clock):
    matcher = PetNameMatcher(store, clock=clock)
    extracted = await extract_context("Apollo documents", matcher=matcher)
    assert extracted.pet_id == "p-apollo"
    assert extracted.topic == "documents"
    assert extracted.confidence == 1.0


@pytest.mark.asyncio
async def test_extract_context_prefers_active_pet(store, clock):
    matcher = PetNameMatcher(store, clock=clock)
    active = ActivePet(id="p-luna", name="Luna")
    extracted = await extract_context("Apollo papers", matcher=matcher, active_pet=active)
    assert extracted.pet_name == "Luna"


def test_suggested_action_for_documents():
    docs = ExtractedContext(pet_id="p-apollo", pet_name="Apollo", topic="documents",
                            intent="lookup", confidence=0.8, raw_query="documents")
    text, action = get_suggested_action(docs, "en")
    assert "Apollo" in text
    assert action.value == "/pedigree/p-apollo#documents"
    assert action.label == "View Documents"

    vet = ExtractedContext(pet_id="p-apollo", pet_name="Apollo", topic="vet",
                           intent="lookup", confidence=0.8, raw_query="vet")
    assert get_suggested_action(vet, "th")[1].value == "/vet-profile/p-apollo"

    general = ExtractedContext(pet_id="p-apollo", pet_name="Apollo", topic="market",
                               intent="lookup", confidence=0.8, raw_query="price")
    assert get_suggested_action(general) is None
