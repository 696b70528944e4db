"""
Tests for the pet name matcher, the static FAQ table and the dynamic FAQ cache
"""

import asyncio

import pytest

from pedigree_flow.entity_extractor import PetNameMatcher
from pedigree_flow.faq_cache import FaqCache, keyword_score
from pedigree_flow.faq_static import get_faq_answer
from pedigree_flow.models import FaqEntry
from pedigree_flow.pet_data import InMemoryPetStore
from pedigree_flow.vector_index import TfidfIndex, tokenize


def approved_row(**fields):
    row = {"id": "faq-seed", "status": "approved", "is_active": True, "scope": "any", "priority": 0}
    row.update(fields)
    return row


class BrokenFaqStore(InMemoryPetStore):
    async def fetch_faq_entries(self, limit):
        raise ConnectionError("database unreachable")


# ---------------------------------------------------------------------------
# PET NAME MATCHER
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_smart_match_finds_name_inside_utterance(store, clock):
    matcher = PetNameMatcher(store, clock=clock)
    entry = await matcher.extract_best_pet_name("who is the father of apollo?")
    assert entry.id == "p-apollo"
    assert await matcher.extract_best_pet_name("who is the father") is None
    assert await matcher.pet_name_exists("LUNA")


@pytest.mark.asyncio
async def test_suggested_names_prefix_first(store, clock):
    matcher = PetNameMatcher(store, clock=clock)
    suggestions = await matcher.get_suggested_names("apo")
    assert suggestions[0].name == "Apollo"
    assert await matcher.get_suggested_names("") == []


@pytest.mark.asyncio
async def test_name_cache_refreshes_after_ttl(store, clock):
    matcher = PetNameMatcher(store, ttl_seconds=600, clock=clock)
    assert await matcher.extract_best_pet_name("find zeus") is None

    store.pets.append({"id": "p-zeus", "name": "Zeus", "type": "dog", "breed": "Thai Ridgeback",
                       "gender": "male", "created_at": "2023-01-01T00:00:00+00:00"})
    assert await matcher.extract_best_pet_name("find zeus") is None

    clock.advance(601)
    entry = await matcher.extract_best_pet_name("find zeus")
    assert entry.id == "p-zeus"


# ---------------------------------------------------------------------------
# STATIC FAQ
# ---------------------------------------------------------------------------
def test_static_faq_answers_and_is_idempotent():
    first = get_faq_answer("how long is a dog pregnancy", "en")
    assert "63 days" in first
    assert get_faq_answer("how long is a dog pregnancy", "en") == first


def test_static_faq_exclude_list_routes_cats_elsewhere():
    answer = get_faq_answer("is my cat pregnant", "en")
    assert answer.startswith("Cat pregnancy")


def test_static_faq_global_entries_skipped_in_pet_context():
    query = "where can I buy one on the marketplace"
    assert get_faq_answer(query, "en").startswith("Marketplace")
    assert get_faq_answer(query, "en", has_pet_context=True) is None


def test_static_faq_thai_answer():
    assert "63 วัน" in get_faq_answer("หมาตั้งท้องกี่วัน", "th")


# ---------------------------------------------------------------------------
# DYNAMIC FAQ CACHE
# ---------------------------------------------------------------------------
def test_keyword_score_weights_phrases_and_excludes():
    entry = FaqEntry(id="1", keywords=["dog pregnancy", "whelp"], exclude=["cat"])
    assert keyword_score("how long is a dog pregnancy", entry) == 2
    assert keyword_score("whelp soon", entry) == 1
    assert keyword_score("cat whelp", entry) == 0


@pytest.mark.asyncio
async def test_approved_draft_is_served_after_ttl(store, faq_cache, clock):
    question = "How long does a dog pregnancy last?"
    assert await faq_cache.get_answer(question) is None

    record = await faq_cache.capture_draft(query="How long is a dog pregnancy?", answer="About 63 days.")
    assert record["status"] == "draft"
    assert store.faq_entries[0]["id"] == "faq-1"
    assert store.approve_faq_entry("faq-1")

    # snapshot is still fresh, so the new row is not visible yet
    assert await faq_cache.get_answer(question) is None

    clock.advance(301)
    assert await faq_cache.get_answer(question) == "About 63 days."


@pytest.mark.asyncio
async def test_concurrent_lookups_share_one_load(store, faq_cache):
    store.faq_entries.append(approved_row(keywords=["deworm"], answer_en="Every 3 months."))
    answers = await asyncio.gather(
        faq_cache.get_answer("when should I deworm"),
        faq_cache.get_answer("deworm schedule"),
        faq_cache.get_answer("deworm a puppy"),
    )
    assert answers == ["Every 3 months."] * 3
    assert store.faq_fetch_count == 1


@pytest.mark.asyncio
async def test_vector_hit_when_no_keyword_matches(store, faq_cache):
    store.faq_entries.append(approved_row(
        question_en="which vaccines are needed for a puppy",
        answer_en="Core vaccines start at 6-8 weeks.",
    ))
    answer = await faq_cache.get_answer("What vaccines does a puppy need")
    assert answer == "Core vaccines start at 6-8 weeks."


@pytest.mark.asyncio
async def test_scope_filtering(store, faq_cache):
    store.faq_entries.append(approved_row(scope="pet", keywords=["diet"], answer_en="Pet-scoped diet advice."))
    assert await faq_cache.get_answer("diet tips") is None
    assert await faq_cache.get_answer("diet tips", has_pet_context=True) == "Pet-scoped diet advice."


@pytest.mark.asyncio
async def test_thai_answer_falls_back_to_english(store, faq_cache):
    store.faq_entries.append(approved_row(keywords=["deworm"], answer_en="Every 3 months."))
    assert await faq_cache.get_answer("deworm", lang="th") == "Every 3 months."


@pytest.mark.asyncio
async def test_load_failure_returns_none(clock):
    cache = FaqCache(BrokenFaqStore(), enabled=True, clock=clock)
    assert await cache.get_answer("how long is a dog pregnancy") is None


@pytest.mark.asyncio
async def test_disabled_cache_never_loads(store, clock):
    cache = FaqCache(store, enabled=False, clock=clock)
    assert await cache.get_answer("anything at all") is None
    assert await cache.capture_draft(query="what food is best", answer="Kibble.") is None
    assert store.faq_fetch_count == 0


@pytest.mark.asyncio
async def test_capture_modes(store, clock):
    off = FaqCache(store, enabled=True, capture_mode="off", clock=clock)
    assert await off.capture_draft(query="what food is best", answer="Kibble.") is None

    approved = FaqCache(store, enabled=True, capture_mode="approved", clock=clock)
    record = await approved.capture_draft(query="what food is best", answer="Kibble.", lang="th")
    assert record["status"] == "approved"
    assert record["question_th"] == "what food is best"
    assert record["answer_en"] is None
    assert record["keywords"] == ["food", "best"]


@pytest.mark.asyncio
async def test_known_question_is_not_captured_twice(store, faq_cache):
    store.faq_entries.append(approved_row(question_en="What food is best", answer_en="Kibble."))
    await faq_cache.get_answer("what food is best")
    assert await faq_cache.capture_draft(query="What food is best", answer="Kibble again.") is None


# ---------------------------------------------------------------------------
# TF-IDF INDEX
# ---------------------------------------------------------------------------
def test_tokenize_drops_stopwords():
    assert tokenize("What vaccines does a puppy need?") == ["vaccines", "puppy", "need"]


def test_index_cosine_and_empty_query():
    index = TfidfIndex([
        {"id": "a", "content": "which vaccines are needed for a puppy"},
        {"id": "b", "content": "heat cycle timing for dogs"},
    ])
    hits = index.search("puppy vaccines")
    assert hits[0].id == "a"
    assert index.search("the and of") == []
    assert len(index) == 2
