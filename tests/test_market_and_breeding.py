"""
Tests for market statistics, listings and breeding analysis over the sample store
"""

from datetime import date

import pytest

from pedigree_flow.breeding import (
    calculate_coi,
    determine_status,
    find_breeding_matches,
    find_mate_response,
    location_score,
    simulate_breed_pair,
)
from pedigree_flow.market import (
    add_days,
    format_date_short,
    format_market_summary,
    get_breeding_matches_summary,
    get_market_snapshot,
    get_puppy_listings,
    market_insight,
)
from pedigree_flow.pet_data import InMemoryPetStore


# ---------------------------------------------------------------------------
# MARKET
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_market_snapshot(store):
    snapshot = await get_market_snapshot(store)
    assert snapshot["avg_price"] == 38250
    assert snapshot["min_price"] == 18000
    assert snapshot["max_price"] == 52000
    assert snapshot["median_price"] == 41500
    assert snapshot["samples"] == 4
    assert snapshot["breed_averages"]["Thai Ridgeback"] == 45000
    assert len(snapshot["recent_listings_sample"]) == 4


@pytest.mark.asyncio
async def test_market_snapshot_without_prices():
    store = InMemoryPetStore(pets=[{"id": "x", "name": "X", "breed": "Mixed"}])
    assert await get_market_snapshot(store) is None


@pytest.mark.asyncio
async def test_market_summary_text(store):
    snapshot = await get_market_snapshot(store)
    text = format_market_summary(snapshot, "en")
    assert "38,250 THB" in text
    assert "1. Thai Ridgeback: ~45,000 THB" in text
    assert "สรุปตลาด" in format_market_summary(snapshot, "th")


@pytest.mark.asyncio
async def test_market_insight_against_breed_average(store):
    prices = await store.get_priced_pets(breed="Thai Ridgeback")
    apollo = await store.get_pet("p-apollo")
    bella = await store.get_pet("p-bella")
    assert "in line" in market_insight(apollo, prices)
    assert "16% above" in market_insight(bella, prices)
    assert market_insight({"price": None}, prices) is None


@pytest.mark.asyncio
async def test_puppy_listings_fall_back_to_any_age(store):
    response = await get_puppy_listings(store, "any puppies for sale?", today=date(2022, 6, 1))
    assert response.type == "pet_list"
    assert [p["name"] for p in response.pets] == ["Apollo"]
    assert response.primary_action.value == "#marketplace"


@pytest.mark.asyncio
async def test_kitten_listings(store):
    response = await get_puppy_listings(store, "any kittens?", today=date(2022, 6, 1))
    assert [p["name"] for p in response.pets] == ["Mochi"]
    assert "kittens" in response.text


@pytest.mark.asyncio
async def test_no_listings():
    response = await get_puppy_listings(InMemoryPetStore(pets=[]), "puppies", lang="th")
    assert response.type == "text"
    assert "ลูกหมา" in response.text


@pytest.mark.asyncio
async def test_breeding_matches_summary(store):
    response = await get_breeding_matches_summary(store)
    assert "Sire Apollo × Dam Bella" in response.text
    assert "Due: Mar 8, 2024" in response.text
    assert "Sire has 0 recorded offspring; Dam has 0." in response.text


@pytest.mark.asyncio
async def test_breeding_matches_summary_empty():
    response = await get_breeding_matches_summary(InMemoryPetStore(breeding_matches=[]))
    assert response.text.startswith("There are no registered breeding matches yet")


def test_date_helpers():
    assert add_days("2024-01-05", 63) == date(2024, 3, 8)
    assert format_date_short("2024-03-08") == "Mar 8, 2024"
    assert format_date_short("not a date") is None


# ---------------------------------------------------------------------------
# BREEDING
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_half_siblings_are_flagged(store):
    apollo = await store.get_pet("p-apollo")
    response = await simulate_breed_pair(store, apollo, "Luna")
    assert "Inbreeding" in response.text
    assert "Risky Use" in response.text
    assert response.type == "text"


@pytest.mark.asyncio
async def test_same_gender_warning(store):
    apollo = await store.get_pet("p-apollo")
    response = await simulate_breed_pair(store, apollo, "Thunder")
    assert "(same gender)" in response.text


@pytest.mark.asyncio
async def test_good_match_lists_the_mate(store):
    apollo = await store.get_pet("p-apollo")
    response = await simulate_breed_pair(store, apollo, "Bella")
    assert "Good Match" in response.text
    assert [p["name"] for p in response.pets] == ["Bella"]


@pytest.mark.asyncio
async def test_mate_lookup_never_returns_the_pet_itself(store):
    apollo = await store.get_pet("p-apollo")
    response = await simulate_breed_pair(store, apollo, "Apollo")
    assert response.text == "I couldn't find that mate."


@pytest.mark.asyncio
async def test_coi(store):
    apollo = await store.get_pet("p-apollo")
    luna = await store.get_pet("p-luna")
    storm = await store.get_pet("p-storm")
    bella = await store.get_pet("p-bella")
    assert await calculate_coi(store, apollo, luna) == (0.125, "half-siblings (same father)")
    assert await calculate_coi(store, apollo, storm) == (0.25, "parent-offspring")
    assert await calculate_coi(store, apollo, bella) == (0.0, None)


@pytest.mark.asyncio
async def test_breeding_matches_ranking(store):
    apollo = await store.get_pet("p-apollo")
    analysis = await find_breeding_matches(store, apollo)
    scores = [(c.pet["name"], round(c.score, 1)) for c in analysis.candidates]
    assert scores == [("Bella", 100.0), ("Luna", 59.5), ("Storm", 51.5)]
    assert analysis.status == "excellent"
    assert analysis.candidates[2].has_critical


def test_status_and_location_helpers():
    assert determine_status([]) == "not_recommended"
    assert location_score({"location": "Bangkok"}, {"location": "Nonthaburi"}) == 75
    assert location_score({"location": "Bangkok"}, {"location": "Chiang Mai"}) == 50
    assert location_score({"location": "Bangkok"}, {}) == 50


@pytest.mark.asyncio
async def test_find_mate_response(store):
    response = await find_mate_response(store, "Apollo")
    assert "Matches for Apollo" in response.text
    assert "1. **Bella** (Thai Ridgeback) - Score 100/100" in response.text
    assert response.pets[0]["match_score"] == 100.0
    assert response.intent == "relationship"


@pytest.mark.asyncio
async def test_find_mate_for_unknown_pet(store):
    response = await find_mate_response(store, "Zeus")
    assert response.text == 'Could not find a pet named "Zeus"'
