"""
Tests for the rule-based classifiers
"""

from pedigree_flow.intent_classifier import (
    detect_context_intent,
    extract_search_terms,
    has_relation_intent,
    infer_faq_category,
    is_greeting,
    looks_like_breeding_match_query,
    looks_like_market_query,
    looks_like_pet_name,
    looks_like_puppy_market_query,
    looks_like_registration_intent,
    match_local_intent,
    parse_breed_pair,
    parse_breed_x_with_y,
    parse_find_mate_request,
    puppy_pet_type,
    should_capture_faq_draft,
    should_capture_pet_context_faq,
    should_use_llm,
)


def test_greeting_uses_word_boundaries():
    assert is_greeting("hi there")
    assert is_greeting("สวัสดีครับ")
    assert not is_greeting("this is it")


def test_market_queries():
    assert looks_like_market_query("ราคาตลาดเท่าไหร่")
    assert looks_like_market_query("what is the average price")
    assert not looks_like_market_query("find Apollo")


def test_registration_intent():
    """Register verb plus a pet or ownership hint, but never a registration-number question"""
    assert looks_like_registration_intent("I want to register my new puppy")
    assert looks_like_registration_intent("ลงทะเบียนสุนัขของฉัน")
    assert not looks_like_registration_intent("what is Apollo's registration number")
    assert not looks_like_registration_intent("register")


def test_puppy_listings_and_pet_type():
    assert looks_like_puppy_market_query("any puppies for sale?")
    assert puppy_pet_type("any kittens available") == "cat"
    assert puppy_pet_type("looking for puppies") == "dog"
    assert puppy_pet_type("anything for sale") is None


def test_breeding_match_summary_query():
    assert looks_like_breeding_match_query("show me the breeding matches")
    assert looks_like_breeding_match_query("คู่ไหนลงทะเบียนผสมพันธุ์")


def test_looks_like_pet_name():
    assert not looks_like_pet_name("")
    assert looks_like_pet_name("A")
    assert looks_like_pet_name("Apollo")
    assert looks_like_pet_name("Sir Barks Alot")
    assert not looks_like_pet_name("12345")
    assert not looks_like_pet_name("hahaha")
    assert not looks_like_pet_name("find the registration number")
    assert not looks_like_pet_name("one two three four")


def test_extract_search_terms_strips_intent_tokens():
    assert extract_search_terms("find Apollo") == "apollo"
    assert extract_search_terms("who is the father") == ""
    assert has_relation_intent("who is the father")


def test_parse_breed_pair():
    assert parse_breed_pair("breed Apollo with Luna what puppies") == (True, "luna")
    assert parse_breed_pair("mate with Bella?") == (True, "bella")
    assert parse_breed_pair("ผสมกับ Luna ได้ไหม") == (True, "luna")
    assert parse_breed_pair("who is the owner") == (False, None)


def test_parse_breed_x_with_y():
    assert parse_breed_x_with_y("breed Apollo with Luna") == ("Apollo", "Luna")
    assert parse_breed_x_with_y("pair Apollo with Bella?") == ("Apollo", "Bella")
    assert parse_breed_x_with_y("breed with Luna") is None


def test_parse_find_mate_request():
    assert parse_find_mate_request("find mate for Apollo") == "Apollo"
    assert parse_find_mate_request('breeding match for "Bella"') == "Bella"
    assert parse_find_mate_request("หาคู่ให้ Apollo") == "Apollo"
    assert parse_find_mate_request("find Apollo") is None


def test_should_use_llm():
    assert should_use_llm("how should I plan his diet")
    assert should_use_llm("health")
    assert not should_use_llm("owner")
    assert not should_use_llm("siblings")


def test_should_capture_faq_draft():
    assert should_capture_faq_draft("how long is a dog pregnancy")
    assert not should_capture_faq_draft("find Apollo")
    assert not should_capture_faq_draft("Apollo")
    assert not should_capture_faq_draft("what is the market price")
    assert not should_capture_faq_draft("see https://example.com/faq please")


def test_should_capture_pet_context_faq():
    pet = {"name": "Apollo", "registration_number": "TRD-2001"}
    answer = "Feed a balanced diet and keep vaccinations current."
    assert should_capture_pet_context_faq("how should I plan his diet", answer, pet)
    assert not should_capture_pet_context_faq("how should I plan the diet for this dog", answer, pet)
    assert not should_capture_pet_context_faq("what diet suits Apollo best", answer, pet)
    assert not should_capture_pet_context_faq("how should I plan his diet", "Sorry, no data.", pet)
    assert not should_capture_pet_context_faq("who is the owner here", answer, pet)


def test_infer_faq_category():
    assert infer_faq_category("how long is a dog pregnancy") == "breeding"
    assert infer_faq_category("which vaccine does a puppy need") == "health"
    assert infer_faq_category("zzz") == ""


def test_match_local_intent_table_order():
    assert match_local_intent("who is the owner") == "owner"
    assert match_local_intent("show the family tree") == "family_tree"
    assert match_local_intent("siblings") == "siblings"
    assert match_local_intent("documents") == "documents"
    assert match_local_intent("how much is he") == "sale_status"
    assert match_local_intent("qwerty") is None


def test_detect_context_intent():
    assert detect_context_intent("what are the vaccines?") == "question"
    assert detect_context_intent("show documents") == "action"
    assert detect_context_intent("Apollo documents", has_pet=True) == "lookup"
    assert detect_context_intent("Apollo documents") == "unknown"
