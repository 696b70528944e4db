from pedigree_flow.text_utils import (
    clean_query,
    contains_url,
    contains_uuid,
    detect_lang,
    is_thai_text,
    matches,
    matches_any,
    normalize,
    strip_tokens,
    word_count,
)


def test_clean_query_collapses_whitespace_and_keeps_case():
    assert clean_query("  Find　  Apollo  ") == "Find Apollo"
    assert clean_query("") == ""


def test_normalize_lowercases_and_detects_thai():
    result = normalize("  ราคา Apollo ")
    assert result.clean == "ราคา apollo"
    assert result.is_thai
    assert result.lang == "th"


def test_language_detection():
    assert is_thai_text("สวัสดีครับ")
    assert not is_thai_text("hello")
    assert detect_lang("hello") == "en"
    assert detect_lang("หา Apollo") == "th"


def test_ascii_keywords_match_on_word_boundaries():
    assert matches("is it a cat", "cat")
    assert not matches("pick a category", "cat")
    assert not matches("this", "hi")


def test_ascii_keyword_glued_to_thai_still_matches():
    assert matches("หาcatให้หน่อย", "cat")


def test_phrases_and_thai_keywords_match_by_substring():
    assert matches("please show me the dogs", "show me")
    assert matches("ราคาตลาดเท่าไหร่", "ตลาด")
    assert matches_any("what is the price", ["market", "price"])
    assert not matches("anything", "")


def test_strip_tokens_is_case_insensitive():
    assert strip_tokens("Clear the CONTEXT please", ["clear", "context"]) == "the please"
    assert strip_tokens("reset", ["reset"]) == ""


def test_url_uuid_and_word_count():
    assert contains_url("see https://petdegree.app/pedigree/1")
    assert not contains_url("no link here")
    assert contains_uuid("id 123e4567-e89b-12d3-a456-426614174000")
    assert word_count("  one  two three ") == 3
