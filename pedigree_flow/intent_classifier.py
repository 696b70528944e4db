"""
Rule-based intent classification for the pedigree assistant.

Every detector is a pure predicate over the (lowercased) utterance and one of
the keyword lists in ``keywords.py``. The routers call them in a fixed order
and take the first match.
"""

import re
from typing import Dict, Optional, Tuple

from . import keywords as kw
from .text_utils import (
    clean_query,
    contains_any,
    contains_url,
    contains_uuid,
    matches,
    matches_any,
)

LAUGH_RE = re.compile(r"^(?:555+|lol+|lmao+|haha+|ha+|ฮ่า+|ฮ่าๆ+)$", re.IGNORECASE)
NAME_LAUGH_RE = re.compile(r"^(?:555+|lol+|lmao+|haha+|ha+)$", re.IGNORECASE)
LETTER_RE = re.compile(r"[a-z\u0E01-\u0E59]", re.IGNORECASE)
DIGITS_RE = re.compile(r"^\d+$")
SEARCH_TERM_JUNK_RE = re.compile(r"[^a-z0-9\u0E01-\u0E59\s\-]", re.IGNORECASE)
ORPHAN_THAI_MARKS_RE = re.compile(r"(^|\s)[\u0E31-\u0E3A\u0E47-\u0E4E]+")

FIND_MATE_RE = re.compile(
    r"(?:หาคู่ผสมให้|หาคู่ให้|find\s*mate\s*for|breeding\s*match\s*for|match\s*for)\s*[\"']?([^\"']+)[\"']?",
    re.IGNORECASE,
)
BREED_X_WITH_Y_RE = re.compile(r"\b(?:breed|mate|pair|mix)\s+(.+?)\s+with\s+(.+)", re.IGNORECASE)
BREED_PAIR_TAIL_RE = re.compile(r"(\?|ลูกจะ|เป็นไง|ออกมา|ได้ไหม|\bwhat\b|\bwill\b|\bhappen\b|\bpuppies\b).*")

# question / action regexes used for the coarse intent of an extracted context
QUESTION_PATTERNS = [
    re.compile(r"^(what|who|where|when|why|how|is|are|does|did|can|could|will|would)", re.IGNORECASE),
    re.compile(r"\?$"),
    re.compile(r"^(อะไร|ใคร|ที่ไหน|เมื่อไหร่|ทำไม|อย่างไร|ยังไง|หรือเปล่า|ไหม|มั้ย|รึเปล่า)"),
    re.compile(r"(อะไร|ใคร|ที่ไหน|เมื่อไหร่|ทำไม|ยังไง|ไหม|มั้ย|รึเปล่า|\?)\s*$"),
]
ACTION_PATTERNS = [
    re.compile(r"^(show|find|search|get|give|tell|help|open|view|see)", re.IGNORECASE),
    re.compile(r"^(หา|ค้นหา|ดู|ขอ|ช่วย|เปิด|แสดง|บอก)"),
]


# ---------------------------------------------------------------------------
# GLOBAL CLASSIFIERS
# ---------------------------------------------------------------------------
def is_greeting(query: str) -> bool:
    return matches_any(query.lower(), kw.GREETING_HINTS)


def looks_like_market_query(query: str) -> bool:
    return matches_any(query.lower(), kw.MARKET_HINTS)


def looks_like_registration_intent(query: str) -> bool:
    """Register verb plus a pet target or ownership hint, never a registration-number question."""
    lower = query.lower()
    if matches_any(lower, kw.REGISTRATION_NUMBER_HINTS):
        return False
    if not matches_any(lower, kw.REGISTER_VERBS):
        return False
    return matches_any(lower, kw.PET_TARGET_HINTS) or matches_any(lower, kw.PET_OWNERSHIP_HINTS)


def looks_like_puppy_market_query(query: str) -> bool:
    return matches_any(query.lower(), kw.PUPPY_MARKET_HINTS)


def puppy_pet_type(query: str) -> Optional[str]:
    """'cat' when a kitten hint is present, else 'dog' for puppy hints, else None."""
    lower = query.lower()
    if matches_any(lower, kw.PUPPY_CAT_HINTS):
        return "cat"
    if matches_any(lower, kw.PUPPY_DOG_HINTS):
        return "dog"
    return None


def looks_like_breeding_match_query(query: str) -> bool:
    return matches_any(query.lower(), kw.BREEDING_MATCH_HINTS)


def looks_like_search_query(query: str) -> bool:
    return matches_any(query.lower(), kw.SEARCH_HINTS)


def has_relation_intent(query: str) -> bool:
    return matches_any(query.lower(), kw.RELATION_HINTS)


def extract_search_terms(query: str) -> str:
    """Strip intent and filler tokens (longest first) and return what is left."""
    cleaned = clean_query(query).lower()
    for token in sorted(kw.CLEANUP_TOKENS, key=len, reverse=True):
        cleaned = cleaned.replace(token, " ")
    cleaned = SEARCH_TERM_JUNK_RE.sub(" ", cleaned)
    cleaned = ORPHAN_THAI_MARKS_RE.sub(" ", cleaned)
    return clean_query(cleaned)


def looks_like_pet_name(query: str) -> bool:
    """
    Heuristic gate for bare pet names.

    Rejects long strings, strings without letters, pure numbers, laughter and
    anything containing an intent word. Accepts 1-3 word strings otherwise.
    """
    q = clean_query(query)
    if not q:
        return False
    if len(q) > 40:
        return False
    if not LETTER_RE.search(q):
        return False
    if DIGITS_RE.match(q):
        return False
    lower = q.lower()
    if NAME_LAUGH_RE.match(lower):
        return False
    if matches_any(lower, kw.INTENT_WORDS):
        return False
    return 1 <= len(q.split()) <= 3


def should_capture_faq_draft(query: str) -> bool:
    """True when a global question looks general enough to be reused as an FAQ."""
    normalized = clean_query(query).lower()
    if len(normalized) < 6 or len(normalized) > 220:
        return False
    if looks_like_pet_name(normalized):
        return False
    if looks_like_search_query(normalized) or has_relation_intent(normalized):
        return False
    if looks_like_market_query(normalized) or looks_like_puppy_market_query(normalized):
        return False
    if looks_like_breeding_match_query(normalized) or looks_like_registration_intent(normalized):
        return False
    if contains_url(normalized) or contains_uuid(normalized):
        return False
    return True


def parse_find_mate_request(query: str) -> Optional[str]:
    match = FIND_MATE_RE.search(query)
    if not match:
        return None
    name = match.group(1).strip()
    return name or None


# ---------------------------------------------------------------------------
# PET CONTEXT CLASSIFIERS
# ---------------------------------------------------------------------------
def should_use_llm(query: str) -> bool:
    """Long or nuanced questions go to the advisor first."""
    q = query.strip().lower()
    if len(q.split()) >= 3:
        return True
    return contains_any(q, kw.LLM_GATE_KEYWORDS)


def should_capture_pet_context_faq(query: str, answer: str, pet: Optional[Dict] = None) -> bool:
    """True when a pet-scoped advisor answer reads as general knowledge."""
    normalized = clean_query(query).lower()
    if len(normalized) < 8 or len(normalized) > 220:
        return False
    if not matches_any(normalized, kw.GENERAL_KNOWLEDGE_HINTS):
        return False
    if matches_any(normalized, kw.PET_CONTEXT_EXCLUDE_HINTS):
        return False
    if matches_any(normalized, kw.SPECIFIC_PET_REFERENCE_HINTS):
        return False
    if contains_url(normalized):
        return False

    pet = pet or {}
    name = (pet.get("name") or "").lower()
    reg = str(pet.get("registration_number") or "").lower()
    answer_lower = (answer or "").lower()
    if matches_any(answer_lower, kw.GENERIC_ANSWER_BLOCKLIST):
        return False
    for marker in (name, reg):
        if marker and (marker in normalized or marker in answer_lower):
            return False
    return True


def infer_faq_category(text: str) -> str:
    """Highest weighted category by keyword hits; '' when nothing matches."""
    lower = clean_query(text).lower()
    best_name, best_score = "", 0
    for name, weight, words in kw.FAQ_CATEGORIES:
        hits = sum(1 for w in words if matches(lower, w))
        score = hits * weight
        if score > best_score:
            best_name, best_score = name, score
    return best_name


def match_local_intent(query: str) -> Optional[str]:
    """First local intent (table order) whose keywords match."""
    lower = query.lower()
    for intent_id, words in kw.LOCAL_INTENTS:
        if matches_any(lower, words):
            return intent_id
    return None


def is_pet_search_query(query: str) -> bool:
    return matches_any(query.lower(), kw.PET_SEARCH_TOKENS)


def pet_search_terms(query: str) -> str:
    lower = query.lower()
    for token in sorted(kw.PET_SEARCH_TOKENS, key=len, reverse=True):
        lower = lower.replace(token, "")
    lower = ORPHAN_THAI_MARKS_RE.sub(" ", lower)
    return clean_query(lower)


def parse_breed_pair(query: str) -> Tuple[bool, Optional[str]]:
    """
    Detect a "breed with" phrase and pull out the mate's name.

    Returns (is_breed_pair, mate_name). "breed X with Y" yields Y; the
    keyword form ("mate with Y", "ผสมกับ Y") yields the text after the keyword.
    """
    lower = clean_query(query).lower()
    keyword = next((k for k in kw.BREED_PAIR_KEYWORDS if k in lower), None)
    raw = None
    if keyword:
        raw = lower.split(keyword, 1)[1]
    else:
        match = BREED_X_WITH_Y_RE.search(lower)
        if not match:
            return False, None
        raw = match.group(2)
    name = BREED_PAIR_TAIL_RE.sub("", raw.strip()).strip()
    return True, (name or None)


def parse_breed_x_with_y(query: str) -> Optional[Tuple[str, str]]:
    """Both names from "breed X with Y", tails such as "?" or "what puppies" removed."""
    match = BREED_X_WITH_Y_RE.search(clean_query(query))
    if not match:
        return None
    first = match.group(1).strip()
    second = BREED_PAIR_TAIL_RE.sub("", match.group(2).strip()).strip()
    if not first or not second:
        return None
    return first, second


def detect_context_intent(query: str, has_pet: bool = False) -> str:
    """Coarse intent of an utterance: question, action, lookup (a pet was named) or unknown."""
    q = query.strip()
    if any(p.search(q) for p in QUESTION_PATTERNS):
        return "question"
    if any(p.search(q) for p in ACTION_PATTERNS):
        return "action"
    return "lookup" if has_pet else "unknown"
