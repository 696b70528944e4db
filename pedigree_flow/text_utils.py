"""
Text normalization and keyword matching shared by every classifier.
"""
import re
import unicodedata
from dataclasses import dataclass
from typing import Iterable

THAI_CHAR_RE = re.compile(r"[\u0E01-\u0E59]")
ASCII_WORD_RE = re.compile(r"^[a-z0-9]+$")
WHITESPACE_RE = re.compile(r"\s+")
URL_RE = re.compile(r"https?://", re.IGNORECASE)
UUID_RE = re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE)


@dataclass(frozen=True)
class NormalizedText:
    clean: str
    is_thai: bool

    @property
    def lang(self) -> str:
        return "th" if self.is_thai else "en"


def clean_query(text: str) -> str:
    """NFKC-normalize, trim and collapse internal whitespace (case preserved)."""
    if not text:
        return ""
    text = unicodedata.normalize("NFKC", text)
    return WHITESPACE_RE.sub(" ", text).strip()


def is_thai_text(text: str) -> bool:
    return bool(text) and THAI_CHAR_RE.search(text) is not None


def detect_lang(text: str) -> str:
    """Return 'th' when any Thai code point is present, else 'en'."""
    return "th" if is_thai_text(text) else "en"


def normalize(text: str) -> NormalizedText:
    cleaned = clean_query(text).lower()
    return NormalizedText(clean=cleaned, is_thai=is_thai_text(cleaned))


def matches(text: str, keyword: str) -> bool:
    """
    Keyword containment test.

    Phrases (containing a space) and non-ASCII tokens match by substring.
    Single ASCII words match on ASCII word boundaries so "cat" does not
    match inside "category" but still matches when glued to Thai text.
    """
    if not text or not keyword:
        return False
    key = keyword.strip().lower()
    if not key:
        return False
    lowered = text.lower()
    if " " in key:
        return key in lowered
    if ASCII_WORD_RE.match(key):
        return re.search(rf"\b{re.escape(key)}\b", lowered, re.ASCII) is not None
    return key in lowered


def matches_any(text: str, keywords: Iterable[str]) -> bool:
    return any(matches(text, k) for k in keywords)


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """Plain substring OR-reduction, used where lists are matched loosely."""
    lowered = (text or "").lower()
    return any(k and k.lower() in lowered for k in keywords)


def strip_tokens(text: str, tokens: Iterable[str]) -> str:
    """Remove every case-insensitive occurrence of each token, then tidy whitespace."""
    cleaned = text or ""
    for token in tokens:
        if not token:
            continue
        cleaned = re.sub(re.escape(token), " ", cleaned, flags=re.IGNORECASE)
    return WHITESPACE_RE.sub(" ", cleaned).strip()


def contains_url(text: str) -> bool:
    return bool(text) and URL_RE.search(text) is not None


def contains_uuid(text: str) -> bool:
    return bool(text) and UUID_RE.search(text) is not None


def word_count(text: str) -> int:
    return len([w for w in (text or "").split() if w])
