"""
Dynamic FAQ cache backed by the store.

Approved, active entries are loaded at most once per TTL window and searched
by weighted keyword match first, then by TF-IDF similarity. Novel advisor
answers can be captured as drafts for later curation.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, List, Optional, Set

from . import config
from .models import FaqEntry
from .pet_data import PetStore
from .text_utils import clean_query, matches
from .vector_index import TfidfIndex, tokenize

logger = logging.getLogger(__name__)

# detached side-channel tasks (draft capture, query pool); kept referenced until done
_background_tasks: Set[asyncio.Task] = set()


def spawn_background(coro: Awaitable, label: str) -> asyncio.Task:
    """Run a best-effort coroutine without awaiting it. Failures are logged at debug."""

    async def _guarded():
        try:
            await coro
        except Exception as e:
            logger.debug(f"{label} failed: {str(e)}")

    task = asyncio.ensure_future(_guarded())
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)
    return task


async def drain_background_tasks() -> None:
    """Wait for every detached task started so far (used by the demo on exit and by tests)."""
    while _background_tasks:
        await asyncio.gather(*list(_background_tasks), return_exceptions=True)


@dataclass
class FaqSnapshot:
    entries: List[FaqEntry]
    by_id: Dict[str, FaqEntry]
    index: TfidfIndex
    loaded_at: float = 0.0
    questions: Set[str] = field(default_factory=set)


def should_skip_scope(entry: FaqEntry, has_pet_context: bool) -> bool:
    if entry.scope == "global" and has_pet_context:
        return True
    if entry.scope == "pet" and not has_pet_context:
        return True
    return False


def pick_answer(entry: FaqEntry, lang: str) -> Optional[str]:
    if lang == "th":
        return entry.answer_th or entry.answer_en or None
    return entry.answer_en or entry.answer_th or None


def keyword_score(text: str, entry: FaqEntry) -> int:
    """2 points per matched phrase, 1 per matched single word; any exclude hit scores 0."""
    if any(matches(text, term) for term in entry.exclude):
        return 0
    candidates = list(entry.keywords) + [q for q in (entry.question_th, entry.question_en) if q]
    score = 0
    for keyword in candidates:
        if matches(text, keyword):
            score += 2 if " " in keyword.strip() else 1
    return score


def build_index(entries: List[FaqEntry]) -> TfidfIndex:
    documents = []
    for entry in entries:
        content = " ".join(p for p in [entry.question_th, entry.question_en, *entry.keywords] if p)
        if content:
            documents.append({"id": entry.id, "content": content, "metadata": {"scope": entry.scope}})
    return TfidfIndex(documents)


class FaqCache:
    def __init__(self, store: PetStore,
                 enabled: bool = config.ENABLE_FAQ_DB,
                 ttl_seconds: float = config.FAQ_CACHE_TTL_SECONDS,
                 max_entries: int = config.FAQ_MAX_ENTRIES,
                 min_score: float = config.FAQ_MIN_SCORE,
                 capture_mode: str = config.FAQ_CAPTURE_MODE,
                 keywords_limit: int = config.FAQ_CAPTURE_KEYWORDS_LIMIT,
                 clock: Callable[[], float] = time.monotonic):
        """
        Initialize the cache.

        Args:
            store: persistence used for loading approved rows and inserting drafts
            enabled: when False every lookup misses and nothing is captured
            ttl_seconds: how long a loaded snapshot is served before reloading
            max_entries: upper bound on rows loaded per snapshot
            min_score: cosine threshold for vector hits
            capture_mode: 'off', 'draft' or 'approved'
            keywords_limit: keywords stored on a captured draft
            clock: monotonic time source (injectable for tests)
        """
        self.store = store
        self.enabled = enabled
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self.min_score = min_score
        self.capture_mode = (capture_mode or "draft").lower()
        self.keywords_limit = keywords_limit
        self.clock = clock
        self._snapshot: Optional[FaqSnapshot] = None
        self._inflight: Optional[asyncio.Future] = None

    # -----------------------------------------------------------------------
    # LOADING
    # -----------------------------------------------------------------------
    def invalidate(self) -> None:
        self._snapshot = None

    def _is_fresh(self) -> bool:
        return self._snapshot is not None and self.clock() - self._snapshot.loaded_at < self.ttl_seconds

    async def _load(self) -> Optional[FaqSnapshot]:
        try:
            rows = await self.store.fetch_faq_entries(self.max_entries)
        except Exception as e:
            logger.warning(f"FAQ cache load failed: {str(e)}")
            return None

        entries = [FaqEntry.from_record(r) for r in rows[: self.max_entries]]
        entries = [e for e in entries if e.status == "approved" and e.is_active]
        snapshot = FaqSnapshot(
            entries=entries,
            by_id={e.id: e for e in entries},
            index=build_index(entries),
            loaded_at=self.clock(),
            questions={clean_query(q).lower() for e in entries for q in (e.question_th, e.question_en) if q},
        )
        self._snapshot = snapshot
        logger.info(f"FAQ cache loaded {len(entries)} entries")
        return snapshot

    async def ensure_loaded(self) -> Optional[FaqSnapshot]:
        """
        Return a fresh snapshot, reloading when the TTL has passed.

        Concurrent callers share one in-flight load. A failed load returns None
        for this cycle and keeps the previous snapshot until a reload succeeds.
        An empty snapshot is also reported as None.
        """
        if not self.enabled:
            return None
        if self._is_fresh():
            return self._snapshot if self._snapshot.entries else None

        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.ensure_future(self._load())
        snapshot = await asyncio.shield(self._inflight)
        if snapshot is None or not snapshot.entries:
            return None
        return snapshot

    # -----------------------------------------------------------------------
    # LOOKUP
    # -----------------------------------------------------------------------
    def _keyword_match(self, text: str, entries: List[FaqEntry], has_pet_context: bool) -> Optional[FaqEntry]:
        best: Optional[FaqEntry] = None
        best_weight = 0
        for entry in entries:
            if should_skip_scope(entry, has_pet_context):
                continue
            if not pick_answer(entry, "en"):
                continue
            score = keyword_score(text, entry)
            if score <= 0:
                continue
            weight = score * 10 + entry.priority
            if best is None or weight > best_weight:
                best, best_weight = entry, weight
        return best

    async def get_answer(self, query: str, lang: str = "en", has_pet_context: bool = False) -> Optional[str]:
        """Answer from the dynamic cache, or None when nothing clears the thresholds."""
        text = clean_query(query).lower()
        if not text:
            return None
        snapshot = await self.ensure_loaded()
        if snapshot is None:
            return None

        entry = self._keyword_match(text, snapshot.entries, has_pet_context)
        if entry:
            logger.info(f"FAQ keyword hit: {entry.id}")
            return pick_answer(entry, lang)

        for hit in snapshot.index.search(text, top_k=5):
            if hit.score < self.min_score:
                continue
            entry = snapshot.by_id.get(hit.id)
            if entry is None or should_skip_scope(entry, has_pet_context):
                continue
            answer = pick_answer(entry, lang)
            if answer:
                logger.info(f"FAQ vector hit: {entry.id} ({hit.score:.2f})")
                return answer
        return None

    # -----------------------------------------------------------------------
    # DRAFT CAPTURE
    # -----------------------------------------------------------------------
    async def capture_draft(self, query: str, answer: str, lang: str = "en", scope: str = "any",
                            source: str = "llm", category: Optional[str] = None,
                            keywords: Optional[List[str]] = None,
                            force_status: Optional[str] = None) -> Optional[Dict]:
        """
        Insert a question/answer pair for curation. Returns the stored record, or None when skipped.

        Never raises; insert failures are logged at debug level.
        """
        if not self.enabled or self.capture_mode == "off":
            return None
        question = clean_query(query)
        if len(question) < 6 or len(question) > 240:
            return None
        if self._snapshot and question.lower() in self._snapshot.questions:
            return None

        if not keywords:
            keywords = list(dict.fromkeys(tokenize(question)))[: self.keywords_limit]
        status = force_status or ("approved" if self.capture_mode == "approved" else "draft")
        record = {
            "status": status,
            "is_active": True,
            "scope": scope or "any",
            "category": category or None,
            "question_th": question if lang == "th" else None,
            "question_en": question if lang != "th" else None,
            "answer_th": answer if lang == "th" else None,
            "answer_en": answer if lang != "th" else None,
            "keywords": keywords,
            "source": source,
            "source_query": question,
        }
        try:
            await self.store.insert_faq_entry(record)
        except Exception as e:
            logger.debug(f"FAQ draft insert failed: {str(e)}")
            return None
        if status == "approved":
            self.invalidate()
        return record

    def capture_draft_in_background(self, **kwargs) -> asyncio.Task:
        return spawn_background(self.capture_draft(**kwargs), "FAQ draft capture")
