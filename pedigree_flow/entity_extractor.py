"""
Pet Name Matcher for the pedigree assistant.
Finds known pet names inside an utterance instead of stripping keywords.
"""

import logging
import time
import unicodedata
from dataclasses import dataclass
from typing import Callable, List, Optional

from rapidfuzz import fuzz, process

from . import config
from .pet_data import PetStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PetNameEntry:
    id: str
    name: str
    name_lower: str


def _fold(text: str) -> str:
    return unicodedata.normalize("NFKC", text or "").lower()


class PetNameMatcher:
    def __init__(self, store: PetStore,
                 ttl_seconds: float = config.PET_NAME_CACHE_TTL_SECONDS,
                 limit: int = config.PET_NAME_CACHE_LIMIT,
                 clock: Callable[[], float] = time.monotonic):
        """Cache of (id, name) pairs loaded from the store and refreshed after the TTL."""
        self.store = store
        self.ttl_seconds = ttl_seconds
        self.limit = limit
        self.clock = clock
        self._entries: List[PetNameEntry] = []
        self._loaded_at: Optional[float] = None

    async def refresh(self) -> None:
        try:
            rows = await self.store.list_pet_names(self.limit)
        except Exception as e:
            logger.error(f"Pet name cache refresh failed: {str(e)}")
            return
        self._entries = [
            PetNameEntry(id=str(pet_id), name=name, name_lower=_fold(name))
            for pet_id, name in rows if name
        ]
        self._loaded_at = self.clock()
        logger.info(f"Cached {len(self._entries)} pet names")

    async def _ensure_ready(self) -> None:
        stale = self._loaded_at is None or self.clock() - self._loaded_at > self.ttl_seconds
        if not self._entries or stale:
            await self.refresh()

    def invalidate(self) -> None:
        self._loaded_at = None

    async def find_pet_names(self, query: str) -> List[PetNameEntry]:
        """
        All cached pets whose name appears in the query, longest name first.

        A name matches when the full name, or any whitespace-separated part of
        at least 2 characters, is a substring of the folded query.
        """
        await self._ensure_ready()
        folded = _fold(query)
        found: List[PetNameEntry] = []
        seen = set()
        for entry in self._entries:
            if len(entry.name_lower) < 2 or entry.id in seen:
                continue
            parts = [p for p in entry.name_lower.split() if len(p) >= 2]
            if any(p in folded for p in parts) or entry.name_lower in folded:
                found.append(entry)
                seen.add(entry.id)
        found.sort(key=lambda e: len(e.name_lower), reverse=True)
        return found

    async def extract_best_pet_name(self, query: str) -> Optional[PetNameEntry]:
        matches = await self.find_pet_names(query)
        if matches:
            logger.info(f"Smart match: '{matches[0].name}' in '{query}'")
            return matches[0]
        return None

    async def pet_name_exists(self, name: str) -> bool:
        await self._ensure_ready()
        target = _fold(name).strip()
        return any(e.name_lower == target for e in self._entries)

    async def get_suggested_names(self, partial: str, limit: int = 5, threshold: int = 70) -> List[PetNameEntry]:
        """Prefix and substring hits first, then close fuzzy matches."""
        await self._ensure_ready()
        needle = _fold(partial).strip()
        if not needle:
            return []
        prefix = [e for e in self._entries if e.name_lower.startswith(needle)]
        contains = [e for e in self._entries if needle in e.name_lower and e not in prefix]
        picked = (prefix + contains)[:limit]
        if len(picked) < limit:
            remaining = [e for e in self._entries if e not in picked]
            fuzzy = process.extract(
                needle,
                [e.name_lower for e in remaining],
                scorer=fuzz.token_sort_ratio,
                limit=limit - len(picked),
            )
            for _, score, idx in fuzzy:
                if score >= threshold:
                    picked.append(remaining[idx])
        return picked
