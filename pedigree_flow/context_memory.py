"""
Conversation context: the pet currently in focus, clear-context handling,
result-shape promotion and the topic shortcut built on top of it.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from . import config
from . import keywords as kw
from .entity_extractor import PetNameMatcher
from .intent_classifier import detect_context_intent
from .models import ActivePet, AIResponse, PendingAction
from .text_utils import matches_any, strip_tokens, word_count

logger = logging.getLogger(__name__)


class ConversationContext:
    """Holds at most one active pet. Owned by a single conversation session."""

    def __init__(self, active_pet: Optional[ActivePet] = None):
        self.active_pet = active_pet

    @property
    def has_pet(self) -> bool:
        return self.active_pet is not None

    def set_active_pet(self, pet: ActivePet) -> None:
        if self.active_pet != pet:
            logger.info(f"Context switched to {pet.name} ({pet.id})")
        self.active_pet = pet

    def clear(self) -> None:
        if self.active_pet is not None:
            logger.info(f"Context cleared (was {self.active_pet.name})")
        self.active_pet = None

    def apply_result(self, response: AIResponse, had_pet_before: bool) -> None:
        """
        Update focus from the shape of a router response.

        A single-pet list focuses that pet. A multi-pet list drops focus only
        when nothing was focused before the turn.
        """
        pets = response.pets
        if len(pets) == 1 and pets[0].get("id"):
            self.set_active_pet(ActivePet.from_record(pets[0]))
        elif len(pets) > 1 and not had_pet_before:
            self.clear()


def wants_context_clear(query: str) -> bool:
    return matches_any(query.lower(), kw.CLEAR_CONTEXT_TOKENS)


def strip_clear_tokens(query: str) -> str:
    return strip_tokens(query, sorted(kw.CLEAR_CONTEXT_TOKENS, key=len, reverse=True))


# ---------------------------------------------------------------------------
# TOPIC SHORTCUT
# ---------------------------------------------------------------------------
@dataclass
class ExtractedContext:
    pet_id: Optional[str]
    pet_name: Optional[str]
    topic: str
    intent: str
    confidence: float
    raw_query: str


def detect_topic(query: str) -> str:
    """Highest priority topic whose keywords appear; 'general' when none do."""
    lower = query.lower()
    best, best_priority = "general", 0
    for topic, priority, words in kw.TOPIC_PATTERNS:
        if priority > best_priority and matches_any(lower, words):
            best, best_priority = topic, priority
    return best


async def extract_context(query: str, matcher: Optional[PetNameMatcher] = None,
                          active_pet: Optional[ActivePet] = None) -> ExtractedContext:
    """WHO (active or smart-matched pet), WHAT (topic), HOW (coarse intent)."""
    pet = active_pet
    if pet is None and matcher is not None:
        entry = await matcher.extract_best_pet_name(query)
        if entry:
            pet = ActivePet(id=entry.id, name=entry.name)

    topic = detect_topic(query)
    intent = detect_context_intent(query, has_pet=pet is not None)

    confidence = 0.3
    if pet is not None:
        confidence += 0.3
    if topic != "general":
        confidence += 0.2
    if intent != "unknown":
        confidence += 0.2

    return ExtractedContext(
        pet_id=pet.id if pet else None,
        pet_name=pet.name if pet else None,
        topic=topic,
        intent=intent,
        confidence=min(round(confidence, 2), 1.0),
        raw_query=query,
    )


def get_suggested_action(context: ExtractedContext, lang: str = "en") -> Optional[Tuple[str, PendingAction]]:
    """Offer text plus the action to arm, for topics that have a dedicated view."""
    if not context.pet_id:
        return None
    name, pet_id, th = context.pet_name, context.pet_id, lang == "th"

    if context.topic == "vet":
        text = (f"ผมพบข้อมูลสุขภาพของ {name} อยู่ในระบบ Vet AI Profile ต้องการดูไหมครับ?" if th
                else f"I found health records for {name} in our Vet AI Profile. Would you like to view them?")
        label, value = ("ดู Vet AI Profile" if th else "View Vet Profile"), f"/vet-profile/{pet_id}"
    elif context.topic == "documents":
        text = (f"ผมเปิดหน้าเอกสารของ {name} ให้ได้ครับ ต้องการดูไหมครับ?" if th
                else f"I can open the documents for {name}. Would you like to view them?")
        label, value = ("ดูเอกสาร" if th else "View Documents"), f"/pedigree/{pet_id}#documents"
    elif context.topic == "pedigree":
        text = (f"นี่คือสายเลือดของ {name} ครับ ต้องการเปิดดูไหมครับ?" if th
                else f"Here's the pedigree for {name}. Would you like to open it?")
        label, value = ("ดูสายเลือด" if th else "View Pedigree"), f"/pedigree/{pet_id}"
    else:
        return None

    action = PendingAction(
        type="link",
        value=value,
        label=label,
        related_pet_id=pet_id,
        related_pet_name=name,
        topic=context.topic,
    )
    return text, action


def is_shortcut_eligible(query: str, max_words: int = config.TOPIC_SHORTCUT_MAX_WORDS) -> bool:
    return 0 < word_count(query) <= max_words
