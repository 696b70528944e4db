"""
Global query router: answers an utterance when no pet is in focus.

Classifiers run in a fixed order and the first one that produces a reply
wins: pending yes/no, greeting, small talk, topic shortcut, registration,
breeding-match summary, puppy listings, market, entity search, dynamic FAQ,
static FAQ, missing-target prompt, advisor fallback.
"""

import logging
from typing import Any, Dict, List, Optional

from . import config
from .context_memory import ConversationContext, extract_context, get_suggested_action, is_shortcut_eligible
from .entity_extractor import PetNameMatcher
from .faq_cache import FaqCache, spawn_background
from .faq_static import get_faq_answer
from .intent_classifier import (
    extract_search_terms,
    has_relation_intent,
    is_greeting,
    looks_like_breeding_match_query,
    looks_like_market_query,
    looks_like_pet_name,
    looks_like_puppy_market_query,
    looks_like_registration_intent,
    looks_like_search_query,
    should_capture_faq_draft,
)
from .llm import AdvisorError, OpenAIAdvisor
from .market import format_market_summary, get_breeding_matches_summary, get_market_snapshot, get_puppy_listings
from .models import AIAction, AIResponse
from .pending_actions import PendingActionStore, PendingResult
from .pet_data import PetStore
from .responses import get_response, get_small_talk_answer, get_unavailable_response
from .text_utils import clean_query, is_thai_text

logger = logging.getLogger(__name__)


def resolve_lang(query: str, lang: Optional[str] = None) -> str:
    return "th" if lang == "th" or is_thai_text(query) else "en"


def pending_reply(result: PendingResult, lang: str) -> AIResponse:
    """Reply for a resolved yes/no offer."""
    if result.confirmed and result.action:
        return AIResponse(
            text=get_response("confirmed", lang, label=result.action.label),
            intent="analysis",
            actions=[result.action.to_action(primary=True)],
        )
    return AIResponse(text=get_response("rejected", lang), intent="analysis")


async def shortcut_reply(query: str, lang: str, pending: Optional[PendingActionStore],
                         matcher: Optional[PetNameMatcher],
                         context: Optional[ConversationContext]) -> Optional[AIResponse]:
    """
    Topic shortcut: a short utterance naming a topic with its own view
    (vet, documents, pedigree) arms that view as a pending offer.
    """
    if pending is None or not is_shortcut_eligible(query):
        return None
    active = context.active_pet if context else None
    extracted = await extract_context(query, matcher=None if active else matcher, active_pet=active)
    if not extracted.pet_id or extracted.topic == "general":
        return None
    suggestion = get_suggested_action(extracted, lang)
    if not suggestion:
        return None
    text, action = suggestion
    pending.set_pending_action(action)
    logger.info(f"Topic shortcut: {extracted.topic} for {extracted.pet_name}")
    return AIResponse(text=text, intent="analysis")


class GlobalQueryRouter:
    def __init__(self, store: PetStore, matcher: PetNameMatcher, faq_cache: FaqCache,
                 advisor: Optional[OpenAIAdvisor] = None,
                 enable_query_pool: bool = config.ENABLE_QUERY_POOL):
        self.store = store
        self.matcher = matcher
        self.faq_cache = faq_cache
        self.advisor = advisor
        self.enable_query_pool = enable_query_pool

    # -----------------------------------------------------------------------
    # HELPERS
    # -----------------------------------------------------------------------
    def _log_query(self, query: str, lang: str, intent: str, result: str,
                   normalized: Optional[str] = None, context: Optional[ConversationContext] = None) -> None:
        if not self.enable_query_pool:
            return
        active = context.active_pet if context else None
        record = {
            "query": query,
            "normalized_query": normalized or None,
            "lang": lang,
            "source": "global",
            "intent": intent,
            "result": result,
            "context_pet_id": active.id if active else None,
            "context_pet_name": active.name if active else None,
        }
        spawn_background(self.store.log_query(record), "Query pool insert")

    async def _smart_match(self, query: str):
        try:
            return await self.matcher.extract_best_pet_name(query)
        except Exception as e:
            logger.warning(f"Smart match failed: {str(e)}")
            return None

    async def search_pets(self, target: str) -> List[Dict[str, Any]]:
        """Up to 5 pets by name, breed or registration number, with parent summaries attached."""
        try:
            pets = await self.store.search_pets(target, fields=("name", "breed", "registration_number"), limit=5)
            parent_ids = [i for p in pets for i in (p.get("father_id"), p.get("mother_id")) if i]
            parents = await self.store.get_pets_by_ids(parent_ids) if parent_ids else []
        except Exception as e:
            logger.warning(f"Search failed for '{target}': {str(e)}")
            return []

        by_id = {p["id"]: {"id": p["id"], "name": p.get("name"), "breed": p.get("breed")} for p in parents}
        for pet in pets:
            if pet.get("father_id"):
                pet["father"] = by_id.get(pet["father_id"])
            if pet.get("mother_id"):
                pet["mother"] = by_id.get(pet["mother_id"])
        return pets

    async def _ask_advisor(self, query: str, lang: str, market: Optional[Dict] = None) -> Optional[str]:
        if self.advisor is None:
            return None
        try:
            return await self.advisor.ask_global(query, lang=lang, market=market)
        except AdvisorError as e:
            logger.warning(f"Global advisor failed, using fallback text: {str(e)}")
            return None

    # -----------------------------------------------------------------------
    # MAIN ENTRY
    # -----------------------------------------------------------------------
    async def process_global_query(self, raw_query: str, lang: Optional[str] = None,
                                   pending: Optional[PendingActionStore] = None,
                                   context: Optional[ConversationContext] = None) -> AIResponse:
        query = clean_query(raw_query)
        lang = resolve_lang(query, lang)
        logger.info(f"Global query: '{query}' ({lang})")

        # --- Pending yes/no ---
        if pending is not None and pending.has_pending_action():
            result = pending.process_pending_response(query)
            if result is not None:
                return pending_reply(result, lang)

        # --- Greeting / small talk ---
        if is_greeting(query):
            return AIResponse(text=get_response("greeting", lang))

        small_talk = get_small_talk_answer(query, lang)
        if small_talk:
            return AIResponse(text=small_talk, intent="analysis")

        # --- Topic shortcut ---
        shortcut = await shortcut_reply(query, lang, pending, self.matcher, context)
        if shortcut:
            return shortcut

        # --- Registration ---
        if looks_like_registration_intent(query):
            self._log_query(query, lang, "analysis", "register_pet", extract_search_terms(query), context)
            return AIResponse(
                text=get_response("register_pet", lang),
                intent="analysis",
                actions=[AIAction(label="ลงทะเบียนสัตว์เลี้ยง" if lang == "th" else "Register a Pet",
                                  type="event", value="openRegisterPet", primary=True)],
            )

        # --- Breeding matches / listings / market ---
        if looks_like_breeding_match_query(query):
            return await get_breeding_matches_summary(self.store, lang)

        if looks_like_puppy_market_query(query):
            return await get_puppy_listings(self.store, query, lang)

        if looks_like_market_query(query):
            snapshot = await get_market_snapshot(self.store)
            answer = await self._ask_advisor(query, lang, market=snapshot)
            if answer is None:
                answer = format_market_summary(snapshot, lang) if snapshot else get_unavailable_response(query, lang)
            return AIResponse(text=answer, intent="analysis")

        # --- Entity search ---
        relation = has_relation_intent(query)
        matched = await self._smart_match(query)
        if matched:
            logger.info(f"Smart match found: '{matched.name}'")
            target = matched.name
        else:
            terms = extract_search_terms(query)
            # a relation question with nothing left after stripping has no target
            target = terms if len(terms) >= 2 else ("" if relation else query)

        strong_signal = bool(
            matched
            or looks_like_search_query(query)
            or looks_like_pet_name(query)
            or (relation and len(target) >= 2)
        )
        weak_signal = len(target) >= 2 and target.lower() != query.lower()
        search_intent = "relationship" if relation else "search"

        if (strong_signal or weak_signal) and len(target) >= 2:
            pets = await self.search_pets(target)
            if pets:
                text = (f'พบข้อมูลที่ตรงกับ "{target}" {len(pets)} รายการ' if lang == "th"
                        else f"I found {len(pets)} matching results.")
                return AIResponse(text=text, type="pet_list", data=pets, intent=search_intent, query=target)
            if strong_signal:
                self._log_query(query, lang, search_intent, "no_match", target, context)
                return AIResponse(text=get_response("no_results", lang, target=target),
                                  intent=search_intent, query=target)
            logger.info(f"Stripped-terms search for '{target}' found nothing, continuing")

        # --- FAQ ---
        db_answer = await self.faq_cache.get_answer(query, lang, has_pet_context=False)
        if db_answer:
            self._log_query(query, lang, "analysis", "faq_db", target, context)
            return AIResponse(text=db_answer, intent="analysis")

        static_answer = get_faq_answer(query, lang, has_pet_context=False)
        if static_answer:
            self._log_query(query, lang, "analysis", "faq_static", target, context)
            return AIResponse(text=static_answer, intent="analysis")

        if relation and len(target) < 2:
            self._log_query(query, lang, "relationship", "missing_pet", target, context)
            return AIResponse(text=get_response("ask_for_target", lang), intent="relationship")

        # --- Advisor fallback ---
        self._log_query(query, lang, "analysis", "llm_fallback", target, context)
        answer = await self._ask_advisor(query, lang)
        if answer is None:
            return AIResponse(text=get_unavailable_response(query, lang), intent="analysis")
        if should_capture_faq_draft(query):
            self.faq_cache.capture_draft_in_background(
                query=query, answer=answer, lang=lang, scope="global", source="llm_fallback")
        return AIResponse(text=answer, intent="analysis")
