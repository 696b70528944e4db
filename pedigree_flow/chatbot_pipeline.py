import logging
from typing import Any, Dict, Optional, Tuple

from .breeding import find_mate_response, simulate_breed_pair
from .context_memory import ConversationContext, strip_clear_tokens, wants_context_clear
from .entity_extractor import PetNameMatcher
from .faq_cache import FaqCache
from .global_router import GlobalQueryRouter, pending_reply, resolve_lang, shortcut_reply
from .intent_classifier import parse_breed_x_with_y, parse_find_mate_request
from .llm import OpenAIAdvisor
from .models import ActivePet, AIResponse
from .pending_actions import PendingActionStore
from .pet_data import PetStore
from .pet_router import PetContextRouter
from .responses import get_response
from .text_utils import clean_query

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# CHATBOT PIPELINE
# ---------------------------------------------------------------------------
class PedigreeChatPipeline:
    """One conversation: owns its focused pet and its pending offer, and routes each turn."""

    def __init__(self, store: PetStore, advisor: Optional[OpenAIAdvisor] = None,
                 matcher: Optional[PetNameMatcher] = None, faq_cache: Optional[FaqCache] = None,
                 pending: Optional[PendingActionStore] = None,
                 context: Optional[ConversationContext] = None,
                 enable_query_pool: Optional[bool] = None):
        self.store = store
        self.advisor = advisor
        self.matcher = matcher or PetNameMatcher(store)
        self.faq_cache = faq_cache or FaqCache(store)
        self.pending = pending or PendingActionStore()
        self.context = context or ConversationContext()

        router_kwargs = {} if enable_query_pool is None else {"enable_query_pool": enable_query_pool}
        self.global_router = GlobalQueryRouter(store, self.matcher, self.faq_cache, advisor=advisor, **router_kwargs)
        self.pet_router = PetContextRouter(store, self.faq_cache, advisor=advisor)

    def focus_pet(self, pet: Dict[str, Any]) -> None:
        """Put a pet in focus directly (e.g. the user opened its profile)."""
        self.context.set_active_pet(ActivePet.from_record(pet))

    def reset(self) -> None:
        self.context.clear()
        self.pending.clear()

    # -----------------------------------------------------------------------
    # MAIN MESSAGE HANDLER
    # -----------------------------------------------------------------------
    async def handle_message(self, user_input: str, lang: Optional[str] = None) -> AIResponse:
        try:
            return await self._handle(user_input, lang)
        except Exception as e:
            logger.error(f"Error handling message '{user_input}': {str(e)}", exc_info=True)
            return AIResponse(text=get_response("error", resolve_lang(user_input or "", lang)))

    async def _handle(self, user_input: str, lang: Optional[str]) -> AIResponse:
        text = clean_query(user_input)
        lang = resolve_lang(text, lang)
        if not text:
            return AIResponse(text=get_response("greeting", lang))

        # --- Pending yes/no ---
        if self.pending.has_pending_action():
            result = self.pending.process_pending_response(text)
            if result is not None:
                return pending_reply(result, lang)

        # --- Clear context ---
        query = text
        if wants_context_clear(text):
            self.context.clear()
            query = strip_clear_tokens(text)
            if not query:
                return AIResponse(text=get_response("context_cleared", lang))

        had_pet = self.context.has_pet
        response, promote = await self._route(query, lang)
        if not promote:
            return response

        # --- Context promotion ---
        pets = response.pets
        if not had_pet and len(pets) == 1 and response.intent == "relationship":
            self.context.set_active_pet(ActivePet.from_record(pets[0]))
            followup = await self._route_pet(text, lang)
            response.followups.append(followup)
            return response

        self.context.apply_result(response, had_pet_before=had_pet)
        return response

    async def _route(self, query: str, lang: str) -> Tuple[AIResponse, bool]:
        """Pick the handler for this turn. The flag is False for replies that must not move focus."""
        if self.context.has_pet:
            shortcut = await shortcut_reply(query, lang, self.pending, self.matcher, self.context)
            if shortcut:
                return shortcut, True
            return await self._route_pet(query, lang), True

        # --- Find mate for X ---
        mate_for = parse_find_mate_request(query)
        if mate_for:
            logger.info(f"Find-mate request for '{mate_for}'")
            return await find_mate_response(self.store, mate_for, lang), False

        # --- Breed X with Y ---
        pair = parse_breed_x_with_y(query)
        if pair:
            first = await self._find_by_name(pair[0])
            if first:
                return await simulate_breed_pair(self.store, first, pair[1], lang), False

        response = await self.global_router.process_global_query(
            query, lang=lang, pending=self.pending, context=self.context)
        return response, True

    async def _route_pet(self, query: str, lang: str) -> AIResponse:
        active = self.context.active_pet
        pet = None
        try:
            pet = await self.store.get_pet(active.id)
        except Exception as e:
            logger.warning(f"Could not load focused pet {active.id}: {str(e)}")
        if not pet:
            self.context.clear()
            return await self.global_router.process_global_query(
                query, lang=lang, pending=self.pending, context=self.context)
        return await self.pet_router.process_pet_query(query, pet, lang)

    async def _find_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        try:
            return await self.store.find_pet_by_name(name)
        except Exception as e:
            logger.warning(f"Pet lookup failed for '{name}': {str(e)}")
            return None
