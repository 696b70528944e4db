"""
Pet-context router: answers an utterance about the pet currently in focus.

Order: small talk, registration guard, dynamic FAQ, static FAQ, breed-pair
simulation, context gathering, advisor (for long or nuanced questions), then
the deterministic local intent table, a bare-name search and the fallback.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Awaitable, Dict, List, Optional

from . import config
from .breeding import simulate_breed_pair
from .faq_cache import FaqCache
from .faq_static import get_faq_answer
from .intent_classifier import (
    infer_faq_category,
    is_pet_search_query,
    looks_like_pet_name,
    looks_like_registration_intent,
    match_local_intent,
    parse_breed_pair,
    pet_search_terms,
    should_capture_pet_context_faq,
    should_use_llm,
)
from .llm import AdvisorError, OpenAIAdvisor
from .market import breed_price_stats, market_insight, parse_date
from .models import AIAction, AIResponse
from .pet_data import PetStore
from .responses import get_response, get_small_talk_answer
from .keywords import LOCAL_INTENTS
from .text_utils import clean_query, is_thai_text, matches_any

logger = logging.getLogger(__name__)

OFFSPRING_WORDS = dict(LOCAL_INTENTS)["offspring"]

GRANDPARENT_LABELS = {
    "en": [("pat_gf", "Paternal GF"), ("pat_gm", "Paternal GM"), ("mat_gf", "Maternal GF"), ("mat_gm", "Maternal GM")],
    "th": [("pat_gf", "ปู่"), ("pat_gm", "ย่า"), ("mat_gf", "ตา"), ("mat_gm", "ยาย")],
}


@dataclass
class PetContext:
    """Everything gathered about the focused pet for one turn."""
    pet: Dict[str, Any]
    offspring: List[Dict[str, Any]] = field(default_factory=list)
    documents: List[Dict[str, Any]] = field(default_factory=list)
    father: Optional[Dict[str, Any]] = None
    mother: Optional[Dict[str, Any]] = None
    owner: Optional[Dict[str, Any]] = None
    breed_prices: List[Dict[str, Any]] = field(default_factory=list)
    grandparents: Dict[str, Optional[Dict[str, Any]]] = field(default_factory=dict)
    search_results: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def is_for_sale(self) -> bool:
        return bool(self.pet.get("for_sale") or self.pet.get("available") or self.pet.get("status") == "available")

    def owner_name(self, lang: str) -> str:
        embedded = self.pet.get("owner")
        return (
            (self.owner or {}).get("full_name")
            or (embedded.get("full_name") if isinstance(embedded, dict) else embedded)
            or self.pet.get("owner_name")
            or ("ไม่ระบุชื่อ" if lang == "th" else "Unknown Owner")
        )

    def market(self) -> Optional[Dict[str, Any]]:
        stats = breed_price_stats(self.breed_prices)
        if not stats:
            return None
        return {"breed": self.pet.get("breed"), "avg_price": stats["avg_price"], "samples": stats["samples"]}

    def to_advisor_context(self) -> Dict[str, Any]:
        return {
            "pet": self.pet,
            "parents": {"father": self.father, "mother": self.mother},
            "grandparents": self.grandparents,
            "offspring": self.offspring,
            "owner": self.owner,
            "documents": self.documents,
            "market": self.market(),
            "search_results": self.search_results,
        }


def format_name(pet: Optional[Dict[str, Any]], lang: str) -> str:
    if not pet:
        return "ไม่ทราบ" if lang == "th" else "Unknown"
    return f"{pet.get('name')} ({pet.get('breed')})"


def age_display(birthday: Any, lang: str, today: Optional[date] = None) -> str:
    born = parse_date(birthday)
    if born is None:
        return ""
    today = today or date.today()
    months = max((today.year - born.year) * 12 + (today.month - born.month), 0)
    years, months = divmod(months, 12)
    if lang == "th":
        return f"{years} ปี {months} เดือน" if years > 0 else f"{months} เดือน"
    return f"{years} years {months} months" if years > 0 else f"{months} months"


def format_birth_date(birthday: Any, lang: str) -> Optional[str]:
    born = parse_date(birthday)
    if born is None:
        return None
    if lang == "th":
        return f"{born.day}/{born.month}/{born.year + 543}"
    return f"{born.month}/{born.day}/{born.year}"


def share_url(pet_id: str) -> str:
    return f"{config.SITE_BASE_URL.rstrip('/')}/pedigree/{pet_id}"


def available_first(pets: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    def is_available(p):
        return bool(p.get("for_sale") or p.get("status") == "available")
    return [p for p in pets if is_available(p)] + [p for p in pets if not is_available(p)]


# ---------------------------------------------------------------------------
# LOCAL INTENT TEXTS
# ---------------------------------------------------------------------------
def family_tree_text(ctx: PetContext, lang: str) -> str:
    name = ctx.pet.get("name")
    labels = GRANDPARENT_LABELS["th" if lang == "th" else "en"]
    grand = "\n".join(f"{label}: {format_name(ctx.grandparents.get(key), lang)}" for key, label in labels)
    if lang == "th":
        return (f"นี่คือผังครอบครัว 3 รุ่นของ {name}:\n\n"
                f"📁 **พ่อแม่**\n"
                f"พ่อ: {format_name(ctx.father, lang)}\n"
                f"แม่: {format_name(ctx.mother, lang)}\n\n"
                f"📂 **ปู่ย่าตายาย**\n{grand}")
    return (f"Here is the 3-Generation Family Tree for {name}:\n\n"
            f"📁 **Parents**\n"
            f"Father: {format_name(ctx.father, lang)}\n"
            f"Mother: {format_name(ctx.mother, lang)}\n\n"
            f"📂 **Grandparents**\n{grand}")


def summary_text(ctx: PetContext, lang: str) -> str:
    th = lang == "th"
    pet = ctx.pet
    lines = [f"สรุปข้อมูลของ {pet.get('name')}:" if th else f"Summary for {pet.get('name')}:"]

    def push(label_th, label_en, value, fallback_th="ไม่ระบุ", fallback_en="Not recorded"):
        label = label_th if th else label_en
        if value is not None and str(value).strip():
            lines.append(f"{label}: {value}")
        else:
            lines.append(f"{label}: {fallback_th if th else fallback_en}")

    push("สายพันธุ์", "Breed", pet.get("breed"))
    push("เพศ", "Gender", pet.get("gender"))
    if pet.get("color"):
        push("สี", "Color", pet.get("color"))
    push("วันเกิด", "Birth date", format_birth_date(pet.get("birthday"), lang))
    age = age_display(pet.get("birthday"), lang)
    if age:
        push("อายุ", "Age", age)
    push("เลขทะเบียน", "Registration", pet.get("registration_number"))
    push("เจ้าของ", "Owner", ctx.owner_name(lang), "ไม่พบข้อมูลเจ้าของ", "Owner not recorded")
    if pet.get("location"):
        push("สถานที่", "Location", pet.get("location"))
    push("พ่อ", "Father", ctx.father.get("name") if ctx.father else None)
    push("แม่", "Mother", ctx.mother.get("name") if ctx.mother else None)
    push("จำนวนลูกในระบบ", "Offspring recorded", str(len(ctx.offspring)))

    titles = [d.get("title") for d in ctx.documents if d.get("title")]
    push("เอกสาร", "Documents", ", ".join(titles) or None, "ไม่มีเอกสารสาธารณะ", "No public documents")

    price = pet.get("price")
    if ctx.is_for_sale and price:
        push("สถานะขาย", "For sale", f"{price:,} THB")
    else:
        push("สถานะขาย", "For sale", ("พร้อมขาย" if th else "Available") if ctx.is_for_sale else None,
             "ไม่ระบุ/ไม่พร้อมขาย", "Not listed")
    return "\n".join(lines)


def location_text(pet: Dict[str, Any], lang: str) -> str:
    name, location = pet.get("name"), pet.get("location")
    if lang == "th":
        return f"{name} อยู่ที่ {location} ครับ" if location else f"ในระบบยังไม่มีข้อมูลสถานที่ของ {name} ครับ"
    return f"{name} is located in {location}." if location else f"I don't have a location recorded for {name}."


def genetics_text(ctx: PetContext, lang: str) -> str:
    pet = ctx.pet
    if lang == "th":
        return (f"🧬 **วิเคราะห์พันธุกรรม:**\n{pet.get('name')} เป็นสายพันธุ์ {pet.get('breed')} "
                f"สี {pet.get('color') or 'มาตรฐาน'}.\n\nหากคุณวางแผนจะผสมพันธุ์:\n"
                f"- พ่อ ({format_name(ctx.father, lang)})\n- แม่ ({format_name(ctx.mother, lang)})\n\n"
                f"พันธุกรรมจากบรรพบุรุษบ่งบอกถึงความแข็งแรงของสายเลือดครับ")
    return (f"🧬 **Genetic Insight:**\n{pet.get('name')} is a {pet.get('color') or 'standard'} {pet.get('breed')}.\n\n"
            f"Lineage Strength:\n"
            f"- Sire Line: {'Documented' if ctx.father else 'Unknown'}\n"
            f"- Dam Line: {'Documented' if ctx.mother else 'Unknown'}\n\n"
            f"Based on the parents, this pet carries strong {pet.get('breed')} traits.")


def birthday_text(pet: Dict[str, Any], lang: str) -> str:
    name = pet.get("name")
    born = format_birth_date(pet.get("birthday"), lang)
    age = age_display(pet.get("birthday"), lang)
    if lang == "th":
        return f"{name} เกิดวันที่ {born} ตอนนี้อายุประมาณ {age} ครับ" if born else f"ขออภัยครับ ในระบบไม่มีข้อมูลวันเกิดของ {name}"
    return (f"{name} was born on {born}. That makes them approx {age} old." if born
            else f"I don't have the exact birth date recorded for {name}.")


def sale_status_text(ctx: PetContext, lang: str) -> str:
    pet = ctx.pet
    price = pet.get("price")
    insight = market_insight(pet, ctx.breed_prices, lang)
    if lang == "th":
        text = "ใช่ครับ น้องกำลังเปิดขายอยู่!" if ctx.is_for_sale else "ตอนนี้น้องยังไม่ได้เปิดขายครับ"
        if ctx.is_for_sale and price:
            text += f" ราคาค่าตัวอยู่ที่ {price:,} บาท"
        if insight:
            text += f"\n\n💰 **วิเคราะห์ราคา:** {insight}"
        return text
    text = "Yes, this pet is currently listed for sale!" if ctx.is_for_sale else "This pet is currently not listed for sale."
    if ctx.is_for_sale and price:
        text += f" Asking price: {price:,} THB."
    if insight:
        text += f"\n\n💰 **Market Insight:** {insight}"
    return text


def offspring_text(ctx: PetContext, lang: str) -> str:
    name, count = ctx.pet.get("name"), len(ctx.offspring)
    if lang == "th":
        return (f"มีครับ! {name} มีลูกๆ ที่ลงทะเบียนไว้ {count} ตัว ดูรายการด้านล่างได้เลย" if count
                else f"{name} ยังไม่มีประวัติลูกในระบบของเราครับ")
    return (f"Yes! {name} has {count} recorded children. I've listed them below." if count
            else f"{name} doesn't have any recorded offspring yet.")


def documents_text(ctx: PetContext, lang: str) -> str:
    titles = ", ".join(d.get("title") for d in ctx.documents if d.get("title"))
    if lang == "th":
        return f"พบเอกสารดังนี้ครับ: {titles}" if titles else f"ยังไม่มีเอกสารสาธารณะสำหรับ {ctx.pet.get('name')} ครับ"
    return f"I found documents: {titles}." if titles else f"No public documents found for {ctx.pet.get('name')}."


def owner_text(ctx: PetContext, lang: str) -> str:
    phone = (ctx.owner or {}).get("phone")
    if lang == "th":
        return f"เจ้าของปัจจุบันคือ {ctx.owner_name(lang)} ครับ" + (f" (เบอร์โทร: {phone})" if phone else "")
    return f"The registered owner is {ctx.owner_name(lang)}." + (f" (Phone: {phone})" if phone else "")


class PetContextRouter:
    def __init__(self, store: PetStore, faq_cache: FaqCache, advisor: Optional[OpenAIAdvisor] = None):
        self.store = store
        self.faq_cache = faq_cache
        self.advisor = advisor

    # -----------------------------------------------------------------------
    # CONTEXT GATHERING
    # -----------------------------------------------------------------------
    async def _safe(self, awaitable: Awaitable, default: Any, label: str) -> Any:
        try:
            result = await awaitable
        except Exception as e:
            logger.warning(f"{label} failed: {str(e)}")
            return default
        return default if result is None else result

    async def _pet_or_none(self, pet_id: Optional[str]) -> Optional[Dict[str, Any]]:
        if not pet_id:
            return None
        return await self._safe(self.store.get_pet(pet_id), None, f"Pet lookup {pet_id}")

    async def _constant(self, value: Any) -> Any:
        return value

    async def gather_context(self, pet: Dict[str, Any], query: str) -> PetContext:
        """Parents, offspring, documents, owner and breed prices concurrently; grandparents after."""
        parent_field = "father_id" if pet.get("gender") == "male" else "mother_id"
        owner_lookup = (self._safe(self.store.get_owner(pet["owner_id"]), None, "Owner lookup")
                        if pet.get("owner_id") else self._constant(None))
        price_lookup = (self._safe(self.store.get_priced_pets(breed=pet["breed"], limit=50), [], "Breed price lookup")
                        if pet.get("breed") else self._constant([]))
        offspring, documents, father, mother, owner, breed_prices = await asyncio.gather(
            self._safe(self.store.get_offspring(pet["id"], parent_field), [], "Offspring lookup"),
            self._safe(self.store.get_documents(pet["id"]), [], "Documents lookup"),
            self._pet_or_none(pet.get("father_id")),
            self._pet_or_none(pet.get("mother_id")),
            owner_lookup,
            price_lookup,
        )

        pat_gf, pat_gm, mat_gf, mat_gm = await asyncio.gather(
            self._pet_or_none((father or {}).get("father_id")),
            self._pet_or_none((father or {}).get("mother_id")),
            self._pet_or_none((mother or {}).get("father_id")),
            self._pet_or_none((mother or {}).get("mother_id")),
        )

        search_results: List[Dict[str, Any]] = []
        if is_pet_search_query(query):
            terms = pet_search_terms(query)
            if len(terms) > 2:
                search_results = await self._safe(
                    self.store.search_pets(terms, fields=("name", "breed"), limit=5), [], "Pet-context search")

        return PetContext(
            pet=pet, offspring=offspring, documents=documents, father=father, mother=mother,
            owner=owner, breed_prices=breed_prices,
            grandparents={"pat_gf": pat_gf, "pat_gm": pat_gm, "mat_gf": mat_gf, "mat_gm": mat_gm},
            search_results=search_results,
        )

    # -----------------------------------------------------------------------
    # LOCAL INTENT TABLE
    # -----------------------------------------------------------------------
    async def _local_intent(self, intent: str, ctx: PetContext, lang: str) -> AIResponse:
        pet = ctx.pet
        name = pet.get("name")
        th = lang == "th"

        if intent == "family_tree":
            return AIResponse(text=family_tree_text(ctx, lang), intent="relationship")
        if intent == "summary":
            return AIResponse(text=summary_text(ctx, lang), intent="analysis")
        if intent == "siblings":
            if not pet.get("father_id") and not pet.get("mother_id"):
                return AIResponse(text=(f"ในระบบยังไม่มีข้อมูลพ่อแม่ของ {name} จึงหาพี่น้องไม่ได้ครับ" if th
                                        else f"I don't have parent data for {name}, so I can't find siblings yet."),
                                  intent="relationship")
            siblings = await self._safe(self.store.get_siblings(pet, limit=10), [], "Sibling lookup")
            if siblings:
                return AIResponse(text=(f"พบพี่น้องของ {name} {len(siblings)} ตัวครับ" if th
                                        else f"I found {len(siblings)} siblings for {name}."),
                                  type="pet_list", data=siblings, intent="relationship")
            return AIResponse(text=(f"ยังไม่พบข้อมูลพี่น้องของ {name} ในระบบครับ" if th
                                    else f"No siblings are recorded for {name}."), intent="relationship")
        if intent == "location":
            return AIResponse(text=location_text(pet, lang))
        if intent == "genetics":
            return AIResponse(text=genetics_text(ctx, lang), intent="analysis",
                              actions=[AIAction(label="ดูใบเพ็ดเต็ม" if th else "View Full Pedigree",
                                                type="link", value=share_url(pet["id"]))])
        if intent == "greeting":
            return AIResponse(text=(f"สวัสดีครับ! ผมสามารถให้ข้อมูลเกี่ยวกับ {name} ได้ทั้งเรื่องสายเลือด, ราคา, หรือสุขภาพครับ" if th
                                    else f"Hello! I can show you the full family tree of {name}. Just ask!"))
        if intent == "birthday":
            return AIResponse(text=birthday_text(pet, lang))
        if intent == "registration":
            reg = pet.get("registration_number")
            return AIResponse(text=(f"เลขทะเบียนของ {name} คือ {reg or 'ยังไม่มีในระบบ'}" if th
                                    else f"{name}'s registration number is {reg or 'not recorded in our system'}."))
        if intent == "share":
            url = share_url(pet["id"])
            text = (f"นี่คือลิงค์สำหรับแชร์โปรไฟล์ของ {name} ครับ:\n\n{url}\n\n(กดปุ่มด้านล่างเพื่อคัดลอกได้เลย!)" if th
                    else f"Here is the shareable link for {name}'s profile:\n\n{url}\n\n(You can copy and paste this to share with friends!)")
            return AIResponse(text=text, actions=[AIAction(label="คัดลอกลิงค์" if th else "Copy Link",
                                                           type="copy", value=url, primary=True)])
        if intent == "sale_status":
            actions = []
            if ctx.is_for_sale:
                actions.append(AIAction(label="ติดต่อเจ้าของ" if th else "Contact Owner",
                                        type="link", value="#contact", primary=True))
            return AIResponse(text=sale_status_text(ctx, lang), intent="analysis", actions=actions)
        if intent == "offspring":
            if ctx.offspring:
                return AIResponse(text=offspring_text(ctx, lang), type="pet_list",
                                  data=available_first(ctx.offspring), intent="relationship")
            return AIResponse(text=offspring_text(ctx, lang), intent="relationship")
        if intent == "documents":
            return AIResponse(text=documents_text(ctx, lang))
        if intent == "owner":
            return AIResponse(text=owner_text(ctx, lang))
        # search
        if ctx.search_results:
            return AIResponse(text=(f"ผมเจอรายการที่เกี่ยวข้อง {len(ctx.search_results)} รายการครับ" if th
                                    else f"I found {len(ctx.search_results)} results."),
                              type="pet_list", data=ctx.search_results, intent="search")
        return AIResponse(text=("ผมลองค้นหาแล้วแต่ไม่พบข้อมูลที่ตรงกันครับ" if th else "I couldn't find matches."),
                          intent="search")

    # -----------------------------------------------------------------------
    # MAIN ENTRY
    # -----------------------------------------------------------------------
    async def process_pet_query(self, raw_query: str, pet: Dict[str, Any], lang: Optional[str] = None) -> AIResponse:
        query = clean_query(raw_query)
        lang = "th" if lang == "th" or is_thai_text(query) else "en"
        name = pet.get("name")
        logger.info(f"Pet query for {name}: '{query}' ({lang})")

        small_talk = get_small_talk_answer(query, lang, pet_name=name)
        if small_talk:
            return AIResponse(text=small_talk)

        if looks_like_registration_intent(query):
            return AIResponse(
                text=get_response("register_pet", lang),
                intent="analysis",
                actions=[AIAction(label="ลงทะเบียนสัตว์เลี้ยง" if lang == "th" else "Register a Pet",
                                  type="event", value="openRegisterPet", primary=True)],
            )

        db_answer = await self.faq_cache.get_answer(query, lang, has_pet_context=True)
        if db_answer:
            return AIResponse(text=db_answer, intent="analysis")

        static_answer = get_faq_answer(query, lang, has_pet_context=True)
        if static_answer:
            return AIResponse(text=static_answer, intent="analysis")

        # rule-based, so it never waits on the advisor
        is_pair, mate_name = parse_breed_pair(query)
        if is_pair:
            return await simulate_breed_pair(self.store, pet, mate_name, lang)

        ctx = await self.gather_context(pet, query)

        if self.advisor is not None and should_use_llm(query):
            try:
                answer = await self.advisor.ask_pet(query, lang, ctx.to_advisor_context())
            except AdvisorError as e:
                logger.warning(f"Pet advisor failed, falling back to local intents: {str(e)}")
            else:
                if should_capture_pet_context_faq(query, answer, pet):
                    self.faq_cache.capture_draft_in_background(
                        query=query, answer=answer, lang=lang, scope="pet", source="llm_pet_context",
                        category=infer_faq_category(query) or None, force_status="draft")
                return AIResponse(text=answer, intent="analysis")

        intent = match_local_intent(query)
        if intent:
            logger.info(f"Local intent: {intent}")
            response = await self._local_intent(intent, ctx, lang)
            if response.type != "pet_list" and intent not in ("search", "offspring"):
                response = self._attach_lists(response, query, ctx)
            return response

        if looks_like_pet_name(query):
            matches = await self._safe(
                self.store.search_pets(query, fields=("name", "registration_number"), limit=5), [], "Name search")
            if matches:
                return AIResponse(text="พบรายการที่แมตช์ครับ" if lang == "th" else "I found these matches.",
                                  type="pet_list", data=matches, intent="search")

        return AIResponse(text=get_response("pet_fallback", lang))

    def _attach_lists(self, response: AIResponse, query: str, ctx: PetContext) -> AIResponse:
        """A search or offspring word anywhere in the utterance attaches that list to the reply."""
        if is_pet_search_query(query) and ctx.search_results:
            response.type, response.data = "pet_list", ctx.search_results
        elif matches_any(query.lower(), OFFSPRING_WORDS) and ctx.offspring:
            response.type, response.data = "pet_list", available_first(ctx.offspring)
        return response
