"""
OpenAI-backed advisor used as the last resort of both routers.
"""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

from openai import OpenAI

from . import config

logger = logging.getLogger(__name__)

GLOBAL_SYSTEM_PROMPT = {
    "en": (
        'You are "PetDegree Advisor" for the PetDegree pedigree platform.\n'
        "Tasks:\n"
        "- If DATABASE_MATCHES has multiple pets: present a compact pick-list (name | reg | owner) "
        "and ask the user to reply with the registration number.\n"
        "- Do not output internal IDs/UUIDs unless the user explicitly asks.\n"
        "- Do not dump raw JSON; summarize clearly in plain text.\n"
        "- If DATABASE_MATCHES is empty: answer with general knowledge, but do not claim database facts.\n"
        "- If MARKET_DATA exists and the question is about prices or market trends: answer as a market "
        "analyst using MARKET_DATA (average, range, breed averages, recent listings).\n"
        'Never say "no price info" when MARKET_DATA is provided.'
    ),
    "th": (
        'คุณคือ "PetDegree Advisor" ผู้ช่วยของแพลตฟอร์มสายเลือด PetDegree\n'
        "งานของคุณ:\n"
        "- ถ้า DATABASE_MATCHES มีหลายตัว ให้สรุปตัวเลือกสั้นๆ (ชื่อ | เลขทะเบียน | เจ้าของ) แล้วขอให้ผู้ใช้ตอบกลับด้วยเลขทะเบียน\n"
        "- ห้ามแสดง UUID/ID ภายในระบบ เว้นแต่ผู้ใช้ถามตรงๆ\n"
        "- ห้ามตอบเป็น JSON ให้สรุปเป็นภาษาที่อ่านง่าย\n"
        "- ถ้า DATABASE_MATCHES ว่าง ตอบด้วยความรู้ทั่วไปได้ แต่ห้ามอ้างว่าเป็นข้อมูลในระบบ\n"
        "- ถ้ามี MARKET_DATA และคำถามเกี่ยวกับราคาหรือแนวโน้มตลาด ให้ตอบแบบนักวิเคราะห์ตลาดจาก MARKET_DATA โดยตรง\n"
        'ห้ามพูดว่า "ไม่มีข้อมูลราคา" ถ้ามี MARKET_DATA'
    ),
}

PET_SYSTEM_PROMPT = {
    "en": (
        'You are "PetDegree AI", an expert breeder assistant.\n'
        "Rules:\n"
        "- Treat APP DATA as ground truth. Never invent certificates, health results or registration numbers.\n"
        "- Do not output internal IDs/UUIDs unless the user explicitly asks.\n"
        "- Do not dump raw JSON; summarize clearly in plain text.\n"
        "- If data is missing: state what is missing and ask a short follow-up question.\n"
        "- For breeding questions, structure the answer as: 1) Goal 2) Constraints 3) Risks "
        "(inbreeding/health) 4) Recommended pairing strategy 5) Next actions inside the app.\n"
        "- For certificate/pedigree questions: list the available documents and guide next steps."
    ),
    "th": (
        'คุณคือ "PetDegree AI" ผู้ช่วยบรีดเดอร์มืออาชีพ\n'
        "กติกา:\n"
        "- ใช้ APP DATA เป็นข้อเท็จจริง ห้ามเดาเอกสาร ผลตรวจสุขภาพ หรือเลขทะเบียนที่ไม่มี\n"
        "- ห้ามแสดง UUID/ID ภายในระบบ เว้นแต่ผู้ใช้ถามตรงๆ\n"
        "- ห้ามตอบเป็น JSON ให้สรุปเป็นภาษาที่อ่านง่าย\n"
        "- ถ้าข้อมูลไม่พอ ให้บอกว่าขาดอะไรและถามคำถามสั้นๆ\n"
        "- ถ้าถามเรื่องผสมพันธุ์ ให้ตอบเป็นหัวข้อ: 1) เป้าหมาย 2) ข้อจำกัด 3) ความเสี่ยง (เลือดชิด/โรค) "
        "4) แผนจับคู่ที่เหมาะ 5) สิ่งที่ต้องทำต่อในระบบ\n"
        "- ถ้าถามเรื่องใบเพ็ด ให้ระบุเอกสารที่มีใน documents และแนะนำขั้นตอนต่อ"
    ),
}


class AdvisorError(RuntimeError):
    """The completion call failed or produced no text."""


def sanitize_pet(pet: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Reduce a pet record to the fields the advisor may see (no ids)."""
    if not pet:
        return None
    owner = pet.get("owner")
    owner_name = owner.get("full_name") if isinstance(owner, dict) else pet.get("owner_name")
    return {
        "name": pet.get("name"),
        "type": pet.get("type"),
        "breed": pet.get("breed"),
        "color": pet.get("color"),
        "gender": pet.get("gender"),
        "location": pet.get("location"),
        "price": pet.get("price"),
        "for_sale": pet.get("for_sale", pet.get("available")),
        "birth_date": pet.get("birthday"),
        "registration_number": pet.get("registration_number"),
        "owner_name": owner_name,
    }


def _dump(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, default=str, indent=2)


def build_global_prompt(query: str, lang: str, search_results: Optional[List[Dict]] = None,
                        market: Optional[Dict] = None) -> str:
    matches = [p for p in (sanitize_pet(r) for r in (search_results or [])[:10]) if p]
    parts = [
        f'USER_MESSAGE: "{query}"',
        f"DATABASE_MATCHES_JSON: {_dump(matches) if matches else '[]'}",
        f"MARKET_DATA_JSON: {_dump(market) if market else 'null'}",
    ]
    if len(matches) > 1:
        parts.append("หมายเหตุ: พบหลายรายการที่เกี่ยวข้อง กรุณาเลือก 1 รายการโดยตอบกลับด้วยเลขทะเบียน" if lang == "th"
                     else "Note: Multiple matches found. Reply with the registration number to pick one.")
    return "\n\n".join(parts)


def build_pet_prompt(query: str, context: Dict[str, Any]) -> str:
    owner = context.get("owner") or None
    parents = context.get("parents") or {}
    offspring = context.get("offspring") or []
    safe_context = {
        "pet": sanitize_pet(context.get("pet")),
        "parents": {
            "father": sanitize_pet(parents.get("father")),
            "mother": sanitize_pet(parents.get("mother")),
        },
        "grandparents": {k: sanitize_pet(v) for k, v in (context.get("grandparents") or {}).items()},
        "offspring_count": len(offspring),
        "offspring_sample": [sanitize_pet(p) for p in offspring[:6]],
        "owner": {"name": owner.get("full_name"), "phone": owner.get("phone")} if owner else None,
        "documents": [
            {"title": d.get("title"), "document_type": d.get("document_type")}
            for d in (context.get("documents") or [])[:12]
        ],
        "market": context.get("market"),
        "search_results": [sanitize_pet(p) for p in (context.get("search_results") or [])[:10]],
    }
    return f"APP DATA (JSON):\n{_dump(safe_context)}\n\nUSER QUESTION:\n{query}"


class OpenAIAdvisor:
    def __init__(self, api_key: Optional[str] = None,
                 model: str = config.OPENAI_MODEL,
                 temperature: float = config.OPENAI_TEMPERATURE,
                 max_tokens: int = config.OPENAI_MAX_TOKENS):
        api_key = api_key or config.OPENAI_API_KEY
        if not api_key:
            raise ValueError("OPENAI_API_KEY environment variable is not set")
        self.client = OpenAI(api_key=api_key)
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    def _complete(self, system_prompt: str, user_prompt: str) -> str:
        try:
            resp = self.client.chat.completions.create(
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except Exception as e:
            raise AdvisorError(f"Completion request failed: {str(e)}") from e
        answer = resp.choices[0].message.content if resp and resp.choices else ""
        if not answer or not answer.strip():
            raise AdvisorError("Completion returned no text")
        return answer.strip()

    async def ask_global(self, query: str, lang: str = "en", market: Optional[Dict] = None,
                         search_results: Optional[List[Dict]] = None) -> str:
        """Answer a question with no pet in focus (optionally with market data or matches)."""
        system_prompt = GLOBAL_SYSTEM_PROMPT["th" if lang == "th" else "en"]
        user_prompt = build_global_prompt(query, lang, search_results=search_results, market=market)
        logger.info(f"Global advisor call ({self.model})")
        return await asyncio.to_thread(self._complete, system_prompt, user_prompt)

    async def ask_pet(self, query: str, lang: str, context: Dict[str, Any]) -> str:
        """Answer a question about the focused pet using its gathered context."""
        system_prompt = PET_SYSTEM_PROMPT["th" if lang == "th" else "en"]
        user_prompt = build_pet_prompt(query, context)
        logger.info(f"Pet advisor call ({self.model})")
        return await asyncio.to_thread(self._complete, system_prompt, user_prompt)


def build_advisor(api_key: Optional[str] = None) -> Optional[OpenAIAdvisor]:
    """Advisor when a key is configured, else None (routers then use the unavailable texts)."""
    if not (api_key or config.OPENAI_API_KEY):
        logger.warning("OPENAI_API_KEY not set, advisor disabled")
        return None
    return OpenAIAdvisor(api_key=api_key)
