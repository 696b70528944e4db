import random
from typing import Optional

from . import keywords as kw
from .intent_classifier import LAUGH_RE
from .text_utils import clean_query

# ---------------------------------------------------------------------------
# RESPONSE TEMPLATES
# ---------------------------------------------------------------------------

GREETING_RESPONSES = {
    "en": ["Hello! I can help you search pets, analyze the market, or plan breeding."],
    "th": ["สวัสดีครับ 😊 ผมช่วยค้นหาข้อมูล วางแผนผสมพันธุ์ หรือวิเคราะห์ตลาดให้ได้ครับ"],
}

LAUGH_RESPONSES = {
    "en": ["😄 Sure! If you have any pet or pedigree questions, I can help."],
    "th": ["ฮ่าๆ ได้เลยครับ ถ้ามีคำถามเรื่องสัตว์เลี้ยงหรือสายเลือด บอกได้เลยนะครับ"],
}

WEATHER_RESPONSES = {
    "en": ["Sounds nice! If you have any pet or breeding questions, I can help."],
    "th": ["อากาศดีจริงครับ 😊 ถ้ามีคำถามเรื่องสัตว์เลี้ยงหรือการผสมพันธุ์ บอกได้เลยนะครับ"],
}

CONFIRMED_RESPONSES = {
    "en": ["Sure! Opening {label}..."],
    "th": ["ได้เลยครับ กำลังเปิด {label}..."],
}

REJECTED_RESPONSES = {
    "en": ["No problem! 😊 Is there anything else I can help with?"],
    "th": ["ได้ครับ 😊 มีอะไรให้ช่วยอีกไหมครับ?"],
}

CONTEXT_CLEARED_RESPONSES = {
    "en": ["Got it. Context cleared. Tell me the pet name or registration number you want to ask about."],
    "th": ["รับทราบครับ ล้างบริบทแล้ว บอกชื่อหรือเลขทะเบียนสัตว์เลี้ยงที่ต้องการถามได้เลยครับ"],
}

REGISTER_PET_RESPONSES = {
    "en": ["Sure, I can open the pet registration form. If you are not logged in, you will be asked to sign in first."],
    "th": ["ได้เลยครับ ผมจะเปิดหน้าลงทะเบียนสัตว์เลี้ยงให้เลย ถ้ายังไม่ได้ล็อกอิน ระบบจะพาไปหน้าเข้าสู่ระบบก่อนครับ"],
}

ASK_FOR_TARGET_RESPONSES = {
    "en": ["Please provide a pet name or registration number so I can fetch the pedigree."],
    "th": ["กรุณาระบุชื่อหรือเลขทะเบียนของสัตว์เลี้ยง เพื่อให้ผมดึงข้อมูลสายเลือดให้ได้ครับ"],
}

NO_RESULTS_RESPONSES = {
    "en": ['No results found for "{target}".'],
    "th": ['ไม่พบข้อมูลที่ตรงกับ "{target}"'],
}

PET_FALLBACK_RESPONSES = {
    "en": ["I'm not sure how to answer that yet."],
    "th": ["ขอโทษด้วยครับ ผมยังไม่เข้าใจคำถามนี้"],
}

ERROR_RESPONSES = {
    "en": ["Sorry, I encountered an error processing your request."],
    "th": ["ขออภัยครับ เกิดข้อผิดพลาดระหว่างประมวลผลคำถาม"],
}

# "AI unavailable" texts, picked by topic
UNAVAILABLE_RESPONSES = {
    "certificate": {
        "en": ["AI is temporarily unavailable. Share pet name / registration / microchip and I'll help locate certificates when online."],
        "th": ["ตอนนี้ระบบ AI ติดต่อไม่ได้ชั่วคราวครับ แต่ผมช่วยไกด์ได้: บอกชื่อสัตว์/เลขทะเบียน/ไมโครชิป แล้วผมจะค้นหาเอกสารให้ได้ทันทีเมื่อออนไลน์"],
    },
    "breeding": {
        "en": ["AI is temporarily unavailable. Basics: health/genetic tests, check pedigree/inbreeding, set breeding goal, then pick a match."],
        "th": ["ตอนนี้ระบบ AI ติดต่อไม่ได้ชั่วคราวครับ แต่หลักการเบื้องต้นคือ: ตรวจสุขภาพ+ยีน, เช็คสายเลือด/เลือดชิด, ตั้งเป้าหมายชัด แล้วค่อยเลือกคู่ผสม"],
    },
    "generic": {
        "en": ["AI is temporarily unavailable. Try again or provide more details (name/reg/breed) and I'll help."],
        "th": ["ตอนนี้ระบบ AI ติดต่อไม่ได้ชั่วคราวครับ ลองใหม่อีกครั้ง หรือพิมพ์ข้อมูลเพิ่ม (ชื่อ/เลขทะเบียน/สายพันธุ์) แล้วผมจะช่วยต่อได้"],
    },
}

# ---------------------------------------------------------------------------
# Unified response dictionary
# ---------------------------------------------------------------------------
RESPONSES = {
    "greeting": GREETING_RESPONSES,
    "laugh": LAUGH_RESPONSES,
    "weather": WEATHER_RESPONSES,
    "confirmed": CONFIRMED_RESPONSES,
    "rejected": REJECTED_RESPONSES,
    "context_cleared": CONTEXT_CLEARED_RESPONSES,
    "register_pet": REGISTER_PET_RESPONSES,
    "ask_for_target": ASK_FOR_TARGET_RESPONSES,
    "no_results": NO_RESULTS_RESPONSES,
    "pet_fallback": PET_FALLBACK_RESPONSES,
    "error": ERROR_RESPONSES,
}


def get_response(intent: str, lang: str = "en", **fields) -> str:
    """Returns a random template for the intent in the given language, formatted with fields"""
    templates = RESPONSES.get(intent, PET_FALLBACK_RESPONSES)
    choice = random.choice(templates.get(lang) or templates["en"])
    return choice.format(**fields) if fields else choice


def get_unavailable_response(query: str, lang: str = "en") -> str:
    """Bilingual 'AI is temporarily unavailable' text, aware of the question's topic."""
    q = (query or "").lower()
    if any(k in q for k in ("certificate", "pedigree", "ใบเพ็ด", "ใบรับรอง")):
        topic = "certificate"
    elif any(k in q for k in ("breed", "breeding", "ผสม", "เลือดชิด", "coi")):
        topic = "breeding"
    else:
        topic = "generic"
    templates = UNAVAILABLE_RESPONSES[topic]
    return random.choice(templates.get(lang) or templates["en"])


def get_small_talk_answer(raw_query: str, lang: str = "en", pet_name: Optional[str] = None) -> Optional[str]:
    """Answer laughter, one-word acknowledgements and weather chit-chat; None otherwise."""
    query = clean_query(raw_query).lower()
    if not query:
        return None

    if LAUGH_RE.match(query):
        return get_response("laugh", lang)

    if query in kw.SMALL_TALK_ACKS:
        if pet_name:
            suffix = (f" ถ้าต้องการถามเรื่อง {pet_name} ต่อ พิมพ์ได้เลยครับ" if lang == "th"
                      else f" If you want to ask about {pet_name}, just say it.")
        else:
            suffix = (" ถ้ามีคำถามเกี่ยวกับสัตว์เลี้ยง บอกได้เลยครับ" if lang == "th"
                      else " If you have any pet questions, just ask.")
        return f"รับทราบครับ{suffix}" if lang == "th" else f"Got it.{suffix}"

    if any(w in query for w in kw.WEATHER_HINTS):
        return get_response("weather", lang)

    return None
