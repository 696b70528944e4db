"""
Breeding logic for the assistant.

Two entry points:
- simulate_breed_pair: deterministic verdict for one proposed pairing
  (gender clash, shared parent), no advisor involved.
- find_mate_response: ranked candidates for "find mate for X", scored on
  relatedness (COI), health, breed, coat color, availability and location.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .models import AIResponse
from .pet_data import PetStore

logger = logging.getLogger(__name__)

MAX_SAFE_COI = 0.0625
COI_PARENT_OFFSPRING = 0.25
COI_HALF_SIBLINGS = 0.125
COI_FIRST_COUSINS = 0.0625
COI_SECOND_COUSINS = 0.0156

SCORE_WEIGHTS = {
    "genetic": 0.35,
    "health": 0.20,
    "breed": 0.15,
    "color": 0.10,
    "availability": 0.10,
    "location": 0.10,
}

STANDARD_COLORS = ["red", "black", "blue", "fawn", "แดง", "ดำ", "น้ำเงิน", "ลาย"]

REGIONS = {
    "central": ["bangkok", "nonthaburi", "pathum thani", "samut prakan", "ayutthaya",
                "กรุงเทพ", "นนทบุรี", "ปทุมธานี", "สมุทรปราการ", "อยุธยา"],
    "north": ["chiang mai", "chiang rai", "lampang", "phayao",
              "เชียงใหม่", "เชียงราย", "ลำปาง", "พะเยา"],
    "northeast": ["khon kaen", "udon thani", "nakhon ratchasima", "ubon ratchathani", "sakon nakhon",
                  "ขอนแก่น", "อุดรธานี", "นครราชสีมา", "อุบลราชธานี", "สกลนคร"],
    "south": ["phuket", "songkhla", "nakhon si thammarat", "surat thani",
              "ภูเก็ต", "สงขลา", "นครศรีธรรมราช", "สุราษฎร์ธานี"],
    "east": ["chonburi", "rayong", "chanthaburi", "ชลบุรี", "ระยอง", "จันทบุรี"],
}

STATUS_TEXT = {
    "excellent": {"th": "ยอดเยี่ยม", "en": "Excellent"},
    "good": {"th": "ดี", "en": "Good"},
    "acceptable": {"th": "พอรับได้", "en": "Acceptable"},
    "risky": {"th": "เสี่ยง", "en": "Risky"},
    "not_recommended": {"th": "ไม่แนะนำ", "en": "Not Recommended"},
}


@dataclass
class BreedingWarning:
    type: str  # critical | warning | info
    code: str
    message_th: str
    message_en: str


@dataclass
class BreedingCandidate:
    pet: Dict[str, Any]
    score: float
    breakdown: Dict[str, float]
    coi: float
    relationship: Optional[str] = None
    warnings: List[BreedingWarning] = field(default_factory=list)

    @property
    def has_critical(self) -> bool:
        return any(w.type == "critical" for w in self.warnings)

    def to_record(self) -> Dict[str, Any]:
        record = dict(self.pet)
        record["match_score"] = round(self.score, 1)
        record["coi"] = self.coi
        record["warnings"] = [w.code for w in self.warnings]
        return record


@dataclass
class BreedingAnalysis:
    status: str
    candidates: List[BreedingCandidate]
    summary_th: str
    summary_en: str


# ---------------------------------------------------------------------------
# PAIR SIMULATION
# ---------------------------------------------------------------------------
def shares_parent(pet: Dict[str, Any], mate: Dict[str, Any]) -> bool:
    shared_father = pet.get("father_id") and pet.get("father_id") == mate.get("father_id")
    shared_mother = pet.get("mother_id") and pet.get("mother_id") == mate.get("mother_id")
    return bool(shared_father or shared_mother)


def simulate_pair(pet: Dict[str, Any], mate: Dict[str, Any], lang: str = "en") -> AIResponse:
    """Rule-based verdict for pairing `pet` with `mate`."""
    same_gender = pet.get("gender") == mate.get("gender")
    inbred = shares_parent(pet, mate)
    same_breed = pet.get("breed") == mate.get("breed")
    ok = not same_gender and not inbred

    if lang == "th":
        warning = ""
        if same_gender:
            warning += f"⚠️ **คำเตือน:** ทั้งคู่เป็นเพศ {pet.get('gender')} เหมือนกัน\n"
        if inbred:
            warning += "🚫 **อันตราย:** พบว่าทั้งคู่มีพ่อหรือแม่เดียวกัน (Inbreeding)\n"
        if ok:
            text = (f"🔬 **วิเคราะห์การผสมพันธุ์กับ: {mate.get('name')}**\n\n"
                    f"✅ สายพันธุ์: {'แท้ 100%' if same_breed else 'ผสม'}\n"
                    f"✅ สี: {pet.get('color')} + {mate.get('color')}")
        else:
            text = f"🔬 **วิเคราะห์การผสมพันธุ์:**\n\n{warning}".rstrip()
    else:
        warning = ""
        if same_gender:
            warning += f"⚠️ **Warning:** both pets are {pet.get('gender')} (same gender).\n"
        if inbred:
            warning += "🚫 **Danger:** they share a father or mother (Inbreeding).\n"
        verdict = "Good Match" if ok else "Risky Use"
        text = f"🔬 **Breeding Analysis:**\n\n{warning}Match with {mate.get('name')}: {verdict}"

    if ok:
        return AIResponse(text=text, type="pet_list", data=[mate], intent="analysis")
    return AIResponse(text=text, intent="analysis")


async def simulate_breed_pair(store: PetStore, pet: Dict[str, Any], mate_name: Optional[str],
                              lang: str = "en") -> AIResponse:
    """Look the mate up by name (never the pet itself) and simulate the pairing."""
    mate = None
    if mate_name:
        try:
            mate = await store.find_pet_by_name(mate_name, exclude_id=pet.get("id"))
        except Exception as e:
            logger.warning(f"Mate lookup failed for '{mate_name}': {str(e)}")
    if not mate:
        return AIResponse(text="ไม่พบคู่ผสมชื่อนั้นครับ" if lang == "th" else "I couldn't find that mate.",
                          intent="analysis")
    logger.info(f"Simulating pair {pet.get('name')} x {mate.get('name')}")
    return simulate_pair(pet, mate, lang)


# ---------------------------------------------------------------------------
# COI
# ---------------------------------------------------------------------------
async def get_ancestors(store: PetStore, pet_id: str, generations: int = 3) -> Dict[str, int]:
    """Ancestor id -> generation distance, breadth first up to `generations`."""
    ancestors: Dict[str, int] = {}
    queue = deque([(pet_id, 0)])
    while queue:
        current, gen = queue.popleft()
        if gen >= generations:
            continue
        try:
            parents = await store.get_parent_ids(current)
        except Exception as e:
            logger.warning(f"Parent lookup failed for {current}: {str(e)}")
            parents = None
        if not parents:
            continue
        for key in ("father_id", "mother_id"):
            parent_id = parents.get(key)
            if parent_id:
                ancestors[parent_id] = gen + 1
                queue.append((parent_id, gen + 1))
    return ancestors


async def calculate_coi(store: PetStore, pet1: Dict[str, Any], pet2: Dict[str, Any]) -> Tuple[float, Optional[str]]:
    """
    Simplified Wright coefficient for a prospective litter.

    Shared parents and parent-offspring links short-circuit to fixed values;
    otherwise every common ancestor within 3 generations contributes
    0.5 ** (g1 + g2 + 1).
    """
    if pet1.get("father_id") and pet1.get("father_id") == pet2.get("father_id"):
        return COI_HALF_SIBLINGS, "half-siblings (same father)"
    if pet1.get("mother_id") and pet1.get("mother_id") == pet2.get("mother_id"):
        return COI_HALF_SIBLINGS, "half-siblings (same mother)"

    id1, id2 = pet1.get("id"), pet2.get("id")
    if id1 in (pet2.get("father_id"), pet2.get("mother_id")) or id2 in (pet1.get("father_id"), pet1.get("mother_id")):
        return COI_PARENT_OFFSPRING, "parent-offspring"

    ancestors1 = await get_ancestors(store, id1, 3)
    ancestors2 = await get_ancestors(store, id2, 3)
    common = [(g1, ancestors2[a]) for a, g1 in ancestors1.items() if a in ancestors2]
    if not common:
        return 0.0, None

    coi = sum(0.5 ** (g1 + g2 + 1) for g1, g2 in common)
    if coi >= COI_FIRST_COUSINS:
        relationship = "first cousins or closer"
    elif coi >= COI_SECOND_COUSINS:
        relationship = "second cousins"
    else:
        relationship = "distant relatives"
    return coi, relationship


# ---------------------------------------------------------------------------
# SCORING
# ---------------------------------------------------------------------------
def region_of(location: str) -> Optional[str]:
    lower = (location or "").lower()
    for region, places in REGIONS.items():
        if any(p in lower for p in places):
            return region
    return None


def location_score(pet: Dict[str, Any], candidate: Dict[str, Any]) -> int:
    loc1, loc2 = pet.get("location"), candidate.get("location")
    if not loc1 or not loc2:
        return 50
    if loc1 == loc2:
        return 100
    region = region_of(loc1)
    if region is not None and region == region_of(loc2):
        return 75
    return 50


def color_score(pet: Dict[str, Any], candidate: Dict[str, Any]) -> int:
    color1 = (pet.get("color") or "").lower()
    color2 = (candidate.get("color") or "").lower()
    if not color1 or not color2:
        return 70
    return 100 if color1 in STANDARD_COLORS and color2 in STANDARD_COLORS else 60


async def evaluate_match(store: PetStore, pet: Dict[str, Any], candidate: Dict[str, Any],
                         max_coi: float = MAX_SAFE_COI) -> BreedingCandidate:
    warnings: List[BreedingWarning] = []
    coi, relationship = await calculate_coi(store, pet, candidate)

    if coi >= COI_PARENT_OFFSPRING:
        genetic = 0.0
        warnings.append(BreedingWarning(
            "critical", "PARENT_OFFSPRING",
            "🚫 ความสัมพันธ์ใกล้ชิดเกินไป (พ่อแม่-ลูก หรือ พี่น้องแท้)",
            "🚫 Too closely related (parent-offspring or full siblings)"))
    elif coi >= COI_HALF_SIBLINGS:
        genetic = 30.0
        warnings.append(BreedingWarning(
            "warning", "HALF_SIBLINGS",
            "⚠️ พบความสัมพันธ์พี่น้องต่างพ่อ/แม่",
            "⚠️ Half-sibling relationship detected"))
    elif coi >= max_coi:
        genetic = 50.0
        warnings.append(BreedingWarning(
            "warning", "HIGH_COI",
            f"⚠️ ค่า COI สูง ({coi * 100:.2f}%) > {max_coi * 100}%",
            f"⚠️ High COI ({coi * 100:.2f}%) > {max_coi * 100}%"))
    elif coi > 0:
        genetic = 80 - coi * 100 * 5
    else:
        genetic = 100.0

    health = 70
    if candidate.get("health_certified"):
        health = 100
    if candidate.get("health_issues"):
        health = 40
        warnings.append(BreedingWarning("warning", "HEALTH_ISSUES", "⚠️ มีประวัติปัญหาสุขภาพ", "⚠️ Has health issue history"))

    breed = 100
    if pet.get("breed") != candidate.get("breed"):
        breed = 50
        warnings.append(BreedingWarning(
            "info", "MIXED_BREED",
            f"ℹ️ คนละสายพันธุ์ ({pet.get('breed')} × {candidate.get('breed')})",
            f"ℹ️ Different breeds ({pet.get('breed')} × {candidate.get('breed')})"))

    availability = 50
    if candidate.get("available_for_breeding") or candidate.get("for_sale"):
        availability = 100
    if candidate.get("is_breeding"):
        availability = 30
        warnings.append(BreedingWarning(
            "info", "CURRENTLY_BREEDING",
            "ℹ️ กำลังอยู่ในช่วงผสมพันธุ์กับตัวอื่น",
            "ℹ️ Currently in breeding with another pet"))

    breakdown = {
        "genetic": genetic,
        "health": health,
        "breed": breed,
        "color": color_score(pet, candidate),
        "availability": availability,
        "location": location_score(pet, candidate),
    }
    score = sum(breakdown[k] * w for k, w in SCORE_WEIGHTS.items())
    return BreedingCandidate(pet=candidate, score=score, breakdown=breakdown, coi=coi,
                             relationship=relationship, warnings=warnings)


def determine_status(candidates: List[BreedingCandidate]) -> str:
    if not candidates:
        return "not_recommended"
    top = candidates[0]
    if top.has_critical:
        return "not_recommended"
    if top.score >= 85:
        return "excellent"
    if top.score >= 70:
        return "good"
    if top.score >= 50:
        return "acceptable"
    return "risky"


def generate_summary(pet: Dict[str, Any], candidates: List[BreedingCandidate], status: str) -> Tuple[str, str]:
    name = pet.get("name")
    if not candidates:
        return (f"ไม่พบคู่ผสมที่เหมาะสมสำหรับ {name} ในขณะนี้",
                f"No suitable breeding matches found for {name} at this time")
    top = candidates[0]
    score, coi = round(top.score), f"{top.coi * 100:.2f}"
    top_name = top.pet.get("name")
    th = (f"พบ {len(candidates)} คู่ผสมที่เป็นไปได้\n"
          f"🏆 แนะนำ: {top_name} (คะแนน {score}/100)\n"
          f"📊 ค่า COI: {coi}%\n"
          f"🎯 สถานะ: {STATUS_TEXT[status]['th']}")
    en = (f"Found {len(candidates)} possible matches\n"
          f"🏆 Recommended: {top_name} (Score {score}/100)\n"
          f"📊 COI: {coi}%\n"
          f"🎯 Status: {STATUS_TEXT[status]['en']}")
    return th, en


async def find_breeding_matches(store: PetStore, pet: Dict[str, Any], limit: int = 10,
                                include_related: bool = False) -> BreedingAnalysis:
    try:
        candidates = await store.find_breeding_candidates(pet, limit=100)
    except Exception as e:
        logger.warning(f"Breeding candidate query failed: {str(e)}")
        candidates = []

    scored = []
    for candidate in candidates:
        result = await evaluate_match(store, pet, candidate)
        if result.score > 0 or include_related:
            scored.append(result)
    scored.sort(key=lambda c: c.score, reverse=True)
    top = scored[:limit]

    status = determine_status(top)
    summary_th, summary_en = generate_summary(pet, top, status)
    logger.info(f"Breeding matches for {pet.get('name')}: {len(top)} candidates, status {status}")
    return BreedingAnalysis(status=status, candidates=top, summary_th=summary_th, summary_en=summary_en)


# ---------------------------------------------------------------------------
# CHAT ENTRY
# ---------------------------------------------------------------------------
async def find_mate_response(store: PetStore, pet_name: str, lang: str = "en", limit: int = 5) -> AIResponse:
    """Chat reply for "find mate for X": summary plus the top three candidates."""
    th = lang == "th"
    try:
        pet = await store.find_pet_by_name(pet_name)
    except Exception as e:
        logger.warning(f"Pet lookup failed for '{pet_name}': {str(e)}")
        pet = None
    if not pet:
        return AIResponse(text=f'ไม่พบสัตว์เลี้ยงชื่อ "{pet_name}" ในระบบครับ' if th
                          else f'Could not find a pet named "{pet_name}"')

    analysis = await find_breeding_matches(store, pet, limit=limit)
    name = pet.get("name")
    if not analysis.candidates:
        return AIResponse(text=f"💔 ไม่พบคู่ผสมที่เหมาะสมสำหรับ **{name}** ในขณะนี้ครับ" if th
                          else f"💔 No suitable matches found for **{name}**")

    lines = []
    for i, candidate in enumerate(analysis.candidates[:3], start=1):
        coi_text = f" (COI: {candidate.coi * 100:.1f}%)" if candidate.coi else ""
        label = "คะแนน" if th else "Score"
        lines.append(f"{i}. **{candidate.pet.get('name')}** ({candidate.pet.get('breed')}) - "
                     f"{label} {round(candidate.score)}/100{coi_text}")
    match_list = "\n".join(lines)

    text = (f"💕 **คู่ผสมสำหรับ {name}**\n\n{analysis.summary_th}\n\n**แนะนำ:**\n{match_list}" if th
            else f"💕 **Matches for {name}**\n\n{analysis.summary_en}\n\n**Recommended:**\n{match_list}")
    return AIResponse(text=text, type="pet_list", data=[c.to_record() for c in analysis.candidates],
                      intent="relationship")
