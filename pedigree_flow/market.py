"""
Market data for the assistant: price snapshot, breed price statistics,
puppy / kitten listings and the registered breeding-match summary.
"""

import asyncio
import logging
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

import pandas as pd

from . import config
from .intent_classifier import puppy_pet_type
from .models import AIAction, AIResponse
from .pet_data import PetStore

logger = logging.getLogger(__name__)

BREEDING_MATCH_STATUSES = ("planned", "mated", "confirmed")

STATUS_LABELS = {
    "en": {"planned": "Planned", "mated": "Mated", "confirmed": "Confirmed"},
    "th": {"planned": "วางแผน", "mated": "ผสมแล้ว", "confirmed": "ยืนยันแล้ว"},
}

LISTING_LABELS = {
    "en": {"cat": "kittens", "dog": "puppies", None: "pets"},
    "th": {"cat": "ลูกแมว", "dog": "ลูกหมา", None: "สัตว์เลี้ยง"},
}


def marketplace_action(lang: str = "en") -> AIAction:
    return AIAction(label="ดูตลาด" if lang == "th" else "Open Marketplace", type="link",
                    value="#marketplace", primary=True)


def parse_date(value: Any) -> Optional[date]:
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value)[:10]).date()
    except ValueError:
        return None


def add_days(value: Any, days: int) -> Optional[date]:
    base = parse_date(value)
    return base + timedelta(days=days) if base else None


def format_date_short(value: Any) -> Optional[str]:
    """'Mar 8, 2024' style date, or None when the value does not parse."""
    parsed = parse_date(value)
    if parsed is None:
        return None
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def _price_frame(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    df = pd.DataFrame(rows or [], columns=["id", "name", "breed", "price"])
    df["price"] = pd.to_numeric(df["price"], errors="coerce")
    return df[df["price"] > 0]


# ---------------------------------------------------------------------------
# MARKET SNAPSHOT
# ---------------------------------------------------------------------------
async def get_market_snapshot(store: PetStore, limit: int = 50) -> Optional[Dict[str, Any]]:
    """Price summary over up to `limit` priced pets, or None when there is nothing priced."""
    try:
        rows = await store.get_priced_pets(limit=limit)
    except Exception as e:
        logger.warning(f"Market snapshot query failed: {str(e)}")
        return None

    df = _price_frame(rows)
    if df.empty:
        return None

    by_breed = df.dropna(subset=["breed"]).groupby("breed")["price"].mean().round(0)
    return {
        "avg_price": round(float(df["price"].mean()), 2),
        "min_price": float(df["price"].min()),
        "max_price": float(df["price"].max()),
        "median_price": float(df["price"].median()),
        "samples": int(len(df)),
        "breed_averages": {str(b): float(p) for b, p in by_breed.items()},
        "recent_listings_sample": df.head(5)[["id", "name", "breed", "price"]].to_dict("records"),
    }


def format_market_summary(snapshot: Dict[str, Any], lang: str = "en") -> str:
    """Deterministic market summary, used when no advisor answer is available."""
    top = sorted(snapshot.get("breed_averages", {}).items(), key=lambda kv: kv[1], reverse=True)[:3]
    unit = "บาท" if lang == "th" else "THB"
    breeds = "\n".join(f"{i}. {breed}: ~{avg:,.0f} {unit}" for i, (breed, avg) in enumerate(top, start=1))
    avg, low, high = snapshot["avg_price"], snapshot["min_price"], snapshot["max_price"]
    if lang == "th":
        text = (f"📊 **สรุปตลาด**\n\n"
                f"• ราคาเฉลี่ย: **{avg:,.0f} บาท**\n"
                f"• ช่วงราคา: {low:,.0f} - {high:,.0f} บาท\n"
                f"• จำนวนตัวอย่าง: {snapshot['samples']} รายการ")
        return text + (f"\n\n🏆 **ราคาเฉลี่ยตามสายพันธุ์**\n{breeds}" if breeds else "")
    text = (f"📊 **Market Summary**\n\n"
            f"• Average Price: **{avg:,.0f} THB**\n"
            f"• Range: {low:,.0f} - {high:,.0f} THB\n"
            f"• Sample Size: {snapshot['samples']} listings")
    return text + (f"\n\n🏆 **Top Breeds by Price**\n{breeds}" if breeds else "")


def breed_price_stats(rows: List[Dict[str, Any]]) -> Optional[Dict[str, float]]:
    df = _price_frame(rows)
    if df.empty:
        return None
    return {
        "avg_price": float(df["price"].mean()),
        "min_price": float(df["price"].min()),
        "max_price": float(df["price"].max()),
        "samples": int(len(df)),
    }


def market_insight(pet: Dict[str, Any], breed_prices: List[Dict[str, Any]], lang: str = "en") -> Optional[str]:
    """One sentence comparing the pet's price with its breed average."""
    price = pet.get("price")
    stats = breed_price_stats(breed_prices)
    if not isinstance(price, (int, float)) or price <= 0 or not stats or stats["avg_price"] <= 0:
        return None
    diff = (price - stats["avg_price"]) / stats["avg_price"] * 100
    avg = f"{stats['avg_price']:,.0f}"
    if abs(diff) < 1:
        return (f"ราคาอยู่ระดับเดียวกับค่าเฉลี่ยสายพันธุ์ ({avg} บาท)" if lang == "th"
                else f"Price is in line with the breed average ({avg} THB).")
    direction_th = "สูงกว่า" if diff > 0 else "ต่ำกว่า"
    direction_en = "above" if diff > 0 else "below"
    return (f"ราคา{direction_th}ค่าเฉลี่ยสายพันธุ์ {abs(diff):.0f}% (เฉลี่ย {avg} บาท จาก {stats['samples']} รายการ)"
            if lang == "th"
            else f"Price is {abs(diff):.0f}% {direction_en} the breed average ({avg} THB across {stats['samples']} listings).")


# ---------------------------------------------------------------------------
# PUPPY / KITTEN LISTINGS
# ---------------------------------------------------------------------------
async def get_puppy_listings(store: PetStore, query: str, lang: str = "en",
                             today: Optional[date] = None, limit: int = 8) -> AIResponse:
    pet_type = puppy_pet_type(query)
    label = LISTING_LABELS["th" if lang == "th" else "en"][pet_type]
    cutoff = (today or date.today()) - timedelta(days=config.LISTING_MAX_AGE_DAYS)

    rows: List[Dict[str, Any]] = []
    try:
        rows = await store.get_listings(pet_type=pet_type, born_after=cutoff.isoformat(), limit=limit)
        if not rows:
            rows = await store.get_listings(pet_type=pet_type, limit=limit)
    except Exception as e:
        logger.warning(f"Listing query failed: {str(e)}")
        rows = []

    actions = [marketplace_action(lang)]
    if rows:
        text = (f"ตอนนี้มี{label}ที่ลงขาย {len(rows)} รายการ ดูรายการด้านล่างได้เลยครับ" if lang == "th"
                else f"I found {len(rows)} {label} for sale. See the list below.")
        return AIResponse(text=text, type="pet_list", data=rows, actions=actions, intent="search")

    text = (f"ตอนนี้ยังไม่พบ{label}ที่ลงขายครับ ลองดูในตลาดหรือบอกสายพันธุ์ที่ต้องการได้เลย" if lang == "th"
            else f"I couldn't find {label} for sale right now. Try the marketplace or tell me the breed you want.")
    return AIResponse(text=text, actions=actions, intent="search")


# ---------------------------------------------------------------------------
# BREEDING MATCH SUMMARY
# ---------------------------------------------------------------------------
async def _count_offspring(store: PetStore, pet_id: str) -> Optional[int]:
    try:
        return await store.count_offspring(pet_id)
    except Exception as e:
        logger.warning(f"Offspring count failed for {pet_id}: {str(e)}")
        return None


async def get_breeding_matches_summary(store: PetStore, lang: str = "en", limit: int = 5) -> AIResponse:
    th = lang == "th"
    try:
        matches = await store.get_breeding_matches(BREEDING_MATCH_STATUSES, limit=limit)
    except Exception as e:
        logger.warning(f"Breeding match query failed: {str(e)}")
        matches = []

    if not matches:
        text = ("ตอนนี้ยังไม่มีคู่ผสมพันธุ์ที่ลงทะเบียนไว้ครับ หากต้องการเพิ่มรายการ ให้แจ้งชื่อพ่อและแม่ แล้วผมช่วยแนะนำขั้นตอนต่อได้" if th
                else "There are no registered breeding matches yet. If you want to add one, share the sire and dam names and I can guide you.")
        return AIResponse(text=text, intent="analysis")

    pet_ids = list(dict.fromkeys(i for m in matches for i in (m.get("sire_id"), m.get("dam_id")) if i))
    try:
        pets = await store.get_pets_by_ids(pet_ids)
    except Exception as e:
        logger.warning(f"Breeding match pet lookup failed: {str(e)}")
        pets = []
    pet_by_id = {p["id"]: p for p in pets}

    counts = await asyncio.gather(*(_count_offspring(store, i) for i in pet_ids))
    offspring_counts = {i: c for i, c in zip(pet_ids, counts) if c is not None}

    labels = STATUS_LABELS["th" if th else "en"]
    unknown = "ไม่ทราบ" if th else "Unknown"
    lines = []
    for index, match in enumerate(matches, start=1):
        sire = pet_by_id.get(match.get("sire_id")) or {}
        dam = pet_by_id.get(match.get("dam_id")) or {}
        breed = sire.get("breed") or dam.get("breed") or ("ไม่ทราบสายพันธุ์" if th else "Unknown breed")
        due = parse_date(match.get("due_date")) or add_days(match.get("match_date"), config.GESTATION_DAYS)
        due_label = format_date_short(due) or ("ไม่ทราบ" if th else "TBD")
        status = labels.get(match.get("status"), "ไม่ทราบสถานะ" if th else "Unknown")

        sire_count = offspring_counts.get(match.get("sire_id"))
        dam_count = offspring_counts.get(match.get("dam_id"))
        note = ""
        if sire_count is not None or dam_count is not None:
            note = (f" พ่อมีลูกที่บันทึกไว้ {sire_count or 0} ตัว, แม่มีลูกที่บันทึกไว้ {dam_count or 0} ตัว" if th
                    else f" Sire has {sire_count or 0} recorded offspring; Dam has {dam_count or 0}.")

        if th:
            lines.append(f"{index}) พ่อ {sire.get('name') or unknown} × แม่ {dam.get('name') or unknown} "
                         f"({breed}) สถานะ: {status} คาดคลอด: {due_label}.{note}")
        else:
            lines.append(f"{index}) Sire {sire.get('name') or unknown} × Dam {dam.get('name') or unknown} "
                         f"({breed}) Status: {status}. Due: {due_label}.{note}")

    header = (f"พบคู่ผสมพันธุ์ที่ลงทะเบียนไว้ {len(matches)} คู่:" if th
              else f"I found {len(matches)} registered breeding matches:")
    return AIResponse(
        text=f"{header}\n\n" + "\n".join(lines),
        intent="analysis",
        actions=[marketplace_action(lang)],
    )
