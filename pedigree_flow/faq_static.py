"""
Compiled-in FAQ table for recurring breeding / registration / marketplace questions.
"""

from typing import Optional

from .text_utils import clean_query

FAQ_ENTRIES = [
    {
        "id": "dog_gestation",
        "scope": "any",
        "keywords": [
            "dog pregnant", "dog pregnancy", "dog gestation", "pregnant dog", "gestation", "pregnancy length",
            "หมาตั้งท้อง", "สุนัขตั้งท้อง", "ตั้งท้องกี่เดือน", "ท้องกี่เดือน", "ท้องกี่วัน", "คลอดกี่วัน", "ตั้งครรภ์",
        ],
        "exclude": ["cat", "แมว", "แมวท้อง", "ท้องแมว"],
        "answer": {
            "th": "สุนัขตั้งท้องเฉลี่ยประมาณ 63 วัน (ช่วงปกติ 58–68 วัน) นับจากวันผสม/ตกไข่ครับ ถ้าต้องการคำนวณวันคลอดโดยประมาณ บอกวันที่ผสมได้เลย และควรยืนยันกับสัตวแพทย์อีกครั้ง",
            "en": "Dog gestation averages about 63 days (roughly 58–68 days) from ovulation/mating. If you want an estimated due date, share the mating date and confirm with your vet.",
        },
    },
    {
        "id": "cat_gestation",
        "scope": "any",
        "keywords": [
            "cat pregnant", "cat pregnancy", "cat gestation", "pregnant cat",
            "แมวตั้งท้อง", "แมวท้อง", "ท้องแมว", "ตั้งครรภ์แมว",
        ],
        "answer": {
            "th": "แมวตั้งท้องเฉลี่ยประมาณ 63–65 วัน (ราว 9 สัปดาห์) นับจากวันผสมครับ หากต้องการความแม่นยำควรปรึกษาสัตวแพทย์",
            "en": "Cat pregnancy averages about 63–65 days (around 9 weeks) from mating. For precise timing, confirm with a vet.",
        },
    },
    {
        "id": "heat_ovulation",
        "scope": "any",
        "keywords": [
            "heat", "estrus", "ovulation", "progesterone", "fertile window",
            "เป็นสัด", "วันตกไข่", "ตรวจฮอร์โมน", "รอบสัด", "ฮีท",
        ],
        "answer": {
            "th": "การเป็นสัดของสุนัขมักกินเวลา 2–4 สัปดาห์ และช่วงผสมที่เหมาะมักอยู่ราว 2–3 วันหลังตกไข่ วิธีที่แม่นคือการตรวจฮอร์โมนโปรเจสเตอโรนหรือเซลล์วิทยาช่องคลอดครับ",
            "en": "A dog’s heat typically lasts 2–4 weeks; optimal mating is often ~2–3 days after ovulation. The most accurate timing uses progesterone tests or vaginal cytology.",
        },
    },
    {
        "id": "pedigree_certificate",
        "scope": "global",
        "keywords": [
            "pedigree", "certificate", "pedigree certificate", "paper",
            "ใบเพ็ด", "ใบเพ็ดเต็ม", "ใบรับรองสายเลือด", "เอกสารสายเลือด",
        ],
        "answer": {
            "th": "ใบเพ็ดคือเอกสารสายเลือดที่ออกโดยสมาคม/องค์กรรับรองสายพันธุ์ โดยทั่วไปต้องใช้ข้อมูลพ่อแม่ เลขทะเบียน และผู้เพาะเลี้ยง หากต้องการตรวจสอบหรือออกใบเพ็ด แนะนำระบุชื่อ/เลขทะเบียนและสมาคมที่เกี่ยวข้องครับ",
            "en": "A pedigree certificate documents lineage and is issued by a recognized kennel/cat club. It typically requires parent info, registration numbers, and breeder details. Share the name/reg and club if you want help.",
        },
    },
    {
        "id": "registration_steps",
        "scope": "any",
        "keywords": [
            "register", "registration", "registering", "registration process",
            "จดทะเบียน", "ขึ้นทะเบียน", "ลงทะเบียน", "ใบทะเบียน",
        ],
        "exclude": ["registration number", "เลขทะเบียน", "reg no", "reg number"],
        "answer": {
            "th": "ขั้นตอนจดทะเบียนโดยทั่วไป: 1) ไมโครชิป 2) ข้อมูลพ่อแม่/สายเลือด 3) รูปและข้อมูลเจ้าของ 4) ติดต่อสมาคมหรือ kennel club ที่ต้องการ 5) ส่งแบบฟอร์ม/ค่าธรรมเนียม หากบอกประเทศหรือสมาคมที่ต้องการ ผมช่วยแนะนำขั้นตอนเฉพาะให้ได้ครับ",
            "en": "General registration steps: 1) Microchip 2) Parent/pedigree info 3) Photos + owner details 4) Contact your kennel/cat club 5) Submit forms/fees. Tell me your country/club and I can tailor the steps.",
        },
    },
    {
        "id": "inbreeding",
        "scope": "any",
        "keywords": [
            "inbreed", "inbreeding", "coi", "consang",
            "เลือดชิด", "ผสมชิด", "สายเลือดชิด",
        ],
        "answer": {
            "th": "ควรหลีกเลี่ยงการผสมพ่อ-ลูก หรือพี่-น้อง และตรวจสายเลือดย้อนหลังอย่างน้อย 3–5 รุ่นเพื่อลดความเสี่ยงโรคทางพันธุกรรม หากมีข้อมูล COI จะช่วยประเมินความเสี่ยงได้ดีครับ",
            "en": "Avoid close-relative pairings (parent-offspring or siblings) and review at least 3–5 generations. If you have COI data, it helps assess genetic risk.",
        },
    },
    {
        "id": "marketplace_buy",
        "scope": "global",
        "keywords": [
            "marketplace", "market", "for sale", "buy", "purchase", "shop", "adoption",
            "ตลาด", "ซื้อ", "ขาย", "ประกาศขาย", "หาบ้าน", "ตลาดสัตว์เลี้ยง", "ตลาดซื้อขาย",
        ],
        "answer": {
            "th": "โหมดตลาดช่วยให้คุณดูสัตว์ที่ลงขายหรือพร้อมย้ายบ้านได้ครับ แนะนำให้กรองตามสายพันธุ์/พื้นที่ ตรวจสอบโปรไฟล์ผู้เพาะพันธุ์ และดูเอกสารสุขภาพก่อนตัดสินใจ",
            "en": "Marketplace lets you browse pets for sale or ready to rehome. Filter by breed/location, review breeder profiles, and check health documents before deciding.",
        },
    },
    {
        "id": "marketplace_reserve",
        "scope": "global",
        "keywords": [
            "reserve", "waitlist", "deposit", "queue",
            "จอง", "มัดจำ", "รอคิว", "ขึ้นคิว",
        ],
        "answer": {
            "th": "ถ้าต้องการจองลูกสุนัข/ลูกแมว ให้ติดต่อเจ้าของผ่านโปรไฟล์และตกลงเงื่อนไขมัดจำ/คิวให้ชัดเจน หากต้องการ ผมช่วยแนะนำคำถามที่ควรถามได้ครับ",
            "en": "To reserve a puppy/kitten, contact the owner via their profile and confirm deposit/queue terms. I can suggest questions to ask if you want.",
        },
    },
]


def get_faq_answer(query: str, lang: str = "en", has_pet_context: bool = False) -> Optional[str]:
    """
    First static entry whose keywords occur in the query and whose exclude list does not.

    Global-scope entries are skipped while a pet is in focus. Pure lookup, so
    repeated calls with the same arguments return the same answer.
    """
    q = clean_query(query).lower()
    if not q:
        return None
    for entry in FAQ_ENTRIES:
        if has_pet_context and entry["scope"] == "global":
            continue
        if not has_pet_context and entry["scope"] == "pet":
            continue
        if any(k in q for k in entry.get("exclude", [])):
            continue
        if any(k in q for k in entry["keywords"]):
            answer = entry["answer"]
            return answer["th"] if lang == "th" else answer["en"]
    return None
