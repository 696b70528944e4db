# pedigree_flow/keywords.py
# Curated bilingual (English / Thai) keyword lists. Each classifier is a pure
# function over one or more of these lists.

# === Greeting / small talk ===
GREETING_HINTS = [
    "hi", "hello", "hey", "good morning", "good evening",
    "สวัสดี", "หวัดดี", "ดีครับ", "ดีค่ะ",
]

SMALL_TALK_ACKS = [
    "ok", "okay", "k", "yes", "yep", "yeah", "thanks", "thank you", "thx", "ty",
    "โอเค", "อเค", "ขอบคุณ", "ขอบใจ", "ครับ", "ค่ะ", "คะ", "ได้เลย", "โอ้", "ว้าว", "อ้าว", "โอ้ว",
]

WEATHER_HINTS = ["weather", "อากาศ"]

# === Market ===
MARKET_HINTS = [
    "price", "market", "trend", "average", "value",
    "ราคา", "ตลาด", "แนวโน้ม", "ค่าเฉลี่ย", "ประเมิน",
]

# === Registration ===
REGISTRATION_NUMBER_HINTS = [
    "registration number", "reg number", "reg no", "reg #", "license number",
    "เลขทะเบียน", "เลขจดทะเบียน",
]

REGISTER_VERBS = [
    "register", "registration", "registering", "enroll", "enrol", "sign up", "signup",
    "จดทะเบียน", "ลงทะเบียน", "ขึ้นทะเบียน",
]

PET_TARGET_HINTS = [
    "pet", "pets", "dog", "cat", "puppy", "kitten", "animal",
    "สัตว์เลี้ยง", "สัตว์", "หมา", "สุนัข", "แมว",
]

PET_OWNERSHIP_HINTS = [
    "my", "mine", "our", "new", "another",
    "ของฉัน", "ของผม", "ของเรา", "ตัวใหม่",
]

# === Puppies / kittens for sale ===
PUPPY_DOG_HINTS = ["puppy", "puppies", "ลูกหมา", "ลูกสุนัข"]
PUPPY_CAT_HINTS = ["kitten", "kittens", "ลูกแมว"]
PUPPY_MARKET_HINTS = PUPPY_DOG_HINTS + PUPPY_CAT_HINTS + [
    "ลูกสัตว์", "baby dog", "baby cat", "want a puppy", "looking for puppy",
    "ซื้อหมา", "หาลูกหมา", "รับลูกหมา", "รับลูกสุนัข", "หาบ้าน", "พร้อมย้ายบ้าน",
    "มีลูกหมาไหม", "มีลูกแมวไหม", "ลูกหมาขายไหม", "ลูกแมวขายไหม", "puppy for sale", "kitten for sale",
]

# === Breeding match summary ===
BREEDING_MATCH_HINTS = [
    "breeding match", "planned litter", "planned breeding", "due date", "pregnant", "expected litter",
    "ผสมพันธุ์", "คู่ผสม", "ลงทะเบียนผสมพันธุ์", "คู่ไหนลงทะเบียนผสมพันธุ์", "คำนวณวันคลอด", "กำหนดคลอด",
    "ลูกจะคลอดเมื่อไหร่", "ลูกหมาที่กำลังจะคลอด", "ลูกแมวที่กำลังจะคลอด", "ลูกหมาเกิดเมื่อไหร่", "ลูกแมวเกิดเมื่อไหร่",
]

# === Search / relation ===
SEARCH_HINTS = [
    "find", "search", "looking for", "show me",
    "หา", "ค้นหา", "หาข้อมูล", "ข้อมูล", "ดูข้อมูล", "ขอข้อมูล",
    "search for", "searching", "lookup", "find info", "find information", "look for", "seacrh",
    "ค้นข้อมูล", "ช่วยหา", "ถามถึง", "ถามเรื่อง", "เกี่ยวกับ",
    "help me find", "help me search", "please find", "please search", "หาหน่อย",
]

RELATION_HINTS = [
    "family", "tree", "pedigree", "lineage", "parent", "parents", "father", "mother",
    "offspring", "child", "children", "puppy", "puppies",
    "พ่อแม่", "พ่อ", "แม่", "ลูก", "ลูกๆ", "ลูกของ", "สายเลือด", "ผังครอบครัว", "ตระกูล",
    "owner", "profile", "share", "link", "url", "copy", "contact", "certificate", "document",
    "paper", "registration", "reg",
    "เจ้าของ", "โปรไฟล์", "แชร์", "ลิงค์", "ลิ้งค์", "ใบเพ็ด", "เอกสาร", "ใบรับรอง",
    "ครอบครัว", "ผัง", "จำนวนลูก", "ลูกกี่ตัว",
]

CLEANUP_TOKENS = SEARCH_HINTS + RELATION_HINTS + [
    "ของ", "หน่อย", "ช่วย", "ขอ", "ดู", "ข้อมูลของ",
    "who is", "who owns", "owner of", "profile of", "share profile",
    "please", "can you", "could you", "help me", "for", "of", "the", "switch", "change", "other", "another",
    "exit", "leave", "reset", "clear", "forget", "not this",
    "ใคร", "ใครเป็น", "ใครคือ", "คือใคร", "เป็นใคร", "ของใคร", "ครับ", "ค่ะ", "คะ", "ไง",
    "ออกจาก", "ลืม", "รีเซ็ต", "เคลียร์", "เปลี่ยน", "ตัวอื่น", "หมาตัวอื่น", "แมวตัวอื่น", "ไม่ใช่ตัวนี้",
    "pls", "plz", "ok", "okay", "thanks", "thank you", "lol", "haha", "hahaha", "555",
    "สิ", "นะ", "โอเค", "อเค", "โอ้ว", "อ้าว", "ว้าว", "ฮ่า", "ฮ่าๆ", "ขอบคุณ", "ขอบใจ",
    "ทั้งหมด", "ข้อมูลทั้งหมด", "รายละเอียด", "ประวัติ", "ขอข้อมูลทั้งหมด",
    "น้อง",
]

# === Pet name heuristic ===
# Any of these inside an utterance marks it as a command rather than a bare name.
INTENT_WORDS = [
    "price", "market", "trend", "certificate", "pedigree", "find", "search", "show",
    "how", "why", "plan", "should", "what", "help", "analysis",
    "ราคา", "ตลาด", "แนวโน้ม", "ใบเพ็ด", "ใบรับรอง", "หา", "ค้นหา", "วางแผน", "ผสม", "สุขภาพ",
    "ข้อมูล", "พ่อแม่", "พ่อ", "แม่", "ลูก", "ผสมพันธุ์", "คู่ผสม", "พันธุกรรม", "วิเคราะห์", "แนะนำ", "เสี่ยง", "สายเลือด",
    "owner", "profile", "share", "link", "url", "copy", "contact", "who", "whose", "where", "when",
    "how many", "how much",
    "parent", "parents", "father", "mother", "offspring", "child", "children", "puppy", "puppies",
    "family", "tree", "lineage",
    "born", "birth", "birthday", "age", "pregnant", "gestation", "heat", "ovulation",
    "registration", "reg", "register", "registering", "document", "documents", "paper",
    "buy", "sell", "available", "recommend", "suggest", "switch", "change",
    "other pet", "other dog", "other cat",
    "ใคร", "ใครเป็น", "ใครคือ", "เจ้าของ", "โปรไฟล์", "แชร์", "ลิงค์", "ลิ้งค์", "เอกสาร",
    "ลูกๆ", "ลูกกี่", "กี่ตัว", "กี่เดือน", "กี่วัน", "เท่าไหร่",
    "ตั้งท้อง", "ตั้งครรภ์", "เป็นสัด", "วันตกไข่", "อาหาร", "วัคซีน",
    "ติดต่อ", "ซื้อ", "ขาย", "พร้อมขาย",
    "ok", "okay", "thanks", "thank you", "lol", "haha", "hahaha", "555", "weather", "today",
    "ทั้งหมด", "ข้อมูลทั้งหมด", "รายละเอียด", "ประวัติ", "อากาศ", "วันนี้", "โอเค", "อเค",
    "โอ้ว", "อ้าว", "ว้าว", "ฮ่า", "ฮ่าๆ", "ขอบคุณ", "ครับ", "ค่ะ", "คะ", "นะ", "หน่อย", "สิ",
]

# === Pending action replies ===
CONFIRM_EXACT = [
    "yes", "yeah", "yep", "yup", "sure", "ok", "okay", "alright", "go", "show",
    "open", "view", "please", "y", "ye", "yea", "1",
]
CONFIRM_THAI = [
    "ใช่", "ครับ", "ค่ะ", "ได้", "โอเค", "ตกลง", "เอา", "เปิด", "ดู", "แสดง", "ขอ",
    "ได้เลย", "ไปเลย", "ต้องการ",
]
REJECT_EXACT = ["no", "nope", "nah", "not now", "later", "cancel", "skip", "n", "0"]
REJECT_THAI = [
    "ไม่", "ไม่ใช่", "ไม่เอา", "ไม่ต้อง", "เดี๋ยวก่อน", "ยกเลิก", "ข้าม",
]

# === Context memory ===
CLEAR_CONTEXT_TOKENS = [
    "clear", "reset", "forget", "exit", "leave", "switch", "change",
    "other dog", "other cat", "other pet", "another dog", "another cat",
    "not this", "different dog", "different cat", "topic", "context",
    "ออกจาก", "ลืม", "รีเซ็ต", "เคลียร์", "เปลี่ยน", "เปลี่ยนเรื่อง", "เปลี่ยนหัวข้อ",
    "ตัวอื่น", "หมาตัวอื่น", "แมวตัวอื่น", "ไม่ใช่", "ไม่ใช่ตัวนี้", "คนละตัว",
]

# === Pet-context LLM gate ===
LLM_GATE_KEYWORDS = [
    "breeding", "breed", "pair", "mate", "genetic", "dna", "health", "cert", "pedigree",
    "lineage", "analysis", "plan", "why", "how", "should", "what if", "help", "explain",
    "suggest", "recommend", "risk", "consang", "inbreed",
    "ผสมพันธุ์", "ผสม", "คู่ผสม", "สายเลือด", "พันธุกรรม", "สุขภาพ", "ใบเพ็ดดีกรี",
    "วางแผน", "แนะนำ", "วิเคราะห์", "เสี่ยง", "เลือดชิด",
    "pregnant", "gestation", "heat", "ovulation", "estrus", "cycle", "nutrition", "diet", "care",
    "ตั้งท้อง", "ตั้งครรภ์", "เป็นสัด", "วันตกไข่", "โภชนาการ", "อาหาร", "ดูแล",
]

# === Pet-context draft capture ===
GENERAL_KNOWLEDGE_HINTS = [
    "breeding", "breed", "mate", "mating", "pregnant", "gestation", "heat", "ovulation", "estrus", "cycle",
    "nutrition", "diet", "food", "feeding", "care", "health", "vaccine", "vaccination", "deworm", "rabies",
    "genetic", "dna", "coi", "inbreed", "pedigree", "certificate", "registration", "register", "microchip",
    "spay", "neuter", "whelp", "litter", "puppy", "kitten", "birth", "delivery", "due date",
    "market", "marketplace", "price", "pricing", "buy", "sell", "reserve", "deposit",
    "artificial insemination", "ai breeding", "gdv", "bloat", "gastric torsion", "vet ai",
    "ผสมพันธุ์", "ตั้งท้อง", "ท้อง", "วันตกไข่", "เป็นสัด", "โภชนาการ", "อาหาร", "การดูแล", "สุขภาพ", "วัคซีน",
    "ถ่ายพยาธิ", "พิษสุนัขบ้า", "พันธุกรรม", "ใบเพ็ด", "ใบเพ็ดดีกรี", "จดทะเบียน", "ลงทะเบียน", "ไมโครชิป",
    "ทำหมัน", "คลอด", "ลูกสุนัข", "ลูกแมว", "กำหนดคลอด", "ตลาด", "ราคา", "ซื้อ", "ขาย", "จอง", "มัดจำ",
    "ผสมเทียม", "การผสมเทียม", "กระเพาะบิด", "บิดกระเพาะ", "ท้องอืด", "ปรึกษาสัตวแพทย์",
]

PET_CONTEXT_EXCLUDE_HINTS = REGISTRATION_NUMBER_HINTS + [
    "profile", "owner", "link", "share", "family tree", "parents", "father", "mother", "offspring",
    "child", "children", "brother", "sister", "age", "birthday", "birth date", "location",
    "for sale", "available", "photo", "gallery", "document", "paper",
    "โปรไฟล์", "เจ้าของ", "ลิงก์", "แชร์", "ผังครอบครัว", "พ่อแม่", "พ่อ", "แม่", "ลูก", "พี่น้อง",
    "อายุ", "วันเกิด", "สถานที่", "รูป", "แกลเลอรี", "เอกสาร", "กระดาษ", "ใบวัคซีน",
]

SPECIFIC_PET_REFERENCE_HINTS = [
    "this", "this pet", "this dog", "this cat", "my pet", "my dog", "my cat",
    "ของฉัน", "ของผม", "ของเรา", "ตัวนี้", "ตัวนั้น", "เจ้าตัวนี้", "หมาของฉัน", "แมวของฉัน",
]

GENERIC_ANSWER_BLOCKLIST = [
    "not sure", "sorry", "cannot", "can't", "no data", "no info", "unknown",
    "ขอโทษ", "ไม่ทราบ", "ไม่แน่ใจ", "ไม่มีข้อมูล", "ไม่พบข้อมูล",
]

# (name, weight, keywords); score = matched keywords x weight
FAQ_CATEGORIES = [
    ("breeding", 3, [
        "breeding", "breed", "mate", "mating", "pregnant", "pregnancy", "gestation", "heat", "heat cycle",
        "ovulation", "estrus", "estrous", "artificial insemination", "ai breeding", "stud", "stud service",
        "whelping", "whelp", "litter", "litter size", "due date", "fertile", "fertility", "conception",
        "tie", "breeding tie", "progesterone", "brucellosis", "semen", "sperm", "inseminate",
        "ผสมพันธุ์", "ผสม", "ตั้งท้อง", "ท้อง", "เป็นสัด", "วันตกไข่", "รอบเป็นสัด", "กำหนดคลอด",
        "ผสมเทียม", "การผสมเทียม", "พ่อพันธุ์", "แม่พันธุ์", "คลอด", "ลูกสุนัข", "จำนวนลูก",
        "ตรวจท้อง", "อัลตราซาวด์", "โปรเจสเตอโรน", "ติดลูก", "ท้องว่าง",
    ]),
    ("health", 2, [
        "health", "healthy", "vaccine", "vaccination", "vaccinate", "deworm", "deworming", "rabies",
        "distemper", "parvo", "parvovirus", "diet", "nutrition", "food", "feeding", "care", "treatment",
        "gdv", "bloat", "gastric torsion", "vet", "veterinary", "veterinarian", "vet ai", "sick", "illness",
        "disease", "symptom", "symptoms", "medicine", "medication", "surgery", "spay", "neuter", "sterilize",
        "hip dysplasia", "elbow dysplasia", "heart", "cardiac", "eye", "skin", "allergy", "allergies",
        "parasite", "flea", "tick", "heartworm", "checkup", "examination", "diagnosis",
        "สุขภาพ", "วัคซีน", "ฉีดวัคซีน", "โภชนาการ", "อาหาร", "ถ่ายพยาธิ", "พยาธิ", "พิษสุนัขบ้า",
        "กระเพาะบิด", "บิดกระเพาะ", "ท้องอืด", "ปรึกษาสัตวแพทย์", "หมอ", "รักษา", "การรักษา",
        "ป่วย", "อาการป่วย", "โรค", "ยา", "ผ่าตัด", "ทำหมัน", "ตรวจสุขภาพ", "ภูมิแพ้",
        "เห็บ", "หมัด", "พยาธิหัวใจ", "ตรวจ", "วินิจฉัย", "ดูแล", "การดูแล",
    ]),
    ("puppies", 2, [
        "puppy", "puppies", "kitten", "kittens", "baby", "babies", "newborn", "pup", "pups",
        "available", "available now", "coming soon", "litter", "for sale", "adopt", "adoption",
        "weaning", "wean", "socialization", "training", "housebreaking", "potty training",
        "puppy food", "puppy care", "first vaccine", "first shot",
        "ลูกหมา", "ลูกสุนัข", "ลูกแมว", "ลูกตัวใหม่", "ลูกเกิดใหม่", "พร้อมขาย", "เร็วๆนี้",
        "หย่านม", "ฝึก", "ฝึกสอน", "สังคม", "อาหารลูกหมา", "วัคซีนแรก", "เข็มแรก",
        "ครอกใหม่", "ครอก", "รับเลี้ยง",
    ]),
    ("genetics", 3, [
        "genetic", "genetics", "dna", "gene", "genes", "color", "colour", "coat", "coat color",
        "inheritance", "hereditary", "dominant", "recessive", "carrier", "coi", "inbreeding",
        "inbreeding coefficient", "linebreeding", "line breeding", "outcross", "bloodline",
        "pedigree", "ancestry", "lineage", "trait", "traits", "phenotype", "genotype",
        "dilute", "merle", "brindle", "piebald", "sable", "fawn", "black", "chocolate", "liver",
        "พันธุกรรม", "ยีน", "สี", "สีขน", "สายเลือด", "เลือดชิด", "ค่าเลือดชิด", "สืบสายพันธุ์",
        "ใบเพ็ด", "ใบเพ็ดดีกรี", "บรรพบุรุษ", "ลักษณะ", "ลักษณะเด่น", "ลักษณะด้อย",
        "สีเจือจาง", "แบล็ก", "ช็อคโกแลต", "ครีม", "ขาว", "ดำ", "น้ำตาล",
    ]),
    ("registration", 2, [
        "register", "registration", "microchip", "chip", "certificate", "certified", "certification",
        "pedigree", "pedigree paper", "papers", "document", "documents", "license", "licensing",
        "kennel club", "akc", "ckc", "ukc", "fci", "tka", "tkc", "transfer", "ownership",
        "จดทะเบียน", "ลงทะเบียน", "ขึ้นทะเบียน", "ใบเพ็ด", "ไมโครชิป", "ชิป", "ใบรับรอง",
        "เอกสาร", "ใบทะเบียน", "เปลี่ยนเจ้าของ", "โอนเจ้าของ", "สมาคม", "สโมสร",
    ]),
    ("marketplace", 1, [
        "price", "pricing", "cost", "how much", "for sale", "sell", "selling", "buy", "buying",
        "market", "marketplace", "availability", "reserve", "reservation", "deposit", "payment",
        "shipping", "delivery", "transport", "pick up", "pickup", "contract", "guarantee", "warranty",
        "ราคา", "ค่าตัว", "เท่าไหร่", "เท่าไร", "ขาย", "ซื้อ", "ตลาด", "จอง", "มัดจำ", "ชำระเงิน",
        "ส่ง", "จัดส่ง", "รับ", "รับตัว", "สัญญา", "รับประกัน", "ประกัน", "พร้อมขาย", "หาซื้อ",
    ]),
    ("behavior", 2, [
        "behavior", "behaviour", "temperament", "personality", "character", "train", "training",
        "obedience", "command", "commands", "bark", "barking", "bite", "biting", "aggressive",
        "aggression", "anxiety", "anxious", "separation", "fear", "fearful", "socialize", "socialization",
        "play", "playful", "energy", "active", "calm", "friendly", "protective", "guard", "guarding",
        "พฤติกรรม", "นิสัย", "อุปนิสัย", "ฝึก", "ฝึกสอน", "เชื่อฟัง", "คำสั่ง", "เห่า", "กัด",
        "ก้าวร้าว", "วิตกกังวล", "กลัว", "เล่น", "ขี้เล่น", "พลังงาน", "ซุกซน", "สงบ", "เป็นมิตร",
    ]),
    ("support", 1, [
        "help", "support", "contact", "question", "how to", "how do", "what is", "can i", "should i",
        "problem", "issue", "error", "bug", "fix", "account", "login", "sign in", "sign up", "profile",
        "ช่วย", "ช่วยเหลือ", "ติดต่อ", "คำถาม", "ทำยังไง", "ทำอย่างไร", "คืออะไร", "ได้ไหม",
        "ปัญหา", "แก้ไข", "บัญชี", "เข้าสู่ระบบ", "ลงทะเบียน", "โปรไฟล์", "สมัคร",
    ]),
]

# === Topic shortcut ===
# (topic, priority, keywords)
TOPIC_PATTERNS = [
    ("vet", 10, [
        "vet", "veterinary", "health", "sick", "ill", "disease", "vaccine", "vaccination",
        "surgery", "operation", "medicine", "treatment", "diagnosis", "symptom",
        "allergy", "injury", "pain", "died", "death", "passed away", "deceased",
        "spay", "neuter", "checkup", "examination",
        "สัตว์แพทย์", "หมอ", "สุขภาพ", "ป่วย", "เจ็บ", "โรค", "วัคซีน", "ฉีดยา",
        "ผ่าตัด", "รักษา", "อาการ", "แพ้", "บาดเจ็บ", "เจ็บปวด",
        "เสียชีวิต", "จากไป", "ทำหมัน", "ตรวจสุขภาพ",
    ]),
    ("documents", 9, [
        "document", "documents", "doc", "docs", "paper", "papers", "paperwork", "certificate",
        "certificates", "cert", "file", "files",
        "เอกสาร", "ใบรับรอง", "ใบเพ็ด", "ใบเพ็ดเต็ม", "ไฟล์",
    ]),
    ("breeding", 8, [
        "breed", "breeding", "mate", "mating", "pregnant", "pregnancy", "puppy", "puppies",
        "kitten", "kittens", "litter", "heat", "estrus", "ovulation", "gestation",
        "stud", "dam", "sire", "inbreeding", "offspring", "genetics",
        "ผสมพันธุ์", "ผสม", "คู่ผสม", "ตั้งท้อง", "ลูก", "ลูกหมา", "ลูกแมว",
        "เป็นสัด", "ตกไข่", "ตั้งครรภ์", "พ่อพันธุ์", "แม่พันธุ์", "เลือดชิด",
        "พันธุกรรม", "ยีน",
    ]),
    ("pedigree", 7, [
        "pedigree", "family", "tree", "family tree", "ancestry", "ancestor", "parent", "parents",
        "father", "mother", "grandparent", "lineage", "heritage", "bloodline",
        "เพ็ดดีกรี", "ผัง", "ครอบครัว", "สายเลือด", "บรรพบุรุษ", "พ่อแม่",
        "พ่อ", "แม่", "ปู่ย่า", "ตายาย",
    ]),
    ("market", 6, [
        "price", "cost", "buy", "sell", "sale", "for sale", "available", "market",
        "listing", "adopt", "adoption", "offer", "deal",
        "ราคา", "ซื้อ", "ขาย", "หาซื้อ", "ขายอยู่", "ตลาด", "ประกาศ", "เปิดขาย",
    ]),
    ("owner", 5, [
        "owner", "contact", "breeder", "who owns", "belong to", "whose",
        "เจ้าของ", "ติดต่อ", "นักเพาะพันธุ์", "ของใคร", "เป็นของ",
    ]),
]

# === Pet-context local intent table ===
BREED_PAIR_KEYWORDS = ["breed with", "mate with", "pair with", "mix with", "ผสมกับ", "จับคู่กับ", "ทับกับ"]

PET_SEARCH_TOKENS = [
    "find", "search", "search for", "looking for", "show me", "lookup", "หา", "มี",
    "ค้นหา", "หาข้อมูล", "ค้นข้อมูล", "ดูข้อมูล", "ขอข้อมูล",
]

# Order is the match priority.
LOCAL_INTENTS = [
    ("family_tree", [
        "family", "tree", "pedigree", "ancestor", "grandparent", "grandfather", "grandmother",
        "ปู่", "ย่า", "ตา", "ยาย", "พ่อแม่", "parents", "parent", "father", "mother", "sire", "dam",
        "grandparents", "พ่อ", "แม่", "สายเลือด", "ครอบครัว", "ผัง",
    ]),
    ("summary", [
        "summary", "details", "all info", "all about", "info",
        "ข้อมูลทั้งหมด", "รายละเอียด", "ประวัติ", "ขอข้อมูลทั้งหมด", "ข้อมูลทั้งหมดของ",
    ]),
    ("siblings", [
        "sibling", "siblings", "brother", "sister", "พี่น้อง", "พี่ชาย", "พี่สาว", "น้องชาย", "น้องสาว",
    ]),
    ("location", ["location", "where", "อยู่ไหน", "อยู่ที่ไหน", "ที่ไหน", "อยู่ที่"]),
    ("genetics", ["color", "gene", "breed", "สี", "พันธุ์", "กรรมพันธุ์"]),
    ("greeting", ["hi", "hello", "hey", "good morning", "sawasdee", "หวัดดี", "ดีครับ", "ดีค่ะ"]),
    ("birthday", ["birthday", "born", "age", "old", "วันเกิด", "อายุ", "เกิด"]),
    ("registration", [
        "registration", "reg no", "number", "license", "reg", "เลขทะเบียน", "ทะเบียน", "ใบทะเบียน",
    ]),
    ("share", [
        "share", "link", "url", "copy", "profile", "share profile", "share link", "profile link",
        "แชร์", "ลิงก์", "ลิ้งค์", "ลิงค์", "โปรไฟล์", "ส่งต่อ",
    ]),
    ("sale_status", ["price", "sale", "sold", "available", "buy", "cost", "how much", "ราคา", "ขาย", "ซื้อ"]),
    ("offspring", [
        "child", "children", "puppy", "puppies", "son", "daughter", "baby", "offspring",
        "ลูก", "ทายาท", "ลูกๆ", "ลูกกี่ตัว", "กี่ตัว", "จำนวนลูก",
    ]),
    ("documents", [
        "paper", "papers", "pedigree certificate", "cert", "certificate", "document", "documents", "vaccine", "file",
        "ใบเพ็ด", "ใบเพ็ดเต็ม", "เอกสาร", "ใบรับรอง", "วัคซีน",
    ]),
    ("owner", [
        "owner", "who owns", "who is owner", "owner of", "contact", "breeder",
        "เจ้าของ", "ใครเป็นเจ้าของ", "ผู้ครอบครอง", "คนเลี้ยง", "ติดต่อ",
    ]),
    ("search", [
        "find", "search", "looking for", "show me", "lookup",
        "หา", "มี", "ค้นหา", "หาข้อมูล", "ค้นข้อมูล", "ดูข้อมูล",
    ]),
]
