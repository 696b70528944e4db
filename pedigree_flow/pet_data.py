"""
Pet data access for the pedigree assistant
Defines the store interface the routers query and an in-memory implementation
seeded with sample pedigree records
"""

import copy
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import List, Dict, Any, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

# Sample pet records (Thai Ridgeback kennel plus a few cats)
SAMPLE_PETS = [
    {
        "id": "p-thunder",
        "name": "Thunder",
        "registration_number": "TRD-1001",
        "type": "dog",
        "breed": "Thai Ridgeback",
        "gender": "male",
        "birthday": "2016-03-02",
        "color": "red",
        "location": "Bangkok",
        "owner_id": "u-somchai",
        "father_id": None,
        "mother_id": None,
        "health_certified": True,
        "created_at": "2020-01-10T08:00:00+00:00",
    },
    {
        "id": "p-storm",
        "name": "Storm",
        "registration_number": "TRD-1002",
        "type": "dog",
        "breed": "Thai Ridgeback",
        "gender": "female",
        "birthday": "2017-06-14",
        "color": "blue",
        "location": "Nonthaburi",
        "owner_id": "u-somchai",
        "father_id": None,
        "mother_id": None,
        "created_at": "2020-01-11T08:00:00+00:00",
    },
    {
        "id": "p-apollo",
        "name": "Apollo",
        "registration_number": "TRD-2001",
        "type": "dog",
        "breed": "Thai Ridgeback",
        "gender": "male",
        "birthday": "2021-05-20",
        "color": "red",
        "location": "Bangkok",
        "owner_id": "u-somchai",
        "father_id": "p-thunder",
        "mother_id": "p-storm",
        "for_sale": True,
        "available": True,
        "price": 45000,
        "health_certified": True,
        "created_at": "2021-08-01T08:00:00+00:00",
    },
    {
        "id": "p-luna",
        "name": "Luna",
        "registration_number": "TRD-2002",
        "type": "dog",
        "breed": "Thai Ridgeback",
        "gender": "female",
        "birthday": "2021-11-02",
        "color": "fawn",
        "location": "Chiang Mai",
        "owner_id": "u-nok",
        "father_id": "p-thunder",
        "mother_id": None,
        "price": 38000,
        "created_at": "2022-01-15T08:00:00+00:00",
    },
    {
        "id": "p-bella",
        "name": "Bella",
        "registration_number": "TRD-2003",
        "type": "dog",
        "breed": "Thai Ridgeback",
        "gender": "female",
        "birthday": "2020-09-09",
        "color": "black",
        "location": "Bangkok",
        "owner_id": "u-nok",
        "father_id": None,
        "mother_id": None,
        "available_for_breeding": True,
        "health_certified": True,
        "price": 52000,
        "created_at": "2021-02-01T08:00:00+00:00",
    },
    {
        "id": "p-mochi",
        "name": "Mochi",
        "registration_number": "CAT-3001",
        "type": "cat",
        "breed": "Scottish Fold",
        "gender": "female",
        "birthday": "2022-02-14",
        "color": "cream",
        "location": "Bangkok",
        "owner_id": "u-nok",
        "for_sale": True,
        "available": True,
        "price": 18000,
        "created_at": "2022-04-01T08:00:00+00:00",
    },
]

SAMPLE_PROFILES = [
    {"id": "u-somchai", "full_name": "Somchai Kennel", "phone": "081-234-5678"},
    {"id": "u-nok", "full_name": "Nok Ridgebacks", "phone": None},
]

SAMPLE_DOCUMENTS = [
    {"pet_id": "p-apollo", "title": "Pedigree Certificate", "document_type": "certificate"},
    {"pet_id": "p-apollo", "title": "Vaccination Record", "document_type": "vaccine"},
]

SAMPLE_BREEDING_MATCHES = [
    {
        "id": "m-1",
        "sire_id": "p-apollo",
        "dam_id": "p-bella",
        "match_date": "2024-01-05",
        "due_date": None,
        "status": "planned",
        "approval_status": "approved",
    },
]


def _lower(value: Any) -> str:
    return str(value or "").lower()


def _is_available(pet: Dict[str, Any]) -> bool:
    return bool(pet.get("for_sale")) or bool(pet.get("available")) or pet.get("status") == "available"


# ---------------------------------------------------------------------------
# STORE INTERFACE
# ---------------------------------------------------------------------------
class PetStore(ABC):
    """Persistence queries used by the routers. Every method is awaitable."""

    @abstractmethod
    async def list_pet_names(self, limit: int) -> List[Tuple[str, str]]:
        """Return up to `limit` (id, name) pairs."""

    @abstractmethod
    async def get_pet(self, pet_id: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    async def get_pets_by_ids(self, pet_ids: Sequence[str]) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    async def search_pets(self, term: str, fields: Sequence[str] = ("name", "breed", "registration_number"),
                          limit: int = 5) -> List[Dict[str, Any]]:
        """Case-insensitive substring search over the given fields."""

    @abstractmethod
    async def find_pet_by_name(self, name: str, exclude_id: Optional[str] = None) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    async def get_offspring(self, pet_id: str, parent_field: str) -> List[Dict[str, Any]]:
        """Pets whose `parent_field` (father_id or mother_id) equals pet_id."""

    @abstractmethod
    async def count_offspring(self, pet_id: str) -> int:
        ...

    @abstractmethod
    async def get_siblings(self, pet: Dict[str, Any], limit: int = 10) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    async def get_documents(self, pet_id: str) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    async def get_owner(self, owner_id: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    async def get_priced_pets(self, breed: Optional[str] = None, limit: int = 50) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    async def get_listings(self, pet_type: Optional[str] = None, born_after: Optional[str] = None,
                           limit: int = 8) -> List[Dict[str, Any]]:
        """For-sale, available pets, newest first."""

    @abstractmethod
    async def get_breeding_matches(self, statuses: Sequence[str], limit: int = 5) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    async def find_breeding_candidates(self, pet: Dict[str, Any], limit: int = 100) -> List[Dict[str, Any]]:
        """Opposite-gender pets of the same breed, excluding the pet itself."""

    @abstractmethod
    async def get_parent_ids(self, pet_id: str) -> Optional[Dict[str, Optional[str]]]:
        ...

    @abstractmethod
    async def fetch_faq_entries(self, limit: int) -> List[Dict[str, Any]]:
        """Approved and active FAQ rows, highest priority first."""

    @abstractmethod
    async def insert_faq_entry(self, record: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    async def log_query(self, record: Dict[str, Any]) -> None:
        ...


# ---------------------------------------------------------------------------
# IN-MEMORY STORE
# ---------------------------------------------------------------------------
class InMemoryPetStore(PetStore):
    """Store backed by plain lists of dicts; used by the demo and the tests."""

    def __init__(self, pets: Optional[List[Dict[str, Any]]] = None,
                 profiles: Optional[List[Dict[str, Any]]] = None,
                 documents: Optional[List[Dict[str, Any]]] = None,
                 breeding_matches: Optional[List[Dict[str, Any]]] = None,
                 faq_entries: Optional[List[Dict[str, Any]]] = None):
        self.pets = copy.deepcopy(pets if pets is not None else SAMPLE_PETS)
        self.profiles = copy.deepcopy(profiles if profiles is not None else SAMPLE_PROFILES)
        self.documents = copy.deepcopy(documents if documents is not None else SAMPLE_DOCUMENTS)
        self.breeding_matches = copy.deepcopy(
            breeding_matches if breeding_matches is not None else SAMPLE_BREEDING_MATCHES
        )
        self.faq_entries: List[Dict[str, Any]] = copy.deepcopy(faq_entries or [])
        self.query_pool: List[Dict[str, Any]] = []
        self.faq_fetch_count = 0

    # --- helpers -------------------------------------------------------------
    def _with_owner(self, pet: Dict[str, Any]) -> Dict[str, Any]:
        record = dict(pet)
        owner = next((p for p in self.profiles if p["id"] == pet.get("owner_id")), None)
        if owner:
            record["owner"] = {"full_name": owner.get("full_name")}
        return record

    def _newest_first(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return sorted(rows, key=lambda r: r.get("created_at") or "", reverse=True)

    # --- pets ----------------------------------------------------------------
    async def list_pet_names(self, limit: int) -> List[Tuple[str, str]]:
        rows = self._newest_first(self.pets)[:limit]
        return [(str(p["id"]), p.get("name") or "") for p in rows if p.get("name")]

    async def get_pet(self, pet_id: str) -> Optional[Dict[str, Any]]:
        key = str(pet_id or "").strip()
        pet = next((p for p in self.pets if str(p["id"]) == key), None)
        return self._with_owner(pet) if pet else None

    async def get_pets_by_ids(self, pet_ids: Sequence[str]) -> List[Dict[str, Any]]:
        wanted = {str(i) for i in pet_ids if i}
        return [self._with_owner(p) for p in self.pets if str(p["id"]) in wanted]

    async def search_pets(self, term: str, fields: Sequence[str] = ("name", "breed", "registration_number"),
                          limit: int = 5) -> List[Dict[str, Any]]:
        needle = _lower(term).strip()
        if not needle:
            return []
        hits = [p for p in self.pets if any(needle in _lower(p.get(f)) for f in fields)]
        return [self._with_owner(p) for p in hits[:limit]]

    async def find_pet_by_name(self, name: str, exclude_id: Optional[str] = None) -> Optional[Dict[str, Any]]:
        needle = _lower(name).strip()
        if not needle:
            return None
        for pet in self.pets:
            if exclude_id and str(pet["id"]) == str(exclude_id):
                continue
            if needle in _lower(pet.get("name")):
                return self._with_owner(pet)
        return None

    async def get_offspring(self, pet_id: str, parent_field: str) -> List[Dict[str, Any]]:
        if parent_field not in ("father_id", "mother_id"):
            raise ValueError(f"Unknown parent field: {parent_field}")
        return [self._with_owner(p) for p in self.pets if p.get(parent_field) == pet_id]

    async def count_offspring(self, pet_id: str) -> int:
        return sum(1 for p in self.pets if pet_id in (p.get("father_id"), p.get("mother_id")))

    async def get_siblings(self, pet: Dict[str, Any], limit: int = 10) -> List[Dict[str, Any]]:
        father_id, mother_id = pet.get("father_id"), pet.get("mother_id")
        if not father_id and not mother_id:
            return []
        siblings = [
            p for p in self.pets
            if p["id"] != pet.get("id")
            and ((father_id and p.get("father_id") == father_id) or (mother_id and p.get("mother_id") == mother_id))
        ]
        return [self._with_owner(p) for p in siblings[:limit]]

    async def get_documents(self, pet_id: str) -> List[Dict[str, Any]]:
        return [
            {"title": d.get("title"), "document_type": d.get("document_type")}
            for d in self.documents if d.get("pet_id") == pet_id
        ]

    async def get_owner(self, owner_id: str) -> Optional[Dict[str, Any]]:
        owner = next((p for p in self.profiles if p["id"] == owner_id), None)
        return dict(owner) if owner else None

    async def get_priced_pets(self, breed: Optional[str] = None, limit: int = 50) -> List[Dict[str, Any]]:
        rows = [
            p for p in self._newest_first(self.pets)
            if isinstance(p.get("price"), (int, float)) and p["price"] > 0
            and (breed is None or p.get("breed") == breed)
        ]
        return [dict(p) for p in rows[:limit]]

    async def get_listings(self, pet_type: Optional[str] = None, born_after: Optional[str] = None,
                           limit: int = 8) -> List[Dict[str, Any]]:
        rows = [
            p for p in self._newest_first(self.pets)
            if p.get("for_sale") and p.get("available")
            and (pet_type is None or _lower(p.get("type")) == pet_type)
            and (born_after is None or (p.get("birthday") or "") >= born_after)
        ]
        return [self._with_owner(p) for p in rows[:limit]]

    async def get_breeding_matches(self, statuses: Sequence[str], limit: int = 5) -> List[Dict[str, Any]]:
        rows = [
            m for m in self.breeding_matches
            if m.get("status") in statuses and m.get("approval_status") in ("approved", None)
        ]
        rows.sort(key=lambda m: m.get("match_date") or "", reverse=True)
        return [dict(m) for m in rows[:limit]]

    async def find_breeding_candidates(self, pet: Dict[str, Any], limit: int = 100) -> List[Dict[str, Any]]:
        target_gender = "female" if pet.get("gender") == "male" else "male"
        rows = [
            p for p in self.pets
            if p.get("gender") == target_gender
            and p["id"] != pet.get("id")
            and (not pet.get("breed") or p.get("breed") == pet.get("breed"))
        ]
        return [self._with_owner(p) for p in rows[:limit]]

    async def get_parent_ids(self, pet_id: str) -> Optional[Dict[str, Optional[str]]]:
        pet = next((p for p in self.pets if p["id"] == pet_id), None)
        if not pet:
            return None
        return {"father_id": pet.get("father_id"), "mother_id": pet.get("mother_id")}

    # --- FAQ + query pool ----------------------------------------------------
    async def fetch_faq_entries(self, limit: int) -> List[Dict[str, Any]]:
        self.faq_fetch_count += 1
        rows = [
            r for r in self.faq_entries
            if r.get("status") == "approved" and r.get("is_active", True)
        ]
        rows.sort(key=lambda r: r.get("priority") or 0, reverse=True)
        return copy.deepcopy(rows[:limit])

    async def insert_faq_entry(self, record: Dict[str, Any]) -> None:
        row = dict(record)
        row.setdefault("id", f"faq-{len(self.faq_entries) + 1}")
        row.setdefault("is_active", True)
        row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
        self.faq_entries.append(row)
        logger.info(f"Stored FAQ entry {row['id']} with status {row.get('status')}")

    async def log_query(self, record: Dict[str, Any]) -> None:
        self.query_pool.append(dict(record))

    # --- curation helpers (outside the resolver) -----------------------------
    def approve_faq_entry(self, entry_id: str) -> bool:
        """Promote a stored draft to approved + active, as a curator would."""
        for row in self.faq_entries:
            if row.get("id") == entry_id:
                row["status"] = "approved"
                row["is_active"] = True
                return True
        return False
