# pedigree_flow/models.py
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any, Optional

ACTION_TYPES = ("link", "copy", "event")
RESPONSE_TYPES = ("text", "pet_list")
FAQ_SCOPES = ("any", "global", "pet")
FAQ_STATUSES = ("draft", "approved", "archived")


@dataclass
class AIAction:
    """A follow-up the UI may perform (navigate, copy to clipboard, dispatch an event)."""
    label: str
    type: str
    value: str
    primary: bool = False

    def __post_init__(self):
        if self.type not in ACTION_TYPES:
            raise ValueError(f"Unknown action type: {self.type}")

    def to_dict(self) -> Dict[str, Any]:
        data = {"label": self.label, "type": self.type, "value": self.value}
        if self.primary:
            data["primary"] = True
        return data


@dataclass
class AIResponse:
    """Structured reply returned by both routers."""
    text: str
    type: str = "text"
    data: Optional[List[Dict[str, Any]]] = None
    actions: List[AIAction] = field(default_factory=list)
    intent: Optional[str] = None
    query: Optional[str] = None
    # responses produced in the same turn after a context promotion
    followups: List["AIResponse"] = field(default_factory=list)

    @property
    def primary_action(self) -> Optional[AIAction]:
        for action in self.actions:
            if action.primary:
                return action
        return None

    @property
    def pets(self) -> List[Dict[str, Any]]:
        if self.type != "pet_list":
            return []
        return self.data or []

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"text": self.text, "type": self.type}
        if self.data is not None:
            out["data"] = self.data
        if self.actions:
            out["actions"] = [a.to_dict() for a in self.actions]
        if self.intent:
            out["intent"] = self.intent
        if self.query:
            out["query"] = self.query
        if self.followups:
            out["followups"] = [f.to_dict() for f in self.followups]
        return out


@dataclass
class PendingAction:
    """An offered next step waiting for a yes/no reply."""
    type: str
    value: str
    label: str
    related_pet_id: Optional[str] = None
    related_pet_name: Optional[str] = None
    topic: Optional[str] = None

    def to_action(self, primary: bool = True) -> AIAction:
        return AIAction(label=self.label, type=self.type, value=self.value, primary=primary)


@dataclass(frozen=True)
class ActivePet:
    id: str
    name: str

    @classmethod
    def from_record(cls, pet: Dict[str, Any]) -> "ActivePet":
        return cls(id=str(pet["id"]), name=pet.get("name") or "")


@dataclass
class FaqEntry:
    """Dynamic FAQ row as loaded from the store."""
    id: str
    scope: str = "any"
    keywords: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    question_th: Optional[str] = None
    question_en: Optional[str] = None
    answer_th: Optional[str] = None
    answer_en: Optional[str] = None
    priority: int = 0
    status: str = "approved"
    is_active: bool = True
    category: Optional[str] = None

    @classmethod
    def from_record(cls, row: Dict[str, Any]) -> "FaqEntry":
        scope = row.get("scope") or "any"
        if scope not in FAQ_SCOPES:
            scope = "any"
        return cls(
            id=str(row.get("id", "")),
            scope=scope,
            keywords=[str(k) for k in (row.get("keywords") or []) if k],
            exclude=[str(k) for k in (row.get("exclude") or []) if k],
            question_th=row.get("question_th"),
            question_en=row.get("question_en"),
            answer_th=row.get("answer_th"),
            answer_en=row.get("answer_en"),
            priority=int(row.get("priority") or 0),
            status=row.get("status") or "approved",
            is_active=bool(row.get("is_active", True)),
            category=row.get("category"),
        )

    def to_record(self) -> Dict[str, Any]:
        return asdict(self)
