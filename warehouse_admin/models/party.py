"""Domain models for people and organisations: users, clients, suppliers."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from warehouse_admin.models._fields import optional_int

ADMIN_ROLE = "ADMIN"


@dataclass(frozen=True, slots=True)
class User:
    id: Optional[int]
    email: str
    name: str = ""
    phone: str = ""
    address: str = ""
    cin: str = ""
    role: str = "USER"

    @property
    def is_admin(self) -> bool:
        return (self.role or "").upper() == ADMIN_ROLE

    # ---------- mappings ----------
    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "User":
        return cls(
            id=optional_int(doc.get("id")),
            email=doc.get("email") or "",
            name=doc.get("name") or "",
            phone=doc.get("phone") or "",
            address=doc.get("address") or "",
            cin=doc.get("cin") or "",
            role=doc.get("role") or "USER",
        )

    def to_api(self) -> Dict[str, Any]:
        doc = asdict(self)
        if self.id is None:
            doc.pop("id")
        return doc


@dataclass(frozen=True, slots=True)
class Client:
    id: Optional[int]
    name: str
    email: str = ""
    phone: str = ""
    address: str = ""

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "Client":
        return cls(
            id=optional_int(doc.get("id")),
            name=doc.get("name") or "",
            email=doc.get("email") or "",
            phone=doc.get("phone") or "",
            address=doc.get("address") or "",
        )

    def to_api(self) -> Dict[str, Any]:
        doc = asdict(self)
        if self.id is None:
            doc.pop("id")
        return doc


@dataclass(frozen=True, slots=True)
class Supplier(Client):
    """Same shape as a client, different endpoint."""
