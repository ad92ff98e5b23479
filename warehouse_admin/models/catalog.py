"""Domain models for the catalogue side: warehouses, products, units, stock."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from warehouse_admin.models._fields import name_of, optional_int, to_int


@dataclass(frozen=True, slots=True)
class Warehouse:
    id: Optional[int]
    name: str
    location: str = ""
    capacity: int = 0
    description: str = ""

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "Warehouse":
        return cls(
            id=optional_int(doc.get("id")),
            name=doc.get("name") or "",
            location=doc.get("location") or "",
            capacity=to_int(doc.get("capacity")),
            description=doc.get("description") or "",
        )

    def to_api(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "location": self.location,
            "capacity": self.capacity,
            "description": self.description,
        }


@dataclass(frozen=True, slots=True)
class Product:
    id: Optional[int]
    name: str
    description: str = ""

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "Product":
        return cls(
            id=optional_int(doc.get("id")),
            name=doc.get("name") or "",
            description=doc.get("description") or "",
        )

    def to_api(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description}


@dataclass(frozen=True, slots=True)
class Unit:
    id: Optional[int]
    name: str
    abbreviation: str = ""

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "Unit":
        # the backend calls the name field "unit"
        return cls(
            id=optional_int(doc.get("id")),
            name=doc.get("unit") or doc.get("name") or "",
            abbreviation=doc.get("abbreviation") or "",
        )

    def to_api(self) -> Dict[str, Any]:
        return {"unit": self.name, "abbreviation": self.abbreviation}


@dataclass(frozen=True, slots=True)
class StockItem:
    id: Optional[int]
    product: str
    warehouse: str
    quantity: int = 0
    unit: str = ""

    def is_low(self, threshold: int = 10) -> bool:
        return self.quantity < threshold

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "StockItem":
        return cls(
            id=optional_int(doc.get("id")),
            product=name_of(doc.get("productName") or doc.get("product")),
            warehouse=name_of(doc.get("warehouseName") or doc.get("warehouse")),
            quantity=to_int(doc.get("quantity")),
            unit=name_of(doc.get("unit")),
        )
