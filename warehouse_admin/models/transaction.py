"""Domain models for stock movements: orders, purchases, shipments, etc."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from warehouse_admin.models._fields import name_of, optional_int, parse_date, to_int


@dataclass(frozen=True, slots=True)
class TransactionLine:
    """One product line of an order or a purchase."""

    product: str
    unit: str
    quantity: int
    id: Optional[int] = None
    product_id: Optional[int] = None
    unit_id: Optional[int] = None

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "TransactionLine":
        return cls(
            id=optional_int(doc.get("id")),
            product=name_of(doc.get("productName") or doc.get("product")),
            unit=name_of(doc.get("unit")),
            quantity=to_int(doc.get("quantity")),
            product_id=_ref_id(doc, "productId", "product"),
            unit_id=_ref_id(doc, "unitId", "unit"),
        )


def _ref_id(doc: Dict[str, Any], key: str, nested: str) -> Optional[int]:
    """`productId: 3` or `product: {"id": 3, ...}`."""
    if doc.get(key) is not None:
        return optional_int(doc.get(key))
    ref = doc.get(nested)
    return optional_int(ref.get("id")) if isinstance(ref, dict) else None


def _lines(raw: Any) -> Tuple[TransactionLine, ...]:
    return tuple(TransactionLine.from_api(line) for line in (raw or []))


@dataclass(frozen=True, slots=True)
class Order:
    id: Optional[int]
    reference: str
    client: str = ""
    order_date: Optional[datetime] = None
    items: Tuple[TransactionLine, ...] = field(default_factory=tuple)
    client_id: Optional[int] = None

    @property
    def item_count(self) -> int:
        return len(self.items)

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "Order":
        return cls(
            id=optional_int(doc.get("id")),
            reference=doc.get("orderReference") or "",
            client=name_of(doc.get("clientName") or doc.get("client")),
            order_date=parse_date(doc.get("orderDate")),
            items=_lines(doc.get("orderItems")),
            client_id=_ref_id(doc, "clientId", "client"),
        )


@dataclass(frozen=True, slots=True)
class Purchase:
    id: Optional[int]
    reference: str
    supplier: str = ""
    purchase_date: Optional[datetime] = None
    items: Tuple[TransactionLine, ...] = field(default_factory=tuple)
    supplier_id: Optional[int] = None

    @property
    def item_count(self) -> int:
        return len(self.items)

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "Purchase":
        return cls(
            id=optional_int(doc.get("id")),
            reference=doc.get("purchaseReference") or "",
            supplier=name_of(doc.get("supplierName") or doc.get("supplier")),
            purchase_date=parse_date(doc.get("purchaseDate")),
            items=_lines(doc.get("purchaseItems")),
            supplier_id=_ref_id(doc, "supplierId", "supplier"),
        )


@dataclass(frozen=True, slots=True)
class Shipment:
    id: Optional[int]
    shipment_date: Optional[datetime]
    product: str
    quantity: int
    unit: str = ""
    warehouse: str = ""
    remarks: str = ""
    order_reference: Optional[str] = None
    client: Optional[str] = None

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "Shipment":
        return cls(
            id=optional_int(doc.get("id")),
            shipment_date=parse_date(doc.get("shipmentDate")),
            product=name_of(doc.get("product")),
            quantity=to_int(doc.get("quantity")),
            unit=name_of(doc.get("unit")),
            warehouse=name_of(doc.get("warehouse")),
            remarks=doc.get("remarks") or "",
            order_reference=doc.get("orderReference"),
            client=doc.get("clientName"),
        )


@dataclass(frozen=True, slots=True)
class Reception:
    id: Optional[int]
    reception_date: Optional[datetime]
    product: str
    quantity: int
    unit: str = ""
    warehouse: str = ""
    remarks: str = ""
    purchase_reference: Optional[str] = None
    supplier: Optional[str] = None

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "Reception":
        return cls(
            id=optional_int(doc.get("id")),
            reception_date=parse_date(doc.get("receptionDate")),
            product=name_of(doc.get("product")),
            quantity=to_int(doc.get("quantity")),
            unit=name_of(doc.get("unit")),
            warehouse=name_of(doc.get("warehouse")),
            remarks=doc.get("remarks") or "",
            purchase_reference=doc.get("purchaseReference"),
            supplier=doc.get("supplierName"),
        )


@dataclass(frozen=True, slots=True)
class Transfer:
    id: Optional[int]
    transfer_date: Optional[datetime]
    product: str
    quantity: int
    source_warehouse: str = ""
    destination_warehouse: str = ""
    unit: str = ""
    remarks: str = ""

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "Transfer":
        return cls(
            id=optional_int(doc.get("id")),
            transfer_date=parse_date(doc.get("transferDate")),
            product=name_of(doc.get("product")),
            quantity=to_int(doc.get("quantity")),
            source_warehouse=name_of(doc.get("sourceWarehouse")),
            destination_warehouse=name_of(doc.get("destinationWarehouse")),
            unit=name_of(doc.get("unit")),
            remarks=doc.get("remarks") or "",
        )


INVENTORY_STATUSES: List[str] = ["CREATED", "VALIDATED", "CANCELLED"]


@dataclass(frozen=True, slots=True)
class Inventory:
    id: Optional[int]
    inventory_date: Optional[datetime]
    warehouse: str
    done_by: str = ""
    validated_by: str = ""
    status: str = "CREATED"
    created_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "Inventory":
        return cls(
            id=optional_int(doc.get("id")),
            inventory_date=parse_date(doc.get("inventoryDate")),
            warehouse=name_of(doc.get("warehouse")),
            done_by=name_of(doc.get("doneBy")),
            validated_by=name_of(doc.get("validatedBy")),
            status=doc.get("status") or "CREATED",
            created_at=parse_date(doc.get("createdAt")),
        )
