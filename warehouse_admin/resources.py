# warehouse_admin/resources.py
"""
Registry of the collections the console can browse.

Each `ResourceDefinition` tells the generic list screen how to fetch,
display, search and edit one kind of record.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from warehouse_admin.api.resources import QueryParamResourceApi, ResourceApi, StockApi
from warehouse_admin.models import (
    Client,
    Inventory,
    Order,
    Product,
    Purchase,
    Reception,
    Shipment,
    StockItem,
    Supplier,
    Transfer,
    Unit,
    User,
    Warehouse,
)
from warehouse_admin.utils.formatters import format_date, truncate_text


@dataclass(frozen=True, slots=True)
class Column:
    title: str
    attr: str
    render: Optional[Callable[[Any], str]] = None

    def value(self, record: Any) -> str:
        raw = getattr(record, self.attr, None)
        if self.render is not None:
            return self.render(raw)
        return "" if raw is None else str(raw)


@dataclass(frozen=True, slots=True)
class FormField:
    name: str           # key sent to the backend
    label: str
    required: bool = False
    kind: str = "text"  # text | int | date | password
    attr: Optional[str] = None  # model attribute used to prefill on edit
    lookup: Optional[str] = None  # resource searched by name to fill an id

    def prefill(self, record: Any) -> str:
        if record is None:
            return ""
        raw = getattr(record, self.attr or self.name, None)
        if raw is None:
            return ""
        if self.kind == "date":
            return format_date(raw, "%Y-%m-%d")
        return str(raw)


@dataclass(frozen=True, slots=True)
class LineItems:
    """Product lines carried by an order or a purchase."""
    payload_key: str    # e.g. "orderItems"
    label: str
    attr: str = "items"


@dataclass(frozen=True, slots=True)
class ResourceDefinition:
    key: str
    title: str
    endpoint: str
    model: Type[Any]
    columns: Tuple[Column, ...]
    search_fields: Tuple[str, ...] = ()
    form_fields: Tuple[FormField, ...] = ()
    admin_only: bool = False
    has_count_endpoint: bool = False
    read_only: bool = False
    api_class: Type[ResourceApi] = ResourceApi
    hotkey: Optional[str] = None
    line_items: Optional[LineItems] = None

    @property
    def editable(self) -> bool:
        return not self.read_only and bool(self.form_fields)

    @property
    def item_name(self) -> str:
        """Singular title, e.g. "Inventory" for "Inventories"."""
        if self.title.endswith("ies"):
            return self.title[:-3] + "y"
        return self.title[:-1] if self.title.endswith("s") else self.title

    def parse(self, doc: Dict[str, Any]) -> Any:
        return self.model.from_api(doc)

    def row(self, record: Any) -> List[str]:
        return [c.value(record) for c in self.columns]

    def matches(self, record: Any, query: str) -> bool:
        """Case-insensitive substring match over the searchable attributes."""
        if not query:
            return True
        needle = query.lower()
        return any(needle in str(getattr(record, name, "") or "").lower() for name in self.search_fields)


def _date(value: Any) -> str:
    return format_date(value, "%Y-%m-%d")


def _count(value: Any) -> str:
    return str(len(value or ()))


def _short(value: Any) -> str:
    return truncate_text(value or "", 40)


RESOURCES: Dict[str, ResourceDefinition] = {}


def register(definition: ResourceDefinition) -> ResourceDefinition:
    RESOURCES[definition.key] = definition
    return definition


def get_resource(key: str) -> ResourceDefinition:
    try:
        return RESOURCES[key]
    except KeyError:
        raise KeyError(f"Unknown resource '{key}'. Known: {', '.join(sorted(RESOURCES))}") from None


# ---------------------------------------------------------------------- #
# definitions
# ---------------------------------------------------------------------- #

register(ResourceDefinition(
    key="users",
    title="Users",
    endpoint="users",
    model=User,
    columns=(
        Column("ID", "id"), Column("Name", "name"), Column("Email", "email"),
        Column("Phone", "phone"), Column("Role", "role"),
    ),
    search_fields=("name", "email", "role"),
    form_fields=(
        FormField("name", "Name", required=True),
        FormField("email", "Email", required=True),
        FormField("phone", "Phone"),
        FormField("address", "Address"),
        FormField("cin", "CIN"),
        FormField("role", "Role", required=True),
        FormField("password", "Password", kind="password"),
    ),
    admin_only=True,
    has_count_endpoint=True,
    hotkey="u",
))

register(ResourceDefinition(
    key="warehouses",
    title="Warehouses",
    endpoint="warehouses",
    model=Warehouse,
    columns=(
        Column("ID", "id"), Column("Name", "name"), Column("Location", "location"),
        Column("Capacity", "capacity"), Column("Description", "description", _short),
    ),
    search_fields=("name", "location", "description"),
    form_fields=(
        FormField("name", "Name", required=True),
        FormField("location", "Location", required=True),
        FormField("capacity", "Capacity", kind="int"),
        FormField("description", "Description"),
    ),
    admin_only=True,
    hotkey="w",
))

register(ResourceDefinition(
    key="products",
    title="Products",
    endpoint="products",
    model=Product,
    columns=(Column("ID", "id"), Column("Name", "name"), Column("Description", "description", _short)),
    search_fields=("name", "description"),
    form_fields=(
        FormField("name", "Name", required=True),
        FormField("description", "Description"),
    ),
    api_class=QueryParamResourceApi,
    hotkey="p",
))

register(ResourceDefinition(
    key="units",
    title="Units",
    endpoint="units",
    model=Unit,
    columns=(Column("ID", "id"), Column("Unit", "name"), Column("Abbreviation", "abbreviation")),
    search_fields=("name", "abbreviation"),
    form_fields=(
        FormField("unit", "Unit", required=True, attr="name"),
        FormField("abbreviation", "Abbreviation", required=True),
    ),
))

register(ResourceDefinition(
    key="clients",
    title="Clients",
    endpoint="clients",
    model=Client,
    columns=(
        Column("ID", "id"), Column("Name", "name"), Column("Email", "email"),
        Column("Phone", "phone"), Column("Address", "address"),
    ),
    search_fields=("name", "email", "phone"),
    form_fields=(
        FormField("name", "Name", required=True),
        FormField("email", "Email", required=True),
        FormField("phone", "Phone"),
        FormField("address", "Address"),
    ),
    hotkey="c",
))

register(ResourceDefinition(
    key="suppliers",
    title="Suppliers",
    endpoint="suppliers",
    model=Supplier,
    columns=(
        Column("ID", "id"), Column("Name", "name"), Column("Email", "email"),
        Column("Phone", "phone"), Column("Address", "address"),
    ),
    search_fields=("name", "email", "phone"),
    form_fields=(
        FormField("name", "Name", required=True),
        FormField("email", "Email", required=True),
        FormField("phone", "Phone"),
        FormField("address", "Address"),
    ),
    hotkey="s",
))

register(ResourceDefinition(
    key="orders",
    title="Orders",
    endpoint="orders",
    model=Order,
    columns=(
        Column("ID", "id"), Column("Reference", "reference"), Column("Client", "client"),
        Column("Date", "order_date", _date), Column("Items", "items", _count),
    ),
    search_fields=("reference", "client"),
    form_fields=(
        FormField("orderReference", "Reference", required=True, attr="reference"),
        FormField("orderDate", "Date (YYYY-MM-DD)", required=True, kind="date", attr="order_date"),
        FormField("clientId", "Client ID", required=True, kind="int", attr="client_id", lookup="clients"),
    ),
    line_items=LineItems("orderItems", "Order items"),
    has_count_endpoint=True,
    hotkey="o",
))

register(ResourceDefinition(
    key="purchases",
    title="Purchases",
    endpoint="purchases",
    model=Purchase,
    columns=(
        Column("ID", "id"), Column("Reference", "reference"), Column("Supplier", "supplier"),
        Column("Date", "purchase_date", _date), Column("Items", "items", _count),
    ),
    search_fields=("reference", "supplier"),
    form_fields=(
        FormField("purchaseReference", "Reference", required=True, attr="reference"),
        FormField("purchaseDate", "Date (YYYY-MM-DD)", required=True, kind="date", attr="purchase_date"),
        FormField("supplierId", "Supplier ID", required=True, kind="int", attr="supplier_id", lookup="suppliers"),
    ),
    line_items=LineItems("purchaseItems", "Purchase items"),
    has_count_endpoint=True,
    hotkey="b",
))

register(ResourceDefinition(
    key="shipments",
    title="Shipments",
    endpoint="shipments",
    model=Shipment,
    columns=(
        Column("ID", "id"), Column("Date", "shipment_date", _date), Column("Product", "product"),
        Column("Qty", "quantity"), Column("Unit", "unit"), Column("Warehouse", "warehouse"),
        Column("Order", "order_reference"), Column("Client", "client"),
    ),
    search_fields=("product", "warehouse", "order_reference", "client", "remarks"),
    form_fields=(
        FormField("shipmentDate", "Date (YYYY-MM-DD)", required=True, kind="date", attr="shipment_date"),
        FormField("productId", "Product ID", required=True, kind="int"),
        FormField("unitId", "Unit ID", required=True, kind="int"),
        FormField("warehouseId", "Warehouse ID", required=True, kind="int"),
        FormField("orderId", "Order ID", kind="int"),
        FormField("quantity", "Quantity", required=True, kind="int"),
        FormField("remarks", "Remarks"),
    ),
    hotkey="h",
))

register(ResourceDefinition(
    key="receptions",
    title="Receptions",
    endpoint="receptions",
    model=Reception,
    columns=(
        Column("ID", "id"), Column("Date", "reception_date", _date), Column("Product", "product"),
        Column("Qty", "quantity"), Column("Unit", "unit"), Column("Warehouse", "warehouse"),
        Column("Purchase", "purchase_reference"), Column("Supplier", "supplier"),
    ),
    search_fields=("product", "warehouse", "purchase_reference", "supplier", "remarks"),
    form_fields=(
        FormField("receptionDate", "Date (YYYY-MM-DD)", required=True, kind="date", attr="reception_date"),
        FormField("productId", "Product ID", required=True, kind="int"),
        FormField("unitId", "Unit ID", required=True, kind="int"),
        FormField("warehouseId", "Warehouse ID", required=True, kind="int"),
        FormField("purchaseId", "Purchase ID", kind="int"),
        FormField("quantity", "Quantity", required=True, kind="int"),
        FormField("remarks", "Remarks"),
    ),
    hotkey="r",
))

register(ResourceDefinition(
    key="transfers",
    title="Transfers",
    endpoint="transfers",
    model=Transfer,
    columns=(
        Column("ID", "id"), Column("Date", "transfer_date", _date), Column("Product", "product"),
        Column("Qty", "quantity"), Column("From", "source_warehouse"),
        Column("To", "destination_warehouse"), Column("Unit", "unit"),
    ),
    search_fields=("product", "source_warehouse", "destination_warehouse", "remarks"),
    form_fields=(
        FormField("transferDate", "Date (YYYY-MM-DD)", required=True, kind="date", attr="transfer_date"),
        FormField("productId", "Product ID", required=True, kind="int"),
        FormField("sourceWarehouseId", "Source warehouse ID", required=True, kind="int"),
        FormField("destinationWarehouseId", "Destination warehouse ID", required=True, kind="int"),
        FormField("unitId", "Unit ID", required=True, kind="int"),
        FormField("quantity", "Quantity", required=True, kind="int"),
        FormField("remarks", "Remarks"),
    ),
    hotkey="t",
))

register(ResourceDefinition(
    key="inventories",
    title="Inventories",
    endpoint="inventories",
    model=Inventory,
    columns=(
        Column("ID", "id"), Column("Date", "inventory_date", _date), Column("Warehouse", "warehouse"),
        Column("Done by", "done_by"), Column("Validated by", "validated_by"), Column("Status", "status"),
    ),
    search_fields=("warehouse", "done_by", "status"),
    form_fields=(
        FormField("inventoryDate", "Date (YYYY-MM-DD)", required=True, kind="date", attr="inventory_date"),
        FormField("warehouse", "Warehouse", required=True),
    ),
    hotkey="i",
))

register(ResourceDefinition(
    key="stocks",
    title="Stock",
    endpoint="stocks",
    model=StockItem,
    columns=(
        Column("ID", "id"), Column("Product", "product"), Column("Warehouse", "warehouse"),
        Column("Qty", "quantity"), Column("Unit", "unit"),
    ),
    search_fields=("product", "warehouse"),
    read_only=True,
    api_class=StockApi,
    hotkey="k",
))
