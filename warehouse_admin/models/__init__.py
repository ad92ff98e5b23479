"""Warehouse Admin data models."""

from warehouse_admin.models.catalog import Product, StockItem, Unit, Warehouse
from warehouse_admin.models.pagination import Page
from warehouse_admin.models.party import Client, Supplier, User
from warehouse_admin.models.transaction import (
    Inventory,
    Order,
    Purchase,
    Reception,
    Shipment,
    TransactionLine,
    Transfer,
)

__all__ = [
    "Client",
    "Inventory",
    "Order",
    "Page",
    "Product",
    "Purchase",
    "Reception",
    "Shipment",
    "StockItem",
    "Supplier",
    "TransactionLine",
    "Transfer",
    "Unit",
    "User",
    "Warehouse",
]
