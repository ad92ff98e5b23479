import unittest
from datetime import datetime

from warehouse_admin.models import Order, Purchase, StockItem, Unit, User
from warehouse_admin.models.pagination import Page
from warehouse_admin.utils.formatters import describe_range, format_date


class ModelMappingTest(unittest.TestCase):

    def test_user_from_api(self):
        user = User.from_api({"id": "4", "email": "a@example.com", "role": "ADMIN"})
        self.assertEqual(user.id, 4)
        self.assertTrue(user.is_admin)
        self.assertNotIn("id", User(id=None, email="x@example.com").to_api())

    def test_order_flattens_nested_values(self):
        order = Order.from_api({
            "id": 1,
            "orderReference": "ORD-1",
            "client": {"id": 9, "name": "Acme"},
            "orderDate": "2024-02-01T10:00:00Z",
            "orderItems": [{"product": {"name": "Bolt"}, "quantity": "3", "unit": {"name": "pcs"}}],
        })
        self.assertEqual(order.client, "Acme")
        self.assertEqual(order.order_date.date(), datetime(2024, 2, 1).date())
        self.assertEqual(order.items[0].product, "Bolt")
        self.assertEqual(order.items[0].quantity, 3)
        self.assertEqual(order.client_id, 9)
        self.assertIsNone(order.items[0].product_id)

    def test_purchase_lines_keep_their_ids(self):
        purchase = Purchase.from_api({
            "id": 2,
            "purchaseReference": "PUR-2",
            "supplierId": 5,
            "purchaseItems": [{"productId": 4, "productName": "Bolt", "unitId": 2, "unit": "Box", "quantity": 7}],
        })
        line = purchase.items[0]
        self.assertEqual(purchase.supplier_id, 5)
        self.assertEqual((line.product_id, line.unit_id, line.quantity), (4, 2, 7))
        self.assertEqual((line.product, line.unit), ("Bolt", "Box"))

    def test_unit_uses_backend_field_name(self):
        unit = Unit.from_api({"id": 1, "unit": "Kilogram", "abbreviation": "kg"})
        self.assertEqual(unit.name, "Kilogram")
        self.assertEqual(unit.to_api(), {"unit": "Kilogram", "abbreviation": "kg"})

    def test_stock_is_low(self):
        item = StockItem.from_api({"id": 1, "productName": "Bolt", "warehouse": {"name": "Main"}, "quantity": 4})
        self.assertEqual(item.warehouse, "Main")
        self.assertTrue(item.is_low())
        self.assertFalse(item.is_low(threshold=3))


class PageTest(unittest.TestCase):

    def test_page_properties(self):
        page = Page(items=[1, 2, 3], total=23, page=3, per_page=10)
        self.assertEqual(page.pages, 3)
        self.assertEqual(len(page), 3)
        self.assertFalse(page.has_next())
        self.assertTrue(page.has_prev())


class FormattersTest(unittest.TestCase):

    def test_format_date(self):
        self.assertEqual(format_date("2024-02-01T10:00:00Z"), "2024-02-01")
        self.assertEqual(format_date(None), "")
        self.assertEqual(format_date("garbage"), "garbage")

    def test_describe_range(self):
        self.assertEqual(describe_range(10, 20, 42, "clients"), "Showing 11-20 of 42 clients")
        self.assertEqual(describe_range(0, 0, 0, "clients"), "No clients")


if __name__ == "__main__":
    unittest.main()
