import unittest
from datetime import datetime

from warehouse_admin.models import Client, Order
from warehouse_admin.resources import RESOURCES, get_resource


class ResourceRegistryTest(unittest.TestCase):

    def test_unknown_key(self):
        with self.assertRaises(KeyError):
            get_resource("spaceships")

    def test_admin_only_views(self):
        admin_only = sorted(k for k, d in RESOURCES.items() if d.admin_only)
        self.assertEqual(admin_only, ["users", "warehouses"])

    def test_hotkeys_are_unique(self):
        keys = [d.hotkey for d in RESOURCES.values() if d.hotkey]
        self.assertEqual(len(keys), len(set(keys)))

    def test_item_name(self):
        self.assertEqual(get_resource("inventories").item_name, "Inventory")
        self.assertEqual(get_resource("clients").item_name, "Client")

    def test_stock_is_read_only(self):
        self.assertFalse(get_resource("stocks").editable)
        self.assertTrue(get_resource("clients").editable)

    def test_matches_is_case_insensitive(self):
        definition = get_resource("clients")
        client = Client(id=1, name="Acme Tools", email="sales@acme.test")
        self.assertTrue(definition.matches(client, "ACME"))
        self.assertTrue(definition.matches(client, ""))
        self.assertFalse(definition.matches(client, "zeta"))

    def test_row_and_prefill(self):
        definition = get_resource("orders")
        order = Order(id=5, reference="ORD-5", client="Acme", order_date=datetime(2024, 5, 1))
        self.assertEqual(definition.row(order), ["5", "ORD-5", "Acme", "2024-05-01", "0"])
        prefill = {f.name: f.prefill(order) for f in definition.form_fields}
        self.assertEqual(prefill["orderReference"], "ORD-5")
        self.assertEqual(prefill["orderDate"], "2024-05-01")
        self.assertEqual(prefill["clientId"], "")

        prefill = {f.name: f.prefill(Order(id=5, reference="ORD-5", client_id=3)) for f in definition.form_fields}
        self.assertEqual(prefill["clientId"], "3")

    def test_orders_and_purchases_carry_lines(self):
        self.assertEqual(get_resource("orders").line_items.payload_key, "orderItems")
        self.assertEqual(get_resource("purchases").line_items.payload_key, "purchaseItems")
        self.assertIsNone(get_resource("clients").line_items)

    def test_party_ids_are_looked_up_by_name(self):
        lookups = {
            f.name: f.lookup
            for key in ("orders", "purchases")
            for f in get_resource(key).form_fields
            if f.lookup
        }
        self.assertEqual(lookups, {"clientId": "clients", "supplierId": "suppliers"})
        for target in lookups.values():
            self.assertIn(target, RESOURCES)


if __name__ == "__main__":
    unittest.main()
