import copy
import os
import tempfile
import threading
import unittest

from textual.widgets import DataTable, Input, Select

from warehouse_admin.config import DEFAULT_CONFIG
from warehouse_admin.di import Container
from warehouse_admin.errors import AuthenticationError
from warehouse_admin.models import User
from warehouse_admin.models.pagination import Page
from warehouse_admin.tests.fakes import FakeBackend, clients, settle
from warehouse_admin.ui.app import WarehouseAdminApp
from warehouse_admin.ui.screens.dashboard_screen import DashboardScreen
from warehouse_admin.ui.screens.login_screen import LoginScreen
from warehouse_admin.ui.screens.record_detail_screen import RecordDetailScreen
from warehouse_admin.ui.screens.record_form_screen import RecordFormScreen
from warehouse_admin.ui.screens.resource_screen import ResourceScreen
from warehouse_admin.ui.widgets.lookup_field import LookupField


ORDER = {
    "id": 7,
    "orderReference": "ORD-7",
    "clientName": "Client 1",
    "clientId": 1,
    "orderDate": "2024-05-01",
    "orderItems": [
        {"id": 1, "productId": 4, "productName": "Bolt", "unitId": 2, "unit": "Box", "quantity": 3},
        {"id": 2, "productId": 5, "productName": "Nut", "unitId": 2, "unit": "Box", "quantity": 8},
    ],
}


class ScreenTestCase(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.config = copy.deepcopy(DEFAULT_CONFIG)
        self.config["logging"]["path"] = os.path.join(self.tmp.name, "test.log")

        self.backend = FakeBackend(
            clients=clients(21),
            products=[{"id": 4, "name": "Bolt"}, {"id": 5, "name": "Nut"}],
            orders=[copy.deepcopy(ORDER)],
        )
        self.app = WarehouseAdminApp(self.config, Container(self.config, http=self.backend))

    async def open_view(self, pilot, key):
        self.app.session.start("tok", User(id=1, email="boss@example.com", role="ADMIN"))
        self.app.open_resource(key)
        await settle(self.app, pilot)
        self.assertIsInstance(self.app.screen, ResourceScreen)
        return self.app.screen


class ResourceScreenTest(ScreenTestCase):

    async def test_deleting_only_row_of_last_page_steps_back(self):
        async with self.app.run_test() as pilot:
            screen = await self.open_view(pilot, "clients")
            screen.controller.change_page(3)
            screen.load_records()
            await settle(self.app, pilot)
            self.assertEqual(screen.controller.state.current_page, 3)
            self.assertEqual([c.id for c in screen.controller.visible_items], [21])

            record = screen.controller.visible_items[0]
            screen._delete_record(record, "#21 Client 21")
            await settle(self.app, pilot)

            self.assertEqual(self.backend.sent("DELETE", "clients/21"), [None])
            self.assertEqual(screen.controller.state.current_page, 2)
            self.assertEqual(screen.controller.state.total_elements, 20)
            self.assertEqual(len(screen.controller.visible_items), 10)
            method, path, params, _ = self.backend.calls[-1]
            self.assertEqual((method, path, params), ("GET", "clients", {"page": 2, "size": 10}))

    async def test_page_arriving_after_leaving_the_view_is_dropped(self):
        async with self.app.run_test() as pilot:
            screen = await self.open_view(pilot, "clients")
            before = screen.controller.items

            self.backend.hold = threading.Event()
            screen.load_records()
            self.app.action_dashboard()
            await pilot.pause(0.1)
            self.assertTrue(screen.controller.closed)

            self.backend.hold.set()
            await settle(self.app, pilot)
            await pilot.pause(0.2)

            self.assertIsInstance(self.app.screen, DashboardScreen)
            self.assertIs(screen.controller.items, before)

    async def test_late_failure_after_leaving_the_view_keeps_the_session(self):
        async with self.app.run_test() as pilot:
            screen = await self.open_view(pilot, "clients")
            ticket = screen.controller.begin_fetch()
            self.app.action_dashboard()
            await settle(self.app, pilot)

            screen._apply_page(ticket, Page(items=[], total=0, page=1, per_page=10))
            screen._fetch_failed(ticket, AuthenticationError("token expired"))
            await pilot.pause()

            self.assertIsInstance(self.app.screen, DashboardScreen)
            self.assertTrue(self.app.session.is_authenticated)

    async def test_expired_token_while_saving_returns_to_login(self):
        async with self.app.run_test() as pilot:
            screen = await self.open_view(pilot, "clients")
            screen.action_new_record()
            await settle(self.app, pilot)
            form = self.app.screen
            self.assertIsInstance(form, RecordFormScreen)

            form.query_one("#field-name", Input).value = "Zeta"
            form.query_one("#field-email", Input).value = "zeta@example.com"
            self.backend.failures[("POST", "clients")] = 401
            form.action_submit()
            await settle(self.app, pilot)

            self.assertIsInstance(self.app.screen, LoginScreen)
            self.assertFalse(self.app.session.is_authenticated)


class OrderScreensTest(ScreenTestCase):

    async def test_new_order_sends_its_lines(self):
        async with self.app.run_test() as pilot:
            screen = await self.open_view(pilot, "orders")
            screen.action_new_record()
            await settle(self.app, pilot)
            form = self.app.screen
            self.assertIsInstance(form, RecordFormScreen)

            form.query_one("#field-orderReference", Input).value = "ORD-8"
            form.query_one("#field-orderDate", Input).value = "2024-06-02"
            form.query_one("#field-clientId", Input).value = "2"
            form.query_one("#line-productId", Input).value = "4"
            form.query_one("#line-unitId", Input).value = "2"
            form.query_one("#line-quantity", Input).value = "5"
            self.assertTrue(form.add_line())
            self.assertEqual(form.query_one("#line-table", DataTable).row_count, 1)

            form.action_submit()
            await settle(self.app, pilot)

            self.assertEqual(self.backend.sent("POST", "orders"), [{
                "orderReference": "ORD-8",
                "orderDate": "2024-06-02",
                "clientId": 2,
                "orderItems": [{"productId": 4, "unitId": 2, "quantity": 5}],
            }])
            self.assertIs(self.app.screen, screen)

    async def test_order_without_lines_is_not_sent(self):
        async with self.app.run_test() as pilot:
            screen = await self.open_view(pilot, "orders")
            screen.action_new_record()
            await settle(self.app, pilot)
            form = self.app.screen

            form.query_one("#field-orderReference", Input).value = "ORD-9"
            form.query_one("#field-orderDate", Input).value = "2024-06-02"
            form.query_one("#field-clientId", Input).value = "2"
            form.query_one("#line-quantity", Input).value = "0"
            self.assertFalse(form.add_line())
            self.assertTrue(form.query_one("#line-quantity", Input).has_class("-invalid"))

            form.action_submit()
            await settle(self.app, pilot)

            self.assertEqual(self.backend.sent("POST", "orders"), [])
            self.assertIs(self.app.screen, form)
            self.assertTrue(form.query_one("#line-table", DataTable).has_class("-invalid"))

    async def test_client_is_picked_by_name(self):
        async with self.app.run_test() as pilot:
            screen = await self.open_view(pilot, "orders")
            screen.action_new_record()
            await settle(self.app, pilot)
            form = self.app.screen

            lookup = form.query_one("#field-clientId", Input).parent
            self.assertIsInstance(lookup, LookupField)
            search = lookup.query_one(".lookup-search", Input)
            search.value = "Client 2"
            search.focus()
            await pilot.press("enter")
            await settle(self.app, pilot)

            method, path, params, _ = self.backend.calls[-1]
            self.assertEqual((method, path, params), ("GET", "clients/search", {"name": "Client 2", "page": 1, "size": 3}))
            lookup.query_one(".lookup-results", Select).value = 2
            await pilot.pause()
            self.assertEqual(form.query_one("#field-clientId", Input).value, "2")

    async def test_editing_an_order_keeps_its_lines_unless_changed(self):
        async with self.app.run_test() as pilot:
            screen = await self.open_view(pilot, "orders")
            screen.action_edit_record()
            await settle(self.app, pilot)
            form = self.app.screen
            self.assertEqual(form.query_one("#field-clientId", Input).value, "1")
            self.assertEqual(form.query_one("#line-table", DataTable).row_count, 2)

            form.query_one("#field-orderReference", Input).value = "ORD-7b"
            form.action_submit()
            await settle(self.app, pilot)

            (body,) = self.backend.sent("PUT", "orders/7")
            self.assertEqual(body["orderReference"], "ORD-7b")
            self.assertNotIn("orderItems", body)

    async def test_detail_view_lists_order_lines(self):
        async with self.app.run_test() as pilot:
            screen = await self.open_view(pilot, "orders")
            screen.action_view_record()
            await settle(self.app, pilot)

            detail = self.app.screen
            self.assertIsInstance(detail, RecordDetailScreen)
            self.assertIn(("GET", "orders/7", {}, None), self.backend.calls)
            lines = detail.query_one("#detail-lines", DataTable)
            self.assertEqual(lines.row_count, 2)
            self.assertEqual(list(lines.get_row_at(0)), ["Bolt", "Box", "3"])

            detail.action_go_back()
            await pilot.pause()
            self.assertIs(self.app.screen, screen)


if __name__ == "__main__":
    unittest.main()
