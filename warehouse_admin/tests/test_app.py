import copy
import os
import tempfile
import unittest

from textual.widgets import Input

from warehouse_admin.config import DEFAULT_CONFIG
from warehouse_admin.di import Container
from warehouse_admin.models import User
from warehouse_admin.tests.fakes import FakeBackend, clients, settle
from warehouse_admin.ui.app import WarehouseAdminApp
from warehouse_admin.ui.screens.dashboard_screen import DashboardScreen
from warehouse_admin.ui.screens.login_screen import LoginScreen
from warehouse_admin.ui.screens.resource_screen import ResourceScreen


class AppNavigationTest(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.config = copy.deepcopy(DEFAULT_CONFIG)
        self.config["logging"]["path"] = os.path.join(self.tmp.name, "test.log")

        self.backend = FakeBackend(clients=clients(3), users=[])
        self.app = WarehouseAdminApp(self.config, Container(self.config, http=self.backend))

    async def test_starts_on_login(self):
        async with self.app.run_test() as pilot:
            await pilot.pause()
            self.assertIsInstance(self.app.screen, LoginScreen)

    async def test_signing_in_lands_on_dashboard(self):
        async with self.app.run_test() as pilot:
            await pilot.pause()
            login = self.app.screen
            login.query_one("#login-email", Input).value = "boss@example.com"
            login.query_one("#login-password", Input).value = "secret"
            login.action_submit()
            await settle(self.app, pilot)

            self.assertIsInstance(self.app.screen, DashboardScreen)
            self.assertTrue(self.app.session.is_admin)
            self.assertEqual(
                self.backend.sent("POST", "auth/login"),
                [{"email": "boss@example.com", "password": "secret"}],
            )

    async def test_non_admin_is_kept_out_of_admin_views(self):
        async with self.app.run_test() as pilot:
            self.app.session.start("tok", User(id=2, email="clerk@example.com", role="USER"))
            self.app.open_resource("users")
            await pilot.pause()
            self.assertIsInstance(self.app.screen, DashboardScreen)

            self.app.open_resource("clients")
            await pilot.pause()
            self.assertIsInstance(self.app.screen, ResourceScreen)
            self.assertEqual(self.app.screen.definition.key, "clients")

    async def test_switching_between_views_keeps_one_view_on_the_stack(self):
        async with self.app.run_test() as pilot:
            self.app.session.start("tok", User(id=1, email="boss@example.com", role="ADMIN"))
            for key in ("clients", "users", "clients"):
                self.app.open_resource(key)
                await settle(self.app, pilot)
            self.assertEqual(self.app.screen.definition.key, "clients")
            self.assertEqual(len(self.app.screen_stack), 2)

    async def test_logout_returns_to_login(self):
        async with self.app.run_test() as pilot:
            self.app.session.start("tok", User(id=1, email="boss@example.com", role="ADMIN"))
            self.app.open_resource("users")
            await pilot.pause()
            self.assertIsInstance(self.app.screen, ResourceScreen)

            self.app.action_logout()
            await pilot.pause()
            self.assertIsInstance(self.app.screen, LoginScreen)
            self.assertFalse(self.app.session.is_authenticated)


if __name__ == "__main__":
    unittest.main()
