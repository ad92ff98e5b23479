import unittest
from unittest.mock import Mock

from warehouse_admin.api.resources import QueryParamResourceApi, StockApi
from warehouse_admin.config import DEFAULT_CONFIG
from warehouse_admin.di import Container


class ContainerTest(unittest.TestCase):

    def setUp(self):
        self.http = Mock()
        self.container = Container(DEFAULT_CONFIG, http=self.http)

    def test_singletons_share_one_session(self):
        self.assertIs(self.container.session, self.container.client.session)
        self.assertIs(self.container.client, self.container.client)
        self.assertIs(self.container.auth_service, self.container.auth_service)

    def test_resource_services_are_cached_per_key(self):
        clients = self.container.resource_service("clients")
        self.assertIs(clients, self.container.resource_service("clients"))
        self.assertIsNot(clients, self.container.resource_service("suppliers"))

    def test_resource_api_class_follows_definition(self):
        self.assertIsInstance(self.container.resource_service("products")._api, QueryParamResourceApi)
        self.assertIsInstance(self.container.resource_service("stocks")._api, StockApi)

    def test_unknown_resource(self):
        with self.assertRaises(KeyError):
            self.container.resource_service("spaceships")

    def test_close_closes_client(self):
        self.container.client
        self.container.close()
        self.http.close.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
