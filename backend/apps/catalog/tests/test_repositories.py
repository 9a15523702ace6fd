import unittest

from apps.catalog.repositories import RemoteCatalogRepository
from apps.remote.exceptions import RemoteAPIError, UnexpectedResponseError
from apps.remote.tests.fakes import FakeResponse, make_session


class RemoteCatalogRepositoryTests(unittest.TestCase):
    def repo(self, routes):
        session, http = make_session(routes)
        return RemoteCatalogRepository(session.client), http

    def test_list_products_accepts_plain_list(self):
        repo, _ = self.repo({("GET", "/products"): [{"id": 1}, "junk"]})
        self.assertEqual(repo.list_products(), [{"id": 1}])

    def test_search_reads_products_key_and_sends_query(self):
        repo, http = self.repo({("GET", "/products"): {"products": [{"id": 2}]}})
        self.assertEqual(repo.list_products(search="pen"), [{"id": 2}])
        self.assertEqual(http.calls[0]["query"], "search=pen")

    def test_list_products_rejects_unknown_shape(self):
        repo, _ = self.repo({("GET", "/products"): {"message": "ok"}})
        with self.assertRaises(UnexpectedResponseError):
            repo.list_products()

    def test_get_product_unwraps_data(self):
        repo, _ = self.repo({("GET", "/products/5"): {"data": {"id": 5, "name": "Pen"}}})
        self.assertEqual(repo.get_product("5"), {"id": 5, "name": "Pen"})

    def test_get_product_propagates_not_found(self):
        repo, _ = self.repo({})
        with self.assertRaises(RemoteAPIError) as ctx:
            repo.get_product("404")
        self.assertEqual(ctx.exception.status_code, 404)

    def test_list_packages_requires_list(self):
        repo, _ = self.repo({("GET", "/packages"): {"data": []}})
        with self.assertRaises(UnexpectedResponseError):
            repo.list_packages()

    def test_comments_for_packages(self):
        repo, http = self.repo(
            {
                ("GET", "/packages/3/comments"): {"data": [{"id": 1, "comment": "Nice"}]},
                ("POST", "/packages/3/comments"): FakeResponse(201, {"data": {"id": 2}}),
            }
        )
        self.assertEqual(repo.list_comments("packages", "3"), [{"id": 1, "comment": "Nice"}])
        self.assertEqual(repo.add_comment("packages", "3", "Lovely", 4), {"id": 2})
        self.assertEqual(
            http.calls_to("POST", "/packages/3/comments")[0]["json"],
            {"comment": "Lovely", "rating": 4},
        )

    def test_unknown_kind_is_rejected(self):
        repo, _ = self.repo({})
        with self.assertRaises(ValueError):
            repo.list_comments("orders", "1")

    def test_rating_defaults_when_body_empty(self):
        repo, _ = self.repo({("GET", "/products/1/rating"): FakeResponse(200)})
        self.assertEqual(
            repo.get_rating("products", "1"),
            {"average_rating": 0, "total_ratings": 0, "user_rating": None},
        )
