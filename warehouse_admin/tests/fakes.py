"""In-memory stand-in for the REST backend, plugged in as the HTTP session."""

import json
import threading
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

API_PREFIX = "/api/v1"

ADMIN = {"id": 1, "name": "Boss", "email": "boss@example.com", "role": "ADMIN"}


class FakeResponse:

    def __init__(self, status_code: int, body: Any = None):
        self.status_code = status_code
        self.text = "" if body is None else json.dumps(body)
        self.content = self.text.encode("utf-8")

    def json(self):
        return json.loads(self.text)


class FakeBackend:
    """
    Answers `request(method, url, ...)` like `curl_cffi.requests.Session`
    would, from per-resource lists of documents.
    """

    def __init__(self, **collections: List[Dict[str, Any]]):
        self.collections = {key: list(docs) for key, docs in collections.items()}
        self.calls: List[tuple] = []
        self.user = dict(ADMIN)
        # set to an Event to keep requests waiting until it is set
        self.hold: Optional[threading.Event] = None
        # (method, path) -> error status to answer with
        self.failures: Dict[tuple, int] = {}

    def request(self, method, url, *, params=None, json=None, headers=None, timeout=None):
        if self.hold is not None:
            self.hold.wait(timeout=5)
        path = urlparse(url).path[len(API_PREFIX):].strip("/")
        self.calls.append((method, path, dict(params or {}), json))
        parts = path.split("/")

        if (method, path) in self.failures:
            return FakeResponse(self.failures[(method, path)], {"message": "Rejected"})

        if path == "auth/login":
            return FakeResponse(200, {"accessToken": "tok", "userDTO": self.user})
        if path == "dashboard/statistics":
            return FakeResponse(200, {"clientCount": len(self.collections.get("clients", []))})
        if path == "stocks/low-stock/count":
            return FakeResponse(200, 0)

        docs = self.collections.setdefault(parts[0], [])
        if len(parts) == 1:
            if method == "POST":
                doc = dict(json or {}, id=len(docs) + 1)
                docs.append(doc)
                return FakeResponse(201, doc)
            return FakeResponse(200, self._page(docs, params or {}))

        if parts[1] == "search":
            needle = str((params or {}).get("name", "")).lower()
            found = [d for d in docs if needle in str(d.get("name", "")).lower()]
            return FakeResponse(200, self._page(found, params or {}))

        doc = self._find(docs, parts[1])
        if doc is None:
            return FakeResponse(404, {"message": "Not found"})
        if method == "DELETE":
            docs.remove(doc)
            return FakeResponse(204)
        if method == "PUT":
            doc.update(json or {})
        return FakeResponse(200, doc)

    def close(self):
        pass

    def sent(self, method: str, path: str) -> List[Any]:
        """Bodies sent with `method` to `path`."""
        return [body for m, p, _, body in self.calls if m == method and p == path]

    @staticmethod
    def _page(docs: List[Dict[str, Any]], params: Dict[str, Any]) -> Dict[str, Any]:
        page = int(params.get("page", 1))
        size = int(params.get("size", 10))
        start = (page - 1) * size
        return {"count": len(docs), "items": docs[start:start + size]}

    @staticmethod
    def _find(docs: List[Dict[str, Any]], raw_id: str) -> Optional[Dict[str, Any]]:
        for doc in docs:
            if str(doc.get("id")) == raw_id:
                return doc
        return None


def clients(count: int) -> List[Dict[str, Any]]:
    return [{"id": i, "name": f"Client {i}", "email": f"c{i}@example.com"} for i in range(1, count + 1)]


async def settle(app, pilot, rounds: int = 3):
    """Let thread workers finish and their callbacks run."""
    for _ in range(rounds):
        await pilot.pause()
        await app.workers.wait_for_complete()
    await pilot.pause()
