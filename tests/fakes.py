"""
Test doubles for the OpenFEC API.

FakeFEC stands in for api.open.fec.gov behind an httpx.MockTransport, so
no test touches the network and every request is recorded in ``calls``.
"""
from typing import Callable, Iterable, Optional

import httpx

from whofunds.ingestion.client import FECClient

BASE_URL = "https://api.open.fec.gov/v1"

Responder = Callable[[httpx.Request], httpx.Response]


class FakeFEC:
    def __init__(self):
        self.calls: list[httpx.Request] = []
        self.routes: dict[str, Responder] = {}

    def add(self, path: str, responder: Responder):
        self.routes[path] = responder

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        path = request.url.path.removeprefix("/v1")
        responder = self.routes.get(path)
        if responder is None:
            return httpx.Response(404, json={"message": f"no route for {path}"})
        return responder(request)

    def calls_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.calls if r.url.path.removeprefix("/v1") == path]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self, api_key: Optional[str] = "test-key") -> FECClient:
        return FECClient(api_key=api_key, base_url=BASE_URL, timeout=5.0, transport=self.transport)


def results(items: list[dict], pages: int = 1) -> httpx.Response:
    return httpx.Response(200, json={"results": items, "pagination": {"pages": pages}})


def paged(pages: list[list[dict]], fail_on: Iterable[int] = (), status: int = 500) -> Responder:
    """Serve ``pages`` by the ``page`` query param; pages in ``fail_on`` answer ``status``."""
    fail_on = set(fail_on)

    def responder(request: httpx.Request) -> httpx.Response:
        page = int(request.url.params.get("page", "1"))
        if page in fail_on:
            return httpx.Response(status, json={"message": "upstream exploded"})
        items = pages[page - 1] if page <= len(pages) else []
        return results(items, pages=len(pages))

    return responder


def contribution(name: Optional[str], amount, employer: Optional[str] = None, occupation: Optional[str] = None) -> dict:
    return {
        "contributor_name": name,
        "contribution_receipt_amount": amount,
        "contributor_employer": employer,
        "contributor_occupation": occupation,
    }


def candidate(candidate_id: Optional[str], name: str = "DOE, JANE", party: str = "DEM", state: str = "UT",
              district: Optional[str] = None, incumbent_challenge: str = "C") -> dict:
    return {
        "candidate_id": candidate_id,
        "name": name,
        "party": party,
        "state": state,
        "district": district,
        "incumbent_challenge": incumbent_challenge,
    }

