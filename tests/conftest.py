import sys
from pathlib import Path
from typing import Callable, List

import httpx
import pytest

# Ensure the repository root is on sys.path for direct pytest runs
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def make_client():
    """Build an AsyncClient answering every request with ``handler``."""

    def factory(handler):
        transport = RecordingTransport(handler)
        return httpx.AsyncClient(transport=transport), transport

    return factory


@pytest.fixture
def json_client(make_client):
    """Build an AsyncClient answering every request with a fixed JSON body."""

    def factory(payload, status_code: int = 200):
        return make_client(lambda request: httpx.Response(status_code, json=payload))

    return factory
