"""Shared fixtures for the create-kapp test suite."""

from __future__ import annotations

import io
import zipfile
from collections.abc import Callable, Iterator

import httpx
import pytest
from rich.console import Console

from create_kapp.cli._prompts import PromptEngine
from create_kapp.cli._scaffold import ScaffoldSession

Handler = Callable[[httpx.Request], httpx.Response]

ARCHIVE_ENTRIES: dict[str, bytes | None] = {
    "template-master/": None,
    "template-master/README.md": b"# template\n",
    "template-master/src/": None,
    "template-master/src/index.js": b"console.log('hello');\n",
}


def build_zip(entries: dict[str, bytes | None]) -> bytes:
    """Build a ZIP in memory. ``None`` content marks a directory entry."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, content in entries.items():
            if content is None:
                zf.writestr(name.rstrip("/") + "/", b"")
            else:
                zf.writestr(name, content)
    return buf.getvalue()


def serve(body: bytes, status_code: int = 200, seen: list[str] | None = None) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(str(request.url))
        return httpx.Response(status_code, content=body)

    return handler


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False, width=200)


@pytest.fixture
def engine(console: Console) -> PromptEngine:
    return PromptEngine(console)


@pytest.fixture
def output(console: Console) -> Callable[[], str]:
    """Return everything written to the test console so far."""
    return lambda: console.file.getvalue()  # type: ignore[attr-defined]


@pytest.fixture
def archive() -> bytes:
    return build_zip(ARCHIVE_ENTRIES)


@pytest.fixture
def make_session(engine: PromptEngine) -> Iterator[Callable[[Handler], ScaffoldSession]]:
    clients: list[httpx.Client] = []

    def factory(handler: Handler) -> ScaffoldSession:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return ScaffoldSession(engine, client, pause=0)

    yield factory

    for client in clients:
        client.close()
