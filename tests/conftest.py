from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from aptstage.errors import CommandError
from aptstage.lib.env import HostPaths


class FakeCommand:
    """Records every invocation; `fail_when` decides which ones exit non-zero."""

    def __init__(self, fail_when: Optional[Callable[[str, tuple], bool]] = None, output: str = "ok") -> None:
        self.calls: List[tuple] = []
        self.fail_when = fail_when
        self.output_text = output

    def output(self, cwd: str, program: str, *args: str) -> str:
        self.calls.append((cwd, program, *args))
        if self.fail_when is not None and self.fail_when(program, args):
            raise CommandError(
                f"Command failed (1): {program}",
                argv=[program, *args],
                returncode=1,
                output=f"{program} blew up",
            )
        return self.output_text

    def programs(self) -> List[str]:
        return [c[1] for c in self.calls]


class FakeResponse:
    def __init__(
        self,
        body: bytes = b"",
        headers: Optional[Dict[str, str]] = None,
        status: int = 200,
        broken: bool = False,
    ) -> None:
        self.body = body
        self.broken = broken
        self.headers = CaseInsensitiveDict(headers or {})
        self.status_code = status
        self.closed = False

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def iter_content(self, chunk_size: int = 1):
        for i in range(0, len(self.body), chunk_size):
            yield self.body[i : i + chunk_size]
        if self.broken:
            raise requests.exceptions.ChunkedEncodingError("Connection broken: IncompleteRead")

    def close(self) -> None:
        self.closed = True


class FakeSession:
    def __init__(self, responses: Optional[Dict[str, FakeResponse]] = None) -> None:
        self.responses = responses or {}
        self.requested: List[str] = []

    def get(self, url: str, stream: bool = False) -> FakeResponse:
        self.requested.append(url)
        if url not in self.responses:
            raise requests.ConnectionError(f"no route to {url}")
        return self.responses[url]


@pytest.fixture
def host_apt(tmp_path: Path) -> HostPaths:
    d = tmp_path / "host-apt"
    d.mkdir()
    (d / "sources.list").write_text("deb http://deb.debian.org/debian bookworm main\n", encoding="utf-8")
    return HostPaths(apt_dir=str(d))


@pytest.fixture
def fake_command() -> FakeCommand:
    return FakeCommand()
