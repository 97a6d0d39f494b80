"""Tests for aptstage.lib.command (subprocess is patched out)."""

from __future__ import annotations

import subprocess

import pytest

from aptstage.errors import CommandError
from aptstage.lib import command


class _Completed:
    def __init__(self, returncode: int, stdout: str) -> None:
        self.returncode = returncode
        self.stdout = stdout


def test_subprocess_command_returns_combined_output(monkeypatch: pytest.MonkeyPatch) -> None:
    seen = {}

    def fake_run(argv, **kwargs):
        seen["argv"] = argv
        seen.update(kwargs)
        return _Completed(0, "unpacked\n")

    monkeypatch.setattr(command.subprocess, "run", fake_run)

    out = command.SubprocessCommand().output("/", "dpkg", "-x", "a.deb", "/app")

    assert out == "unpacked\n"
    assert seen["argv"] == ["dpkg", "-x", "a.deb", "/app"]
    assert seen["cwd"] == "/"
    assert seen["stderr"] is subprocess.STDOUT


def test_non_zero_exit_raises_with_output(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(command.subprocess, "run", lambda argv, **kw: _Completed(100, "E: broken\n"))

    with pytest.raises(CommandError) as exc:
        command.run_cmd(["apt-get", "update"])

    assert exc.value.returncode == 100
    assert exc.value.output == "E: broken\n"
    assert exc.value.argv == ["apt-get", "update"]


def test_check_false_returns_result(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(command.subprocess, "run", lambda argv, **kw: _Completed(1, ""))

    r = command.run_cmd(["false"], check=False)

    assert r.returncode == 1
