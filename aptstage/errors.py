from __future__ import annotations

from typing import Sequence


class AptStageError(RuntimeError):
    pass


class CommandError(AptStageError):
    """An external program exited non-zero.

    `output` carries the combined stdout/stderr so callers can surface it.
    """

    def __init__(
        self,
        message: str,
        *,
        argv: Sequence[str] = (),
        returncode: int | None = None,
        output: str = "",
    ) -> None:
        super().__init__(message)
        self.argv = list(argv)
        self.returncode = returncode
        self.output = output


class ManifestError(AptStageError, ValueError):
    pass


class DownloadError(AptStageError):
    pass
