from __future__ import annotations

from ..apt import Apt


class DownloadStep:
    step_id = "50_download"

    def should_run(self, apt: Apt) -> bool:
        return True

    def run(self, apt: Apt) -> None:
        apt.download()
