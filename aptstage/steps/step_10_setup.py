from __future__ import annotations

from ..apt import Apt


class SetupStep:
    step_id = "10_setup"

    def should_run(self, apt: Apt) -> bool:
        return True

    def run(self, apt: Apt) -> None:
        apt.setup()
