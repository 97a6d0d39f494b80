from __future__ import annotations

from ..apt import Apt


class AddReposStep:
    step_id = "30_add_repos"

    def should_run(self, apt: Apt) -> bool:
        return apt.has_repos()

    def run(self, apt: Apt) -> None:
        apt.add_repos()
