from __future__ import annotations

import logging

from ..apt import Apt

logger = logging.getLogger(__name__)


class UpdateStep:
    step_id = "40_update"

    def should_run(self, apt: Apt) -> bool:
        return True

    def run(self, apt: Apt) -> None:
        out = apt.update()
        logger.debug("apt-get update:\n%s", out)
