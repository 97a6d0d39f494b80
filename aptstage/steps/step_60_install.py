from __future__ import annotations

import logging

from ..apt import Apt

logger = logging.getLogger(__name__)


class InstallStep:
    step_id = "60_install"

    def should_run(self, apt: Apt) -> bool:
        return True

    def run(self, apt: Apt) -> None:
        apt.install()
        logger.info("Packages unpacked into %s", str(apt.install_dir))
