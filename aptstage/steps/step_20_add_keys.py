from __future__ import annotations

import logging

from ..apt import Apt

logger = logging.getLogger(__name__)


class AddKeysStep:
    step_id = "20_add_keys"

    def should_run(self, apt: Apt) -> bool:
        return apt.has_keys()

    def run(self, apt: Apt) -> None:
        apt.add_keys()
        logger.info(
            "Imported %d keys into %s",
            len(apt.manifest.keys) + len(apt.manifest.gpg_advanced_options),
            str(apt.root.trusted_keys),
        )
