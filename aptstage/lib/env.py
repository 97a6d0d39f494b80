from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class HostPaths:
    """Host APT files used as read-only templates for the isolated root."""

    apt_dir: str = "/etc/apt"

    @property
    def sources_list(self) -> Path:
        return Path(self.apt_dir) / "sources.list"

    @property
    def trusted_gpg(self) -> Path:
        return Path(self.apt_dir) / "trusted.gpg"

    @property
    def preferences(self) -> Path:
        return Path(self.apt_dir) / "preferences"


HOST_PATHS = HostPaths()

DEFAULT_MANIFEST = "apt.yml"
DEFAULT_LOG_PATH = "aptstage.log"
