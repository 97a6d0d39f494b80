from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List

from .env import HOST_PATHS, HostPaths
from .files import copy_file, file_exists
from .manifests import Repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AptRoot:
    """Private APT configuration/cache tree under <cache_dir>/apt.

    Layout:
      apt/cache/            dir::cache (downloaded archives in cache/archives)
      apt/state/            dir::state
      apt/sources/sources.list
      apt/etc/trusted.gpg
      apt/etc/preferences

    apt-get and apt-key only ever see this tree via `options`, so no root
    access or shared system database is needed.
    """

    cache_root: Path
    host: HostPaths = field(default=HOST_PATHS)

    @property
    def base(self) -> Path:
        return Path(self.cache_root) / "apt"

    @property
    def cache_dir(self) -> Path:
        return self.base / "cache"

    @property
    def archives_dir(self) -> Path:
        return self.cache_dir / "archives"

    @property
    def state_dir(self) -> Path:
        return self.base / "state"

    @property
    def source_list(self) -> Path:
        return self.base / "sources" / "sources.list"

    @property
    def trusted_keys(self) -> Path:
        return self.base / "etc" / "trusted.gpg"

    @property
    def preferences(self) -> Path:
        return self.base / "etc" / "preferences"

    @property
    def options(self) -> List[str]:
        return [
            "-o", "debug::nolocking=true",
            "-o", f"dir::cache={self.cache_dir}",
            "-o", f"dir::state={self.state_dir}",
            "-o", f"dir::etc::sourcelist={self.source_list}",
            "-o", f"dir::etc::trusted={self.trusted_keys}",
            "-o", f"Dir::Etc::preferences={self.preferences}",
        ]

    def setup(self) -> None:
        """Create the tree and seed it from the host's APT files."""

        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.state_dir.mkdir(parents=True, exist_ok=True)

        # The host source list is mandatory; copy_file raises if it is missing.
        copy_file(self.host.sources_list, self.source_list)

        if file_exists(self.host.trusted_gpg):
            copy_file(self.host.trusted_gpg, self.trusted_keys)

        if file_exists(self.host.preferences):
            copy_file(self.host.preferences, self.preferences)
        else:
            self.preferences.parent.mkdir(parents=True, exist_ok=True)

        logger.info("Isolated apt root ready at %s", str(self.base))

    def add_repos(self, repos: Iterable[Repository]) -> None:
        repos = list(repos)

        # "a" on the source list would create it; it must already exist from setup().
        with self.source_list.open("r+", encoding="utf-8") as f:
            f.seek(0, 2)
            for repo in repos:
                f.write("\n" + repo.name)

        with self.preferences.open("a", encoding="utf-8") as f:
            for repo in repos:
                if repo.priority:
                    f.write(
                        "\nPackage: *\n"
                        f"Pin: release a={repo.name}\n"
                        f"Pin-Priority: {repo.priority}\n"
                    )

        logger.info("Added %d repos (%d pinned)", len(repos), sum(1 for r in repos if r.priority))
