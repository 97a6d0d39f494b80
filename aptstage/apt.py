from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import requests

from .lib.apt_root import AptRoot
from .lib.command import Command
from .lib.env import HOST_PATHS, HostPaths
from .lib.manifests import Manifest, load_manifest
from .lib.pkg import add_keys, apt_update, download_packages, install_packages

logger = logging.getLogger(__name__)


class Apt:
    """Stages the packages declared in an apt.yml into install_dir.

    Call order: setup, add_keys, add_repos, update, download, install.
    `manifest` is empty until setup() has loaded it.
    """

    def __init__(
        self,
        command: Command,
        manifest_path: str | Path,
        cache_dir: str | Path,
        install_dir: str | Path,
        *,
        host: HostPaths = HOST_PATHS,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.command = command
        self.manifest_path = Path(manifest_path)
        self.install_dir = Path(install_dir)
        self.root = AptRoot(cache_root=Path(cache_dir), host=host)
        self.session = session if session is not None else requests.Session()
        self.manifest = Manifest()

    def setup(self) -> None:
        self.root.setup()
        self.load_manifest()

    def load_manifest(self) -> None:
        self.manifest = load_manifest(self.manifest_path)
        logger.info(
            "Loaded %s (keys=%d repos=%d packages=%d)",
            str(self.manifest_path),
            len(self.manifest.keys) + len(self.manifest.gpg_advanced_options),
            len(self.manifest.repos),
            len(self.manifest.packages),
        )

    def has_keys(self) -> bool:
        return self.manifest.has_keys()

    def has_repos(self) -> bool:
        return self.manifest.has_repos()

    def add_keys(self) -> None:
        add_keys(self.command, self.root, self.manifest)

    def add_repos(self) -> None:
        self.root.add_repos(self.manifest.repos)

    def update(self) -> str:
        return apt_update(self.command, self.root)

    def download(self) -> None:
        download_packages(self.command, self.root, self.manifest.packages, session=self.session)

    def install(self) -> None:
        install_packages(self.command, self.root, self.install_dir)
