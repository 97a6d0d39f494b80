from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Sequence, Tuple

import requests

from ..errors import CommandError
from .apt_root import AptRoot
from .command import Command
from .fetch import fetch_if_newer
from .manifests import Manifest

logger = logging.getLogger(__name__)

DEB_SUFFIX = ".deb"


def add_keys(command: Command, root: AptRoot, manifest: Manifest) -> None:
    """Import keys into the isolated keyring: raw gpg options first, then key URLs."""

    keyring = str(root.trusted_keys)
    for options in manifest.gpg_advanced_options:
        try:
            command.output("/", "apt-key", "--keyring", keyring, "adv", options)
        except CommandError as e:
            raise CommandError(
                f"Could not pass gpg advanced options `{options}`: {e}",
                argv=e.argv,
                returncode=e.returncode,
                output=e.output,
            ) from e

    for key_url in manifest.keys:
        try:
            command.output("/", "apt-key", "--keyring", keyring, "adv", "--fetch-keys", key_url)
        except CommandError as e:
            raise CommandError(
                f"Could not add apt key {key_url}: {e}",
                argv=e.argv,
                returncode=e.returncode,
                output=e.output,
            ) from e


def apt_update(command: Command, root: AptRoot) -> str:
    return command.output("/", "apt-get", *root.options, "update")


def partition_packages(packages: Sequence[str]) -> Tuple[List[str], List[str]]:
    """Split into (direct .deb URLs, repository package names); blanks are dropped."""

    debs: List[str] = []
    repo_pkgs: List[str] = []
    for pkg in packages:
        if pkg.endswith(DEB_SUFFIX):
            debs.append(pkg)
        elif pkg:
            repo_pkgs.append(pkg)
    return debs, repo_pkgs


def download_packages(
    command: Command,
    root: AptRoot,
    packages: Sequence[str],
    *,
    session: requests.Session,
) -> None:
    """Fetch direct .deb URLs into the archive cache, then batch the rest through apt-get.

    When no repository package names are declared, apt-get is not invoked at all.
    """

    debs, repo_pkgs = partition_packages(packages)

    archives = root.archives_dir
    archives.mkdir(parents=True, exist_ok=True)

    # Same basename means same cache entry, whatever the host.
    for url in debs:
        fetch_if_newer(session, url, archives / os.path.basename(url))

    if not repo_pkgs:
        logger.info("No repository packages to download")
        return

    out = command.output(
        "/",
        "apt-get",
        *root.options,
        "-y",
        "-d",
        "install",
        "--reinstall",
        *repo_pkgs,
    )
    logger.info("%s", out)


def install_packages(command: Command, root: AptRoot, install_dir: str | Path) -> None:
    """Unpack every cached archive into install_dir with dpkg -x."""

    for deb in root.archives_dir.glob("*" + DEB_SUFFIX):
        logger.info("installing %s", deb.name)
        try:
            command.output("/", "dpkg", "-x", str(deb), str(install_dir))
        except CommandError as e:
            logger.error("Error installing package %s!\n%s", deb.name, e.output)
            raise
