from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from .apt import Apt
from .errors import CommandError
from .lib.command import SubprocessCommand
from .lib.env import DEFAULT_LOG_PATH, DEFAULT_MANIFEST, HostPaths
from .logging_utils import configure_logging
from .pipeline import PipelineResult, run_pipeline
from .steps import (
    AddKeysStep,
    AddReposStep,
    DownloadStep,
    InstallStep,
    SetupStep,
    UpdateStep,
)

logger = logging.getLogger(__name__)


def build_steps():
    return [
        SetupStep(),
        AddKeysStep(),
        AddReposStep(),
        UpdateStep(),
        DownloadStep(),
        InstallStep(),
    ]


def run(
    *,
    manifest_path: str,
    cache_dir: str,
    install_dir: str,
    host_apt_dir: str = "/etc/apt",
    log_path: str = DEFAULT_LOG_PATH,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    verbose: bool = False,
) -> PipelineResult:
    """Stage the packages declared in manifest_path into install_dir."""

    configure_logging(log_path=log_path, level=logging.DEBUG if verbose else logging.INFO)

    apt = Apt(
        SubprocessCommand(),
        manifest_path,
        cache_dir,
        install_dir,
        host=HostPaths(apt_dir=host_apt_dir),
    )
    steps = build_steps()

    # Later steps need the declared data even when setup is not in the window.
    if start_at is not None and start_at != steps[0].step_id:
        apt.load_manifest()

    try:
        result = run_pipeline(apt=apt, steps=steps, start_at=start_at, stop_after=stop_after)
    except Exception:
        logger.exception("aptstage failed")
        raise

    logger.info("Done (ran=%s skipped=%s)", ",".join(result.ran_steps), ",".join(result.skipped_steps))
    return result


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="aptstage")
    p.add_argument("--manifest", default=DEFAULT_MANIFEST, help="Path to apt.yml")
    p.add_argument("--cache-dir", required=True, help="Directory holding the isolated apt root")
    p.add_argument("--install-dir", required=True, help="Directory packages are unpacked into")
    p.add_argument("--host-apt-dir", default="/etc/apt", help="Host apt config used as a template")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to log file")
    p.add_argument("--start-at", default=None, help="Start at step_id (e.g. 40_update)")
    p.add_argument("--stop-after", default=None, help="Stop after step_id")
    p.add_argument("-v", "--verbose", action="store_true", help="Log captured command output")

    args = p.parse_args(argv)

    try:
        run(
            manifest_path=args.manifest,
            cache_dir=args.cache_dir,
            install_dir=args.install_dir,
            host_apt_dir=args.host_apt_dir,
            log_path=args.log,
            start_at=args.start_at,
            stop_after=args.stop_after,
            verbose=bool(args.verbose),
        )
    except CommandError as e:
        if e.output:
            sys.stderr.write(e.output)
            if not e.output.endswith("\n"):
                sys.stderr.write("\n")
        return 1
    except Exception as e:
        sys.stderr.write(f"aptstage: {e}\n")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
