from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple

from ..errors import ManifestError


@dataclass(frozen=True)
class Repository:
    """One `repos` entry: an APT source line plus an optional pin priority."""

    name: str
    priority: str = ""

    @classmethod
    def from_yaml(cls, value: Any) -> "Repository":
        # Bare source line first; the mapping form is the fallback.
        if isinstance(value, str):
            return cls(name=value)

        if isinstance(value, dict):
            name = value.get("name")
            if not isinstance(name, str):
                raise ManifestError(f"repos entry needs a string name: {value!r}")
            priority = value.get("priority")
            return cls(name=name, priority="" if priority is None else str(priority))

        raise ManifestError(f"repos entry must be a string or a mapping, got {type(value).__name__}")


@dataclass(frozen=True)
class Manifest:
    keys: Tuple[str, ...] = field(default_factory=tuple)
    gpg_advanced_options: Tuple[str, ...] = field(default_factory=tuple)
    repos: Tuple[Repository, ...] = field(default_factory=tuple)
    packages: Tuple[str, ...] = field(default_factory=tuple)

    def has_keys(self) -> bool:
        return bool(self.keys) or bool(self.gpg_advanced_options)

    def has_repos(self) -> bool:
        return bool(self.repos)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Manifest":
        return cls(
            keys=_string_list(data, "keys"),
            gpg_advanced_options=_string_list(data, "gpg_advanced_options"),
            repos=tuple(Repository.from_yaml(r) for r in _list(data, "repos")),
            packages=_string_list(data, "packages"),
        )


def _list(data: Dict[str, Any], key: str) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ManifestError(f"Manifest key {key!r} must be a list")
    return value


def _string_list(data: Dict[str, Any], key: str) -> Tuple[str, ...]:
    items = _list(data, key)
    for item in items:
        if not isinstance(item, str):
            raise ManifestError(f"Manifest key {key!r} must contain only strings, got {item!r}")
    return tuple(items)


def load_manifest(path: str | Path) -> Manifest:
    """Load an apt.yml style manifest."""
    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("PyYAML required to load manifests") from e

    p = Path(path)
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ManifestError(f"Could not parse manifest {p}: {e}") from e
    if not isinstance(data, dict):
        raise ManifestError(f"Manifest must be a mapping/dict: {p}")
    return Manifest.from_dict(data)
