"""Configuration objects and loaders for resolver runs."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


CATEGORY_FOLDERS = ("img", "audio", "video", "fonts")


class ConfigError(ValueError):
    """Raised for malformed configuration files or alias definitions."""


@dataclass
class ResolutionConfig:
    """Per-run settings for resolving and emitting assets."""

    aliases: Dict[str, str] = field(default_factory=dict)
    public_path: str = "/"
    include_paths: List[str] = field(default_factory=list)
    base_dir: Optional[str] = None  # None = cwd at resolution time

    def working_dir(self) -> str:
        return os.path.abspath(self.base_dir or os.getcwd())

    def output_root(self) -> str:
        return os.path.abspath(os.path.join(self.working_dir(), self.public_path))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], relative_to: Optional[str] = None) -> "ResolutionConfig":
        """
        Build a config from a mapping using either camelCase or snake_case keys.

        A relative ``base_dir`` is anchored to ``relative_to`` when given.
        """
        if not isinstance(data, Mapping):
            raise ConfigError("configuration must be a JSON object")

        aliases = _pick(data, "aliases") or {}
        if not isinstance(aliases, Mapping):
            raise ConfigError("'aliases' must be an object mapping prefixes to paths")
        for key, value in aliases.items():
            if not isinstance(value, str):
                raise ConfigError(f"alias {key!r} must map to a string path")

        include_paths = _pick(data, "includePaths", "include_paths") or []
        if isinstance(include_paths, str) or not isinstance(include_paths, list):
            raise ConfigError("'includePaths' must be a list of directories")

        public_path = _pick(data, "publicPath", "public_path") or "/"
        if not isinstance(public_path, str):
            raise ConfigError("'publicPath' must be a string")

        base_dir = _pick(data, "baseDir", "base_dir")
        if base_dir is not None and relative_to and not os.path.isabs(base_dir):
            base_dir = os.path.join(relative_to, base_dir)

        return cls(
            aliases=dict(aliases),
            public_path=public_path,
            include_paths=[str(p) for p in include_paths],
            base_dir=base_dir,
        )


@dataclass
class BuildConfig:
    """Settings for a multi-document build."""

    inputs: List[str]
    output_dir: str = "dist/css"
    resolution: ResolutionConfig = field(default_factory=ResolutionConfig)
    concurrency: int = 1
    clean: bool = True
    source_root: Optional[str] = None  # None = deepest directory holding every input


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def load_config(path: str) -> ResolutionConfig:
    """Load a ResolutionConfig from a JSON file."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid JSON in {path}: {e}") from e
    return ResolutionConfig.from_dict(data, relative_to=os.path.dirname(os.path.abspath(path)))


def parse_alias(value: str) -> tuple:
    """Parse a ``PREFIX=PATH`` command-line alias."""
    prefix, sep, target = value.partition('=')
    if not sep or not prefix or not target:
        raise ConfigError(f"alias must look like PREFIX=PATH, got {value!r}")
    return prefix, target
