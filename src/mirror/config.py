"""TOML config loading for mirror.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from mirror.parser import DEFAULT_MAX_DEPTH, check_max_depth

CONFIG_FILENAME = "mirror.toml"


@dataclass
class PackageConfig:
    name: str = "untitled"
    version: str = "0.0.0"


@dataclass
class ParserConfig:
    max_depth: int = DEFAULT_MAX_DEPTH


@dataclass
class OutputConfig:
    color: bool = True


@dataclass
class MirrorConfig:
    package: PackageConfig = field(default_factory=PackageConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find mirror.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_FILENAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError("No mirror.toml found in any parent directory")
        path = parent


def load_config(path: Path) -> MirrorConfig:
    """Parse a mirror.toml file into a MirrorConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = MirrorConfig()

    if "package" in data:
        pkg = data["package"]
        config.package = PackageConfig(
            name=pkg.get("name", "untitled"),
            version=pkg.get("version", "0.0.0"),
        )

    if "parser" in data:
        prs = data["parser"]
        max_depth = prs.get("max_depth", DEFAULT_MAX_DEPTH)
        try:
            check_max_depth(max_depth)
        except ValueError as e:
            raise ValueError(f"{path}: parser.{e}") from e
        config.parser = ParserConfig(max_depth=max_depth)

    if "output" in data:
        out = data["output"]
        config.output = OutputConfig(color=bool(out.get("color", True)))

    return config


def discover_config(start_path: Path | None = None) -> MirrorConfig:
    """Load the nearest mirror.toml, or defaults when there is none."""
    try:
        return load_config(find_config(start_path))
    except FileNotFoundError:
        return MirrorConfig()
