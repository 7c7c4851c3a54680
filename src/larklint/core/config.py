"""
Project configuration.

Settings come from ``larklint.toml`` (top-level keys) or from the
``[tool.larklint]`` table of ``pyproject.toml``:

    [tool.larklint]
    paths = ["grammars"]
    include = "*.lark"
    exclude = ["vendor/*"]
    disable = ["unused-symbol"]
    language_ids = ["lark"]
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import make_config_error
from .ir import Diagnostic, DiagnosticCode

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "larklint.toml"
PYPROJECT_FILENAME = "pyproject.toml"


@dataclass
class LintConfig:
    """Linter settings for a project."""

    root: Path = field(default_factory=Path.cwd)
    paths: list[str] = field(default_factory=lambda: ["."])
    include: str = "*.lark"
    exclude: list[str] = field(default_factory=list)
    disable: set[DiagnosticCode] = field(default_factory=set)
    language_ids: list[str] = field(default_factory=lambda: ["lark"])
    config_file: Path | None = None

    def filter(self, diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
        """Drop diagnostics whose code is disabled."""
        return [d for d in diagnostics if d.code not in self.disable]

    def with_disabled(self, codes: Iterable[str]) -> LintConfig:
        """Copy of this config with extra codes disabled."""
        extra = _parse_codes(list(codes), self.config_file or self.root)
        return LintConfig(
            root=self.root,
            paths=list(self.paths),
            include=self.include,
            exclude=list(self.exclude),
            disable=self.disable | extra,
            language_ids=list(self.language_ids),
            config_file=self.config_file,
        )


def _parse_codes(values: list[Any], path: Path) -> set[DiagnosticCode]:
    codes: set[DiagnosticCode] = set()
    known = {c.value for c in DiagnosticCode}
    for value in values:
        if value not in known:
            raise make_config_error(
                f"Unknown diagnostic code '{value}' (expected one of: {', '.join(sorted(known))})",
                path,
            )
        codes.add(DiagnosticCode(value))
    return codes


def _string_list(data: dict[str, Any], key: str, default: list[str], path: Path) -> list[str]:
    value = data.get(key, default)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise make_config_error(f"'{key}' must be a list of strings", path)
    return list(value)


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise make_config_error(f"Invalid TOML: {e}", path) from e
    except OSError as e:
        raise make_config_error(f"Cannot read config: {e}", path) from e


def _settings_from(path: Path) -> dict[str, Any] | None:
    """Extract larklint settings from a config file, or None if it has none."""
    data = _read_toml(path)
    if path.name == PYPROJECT_FILENAME:
        return data.get("tool", {}).get("larklint")
    return data


def load_config(path: Path) -> LintConfig:
    """Load configuration from a ``larklint.toml`` or ``pyproject.toml`` file."""
    settings = _settings_from(path)
    if settings is None:
        settings = {}

    include = settings.get("include", "*.lark")
    if not isinstance(include, str):
        raise make_config_error("'include' must be a string glob", path)

    config = LintConfig(
        root=path.parent.resolve(),
        paths=_string_list(settings, "paths", ["."], path),
        include=include,
        exclude=_string_list(settings, "exclude", [], path),
        disable=_parse_codes(_string_list(settings, "disable", [], path), path),
        language_ids=_string_list(settings, "language_ids", ["lark"], path),
        config_file=path,
    )
    logger.debug(f"Loaded config from {path}")
    return config


def find_config(start: Path) -> Path | None:
    """
    Find the nearest config file at or above ``start``.

    ``larklint.toml`` wins over ``pyproject.toml`` in the same directory; a
    ``pyproject.toml`` without a ``[tool.larklint]`` table is ignored.
    """
    start = start.resolve()
    directory = start if start.is_dir() else start.parent
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = candidate_dir / PYPROJECT_FILENAME
        if pyproject.is_file() and _settings_from(pyproject) is not None:
            return pyproject
    return None


def resolve_config(start: Path, explicit: Path | None = None) -> LintConfig:
    """Load the explicit config file, the nearest one, or the defaults."""
    if explicit is not None:
        return load_config(explicit)
    found = find_config(start)
    if found is not None:
        return load_config(found)
    directory = start.resolve()
    return LintConfig(root=directory if directory.is_dir() else directory.parent)
