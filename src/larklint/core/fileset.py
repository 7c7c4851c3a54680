from fnmatch import fnmatch
from pathlib import Path

from .config import LintConfig
from .errors import ErrorContext, SourceError
from .source import LinesTextSource


def _excluded(path: Path, config: LintConfig) -> bool:
    try:
        rel = path.relative_to(config.root).as_posix()
    except ValueError:
        rel = path.as_posix()
    return any(fnmatch(rel, pattern) for pattern in config.exclude)


def discover_grammar_files(config: LintConfig) -> list[Path]:
    files: list[Path] = []
    for rel in config.paths:
        base = (config.root / rel).resolve()
        if not base.exists():
            continue
        if base.is_file():
            files.append(base)
            continue
        for p in base.rglob(config.include):
            if p.is_file() and not _excluded(p, config):
                files.append(p)
    return sorted(set(files))


def read_grammar(path: Path) -> LinesTextSource:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError(f"Cannot read grammar: {e}", ErrorContext(file=path)) from e
    return LinesTextSource.from_text(text)
