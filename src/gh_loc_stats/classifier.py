"""Path heuristics deciding which changed files count as code."""

from __future__ import annotations

import posixpath
import re

_EXCLUDE_PATTERNS = [
    # Lock files
    r"package-lock\.json$",
    r"yarn\.lock$",
    r"pnpm-lock\.yaml$",
    r"composer\.lock$",
    r"Gemfile\.lock$",
    r"poetry\.lock$",
    r"Pipfile\.lock$",
    # Minified and bundled assets
    r"\.min\.(js|css)$",
    r"\.bundle\.(js|css)$",
    # Source maps
    r"\.map$",
    # Build output and dependency directories
    r"^(dist|build|out|target|bin|obj)/",
    r"node_modules/",
    r"vendor/",
    r"__pycache__/",
    r"\.pytest_cache/",
    # Generated files
    r"\.generated\.",
    r"\.auto\.",
    r"^generated/",
    # Documentation builds
    r"^docs/_build/",
    r"^site/",
    # Editor metadata
    r"\.vscode/",
    r"\.idea/",
    # Binary and media
    r"\.(jpg|jpeg|png|gif|svg|ico|pdf|zip|tar|gz|rar|7z|exe|dmg)$",
    r"\.(mp4|avi|mov|wmv|mp3|wav|ogg)$",
    # Databases
    r"\.(db|sqlite|sqlite3)$",
    # Logs
    r"\.(log|logs)$",
    r"^logs/",
]

EXCLUDE_RULES = [re.compile(p) for p in _EXCLUDE_PATTERNS]

NO_EXTENSION = "(none)"


def should_include_file(path: str) -> bool:
    """Return False if any exclusion rule matches *path*."""
    return not any(rule.search(path) for rule in EXCLUDE_RULES)


def file_extension(path: str) -> str:
    """Return the lower-cased extension of *path* without the dot.

    Dotfiles such as ``.gitignore`` have no extension.
    """
    _, ext = posixpath.splitext(posixpath.basename(path))
    return ext[1:].lower() if ext else NO_EXTENSION
