"""Tests for the file classifier."""

from __future__ import annotations

import pytest

from gh_loc_stats.classifier import EXCLUDE_RULES, file_extension, should_include_file


@pytest.mark.parametrize(
    "path",
    [
        "package-lock.json",
        "frontend/yarn.lock",
        "pnpm-lock.yaml",
        "composer.lock",
        "Gemfile.lock",
        "poetry.lock",
        "Pipfile.lock",
        "static/app.min.js",
        "static/site.bundle.css",
        "static/app.js.map",
        "dist/x.js",
        "build/index.js",
        "target/classes/Main.class",
        "node_modules/a/b.js",
        "web/node_modules/a/b.js",
        "vendor/lib.php",
        "pkg/__pycache__/mod.pyc",
        ".pytest_cache/v/cache",
        "api/client.generated.ts",
        "generated/schema.py",
        "docs/_build/html/index.html",
        "site/index.html",
        ".vscode/settings.json",
        ".idea/workspace.xml",
        "assets/logo.png",
        "video.mp4",
        "data/app.sqlite3",
        "server.log",
        "logs/today.txt",
    ],
)
def test_excluded_paths(path):
    assert should_include_file(path) is False


@pytest.mark.parametrize(
    "path",
    [
        "src/index.js",
        "lib/helper.js",
        "README.md",
        "src/dist/helpers.js",
        "app/build_utils.py",
        "docs/guide.md",
        "src/logs/handler.py",
    ],
)
def test_included_paths(path):
    assert should_include_file(path) is True


def test_include_iff_no_rule_matches():
    for path in ["src/main.rs", "dist/a.js", "node_modules/x", "a.min.css", "notes.txt"]:
        matched = any(rule.search(path) for rule in EXCLUDE_RULES)
        assert should_include_file(path) is (not matched)


def test_file_extension():
    assert file_extension("src/Main.PY") == "py"
    assert file_extension("lib/a.test.ts") == "ts"
    assert file_extension("Makefile") == "(none)"
    assert file_extension(".gitignore") == "(none)"
