"""Tests for the renderer module."""

from __future__ import annotations

import io
import json
from datetime import datetime, timezone

from rich.console import Console

from gh_loc_stats.models import FileTypeStats, ProcessingStatus, RepoStats, RunResult, RuntimeStats
from gh_loc_stats.renderer import (
    render_json,
    render_summary,
    render_text_summary,
    report_timestamp,
    save_results,
)


def _make_result(**kwargs) -> RunResult:
    defaults = dict(
        username="test-user",
        year=2025,
        analysis_mode="all",
        processed_at="2025-06-01T12:00:00+00:00",
        total_additions=1500,
        total_deletions=500,
        total_commits=12,
        repo_stats=[
            RepoStats(name="test-user/small", additions=500, deletions=100, commits=4, size_kb=2048),
            RepoStats(name="test-user/big", additions=1000, deletions=400, commits=8, truncated_commits=1),
        ],
        file_type_stats={
            "py": FileTypeStats(additions=1200, deletions=300, files=20),
            "md": FileTypeStats(additions=300, deletions=200, files=3),
        },
        runtime_stats=RuntimeStats(total_api_calls=1234, truncated_commits=1),
        processing_status=ProcessingStatus(successful=2, failed=0),
    )
    defaults.update(kwargs)
    return RunResult(**defaults)


def _console() -> tuple[Console, io.StringIO]:
    buf = io.StringIO()
    return Console(file=buf, force_terminal=False, width=120), buf


def test_render_json_document():
    data = json.loads(render_json(_make_result()))
    assert data["totalAdditions"] == 1500
    assert data["totalDeletions"] == 500
    assert data["netLines"] == 1000
    assert data["totalCommits"] == 12
    assert data["analysisMode"] == "all"
    assert data["repoStats"][1] == {
        "name": "test-user/big",
        "additions": 1000,
        "deletions": 400,
        "netLines": 600,
        "commits": 8,
        "sizeKB": 0,
        "truncatedCommits": 1,
        "skippedCommits": 0,
    }
    assert data["fileTypeStats"]["py"] == {"additions": 1200, "deletions": 300, "files": 20}
    assert data["runtimeStats"]["totalApiCalls"] == 1234
    assert data["processingStatus"] == {"successful": 2, "failed": 0, "failedRepos": []}


def test_text_summary_sections():
    text = render_text_summary(_make_result())
    assert text.startswith("GitHub Lines of Code Analysis for test-user (2025)\n")
    assert "Analysis Mode: All Repositories" in text
    assert "Total API Calls Made: 1,234" in text
    assert "- Total Lines Added: 1,500" in text
    assert "- Net Lines of Code: 1,000" in text
    assert "- Repositories Analyzed: 2" in text
    assert "FAILED REPOSITORIES" not in text


def test_text_summary_orders_top_repositories_and_file_types():
    text = render_text_summary(_make_result())
    assert "1. test-user/big: +1,000 lines (8 commits)" in text
    assert "2. test-user/small: +500 lines (4 commits)" in text
    assert "1. .py: +1,200 lines" in text
    assert "2. .md: +300 lines" in text


def test_text_summary_lists_failed_repos():
    result = _make_result(
        processing_status=ProcessingStatus(successful=2, failed=1, failed_repos=["test-user/broken"]),
        analysis_mode="single",
    )
    text = render_text_summary(result)
    assert "FAILED REPOSITORIES:\n- test-user/broken" in text
    assert "- Failed to process: 1 repositories" in text
    assert "Analysis Mode: Single Repository" in text


def test_text_summary_empty_file_types():
    text = render_text_summary(_make_result(file_type_stats={}))
    assert text.rstrip().endswith("TOP 10 FILE TYPES BY LINES ADDED:")


def test_render_summary_console():
    console, buf = _console()
    render_summary(_make_result(), console=console)
    out = buf.getvalue()
    assert "test-user" in out
    assert "test-user/big" in out
    assert "1,500" in out
    assert ".py" in out
    assert "2.0 MB" in out
    assert "▼" in out


def test_render_summary_shows_failed_repos():
    console, buf = _console()
    result = _make_result(
        processing_status=ProcessingStatus(successful=2, failed=1, failed_repos=["test-user/broken"]),
    )
    render_summary(result, console=console)
    assert "test-user/broken" in buf.getvalue()


def test_report_timestamp_format():
    ts = report_timestamp(datetime(2025, 3, 4, 5, 6, 7, 890000, tzinfo=timezone.utc))
    assert ts == "2025-03-04T05-06-07-890Z"


def test_save_results_writes_both_files(tmp_path):
    console, buf = _console()
    reports_dir = tmp_path / "reports"
    paths = save_results(_make_result(), reports_dir, timestamp="TS", console=console)

    assert paths.details_file == reports_dir / "github-loc-test-user-2025-TS.json"
    assert paths.summary_file == reports_dir / "github-loc-summary-test-user-2025-TS.txt"
    data = json.loads(paths.details_file.read_text(encoding="utf-8"))
    assert data["totalAdditions"] == 1500
    assert paths.summary_file.read_text(encoding="utf-8").startswith("GitHub Lines of Code Analysis")
    assert "Saved to" in buf.getvalue()
