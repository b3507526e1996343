"""Rich-based console summary and report files."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import FileTypeStats, RepoStats, RunResult

TOP_N = 10
_MODE_LABELS = {"single": "Single Repository", "all": "All Repositories"}


@dataclass(frozen=True)
class ReportPaths:
    details_file: Path
    summary_file: Path


def _format_number(n: int) -> str:
    return f"{n:,}"


def _write_to_file(content: str, output_file: Path, console: Console | None = None) -> None:
    """Write content to a file and print confirmation."""
    with open(output_file, "w", encoding="utf-8") as f:
        f.write(content)
    (console or Console()).print(f"Saved to {output_file}")


def _mode_label(result: RunResult) -> str:
    return _MODE_LABELS.get(result.analysis_mode, result.analysis_mode)


def top_repositories(result: RunResult, n: int = TOP_N) -> list[RepoStats]:
    return sorted(result.repo_stats, key=lambda r: r.additions, reverse=True)[:n]


def top_file_types(result: RunResult, n: int = TOP_N) -> list[tuple[str, FileTypeStats]]:
    return sorted(result.file_type_stats.items(), key=lambda kv: kv[1].additions, reverse=True)[:n]


def result_to_dict(result: RunResult) -> dict[str, Any]:
    """The JSON report document."""
    return {
        "username": result.username,
        "year": result.year,
        "analysisMode": result.analysis_mode,
        "processedAt": result.processed_at,
        "totalAdditions": result.total_additions,
        "totalDeletions": result.total_deletions,
        "netLines": result.net_lines,
        "totalCommits": result.total_commits,
        "repoStats": [
            {
                "name": r.name,
                "additions": r.additions,
                "deletions": r.deletions,
                "netLines": r.net_lines,
                "commits": r.commits,
                "sizeKB": r.size_kb,
                "truncatedCommits": r.truncated_commits,
                "skippedCommits": r.skipped_commits,
            }
            for r in result.repo_stats
        ],
        "fileTypeStats": {
            ext: {"additions": s.additions, "deletions": s.deletions, "files": s.files}
            for ext, s in result.file_type_stats.items()
        },
        "warnings": list(result.warnings),
        "runtimeStats": {
            "totalApiCalls": result.runtime_stats.total_api_calls,
            "truncatedCommits": result.runtime_stats.truncated_commits,
            "skippedCommits": result.runtime_stats.skipped_commits,
        },
        "processingStatus": {
            "successful": result.processing_status.successful,
            "failed": result.processing_status.failed,
            "failedRepos": list(result.processing_status.failed_repos),
        },
    }


def render_json(result: RunResult) -> str:
    return json.dumps(result_to_dict(result), indent=2, ensure_ascii=False)


def render_text_summary(result: RunResult) -> str:
    """Plain-text summary written next to the JSON report."""
    status = result.processing_status
    lines = [
        f"GitHub Lines of Code Analysis for {result.username} ({result.year})",
        "=" * 60,
        "",
        f"Analysis Date: {result.processed_at}",
        f"Analysis Mode: {_mode_label(result)}",
        f"Total API Calls Made: {_format_number(result.runtime_stats.total_api_calls)}",
        "",
        "OVERALL STATISTICS:",
        f"- Total Lines Added: {_format_number(result.total_additions)}",
        f"- Total Lines Deleted: {_format_number(result.total_deletions)}",
        f"- Net Lines of Code: {_format_number(result.net_lines)}",
        f"- Total Commits: {_format_number(result.total_commits)}",
        f"- Repositories Analyzed: {len(result.repo_stats)}",
        "",
        "PROCESSING STATUS:",
        f"- Successfully processed: {status.successful} repositories",
        f"- Failed to process: {status.failed} repositories",
        "",
    ]

    if status.failed:
        lines.append("FAILED REPOSITORIES:")
        lines.extend(f"- {name}" for name in status.failed_repos)
        lines.append("")

    if result.warnings:
        lines.append("WARNINGS:")
        lines.extend(f"- {w}" for w in result.warnings)
        lines.append("")

    lines.append(f"TOP {TOP_N} REPOSITORIES BY LINES ADDED:")
    for i, r in enumerate(top_repositories(result), 1):
        lines.append(f"{i}. {r.name}: +{_format_number(r.additions)} lines ({r.commits} commits)")

    lines.append("")
    lines.append(f"TOP {TOP_N} FILE TYPES BY LINES ADDED:")
    for i, (ext, s) in enumerate(top_file_types(result), 1):
        lines.append(f"{i}. .{ext}: +{_format_number(s.additions)} lines")

    return "\n".join(lines) + "\n"


def render_summary(result: RunResult, console: Console | None = None) -> None:
    """Print the end-of-run summary to the terminal."""
    console = console or Console()
    status = result.processing_status

    console.print(Panel(
        Text(f"GitHub lines of code: {result.username} ({result.year})", justify="center"),
        style="bold cyan",
    ))
    console.print()

    if status.failed_repos:
        console.print(
            f"[bold yellow]Warning:[/bold yellow] Failed to process "
            f"{status.failed} repo(s): {', '.join(status.failed_repos)}"
        )
        console.print()

    console.print("[bold]Summary[/bold]")
    summary = Table(show_header=False, box=None, padding=(0, 2))
    summary.add_column("label", style="dim")
    summary.add_column("value", style="bold")
    summary.add_row("Analysis Mode", _mode_label(result))
    summary.add_row("Lines Added", _format_number(result.total_additions))
    summary.add_row("Lines Deleted", _format_number(result.total_deletions))
    summary.add_row("Net Lines", _format_number(result.net_lines))
    summary.add_row("Commits", _format_number(result.total_commits))
    summary.add_row("Repositories Analyzed", _format_number(len(result.repo_stats)))
    summary.add_row("Successful", _format_number(status.successful))
    summary.add_row("Failed", _format_number(status.failed))
    summary.add_row("API Calls", _format_number(result.runtime_stats.total_api_calls))
    console.print(summary)
    console.print()

    if result.runtime_stats.truncated_commits:
        console.print(
            f"[bold yellow]{result.runtime_stats.truncated_commits} commits had truncated data[/bold yellow]"
        )
        console.print()

    repos = top_repositories(result)
    if repos:
        console.print(f"[bold]Top Repositories by Lines Added (top {TOP_N})[/bold]")
        repo_table = Table(show_header=True, header_style="bold")
        repo_table.add_column("#", justify="right")
        repo_table.add_column("Repo")
        repo_table.add_column("Additions \u25bc", justify="right")
        repo_table.add_column("Deletions", justify="right")
        repo_table.add_column("Commits", justify="right")
        repo_table.add_column("Size", justify="right")
        repo_table.add_column("Truncated", justify="right")
        for i, r in enumerate(repos, 1):
            repo_table.add_row(
                str(i),
                r.name,
                _format_number(r.additions),
                _format_number(r.deletions),
                _format_number(r.commits),
                f"{r.size_kb / 1024:.1f} MB" if r.size_kb else "-",
                str(r.truncated_commits) if r.truncated_commits else "-",
            )
        console.print(repo_table)
        console.print()

    file_types = top_file_types(result)
    if file_types:
        console.print(f"[bold]Top File Types by Lines Added (top {TOP_N})[/bold]")
        ext_table = Table(show_header=True, header_style="bold")
        ext_table.add_column("#", justify="right")
        ext_table.add_column("Extension")
        ext_table.add_column("Additions \u25bc", justify="right")
        ext_table.add_column("Deletions", justify="right")
        ext_table.add_column("Files", justify="right")
        for i, (ext, s) in enumerate(file_types, 1):
            ext_table.add_row(
                str(i),
                f".{ext}",
                _format_number(s.additions),
                _format_number(s.deletions),
                _format_number(s.files),
            )
        console.print(ext_table)
        console.print()


def report_timestamp(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z").replace(":", "-").replace(".", "-")


def save_results(
    result: RunResult,
    reports_dir: Path,
    timestamp: str | None = None,
    console: Console | None = None,
) -> ReportPaths:
    """Write the JSON report and the text summary under *reports_dir*."""
    reports_dir = Path(reports_dir)
    reports_dir.mkdir(parents=True, exist_ok=True)
    timestamp = timestamp or report_timestamp()

    details = reports_dir / f"github-loc-{result.username}-{result.year}-{timestamp}.json"
    summary = reports_dir / f"github-loc-summary-{result.username}-{result.year}-{timestamp}.txt"
    _write_to_file(render_json(result), details, console)
    _write_to_file(render_text_summary(result), summary, console)
    return ReportPaths(details_file=details, summary_file=summary)
