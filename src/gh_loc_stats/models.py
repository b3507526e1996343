"""Data models for gh-loc-stats."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

LARGE_FILE_LIST = 300
LARGE_CHANGE_TOTAL = 50_000


@dataclass(frozen=True)
class Repository:
    id: int
    owner: str
    name: str
    full_name: str
    size: int = 0

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Repository:
        owner = (data.get("owner") or {}).get("login") or data["full_name"].split("/")[0]
        return cls(
            id=data.get("id", 0),
            owner=owner,
            name=data["name"],
            full_name=data["full_name"],
            size=data.get("size") or 0,
        )


@dataclass(frozen=True)
class Commit:
    sha: str
    author: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Commit:
        author = (data.get("author") or {}).get("login")
        return cls(sha=data["sha"], author=author)


@dataclass
class FileChange:
    filename: str
    additions: int = 0
    deletions: int = 0


@dataclass
class CommitStats:
    additions: int
    deletions: int
    total: int
    files: list[FileChange] = field(default_factory=list)
    truncated: bool = False
    skipped: bool = False

    @classmethod
    def empty(cls, skipped: bool = False) -> CommitStats:
        return cls(additions=0, deletions=0, total=0, skipped=skipped)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> CommitStats:
        """Build stats from a ``GET /repos/{owner}/{repo}/commits/{sha}`` payload.

        GitHub caps the file list at 300 entries and drops per-file detail for
        very large commits, so either condition marks the stats as truncated.
        """
        stats = data.get("stats") or {}
        files = [
            FileChange(
                filename=f.get("filename", ""),
                additions=f.get("additions") or 0,
                deletions=f.get("deletions") or 0,
            )
            for f in data.get("files") or []
        ]
        total = stats.get("total") or 0
        return cls(
            additions=stats.get("additions") or 0,
            deletions=stats.get("deletions") or 0,
            total=total,
            files=files,
            truncated=len(files) >= LARGE_FILE_LIST or total > LARGE_CHANGE_TOTAL,
        )


@dataclass
class FileTypeStats:
    additions: int = 0
    deletions: int = 0
    files: int = 0

    def merge(self, other: FileTypeStats) -> None:
        self.additions += other.additions
        self.deletions += other.deletions
        self.files += other.files


@dataclass
class RepoStats:
    name: str
    additions: int = 0
    deletions: int = 0
    commits: int = 0
    size_kb: int = 0
    truncated_commits: int = 0
    skipped_commits: int = 0
    file_types: dict[str, FileTypeStats] = field(default_factory=dict)

    @property
    def net_lines(self) -> int:
        return self.additions - self.deletions


@dataclass
class RepoOutcome:
    """Result of processing one repository: stats on success, an error otherwise."""

    repository: Repository
    stats: RepoStats | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class ProcessingStatus:
    successful: int = 0
    failed: int = 0
    failed_repos: list[str] = field(default_factory=list)


@dataclass
class RuntimeStats:
    total_api_calls: int = 0
    truncated_commits: int = 0
    skipped_commits: int = 0


@dataclass
class RunResult:
    username: str
    year: int
    analysis_mode: str
    processed_at: str
    total_additions: int = 0
    total_deletions: int = 0
    total_commits: int = 0
    repo_stats: list[RepoStats] = field(default_factory=list)
    file_type_stats: dict[str, FileTypeStats] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    runtime_stats: RuntimeStats = field(default_factory=RuntimeStats)
    processing_status: ProcessingStatus = field(default_factory=ProcessingStatus)

    @property
    def net_lines(self) -> int:
        return self.total_additions - self.total_deletions
