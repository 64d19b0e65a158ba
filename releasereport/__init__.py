"""
releasereport - Review a git repository ahead of cutting a release.

Lists the most recent release tags, classifies commits since a starting
point by conventional-commit keyword, and proposes the next version.

Quick Start:
    from releasereport import ReleaseService

    service = ReleaseService()
    report = service.review("~/src/myproject")
    print(report.counts.features, report.current, report.next)

    # Explicit range, no network access
    report = service.review("~/src/myproject", from_ref="v1.1.0",
                            to_ref="v1.2.0", fetch=False)

Domain Objects:
    TagInfo - A tag with the commit it marks
    CommitCounts - Fix/feature/refactor/test/style tallies
    Version - v<major>.<minor>.<patch> release number
    ReleaseReport - Result of one review

Services:
    ReleaseService - The review pipeline (git client injected)
"""

__version__ = "0.1.0"

from .domain import (
    COMMIT_KEYWORDS,
    TagInfo,
    CommitCounts,
    Version,
    ReleaseReport,
)

from .services import ReleaseService, rank_tags, next_version

from .infra import GitClient, GitCommit

from .config import load_config

__all__ = [
    "__version__",
    # Domain objects
    "COMMIT_KEYWORDS",
    "TagInfo",
    "CommitCounts",
    "Version",
    "ReleaseReport",
    # Services
    "ReleaseService",
    "rank_tags",
    "next_version",
    # Infrastructure
    "GitClient",
    "GitCommit",
    # Configuration
    "load_config",
]
