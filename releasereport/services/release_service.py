"""
Release review service for releasereport.

Runs the one straight-line pipeline behind `releasereport review`:
open -> fetch -> recent tags -> classify commits -> current/next version.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from packaging.version import Version as PackagingVersion, InvalidVersion

from ..config import load_config
from ..domain.release import CommitCounts, ReleaseReport, TagInfo, Version
from ..exit_codes import NoTagsError, NotARepositoryError
from ..infra.git_client import GitClient

logger = logging.getLogger(__name__)


def rank_tags(names: List[str], prefix: str = 'v', sort: str = 'numeric') -> List[str]:
    """
    Keep tags starting with prefix and order them newest-version first.

    Args:
        names: Tag names as listed by git
        prefix: Literal prefix a release tag must start with
        sort: "numeric" compares parsed versions (v10.0.0 > v2.0.0).
              "lexicographic" compares the string after the first three
              characters, the historical ordering of this report, where
              v10.0.0 ranks below v2.0.0 and the major number is ignored.
              Tags sharing a key come out in reverse `git tag` order.

    Returns:
        Matching names, descending
    """
    candidates = [name for name in names if name.startswith(prefix)]

    if sort == 'lexicographic':
        # ascending then reversed, so ties keep reverse listing order
        return list(reversed(sorted(candidates, key=lambda name: name[3:])))
    if sort != 'numeric':
        raise ValueError(f"Unknown tag sort: {sort}")

    def numeric_key(name):
        try:
            return (1, PackagingVersion(name[len(prefix):]))
        except InvalidVersion:
            # Unparseable names rank below every real version
            return (0, PackagingVersion('0'))

    return sorted(candidates, key=numeric_key, reverse=True)


def next_version(current: str, counts: CommitCounts, prefix: str = 'v') -> str:
    """Proposed tag after `current` given the commit counts."""
    return str(Version.parse(current, prefix=prefix).next(counts))


class ReleaseService:
    """
    Service that reviews a repository ahead of a release.

    Example:
        service = ReleaseService()
        report = service.review("/path/to/repo")
        print(report.current, "->", report.next)
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        git_client: Optional[GitClient] = None
    ):
        """
        Initialize ReleaseService.

        Args:
            config: Configuration dict (loads default if None)
            git_client: GitClient instance (creates new if None)
        """
        self.config = config or load_config()
        self.git = git_client or GitClient(
            timeout=self.config['git']['timeout_seconds']
        )

    def open(self, path: str) -> str:
        """Resolve path and check it is a git working copy."""
        resolved = str(Path(path).expanduser().resolve())
        if not self.git.is_git_repo(resolved):
            raise NotARepositoryError(path)
        return resolved

    def sync(self, path: str) -> None:
        remote = self.config['git'].get('remote') or None
        logger.info(f"Fetching {remote or 'default remote'} for {path}")
        self.git.fetch(path, remote=remote)

    def recent_tags(
        self,
        path: str,
        limit: Optional[int] = None,
        prefix: Optional[str] = None,
        sort: Optional[str] = None
    ) -> List[TagInfo]:
        """
        Highest-ranked release tags with their commit metadata.

        Returns:
            Up to `limit` TagInfo objects, highest first
        """
        tags_config = self.config['tags']
        limit = limit if limit is not None else tags_config['limit']
        prefix = prefix if prefix is not None else tags_config['prefix']
        sort = sort or tags_config['sort']

        ranked = rank_tags(self.git.tag_names(path), prefix=prefix, sort=sort)[:limit]
        logger.debug(f"Top {len(ranked)} tags by {sort} order: {ranked}")

        tags = []
        for name in ranked:
            object_id = self.git.resolve_tag(path, name)
            tags.append(TagInfo(name=name, commit=self.git.commit_data(path, object_id)))
        return tags

    def commit_lines(
        self,
        path: str,
        from_ref: Optional[str] = None,
        to_ref: Optional[str] = None
    ) -> List[str]:
        return self.git.log_oneline(path, from_ref=from_ref, to_ref=to_ref)

    def current_tag(self, path: str) -> str:
        """Describe the most recently tagged commit."""
        revision = self.git.latest_tagged_revision(path)
        if not revision:
            raise NoTagsError()
        return self.git.describe(path, revision)

    def review(
        self,
        path: str,
        from_ref: Optional[str] = None,
        to_ref: Optional[str] = None,
        fetch: Optional[bool] = None
    ) -> ReleaseReport:
        """
        Review a repository and propose the next release.

        Args:
            path: Path to the working copy
            from_ref: Exclusive start of the commit range. When omitted, the
                      oldest of the recent tags is used.
            to_ref: Inclusive end of the commit range (tip when omitted)
            fetch: Fetch before reading (config default when None)

        Returns:
            ReleaseReport; `tags` is only filled when from_ref was omitted

        Raises:
            NotARepositoryError, GitCommandError, NoTagsError, MalformedTagError
        """
        repo_path = self.open(path)

        if fetch is None:
            fetch = self.config['git'].get('fetch', True)
        if fetch:
            self.sync(repo_path)

        tags: List[TagInfo] = []
        if not from_ref:
            tags = self.recent_tags(repo_path)
            if tags:
                from_ref = tags[-1].name
            else:
                logger.warning("No release tags found; counting all commits")

        lines = self.commit_lines(repo_path, from_ref=from_ref, to_ref=to_ref)
        counts = CommitCounts.from_lines(lines)
        logger.debug(f"{len(lines)} commits in range {from_ref or ''}..{to_ref or ''}")

        current = self.current_tag(repo_path)
        proposed = next_version(current, counts, prefix=self.config['tags']['prefix'])

        return ReleaseReport(
            path=repo_path,
            counts=counts,
            current=current,
            next=proposed,
            from_ref=from_ref,
            to_ref=to_ref,
            tags=tags,
        )
