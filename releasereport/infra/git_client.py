"""
Git client infrastructure for releasereport.

Provides a clean abstraction over git command execution.
All git operations go through this client, making them:
- Easy to mock for testing
- Consistent in error handling
- Isolated from business logic
"""

import subprocess
from dataclasses import dataclass
from typing import Optional, List
from pathlib import Path
import logging

from ..exit_codes import GitCommandError

logger = logging.getLogger(__name__)

# Unit separator; cannot appear in commit subjects or author names
FIELD_SEP = "\x1f"
COMMIT_FORMAT = FIELD_SEP.join(["%H", "%s", "%b", "%an", "%aI"])


@dataclass
class GitCommit:
    """A git commit with metadata."""
    hash: str
    title: str
    message: str
    author: str
    date: str


class GitClient:
    """
    Abstraction over git commands.

    Every query raises GitCommandError when git exits non-zero, so callers
    never see a half-parsed result.

    Example:
        client = GitClient()
        client.fetch("/path/to/repo")
        for name in client.tag_names("/path/to/repo"):
            print(name)
    """

    def __init__(self, timeout: int = 30):
        """
        Initialize GitClient.

        Args:
            timeout: Command timeout in seconds (default: 30)
        """
        self.timeout = timeout

    def _run(self, args: List[str], cwd: str) -> str:
        """
        Run a git command.

        Args:
            args: Git arguments, without the leading "git"
            cwd: Working directory

        Returns:
            Command stdout, stripped. Bytes that are not UTF-8 (legacy
            commit messages or author names) become U+FFFD.

        Raises:
            GitCommandError: on non-zero exit, timeout, or missing git binary
        """
        command = " ".join(args)
        logger.debug(f"Running: git {command} (in {cwd})")

        try:
            result = subprocess.run(
                ["git"] + args,
                cwd=cwd,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            raise GitCommandError(command, f"timed out after {self.timeout}s")
        except OSError as e:
            raise GitCommandError(command, str(e)) from e

        if result.returncode != 0:
            raise GitCommandError(command, result.stderr)

        return result.stdout.strip()

    def _lines(self, args: List[str], cwd: str) -> List[str]:
        output = self._run(args, cwd)
        return [line for line in output.split('\n') if line.strip()]

    def is_git_repo(self, path: str) -> bool:
        """Check if path is inside a git working copy."""
        if not Path(path).is_dir():
            return False
        try:
            self._run(["rev-parse", "--git-dir"], cwd=path)
        except GitCommandError:
            return False
        return True

    def fetch(self, path: str, remote: Optional[str] = None) -> None:
        """Fetch from remote (git's default remote when none given)."""
        args = ["fetch"]
        if remote:
            args.append(remote)
        self._run(args, cwd=path)

    def tag_names(self, path: str) -> List[str]:
        """List all tag names."""
        return self._lines(["tag"], cwd=path)

    def resolve_tag(self, path: str, tag: str) -> str:
        """
        Resolve a tag to the object id it points at.

        Annotated tags resolve to the tag object, which git log accepts.
        """
        lines = self._lines(["show-ref", "--hash", "--tags", tag], cwd=path)
        if not lines:
            raise GitCommandError(f"show-ref --hash --tags {tag}", "no matching tag")
        return lines[0].strip()

    def commit_data(self, path: str, commit: str) -> GitCommit:
        """
        Get title, message, author and timestamp for a commit.

        Args:
            path: Path to git repository
            commit: Commit id or any ref git log accepts

        Returns:
            GitCommit (committer is not collected)
        """
        output = self._run(
            ["log", "-1", f"--format={COMMIT_FORMAT}", commit],
            cwd=path
        )
        parts = output.split(FIELD_SEP)
        if len(parts) != 5:
            raise GitCommandError(f"log -1 {commit}", "unexpected output format")

        commit_hash, title, message, author, date = (p.strip() for p in parts)
        return GitCommit(
            hash=commit_hash,
            title=title,
            message=message,
            author=author,
            date=date
        )

    def log_oneline(
        self,
        path: str,
        from_ref: Optional[str] = None,
        to_ref: Optional[str] = None
    ) -> List[str]:
        """
        Get one-line commit summaries for from_ref..to_ref.

        An empty to_ref means the current tip. Without from_ref the whole
        history reachable from to_ref (or HEAD) is listed.
        """
        if from_ref:
            rev_range = f"{from_ref}..{to_ref or ''}"
        else:
            rev_range = to_ref or "HEAD"
        return self._lines(["log", "--pretty=oneline", rev_range, "--"], cwd=path)

    def latest_tagged_revision(self, path: str) -> Optional[str]:
        """Most recent commit that any tag points at, or None without tags."""
        lines = self._lines(["rev-list", "--tags", "--max-count=1"], cwd=path)
        return lines[0].strip() if lines else None

    def describe(self, path: str, rev: str) -> str:
        """Describe rev by its nearest tag."""
        return self._run(["describe", "--tags", rev], cwd=path)
