"""
Release domain objects for releasereport.

Value objects produced while reviewing a repository:
- TagInfo: a release tag with the commit it points at
- CommitCounts: commit tallies per conventional-commit keyword
- Version: a v<major>.<minor>.<patch> release number

All are immutable and carry no references to git or the filesystem.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from ..exit_codes import MalformedTagError
from ..infra.git_client import GitCommit

# Field name -> keyword searched for (case-sensitive substring) in each commit line.
COMMIT_KEYWORDS = {
    'fixes': 'fix',
    'features': 'feat',
    'refactors': 'refactor',
    'tests': 'test',
    'style': 'style',
}

VERSION_RE = re.compile(r'^(\d+)\.(\d+)\.(\d+)$')
DESCRIBE_SUFFIX_RE = re.compile(r'-\d+-g[0-9a-f]+$')


@dataclass(frozen=True)
class TagInfo:
    """A tag and the commit it marks."""

    name: str
    commit: GitCommit

    def to_dict(self) -> Dict[str, Any]:
        return {
            'tag': self.name,
            'commit': self.commit.hash,
            'title': self.commit.title,
            'message': self.commit.message,
            'author': self.commit.author,
            'timestamp': self.commit.date,
        }


@dataclass(frozen=True)
class CommitCounts:
    """
    Number of commits mentioning each keyword.

    Counting is non-exclusive: "fix style test" adds one to fixes,
    style and tests.
    """

    fixes: int = 0
    features: int = 0
    refactors: int = 0
    tests: int = 0
    style: int = 0

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> 'CommitCounts':
        totals = {name: 0 for name in COMMIT_KEYWORDS}
        for line in lines:
            for name, keyword in COMMIT_KEYWORDS.items():
                if keyword in line:
                    totals[name] += 1
        return cls(**totals)

    @property
    def patch_total(self) -> int:
        """Commits that bump the patch number."""
        return self.fixes + self.refactors + self.tests + self.style

    def to_dict(self) -> Dict[str, int]:
        return {name: getattr(self, name) for name in COMMIT_KEYWORDS}


@dataclass(frozen=True, order=True)
class Version:
    """
    A three-part release number.

    Examples:
        Version.parse("v1.2.3")          -> Version(1, 2, 3)
        Version.parse("v1.2.3-4-gabc12") -> Version(1, 2, 3)
        Version.parse("release-1")       -> MalformedTagError
    """

    major: int
    minor: int
    patch: int
    prefix: str = field(default='v', compare=False)

    @classmethod
    def parse(cls, name: str, prefix: str = 'v') -> 'Version':
        """
        Parse a tag name, as returned by `git tag` or `git describe --tags`.

        One leading prefix is removed, then any describe distance suffix.
        What remains must be exactly <int>.<int>.<int>.

        Raises:
            MalformedTagError: if the name has any other shape
        """
        text = name.strip()
        if prefix and text.startswith(prefix):
            text = text[len(prefix):]
        text = DESCRIBE_SUFFIX_RE.sub('', text)

        match = VERSION_RE.match(text)
        if not match:
            raise MalformedTagError(name)

        major, minor, patch = (int(part) for part in match.groups())
        return cls(major=major, minor=minor, patch=patch, prefix=prefix)

    def next(self, counts: CommitCounts) -> 'Version':
        """Minor grows by features; patch by every other category."""
        return Version(
            major=self.major,
            minor=self.minor + counts.features,
            patch=self.patch + counts.patch_total,
            prefix=self.prefix,
        )

    def __str__(self) -> str:
        return f"{self.prefix}{self.major}.{self.minor}.{self.patch}"


@dataclass
class ReleaseReport:
    """Everything one review run produced."""

    path: str
    counts: CommitCounts
    current: str
    next: str
    from_ref: Optional[str] = None
    to_ref: Optional[str] = None
    tags: List[TagInfo] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'path': self.path,
            'from': self.from_ref,
            'to': self.to_ref,
            'tags': [tag.to_dict() for tag in self.tags],
            'summary': self.counts.to_dict(),
            'current': self.current,
            'next': self.next,
        }
