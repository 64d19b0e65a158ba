"""
Standard exit codes for releasereport commands.

Following Unix/POSIX conventions for command-line tools.
"""
from typing import Optional

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
REPO_ERROR = 64          # Path is not a git repository
GIT_ERROR = 65           # A git command failed
CONFIG_ERROR = 66        # Configuration file error
DATA_ERROR = 70          # Tag name or version format error
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class NotARepositoryError(CommandError):
    """Raised when the given path is not a git working copy."""
    def __init__(self, path: str):
        super().__init__(f"Not a git repository: {path}", REPO_ERROR)
        self.path = path


class GitCommandError(CommandError):
    """Raised when a git invocation exits non-zero or times out."""
    def __init__(self, command: str, stderr: Optional[str] = None):
        message = f"git {command} failed"
        if stderr:
            message += f": {stderr.strip()}"
        super().__init__(message, GIT_ERROR)
        self.command = command
        self.stderr = stderr or ""


class MalformedTagError(CommandError):
    """Raised when a tag cannot be read as v<major>.<minor>.<patch>."""
    def __init__(self, tag: str):
        super().__init__(
            f"Tag '{tag}' is not a version of the form v<major>.<minor>.<patch>",
            DATA_ERROR,
        )
        self.tag = tag


class NoTagsError(CommandError):
    """Raised when the repository has no tags to describe."""
    def __init__(self, message: str = "No tags found in repository"):
        super().__init__(message, DATA_ERROR)


class ConfigError(CommandError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)
