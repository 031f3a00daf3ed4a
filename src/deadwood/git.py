"""Git command execution."""

import re
from pathlib import Path
from typing import Optional

from git import GitCommandError, GitCommandNotFound, InvalidGitRepositoryError, NoSuchPathError, Repo

# Exit status git uses when it cannot talk to the remote at all
NO_CONNECTION_STATUS = 128


class GitError(Exception):
    """Git operation error."""

    def __init__(self, message: str, status: Optional[int] = None, stderr: str = "") -> None:
        """Initialize error.

        Args:
            message: Error message
            status: Exit status of the failed git process, if there was one
            stderr: Captured error output of the failed git process
        """
        super().__init__(message)
        self.status = status
        self.stderr = stderr

    @property
    def no_connection(self) -> bool:
        """Whether git failed because the remote could not be reached."""
        return self.status == NO_CONNECTION_STATUS


class ConfigurationError(Exception):
    """Invalid user configuration."""


def split_lines(text: Optional[str]) -> list[str]:
    """Split command output into non-empty, trimmed lines."""
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def _exit_status(err: GitCommandError) -> Optional[int]:
    """Get the exit status of a failed git process."""
    try:
        return int(err.status)
    except (TypeError, ValueError):
        return None


def _stderr_text(err: GitCommandError) -> str:
    """Get the captured error output of a failed git process."""
    stderr = err.stderr
    if isinstance(stderr, bytes):
        stderr = stderr.decode("utf-8", errors="replace")
    # GitPython wraps the captured text as "stderr: '...'"
    return re.sub(r"^stderr: '(.*)'$", r"\1", (stderr or "").strip(), flags=re.DOTALL).strip()


class GitRunner:
    """Runs git subcommands inside a working tree."""

    def __init__(self, path: Path) -> None:
        """Initialize runner."""
        try:
            self.repo: Repo = Repo(path)
            if self.repo.bare:
                raise GitError("Cannot operate on bare repository")
        except (GitCommandError, ValueError, InvalidGitRepositoryError, NoSuchPathError) as err:
            raise GitError(f"Failed to open repository: {err}") from err

    def run(self, *args: str) -> str:
        """Run ``git <args>`` and return its standard output.

        Raises:
            GitError: If git exits with a non-zero status or cannot be started
        """
        command = ["git", *args]
        try:
            return str(self.repo.git.execute([self.repo.git.GIT_PYTHON_GIT_EXECUTABLE, *args]))
        except GitCommandNotFound as err:
            raise GitError(f"Git executable not found: {err}") from err
        except GitCommandError as err:
            stderr = _stderr_text(err)
            raise GitError(
                f"'{' '.join(command)}' failed: {stderr or err}",
                status=_exit_status(err),
                stderr=stderr,
            ) from err
