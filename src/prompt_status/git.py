from __future__ import annotations
from dataclasses import dataclass, field
import logging
import os
from pathlib import Path
import subprocess
from typing import Protocol
from .styles import Painter
from .styles import StyleClass as SC
from .util import cat

log = logging.getLogger(__name__)

#: Default maximum display length of the repository label
MAX_HEAD_LEN = 15

#: Number of characters of the raw head pointer to show when neither a branch
#: nor a tag names the current position
FALLBACK_LABEL_LEN = 8

#: Default number of seconds to let a single Git command run
DEFAULT_TIMEOUT = 3.0


@dataclass
class RepoStatus:
    #: A description of the repository's ``HEAD``: either the name of the
    #: current branch, or the name of the tag pointing at the detached
    #: ``HEAD``, or the first characters of the raw head pointer
    label: str

    #: `True` iff tracked files differ from ``HEAD``.  Untracked files never
    #: count.
    is_dirty: bool

    #: `True` iff the directory lies inside a Git repository
    in_repo: bool

    #: `True` iff the repository is in a detached ``HEAD`` state
    detached: bool = False

    @classmethod
    def outside(cls) -> RepoStatus:
        return cls(label="", is_dirty=False, in_repo=False)

    def display(self, paint: Painter) -> str:
        if not self.in_repo or not (self.label or self.is_dirty):
            return ""
        # Start building the status string with the separator:
        p = "@"
        if self.label:
            # Show HEAD; color changes depending on whether it's detached:
            p += paint(
                shorthead(self.label),
                SC.GIT_DETACHED if self.detached else SC.GIT_HEAD,
            )
        if self.is_dirty:
            # Tracked files have been modified:
            p += paint("*", SC.GIT_DIRTY)
        return p


class VcsBackend(Protocol):
    """
    The questions `RepoStatusProbe` needs answered about a working directory.
    Every method must answer `None`/`False` instead of raising when the
    underlying tool fails.
    """

    def git_dir(self, cwd: Path) -> Path | None: ...

    def branch_name(self, cwd: Path) -> str | None: ...

    def tag_at_head(self, cwd: Path) -> str | None: ...

    def inside_work_tree(self, cwd: Path) -> bool: ...

    def has_tracked_changes(self, cwd: Path) -> bool: ...


@dataclass
class GitBackend:
    """`VcsBackend` implementation that shells out to the ``git`` command"""

    #: Number of seconds after which a Git command is abandoned and treated as
    #: having failed
    timeout: float = DEFAULT_TIMEOUT

    def git_dir(self, cwd: Path) -> Path | None:
        if s := self.git(cwd, "rev-parse", "--git-dir"):
            return Path(s)
        return None

    def branch_name(self, cwd: Path) -> str | None:
        return self.git(cwd, "symbolic-ref", "--quiet", "--short", "HEAD")

    def tag_at_head(self, cwd: Path) -> str | None:
        return self.git(cwd, "describe", "--tags", "--exact-match", "HEAD")

    def inside_work_tree(self, cwd: Path) -> bool:
        return self.git(cwd, "rev-parse", "--is-inside-work-tree") == "true"

    def has_tracked_changes(self, cwd: Path) -> bool:
        # `git diff --quiet` exits 1 iff there are differences; anything else
        # (including "HEAD does not exist yet") counts as clean.
        r = self.run(cwd, "diff", "--quiet", "--no-ext-diff", "HEAD", "--")
        return r is not None and r.returncode == 1

    def git(self, cwd: Path, *args: str) -> str | None:
        """
        Run a Git command (suppressing stderr) and return its stdout with
        leading & trailing whitespace stripped.  If the command fails, return
        `None`.
        """
        r = self.run(cwd, *args)
        if r is None or r.returncode != 0:
            return None
        return r.stdout.strip()

    def run(
        self, cwd: Path, *args: str
    ) -> subprocess.CompletedProcess[str] | None:
        """
        Run a Git command in ``cwd`` and return the completed process
        regardless of its exit status.  If Git could not be run at all or did
        not finish within the timeout, return `None`.
        """
        try:
            r = subprocess.run(
                ["git", *args],
                cwd=cwd,
                text=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                timeout=self.timeout,
                env={**os.environ, "GIT_OPTIONAL_LOCKS": "0"},
            )
        except subprocess.TimeoutExpired:
            log.debug(
                "git %s timed out after %s seconds", " ".join(args), self.timeout
            )
            return None
        except OSError as e:
            # Git is not installed, or cwd is gone
            log.debug("Could not run git %s: %s", " ".join(args), e)
            return None
        if r.returncode != 0:
            log.debug("git %s exited with status %d", " ".join(args), r.returncode)
        return r


@dataclass
class RepoStatusProbe:
    backend: VcsBackend = field(default_factory=GitBackend)

    def compute(self, cwd: Path) -> RepoStatus:
        """
        Describe the Git repository containing ``cwd``.  Outside of a
        repository (or when Git is unavailable) the result has
        ``in_repo=False`` and blank fields; this method never raises because
        of a failing Git command.
        """
        git_dir = self.backend.git_dir(cwd)
        if git_dir is None:
            return RepoStatus.outside()
        # `git rev-parse --git-dir` answers relative to cwd; joining an
        # absolute path onto cwd leaves it as-is.
        head = cat(cwd / git_dir / "HEAD") or ""
        if head.startswith("ref:"):
            label = self.backend.branch_name(cwd) or ""
            detached = False
        else:
            label = self.backend.tag_at_head(cwd) or ""
            detached = True
        if not label:
            label = head.strip()[:FALLBACK_LABEL_LEN]
        # Untracked files never make the repository dirty
        is_dirty = self.backend.inside_work_tree(cwd) and (
            self.backend.has_tracked_changes(cwd)
        )
        return RepoStatus(
            label=label, is_dirty=is_dirty, in_repo=True, detached=detached
        )


def repo_status(
    cwd: Path | None = None, timeout: float = DEFAULT_TIMEOUT
) -> RepoStatus:
    """
    Describe the Git repository containing ``cwd`` (default: the current
    directory) using the ``git`` command, giving up on any single Git command
    that runs longer than ``timeout`` seconds.
    """
    if cwd is None:
        try:
            cwd = Path.cwd()
        except FileNotFoundError:
            # The current directory has been deleted
            return RepoStatus.outside()
    return RepoStatusProbe(GitBackend(timeout=timeout)).compute(cwd)


def shorthead(head: str, max_len: int = MAX_HEAD_LEN) -> str:
    if len(head) > max_len:
        return head[: max_len - 1] + "…"
    else:
        return head
