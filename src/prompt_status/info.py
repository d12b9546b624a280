from __future__ import annotations
from dataclasses import dataclass
import os
from pathlib import Path, PurePath
import socket
from .duration import DurationTracker
from .git import DEFAULT_TIMEOUT, RepoStatus, repo_status
from .styles import Painter
from .styles import StyleClass as SC

#: Default maximum display length of the path to the current working directory
MAX_CWD_LEN = 30


@dataclass
class PromptInfo:
    hostname: str

    #: The path to the current working directory.  If the directory is at or
    #: under :envvar:`HOME`, the path will start with ``~/``.  The path will
    #: also be truncated to be no more than `MAX_CWD_LEN` characters long.
    cwdstr: str

    #: Status of the surrounding Git repository, or `None` if Git integration
    #: is disabled
    repo: RepoStatus | None

    #: How long the previous command took, or `None` if no command ran since
    #: the last prompt
    duration: str | None

    @classmethod
    def get(
        cls,
        git: bool = True,
        git_timeout: float = DEFAULT_TIMEOUT,
        cmd_start: float | None = None,
        cwd: Path | None = None,
    ) -> PromptInfo:
        """
        Gather the prompt's contents.  Git is queried in ``cwd`` (default: the
        process's working directory); ``$PWD`` is only used for display.
        """
        # Prefer $PWD to os.getcwd() as the former does not resolve symlinks
        shown = Path(os.environ.get("PWD") or cwd or os.getcwd())
        return cls(
            hostname=socket.gethostname(),
            cwdstr=cwdstr(shown),
            repo=repo_status(cwd, timeout=git_timeout) if git else None,
            duration=DurationTracker.resume(cmd_start).on_prompt_return(),
        )

    def display(self, paint: Painter, hostname: bool = True) -> str:
        """
        Construct & return a complete prompt string for the current environment
        """
        ps1 = ""

        # Show how long the last command took:
        if self.duration is not None:
            ps1 += "[" + paint(self.duration, SC.DURATION) + "] "

        if hostname:
            ps1 += paint(self.hostname, SC.HOST) + ":"

        ps1 += paint(self.cwdstr, SC.CWD)

        if self.repo is not None:
            ps1 += self.repo.display(paint)

        ps1 += paint.prompt_suffix + " "
        return ps1


def cwdstr(cwd: Path) -> str:
    """
    Format ``cwd`` for display: relative to ``~`` when at or under
    :envvar:`HOME`, and shortened with `shortpath()`
    """
    try:
        cwd = "~" / cwd.relative_to(Path.home())
    except (ValueError, RuntimeError):
        # RuntimeError: the home directory cannot be determined
        pass
    return shortpath(cwd)


def shortpath(p: PurePath, max_len: int = MAX_CWD_LEN) -> str:
    """
    If the filepath ``p`` is longer than ``max_len``, keep only as many
    trailing components as fit after a leading ``…/``; if even the final
    component does not fit, truncate it and end it with an ellipsis too.
    """
    s = str(p)
    if len(s) <= max_len:
        return s
    *dirs, name = p.parts
    kept = [name]
    # The first component ("/", "~", or the first relative directory) is
    # always replaced by the ellipsis.
    for part in reversed(dirs[1:]):
        if len("/".join(["…", part, *kept])) > max_len:
            break
        kept.insert(0, part)
    short = "/".join(["…", *kept])
    if len(short) > max_len:
        short = "…/" + name[: max_len - 3] + "…"
    return short
