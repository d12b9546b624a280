from __future__ import annotations
import argparse
import logging
import os
from pathlib import Path
import sys
from . import __version__
from .duration import DurationTracker, parse_timestamp
from .git import DEFAULT_TIMEOUT, repo_status
from .info import PromptInfo
from .shell import SHELLS, init_script
from .styles import THEMES, ANSIStyler, BashStyler, Painter, ZshStyler
from .styles import StyleClass as SC

log = logging.getLogger(__name__)


def env_theme() -> str:
    theme = os.environ.get("PROMPT_STATUS_THEME", "")
    return theme if theme in THEMES else "dark"


def env_git_timeout() -> float:
    try:
        timeout = float(os.environ["PROMPT_STATUS_GIT_TIMEOUT"])
    except (KeyError, ValueError):
        return DEFAULT_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_TIMEOUT


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="prompt-status",
        description="Git-aware bash/zsh prompt with command timing",
    )
    parser.add_argument(
        "--ansi",
        action="store_const",
        dest="stylecls",
        const=ANSIStyler,
        help="Format prompt for direct display",
    )
    parser.add_argument(
        "--bash",
        action="store_const",
        dest="stylecls",
        const=BashStyler,
        help="Format prompt for Bash's PS1 (default)",
    )
    parser.add_argument(
        "--cmd-start",
        type=parse_timestamp,
        metavar="TIMESTAMP",
        help="Epoch time at which the previous command started",
    )
    parser.add_argument(
        "-D",
        "--duration-only",
        action="store_true",
        help="Only output the duration of the previous command",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=bool(os.environ.get("PROMPT_STATUS_DEBUG")),
        help="Log diagnostics (e.g., failing Git commands) to stderr",
    )
    parser.add_argument(
        "-G",
        "--git-only",
        action="store_true",
        help="Only output the Git portion of the prompt",
    )
    parser.add_argument(
        "--git-timeout",
        type=float,
        metavar="SECONDS",
        default=env_git_timeout(),
        help=(
            "Give up on any Git command that runs longer than this"
            f"  [default: {DEFAULT_TIMEOUT:g}]"
        ),
    )
    parser.add_argument(
        "--init",
        choices=list(SHELLS.keys()),
        metavar="SHELL",
        help="Print the hook setup for SHELL (bash or zsh) and exit",
    )
    parser.add_argument(
        "--no-hostname",
        action="store_true",
        help="Do not show the local hostname",
    )
    parser.add_argument(
        "-T",
        "--theme",
        choices=list(THEMES.keys()),
        default=env_theme(),
        help="Select the color theme to use  [default: dark]",
    )
    parser.add_argument(
        "--zsh",
        action="store_const",
        dest="stylecls",
        const=ZshStyler,
        help="Format prompt for zsh's PS1",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "git_flag", nargs="?", help='Set to "off" to disable Git integration'
    )
    args = parser.parse_args(argv)
    logging.basicConfig(
        format="%(name)s: %(levelname)s: %(message)s",
        level=logging.DEBUG if args.debug else logging.WARNING,
        stream=sys.stderr,
    )
    if args.init is not None:
        print(init_script(args.init, prog=parser.prog), end="")
        return
    show_git = args.git_flag != "off"
    styler = (args.stylecls or BashStyler)()
    paint = Painter(styler=styler, theme=THEMES[args.theme])
    # Both the full prompt and -G describe the repository of the directory the
    # process actually runs in, even when $PWD is stale.
    try:
        cwd: Path | None = Path.cwd()
    except FileNotFoundError:
        cwd = None
    if args.git_only:
        s = (
            repo_status(cwd, timeout=args.git_timeout).display(paint)
            if show_git
            else ""
        )
    elif args.duration_only:
        duration = DurationTracker.resume(args.cmd_start).on_prompt_return()
        s = paint(duration, SC.DURATION) if duration is not None else ""
    else:
        info = PromptInfo.get(
            git=show_git,
            git_timeout=args.git_timeout,
            cmd_start=args.cmd_start,
            cwd=cwd,
        )
        log.debug("Prompt info: %r", info)
        s = info.display(paint, hostname=not args.no_hostname)
    print(s)


if __name__ == "__main__":
    main()
