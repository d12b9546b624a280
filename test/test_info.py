from __future__ import annotations
from pathlib import Path
import pytest
from prompt_status.git import RepoStatus
from prompt_status.info import PromptInfo, cwdstr
from prompt_status.styles import (
    DARK_THEME,
    LIGHT_THEME,
    ANSIStyler,
    BashStyler,
    Painter,
    ZshStyler,
)


@pytest.mark.parametrize(
    "info,rendered",
    [
        pytest.param(
            PromptInfo(hostname="firefly", cwdstr="~/work", repo=None, duration=None),
            "\x1B[91mfirefly\x1B[m:\x1B[96m~/work\x1B[m$ ",
            id="simple",
        ),
        pytest.param(
            PromptInfo(
                hostname="firefly",
                cwdstr="~/work",
                repo=RepoStatus.outside(),
                duration="3ms",
            ),
            "[\x1B[93m3ms\x1B[m] \x1B[91mfirefly\x1B[m:\x1B[96m~/work\x1B[m$ ",
            id="duration-outside-repo",
        ),
        pytest.param(
            PromptInfo(
                hostname="firefly",
                cwdstr="~/work",
                repo=RepoStatus(label="main", is_dirty=False, in_repo=True),
                duration=None,
            ),
            "\x1B[91mfirefly\x1B[m:\x1B[96m~/work\x1B[m@\x1B[92mmain\x1B[m$ ",
            id="simple-git",
        ),
        pytest.param(
            PromptInfo(
                hostname="firefly",
                cwdstr="~/work",
                repo=RepoStatus(label="main", is_dirty=True, in_repo=True),
                duration="1m15s",
            ),
            (
                "[\x1B[93m1m15s\x1B[m] "
                "\x1B[91mfirefly\x1B[m:"
                "\x1B[96m~/work\x1B[m"
                "@\x1B[92mmain\x1B[m\x1B[31;1m*\x1B[m$ "
            ),
            id="full",
        ),
    ],
)
def test_display_prompt_info_ansi(info: PromptInfo, rendered: str) -> None:
    paint = Painter(ANSIStyler(), DARK_THEME)
    assert info.display(paint) == rendered


def test_display_full_prompt_info_ansi_light() -> None:
    info = PromptInfo(
        hostname="firefly",
        cwdstr="~/work",
        repo=RepoStatus(label="v1.0.0", is_dirty=False, in_repo=True, detached=True),
        duration="12.34s",
    )
    paint = Painter(ANSIStyler(), LIGHT_THEME)
    assert info.display(paint) == (
        "[\x1B[35m12.34s\x1B[m] "
        "\x1B[91mfirefly\x1B[m:"
        "\x1B[34m~/work\x1B[m"
        "@\x1B[34mv1.0.0\x1B[m$ "
    )


def test_display_prompt_info_ansi_no_hostname() -> None:
    info = PromptInfo(hostname="firefly", cwdstr="~/work", repo=None, duration=None)
    paint = Painter(ANSIStyler(), DARK_THEME)
    assert info.display(paint, hostname=False) == "\x1B[96m~/work\x1B[m$ "


def test_display_prompt_info_bash() -> None:
    info = PromptInfo(
        hostname="firefly", cwdstr=r"~/back\slash", repo=None, duration="1ms"
    )
    paint = Painter(BashStyler(), DARK_THEME)
    assert info.display(paint, hostname=False) == (
        r"[\[\e[93m\]1ms\[\e[m\]] \[\e[96m\]~/back\\slash\[\e[m\]\$ "
    )


def test_display_prompt_info_zsh() -> None:
    info = PromptInfo(
        hostname="firefly",
        cwdstr="~/100%",
        repo=RepoStatus(label="main", is_dirty=True, in_repo=True),
        duration=None,
    )
    paint = Painter(ZshStyler(), DARK_THEME)
    assert info.display(paint, hostname=False) == (
        "%F{14}~/100%%%f@%F{10}main%f%F{1}%B*%b%f%# "
    )


def test_get_prompt_info(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setenv("PWD", str(work))
    monkeypatch.setattr("socket.gethostname", lambda: "firefly")
    info = PromptInfo.get(git=False)
    assert info == PromptInfo(
        hostname="firefly", cwdstr="~/work", repo=None, duration=None
    )


def test_cwdstr_outside_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    assert cwdstr(Path("/usr/lib")) == "/usr/lib"


def test_cwdstr_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    assert cwdstr(tmp_path) == "~"
