from __future__ import annotations
import os
from pathlib import Path
import re
import shutil
import subprocess
import sys
import pytest
import prompt_status
from prompt_status.shell import init_script


def test_bash_init() -> None:
    script = init_script("bash", prog="/opt/bin/prompt-status")
    assert script.startswith("_prompt_status_preexec() {\n")
    assert 'PS1="$(command /opt/bin/prompt-status "${args[@]}" "${PS1_GIT:-}")"' in (
        script
    )
    assert 'args+=(--cmd-start "$_prompt_status_start")' in script
    assert script.endswith(
        'PROMPT_COMMAND="_prompt_status_disarm${PROMPT_COMMAND:+; $PROMPT_COMMAND};'
        ' _prompt_status_precmd"\n'
    )
    assert "{prog}" not in script


def test_zsh_init() -> None:
    script = init_script("zsh")
    assert script.startswith("zmodload zsh/datetime\n")
    assert 'PS1="$(command prompt-status $args "${PS1_GIT:-}")"' in script
    assert "add-zsh-hook preexec _prompt_status_preexec\n" in script
    assert "unset _prompt_status_start\n" in script


def test_unknown_shell() -> None:
    with pytest.raises(KeyError):
        init_script("fish")


def bash_has_epochrealtime() -> bool:
    if shutil.which("bash") is None:
        return False
    r = subprocess.run(
        ["bash", "--norc", "-c", "echo ${EPOCHREALTIME:-}"],
        stdout=subprocess.PIPE,
        text=True,
    )
    return bool(r.stdout.strip())


@pytest.mark.skipif(
    not bash_has_epochrealtime(), reason="Bash 5+ with $EPOCHREALTIME required"
)
def test_bash_hooks_time_commands_once(tmp_path: Path) -> None:
    calls = tmp_path / "calls.txt"
    prog = tmp_path / "prompt-status"
    prog.write_text(
        "#!/bin/sh\n"
        f"printf '%s\\n' \"$*\" >> '{calls}'\n"
        f"exec '{sys.executable}' -m prompt_status \"$@\"\n",
        encoding="utf-8",
    )
    prog.chmod(0o755)
    init = tmp_path / "init.bash"
    init.write_text(init_script("bash", prog=str(prog)), encoding="utf-8")
    env = {
        "PATH": os.environ.get("PATH", "/usr/bin:/bin"),
        "HOME": str(tmp_path),
        "HISTFILE": os.devnull,
        "LC_ALL": "C",
        "TERM": "dumb",
        "PS1_GIT": "off",
        "PYTHONPATH": str(Path(prompt_status.__file__).parent.parent),
    }
    r = subprocess.run(
        ["bash", "--norc", "--noprofile", "-i"],
        input=f"source '{init}'\nsleep 1.1\n\nexit\n",
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        cwd=tmp_path,
        env=env,
        timeout=60,
    )
    assert r.returncode == 0
    # One prompt after sourcing, one after `sleep`, one after the empty line
    lines = calls.read_text(encoding="utf-8").splitlines()
    assert ["--cmd-start" in ln for ln in lines] == [False, True, False]
    # The prompts are written to stderr; only the one after `sleep` is timed
    durations = re.findall(r"\x1B\[93m\x02?(\d+\.\d{3})s", r.stderr)
    assert len(durations) == 1
    assert float(durations[0]) >= 1.1
