"""
Hook snippets that wire ``prompt-status`` into a shell's prompt cycle.

Both shells record ``$EPOCHREALTIME`` when a command is about to run and hand
it to ``prompt-status --cmd-start`` at the next prompt, clearing it afterwards
so that pressing Enter on an empty line does not repeat the previous duration.
Setting ``PS1_GIT=off`` disables the Git segment.
"""

from __future__ import annotations

BASH_INIT = r"""
_prompt_status_preexec() {
    case "$BASH_COMMAND" in
        _prompt_status_*) return ;;
    esac
    [[ -n "${_prompt_status_armed:-}" ]] || return
    unset _prompt_status_armed
    _prompt_status_start="${EPOCHREALTIME:-}"
}
_prompt_status_disarm() {
    unset _prompt_status_armed
}
_prompt_status_precmd() {
    local -a args=(--bash)
    if [[ -n "${_prompt_status_start:-}" ]]; then
        args+=(--cmd-start "$_prompt_status_start")
    fi
    PS1="$(command {prog} "${args[@]}" "${PS1_GIT:-}")"
    unset _prompt_status_start
    _prompt_status_armed=1
}
trap '_prompt_status_preexec' DEBUG
PROMPT_COMMAND="_prompt_status_disarm${PROMPT_COMMAND:+; $PROMPT_COMMAND}; _prompt_status_precmd"
"""

ZSH_INIT = r"""
zmodload zsh/datetime
autoload -Uz add-zsh-hook
_prompt_status_preexec() {
    _prompt_status_start=$EPOCHREALTIME
}
_prompt_status_precmd() {
    local -a args=(--zsh)
    if [[ -n ${_prompt_status_start:-} ]]; then
        args+=(--cmd-start $_prompt_status_start)
    fi
    PS1="$(command {prog} $args "${PS1_GIT:-}")"
    unset _prompt_status_start
}
add-zsh-hook preexec _prompt_status_preexec
add-zsh-hook precmd _prompt_status_precmd
"""

SHELLS = {
    "bash": BASH_INIT,
    "zsh": ZSH_INIT,
}


def init_script(shell: str, prog: str = "prompt-status") -> str:
    """
    Return the snippet to ``eval`` in the given shell's rc file in order to
    use ``prog`` as the prompt.  Raises `KeyError` for an unsupported shell.
    """
    # str.format() would trip over the shell's own braces
    return SHELLS[shell].lstrip("\n").replace("{prog}", prog)
