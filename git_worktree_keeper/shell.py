"""Shell wrapper functions that carry out directives.

A process cannot change its parent shell's directory, so ``wt init <shell>``
prints a ``wt`` function for the user's shell config. For commands that may
move the shell, the function runs the real binary with the directive flag
set, collects its stdout, drops the trailing NUL sentinel and performs each
``CHANGE_DIR`` / ``EXEC`` directive in the shell itself. Output that does not
end with the sentinel was cut short and is ignored with a warning.
"""

import os
from typing import Mapping, Optional

from git_worktree_keeper.constants import (
    DIRECTIVE_CHANGE_DIR,
    DIRECTIVE_EXEC,
    DIRECTIVES_ENV_VAR,
    SUPPORTED_SHELLS,
)

# Subcommands that emit directives
DIRECTIVE_COMMANDS = ("switch", "remove")

_POSIX_WRAPPER = """\
wt() {{
    case "$1" in
        {commands})
            local _wt_out _wt_status _wt_tag _wt_payload
            _wt_out="$(mktemp "${{TMPDIR:-/tmp}}/wt-directives.XXXXXX")" || return 1
            {env_var}=1 command wt "$@" >"$_wt_out"
            _wt_status=$?
            case "$(tail -c 1 "$_wt_out" | od -An -tx1)" in
                *00) ;;
                *)
                    printf '%s\\n' "wt: output ended without its terminator, directives ignored" >&2
                    rm -f -- "$_wt_out"
                    return "$_wt_status"
                    ;;
            esac
            while IFS=$'\\t' read -r _wt_tag _wt_payload <&3; do
                _wt_payload="$(printf '%b' "$_wt_payload"; printf x)"
                _wt_payload="${{_wt_payload%x}}"
                case "$_wt_tag" in
                    {change_dir}) cd -- "$_wt_payload" || _wt_status=1 ;;
                    {exec_tag}) eval "$_wt_payload"; _wt_status=$? ;;
                esac
            done 3< <(tr -d '\\000' <"$_wt_out")
            rm -f -- "$_wt_out"
            return "$_wt_status"
            ;;
        *)
            command wt "$@"
            ;;
    esac
}}
"""

_FISH_WRAPPER = """\
function wt
    switch $argv[1]
        case {commands}
            set -l wt_out (mktemp)
            or return 1
            {env_var}=1 command wt $argv >$wt_out
            set -l wt_status $status
            set -l wt_last (tail -c 1 $wt_out | od -An -tx1 | string trim)
            if test "$wt_last" != 00
                echo "wt: output ended without its terminator, directives ignored" >&2
                rm -f $wt_out
                return $wt_status
            end
            for wt_line in (tr -d '\\000' <$wt_out)
                set -l wt_parts (string split -m 1 \\t -- $wt_line)
                set -l wt_payload (printf '%b' $wt_parts[2] | string collect)
                switch $wt_parts[1]
                    case {change_dir}
                        cd $wt_payload
                        or set wt_status 1
                    case {exec_tag}
                        eval $wt_payload
                        set wt_status $status
                end
            end
            rm -f $wt_out
            return $wt_status
        case '*'
            command wt $argv
    end
end
"""


def detect_shell(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Name of the user's shell from ``$SHELL``, if it is one we support."""
    env = os.environ if environ is None else environ
    name = os.path.basename(env.get("SHELL", ""))
    return name if name in SUPPORTED_SHELLS else None


def render_wrapper(shell: str) -> str:
    """
    Shell function source for ``shell``.

    Raises:
        ValueError: Unsupported shell
    """
    if shell not in SUPPORTED_SHELLS:
        raise ValueError(f"Unsupported shell '{shell}', expected one of {', '.join(SUPPORTED_SHELLS)}")
    if shell == "fish":
        return _FISH_WRAPPER.format(
            commands=" ".join(DIRECTIVE_COMMANDS),
            env_var=DIRECTIVES_ENV_VAR,
            change_dir=DIRECTIVE_CHANGE_DIR,
            exec_tag=DIRECTIVE_EXEC,
        )
    return _POSIX_WRAPPER.format(
        commands="|".join(DIRECTIVE_COMMANDS),
        env_var=DIRECTIVES_ENV_VAR,
        change_dir=DIRECTIVE_CHANGE_DIR,
        exec_tag=DIRECTIVE_EXEC,
    )
