from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Protocol


class Color(Enum):
    """Foreground colors used by the themes, valued by xterm color number"""

    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    LIGHT_RED = 9
    LIGHT_GREEN = 10
    LIGHT_YELLOW = 11
    LIGHT_BLUE = 12
    LIGHT_MAGENTA = 13
    LIGHT_CYAN = 14

    def asfg(self) -> int:
        """The SGR parameter selecting this color for the foreground"""
        c = self.value
        return c + 30 if c < 8 else c + 82


@dataclass(frozen=True)
class Style:
    color: Color | None = None
    bold: bool = False

    @property
    def sgr(self) -> str:
        """
        The ``;``-joined SGR parameters selecting this style, or the empty
        string for the terminal's default style
        """
        params = []
        if self.color is not None:
            params.append(str(self.color.asfg()))
        if self.bold:
            params.append("1")
        return ";".join(params)


#: Style for text that should be left as the terminal draws it by default
PLAIN = Style()


class Styler(Protocol):
    #: The prompt symbol placed at the very end of the prompt, before a single
    #: space
    prompt_suffix: ClassVar[str]

    def __call__(self, s: str, style: Style) -> str: ...


class ANSIStyler:
    """Styles strings for printing straight to the terminal"""

    prompt_suffix: ClassVar[str] = "$"

    #: Markers placed around each escape sequence so that the shell can tell
    #: them apart from printable text
    open_seq: ClassVar[str] = ""
    close_seq: ClassVar[str] = ""

    #: How the ESC byte is written in the output
    esc: ClassVar[str] = "\x1B"

    def __call__(self, s: str, style: Style) -> str:
        s = self.escape(s)
        if not style.sgr:
            return s
        return self.sequence(style.sgr) + s + self.sequence("")

    def sequence(self, sgr: str) -> str:
        return f"{self.open_seq}{self.esc}[{sgr}m{self.close_seq}"

    def escape(self, s: str) -> str:
        return s


class BashStyler(ANSIStyler):
    r"""
    Escapes & styles strings for Bash's ``PS1``.  Escape sequences are
    enclosed in ``\[ ... \]`` so that Bash does not count them towards the
    prompt's width.
    """

    prompt_suffix: ClassVar[str] = r"\$"
    open_seq: ClassVar[str] = r"\["
    close_seq: ClassVar[str] = r"\]"
    esc: ClassVar[str] = r"\e"

    def escape(self, s: str) -> str:
        return s.replace("\\", r"\\")


class ZshStyler:
    """
    Escapes & styles strings for zsh's ``PS1`` using zsh's own ``%B``/``%F``
    prompt escapes
    """

    prompt_suffix: ClassVar[str] = "%#"

    def __call__(self, s: str, style: Style) -> str:
        s = s.replace("%", "%%")
        if style.bold:
            s = f"%B{s}%b"
        if style.color is not None:
            s = f"%F{{{style.color.value}}}{s}%f"
        return s


StyleClass = Enum(
    "StyleClass",
    [
        "DURATION",
        "HOST",
        "CWD",
        "GIT_HEAD",
        "GIT_DETACHED",
        "GIT_DIRTY",
    ],
)

Theme = dict[StyleClass, Style]

DARK_THEME = {
    StyleClass.DURATION: Style(Color.LIGHT_YELLOW),
    StyleClass.HOST: Style(Color.LIGHT_RED),
    StyleClass.CWD: Style(Color.LIGHT_CYAN),
    StyleClass.GIT_HEAD: Style(Color.LIGHT_GREEN),
    StyleClass.GIT_DETACHED: Style(Color.LIGHT_BLUE),
    StyleClass.GIT_DIRTY: Style(Color.RED, bold=True),
}

LIGHT_THEME = DARK_THEME | {
    StyleClass.DURATION: Style(Color.MAGENTA),
    StyleClass.CWD: Style(Color.BLUE),
    StyleClass.GIT_HEAD: Style(Color.GREEN),
    StyleClass.GIT_DETACHED: Style(Color.BLUE),
}

THEMES = {
    "dark": DARK_THEME,
    "light": LIGHT_THEME,
}


@dataclass
class Painter:
    styler: Styler
    theme: Theme

    def __call__(self, s: str, klass: StyleClass) -> str:
        # Classes a theme leaves out are drawn plain
        return self.styler(s, self.theme.get(klass, PLAIN))

    @property
    def prompt_suffix(self) -> str:
        return self.styler.prompt_suffix
