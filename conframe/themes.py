# Conframe CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Color constants and the Rich theme used for Conframe console output.

`OneColors` holds the hex values referenced in markup strings such as
`f"[{OneColors.DARK_RED}]..."`; `get_theme()` maps the semantic style names
(`error`, `warning`, `command`, ...) to the same palette.
"""
from rich.theme import Theme


class OneColors:
    """One Dark palette, with `_b` suffixed variants for bold."""

    WHITE = "#DCDFE4"
    COMMENT_GREY = "#5C6370"
    DARK_RED = "#BE5046"
    LIGHT_YELLOW = "#E5C07B"
    GREEN = "#98C379"
    CYAN = "#56B6C2"
    BLUE = "#61AFEF"
    MAGENTA = "#C678DD"

    CYAN_b = f"bold {CYAN}"
    BLUE_b = f"bold {BLUE}"
    GREEN_b = f"bold {GREEN}"


def get_theme() -> Theme:
    return Theme(
        {
            "error": f"bold {OneColors.DARK_RED}",
            "warning": OneColors.LIGHT_YELLOW,
            "success": OneColors.GREEN,
            "command": OneColors.CYAN_b,
            "argument": OneColors.BLUE,
            "muted": OneColors.COMMENT_GREY,
        }
    )
