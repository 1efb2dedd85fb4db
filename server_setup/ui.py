"""Nord-themed console output shared by every part of the setup run."""

from typing import List, Optional

import pyfiglet
from rich import box
from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

from server_setup import APP_NAME, VERSION


# ----------------------------------------------------------------
# Nord-Themed Colors and Theme Setup
# ----------------------------------------------------------------
class NordColors:
    """Nord color palette definitions for consistent UI styling."""

    POLAR_NIGHT_3: str = "#434C5E"
    SNOW_STORM_1: str = "#D8DEE9"
    SNOW_STORM_2: str = "#E5E9F0"
    FROST_1: str = "#8FBCBB"
    FROST_2: str = "#88C0D0"
    FROST_3: str = "#81A1C1"
    FROST_4: str = "#5E81AC"
    RED: str = "#BF616A"
    YELLOW: str = "#EBCB8B"
    GREEN: str = "#A3BE8C"

    @classmethod
    def get_frost_gradient(cls, steps: int = 4) -> List[str]:
        """Returns a gradient using the frost color palette."""
        frosts = [cls.FROST_1, cls.FROST_2, cls.FROST_3, cls.FROST_4]
        return frosts[:steps]


nord_theme = Theme(
    {
        "banner": f"bold {NordColors.FROST_2}",
        "header": f"bold {NordColors.FROST_2}",
        "info": NordColors.GREEN,
        "warning": NordColors.YELLOW,
        "error": NordColors.RED,
        "debug": NordColors.POLAR_NIGHT_3,
        "success": NordColors.GREEN,
    }
)

console = Console(theme=nord_theme)


# ----------------------------------------------------------------
# UI Helper Functions
# ----------------------------------------------------------------
def create_header(title: str = APP_NAME, out: Optional[Console] = None) -> Panel:
    """
    Generate an ASCII art header with a frost gradient using Pyfiglet.
    The banner is built line-by-line into a Rich Text object to avoid stray markup tokens.

    Args:
        title: Text rendered as the banner
        out: Console whose width picks the font (the shared console by default)

    Returns:
        Panel containing the styled banner
    """
    term_width = (out or console).width
    fonts: List[str] = ["slant", "small", "mini"]
    if term_width < 60:
        fonts = fonts[1:]

    ascii_art = ""
    for font in fonts:
        try:
            fig = pyfiglet.Figlet(font=font, width=min(term_width - 10, 120))
            ascii_art = fig.renderText(title)
            if ascii_art.strip():
                break
        except pyfiglet.FontNotFound:
            continue

    ascii_lines = [line for line in ascii_art.splitlines() if line.strip()] or [title]
    colors = NordColors.get_frost_gradient(len(ascii_lines))
    combined_text = Text()

    for i, line in enumerate(ascii_lines):
        color = colors[i % len(colors)]
        combined_text.append(Text(line, style=f"bold {color}"))
        if i < len(ascii_lines) - 1:
            combined_text.append("\n")

    return Panel(
        Align.center(combined_text),
        border_style=NordColors.FROST_1,
        padding=(1, 2),
        title=Text(f"{APP_NAME} v{VERSION}", style=f"bold {NordColors.SNOW_STORM_2}"),
        title_align="right",
        subtitle=Text(
            "Ubuntu/Debian Server Bootstrap", style=f"bold {NordColors.SNOW_STORM_1}"
        ),
        subtitle_align="center",
        box=box.ROUNDED,
    )


def print_message(
    text: str,
    style: str = NordColors.FROST_2,
    prefix: str = "•",
    out: Optional[Console] = None,
) -> None:
    """
    Print a styled message with a prefix.

    Args:
        text: The message to print (markup in it is escaped)
        style: The color to use
        prefix: Symbol to prefix the message with
        out: Console to print on
    """
    (out or console).print(f"[{style}]{prefix} {escape(text)}[/{style}]")


def print_success(message: str, out: Optional[Console] = None) -> None:
    """
    Print a success message with checkmark.

    Args:
        message: The success message to print
        out: Console to print on
    """
    print_message(message, NordColors.GREEN, "✓", out)


def print_warning(message: str, out: Optional[Console] = None) -> None:
    """
    Print a warning message with warning symbol.

    Args:
        message: The warning message to print
        out: Console to print on
    """
    print_message(message, NordColors.YELLOW, "⚠", out)


def print_error(message: str, out: Optional[Console] = None) -> None:
    """
    Print an error message with X symbol.

    Args:
        message: The error message to print
        out: Console to print on
    """
    print_message(message, NordColors.RED, "✗", out)


def print_step(message: str, out: Optional[Console] = None) -> None:
    """
    Print a step description with arrow indication.

    Args:
        message: The step description to print
        out: Console to print on
    """
    print_message(message, NordColors.FROST_2, "→", out)


def print_section(title: str, out: Optional[Console] = None) -> None:
    """
    Print a section header: the title underlined in frost blue.

    Args:
        title: The section title to display
        out: Console to print on
    """
    out = out or console
    out.print()
    out.print(f"[bold {NordColors.FROST_3}]{title}[/]")
    out.print(f"[{NordColors.FROST_3}]{'─' * len(title)}[/]")


def display_panel(
    message: str,
    style: str = NordColors.FROST_2,
    title: Optional[str] = None,
    out: Optional[Console] = None,
) -> None:
    """
    Display a styled panel with a message.

    Args:
        message: Plain text shown inside the panel
        style: Color for the text and the border
        title: Optional panel title
        out: Console to print on
    """
    panel = Panel(
        Text(message, style=style),
        border_style=f"{style}",
        padding=(1, 2),
        title=f"[bold {style}]{title}[/]" if title else None,
        box=box.ROUNDED,
    )
    (out or console).print(panel)
