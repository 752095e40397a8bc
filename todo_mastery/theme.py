"""Colour and style helpers for the light and dark themes.

- Colour is off when stdout is not a TTY, unless FORCE_COLOR=1.
- NO_COLOR disables colour completely.
- Truecolor is used when COLORTERM advertises it; otherwise the 256-colour
  cube is approximated.
"""

import os
import sys
from typing import Dict, Tuple

from todo_mastery.models import Category, Priority, Theme

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
STRIKE = "\033[9m"

# Role -> hex, per theme
PALETTES: Dict[Theme, Dict[str, str]] = {
    Theme.LIGHT: {
        "title": "#1F2937",
        "text": "#1F2937",
        "muted": "#6B7280",
        "accent": "#2563EB",
        "done": "#16A34A",
        "total": "#2563EB",
        "completed": "#16A34A",
        "remaining": "#EA580C",
    },
    Theme.DARK: {
        "title": "#FFFFFF",
        "text": "#FFFFFF",
        "muted": "#9CA3AF",
        "accent": "#60A5FA",
        "done": "#4ADE80",
        "total": "#60A5FA",
        "completed": "#4ADE80",
        "remaining": "#FB923C",
    },
}

PRIORITY_HEX: Dict[Priority, str] = {
    Priority.HIGH: "#EF4444",
    Priority.MEDIUM: "#EAB308",
    Priority.LOW: "#22C55E",
}

CATEGORY_ICONS: Dict[Category, str] = {
    Category.WORK: "\U0001F4BC",
    Category.PERSONAL: "\U0001F464",
    Category.SHOPPING: "\U0001F6D2",
    Category.HEALTH: "\U0001F3E5",
    Category.EDUCATION: "\U0001F4DA",
}
DEFAULT_ICON = "\U0001F4DD"


def colors_enabled() -> bool:
    force = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
    if os.environ.get("NO_COLOR") is not None:
        return False
    return force or sys.stdout.isatty()


def _truecolor() -> bool:
    colorterm = os.environ.get("COLORTERM", "").lower()
    return any(tok in colorterm for tok in ("truecolor", "24bit"))


def _hex_to_rgb(hex_code: str) -> Tuple[int, int, int]:
    h = hex_code.lstrip("#")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def fg(hex_code: str) -> str:
    """ANSI foreground sequence for a hex colour (empty when colour is off)."""
    if not colors_enabled():
        return ""
    r, g, b = _hex_to_rgb(hex_code)
    if _truecolor():
        return f"\033[38;2;{r};{g};{b}m"

    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))

    return f"\033[38;5;{16 + 36 * to_6(r) + 6 * to_6(g) + to_6(b)}m"


def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to text."""
    if not colors_enabled() or not any(styles):
        return text
    return "".join(styles) + text + RESET


def role(theme: Theme, name: str) -> str:
    """Foreground sequence for a palette role of the given theme."""
    return fg(PALETTES[theme][name])


def priority_style(priority: Priority) -> str:
    return fg(PRIORITY_HEX.get(priority, "#6B7280"))


def category_icon(category: Category) -> str:
    return CATEGORY_ICONS.get(category, DEFAULT_ICON)


def style(name: str) -> str:
    """Plain ANSI attribute by name, honouring the colour switches."""
    codes = {"bold": BOLD, "dim": DIM, "strike": STRIKE}
    return codes[name] if colors_enabled() else ""
