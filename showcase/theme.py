import random
from typing import Dict, Optional

ACCENTS = ("green", "red", "yellow", "pink")

ACCENT_COLORS = {
    "green": "#91bf4b",
    "red": "#f26a2d",
    "yellow": "#ffd05d",
    "pink": "#f96ba4",
}


def theme_options(dark: bool = False):
    return [_theme(accent, dark) for accent in ACCENTS]


def _theme(accent: str, dark: bool) -> Dict[str, object]:
    suffix = f"{accent}-dark" if dark else accent
    return {
        "accent": accent,
        "color": ACCENT_COLORS[accent],
        "dark": dark,
        "stylesheet": f"css/home/home-stylesheet-{suffix}.css",
        "favicon": f"images/favicons/logo_{accent}{'_dark' if dark else ''}.ico",
    }


def pick_theme(dark: bool = False, rng: Optional[random.Random] = None) -> Dict[str, object]:
    """Pick the accent theme for one page load."""
    return (rng or random).choice(theme_options(dark))
