#!/usr/bin/env python3
# global_mercator/styles.py
"""
Style definitions for the Global Mercator shell.
Provides light, dark, and auto themes for prompt_toolkit.
"""

import os

from prompt_toolkit.styles import Style
from global_mercator.config import Config

def make_style(cfg: Config) -> Style:
    theme = cfg["shell"].get("theme", "auto")

    base_dark = {
        "prompt": "fg:#00ff00 bold",
        "result": "#ffffff",
        "error": "fg:#ff5555 bold",
        "help": "#aaaaaa",
    }
    base_light = {
        "prompt": "fg:#006600 bold",
        "result": "#000000",
        "error": "fg:#aa0000 bold",
        "help": "#444444",
    }

    if theme == "light":
        return Style.from_dict(base_light)
    if theme == "dark":
        return Style.from_dict(base_dark)

    # Auto-detect via environment
    if os.getenv("TERM_THEME", "").lower() == "light":
        return Style.from_dict(base_light)

    return Style.from_dict(base_dark)
