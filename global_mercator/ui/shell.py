#!/usr/bin/env python3
# global_mercator/ui/shell.py
"""Interactive prompt_toolkit shell around the Global Mercator CLI commands."""

from __future__ import annotations

import logging
import shlex
from typing import List, Optional, Tuple

from prompt_toolkit import PromptSession, print_formatted_text
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.history import FileHistory, History, InMemoryHistory

from global_mercator.cli import COMMANDS, build_parser, run_command
from global_mercator.config import Config
from global_mercator.errors import MercatorRangeError
from global_mercator.styles import make_style

log = logging.getLogger(__name__)

_HELP_TEXT = (
    "Commands:\n"
    "  meters LNG LAT                     LngLat -> meters\n"
    "  lnglat X Y                         meters -> LngLat\n"
    "  pixels X Y ZOOM                    meters -> pixels\n"
    "  tile LNG LAT ZOOM [--scheme S]     LngLat -> tile (tile | google | quadkey)\n"
    "  convert S VALUES --to S            tile <-> google <-> quadkey\n"
    "  bbox S VALUES [--meters]           tile -> bounding box\n"
    "  center W S E N                     bbox center\n"
    "  hash X Y ZOOM                      tile key\n"
    "  grid W S E N MIN MAX [--count|--bulk N|--limit N]\n"
    "  config show [--changed]\n"
    "  help                               this text\n"
    "  exit | quit                        leave the shell\n"
)

_EXIT = ("exit", "quit")

# (style class, text) pairs
Lines = List[Tuple[str, str]]


class MercatorShell:
    """Read-eval-print loop over the CLI subcommands."""

    def __init__(self, cfg: Config):
        self.cfg = cfg
        self.parser = build_parser()
        self.parser.prog = ""
        words = [c for c in COMMANDS if c != "shell"] + ["help", *_EXIT]
        self.completer = WordCompleter(words, sentence=True)
        self.style = make_style(cfg)

    def _history(self) -> History:
        path = self.cfg["shell"].get("history_file")
        return FileHistory(path) if path else InMemoryHistory()

    def execute_line(self, line: str) -> Optional[Lines]:
        """
        Run one shell line.
        Returns styled output lines, or None when the shell should exit.
        """
        line = line.strip()
        if not line:
            return []
        if line in _EXIT:
            return None
        if line == "help":
            return [("class:help", _HELP_TEXT)]

        try:
            argv = shlex.split(line)
        except ValueError as exc:
            return [("class:error", f"error: {exc}")]
        if argv[0] == "shell":
            return [("class:error", "error: already in the shell")]

        try:
            args = self.parser.parse_args(argv)
            return [("class:result", out) for out in run_command(args, self.cfg, self.parser)]
        except MercatorRangeError as exc:
            log.debug("%s failed: %s", argv[0], exc)
            return [("class:error", f"error: {exc}")]
        except SystemExit:
            # argparse already printed usage/errors
            return []

    def run(self) -> None:
        session: PromptSession = PromptSession(
            history=self._history(),
            completer=self.completer,
            style=self.style,
        )
        prompt = FormattedText([("class:prompt", self.cfg["shell"]["prompt"])])
        while True:
            try:
                text = session.prompt(prompt)
            except KeyboardInterrupt:
                continue
            except EOFError:
                break
            lines = self.execute_line(text)
            if lines is None:
                break
            for style_class, out in lines:
                print_formatted_text(FormattedText([(style_class, out)]), style=self.style)
