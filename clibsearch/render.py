# clibsearch/render.py

import json
from dataclasses import dataclass

from rich.console import Console
from rich.segment import Segment, Segments
from rich.style import Style

from clibsearch.models import PackageEntry


@dataclass(frozen=True)
class Theme:
    highlight: str | None = "dark_cyan"
    text: str | None = "bright_black"

    @classmethod
    def for_color(cls, color: bool) -> "Theme":
        return cls() if color else cls(highlight=None, text=None)


def make_console(color: bool = True, file=None) -> Console:
    return Console(
        file=file,
        no_color=not color,
        color_system="auto" if color else None,
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )


class TextRenderer:
    """Prints each match as a repo / url / desc block."""

    def __init__(self, console: Console, theme: Theme):
        self.console = console
        self.theme = theme
        self.count = 0

    def add(self, pkg: PackageEntry) -> None:
        if self.count == 0:
            self.console.print()
        self.count += 1
        self._line(("  " + pkg.repo, self.theme.highlight))
        self._line(("  url: ", None), (pkg.href, self.theme.text))
        self._line(("  desc: ", None), (pkg.description, self.theme.text))
        self.console.print()

    def _line(self, *parts) -> None:
        # raw segments: catalog text is printed as-is, no markup, tabs or wrapping
        segments = [Segment(text, Style.parse(style) if style else None) for text, style in parts]
        segments.append(Segment.line())
        self.console.print(Segments(segments), end="", crop=False)

    def finish(self) -> None:
        pass


class JsonRenderer:
    """Collects matches and prints them as one pretty JSON array at the end."""

    def __init__(self, console: Console):
        self.console = console
        self.items = []

    @property
    def count(self):
        return len(self.items)

    def add(self, pkg: PackageEntry) -> None:
        self.items.append(pkg.to_dict())

    def finish(self) -> None:
        self.console.print(json.dumps(self.items, indent=2), markup=False, highlight=False)


def get_renderer(options, console: Console | None = None):
    console = console or make_console(options.color)
    if options.json:
        return JsonRenderer(console)
    return TextRenderer(console, Theme.for_color(options.color))
