"""Interactive faceted-search filter bar demo for the terminal."""

from __future__ import annotations

import argparse
import curses
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum, auto

_CONTROLS = [
    "  Left/Right: Navigate filters",
    "  Enter/Down: Open dropdown or confirm",
    "  Up/Down: Navigate options (in dropdown)",
    "  Esc: Close dropdown",
    "  q: Quit",
]


class Key(Enum):
    """Keys the demo reacts to."""

    Q = auto()
    LEFT = auto()
    RIGHT = auto()
    UP = auto()
    DOWN = auto()
    ENTER = auto()
    ESC = auto()
    OTHER = auto()


@dataclass
class Facet:
    """One filter dimension with its options and current choice."""

    icon: str
    options: list[str]
    default_index: int = 0
    selected_index: int = field(init=False)
    name: str = field(init=False)

    def __post_init__(self) -> None:
        if not self.options:
            raise ValueError("a facet needs at least one option")
        if not 0 <= self.default_index < len(self.options):
            raise IndexError(f"default index out of range: {self.default_index}")
        self.selected_index = self.default_index
        self.name = self.options[self.default_index]

    def is_filtered(self) -> bool:
        """True when a non-default option is selected."""
        return self.selected_index != self.default_index

    def selected_option(self) -> str:
        return self.options[self.selected_index]

    def select(self, index: int) -> None:
        """Select option ``index`` and update the displayed name."""
        if not 0 <= index < len(self.options):
            raise IndexError(f"option index out of range: {index}")
        self.selected_index = index
        self.name = self.selected_option()


def _default_facets() -> list[Facet]:
    return [
        Facet("☍", ["All pipelines", "My pipelines", "Frontend builds", "Backend tests"]),
        Facet("❐", ["All projects", "Project Alpha", "Project Beta"]),
        Facet("📅", ["Any time", "Last 24 hours", "Last week"]),
        Facet("●", ["All statuses", "Success", "Failed", "Running"]),
    ]


def _button_width(facet: Facet) -> int:
    return len(facet.name.encode("utf-8")) + len(facet.icon.encode("utf-8")) + 3


@dataclass
class FacetedSearchDemo:
    """State of the filter bar: facets, focus and the open dropdown."""

    facets: list[Facet] = field(default_factory=_default_facets)
    active_btn_idx: int = 0
    dropdown_open: bool = False
    dropdown_focus_idx: int = 0

    @property
    def active_facet(self) -> Facet:
        return self.facets[self.active_btn_idx]

    def active_filters(self) -> list[str]:
        """Summary of every facet set to a non-default option."""
        return [f"{f.icon}: {f.selected_option()}" for f in self.facets if f.is_filtered()]

    def handle_key(self, key: Key) -> bool:
        """Apply a key press; returns True when the demo should quit."""
        if key is Key.Q:
            return not self.dropdown_open
        if key is Key.LEFT:
            if not self.dropdown_open and self.active_btn_idx > 0:
                self.active_btn_idx -= 1
        elif key is Key.RIGHT:
            if not self.dropdown_open and self.active_btn_idx < len(self.facets) - 1:
                self.active_btn_idx += 1
        elif key is Key.ENTER:
            if not self.dropdown_open:
                self.dropdown_open = True
                self.dropdown_focus_idx = self.active_facet.selected_index
            else:
                self.active_facet.select(self.dropdown_focus_idx)
                self.dropdown_open = False
        elif key is Key.UP:
            if self.dropdown_open and self.dropdown_focus_idx > 0:
                self.dropdown_focus_idx -= 1
        elif key is Key.DOWN:
            if self.dropdown_open:
                last = len(self.active_facet.options) - 1
                if self.dropdown_focus_idx < last:
                    self.dropdown_focus_idx += 1
        elif key is Key.ESC:
            self.dropdown_open = False
        return False

    def _button_texts(self) -> list[str]:
        return [f" {f.icon} {f.name} " for f in self.facets]

    def filter_bar_text(self) -> str:
        """The filter buttons as one line of text."""
        return "".join(text + " " for text in self._button_texts())

    def content_lines(self) -> list[str]:
        """Lines of the content panel below the filter bar."""
        filters = self.active_filters()
        if filters:
            lines = ["Active filters: ", *(f"  • {item}" for item in filters), ""]
        else:
            lines = ["No filters applied", ""]
        lines += ["Filter results will appear here...", "", "Controls:", *_CONTROLS]
        return lines

    def dropdown_lines(self) -> list[str]:
        """Option lines of the open dropdown, empty when it is closed."""
        if not self.dropdown_open:
            return []
        facet = self.active_facet
        return [
            f" {'✓' if idx == facet.selected_index else ' '} {option}"
            for idx, option in enumerate(facet.options)
        ]

    def _dropdown_column(self, left: int = 0) -> int:
        return left + 1 + sum(_button_width(f) for f in self.facets[: self.active_btn_idx])


_CURSES_KEYS = {
    ord("q"): Key.Q,
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_ENTER: Key.ENTER,
    10: Key.ENTER,
    13: Key.ENTER,
    27: Key.ESC,
}


def _put(win: curses.window, y: int, x: int, text: str, attr: int = 0) -> None:
    height, width = win.getmaxyx()
    if not 0 <= y < height or not 0 <= x < width:
        return
    try:
        win.addnstr(y, x, text, width - x, attr)
    except curses.error:
        pass


class _Palette:
    def __init__(self) -> None:
        self.cyan = 0
        self.dim = 0
        self.pressed = curses.A_REVERSE | curses.A_BOLD
        if curses.has_colors():
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(1, curses.COLOR_CYAN, -1)
            curses.init_pair(2, curses.COLOR_BLACK, -1)
            curses.init_pair(3, curses.COLOR_WHITE, curses.COLOR_BLACK)
            self.cyan = curses.color_pair(1)
            self.dim = curses.color_pair(2) | curses.A_BOLD
            self.pressed = curses.color_pair(3) | curses.A_BOLD


def _draw(screen: curses.window, demo: FacetedSearchDemo, palette: _Palette) -> None:
    screen.erase()
    height, width = screen.getmaxyx()
    if height < 3 or width < 4:
        screen.refresh()
        return

    bar = screen.derwin(3, width, 0, 0)
    bar.box()
    x = 1
    for idx, (facet, text) in enumerate(zip(demo.facets, demo._button_texts())):
        active = idx == demo.active_btn_idx
        if demo.dropdown_open and active:
            attr = palette.pressed
        elif facet.is_filtered():
            attr = palette.cyan | curses.A_BOLD
        elif active:
            attr = curses.A_BOLD
        else:
            attr = palette.dim
        _put(bar, 1, x, text, attr)
        x += len(text) + 1

    if height > 3:
        content = screen.derwin(height - 3, width, 3, 0)
        content.box()
        _put(content, 0, 1, "Faceted Search Demo")
        bold_lines = {"Active filters: ", "Controls:"}
        for row, line in enumerate(demo.content_lines(), start=1):
            if line in bold_lines:
                attr = curses.A_BOLD
            elif line == "No filters applied":
                attr = palette.dim
            elif line.startswith("  • "):
                attr = palette.cyan
            else:
                attr = 0
            _put(content, row, 1, line, attr)
    screen.refresh()

    if demo.dropdown_open:
        facet = demo.active_facet
        left = demo._dropdown_column()
        lines = demo.dropdown_lines()
        drop_w = min(max(len(o) for o in facet.options) + 6, width - left)
        drop_h = min(len(lines) + 2, height - 3)
        if drop_w >= 3 and drop_h >= 3:
            drop = curses.newwin(drop_h, drop_w, 3, left)
            drop.attrset(palette.cyan)
            drop.box()
            drop.attrset(0)
            for row, (idx, line) in enumerate(enumerate(lines), start=1):
                if idx == demo.dropdown_focus_idx:
                    attr = palette.pressed
                elif idx == facet.selected_index:
                    attr = palette.cyan
                else:
                    attr = 0
                _put(drop, row, 1, line.ljust(drop_w - 2), attr)
            drop.refresh()


def _run(screen: curses.window) -> None:
    curses.curs_set(0)
    screen.keypad(True)
    palette = _Palette()
    demo = FacetedSearchDemo()
    while True:
        _draw(screen, demo, palette)
        code = screen.getch()
        if demo.handle_key(_CURSES_KEYS.get(code, Key.OTHER)):
            return


def main(argv: Sequence[str] | None = None) -> int:
    """Run the interactive filter bar demo."""
    parser = argparse.ArgumentParser(description="Faceted search filter bar demo.")
    parser.parse_args(argv)
    try:
        curses.wrapper(_run)
    except curses.error as exc:
        print(f"Error: {exc}")
    return 0