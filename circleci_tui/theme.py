"""Colour palette and status styling for the terminal interface."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rgb:
    """A 24-bit colour."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel out of range: {channel}")

    def hex(self) -> str:
        """The colour as a ``#rrggbb`` string."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


# Backgrounds
BG_DARK = Rgb(11, 14, 20)
BG_PANEL = Rgb(30, 34, 48)

# Foregrounds
FG_PRIMARY = Rgb(171, 178, 191)
FG_BRIGHT = Rgb(255, 255, 255)
FG_DIM = Rgb(92, 99, 112)

# Statuses
SUCCESS = Rgb(152, 195, 121)
FAILED = Rgb(55, 14, 12)
FAILED_TEXT = Rgb(247, 168, 179)
RUNNING = Rgb(247, 26, 189)
BLOCKED = Rgb(235, 99, 107)
PENDING = Rgb(92, 99, 112)
CANCELED = Rgb(92, 99, 112)

# Accents
ACCENT = Rgb(247, 26, 189)
SECONDARY = Rgb(96, 240, 248)
ACCENT_WARN = Rgb(235, 99, 107)

# Borders
BORDER = Rgb(44, 49, 58)
BORDER_FOCUSED = Rgb(247, 26, 189)


_STATUS_GROUPS: list[tuple[frozenset[str], Rgb, str]] = [
    (frozenset({"success", "passed", "fixed", "successful"}), SUCCESS, "✓"),
    (frozenset({"failed", "error", "failure"}), FAILED, "✗"),
    (frozenset({"running", "in_progress", "in-progress"}), RUNNING, "●"),
    (frozenset({"blocked", "waiting", "on_hold", "on-hold"}), BLOCKED, "◆"),
    (
        frozenset({"pending", "queued", "not_run", "not-run", "not_running"}),
        PENDING,
        "○",
    ),
    (
        frozenset({"canceled", "cancelled", "aborted", "terminated"}),
        CANCELED,
        "◌",
    ),
]


def _lookup(status: str) -> tuple[Rgb, str] | None:
    key = status.lower()
    for names, colour, icon in _STATUS_GROUPS:
        if key in names:
            return colour, icon
    return None


def status_color(status: str) -> Rgb:
    """Colour for a status name; unknown statuses get the pending colour."""
    found = _lookup(status)
    return found[0] if found else PENDING


def status_icon(status: str) -> str:
    """Icon for a status name; unknown statuses get ``?``."""
    found = _lookup(status)
    return found[1] if found else "?"