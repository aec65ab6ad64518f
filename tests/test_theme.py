import pytest

from circleci_tui import theme
from circleci_tui.theme import Rgb, status_color, status_icon


def test_status_color_success():
    assert status_color("success") == theme.SUCCESS
    assert status_color("passed") == theme.SUCCESS
    assert status_color("successful") == theme.SUCCESS


def test_status_color_failed():
    assert status_color("failed") == theme.FAILED
    assert status_color("error") == theme.FAILED
    assert status_color("failure") == theme.FAILED


def test_status_color_running():
    assert status_color("running") == theme.RUNNING
    assert status_color("in_progress") == theme.RUNNING
    assert status_color("in-progress") == theme.RUNNING


def test_status_color_case_insensitive():
    assert status_color("SUCCESS") == theme.SUCCESS
    assert status_color("Failed") == theme.FAILED
    assert status_color("RUNNING") == theme.RUNNING


def test_status_color_success_value():
    assert status_color("success") == Rgb(152, 195, 121)


@pytest.mark.parametrize(
    "status, expected",
    [
        ("blocked", theme.BLOCKED),
        ("on-hold", theme.BLOCKED),
        ("queued", theme.PENDING),
        ("cancelled", theme.CANCELED),
        ("something-else", theme.PENDING),
    ],
)
def test_status_color_other_groups(status, expected):
    assert status_color(status) == expected


def test_status_icon():
    assert status_icon("success") == "✓"
    assert status_icon("failed") == "✗"
    assert status_icon("running") == "●"
    assert status_icon("blocked") == "◆"
    assert status_icon("pending") == "○"
    assert status_icon("canceled") == "◌"
    assert status_icon("unknown") == "?"


def test_status_icon_case_insensitive():
    assert status_icon("Fixed") == "✓"
    assert status_icon("TERMINATED") == "◌"


def test_rgb_hex():
    assert theme.SUCCESS.hex() == "#98c379"
    assert theme.BG_DARK.hex() == "#0b0e14"
    assert theme.FG_BRIGHT.hex() == "#ffffff"
    assert theme.SECONDARY.hex() == "#60f0f8"


def test_rgb_rejects_out_of_range():
    with pytest.raises(ValueError):
        Rgb(256, 0, 0)