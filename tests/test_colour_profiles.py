import logging

import pytest

from statscard.colour_profiles import COLOUR_PROFILES
from statscard.colour_profiles import GITHUB_CONTRIB_COLOURS
from statscard.colour_profiles import available_profiles
from statscard.colour_profiles import contribution_level
from statscard.colour_profiles import get_colour_profile
from statscard.colour_profiles import level_colour


def test_known_contribution_colours_map_to_increasing_levels() -> None:
    levels = [contribution_level(colour) for colour in GITHUB_CONTRIB_COLOURS]

    assert levels == [0, 1, 2, 3, 4]
    assert len(set(GITHUB_CONTRIB_COLOURS)) == 5


@pytest.mark.parametrize(
    "raw_colour", ["", "#000000", "#EBEDF0", "NONE", "FOURTH_QUARTILE", "216e39"]
)
def test_unknown_contribution_colour_maps_to_level_zero(raw_colour: str) -> None:
    assert contribution_level(raw_colour) == 0


def test_level_colour_looks_up_profile_palette() -> None:
    dark = COLOUR_PROFILES["dark"]

    assert [level_colour(level, dark) for level in range(5)] == [
        "#161b22",
        "#0e4429",
        "#006d32",
        "#26a641",
        "#39d353",
    ]


def test_contribution_colour_translates_github_colour_into_theme() -> None:
    ocean = COLOUR_PROFILES["ocean"]

    assert ocean.contribution_colour("#216e39") == ocean.level_4
    assert ocean.contribution_colour("#9be9a8") == ocean.level_1
    assert ocean.contribution_colour("#123456") == ocean.level_0


def test_get_colour_profile_normalises_name() -> None:
    assert get_colour_profile("  Dark ") is COLOUR_PROFILES["dark"]


def test_get_colour_profile_falls_back_to_default(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        profile = get_colour_profile("neon")

    assert profile is COLOUR_PROFILES["default"]
    assert "neon" in caplog.text


def test_get_colour_profile_handles_missing_name() -> None:
    assert get_colour_profile(None) is COLOUR_PROFILES["default"]


def test_available_profiles_lists_every_theme() -> None:
    assert available_profiles() == ["dark", "default", "ocean", "sunset"]
