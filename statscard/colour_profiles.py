import logging

from pydantic import BaseModel
from pydantic import ConfigDict


logger = logging.getLogger(__name__)

# Raw day colours returned by the GitHub contribution calendar, lowest first.
GITHUB_CONTRIB_NONE = "#ebedf0"
GITHUB_CONTRIB_LOW = "#9be9a8"
GITHUB_CONTRIB_MEDIUM_LOW = "#40c463"
GITHUB_CONTRIB_MEDIUM_HIGH = "#30a14e"
GITHUB_CONTRIB_HIGH = "#216e39"

GITHUB_CONTRIB_COLOURS = (
    GITHUB_CONTRIB_NONE,
    GITHUB_CONTRIB_LOW,
    GITHUB_CONTRIB_MEDIUM_LOW,
    GITHUB_CONTRIB_MEDIUM_HIGH,
    GITHUB_CONTRIB_HIGH,
)

_LEVEL_BY_COLOUR = {colour: level for level, colour in enumerate(GITHUB_CONTRIB_COLOURS)}

MAX_LEVEL = len(GITHUB_CONTRIB_COLOURS) - 1
DEFAULT_PROFILE = "default"


class ColourProfile(BaseModel):
    """Colour scheme for one card theme."""

    model_config = ConfigDict(frozen=True)

    name: str
    background: str
    text_primary: str
    text_secondary: str
    accent_primary: str
    accent_secondary: str
    level_0: str
    level_1: str
    level_2: str
    level_3: str
    level_4: str

    @property
    def contribution_levels(self) -> tuple[str, str, str, str, str]:
        return (self.level_0, self.level_1, self.level_2, self.level_3, self.level_4)

    def contribution_colour(self, raw_colour: str) -> str:
        """Map a raw GitHub day colour onto this profile's palette."""

        return level_colour(contribution_level(raw_colour), self)


COLOUR_PROFILES: dict[str, ColourProfile] = {
    "default": ColourProfile(
        name="Default",
        background="#ffffff",
        text_primary="#24292f",
        text_secondary="#656d76",
        accent_primary="#0969da",
        accent_secondary="#1f883d",
        level_0=GITHUB_CONTRIB_NONE,
        level_1=GITHUB_CONTRIB_LOW,
        level_2=GITHUB_CONTRIB_MEDIUM_LOW,
        level_3=GITHUB_CONTRIB_MEDIUM_HIGH,
        level_4=GITHUB_CONTRIB_HIGH,
    ),
    "dark": ColourProfile(
        name="Dark",
        background="#0d1117",
        text_primary="#e6edf3",
        text_secondary="#7d8590",
        accent_primary="#58a6ff",
        accent_secondary="#3fb950",
        level_0="#161b22",
        level_1="#0e4429",
        level_2="#006d32",
        level_3="#26a641",
        level_4="#39d353",
    ),
    "ocean": ColourProfile(
        name="Ocean",
        background="#f0f8ff",
        text_primary="#0f1419",
        text_secondary="#5c6773",
        accent_primary="#0077be",
        accent_secondary="#00b4d8",
        level_0="#e6f3ff",
        level_1="#90e0ef",
        level_2="#00b4d8",
        level_3="#0096c7",
        level_4="#023e8a",
    ),
    "sunset": ColourProfile(
        name="Sunset",
        background="#fff5f5",
        text_primary="#2d1b1b",
        text_secondary="#6b5555",
        accent_primary="#d62828",
        accent_secondary="#f77f00",
        level_0="#ffe6e6",
        level_1="#ffb3ba",
        level_2="#ff8fa3",
        level_3="#ff5c8a",
        level_4="#d62828",
    ),
}


def contribution_level(raw_colour: str) -> int:
    """Map a raw GitHub day colour to a level in range 0..4.

    Unrecognised colours are treated as "no contributions".
    """

    return _LEVEL_BY_COLOUR.get(raw_colour, 0)


def level_colour(level: int, profile: ColourProfile) -> str:
    return profile.contribution_levels[level]


def get_colour_profile(name: str | None) -> ColourProfile:
    """Return the named colour profile, or the default one if it is unknown."""

    normalized_name = (name or "").strip().lower()
    profile = COLOUR_PROFILES.get(normalized_name)
    if profile is not None:
        logger.info("Using colour profile %s", profile.name)
        return profile

    logger.warning(
        "Colour profile %r not found, using %s", name, DEFAULT_PROFILE
    )
    return COLOUR_PROFILES[DEFAULT_PROFILE]


def available_profiles() -> list[str]:
    return sorted(COLOUR_PROFILES)
