from collections.abc import Iterable

from statscard.models import LanguageBytes
from statscard.models import LanguageStat


DEFAULT_LANGUAGE_COLOUR = "#8b949e"


def aggregate_languages(
    entries: Iterable[LanguageBytes], limit: int = 6
) -> list[LanguageStat]:
    """Sum language bytes across repositories and keep the largest ones.

    Percentages are relative to the kept languages only, so they add up
    to 100.
    """

    sizes: dict[str, int] = {}
    colours: dict[str, str] = {}
    for entry in entries:
        if entry.size <= 0:
            continue
        sizes[entry.name] = sizes.get(entry.name, 0) + entry.size
        if entry.color and entry.name not in colours:
            colours[entry.name] = entry.color

    ranked = sorted(sizes.items(), key=lambda item: (-item[1], item[0]))[:limit]
    kept_total = sum(size for _, size in ranked)
    if kept_total <= 0:
        return []

    return [
        LanguageStat(
            name=name,
            color=colours.get(name, DEFAULT_LANGUAGE_COLOUR),
            size=size,
            percentage=size * 100.0 / kept_total,
        )
        for name, size in ranked
    ]
