"""Isometric contribution calendar geometry.

Cells are addressed by (column, row) where a column is a week and a row is a
weekday. A cell projects to the screen point

    x = origin_x + (column + row) * tile_width / 2
    y = origin_y + column * tile_height / 2 - row * tile_height / 2

and its flat tile is a diamond hanging below that point. Cells with activity
are extruded upwards into single-colour cubes.
"""

from collections.abc import Sequence
from typing import NamedTuple

from statscard.colour_profiles import ColourProfile
from statscard.colour_profiles import MAX_LEVEL
from statscard.colour_profiles import contribution_level
from statscard.colour_profiles import level_colour
from statscard.models import ContributionDay
from statscard.models import ContributionWeek
from statscard.models import DrawPrimitive
from statscard.models import IsometricLayout
from statscard.models import Line
from statscard.models import Point
from statscard.models import Polygon


DAYS_PER_WEEK = 7

# Shallower than the classic 2:1 projection: lower tile height relative to
# tile width flattens the angle.
BASE_TILE_WIDTH = 12.0
BASE_TILE_HEIGHT = 4.8
BASE_HEIGHT_STEP = 4.0
MAX_SCALE_UP = 1.22
DEFAULT_STROKE_WIDTH = 0.6


class IsometricSizing(NamedTuple):
    tile_width: float
    tile_height: float
    height_step: float
    max_height: float
    grid_width: float


class _Cube(NamedTuple):
    column: int
    row: int
    base_x: float
    base_y: float
    level: int


def grid_width(columns: int, rows: int, tile_width: float) -> float:
    """On-screen width of a full diamond grid."""

    return (columns + rows - 2) * tile_width / 2.0 + tile_width


def compute_sizing(columns: int, rows: int, available_width: float) -> IsometricSizing:
    """Scale the base tile proportions so the grid fits ``available_width``.

    Grids narrower than the budget are scaled up by at most ``MAX_SCALE_UP``.
    Wider grids are scaled down to fit exactly, with no lower bound on the
    resulting tile size. ``columns`` and ``rows`` must both be positive.
    """

    natural_width = grid_width(columns, rows, BASE_TILE_WIDTH)
    if natural_width < available_width:
        scale = min(available_width / natural_width, MAX_SCALE_UP)
    else:
        scale = available_width / natural_width

    tile_width = BASE_TILE_WIDTH * scale
    height_step = BASE_HEIGHT_STEP * scale
    return IsometricSizing(
        tile_width=tile_width,
        tile_height=BASE_TILE_HEIGHT * scale,
        height_step=height_step,
        max_height=MAX_LEVEL * height_step,
        grid_width=grid_width(columns, rows, tile_width),
    )


def build_isometric_layout(
    columns: int,
    rows: int,
    available_width: float,
    origin_y: float,
    margin_left: float = 0.0,
    right_padding: float = 0.0,
    stroke_width: float = DEFAULT_STROKE_WIDTH,
) -> IsometricLayout:
    """Size the grid and right-align it against ``available_width``."""

    sizing = compute_sizing(columns, rows, available_width)
    graph_right = available_width - right_padding
    origin_x = graph_right - (columns + rows - 1) * sizing.tile_width / 2.0
    origin_x = max(origin_x, margin_left + sizing.tile_width / 2.0)

    return IsometricLayout(
        origin_x=origin_x,
        origin_y=origin_y,
        tile_width=sizing.tile_width,
        tile_height=sizing.tile_height,
        height_step=sizing.height_step,
        max_height=sizing.max_height,
        stroke_width=stroke_width,
    )


def project(column: int, row: int, layout: IsometricLayout) -> Point:
    x = layout.origin_x + (column + row) * layout.tile_width / 2.0
    y = (
        layout.origin_y
        + column * layout.tile_height / 2.0
        - row * layout.tile_height / 2.0
    )
    return x, y


def diamond_points(x: float, y: float, tile_width: float, tile_height: float) -> list[Point]:
    """Diamond anchored at its top vertex: top, right, bottom, left."""

    half_width = tile_width / 2.0
    half_height = tile_height / 2.0
    return [
        (x, y),
        (x + half_width, y + half_height),
        (x, y + tile_height),
        (x - half_width, y + half_height),
    ]


def day_at(weeks: Sequence[ContributionWeek], column: int, row: int) -> ContributionDay | None:
    if column < 0 or column >= len(weeks):
        return None
    days = weeks[column].days
    if row < 0 or row >= len(days):
        return None
    return days[row]


def level_at(weeks: Sequence[ContributionWeek], column: int, row: int) -> int:
    day = day_at(weeks, column, row)
    if day is None:
        return 0
    return contribution_level(day.color)


def render_base_tiles(
    weeks: Sequence[ContributionWeek],
    layout: IsometricLayout,
    profile: ColourProfile,
    rows: int = DAYS_PER_WEEK,
) -> list[DrawPrimitive]:
    """Flat diamonds for every cell, painted back to front.

    Diagonal strips (column + row) are walked in ascending order and rows
    descending within a strip.
    """

    columns = len(weeks)
    tiles: list[DrawPrimitive] = []
    for strip in range(columns + rows - 1):
        for row in range(rows - 1, -1, -1):
            column = strip - row
            day = day_at(weeks, column, row)
            if day is None:
                continue
            x, y = project(column, row, layout)
            tiles.append(
                Polygon(
                    points=diamond_points(x, y, layout.tile_width, layout.tile_height),
                    fill=profile.contribution_colour(day.color),
                    stroke=profile.background,
                    stroke_width=layout.stroke_width,
                )
            )
    return tiles


def collect_cubes(
    weeks: Sequence[ContributionWeek],
    layout: IsometricLayout,
    rows: int = DAYS_PER_WEEK,
) -> list[_Cube]:
    """Cells with activity, sorted back to front by base Y then base X.

    Cube height breaks the strip ordering used for flat tiles, so the paint
    order is an explicit screen-space sort.
    """

    cubes: list[_Cube] = []
    for column in range(len(weeks)):
        for row in range(rows):
            level = level_at(weeks, column, row)
            if level <= 0:
                continue
            x, y = project(column, row, layout)
            cubes.append(_Cube(column, row, x, y + layout.tile_height, level))

    cubes.sort(key=lambda cube: (cube.base_y, cube.base_x))
    return cubes


def render_cube(
    cube: _Cube,
    weeks: Sequence[ContributionWeek],
    layout: IsometricLayout,
    profile: ColourProfile,
) -> list[DrawPrimitive]:
    """Faces and outline of one extruded cell.

    The right face is hidden when the neighbour to the right is at least as
    tall, so equal-level runs read as a flat ridge.
    """

    draw_right_face = level_at(weeks, cube.column + 1, cube.row) < cube.level
    height = min(cube.level * layout.height_step, layout.max_height)
    colour = level_colour(cube.level, profile)

    x, y = project(cube.column, cube.row, layout)
    base = diamond_points(x, y, layout.tile_width, layout.tile_height)
    top = diamond_points(x, y - height, layout.tile_width, layout.tile_height)

    primitives: list[DrawPrimitive] = [
        Polygon(points=[top[3], top[2], base[2], base[3]], fill=colour)
    ]
    if draw_right_face:
        primitives.append(Polygon(points=[top[1], top[2], base[2], base[1]], fill=colour))
    primitives.append(Polygon(points=list(top), fill=colour))

    edges = [
        (top[0], top[1]),
        (top[1], top[2]),
        (top[2], top[3]),
        (top[3], top[0]),
        (top[3], base[3]),
        (top[2], base[2]),
        (base[3], base[2]),
    ]
    if draw_right_face:
        edges.extend([(top[1], base[1]), (base[1], base[2])])

    primitives.extend(
        Line(
            start=start,
            end=end,
            stroke=profile.background,
            stroke_width=layout.stroke_width,
        )
        for start, end in edges
    )
    return primitives


def render_extrusions(
    weeks: Sequence[ContributionWeek],
    layout: IsometricLayout,
    profile: ColourProfile,
    rows: int = DAYS_PER_WEEK,
) -> list[DrawPrimitive]:
    primitives: list[DrawPrimitive] = []
    for cube in collect_cubes(weeks, layout, rows):
        primitives.extend(render_cube(cube, weeks, layout, profile))
    return primitives


def render_isometric_calendar(
    weeks: Sequence[ContributionWeek],
    layout: IsometricLayout,
    profile: ColourProfile,
    rows: int = DAYS_PER_WEEK,
) -> list[DrawPrimitive]:
    """Base tiles followed by extruded cubes for the whole calendar."""

    if not weeks:
        return []
    return render_base_tiles(weeks, layout, profile, rows) + render_extrusions(
        weeks, layout, profile, rows
    )
