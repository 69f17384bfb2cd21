from collections.abc import Iterable

import svgwrite
from svgwrite.base import BaseElement

from statscard.models import Circle
from statscard.models import DrawPrimitive
from statscard.models import Image
from statscard.models import Line
from statscard.models import Polygon
from statscard.models import Rect
from statscard.models import Text


def _element(drawing: svgwrite.Drawing, primitive: DrawPrimitive) -> BaseElement:
    if isinstance(primitive, Polygon):
        extra: dict[str, object] = {}
        if primitive.stroke is not None:
            extra["stroke"] = primitive.stroke
        if primitive.stroke_width is not None:
            extra["stroke_width"] = primitive.stroke_width
        return drawing.polygon(points=primitive.points, fill=primitive.fill, **extra)

    if isinstance(primitive, Line):
        return drawing.line(
            start=primitive.start,
            end=primitive.end,
            stroke=primitive.stroke,
            stroke_width=primitive.stroke_width,
        )

    if isinstance(primitive, Text):
        extra = {}
        if primitive.anchor is not None:
            extra["text_anchor"] = primitive.anchor
        return drawing.text(
            primitive.content,
            insert=(primitive.x, primitive.y),
            fill=primitive.fill,
            style=primitive.style,
            **extra,
        )

    if isinstance(primitive, Rect):
        extra = {}
        if primitive.rx is not None:
            extra["rx"] = primitive.rx
        return drawing.rect(
            insert=(primitive.x, primitive.y),
            size=(primitive.width, primitive.height),
            fill=primitive.fill,
            **extra,
        )

    if isinstance(primitive, Circle):
        return drawing.circle(
            center=(primitive.cx, primitive.cy), r=primitive.r, fill=primitive.fill
        )

    if isinstance(primitive, Image):
        return drawing.image(
            primitive.href,
            insert=(primitive.x, primitive.y),
            size=(primitive.width, primitive.height),
        )

    raise TypeError(f"Unsupported draw primitive: {type(primitive).__name__}")


def render_svg(
    primitives: Iterable[DrawPrimitive],
    width: int,
    height: int,
    background: str,
    title: str | None = None,
    desc: str | None = None,
) -> str:
    """Serialise draw primitives into a standalone SVG document."""

    drawing = svgwrite.Drawing(size=(f"{width}px", f"{height}px"), profile="full")
    drawing["viewBox"] = f"0 0 {width} {height}"
    if title is not None or desc is not None:
        drawing.set_desc(title=title, desc=desc)

    drawing.add(drawing.rect(insert=(0, 0), size=(width, height), fill=background))
    for primitive in primitives:
        drawing.add(_element(drawing, primitive))

    return drawing.tostring()
