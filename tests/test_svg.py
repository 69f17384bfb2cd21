from statscard.models import Circle
from statscard.models import Image
from statscard.models import Line
from statscard.models import Polygon
from statscard.models import Rect
from statscard.models import Text
from statscard.svg import render_svg


def test_render_svg_emits_every_primitive_in_order() -> None:
    primitives = [
        Polygon(points=[(0, 0), (6, 2.4), (0, 4.8), (-6, 2.4)], fill="#216e39", stroke="#ffffff", stroke_width=0.6),
        Line(start=(0, 0), end=(6, 2.4), stroke="#ffffff", stroke_width=0.6),
        Text(x=10, y=20, content="Go", fill="#24292f", style="font-size: 12px;", anchor="middle"),
        Rect(x=1, y=2, width=11, height=11, fill="#ebedf0", rx=2),
        Circle(cx=5, cy=5, r=4, fill="#00ADD8"),
        Image(x=18, y=28, width=24, height=24, href="https://example.com/avatar.png"),
    ]

    svg_content = render_svg(primitives, width=1000, height=380, background="#0d1117", title="Card", desc="Stats")

    assert svg_content.startswith("<svg")
    assert 'viewBox="0 0 1000 380"' in svg_content
    assert "<title>Card</title>" in svg_content
    assert "<desc>Stats</desc>" in svg_content
    assert 'fill="#0d1117"' in svg_content
    assert 'text-anchor="middle"' in svg_content
    assert 'rx="2.0"' in svg_content
    assert "https://example.com/avatar.png" in svg_content
    order = [svg_content.index(tag) for tag in ("<polygon", "<line", "<text", 'fill="#ebedf0"', "<circle", "<image")]
    assert order == sorted(order)


def test_render_svg_without_primitives_only_draws_background() -> None:
    svg_content = render_svg([], width=10, height=10, background="#ffffff")

    assert svg_content.count("<rect") == 1
    assert "<title>" not in svg_content
