"""
SVG export for spring layouts.

``SvgRenderer`` implements the renderer contract by recording primitives
into an ``SvgDocument`` used as the graphics context; ``to_svg`` draws a
whole engine through it and serializes the result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional
from xml.sax.saxutils import escape

from ..shapes import Circle

if TYPE_CHECKING:
    from ..base import AnimatedLayout
    from ..contracts import WeightFunction
    from ..node import SpringNode


@dataclass
class SvgDocument:
    """
    Graphics context collecting SVG primitives in layout coordinates.

    Coordinates are shifted into view only when serialized, so primitives
    can be recorded before the bounding box is known.
    """

    lines: list[tuple[float, float, float, float]] = field(default_factory=list)
    circles: list[tuple[float, float, float]] = field(default_factory=list)
    labels: list[tuple[float, float, str]] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.lines or self.circles or self.labels)

    def bounds(self) -> tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) of everything recorded."""
        xs: list[float] = []
        ys: list[float] = []
        for x1, y1, x2, y2 in self.lines:
            xs += [x1, x2]
            ys += [y1, y2]
        for cx, cy, r in self.circles:
            xs += [cx - r, cx + r]
            ys += [cy - r, cy + r]
        for lx, ly, _ in self.labels:
            xs.append(lx)
            ys.append(ly)
        return min(xs), min(ys), max(xs), max(ys)

    def to_string(
        self,
        *,
        node_color: str = "#4a90d9",
        node_stroke: str = "#2c5aa0",
        node_stroke_width: float = 2.0,
        edge_color: str = "#666666",
        edge_width: float = 1.5,
        label_color: str = "#000000",
        font_size: float = 12.0,
        font_family: str = "sans-serif",
        padding: float = 40.0,
        background: Optional[str] = None,
    ) -> str:
        """Serialize the recorded primitives as a standalone SVG document."""
        if self.is_empty():
            return _empty_svg(100, 100, background)

        min_x, min_y, max_x, max_y = self.bounds()
        width = max_x - min_x + 2 * padding
        height = max_y - min_y + 2 * padding
        offset_x = padding - min_x
        offset_y = padding - min_y

        svg_parts = [
            f'<svg xmlns="http://www.w3.org/2000/svg" '
            f'width="{width:.1f}" height="{height:.1f}" '
            f'viewBox="0 0 {width:.1f} {height:.1f}">'
        ]

        if background:
            svg_parts.append(f'  <rect width="100%" height="100%" fill="{escape(background)}"/>')

        svg_parts.append('  <g class="edges">')
        for x1, y1, x2, y2 in self.lines:
            svg_parts.append(
                f'    <line x1="{x1 + offset_x:.1f}" y1="{y1 + offset_y:.1f}" '
                f'x2="{x2 + offset_x:.1f}" y2="{y2 + offset_y:.1f}" '
                f'stroke="{escape(edge_color)}" stroke-width="{edge_width}"/>'
            )
        svg_parts.append("  </g>")

        svg_parts.append('  <g class="nodes">')
        for cx, cy, r in self.circles:
            svg_parts.append(
                f'    <circle cx="{cx + offset_x:.1f}" cy="{cy + offset_y:.1f}" r="{r:.1f}" '
                f'fill="{escape(node_color)}" stroke="{escape(node_stroke)}" '
                f'stroke-width="{node_stroke_width}"/>'
            )
        svg_parts.append("  </g>")

        if self.labels:
            svg_parts.append('  <g class="labels">')
            for lx, ly, text in self.labels:
                svg_parts.append(
                    f'    <text x="{lx + offset_x:.1f}" y="{ly + offset_y:.1f}" '
                    f'fill="{escape(label_color)}" font-size="{font_size}" '
                    f'font-family="{escape(font_family)}" '
                    f'text-anchor="middle" dominant-baseline="central">'
                    f"{escape(text)}</text>"
                )
            svg_parts.append("  </g>")

        svg_parts.append("</svg>")
        return "\n".join(svg_parts)


class SvgRenderer:
    """
    Renderer drawing nodes as circles into an ``SvgDocument``.

    When a weight function is given, every relation of a node is drawn as
    a line from that node, so symmetric relations appear twice.

    Example:
        renderer = SvgRenderer(weights=weights, node_radius=4)
        engine = LayoutEngine(weights, renderer)
        svg = to_svg(engine)
    """

    def __init__(
        self,
        *,
        weights: Optional[WeightFunction] = None,
        node_radius: float = 10.0,
        show_labels: bool = True,
        on_click: Optional[Callable[[SpringNode], None]] = None,
    ) -> None:
        self.weights = weights
        self.node_radius = float(node_radius)
        self.show_labels = bool(show_labels)
        self.on_click = on_click

    def draw_node(self, gfx: SvgDocument, node: SpringNode) -> None:
        if self.weights is not None:
            for other in self.weights.nodes():
                if other is not node and self.weights.has_weight(node, other):
                    gfx.lines.append((node.x, node.y, other.x, other.y))
        gfx.circles.append((node.x, node.y, self.node_radius))
        if self.show_labels:
            gfx.labels.append((node.x, node.y, _label(node)))

    def click_area(self, node: SpringNode) -> Circle:
        return Circle.around(node, self.node_radius)

    def clicked_at(self, node: SpringNode) -> None:
        if self.on_click is not None:
            self.on_click(node)

    def tooltip_text(self, node: SpringNode) -> Optional[str]:
        return _label(node) or None


def to_svg(
    engine: AnimatedLayout,
    *,
    renderer: Optional[Any] = None,
    **style: Any,
) -> str:
    """
    Export the current layout of an engine to SVG format.

    Args:
        engine: Engine whose nodes are drawn
        renderer: Renderer recording into an SvgDocument. Defaults to the
            engine's renderer when it is an SvgRenderer, else a plain
            SvgRenderer without relation lines.
        **style: Colors, sizes, padding and background passed to
            ``SvgDocument.to_string``

    Returns:
        SVG string representation of the layout
    """
    if renderer is None:
        renderer = engine.renderer if isinstance(engine.renderer, SvgRenderer) else SvgRenderer()
    doc = SvgDocument()
    engine.draw(doc, renderer=renderer)
    return doc.to_string(**style)


def _empty_svg(width: float, height: float, background: Optional[str]) -> str:
    """Create an empty SVG."""
    bg = ""
    if background:
        bg = f'\n  <rect width="100%" height="100%" fill="{escape(background)}"/>'
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{width:.1f}" height="{height:.1f}" '
        f'viewBox="0 0 {width:.1f} {height:.1f}">{bg}\n</svg>'
    )


def _label(node: Any) -> str:
    """Label text: ``label`` or ``name`` attribute, else the index."""
    if hasattr(node, "label"):
        return str(getattr(node, "label"))
    if hasattr(node, "name"):
        return str(getattr(node, "name"))
    return str(node.index) if node.index is not None else ""


__all__ = ["SvgDocument", "SvgRenderer", "to_svg"]
