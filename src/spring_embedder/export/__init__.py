"""
Export functionality for spring layouts.

Example usage:
    from spring_embedder import ChainWeights, LayoutEngine, SpringNode
    from spring_embedder.export import SvgRenderer, to_svg

    weights = ChainWeights([SpringNode() for _ in range(5)])
    engine = LayoutEngine(weights, SvgRenderer(weights=weights), autostart=False)
    engine.run(200)

    with open("layout.svg", "w") as f:
        f.write(to_svg(engine))
"""

from .svg import SvgDocument, SvgRenderer, to_svg

__all__ = [
    "SvgDocument",
    "SvgRenderer",
    "to_svg",
]
