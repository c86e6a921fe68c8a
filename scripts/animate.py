#!/usr/bin/env python3
"""
Animation frames for the spring embedder.

Runs a LayoutEngine on a sample graph and saves a strip of snapshots taken
while the layout settles, plus the final layout as SVG, into ./build/

Usage:
    uv run python scripts/animate.py
"""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from spring_embedder import EventType, LayoutEngine, LinkWeights, SpringNode, stress
from spring_embedder.export import SvgRenderer, to_svg

# Output directory
BUILD_DIR = Path(__file__).parent.parent / "build"

# Ticks between two saved frames
FRAME_TICKS = [0, 1, 3, 10, 30, 100, 300, 1000]


def ensure_build_dir():
    """Create build directory if it doesn't exist."""
    BUILD_DIR.mkdir(exist_ok=True)


def create_sample_graph():
    """Two rings of six nodes joined by spokes."""
    rng = np.random.default_rng(42)  # Reproducible
    nodes = [SpringNode(index=i, x=x, y=y) for i, (x, y) in enumerate(rng.uniform(-50, 50, (12, 2)))]
    links = []
    for i in range(6):
        links.append({"source": i, "target": (i + 1) % 6, "length": 80})
        links.append({"source": i, "target": i + 6, "length": 50})
        links.append({"source": 6 + i, "target": 6 + (i + 1) % 6, "length": 40})
    return nodes, links


def plot_snapshot(snapshot, links, title, ax):
    """Draw one snapshot on an axis."""
    for link in links:
        src = snapshot.position_of(link["source"])
        tgt = snapshot.position_of(link["target"])
        ax.plot([src[0], tgt[0]], [src[1], tgt[1]], "gray", alpha=0.5, linewidth=1)

    xs = snapshot.positions[:, 0]
    ys = snapshot.positions[:, 1]
    ax.scatter(xs, ys, s=100, c="steelblue", zorder=5, edgecolors="white", linewidth=1)

    for idx, (x, y) in zip(snapshot.indices, snapshot.positions):
        ax.annotate(str(idx), (x, y), ha="center", va="center", fontsize=8, color="white")

    ax.set_title(title, fontsize=12, fontweight="bold")
    ax.set_aspect("equal")
    ax.axis("off")


def generate_frames():
    """Advance the engine and save the frame strip and final SVG."""
    ensure_build_dir()

    nodes, links = create_sample_graph()
    weights = LinkWeights(nodes, links, spring_constant=0.5)
    movements = []

    def record(event):
        if event["type"] == EventType.tick:
            movements.append(event["movement"])

    engine = LayoutEngine(
        weights,
        SvgRenderer(weights=weights, node_radius=6),
        autostart=False,
        on_tick=record,
    )

    cols = 4
    rows = (len(FRAME_TICKS) + cols - 1) // cols
    fig, axes = plt.subplots(rows, cols, figsize=(4 * cols, 4 * rows))
    axes = axes.flatten()

    for ax, target in zip(axes, FRAME_TICKS):
        engine.run(target - engine.tick_count)
        snapshot = engine.snapshot
        title = f"tick {snapshot.tick}  stress {stress(nodes, weights):.3f}"
        plot_snapshot(snapshot, links, title, ax)

    for ax in axes[len(FRAME_TICKS):]:
        ax.axis("off")

    fig.suptitle("Spring Embedder", fontsize=14, fontweight="bold")
    plt.tight_layout()
    filepath = BUILD_DIR / "spring_frames.png"
    fig.savefig(filepath, dpi=150, bbox_inches="tight", facecolor="white")
    plt.close(fig)
    print(f"  Saved: {filepath}")

    fig, ax = plt.subplots(figsize=(6, 4))
    ax.semilogy(np.maximum(movements, 1e-12))
    ax.set_xlabel("tick")
    ax.set_ylabel("total movement")
    filepath = BUILD_DIR / "spring_movement.png"
    fig.savefig(filepath, dpi=150, bbox_inches="tight", facecolor="white")
    plt.close(fig)
    print(f"  Saved: {filepath}")

    filepath = BUILD_DIR / "spring_final.svg"
    filepath.write_text(to_svg(engine, background="#ffffff"))
    print(f"  Saved: {filepath}")

    engine.dispose()


if __name__ == "__main__":
    generate_frames()
