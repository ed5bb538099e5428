"""
Reference renderer for generated terrain maps.

Draws every cell as a flat-topped hexagon filled with its terrain color
and overlays a shoreline stroke on each water/land boundary edge. All
drawing goes through an explicit RenderContext; no pyplot state is used.
"""

import io
import math
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from matplotlib.figure import Figure
from matplotlib.patches import Polygon
from matplotlib.collections import LineCollection, PatchCollection

from .core.hex_grid import Direction
from .core.pipeline import TerrainMapResult
from .core.terrain import TerrainType, shoreline_directions

TERRAIN_COLORS: Dict[int, str] = {
    TerrainType.GRASS: "#7cae3f",
    TerrainType.DIRT: "#9b7653",
    TerrainType.DESERT: "#e8d28c",
    TerrainType.WATER: "#3f76b5",
    TerrainType.SWAMP: "#5d6b3b",
    TerrainType.SNOW: "#f2f5f7",
}

# Hex vertex pair forming the edge shared with the neighbor in each direction.
# Vertex k sits at 60*k degrees counter-clockwise from east.
_EDGE_VERTICES = {
    Direction.N: (1, 2),
    Direction.NE: (0, 1),
    Direction.SE: (5, 0),
    Direction.S: (4, 5),
    Direction.SW: (3, 4),
    Direction.NW: (2, 3),
}


@dataclass
class RenderContext:
    """Drawing target plus the styling used to draw on it."""
    figure: Figure
    axes: object
    radius: float
    terrain_colors: Dict[int, str] = field(default_factory=lambda: dict(TERRAIN_COLORS))
    shoreline_color: str = "#e9dca3"
    water: int = TerrainType.WATER


def create_render_context(result: TerrainMapResult, hex_size: int = 72, dpi: int = 100) -> RenderContext:
    """
    Create a figure sized to fit the whole map.

    Args:
        result: Generated map
        hex_size: Hex width in pixels
        dpi: Figure resolution

    Returns:
        RenderContext ready for draw_map()
    """
    radius = hex_size / 2
    grid = result.grid
    width_px = radius * (1.5 * (grid.width - 1) + 2)
    height_px = math.sqrt(3) * radius * (grid.height + 0.5) + radius

    figure = Figure(figsize=(width_px / dpi, height_px / dpi), dpi=dpi)
    axes = figure.add_axes([0, 0, 1, 1])
    axes.set_xlim(0, width_px)
    # Screen coordinates: y grows downward.
    axes.set_ylim(height_px, 0)
    axes.set_aspect("equal")
    axes.axis("off")

    return RenderContext(figure=figure, axes=axes, radius=radius)


def hex_vertices(center: Tuple[float, float], radius: float) -> List[Tuple[float, float]]:
    """Corners of a flat-topped hexagon in screen coordinates."""
    cx, cy = center
    return [(cx + radius * math.cos(math.radians(60 * k)),
             cy - radius * math.sin(math.radians(60 * k)))
            for k in range(6)]


def draw_map(context: RenderContext, result: TerrainMapResult) -> None:
    """Draw terrain fills and shoreline overlays for every cell."""
    grid = result.grid
    patches = []
    colors = []
    shore_segments = []

    for index in range(grid.size):
        coord = grid.to_coord(index)
        vertices = hex_vertices(grid.pixel_center(coord, context.radius), context.radius)
        patches.append(Polygon(vertices, closed=True))
        colors.append(context.terrain_colors[result.terrain_at(index)])

        for direction in shoreline_directions(grid, result.region_map, result.terrain_map,
                                              index, water=context.water):
            a, b = _EDGE_VERTICES[direction]
            shore_segments.append([vertices[a], vertices[b]])

    context.axes.add_collection(PatchCollection(
        patches, facecolors=colors, edgecolors="#00000033", linewidths=0.5))
    if shore_segments:
        context.axes.add_collection(LineCollection(
            shore_segments, colors=context.shoreline_color,
            linewidths=max(1.0, context.radius / 8)))


def render_png(result: TerrainMapResult, hex_size: int = 72) -> bytes:
    """Render a map to PNG bytes."""
    context = create_render_context(result, hex_size=hex_size)
    draw_map(context, result)
    buffer = io.BytesIO()
    context.figure.savefig(buffer, format="png")
    return buffer.getvalue()
