"""
Terrain assignment for regions.

Terrain is a greedy coloring of the region adjacency graph: regions are
visited in ascending id order and each takes the lowest terrain id not
already used by a neighbor. The visiting order is fixed so a seed always
produces the same terrain map.
"""

from enum import IntEnum
from typing import Dict, List, Sequence, Tuple

import numpy as np
import structlog

from .adjacency import AdjacencyGraph
from .errors import InvalidInputError
from .hex_grid import Direction, HexGrid

logger = structlog.get_logger()


class TerrainType(IntEnum):
    """Terrain palette. Ids double as indexes into a renderer's tile set."""

    GRASS = 0
    DIRT = 1
    DESERT = 2
    WATER = 3
    SWAMP = 4
    SNOW = 5


TERRAIN_NAMES: Dict[TerrainType, str] = {
    TerrainType.GRASS: "Grass",
    TerrainType.DIRT: "Dirt",
    TerrainType.DESERT: "Desert",
    TerrainType.WATER: "Water",
    TerrainType.SWAMP: "Swamp",
    TerrainType.SNOW: "Snow",
}

DEFAULT_NUM_TERRAINS = len(TerrainType)


def assign_terrain(graph: Sequence[Sequence[int]], num_terrains: int = DEFAULT_NUM_TERRAINS) -> np.ndarray:
    """
    Assign a terrain type to each region using the given adjacency list.

    When every terrain id is already taken by a neighbor the region falls
    back to terrain 0, accepting a conflict rather than failing.

    Args:
        graph: AdjacencyGraph (or any per-region sequence of neighbor ids)
        num_terrains: Size of the terrain palette

    Returns:
        Read-only array with one terrain id per region
    """
    if num_terrains < 1:
        raise InvalidInputError(f"num_terrains must be at least 1, got {num_terrains}")

    num_regions = len(graph)
    terrain = np.full(num_regions, -1, dtype=np.int64)
    exhausted = []

    for region in range(num_regions):
        assigned = set()
        for other in graph[region]:
            if not 0 <= other < num_regions:
                raise InvalidInputError(
                    f"region {region} lists neighbor {other} outside [0, {num_regions})"
                )
            if terrain[other] > -1:
                assigned.add(int(terrain[other]))

        for candidate in range(num_terrains):
            if candidate not in assigned:
                terrain[region] = candidate
                break
        else:
            terrain[region] = 0
            exhausted.append(region)

    if exhausted:
        logger.debug("Terrain palette exhausted", regions=exhausted, num_terrains=num_terrains)

    terrain.flags.writeable = False
    logger.info("Terrain assigned", regions=num_regions,
                terrains_used=len(np.unique(terrain)), exhausted=len(exhausted))
    return terrain


def palette_conflicts(graph: AdjacencyGraph, terrain_map: Sequence[int]) -> List[Tuple[int, int]]:
    """Edges whose two regions ended up with the same terrain."""
    return [(a, b) for a, b in graph.edges() if terrain_map[a] == terrain_map[b]]


def shoreline_directions(grid: HexGrid, region_map: Sequence[int], terrain_map: Sequence[int],
                         index: int, water: int = TerrainType.WATER) -> List[Direction]:
    """
    Directions in which a cell needs a shoreline overlay.

    A water cell gets one toward every neighbor that is not water; a land
    cell gets one toward every water neighbor.

    Args:
        grid: Hex grid
        region_map: Region id per cell
        terrain_map: Terrain id per region
        index: Cell array index
        water: Terrain id treated as water

    Returns:
        Directions with a water/land boundary, in direction order
    """
    is_water = terrain_map[region_map[index]] == water
    directions = []
    for direction in Direction:
        neighbor = grid.neighbor(index, direction)
        if neighbor is None:
            continue
        if (terrain_map[region_map[neighbor]] == water) != is_water:
            directions.append(direction)
    return directions
