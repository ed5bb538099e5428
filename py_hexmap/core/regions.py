"""
Region generation on the hex grid.

Regions are a discrete Voronoi diagram over the grid cells: random center
hexes are placed, every cell joins its nearest center, and the centers
are moved to the centroid of their cells. Repeating this a few times
(Lloyd's relaxation) gives more regular-looking regions.
"""

from typing import List, Sequence, Tuple

import numpy as np
import structlog

from .errors import InvalidInputError
from .hex_grid import INVALID_HEX, HexCoordinate, HexGrid

logger = structlog.get_logger()

DEFAULT_RELAXATION_ROUNDS = 4


def find_closest_regions(grid: HexGrid, centers: Sequence[Tuple[int, int]]) -> np.ndarray:
    """
    Assign every cell to its nearest center.

    Ties go to the lowest-numbered center. Invalid centers are never
    chosen while any valid center exists.

    Args:
        grid: Hex grid
        centers: Center coordinate per region (INVALID_HEX for absorbed regions)

    Returns:
        Region id per cell, in array index order
    """
    distances = np.stack([grid.distances_from(center) for center in centers])
    # argmin keeps the first minimum, i.e. the lowest region id
    return np.argmin(distances, axis=0)


def region_centers(grid: HexGrid, region_map: np.ndarray, num_regions: int) -> List[HexCoordinate]:
    """
    Compute the center of mass of each region.

    The center is the truncated integer mean of the cells' columns and
    rows. A region with no cells left keeps INVALID_HEX as its center.

    Args:
        grid: Hex grid
        region_map: Region id per cell
        num_regions: Total number of regions

    Returns:
        Center coordinate per region
    """
    region_map = np.asarray(region_map)
    cell_counts = np.zeros(num_regions, dtype=np.int64)
    col_sums = np.zeros(num_regions, dtype=np.int64)
    row_sums = np.zeros(num_regions, dtype=np.int64)

    np.add.at(cell_counts, region_map, 1)
    np.add.at(col_sums, region_map, grid.cell_cols)
    np.add.at(row_sums, region_map, grid.cell_rows)

    centers = []
    for region in range(num_regions):
        count = int(cell_counts[region])
        if count > 0:
            centers.append(HexCoordinate(int(col_sums[region]) // count,
                                         int(row_sums[region]) // count))
        else:
            centers.append(INVALID_HEX)
    return centers


def generate_regions(rng, width: int, height: int, num_regions: int,
                     rounds: int = DEFAULT_RELAXATION_ROUNDS) -> np.ndarray:
    """
    Partition the grid into regions.

    Args:
        rng: Random source with a ``random()`` method returning [0, 1)
        width: Grid width in hexes
        height: Grid height in hexes
        num_regions: Number of regions to create
        rounds: Number of relaxation rounds before the final assignment

    Returns:
        Read-only array of region ids, one per cell in array index order
    """
    if num_regions < 1:
        raise InvalidInputError(f"num_regions must be at least 1, got {num_regions}")
    if rounds < 0:
        raise InvalidInputError(f"relaxation rounds cannot be negative, got {rounds}")

    grid = HexGrid(width, height)
    logger.info("Generating regions", width=width, height=height,
                num_regions=num_regions, rounds=rounds)

    # Duplicate starting centers are fine, relaxation separates or absorbs them.
    centers = [grid.random_hex(rng) for _ in range(num_regions)]
    logger.debug("Initial region centers", centers=centers)

    for iteration in range(rounds):
        region_map = find_closest_regions(grid, centers)
        centers = region_centers(grid, region_map, num_regions)
        logger.debug("Relaxation round complete", round=iteration + 1,
                     absorbed=sum(1 for c in centers if c == INVALID_HEX))

    region_map = find_closest_regions(grid, centers)
    region_map.flags.writeable = False

    populated = np.unique(region_map).size
    logger.info("Regions generated", cells=grid.size,
                populated=populated, absorbed=num_regions - populated)
    return region_map
