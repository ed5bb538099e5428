"""Region adjacency graph built from cell-level hex neighbors."""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np
import structlog

from .errors import InvalidInputError
from .hex_grid import HexGrid

logger = structlog.get_logger()


@dataclass(frozen=True)
class AdjacencyGraph:
    """
    Undirected region graph.

    ``neighbors[r]`` lists the regions touching region ``r`` in the order
    they were first found. Regions without cells have no neighbors.
    """
    neighbors: Tuple[Tuple[int, ...], ...]

    def __getitem__(self, region: int) -> Tuple[int, ...]:
        return self.neighbors[region]

    def __len__(self) -> int:
        return len(self.neighbors)

    def __iter__(self) -> Iterator[Tuple[int, ...]]:
        return iter(self.neighbors)

    @property
    def num_regions(self) -> int:
        return len(self.neighbors)

    def items(self) -> Iterator[Tuple[int, Tuple[int, ...]]]:
        return enumerate(self.neighbors)

    def degree(self, region: int) -> int:
        return len(self.neighbors[region])

    def edges(self) -> List[Tuple[int, int]]:
        """Each undirected edge once, as (smaller id, larger id)."""
        return [(region, other)
                for region, adjacent in enumerate(self.neighbors)
                for other in adjacent if region < other]

    def is_symmetric(self) -> bool:
        return all(region in self.neighbors[other]
                   for region, adjacent in enumerate(self.neighbors)
                   for other in adjacent)


def build_adjacency(region_map: Sequence[int], width: int, height: int,
                    num_regions: Optional[int] = None) -> AdjacencyGraph:
    """
    Construct an adjacency list for each region.

    Cells are scanned in ascending array index and directions 0-5; every
    neighbor in a different region is recorded once, in discovery order.
    The hex neighbor relation is symmetric, so the graph is as well.

    Args:
        region_map: Region id per cell, in array index order
        width: Grid width in hexes
        height: Grid height in hexes
        num_regions: Total number of regions, including any that own no
            cells; defaults to the largest id in region_map plus one

    Returns:
        AdjacencyGraph with one entry per region
    """
    grid = HexGrid(width, height)
    regions = np.asarray(region_map)

    if regions.ndim != 1 or regions.size != grid.size:
        raise InvalidInputError(
            f"region map must hold {grid.size} entries for a {width}x{height} grid, "
            f"got shape {regions.shape}"
        )
    if not np.issubdtype(regions.dtype, np.integer):
        raise InvalidInputError(f"region ids must be integers, got dtype {regions.dtype}")
    if num_regions is None:
        num_regions = int(regions.max()) + 1
    if regions.min() < 0 or regions.max() >= num_regions:
        raise InvalidInputError(
            f"region ids must be in [0, {num_regions}), "
            f"got range [{regions.min()}, {regions.max()}]"
        )

    region_ids = regions.tolist()
    adjacent: List[List[int]] = [[] for _ in range(num_regions)]

    for index, region in enumerate(region_ids):
        found = adjacent[region]
        for neighbor in grid.neighbors(index):
            other = region_ids[neighbor]
            # Different region not yet recorded for this one.
            if other != region and other not in found:
                found.append(other)

    graph = AdjacencyGraph(tuple(tuple(found) for found in adjacent))
    logger.info("Region adjacency built", regions=num_regions, edges=len(graph.edges()))
    return graph
