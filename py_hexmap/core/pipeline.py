"""
Full map generation pipeline.

Three stages run strictly in order, each consuming the finished output of
the previous one:

1. generate_regions: partition the grid into regions
2. build_adjacency: find which regions touch
3. assign_terrain: greedy-color the region graph

The result is a pure function of the configuration and the seed.
"""

from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Union

import numpy as np
import structlog

from .adjacency import AdjacencyGraph, build_adjacency
from .alea_prng import create_prng
from .errors import InvalidInputError
from .hex_grid import HexGrid
from .regions import DEFAULT_RELAXATION_ROUNDS, generate_regions
from .terrain import DEFAULT_NUM_TERRAINS, TerrainType, assign_terrain

logger = structlog.get_logger()


class MapConfig(NamedTuple):
    """Configuration for map generation."""
    width: int = 16
    height: int = 9
    num_regions: int = 18
    num_terrains: int = DEFAULT_NUM_TERRAINS
    relaxation_rounds: int = DEFAULT_RELAXATION_ROUNDS

    @classmethod
    def from_settings(cls, settings=None) -> "MapConfig":
        """Build a config from application settings."""
        if settings is None:
            from ..config import settings
        return cls(
            width=settings.map_width,
            height=settings.map_height,
            num_regions=settings.num_regions,
            num_terrains=settings.num_terrains,
            relaxation_rounds=settings.relaxation_rounds,
        )


@dataclass(frozen=True)
class TerrainMapResult:
    """Everything a renderer needs to draw a generated map."""
    seed: str
    config: MapConfig
    grid: HexGrid
    region_map: np.ndarray   # region id per cell
    adjacency: AdjacencyGraph
    terrain_map: np.ndarray  # terrain id per region

    def region_of(self, index: int) -> int:
        if not self.grid.is_valid_index(index):
            raise InvalidInputError(f"index {index} is outside [0, {self.grid.size})")
        return int(self.region_map[index])

    def terrain_at(self, index: int) -> int:
        """Terrain id of the cell at the given array index."""
        return int(self.terrain_map[self.region_of(index)])

    def cell_terrains(self) -> np.ndarray:
        """Terrain id per cell, in array index order."""
        return self.terrain_map[self.region_map]

    def region_cells(self, region: int) -> List[int]:
        if not 0 <= region < self.config.num_regions:
            raise InvalidInputError(f"region {region} is outside [0, {self.config.num_regions})")
        return np.flatnonzero(self.region_map == region).tolist()

    def absorbed_regions(self) -> List[int]:
        """Regions that ended up owning no cells."""
        counts = np.bincount(self.region_map, minlength=self.config.num_regions)
        return np.flatnonzero(counts == 0).tolist()


def generate_terrain_map(seed: Optional[Union[str, int]] = None,
                         config: Optional[MapConfig] = None) -> TerrainMapResult:
    """
    Generate a complete terrain map.

    Args:
        seed: Random seed for reproducibility; time-based when omitted
        config: Map configuration; read from settings when omitted

    Returns:
        TerrainMapResult with region map, adjacency graph and terrain map
    """
    config = config or MapConfig.from_settings()
    # Renderers and terrain names only cover the TerrainType palette.
    if config.num_terrains > len(TerrainType):
        raise InvalidInputError(
            f"num_terrains must be at most {len(TerrainType)}, got {config.num_terrains}"
        )
    prng = create_prng(seed)

    logger.info("Generating terrain map", seed=prng.seed,
                width=config.width, height=config.height,
                num_regions=config.num_regions, num_terrains=config.num_terrains)

    region_map = generate_regions(prng, config.width, config.height,
                                  config.num_regions, rounds=config.relaxation_rounds)
    adjacency = build_adjacency(region_map, config.width, config.height,
                                num_regions=config.num_regions)
    terrain_map = assign_terrain(adjacency, config.num_terrains)

    return TerrainMapResult(
        seed=prng.seed,
        config=config,
        grid=HexGrid(config.width, config.height),
        region_map=region_map,
        adjacency=adjacency,
        terrain_map=terrain_map,
    )
