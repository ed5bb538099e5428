"""
Core map generation functionality.
"""

from .errors import InvalidInputError
from .hex_grid import HexGrid, HexCoordinate, Direction, INVALID_HEX, MAX_DISTANCE
from .alea_prng import AleaPRNG, create_prng
from .regions import generate_regions, find_closest_regions, region_centers
from .adjacency import AdjacencyGraph, build_adjacency
from .terrain import TerrainType, TERRAIN_NAMES, assign_terrain, shoreline_directions
from .pipeline import MapConfig, TerrainMapResult, generate_terrain_map

__all__ = ['InvalidInputError', 'HexGrid', 'HexCoordinate', 'Direction', 'INVALID_HEX', 'MAX_DISTANCE',
           'AleaPRNG', 'create_prng', 'generate_regions', 'find_closest_regions', 'region_centers',
           'AdjacencyGraph', 'build_adjacency',
           'TerrainType', 'TERRAIN_NAMES', 'assign_terrain', 'shoreline_directions',
           'MapConfig', 'TerrainMapResult', 'generate_terrain_map']
