#!/usr/bin/env python3
"""
Generate sample terrain maps and save them as PNG images.

For each seed this runs the full pipeline:
1. Region generation with Lloyd's relaxation on the hex grid
2. Region adjacency graph
3. Greedy terrain assignment

and prints the region adjacency lists next to the rendered image.

Usage:
    python generate_sample_maps.py [seed ...]

If no seed is provided, a handful of default seeds is used.
"""

import sys
from pathlib import Path
sys.path.append(str(Path(__file__).parent))

import numpy as np

from py_hexmap.config import settings
from py_hexmap.core import MapConfig, TERRAIN_NAMES, TerrainType, generate_terrain_map
from py_hexmap.core.terrain import palette_conflicts
from py_hexmap.render import render_png
from py_hexmap.utils.logging import configure_logging


def create_sample_map(seed, config, output_dir=Path(".")):
    """Generate one map, print its statistics and save the rendered image."""

    print(f"\nGenerating map for seed {seed!r}...")
    print(f"  Grid: {config.width}x{config.height} hexes")
    print(f"  Regions: {config.num_regions}, terrains: {config.num_terrains}")

    result = generate_terrain_map(seed, config)

    absorbed = result.absorbed_regions()
    print(f"  Absorbed regions: {absorbed if absorbed else 'none'}")

    print("  Region adjacency:")
    for region, neighbors in result.adjacency.items():
        terrain = TERRAIN_NAMES[TerrainType(int(result.terrain_map[region]))]
        print(f"    {region:2d} [{terrain:<6}]: {', '.join(str(n) for n in neighbors)}")

    conflicts = palette_conflicts(result.adjacency, result.terrain_map)
    if conflicts:
        print(f"  Terrain palette exhausted, same-terrain neighbors: {conflicts}")

    cell_terrains = result.cell_terrains()
    print("  Terrain coverage:")
    for terrain in range(config.num_terrains):
        count = int(np.sum(cell_terrains == terrain))
        print(f"    {TERRAIN_NAMES[TerrainType(terrain)]:<6} {count:4d} cells "
              f"({count / len(cell_terrains) * 100:.1f}%)")

    output_file = output_dir / f"hexmap_{result.seed}.png"
    output_file.write_bytes(render_png(result, hex_size=settings.hex_size))
    print(f"  Saved to: {output_file}")

    return result


def main():
    """Generate sample maps for the seeds given on the command line."""

    configure_logging(settings.log_level, "plain")

    seeds = sys.argv[1:] or ["default_seed", "islands", "42", "wesnoth"]
    config = MapConfig.from_settings(settings)

    print("=" * 60)
    print("Hex Map Sample Generation")
    print("=" * 60)

    for seed in seeds:
        create_sample_map(seed, config)

    print("\n" + "=" * 60)
    print(f"Generated {len(seeds)} maps")
    print("=" * 60)


if __name__ == "__main__":
    main()
