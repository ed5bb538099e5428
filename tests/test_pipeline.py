"""
Tests for the full generation pipeline, the PRNG and settings.
"""

import numpy as np
import pytest

from py_hexmap.config import Settings
from py_hexmap.core.alea_prng import AleaPRNG, create_prng
from py_hexmap.core.errors import InvalidInputError
from py_hexmap.core.pipeline import MapConfig, TerrainMapResult, generate_terrain_map
from py_hexmap.core.terrain import assign_terrain


class TestAleaPRNG:
    """Test the seedable random source."""

    def test_same_seed_same_sequence(self):
        """Two generators with the same seed agree."""
        a = AleaPRNG("hexmap")
        b = AleaPRNG("hexmap")
        assert [a.random() for _ in range(50)] == [b.random() for _ in range(50)]

    def test_different_seeds_differ(self):
        """Different seeds give different sequences."""
        a = AleaPRNG("one")
        b = AleaPRNG("two")
        assert [a.random() for _ in range(10)] != [b.random() for _ in range(10)]

    def test_numeric_seed_matches_string(self):
        """Seeds are compared as strings."""
        assert AleaPRNG(42).random() == AleaPRNG("42").random()

    def test_unit_interval(self):
        """Values fall in [0, 1)."""
        prng = AleaPRNG("range")
        for _ in range(1000):
            value = prng.random()
            assert 0 <= value < 1

    def test_call_count(self):
        """Every draw is counted."""
        prng = AleaPRNG("count")
        for _ in range(3):
            prng.random()
        assert prng.call_count == 3

    def test_create_prng_time_seed(self):
        """Without a seed a time-based one is chosen."""
        prng = create_prng()
        assert prng.seed.isdigit()
        assert create_prng("").seed.isdigit()
        assert create_prng("fixed").seed == "fixed"


class TestMapConfig:
    """Test map configuration."""

    def test_defaults(self):
        """Defaults describe a 16x9 map with 18 regions and 6 terrains."""
        config = MapConfig()
        assert (config.width, config.height) == (16, 9)
        assert config.num_regions == 18
        assert config.num_terrains == 6
        assert config.relaxation_rounds == 4

    def test_from_settings(self):
        """Settings map onto config fields."""
        settings = Settings(map_width=10, map_height=5, num_regions=7,
                            num_terrains=3, relaxation_rounds=2)
        assert MapConfig.from_settings(settings) == MapConfig(10, 5, 7, 3, 2)

    def test_settings_from_environment(self, monkeypatch):
        """HEXMAP_* environment variables override defaults."""
        monkeypatch.setenv("HEXMAP_NUM_REGIONS", "12")
        monkeypatch.setenv("HEXMAP_MAP_WIDTH", "20")
        settings = Settings()
        assert settings.num_regions == 12
        assert settings.map_width == 20
        assert MapConfig.from_settings(settings).num_regions == 12

    def test_settings_reject_oversized_palette(self):
        """The palette has at most six terrains."""
        with pytest.raises(ValueError):
            Settings(num_terrains=7)


class TestGenerateTerrainMap:
    """Test the end-to-end pipeline."""

    def test_deterministic(self):
        """Same seed and config, same map."""
        first = generate_terrain_map("wesnoth", MapConfig())
        second = generate_terrain_map("wesnoth", MapConfig())
        np.testing.assert_array_equal(first.region_map, second.region_map)
        np.testing.assert_array_equal(first.terrain_map, second.terrain_map)
        assert first.adjacency == second.adjacency

    def test_result_shapes(self):
        """Arrays are sized by the config."""
        config = MapConfig(width=12, height=7, num_regions=9, num_terrains=4)
        result = generate_terrain_map("shapes", config)

        assert isinstance(result, TerrainMapResult)
        assert result.seed == "shapes"
        assert result.grid.size == 12 * 7
        assert result.region_map.shape == (84,)
        assert result.terrain_map.shape == (9,)
        assert len(result.adjacency) == 9
        assert result.terrain_map.max() < 4

    def test_stages_agree(self):
        """The terrain map is the greedy coloring of the adjacency graph."""
        result = generate_terrain_map("stages", MapConfig())
        np.testing.assert_array_equal(result.terrain_map,
                                      assign_terrain(result.adjacency, 6))

    def test_cell_lookups(self):
        """Per-cell region and terrain lookups follow the region map."""
        result = generate_terrain_map("lookup", MapConfig())
        cell_terrains = result.cell_terrains()
        assert cell_terrains.shape == (result.grid.size,)
        for index in range(result.grid.size):
            region = result.region_of(index)
            assert region == result.region_map[index]
            assert result.terrain_at(index) == result.terrain_map[region]
            assert cell_terrains[index] == result.terrain_at(index)

    def test_region_cells_partition_grid(self):
        """Every cell belongs to exactly one region."""
        result = generate_terrain_map("partition", MapConfig())
        cells = []
        for region in range(result.config.num_regions):
            cells.extend(result.region_cells(region))
        assert sorted(cells) == list(range(result.grid.size))

    def test_absorbed_regions(self):
        """Absorbed regions own no cells and have no neighbors."""
        config = MapConfig(width=4, height=2, num_regions=6)
        result = generate_terrain_map("crowded", config)
        present = set(np.unique(result.region_map).tolist())
        assert result.absorbed_regions() == sorted(set(range(6)) - present)
        for region in result.absorbed_regions():
            assert result.region_cells(region) == []
            assert result.adjacency[region] == ()

    def test_invalid_lookups(self):
        """Out-of-range cells and regions are rejected."""
        result = generate_terrain_map("bounds", MapConfig())
        with pytest.raises(InvalidInputError):
            result.region_of(result.grid.size)
        with pytest.raises(InvalidInputError):
            result.region_cells(18)

    def test_time_based_seed(self):
        """Omitting the seed still yields a reproducible map."""
        result = generate_terrain_map(config=MapConfig())
        again = generate_terrain_map(result.seed, MapConfig())
        np.testing.assert_array_equal(result.region_map, again.region_map)

    def test_invalid_config(self):
        """Bad configuration surfaces as InvalidInputError."""
        with pytest.raises(InvalidInputError):
            generate_terrain_map("bad", MapConfig(num_regions=0))
        with pytest.raises(InvalidInputError):
            generate_terrain_map("bad", MapConfig(num_terrains=0))

    def test_palette_larger_than_terrain_types(self):
        """Every terrain id must have a TerrainType entry."""
        with pytest.raises(InvalidInputError):
            generate_terrain_map("bad", MapConfig(num_terrains=7))
