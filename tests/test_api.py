"""
Tests for the map generation API.
"""

import inspect

from fastapi.testclient import TestClient

from py_hexmap.api.main import app, generate_map, get_cell, get_map_image


class TestMapAPI:
    """Test the HTTP endpoints against real generation."""

    def setup_method(self):
        """Set up test client."""
        self.client = TestClient(app)

    def test_root(self):
        """Root reports the service as running."""
        response = self.client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self):
        """Health check reports the configured map size."""
        response = self.client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["map_width"] == 16
        assert data["map_height"] == 9

    def test_generate_map(self):
        """POST /maps returns region, adjacency and terrain data."""
        response = self.client.post("/maps", json={"seed": "wesnoth"})
        assert response.status_code == 200
        data = response.json()

        assert data["seed"] == "wesnoth"
        assert len(data["region_map"]) == data["width"] * data["height"]
        assert len(data["terrain_map"]) == data["num_regions"]
        assert len(data["adjacency"]) == data["num_regions"]
        assert data["terrain_names"][3] == "Water"
        for region, neighbors in enumerate(data["adjacency"]):
            for other in neighbors:
                assert region in data["adjacency"][other]

    def test_generate_map_deterministic(self):
        """The same seed returns the same map."""
        first = self.client.post("/maps", json={"seed": "repeat"}).json()
        second = self.client.post("/maps", json={"seed": "repeat"}).json()
        assert first == second

    def test_generate_map_without_seed(self):
        """A seed is chosen when none is given."""
        response = self.client.post("/maps", json={})
        assert response.status_code == 200
        assert response.json()["seed"]

    def test_get_cell(self):
        """Cell details include coordinates and neighbors."""
        response = self.client.get("/maps/wesnoth/cells/0")
        assert response.status_code == 200
        data = response.json()
        assert (data["col"], data["row"]) == (0, 0)
        assert data["neighbors"] == [1, 16]
        assert set(data["shoreline"]) <= {"NE", "SE", "S", "SW", "N", "NW"}

        full = self.client.post("/maps", json={"seed": "wesnoth"}).json()
        assert data["region"] == full["region_map"][0]
        assert data["terrain"] == full["terrain_map"][data["region"]]

    def test_get_cell_out_of_range(self):
        """Indexes outside the grid are rejected."""
        response = self.client.get("/maps/wesnoth/cells/999")
        assert response.status_code == 400

    def test_get_image(self):
        """The image endpoint returns a PNG."""
        response = self.client.get("/maps/wesnoth/image")
        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content.startswith(b"\x89PNG")

    def test_generation_handlers_run_in_threadpool(self):
        """CPU-bound handlers are plain functions so the event loop stays free."""
        for handler in (generate_map, get_cell, get_map_image):
            assert not inspect.iscoroutinefunction(handler)
