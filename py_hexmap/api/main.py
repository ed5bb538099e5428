"""FastAPI main application."""

from typing import List, Optional

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, Field

from ..config import settings
from ..core.errors import InvalidInputError
from ..core.pipeline import MapConfig, TerrainMapResult, generate_terrain_map
from ..core.terrain import TERRAIN_NAMES, TerrainType, shoreline_directions
from ..render import render_png
from ..utils.logging import configure_logging

configure_logging(settings.log_level, settings.log_format)

logger = structlog.get_logger()

app = FastAPI(
    title="Hex Map Generator API",
    description="Procedural hex-grid regions with greedy terrain assignment",
    version="0.1.0"
)


# Request/Response models
class MapGenerationRequest(BaseModel):
    """Request to generate a map."""

    seed: Optional[str] = Field(None, description="Random seed for reproducible generation")


class MapResponse(BaseModel):
    """A generated map, ready for rendering."""

    seed: str
    width: int
    height: int
    num_regions: int
    num_terrains: int
    region_map: List[int] = Field(description="Region id per cell, index = row * width + col")
    terrain_map: List[int] = Field(description="Terrain id per region")
    adjacency: List[List[int]] = Field(description="Neighboring regions per region")
    terrain_names: List[str] = Field(description="Display name per terrain id")
    absorbed_regions: List[int] = Field(description="Regions that own no cells")


class CellInfo(BaseModel):
    """Details for a single cell of a generated map."""

    index: int
    col: int
    row: int
    region: int
    terrain: int
    terrain_name: str
    neighbors: List[int]
    shoreline: List[str] = Field(description="Directions that need a shoreline overlay")


def _generate(seed: Optional[str]) -> TerrainMapResult:
    if not seed:
        seed = settings.default_seed or None
    return generate_terrain_map(seed, MapConfig.from_settings(settings))


def _terrain_name(terrain: int) -> str:
    return TERRAIN_NAMES[TerrainType(terrain)]


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Hex Map Generator API",
        "version": "0.1.0",
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "map_width": settings.map_width,
        "map_height": settings.map_height,
    }


@app.post("/maps", response_model=MapResponse)
def generate_map(request: MapGenerationRequest):
    """Generate a map and return its region, adjacency and terrain data."""
    logger.info("Map generation requested", seed=request.seed)
    try:
        result = _generate(request.seed)
    except InvalidInputError as e:
        logger.error("Map generation failed", error=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    return MapResponse(
        seed=result.seed,
        width=result.config.width,
        height=result.config.height,
        num_regions=result.config.num_regions,
        num_terrains=result.config.num_terrains,
        region_map=result.region_map.tolist(),
        terrain_map=result.terrain_map.tolist(),
        adjacency=[list(neighbors) for neighbors in result.adjacency],
        terrain_names=[_terrain_name(t) for t in range(result.config.num_terrains)],
        absorbed_regions=result.absorbed_regions(),
    )


@app.get("/maps/{seed}/cells/{index}", response_model=CellInfo)
def get_cell(seed: str, index: int):
    """Get details for one cell of the map generated from ``seed``."""
    result = _generate(seed)
    grid = result.grid
    try:
        coord = grid.to_coord(index)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    terrain = result.terrain_at(index)
    shoreline = shoreline_directions(grid, result.region_map, result.terrain_map, index)
    return CellInfo(
        index=index,
        col=coord.col,
        row=coord.row,
        region=result.region_of(index),
        terrain=terrain,
        terrain_name=_terrain_name(terrain),
        neighbors=grid.neighbors(index),
        shoreline=[direction.name for direction in shoreline],
    )


@app.get("/maps/{seed}/image")
def get_map_image(seed: str):
    """Render the map generated from ``seed`` as a PNG."""
    result = _generate(seed)
    logger.info("Rendering map image", seed=result.seed, hex_size=settings.hex_size)
    return Response(content=render_png(result, hex_size=settings.hex_size), media_type="image/png")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
