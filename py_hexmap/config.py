"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings pulled from HEXMAP_* environment variables."""

    # Map Generation Configuration
    map_width: int = Field(default=16, ge=1, description="Map width in hexes")
    map_height: int = Field(default=9, ge=1, description="Map height in hexes")
    num_regions: int = Field(default=18, ge=1, description="Number of regions to generate")
    num_terrains: int = Field(default=6, ge=1, le=6, description="Number of terrain types in the palette")
    relaxation_rounds: int = Field(default=4, ge=0, description="Lloyd relaxation rounds for region centers")
    default_seed: str = Field(default="", description="Seed used when none is given; empty means time-based")

    # Rendering Configuration
    hex_size: int = Field(default=72, ge=8, description="Hex width in pixels for rendered images")

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (plain or json)")

    class Config:
        env_prefix = "HEXMAP_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
