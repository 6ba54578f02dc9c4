from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GEOMETRY_URL = "https://cdn.jsdelivr.net/npm/us-atlas@3/states-albers-10m.json"


class MapConfig(BaseSettings):
    """Rendering constants for the address map."""

    geometry_url: str = Field(default=DEFAULT_GEOMETRY_URL)
    canvas_width: int = Field(default=975)
    canvas_height: int = Field(default=610)
    projection_scale: float = Field(default=1300.0)
    radius_min: float = Field(default=5.0)
    radius_max: float = Field(default=20.0)
    palette: str = Field(default="YlOrRd", description="Plotly sequential colorscale name")
    fallback_lat: float = Field(
        default=39.8283, description="Latitude used when neither city nor state resolves"
    )
    fallback_lng: float = Field(default=-98.5795)
    binding_path: str = Field(default="/qHyperCubeDef")

    model_config = SettingsConfigDict(env_prefix="ADDRESSMAP_MAP_")

    @property
    def projection_translate(self) -> tuple[float, float]:
        return (self.canvas_width / 2, self.canvas_height / 2)

    @property
    def radius_range(self) -> tuple[float, float]:
        return (self.radius_min, self.radius_max)


class DashConfig(BaseSettings):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5080)
    debug: bool = Field(default=False)

    model_config = SettingsConfigDict(env_prefix="ADDRESSMAP_DASH_")


class LoggingConfig(BaseSettings):
    verbosity_level: str = Field(default="ERROR")

    model_config = SettingsConfigDict(env_prefix="ADDRESSMAP_LOGGING_")


class PerformanceConfig(BaseSettings):
    """Timeouts that can be tuned per environment."""

    # HTTP client timeouts (in seconds)
    http_client_timeout: int = Field(default=30)

    model_config = SettingsConfigDict(env_prefix="ADDRESSMAP_PERFORMANCE_")


class Settings(BaseSettings):
    map: MapConfig = Field(default_factory=MapConfig)
    dash: DashConfig = Field(default_factory=DashConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    performance: PerformanceConfig = Field(default_factory=PerformanceConfig)

    model_config = SettingsConfigDict(env_prefix="ADDRESSMAP_")
