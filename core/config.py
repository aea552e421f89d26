from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Reference size used when no image has reported its natural size yet
    FALLBACK_WIDTH: int = 600
    FALLBACK_HEIGHT: int = 400
    # Design-preview variant renders square mockups
    PREVIEW_FALLBACK_WIDTH: int = 1200
    PREVIEW_FALLBACK_HEIGHT: int = 1200
    DEFAULT_DESIGN_SCALE: float = 0.8

    ZONES_PATH: str = "zones.json"
    POSITIONS_PATH: str = "design_positions.json"
    CACHE_PATH: str = "position_cache.json"
    CACHE_MAX_AGE_HOURS: float = 24.0
    WRITEBACK_QUEUE_SIZE: int = 256

    # Security / features
    ALLOW_ORIGINS: str = "http://localhost:5173"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def fallback_size(self) -> tuple[float, float]:
        return float(self.FALLBACK_WIDTH), float(self.FALLBACK_HEIGHT)

    @property
    def preview_fallback_size(self) -> tuple[float, float]:
        return float(self.PREVIEW_FALLBACK_WIDTH), float(self.PREVIEW_FALLBACK_HEIGHT)

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.ALLOW_ORIGINS.split(",") if o.strip()]
