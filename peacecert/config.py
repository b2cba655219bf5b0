"""Environment-driven settings."""

import os
from typing import List

from pydantic import BaseModel


DEFAULT_CORS_ORIGINS = "https://diplomacy.network,http://localhost:3000"


class Settings(BaseModel):
    templates_dir: str = "templates"
    flags_dir: str = "flags"
    font_path: str = os.path.join("fonts", "Platypi-VariableFont_wght.ttf")
    outcomes_dir: str = "outcomes"
    link_domain: str = "diplomacy.network"
    cors_origins: List[str] = DEFAULT_CORS_ORIGINS.split(",")
    log_level: str = "INFO"


def load_settings() -> Settings:
    """
    Read settings from the environment. Called on every request so that
    asset locations can change without a restart.
    """
    defaults = Settings()
    origins = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return Settings(
        templates_dir=os.getenv("TEMPLATES_DIR", defaults.templates_dir),
        flags_dir=os.getenv("FLAGS_DIR", defaults.flags_dir),
        font_path=os.getenv("FONT_PATH", defaults.font_path),
        outcomes_dir=os.getenv("OUTCOMES_DIR", defaults.outcomes_dir),
        link_domain=os.getenv("LINK_DOMAIN", defaults.link_domain),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        log_level=os.getenv("LOG_LEVEL", defaults.log_level),
    )
