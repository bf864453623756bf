import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()


DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
BUNDLED_ENDPOINTS = Path(__file__).resolve().parent / "endpoints.yml"

HEALTH_MESSAGE = "Master Server is Live and Running!"


class EndpointConfig(BaseModel):
    """Model and prompt templates for a single relay endpoint."""

    model: Optional[str] = None
    select: Optional[str] = None
    prompts: Dict[str, str] = Field(default_factory=dict)
    fallback: str
    user_text: Optional[str] = None

    def choose(self, value: Optional[str]) -> str:
        if value is not None and value in self.prompts:
            return self.prompts[value]
        return self.fallback


class RelayConfig(BaseModel):
    model: str
    endpoints: Dict[str, EndpointConfig]

    @field_validator("endpoints")
    @classmethod
    def _require_endpoints(cls, value):
        if not value:
            raise ValueError("at least one endpoint must be configured")
        return value

    def endpoint(self, name: str) -> EndpointConfig:
        if name not in self.endpoints:
            raise KeyError(f"Unknown endpoint: {name}")
        return self.endpoints[name]

    def model_for(self, name: str) -> str:
        return self.endpoint(name).model or self.model


class Settings(BaseModel):
    api_key: Optional[str] = None
    api_base: str = DEFAULT_API_BASE
    port: int = Field(8080, ge=1, le=65535)
    read_timeout: float = Field(300.0, gt=0)
    connect_timeout: float = Field(10.0, gt=0)
    max_body_mb: int = Field(500, ge=1)
    endpoints_path: Path = BUNDLED_ENDPOINTS

    @property
    def max_content_length(self) -> int:
        return self.max_body_mb * 1024 * 1024


def load_relay_config(path: Path) -> RelayConfig:
    if not path.exists():
        raise FileNotFoundError(
            f"Endpoint configuration not found at {path}. "
            "Set RELAY_ENDPOINTS_CONFIG or use the bundled endpoints.yml."
        )
    with path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    return RelayConfig(**raw)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    endpoints_path = os.environ.get("RELAY_ENDPOINTS_CONFIG")
    return Settings(
        api_key=os.environ.get("API_KEY") or None,
        api_base=os.environ.get("GEMINI_API_BASE", DEFAULT_API_BASE).rstrip("/"),
        port=int(os.environ.get("PORT", "8080")),
        read_timeout=float(os.environ.get("UPSTREAM_TIMEOUT", "300")),  # seconds
        connect_timeout=float(os.environ.get("UPSTREAM_CONNECT_TIMEOUT", "10")),
        max_body_mb=int(os.environ.get("MAX_BODY_MB", "500")),
        endpoints_path=Path(os.path.expanduser(endpoints_path)) if endpoints_path else BUNDLED_ENDPOINTS,
    )


__all__ = [
    "DEFAULT_API_BASE",
    "BUNDLED_ENDPOINTS",
    "HEALTH_MESSAGE",
    "EndpointConfig",
    "RelayConfig",
    "Settings",
    "load_relay_config",
    "load_settings",
]
