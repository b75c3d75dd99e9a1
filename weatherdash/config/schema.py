"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from weatherdash.models.common import Theme, Units

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"
OPENWEATHER_ICON_URL = "https://openweathermap.org/img/wn"


class ProviderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = OPENWEATHER_BASE_URL
    api_key: str = ""
    timeout_seconds: float = Field(default=10.0, gt=0.0, le=120.0)
    icon_base_url: str = OPENWEATHER_ICON_URL


class CoordinatorConfig(BaseModel):
    model_config = {"extra": "forbid"}

    debounce_ms: int = Field(default=800, ge=0)
    min_interval_ms: int = Field(default=700, ge=0)
    reference_hour: int = Field(default=12, ge=0, le=23)


class PreferencesConfig(BaseModel):
    model_config = {"extra": "forbid"}

    default_units: Units = Units.METRIC
    default_theme: Theme = Theme.LIGHT


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    provider: ProviderConfig = ProviderConfig()
    coordinator: CoordinatorConfig = CoordinatorConfig()
    preferences: PreferencesConfig = PreferencesConfig()
