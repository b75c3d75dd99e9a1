"""Application preferences loaded from, and saved to, a preference store."""

import logging
import random
from dataclasses import dataclass

from weatherdash.config.schema import PreferencesConfig
from weatherdash.models.common import Theme, Units, Variant
from weatherdash.preferences.store import PreferenceStore

logger = logging.getLogger(__name__)

UNITS_KEY = "units"
THEME_KEY = "theme"
LAST_CITY_KEY = "last_city"
VARIANT_KEY = "variant"

PREFERENCE_KEYS = (UNITS_KEY, THEME_KEY, LAST_CITY_KEY, VARIANT_KEY)


@dataclass
class AppState:
    units: Units
    theme: Theme
    variant: Variant
    last_city: str = ""


def load_app_state(
    store: PreferenceStore,
    defaults: PreferencesConfig | None = None,
    rng: random.Random | None = None,
) -> AppState:
    """Read preferences, falling back to defaults for missing or invalid values.

    The display variant is drawn uniformly on first run and persisted.
    """
    defaults = defaults or PreferencesConfig()
    units = _parse(Units, store.get(UNITS_KEY), defaults.default_units)
    theme = _parse(Theme, store.get(THEME_KEY), defaults.default_theme)

    variant = _parse(Variant, store.get(VARIANT_KEY), None)
    if variant is None:
        variant = (rng or random).choice(list(Variant))
        store.set(VARIANT_KEY, variant.value)
        logger.info("Assigned display variant %s", variant.value)

    return AppState(
        units=units,
        theme=theme,
        variant=variant,
        last_city=store.get(LAST_CITY_KEY) or "",
    )


def save_app_state(store: PreferenceStore, state: AppState) -> None:
    store.set(UNITS_KEY, state.units.value)
    store.set(THEME_KEY, state.theme.value)
    store.set(VARIANT_KEY, state.variant.value)
    if state.last_city:
        store.set(LAST_CITY_KEY, state.last_city)


def set_preference(store: PreferenceStore, key: str, value: str) -> None:
    """Validate and persist a single preference. Raises ValueError if invalid."""
    enums = {UNITS_KEY: Units, THEME_KEY: Theme, VARIANT_KEY: Variant}
    if key not in PREFERENCE_KEYS:
        raise ValueError(f"Unknown preference: {key}")
    if key in enums:
        value = enums[key](value).value
    store.set(key, value)


def _parse(enum_cls, raw, default):
    if raw is None:
        return default
    try:
        return enum_cls(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s preference %r", enum_cls.__name__, raw)
        return default
