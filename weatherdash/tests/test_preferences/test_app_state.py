"""Tests for loading and saving application preferences."""

import random
import sqlite3

import pytest

from weatherdash.config.schema import PreferencesConfig
from weatherdash.models.common import Theme, Units, Variant
from weatherdash.preferences.app_state import (
    LAST_CITY_KEY,
    UNITS_KEY,
    VARIANT_KEY,
    AppState,
    load_app_state,
    save_app_state,
    set_preference,
)
from weatherdash.preferences.store import MemoryPreferenceStore, SqlitePreferenceStore


class TestLoadAppState:
    def test_first_run_defaults(self):
        store = MemoryPreferenceStore()
        state = load_app_state(store, rng=random.Random(1))
        assert state.units == Units.METRIC
        assert state.theme == Theme.LIGHT
        assert state.last_city == ""
        assert state.variant in (Variant.COMPACT, Variant.RICH)

    def test_variant_persisted_on_first_run(self):
        store = MemoryPreferenceStore()
        state = load_app_state(store, rng=random.Random(7))
        assert store.get(VARIANT_KEY) == state.variant.value

    def test_variant_stable_across_sessions(self):
        store = MemoryPreferenceStore()
        first = load_app_state(store, rng=random.Random(3))
        for seed in range(10):
            assert load_app_state(store, rng=random.Random(seed)).variant == first.variant

    def test_both_variants_reachable(self):
        seen = {
            load_app_state(MemoryPreferenceStore(), rng=random.Random(seed)).variant
            for seed in range(50)
        }
        assert seen == {Variant.COMPACT, Variant.RICH}

    def test_stored_values(self):
        store = MemoryPreferenceStore(
            {"units": "imperial", "theme": "dark", "variant": "A", "last_city": "Oslo"}
        )
        state = load_app_state(store)
        assert state == AppState(
            units=Units.IMPERIAL, theme=Theme.DARK, variant=Variant.COMPACT, last_city="Oslo"
        )

    def test_config_defaults(self):
        defaults = PreferencesConfig(default_units="imperial", default_theme="dark")
        state = load_app_state(MemoryPreferenceStore({"variant": "B"}), defaults)
        assert state.units == Units.IMPERIAL
        assert state.theme == Theme.DARK

    def test_invalid_stored_value_falls_back(self):
        store = MemoryPreferenceStore({"units": "kelvin", "variant": "Z"})
        state = load_app_state(store, rng=random.Random(0))
        assert state.units == Units.METRIC
        assert store.get(VARIANT_KEY) in ("A", "B")


class TestSaveAppState:
    def test_round_trip_sqlite(self, tmp_db: sqlite3.Connection):
        store = SqlitePreferenceStore(tmp_db)
        save_app_state(
            store,
            AppState(units=Units.IMPERIAL, theme=Theme.DARK, variant=Variant.RICH, last_city="Lagos"),
        )
        state = load_app_state(SqlitePreferenceStore(tmp_db))
        assert state.units == Units.IMPERIAL
        assert state.last_city == "Lagos"

    def test_empty_last_city_not_written(self):
        store = MemoryPreferenceStore({LAST_CITY_KEY: "Oslo"})
        save_app_state(store, AppState(units=Units.METRIC, theme=Theme.LIGHT, variant=Variant.RICH))
        assert store.get(LAST_CITY_KEY) == "Oslo"


class TestSetPreference:
    def test_valid(self):
        store = MemoryPreferenceStore()
        set_preference(store, UNITS_KEY, "imperial")
        assert store.get(UNITS_KEY) == "imperial"

    def test_free_text_city(self):
        store = MemoryPreferenceStore()
        set_preference(store, LAST_CITY_KEY, "São Paulo")
        assert store.get(LAST_CITY_KEY) == "São Paulo"

    def test_invalid_value(self):
        with pytest.raises(ValueError):
            set_preference(MemoryPreferenceStore(), UNITS_KEY, "kelvin")

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown preference"):
            set_preference(MemoryPreferenceStore(), "font", "serif")
