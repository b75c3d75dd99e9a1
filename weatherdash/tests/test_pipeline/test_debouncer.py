"""Tests for the single-slot debouncer."""

import asyncio
import logging

import pytest

from weatherdash.pipeline.debouncer import Debouncer


class TestDebouncer:
    @pytest.mark.asyncio
    async def test_fires_once_with_latest_args(self):
        calls: list[str] = []

        async def _record(text: str) -> None:
            calls.append(text)

        d = Debouncer(20)
        d.schedule(_record, "a")
        d.schedule(_record, "ab")
        d.schedule(_record, "abc")
        assert d.pending is True

        await d.drain()

        assert calls == ["abc"]
        assert d.pending is False
        assert d.running is False

    @pytest.mark.asyncio
    async def test_waits_for_quiet_period(self):
        calls: list[str] = []

        async def _record(text: str) -> None:
            calls.append(text)

        d = Debouncer(50)
        d.schedule(_record, "a")
        await asyncio.sleep(0.01)
        assert calls == []
        await d.drain()
        assert calls == ["a"]

    @pytest.mark.asyncio
    async def test_cancel(self):
        calls: list[str] = []

        async def _record(text: str) -> None:
            calls.append(text)

        d = Debouncer(10)
        assert d.cancel() is False
        d.schedule(_record, "a")
        assert d.cancel() is True
        await asyncio.sleep(0.03)
        await d.drain()
        assert calls == []

    @pytest.mark.asyncio
    async def test_drain_waits_for_running_call(self):
        done = asyncio.Event()

        async def _slow() -> None:
            await asyncio.sleep(0.02)
            done.set()

        d = Debouncer(0)
        d.schedule(_slow)
        await d.drain()
        assert done.is_set()

    @pytest.mark.asyncio
    async def test_exception_is_logged(self, caplog):
        async def _boom() -> None:
            raise ValueError("nope")

        d = Debouncer(0)
        with caplog.at_level(logging.ERROR, logger="weatherdash.pipeline.debouncer"):
            d.schedule(_boom)
            await d.drain()
            await asyncio.sleep(0)
        assert "Debounced call raised" in caplog.text

    def test_schedule_requires_running_loop(self):
        async def _noop() -> None:
            return None

        with pytest.raises(RuntimeError):
            Debouncer(10).schedule(_noop)
