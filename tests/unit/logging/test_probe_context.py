"""Unit tests for the probe logging context."""

import asyncio
import logging
from pathlib import Path

from vidprobe.logging import (
    ProbeContextFilter,
    clear_probe_context,
    get_probe_context,
    probe_context,
    set_probe_context,
)


def _make_record() -> logging.LogRecord:
    return logging.LogRecord(
        name="vidprobe.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="message",
        args=(),
        exc_info=None,
    )


class TestProbeContext:
    """Tests for set/clear/get and the probe_context manager."""

    def teardown_method(self):
        clear_probe_context()

    def test_default_is_empty(self):
        assert get_probe_context() == (None, None)

    def test_set_and_clear(self):
        set_probe_context("03", Path("/logs/movie.log"))
        assert get_probe_context() == ("03", "/logs/movie.log")

        clear_probe_context()
        assert get_probe_context() == (None, None)

    def test_source_is_optional(self):
        set_probe_context("04")
        assert get_probe_context() == ("04", None)

    def test_context_manager_restores_previous(self):
        set_probe_context("01", "outer.log")

        with probe_context("02", "inner.log"):
            assert get_probe_context() == ("02", "inner.log")

        assert get_probe_context() == ("01", "outer.log")

    def test_context_manager_restores_on_error(self):
        try:
            with probe_context("05", "broken.log"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass

        assert get_probe_context() == (None, None)

    def test_isolated_between_tasks(self):
        """Concurrent probes each see their own context."""

        async def probe(probe_id: str) -> tuple:
            with probe_context(probe_id, f"{probe_id}.log"):
                await asyncio.sleep(0)
                return get_probe_context()

        async def run_all():
            return await asyncio.gather(probe("01"), probe("02"))

        assert asyncio.run(run_all()) == [("01", "01.log"), ("02", "02.log")]


class TestProbeContextFilter:
    """Tests for ProbeContextFilter."""

    def teardown_method(self):
        clear_probe_context()

    def test_injects_context(self):
        record = _make_record()
        with probe_context("07", "movie.log"):
            assert ProbeContextFilter().filter(record) is True

        assert record.probe_id == "07"
        assert record.probe_source == "movie.log"
        assert record.probe_tag == "[P07] "

    def test_empty_tag_outside_probe(self):
        record = _make_record()
        assert ProbeContextFilter().filter(record) is True

        assert record.probe_id is None
        assert record.probe_tag == ""
