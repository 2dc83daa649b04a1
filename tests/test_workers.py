from __future__ import annotations

import asyncio
import logging

from wsserver.core import ConnectionContext, ConnectionManager
from wsserver.workers import ConnectionStatsReporter

from helpers import FakeWriter


def test_report_logs_registered_count(caplog):
    manager = ConnectionManager()
    manager.register(ConnectionContext(reader=None, writer=FakeWriter(), peername="a"))
    manager.register(ConnectionContext(reader=None, writer=FakeWriter(), peername="b"))

    with caplog.at_level(logging.INFO, logger="wsserver.workers.connection_stats"):
        assert ConnectionStatsReporter(manager).report() == 2
    assert "Open connections: 2" in caplog.text


def test_reporter_runs_periodically_until_stopped(caplog):
    async def scenario():
        reporter = ConnectionStatsReporter(ConnectionManager(), interval=0.01)
        reporter.start()
        await asyncio.sleep(0.05)
        await reporter.stop()
        return reporter

    with caplog.at_level(logging.INFO, logger="wsserver.workers.connection_stats"):
        reporter = asyncio.run(scenario())
    assert reporter._task is None
    assert caplog.text.count("Open connections: 0") >= 2
