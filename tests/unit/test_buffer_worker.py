"""
Unit tests for BufferWorker.

Tests the three flush triggers (full buffer, timer, cancellation),
ordering at the capacity boundary and best-effort writes.
"""

import io
import threading
import time
import pytest

from swapi_fetcher.config import BufferConfig
from swapi_fetcher.persistence import LineSink
from swapi_fetcher.workers import BufferWorker


def wait_for(predicate, timeout: float = 2.0) -> bool:
    """Poll predicate until it is true or timeout expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


@pytest.fixture
def worker(test_config, channel, token, sink) -> BufferWorker:
    test_config.buffer = BufferConfig(capacity=2, flush_interval=30.0)
    return BufferWorker(channel, token, sink=sink, config=test_config)


class TestBufferWorkerInsert:
    """Test insert and flush without the event loop."""

    def test_insert_below_capacity_does_not_flush(self, worker, output):
        worker.insert("A")
        worker.insert("B")
        assert worker.buffer.snapshot() == ["A", "B"]
        assert output.getvalue() == ""

    def test_insert_into_full_buffer_flushes_first(self, worker, output):
        """Capacity 2, items A,B,C: A,B are flushed and the buffer holds [C]."""
        for name in ["A", "B", "C"]:
            worker.insert(name)

        assert output.getvalue() == "A\nB\n"
        assert worker.buffer.snapshot() == ["C"]
        assert worker.stats.flushes == 1

    def test_buffer_never_exceeds_capacity(self, worker):
        for i in range(25):
            worker.insert(f"item-{i}")
            assert len(worker.buffer) <= worker.buffer.capacity
        assert worker.buffer.high_water == 2

    def test_no_items_dropped_across_flushes(self, worker, output):
        names = [f"item-{i}" for i in range(7)]
        for name in names:
            worker.insert(name)
        worker.flush()
        assert output.getvalue().splitlines() == names

    def test_flush_empty_buffer_is_noop(self, worker, output):
        assert worker.flush() == 0
        assert worker.stats.flushes == 0
        assert output.getvalue() == ""

    def test_write_failures_are_counted(self, test_config, channel, token):
        stream = io.StringIO()
        stream.close()
        worker = BufferWorker(channel, token, sink=LineSink(stream), config=test_config)

        worker.insert("A")
        worker.flush()

        assert worker.stats.write_failures == 1
        assert worker.stats.items_flushed == 0
        assert worker.buffer.empty()


class TestBufferWorkerRun:
    """Test the event loop."""

    def test_final_flush_on_cancel(self, worker, channel, token, output):
        """Cancellation flushes what is buffered and sets done."""
        thread = threading.Thread(target=worker.run)
        thread.start()

        assert channel.send("Luke")
        token.cancel()

        assert worker.done.wait(timeout=2.0)
        thread.join(timeout=2.0)
        assert output.getvalue() == "Luke\n"
        assert worker.buffer.empty()

    def test_cancel_before_run_sets_done(self, worker, token):
        token.cancel()
        worker.run()
        assert worker.done.is_set()
        assert worker.stats.flushes == 0

    def test_timer_flushes_partial_buffer(self, fast_timer_config, channel, token, sink, output):
        """An item sitting in a non-full buffer is written when the timer fires."""
        worker = BufferWorker(channel, token, sink=sink, config=fast_timer_config)
        thread = threading.Thread(target=worker.run)
        thread.start()

        try:
            assert channel.send("Luke")
            assert wait_for(lambda: output.getvalue() == "Luke\n")
            assert not token.is_cancelled
        finally:
            token.cancel()
            thread.join(timeout=2.0)

        assert worker.stats.flushes == 1

    def test_timer_keeps_firing(self, fast_timer_config, channel, token, sink, output):
        """The timer restarts after each flush."""
        worker = BufferWorker(channel, token, sink=sink, config=fast_timer_config)
        thread = threading.Thread(target=worker.run)
        thread.start()

        try:
            channel.send("Luke")
            assert wait_for(lambda: worker.stats.flushes == 1)
            channel.send("Leia")
            assert wait_for(lambda: worker.stats.flushes == 2)
        finally:
            token.cancel()
            thread.join(timeout=2.0)

        assert output.getvalue() == "Luke\nLeia\n"

    def test_order_preserved_through_loop(self, worker, channel, token, output):
        names = [f"name-{i}" for i in range(11)]
        thread = threading.Thread(target=worker.run)
        thread.start()

        for name in names:
            assert channel.send(name)
        token.cancel()
        thread.join(timeout=2.0)

        assert output.getvalue().splitlines() == names
        assert worker.stats.items_received == 11
        assert worker.stats.items_flushed == 11
