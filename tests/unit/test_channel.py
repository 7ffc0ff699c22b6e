import threading
import time

import pytest

from tests.helpers.crawler_imports import ChannelClosedError, CrawlResult, ResultChannel


def test_drain_returns_results_in_send_order():
    channel = ResultChannel(capacity=5)
    for name in ("a", "b", "c"):
        channel.send(CrawlResult(f"http://x/{name}", name))

    assert [result.url for result in channel.drain()] == ["http://x/a", "http://x/b", "http://x/c"]
    assert channel.drain() == []
    assert channel.try_receive() is None


def test_send_blocks_when_full_until_consumer_drains():
    channel = ResultChannel(capacity=2)
    channel.send(CrawlResult("http://x/1", "one"))
    channel.send(CrawlResult("http://x/2", "two"))

    sender = threading.Thread(target=channel.send, args=(CrawlResult("http://x/3", "three"),))
    sender.start()
    time.sleep(0.3)
    assert sender.is_alive()
    assert len(channel) == 2

    assert channel.try_receive().url == "http://x/1"
    sender.join(timeout=2)

    assert not sender.is_alive()
    assert [result.url for result in channel.drain()] == ["http://x/2", "http://x/3"]


def test_closing_releases_a_blocked_sender():
    channel = ResultChannel(capacity=1)
    channel.send(CrawlResult("http://x/1", "one"))
    errors = []

    def send():
        try:
            channel.send(CrawlResult("http://x/2", "two"))
        except ChannelClosedError as exc:
            errors.append(exc)

    sender = threading.Thread(target=send)
    sender.start()
    time.sleep(0.15)
    channel.close()
    sender.join(timeout=2)

    assert not sender.is_alive()
    assert len(errors) == 1


def test_send_on_closed_channel_raises():
    channel = ResultChannel(capacity=1)
    channel.close()

    assert channel.closed
    with pytest.raises(ChannelClosedError):
        channel.send(CrawlResult("http://x/a", "a"))


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        ResultChannel(capacity=0)
