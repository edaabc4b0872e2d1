import threading
import time

import pytest

from rcwssim.messages import AxisPairFeedback, FeedbackMessage, ServoFeedback
from rcwssim.net import NetReceiver, NetSender, RunState


def _poll(receiver, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        got = receiver.receive_pending()
        if got:
            return got
        time.sleep(0.01)
    return []


@pytest.fixture
def receiver():
    rx = NetReceiver("127.0.0.1", 0)
    rx.start()
    yield rx
    rx.close()


def _sample_message():
    return FeedbackMessage(
        ofd=AxisPairFeedback(ServoFeedback(1234, True), ServoFeedback(0x8010, is_zero=True)),
        gun=AxisPairFeedback(),
    )


def test_sender_defaults():
    with NetSender() as sender:
        assert (sender.address, sender.port) == ("192.168.88.128", 60000)


def test_receiver_defaults_and_initial_state():
    rx = NetReceiver()
    assert (rx.host, rx.port) == ("0.0.0.0", 60001)
    assert rx.state is RunState.PAUSED


def test_pause_resume_transitions():
    rx = NetReceiver("127.0.0.1", 0)
    rx.request_pause()
    assert rx.state is RunState.PAUSED
    rx.request_resume()
    assert rx.state is RunState.RUNNING
    rx.request_pause()
    assert rx.state is RunState.PAUSED


def test_close_stops_for_good():
    rx = NetReceiver("127.0.0.1", 0)
    rx.close()
    rx.request_resume()
    assert rx.state is RunState.STOPPED
    with pytest.raises(RuntimeError):
        rx.start()


def test_receive_before_start_raises():
    rx = NetReceiver("127.0.0.1", 0)
    with pytest.raises(RuntimeError):
        rx.receive_pending()


def test_parse_returns_text_and_calls_callback():
    seen = []
    rx = NetReceiver("127.0.0.1", 0, on_data=seen.append)
    assert rx.parse(b"hello") == "hello"
    assert seen == [b"hello"]


def test_parse_replaces_invalid_utf8():
    rx = NetReceiver("127.0.0.1", 0)
    assert rx.parse(b"\xff") == "\ufffd"


def test_send_returns_message_size(receiver):
    with NetSender("127.0.0.1", receiver.start()) as sender:
        assert sender.send(_sample_message()) == FeedbackMessage.SIZE


def test_send_after_close_raises():
    sender = NetSender("127.0.0.1", 9)
    sender.close()
    with pytest.raises(RuntimeError):
        sender.send(FeedbackMessage())


def test_round_trip_over_udp(receiver):
    seen = []
    receiver.on_data = seen.append
    receiver.request_resume()
    message = _sample_message()
    with NetSender("127.0.0.1", receiver.start()) as sender:
        sender.send(message)
    got = _poll(receiver)
    assert got == [message.pack()]
    assert seen == got
    assert FeedbackMessage.unpack(got[0]) == message


def test_paused_receiver_waits_until_resumed(receiver):
    message = _sample_message()
    with NetSender("127.0.0.1", receiver.start()) as sender:
        sender.send(message)
    time.sleep(0.05)
    results = []
    worker = threading.Thread(target=lambda: results.append(receiver.receive_pending()))
    worker.start()
    time.sleep(0.1)
    assert worker.is_alive()
    receiver.request_resume()
    worker.join(timeout=2)
    assert not worker.is_alive()
    assert results == [[message.pack()]]


def test_close_wakes_paused_reader(receiver):
    with NetSender("127.0.0.1", receiver.start()) as sender:
        sender.send(_sample_message())
    time.sleep(0.05)
    results = []
    worker = threading.Thread(target=lambda: results.append(receiver.receive_pending()))
    worker.start()
    time.sleep(0.05)
    receiver.close()
    worker.join(timeout=2)
    assert not worker.is_alive()
    assert results == [[]]
    assert receiver.state is RunState.STOPPED