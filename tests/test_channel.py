import pytest

from linedispatch.channel import Channel


def make_channel(**kwargs):
    kwargs.setdefault("timeout", 5)
    return Channel(3, 64, **kwargs)


def test_send_then_receive_round_trip():
    channel = make_channel()
    channel.send(1, "Call me Ishmael.\n")
    assert channel.receive(1) == "Call me Ishmael.\n"


def test_send_truncates_to_buffer():
    channel = Channel(2, 8, timeout=5)
    channel.send(0, "abcdefghij")
    assert channel.receive(0) == "abcdefg"


def test_termination_is_reported_once():
    channel = make_channel()
    channel.request_termination(2)
    assert channel.receive(2) is None
    channel.send(2, "again")
    assert channel.receive(2) == "again"


def test_receive_times_out_without_wakeup():
    channel = make_channel(timeout=0.05)
    with pytest.raises(TimeoutError):
        channel.receive(0)


def test_acknowledgements_are_counted():
    channel = Channel(1, 16, timeout=0.05)
    channel.acknowledge()
    channel.acknowledge()
    channel.wait_acknowledgement()
    channel.wait_acknowledgement()
    with pytest.raises(TimeoutError):
        channel.wait_acknowledgement()


def test_advance_loop_counts_up():
    channel = make_channel()
    assert channel.loop == 0
    assert channel.advance_loop() == 1
    assert channel.advance_loop() == 2
    assert channel.loop == 2


@pytest.mark.parametrize("index", [-1, 3])
def test_bad_index_raises(index):
    channel = make_channel()
    with pytest.raises(IndexError):
        channel.send(index, "x")


@pytest.mark.parametrize("count,size", [(0, 16), (1, 1)])
def test_invalid_sizes_raise(count, size):
    with pytest.raises(ValueError):
        Channel(count, size)