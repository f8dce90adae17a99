import pytest

from klondike.clock import GameClock, format_elapsed


@pytest.mark.parametrize(
    "seconds, text",
    [(0, "00:00"), (9, "00:09"), (61, "01:01"), (599, "09:59"), (3600, "60:00"), (-4, "00:00")],
)
def test_format_elapsed(seconds, text):
    assert format_elapsed(seconds) == text


def test_clock_lifecycle():
    now = [10.0]
    clock = GameClock(now=lambda: now[0])
    assert clock.elapsed == 0
    assert not clock.started

    clock.start()
    now[0] += 3.9
    clock.start()  # no restart
    assert clock.elapsed == 3
    assert clock.running

    clock.stop()
    now[0] += 100
    assert clock.elapsed == 3
    assert not clock.running
    assert clock.started

    clock.reset()
    assert clock.elapsed == 0
    assert not clock.started
