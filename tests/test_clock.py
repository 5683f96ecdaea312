# tests/test_clock.py
import pytest

from lossofcharge import TickClock


class FakeTime:
    """Manually advanced time source."""
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now


def test_deltas_follow_time_source():
    fake = FakeTime()
    clock = TickClock(time_source=fake)
    fake.now += 0.016
    assert clock.tick() == pytest.approx(0.016)
    fake.now += 0.5
    assert clock.tick() == pytest.approx(0.5)
    assert clock.tick() == 0.0

def test_backwards_source_yields_zero():
    fake = FakeTime()
    clock = TickClock(time_source=fake)
    fake.now -= 1.0
    assert clock.tick() == 0.0

def test_uncapped_by_default():
    fake = FakeTime()
    clock = TickClock(time_source=fake)
    fake.now += 30.0
    assert clock.max_dt is None
    assert clock.tick() == pytest.approx(30.0)

def test_cap_limits_large_jumps():
    fake = FakeTime()
    clock = TickClock(time_source=fake, max_dt=0.25)
    fake.now += 30.0
    assert clock.tick() == 0.25
    fake.now += 0.1
    assert clock.tick() == pytest.approx(0.1)

def test_restart_rebases():
    fake = FakeTime()
    clock = TickClock(time_source=fake)
    fake.now += 10.0
    clock.restart()
    fake.now += 0.2
    assert clock.tick() == pytest.approx(0.2)

@pytest.mark.parametrize("max_dt", [0.0, -1.0])
def test_invalid_cap_rejected(max_dt):
    with pytest.raises(ValueError):
        TickClock(max_dt=max_dt)

def test_drives_a_session(session):
    fake = FakeTime()
    clock = TickClock(time_source=fake)
    session.toggle_switch()
    for _ in range(10):
        fake.now += 0.05
        session.tick(clock.tick())
    assert session.state.time == pytest.approx(0.5)
    assert session.state.voltage == 10.0
