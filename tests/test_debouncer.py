import pytest
from webcam.debouncer import OrientationDebouncer
from webcam.gesture_extractor import Orientation

PALM, BACK = Orientation.PALM, Orientation.BACK

@pytest.fixture
def debouncer():
    return OrientationDebouncer(dwell_ms=1200, start_time=0.0)

def test_no_event_without_change(debouncer):
    assert not any(debouncer.update(PALM, t) for t in (2.0, 3.0, 4.0))

def test_change_after_dwell_fires(debouncer):
    assert debouncer.update(BACK, 1.5) is True
    assert debouncer.last_switch_time == 1.5

def test_change_inside_startup_dwell_is_ignored(debouncer):
    assert debouncer.update(BACK, 0.5) is False
    # The flip was consumed, not queued: holding BACK later does nothing
    assert debouncer.update(BACK, 5.0) is False
    assert debouncer.last_orientation == BACK

def test_flicker_never_fires_twice_within_dwell(debouncer):
    events = []
    t = 0.0
    orientation = PALM
    while t < 20.0:
        orientation = BACK if orientation == PALM else PALM
        if debouncer.update(orientation, t):
            events.append(t)
        t += 1 / 60
    assert len(events) > 1
    for earlier, later in zip(events, events[1:]):
        assert later - earlier > 1.2

def test_dwell_boundary_is_exclusive(debouncer):
    assert debouncer.update(BACK, 1.2) is False
    assert debouncer.update(PALM, 1.2001) is True

def test_uses_clock_when_no_time_given():
    now = [10.0]
    debouncer = OrientationDebouncer(dwell_ms=1200, clock=lambda: now[0])
    now[0] = 10.5
    assert debouncer.update(BACK) is False
    now[0] = 12.0
    assert debouncer.update(PALM) is True
