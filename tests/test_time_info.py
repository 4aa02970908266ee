import pytest

from solitable.time_info import Clock, TimeInfo


class FakeTime:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


def test_time_info_starts_at_zero():
    info = TimeInfo()
    assert (info.current_time, info.ui_time, info.real_world_time) == (0.0, 0.0, 0.0)


def test_get_time_initialises_lazily():
    source = FakeTime(100.0)
    clock = Clock(time_source=source)
    assert clock.get_time() == 0.0
    source.now = 101.5
    assert clock.get_time() == pytest.approx(1.5)


def test_init_resets_start():
    source = FakeTime(5.0)
    clock = Clock(time_source=source)
    clock.init()
    source.now = 7.0
    clock.init()
    assert clock.get_time() == 0.0


def test_update_clamps_game_delta_only():
    source = FakeTime(0.0)
    clock = Clock(time_source=source)
    clock.init()
    source.now = 0.5
    info = clock.update(dt_max=0.1)
    assert info.current_dt == pytest.approx(0.1)
    assert info.real_world_dt == pytest.approx(0.5)
    assert info.ui_dt == pytest.approx(0.5)
    assert clock.last_time == pytest.approx(0.5)


def test_update_accumulates():
    source = FakeTime(0.0)
    clock = Clock(time_source=source)
    clock.init()
    for step in (0.01, 0.02, 0.03):
        source.now = step
        clock.update(dt_max=1.0)
    assert clock.info.current_time == pytest.approx(0.03)
    assert clock.info.ui_time == pytest.approx(clock.info.real_world_time)


def test_time_rate_dilates_game_time_not_ui():
    source = FakeTime(0.0)
    clock = Clock(time_source=source, time_rate=2.0)
    clock.init()
    source.now = 0.25
    info = clock.update(dt_max=10.0)
    assert info.ui_dt == pytest.approx(0.25)
    assert info.real_world_dt == pytest.approx(info.ui_dt * 2.0)
    assert info.current_dt == pytest.approx(info.real_world_dt)


def test_default_source_is_monotonic():
    clock = Clock()
    first = clock.get_time()
    second = clock.get_time()
    assert second >= first >= 0.0