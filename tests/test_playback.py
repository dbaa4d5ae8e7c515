import pytest

from algorithms.step import StepBuilder, StepType, StructureKind, snapshot
from engine.stepper import (
    BASE_TICK_MS,
    MAX_SPEED,
    MIN_SPEED,
    PlaybackStatus,
    PlaybackStore,
    SPEED_PRESETS,
)


def _steps(n):
    sb = StepBuilder()
    state = snapshot(StructureKind.ARRAY, [])
    return [sb.build(StepType.HIGHLIGHT, f"s{i}", 0, [], state, state) for i in range(n)]


@pytest.fixture
def store():
    s = PlaybackStore()
    s.set_steps(_steps(4))
    return s


class TestLoading:

    def test_set_steps_resets_position(self, store):
        store.set_current_step_index(2)
        store.set_steps(_steps(3))
        assert store.current_step_index == 0
        assert store.status == PlaybackStatus.IDLE
        assert store.get_current_step().description == "s0"

    def test_empty_store(self):
        s = PlaybackStore()
        assert s.get_current_step() is None
        s.play()
        assert s.status == PlaybackStatus.COMPLETED
        s.set_current_step_index(5)
        assert s.status == PlaybackStatus.IDLE
        assert s.current_step_index == 0


class TestNavigation:

    def test_step_forward_until_end(self, store):
        assert store.step_forward()
        assert store.status == PlaybackStatus.PAUSED
        store.step_forward()
        store.step_forward()
        assert store.current_step_index == 3
        assert not store.step_forward()
        assert store.status == PlaybackStatus.COMPLETED
        assert store.current_step_index == 3

    def test_step_backward(self, store):
        assert not store.step_backward()
        store.set_current_step_index(2)
        assert store.step_backward()
        assert store.current_step_index == 1
        assert store.status == PlaybackStatus.PAUSED

    def test_jump_is_clamped(self, store):
        store.set_current_step_index(99)
        assert store.current_step_index == 3
        assert store.is_completed

        store.set_current_step_index(-5)
        assert store.current_step_index == 0
        assert store.status == PlaybackStatus.PAUSED

    def test_reset(self, store):
        store.set_current_step_index(2)
        store.reset()
        assert store.current_step_index == 0
        assert store.status == PlaybackStatus.IDLE


class TestPlay:

    def test_play_pause_toggle(self, store):
        store.play()
        assert store.is_playing
        store.toggle_play()
        assert store.status == PlaybackStatus.PAUSED
        store.toggle_play()
        assert store.is_playing

    def test_play_at_end_completes(self, store):
        store.set_current_step_index(3)
        store.play()
        assert store.status == PlaybackStatus.COMPLETED

    def test_tick_waits_for_interval(self, store):
        store.play()
        start = store._last_tick
        assert not store.tick(start + 0.5)
        assert store.tick(start + 1.5)
        assert store.current_step_index == 1
        assert store.is_playing

    def test_tick_completes_on_last_step(self, store):
        store.set_speed(MAX_SPEED)
        store.play()
        now = store._last_tick
        for _ in range(3):
            now += 0.3
            store.tick(now)
        assert store.current_step_index == 3
        assert store.status == PlaybackStatus.COMPLETED
        assert not store.tick(now + 10)

    def test_tick_ignored_when_paused(self, store):
        assert not store.tick(1e9)
        assert store.current_step_index == 0


class TestSpeed:

    def test_speed_is_clamped(self, store):
        store.set_speed(100)
        assert store.speed == MAX_SPEED
        store.set_speed(0)
        assert store.speed == MIN_SPEED

    def test_interval_scales_with_speed(self, store):
        store.set_speed(2.0)
        assert store.interval_ms == BASE_TICK_MS / 2

    def test_presets(self, store):
        store.set_speed_preset("slow")
        assert store.speed == SPEED_PRESETS["slow"]
        store.set_speed_preset("unknown")
        assert store.speed == 1.0


def test_subscribers_see_index_changes(store):
    seen = []
    unsubscribe = store.subscribe(lambda step: seen.append(step.description if step else None))

    store.step_forward()
    store.set_current_step_index(1)
    store.step_forward()
    unsubscribe()
    store.step_forward()

    assert seen == ["s1", "s2"]


def test_on_step_callback_and_to_dict():
    seen = []
    s = PlaybackStore(on_step=lambda step: seen.append(step))
    s.set_steps(_steps(2))
    assert len(seen) == 1

    out = s.to_dict()
    assert out["current_step_index"] == 0
    assert out["total_steps"] == 2
    assert out["status"] == "idle"
    assert out["speed"] == 1.0
    assert out["step"]["id"] == "step-0"
