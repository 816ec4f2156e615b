import pytest

from terminal_snake.timing import FrameLimiter, StepGate


def test_step_gate_waits_for_interval():
    gate = StepGate(0.125, now=10.0)
    assert gate.poll(10.0625) is None
    assert gate.poll(10.125) == 0.125
    # restarted from the moment the step ran
    assert gate.poll(10.1875) is None
    assert gate.poll(10.375) == 0.25


def test_step_gate_steps_when_elapsed_equals_interval():
    gate = StepGate(0.5, now=0.0)
    assert gate.poll(0.5) == 0.5
    assert gate.last == 0.5


def test_step_gate_runs_at_most_one_step_per_poll():
    gate = StepGate(0.1, now=0.0)
    assert gate.poll(5.0) == pytest.approx(5.0)
    assert gate.poll(5.0) is None


def test_step_gate_reset_and_interval_change():
    gate = StepGate(0.1, now=0.0)
    gate.reset(3.0)
    assert gate.poll(3.05) is None
    gate.interval = 0.01
    assert gate.poll(3.05) is not None


class Recorder:
    def __init__(self, now):
        self.now = now
        self.slept = []

    def clock(self):
        return self.now

    def sleep(self, seconds):
        self.slept.append(seconds)


def test_frame_limiter_sleeps_remaining_time():
    rec = Recorder(now=1.004)
    limiter = FrameLimiter(0.01, clock=rec.clock, sleep=rec.sleep)
    assert limiter.wait(1.0) == pytest.approx(0.006)
    assert rec.slept == [pytest.approx(0.006)]


def test_frame_limiter_does_not_sleep_on_slow_frames():
    rec = Recorder(now=1.5)
    limiter = FrameLimiter(0.01, clock=rec.clock, sleep=rec.sleep)
    assert limiter.wait(1.0) == 0.0
    assert rec.slept == []
