"""카운트다운 타이머 테스트"""
import asyncio
from unittest.mock import MagicMock

import pytest

from app.exam_client.timer import CountdownTimer


def _timer(remaining: int, **kwargs):
    on_autosave = MagicMock()
    on_expire = MagicMock()
    timer = CountdownTimer(remaining, on_autosave=on_autosave, on_expire=on_expire, **kwargs)
    return timer, on_autosave, on_expire


def test_tick_decrements_fixed_amount():
    timer, _, _ = _timer(60_000)

    assert timer.tick() == 59_000
    assert timer.tick() == 58_000


def test_autosave_boundaries_over_full_countdown():
    """30초에서 시작하면 20000, 10000, 0에서 자동 저장"""
    timer, on_autosave, on_expire = _timer(30_000, autosave_interval_ms=10_000)

    for _ in range(30):
        timer.tick()

    assert [c.args[0] for c in on_autosave.call_args_list] == [20_000, 10_000, 0]
    on_expire.assert_called_once_with()


def test_expire_fires_once():
    timer, _, on_expire = _timer(2_000)

    for _ in range(5):
        timer.tick()

    assert timer.expired is True
    assert timer.time_remaining == 0
    on_expire.assert_called_once()


def test_expire_clamps_negative_remaining():
    """1000ms 단위가 아닌 남은 시간은 0으로 맞추고 자동 저장 없이 만료"""
    timer, on_autosave, on_expire = _timer(500)

    assert timer.tick() == 0
    on_autosave.assert_not_called()
    on_expire.assert_called_once()


def test_autosave_failure_does_not_stop_timer():
    timer, on_autosave, _ = _timer(21_000, autosave_interval_ms=10_000)
    on_autosave.side_effect = RuntimeError("save failed")

    timer.tick()
    for _ in range(10):
        timer.tick()

    assert timer.time_remaining == 10_000
    assert on_autosave.call_count == 2
    assert timer.expired is False


def test_on_tick_receives_remaining():
    on_tick = MagicMock()
    timer = CountdownTimer(3_000, on_autosave=MagicMock(), on_expire=MagicMock(), on_tick=on_tick)

    timer.tick()
    timer.tick()

    assert [c.args[0] for c in on_tick.call_args_list] == [2_000, 1_000]


@pytest.mark.asyncio
async def test_driver_task_runs_until_expiry():
    expired = asyncio.Event()
    timer = CountdownTimer(
        3_000,
        on_autosave=MagicMock(),
        on_expire=expired.set,
        tick_interval=0.001,
    )

    timer.start()
    assert timer.running is True
    await asyncio.wait_for(expired.wait(), timeout=1)

    assert timer.time_remaining == 0
    assert timer.running is False


@pytest.mark.asyncio
async def test_stop_cancels_driver_task():
    timer, _, on_expire = _timer(60_000, tick_interval=10)

    timer.start()
    timer.stop()
    await asyncio.sleep(0)

    assert timer.running is False
    assert timer.time_remaining == 60_000
    on_expire.assert_not_called()
