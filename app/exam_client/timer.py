"""시험 카운트다운 타이머"""
import asyncio
import logging
from collections.abc import Callable

from app.core.config import settings

logger = logging.getLogger(__name__)

TICK_MS = 1000


class CountdownTimer:
    """남은 시간(ms) 카운트다운

    tick() 한 번에 정확히 1000ms를 차감한다. 차감 결과가 autosave 간격의
    배수이면 on_autosave(remaining)를 호출하고, 0 이하가 되면 0으로 맞춘 뒤
    on_expire()를 한 번만 호출한다. start()는 tick_interval초마다 tick()을
    부르는 asyncio 태스크를 띄운다.
    """

    def __init__(
        self,
        time_remaining_ms: int,
        on_autosave: Callable[[int], None],
        on_expire: Callable[[], None],
        on_tick: Callable[[int], None] | None = None,
        tick_interval: float | None = None,
        autosave_interval_ms: int | None = None,
    ):
        self.time_remaining = max(time_remaining_ms, 0)
        self._on_autosave = on_autosave
        self._on_expire = on_expire
        self._on_tick = on_tick
        self.tick_interval = settings.tick_interval_seconds if tick_interval is None else tick_interval
        self.autosave_interval_ms = autosave_interval_ms or settings.autosave_interval_ms
        self._expired = False
        self._task: asyncio.Task | None = None

    @property
    def expired(self) -> bool:
        return self._expired

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick(self) -> int:
        if self._expired:
            return self.time_remaining

        remaining = self.time_remaining - TICK_MS
        self.time_remaining = max(remaining, 0)
        self._notify(self._on_tick, self.time_remaining)
        if remaining >= 0 and remaining % self.autosave_interval_ms == 0:
            self._notify(self._on_autosave, remaining)

        if remaining <= 0:
            self._expired = True
            self.stop()
            logger.info("시험 시간 만료")
            self._on_expire()
        return self.time_remaining

    def _notify(self, callback: Callable[[int], None] | None, remaining: int) -> None:
        if callback is None:
            return
        try:
            callback(remaining)
        except Exception as e:
            logger.warning(f"타이머 콜백 실패: remaining={remaining}, error={e}")

    def start(self) -> None:
        if self.running or self._expired:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    def stop(self) -> None:
        task, self._task = self._task, None
        if task is not None and task is not asyncio.current_task() and not task.done():
            task.cancel()

    async def _run(self) -> None:
        while not self._expired and self._task is asyncio.current_task():
            await asyncio.sleep(self.tick_interval)
            self.tick()
