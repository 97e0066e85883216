"""사용자 알림 관리"""
import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from enum import Enum

from app.core.config import settings

logger = logging.getLogger(__name__)

DEFAULT_DURATION_SECONDS = 5.0


class NotificationType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class Notification:
    type: NotificationType
    title: str
    message: str
    # None이면 자동으로 사라지지 않음 (사용자가 닫아야 하는 알림)
    duration: float | None = DEFAULT_DURATION_SECONDS
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:9])


@dataclass
class Banner:
    message: str
    duration: float


class NotificationCenter:
    """알림 목록과 경고 배너 슬롯

    실행 중인 이벤트 루프가 있으면 duration이 지난 알림을 자동으로 제거한다.
    배너는 한 번에 하나만 표시되며, 표시 중에 들어온 배너 요청은 무시된다.
    """

    def __init__(self):
        self._notifications: list[Notification] = []
        self._handles: dict[str, asyncio.TimerHandle] = {}
        self._banner: Banner | None = None
        self._banner_handle: asyncio.TimerHandle | None = None

    @property
    def notifications(self) -> list[Notification]:
        return list(self._notifications)

    @property
    def banner(self) -> Banner | None:
        return self._banner

    def _schedule(self, delay: float, callback, *args) -> asyncio.TimerHandle | None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return None
        return loop.call_later(delay, callback, *args)

    def add(self, notification: Notification) -> str:
        self._notifications.append(notification)
        if notification.duration is not None:
            handle = self._schedule(notification.duration, self.remove, notification.id)
            if handle is not None:
                self._handles[notification.id] = handle
        return notification.id

    def remove(self, notification_id: str) -> None:
        handle = self._handles.pop(notification_id, None)
        if handle is not None:
            handle.cancel()
        self._notifications = [n for n in self._notifications if n.id != notification_id]

    def clear(self) -> None:
        for handle in self._handles.values():
            handle.cancel()
        self._handles.clear()
        self._notifications.clear()
        self.hide_banner()

    def show_success(self, title: str, message: str, duration: float | None = DEFAULT_DURATION_SECONDS) -> str:
        return self.add(Notification(NotificationType.SUCCESS, title, message, duration))

    def show_error(self, title: str, message: str, duration: float | None = DEFAULT_DURATION_SECONDS) -> str:
        logger.info(f"오류 알림: {title} - {message}")
        return self.add(Notification(NotificationType.ERROR, title, message, duration))

    def show_warning(self, title: str, message: str, duration: float | None = DEFAULT_DURATION_SECONDS) -> str:
        return self.add(Notification(NotificationType.WARNING, title, message, duration))

    def show_info(self, title: str, message: str, duration: float | None = DEFAULT_DURATION_SECONDS) -> str:
        return self.add(Notification(NotificationType.INFO, title, message, duration))

    def show_banner(self, message: str, duration: float | None = None) -> bool:
        """경고 배너 표시, 이미 표시 중이면 False"""
        if self._banner is not None:
            return False
        duration = settings.warning_banner_seconds if duration is None else duration
        self._banner = Banner(message=message, duration=duration)
        self._banner_handle = self._schedule(duration, self.hide_banner)
        return True

    def hide_banner(self) -> None:
        if self._banner_handle is not None:
            self._banner_handle.cancel()
            self._banner_handle = None
        self._banner = None
