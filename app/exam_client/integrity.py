"""부정행위 감지 (시험 화면 이벤트 모니터링)"""
import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

Listener = Callable[["ClientEvent"], None]

FORBIDDEN_KEYS = frozenset({"F12", "F5", "F11"})


@dataclass(frozen=True)
class KeyCombo:
    key: str
    ctrl: bool = False
    shift: bool = False
    alt: bool = False
    cmd: bool = False


# ctrl 조합은 Cmd(meta)로 눌러도 같은 것으로 본다
FORBIDDEN_COMBOS: tuple[KeyCombo, ...] = (
    KeyCombo("r", ctrl=True),
    KeyCombo("u", ctrl=True),
    KeyCombo("i", ctrl=True, shift=True),
    KeyCombo("j", ctrl=True, shift=True),
    KeyCombo("c", ctrl=True, shift=True),
    KeyCombo("tab", alt=True),
    KeyCombo("tab", ctrl=True),
    KeyCombo("tab", ctrl=True, shift=True),
    KeyCombo("tab", cmd=True),
)


@dataclass
class ClientEvent:
    """화면에서 발생한 이벤트"""

    type: str
    key: str | None = None
    ctrl: bool = False
    shift: bool = False
    alt: bool = False
    meta: bool = False
    hidden: bool = False
    default_prevented: bool = False
    return_value: str | None = None

    def prevent_default(self) -> None:
        self.default_prevented = True


class EventTarget:
    """이벤트 리스너 등록/해제/전달"""

    def __init__(self):
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def add_listener(self, event_type: str, listener: Listener) -> None:
        self._listeners[event_type].append(listener)

    def remove_listener(self, event_type: str, listener: Listener) -> None:
        listeners = self._listeners.get(event_type)
        if listeners and listener in listeners:
            listeners.remove(listener)

    def dispatch(self, event: ClientEvent) -> ClientEvent:
        for listener in list(self._listeners.get(event.type, ())):
            listener(event)
        return event

    def listener_count(self, event_type: str | None = None) -> int:
        if event_type is not None:
            return len(self._listeners.get(event_type, ()))
        return sum(len(listeners) for listeners in self._listeners.values())


def is_forbidden_key(event: ClientEvent) -> bool:
    if event.key is None:
        return False
    if event.key in FORBIDDEN_KEYS:
        return True

    key = event.key.lower()
    for combo in FORBIDDEN_COMBOS:
        if key != combo.key:
            continue
        if combo.ctrl and not (event.ctrl or event.meta):
            continue
        if combo.cmd and not event.meta:
            continue
        if combo.shift and not event.shift:
            continue
        if combo.alt and not event.alt:
            continue
        return True
    return False


class IntegrityMonitor:
    """시험 화면마다 하나씩 생성하는 부정행위 감지기

    감지된 이벤트는 기본 동작을 막고 on_violation(reason)을 호출할 뿐,
    시험 상태는 바꾸지 않는다. stop()/dispose() 후에는 등록했던 리스너가 모두 제거된다.
    """

    BEFOREUNLOAD_MESSAGE = "시험을 종료하고 나가시겠습니까?"

    def __init__(self, target: EventTarget, on_violation: Callable[[str], None]):
        self.target = target
        self._on_violation = on_violation
        self._registered: list[tuple[str, Listener]] = []
        self._disposed = False

    @property
    def active(self) -> bool:
        return bool(self._registered)

    def start(self) -> None:
        if self._disposed:
            raise RuntimeError("dispose된 IntegrityMonitor는 다시 시작할 수 없습니다")
        if self.active:
            return
        self._register("visibilitychange", self._handle_visibility_change)
        self._register("blur", self._handle_blur)
        self._register("contextmenu", self._handle_context_menu)
        self._register("keydown", self._handle_keydown)
        self._register("beforeunload", self._handle_before_unload)

    def stop(self) -> None:
        for event_type, listener in self._registered:
            self.target.remove_listener(event_type, listener)
        self._registered.clear()

    def dispose(self) -> None:
        self.stop()
        self._disposed = True

    def __enter__(self) -> "IntegrityMonitor":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.dispose()

    def _register(self, event_type: str, listener: Listener) -> None:
        self.target.add_listener(event_type, listener)
        self._registered.append((event_type, listener))

    def _violation(self, reason: str) -> None:
        logger.warning(f"부정행위 감지: {reason}")
        self._on_violation(reason)

    def _handle_visibility_change(self, event: ClientEvent) -> None:
        if event.hidden:
            self._violation("Tab switching detected")

    def _handle_blur(self, event: ClientEvent) -> None:
        self._violation("Window lost focus")

    def _handle_context_menu(self, event: ClientEvent) -> None:
        event.prevent_default()
        self._violation("Context menu blocked")

    def _handle_keydown(self, event: ClientEvent) -> None:
        if event.key in FORBIDDEN_KEYS:
            event.prevent_default()
            self._violation(f"Forbidden key pressed: {event.key}")
        elif is_forbidden_key(event):
            event.prevent_default()
            self._violation("Forbidden key combination detected")

    def _handle_before_unload(self, event: ClientEvent) -> None:
        event.prevent_default()
        event.return_value = self.BEFOREUNLOAD_MESSAGE
