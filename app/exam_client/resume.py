"""재접속용 현재 학생 ID 저장소"""
import json
import logging
from pathlib import Path
from typing import Protocol

from app.core.config import settings

logger = logging.getLogger(__name__)


class ResumeStore(Protocol):
    def get(self) -> str | None: ...

    def set(self, student_id: str) -> None: ...

    def clear(self) -> None: ...


class ResumeMarker:
    """JSON 파일에 현재 진행 중인 학생 ID를 기록"""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path or settings.resume_marker_path)

    def get(self) -> str | None:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"재접속 정보 읽기 실패: path={self.path}, error={e}")
            return None
        student_id = data.get("current_student_id") if isinstance(data, dict) else None
        return student_id or None

    def set(self, student_id: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"current_student_id": student_id}), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class InMemoryResumeMarker:
    def __init__(self, student_id: str | None = None):
        self._student_id = student_id

    def get(self) -> str | None:
        return self._student_id

    def set(self, student_id: str) -> None:
        self._student_id = student_id

    def clear(self) -> None:
        self._student_id = None
