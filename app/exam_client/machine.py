"""시험 세션 상태 머신

AWAITING_AUTH → ACTIVE → {SUBMITTED, TIMED_OUT}

모든 작업은 하나의 이벤트 루프에서 실행된다. 답안/자동 저장은 fire-and-forget
태스크로 pending 집합에 보관되고, 종료 처리 전에 모두 끝날 때까지 기다린다.
종료 처리는 state == ACTIVE와 _completing 플래그로 한 번만 진입한다.
"""
import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from app.core.enums import Difficulty, ExamType, StudentStatus
from app.data.exam_categories import get_exam_category, get_time_limit_ms
from app.exam_client.errors import (
    ExamValidationError,
    GatewayError,
    InvalidStateError,
    InvalidTokenError,
    SubmissionError,
)
from app.exam_client.gateway import PersistenceGateway
from app.exam_client.integrity import EventTarget, IntegrityMonitor
from app.exam_client.messages import get_error_message
from app.exam_client.notifications import NotificationCenter
from app.exam_client.resume import InMemoryResumeMarker, ResumeStore
from app.exam_client.timer import CountdownTimer
from app.schemas.exam_result import ExamResultResponse, ScoreResult
from app.schemas.exam_session import ExamSessionSnapshot
from app.schemas.question import QuestionResponse
from app.schemas.student import StudentCreateRequest, StudentResponse
from app.schemas.token import normalize_token
from app.services.scoring import build_exam_result, calculate_time_spent, score_exam

logger = logging.getLogger(__name__)

LOW_TIME_THRESHOLD_MS = 5 * 60 * 1000
VIOLATION_BANNER_MESSAGE = "부정행위가 감지되었습니다! 시험 화면으로 돌아가주세요."


class ExamState(str, Enum):
    AWAITING_AUTH = "awaiting-auth"
    ACTIVE = "active"
    SUBMITTED = "submitted"
    TIMED_OUT = "timed-out"


TERMINAL_STATES = frozenset({ExamState.SUBMITTED, ExamState.TIMED_OUT})


@dataclass(frozen=True)
class ExamOutcome:
    """종료된 시험의 최종 결과"""
    state: ExamState
    score: ScoreResult
    result: ExamResultResponse
    time_spent: int


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExamSessionMachine:
    """학생 한 명의 시험 진행을 관리"""

    def __init__(
        self,
        gateway: PersistenceGateway,
        notifications: NotificationCenter | None = None,
        resume_marker: ResumeStore | None = None,
        event_target: EventTarget | None = None,
        clock: Callable[[], datetime] = _utcnow,
        tick_interval: float | None = None,
        autosave_interval_ms: int | None = None,
    ):
        self.gateway = gateway
        self.notifications = notifications or NotificationCenter()
        self.resume_marker = resume_marker or InMemoryResumeMarker()
        self.event_target = event_target or EventTarget()
        self._clock = clock
        self._tick_interval = tick_interval
        self._autosave_interval_ms = autosave_interval_ms

        self._state = ExamState.AWAITING_AUTH
        self._student: StudentResponse | None = None
        self._exam_type: ExamType | None = None
        self._exam_category: str | None = None
        self._difficulty: Difficulty | None = None
        self._start_time: datetime | None = None
        self._time_limit = 0
        self._time_remaining = 0
        self._questions: list[QuestionResponse] = []
        self._answers: dict[str, int] = {}
        self._current_index = 0

        self._timer: CountdownTimer | None = None
        self._monitor: IntegrityMonitor | None = None
        self._pending: set[asyncio.Task] = set()
        self._expiry_task: asyncio.Task | None = None
        self._completing = False
        self._saved_result: ExamResultResponse | None = None
        self._outcome: ExamOutcome | None = None
        self._violations = 0

    # ------------------------------------------------------------------
    # 상태 조회
    # ------------------------------------------------------------------
    @property
    def state(self) -> ExamState:
        return self._state

    @property
    def student(self) -> StudentResponse | None:
        return self._student

    @property
    def questions(self) -> list[QuestionResponse]:
        return list(self._questions)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_question(self) -> QuestionResponse | None:
        if not self._questions:
            return None
        return self._questions[self._current_index]

    @property
    def answers(self) -> dict[str, int]:
        return dict(self._answers)

    @property
    def answered_count(self) -> int:
        return len(self._answers)

    @property
    def time_limit(self) -> int:
        return self._time_limit

    @property
    def time_remaining(self) -> int:
        if self._timer is not None:
            return self._timer.time_remaining
        return self._time_remaining

    @property
    def formatted_time(self) -> str:
        remaining = max(self.time_remaining, 0)
        minutes, seconds = divmod(remaining // 1000, 60)
        return f"{minutes:02d}:{seconds:02d}"

    @property
    def is_low_time(self) -> bool:
        return self.time_remaining < LOW_TIME_THRESHOLD_MS

    @property
    def progress(self) -> float:
        if not self._questions:
            return 0.0
        return (self._current_index + 1) / len(self._questions) * 100

    @property
    def violations(self) -> int:
        return self._violations

    @property
    def outcome(self) -> ExamOutcome | None:
        return self._outcome

    @property
    def timer(self) -> CountdownTimer | None:
        return self._timer

    @property
    def monitor(self) -> IntegrityMonitor | None:
        return self._monitor

    @property
    def pending_saves(self) -> int:
        return len(self._pending)

    # ------------------------------------------------------------------
    # 시작 / 재접속
    # ------------------------------------------------------------------
    async def authenticate(self, token: str, name: str) -> StudentResponse:
        """토큰 검증 후 학생과 새 시험 세션 생성"""
        if self._state != ExamState.AWAITING_AUTH:
            raise InvalidStateError(f"이미 시작된 시험입니다: state={self._state.value}")

        code = normalize_token(token or "")
        if not code:
            raise ExamValidationError("토큰을 입력해주세요.", field="token")
        name = (name or "").strip()
        if not name:
            raise ExamValidationError("이름을 입력해주세요.", field="name")

        try:
            validation = await self.gateway.validate_token(code)
            if not validation.valid:
                logger.info(f"유효하지 않은 토큰으로 시작 시도: token={code}")
                raise InvalidTokenError()

            category_id = validation.exam_category
            time_limit = get_time_limit_ms(category_id)
            now = self._clock()
            student = await self.gateway.create_student(
                StudentCreateRequest(
                    name=name,
                    token=code,
                    exam_type=validation.exam_type,
                    exam_category=category_id,
                    difficulty=validation.difficulty,
                    start_time=now,
                    status=StudentStatus.ACTIVE,
                    time_remaining=time_limit,
                    current_question=0,
                )
            )
            questions = await self.gateway.load_questions(category_id)
        except (InvalidTokenError, GatewayError) as e:
            self.notifications.show_error("시험 시작 실패", get_error_message(e))
            raise

        self._student = student
        self._exam_type = validation.exam_type
        self._exam_category = category_id
        self._difficulty = validation.difficulty
        self._start_time = now
        self._time_limit = time_limit
        self._time_remaining = time_limit
        self._questions = list(questions)
        self._answers = {}
        self._current_index = 0

        await self._save_snapshot()
        self.resume_marker.set(student.id)
        self._activate()

        category = get_exam_category(category_id)
        category_name = category.name if category else category_id
        self.notifications.show_success("시험 시작", f"{name}님 환영합니다! {category_name} 시험이 시작되었습니다.")
        logger.info(
            f"시험 시작: student_id={student.id}, category={category_id}, "
            f"questions={len(self._questions)}, time_limit={time_limit}"
        )
        return student

    async def resume(self) -> bool:
        """재접속 정보로 진행 중이던 세션 복원 (복원할 세션이 없으면 False)"""
        if self._state != ExamState.AWAITING_AUTH:
            raise InvalidStateError(f"이미 시작된 시험입니다: state={self._state.value}")

        student_id = self.resume_marker.get()
        if not student_id:
            return False

        try:
            snapshot = await self.gateway.load_session(student_id)
            if snapshot is None:
                logger.info(f"복원할 세션 없음, 재접속 정보 삭제: student_id={student_id}")
                self.resume_marker.clear()
                return False
            student = await self.gateway.get_student(student_id)
            loaded = await self.gateway.load_questions(snapshot.exam_category)
        except GatewayError as e:
            logger.warning(f"세션 복원 실패: student_id={student_id}, operation={e.operation}")
            self.notifications.show_warning("세션 불러오기 실패", get_error_message(e))
            return False

        by_id = {question.id: question for question in loaded}
        if snapshot.question_ids:
            questions = [by_id[qid] for qid in snapshot.question_ids if qid in by_id]
        else:
            questions = list(loaded)

        self._student = student
        self._exam_type = snapshot.exam_type
        self._exam_category = snapshot.exam_category
        self._difficulty = snapshot.difficulty
        self._start_time = snapshot.start_time
        self._time_limit = get_time_limit_ms(snapshot.exam_category)
        self._time_remaining = snapshot.time_remaining
        self._questions = questions
        self._answers = dict(snapshot.answers)
        self._current_index = min(snapshot.current_question, max(len(questions) - 1, 0))
        self._activate()

        logger.info(
            f"시험 세션 복원: student_id={student_id}, time_remaining={snapshot.time_remaining}, "
            f"answered={len(self._answers)}"
        )
        if self._time_remaining <= 0:
            self._on_expire()
        return True

    def _activate(self) -> None:
        self._state = ExamState.ACTIVE
        self._timer = CountdownTimer(
            self._time_remaining,
            on_autosave=self._on_autosave,
            on_expire=self._on_expire,
            tick_interval=self._tick_interval,
            autosave_interval_ms=self._autosave_interval_ms,
        )
        self._monitor = IntegrityMonitor(self.event_target, self._on_violation)
        self._monitor.start()
        if self._time_remaining > 0:
            self._timer.start()

    # ------------------------------------------------------------------
    # 문제 풀이
    # ------------------------------------------------------------------
    def _require_active(self) -> None:
        if self._state != ExamState.ACTIVE or self._completing:
            raise InvalidStateError(f"진행 중인 시험이 아닙니다: state={self._state.value}")

    def select_answer(self, question_id: str, option_index: int) -> None:
        """답안 선택 (문제 이동 없음, 전체 스냅샷 저장 예약)"""
        self._require_active()
        question = next((q for q in self._questions if q.id == question_id), None)
        if question is None:
            raise ExamValidationError(f"존재하지 않는 문제입니다: {question_id}", field="question_id")
        if not 0 <= option_index < len(question.options):
            raise ExamValidationError(
                f"보기 번호가 범위를 벗어났습니다: {option_index}", field="option_index"
            )

        self._answers[question_id] = option_index
        self._schedule_save()

    def go_to_question(self, index: int) -> None:
        self._require_active()
        if not 0 <= index < len(self._questions):
            raise ExamValidationError(f"문제 번호가 범위를 벗어났습니다: {index}", field="index")
        self._current_index = index

    def next_question(self) -> bool:
        self._require_active()
        if self._current_index >= len(self._questions) - 1:
            return False
        self._current_index += 1
        return True

    def previous_question(self) -> bool:
        self._require_active()
        if self._current_index <= 0:
            return False
        self._current_index -= 1
        return True

    # ------------------------------------------------------------------
    # 저장
    # ------------------------------------------------------------------
    def snapshot(self) -> ExamSessionSnapshot:
        if self._student is None:
            raise InvalidStateError("시작되지 않은 시험입니다")
        return ExamSessionSnapshot(
            student_id=self._student.id,
            exam_type=self._exam_type,
            exam_category=self._exam_category,
            difficulty=self._difficulty,
            question_ids=[question.id for question in self._questions],
            answers=dict(self._answers),
            start_time=self._start_time,
            time_remaining=max(self.time_remaining, 0),
            current_question=self._current_index,
        )

    async def _save_snapshot(self, snapshot: ExamSessionSnapshot | None = None) -> None:
        snapshot = snapshot or self.snapshot()
        try:
            await self.gateway.save_session(snapshot)
        except GatewayError as e:
            logger.warning(f"세션 저장 실패: student_id={snapshot.student_id}, status={e.status_code}")
            self.notifications.show_warning("저장 실패", get_error_message(e))

    def _schedule_save(self) -> None:
        # 예약 시점의 상태를 저장
        task = asyncio.get_running_loop().create_task(self._save_snapshot(self.snapshot()))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def flush_pending(self) -> None:
        """진행 중인 저장 태스크가 모두 끝날 때까지 대기"""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _on_autosave(self, remaining: int) -> None:
        if self._state != ExamState.ACTIVE or self._completing:
            return
        logger.debug(f"자동 저장: remaining={remaining}")
        self._schedule_save()

    # ------------------------------------------------------------------
    # 부정행위
    # ------------------------------------------------------------------
    def _on_violation(self, reason: str) -> None:
        self._violations += 1
        self.notifications.show_banner(VIOLATION_BANNER_MESSAGE)

    # ------------------------------------------------------------------
    # 종료
    # ------------------------------------------------------------------
    def _on_expire(self) -> None:
        if self._state != ExamState.ACTIVE or self._completing:
            return
        if self._expiry_task is not None and not self._expiry_task.done():
            return
        self._expiry_task = asyncio.get_running_loop().create_task(self._complete_on_timeout())

    async def _complete_on_timeout(self) -> None:
        if self._state != ExamState.ACTIVE or self._completing:
            logger.info(f"자동 제출 생략: state={self._state.value}, completing={self._completing}")
            return
        try:
            await self._complete(ExamState.TIMED_OUT)
        except SubmissionError:
            logger.warning("시간 만료 자동 제출 실패, 재제출 대기")

    async def submit(self) -> ExamOutcome | None:
        """수동 제출 (종료 상태이거나 제출 처리 중이면 아무것도 하지 않음)"""
        if self._state in TERMINAL_STATES:
            logger.info(f"이미 종료된 시험의 제출 요청 무시: state={self._state.value}")
            return None
        if self._state != ExamState.ACTIVE:
            raise InvalidStateError(f"진행 중인 시험이 아닙니다: state={self._state.value}")
        if self._completing:
            logger.info("제출 처리 중 중복 제출 요청 무시")
            return None

        final_state = ExamState.TIMED_OUT if self._timer and self._timer.expired else ExamState.SUBMITTED
        return await self._complete(final_state)

    async def wait_for_completion(self) -> ExamOutcome | None:
        """시간 만료로 시작된 자동 제출이 끝날 때까지 대기"""
        if self._expiry_task is not None:
            await asyncio.shield(self._expiry_task)
        return self._outcome

    async def _complete(self, final_state: ExamState) -> ExamOutcome | None:
        # 수동 제출과 시간 만료 중 먼저 들어온 쪽만 처리
        if self._state in TERMINAL_STATES or self._completing:
            return self._outcome
        self._completing = True
        try:
            remaining = max(self.time_remaining, 0)
            time_spent = calculate_time_spent(self._time_limit, remaining)
            score = score_exam(self._questions, self._answers)

            await self.flush_pending()

            completed_at = self._clock()
            if self._saved_result is None:
                request = build_exam_result(self._student, score, time_spent, completed_at)
                try:
                    self._saved_result = await self.gateway.save_result(request)
                except GatewayError as e:
                    self._fail_submission(e)

            updated = self._student.model_copy(
                update={
                    "status": StudentStatus.COMPLETED,
                    "end_time": completed_at,
                    "time_remaining": remaining,
                    "current_question": self._current_index,
                }
            )
            try:
                await self.gateway.update_student(updated)
            except GatewayError as e:
                self._fail_submission(e)
            self._student = updated

            try:
                await self.gateway.delete_session(updated.id)
            except GatewayError as e:
                logger.warning(f"세션 삭제 실패: student_id={updated.id}, status={e.status_code}")

            self.resume_marker.clear()
            self._teardown()
            self._time_remaining = remaining
            self._state = final_state
            self._outcome = ExamOutcome(
                state=final_state, score=score, result=self._saved_result, time_spent=time_spent
            )
        finally:
            self._completing = False

        verdict = "PASS" if score.passed else "FAIL"
        self.notifications.show_success(
            "시험 완료",
            f"시험이 완료되었습니다! 점수: {score.score}/{score.total_questions} "
            f"({score.percentage}%) - {verdict}",
        )
        logger.info(
            f"시험 종료: student_id={updated.id}, state={final_state.value}, "
            f"score={score.score}/{score.total_questions}, time_spent={time_spent}"
        )
        return self._outcome

    def _fail_submission(self, error: GatewayError) -> None:
        logger.error(f"시험 제출 실패: operation={error.operation}, status={error.status_code}")
        message = get_error_message(error)
        self.notifications.show_error("시험 제출 실패", message, duration=None)
        raise SubmissionError(message) from error

    def _teardown(self) -> None:
        if self._timer is not None:
            self._time_remaining = self._timer.time_remaining
            self._timer.stop()
        if self._monitor is not None:
            self._monitor.dispose()

    async def close(self) -> None:
        """화면 종료 시 정리 (타이머/모니터 해제, 저장 대기)"""
        self._teardown()
        await self.flush_pending()
        if self._expiry_task is not None and not self._expiry_task.done():
            await self._expiry_task

    async def __aenter__(self) -> "ExamSessionMachine":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
