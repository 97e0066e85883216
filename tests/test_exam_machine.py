"""시험 세션 상태 머신 테스트 (게이트웨이 모킹)"""
import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from app.core.enums import Difficulty, ExamType, StudentStatus
from app.data.questions import HIRAGANA_BASIC_QUESTIONS
from app.exam_client.errors import (
    ExamValidationError,
    GatewayError,
    InvalidStateError,
    InvalidTokenError,
    SubmissionError,
)
from app.exam_client.integrity import ClientEvent
from app.exam_client.machine import ExamSessionMachine, ExamState
from app.exam_client.notifications import NotificationType
from app.exam_client.resume import InMemoryResumeMarker
from app.schemas.exam_result import UNANSWERED, ExamResultResponse
from app.schemas.exam_session import ExamSessionSnapshot
from app.schemas.student import StudentResponse
from app.schemas.token import TokenValidationResponse

TIME_LIMIT_MS = 20 * 60 * 1000
NOW = datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc)


def _student_from_request(request):
    return StudentResponse(id="student-1", end_time=None, **request.model_dump())


def _result_from_request(request):
    return ExamResultResponse(id=1, **request.model_dump())


@pytest.fixture
def gateway():
    gw = AsyncMock()
    gw.validate_token.return_value = TokenValidationResponse(
        valid=True,
        exam_type=ExamType.HIRAGANA,
        exam_category="hiragana-basic",
        difficulty=Difficulty.BEGINNER,
    )
    gw.create_student.side_effect = _student_from_request
    gw.load_questions.return_value = list(HIRAGANA_BASIC_QUESTIONS)
    gw.save_session.return_value = None
    gw.load_session.return_value = None
    gw.update_student.return_value = None
    gw.delete_session.return_value = None
    gw.save_result.side_effect = _result_from_request
    return gw


@pytest.fixture
def resume_marker():
    return InMemoryResumeMarker()


@pytest_asyncio.fixture
async def machine(gateway, resume_marker):
    machine = ExamSessionMachine(
        gateway,
        resume_marker=resume_marker,
        clock=lambda: NOW,
        tick_interval=3600,
    )
    yield machine
    await machine.close()


@pytest_asyncio.fixture
async def active_machine(machine):
    await machine.authenticate("abcd1234", "김민수")
    return machine


def _answer_all_correct(machine, count=None):
    for question in machine.questions[:count]:
        machine.select_answer(question.id, question.correct_answer)


@pytest.mark.asyncio
async def test_authenticate_starts_exam(machine, gateway, resume_marker):
    """토큰 인증 성공 시 세션 생성 후 진행 상태로 전환"""
    student = await machine.authenticate(" abcd1234 ", " 김민수 ")

    assert machine.state == ExamState.ACTIVE
    assert student.name == "김민수"
    assert len(machine.questions) == 15
    assert machine.current_index == 0
    assert machine.time_remaining == TIME_LIMIT_MS
    assert machine.formatted_time == "20:00"
    assert machine.answers == {}
    assert resume_marker.get() == "student-1"
    assert machine.timer.running is True
    assert machine.event_target.listener_count() == 5

    gateway.validate_token.assert_awaited_once_with("ABCD1234")
    create_request = gateway.create_student.await_args.args[0]
    assert create_request.token == "ABCD1234"
    assert create_request.time_remaining == TIME_LIMIT_MS

    snapshot = gateway.save_session.await_args.args[0]
    assert snapshot.student_id == "student-1"
    assert snapshot.question_ids == [q.id for q in HIRAGANA_BASIC_QUESTIONS]
    assert snapshot.time_remaining == TIME_LIMIT_MS

    assert machine.notifications.notifications[-1].type == NotificationType.SUCCESS


@pytest.mark.asyncio
@pytest.mark.parametrize("token,name,field", [("", "김민수", "token"), ("   ", "김민수", "token"), ("ABCD1234", "  ", "name")])
async def test_authenticate_rejects_empty_input(machine, gateway, token, name, field):
    """빈 토큰/이름은 게이트웨이 호출 없이 거부"""
    with pytest.raises(ExamValidationError) as exc_info:
        await machine.authenticate(token, name)

    assert exc_info.value.field == field
    gateway.validate_token.assert_not_awaited()
    assert machine.state == ExamState.AWAITING_AUTH


@pytest.mark.asyncio
async def test_authenticate_used_token_creates_nothing(machine, gateway, resume_marker):
    """이미 사용된 토큰이면 학생/세션을 만들지 않음"""
    gateway.validate_token.return_value = TokenValidationResponse(valid=False)

    with pytest.raises(InvalidTokenError):
        await machine.authenticate("USED0001", "김민수")

    assert machine.state == ExamState.AWAITING_AUTH
    gateway.create_student.assert_not_awaited()
    gateway.save_session.assert_not_awaited()
    assert resume_marker.get() is None
    assert machine.notifications.notifications[-1].type == NotificationType.ERROR


@pytest.mark.asyncio
async def test_authenticate_gateway_failure(machine, gateway):
    gateway.validate_token.side_effect = GatewayError("validate_token")

    with pytest.raises(GatewayError):
        await machine.authenticate("ABCD1234", "김민수")

    assert machine.state == ExamState.AWAITING_AUTH
    assert machine.notifications.notifications[-1].message == "서버 연결에 문제가 있습니다. 인터넷 연결을 확인해주세요."


@pytest.mark.asyncio
async def test_authenticate_twice_is_rejected(active_machine):
    with pytest.raises(InvalidStateError):
        await active_machine.authenticate("ABCD1234", "김민수")


@pytest.mark.asyncio
async def test_select_answer_saves_full_snapshot(active_machine, gateway):
    """답안 선택은 이동 없이 전체 스냅샷 저장"""
    gateway.save_session.reset_mock()
    question = active_machine.questions[2]

    active_machine.select_answer(question.id, 1)
    active_machine.select_answer(question.id, 3)
    await active_machine.flush_pending()

    assert active_machine.answers == {question.id: 3}
    assert active_machine.current_index == 0
    assert active_machine.answered_count == 1
    assert gateway.save_session.await_count == 2
    snapshot = gateway.save_session.await_args.args[0]
    assert snapshot.answers == {question.id: 3}
    assert len(snapshot.question_ids) == 15


@pytest.mark.asyncio
async def test_select_answer_validation(active_machine):
    question = active_machine.questions[0]

    with pytest.raises(ExamValidationError):
        active_machine.select_answer(question.id, 4)
    with pytest.raises(ExamValidationError):
        active_machine.select_answer(question.id, -1)
    with pytest.raises(ExamValidationError):
        active_machine.select_answer("no_such_question", 0)

    assert active_machine.answers == {}


@pytest.mark.asyncio
async def test_select_answer_requires_active(machine):
    with pytest.raises(InvalidStateError):
        machine.select_answer("h_basic_1", 0)


@pytest.mark.asyncio
async def test_save_failure_is_warning(active_machine, gateway):
    """저장 실패는 경고만 표시하고 시험은 계속"""
    gateway.save_session.side_effect = GatewayError("save_session", status_code=500)
    question = active_machine.questions[0]

    active_machine.select_answer(question.id, 0)
    await active_machine.flush_pending()

    assert active_machine.state == ExamState.ACTIVE
    assert active_machine.answers == {question.id: 0}
    assert active_machine.notifications.notifications[-1].type == NotificationType.WARNING


@pytest.mark.asyncio
async def test_navigation_bounds(active_machine):
    assert active_machine.previous_question() is False
    assert active_machine.next_question() is True
    assert active_machine.current_index == 1

    active_machine.go_to_question(14)
    assert active_machine.next_question() is False
    assert active_machine.progress == 100
    assert active_machine.current_question.id == "h_basic_15"

    with pytest.raises(ExamValidationError):
        active_machine.go_to_question(15)
    assert active_machine.current_index == 14


@pytest.mark.asyncio
async def test_submit_all_correct(active_machine, gateway, resume_marker):
    """15문제 모두 정답 제출"""
    _answer_all_correct(active_machine)

    outcome = await active_machine.submit()

    assert outcome.state == ExamState.SUBMITTED
    assert outcome.score.score == 15
    assert outcome.score.percentage == 100
    assert outcome.score.passed is True
    assert outcome.time_spent == 0
    assert active_machine.state == ExamState.SUBMITTED
    assert active_machine.outcome is outcome

    gateway.save_result.assert_awaited_once()
    updated = gateway.update_student.await_args.args[0]
    assert updated.status == StudentStatus.COMPLETED
    assert updated.end_time == NOW
    gateway.delete_session.assert_awaited_once_with("student-1")

    assert resume_marker.get() is None
    assert active_machine.timer.running is False
    assert active_machine.event_target.listener_count() == 0
    assert "15/15 (100%) - PASS" in active_machine.notifications.notifications[-1].message


@pytest.mark.asyncio
async def test_submit_partial_fails(active_machine):
    """15문제 중 10문제 정답 → 67%, 불합격"""
    _answer_all_correct(active_machine, 10)

    outcome = await active_machine.submit()

    assert outcome.score.score == 10
    assert outcome.score.percentage == 67
    assert outcome.score.passed is False
    assert "10/15 (67%) - FAIL" in active_machine.notifications.notifications[-1].message


@pytest.mark.asyncio
async def test_submit_elapsed_time(active_machine):
    active_machine.timer.time_remaining = TIME_LIMIT_MS - 90_000

    outcome = await active_machine.submit()

    assert outcome.time_spent == 90_000
    assert outcome.result.time_spent == 90_000


@pytest.mark.asyncio
async def test_double_submit_is_noop(active_machine, gateway):
    """종료 후 제출은 아무 것도 하지 않음"""
    first = await active_machine.submit()
    second = await active_machine.submit()

    assert first is not None
    assert second is None
    gateway.save_result.assert_awaited_once()
    gateway.update_student.assert_awaited_once()


@pytest.mark.asyncio
async def test_concurrent_submit_scores_once(active_machine, gateway):
    """동시에 제출해도 채점/저장은 한 번만"""
    results = await asyncio.gather(active_machine.submit(), active_machine.submit())

    assert sum(1 for r in results if r is not None) == 1
    gateway.save_result.assert_awaited_once()


@pytest.mark.asyncio
async def test_submit_racing_timeout_completes_once(active_machine, gateway):
    """시간 만료 직후 수동 제출이 겹쳐도 결과 저장/학생 갱신/세션 삭제는 한 번만"""
    async def slow_save(request):
        await asyncio.sleep(0)
        return _result_from_request(request)

    gateway.save_result.side_effect = slow_save
    active_machine.timer.time_remaining = 1_000
    active_machine.timer.tick()

    outcome = await active_machine.submit()
    await active_machine.wait_for_completion()

    assert outcome.state == ExamState.TIMED_OUT
    assert active_machine.state == ExamState.TIMED_OUT
    gateway.save_result.assert_awaited_once()
    gateway.update_student.assert_awaited_once()
    gateway.delete_session.assert_awaited_once()


@pytest.mark.asyncio
async def test_submit_before_start_is_invalid(machine):
    with pytest.raises(InvalidStateError):
        await machine.submit()


@pytest.mark.asyncio
async def test_timeout_auto_submits(active_machine, gateway):
    """시간 만료 시 자동 제출, 미응답은 -1"""
    first = active_machine.questions[0]
    active_machine.select_answer(first.id, first.correct_answer)
    active_machine.timer.time_remaining = 3_000

    for _ in range(3):
        active_machine.timer.tick()
    outcome = await active_machine.wait_for_completion()

    assert active_machine.state == ExamState.TIMED_OUT
    assert outcome.state == ExamState.TIMED_OUT
    assert outcome.time_spent == TIME_LIMIT_MS
    assert outcome.score.score == 1
    assert [d.selected_answer for d in outcome.score.answers[1:]] == [UNANSWERED] * 14
    gateway.save_result.assert_awaited_once()
    gateway.delete_session.assert_awaited_once()


@pytest.mark.asyncio
async def test_timeout_then_late_submit_is_noop(active_machine, gateway):
    """시간 만료 후 늦게 들어온 수동 제출은 무시"""
    active_machine.timer.time_remaining = 1_000
    active_machine.timer.tick()
    await active_machine.wait_for_completion()

    assert await active_machine.submit() is None
    gateway.save_result.assert_awaited_once()


@pytest.mark.asyncio
async def test_timeout_and_submit_score_equally(gateway):
    """같은 답안이면 수동 제출과 시간 만료 채점 결과가 같음"""
    outcomes = []
    for timed_out in (False, True):
        machine = ExamSessionMachine(gateway, clock=lambda: NOW, tick_interval=3600)
        async with machine:
            await machine.authenticate("ABCD1234", "김민수")
            _answer_all_correct(machine, 11)
            if timed_out:
                machine.timer.time_remaining = 1_000
                machine.timer.tick()
                outcomes.append(await machine.wait_for_completion())
            else:
                outcomes.append(await machine.submit())

    assert outcomes[0].score.answers == outcomes[1].score.answers
    assert outcomes[0].score.score == outcomes[1].score.score == 11


@pytest.mark.asyncio
async def test_autosave_count_before_timeout(active_machine, gateway):
    """30초 남은 상태에서 만료까지 자동 저장 3회"""
    gateway.save_session.reset_mock()
    active_machine.timer.time_remaining = 30_000

    for _ in range(30):
        active_machine.timer.tick()
    await active_machine.wait_for_completion()

    saved = [c.args[0].time_remaining for c in gateway.save_session.await_args_list]
    assert saved == [20_000, 10_000, 0]
    assert active_machine.state == ExamState.TIMED_OUT


@pytest.mark.asyncio
async def test_pending_saves_finish_before_session_delete(active_machine, gateway):
    """진행 중이던 저장이 끝난 뒤에 세션 삭제"""
    calls = []
    release = asyncio.Event()

    async def slow_save(snapshot):
        await release.wait()
        calls.append("save")

    async def delete(student_id):
        calls.append("delete")

    gateway.save_session.side_effect = slow_save
    gateway.delete_session.side_effect = delete
    active_machine.select_answer(active_machine.questions[0].id, 0)

    submit_task = asyncio.create_task(active_machine.submit())
    await asyncio.sleep(0)
    release.set()
    await submit_task

    assert calls == ["save", "delete"]


@pytest.mark.asyncio
async def test_submission_failure_allows_retry(active_machine, gateway, resume_marker):
    """결과 저장 실패 시 진행 상태 유지, 재제출 가능"""
    gateway.save_result.side_effect = _flaky(_result_from_request)
    _answer_all_correct(active_machine)

    with pytest.raises(SubmissionError):
        await active_machine.submit()

    assert active_machine.state == ExamState.ACTIVE
    assert resume_marker.get() == "student-1"
    error = active_machine.notifications.notifications[-1]
    assert error.type == NotificationType.ERROR
    assert error.duration is None
    gateway.delete_session.assert_not_awaited()

    outcome = await active_machine.submit()

    assert outcome.state == ExamState.SUBMITTED
    assert outcome.score.score == 15
    assert gateway.save_result.await_count == 2


@pytest.mark.asyncio
async def test_student_update_failure_reuses_saved_result(active_machine, gateway):
    """학생 갱신 실패 후 재제출 시 결과는 다시 저장하지 않음"""
    gateway.update_student.side_effect = [GatewayError("update_student", status_code=503), None]

    with pytest.raises(SubmissionError):
        await active_machine.submit()
    outcome = await active_machine.submit()

    assert outcome.state == ExamState.SUBMITTED
    gateway.save_result.assert_awaited_once()
    assert gateway.update_student.await_count == 2


@pytest.mark.asyncio
async def test_session_delete_failure_is_warning(active_machine, gateway):
    gateway.delete_session.side_effect = GatewayError("delete_session", status_code=500)

    outcome = await active_machine.submit()

    assert outcome.state == ExamState.SUBMITTED


@pytest.mark.asyncio
async def test_violation_shows_single_banner(active_machine):
    """부정행위 감지 시 배너는 한 번에 하나만"""
    active_machine.event_target.dispatch(ClientEvent("blur"))
    active_machine.event_target.dispatch(ClientEvent("keydown", key="F12"))

    assert active_machine.violations == 2
    assert active_machine.notifications.banner is not None
    assert active_machine.notifications.banner.duration == 3.0
    assert active_machine.state == ExamState.ACTIVE


@pytest.mark.asyncio
async def test_close_detaches_everything(active_machine):
    await active_machine.close()

    assert active_machine.timer.running is False
    assert active_machine.event_target.listener_count() == 0


@pytest.mark.asyncio
async def test_resume_restores_session(machine, gateway, resume_marker):
    """재접속 시 저장된 순서/답안/남은 시간으로 복원"""
    order = ["h_basic_3", "h_basic_1", "h_basic_2"]
    resume_marker.set("student-1")
    gateway.load_session.return_value = ExamSessionSnapshot(
        student_id="student-1",
        exam_type=ExamType.HIRAGANA,
        exam_category="hiragana-basic",
        difficulty=Difficulty.BEGINNER,
        question_ids=order,
        answers={"h_basic_1": 1},
        start_time=NOW,
        time_remaining=600_000,
        current_question=2,
    )
    gateway.get_student.return_value = StudentResponse(
        id="student-1",
        name="김민수",
        token="ABCD1234",
        exam_type=ExamType.HIRAGANA,
        exam_category="hiragana-basic",
        difficulty=Difficulty.BEGINNER,
        start_time=NOW,
        end_time=None,
        status=StudentStatus.ACTIVE,
        time_remaining=TIME_LIMIT_MS,
        current_question=0,
    )

    assert await machine.resume() is True

    assert machine.state == ExamState.ACTIVE
    assert [q.id for q in machine.questions] == order
    assert machine.answers == {"h_basic_1": 1}
    assert machine.current_index == 2
    assert machine.time_remaining == 600_000
    assert machine.formatted_time == "10:00"
    gateway.validate_token.assert_not_awaited()


@pytest.mark.asyncio
async def test_resume_without_session_clears_marker(machine, gateway, resume_marker):
    resume_marker.set("student-1")
    gateway.load_session.return_value = None

    assert await machine.resume() is False

    assert resume_marker.get() is None
    assert machine.state == ExamState.AWAITING_AUTH


@pytest.mark.asyncio
async def test_resume_load_failure_is_warning(machine, gateway, resume_marker):
    resume_marker.set("student-1")
    gateway.load_session.side_effect = GatewayError("load_session", status_code=500)

    assert await machine.resume() is False

    assert resume_marker.get() == "student-1"
    assert machine.notifications.notifications[-1].type == NotificationType.WARNING


@pytest.mark.asyncio
async def test_resume_without_marker(machine, gateway):
    assert await machine.resume() is False
    gateway.load_session.assert_not_awaited()


def _flaky(func):
    """첫 호출만 실패하는 side_effect"""
    calls = {"count": 0}

    def side_effect(*args, **kwargs):
        calls["count"] += 1
        if calls["count"] == 1:
            raise GatewayError("save_result", status_code=500)
        return func(*args, **kwargs)

    return side_effect
