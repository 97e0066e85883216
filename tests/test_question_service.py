"""Question Service 테스트"""
import re

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import ExamType
from app.crud import question as question_crud
from app.exceptions import BuiltInQuestionError, QuestionNotFoundError
from app.services import question_service


@pytest.fixture
def mock_db_session():
    """모킹된 DB 세션"""
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def mock_question():
    """모킹된 문제"""
    question = MagicMock()
    question.question_id = "custom_1_abc"
    question.type = "hiragana"
    question.category = "hiragana-basic"
    question.character = "た"
    question.question = None
    question.options = ["ta", "chi", "tsu", "te"]
    question.correct_answer = 0
    question.chapter = None
    question.difficulty = "beginner"
    question.is_custom = True
    return question


def test_generate_custom_question_id():
    question_id = question_service.generate_custom_question_id()

    assert re.fullmatch(r"custom_\d+_[a-z0-9]{9}", question_id)
    assert question_id != question_service.generate_custom_question_id()


@pytest.mark.asyncio
async def test_get_questions_prefers_db(mock_db_session, mock_question):
    """DB에 문제가 있으면 기본 제공 문제를 쓰지 않음"""
    with patch.object(question_crud, "get_questions", return_value=[mock_question]):
        response = await question_service.get_questions(mock_db_session, category="hiragana-basic")

    assert response.total == 1
    assert response.questions[0].id == "custom_1_abc"


@pytest.mark.asyncio
async def test_get_questions_fallback_filters_type(mock_db_session):
    """기본 제공 문제 사용 시에도 유형 필터 적용"""
    with patch.object(question_crud, "get_questions", return_value=[]) as mock_get:
        response = await question_service.get_questions(
            mock_db_session, category="hiragana-basic", exam_type=ExamType.KANJI
        )

    mock_get.assert_awaited_once_with(mock_db_session, category="hiragana-basic", exam_type="kanji")
    assert response.total == 0


@pytest.mark.asyncio
async def test_delete_builtin_question(mock_db_session):
    """기본 제공 문제는 조회 없이 거부"""
    with patch.object(question_crud, "get_question_by_question_id") as mock_get:
        with pytest.raises(BuiltInQuestionError):
            await question_service.delete_question(mock_db_session, "h_basic_1")

        mock_get.assert_not_called()


@pytest.mark.asyncio
async def test_delete_missing_custom_question(mock_db_session):
    with patch.object(question_crud, "get_question_by_question_id", return_value=None):
        with pytest.raises(QuestionNotFoundError):
            await question_service.delete_question(mock_db_session, "custom_missing")


@pytest.mark.asyncio
async def test_question_stats(mock_db_session, mock_question):
    builtin = MagicMock(type="kanji", difficulty="beginner", is_custom=False)

    with patch.object(question_crud, "get_questions", return_value=[mock_question, builtin]):
        stats = await question_service.get_question_stats(mock_db_session)

    assert stats.total == 2
    assert stats.custom == 1
    assert stats.by_type == {"hiragana": 1, "kanji": 1}
    assert stats.by_difficulty == {"beginner": 2}
