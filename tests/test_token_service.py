"""Token Service 테스트"""
import pytest

from app.core.enums import Difficulty, ExamType
from app.crud import token as token_crud
from app.exceptions import InvalidExamRequestError, TokenNotFoundError
from app.schemas import token as token_schema
from app.services import token_service


@pytest.mark.asyncio
async def test_generate_token(test_db_session):
    """8자리 대문자/숫자 토큰 생성"""
    response = await token_service.generate_token(
        test_db_session,
        token_schema.TokenCreateRequest(
            exam_type=ExamType.HIRAGANA,
            exam_category="hiragana-basic",
            difficulty=Difficulty.BEGINNER,
        ),
    )

    assert len(response.token) == 8
    assert all(c in token_service.TOKEN_ALPHABET for c in response.token)
    assert response.used is False
    assert response.used_at is None


@pytest.mark.asyncio
async def test_generate_token_unknown_category(test_db_session):
    with pytest.raises(InvalidExamRequestError):
        await token_service.generate_token(
            test_db_session,
            token_schema.TokenCreateRequest(
                exam_type=ExamType.HIRAGANA,
                exam_category="no-such-category",
                difficulty=Difficulty.BEGINNER,
            ),
        )


@pytest.mark.asyncio
async def test_generate_token_type_mismatch(test_db_session):
    """카테고리와 시험 유형이 다르면 거부"""
    with pytest.raises(InvalidExamRequestError):
        await token_service.generate_token(
            test_db_session,
            token_schema.TokenCreateRequest(
                exam_type=ExamType.KANJI,
                exam_category="hiragana-basic",
                difficulty=Difficulty.BEGINNER,
            ),
        )


@pytest.mark.asyncio
async def test_validate_token_once(test_db_session, make_token):
    """토큰은 한 번만 유효"""
    await make_token("ABCD1234")

    first = await token_service.validate_token(
        test_db_session, token_schema.TokenValidateRequest(token="abcd1234 ")
    )
    second = await token_service.validate_token(
        test_db_session, token_schema.TokenValidateRequest(token="ABCD1234")
    )

    assert first.valid is True
    assert first.exam_type == ExamType.HIRAGANA
    assert first.exam_category == "hiragana-basic"
    assert first.difficulty == Difficulty.BEGINNER
    assert second.valid is False
    assert second.exam_category is None


@pytest.mark.asyncio
async def test_validate_unknown_token(test_db_session):
    response = await token_service.validate_token(
        test_db_session, token_schema.TokenValidateRequest(token="ZZZZ9999")
    )

    assert response.valid is False


@pytest.mark.asyncio
async def test_validate_token_after_both_read_unused(session_factory, make_token):
    """두 세션이 모두 미사용 상태를 읽은 뒤 검증해도 한쪽만 성공"""
    await make_token("RACE0001")

    async with session_factory() as first, session_factory() as second:
        assert (await token_crud.get_token(first, "RACE0001")).used is False
        assert (await token_crud.get_token(second, "RACE0001")).used is False

        results = [
            await token_service.validate_token(s, token_schema.TokenValidateRequest(token="RACE0001"))
            for s in (first, second)
        ]

    assert [r.valid for r in results] == [True, False]


@pytest.mark.asyncio
async def test_disable_token(test_db_session, make_token):
    await make_token("DISA0001")

    response = await token_service.disable_token(test_db_session, "disa0001")
    validation = await token_service.validate_token(
        test_db_session, token_schema.TokenValidateRequest(token="DISA0001")
    )

    assert response.used is True
    assert response.used_at is not None
    assert validation.valid is False


@pytest.mark.asyncio
async def test_disable_missing_token(test_db_session):
    with pytest.raises(TokenNotFoundError):
        await token_service.disable_token(test_db_session, "NOPE0000")


@pytest.mark.asyncio
async def test_delete_token(test_db_session, make_token):
    await make_token("DELE0001")

    await token_service.delete_token(test_db_session, "DELE0001")

    assert await token_service.list_tokens(test_db_session) == []
    with pytest.raises(TokenNotFoundError):
        await token_service.delete_token(test_db_session, "DELE0001")


@pytest.mark.asyncio
async def test_token_stats(test_db_session, make_token):
    await make_token("STAT0001")
    await make_token("STAT0002", used=True)
    await make_token(
        "STAT0003", exam_type="kanji", exam_category="kanji-basic", difficulty="beginner"
    )

    stats = await token_service.get_token_stats(test_db_session)

    assert stats.total == 3
    assert stats.used == 1
    assert stats.available == 2
    assert stats.by_type == {"hiragana": 2, "kanji": 1}
    assert stats.by_difficulty == {"beginner": 3}
