import logging
import secrets
import string
from collections import Counter

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import token as token_crud
from app.data.exam_categories import get_exam_category
from app.exceptions import InvalidExamRequestError, TokenNotFoundError
from app.schemas import token as token_schema

logger = logging.getLogger(__name__)

TOKEN_LENGTH = 8
TOKEN_ALPHABET = string.ascii_uppercase + string.digits
MAX_GENERATE_ATTEMPTS = 5


def _random_token() -> str:
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH))


async def generate_token(
    session: AsyncSession,
    request: token_schema.TokenCreateRequest,
) -> token_schema.TokenResponse:
    """시험 토큰 생성 (카테고리/유형 일치 검증)"""
    category = get_exam_category(request.exam_category)
    if category is None:
        raise InvalidExamRequestError(f"존재하지 않는 시험 카테고리입니다: {request.exam_category}")
    if category.type != request.exam_type:
        raise InvalidExamRequestError(
            f"시험 유형이 카테고리와 일치하지 않습니다: type={request.exam_type.value}, category={category.id}"
        )

    for attempt in range(1, MAX_GENERATE_ATTEMPTS + 1):
        code = _random_token()
        try:
            record = await token_crud.create_token(
                session,
                token=code,
                exam_type=request.exam_type.value,
                exam_category=request.exam_category,
                difficulty=request.difficulty.value,
            )
        except IntegrityError:
            # 토큰 문자열 충돌 시 재시도
            await session.rollback()
            logger.warning(f"토큰 충돌, 재생성: attempt={attempt}")
            continue

        logger.info(f"토큰 생성: category={record.exam_category}, difficulty={record.difficulty}")
        return token_schema.TokenResponse.model_validate(record)

    raise InvalidExamRequestError("토큰 생성에 실패했습니다. 다시 시도해주세요.")


async def validate_token(
    session: AsyncSession,
    request: token_schema.TokenValidateRequest,
) -> token_schema.TokenValidationResponse:
    """토큰 검증 및 1회 사용 처리

    조회와 사용 처리가 하나의 조건부 UPDATE로 묶여 있어 같은 토큰으로
    동시에 검증해도 최대 한 번만 valid=True가 된다.
    """
    record = await token_crud.consume_token(session, request.token)
    if record is None:
        logger.info("토큰 검증 실패: 존재하지 않거나 이미 사용됨")
        return token_schema.TokenValidationResponse(valid=False)

    logger.info(f"토큰 검증 성공: category={record.exam_category}")
    return token_schema.TokenValidationResponse(
        valid=True,
        exam_type=record.exam_type,
        exam_category=record.exam_category,
        difficulty=record.difficulty,
    )


async def list_tokens(session: AsyncSession) -> list[token_schema.TokenResponse]:
    """토큰 목록 (최신순)"""
    records = await token_crud.get_all_tokens(session)
    return [token_schema.TokenResponse.model_validate(r) for r in records]


async def delete_token(session: AsyncSession, token: str) -> None:
    """토큰 삭제"""
    record = await token_crud.get_token(session, token_schema.normalize_token(token))
    if not record:
        raise TokenNotFoundError(token)

    await token_crud.delete_token(session, record)
    logger.info(f"토큰 삭제: token={record.token}")


async def disable_token(session: AsyncSession, token: str) -> token_schema.TokenResponse:
    """토큰 비활성화 (삭제 대신 사용 처리)"""
    record = await token_crud.get_token(session, token_schema.normalize_token(token))
    if not record:
        raise TokenNotFoundError(token)

    record = await token_crud.mark_token_used(session, record)
    logger.info(f"토큰 비활성화: token={record.token}")
    return token_schema.TokenResponse.model_validate(record)


async def get_token_stats(session: AsyncSession) -> token_schema.TokenStatsResponse:
    """토큰 통계"""
    records = await token_crud.get_all_tokens(session)
    used = sum(1 for r in records if r.used)
    return token_schema.TokenStatsResponse(
        total=len(records),
        used=used,
        available=len(records) - used,
        by_type=dict(Counter(r.exam_type for r in records)),
        by_difficulty=dict(Counter(r.difficulty for r in records)),
    )
