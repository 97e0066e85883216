from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.exam_token import ExamToken


async def create_token(
    session: AsyncSession,
    token: str,
    exam_type: str,
    exam_category: str,
    difficulty: str,
) -> ExamToken:
    """토큰 생성"""
    record = ExamToken(
        token=token,
        exam_type=exam_type,
        exam_category=exam_category,
        difficulty=difficulty,
        used=False,
    )
    session.add(record)
    await session.commit()
    await session.refresh(record)
    return record


async def get_token(session: AsyncSession, token: str) -> ExamToken | None:
    """토큰 문자열로 조회"""
    result = await session.execute(select(ExamToken).where(ExamToken.token == token))
    return result.scalar_one_or_none()


async def get_all_tokens(session: AsyncSession) -> Sequence[ExamToken]:
    """모든 토큰 조회 (최신순)"""
    stmt = select(ExamToken).order_by(ExamToken.created_at.desc(), ExamToken.id.desc())
    result = await session.execute(stmt)
    return result.scalars().all()


async def consume_token(session: AsyncSession, token: str) -> ExamToken | None:
    """미사용 토큰을 사용 처리하고 반환 (이미 사용됐거나 없으면 None)

    used=false 조건이 붙은 단일 UPDATE로 처리하므로 동시에 두 요청이 들어와도
    한쪽만 rowcount 1을 얻는다.
    """
    stmt = (
        update(ExamToken)
        .where(ExamToken.token == token, ExamToken.used.is_(False))
        .values(used=True, used_at=datetime.now(timezone.utc))
        .execution_options(synchronize_session=False)
    )
    result = await session.execute(stmt)
    await session.commit()

    if result.rowcount != 1:
        return None
    refreshed = await session.execute(
        select(ExamToken).where(ExamToken.token == token).execution_options(populate_existing=True)
    )
    return refreshed.scalar_one()


async def mark_token_used(session: AsyncSession, record: ExamToken) -> ExamToken:
    """토큰 비활성화 (사용 처리)"""
    record.used = True
    record.used_at = datetime.now(timezone.utc)
    await session.commit()
    await session.refresh(record)
    return record


async def delete_token(session: AsyncSession, record: ExamToken) -> None:
    """토큰 삭제"""
    await session.execute(delete(ExamToken).where(ExamToken.id == record.id))
    await session.commit()
