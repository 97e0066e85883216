from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import get_db
from app.schemas import token as token_schema
from app.services import token_service

router = APIRouter(prefix="/tokens", tags=["tokens"])


@router.post("", response_model=token_schema.TokenResponse, status_code=status.HTTP_201_CREATED)
async def generate_token(
    request: token_schema.TokenCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """시험 토큰 생성 API (관리자용)"""
    return await token_service.generate_token(db, request)


@router.get("", response_model=list[token_schema.TokenResponse])
async def get_tokens(
    db: AsyncSession = Depends(get_db),
):
    """토큰 목록 조회 API (최신순)"""
    return await token_service.list_tokens(db)


@router.get("/stats", response_model=token_schema.TokenStatsResponse)
async def get_token_stats(
    db: AsyncSession = Depends(get_db),
):
    """토큰 통계 API"""
    return await token_service.get_token_stats(db)


@router.post("/validate", response_model=token_schema.TokenValidationResponse)
async def validate_token(
    request: token_schema.TokenValidateRequest,
    db: AsyncSession = Depends(get_db),
):
    """토큰 검증 API (성공 시 즉시 사용 처리, 1회용)"""
    return await token_service.validate_token(db, request)


@router.post("/{token}/disable", response_model=token_schema.TokenResponse)
async def disable_token(
    token: str,
    db: AsyncSession = Depends(get_db),
):
    """토큰 비활성화 API"""
    return await token_service.disable_token(db, token)


@router.delete("/{token}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_token(
    token: str,
    db: AsyncSession = Depends(get_db),
):
    """토큰 삭제 API"""
    await token_service.delete_token(db, token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
