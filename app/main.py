import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.api.v1 import categories, questions, results, sessions, students, tokens
from app.core.config import settings
from app.core.logging import setup_logging
from app.exceptions import BaseAppError, ExamSessionNotFoundError
from app.models.base import get_engine

# 로깅 설정
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 스키마는 alembic으로 관리 (alembic upgrade head)
    logger.info(f"Nihongo Exam API 시작: environment={settings.environment}")
    yield
    await get_engine().dispose()


app = FastAPI(
    title="Nihongo Exam Backend API",
    description="토큰 기반 일본어 시험 플랫폼 백엔드 API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tokens.router, prefix="/api/v1")
app.include_router(categories.router, prefix="/api/v1")
app.include_router(questions.router, prefix="/api/v1")
app.include_router(students.router, prefix="/api/v1")
app.include_router(sessions.router, prefix="/api/v1")
app.include_router(results.router, prefix="/api/v1")


# 경로 파라미터 중 로그에 남길 시험 식별자
_CONTEXT_PARAMS = ("student_id", "token", "question_id", "result_id")


def _request_context(request: Request) -> str:
    """요청 로그용 문맥 (메서드, 경로, 시험 식별자)"""
    params = [
        f"{name}={request.path_params[name]}"
        for name in _CONTEXT_PARAMS
        if name in request.path_params
    ]
    return " ".join([f"{request.method} {request.url.path}", *params])


def create_cors_response(
    status_code: int,
    content: dict,
    request: Request,
) -> JSONResponse:
    """CORS 헤더를 포함한 JSONResponse 생성"""
    response = JSONResponse(status_code=status_code, content=content)
    origin = request.headers.get("origin")
    if origin and origin in settings.allowed_origins_list:
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Credentials"] = "true"
        response.headers["Access-Control-Allow-Methods"] = "*"
        response.headers["Access-Control-Allow-Headers"] = "*"
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """요청 검증 오류 (알 수 없는 시험 유형/난이도, 범위를 벗어난 답안 등)"""
    fields = [".".join(str(part) for part in error["loc"]) for error in exc.errors()]
    logger.warning(f"요청 검증 실패: fields={fields}, {_request_context(request)}")
    return create_cors_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_encoder(exc.errors())},
        request=request,
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """데이터베이스 예외 (운영 환경에서는 원문 숨김)"""
    logger.error(f"DB 오류: {exc.__class__.__name__}, {_request_context(request)}", exc_info=True)
    detail = "Database error occurred" if settings.environment == "production" else str(exc)
    return create_cors_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": detail},
        request=request,
    )


@app.exception_handler(BaseAppError)
async def app_exception_handler(request: Request, exc: BaseAppError):
    """시험 도메인 예외 (토큰/문제/학생/세션/결과)"""
    # 없는 세션 조회는 재개 확인 시 정상 흐름
    level = logging.INFO if isinstance(exc, ExamSessionNotFoundError) else logging.WARNING
    logger.log(
        level,
        f"{exc.__class__.__name__}({exc.status_code}): {exc.message}, {_request_context(request)}",
    )
    return create_cors_response(
        status_code=exc.status_code,
        content={"detail": exc.message},
        request=request,
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """처리되지 않은 예외"""
    logger.error(
        f"처리되지 않은 예외: {exc.__class__.__name__}, {_request_context(request)}, "
        f"query={dict(request.query_params)}",
        exc_info=True,
    )

    if settings.environment == "production":
        content = {"detail": "Internal Server Error"}
    else:
        content = {"detail": str(exc), "type": exc.__class__.__name__}
    return create_cors_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
        request=request,
    )


@app.get("/")
async def root():
    """루트 엔드포인트"""
    return {"message": "Nihongo Exam Backend API", "version": "0.1.0"}


@app.get("/health")
async def health_check():
    """헬스 체크 엔드포인트"""
    return {"status": "healthy"}


@app.get("/health/db")
async def health_check_db():
    """데이터베이스 연결 상태 확인"""
    try:
        engine = get_engine()
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "database": "disconnected"},
        )
