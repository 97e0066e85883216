"""영속성 게이트웨이 (시험 클라이언트 → 백엔드)"""
import logging
from typing import Any, Protocol

import httpx

from app.core.config import settings
from app.exam_client.errors import GatewayError
from app.schemas.exam_result import ExamResultCreateRequest, ExamResultResponse
from app.schemas.exam_session import ExamSessionSnapshot
from app.schemas.question import QuestionListResponse, QuestionResponse
from app.schemas.student import StudentCreateRequest, StudentResponse
from app.schemas.token import TokenValidationResponse

logger = logging.getLogger(__name__)


class PersistenceGateway(Protocol):
    """시험 세션 엔진이 사용하는 영속성 작업"""

    async def validate_token(self, code: str) -> TokenValidationResponse: ...

    async def load_questions(self, category: str) -> list[QuestionResponse]: ...

    async def create_student(self, request: StudentCreateRequest) -> StudentResponse: ...

    async def get_student(self, student_id: str) -> StudentResponse: ...

    async def update_student(self, student: StudentResponse) -> None: ...

    async def save_session(self, snapshot: ExamSessionSnapshot) -> None: ...

    async def load_session(self, student_id: str) -> ExamSessionSnapshot | None: ...

    async def delete_session(self, student_id: str) -> None: ...

    async def save_result(self, request: ExamResultCreateRequest) -> ExamResultResponse: ...


class HttpPersistenceGateway:
    """httpx 기반 게이트웨이 구현

    개별 호출에 별도 타임아웃을 두지 않고 httpx 기본값을 따른다.
    모든 전송 오류와 2xx 이외 응답은 GatewayError로 바뀐다.
    """

    def __init__(self, client: httpx.AsyncClient | None = None, base_url: str | None = None):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url or settings.api_base_url)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpPersistenceGateway":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(
        self,
        operation: str,
        method: str,
        url: str,
        *,
        json: Any = None,
        params: dict | None = None,
        allow_not_found: bool = False,
    ) -> httpx.Response | None:
        try:
            response = await self._client.request(method, url, json=json, params=params)
        except httpx.HTTPError as e:
            logger.error(f"게이트웨이 전송 오류: operation={operation}, error={e.__class__.__name__}")
            raise GatewayError(operation) from e

        if allow_not_found and response.status_code == 404:
            return None
        if response.is_error:
            logger.error(
                f"게이트웨이 오류 응답: operation={operation}, status={response.status_code}, "
                f"body={response.text[:200]}"
            )
            raise GatewayError(operation, status_code=response.status_code, detail=response.text)
        return response

    async def validate_token(self, code: str) -> TokenValidationResponse:
        response = await self._request("validate_token", "POST", "/tokens/validate", json={"token": code})
        return TokenValidationResponse.model_validate(response.json())

    async def load_questions(self, category: str) -> list[QuestionResponse]:
        response = await self._request("load_questions", "GET", "/questions", params={"category": category})
        return QuestionListResponse.model_validate(response.json()).questions

    async def create_student(self, request: StudentCreateRequest) -> StudentResponse:
        response = await self._request(
            "create_student", "POST", "/students", json=request.model_dump(mode="json")
        )
        return StudentResponse.model_validate(response.json())

    async def get_student(self, student_id: str) -> StudentResponse:
        response = await self._request("get_student", "GET", f"/students/{student_id}")
        return StudentResponse.model_validate(response.json())

    async def update_student(self, student: StudentResponse) -> None:
        await self._request(
            "update_student",
            "PUT",
            f"/students/{student.id}",
            json=student.to_update_request().model_dump(mode="json"),
        )

    async def save_session(self, snapshot: ExamSessionSnapshot) -> None:
        await self._request(
            "save_session",
            "PUT",
            f"/sessions/{snapshot.student_id}",
            json=snapshot.model_dump(mode="json"),
        )

    async def load_session(self, student_id: str) -> ExamSessionSnapshot | None:
        response = await self._request(
            "load_session", "GET", f"/sessions/{student_id}", allow_not_found=True
        )
        if response is None:
            return None
        return ExamSessionSnapshot.model_validate(response.json())

    async def delete_session(self, student_id: str) -> None:
        await self._request("delete_session", "DELETE", f"/sessions/{student_id}")

    async def save_result(self, request: ExamResultCreateRequest) -> ExamResultResponse:
        response = await self._request(
            "save_result", "POST", "/results", json=request.model_dump(mode="json")
        )
        return ExamResultResponse.model_validate(response.json())
