from app.exam_client.errors import (
    ExamClientError,
    ExamValidationError,
    GatewayError,
    InvalidStateError,
    InvalidTokenError,
    SubmissionError,
)
from app.exam_client.gateway import HttpPersistenceGateway, PersistenceGateway
from app.exam_client.integrity import ClientEvent, EventTarget, IntegrityMonitor
from app.exam_client.machine import ExamOutcome, ExamSessionMachine, ExamState
from app.exam_client.messages import get_error_message
from app.exam_client.notifications import Notification, NotificationCenter, NotificationType
from app.exam_client.resume import InMemoryResumeMarker, ResumeMarker
from app.exam_client.timer import CountdownTimer

__all__ = [
    "ClientEvent",
    "CountdownTimer",
    "EventTarget",
    "ExamClientError",
    "ExamOutcome",
    "ExamSessionMachine",
    "ExamState",
    "ExamValidationError",
    "GatewayError",
    "HttpPersistenceGateway",
    "InMemoryResumeMarker",
    "IntegrityMonitor",
    "InvalidStateError",
    "InvalidTokenError",
    "Notification",
    "NotificationCenter",
    "NotificationType",
    "PersistenceGateway",
    "ResumeMarker",
    "SubmissionError",
    "get_error_message",
]
