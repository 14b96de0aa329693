"""
Domain errors raised by the evaluation cycle engine.

Every error is recoverable by the caller. The engine raises them and never
swallows them; the HTTP layer maps each kind to a status code through
``register_error_handlers``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError

logger = logging.getLogger(__name__)


class EvaluationCycleError(Exception):
    """Base class for all engine errors."""

    code = "evaluation_cycle_error"
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_detail(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, **self.details}


class NotFound(EvaluationCycleError):
    code = "not_found"
    http_status = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(
            f"{entity} not found",
            details={"entity": entity, "id": str(entity_id)},
        )


class DuplicateYear(EvaluationCycleError):
    code = "duplicate_year"
    http_status = status.HTTP_409_CONFLICT

    def __init__(self, year: int):
        self.year = year
        super().__init__(
            f"An evaluation cycle for {year} already exists",
            details={"year": year},
        )


class MissingSupervisors(EvaluationCycleError):
    """Raised when active staff have no supervisor; carries who is missing one."""

    code = "missing_supervisors"
    http_status = status.HTTP_409_CONFLICT

    def __init__(self, names: list[str]):
        self.names = names
        self.count = len(names)
        super().__init__(
            f"{self.count} active staff member(s) have no supervisor assigned",
            details={"count": self.count, "names": names},
        )


class InvalidTransition(EvaluationCycleError):
    code = "invalid_transition"
    http_status = status.HTTP_409_CONFLICT

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(
            f"Cannot move evaluation from {current} to {target}",
            details={"from": current, "to": target},
        )


class AlreadySubmitted(EvaluationCycleError):
    code = "already_submitted"
    http_status = status.HTTP_409_CONFLICT

    def __init__(self, phase: str, current: str):
        self.phase = phase
        self.current = current
        super().__init__(
            f"The {phase} evaluation has already been submitted",
            details={"phase": phase, "status": current},
        )


class IncompleteAnswers(EvaluationCycleError):
    code = "incomplete_answers"
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, missing: list[str], unknown: list[str] | None = None):
        self.missing = missing
        self.unknown = unknown or []
        super().__init__(
            "Every competency question must be answered exactly once",
            details={"missing": missing, "unknown": self.unknown},
        )


class InvalidLevel(EvaluationCycleError):
    code = "invalid_level"
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, level: Any, question_id: str | None = None):
        self.level = level
        self.question_id = question_id
        details: dict[str, Any] = {"level": level}
        if question_id is not None:
            details["question_id"] = question_id
        super().__init__(f"Invalid level: {level!r}. Must be an integer 1-5", details=details)


class DependencyUnavailable(EvaluationCycleError):
    """The store or directory could not be reached; callers should retry with backoff."""

    code = "dependency_unavailable"
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(
            f"A backing service is unavailable during {operation}",
            details={"operation": operation},
        )


@contextmanager
def dependency_guard(operation: str) -> Iterator[None]:
    """Translate connectivity failures from the store into DependencyUnavailable."""
    try:
        yield
    except (OperationalError, InterfaceError) as e:
        logger.error("dependency failure during %s: %s", operation, e.__class__.__name__)
        raise DependencyUnavailable(operation) from e


async def _handle_engine_error(request: Request, exc: EvaluationCycleError) -> JSONResponse:
    return JSONResponse(status_code=exc.http_status, content={"detail": exc.to_detail()})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EvaluationCycleError, _handle_engine_error)
