"""
Two-phase submission workflow for a single evaluation record.

    pending_staff --staff submits--> pending_supervisor --supervisor submits--> completed

Each submission is write-once. The status check is a precondition and the
record's version column makes the write a compare-and-set: if another writer
advanced the record between our read and our flush, the flush fails with
StaleDataError and the caller sees AlreadySubmitted.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from evalcycle.core.audit import EVALUATION_ENTITY, log_event
from evalcycle.core.errors import (
    AlreadySubmitted,
    IncompleteAnswers,
    InvalidLevel,
    InvalidTransition,
    NotFound,
    dependency_guard,
)
from evalcycle.core.questions import QUESTION_IDS
from evalcycle.core.scoring import score_of
from evalcycle.models.evaluation_record import EvaluationRecord, EvaluationStatus, TRANSITIONS
from evalcycle.models.user import User

logger = logging.getLogger(__name__)

_ORDER = list(EvaluationStatus)

SupervisorNotifier = Callable[[Session, EvaluationRecord, User | None], None]


def audit_supervisor_notification(db: Session, record: EvaluationRecord, actor: User | None) -> None:
    """Default notifier: records the signal; delivery (email, inbox) happens elsewhere."""
    log_event(
        db=db,
        actor=actor,
        action="EVALUATION_SUPERVISOR_NOTIFIED",
        entity_type=EVALUATION_ENTITY,
        entity_id=record.id,
        metadata={
            "cycle_id": str(record.cycle_id),
            "supervisor_employee_id": (
                str(record.supervisor_employee_id) if record.supervisor_employee_id else None
            ),
        },
    )
    logger.info(
        "supervisor notified of pending review",
        extra={"evaluation_id": str(record.id), "supervisor_employee_id": str(record.supervisor_employee_id)},
    )


def validate_answers(answers: Mapping[str, Any]) -> dict[str, int]:
    """
    A complete answer set has exactly one level (1-5) for every catalog
    question and nothing else. Returns the answers in catalog order.
    """
    missing = [qid for qid in QUESTION_IDS if qid not in answers]
    unknown = sorted(k for k in answers if k not in QUESTION_IDS)
    if missing or unknown:
        raise IncompleteAnswers(missing=missing, unknown=unknown)

    for qid in QUESTION_IDS:
        try:
            score_of(answers[qid])
        except InvalidLevel:
            raise InvalidLevel(answers[qid], question_id=qid) from None

    return {qid: answers[qid] for qid in QUESTION_IDS}


def get_record(db: Session, record_id: uuid.UUID, *, lock: bool = False) -> EvaluationRecord:
    with dependency_guard("load evaluation"):
        q = db.query(EvaluationRecord).filter(EvaluationRecord.id == record_id)
        if lock:
            q = q.with_for_update().populate_existing()
        record = q.one_or_none()
    if not record:
        raise NotFound("Evaluation", record_id)
    return record


def _check_transition(record: EvaluationRecord, target: EvaluationStatus, phase: str) -> None:
    current = record.state
    if TRANSITIONS[current] == target:
        return
    # Already at or past the target: this phase was submitted before
    if _ORDER.index(current) >= _ORDER.index(target):
        raise AlreadySubmitted(phase=phase, current=current.value)
    raise InvalidTransition(current=current.value, target=target.value)


def _advance(
    db: Session,
    record: EvaluationRecord,
    *,
    phase: str,
    target: EvaluationStatus,
    answers: Mapping[str, Any],
    actor: User | None,
) -> EvaluationRecord:
    _check_transition(record, target, phase)
    clean = validate_answers(answers)

    prev = record.status
    now = datetime.now(timezone.utc)

    try:
        with dependency_guard(f"{phase} submission"):
            if phase == "staff":
                record.staff_answers = clean
                record.staff_submitted_at = now
            else:
                record.supervisor_answers = clean
                record.supervisor_submitted_at = now
            record.status = target.value

            db.flush()  # bumps version; raises StaleDataError if someone got there first

            log_event(
                db=db,
                actor=actor,
                action=f"EVALUATION_{phase.upper()}_SUBMITTED",
                entity_type=EVALUATION_ENTITY,
                entity_id=record.id,
                metadata={
                    "cycle_id": str(record.cycle_id),
                    "from": prev,
                    "to": record.status,
                    "version": record.version,
                },
            )
            return record
    except StaleDataError:
        db.rollback()
        current = get_record(db, record.id)
        logger.warning(
            "concurrent %s submission lost the race", phase,
            extra={"evaluation_id": str(record.id), "status": current.status},
        )
        raise AlreadySubmitted(phase=phase, current=current.status) from None


def submit_staff_evaluation(
    db: Session,
    record_id: uuid.UUID,
    answers: Mapping[str, Any],
    *,
    actor: User | None = None,
    notify: SupervisorNotifier = audit_supervisor_notification,
) -> EvaluationRecord:
    try:
        record = get_record(db, record_id, lock=True)
        _advance(
            db,
            record,
            phase="staff",
            target=EvaluationStatus.PENDING_SUPERVISOR,
            answers=answers,
            actor=actor,
        )
        notify(db, record, actor)
        with dependency_guard("staff submission"):
            db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "staff evaluation submitted",
        extra={"evaluation_id": str(record.id), "cycle_id": str(record.cycle_id)},
    )
    return record


def submit_supervisor_evaluation(
    db: Session,
    record_id: uuid.UUID,
    answers: Mapping[str, Any],
    *,
    actor: User | None = None,
) -> EvaluationRecord:
    try:
        record = get_record(db, record_id, lock=True)
        _advance(
            db,
            record,
            phase="supervisor",
            target=EvaluationStatus.COMPLETED,
            answers=answers,
            actor=actor,
        )
        with dependency_guard("supervisor submission"):
            db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "supervisor evaluation submitted",
        extra={"evaluation_id": str(record.id), "cycle_id": str(record.cycle_id)},
    )
    return record
