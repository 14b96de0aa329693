import logging
import uuid
from typing import Any

from sqlalchemy.orm import Session

from evalcycle.models.audit_event import AuditEvent
from evalcycle.models.user import User

logger = logging.getLogger(__name__)

CYCLE_ENTITY = "annual_evaluation_cycle"
EVALUATION_ENTITY = "annual_evaluation"


def log_event(
    *,
    db: Session,
    actor: User | None,
    action: str,
    entity_type: str,
    entity_id: uuid.UUID,
    metadata: dict[str, Any] | None = None,
) -> AuditEvent:
    """
    Adds an audit row to the caller's transaction; it is written (or dropped)
    together with the change it describes.
    """
    event = AuditEvent(
        actor_user_id=actor.id if actor else None,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        event_metadata=metadata,
    )
    db.add(event)
    logger.debug(
        "audit %s on %s %s",
        action,
        entity_type,
        entity_id,
        extra={"actor_user_id": str(actor.id) if actor else None},
    )
    return event
