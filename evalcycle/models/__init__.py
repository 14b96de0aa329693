from evalcycle.models.audit_event import AuditEvent
from evalcycle.models.employee import Employee
from evalcycle.models.evaluation_cycle import EvaluationCycle
from evalcycle.models.evaluation_record import EvaluationRecord
from evalcycle.models.rbac import Role, UserRole
from evalcycle.models.user import User

__all__ = [ "AuditEvent", "Employee", "EvaluationCycle",
           "EvaluationRecord", "Role", "UserRole", "User" ]
