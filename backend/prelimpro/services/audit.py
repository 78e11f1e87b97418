"""
Audit Logger

Append-only trail of everything that happens to a project and its notice
documents. Each helper emits exactly one row. Rows are written in the
caller's transaction, so an action and its audit entry commit together.

Core principles:
1. The audit log records what happened. It never decides.
2. Append-only - rows are never updated or deleted.
3. Project deletion keeps its log rows (project_id is NULL on the delete entry).
"""
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union
from uuid import uuid4

from sqlalchemy.orm import Session

from ..models.db_models import AuditLogDB, AuditActionType, AuditEntityType

logger = logging.getLogger(__name__)


TEMPLATE_VERSION = "1.0"

# Legacy timeline event types shown in older clients
LEGACY_EVENT_TYPE_MAP: Dict[AuditActionType, str] = {
    AuditActionType.CREATE: "created",
    AuditActionType.UPDATE: "update",
    AuditActionType.DELETE: "update",
    AuditActionType.STATUS_CHANGE: "update",
    AuditActionType.DELIVERY_CONFIRMED: "delivery",
    AuditActionType.DOCUMENT_GENERATED: "notice",
    AuditActionType.DOCUMENT_MODIFIED: "notice",
    AuditActionType.EMAIL_SENT: "update",
    AuditActionType.REMINDER_SENT: "update",
    AuditActionType.NOTICE: "notice",
    AuditActionType.DELIVERY: "delivery",
    AuditActionType.PROOF: "proof",
    AuditActionType.SIGNATURE: "signature",
}

# Reverse of the above, for filtering by legacy event type
LEGACY_ACTION_TYPES: Dict[str, List[AuditActionType]] = {}
for _act, _evt in LEGACY_EVENT_TYPE_MAP.items():
    if _act != AuditActionType.DELETE:
        LEGACY_ACTION_TYPES.setdefault(_evt, []).append(_act)

# Compliance checklist: (status key, legacy event type) in display order
COMPLIANCE_STEPS: List[Tuple[str, str]] = [
    ("notice_generated", "notice"),
    ("proof_of_service_signed", "signature"),
    ("delivery_recorded", "delivery"),
    ("proof_uploaded", "proof"),
]


def _now_iso() -> str:
    return datetime.utcnow().isoformat()


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    return str(getattr(value, "value", value))


def _action(log: Any) -> AuditActionType:
    return AuditActionType(getattr(log.action_type, "value", log.action_type))


# =============================================================================
# DESCRIPTIONS
# =============================================================================

def get_action_description(log: Any) -> str:
    """Human-readable sentence for an audit entry."""
    meta = log.event_metadata or {}
    action = _action(log)

    if action == AuditActionType.CREATE:
        return f'Project "{log.new_value or "Unknown"}" was created'
    if action == AuditActionType.UPDATE:
        if log.field_name:
            return f'{log.field_name} was updated from "{log.old_value or "empty"}" to "{log.new_value or "empty"}"'
        return "Project was updated"
    if action == AuditActionType.DELETE:
        return f'Project "{log.old_value or "Unknown"}" was deleted'
    if action == AuditActionType.STATUS_CHANGE:
        return f'Status changed from "{log.old_value or "none"}" to "{log.new_value or "none"}"'
    if action == AuditActionType.DELIVERY:
        return f"Notice was delivered via {meta.get('delivery_method') or 'unknown method'}"
    if action == AuditActionType.SIGNATURE:
        return f"Electronic signature received from {meta.get('signer_name') or 'unknown'}"

    return {
        AuditActionType.DELIVERY_CONFIRMED: "Delivery was confirmed",
        AuditActionType.DOCUMENT_GENERATED: "Document was generated",
        AuditActionType.DOCUMENT_MODIFIED: "Document was modified",
        AuditActionType.EMAIL_SENT: "Email notification was sent",
        AuditActionType.REMINDER_SENT: "Reminder was sent",
        AuditActionType.NOTICE: "Preliminary notice was generated",
        AuditActionType.PROOF: "Proof of service was uploaded",
    }.get(action, action.value)


def serialize_audit_log(log: Any) -> Dict[str, Any]:
    return {
        "id": log.id,
        "user_id": log.user_id,
        "project_id": log.project_id,
        "action_type": _action(log).value,
        "entity_type": getattr(log.entity_type, "value", log.entity_type),
        "entity_id": log.entity_id,
        "field_name": log.field_name,
        "old_value": log.old_value,
        "new_value": log.new_value,
        "metadata": log.event_metadata or {},
        "ip_address": log.ip_address,
        "user_agent": log.user_agent,
        "created_at": log.created_at.isoformat() if log.created_at else None,
        "description": get_action_description(log),
    }


def convert_to_legacy_event(log: Any) -> Dict[str, Any]:
    """Timeline event shape: created | update | notice | delivery | proof | signature."""
    meta = log.event_metadata or {}
    return {
        "id": log.id,
        "project_id": log.project_id or "",
        "event_type": LEGACY_EVENT_TYPE_MAP.get(_action(log), "update"),
        "description": get_action_description(log),
        "user_name": meta.get("user_name") or "System",
        "user_email": meta.get("user_email"),
        "document_url": meta.get("document_url"),
        "metadata": meta,
        "created_at": log.created_at.isoformat() if log.created_at else None,
    }


def legacy_event_types_to_actions(event_types: Iterable[str]) -> List[AuditActionType]:
    actions: List[AuditActionType] = []
    for event_type in event_types:
        actions.extend(LEGACY_ACTION_TYPES.get(event_type, []))
    return actions


# =============================================================================
# AUDIT LOGGER
# =============================================================================

class AuditLogger:
    """
    Emits and queries audit log entries for one user.

    The request context (IP address, user agent) is captured once at
    construction and stamped on every entry.
    """

    def __init__(
        self,
        db: Session,
        user_id: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ):
        self.db = db
        self.user_id = user_id
        self.ip_address = ip_address
        self.user_agent = user_agent

    def log_event(
        self,
        action_type: Union[AuditActionType, str],
        project_id: Optional[str] = None,
        entity_type: Union[AuditEntityType, str] = AuditEntityType.PROJECT,
        entity_id: Optional[str] = None,
        field_name: Optional[str] = None,
        old_value: Any = None,
        new_value: Any = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> AuditLogDB:
        """Append one audit row. Raises ValueError for unknown action/entity types."""
        entry = AuditLogDB(
            id=str(uuid4()),
            user_id=self.user_id,
            project_id=project_id,
            action_type=AuditActionType(action_type),
            entity_type=AuditEntityType(entity_type),
            entity_id=entity_id,
            field_name=field_name,
            old_value=_as_text(old_value),
            new_value=_as_text(new_value),
            event_metadata=metadata or {},
            ip_address=self.ip_address,
            user_agent=self.user_agent,
            created_at=datetime.utcnow(),
        )
        self.db.add(entry)
        self.db.flush()

        logger.info(f"Audit {entry.action_type.value} for project {project_id} by user {self.user_id}")
        return entry

    # -------------------------------------------------------------------------
    # Event helpers
    # -------------------------------------------------------------------------

    def log_project_created(self, project_id: str, project_name: str, metadata: Optional[Dict[str, Any]] = None) -> AuditLogDB:
        return self.log_event(
            AuditActionType.CREATE,
            project_id=project_id,
            entity_id=project_id,
            new_value=project_name,
            metadata={"project_name": project_name, **(metadata or {})},
        )

    def log_notice_generated(self, project_id: str, state: str, document_url: Optional[str] = None) -> AuditLogDB:
        return self.log_event(
            AuditActionType.DOCUMENT_GENERATED,
            project_id=project_id,
            entity_type=AuditEntityType.DOCUMENT,
            entity_id=project_id,
            new_value=f"{state} preliminary notice",
            metadata={
                "state": state,
                "document_url": document_url,
                "template_version": TEMPLATE_VERSION,
                "generated_at": _now_iso(),
            },
        )

    def log_delivery(
        self,
        project_id: str,
        delivery_method: str,
        recipient_name: str,
        recipient_address: str,
        tracking_number: Optional[str] = None,
    ) -> AuditLogDB:
        return self.log_event(
            AuditActionType.DELIVERY,
            project_id=project_id,
            entity_id=project_id,
            new_value=delivery_method,
            metadata={
                "delivery_method": _as_text(delivery_method),
                "recipient": recipient_name,
                "recipient_address": recipient_address,
                "tracking_number": tracking_number,
                "sent_at": _now_iso(),
            },
        )

    def log_delivery_confirmed(self, project_id: str, delivery_method: Optional[str], confirmed_at: datetime) -> AuditLogDB:
        return self.log_event(
            AuditActionType.DELIVERY_CONFIRMED,
            project_id=project_id,
            entity_id=project_id,
            new_value=confirmed_at,
            metadata={
                "delivery_method": _as_text(delivery_method),
                "confirmed_at": confirmed_at.isoformat(),
            },
        )

    def log_proof_of_service(
        self,
        project_id: str,
        proof_type: str,
        document_url: str,
        delivery_date: datetime,
        signed_by: Optional[str] = None,
    ) -> AuditLogDB:
        return self.log_event(
            AuditActionType.PROOF,
            project_id=project_id,
            entity_type=AuditEntityType.DOCUMENT,
            entity_id=project_id,
            new_value=proof_type,
            metadata={
                "proof_type": proof_type,
                "document_url": document_url,
                "delivery_date": delivery_date.isoformat(),
                "signed_by": signed_by,
            },
        )

    def log_signature(
        self,
        project_id: str,
        signer_name: str,
        signer_email: str,
        signature_provider: str,
        document_url: Optional[str] = None,
    ) -> AuditLogDB:
        return self.log_event(
            AuditActionType.SIGNATURE,
            project_id=project_id,
            entity_type=AuditEntityType.DOCUMENT,
            entity_id=project_id,
            new_value=signer_name,
            metadata={
                "signer_name": signer_name,
                "signer_email": signer_email,
                "signature_provider": signature_provider,
                "document_url": document_url,
                "signed_at": _now_iso(),
            },
        )

    def log_status_update(self, project_id: str, previous_status: str, new_status: str) -> AuditLogDB:
        previous, new = _as_text(previous_status), _as_text(new_status)
        return self.log_event(
            AuditActionType.STATUS_CHANGE,
            project_id=project_id,
            entity_id=project_id,
            field_name="status",
            old_value=previous,
            new_value=new,
            metadata={"previous_status": previous, "new_status": new, "changed_at": _now_iso()},
        )

    def log_field_update(
        self,
        project_id: str,
        field_name: str,
        old_value: Any,
        new_value: Any,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> AuditLogDB:
        return self.log_event(
            AuditActionType.UPDATE,
            project_id=project_id,
            entity_id=project_id,
            field_name=field_name,
            old_value=old_value,
            new_value=new_value,
            metadata={"field_name": field_name, **(metadata or {})},
        )

    def log_profile_update(self, field_name: str, old_value: Any, new_value: Any) -> AuditLogDB:
        return self.log_event(
            AuditActionType.UPDATE,
            entity_type=AuditEntityType.PROFILE,
            entity_id=self.user_id,
            field_name=field_name,
            old_value=old_value,
            new_value=new_value,
            metadata={"field_name": field_name},
        )

    def log_email_sent(self, project_id: str, recipient_email: str, email_type: str, subject: Optional[str] = None) -> AuditLogDB:
        return self.log_event(
            AuditActionType.EMAIL_SENT,
            project_id=project_id,
            entity_id=project_id,
            new_value=recipient_email,
            metadata={
                "recipient_email": recipient_email,
                "email_type": email_type,
                "subject": subject,
                "sent_at": _now_iso(),
            },
        )

    def log_reminder_sent(self, project_id: str, reminder_type: str, days_until_deadline: int) -> AuditLogDB:
        return self.log_event(
            AuditActionType.REMINDER_SENT,
            project_id=project_id,
            entity_id=project_id,
            new_value=reminder_type,
            metadata={
                "reminder_type": reminder_type,
                "days_until_deadline": days_until_deadline,
                "sent_at": _now_iso(),
            },
        )

    def log_project_deleted(self, project_id: str, project_name: str, metadata: Optional[Dict[str, Any]] = None) -> AuditLogDB:
        return self.log_event(
            AuditActionType.DELETE,
            project_id=None,  # row outlives the project
            entity_id=project_id,
            old_value=project_name,
            metadata={"project_name": project_name, "deleted_at": _now_iso(), **(metadata or {})},
        )

    # -------------------------------------------------------------------------
    # Queries (read-only)
    # -------------------------------------------------------------------------

    def _filtered(
        self,
        query,
        action_types: Optional[Iterable[Union[AuditActionType, str]]] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ):
        if action_types:
            query = query.filter(AuditLogDB.action_type.in_([AuditActionType(a) for a in action_types]))
        if start_date:
            query = query.filter(AuditLogDB.created_at >= start_date)
        if end_date:
            query = query.filter(AuditLogDB.created_at <= end_date)
        return query

    def get_project_audit_logs(self, project_id: str) -> List[AuditLogDB]:
        """All entries for a project, newest first."""
        return self.db.query(AuditLogDB).filter(
            AuditLogDB.user_id == self.user_id,
            AuditLogDB.project_id == project_id,
        ).order_by(AuditLogDB.created_at.desc()).all()

    def get_user_audit_logs(
        self,
        limit: int = 50,
        offset: int = 0,
        action_types: Optional[Iterable[Union[AuditActionType, str]]] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Tuple[List[AuditLogDB], int]:
        """Page of the user's entries plus the total matching count."""
        query = self._filtered(
            self.db.query(AuditLogDB).filter(AuditLogDB.user_id == self.user_id),
            action_types, start_date, end_date,
        )
        count = query.count()
        logs = query.order_by(AuditLogDB.created_at.desc()).offset(offset).limit(limit).all()
        return logs, count

    def get_filtered_audit_logs(
        self,
        project_id: str,
        action_types: Optional[Iterable[Union[AuditActionType, str]]] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[AuditLogDB]:
        query = self._filtered(
            self.db.query(AuditLogDB).filter(
                AuditLogDB.user_id == self.user_id,
                AuditLogDB.project_id == project_id,
            ),
            action_types, start_date, end_date,
        ).order_by(AuditLogDB.created_at.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    def get_audit_events(self, project_id: str, event_types: Optional[Iterable[str]] = None) -> List[Dict[str, Any]]:
        """Legacy timeline events for a project, optionally filtered by legacy event type."""
        if event_types:
            actions = legacy_event_types_to_actions(event_types)
            if not actions:
                return []
            logs = self.get_filtered_audit_logs(project_id, action_types=actions)
        else:
            logs = self.get_project_audit_logs(project_id)
        return [convert_to_legacy_event(log) for log in logs]

    def has_reminder_been_sent(self, project_id: str, reminder_type: str) -> bool:
        """True if a reminder of this type was already logged for the project."""
        return self.db.query(AuditLogDB).filter(
            AuditLogDB.project_id == project_id,
            AuditLogDB.action_type == AuditActionType.REMINDER_SENT,
            AuditLogDB.new_value == reminder_type,
        ).first() is not None

    def get_compliance_status(self, project_id: str) -> Dict[str, Any]:
        """
        Four-step compliance checklist derived from the project's audit trail:
        notice generated, proof of service signed, delivery recorded and proof
        uploaded. The project is complete only when every step has an entry.
        """
        rows = self.db.query(AuditLogDB.action_type).filter(
            AuditLogDB.user_id == self.user_id,
            AuditLogDB.project_id == project_id,
        ).distinct().all()
        seen = {LEGACY_EVENT_TYPE_MAP.get(_action(row)) for row in rows}

        status: Dict[str, Any] = {key: event_type in seen for key, event_type in COMPLIANCE_STEPS}
        status["completed_steps"] = sum(1 for key, _ in COMPLIANCE_STEPS if status[key])
        status["total_steps"] = len(COMPLIANCE_STEPS)
        status["is_complete"] = status["completed_steps"] == len(COMPLIANCE_STEPS)
        return status
