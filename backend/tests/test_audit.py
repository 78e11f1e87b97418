"""
Tests for the audit logger: entry shapes, descriptions, legacy timeline
events and queries.
"""
from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest


def log_row(action_type, **overrides):
    data = dict(
        id="log-1",
        user_id="user-1",
        project_id="proj-1",
        action_type=action_type,
        entity_type="project",
        entity_id="proj-1",
        field_name=None,
        old_value=None,
        new_value=None,
        event_metadata={},
        ip_address=None,
        user_agent=None,
        created_at=datetime(2026, 1, 5, 9, 0),
    )
    data.update(overrides)
    return SimpleNamespace(**data)


# =============================================================================
# TEST: DESCRIPTIONS AND LEGACY EVENTS
# =============================================================================

class TestActionDescriptions:

    def test_create(self):
        from prelimpro.services.audit import get_action_description

        assert get_action_description(log_row("create", new_value="Dock B")) == 'Project "Dock B" was created'

    def test_field_update(self):
        from prelimpro.services.audit import get_action_description

        log = log_row("update", field_name="lender_name", old_value=None, new_value="First Valley Bank")
        assert get_action_description(log) == 'lender_name was updated from "empty" to "First Valley Bank"'

    def test_status_change(self):
        from prelimpro.services.audit import get_action_description

        log = log_row("status_change", old_value="draft", new_value="pending")
        assert get_action_description(log) == 'Status changed from "draft" to "pending"'

    def test_delivery_and_signature(self):
        from prelimpro.services.audit import get_action_description

        delivery = log_row("delivery", event_metadata={"delivery_method": "mail"})
        signature = log_row("signature", event_metadata={"signer_name": "Pat Owner"})

        assert get_action_description(delivery) == "Notice was delivered via mail"
        assert get_action_description(signature) == "Electronic signature received from Pat Owner"


class TestLegacyEvents:

    @pytest.mark.parametrize("action,event_type", [
        ("create", "created"),
        ("update", "update"),
        ("status_change", "update"),
        ("document_generated", "notice"),
        ("notice", "notice"),
        ("delivery", "delivery"),
        ("delivery_confirmed", "delivery"),
        ("proof", "proof"),
        ("signature", "signature"),
        ("reminder_sent", "update"),
    ])
    def test_event_type_mapping(self, action, event_type):
        from prelimpro.services.audit import convert_to_legacy_event

        assert convert_to_legacy_event(log_row(action))["event_type"] == event_type

    def test_legacy_event_shape(self):
        from prelimpro.services.audit import convert_to_legacy_event

        event = convert_to_legacy_event(log_row(
            "proof",
            project_id=None,
            event_metadata={"document_url": "https://files.example.com/pos.pdf"},
        ))

        assert event["project_id"] == ""
        assert event["user_name"] == "System"
        assert event["document_url"] == "https://files.example.com/pos.pdf"
        assert event["created_at"] == "2026-01-05T09:00:00"

    def test_legacy_types_to_actions(self):
        from prelimpro.models.db_models import AuditActionType
        from prelimpro.services.audit import legacy_event_types_to_actions

        actions = legacy_event_types_to_actions(["delivery", "bogus"])
        assert set(actions) == {AuditActionType.DELIVERY, AuditActionType.DELIVERY_CONFIRMED}


# =============================================================================
# TEST: AUDIT LOGGER (SQLite)
# =============================================================================

class TestAuditLogger:

    def test_log_event_stamps_request_context(self, db_session, user):
        from prelimpro.models.db_models import AuditActionType, AuditEntityType
        from prelimpro.services.audit import AuditLogger

        audit = AuditLogger(db_session, user.id, ip_address="10.0.0.7", user_agent="pytest")
        entry = audit.log_project_created("proj-1", "Riverside Medical Office")

        assert entry.action_type == AuditActionType.CREATE
        assert entry.entity_type == AuditEntityType.PROJECT
        assert entry.new_value == "Riverside Medical Office"
        assert entry.ip_address == "10.0.0.7"
        assert entry.user_agent == "pytest"
        assert entry.event_metadata == {"project_name": "Riverside Medical Office"}

    def test_unknown_action_rejected(self, db_session, user):
        from prelimpro.services.audit import AuditLogger

        with pytest.raises(ValueError):
            AuditLogger(db_session, user.id).log_event("teleported", project_id="proj-1")

    def test_status_update_row(self, db_session, user):
        from prelimpro.models.db_models import ProjectStatus
        from prelimpro.services.audit import AuditLogger

        entry = AuditLogger(db_session, user.id).log_status_update("proj-1", ProjectStatus.DRAFT, ProjectStatus.PENDING)

        assert entry.field_name == "status"
        assert entry.old_value == "draft"
        assert entry.new_value == "pending"
        assert entry.event_metadata["new_status"] == "pending"

    def test_deleted_project_row_has_no_project_id(self, db_session, user):
        from prelimpro.services.audit import AuditLogger

        entry = AuditLogger(db_session, user.id).log_project_deleted("proj-1", "Dock B")
        assert entry.project_id is None
        assert entry.entity_id == "proj-1"
        assert entry.old_value == "Dock B"

    def test_profile_update_row(self, db_session, user):
        from prelimpro.models.db_models import AuditEntityType
        from prelimpro.services.audit import AuditLogger

        entry = AuditLogger(db_session, user.id).log_profile_update("phone", None, "(916) 555-0100")
        assert entry.entity_type == AuditEntityType.PROFILE
        assert entry.entity_id == user.id
        assert entry.project_id is None

    def test_project_logs_scoped_to_user_and_project(self, db_session, user):
        from prelimpro.services.audit import AuditLogger

        mine = AuditLogger(db_session, user.id)
        theirs = AuditLogger(db_session, "someone-else")
        mine.log_project_created("proj-1", "Dock B")
        mine.log_notice_generated("proj-1", "California")
        mine.log_project_created("proj-2", "Dock C")
        theirs.log_project_created("proj-1", "Dock B")

        logs = mine.get_project_audit_logs("proj-1")
        assert len(logs) == 2
        assert all(log.user_id == user.id for log in logs)

    def test_user_logs_paginated_with_count(self, db_session, user):
        from prelimpro.services.audit import AuditLogger

        audit = AuditLogger(db_session, user.id)
        for i in range(5):
            audit.log_field_update("proj-1", "description", f"v{i}", f"v{i + 1}")

        logs, count = audit.get_user_audit_logs(limit=2, offset=1)
        assert count == 5
        assert len(logs) == 2

    def test_filtered_logs_by_action_and_date(self, db_session, user):
        from prelimpro.models.db_models import AuditActionType
        from prelimpro.services.audit import AuditLogger

        audit = AuditLogger(db_session, user.id)
        audit.log_project_created("proj-1", "Dock B")
        audit.log_delivery("proj-1", "mail", "Pat Owner", "1 Main St", "9400")

        deliveries = audit.get_filtered_audit_logs("proj-1", action_types=[AuditActionType.DELIVERY])
        assert [log.action_type for log in deliveries] == [AuditActionType.DELIVERY]

        future = datetime.utcnow() + timedelta(days=1)
        assert audit.get_filtered_audit_logs("proj-1", start_date=future) == []

    def test_audit_events_with_legacy_filter(self, db_session, user):
        from prelimpro.services.audit import AuditLogger

        audit = AuditLogger(db_session, user.id)
        audit.log_project_created("proj-1", "Dock B")
        audit.log_notice_generated("proj-1", "California")
        audit.log_signature("proj-1", "Pat Owner", "pat@example.com", "docusign")

        events = audit.get_audit_events("proj-1", event_types=["notice", "signature"])
        assert sorted(e["event_type"] for e in events) == ["notice", "signature"]
        assert audit.get_audit_events("proj-1", event_types=["bogus"]) == []
        assert len(audit.get_audit_events("proj-1")) == 3

    def test_reminder_idempotency_check(self, db_session, user):
        from prelimpro.services.audit import AuditLogger

        audit = AuditLogger(db_session, user.id)
        assert audit.has_reminder_been_sent("proj-1", "7_day") is False

        audit.log_reminder_sent("proj-1", "7_day", 7)

        assert audit.has_reminder_been_sent("proj-1", "7_day") is True
        assert audit.has_reminder_been_sent("proj-1", "3_day") is False


# =============================================================================
# TEST: COMPLIANCE CHECKLIST
# =============================================================================

class TestComplianceStatus:

    def test_partial_checklist(self, db_session, user):
        from prelimpro.services.audit import AuditLogger

        audit = AuditLogger(db_session, user.id)
        audit.log_project_created("proj-1", "Dock B")
        audit.log_notice_generated("proj-1", "California")
        audit.log_delivery("proj-1", "mail", "Pat Owner", "1 Main St", "9400")

        status = audit.get_compliance_status("proj-1")

        assert status == {
            "notice_generated": True,
            "proof_of_service_signed": False,
            "delivery_recorded": True,
            "proof_uploaded": False,
            "completed_steps": 2,
            "total_steps": 4,
            "is_complete": False,
        }

    def test_complete_checklist(self, db_session, user):
        from prelimpro.services.audit import AuditLogger

        audit = AuditLogger(db_session, user.id)
        audit.log_notice_generated("proj-1", "California")
        audit.log_delivery("proj-1", "mail", "Pat Owner", "1 Main St", "9400")
        audit.log_proof_of_service("proj-1", "certified_mail", "https://files.test/pos.pdf", datetime(2026, 1, 9))
        audit.log_signature("proj-1", "Pat Owner", "pat@example.com", "docusign")

        status = audit.get_compliance_status("proj-1")

        assert status["completed_steps"] == 4
        assert status["is_complete"] is True

    def test_confirmed_delivery_counts_and_other_projects_do_not(self, db_session, user):
        from prelimpro.services.audit import AuditLogger

        audit = AuditLogger(db_session, user.id)
        audit.log_delivery_confirmed("proj-1", "mail", datetime(2026, 1, 12))
        audit.log_signature("proj-2", "Pat Owner", "pat@example.com", "docusign")
        AuditLogger(db_session, "someone-else").log_notice_generated("proj-1", "California")

        status = audit.get_compliance_status("proj-1")

        assert status["delivery_recorded"] is True
        assert status["notice_generated"] is False
        assert status["proof_of_service_signed"] is False
        assert status["completed_steps"] == 1
