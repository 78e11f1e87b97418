"""
Tests for project CRUD, status transitions and project templates.

Every lifecycle step must leave an audit entry behind; illegal moves must
raise without touching the project.
"""
from datetime import date, datetime

import pytest


def create(service, **overrides):
    data = {
        "project_name": "Riverside Medical Office",
        "state": "CA",
        "job_start_date": date(2026, 1, 5),
        "property_address": "1200 Riverside Dr, Sacramento, CA 95822",
        "property_owner_name": "Riverside Holdings LLC",
        "contract_amount": 48250.5,
    }
    data.update(overrides)
    return service.create_project(data)


def actions(service, project_id):
    return [log.action_type.value for log in service.audit.get_project_audit_logs(project_id)]


# =============================================================================
# TEST: TRANSITION RULES
# =============================================================================

class TestTransitionRules:

    @pytest.mark.parametrize("from_status,to_status", [
        ("draft", "pending"),
        ("draft", "sent"),
        ("pending", "draft"),
        ("pending", "sent"),
        ("sent", "delivered"),
        ("sent", "signed"),
        ("delivered", "signed"),
    ])
    def test_allowed(self, from_status, to_status):
        from prelimpro.models.db_models import ProjectStatus
        from prelimpro.services.projects import can_transition

        allowed, _ = can_transition(ProjectStatus(from_status), ProjectStatus(to_status))
        assert allowed is True

    @pytest.mark.parametrize("from_status,to_status", [
        ("sent", "draft"),
        ("delivered", "sent"),
        ("signed", "delivered"),
        ("signed", "draft"),
        ("draft", "signed"),
    ])
    def test_rejected(self, from_status, to_status):
        from prelimpro.models.db_models import ProjectStatus
        from prelimpro.services.projects import can_transition

        allowed, reason = can_transition(ProjectStatus(from_status), ProjectStatus(to_status))
        assert allowed is False
        assert reason == f"Cannot transition from {from_status} to {to_status}"


# =============================================================================
# TEST: CRUD
# =============================================================================

class TestProjectCrud:

    def test_create_derives_deadline_and_state(self, db_session, user):
        from prelimpro.services.projects import ProjectService

        service = ProjectService(db_session, user.id)
        project = create(service)

        assert project["state"] == "California"
        assert project["status"] == "draft"
        assert project["deadline"] == "2026-01-25"
        assert project["notice_required"] is True
        assert actions(service, project["id"]) == ["create"]

    def test_create_in_no_notice_state(self, db_session, user):
        from prelimpro.services.projects import ProjectService

        project = create(ProjectService(db_session, user.id), state="New York")

        assert project["notice_required"] is False
        assert project["deadline"] is None
        assert project["reminders"] == []

    def test_create_requires_name_and_state(self, db_session, user):
        from prelimpro.services.projects import ProjectService

        service = ProjectService(db_session, user.id)
        with pytest.raises(ValueError):
            create(service, project_name="")
        with pytest.raises(ValueError):
            create(service, state=None)

    def test_default_template_fills_blank_fields(self, db_session, user):
        from prelimpro.services.projects import ProjectService, ProjectTemplateService

        ProjectTemplateService(db_session, user.id).create_template({
            "template_name": "Valley jobs",
            "general_contractor_name": "BuildRight Inc",
            "lender_name": "First Valley Bank",
            "is_default": True,
        })
        service = ProjectService(db_session, user.id)

        project = create(service, lender_name="Harbor Credit Union")

        assert project["general_contractor_name"] == "BuildRight Inc"
        assert project["lender_name"] == "Harbor Credit Union"

    def test_default_template_skipped_when_disabled(self, db_session, user):
        from prelimpro.services.projects import ProjectService, ProjectTemplateService

        ProjectTemplateService(db_session, user.id).create_template({
            "template_name": "Valley jobs",
            "general_contractor_name": "BuildRight Inc",
            "is_default": True,
        })
        service = ProjectService(db_session, user.id)
        project = service.create_project(
            {"project_name": "Dock B", "state": "Texas"},
            apply_default_template=False,
        )
        assert project["general_contractor_name"] is None

    def test_update_logs_each_field_and_recalculates_deadline(self, db_session, user):
        from prelimpro.services.projects import ProjectService

        service = ProjectService(db_session, user.id)
        project = create(service)

        updated = service.update_project(project["id"], {
            "state": "TX",
            "lender_name": "First Valley Bank",
            "project_name": "Riverside Medical Office",
        })

        assert updated["state"] == "Texas"
        assert updated["deadline"] == "2026-01-20"
        logs = service.audit.get_project_audit_logs(project["id"])
        fields = sorted(log.field_name for log in logs if log.action_type.value == "update")
        assert fields == ["deadline", "lender_name", "state"]
        deadline_log = next(log for log in logs if log.field_name == "deadline")
        assert deadline_log.old_value == "2026-01-25"
        assert deadline_log.event_metadata["reason"] == "recalculated"

    def test_update_rejects_empty_required_fields(self, db_session, user):
        from prelimpro.services.projects import ProjectService

        service = ProjectService(db_session, user.id)
        project = create(service)

        with pytest.raises(ValueError):
            service.update_project(project["id"], {"project_name": ""})

    def test_missing_project(self, db_session, user):
        from prelimpro.services.projects import ProjectService

        service = ProjectService(db_session, user.id)
        assert service.get_project("nope") == {"error": "Project not found"}
        assert service.update_project("nope", {"description": "x"}) == {"error": "Project not found"}
        assert service.record_delivery("nope", "mail", "A", "B") == {"error": "Project not found"}

    def test_projects_scoped_to_owner(self, db_session, user):
        from prelimpro.services.projects import ProjectService

        project = create(ProjectService(db_session, user.id))
        other = ProjectService(db_session, "someone-else")

        assert other.get_project(project["id"]) == {"error": "Project not found"}
        assert other.list_projects() == []

    def test_list_filters(self, db_session, user):
        from prelimpro.models.db_models import ProjectStatus
        from prelimpro.services.projects import ProjectService

        service = ProjectService(db_session, user.id)
        first = create(service)
        create(service, state="Texas", project_name="Dock B")
        service.record_notice_generated(first["id"])

        assert len(service.list_projects()) == 2
        assert [p["state"] for p in service.list_projects(state="TX")] == ["Texas"]
        assert [p["id"] for p in service.list_projects(status=ProjectStatus.PENDING)] == [first["id"]]

    def test_delete_keeps_audit_trail(self, db_session, user):
        from prelimpro.models.db_models import AuditActionType, AuditLogDB
        from prelimpro.services.projects import ProjectService

        service = ProjectService(db_session, user.id)
        project = create(service)

        assert service.delete_project(project["id"]) == {"deleted": True, "project_id": project["id"]}
        assert service.get_project(project["id"]) == {"error": "Project not found"}

        deleted = db_session.query(AuditLogDB).filter(AuditLogDB.action_type == AuditActionType.DELETE).one()
        assert deleted.entity_id == project["id"]
        assert deleted.project_id is None


# =============================================================================
# TEST: LIFECYCLE
# =============================================================================

class TestProjectLifecycle:

    def test_full_lifecycle_is_audited(self, db_session, user):
        from prelimpro.services.projects import ProjectService

        service = ProjectService(db_session, user.id, ip_address="10.0.0.7")
        project = create(service)
        pid = project["id"]

        assert service.record_notice_generated(pid)["status"] == "pending"
        sent = service.record_delivery(pid, "mail", "Riverside Holdings LLC", "PO Box 88", "9400111899")
        assert sent["status"] == "sent"
        assert sent["delivery_method"] == "mail"
        assert sent["tracking_number"] == "9400111899"
        assert service.confirm_delivery(pid, datetime(2026, 1, 12, 10, 0))["status"] == "delivered"
        proof = service.record_proof_of_service(pid, "certified_mail_receipt", "https://files.example.com/pos.pdf", datetime(2026, 1, 12))
        assert proof["proof_of_service"] == "https://files.example.com/pos.pdf"
        assert service.record_signature(pid, "Pat Owner", "pat@example.com", "docusign")["status"] == "signed"

        logged = actions(service, pid)
        for expected in ("create", "document_generated", "delivery", "delivery_confirmed", "proof", "signature"):
            assert expected in logged
        assert logged.count("status_change") == 4

    def test_generating_twice_stays_pending(self, db_session, user):
        from prelimpro.services.projects import ProjectService

        service = ProjectService(db_session, user.id)
        pid = create(service)["id"]
        service.record_notice_generated(pid)
        service.record_notice_generated(pid)

        logged = actions(service, pid)
        assert logged.count("document_generated") == 2
        assert logged.count("status_change") == 1

    def test_backward_move_rejected(self, db_session, user):
        from prelimpro.services.projects import ProjectService, ProjectTransitionError

        service = ProjectService(db_session, user.id)
        pid = create(service)["id"]
        service.record_delivery(pid, "email", "Pat Owner", "pat@example.com")

        with pytest.raises(ProjectTransitionError):
            service.change_status(pid, "draft")
        assert service.get_project(pid)["status"] == "sent"

    def test_signed_is_terminal(self, db_session, user):
        from prelimpro.services.projects import ProjectService, ProjectTransitionError

        service = ProjectService(db_session, user.id)
        pid = create(service)["id"]
        service.record_delivery(pid, "esign", "Pat Owner", "pat@example.com")
        service.record_signature(pid, "Pat Owner", "pat@example.com", "docusign")

        with pytest.raises(ProjectTransitionError):
            service.confirm_delivery(pid)

    def test_proof_requires_sent_notice(self, db_session, user):
        from prelimpro.services.projects import ProjectService, ProjectTransitionError

        service = ProjectService(db_session, user.id)
        pid = create(service)["id"]

        with pytest.raises(ProjectTransitionError):
            service.record_proof_of_service(pid, "receipt", "https://files.example.com/pos.pdf", datetime(2026, 1, 12))

    def test_same_status_is_noop(self, db_session, user):
        from prelimpro.services.projects import ProjectService

        service = ProjectService(db_session, user.id)
        pid = create(service)["id"]
        service.change_status(pid, "draft")

        assert actions(service, pid) == ["create"]

    def test_email_sent_logged(self, db_session, user):
        from prelimpro.services.projects import ProjectService

        service = ProjectService(db_session, user.id)
        pid = create(service)["id"]
        service.record_email_sent(pid, "owner@example.com", "notice", subject="Preliminary Notice")

        assert "email_sent" in actions(service, pid)

    def test_unknown_delivery_method(self, db_session, user):
        from prelimpro.services.projects import ProjectService

        service = ProjectService(db_session, user.id)
        pid = create(service)["id"]

        with pytest.raises(ValueError):
            service.record_delivery(pid, "pigeon", "Pat Owner", "1 Main St")


# =============================================================================
# TEST: PROJECT TEMPLATES
# =============================================================================

class TestProjectTemplates:

    def test_single_default(self, db_session, user):
        from prelimpro.services.projects import ProjectTemplateService

        service = ProjectTemplateService(db_session, user.id)
        first = service.create_template({"template_name": "A", "is_default": True})
        second = service.create_template({"template_name": "B", "is_default": True})

        defaults = [t["id"] for t in service.list_templates() if t["is_default"]]
        assert defaults == [second["id"]]

        service.set_default(first["id"])
        defaults = [t["id"] for t in service.list_templates() if t["is_default"]]
        assert defaults == [first["id"]]

    def test_state_normalized(self, db_session, user):
        from prelimpro.services.projects import ProjectTemplateService

        template = ProjectTemplateService(db_session, user.id).create_template({"template_name": "A", "state": "fl"})
        assert template["state"] == "Florida"

    def test_name_required(self, db_session, user):
        from prelimpro.services.projects import ProjectTemplateService

        with pytest.raises(ValueError):
            ProjectTemplateService(db_session, user.id).create_template({"state": "Texas"})

    def test_missing_template(self, db_session, user):
        from prelimpro.services.projects import ProjectTemplateService

        service = ProjectTemplateService(db_session, user.id)
        assert service.update_template("nope", {"template_name": "x"}) == {"error": "Template not found"}
        assert service.delete_template("nope") == {"error": "Template not found"}

    def test_delete(self, db_session, user):
        from prelimpro.services.projects import ProjectTemplateService

        service = ProjectTemplateService(db_session, user.id)
        template = service.create_template({"template_name": "A"})
        service.delete_template(template["id"])
        assert service.list_templates() == []
