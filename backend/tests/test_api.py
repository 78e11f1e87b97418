"""
API tests through FastAPI's TestClient against an in-memory database.
"""
import hashlib
import hmac
import json
import time
from datetime import date, timedelta

import pytest


def create_project(client, headers, **overrides):
    body = {
        "project_name": "Riverside Medical Office",
        "state": "CA",
        "job_start_date": "2026-01-05",
        "property_address": "1200 Riverside Dr, Sacramento, CA 95822",
        "property_owner_name": "Riverside Holdings LLC",
        "contract_amount": 48250.5,
    }
    body.update(overrides)
    return client.post("/projects", json=body, headers=headers)


# =============================================================================
# TEST: HEALTH & AUTH
# =============================================================================

class TestHealthAndAuth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_register_login_me(self, client):
        response = client.post("/auth/register", json={
            "email": "new@builder.com", "username": "newbuilder", "password": "longenough1",
        })
        assert response.status_code == 201

        login = client.post("/auth/login", json={"email": "new@builder.com", "password": "longenough1"})
        assert login.status_code == 200
        token = login.json()["access_token"]

        me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.json()["username"] == "newbuilder"

        plan = client.get("/billing/plan", headers={"Authorization": f"Bearer {token}"})
        assert plan.json()["plan_type"] == "free"

    def test_register_rejects_short_password(self, client):
        response = client.post("/auth/register", json={
            "email": "new@builder.com", "username": "newbuilder", "password": "short",
        })
        assert response.status_code == 422

    def test_duplicate_email(self, client, user):
        response = client.post("/auth/register", json={
            "email": user.email, "username": "another", "password": "longenough1",
        })
        assert response.status_code == 400
        assert response.json()["detail"] == "Email already registered"

    def test_bad_login(self, client, user):
        response = client.post("/auth/login", json={"email": user.email, "password": "whatever123"})
        assert response.status_code == 401

    def test_missing_or_bad_token(self, client):
        assert client.get("/projects").status_code in (401, 403)
        assert client.get("/projects", headers={"Authorization": "Bearer not-a-jwt"}).status_code == 401

    def test_unknown_subject_is_provisioned(self, client):
        from prelimpro.auth import create_access_token

        token = create_access_token("f3f9c3de-7f3c-4a57-9d5e-1c2b3a4d5e6f", "hosted@builder.com")
        response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["email"] == "hosted@builder.com"
        assert response.json()["username"] == "hosted"

    def test_profile_update_is_audited(self, client, auth_headers, session_factory, user):
        from prelimpro.models.db_models import AuditEntityType, AuditLogDB

        response = client.put("/auth/profile", headers=auth_headers, json={
            "phone": "(916) 555-0199",
            "company_name": "Acme Framing & Drywall LLC",
        })
        assert response.status_code == 200
        assert response.json()["phone"] == "(916) 555-0199"
        assert response.json()["profile_complete"] == 100

        db = session_factory()
        fields = sorted(
            log.field_name for log in db.query(AuditLogDB).filter(AuditLogDB.entity_type == AuditEntityType.PROFILE)
        )
        db.close()
        assert fields == ["company_name", "phone"]

    def test_profile_rejects_short_phone(self, client, auth_headers):
        response = client.put("/auth/profile", headers=auth_headers, json={"phone": "555-01"})
        assert response.status_code == 422


# =============================================================================
# TEST: PROJECTS
# =============================================================================

class TestProjectEndpoints:

    def test_create_and_fetch(self, client, auth_headers):
        created = create_project(client, auth_headers)
        assert created.status_code == 201
        project = created.json()
        assert project["state"] == "California"
        assert project["deadline"] == "2026-01-25"

        fetched = client.get(f"/projects/{project['id']}", headers=auth_headers)
        assert fetched.json()["id"] == project["id"]
        assert len(client.get("/projects", headers=auth_headers).json()) == 1

    def test_invalid_state(self, client, auth_headers):
        assert create_project(client, auth_headers, state="Atlantis").status_code == 422

    def test_missing_state_without_template(self, client, auth_headers):
        response = create_project(client, auth_headers, state=None)
        assert response.status_code == 400
        assert response.json()["detail"] == "state is required"

    def test_free_plan_limit(self, client, auth_headers):
        for i in range(3):
            assert create_project(client, auth_headers, project_name=f"Job {i}").status_code == 201

        response = create_project(client, auth_headers, project_name="Job 4")
        assert response.status_code == 402
        assert response.json()["detail"] == "No notices remaining. Upgrade or purchase more notices."

    def test_not_found(self, client, auth_headers):
        assert client.get("/projects/nope", headers=auth_headers).status_code == 404
        assert client.patch("/projects/nope", headers=auth_headers, json={"description": "x"}).status_code == 404

    def test_patch_recalculates_deadline(self, client, auth_headers):
        project = create_project(client, auth_headers).json()
        response = client.patch(f"/projects/{project['id']}", headers=auth_headers, json={"state": "Texas"})

        assert response.status_code == 200
        assert response.json()["deadline"] == "2026-01-20"

    def test_deadline_preview(self, client, auth_headers):
        response = client.get(
            "/projects/deadline-preview",
            params={"state": "FL", "job_start_date": "2026-04-01"},
            headers=auth_headers,
        )
        body = response.json()
        assert body["deadline"] == "2026-05-16"
        assert body["state"] == "Florida"
        assert body["days"] == 45

    def test_lifecycle_and_audit(self, client, auth_headers):
        pid = create_project(client, auth_headers).json()["id"]
        assert client.get(f"/projects/{pid}/compliance", headers=auth_headers).json()["completed_steps"] == 0

        notice = client.get(f"/projects/{pid}/notice", headers=auth_headers)
        assert notice.status_code == 200
        assert notice.headers["content-type"].startswith("text/html")
        assert "PRELIMINARY NOTICE" in notice.text

        sent = client.post(f"/projects/{pid}/delivery", headers=auth_headers, json={
            "delivery_method": "mail",
            "recipient_name": "Riverside Holdings LLC",
            "recipient_address": "PO Box 88",
            "tracking_number": "9400111899",
        })
        assert sent.json()["status"] == "sent"

        backwards = client.post(f"/projects/{pid}/status", headers=auth_headers, json={"status": "draft"})
        assert backwards.status_code == 400
        assert backwards.json()["detail"] == "Cannot transition from sent to draft"

        assert client.post(f"/projects/{pid}/delivery/confirm", headers=auth_headers, json={}).json()["status"] == "delivered"
        proof = client.post(f"/projects/{pid}/proof-of-service", headers=auth_headers, json={
            "proof_type": "certified_mail_receipt",
            "document_url": "https://files.example.com/pos.pdf",
            "delivery_date": "2026-01-12T10:00:00",
        })
        assert proof.status_code == 200
        signed = client.post(f"/projects/{pid}/signature", headers=auth_headers, json={
            "signer_name": "Pat Owner", "signer_email": "pat@example.com",
        })
        assert signed.json()["status"] == "signed"

        trail = client.get(f"/projects/{pid}/audit", headers=auth_headers).json()
        actions = {entry["action_type"] for entry in trail}
        assert {"create", "document_generated", "status_change", "delivery", "delivery_confirmed", "proof", "signature"} <= actions

        legacy = client.get(
            f"/projects/{pid}/audit",
            params=[("legacy", "true"), ("event_types", "proof"), ("event_types", "signature")],
            headers=auth_headers,
        ).json()
        assert sorted(e["event_type"] for e in legacy) == ["proof", "signature"]

        compliance = client.get(f"/projects/{pid}/compliance", headers=auth_headers).json()
        assert compliance["project_id"] == pid
        assert compliance["is_complete"] is True
        assert client.get("/projects/nope/compliance", headers=auth_headers).status_code == 404

    def test_notice_formats(self, client, auth_headers):
        pid = create_project(client, auth_headers, state="New Jersey").json()["id"]

        pdf = client.get(f"/projects/{pid}/notice", params={"format": "pdf"}, headers=auth_headers)
        assert pdf.headers["content-type"] == "application/pdf"
        assert pdf.content.startswith(b"%PDF")
        assert "preliminary-notice-new-jersey.pdf" in pdf.headers["content-disposition"]

        sections = client.get(f"/projects/{pid}/notice", params={"format": "sections"}, headers=auth_headers).json()
        assert sections["state"]["full_name"] == "New Jersey"
        assert "Acme Framing LLC" in sections["sections"][0]["content"]

        assert client.get(f"/projects/{pid}/notice", params={"format": "docx"}, headers=auth_headers).status_code == 422
        assert client.get(f"/projects/{pid}", headers=auth_headers).json()["status"] == "pending"

    def test_exports(self, client, auth_headers):
        create_project(client, auth_headers)

        csv_response = client.get("/projects/export.csv", headers=auth_headers)
        assert csv_response.headers["content-type"].startswith("text/csv")
        assert csv_response.text.splitlines()[0].startswith("Project Name,State,Status")
        assert len(csv_response.text.splitlines()) == 2

        pdf_response = client.get("/projects/export.pdf", headers=auth_headers)
        assert pdf_response.content.startswith(b"%PDF")

    def test_delete(self, client, auth_headers):
        pid = create_project(client, auth_headers).json()["id"]

        assert client.delete(f"/projects/{pid}", headers=auth_headers).json() == {"deleted": True, "project_id": pid}
        assert client.get(f"/projects/{pid}", headers=auth_headers).status_code == 404


# =============================================================================
# TEST: TEMPLATES
# =============================================================================

class TestTemplateEndpoints:

    def test_state_list(self, client):
        states = client.get("/templates/states").json()
        assert states[-1]["full_name"] == "Generic"
        assert "sections" not in states[0]

    def test_state_deadlines(self, client):
        table = {row["state"]: row for row in client.get("/templates/states/deadlines").json()}
        assert len(table) == 51
        assert table["California"]["deadline_days"] == 20
        assert table["New York"]["notice_required"] is False
        assert table["New York"]["code"] == "NY"

    def test_state_by_slug_and_code(self, client):
        assert client.get("/templates/states/oregon").json()["deadline_days"] == 8
        assert client.get("/templates/states/code/or").json()["full_name"] == "Oregon"
        assert client.get("/templates/states/code/zz").status_code == 404
        assert client.get("/templates/states/south-dakota").json()["full_name"] == "South Dakota"

    def test_preview_uses_profile(self, client, auth_headers):
        response = client.post(
            "/templates/states/california/preview",
            headers=auth_headers,
            json={"values": {"owner_name": "Pat Owner"}},
        )
        sections = {s["id"]: s["content"] for s in response.json()["sections"]}
        assert "Acme Framing LLC" in sections["header"]
        assert "Owner: Pat Owner" in sections["project"]

    def test_project_template_default_applied(self, client, auth_headers):
        created = client.post("/templates/projects", headers=auth_headers, json={
            "template_name": "Valley jobs",
            "state": "Oregon",
            "general_contractor_name": "BuildRight Inc",
            "is_default": True,
        })
        assert created.status_code == 201

        project = create_project(client, auth_headers, state=None).json()
        assert project["state"] == "Oregon"
        assert project["general_contractor_name"] == "BuildRight Inc"

    def test_project_template_not_found(self, client, auth_headers):
        assert client.post("/templates/projects/nope/default", headers=auth_headers).status_code == 404
        assert client.delete("/templates/projects/nope", headers=auth_headers).status_code == 404


# =============================================================================
# TEST: BILLING
# =============================================================================

class TestBillingEndpoints:

    def test_pricing(self, client):
        body = client.get("/billing/pricing").json()
        assert [t["id"] for t in body["tiers"]][:2] == ["free", "basic"]
        assert body["corporate"]

    def test_use_notice_until_exhausted(self, client, auth_headers):
        for _ in range(3):
            assert client.post("/billing/plan/use-notice", headers=auth_headers).status_code == 200
        assert client.post("/billing/plan/use-notice", headers=auth_headers).status_code == 402

    def test_checkout_validation(self, client, auth_headers):
        response = client.post("/billing/checkout-session", headers=auth_headers, json={})
        assert response.status_code == 400

    def test_checkout_not_configured(self, client, auth_headers, monkeypatch):
        import stripe

        monkeypatch.setattr(stripe, "api_key", "")
        response = client.post("/billing/checkout-session", headers=auth_headers, json={"price_id": "price_pro_monthly"})
        assert response.status_code == 503

    def test_checkout_stamps_user(self, client, auth_headers, user, monkeypatch):
        from types import SimpleNamespace
        from unittest.mock import MagicMock
        import stripe

        create = MagicMock(return_value=SimpleNamespace(id="cs_1", url="https://checkout.stripe.test/cs_1"))
        monkeypatch.setattr(stripe, "api_key", "sk_test_123")
        monkeypatch.setattr(stripe.checkout.Session, "create", create)

        response = client.post("/billing/checkout-session", headers=auth_headers, json={
            "price_id": "price_per_notice_standard", "quantity": 2, "metadata": {"notices": "2"},
        })

        assert response.json() == {"url": "https://checkout.stripe.test/cs_1", "session_id": "cs_1"}
        params = create.call_args.kwargs
        assert params["metadata"] == {"notices": "2", "user_id": user.id}
        assert params["customer_email"] == user.email

    def test_webhook_without_secret(self, client, user, monkeypatch):
        monkeypatch.setattr("prelimpro.routers.billing.STRIPE_WEBHOOK_SECRET", "")
        payload = {
            "id": "evt_1",
            "type": "checkout.session.completed",
            "data": {"object": {"id": "cs_1", "mode": "payment", "metadata": {"user_id": user.id, "notices": "4"}}},
        }

        response = client.post("/billing/webhook", content=json.dumps(payload))

        assert response.status_code == 200
        assert response.json() == {"handled": "checkout.session.completed", "id": "cs_1"}

    def test_webhook_signature(self, client, monkeypatch):
        secret = "whsec_test"
        monkeypatch.setattr("prelimpro.routers.billing.STRIPE_WEBHOOK_SECRET", secret)
        payload = json.dumps({"id": "evt_2", "type": "customer.created", "data": {"object": {"id": "cus_1"}}})

        timestamp = int(time.time())
        digest = hmac.new(secret.encode(), f"{timestamp}.{payload}".encode(), hashlib.sha256).hexdigest()
        good = client.post("/billing/webhook", content=payload, headers={"stripe-signature": f"t={timestamp},v1={digest}"})
        bad = client.post("/billing/webhook", content=payload, headers={"stripe-signature": f"t={timestamp},v1=deadbeef"})
        missing = client.post("/billing/webhook", content=payload)

        assert good.status_code == 200
        assert good.json() == {"handled": "unhandled", "type": "customer.created"}
        assert bad.status_code == 400
        assert missing.status_code == 400

    def test_webhook_invalid_json(self, client, monkeypatch):
        monkeypatch.setattr("prelimpro.routers.billing.STRIPE_WEBHOOK_SECRET", "")
        assert client.post("/billing/webhook", content="{not json").status_code == 400

    def test_webhook_rejects_undecodable_and_non_object_bodies(self, client, monkeypatch):
        monkeypatch.setattr("prelimpro.routers.billing.STRIPE_WEBHOOK_SECRET", "")

        assert client.post("/billing/webhook", content=b"\xff\xfe\x00").status_code == 400
        assert client.post("/billing/webhook", content="[1, 2]").status_code == 400
        assert client.post("/billing/webhook", content='"evt_1"').status_code == 400

    def test_webhook_redelivery_credits_once(self, client, auth_headers, user, monkeypatch):
        monkeypatch.setattr("prelimpro.routers.billing.STRIPE_WEBHOOK_SECRET", "")
        payload = json.dumps({
            "id": "evt_1",
            "type": "checkout.session.completed",
            "data": {"object": {"id": "cs_1", "mode": "payment", "metadata": {"user_id": user.id, "notices": "4"}}},
        })

        first = client.post("/billing/webhook", content=payload)
        second = client.post("/billing/webhook", content=payload)

        assert first.status_code == second.status_code == 200
        plan = client.get("/billing/plan", headers=auth_headers).json()
        assert plan["notices_purchased"] == 4

    def test_events_admin_only(self, client, auth_headers):
        assert client.get("/billing/events", headers=auth_headers).status_code == 403


# =============================================================================
# TEST: PUSH TOKENS & INTERNAL SCHEDULER
# =============================================================================

class TestNotificationEndpoints:

    def test_token_registration(self, client, auth_headers):
        body = {"expo_push_token": "ExponentPushToken[abc]", "device_id": "device-1", "platform": "ios"}
        assert client.post("/notifications/tokens", headers=auth_headers, json=body).status_code == 200
        assert len(client.get("/notifications/tokens", headers=auth_headers).json()) == 1

        assert client.delete("/notifications/tokens/device-1", headers=auth_headers).status_code == 200
        assert client.delete("/notifications/tokens/device-1", headers=auth_headers).status_code == 404

    def test_invalid_token_format(self, client, auth_headers):
        body = {"expo_push_token": "abc", "device_id": "device-1", "platform": "ios"}
        assert client.post("/notifications/tokens", headers=auth_headers, json=body).status_code == 422


class TestSchedulerEndpoints:

    @pytest.fixture
    def internal_headers(self):
        from prelimpro.config import INTERNAL_API_KEY

        return {"X-Internal-Key": INTERNAL_API_KEY}

    def test_requires_internal_key(self, client):
        assert client.post("/internal/reminder-check", headers={"X-Internal-Key": "wrong"}).status_code == 403

    def test_reminder_check_is_idempotent(self, client, auth_headers, internal_headers):
        start = date.today() - timedelta(days=13)  # California: deadline in 7 days
        create_project(client, auth_headers, job_start_date=start.isoformat())

        first = client.post("/internal/reminder-check", headers=internal_headers).json()
        second = client.post("/internal/reminder-check", headers=internal_headers).json()

        assert first["reminders_sent"] == 1
        assert second["reminders_sent"] == 0
        assert second["reminders_skipped"] == 1

    def test_deadline_monitoring(self, client, auth_headers, internal_headers):
        soon = date.today() - timedelta(days=17)
        late = date.today() - timedelta(days=25)
        create_project(client, auth_headers, project_name="Soon", job_start_date=soon.isoformat())
        create_project(client, auth_headers, project_name="Late", job_start_date=late.isoformat())

        upcoming = client.get("/internal/deadlines", headers=internal_headers).json()
        overdue = client.get("/internal/overdue", headers=internal_headers).json()

        assert [d["project_name"] for d in upcoming["deadlines"]] == ["Soon"]
        assert [p["project_name"] for p in overdue["projects"]] == ["Late"]

    def test_push_routes_run_in_threadpool(self):
        import inspect

        from prelimpro.main import app

        blocking = {
            ("/internal/reminder-check", "POST"),
            ("/internal/push-receipts", "POST"),
            ("/notifications/tokens", "POST"),
            ("/notifications/tokens", "GET"),
            ("/notifications/tokens/{device_id}", "DELETE"),
        }
        routes = {
            (route.path, method): route.endpoint
            for route in app.routes
            if hasattr(route, "methods")
            for method in route.methods
        }

        for key in blocking:
            assert not inspect.iscoroutinefunction(routes[key]), key
