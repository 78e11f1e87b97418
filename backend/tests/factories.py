"""Plain-object stand-ins for projects and company profiles."""
from datetime import date
from types import SimpleNamespace


def make_project(**overrides):
    data = dict(
        id="proj-1",
        project_name="Riverside Medical Office",
        state="California",
        property_address="1200 Riverside Dr, Sacramento, CA 95822",
        property_owner_name="Riverside Holdings LLC",
        property_owner_address="PO Box 88, Sacramento, CA 95812",
        general_contractor_name=None,
        general_contractor_address=None,
        lender_name=None,
        lender_address=None,
        description="Framing and drywall",
        contract_amount=48250.5,
        job_start_date=date(2026, 1, 5),
        deadline=date(2026, 1, 25),
        notice_required=True,
    )
    data.update(overrides)
    return SimpleNamespace(**data)


def make_profile(**overrides):
    data = dict(
        email="login@acme.com",
        business_name="Acme",
        company_name="Acme Framing LLC",
        company_address="500 Mill St, Sacramento, CA 95814",
        phone="(916) 555-0142",
        company_email="office@acme.com",
        tax_id="12-3456789",
        website="acme.example",
        license_number="CSLB 1029384",
        logo_url=None,
    )
    data.update(overrides)
    return SimpleNamespace(**data)
