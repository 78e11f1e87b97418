"""
Tests for notice document assembly and HTML/PDF rendering.
"""
from datetime import date

from tests.factories import make_profile, make_project


# =============================================================================
# TEST: DOCUMENT BLOCKS
# =============================================================================

class TestNoticeBlocks:

    def test_block_order_without_optional_parties(self):
        from prelimpro.services.notices import get_state_template
        from prelimpro.services.notices.document import build_notice_blocks

        blocks = build_notice_blocks(make_project(), get_state_template("California"), make_profile())
        kinds = [b.kind for b in blocks]

        assert kinds[0] == "header"
        assert kinds[1] == "warning"
        assert kinds[-1] == "footer"
        assert "notary" not in kinds
        titles = [b.title for b in blocks]
        assert "General Contractor" not in titles
        assert "Construction Lender" not in titles

    def test_optional_parties_included_when_named(self):
        from prelimpro.services.notices import get_state_template
        from prelimpro.services.notices.document import build_notice_blocks

        project = make_project(
            general_contractor_name="BuildRight Inc",
            general_contractor_address="9 Oak Ave",
            lender_name="First Valley Bank",
        )
        blocks = build_notice_blocks(project, get_state_template("California"))
        by_title = {b.title: b for b in blocks}

        assert by_title["General Contractor"].fields == [
            ("Contractor Name:", "BuildRight Inc"),
            ("Contractor Address:", "9 Oak Ave"),
        ]
        assert by_title["Construction Lender"].fields == [("Lender Name:", "First Valley Bank")]

    def test_notary_block_when_required(self):
        from prelimpro.services.notices import get_state_template
        from prelimpro.services.notices.document import build_notice_blocks, NOTARY_DELIVERY_TEXT

        blocks = build_notice_blocks(make_project(state="New Jersey"), get_state_template("New Jersey"))
        kinds = [b.kind for b in blocks]
        delivery = next(b for b in blocks if b.kind == "delivery")

        assert kinds[-2] == "notary"
        assert delivery.text.endswith(NOTARY_DELIVERY_TEXT)
        assert delivery.title == "Delivery Requirements for New Jersey"

    def test_regular_mail_delivery_text(self):
        from prelimpro.services.notices import get_state_template
        from prelimpro.services.notices.document import build_notice_blocks, REGULAR_DELIVERY_TEXT

        blocks = build_notice_blocks(make_project(state="Utah"), get_state_template("Utah"))
        delivery = next(b for b in blocks if b.kind == "delivery")
        assert delivery.text == REGULAR_DELIVERY_TEXT

    def test_contract_information(self):
        from prelimpro.services.notices import get_state_template
        from prelimpro.services.notices.document import build_notice_blocks

        blocks = build_notice_blocks(make_project(), get_state_template("California"), today=date(2026, 2, 1))
        contract = next(b for b in blocks if b.title == "Contract Information")

        assert contract.fields == [
            ("Estimated Contract Amount:", "$48,250.50"),
            ("Date Work Commenced:", "January 5, 2026"),
            ("Date of This Notice:", "February 1, 2026"),
        ]

    def test_footer_names_project(self):
        from prelimpro.services.notices import get_state_template
        from prelimpro.services.notices.document import build_notice_blocks, DISCLAIMER

        footer = build_notice_blocks(make_project(), get_state_template("California"), today=date(2026, 2, 1))[-1]
        assert footer.items == [
            "This preliminary notice was generated on February 1, 2026",
            "Project: Riverside Medical Office | State: California",
        ]
        assert footer.text == DISCLAIMER


# =============================================================================
# TEST: HTML
# =============================================================================

class TestNoticeHtml:

    def test_html_document(self):
        from prelimpro.services.notices import generate_notice_html, get_state_template

        html = generate_notice_html(make_project(), get_state_template("California"), make_profile())

        assert html.startswith("<!DOCTYPE html>")
        assert "<title>PRELIMINARY NOTICE</title>" in html
        assert "Riverside Holdings LLC" in html
        assert "Acme Framing LLC" in html
        assert "CSLB 1029384" in html
        assert "$48,250.50" in html

    def test_values_are_escaped(self):
        from prelimpro.services.notices import generate_notice_html, get_state_template

        project = make_project(property_owner_name="<script>alert(1)</script>")
        html = generate_notice_html(project, get_state_template("Texas"))

        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_logo_rendered_when_present(self):
        from prelimpro.services.notices import generate_notice_html, get_state_template

        profile = make_profile(logo_url="https://cdn.example.com/logo.png")
        html = generate_notice_html(make_project(), get_state_template("California"), profile)
        assert 'src="https://cdn.example.com/logo.png"' in html

    def test_notary_section_only_when_required(self):
        from prelimpro.services.notices import generate_notice_html, get_state_template

        ohio = generate_notice_html(make_project(state="Ohio"), get_state_template("Ohio"))
        texas = generate_notice_html(make_project(state="Texas"), get_state_template("Texas"))

        assert "Notary Acknowledgment" in ohio
        assert "Notary Acknowledgment" not in texas

    def test_missing_profile_renders(self):
        from prelimpro.services.notices import generate_notice_html, get_state_template

        html = generate_notice_html(make_project(), get_state_template("Wyoming"))
        assert "Company Name:" in html
        assert "mechanic&#x27;s lien statutes of the State of California" in html


# =============================================================================
# TEST: PDF
# =============================================================================

class TestNoticePdf:

    def test_pdf_bytes(self):
        from prelimpro.services.notices import render_notice_pdf, get_state_template

        pdf = render_notice_pdf(make_project(), get_state_template("California"), make_profile())
        assert pdf.startswith(b"%PDF")

    def test_pdf_with_notary_and_parties(self):
        from prelimpro.services.notices import render_notice_pdf, get_state_template

        project = make_project(state="New Jersey", general_contractor_name="BuildRight Inc", lender_name="First Valley Bank")
        pdf = render_notice_pdf(project, get_state_template("New Jersey"))
        assert pdf.startswith(b"%PDF")
        assert len(pdf) > 1000
