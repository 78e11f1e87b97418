"""
Tests for state template descriptors (editable notice sections).
"""


# =============================================================================
# TEST: TEMPLATE LIST
# =============================================================================

class TestStateTemplateList:

    def test_one_descriptor_per_template_plus_generic(self):
        from prelimpro.services.notices import STATE_NOTICE_TEMPLATES, STATE_TEMPLATE_LIST

        assert len(STATE_TEMPLATE_LIST) == len(STATE_NOTICE_TEMPLATES) + 1

    def test_sorted_with_generic_last(self):
        from prelimpro.services.notices import STATE_TEMPLATE_LIST

        names = [d.full_name for d in STATE_TEMPLATE_LIST]
        assert names[-1] == "Generic"
        assert names[:-1] == sorted(names[:-1])

    def test_descriptor_summary(self):
        from prelimpro.services.notices import get_state_template_by_slug

        california = get_state_template_by_slug("california")
        assert california.full_name == "California"
        assert california.deadline_days == 20
        assert california.description == "20-day window • Certified mail"

    def test_regular_mail_description(self):
        from prelimpro.services.notices import get_state_template_by_slug

        utah = get_state_template_by_slug("utah")
        assert utah.description.endswith("• Mail/personal delivery")
        assert utah.certified_mail_required is False

    def test_to_dict_without_sections(self):
        from prelimpro.services.notices import get_state_template_by_slug

        data = get_state_template_by_slug("texas").to_dict(include_sections=False)
        assert data["slug"] == "texas"
        assert "sections" not in data


# =============================================================================
# TEST: SECTIONS
# =============================================================================

class TestSections:

    def test_section_order(self):
        from prelimpro.services.notices import get_state_template_by_slug, STATE_NOTICE_TEMPLATES

        descriptor = get_state_template_by_slug("new-jersey")
        clause_count = len(STATE_NOTICE_TEMPLATES["New Jersey"].additional_clauses)
        ids = [s.id for s in descriptor.sections]

        assert ids[:4] == ["header", "title", "warning", "legal"]
        assert ids[4:4 + clause_count] == [f"clause-{i}" for i in range(1, clause_count + 1)]
        assert ids[-2:] == ["project", "signature"]

    def test_notary_noted_in_legal_section(self):
        from prelimpro.services.notices import get_state_template_by_slug

        legal = next(s for s in get_state_template_by_slug("new-jersey").sections if s.id == "legal")
        assert "Notary required" in legal.content

    def test_signature_names_state(self):
        from prelimpro.services.notices import get_state_template_by_slug

        signature = get_state_template_by_slug("oregon").sections[-1]
        assert signature.content.endswith("State: Oregon")

    def test_fill_sections(self):
        from prelimpro.services.notices import BLANK_LINE, fill_sections, get_state_template_by_slug

        filled = fill_sections(get_state_template_by_slug("california"), {"company_name": "Acme Framing LLC"})
        header = filled[0]

        assert header["id"] == "header"
        assert header["type"] == "header"
        assert "Acme Framing LLC" in header["content"]
        assert BLANK_LINE in header["content"]
        assert all("{{" not in s["content"] for s in filled)


# =============================================================================
# TEST: SLUG LOOKUP
# =============================================================================

class TestSlugLookup:

    def test_known_slug(self):
        from prelimpro.services.notices import get_state_template_by_slug

        assert get_state_template_by_slug("north-carolina").full_name == "North Carolina"
        assert get_state_template_by_slug("NORTH-CAROLINA").full_name == "North Carolina"

    def test_unknown_slug_gets_generic_copy(self):
        from prelimpro.services.notices import get_state_template_by_slug
        from prelimpro.services.notices.descriptors import DEFAULT_DESCRIPTOR

        descriptor = get_state_template_by_slug("south-dakota")
        assert descriptor.full_name == "South Dakota"
        assert descriptor.slug == "south-dakota"
        assert descriptor.deadline_days == DEFAULT_DESCRIPTOR.deadline_days
        assert [s.id for s in descriptor.sections] == [s.id for s in DEFAULT_DESCRIPTOR.sections]

    def test_empty_slug(self):
        from prelimpro.services.notices import get_state_template_by_slug

        assert get_state_template_by_slug("") is None
        assert get_state_template_by_slug(None) is None

    def test_descriptor_for_state_code(self):
        from prelimpro.services.notices import get_descriptor_for_state
        from prelimpro.services.notices.descriptors import DEFAULT_DESCRIPTOR

        assert get_descriptor_for_state("CA").full_name == "California"
        assert get_descriptor_for_state(None) is DEFAULT_DESCRIPTOR

    def test_descriptor_for_unknown_state_is_generic(self):
        from prelimpro.services.notices import get_descriptor_for_state
        from prelimpro.services.notices.descriptors import DEFAULT_DESCRIPTOR

        assert get_descriptor_for_state("ZZ") is DEFAULT_DESCRIPTOR
        assert get_descriptor_for_state("Atlantis") is DEFAULT_DESCRIPTOR
        assert get_descriptor_for_state("Wyoming").full_name == "Wyoming"
