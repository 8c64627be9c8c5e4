"""Unit tests for core/types/faq.py"""

import pytest

from faqhub.core.types.faq import (
    admin_data,
    enhance_faq,
    faq_key,
    guidance_data,
    guidance_key,
    is_faq_document,
    list_item_data,
    post_process_faq,
    related_faqs,
    status_data,
)
from faqhub.core.types.guidance import enhance_guidance


@pytest.fixture(name="faq")
def faq_fixture(make_item):
    def _faq(filename, body, category="scope", **fm):
        return enhance_faq(make_item("faq", filename, body, category=category, **fm))
    return _faq


def test_enhance_faq_question_and_answer(faq_item):
    out = enhance_faq(faq_item)
    assert out["question"] == "Is X covered?"
    assert out["answer"] == "Yes, under Article 10."
    assert out["status"] == "draft"
    assert out["url"] == "/faq/scope/is-x-covered/"


def test_enhance_faq_omits_empty_answer(faq):
    """answer is absent rather than empty when only a heading exists."""
    out = faq("q.md", "# Only a question", answer="stale")
    assert out["question"] == "Only a question"
    assert "answer" not in out


def test_enhance_faq_without_heading_has_no_question(faq):
    out = faq("q.md", "Just text")
    assert out["question"] is None


def test_faq_key():
    assert faq_key({"category": "scope", "filename": "a.md"}) == "scope/a"


def test_guidance_key_reads_either_reference_field():
    assert guidance_key({"guidance-id": "legal-person"}) == "legal-person"
    assert guidance_key({"pending-guidance": " other "}) == "other"
    assert guidance_key({"guidance-id": ""}) is None
    assert guidance_key({}) is None


def test_is_faq_document_rejects_guidance_requests():
    assert is_faq_document({"type": "faq"})
    assert is_faq_document({})
    assert not is_faq_document({"type": "guidance-request"})


def test_related_faqs_sorted_by_question(faq):
    faqs = [
        faq("b.md", "# Beta?", **{"guidance-id": "g"}),
        faq("a.md", "# Alpha?", **{"guidance-id": "g"}),
        faq("c.md", "# Gamma?", **{"guidance-id": "other"}),
    ]
    refs = related_faqs("g", faqs)
    assert [r["question"] for r in refs] == ["Alpha?", "Beta?"]
    assert refs[0]["url"] == "/faq/scope/a/"


def test_status_data():
    assert status_data({"status": None}) == {"hasStatus": False}
    data = status_data({"status": "draft"})
    assert data["hasStatus"] is True
    assert data["label"] == "Draft"
    assert data["cssClass"] == "status-draft"


def test_guidance_data_none_for_unblocked_faq():
    assert guidance_data({"status": "approved"}, None) is None


def test_guidance_data_pending_without_reference():
    assert guidance_data({"status": "pending-guidance"}, None) == {"hasPendingGuidance": True}


def test_guidance_data_with_guidance(guidance_item):
    guidance = enhance_guidance(guidance_item)
    data = guidance_data({"guidance-id": "legal-person", "status": "pending-guidance"}, guidance)
    assert data["guidanceKey"] == "legal-person"
    assert data["summary"] == "Clarify SME definition."
    assert data["hasSpecificGuidance"] is True
    assert data["guidanceUrl"] == "/pending-guidance/legal-person/"


def test_admin_data_edit_url_and_guidance_title():
    faq = {"category": "scope", "filename": "a.md", "guidance-id": "cra-scope", "Related issue": "#12"}
    data = admin_data(faq, "https://edit.test/faq")
    assert data["editUrl"] == "https://edit.test/faq/scope/a.md"
    assert data["guidanceTitle"] == "CRA Scope"
    assert data["guidanceUrl"] == "/pending-guidance/cra-scope/"
    assert data["hasRelatedIssue"] is True


def test_post_process_faq_links_both_directions(faq, guidance_item):
    """FAQs get relatedGuidance; guidance gets relatedFaqs only through a patch."""
    guidance = enhance_guidance(guidance_item)
    linked = faq("sme.md", "# Am I an SME?", **{"guidance-id": "legal-person"})
    plain = faq("plain.md", "# Plain?")
    snapshot = {"faq": [linked, plain], "guidance": [guidance]}

    result = post_process_faq([linked, plain], snapshot)

    by_file = {item["filename"]: item for item in result.items}
    assert by_file["sme.md"]["relatedGuidance"]["url"] == "/pending-guidance/legal-person/"
    assert by_file["sme.md"]["hasPendingGuidanceCallout"] is True
    assert by_file["sme.md"]["status"] == "pending-guidance"
    assert "relatedGuidance" not in by_file["plain.md"]
    assert by_file["plain.md"]["hasPendingGuidanceCallout"] is False

    assert result.patches == {
        "guidance": {"legal-person": {"relatedFaqs": [{"question": "Am I an SME?", "url": "/faq/scope/sme/"}]}}
    }
    assert guidance["relatedFaqs"] == []


def test_post_process_faq_unknown_guidance_is_not_linked(faq):
    item = faq("a.md", "# Q?", **{"guidance-id": "missing"})
    result = post_process_faq([item], {"faq": [item], "guidance": []})
    assert "relatedGuidance" not in result.items[0]
    assert result.items[0]["guidanceData"] == {"hasPendingGuidance": True}
    assert result.patches == {"guidance": {}}


def test_post_process_faq_does_not_mutate_inputs(faq):
    item = faq("a.md", "# Q?")
    before = dict(item)
    post_process_faq([item], {"faq": [item]})
    assert item == before


def test_related_faqs_sort_ignores_case_and_accents(faq):
    faqs = [
        faq("b.md", "# Banana?", **{"guidance-id": "g"}),
        faq("a.md", "# apple?", **{"guidance-id": "g"}),
        faq("e.md", "# Éclair?", **{"guidance-id": "g"}),
        faq("d.md", "# date?", **{"guidance-id": "g"}),
    ]
    assert [r["question"] for r in related_faqs("g", faqs)] == ["apple?", "Banana?", "date?", "Éclair?"]


def test_numeric_guidance_reference_links(faq, make_item):
    """guidance-id: 2024 links to 2024.md just like the quoted form."""
    guidance = enhance_guidance(make_item("guidance", "2024.md", "# Year guidance", type="guidance-request"))
    item = faq("a.md", "# Q?", **{"guidance-id": 2024})
    assert guidance_key(item) == "2024"

    result = post_process_faq([item], {"faq": [item], "guidance": [guidance]})

    assert result.items[0]["relatedGuidance"]["url"] == "/pending-guidance/2024/"
    assert result.patches["guidance"]["2024"]["relatedFaqs"] == [{"question": "Q?", "url": "/faq/scope/a/"}]


def test_related_guidance_carries_display_fields_only(faq, guidance_item):
    guidance = enhance_guidance(guidance_item)
    item = faq("sme.md", "# Am I an SME?", **{"guidance-id": "legal-person"})
    out = post_process_faq([item], {"faq": [item], "guidance": [guidance]}).items[0]
    assert out["relatedGuidance"] == {
        "filename": "legal-person.md",
        "title": "Legal person definition",
        "url": "/pending-guidance/legal-person/",
        "summary": "Clarify SME definition.",
    }


def test_list_item_data(faq):
    full = list_item_data(faq("a.md", "# A?\n\nYes."))
    assert full == {"hasQuestion": True, "questionText": "A?", "url": "/faq/scope/a/", "hasMissingContent": False}

    unanswered = list_item_data(faq("b.md", "# B?"))
    assert unanswered["hasMissingContent"] is True

    untitled = list_item_data(faq("cra-open-source.md", "No heading"))
    assert untitled["hasQuestion"] is False
    assert untitled["questionText"] == "CRA Open Source"
    assert untitled["hasMissingContent"] is True


def test_post_process_faq_adds_list_item_data(faq):
    item = faq("a.md", "# A?\n\nYes.")
    out = post_process_faq([item], {"faq": [item]}).items[0]
    assert out["listItemData"]["questionText"] == "A?"
