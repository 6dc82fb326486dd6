"""Tests for page estimation."""

from cvgenius.models.document_models import DocumentModel
from cvgenius.services.pagination import (
    CHARS_PER_PAGE,
    OPTIMIZATION_TIPS,
    content_weight,
    estimate,
    estimate_pages,
)


def long_cv(entries: int = 10, achievements: int = 5) -> DocumentModel:
    return DocumentModel(
        personal={"fullName": "Aoife Murphy"},
        experience=[
            {
                "company": f"Company {i}",
                "position": "Engineer",
                "achievements": ["x" * 80] * achievements,
            }
            for i in range(entries)
        ],
    )


def test_empty_document_is_one_page():
    """Test the minimum page floor."""
    assert estimate_pages(DocumentModel()) == 1


def test_content_weight_constants():
    """Test weights for personal info and list sections."""
    document = DocumentModel(
        personal={"fullName": "A", "summary": "x" * 100},
        skills=[{"name": "Python"}, {"name": "Go"}, {"name": "SQL"}],
    )
    assert content_weight(document) == 150 + 200 + 100 + 3 * 20


def test_experience_weight():
    """Test experience entry weight."""
    document = DocumentModel(experience=[{"description": "x" * 100, "achievements": ["a", "b"]}])
    assert content_weight(document) == 300 + 150 + 160


def test_long_document_is_several_pages():
    """Test ten experience entries with five achievements each."""
    assert estimate_pages(long_cv()) >= 3


def test_page_boundary():
    """Test pages are the ceiling of weight over page capacity."""
    document = DocumentModel(education=[{"institution": f"School {i}"} for i in range(14)])
    assert content_weight(document) == CHARS_PER_PAGE
    assert estimate_pages(document) == 1

    document = DocumentModel(education=[{"institution": f"School {i}"} for i in range(15)])
    assert estimate_pages(document) == 2


def test_estimate_is_monotonic():
    """Test adding content never lowers the estimate."""
    previous = 0
    for entries in range(0, 15):
        pages = estimate_pages(long_cv(entries))
        assert pages >= previous
        previous = pages


def test_estimate_ignores_visibility(sample_cv):
    """Test hidden sections still count towards the estimate."""
    data = sample_cv.model_dump(by_alias=True)
    data["sections"] = [{"type": "references", "order": 1, "visible": True}]
    visible = DocumentModel(**data)
    data["sections"] = [{"type": "references", "order": 1, "visible": False}]
    hidden = DocumentModel(**data)

    assert estimate_pages(visible) == estimate_pages(hidden)


def test_reference_data_affects_weight(sample_cv):
    """Test reference entries add weight whatever their display."""
    document = sample_cv.model_copy(update={"references": []})
    data = document.model_dump(by_alias=True)
    data["references"] = [{"name": "Niamh Walsh"}]

    assert content_weight(DocumentModel(**data)) == content_weight(document) + 100 + 150


def test_cover_letter_text_counts():
    """Test cover-letter text adds its length."""
    document = DocumentModel(
        kind="cover-letter",
        letter={"salutation": "Dear Sir,", "opening": "x" * 50, "body": ["y" * 100], "closing": "Thanks"},
    )
    assert content_weight(document) == 9 + 50 + 100 + 6


def test_estimate_over_limit():
    """Test over-limit estimates carry a warning and tips."""
    result = estimate(long_cv(), max_pages=2)

    assert result.pages == 3
    assert result.is_over_limit
    assert not result.is_near_limit
    assert result.message.startswith("CV is 3 pages")
    assert result.tips == list(OPTIMIZATION_TIPS)


def test_estimate_near_limit():
    """Test estimates at the limit are flagged as near."""
    result = estimate(long_cv(entries=6), max_pages=2)

    assert result.pages == 2
    assert result.is_near_limit
    assert not result.is_over_limit


def test_estimate_within_limit():
    """Test short documents carry no warning."""
    result = estimate(DocumentModel(), max_pages=2)

    assert result.pages == 1
    assert not result.is_over_limit
    assert not result.is_near_limit
    assert result.message == "CV is 1 page."
    assert result.tips == []


def test_estimate_default_limit():
    """Test the page limit defaults to the configured value."""
    assert estimate(DocumentModel()).max_pages == 2


def test_estimate_names_cover_letters():
    """Test messages name the document kind being measured."""
    document = DocumentModel(
        kind="cover-letter",
        letter={"salutation": "Dear Sir,", "opening": "x" * 50, "body": ["y" * 100], "closing": "Thanks"},
    )

    assert estimate(document, max_pages=2).message == "Cover letter is 1 page."
    assert estimate(document, max_pages=1).message == (
        "Cover letter is 1 page. Consider keeping it within 1 page for Irish employers."
    )
