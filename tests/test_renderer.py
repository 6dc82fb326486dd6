"""Tests for document rendering."""

from cvgenius.exceptions import RenderError
from cvgenius.models.document_models import DocumentKind, DocumentModel, ReferencesDisplay, SectionType
from cvgenius.models.template_models import TemplateDefinition
from cvgenius.services import section_formatters
from cvgenius.services.renderer import DocumentRenderer
from cvgenius.services.sample_data import SampleDataLoader
from cvgenius.services.template_registry import TemplateRegistry


def test_render_empty_document(registry, renderer, empty_cv):
    """Test an empty document still renders the personal header."""
    output = renderer.render(empty_cv, registry.get_by_id("classic"))

    assert 'class="cv-header"' in output.html
    assert "Seán Ó Briain" in output.html
    assert 'data-section="experience"' not in output.html
    assert "Work Experience" not in output.html


def test_render_missing_personal_fields(registry, renderer):
    """Test a document without personal data renders without errors."""
    output = renderer.render(DocumentModel(), registry.get_by_id("classic"))
    assert 'class="name"' in output.html


def test_render_is_deterministic(registry, renderer, sample_cv):
    """Test identical inputs produce identical output."""
    template = registry.get_by_id("dublin-tech")
    assert renderer.render(sample_cv, template) == renderer.render(sample_cv, template)


def test_render_does_not_mutate_document(registry, renderer, sample_cv):
    """Test rendering leaves the document unchanged."""
    before = sample_cv.model_dump()
    renderer.render(sample_cv, registry.get_by_id("classic"))
    assert sample_cv.model_dump() == before


def test_render_follows_section_order(registry, renderer, sample_cv):
    """Test sections render in ascending order."""
    data = sample_cv.model_dump(by_alias=True)
    data["sections"] = [
        {"type": "education", "order": 1},
        {"type": "experience", "order": 2},
    ]
    document = DocumentModel(**data)
    html = renderer.render(document, registry.get_by_id("classic")).html

    assert html.index('data-section="education"') < html.index('data-section="experience"')
    assert 'data-section="skills"' not in html


def test_hidden_section_is_not_rendered(registry, renderer, sample_cv):
    """Test invisible sections are omitted."""
    data = sample_cv.model_dump(by_alias=True)
    data["sections"] = [
        {"type": "summary", "order": 1},
        {"type": "references", "order": 2, "visible": False},
    ]
    html = renderer.render(DocumentModel(**data), registry.get_by_id("classic")).html

    assert 'data-section="summary"' in html
    assert 'data-section="references"' not in html


def test_unsupported_section_is_not_rendered(registry, renderer, sample_cv):
    """Test sections the template does not support are omitted."""
    html = renderer.render(sample_cv, registry.get_by_id("irish-finance")).html

    assert 'data-section="certifications"' in html
    assert 'data-section="projects"' not in html
    assert 'data-section="interests"' not in html


def test_user_text_is_escaped(registry, renderer):
    """Test user text is HTML-escaped."""
    document = DocumentModel(
        personal={"fullName": "<script>alert('x')</script>", "summary": "R&D <b>lead</b>"},
        experience=[{"company": "\"Acme\" <Ltd>", "position": "Dev", "achievements": ["<img src=x>"]}],
    )
    html = renderer.render(document, registry.get_by_id("classic")).html

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "R&amp;D &lt;b&gt;lead&lt;/b&gt;" in html
    assert "<img src=x>" not in html
    assert "&lt;Ltd&gt;" in html


def test_references_on_request(registry, renderer, sample_cv):
    """Test the on-request sentence replaces reference details."""
    document = sample_cv.model_copy(update={"references": []})
    html = renderer.render(document, registry.get_by_id("classic")).html
    assert "References available upon request" in html


def test_references_detailed(registry, renderer, sample_cv):
    """Test detailed references render one block each."""
    document = DocumentModel(**{
        **sample_cv.model_dump(by_alias=True),
        "referencesDisplay": "detailed",
        "references": [
            {"name": "Niamh Walsh", "company": "Stripe", "phone": "0861234567"},
            {"name": "Declan Ryan", "company": "Fexco"},
        ],
    })
    html = renderer.render(document, registry.get_by_id("classic")).html

    assert html.count('class="entry reference-item"') == 2
    assert "Niamh Walsh" in html
    assert "+353 86 123 4567" in html
    assert "References available upon request" not in html


def test_references_detailed_without_entries(registry, renderer, sample_cv):
    """Test detailed display with no references renders nothing."""
    document = sample_cv.model_copy(update={"references_display": ReferencesDisplay.DETAILED, "references": []})
    html = renderer.render(document, registry.get_by_id("classic")).html

    assert 'data-section="references"' not in html
    assert "References available upon request" not in html


def test_locale_formatting(registry, renderer, sample_cv):
    """Test Irish date and phone formatting."""
    html = renderer.render(sample_cv, registry.get_by_id("classic")).html

    assert "03/2021 - Present" in html
    assert "06/2017 - 02/2021" in html
    assert "10/05/2022" in html
    assert "+353 87 123 4567" in html


def test_us_locale_dates(registry, renderer, sample_cv):
    """Test month-first dates for US documents."""
    document = sample_cv.model_copy(update={"locale": "en-US"})
    html = renderer.render(document, registry.get_by_id("classic")).html
    assert "05/10/2022" in html


def test_two_column_routes_sidebar(registry, renderer, sample_cv):
    """Test sidebar sections render in the sidebar column."""
    html = renderer.render(sample_cv, registry.get_by_id("dublin-tech")).html
    sidebar = html[html.index('<aside class="cv-sidebar">'):html.index('<main class="cv-main">')]

    assert 'data-section="skills"' in sidebar
    assert 'data-section="languages"' in sidebar
    assert 'data-section="experience"' not in sidebar
    assert "skill-bar" in sidebar


def test_single_column_groups_skills(registry, renderer, sample_cv):
    """Test skills are grouped by category outside a sidebar."""
    html = renderer.render(sample_cv, registry.get_by_id("classic")).html

    assert "Programming Languages:" in html
    assert "Python • Go • SQL" in html
    assert "skill-bar" not in html


def test_css_includes_design_overrides(registry, renderer, sample_cv):
    """Test design settings add scoped override rules."""
    document = DocumentModel(**{
        **sample_cv.model_dump(by_alias=True),
        "designSettings": {"margins": 0.75, "sectionSpacing": "tight", "fontFamily": "Georgia; } body {color:red"},
    })
    css = renderer.render(document, registry.get_by_id("classic")).css

    assert css.startswith(registry.generate_css("classic"))
    assert ".cv-template-classic {\n  padding: 0.75in;" in css
    assert "margin-bottom: 0.75rem;" in css
    assert "color:red" not in css


def test_unknown_section_type_is_skipped(sample_cv):
    """Test unknown section types are skipped without failing the render."""
    template = TemplateDefinition(
        id="future",
        name="Future",
        structure={"sections": ["header", "awards", "summary"]},
    )
    renderer = DocumentRenderer(TemplateRegistry(templates=[template]))
    data = sample_cv.model_dump(by_alias=True)
    data["sections"] = [
        {"type": "awards", "order": 1},
        {"type": "summary", "order": 2},
    ]
    document = DocumentModel(**data)
    html = renderer.render(document, template).html

    assert 'data-section="summary"' in html
    assert "awards" not in html


def test_failing_formatter_omits_section(monkeypatch, registry, renderer, sample_cv):
    """Test a formatter error only drops its own section."""
    def broken(document, section, template):
        raise KeyError("boom")

    monkeypatch.setitem(section_formatters.SECTION_FORMATTERS, SectionType.SUMMARY, broken)
    html = renderer.render(sample_cv, registry.get_by_id("classic")).html

    assert 'data-section="summary"' not in html
    assert 'data-section="experience"' in html


def test_render_error_carries_section_type():
    """Test RenderError records the failing section."""
    error = RenderError("skills", KeyError("level"))
    assert error.section_type == "skills"
    assert "skills" in str(error)


def test_every_section_type_has_formatter():
    """Test the formatter table covers every section type."""
    assert set(section_formatters.SECTION_FORMATTERS) == set(SectionType)
    for section_type in SectionType:
        assert section_formatters.formatter_for(section_type.value) is not None
    assert section_formatters.formatter_for("awards") is None


def test_cover_letter_uses_base_skeleton(registry, renderer):
    """Test a child cover letter renders its base's skeleton."""
    document = SampleDataLoader().load(DocumentKind.COVER_LETTER)
    html = renderer.render(document, registry.get_by_id("trinity-modern")).html

    assert 'data-skeleton="crisp"' in html
    assert "template-crisp" in html
    assert "cover-letter-template-trinity-modern" in html
    assert "Dear Ms Byrne," in html
    assert "15/03/2024" in html
    assert "Yours sincerely," in html


def test_cover_letter_grandchild_skeleton(registry, renderer):
    """Test skeletons are inherited through several generations."""
    document = SampleDataLoader().load(DocumentKind.COVER_LETTER)
    html = renderer.render(document, registry.get_by_id("ifsc-executive")).html
    assert 'data-skeleton="concept"' in html


def test_cover_letter_inherits_through_catalogue_chain(registry, renderer):
    """Test deep catalogue chains pick up the nearest skeleton and sign-off."""
    document = SampleDataLoader().load(DocumentKind.COVER_LETTER)

    html = renderer.render(document, registry.get_by_id("consulting-dublin")).html
    assert 'data-skeleton="concept"' in html
    assert "Yours sincerely," in html

    html = renderer.render(document, registry.get_by_id("startup-dublin")).html
    assert 'data-skeleton="crisp"' in html
    assert "Cheers," in html


def test_cover_letter_sign_off(registry, renderer):
    """Test sign-off comes from the letter, then the template chain."""
    document = SampleDataLoader().load(DocumentKind.COVER_LETTER)
    assert "Best regards," in renderer.render(document, registry.get_by_id("tech-dublin")).html

    document.letter.sign_off = "Kind regards,"
    assert "Kind regards," in renderer.render(document, registry.get_by_id("tech-dublin")).html


def test_render_page(registry, renderer, sample_cv):
    """Test standalone page wraps the HTML and CSS."""
    page = renderer.render_page(sample_cv, registry.get_by_id("classic"))

    assert page.startswith("<!DOCTYPE html>")
    assert '<html lang="en-IE">' in page
    assert "<title>Aoife Murphy</title>" in page
    assert ".cv-template-classic" in page
    assert 'class="cv-container cv-template-classic layout-single-column"' in page
