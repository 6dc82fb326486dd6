"""Tests for document editing helpers."""

import pytest
from cvgenius.exceptions import EntryNotFound
from cvgenius.models.document_models import DocumentModel, Skill
from cvgenius.services import document_editor as editor


def test_add_entry_from_dict(sample_cv):
    """Test adding an entry from camelCase fields."""
    updated = editor.add_entry(sample_cv, "experience", {"company": "Intercom", "position": "Engineer", "startDate": "2024-01"})

    assert len(updated.experience) == len(sample_cv.experience) + 1
    assert updated.experience[-1].start_date == "2024-01"
    assert updated.experience[-1].id


def test_add_entry_model(sample_cv):
    """Test adding an entry model."""
    updated = editor.add_entry(sample_cv, "skills", Skill(id="skill-rust", name="Rust"))
    assert updated.skills[-1].id == "skill-rust"


def test_add_entry_leaves_source_untouched(sample_cv):
    """Test helpers return new documents."""
    before = sample_cv.model_dump()
    editor.add_entry(sample_cv, "interests", {"name": "Rowing"})
    assert sample_cv.model_dump() == before


def test_add_entry_unknown_collection(sample_cv):
    """Test unknown collection names are rejected."""
    with pytest.raises(ValueError, match="Unknown collection"):
        editor.add_entry(sample_cv, "hobbies", {"name": "Rowing"})


def test_update_entry_by_id(sample_cv):
    """Test updating an entry addressed by id."""
    updated = editor.update_entry(sample_cv, "experience", "exp-fexco", {"endDate": "2021-03", "location": "Kerry"})
    fexco = next(exp for exp in updated.experience if exp.id == "exp-fexco")

    assert fexco.end_date == "2021-03"
    assert fexco.location == "Kerry"
    assert fexco.company == "Fexco"


def test_update_entry_snake_case(sample_cv):
    """Test field names work as well as aliases."""
    updated = editor.update_entry(sample_cv, "experience", "exp-fexco", {"end_date": "2021-04"})
    assert updated.experience[1].end_date == "2021-04"


def test_update_entry_revalidates(sample_cv):
    """Test updates go through model validation."""
    updated = editor.update_entry(sample_cv, "experience", "exp-fexco", {"current": True})
    assert updated.experience[1].end_date is None


def test_update_unknown_entry(sample_cv):
    """Test unknown ids raise EntryNotFound."""
    with pytest.raises(EntryNotFound):
        editor.update_entry(sample_cv, "experience", "missing", {"company": "X"})


def test_remove_entry_by_id(sample_cv):
    """Test removing an entry keeps the others."""
    updated = editor.remove_entry(sample_cv, "skills", "skill-go")
    assert [skill.id for skill in updated.skills] == ["skill-python", "skill-sql", "skill-k8s", "skill-mentoring"]


def test_remove_unknown_entry(sample_cv):
    """Test removing an unknown id."""
    with pytest.raises(EntryNotFound):
        editor.remove_entry(sample_cv, "skills", "skill-cobol")


def test_set_section_visibility_materialises_defaults():
    """Test editing a default section stores the full section list."""
    updated = editor.set_section_visibility(DocumentModel(), "references", False)
    references = next(s for s in updated.sections if s.id == "references")

    assert len(updated.sections) == 9
    assert references.visible is False


def test_update_section_title():
    """Test renaming a section."""
    updated = editor.update_section(DocumentModel(), "experience", {"title": "Career History", "order": 99})
    experience = next(s for s in updated.sections if s.id == "experience")

    assert experience.title == "Career History"
    assert experience.order == 3


def test_update_unknown_section():
    """Test unknown section ids raise EntryNotFound."""
    with pytest.raises(EntryNotFound):
        editor.set_section_visibility(DocumentModel(), "awards", True)


def test_reorder_sections():
    """Test reordering renumbers orders contiguously."""
    updated = editor.reorder_sections(DocumentModel(), ["experience", "summary"])
    ordered = updated.ordered_sections()

    assert [s.id for s in ordered[:3]] == ["experience", "summary", "skills"]
    assert [s.order for s in ordered] == list(range(1, 10))


def test_reorder_sections_repeated_id():
    """Test an id named twice keeps one section at its first position."""
    updated = editor.reorder_sections(DocumentModel(), ["skills", "summary", "skills"])
    ids = [s.id for s in updated.ordered_sections()]

    assert ids[:2] == ["skills", "summary"]
    assert len(ids) == len(set(ids)) == 9
    assert [s.order for s in updated.ordered_sections()] == list(range(1, 10))


def test_touch():
    """Test touch bumps the version."""
    document = DocumentModel(lastModified="2020-01-01T00:00:00+00:00")
    touched = editor.touch(document)

    assert touched.version == document.version + 1
    assert touched.last_modified != document.last_modified
