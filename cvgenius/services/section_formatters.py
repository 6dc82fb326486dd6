"""Per-section formatters feeding the section templates."""

from typing import Callable, Dict, Optional
from cvgenius.models.document_models import DocumentModel, ReferencesDisplay, Section, SectionType
from cvgenius.models.template_models import TemplateDefinition
from cvgenius.utils.template_helpers import group_skills_by_category


REFERENCES_ON_REQUEST = "References available upon request"

# A formatter returns the template context for its section, or None when there is nothing to show
SectionFormatter = Callable[[DocumentModel, Section, TemplateDefinition], Optional[dict]]


def _collection(name: str) -> SectionFormatter:
    def format_collection(document: DocumentModel, section: Section, template: TemplateDefinition) -> Optional[dict]:
        entries = getattr(document, name)
        if not entries:
            return None
        return {"entries": entries}

    format_collection.__name__ = f"format_{name}"
    return format_collection


def format_summary(document: DocumentModel, section: Section, template: TemplateDefinition) -> Optional[dict]:
    summary = (document.personal.summary or "").strip()
    if not summary:
        return None
    return {"summary": summary}


def format_skills(document: DocumentModel, section: Section, template: TemplateDefinition) -> Optional[dict]:
    """
    Skills are grouped by category in the main column and drawn as level
    bars when the template places them in a two-column sidebar.
    """
    if not document.skills:
        return None

    structure = template.structure
    in_sidebar = structure.layout == "two-column" and section.type in structure.sidebar_sections
    groups = group_skills_by_category(
        [{"name": skill.name, "category": skill.category.value} for skill in document.skills]
    )
    return {"entries": document.skills, "groups": groups, "show_bars": in_sidebar}


def format_references(document: DocumentModel, section: Section, template: TemplateDefinition) -> Optional[dict]:
    if document.references_display == ReferencesDisplay.AVAILABLE_ON_REQUEST:
        return {"on_request": True, "on_request_text": REFERENCES_ON_REQUEST, "entries": []}
    if not document.references:
        return None
    return {"on_request": False, "on_request_text": "", "entries": document.references}


SECTION_FORMATTERS: Dict[SectionType, SectionFormatter] = {
    SectionType.SUMMARY: format_summary,
    SectionType.EXPERIENCE: _collection("experience"),
    SectionType.EDUCATION: _collection("education"),
    SectionType.SKILLS: format_skills,
    SectionType.PROJECTS: _collection("projects"),
    SectionType.CERTIFICATIONS: _collection("certifications"),
    SectionType.LANGUAGES: _collection("languages"),
    SectionType.INTERESTS: _collection("interests"),
    SectionType.REFERENCES: format_references,
}

_missing = set(SectionType) - set(SECTION_FORMATTERS)
if _missing:
    raise RuntimeError(f"No formatter for section types: {sorted(t.value for t in _missing)}")


def formatter_for(section_type: str) -> Optional[SectionFormatter]:
    """Formatter for a section type string, or None for types without one."""
    try:
        return SECTION_FORMATTERS[SectionType(section_type)]
    except ValueError:
        return None
