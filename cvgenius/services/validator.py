"""Advisory validation of documents against a template's contract."""

import re
from typing import Dict, List
from pydantic import BaseModel
from cvgenius.models.document_models import DocumentModel, SectionType
from cvgenius.models.template_models import TemplateDefinition


QUANTIFIED_PATTERN = re.compile(r"\d+%|\$|€|£")

COLLECTION_LABELS = {
    SectionType.EXPERIENCE: "work experience",
    SectionType.EDUCATION: "education",
    SectionType.SKILLS: "skill",
    SectionType.PROJECTS: "project",
    SectionType.CERTIFICATIONS: "certification",
    SectionType.LANGUAGES: "language",
    SectionType.INTERESTS: "interest",
}


class ValidationError(BaseModel):
    """One advisory warning. Not an exception: validation never blocks rendering."""

    field: str
    message: str
    section: str


def validate(document: DocumentModel, template: TemplateDefinition) -> List[ValidationError]:
    """
    Check a document against the sections and rules of a template.

    Idempotent and side-effect free; the document is never modified.

    Args:
        document: Document to check
        template: Template whose contract applies

    Returns:
        List[ValidationError]: Warnings in section order, empty when the document satisfies the template
    """
    errors: List[ValidationError] = []
    personal = document.personal

    for section_type in template.structure.sections:
        if section_type in ("header", "personal"):
            if not personal.full_name.strip():
                errors.append(ValidationError(field="personal.fullName", message="Full name is required", section="header"))
            if not (personal.email or "").strip():
                errors.append(ValidationError(field="personal.email", message="Email is required", section="header"))
        elif section_type == SectionType.SUMMARY.value:
            if not (personal.summary or "").strip():
                errors.append(
                    ValidationError(field="personal.summary", message="Professional summary is required", section="summary")
                )
        elif section_type in COLLECTION_LABELS:
            if not getattr(document, section_type):
                label = COLLECTION_LABELS[section_type]
                errors.append(
                    ValidationError(
                        field=section_type,
                        message=f"At least one {label} entry is required",
                        section=section_type,
                    )
                )

    errors.extend(_check_rules(document, template))
    return errors


def _check_rules(document: DocumentModel, template: TemplateDefinition) -> List[ValidationError]:
    rules = template.rules
    personal = document.personal
    errors: List[ValidationError] = []

    if rules.min_skills and len(document.skills) < rules.min_skills:
        errors.append(
            ValidationError(
                field="skills",
                message=f"{template.name} requires at least {rules.min_skills} skills",
                section="skills",
            )
        )

    present = {skill.category.value for skill in document.skills}
    for category in rules.required_skill_categories:
        if category not in present:
            errors.append(
                ValidationError(
                    field="skills",
                    message=f"Add at least one {category} skill",
                    section="skills",
                )
            )

    if rules.require_links and not (personal.github or personal.portfolio):
        errors.append(
            ValidationError(
                field="personal.github",
                message="Tech CVs should include GitHub or portfolio links",
                section="header",
            )
        )

    if rules.require_certifications and not document.certifications:
        errors.append(
            ValidationError(
                field="certifications",
                message="Finance roles typically require professional certifications (e.g., ACA, ACCA, CFA)",
                section="certifications",
            )
        )

    if rules.require_quantified_achievements and document.experience:
        quantified = any(
            QUANTIFIED_PATTERN.search(achievement)
            for exp in document.experience
            for achievement in exp.achievements
        )
        if not quantified:
            errors.append(
                ValidationError(
                    field="experience.achievements",
                    message="CVs should include quantifiable achievements (percentages, amounts)",
                    section="experience",
                )
            )

    return errors


def group_by_section(errors: List[ValidationError]) -> Dict[str, List[str]]:
    """Group warning messages by section, keeping first-seen order."""
    grouped: Dict[str, List[str]] = {}
    for error in errors:
        grouped.setdefault(error.section, []).append(error.message)
    return grouped
