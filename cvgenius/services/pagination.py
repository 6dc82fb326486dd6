"""Content-volume page estimation for A4 documents."""

import math
from typing import List, Optional
from pydantic import BaseModel, Field
from cvgenius.config import get_settings
from cvgenius.models.document_models import DocumentKind, DocumentModel


CHARS_PER_PAGE = 2800

# Content weights, in characters of A4 text
NAME_WEIGHT = 150
SUMMARY_FACTOR = 2
EXPERIENCE_BASE = 300
EXPERIENCE_DESCRIPTION_FACTOR = 1.5
ACHIEVEMENT_WEIGHT = 80
EDUCATION_WEIGHT = 200
SKILLS_BASE = 100
SKILL_WEIGHT = 20
PROJECT_BASE = 200
LIST_BASE = 100
LANGUAGE_WEIGHT = 30
CERTIFICATION_WEIGHT = 50
INTEREST_WEIGHT = 30
REFERENCE_WEIGHT = 150

NEAR_LIMIT_RATIO = 0.8

DOCUMENT_NOUNS = {
    DocumentKind.CV: ("CV", "CVs"),
    DocumentKind.COVER_LETTER: ("Cover letter", "cover letters"),
}

OPTIMIZATION_TIPS = (
    "Use bullet points instead of paragraphs for achievements",
    "Remove older or less relevant work experience",
    "Consolidate similar skills into categories",
    "Use concise, action-oriented language",
    "Remove redundant information between sections",
    "Consider removing personal interests if space is tight",
)


class PageEstimate(BaseModel):
    """Advisory page count for a document against a page limit."""

    pages: int
    content_weight: float = Field(..., alias="contentWeight")
    max_pages: int = Field(..., alias="maxPages")
    is_over_limit: bool = Field(..., alias="isOverLimit")
    is_near_limit: bool = Field(..., alias="isNearLimit")
    message: str
    tips: List[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True


def _letter_text_length(document: DocumentModel) -> int:
    letter = document.letter
    if letter is None:
        return 0
    parts = [letter.salutation, letter.opening, *letter.body, letter.closing, letter.postscript or ""]
    return sum(len(part) for part in parts)


def content_weight(document: DocumentModel) -> float:
    """
    Weighted character count of a document's content.

    Section visibility and the template play no part: hidden content still
    counts, so the same data always weighs the same.
    """
    weight = 0.0

    if document.personal.full_name:
        weight += NAME_WEIGHT
    if document.personal.summary:
        weight += SUMMARY_FACTOR * len(document.personal.summary)

    for exp in document.experience:
        weight += EXPERIENCE_BASE
        weight += EXPERIENCE_DESCRIPTION_FACTOR * len(exp.description or "")
        weight += ACHIEVEMENT_WEIGHT * len(exp.achievements)

    weight += EDUCATION_WEIGHT * len(document.education)

    if document.skills:
        weight += SKILLS_BASE + SKILL_WEIGHT * len(document.skills)

    for project in document.projects:
        weight += PROJECT_BASE + len(project.description or "")

    if document.languages:
        weight += LIST_BASE + LANGUAGE_WEIGHT * len(document.languages)
    if document.certifications:
        weight += LIST_BASE + CERTIFICATION_WEIGHT * len(document.certifications)
    if document.interests:
        weight += LIST_BASE + INTEREST_WEIGHT * len(document.interests)
    if document.references:
        weight += LIST_BASE + REFERENCE_WEIGHT * len(document.references)

    weight += _letter_text_length(document)
    return weight


def estimate_pages(document: DocumentModel) -> int:
    """Number of A4 pages the document's content is expected to fill, at least 1."""
    return max(1, math.ceil(content_weight(document) / CHARS_PER_PAGE))


def estimate(document: DocumentModel, max_pages: Optional[int] = None) -> PageEstimate:
    """
    Estimate pages and compare them with a page limit.

    Args:
        document: Document to measure
        max_pages: Page limit. Defaults to the configured limit

    Returns:
        PageEstimate: Page count, limit flags, message and optimisation tips
    """
    limit = max_pages if max_pages is not None else get_settings().max_pages
    weight = content_weight(document)
    pages = max(1, math.ceil(weight / CHARS_PER_PAGE))

    over = pages > limit
    near = not over and pages >= limit * NEAR_LIMIT_RATIO
    noun = "page" if pages == 1 else "pages"
    limit_noun = "page" if limit == 1 else "pages"
    subject, plural = DOCUMENT_NOUNS[document.kind]

    if over:
        message = (
            f"{subject} is {pages} {noun}. "
            f"Irish employers typically prefer {plural} to be {limit} {limit_noun} maximum."
        )
    elif near:
        message = f"{subject} is {pages} {noun}. Consider keeping it within {limit} {limit_noun} for Irish employers."
    else:
        message = f"{subject} is {pages} {noun}."

    return PageEstimate(
        pages=pages,
        content_weight=weight,
        max_pages=limit,
        is_over_limit=over,
        is_near_limit=near,
        message=message,
        tips=list(OPTIMIZATION_TIPS) if over or near else [],
    )
