"""Pydantic models for CV and cover-letter documents."""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator


def new_entry_id() -> str:
    """Generate a stable identifier for a collection entry."""
    return uuid.uuid4().hex


class SectionType(str, Enum):
    """Section types that have a formatter."""

    SUMMARY = "summary"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    PROJECTS = "projects"
    CERTIFICATIONS = "certifications"
    LANGUAGES = "languages"
    INTERESTS = "interests"
    REFERENCES = "references"


# Section types that live in the header block rather than the section walk
HEADER_SECTION_TYPES = frozenset({"personal", "header"})


class DocumentKind(str, Enum):
    """Kinds of career document."""

    CV = "cv"
    COVER_LETTER = "cover-letter"


class SkillLevel(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"


class SkillCategory(str, Enum):
    TECHNICAL = "Technical"
    SOFTWARE = "Software"
    SOFT = "Soft"
    OTHER = "Other"


class LanguageLevel(str, Enum):
    NATIVE = "Native"
    FLUENT = "Fluent"
    PROFESSIONAL = "Professional"
    CONVERSATIONAL = "Conversational"
    BASIC = "Basic"


class InterestCategory(str, Enum):
    SPORTS = "Sports"
    ARTS = "Arts"
    TECHNOLOGY = "Technology"
    VOLUNTEERING = "Volunteering"
    TRAVEL = "Travel"
    OTHER = "Other"


class ReferencesDisplay(str, Enum):
    """How the references section is presented."""

    AVAILABLE_ON_REQUEST = "available-on-request"
    DETAILED = "detailed"


class DocumentBaseModel(BaseModel):
    """Base model accepting both camelCase aliases and field names."""

    class Config:
        populate_by_name = True


class PersonalInfo(DocumentBaseModel):
    """Personal information block. Every field may be empty."""

    full_name: str = Field("", alias="fullName")
    title: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    linkedin: Optional[str] = None
    website: Optional[str] = None
    github: Optional[str] = None
    portfolio: Optional[str] = None
    summary: Optional[str] = None
    nationality: Optional[str] = None
    stamp: Optional[str] = None  # Irish work authorisation, e.g. "Stamp 4"


class Experience(DocumentBaseModel):
    """Work experience entry."""

    id: str = Field(default_factory=new_entry_id)
    company: str = ""
    position: str = ""
    location: Optional[str] = None
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")
    current: bool = False
    description: Optional[str] = None
    achievements: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def drop_end_date_when_current(self) -> "Experience":
        if self.current:
            self.end_date = None
        return self


class Education(DocumentBaseModel):
    """Education entry."""

    id: str = Field(default_factory=new_entry_id)
    institution: str = ""
    degree: str = ""
    field: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")
    current: bool = False
    grade: Optional[str] = None
    description: Optional[str] = None

    @model_validator(mode="after")
    def drop_end_date_when_current(self) -> "Education":
        if self.current:
            self.end_date = None
        return self


class Skill(DocumentBaseModel):
    """Skill entry."""

    id: str = Field(default_factory=new_entry_id)
    name: str
    level: SkillLevel = SkillLevel.INTERMEDIATE
    category: SkillCategory = SkillCategory.TECHNICAL


class Language(DocumentBaseModel):
    """Spoken language entry."""

    id: str = Field(default_factory=new_entry_id)
    name: str
    level: LanguageLevel = LanguageLevel.PROFESSIONAL
    certification: Optional[str] = None


class Project(DocumentBaseModel):
    """Project entry."""

    id: str = Field(default_factory=new_entry_id)
    name: str
    description: Optional[str] = None
    technologies: List[str] = Field(default_factory=list)
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")
    current: bool = False
    url: Optional[str] = None
    github: Optional[str] = None
    achievements: List[str] = Field(default_factory=list)


class Certification(DocumentBaseModel):
    """Certification entry."""

    id: str = Field(default_factory=new_entry_id)
    name: str
    issuer: Optional[str] = None
    issue_date: Optional[str] = Field(None, alias="issueDate")
    expiry_date: Optional[str] = Field(None, alias="expiryDate")
    credential_id: Optional[str] = Field(None, alias="credentialId")
    url: Optional[str] = None
    description: Optional[str] = None


class Interest(DocumentBaseModel):
    """Interest entry."""

    id: str = Field(default_factory=new_entry_id)
    name: str
    category: Optional[InterestCategory] = None
    description: Optional[str] = None


class Reference(DocumentBaseModel):
    """Referee contact block."""

    id: str = Field(default_factory=new_entry_id)
    name: str
    position: Optional[str] = None
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    relationship: Optional[str] = None


class Section(DocumentBaseModel):
    """
    One logical, orderable, independently visible block of a document.

    `type` stays a plain string so documents written by newer editors with
    section types this engine does not know still parse.
    """

    id: str = Field(default_factory=new_entry_id)
    type: str
    title: Optional[str] = None
    visible: bool = True
    order: int


class DesignSettings(DocumentBaseModel):
    """User overrides for page design. Template defaults apply when absent."""

    margins: float = 0.5  # inches
    section_spacing: str = Field("normal", alias="sectionSpacing")
    header_spacing: str = Field("normal", alias="headerSpacing")
    font_family: Optional[str] = Field(None, alias="fontFamily")
    font_size: Optional[float] = Field(None, alias="fontSize")  # pt
    line_height: Optional[float] = Field(None, alias="lineHeight")

    @field_validator("section_spacing")
    @classmethod
    def check_section_spacing(cls, value: str) -> str:
        if value not in SECTION_SPACING:
            raise ValueError(f"sectionSpacing must be one of: {', '.join(SECTION_SPACING)}")
        return value

    @field_validator("header_spacing")
    @classmethod
    def check_header_spacing(cls, value: str) -> str:
        if value not in HEADER_SPACING:
            raise ValueError(f"headerSpacing must be one of: {', '.join(HEADER_SPACING)}")
        return value


# Spacing presets in CSS units
SECTION_SPACING = {
    "tight": "0.75rem",
    "normal": "1.25rem",
    "relaxed": "1.75rem",
    "spacious": "2.25rem",
}

HEADER_SPACING = {
    "compact": "0.5rem",
    "normal": "1rem",
    "generous": "1.75rem",
}


class Recipient(DocumentBaseModel):
    """Cover letter addressee."""

    name: str = ""
    title: Optional[str] = None
    company: str = ""
    address: Optional[str] = None


class LetterContent(DocumentBaseModel):
    """Body of a cover letter."""

    recipient: Optional[Recipient] = None
    date: Optional[str] = None
    salutation: str = ""
    opening: str = ""
    body: List[str] = Field(default_factory=list)
    closing: str = ""
    sign_off: Optional[str] = Field(None, alias="signOff")
    postscript: Optional[str] = None


DEFAULT_SECTIONS = (
    ("summary", "Professional Summary"),
    ("skills", "Skills"),
    ("experience", "Work Experience"),
    ("education", "Education"),
    ("projects", "Projects"),
    ("certifications", "Certifications"),
    ("languages", "Languages"),
    ("interests", "Interests"),
    ("references", "References"),
)


def default_sections() -> List[Section]:
    """Section list used when a document does not declare its own."""
    return [
        Section(id=section_type, type=section_type, title=title, visible=True, order=index)
        for index, (section_type, title) in enumerate(DEFAULT_SECTIONS, start=1)
    ]


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class DocumentModel(DocumentBaseModel):
    """Complete CV or cover-letter document."""

    id: str = Field(default_factory=new_entry_id)
    kind: DocumentKind = DocumentKind.CV
    template: Optional[str] = None
    last_modified: str = Field(default_factory=utc_now_iso, alias="lastModified")
    version: int = 1
    locale: str = "en-IE"
    personal: PersonalInfo = Field(default_factory=PersonalInfo)
    experience: List[Experience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    skills: List[Skill] = Field(default_factory=list)
    languages: List[Language] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    certifications: List[Certification] = Field(default_factory=list)
    interests: List[Interest] = Field(default_factory=list)
    references: List[Reference] = Field(default_factory=list)
    sections: List[Section] = Field(default_factory=list)
    references_display: ReferencesDisplay = Field(
        ReferencesDisplay.AVAILABLE_ON_REQUEST, alias="referencesDisplay"
    )
    design_settings: Optional[DesignSettings] = Field(None, alias="designSettings")
    letter: Optional[LetterContent] = None

    @field_validator(
        "experience", "education", "skills", "languages", "projects",
        "certifications", "interests", "references", "sections",
        mode="before",
    )
    @classmethod
    def none_to_empty(cls, value):
        return [] if value is None else value

    @field_validator("interests", mode="before")
    @classmethod
    def coerce_interest_strings(cls, value):
        if value is None:
            return []
        return [{"name": item} if isinstance(item, str) else item for item in value]

    @model_validator(mode="after")
    def check_unique_section_orders(self) -> "DocumentModel":
        seen = set()
        for section in self.sections:
            if section.order in seen:
                raise ValueError(f"Duplicate section order {section.order} in sections")
            seen.add(section.order)
        return self

    def ordered_sections(self) -> List[Section]:
        """Sections ascending by `order`, falling back to the default list."""
        sections = self.sections or default_sections()
        return sorted(sections, key=lambda section: section.order)
