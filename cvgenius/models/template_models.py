"""Pydantic models for template catalogue entries."""

from typing import Any, Dict, Optional, Tuple
from pydantic import BaseModel, Field, field_serializer, field_validator, model_validator

from cvgenius.models.document_models import DocumentKind


class TemplateBaseModel(BaseModel):
    """Immutable base for catalogue models."""

    class Config:
        frozen = True
        populate_by_name = True


class ColorScheme(TemplateBaseModel):
    """Template colour palette."""

    primary: str = "#000000"
    secondary: str = "#ffffff"
    accent: Optional[str] = None
    text: str = "#000000"
    background: str = "#ffffff"


class TemplateFonts(TemplateBaseModel):
    """Heading and body font stacks."""

    heading: str = "Arial, sans-serif"
    body: str = "Arial, sans-serif"


class TemplateSpacing(TemplateBaseModel):
    """Vertical rhythm defaults."""

    section: str = "1.5rem"
    item: str = "1rem"
    line: str = "1.4"


class TemplateStructure(TemplateBaseModel):
    """Which section types a template supports and how it lays them out."""

    layout: str = "single-column"
    sections: Tuple[str, ...] = ()
    sidebar_sections: Tuple[str, ...] = Field((), alias="sidebarSections")
    color_scheme: ColorScheme = Field(default_factory=ColorScheme, alias="colorScheme")
    fonts: TemplateFonts = Field(default_factory=TemplateFonts)
    spacing: TemplateSpacing = Field(default_factory=TemplateSpacing)

    def supports(self, section_type: str) -> bool:
        return section_type in self.sections


class TemplateRules(TemplateBaseModel):
    """Template-specific advisory contract checked by the validator."""

    min_skills: int = Field(0, alias="minSkills")
    required_skill_categories: Tuple[str, ...] = Field((), alias="requiredSkillCategories")
    require_links: bool = Field(False, alias="requireLinks")
    require_certifications: bool = Field(False, alias="requireCertifications")
    require_quantified_achievements: bool = Field(False, alias="requireQuantifiedAchievements")


class TemplateDefinition(TemplateBaseModel):
    """One catalogue entry. Never mutated after the registry loads it."""

    id: str
    name: str
    description: str = ""
    kind: DocumentKind = DocumentKind.CV
    categories: Tuple[str, ...] = ()
    is_premium: bool = Field(False, alias="isPremium")
    popularity: int = 0
    features: Tuple[str, ...] = ()
    recommended: bool = False
    structure: TemplateStructure = Field(default_factory=TemplateStructure)
    rules: TemplateRules = Field(default_factory=TemplateRules)

    # Cover-letter inheritance
    base_template: Optional[str] = Field(None, alias="baseTemplate")
    skeleton: Optional[str] = None
    # (slot, declarations) pairs; a tuple so catalogue entries stay immutable
    slots: Tuple[Tuple[str, str], ...] = ()
    sign_off: Optional[str] = Field(None, alias="signOff")

    @field_validator("slots", mode="before")
    @classmethod
    def slots_from_mapping(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return tuple(value.items())
        return value

    @field_serializer("slots")
    def serialize_slots(self, slots: Tuple[Tuple[str, str], ...]) -> Dict[str, str]:
        return dict(slots)

    @model_validator(mode="after")
    def check_base_template_kind(self) -> "TemplateDefinition":
        if self.base_template and self.kind != DocumentKind.COVER_LETTER:
            raise ValueError(f"Template '{self.id}': only cover-letter templates may declare baseTemplate")
        return self

    @property
    def scope_class(self) -> str:
        """CSS class every rule for this template is scoped under."""
        prefix = "cover-letter-template" if self.kind == DocumentKind.COVER_LETTER else "cv-template"
        return f"{prefix}-{self.id}"

    def summary(self) -> dict:
        """Listing representation used by the HTTP surface."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "kind": self.kind.value,
            "categories": list(self.categories),
            "isPremium": self.is_premium,
            "popularity": self.popularity,
            "recommended": self.recommended,
            "baseTemplate": self.base_template,
            "structure": {
                "layout": self.structure.layout,
                "sections": list(self.structure.sections),
                "colorScheme": self.structure.color_scheme.model_dump(),
            },
        }


class RenderedOutput(BaseModel):
    """HTML fragment and scoped CSS produced by one render pass."""

    html: str
    css: str

    class Config:
        frozen = True
