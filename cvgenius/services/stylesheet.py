"""Service for generating template-scoped CSS."""

import re
from typing import Dict, List, Optional, Sequence, Tuple
from jinja2 import Environment
from cvgenius.models.document_models import DocumentKind, DesignSettings, HEADER_SPACING, SECTION_SPACING
from cvgenius.models.template_models import TemplateDefinition
from cvgenius.utils.template_helpers import create_environment


# Slot name -> selector suffix under the scope class. The container slot styles the scope element itself.
SLOT_SELECTORS = {
    "container": "",
    "header": " .header",
    "sidebar": " .sidebar",
    "mainContent": " .main-content",
    "content": " .content",
    "signature": " .signature",
}

_UNSAFE_FONT_CHARS = re.compile(r"[^A-Za-z0-9 ,'\"\-]")


def merge_slots(chain: Sequence[TemplateDefinition]) -> Dict[str, str]:
    """
    Merge slot declarations along a root-first base chain.

    Later (more derived) templates override the slots they declare and
    inherit the rest. Returns a new dict; catalogue entries are untouched.
    """
    merged: Dict[str, str] = {}
    for template in chain:
        merged.update(template.slots)
    return merged


def slot_selector(slot: str) -> str:
    if slot in SLOT_SELECTORS:
        return SLOT_SELECTORS[slot]
    kebab = re.sub(r"(?<!^)(?=[A-Z])", "-", slot).lower()
    return f" .{kebab}"


def ordered_slot_rules(slots: Dict[str, str]) -> List[Tuple[str, str]]:
    """Slot rules in a fixed order: known slots first, the rest alphabetically."""
    known = [name for name in SLOT_SELECTORS if name in slots]
    extra = sorted(name for name in slots if name not in SLOT_SELECTORS)
    return [(slot_selector(name), slots[name].strip()) for name in known + extra]


def sanitize_font_family(value: str) -> str:
    """Strip characters that could close the CSS declaration a font stack is written into."""
    return _UNSAFE_FONT_CHARS.sub("", value).strip()


class StylesheetBuilder:
    """Builds deterministic CSS for catalogue templates and design overrides."""

    def __init__(self, env: Optional[Environment] = None):
        """
        Initialize the stylesheet builder.

        Args:
            env: Jinja2 environment. Defaults to the shared engine environment
        """
        self.env = env or create_environment()

    def build(self, chain: Sequence[TemplateDefinition]) -> str:
        """
        Generate the CSS for the last template of a root-first base chain.

        Args:
            chain: Resolved base chain, root first, the template itself last

        Returns:
            str: Stylesheet scoped under the template's scope class
        """
        template = chain[-1]
        if template.kind == DocumentKind.COVER_LETTER:
            return self._build_cover_letter(template, chain)
        return self.env.get_template("styles/cv.css").render(
            scope=template.scope_class,
            structure=template.structure,
        )

    def _build_cover_letter(self, template: TemplateDefinition, chain: Sequence[TemplateDefinition]) -> str:
        structure = template.structure
        return self.env.get_template("styles/cover_letter.css").render(
            scope=template.scope_class,
            colors=structure.color_scheme,
            fonts=structure.fonts,
            slot_rules=ordered_slot_rules(merge_slots(chain)),
        )

    def design_overrides(self, template: TemplateDefinition, settings: Optional[DesignSettings]) -> str:
        """
        CSS for a document's design settings, scoped like the template CSS.

        Args:
            template: Template being rendered
            settings: Document design settings, or None for template defaults

        Returns:
            str: Override rules, or "" when the document has no settings
        """
        if settings is None:
            return ""

        scope = f".{template.scope_class}"
        lines = [f"{scope} {{", f"  padding: {settings.margins:g}in;"]
        if settings.font_family:
            font = sanitize_font_family(settings.font_family)
            if font:
                lines.append(f"  font-family: {font};")
        if settings.font_size:
            lines.append(f"  font-size: {settings.font_size:g}pt;")
        if settings.line_height:
            lines.append(f"  line-height: {settings.line_height:g};")
        lines.append("}")
        lines.append("")
        lines.append(f"{scope} section {{")
        lines.append(f"  margin-bottom: {SECTION_SPACING[settings.section_spacing]};")
        lines.append("}")
        lines.append("")
        lines.append(f"{scope} .cv-header {{")
        lines.append(f"  margin-bottom: {HEADER_SPACING[settings.header_spacing]};")
        lines.append("}")
        return "\n".join(lines) + "\n"
