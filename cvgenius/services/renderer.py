"""Service for rendering documents into scoped HTML and CSS."""

from typing import List, Optional, Sequence, Tuple
from jinja2 import Environment
from markupsafe import Markup
from cvgenius.exceptions import RenderError
from cvgenius.logger import _log_debug, _log_error, _log_warning, log_render_result
from cvgenius.models.document_models import (
    HEADER_SECTION_TYPES,
    DocumentKind,
    DocumentModel,
    LetterContent,
    Section,
)
from cvgenius.models.template_models import RenderedOutput, TemplateDefinition
from cvgenius.services.section_formatters import formatter_for
from cvgenius.services.template_registry import TemplateRegistry, get_registry
from cvgenius.utils.irish_formatting import work_authorization_text
from cvgenius.utils.template_helpers import create_environment


DEFAULT_SKELETON = "crisp"
DEFAULT_SIGN_OFF = "Yours sincerely,"


def effective_skeleton(chain: Sequence[TemplateDefinition]) -> str:
    """Nearest skeleton declared walking from the template towards its root."""
    for template in reversed(chain):
        if template.skeleton:
            return template.skeleton
    return DEFAULT_SKELETON


def effective_sign_off(chain: Sequence[TemplateDefinition], letter: Optional[LetterContent]) -> str:
    """The letter's own sign-off, else the nearest one declared along the chain."""
    if letter is not None and letter.sign_off:
        return letter.sign_off
    for template in reversed(chain):
        if template.sign_off:
            return template.sign_off
    return DEFAULT_SIGN_OFF


class DocumentRenderer:
    """
    Service to render a DocumentModel with a catalogue template.

    Rendering is a pure function of (document, template): the document is
    never mutated and the same inputs always produce identical output.
    """

    def __init__(self, registry: Optional[TemplateRegistry] = None, env: Optional[Environment] = None):
        """
        Initialize the renderer.

        Args:
            registry: Template registry used for base chains and CSS. Defaults to the shared registry
            env: Jinja2 environment. Defaults to one over cvgenius/templates/
        """
        self.registry = registry or get_registry()
        self.env = env or create_environment()

    def render(self, document: DocumentModel, template: TemplateDefinition) -> RenderedOutput:
        """
        Render a document.

        Args:
            document: Document to render
            template: Catalogue template to render it with

        Returns:
            RenderedOutput: HTML fragment and scoped CSS

        Raises:
            TemplateNotFound: If a base template in the chain is unknown
            CyclicTemplateError: If the base chain is cyclic
        """
        chain = self.registry.resolve_base(template)

        if template.kind == DocumentKind.COVER_LETTER:
            html, skipped = self._render_cover_letter(document, template, chain), 0
        else:
            html, skipped = self._render_cv(document, template)

        css = self.registry.generate_css(template.id)
        overrides = self.registry.stylesheets.design_overrides(template, document.design_settings)
        if overrides:
            css = f"{css}\n{overrides}"

        log_render_result(template.id, len(html), len(css), skipped)
        return RenderedOutput(html=html, css=css)

    def render_page(self, document: DocumentModel, template: TemplateDefinition) -> str:
        """
        Render a document as a standalone HTML page with its CSS inlined.

        Args:
            document: Document to render
            template: Catalogue template to render it with

        Returns:
            str: Complete HTML document
        """
        output = self.render(document, template)
        title = document.personal.full_name or template.name
        return self.env.get_template("layouts/page.html").render(
            lang=document.locale,
            title=title,
            css=Markup(output.css),
            html=Markup(output.html),
        )

    def _render_cv(self, document: DocumentModel, template: TemplateDefinition) -> Tuple[str, int]:
        structure = template.structure
        two_column = structure.layout == "two-column"
        sidebar: List[Markup] = []
        main: List[Markup] = []
        skipped = 0

        for section in document.ordered_sections():
            if not section.visible or section.type in HEADER_SECTION_TYPES:
                continue
            if not structure.supports(section.type):
                _log_debug(f"Template '{template.id}' does not support section '{section.type}'")
                continue

            formatter = formatter_for(section.type)
            if formatter is None:
                _log_warning(f"Skipping unknown section type '{section.type}'")
                skipped += 1
                continue

            try:
                fragment = self._render_section(document, section, template, formatter)
            except RenderError as e:
                _log_error(str(e))
                skipped += 1
                continue

            if fragment is None:
                continue
            if two_column and section.type in structure.sidebar_sections:
                sidebar.append(fragment)
            else:
                main.append(fragment)

        personal = document.personal
        html = self.env.get_template("layouts/cv.html").render(
            scope=template.scope_class,
            layout=structure.layout,
            template_id=template.id,
            personal=personal,
            work_authorization=work_authorization_text(personal.stamp, personal.nationality),
            sidebar=sidebar,
            main=main,
        )
        return html, skipped

    def _render_section(self, document, section: Section, template, formatter) -> Optional[Markup]:
        try:
            context = formatter(document, section, template)
            if context is None:
                return None
            html = self.env.get_template(f"sections/{section.type}.html").render(
                title=section.title or section.type.capitalize(),
                locale=document.locale,
                **context,
            )
        except Exception as e:
            raise RenderError(section.type, e) from e
        return Markup(html)

    def _render_cover_letter(
        self,
        document: DocumentModel,
        template: TemplateDefinition,
        chain: Sequence[TemplateDefinition],
    ) -> str:
        skeleton = effective_skeleton(chain)
        letter = document.letter or LetterContent()
        return self.env.get_template(f"cover_letters/{skeleton}.html").render(
            scope=template.scope_class,
            template_id=template.id,
            skeleton=skeleton,
            personal=document.personal,
            letter=letter,
            locale=document.locale,
            sign_off=effective_sign_off(chain, letter),
        )
