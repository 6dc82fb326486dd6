"""Template catalogue registry with base-chain resolution and session selection."""

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Optional
from cvgenius.config import get_settings
from cvgenius.exceptions import CyclicTemplateError, TemplateNotFound
from cvgenius.logger import _log_debug, _log_success, _log_warning, log_catalogue_loaded
from cvgenius.models.document_models import DocumentKind
from cvgenius.models.template_models import TemplateDefinition
from cvgenius.services.catalogue_loader import CatalogueLoader
from cvgenius.services.stylesheet import StylesheetBuilder


CATEGORY_DESCRIPTIONS = {
    "tech": "Templates optimized for technology and IT professionals",
    "modern": "Contemporary designs with clean, minimalist layouts",
    "dublin": "Tailored for Dublin-based job market and companies",
    "finance": "Professional templates for banking and financial services",
    "professional": "Traditional, formal designs for corporate environments",
    "healthcare": "Specialized for medical and healthcare professionals",
    "creative": "Unique designs for creative and artistic professionals",
    "academic": "Ideal for research, teaching, and academic positions",
    "graduate": "Perfect for recent graduates and entry-level positions",
    "executive": "Premium designs for senior management roles",
    "classic": "Timeless, traditional CV formats",
    "ats-friendly": "Optimized for Applicant Tracking Systems",
    "traditional": "Conservative designs suitable for any industry",
    "minimal": "Understated layouts that keep the focus on content",
    "casual": "Relaxed designs for startups, hospitality and informal workplaces",
}


@dataclass
class TemplateSession:
    """
    Session-scoped template selection.

    Owned by the caller (one per user session or request); the registry only
    writes to the session it is handed.
    """

    template_id: Optional[str] = None


class TemplateRegistry:
    """
    Read-only catalogue of CV and cover-letter templates.

    The catalogue is frozen at construction: definitions are immutable models
    held in a read-only mapping, so concurrent readers need no locking.
    """

    def __init__(
        self,
        templates: Optional[Iterable[TemplateDefinition]] = None,
        catalogue_path: Optional[Path] = None,
        stylesheet_builder: Optional[StylesheetBuilder] = None,
    ):
        """
        Initialize the registry.

        Args:
            templates: Template definitions. Loaded from the YAML catalogue when omitted
            catalogue_path: Catalogue file used when templates are not given
            stylesheet_builder: CSS builder. Defaults to one over the shared environment

        Raises:
            ValueError: If two definitions share an id
        """
        source = None
        if templates is None:
            loader = CatalogueLoader(catalogue_path)
            templates = loader.load()
            source = loader.catalogue_path

        catalogue: Dict[str, TemplateDefinition] = {}
        for template in templates:
            if template.id in catalogue:
                raise ValueError(f"Duplicate template id in catalogue: {template.id}")
            catalogue[template.id] = template

        self._templates = MappingProxyType(catalogue)
        self.stylesheets = stylesheet_builder or StylesheetBuilder()

        if source is not None:
            log_catalogue_loaded(
                source,
                len(self.list_all(DocumentKind.CV)),
                len(self.list_all(DocumentKind.COVER_LETTER)),
            )

    def __contains__(self, template_id: str) -> bool:
        return template_id in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def list_all(self, kind: Optional[DocumentKind] = None) -> List[TemplateDefinition]:
        """
        List templates ordered by popularity (highest first), then id.

        Args:
            kind: Restrict to CV or cover-letter templates

        Returns:
            List[TemplateDefinition]: Templates in stable order
        """
        templates = [t for t in self._templates.values() if kind is None or t.kind == kind]
        return sorted(templates, key=lambda t: (-t.popularity, t.id))

    def list_by_category(self, category: str, kind: Optional[DocumentKind] = None) -> List[TemplateDefinition]:
        """Templates tagged with a category; an unknown or empty category yields []."""
        if not category:
            return []
        return [t for t in self.list_all(kind) if category in t.categories]

    def find(self, template_id: str) -> Optional[TemplateDefinition]:
        """Look up a template, returning None when the id is unknown."""
        return self._templates.get(template_id)

    def get_by_id(self, template_id: str) -> TemplateDefinition:
        """
        Look up a template by id.

        Raises:
            TemplateNotFound: If the id is not in the catalogue
        """
        template = self._templates.get(template_id)
        if template is None:
            raise TemplateNotFound(template_id)
        return template

    def select(self, template_id: str, session: TemplateSession) -> bool:
        """
        Store a template as the session's current selection.

        Args:
            template_id: Template to select
            session: Caller-owned selection state

        Returns:
            bool: False, leaving the session untouched, when the id is unknown
        """
        if template_id not in self._templates:
            _log_warning(f"Rejected selection of unknown template '{template_id}'")
            return False

        session.template_id = template_id
        _log_debug(f"Selected template '{template_id}'")
        return True

    def current(self, session: TemplateSession) -> Optional[TemplateDefinition]:
        """Template currently selected in a session, if any."""
        if session.template_id is None:
            return None
        return self.find(session.template_id)

    def resolve_base(self, template: TemplateDefinition) -> List[TemplateDefinition]:
        """
        Resolve the inheritance chain of a template.

        Args:
            template: Template to resolve

        Returns:
            List[TemplateDefinition]: Ancestors root first, ending with the template itself

        Raises:
            CyclicTemplateError: If the chain revisits an id
            TemplateNotFound: If a base template id is not in the catalogue
        """
        chain = [template]
        visited = {template.id}
        current = template

        while current.base_template:
            base_id = current.base_template
            if base_id in visited:
                path = [t.id for t in chain] + [base_id]
                _log_warning(f"Cyclic base chain detected: {' -> '.join(path)}")
                raise CyclicTemplateError(template.id, path)

            current = self.get_by_id(base_id)
            chain.append(current)
            visited.add(base_id)

        chain.reverse()
        return chain

    def generate_css(self, template_id: str) -> str:
        """
        Generate the scoped stylesheet for a template.

        Deterministic: repeated calls for the same id return identical text.

        Raises:
            TemplateNotFound: If the id (or a base in its chain) is unknown
            CyclicTemplateError: If the base chain is cyclic
        """
        template = self.get_by_id(template_id)
        return self.stylesheets.build(self.resolve_base(template))

    def categories(self, kind: Optional[DocumentKind] = None) -> List[dict]:
        """
        Distinct categories with template counts, most populated first.

        Args:
            kind: Restrict counting to CV or cover-letter templates

        Returns:
            List[dict]: Category records with id, name, slug, count and description
        """
        counts: Dict[str, int] = {}
        for template in self.list_all(kind):
            for category in template.categories:
                counts[category] = counts.get(category, 0) + 1

        categories = [
            {
                "id": category,
                "name": category[:1].upper() + category[1:].replace("-", " "),
                "slug": category,
                "count": count,
                "description": CATEGORY_DESCRIPTIONS.get(category, f"Templates for {category} professionals"),
            }
            for category, count in counts.items()
        ]
        categories.sort(key=lambda c: (-c["count"], c["id"]))
        return categories

    def search(self, query: str, kind: Optional[DocumentKind] = None) -> List[TemplateDefinition]:
        """Case-insensitive search over name, categories, description and features."""
        term = (query or "").strip().lower()
        if not term:
            return self.list_all(kind)

        def matches(template: TemplateDefinition) -> bool:
            haystack = [template.name, template.description, *template.categories, *template.features]
            return any(term in text.lower() for text in haystack)

        return [t for t in self.list_all(kind) if matches(t)]


# Singleton instance
_registry: Optional[TemplateRegistry] = None


def get_registry() -> TemplateRegistry:
    """
    Get or create the read-only registry singleton.

    Returns:
        TemplateRegistry: Registry built from the configured catalogue
    """
    global _registry
    if _registry is None:
        settings = get_settings()
        path = Path(settings.catalogue_path) if settings.catalogue_path else None
        _registry = TemplateRegistry(catalogue_path=path)
        _log_success(f"Template registry ready with {len(_registry)} templates")
    return _registry
