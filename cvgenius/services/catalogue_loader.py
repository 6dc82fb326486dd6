"""Service for loading the template catalogue from YAML."""

import yaml
from pathlib import Path
from pydantic import ValidationError as SchemaError
from typing import List, Optional
from cvgenius.models.document_models import DocumentKind
from cvgenius.models.template_models import TemplateDefinition


DEFAULT_CATALOGUE_PATH = Path(__file__).parent.parent / "data" / "templates.yaml"


class CatalogueLoader:
    """Service to load and validate template definitions from a YAML file."""

    def __init__(self, catalogue_path: Optional[Path] = None):
        """
        Initialize the catalogue loader.

        Args:
            catalogue_path: YAML catalogue file. Defaults to cvgenius/data/templates.yaml
        """
        self.catalogue_path = Path(catalogue_path) if catalogue_path else DEFAULT_CATALOGUE_PATH

    def load(self) -> List[TemplateDefinition]:
        """
        Load every template definition in the catalogue.

        Returns:
            List[TemplateDefinition]: CV templates followed by cover-letter templates

        Raises:
            FileNotFoundError: If the catalogue file doesn't exist
            ValueError: If the YAML is malformed or an entry is invalid
        """
        if not self.catalogue_path.exists():
            raise FileNotFoundError(
                f"Template catalogue not found: {self.catalogue_path}. "
                f"Expected file at: {self.catalogue_path.absolute()}"
            )

        try:
            with open(self.catalogue_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML format in {self.catalogue_path}: {e}") from e

        templates: List[TemplateDefinition] = []
        for kind in (DocumentKind.CV, DocumentKind.COVER_LETTER):
            for entry in data.get(kind.value) or []:
                templates.append(self._parse_entry(entry, kind))

        return templates

    def _parse_entry(self, entry: dict, kind: DocumentKind) -> TemplateDefinition:
        try:
            return TemplateDefinition(**{**entry, "kind": kind})
        except SchemaError as e:
            raise ValueError(
                f"Invalid template entry '{entry.get('id', '?')}' in {self.catalogue_path}. "
                f"Validation error: {e}"
            ) from e
