"""Service for loading sample documents used in template previews."""

import yaml
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional
from pydantic import ValidationError as SchemaError
from cvgenius.models.document_models import DocumentKind, DocumentModel


SAMPLE_FILES = {
    DocumentKind.CV: "sample-cv.yaml",
    DocumentKind.COVER_LETTER: "sample-cover-letter.yaml",
}


class SampleDataLoader:
    """Service to load and validate sample documents from YAML files."""

    def __init__(self, data_dir: Optional[Path] = None):
        """
        Initialize the sample data loader and read every sample document.

        Args:
            data_dir: Directory containing YAML files. Defaults to cvgenius/data/

        Raises:
            FileNotFoundError: If a sample YAML file doesn't exist
            ValueError: If a sample's YAML or its structure is invalid
        """
        if data_dir is None:
            data_dir = Path(__file__).parent.parent / "data"
        self.data_dir = Path(data_dir)
        self._samples: Mapping[DocumentKind, DocumentModel] = MappingProxyType(
            {kind: self._read(kind) for kind in SAMPLE_FILES}
        )

    def load(self, kind: DocumentKind = DocumentKind.CV) -> DocumentModel:
        """
        Return the sample document for a document kind.

        Each call returns a fresh copy, so callers may edit it freely.

        Args:
            kind: CV or cover letter

        Returns:
            DocumentModel: Validated sample document
        """
        return self._samples[kind].model_copy(deep=True)

    def _read(self, kind: DocumentKind) -> DocumentModel:
        filepath = self.data_dir / SAMPLE_FILES[kind]

        if not filepath.exists():
            raise FileNotFoundError(
                f"Sample data file not found: {filepath}. "
                f"Expected file at: {filepath.absolute()}"
            )

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML format in {filepath}: {e}") from e

        try:
            return DocumentModel(**{**data, "kind": kind})
        except SchemaError as e:
            raise ValueError(
                f"Invalid sample document structure in {filepath}. "
                f"Validation error: {e}"
            ) from e


# Singleton instance
_sample_loader: Optional[SampleDataLoader] = None


def get_sample_loader(data_dir: Optional[Path] = None) -> SampleDataLoader:
    """
    Get or create the sample data loader singleton.

    Args:
        data_dir: Optional directory for YAML files

    Returns:
        SampleDataLoader: The loader instance
    """
    global _sample_loader
    if _sample_loader is None:
        _sample_loader = SampleDataLoader(data_dir)
    return _sample_loader
