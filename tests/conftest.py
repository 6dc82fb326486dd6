"""Shared fixtures for engine tests."""

import pytest
from cvgenius.models.document_models import DocumentModel
from cvgenius.services.renderer import DocumentRenderer
from cvgenius.services.sample_data import SampleDataLoader
from cvgenius.services.template_registry import TemplateRegistry


@pytest.fixture(scope="session")
def registry():
    """Registry over the bundled catalogue."""
    return TemplateRegistry()


@pytest.fixture
def renderer(registry):
    return DocumentRenderer(registry)


@pytest.fixture
def sample_cv():
    """Fresh copy of the bundled sample CV."""
    return SampleDataLoader().load()


@pytest.fixture
def empty_cv():
    return DocumentModel(personal={"fullName": "Seán Ó Briain"})
