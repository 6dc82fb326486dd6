"""Custom exceptions for the templating engine."""

from typing import Optional, Sequence


class TemplateError(Exception):
    """Base class for template catalogue errors."""

    pass


class TemplateNotFound(TemplateError, LookupError):
    """
    Exception raised when a template id is not in the catalogue.

    Attributes:
        template_id: The unknown template id
    """

    def __init__(self, template_id: str, message: Optional[str] = None):
        self.template_id = template_id
        super().__init__(message or f"Template not found: {template_id}")


class CyclicTemplateError(TemplateError):
    """
    Exception raised when a base-template chain revisits itself.

    Attributes:
        template_id: Template whose chain was being resolved
        chain: Ids visited before the repeat, leaf first, ending with the repeated id
    """

    def __init__(self, template_id: str, chain: Sequence[str]):
        self.template_id = template_id
        self.chain = tuple(chain)
        super().__init__(
            f"Cyclic base template chain for '{template_id}': {' -> '.join(self.chain)}"
        )


class RenderError(Exception):
    """
    Exception raised when a section formatter fails during markup assembly.

    Attributes:
        section_type: Type of the section being rendered
        original_error: The exception raised by the formatter
    """

    def __init__(self, section_type: str, original_error: Optional[Exception] = None):
        self.section_type = section_type
        self.original_error = original_error

        parts = [f"Failed to render section '{section_type}'"]
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class EntryNotFound(LookupError):
    """Exception raised when an entry id is not present in a document collection."""

    def __init__(self, collection: str, entry_id: str):
        self.collection = collection
        self.entry_id = entry_id
        super().__init__(f"No entry with id '{entry_id}' in {collection}")
