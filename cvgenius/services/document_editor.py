"""Identity-based editing helpers for documents.

Every helper returns a new DocumentModel and leaves its input untouched.
Entries are addressed by their `id`, never by list position.
"""

from typing import Iterable, List
from pydantic import BaseModel
from cvgenius.exceptions import EntryNotFound
from cvgenius.models.document_models import DocumentModel, Section, utc_now_iso


COLLECTIONS = (
    "experience",
    "education",
    "skills",
    "languages",
    "projects",
    "certifications",
    "interests",
    "references",
)


def _entries(document: DocumentModel, collection: str) -> List[BaseModel]:
    if collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection: {collection}")
    return getattr(document, collection)


def _entry_type(document: DocumentModel, collection: str) -> type:
    annotation = type(document).model_fields[collection].annotation
    return annotation.__args__[0]


def _aliased(model: type, changes: dict) -> dict:
    """Key changes by field alias so they replace, not shadow, dumped values."""
    fields = model.model_fields
    return {
        (fields[key].alias or key) if key in fields else key: value
        for key, value in changes.items()
    }


def add_entry(document: DocumentModel, collection: str, entry) -> DocumentModel:
    """
    Append an entry to a collection.

    Args:
        document: Source document
        collection: Collection name, e.g. "experience"
        entry: Entry model or a dict of its fields (camelCase or snake_case)

    Returns:
        DocumentModel: Copy with the entry appended
    """
    entries = list(_entries(document, collection))
    if isinstance(entry, dict):
        entry = _entry_type(document, collection).model_validate(entry)
    entries.append(entry)
    return document.model_copy(update={collection: entries}, deep=True)


def update_entry(document: DocumentModel, collection: str, entry_id: str, changes: dict) -> DocumentModel:
    """
    Apply field changes to one entry, re-validating it.

    Raises:
        EntryNotFound: If no entry in the collection has `entry_id`
    """
    entries = list(_entries(document, collection))
    for index, existing in enumerate(entries):
        if existing.id == entry_id:
            data = {**existing.model_dump(by_alias=True), **_aliased(type(existing), changes), "id": entry_id}
            entries[index] = type(existing).model_validate(data)
            return document.model_copy(update={collection: entries}, deep=True)
    raise EntryNotFound(collection, entry_id)


def remove_entry(document: DocumentModel, collection: str, entry_id: str) -> DocumentModel:
    """
    Remove one entry by id.

    Raises:
        EntryNotFound: If no entry in the collection has `entry_id`
    """
    entries = _entries(document, collection)
    remaining = [entry for entry in entries if entry.id != entry_id]
    if len(remaining) == len(entries):
        raise EntryNotFound(collection, entry_id)
    return document.model_copy(update={collection: remaining}, deep=True)


def _sections(document: DocumentModel) -> List[Section]:
    return [section.model_copy() for section in document.ordered_sections()]


def _find_section(sections: List[Section], section_id: str) -> Section:
    for section in sections:
        if section.id == section_id:
            return section
    raise EntryNotFound("sections", section_id)


def update_section(document: DocumentModel, section_id: str, changes: dict) -> DocumentModel:
    """
    Change a section's title or visibility. Order changes go through reorder_sections.

    Raises:
        EntryNotFound: If the section id is unknown
    """
    sections = _sections(document)
    section = _find_section(sections, section_id)
    allowed = {key: value for key, value in changes.items() if key in ("title", "visible")}
    updated = section.model_copy(update=allowed)
    sections = [updated if s.id == section_id else s for s in sections]
    return document.model_copy(update={"sections": sections}, deep=True)


def set_section_visibility(document: DocumentModel, section_id: str, visible: bool) -> DocumentModel:
    return update_section(document, section_id, {"visible": visible})


def reorder_sections(document: DocumentModel, section_ids: Iterable[str]) -> DocumentModel:
    """
    Put sections in the given order and renumber `order` from 1.

    Sections not named keep their relative order after the named ones.
    An id named more than once keeps its first position.

    Raises:
        EntryNotFound: If a named section id is unknown
    """
    sections = _sections(document)
    unique_ids = list(dict.fromkeys(section_ids))
    ordered = [_find_section(sections, section_id) for section_id in unique_ids]
    named = set(unique_ids)
    ordered += [section for section in sections if section.id not in named]

    renumbered = [
        section.model_copy(update={"order": index})
        for index, section in enumerate(ordered, start=1)
    ]
    return document.model_copy(update={"sections": renumbered}, deep=True)


def touch(document: DocumentModel) -> DocumentModel:
    """Bump the version and refresh lastModified."""
    return document.model_copy(
        update={"version": document.version + 1, "last_modified": utc_now_iso()},
        deep=True,
    )
