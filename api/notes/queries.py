# api/notes/queries.py
"""
SQLAlchemy query builders for note operations.
"""
import uuid

from sqlalchemy import select

from core.filters import RelationFilter, combine, search_condition
from db_models.asset import Asset
from db_models.case import Case
from db_models.note import Note
from db_models.project import Project


def note_filters(
    *,
    search: str | None = None,
    asset: RelationFilter | None = None,
    project: RelationFilter | None = None,
    case: RelationFilter | None = None,
):
    return combine([
        search_condition(search, Note.content),
        asset.condition(Note.asset_id) if asset else None,
        project.condition(Note.project_id) if project else None,
        case.condition(Note.case_id) if case else None,
    ])


def _select_notes_with_links():
    return (
        select(Note, Asset, Project, Case)
        .outerjoin(Asset, Note.asset_id == Asset.id)
        .outerjoin(Project, Note.project_id == Project.id)
        .outerjoin(Case, Note.case_id == Case.id)
    )


def select_notes_with_links():
    """Notes with every linked row, newest first."""
    return _select_notes_with_links().order_by(Note.created_at.desc(), Note.id.desc())


def select_note_with_links(note_id: uuid.UUID):
    return _select_notes_with_links().where(Note.id == note_id)
