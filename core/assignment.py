# core/assignment.py
"""
Assignment rules for Project <-> Asset and cascade-to-null on deletion.

Project.asset_id transitions:
  null -> X : assign, assigned_at = now
  X -> null : unassign, assigned_at = null
  X -> Y    : reassign, assigned_at refreshed
  X -> X    : no change

Deleting a parent never deletes or blocks dependents; their references are
cleared instead. The statement builders below return every UPDATE a delete
needs so the caller can issue them inside the same transaction as the
DELETE itself.
"""
import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import Select, Update, func, select, update

from db_base import utcnow
from db_models.case import Case
from db_models.note import Note
from db_models.project import Project


class Transition(str, Enum):
    NONE = "none"
    ASSIGNED = "assigned"
    UNASSIGNED = "unassigned"
    REASSIGNED = "reassigned"


def classify(current: uuid.UUID | None, target: uuid.UUID | None) -> Transition:
    if current == target:
        return Transition.NONE
    if current is None:
        return Transition.ASSIGNED
    if target is None:
        return Transition.UNASSIGNED
    return Transition.REASSIGNED


def set_project_asset(
    project: Project,
    asset_id: uuid.UUID | None,
    *,
    now: datetime | None = None,
) -> Transition:
    """
    Move `project` to `asset_id`, keeping assigned_at consistent with it.

    Returns the transition applied. The caller is responsible for checking
    that the asset exists and for committing.
    """
    transition = classify(project.asset_id, asset_id)
    if transition is Transition.NONE:
        return transition

    if transition is Transition.UNASSIGNED:
        project.asset_id = None
        project.assigned_at = None
    else:
        project.asset_id = asset_id
        project.assigned_at = now or utcnow()
    return transition


def assignment_is_consistent(project: Project) -> bool:
    return (project.asset_id is None) == (project.assigned_at is None)


# ---------- Cascade-to-null statements ----------

def detach_asset_statements(asset_ids: list[uuid.UUID]) -> list[Update]:
    """UPDATEs clearing every reference to the given assets."""
    return [
        update(Project)
        .where(Project.asset_id.in_(asset_ids))
        .values(asset_id=None, assigned_at=None),
        update(Case).where(Case.asset_id.in_(asset_ids)).values(asset_id=None),
        update(Note).where(Note.asset_id.in_(asset_ids)).values(asset_id=None),
    ]


def detach_project_statements(project_ids: list[uuid.UUID]) -> list[Update]:
    """UPDATEs clearing every reference to the given projects."""
    return [
        update(Case).where(Case.project_id.in_(project_ids)).values(project_id=None),
        update(Note).where(Note.project_id.in_(project_ids)).values(project_id=None),
    ]


def detach_case_statements(case_ids: list[uuid.UUID]) -> list[Update]:
    """UPDATEs clearing every reference to the given cases."""
    return [
        update(Note).where(Note.case_id.in_(case_ids)).values(case_id=None),
    ]


def count_notes_orphaned_by(link_column, ids: list[uuid.UUID]) -> Select:
    """
    Count notes whose only remaining link is `link_column` pointing at `ids`.

    Such notes are kept with every reference null once the parent goes.
    """
    others = [
        col for col in (Note.asset_id, Note.project_id, Note.case_id)
        if col.key != link_column.key
    ]
    return select(func.count(Note.id)).where(
        link_column.in_(ids),
        *(col.is_(None) for col in others),
    )
