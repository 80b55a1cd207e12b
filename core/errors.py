# core/errors.py
"""
Domain exceptions shared across the entity modules.
"""


class EntityNotFoundError(Exception):
    """Raised when a referenced row does not exist."""
    entity = "Entity"

    def __init__(self, entity_id):
        self.entity_id = entity_id
        super().__init__(f"{self.entity} {entity_id} not found")


class AssetNotFoundError(EntityNotFoundError):
    entity = "Asset"


class ProjectNotFoundError(EntityNotFoundError):
    entity = "Project"


class CaseNotFoundError(EntityNotFoundError):
    entity = "Case"


class NoteNotFoundError(EntityNotFoundError):
    entity = "Note"


class ProjectNotAssignedError(Exception):
    """Raised when unassigning a project from an asset it is not assigned to."""

    def __init__(self, project_id, asset_id):
        self.project_id = project_id
        self.asset_id = asset_id
        super().__init__(f"Project {project_id} is not assigned to asset {asset_id}")


class DuplicateEmailError(Exception):
    """Raised when a user email already exists."""
    pass
