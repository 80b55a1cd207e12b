# Importing the package registers every model on Base.metadata.
from db_models.asset import Asset, AssetStatus
from db_models.project import Project, ProjectStatus
from db_models.case import Case
from db_models.note import Note
from db_models.user import User

__all__ = [
    "Asset",
    "AssetStatus",
    "Project",
    "ProjectStatus",
    "Case",
    "Note",
    "User",
]
