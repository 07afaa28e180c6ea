"""Canvas resource package."""

from .models import Account, Assignment, Course, File, Folder, User

__all__ = [
    "Account",
    "Course",
    "User",
    "Assignment",
    "File",
    "Folder",
]
