# Infrastructure Adapters Package
from .file_repository import FileStudyRepository

__all__ = ["FileStudyRepository"]
