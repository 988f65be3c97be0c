"""
Repository Factory
Centralizes the logic for selecting the study data adapter.
"""

from studyflow.application.config import AppConfig
from studyflow.domain.stats.ports import StudyRepository
from studyflow.infrastructure.adapters.file_repository import FileStudyRepository


def get_study_repository(config: AppConfig) -> StudyRepository:
    """
    Returns the StudyRepository implementation for the configured data source.

    Raises:
        ValueError: If no data file is configured.
    """
    if config.data_file is None:
        raise ValueError(
            "No study data file configured. Pass --data or set STUDYFLOW_DATA_FILE."
        )
    return FileStudyRepository(config.data_file)
