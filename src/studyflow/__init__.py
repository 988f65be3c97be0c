"""studyflow: spaced-repetition scheduling and study progress analytics."""

from studyflow.consts import VERSION

__version__ = VERSION
