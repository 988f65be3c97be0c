"""
Ports (interfaces) for study data retrieval.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod

from .models import CardSnapshot, StudyEvent


class StudyRepository(ABC):
    """
    Port for reading cards and study events from storage.

    Implementations:
        - FileStudyRepository: Loads a YAML/JSON snapshot file.
    """

    @abstractmethod
    async def get_study_events(self, user_id: str, start: int, end: int) -> list[StudyEvent]:
        """
        Fetch every study event (reviews, quizzes, recordings) of a user.

        Args:
            user_id: Owner of the events.
            start: Inclusive lower bound, epoch ms.
            end: Inclusive upper bound, epoch ms.

        Returns:
            List of StudyEvent objects, sorted by timestamp ascending.
        """
        pass

    @abstractmethod
    async def get_deck_cards(self, deck_id: str) -> list[CardSnapshot]:
        """
        Fetch all cards of a deck.
        """
        pass

    @abstractmethod
    async def get_review_events(self, deck_id: str, start: int, end: int) -> list[StudyEvent]:
        """
        Fetch review events for cards of a deck.

        Args:
            deck_id: Deck to query.
            start: Inclusive lower bound, epoch ms.
            end: Inclusive upper bound, epoch ms.

        Returns:
            List of review StudyEvent objects, sorted by timestamp ascending.
        """
        pass

    @abstractmethod
    async def get_quiz_results(self, deck_id: str) -> list[StudyEvent]:
        """
        Fetch every quiz taken on a deck.

        Returns:
            List of quiz StudyEvent objects, sorted by timestamp ascending.
        """
        pass
