"""Abstract base class for session parsers."""

from abc import ABC, abstractmethod

from feastvote.models import VotingSession


class SessionFormatError(ValueError):
    """Raised when a session export is structurally invalid.

    For example a missing required field, an unknown vote category or a
    non-integer cost.
    """
    pass


class SessionParser(ABC):
    """Abstract base class for parsing voting-session exports.

    Each parser implementation handles one file format. Parsers are registered
    via the @register_parser decorator in feastvote/parsers/__init__.py.
    """

    @abstractmethod
    def can_parse(self, source: str) -> bool:
        """Check if this parser can handle the given source.

        Args:
            source: Filename or path to check

        Returns:
            True if this parser can handle the source, False otherwise
        """
        pass

    def can_parse_content(self, content: bytes, filename: str) -> bool:
        """Check if this parser can handle the given file content.

        Used when the filename says nothing useful. Subclasses should
        override this to inspect content for tell-tale signs of their format.
        """
        return False

    @abstractmethod
    def parse(self, source: str, content: bytes) -> VotingSession:
        """Parse the content into a VotingSession.

        Args:
            source: Original filename (for context)
            content: Raw bytes of the file

        Returns:
            Parsed VotingSession object

        Raises:
            SessionFormatError: If the content cannot be parsed
        """
        pass
