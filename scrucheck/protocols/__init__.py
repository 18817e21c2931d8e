"""
Protocols (interfaces) for scrucheck components.

This module defines abstract contracts that implementations must follow.
"""

from abc import ABC, abstractmethod
from typing import Optional, Union
from scrucheck.models import IdFormat, Identifier, ValidationOutcome

__all__ = [
    'DecoderProtocol',
    'ValidatorProtocol',
]


class DecoderProtocol(ABC):
    """Protocol for turning one input token into an identifier."""

    @abstractmethod
    def decode(self, token: Union[bytes, str]) -> Identifier:
        """
        Decode a token into an Identifier.

        Args:
            token: One input line without its line terminator

        Returns:
            Decoded Identifier

        Raises:
            MalformedTokenError: token is not a well-formed identifier
        """
        pass

    @property
    @abstractmethod
    def format(self) -> IdFormat:
        """Return the format this decoder accepts."""
        pass


class ValidatorProtocol(ABC):
    """Protocol for ordering checks between consecutive identifiers."""

    @abstractmethod
    def validate(self, prev: Optional[Identifier], curr: Identifier) -> ValidationOutcome:
        """
        Check curr against the last accepted identifier.

        Args:
            prev: Last accepted identifier, or None for the first record
            curr: Newly decoded identifier

        Returns:
            ValidationOutcome
        """
        pass
