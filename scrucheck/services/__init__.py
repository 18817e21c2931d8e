"""
Services layer - application orchestration.
"""

from scrucheck.services.checker import EXIT_FAILURE, EXIT_SUCCESS, IdentifierChecker, run
from scrucheck.services.reporter import NOT_AVAILABLE, format_number, render

# Provide consistent naming
Checker = IdentifierChecker

__all__ = [
    'IdentifierChecker',
    'run',
    'render',
    'format_number',
    'NOT_AVAILABLE',
    'EXIT_SUCCESS',
    'EXIT_FAILURE',
    # Aliases
    'Checker',
]
