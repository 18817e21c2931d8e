"""
Validation: monotonic ordering checks.
"""

from scrucheck.context.validation.validator import OrderValidator, validate

__all__ = ['OrderValidator', 'validate']
