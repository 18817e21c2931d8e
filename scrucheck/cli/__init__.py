"""
CLI layer - command line entry points.
"""

from scrucheck.cli.commands import check, check_v1, check_stream, make_command

__all__ = ['check', 'check_v1', 'check_stream', 'make_command']
