"""
Entry point for python -m scrucheck
"""

from scrucheck.cli import check

if __name__ == '__main__':
    check(prog_name='scru128-test')
