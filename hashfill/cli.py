"""
CLI entry point for the hashfill command.
"""
import sys

from hashfill.runner import main

# Re-export main for the console_scripts entry point
__all__ = ['main']

if __name__ == '__main__':
    sys.exit(main())
