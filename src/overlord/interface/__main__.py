"""
Run the Duck Overlord CLI.

Usage:
    python -m overlord.interface
"""

from .cli import main

main()
