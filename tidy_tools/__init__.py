"""
Tidy Tools - reorganize directory trees safely.

Classifies files into folders by extension, category or date, records every
move so it can be undone, and finds duplicate files by content.
"""

from .version import __version__

__all__ = ["__version__"]
