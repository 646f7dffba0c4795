"""
Data access layer for Neon Snake.

The only persisted value is the high score, kept in the settings table.
"""

from .repositories import BaseRepository, SettingsRepository

__all__ = [
    'BaseRepository',
    'SettingsRepository',
]
