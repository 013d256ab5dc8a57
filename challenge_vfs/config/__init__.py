"""
Configuration System

Manages configuration for challenge-vfs with a layered approach.

Configuration Priority (highest to lowest):
    1. Programmatic (passed to VFSConfig()) or config file (VFSConfig.from_file)
    2. Environment variables (CHALLENGE_VFS_* prefix)
    3. Built-in defaults

Modules:
    settings: VFSConfig class
"""

from challenge_vfs.config.settings import VFSConfig

__all__ = ["VFSConfig"]
