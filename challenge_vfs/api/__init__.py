"""
Public API

    ChallengeRepository: Load a source directory, browse and search it
    VFSShell: Text commands over a Navigator
"""

from challenge_vfs.api.repository import ChallengeRepository
from challenge_vfs.api.shell import VFSShell

__all__ = ["ChallengeRepository", "VFSShell"]
