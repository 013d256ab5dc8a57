"""
Utility Functions

Helpers shared by the ingestion and VFS stages.

Modules:
    text: Slugs, branch names, base64 URL decoding and URL checks
"""

from challenge_vfs.utils.text import (
    branch_name,
    decode_base64_url,
    encode_base64_url,
    is_absolute_url,
    leaf_slug,
)

__all__ = [
    "branch_name",
    "decode_base64_url",
    "encode_base64_url",
    "is_absolute_url",
    "leaf_slug",
]
