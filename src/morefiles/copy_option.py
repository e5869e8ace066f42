"""Copy option enum for recursive copies."""

from enum import Enum


class CopyOption(str, Enum):
    """Option accepted by a recursive copy. At most one may be given per call.

    Values:
        REPLACE_EXISTING: Remove an existing destination (file or whole tree) before copying
    """

    REPLACE_EXISTING = "replace_existing"
