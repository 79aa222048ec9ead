"""
Display names for permission capability flags.
"""
from dataclasses import dataclass


def generate_permission_name(is_readable: bool, is_writable: bool, is_deletable: bool) -> str:
    """
    Build the display name for a set of capability flags.

    Terms are always listed in the order Readable, Writable, Deletable and
    joined with ", ". No flags set gives an empty string.

    Example:
        >>> generate_permission_name(True, False, True)
        'Readable, Deletable'
    """
    parts = []
    if is_readable:
        parts.append("Readable")
    if is_writable:
        parts.append("Writable")
    if is_deletable:
        parts.append("Deletable")
    return ", ".join(parts)


@dataclass(frozen=True)
class PermissionFlags:
    """The three capability flags of a permission."""
    is_readable: bool = False
    is_writable: bool = False
    is_deletable: bool = False

    @property
    def name(self) -> str:
        return generate_permission_name(self.is_readable, self.is_writable, self.is_deletable)
