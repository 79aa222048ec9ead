"""
Permission set reconciliation.

Works out which of a user's stored permissions to update, which to delete
and which submitted entries to insert as new rows, keyed by permission id.
Existing ids are preserved for every permission that is resubmitted.
"""
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from app.core.database.base import generate_ulid
from app.features.permissions.labeler import PermissionFlags
from app.features.permissions.schemas import PermissionRequest


@dataclass
class PermissionChanges:
    """
    Delta between stored and submitted permissions.

    updates: existing id -> new flags
    inserts: freshly minted id -> flags
    deletes: existing ids absent from the submission
    """
    updates: dict[str, PermissionFlags] = field(default_factory=dict)
    inserts: dict[str, PermissionFlags] = field(default_factory=dict)
    deletes: set[str] = field(default_factory=set)

    @property
    def resulting_ids(self) -> set[str]:
        """Ids the user owns once the changes are applied."""
        return set(self.updates) | set(self.inserts)


def reconcile_permissions(
    current_ids: Iterable[str],
    submitted: Iterable[PermissionRequest],
    new_id: Callable[[], str] = generate_ulid,
) -> PermissionChanges:
    """
    Compute the changes that turn the current permission set into the submitted one.

    Args:
        current_ids: Ids of the permissions the user owns now (a mapping keyed
            by id works too).
        submitted: Target permission entries. An entry's permission_id is only
            trusted when it names one of current_ids; anything else, including
            no id at all, becomes an insert under a fresh id.
        new_id: Id factory for inserted permissions.

    Returns:
        PermissionChanges whose updates, inserts and deletes are disjoint.
        When the same existing id is submitted more than once, the last
        entry's flags win.
    """
    current = set(current_ids)
    changes = PermissionChanges()

    for entry in submitted:
        flags = entry.flags()
        if entry.permission_id is not None and entry.permission_id in current:
            changes.updates[entry.permission_id] = flags
        else:
            changes.inserts[new_id()] = flags

    changes.deletes = current - changes.updates.keys()
    return changes
