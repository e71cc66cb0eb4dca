"""Commit step: write parsed entries into a repository."""

import logging
from collections.abc import Iterable

from ..pipeline.entries import Entry
from .repository import Repository

logger = logging.getLogger(__name__)


def commit_entries(repository: Repository, entries: Iterable[Entry]) -> dict[str, str | None]:
    """Write entries in order; entries without a value clear the variable.

    Args:
        repository: Destination repository
        entries: Entries to commit, already decrypted

    Returns:
        The variables actually written (None for cleared ones), in commit order
    """
    committed: dict[str, str | None] = {}
    for entry in entries:
        if entry.value is None:
            if repository.clear(entry.name):
                committed[entry.name] = None
        elif repository.set(entry.name, entry.value):
            committed[entry.name] = entry.value
    logger.debug(f"Committed {len(committed)} variable(s)")
    return committed
