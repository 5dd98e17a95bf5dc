"""Group transactions by submission id, keeping first-seen order."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TypeAlias

from .models import Category, Transaction

# Key shared by every transaction that carries no submission id.
NO_SUBMISSION_ID = "noId"

GroupKey: TypeAlias = int | str


@dataclass(slots=True)
class SubmissionGroup:
    key: GroupKey
    transactions: list[Transaction] = field(default_factory=list)

    @property
    def category(self) -> Category:
        """Category of the group's first transaction (``OTHER`` when empty)."""

        if not self.transactions:
            return Category.OTHER
        return self.transactions[0].category


def group_by_submission(transactions: Iterable[Transaction]) -> list[SubmissionGroup]:
    """Partition ``transactions`` into submission groups in first-seen order."""

    groups: list[SubmissionGroup] = []
    by_key: dict[GroupKey, SubmissionGroup] = {}
    for tx in transactions:
        key: GroupKey = tx.submission_id if tx.submission_id is not None else NO_SUBMISSION_ID
        group = by_key.get(key)
        if group is None:
            group = SubmissionGroup(key=key)
            by_key[key] = group
            groups.append(group)
        group.transactions.append(tx)
    return groups


__all__ = ["NO_SUBMISSION_ID", "GroupKey", "SubmissionGroup", "group_by_submission"]
