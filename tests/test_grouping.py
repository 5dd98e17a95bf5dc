from tests.helpers.builders import tx
from weekly_ledger.grouping import NO_SUBMISSION_ID, group_by_submission
from weekly_ledger.models import Category


def test_groups_keep_first_seen_order():
    items = [
        tx("2025-01-08", 1, sid=20),
        tx("2025-01-01", 2, sid=10),
        tx("2025-01-15", 3, sid=20),
        tx("2025-01-22", 4, sid=30),
        tx("2025-01-29", 5, sid=10),
    ]
    groups = group_by_submission(items)
    assert [g.key for g in groups] == [20, 10, 30]
    assert [[t.amount for t in g.transactions] for g in groups] == [
        [1, 3],
        [2, 5],
        [4],
    ]


def test_transactions_without_id_share_the_fallback_group():
    items = [
        tx("2025-01-01", 1, sid=None),
        tx("2025-01-02", 2, sid=5),
        tx("2025-01-03", 3, sid=None),
    ]
    groups = group_by_submission(items)
    assert [g.key for g in groups] == [NO_SUBMISSION_ID, 5]
    assert len(groups[0].transactions) == 2


def test_id_zero_is_a_real_id():
    groups = group_by_submission([tx("2025-01-01", 1, sid=0), tx("2025-01-02", 1, sid=None)])
    assert [g.key for g in groups] == [0, NO_SUBMISSION_ID]


def test_group_category_comes_from_first_transaction():
    groups = group_by_submission(
        [
            tx("2025-01-01", 1, sid=1, category=Category.BILL),
            tx("2025-01-08", 1, sid=1, category=Category.DEBT),
        ]
    )
    assert groups[0].category is Category.BILL


def test_empty_input():
    assert group_by_submission([]) == []
