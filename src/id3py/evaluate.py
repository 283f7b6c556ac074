"""Accuracy of a decision tree over a record set."""

from __future__ import annotations

from sklearn.metrics import accuracy_score

from id3py.exceptions import EmptyRecordSetError


def accuracy(tree, records) -> float:
    """Fraction of ``records`` whose class ``tree`` predicts correctly.

    Args:
        tree (DecisionTree): A trained (possibly pruned) tree.
        records (RecordStore): Records to classify.

    Returns:
        float: Accuracy in ``[0, 1]``.

    Raises:
        EmptyRecordSetError: If ``records`` is empty.
    """
    if len(records) == 0:
        raise EmptyRecordSetError()
    return float(accuracy_score(records.targets, tree.predict_rows(records.features)))
