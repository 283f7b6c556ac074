"""
id3py.validation
================

Training protocols built on :func:`id3py.tree.train`,
:func:`id3py.prune.prune` and :func:`id3py.evaluate.accuracy`:

* :func:`fit_tree` trains a tree, optionally pruning it against the tail of
  its own training records.
* :func:`evaluate_holdout` trains on the first part of the records and
  measures accuracy on the rest.
* :func:`cross_validate` runs k-fold cross-validation over contiguous folds.

All splits are positional.  Shuffle the records beforehand
(:meth:`id3py.records.RecordStore.shuffled`) to randomise them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from loguru import logger

from id3py.evaluate import accuracy
from id3py.exceptions import InvalidFoldCountError
from id3py.prune import prune as prune_tree
from id3py.records import RecordStore
from id3py.tree import DecisionTree, train

# Share of the training records held out for pruning.
DEFAULT_PRUNE_FRACTION = 0.3


@dataclass(frozen=True)
class HoldoutResult:
    accuracy: float
    tree: DecisionTree
    train_size: int
    test_size: int


@dataclass(frozen=True)
class FoldResult:
    """Outcome of one cross-validation fold."""

    fold: int
    test_size: int
    accuracy: float
    live_nodes: int
    pruned_nodes: int
    depth: int


@dataclass(frozen=True)
class CrossValidationResult:
    """Per-fold results and their means.

    Unpacks as ``(mean_accuracy, mean_live_nodes, mean_depth)``.
    """

    folds: tuple[FoldResult, ...]

    @property
    def mean_accuracy(self) -> float:
        return float(np.mean([f.accuracy for f in self.folds]))

    @property
    def mean_live_nodes(self) -> float:
        return float(np.mean([f.live_nodes for f in self.folds]))

    @property
    def mean_depth(self) -> float:
        return float(np.mean([f.depth for f in self.folds]))

    def __iter__(self):
        return iter((self.mean_accuracy, self.mean_live_nodes, self.mean_depth))


def split_for_pruning(records: RecordStore, prune_fraction: float = DEFAULT_PRUNE_FRACTION):
    """Split ``records`` by position into a training part and a pruning part.

    The training part holds the first ``int(n * (1 - prune_fraction))`` records.
    """
    if not 0.0 <= prune_fraction < 1.0:
        raise ValueError(f"prune_fraction must be in [0, 1), got {prune_fraction}")
    cut = int(round(len(records) * (1.0 - prune_fraction), 9))
    return records[:cut], records[cut:]


def fit_tree(records: RecordStore, catalog, *, prune: bool = False, prune_fraction: float = DEFAULT_PRUNE_FRACTION):
    """Train a tree, then optionally prune it.

    With ``prune=True`` the tree is trained on the head of ``records`` and
    pruned on the tail (see :func:`split_for_pruning`).  Pruning is skipped,
    with a warning, when either part is empty; the tree is then trained on
    all of ``records``.
    """
    if not prune:
        return train(records, catalog)
    training, validation = split_for_pruning(records, prune_fraction)
    if len(training) == 0:
        logger.warning("pruning skipped: no records left to grow the tree ({} training records)", len(records))
        return train(records, catalog)
    tree = train(training, catalog)
    if len(validation) == 0:
        logger.warning("pruning skipped: no records left for the pruning set ({} training records)", len(records))
        return tree
    prune_tree(tree, validation)
    return tree


def holdout_split(records: RecordStore, percent: float):
    """First ``int(n * percent / 100)`` records for training, the rest for testing."""
    if not 0.0 <= percent <= 100.0:
        raise ValueError(f"percent must be between 0 and 100, got {percent}")
    cut = int(round(len(records) * (percent / 100.0), 9))
    return records[:cut], records[cut:]


def evaluate_holdout(
    records: RecordStore,
    catalog,
    percent: float,
    *,
    prune: bool = False,
    prune_fraction: float = DEFAULT_PRUNE_FRACTION,
) -> HoldoutResult:
    """Train on the first ``percent`` % of ``records`` and test on the rest.

    Raises:
        EmptyTrainingSetError: If the training part is empty.
        EmptyRecordSetError: If the test part is empty.
    """
    training, test = holdout_split(records, percent)
    tree = fit_tree(training, catalog, prune=prune, prune_fraction=prune_fraction)
    score = accuracy(tree, test)
    logger.info("hold-out: trained on {}, tested on {}, accuracy {:.4f}", len(training), len(test), score)
    return HoldoutResult(score, tree, len(training), len(test))


def fold_bounds(n_records: int, fold_count: int) -> list[tuple[int, int]]:
    """``(start, stop)`` of each contiguous fold.

    Folds hold ``ceil(n_records / fold_count)`` records each, the last one
    possibly fewer.  The rounding can leave fewer than ``fold_count`` folds
    (10 records in 6 folds gives 5 folds of 2); no empty fold is produced.

    Raises:
        InvalidFoldCountError: Unless ``2 <= fold_count <= n_records``.
    """
    if not 2 <= fold_count <= n_records:
        raise InvalidFoldCountError(fold_count, n_records)
    size = math.ceil(n_records / fold_count)
    return [(start, min(start + size, n_records)) for start in range(0, n_records, size)]


def cross_validate(
    records: RecordStore,
    catalog,
    fold_count: int,
    prune: bool = False,
    *,
    prune_fraction: float = DEFAULT_PRUNE_FRACTION,
) -> CrossValidationResult:
    """k-fold cross-validation over contiguous folds.

    Each fold is the test set of a tree trained on every other record (the
    records before and after the fold, in order), pruned as in
    :func:`fit_tree` when ``prune`` is set.

    Returns:
        CrossValidationResult: Per-fold accuracy, live node count and depth,
            with their arithmetic means (as floats) over the folds.
    """
    folds = []
    for fold, (start, stop) in enumerate(fold_bounds(len(records), fold_count)):
        training = RecordStore.concat([records[:start], records[stop:]])
        test = records[start:stop]
        tree = fit_tree(training, catalog, prune=prune, prune_fraction=prune_fraction)
        result = FoldResult(
            fold=fold,
            test_size=len(test),
            accuracy=accuracy(tree, test),
            live_nodes=tree.count_live_nodes(),
            pruned_nodes=tree.count_pruned_nodes(),
            depth=tree.max_depth(),
        )
        logger.info(
            "fold {}: accuracy {:.4f}, {} live nodes, depth {}", fold, result.accuracy, result.live_nodes, result.depth
        )
        folds.append(result)
    return CrossValidationResult(tuple(folds))
