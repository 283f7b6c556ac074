"""Reduced-error pruning."""

from __future__ import annotations

from loguru import logger

from id3py.evaluate import accuracy


def prune(tree, validation_records) -> int:
    """Greedily collapse branches while held-out accuracy does not drop.

    Each round measures the accuracy of the tree with every branch that still
    has children collapsed in turn (arena order, children restored after each
    trial).  The best trial wins, the first one on ties.  If it scores at
    least the current accuracy the branch is collapsed for good and a new
    round starts; equal accuracy favours the smaller tree.  Pruning stops as
    soon as every trial loses accuracy or no branch is left to collapse.

    The tree is modified in place.  Collapsing clears ``Branch.children`` so
    the branch answers its fallback class; no node leaves the arena.

    Args:
        tree (DecisionTree): Tree to prune.
        validation_records (RecordStore): Held-out records.

    Returns:
        int: Number of branches collapsed.

    Raises:
        EmptyRecordSetError: If ``validation_records`` is empty.
    """
    collapsed = 0
    while True:
        baseline = accuracy(tree, validation_records)
        best_index, best_score = None, -1.0
        for index in tree.branch_indices():
            branch = tree.nodes[index]
            saved = branch.children
            branch.children = {}
            try:
                score = accuracy(tree, validation_records)
            finally:
                branch.children = saved
            if score > best_score:
                best_index, best_score = index, score

        if best_index is None or best_score < baseline:
            break
        tree.nodes[best_index].children = {}
        collapsed += 1
        logger.debug("collapsed node {} (accuracy {:.4f} -> {:.4f})", best_index, baseline, best_score)

    logger.debug(
        "pruning done: {} branches collapsed, {} live nodes, {} pruned nodes",
        collapsed,
        tree.count_live_nodes(),
        tree.count_pruned_nodes(),
    )
    return collapsed
