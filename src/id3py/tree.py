# -*- coding: utf-8 -*-
"""
id3py.tree
==========

ID3 decision tree induction over integer-encoded records.

The tree is stored as an *arena*: a flat list of nodes addressed by their
position.  Node 0 is the root and every child is appended after its parent,
so child indices are always larger than their parent's index and a walk from
the root always terminates.  Two node types exist:

``Branch``
    Splits on one feature.  ``children`` maps an observed feature value to
    the index of the child node; a value missing from ``children`` falls back
    to ``fallback_class``, the majority class of the training records that
    reached the branch.
``Leaf``
    Predicts a single class.

Training (:func:`train`) is iterative: an explicit stack of frontier items
replaces recursion, so deep trees never hit Python's recursion limit.  The
splitting criterion is information gain, computed as the minimum weighted
entropy of the child partitions.

Pruning (see :mod:`id3py.prune`) never removes nodes from the arena.  It
clears a branch's ``children``, which turns the branch into a stub that
always answers its ``fallback_class``.  The nodes below it stay in the arena
but are no longer reachable; :meth:`DecisionTree.count_live_nodes` and
:meth:`DecisionTree.count_pruned_nodes` tell the two apart.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

import numpy as np
from loguru import logger

from id3py.exceptions import EmptyTrainingSetError

# Split scores closer than this are treated as equal (lowest feature index wins).
_TIE_TOLERANCE = 1e-12


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def class_distribution(targets: np.ndarray, n_classes: int) -> np.ndarray:
    """Count of records per class index."""
    return np.bincount(targets, minlength=n_classes)


def entropy(distribution) -> float:
    """Shannon entropy (bits) of a class count vector; 0 for empty or pure ones."""
    counts = np.asarray(distribution, dtype=float)
    tot = counts.sum()
    if tot <= 0:
        return 0.0
    p = counts[counts > 0] / tot
    return 0.0 - float(np.sum(p * np.log2(p)))


def weighted_child_entropy(column: np.ndarray, targets: np.ndarray, domain_size: int, n_classes: int) -> float:
    """Entropy left after partitioning ``targets`` by the values in ``column``.

    Each of the ``domain_size`` values contributes the entropy of its
    partition weighted by the partition's share of the records.  Values that
    no record takes contribute nothing.
    """
    table = np.zeros((domain_size, n_classes), dtype=np.int64)
    np.add.at(table, (column, targets), 1)
    sizes = table.sum(axis=1)
    total = sizes.sum()
    if total == 0:
        return 0.0
    return float(sum(sizes[v] / total * entropy(table[v]) for v in np.flatnonzero(sizes)))


def majority_class(distribution) -> int:
    """Most frequent class index; the lowest index wins ties."""
    return int(np.argmax(distribution))


# -----------------------------------------------------------------------------
# Nodes
# -----------------------------------------------------------------------------
@dataclass
class Branch:
    """Internal node splitting on ``feature``.

    Attributes
    ----------
    feature : int
        Index of the feature attribute tested at this node.
    children : dict[int, int]
        Maps a feature value to the arena index of the child node.  Empty
        once the branch has been pruned.
    fallback_class : int
        Class predicted when the record's value has no child.
    """

    feature: int
    children: dict[int, int] = field(default_factory=dict)
    fallback_class: int = 0


@dataclass(frozen=True)
class Leaf:
    target: int


Node = Union[Branch, Leaf]


@dataclass(frozen=True)
class UnresolvedLeaf:
    """Records left with conflicting classes after every feature was used.

    No node is created for them: ``parent`` has no child for ``value`` and
    prediction falls back to the parent's ``fallback_class``.
    """

    parent: int
    value: int
    distribution: tuple[int, ...]


@dataclass
class _Frontier:
    used: frozenset
    indices: np.ndarray
    parent_link: tuple[int, int] | None


# -----------------------------------------------------------------------------
# Tree
# -----------------------------------------------------------------------------
class DecisionTree:
    """Arena of :class:`Branch` and :class:`Leaf` nodes; node 0 is the root.

    Attributes
    ----------
    nodes : list[Branch | Leaf]
        The arena.  It only grows.
    unresolved : list[UnresolvedLeaf]
        Frontier items training could not turn into a node.
    """

    def __init__(self, nodes=None):
        self.nodes: list[Node] = list(nodes) if nodes is not None else []
        self.unresolved: list[UnresolvedLeaf] = []

    def __len__(self) -> int:
        return len(self.nodes)

    def __repr__(self) -> str:
        return f"DecisionTree(nodes={len(self.nodes)}, live={self.count_live_nodes()})"

    def _append(self, node: Node, parent_link: tuple[int, int] | None) -> int:
        index = len(self.nodes)
        self.nodes.append(node)
        if parent_link is not None:
            parent, value = parent_link
            self.nodes[parent].children[value] = index
        return index

    # ------------------------------------------------------------------
    # Prediction
    # ------------------------------------------------------------------
    def predict_features(self, features) -> int:
        """Class index predicted for one feature vector.

        Raises
        ------
        ValueError
            If the tree has no nodes (it was never trained).
        """
        if not self.nodes:
            raise ValueError("Tree not trained. Call train(...) first.")
        node = self.nodes[0]
        while isinstance(node, Branch):
            child = node.children.get(features[node.feature])
            if child is None:
                return node.fallback_class
            node = self.nodes[child]
        return node.target

    def predict_rows(self, features: np.ndarray) -> np.ndarray:
        """Class indices predicted for every row of a 2-D feature array."""
        return np.array([self.predict_features(row) for row in np.asarray(features).tolist()], dtype=np.int64)

    # ------------------------------------------------------------------
    # Shape metrics
    # ------------------------------------------------------------------
    def live_nodes(self) -> set[int]:
        """Indices of the nodes reachable from the root."""
        if not self.nodes:
            return set()
        seen = {0}
        stack = [0]
        while stack:
            node = self.nodes[stack.pop()]
            if isinstance(node, Branch):
                for child in node.children.values():
                    if child not in seen:
                        seen.add(child)
                        stack.append(child)
        return seen

    def count_live_nodes(self) -> int:
        return len(self.live_nodes())

    def count_pruned_nodes(self) -> int:
        """Nodes left in the arena but detached from the root by pruning."""
        return len(self.nodes) - self.count_live_nodes()

    def max_depth(self) -> int:
        """Number of nodes on the longest reachable root-to-leaf path (0 if empty)."""
        if not self.nodes:
            return 0
        deepest = 0
        stack = [(0, 1)]
        while stack:
            index, depth = stack.pop()
            deepest = max(deepest, depth)
            node = self.nodes[index]
            if isinstance(node, Branch):
                stack.extend((child, depth + 1) for child in node.children.values())
        return deepest

    def branch_indices(self) -> list[int]:
        """Arena indices of branches that still have children, in arena order.

        Branches detached from the root by an earlier prune are included.
        """
        return [i for i, node in enumerate(self.nodes) if isinstance(node, Branch) and node.children]


def predict(tree: DecisionTree, record) -> int:
    """Class index predicted by ``tree`` for ``record``."""
    return tree.predict_features(record.features)


# -----------------------------------------------------------------------------
# Training
# -----------------------------------------------------------------------------
def train(records, catalog) -> DecisionTree:
    """Induce an ID3 decision tree.

    Parameters
    ----------
    records : RecordStore
        Non-empty training records whose indices are valid for ``catalog``.
    catalog : AttributeCatalog
        Domains of the features and of the class.

    Returns
    -------
    DecisionTree
        A new tree; node 0 is its root.

    Raises
    ------
    EmptyTrainingSetError
        If ``records`` is empty.

    Notes
    -----
    * A subset with a single class becomes a :class:`Leaf`.
    * Otherwise, if features remain unused on the path, the one with the
      lowest weighted child entropy (lowest index on ties) becomes a
      :class:`Branch` whose fallback is the subset's majority class (lowest
      index on ties).  One frontier item is pushed per observed value, in
      ascending value order, so the largest value is built first.
    * Otherwise no node is created: the subset is recorded on
      ``tree.unresolved``, the parent keeps no child for that value and
      prediction answers the parent's fallback class.  The root is the one
      exception: when the catalog has no features, a majority :class:`Leaf`
      is emitted so that the tree is never empty.
    """
    if len(records) == 0:
        raise EmptyTrainingSetError()

    features, targets = records.features, records.targets
    n_classes = catalog.n_classes
    sizes = catalog.feature_sizes()
    tree = DecisionTree()

    stack = [_Frontier(frozenset(), np.arange(len(records)), None)]
    while stack:
        item = stack.pop()
        subset_targets = targets[item.indices]
        distribution = class_distribution(subset_targets, n_classes)
        present = np.flatnonzero(distribution)

        if len(present) == 1:
            tree._append(Leaf(int(present[0])), item.parent_link)
        elif len(item.used) < len(sizes):
            subset = features[item.indices]
            feature, score = _best_feature(subset, subset_targets, sizes, item.used, n_classes)
            branch = Branch(feature, {}, majority_class(distribution))
            index = tree._append(branch, item.parent_link)
            logger.trace("node {}: split on feature {} (weighted entropy {:.4f})", index, feature, score)
            column = subset[:, feature]
            used = item.used | {feature}
            for value in np.unique(column):
                stack.append(_Frontier(used, item.indices[column == value], (index, int(value))))
        elif item.parent_link is None:
            tree._append(Leaf(majority_class(distribution)), None)
        else:
            parent, value = item.parent_link
            tree.unresolved.append(UnresolvedLeaf(parent, value, tuple(int(c) for c in distribution)))
            logger.debug("unresolved: node {} value {} distribution {}", parent, value, distribution.tolist())

    logger.debug(
        "trained tree: {} nodes, depth {}, {} unresolved", len(tree), tree.max_depth(), len(tree.unresolved)
    )
    return tree


def _best_feature(subset, subset_targets, sizes, used, n_classes) -> tuple[int, float]:
    best_feature, best_score = -1, np.inf
    for feature, size in enumerate(sizes):
        if feature in used:
            continue
        score = weighted_child_entropy(subset[:, feature], subset_targets, size, n_classes)
        if score < best_score - _TIE_TOLERANCE:
            best_feature, best_score = feature, score
    return best_feature, best_score
