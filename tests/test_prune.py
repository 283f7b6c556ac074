import numpy as np
import pytest

from id3py import AttributeCatalog, Branch, DecisionTree, Leaf, RecordStore, accuracy, prune, train
from id3py.exceptions import EmptyRecordSetError


def _stump():
    """Root split on feature 0: value 0 -> class 0, value 1 -> class 1; fallback 0."""
    return DecisionTree([Branch(0, {0: 1, 1: 2}, 0), Leaf(0), Leaf(1)])


def _noisy_dataset(n=300, seed=7):
    rng = np.random.default_rng(seed)
    sizes = [3, 3, 4, 2, 3]
    X = np.column_stack([rng.integers(0, s, size=n) for s in sizes])
    y = (X[:, 0] == 0).astype(int)
    flip = rng.random(n) < 0.2
    y[flip] = 1 - y[flip]
    return RecordStore(X, y), AttributeCatalog.from_sizes(sizes, 2)


def test_collapse_that_improves_accuracy():
    tree = _stump()
    validation = RecordStore([[0], [1]], [0, 0])
    assert prune(tree, validation) == 1
    assert tree.nodes[0].children == {}
    assert accuracy(tree, validation) == 1.0


def test_tie_favours_the_smaller_tree_and_terminates():
    tree = _stump()
    # only value 0 is seen: collapsing the root keeps accuracy at 1.0
    validation = RecordStore([[0], [0]], [0, 0])
    assert prune(tree, validation) == 1
    assert tree.count_live_nodes() == 1
    assert tree.count_pruned_nodes() == 2
    assert tree.max_depth() == 1
    # the arena never shrinks
    assert len(tree) == 3


def test_no_collapse_when_accuracy_drops():
    tree = _stump()
    validation = RecordStore([[0], [1]], [0, 1])
    assert prune(tree, validation) == 0
    assert tree.nodes[0].children == {0: 1, 1: 2}


def test_leaf_only_tree_has_nothing_to_prune():
    tree = DecisionTree([Leaf(1)])
    assert prune(tree, RecordStore([[0]], [0])) == 0
    assert tree.nodes == [Leaf(1)]


def test_children_are_restored_after_each_trial():
    records, catalog = _noisy_dataset()
    tree = train(records[:200], catalog)
    # every branch ends up either untouched or collapsed
    before = [dict(n.children) if isinstance(n, Branch) else None for n in tree.nodes]
    baseline = accuracy(tree, records[:200])
    prune(tree, records[:200])
    assert accuracy(tree, records[:200]) >= baseline
    after = [dict(n.children) if isinstance(n, Branch) else None for n in tree.nodes]
    for b, a in zip(before, after):
        assert a is None or a == b or a == {}


def test_pruning_does_not_lower_validation_accuracy():
    records, catalog = _noisy_dataset()
    training, validation = records[:200], records[200:]
    tree = train(training, catalog)
    baseline = accuracy(tree, validation)
    live = tree.count_live_nodes()
    assert prune(tree, validation) > 0
    assert accuracy(tree, validation) >= baseline
    assert tree.count_live_nodes() < live


def test_live_nodes_never_grow_across_prunes():
    records, catalog = _noisy_dataset()
    tree = train(records[:150], catalog)
    live, pruned = [tree.count_live_nodes()], [tree.count_pruned_nodes()]
    for start in range(150, 300, 30):
        prune(tree, records[start : start + 30])
        live.append(tree.count_live_nodes())
        pruned.append(tree.count_pruned_nodes())
    assert all(a >= b for a, b in zip(live, live[1:]))
    assert all(a <= b for a, b in zip(pruned, pruned[1:]))
    assert all(lv + pr == len(tree) for lv, pr in zip(live, pruned))


def test_prune_rejects_empty_validation():
    with pytest.raises(EmptyRecordSetError):
        prune(_stump(), RecordStore(np.zeros((0, 1), dtype=int), []))


def test_branch_indices_include_detached_branches():
    tree = DecisionTree([Branch(0, {0: 1, 1: 2}, 0), Branch(1, {0: 3}, 1), Leaf(1), Leaf(0)])
    assert tree.branch_indices() == [0, 1]
    tree.nodes[0].children = {}
    assert tree.branch_indices() == [1]
    assert tree.count_live_nodes() == 1
