# -*- coding: utf-8 -*-
"""
id3py.classifier
================

scikit-learn style estimator around the ID3 engine.

``ID3Classifier`` accepts integer-encoded feature matrices (each column
holding non-negative value indices, e.g. the output of
``sklearn.preprocessing.OrdinalEncoder`` or floored numeric buckets) and any
hashable class labels.  It can therefore be dropped into scikit-learn tooling
such as ``cross_val_score`` or ``Pipeline``.
"""

from __future__ import annotations

import numpy as np
from sklearn.base import BaseEstimator, ClassifierMixin

from id3py.catalog import AttributeCatalog
from id3py.exceptions import EmptyTrainingSetError
from id3py.export import export_rules, format_levels
from id3py.records import RecordStore
from id3py.validation import DEFAULT_PRUNE_FRACTION, fit_tree


def _as_index_matrix(X) -> np.ndarray:
    X = np.asarray(X)
    if X.ndim != 2:
        raise ValueError(f"X must be a 2-D array, got shape {X.shape}")
    if X.size and not np.issubdtype(X.dtype, np.integer):
        as_int = X.astype(np.int64)
        if not np.array_equal(as_int, X):
            raise ValueError("X must hold integer value indices")
        X = as_int
    X = X.astype(np.int64)
    if X.size and X.min() < 0:
        raise ValueError("X must hold non-negative value indices")
    return X


class ID3Classifier(ClassifierMixin, BaseEstimator):
    """
    ID3 decision tree classifier with optional reduced-error pruning.

    Parameters
    ----------
    prune : bool, default=False
        Whether to prune the tree.  When enabled the last ``prune_fraction``
        of the training rows (by position) is held out from induction and
        used to collapse branches that do not help held-out accuracy.
    prune_fraction : float, default=0.3
        Share of the training rows held out for pruning.
    catalog : AttributeCatalog or None, default=None
        Domains of the features and classes.  When given, ``y`` must hold
        class indices of ``catalog``.  When ``None``, every feature is treated
        as bucketed with a domain size of ``max(X[:, j]) + 1`` and the classes
        are the sorted unique values of ``y``.

    Attributes
    ----------
    tree_ : DecisionTree
        The fitted tree.
    catalog_ : AttributeCatalog
        Catalog used for fitting.
    classes_ : ndarray
        Class labels; ``tree_`` predicts indices into this array.
    n_features_in_ : int
        Number of features seen during ``fit``.
    """

    def __init__(self, *, prune: bool = False, prune_fraction: float = DEFAULT_PRUNE_FRACTION, catalog=None):
        self.prune = prune
        self.prune_fraction = prune_fraction
        self.catalog = catalog

    def fit(self, X, y):
        X = _as_index_matrix(X)
        y = np.asarray(y)
        if len(y) != len(X):
            raise ValueError("X and y must have the same number of rows")
        if len(y) == 0:
            raise EmptyTrainingSetError()

        if self.catalog is None:
            self.classes_, targets = np.unique(y, return_inverse=True)
            self.catalog_ = AttributeCatalog.from_sizes(
                (X.max(axis=0) + 1).tolist(), len(self.classes_), class_labels=self.classes_
            )
        else:
            if self.catalog.n_features != X.shape[1]:
                raise ValueError(f"catalog describes {self.catalog.n_features} features, X has {X.shape[1]}")
            self.catalog_ = self.catalog
            self.classes_ = np.arange(self.catalog.n_classes)
            targets = y.astype(np.int64)

        self.n_features_in_ = X.shape[1]
        records = RecordStore(X, targets)
        self.tree_ = fit_tree(records, self.catalog_, prune=self.prune, prune_fraction=self.prune_fraction)
        return self

    def _check_fitted(self):
        if getattr(self, "tree_", None) is None:
            raise ValueError("Estimator not fitted. Call fit(...) first.")

    def predict(self, X):
        """
        Predict class labels for the provided samples.

        Feature values never seen under a branch during training fall back to
        that branch's majority class.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            Integer value indices.

        Returns
        -------
        ndarray of shape (n_samples,)
            Predicted class labels.

        Raises
        ------
        ValueError
            If the estimator has not been fitted.
        """
        self._check_fitted()
        X = _as_index_matrix(X)
        if X.shape[1] != self.n_features_in_:
            raise ValueError(f"X has {X.shape[1]} features, expected {self.n_features_in_}")
        return self.classes_[self.tree_.predict_rows(X)]

    def export_rules(self):
        """Decision rules of the fitted tree (see :func:`id3py.export.export_rules`)."""
        self._check_fitted()
        return export_rules(self.tree_, self.catalog_)

    def format_tree(self, max_levels=None):
        """Leveled dump of the fitted tree (see :func:`id3py.export.format_levels`)."""
        self._check_fitted()
        return format_levels(self.tree_, self.catalog_, max_levels)
