"""Labeled records stored as integer index arrays."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Record:
    """One labeled example.

    ``target`` indexes the class domain; ``features[i]`` indexes the domain of
    the i-th feature attribute of the catalog.
    """

    target: int
    features: tuple[int, ...]


class RecordStore:
    """Immutable, ordered collection of records.

    Records are held column-wise in two integer arrays: ``features`` with shape
    ``(n_records, n_features)`` and ``targets`` with shape ``(n_records,)``.
    Slicing returns a new store; indexing with an int returns a :class:`Record`.
    """

    def __init__(self, features, targets):
        features = np.array(features, dtype=np.int64)
        targets = np.array(targets, dtype=np.int64)
        if features.ndim == 1 and features.size == 0:
            features = features.reshape(len(targets), 0)
        if features.ndim != 2:
            raise ValueError("features must be a 2-D array")
        if targets.ndim != 1 or len(targets) != len(features):
            raise ValueError("targets must be a 1-D array with one entry per record")
        features.setflags(write=False)
        targets.setflags(write=False)
        self._features = features
        self._targets = targets

    @classmethod
    def from_records(cls, records, n_features: int | None = None) -> RecordStore:
        """Build a store from :class:`Record` objects; ``n_features`` is needed when ``records`` is empty."""
        records = list(records)
        if n_features is None:
            n_features = len(records[0].features) if records else 0
        features = np.array([r.features for r in records], dtype=np.int64).reshape(len(records), n_features)
        targets = np.array([r.target for r in records], dtype=np.int64)
        return cls(features, targets)

    @classmethod
    def concat(cls, stores) -> RecordStore:
        """Join stores end to end, preserving order."""
        stores = list(stores)
        return cls(
            np.concatenate([s.features for s in stores], axis=0),
            np.concatenate([s.targets for s in stores]),
        )

    @property
    def features(self) -> np.ndarray:
        return self._features

    @property
    def targets(self) -> np.ndarray:
        return self._targets

    @property
    def n_features(self) -> int:
        return self._features.shape[1]

    def __len__(self) -> int:
        return len(self._targets)

    def __getitem__(self, key):
        if isinstance(key, slice):
            return RecordStore(self._features[key], self._targets[key])
        row = self._features[key]
        return Record(int(self._targets[key]), tuple(int(v) for v in row))

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]

    def __repr__(self) -> str:
        return f"RecordStore(n_records={len(self)}, n_features={self.n_features})"

    def take(self, indices) -> RecordStore:
        """Return a store with the records at ``indices``, in that order."""
        indices = np.asarray(indices, dtype=np.int64)
        return RecordStore(self._features[indices], self._targets[indices])

    def shuffled(self, seed: int | None = None) -> RecordStore:
        """Return a store with the records in a random order."""
        rng = np.random.default_rng(seed)
        return self.take(rng.permutation(len(self)))
