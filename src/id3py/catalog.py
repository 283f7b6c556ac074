"""
id3py.catalog
=============

Attribute domains and the attribute catalog.

Every column of a dataset is described by an :class:`Attribute` whose domain
is either a :class:`CategoricalDomain` (an ordered label list) or a
:class:`BucketedDomain` (the integers ``0 .. size-1`` obtained by flooring
numeric values).  The last attribute of a catalog is the class.

Catalogs are immutable.  Bucketed domain sizes are only known once all the
data has been read, so catalogs are assembled with a mutable
:class:`CatalogBuilder` and frozen before any training happens.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from id3py.exceptions import InvalidClassAttributeError, InvalidNumericValueError, UnmatchedCategoricalValueError

# Reserved label appended to every categorical feature domain.
UNKNOWN_LABEL = "?"

# Largest bucket index accepted while loading. Training allocates a
# (domain size x classes) count table per split, so domains stay bounded.
MAX_BUCKET = 1_000_000


@dataclass(frozen=True)
class CategoricalDomain:
    """Domain of a categorical attribute: value ``i`` is ``labels[i]``."""

    labels: tuple[str, ...]

    @property
    def size(self) -> int:
        return len(self.labels)

    def index_of(self, text: str) -> int:
        """Return the index of ``text`` (exact match) or raise ``KeyError``."""
        try:
            return self.labels.index(text)
        except ValueError:
            raise KeyError(text) from None

    def label(self, index: int) -> str:
        return self.labels[index]


@dataclass(frozen=True)
class BucketedDomain:
    """Domain of a numeric attribute floored into integer buckets ``0 .. size-1``."""

    size: int

    def label(self, index: int) -> str:
        return str(index)


AttributeDomain = Union[CategoricalDomain, BucketedDomain]


@dataclass(frozen=True)
class Attribute:
    name: str
    domain: AttributeDomain


class AttributeCatalog:
    """Immutable, ordered description of a dataset's attributes.

    Parameters
    ----------
    attributes : sequence of Attribute
        All attributes in declaration order.  The last one is the class and
        must be categorical.

    Raises
    ------
    InvalidClassAttributeError
        If ``attributes`` is empty or its last entry is not categorical.
    """

    def __init__(self, attributes):
        attributes = tuple(attributes)
        if not attributes:
            raise InvalidClassAttributeError("no attributes declared")
        if not isinstance(attributes[-1].domain, CategoricalDomain):
            raise InvalidClassAttributeError(f"class attribute {attributes[-1].name!r} must be categorical")
        self._attributes = attributes

    def __len__(self) -> int:
        return len(self._attributes)

    def __iter__(self):
        return iter(self._attributes)

    def __getitem__(self, index: int) -> Attribute:
        return self._attributes[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, AttributeCatalog):
            return NotImplemented
        return self._attributes == other._attributes

    def __hash__(self) -> int:
        return hash(self._attributes)

    def __repr__(self) -> str:
        return f"AttributeCatalog({list(self._attributes)!r})"

    @property
    def features(self) -> tuple[Attribute, ...]:
        """All non-class attributes, in record feature order."""
        return self._attributes[:-1]

    @property
    def class_attribute(self) -> Attribute:
        return self._attributes[-1]

    @property
    def n_features(self) -> int:
        return len(self._attributes) - 1

    @property
    def n_classes(self) -> int:
        return self.class_attribute.domain.size

    @property
    def feature_names(self) -> list[str]:
        return [a.name for a in self.features]

    @property
    def class_labels(self) -> tuple[str, ...]:
        return self.class_attribute.domain.labels

    def feature_sizes(self) -> list[int]:
        """Domain size of every feature attribute."""
        return [a.domain.size for a in self.features]

    def value_label(self, attribute_index: int, value: int) -> str:
        """Human-readable label of ``value`` for the attribute at ``attribute_index``."""
        return self._attributes[attribute_index].domain.label(value)

    @classmethod
    def from_sizes(cls, feature_sizes, n_classes: int, *, feature_names=None, class_labels=None) -> AttributeCatalog:
        """Build a catalog of bucketed features from plain domain sizes.

        Used when data arrives already encoded as integer indices (e.g. numpy
        arrays handed to :class:`id3py.classifier.ID3Classifier`).
        """
        if feature_names is None:
            feature_names = [f"f{i}" for i in range(len(feature_sizes))]
        if class_labels is None:
            class_labels = [str(i) for i in range(n_classes)]
        attributes = [Attribute(str(name), BucketedDomain(int(size))) for name, size in zip(feature_names, feature_sizes)]
        attributes.append(Attribute("class", CategoricalDomain(tuple(map(str, class_labels)))))
        return cls(attributes)


class CatalogBuilder:
    """Mutable catalog under construction.

    Attributes are declared in order, then data values are resolved with
    :meth:`resolve`, which grows bucketed domains as larger buckets are seen.
    :meth:`freeze` produces the immutable :class:`AttributeCatalog`.
    """

    def __init__(self):
        self._names: list[str] = []
        # label list for categorical attributes, None for bucketed ones
        self._labels: list[list[str] | None] = []
        self._bucket_sizes: list[int] = []
        self._sealed = False

    def __len__(self) -> int:
        return len(self._names)

    def add_categorical(self, name: str, labels) -> None:
        """Declare a categorical attribute; the reserved unknown label is appended."""
        self._check_open()
        self._names.append(name)
        self._labels.append([*labels, UNKNOWN_LABEL])
        self._bucket_sizes.append(0)

    def add_bucketed(self, name: str) -> None:
        """Declare a bucketed attribute with an initial size of 0."""
        self._check_open()
        self._names.append(name)
        self._labels.append(None)
        self._bucket_sizes.append(0)

    def seal(self) -> None:
        """End the declarations: the last attribute becomes the class.

        The class must be categorical and loses the reserved unknown label, so
        a ``?`` class value is rejected like any other unmatched label.
        Calling it again is a no-op.

        Raises
        ------
        InvalidClassAttributeError
            If no attribute was declared or the last one is not categorical.
        """
        if self._sealed:
            return
        if not self._names:
            raise InvalidClassAttributeError("no attributes declared")
        class_labels = self._labels[-1]
        if class_labels is None:
            raise InvalidClassAttributeError(f"class attribute {self._names[-1]!r} must be categorical")
        self._labels[-1] = class_labels[:-1]
        self._sealed = True

    def _check_open(self) -> None:
        if self._sealed:
            raise RuntimeError("attributes cannot be declared after the catalog builder is sealed")

    def resolve(self, index: int, text: str, *, line_number: int | None = None, line: str | None = None) -> int:
        """Resolve raw ``text`` for attribute ``index`` into a domain index.

        Raises
        ------
        UnmatchedCategoricalValueError
            For a categorical value that is not one of the labels.
        InvalidNumericValueError
            For a bucketed value that is not a finite, non-negative number, or
            whose bucket is above :data:`MAX_BUCKET`.
        """
        value = text.strip()
        labels = self._labels[index]
        if labels is not None:
            try:
                return labels.index(value)
            except ValueError:
                raise UnmatchedCategoricalValueError(
                    self._names[index], value, tuple(labels), line_number=line_number, line=line
                ) from None
        try:
            number = float(value)
        except ValueError:
            raise InvalidNumericValueError(self._names[index], value, line_number=line_number, line=line) from None
        if not math.isfinite(number) or number < 0:
            raise InvalidNumericValueError(self._names[index], value, line_number=line_number, line=line)
        bucket = math.floor(number)
        if bucket > MAX_BUCKET:
            raise InvalidNumericValueError(
                self._names[index],
                value,
                reason=f"exceeds the largest supported bucket ({MAX_BUCKET})",
                line_number=line_number,
                line=line,
            )
        if bucket + 1 > self._bucket_sizes[index]:
            self._bucket_sizes[index] = bucket + 1
        return bucket

    def freeze(self) -> AttributeCatalog:
        """Seal the builder if needed and return the immutable catalog."""
        self.seal()
        attributes = []
        for name, labels, size in zip(self._names, self._labels, self._bucket_sizes):
            domain = BucketedDomain(size) if labels is None else CategoricalDomain(tuple(labels))
            attributes.append(Attribute(name, domain))
        return AttributeCatalog(attributes)
