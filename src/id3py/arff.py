"""
id3py.arff
==========

Reader for the subset of the ARFF format used by id3py.

* Lines starting with ``%`` are comments.
* ``@attribute <name> {a, b, c}`` declares a categorical attribute; any other
  ``@attribute <name> ...`` line declares a bucketed (numeric) attribute.
* ``@data`` starts the data section: one comma separated record per line, the
  last value being the class.

Numeric values are floored into integer buckets.  Every problem in the input
raises a subclass of :class:`id3py.exceptions.ArffError`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from loguru import logger

from id3py.catalog import AttributeCatalog, CatalogBuilder
from id3py.exceptions import EmptyDataRowError, FieldCountMismatchError, MalformedAttributeLineError
from id3py.records import RecordStore

_ATTRIBUTE = re.compile(r"^@attribute\b", re.IGNORECASE)
_ATTRIBUTE_NAME = re.compile(r"^@attribute\s+(\S+)", re.IGNORECASE)
_DATA = re.compile(r"^@data", re.IGNORECASE)
_NOMINAL = re.compile(r"\{(.*)\}")

COMMENT = "%"
SEPARATOR = ","


@dataclass(frozen=True)
class Dataset:
    """A parsed ARFF document: its catalog and its records."""

    catalog: AttributeCatalog
    records: RecordStore

    def shuffled(self, seed: int | None = None) -> Dataset:
        return Dataset(self.catalog, self.records.shuffled(seed))


def parse_arff(text: str) -> Dataset:
    """Parse an ARFF document.

    Parameters
    ----------
    text : str
        Full content of the document.

    Returns
    -------
    Dataset
        The frozen catalog and the records, in file order.

    Raises
    ------
    ArffError
        Any subclass, on the first malformed line.
    """
    builder = CatalogBuilder()
    features: list[list[int]] = []
    targets: list[int] = []
    data_section = False

    for line_number, line in enumerate(text.splitlines(), start=1):
        if line.startswith(COMMENT):
            continue
        if data_section:
            values = _read_row(builder, line, line_number)
            targets.append(values[-1])
            features.append(values[:-1])
            continue
        if _ATTRIBUTE.match(line):
            _declare(builder, line, line_number)
        elif _DATA.match(line):
            builder.seal()
            data_section = True

    catalog = builder.freeze()
    records = RecordStore(np.array(features, dtype=np.int64).reshape(len(targets), catalog.n_features), targets)
    logger.info(
        "Read {} records ({} predictor attributes, {} classes)", len(records), catalog.n_features, catalog.n_classes
    )
    return Dataset(catalog, records)


def load_arff(path) -> Dataset:
    """Read and parse the ARFF file at ``path``."""
    path = Path(path)
    logger.debug("Loading {}", path)
    return parse_arff(path.read_text())


def _declare(builder: CatalogBuilder, line: str, line_number: int) -> None:
    match = _ATTRIBUTE_NAME.match(line)
    if match is None:
        raise MalformedAttributeLineError("attribute declaration without a name", line_number=line_number, line=line)
    name = match.group(1).strip()
    nominal = _NOMINAL.search(line)
    if nominal is None:
        builder.add_bucketed(name)
        return
    labels = [label.strip() for label in nominal.group(1).split(SEPARATOR)]
    builder.add_categorical(name, [label for label in labels if label])


def _read_row(builder: CatalogBuilder, line: str, line_number: int) -> list[int]:
    if not line.strip():
        raise EmptyDataRowError("empty data row", line_number=line_number, line=line)
    raw = line.split(SEPARATOR)
    if len(raw) != len(builder):
        raise FieldCountMismatchError(len(builder), len(raw), line_number=line_number, line=line)
    return [builder.resolve(i, value, line_number=line_number, line=line) for i, value in enumerate(raw)]
