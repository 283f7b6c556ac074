"""Exceptions raised by id3py.

Loader errors (subclass ArffError, itself a ValueError):
- MalformedAttributeLineError: an ``@attribute`` line without a name.
- EmptyDataRowError: a blank line inside the ``@data`` section.
- FieldCountMismatchError: a data row with the wrong number of values.
- UnmatchedCategoricalValueError: a value that is not one of the declared labels.
- InvalidNumericValueError: a bucketed value that is not a non-negative number
  or that floors past ``id3py.catalog.MAX_BUCKET``.
- InvalidClassAttributeError: the last attribute is missing or not categorical.

Engine errors (subclass Id3Error and ValueError):
- EmptyTrainingSetError: ``train`` called without records.
- EmptyRecordSetError: ``accuracy`` called without records.
- InvalidFoldCountError: a fold count that cannot partition the records.

Catch ``Id3Error`` to handle any of them.
"""

from __future__ import annotations


class Id3Error(Exception):
    """Base exception for all id3py errors."""


class ArffError(Id3Error, ValueError):
    """Base exception for errors found while reading an ARFF document.

    Attributes:
        line_number (int | None): 1-indexed line where the error was found.
        line (str | None): The offending line, without its line terminator.
    """

    line_number: int | None
    line: str | None

    def __init__(self, message: str, *, line_number: int | None = None, line: str | None = None) -> None:
        """Initialize ArffError.

        Args:
            message (str): Human-readable description of the problem.
            line_number (int | None): 1-indexed line number, if known.
            line (str | None): Text of the offending line, if known.
        """
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class MalformedAttributeLineError(ArffError):
    """Raised when an ``@attribute`` declaration has no attribute name."""


class EmptyDataRowError(ArffError):
    """Raised when the ``@data`` section contains a blank line."""


class FieldCountMismatchError(ArffError):
    """Raised when a data row does not have one value per declared attribute.

    Attributes:
        expected (int): Number of declared attributes.
        actual (int): Number of values found on the row.
    """

    expected: int
    actual: int

    def __init__(self, expected: int, actual: int, *, line_number: int | None = None, line: str | None = None) -> None:
        """Initialize FieldCountMismatchError.

        Args:
            expected (int): Number of declared attributes.
            actual (int): Number of values found on the row.
            line_number (int | None): 1-indexed line number, if known.
            line (str | None): Text of the offending line, if known.
        """
        super().__init__(f"expected {expected} values, got {actual}", line_number=line_number, line=line)
        self.expected = expected
        self.actual = actual


class UnmatchedCategoricalValueError(ArffError):
    """Raised when a categorical value matches none of the declared labels.

    Attributes:
        attribute (str): Name of the attribute being read.
        value (str): The unmatched (trimmed) value.
        labels (tuple[str, ...]): Labels declared for the attribute.

    Examples:
        >>> err = UnmatchedCategoricalValueError("outlook", "foggy", ("sunny", "rainy", "?"))
        >>> err.value
        'foggy'
    """

    attribute: str
    value: str
    labels: tuple[str, ...]

    def __init__(
        self,
        attribute: str,
        value: str,
        labels: tuple[str, ...],
        *,
        line_number: int | None = None,
        line: str | None = None,
    ) -> None:
        """Initialize UnmatchedCategoricalValueError.

        Args:
            attribute (str): Name of the attribute being read.
            value (str): The unmatched value.
            labels (tuple[str, ...]): Labels declared for the attribute.
            line_number (int | None): 1-indexed line number, if known.
            line (str | None): Text of the offending line, if known.
        """
        super().__init__(
            f"value {value!r} is not a label of attribute {attribute!r} {list(labels)}",
            line_number=line_number,
            line=line,
        )
        self.attribute = attribute
        self.value = value
        self.labels = labels


class InvalidNumericValueError(ArffError):
    """Raised when a bucketed value is not a finite, non-negative number, or
    floors to a bucket beyond the supported limit.

    Attributes:
        attribute (str): Name of the attribute being read.
        value (str): The rejected (trimmed) value.
    """

    attribute: str
    value: str

    def __init__(
        self,
        attribute: str,
        value: str,
        *,
        reason: str = "is not a non-negative number",
        line_number: int | None = None,
        line: str | None = None,
    ) -> None:
        """Initialize InvalidNumericValueError.

        Args:
            attribute (str): Name of the attribute being read.
            value (str): The rejected value.
            reason (str): What is wrong with the value.
            line_number (int | None): 1-indexed line number, if known.
            line (str | None): Text of the offending line, if known.
        """
        super().__init__(
            f"value {value!r} of attribute {attribute!r} {reason}",
            line_number=line_number,
            line=line,
        )
        self.attribute = attribute
        self.value = value


class InvalidClassAttributeError(ArffError):
    """Raised when the class (last) attribute is missing or not categorical."""


class EmptyTrainingSetError(Id3Error, ValueError):
    """Raised when a tree is trained on an empty record set."""

    def __init__(self) -> None:
        """Initialize EmptyTrainingSetError."""
        super().__init__("cannot train a decision tree on an empty record set")


class EmptyRecordSetError(Id3Error, ValueError):
    """Raised when accuracy is requested for an empty record set."""

    def __init__(self) -> None:
        """Initialize EmptyRecordSetError."""
        super().__init__("cannot compute accuracy over an empty record set")


class InvalidFoldCountError(Id3Error, ValueError):
    """Raised when a fold count cannot partition the records.

    Attributes:
        fold_count (int): The requested number of folds.
        record_count (int): Number of records available.
    """

    fold_count: int
    record_count: int

    def __init__(self, fold_count: int, record_count: int) -> None:
        """Initialize InvalidFoldCountError.

        Args:
            fold_count (int): The requested number of folds.
            record_count (int): Number of records available.
        """
        super().__init__(f"fold count must be between 2 and {record_count} (the record count), got {fold_count}")
        self.fold_count = fold_count
        self.record_count = record_count
