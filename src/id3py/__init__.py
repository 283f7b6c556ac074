# id3py/__init__.py
"""
id3py: ID3 decision trees over ARFF data, with reduced-error pruning and
cross-validation.

Exports:
    - load_arff, parse_arff
    - train, predict, prune, accuracy
    - cross_validate, evaluate_holdout, fit_tree
    - ID3Classifier (scikit-learn style)
    - enable_logging
"""
from loguru import logger

from .arff import Dataset, load_arff, parse_arff
from .catalog import AttributeCatalog, BucketedDomain, CatalogBuilder, CategoricalDomain
from .classifier import ID3Classifier
from .evaluate import accuracy
from .logging import PACKAGE_NAME, enable_logging
from .prune import prune
from .records import Record, RecordStore
from .tree import Branch, DecisionTree, Leaf, predict, train
from .validation import cross_validate, evaluate_holdout, fit_tree

logger.disable(PACKAGE_NAME)

__all__ = [
    "AttributeCatalog",
    "Branch",
    "BucketedDomain",
    "CatalogBuilder",
    "CategoricalDomain",
    "Dataset",
    "DecisionTree",
    "ID3Classifier",
    "Leaf",
    "Record",
    "RecordStore",
    "accuracy",
    "cross_validate",
    "enable_logging",
    "evaluate_holdout",
    "fit_tree",
    "load_arff",
    "parse_arff",
    "predict",
    "prune",
    "train",
]
__version__ = "0.1.0"
