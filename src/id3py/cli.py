"""Command line front end.

Examples::

    id3py -f weather.arff -v training
    id3py -f weather.arff -v random 70 --prune
    id3py -f weather.arff -v cross 10 --prune --seed 1
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger

from id3py.arff import load_arff
from id3py.evaluate import accuracy
from id3py.exceptions import Id3Error
from id3py.export import format_levels
from id3py.logging import LOG_LEVELS, enable_logging
from id3py.validation import cross_validate, evaluate_holdout, fit_tree

MODES = ("random", "training", "cross")
LEARNERS = ("tree",)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="id3py", description="Train and evaluate an ID3 decision tree on an ARFF file.")
    parser.add_argument("-f", "--file", type=Path, required=True, metavar="PATH", help="ARFF file to read")
    parser.add_argument(
        "-v",
        "--validation",
        nargs="+",
        required=True,
        metavar="MODE",
        help="'random <percent>' (train on the first percent of the records), "
        "'training' (train on everything and print the tree) or 'cross <folds>'",
    )
    parser.add_argument("--prune", action="store_true", help="prune the tree against 30%% of its training records")
    parser.add_argument("-l", "--learner", choices=LEARNERS, default="tree", help="learning algorithm (reserved)")
    parser.add_argument("--seed", type=int, default=None, help="seed for shuffling the records")
    parser.add_argument("--no-shuffle", action="store_true", help="keep the records in file order")
    parser.add_argument("--levels", type=int, default=None, metavar="N", help="print at most N tree levels")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING", help="minimum level of log messages")
    return parser


def _parse_validation(parser: argparse.ArgumentParser, values: list[str]) -> tuple[str, float | int | None]:
    mode, *rest = values
    if mode not in MODES:
        parser.error(f"validation mode must be one of {', '.join(MODES)}, got {mode!r}")
    if mode == "training":
        if rest:
            parser.error("validation mode 'training' takes no argument")
        return mode, None
    if len(rest) != 1:
        parser.error(f"validation mode {mode!r} takes exactly one argument")
    if mode == "random":
        try:
            percent = float(rest[0])
        except ValueError:
            parser.error(f"percent must be a number, got {rest[0]!r}")
        if not 0.0 < percent < 100.0:
            parser.error(f"percent must be between 0 and 100 (exclusive), got {rest[0]}")
        return mode, percent
    try:
        folds = int(rest[0])
    except ValueError:
        parser.error(f"fold count must be an integer, got {rest[0]!r}")
    if folds < 2:
        parser.error(f"fold count must be at least 2, got {folds}")
    return mode, folds


def run(args: argparse.Namespace, mode: str, argument) -> None:
    dataset = load_arff(args.file)
    if not args.no_shuffle:
        dataset = dataset.shuffled(args.seed)
    records, catalog = dataset.records, dataset.catalog

    if mode == "random":
        result = evaluate_holdout(records, catalog, argument, prune=args.prune)
        print(f"test accuracy: {result.accuracy}")
    elif mode == "training":
        tree = fit_tree(records, catalog, prune=args.prune)
        for line in format_levels(tree, catalog, args.levels):
            print(line)
        print(f"training accuracy: {accuracy(tree, records)}")
    else:
        result = cross_validate(records, catalog, argument, args.prune)
        print(f"mean accuracy: {result.mean_accuracy}")
        print(f"mean live nodes: {result.mean_live_nodes}")
        print(f"mean depth: {result.mean_depth}")


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    mode, argument = _parse_validation(parser, args.validation)
    if not args.file.is_file():
        parser.error(f"file not found: {args.file}")

    with enable_logging(level=args.log_level):
        try:
            run(args, mode, argument)
        except Id3Error as exc:
            logger.opt(exception=exc).debug("run aborted")
            print(f"id3py: error: {exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
