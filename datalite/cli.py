"""
Command line entry point for Datalite.

    datalite run program.dl      answer the program's query
    datalite test tests/         run a directory of fixtures
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

import yaml

from .config import DataliteConfig, LOG_LEVELS, set_config
from .engine import DataliteEngine
from .errors import ConfigError, DataliteError, ValidationError
from .harness import render_atom, iter_fixture_dir
from .logging_config import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="datalite",
        description="Evaluate Datalog programs bottom-up and answer their queries"
    )
    parser.add_argument("--config", help="Path to a YAML or JSON config file")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS,
                        help="Logging level")
    parser.add_argument("--trace", action="store_true", help="Log every derived atom")

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a program and print its answers")
    run_parser.add_argument("file", help="Source file")

    test_parser = subparsers.add_parser("test", help="Run a directory of fixtures")
    test_parser.add_argument("directory", help="Directory of source files with an out/ directory")

    return parser


def _run(args: argparse.Namespace, config: DataliteConfig) -> int:
    engine = DataliteEngine(config)
    answers = engine.run_file(args.file)
    lines = [render_atom(answer, config.output.terminator) for answer in answers]
    if config.output.sort_results:
        lines.sort()
    for line in lines:
        print(line)
    return EXIT_OK


def _test(args: argparse.Namespace, config: DataliteConfig) -> int:
    failures = 0
    for result in iter_fixture_dir(args.directory, config):
        print(f"Testing file: [{result.name}]")
        if result.error:
            print("FAILURE")
            print(result.error)
        for line in result.missing:
            print("FAILURE")
            print(f"Expected {line}, but did not get it")
        for line in result.unexpected:
            print("FAILURE")
            print(f"Got {line}, but did not expect it")
        if result.passed:
            print("PASS")
        else:
            failures += 1
        print("----")
    return EXIT_FAILURE if failures else EXIT_OK


def _configure(args: argparse.Namespace) -> DataliteConfig:
    config = DataliteConfig.load(args.config)
    if args.log_level:
        config.log_level = args.log_level
    if args.trace:
        config.solver.trace_enabled = True
        if not args.log_level:
            config.log_level = "INFO"
    set_config(config)
    setup_logging(config.log_level, config.log_file, config.structured_logging)
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit code"""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = _configure(args)
    except (ConfigError, OSError, yaml.YAMLError, json.JSONDecodeError) as e:
        print(f"Error: could not load configuration: {e}", file=sys.stderr)
        return EXIT_ERROR

    try:
        if args.command == "run":
            return _run(args, config)
        return _test(args, config)
    except ValidationError as e:
        logger.error(f"Invalid program: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except (DataliteError, OSError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
