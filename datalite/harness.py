"""
Fixture harness: run source files and compare their answers to expected output.

A fixture directory holds source files and an ``out`` directory with one
expected-output file per source file, using the same name. Expected files
list one atom per line, like ``grandparent(a,c).``; whitespace is ignored and
lines are compared as a set.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Set, Union

from .engine import DataliteEngine
from .config import DataliteConfig
from .terms import Atom

logger = logging.getLogger(__name__)

EXPECTED_DIR = "out"


def render_atom(atom: Atom, terminator: str = ".") -> str:
    """Render an answer the way expected-output files spell it"""
    return f"{atom}{terminator}"


def normalize_line(line: str) -> str:
    """Strip all spaces so ``p(a, b).`` and ``p(a,b).`` compare equal"""
    return line.strip().replace(" ", "")


@dataclass
class FixtureResult:
    """Outcome of running one fixture file"""
    name: str
    missing: List[str] = field(default_factory=list)
    unexpected: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.error is None and not self.missing and not self.unexpected

    def __bool__(self) -> bool:
        return self.passed


def read_expected(path: Union[str, Path]) -> Set[str]:
    """Load an expected-output file as a set of normalized lines"""
    with open(path, 'r') as f:
        return {normalize_line(line) for line in f if line.strip()}


def run_fixture(path: Union[str, Path], expected_path: Union[str, Path],
                config: Optional[DataliteConfig] = None) -> FixtureResult:
    """
    Run one source file and diff its answers against the expected output.
    """
    path = Path(path)
    engine = DataliteEngine(config or DataliteConfig())
    got = {normalize_line(render_atom(atom)) for atom in engine.run_file(path)}
    expected = read_expected(expected_path)

    result = FixtureResult(
        name=path.name,
        missing=sorted(expected - got),
        unexpected=sorted(got - expected),
    )
    if result.passed:
        logger.info(f"Fixture {path.name} passed")
    else:
        logger.warning(f"Fixture {path.name} failed: "
                       f"{len(result.missing)} missing, {len(result.unexpected)} unexpected")
    return result


def iter_fixture_dir(directory: Union[str, Path],
                     config: Optional[DataliteConfig] = None) -> Iterator[FixtureResult]:
    """
    Run every fixture in ``directory`` in name order, yielding each result
    as soon as it is known.

    A file with no expected-output file yields a failed result carrying an
    error message instead of stopping the run.
    """
    directory = Path(directory)
    expected_dir = directory / EXPECTED_DIR

    for path in sorted(directory.iterdir()):
        if path.name == EXPECTED_DIR or not path.is_file():
            continue
        expected_path = expected_dir / path.name
        if not expected_path.exists():
            logger.warning(f"Fixture {path.name} has no expected output")
            yield FixtureResult(
                name=path.name,
                error=f"No expected output for {path.name} in {expected_dir}"
            )
            continue
        yield run_fixture(path, expected_path, config)


def run_fixture_dir(directory: Union[str, Path],
                    config: Optional[DataliteConfig] = None) -> List[FixtureResult]:
    """Run every fixture in ``directory``, in name order"""
    return list(iter_fixture_dir(directory, config))
