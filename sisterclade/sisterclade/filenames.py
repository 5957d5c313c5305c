"""Decode run metadata embedded in analysis output filenames.

Every output file of a recoding run carries its recoding scheme and alphabet
size in its name::

    <prefix>transform-<token>_states-<digits>.<suffix>

where ``<token>`` is alphanumeric (``none`` for the canonical scheme, a
number such as ``00`` for a random recoding) and ``<suffix>`` is
``chain.treelist`` or ``chain.ppred``.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
import re
from typing import List

from .errors import FilenamePatternError

logger = logging.getLogger(__name__)

RUN_FILENAME_PATTERN = re.compile(
    r"^(?P<prefix>.*)transform-(?P<transform>[A-Za-z0-9]+)_states-(?P<states>[0-9]+)\.(?P<suffix>.+)$"
)

TREELIST_SUFFIX = "chain.treelist"
PPRED_SUFFIX = "chain.ppred"


@dataclass(frozen=True)
class RunLabel:
    transform: str
    states: int

    @property
    def token(self) -> str:
        return f"transform-{self.transform}_states-{self.states}"


def parse_run_filename(path: str | Path, suffix: str | None = None) -> RunLabel:
    name = Path(path).name
    match = RUN_FILENAME_PATTERN.match(name)
    if match is None:
        raise FilenamePatternError(f"Filename does not match run pattern: {name}")
    if suffix is not None and match.group("suffix") != suffix:
        raise FilenamePatternError(f"Expected suffix .{suffix} for run file: {name}")
    # The grammar only admits digits for the state count.
    return RunLabel(transform=match.group("transform"), states=int(match.group("states")))


def discover_runs(directory: str | Path, suffix: str) -> List[Path]:
    root = Path(directory)
    paths = sorted(p for p in root.glob(f"*.{suffix}") if p.is_file())
    logger.debug("Found %d *.%s files in %s", len(paths), suffix, root)
    return paths
