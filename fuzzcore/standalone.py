"""Feed input files one by one to a fuzz target, without any fuzzing."""

import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Optional, Protocol, Union

PathLike = Union[str, Path]


class FuzzTarget(Protocol):
    """Code under test: called once per input with the input's bytes."""

    def __call__(self, data: bytes) -> object: ...


def run_inputs(
    target: FuzzTarget,
    paths: Sequence[PathLike],
    initialize: Optional[Callable[[list], Optional[list]]] = None,
) -> int:
    """Run ``target`` on the contents of each file in ``paths``.

    ``initialize``, if given, is called once with a list of the paths; it may
    edit that list in place or return a replacement. Returns the number of
    inputs run. Progress is reported on standard error.
    """
    print(f"StandaloneFuzzTargetMain: running {len(paths)} inputs", file=sys.stderr)
    to_run = list(paths)
    if initialize is not None:
        replacement = initialize(to_run)
        if replacement is not None:
            to_run = list(replacement)
    for path in to_run:
        print(f"Running: {path}", file=sys.stderr)
        data = Path(path).read_bytes()
        target(data)
        print(f"Done:    {path}: ({len(data)} bytes)", file=sys.stderr)
    return len(to_run)