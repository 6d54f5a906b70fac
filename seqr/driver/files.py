from __future__ import annotations

from contextlib import ExitStack
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Sequence

from ..io.fastx import STDIN, Record, fastx_iter, open_input
from ..util.logger import Logger


@dataclass
class FileOutcome:
    name: str
    value: Any = None
    error: Optional[OSError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def input_names(names: Optional[Sequence[str]]) -> List[str]:
    return list(names) if names else [STDIN]


def describe_os_error(name: str, err: OSError) -> str:
    cause = err.strerror or str(err)
    if err.errno is not None:
        cause = f"{cause} (os error {err.errno})"
    return f"{name}: {cause}"


def for_each_input(
    names: Optional[Sequence[str]],
    action: Callable[[str, Iterable[Record]], Any],
    logger: Logger,
) -> List[FileOutcome]:
    """Run ``action(name, records)`` over each input in order.

    An input that cannot be opened is logged as a warning and recorded as a
    failed outcome; the remaining inputs are still processed. Errors raised
    while decoding or by ``action`` itself are not caught.
    """
    outcomes: List[FileOutcome] = []
    for name in input_names(names):
        with ExitStack() as stack:
            try:
                handle = stack.enter_context(open_input(name))
            except OSError as e:
                logger.warn(describe_os_error(name, e))
                outcomes.append(FileOutcome(name, error=e))
                continue
            logger.debug(f"reading {name}")
            outcomes.append(FileOutcome(name, value=action(name, fastx_iter(handle))))
    return outcomes
