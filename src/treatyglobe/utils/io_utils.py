# SPDX-License-Identifier: Apache-2.0
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator


@contextmanager
def open_output(path_or_dash: str) -> Iterator[BinaryIO]:
    """Yield a writable binary file-like for path or '-' (stdout) without closing stdout.

    When ``path_or_dash`` is '-', yields ``sys.stdout.buffer`` and does not close it on exit.
    Otherwise creates missing parent directories, opens the path and closes it when the
    context exits.
    """
    if path_or_dash == "-":
        yield sys.stdout.buffer
    else:
        path = Path(path_or_dash)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("wb") as f:
            yield f
