from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Iterator


@contextmanager
def local_tmp_dir() -> Iterator[Path]:
    with TemporaryDirectory(prefix="pmo-test-") as tmp:
        yield Path(tmp)
