"""
Collision-free destination naming for received files
"""
import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


def split_name(file_name: str):
    """Split a file name into (stem, extension) without the dot.

    'report.pdf' -> ('report', 'pdf'), 'a.tar.gz' -> ('a.tar', 'gz'),
    '.bashrc' -> ('.bashrc', '')
    """
    path = Path(file_name)
    return path.stem, path.suffix[1:]


def unique_path(base_dir: Union[str, Path], file_name: str) -> Path:
    """
    Return a path in base_dir that does not exist yet.

    base_dir is created (with parents) when missing. If base_dir/file_name
    is free it is returned as-is, otherwise 'stem(1).ext', 'stem(2).ext', ...
    are probed until a free one is found ('stem(1).' when there is no
    extension). Nothing is created; the caller must create the file
    right away.

    The probe has no upper bound: a directory pre-filled with thousands of
    numbered siblings makes this loop long.
    """
    base_dir = Path(base_dir)
    base_dir.mkdir(parents=True, exist_ok=True)

    candidate = base_dir / file_name
    if not candidate.exists():
        return candidate

    stem, extension = split_name(file_name)
    n = 1
    while True:
        candidate = base_dir / f"{stem}({n}).{extension}"
        if not candidate.exists():
            logger.debug(f"'{file_name}' exists in {base_dir}, using {candidate.name}")
            return candidate
        n += 1
