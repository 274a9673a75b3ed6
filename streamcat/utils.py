from __future__ import annotations

import logging
import os
import typing as T
from pathlib import Path


def configure_logger(logger: logging.Logger, level, stream=None) -> None:
    """Configure the given logger."""
    formatter = logging.Formatter("%(asctime)s - %(levelname)-6s - %(message)s")
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(level)


def iterate_files(
    root: Path, recursive: bool = False, follow_hidden_dirs: bool = False
) -> T.Generator[Path, None, None]:
    for dirpath, dirnames, files in os.walk(root, topdown=True):
        if not recursive:
            dirnames.clear()
        else:
            if not follow_hidden_dirs:
                dirnames[:] = [name for name in dirnames if not name.startswith(".")]
            # Walk in a stable order so that segments are combined deterministically
            dirnames.sort()
        for file in sorted(files):
            if file.startswith("."):
                continue
            yield Path(dirpath).joinpath(file)


def find_segment_files(
    import_paths: T.Iterable[Path],
    skip_subfolders: bool = False,
) -> list[Path]:
    """
    Expand directories into their files sorted by name. Files are kept as they are,
    duplicates included, since the same file may appear twice in a combined stream.
    """
    segment_paths: list[Path] = []
    for path in import_paths:
        if path.is_dir():
            segment_paths.extend(iterate_files(path, not skip_subfolders))
        else:
            segment_paths.append(path)
    return segment_paths
