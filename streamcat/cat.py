from __future__ import annotations

import io
import json
import logging
import sys
import typing as T
from pathlib import Path

from tqdm import tqdm

from . import config, constants, exceptions, utils
from .combined_stream import open_combined


LOG = logging.getLogger(__name__)


WHENCE_CHOICES = {
    "set": io.SEEK_SET,
    "cur": io.SEEK_CUR,
    "end": io.SEEK_END,
}


def log_exception(ex: Exception) -> None:
    if LOG.isEnabledFor(logging.DEBUG):
        exc_info = ex
    else:
        exc_info = None

    exc_name = ex.__class__.__name__
    LOG.error(f"{exc_name}: {ex}", exc_info=exc_info)


def _parse_size(value: int | str | None, name: str) -> int | None:
    if value is None or isinstance(value, int):
        return value
    try:
        return constants._parse_filesize(value)
    except ValueError as ex:
        raise exceptions.StreamcatBadParameterError(f"Invalid {name}: {ex}") from ex


def _load_bundle_item(bundle_name: str | None) -> config.BundleItem | None:
    if bundle_name is None:
        return None
    bundle_item = config.load_bundle(bundle_name)
    if bundle_item is None:
        raise exceptions.StreamcatBadParameterError(
            f'Bundle "{bundle_name}" not found in {constants.STREAMCAT_CONFIG_PATH}'
        )
    LOG.debug('Loaded bundle "%s": %s', bundle_name, bundle_item)
    return bundle_item


def _resolve_segment_paths(
    import_path: T.Sequence[Path] | None,
    bundle_item: config.BundleItem | None,
    skip_subfolders: bool = False,
) -> list[Path]:
    paths: list[Path] = []
    if bundle_item is not None:
        paths.extend(config.bundle_paths(bundle_item))
    if import_path:
        paths.extend(import_path)

    segment_paths = utils.find_segment_files(paths, skip_subfolders=skip_subfolders)
    for path in segment_paths:
        if not path.is_file():
            raise exceptions.StreamcatFileNotFoundError(f"File not found: {path}")

    LOG.debug("Found %d segment files", len(segment_paths))
    return segment_paths


def _copy_stream(
    stream: T.BinaryIO,
    fp: T.BinaryIO,
    size: int,
    chunk_size: int | None,
    desc: str,
    disable_progress: bool,
) -> int:
    copied = 0
    with tqdm(
        total=size,
        desc=desc,
        unit="B",
        unit_scale=True,
        unit_divisor=1024,
        disable=disable_progress,
    ) as pbar:
        while copied < size:
            n = size - copied if chunk_size is None else min(chunk_size, size - copied)
            data = stream.read(n)
            if not data:
                break
            fp.write(data)
            copied += len(data)
            pbar.update(len(data))
    return copied


def cat(
    import_path: T.Sequence[Path] | None = None,
    bundle_name: str | None = None,
    offset: int = 0,
    whence: str = "set",
    length: int | str | None = None,
    output: Path | None = None,
    chunk_size: int | str | None = None,
    skip_subfolders: bool = False,
) -> int:
    """
    Combine the files into one stream, seek to the offset and copy up to length bytes
    to the output file, or to STDOUT if output is not specified
    """

    if whence not in WHENCE_CHOICES:
        raise exceptions.StreamcatBadParameterError(
            f"Invalid whence {whence}, expect one of {', '.join(WHENCE_CHOICES)}"
        )

    bundle_item = _load_bundle_item(bundle_name)
    segment_paths = _resolve_segment_paths(import_path, bundle_item, skip_subfolders)
    if not segment_paths:
        LOG.warning("No files to combine")

    max_length = _parse_size(length, "length")
    if max_length is not None and max_length < 0:
        raise exceptions.StreamcatBadParameterError(
            f"Expect non-negative length but got {max_length}"
        )

    if chunk_size is None and bundle_item is not None:
        chunk_size = bundle_item.get("chunk_size")
    read_chunk_size = _parse_size(chunk_size, "chunk size")
    if read_chunk_size is None:
        read_chunk_size = constants.READ_CHUNK_SIZE
    if read_chunk_size is not None and read_chunk_size <= 0:
        raise exceptions.StreamcatBadParameterError(
            f"Expect positive chunk size but got {read_chunk_size}"
        )

    with open_combined(segment_paths) as stream:
        stream.seek(offset, WHENCE_CHOICES[whence])
        available = max(0, stream.length - stream.position)
        size = available if max_length is None else min(max_length, available)
        LOG.debug(
            "Copying %d bytes from position %d of %d",
            size,
            stream.position,
            stream.length,
        )

        disable_progress = constants.PROGRESS_DISABLED or LOG.isEnabledFor(
            logging.DEBUG
        )
        if output is None:
            copied = _copy_stream(
                T.cast(T.BinaryIO, stream),
                sys.stdout.buffer,
                size,
                read_chunk_size,
                desc="Copying",
                disable_progress=True,
            )
            sys.stdout.buffer.flush()
        else:
            with open(output, "wb") as fp:
                copied = _copy_stream(
                    T.cast(T.BinaryIO, stream),
                    fp,
                    size,
                    read_chunk_size,
                    desc=f"Copying to {output.name}",
                    disable_progress=disable_progress,
                )
            LOG.info("Copied %d bytes to %s", copied, output)

    return copied


def describe(
    import_path: T.Sequence[Path] | None = None,
    bundle_name: str | None = None,
    skip_subfolders: bool = False,
) -> dict:
    """
    Print the layout of the combined stream as JSON to STDOUT
    """
    bundle_item = _load_bundle_item(bundle_name)
    segment_paths = _resolve_segment_paths(import_path, bundle_item, skip_subfolders)

    with open_combined(segment_paths) as stream:
        layout = {
            "length": stream.length,
            "segments": [
                {"path": str(path), "offset": offset, "length": length}
                for path, (offset, length) in zip(
                    segment_paths, stream.segment_spans()
                )
            ],
        }

    print(json.dumps(layout, indent=2))
    return layout


def manage_bundle(
    bundle_name: str | None = None,
    import_path: T.Sequence[Path] | None = None,
    chunk_size: str | None = None,
    delete: bool = False,
) -> None:
    """
    Save the paths as a named bundle, delete the bundle, or list all bundles
    if no bundle name is given
    """

    if bundle_name is None:
        all_bundles = config.list_all_bundles()
        print(
            json.dumps(
                {
                    name: {**item, "paths": [str(p) for p in config.bundle_paths(item)]}
                    for name, item in all_bundles.items()
                },
                indent=2,
            )
        )
        return

    bundle_name = bundle_name.strip()
    if not bundle_name:
        raise exceptions.StreamcatBadParameterError("Bundle name must not be empty")

    if delete:
        if config.remove_config(bundle_name):
            LOG.info('Bundle "%s" deleted', bundle_name)
        else:
            LOG.warning('Bundle "%s" not found', bundle_name)
        return

    if not import_path:
        raise exceptions.StreamcatBadParameterError(
            f'Expect at least one path for bundle "{bundle_name}"'
        )

    # Fail early on bad sizes instead of when the bundle is used
    if chunk_size is not None and _parse_size(chunk_size, "chunk size") is None:
        raise exceptions.StreamcatBadParameterError(
            f"Expect a finite chunk size for a bundle but got {chunk_size}"
        )

    # Store absolute paths so the bundle can be used from any working directory
    paths = [path.resolve() for path in import_path]
    for path in paths:
        if not path.exists():
            raise exceptions.StreamcatFileNotFoundError(f"File not found: {path}")

    try:
        existing = config.load_bundle(bundle_name)
    except exceptions.StreamcatInvalidConfigError:
        LOG.warning('Overriding the invalid bundle "%s"', bundle_name, exc_info=True)
        existing = None

    if existing is not None:
        LOG.warning('The bundle "%s" already exists and will be overridden', bundle_name)
    else:
        LOG.info('Creating new bundle: "%s"', bundle_name)

    config.update_config(bundle_name, config.make_bundle(paths, chunk_size=chunk_size))
    LOG.info('Bundle "%s" saved with %d paths', bundle_name, len(paths))
