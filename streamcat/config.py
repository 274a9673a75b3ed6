from __future__ import annotations

import configparser
import logging
import os
import sys
import typing as T
from pathlib import Path
from typing import TypedDict

import jsonschema

if sys.version_info >= (3, 11):
    from typing import Required
else:
    from typing_extensions import Required

from . import constants, exceptions


LOG = logging.getLogger(__name__)


class BundleItem(TypedDict, total=False):
    # Newline-separated file paths, combined in order
    paths: Required[str]
    # Read chunk size for this bundle, e.g. "64K"
    chunk_size: str


BundleItemSchema = {
    "type": "object",
    "properties": {
        "paths": {"type": "string", "minLength": 1},
        "chunk_size": {"type": "string", "pattern": r"^\s*\d+\s*[bBkKmMgG]?\s*$"},
    },
    "required": ["paths"],
    "additionalProperties": True,
}


BundleItemSchemaValidator = jsonschema.Draft202012Validator(BundleItemSchema)


def _load_config(config_path: str) -> configparser.ConfigParser:
    config = configparser.ConfigParser(interpolation=None)
    # Override to not change option names (by default it will lower them)
    config.optionxform = str  # type: ignore
    # If path not found, then config will be empty
    config.read(config_path)
    return config


def validate_bundle(bundle_name: str, bundle_item: T.Mapping[str, T.Any]) -> BundleItem:
    try:
        BundleItemSchemaValidator.validate(bundle_item)
    except jsonschema.ValidationError as ex:
        raise exceptions.StreamcatInvalidConfigError(
            f'Invalid bundle "{bundle_name}": {ex.message}'
        ) from ex
    return T.cast(BundleItem, bundle_item)


def bundle_paths(bundle_item: BundleItem) -> list[Path]:
    return [
        Path(line.strip())
        for line in bundle_item["paths"].splitlines()
        if line.strip()
    ]


def make_bundle(paths: T.Iterable[Path], chunk_size: str | None = None) -> BundleItem:
    bundle_item: BundleItem = {"paths": "\n".join(str(p) for p in paths)}
    if chunk_size is not None:
        bundle_item["chunk_size"] = chunk_size
    return bundle_item


def load_bundle(bundle_name: str, config_path: str | None = None) -> BundleItem | None:
    if config_path is None:
        config_path = constants.STREAMCAT_CONFIG_PATH
    config = _load_config(config_path)
    if not config.has_section(bundle_name):
        return None
    bundle_item = dict(config.items(bundle_name))
    return validate_bundle(bundle_name, bundle_item)


def list_all_bundles(config_path: str | None = None) -> dict[str, BundleItem]:
    if config_path is None:
        config_path = constants.STREAMCAT_CONFIG_PATH
    cp = _load_config(config_path)
    bundles: dict[str, BundleItem] = {}
    for bundle_name in cp.sections():
        try:
            bundle_item = load_bundle(bundle_name, config_path=config_path)
        except exceptions.StreamcatInvalidConfigError as ex:
            LOG.warning("Skipping %s", ex)
            continue
        if bundle_item is not None:
            bundles[bundle_name] = bundle_item
    return bundles


def update_config(
    bundle_name: str, bundle_item: BundleItem, config_path: str | None = None
) -> None:
    if config_path is None:
        config_path = constants.STREAMCAT_CONFIG_PATH
    validate_bundle(bundle_name, bundle_item)
    config = _load_config(config_path)
    # Replace the whole section, options from the previous bundle must not leak
    if config.has_section(bundle_name):
        config.remove_section(bundle_name)
    config.add_section(bundle_name)
    for key, val in bundle_item.items():
        config.set(bundle_name, key, T.cast(str, val))
    os.makedirs(os.path.dirname(os.path.abspath(config_path)), exist_ok=True)
    with open(config_path, "w") as fp:
        config.write(fp)


def remove_config(bundle_name: str, config_path: str | None = None) -> bool:
    if config_path is None:
        config_path = constants.STREAMCAT_CONFIG_PATH

    config = _load_config(config_path)
    if not config.has_section(bundle_name):
        return False

    config.remove_section(bundle_name)

    os.makedirs(os.path.dirname(os.path.abspath(config_path)), exist_ok=True)
    with open(config_path, "w") as fp:
        config.write(fp)

    return True
