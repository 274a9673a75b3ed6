import typing as T
from pathlib import Path

import py.path
import pytest

from streamcat import config, exceptions


def test_config_list_all_bundles(tmpdir: py.path.local):
    c = tmpdir.join("empty_config.ini")
    x = config.list_all_bundles(config_path=str(c))
    assert not x

    config.update_config(
        "hello",
        T.cast(
            T.Any,
            {
                "paths": "a.bin",
                "ThisIsOption": "1",
            },
        ),
        config_path=str(c),
    )

    x = config.list_all_bundles(config_path=str(c))
    assert len(x) == 1
    assert x["hello"] == {"paths": "a.bin", "ThisIsOption": "1"}


def test_update_config(tmpdir: py.path.local):
    c = tmpdir.join("empty_config.ini")
    config.update_config(
        "world",
        config.make_bundle([Path("a.bin"), Path("b.bin")], chunk_size="64K"),
        config_path=str(c),
    )
    x = config.load_bundle("world", config_path=str(c))
    assert x == {"paths": "a.bin\nb.bin", "chunk_size": "64K"}

    config.update_config(
        "world", config.make_bundle([Path("c.bin")]), config_path=str(c)
    )
    x = config.load_bundle("world", config_path=str(c))
    assert x == {"paths": "c.bin"}


def test_load_bundle(tmpdir: py.path.local):
    c = tmpdir.join("empty_config.ini")
    config.update_config(
        "world", config.make_bundle([Path("a.bin")]), config_path=str(c)
    )
    x = config.load_bundle("hello", config_path=str(c))
    assert x is None
    x = config.load_bundle("world", config_path=str(c))
    assert x is not None
    assert config.bundle_paths(x) == [Path("a.bin")]


def test_bundle_paths_keep_order_and_duplicates():
    bundle = config.make_bundle([Path("b.bin"), Path("a.bin"), Path("b.bin")])
    assert config.bundle_paths(bundle) == [Path("b.bin"), Path("a.bin"), Path("b.bin")]


def test_invalid_bundle(tmpdir: py.path.local):
    c = tmpdir.join("invalid_config.ini")
    c.write("[broken]\nchunk_size = 64K\n\n[bad_chunk]\npaths = a.bin\nchunk_size = lots\n")

    with pytest.raises(exceptions.StreamcatInvalidConfigError):
        config.load_bundle("broken", config_path=str(c))

    with pytest.raises(exceptions.StreamcatInvalidConfigError):
        config.load_bundle("bad_chunk", config_path=str(c))

    with pytest.raises(exceptions.StreamcatInvalidConfigError):
        config.update_config(
            "empty", T.cast(T.Any, {"paths": ""}), config_path=str(c)
        )


def test_remove(tmpdir: py.path.local):
    c = tmpdir.join("empty_config.ini")
    config.update_config(
        "world", config.make_bundle([Path("a.bin")]), config_path=str(c)
    )
    assert config.remove_config("world", config_path=str(c))
    u = config.load_bundle("world", config_path=str(c))
    assert u is None
    x = config.list_all_bundles(config_path=str(c))
    assert not x
    assert not config.remove_config("world", config_path=str(c))


def test_list_skips_invalid_bundles(tmpdir: py.path.local):
    c = tmpdir.join("mixed_config.ini")
    c.write("[broken]\nchunk_size = 64K\n\n[good]\npaths = a.bin\n")

    x = config.list_all_bundles(config_path=str(c))
    assert x == {"good": {"paths": "a.bin"}}
