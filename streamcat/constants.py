from __future__ import annotations

import functools
import os

import appdirs

_ENV_PREFIX = "STREAMCAT_"


def _yes_or_no(val: str) -> bool:
    return val.strip().upper() in ["1", "TRUE", "YES"]


def _parse_scaled_integers(
    value: str, scale: dict[str, int] | None = None
) -> int | None:
    """
    >>> scale = {"": 1, "b": 1, "K": 1024, "M": 1024 * 1024, "G": 1024 * 1024 * 1024}
    >>> _parse_scaled_integers("0", scale=scale)
    0
    >>> _parse_scaled_integers("10", scale=scale)
    10
    >>> _parse_scaled_integers("100B", scale=scale)
    100
    >>> _parse_scaled_integers("100k", scale=scale)
    102400
    >>> _parse_scaled_integers("100t", scale=scale)
    Traceback (most recent call last):
    ValueError: Expect valid integer ends with , b, K, M, G, but got 100T
    """

    if scale is None:
        scale = {"": 1}

    value = value.strip().upper()

    if value in ["INF", "INFINITY"]:
        return None

    try:
        for k, v in scale.items():
            k = k.upper()
            if k and value.endswith(k):
                return int(value[: -len(k)]) * v

        if "" in scale:
            return int(value) * scale[""]
    except ValueError:
        pass

    raise ValueError(
        f"Expect valid integer ends with {', '.join(scale.keys())}, but got {value}"
    )


_parse_filesize = functools.partial(
    _parse_scaled_integers,
    scale={"": 1, "B": 1, "K": 1024, "M": 1024 * 1024, "G": 1024 * 1024 * 1024},
)


###################
##### GENERAL #####
###################
USER_CONFIG_DIR = appdirs.user_config_dir(appname="streamcat")
STREAMCAT_CONFIG_PATH: str = os.getenv(
    _ENV_PREFIX + "CONFIG_PATH", os.path.join(USER_CONFIG_DIR, "bundles.ini")
)


#####################
##### STREAMING #####
#####################
# How many bytes the CLI reads from a combined stream per call.
# It does not change the output, only the responsiveness of the progress bar
READ_CHUNK_SIZE: int | None = _parse_filesize(
    os.getenv(_ENV_PREFIX + "READ_CHUNK_SIZE", "1M")
)
PROGRESS_DISABLED: bool = _yes_or_no(
    os.getenv(_ENV_PREFIX + "PROGRESS_DISABLED", "NO")
)
