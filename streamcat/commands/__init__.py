# ruff: noqa: F401
from . import bundle, cat, info
