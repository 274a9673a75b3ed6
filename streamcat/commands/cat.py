import argparse
import inspect
from pathlib import Path

from ..cat import cat, WHENCE_CHOICES


class Command:
    name = "cat"
    help = "combine files into one stream and copy a byte range of it"

    def add_basic_arguments(self, parser: argparse.ArgumentParser):
        parser.add_argument(
            "--offset",
            help="Seek to this offset before copying. Negative offsets are allowed with --whence cur or end. [default: %(default)s]",
            default=0,
            type=int,
            required=False,
        )
        parser.add_argument(
            "--whence",
            help="Where the offset is relative to. [default: %(default)s]",
            choices=list(WHENCE_CHOICES),
            default="set",
            required=False,
        )
        parser.add_argument(
            "--length",
            help="Copy at most this many bytes, e.g. 100, 64K, 2M. [default: copy to the end]",
            default=None,
            required=False,
        )
        parser.add_argument(
            "--output",
            help="Write to this file instead of STDOUT.",
            default=None,
            type=Path,
            required=False,
        )
        parser.add_argument(
            "--chunk_size",
            help="Read this many bytes at a time, e.g. 64K. [default: bundle chunk_size or STREAMCAT_READ_CHUNK_SIZE]",
            default=None,
            required=False,
        )

    def run(self, vars_args: dict):
        cat(
            **(
                {
                    k: v
                    for k, v in vars_args.items()
                    if k in inspect.getfullargspec(cat).args
                }
            )
        )
