import argparse
import inspect
from pathlib import Path

from ..cat import manage_bundle


class Command:
    name = "bundle"
    help = "save, delete or list named bundles of files"

    def add_basic_arguments(self, parser: argparse.ArgumentParser):
        parser.add_argument(
            "bundle_name",
            help="Name of the bundle. List all bundles if not specified.",
            nargs="?",
            default=None,
        )
        parser.add_argument(
            "import_path",
            help="Paths to the files or directories to combine, in order.",
            nargs="*",
            type=Path,
        )
        parser.add_argument(
            "--chunk_size",
            help="Read chunk size to use with this bundle, e.g. 64K.",
            default=None,
            required=False,
        )
        parser.add_argument(
            "--delete",
            help="Delete the bundle.",
            action="store_true",
            default=False,
            required=False,
        )

    def run(self, vars_args: dict):
        manage_bundle(
            **(
                {
                    k: v
                    for k, v in vars_args.items()
                    if k in inspect.getfullargspec(manage_bundle).args
                }
            )
        )
