import argparse
import enum
import logging
import sys
from pathlib import Path

from .. import exceptions, VERSION
from ..cat import log_exception
from ..utils import configure_logger
from . import bundle, cat, info

streamcat_commands = [
    cat,
    info,
    bundle,
]


# Root logger of streamcat (not including third-party libraries)
LOG = logging.getLogger("streamcat")


# Handle shared arguments/options here
def add_general_arguments(parser, command):
    if command in ["cat", "info"]:
        parser.add_argument(
            "import_path",
            help="Paths to the files to combine, in order. Directories are expanded into their files sorted by name.",
            nargs="*",
            type=Path,
        )
        parser.add_argument(
            "--bundle",
            help="Combine the files of this saved bundle first, followed by IMPORT_PATH.",
            dest="bundle_name",
            default=None,
            required=False,
        )
        parser.add_argument(
            "--skip_subfolders",
            help="Skip all subfolders and combine only the files in the given directories.",
            action="store_true",
            default=False,
            required=False,
        )


def _log_params(argvars: dict) -> None:
    MAX_ENTRIES = 5

    def _stringify(x) -> str:
        if isinstance(x, enum.Enum):
            return x.value
        else:
            return str(x)

    for k, v in argvars.items():
        if v is None:
            continue
        if callable(v):
            continue
        if isinstance(v, (list, set, tuple)):
            entries = [_stringify(x) for x in v]
            if len(entries) <= MAX_ENTRIES:
                v = ", ".join(entries)
            else:
                v = (
                    ", ".join(entries[:MAX_ENTRIES])
                ) + f" and {len(entries) - MAX_ENTRIES} more"
        else:
            v = _stringify(v)
        LOG.debug("CLI param: %s: %s", k, v)


def main():
    version_text = f"streamcat version {VERSION}"

    parser = argparse.ArgumentParser(
        "streamcat",
    )
    parser.add_argument(
        "--version",
        help="show the version of streamcat and exit",
        action="version",
        version=version_text,
    )
    parser.add_argument(
        "--verbose",
        help="show verbose",
        action="store_true",
        default=False,
        required=False,
    )
    parser.set_defaults(func=lambda _: parser.print_help())

    all_commands = [module.Command() for module in streamcat_commands]

    subparsers = parser.add_subparsers(
        description="please choose one of the available subcommands",
    )
    for command in all_commands:
        cmd_parser = subparsers.add_parser(
            command.name, help=command.help, conflict_handler="resolve"
        )
        add_general_arguments(cmd_parser, command.name)
        command.add_basic_arguments(cmd_parser)
        cmd_parser.set_defaults(func=command.run)

    args = parser.parse_args()

    configure_logger(LOG, level=logging.DEBUG if args.verbose else logging.INFO)

    LOG.debug("%s", version_text)
    argvars = vars(args)
    _log_params(argvars)

    try:
        args.func(argvars)

    except exceptions.StreamcatUserError as ex:
        log_exception(ex)
        sys.exit(ex.exit_code)

    except KeyboardInterrupt:
        LOG.info("Interrupted by user...")
        sys.exit(130)


if __name__ == "__main__":
    main()
