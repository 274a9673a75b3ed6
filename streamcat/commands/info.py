import argparse
import inspect

from ..cat import describe


class Command:
    name = "info"
    help = "show the segments of a combined stream and its total length"

    def add_basic_arguments(self, parser: argparse.ArgumentParser):
        pass

    def run(self, vars_args: dict):
        describe(
            **(
                {
                    k: v
                    for k, v in vars_args.items()
                    if k in inspect.getfullargspec(describe).args
                }
            )
        )
