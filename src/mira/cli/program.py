import argparse
import logging

from mira.engine.exceptions.inputs import MalformedInputFileException

root_parser = argparse.ArgumentParser(description="Codon level variant annotation for assembled coding sequences.")
root_parser.add_argument(
    "--log-level",
    dest="log_level",
    required=False,
    default="WARNING",
    choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    type=str.upper,
    help="Logging verbosity. Defaults to WARNING."
)
subparsers = root_parser.add_subparsers(required=True)

from mira.cli import positions, variants # noqa: E402,F401 registers the subcommands

def run(argv=None):
    args = root_parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        args.func(args)
    except (MalformedInputFileException, OSError) as error:
        root_parser.exit(1, f"{root_parser.prog}: error: {error}\n")
