import asyncio

from mira.cli import program
from mira.cli.inputs import add_table_arguments, load_tables
from mira.engine.analysis.variants import variants_of_interest_process
from mira.engine.writing import write_change_records_as_xsv


parser = program.subparsers.add_parser(
    "variants-of-interest",
    help="Report amino acid changes that match a catalogued mutation of interest."
)
add_table_arguments(parser)
parser.add_argument(
    "--virus", "-v",
    dest="virus",
    required=True,
    type=str,
    help="The virus being analyzed. INFLUENZA (compared ignoring case and surrounding whitespace) collapses calls repeated across reference strains."
)

async def run(args):
    samples, references, catalog = await load_tables(args)
    records = await variants_of_interest_process(samples, references, catalog, args.virus, max_threads=args.threads)
    await write_change_records_as_xsv(records, args.output_xsv, args.output_delimiter)

def run_asynchronously(args):
    asyncio.run(run(args))

parser.set_defaults(func=run_asynchronously)
