import asyncio

from mira.cli import program
from mira.cli.inputs import add_table_arguments, load_tables
from mira.engine.analysis.variants import positions_of_interest_process
from mira.engine.writing import write_change_records_as_xsv


parser = program.subparsers.add_parser(
    "positions-of-interest",
    help="Report every amino acid change found on a catalogued position."
)
add_table_arguments(parser)

async def run(args):
    samples, references, catalog = await load_tables(args)
    records = await positions_of_interest_process(samples, references, catalog, max_threads=args.threads)
    await write_change_records_as_xsv(records, args.output_xsv, args.output_delimiter)

def run_asynchronously(args):
    asyncio.run(run(args))

parser.set_defaults(func=run_asynchronously)
