import argparse

from mira.engine.analysis.catalog import MutationCatalog
from mira.engine.analysis.variants import DEFAULT_MAX_THREADS
from mira.engine.data.local.tsv import read_mutations_of_interest, read_reference_coding_sequences, read_sample_coding_sequences
from mira.engine.structures.genomics import ReferenceCodingSequence, SampleCodingSequence


def delimiter(value: str) -> str:
    value = value.replace("\\t", "\t")
    if len(value) != 1:
        raise argparse.ArgumentTypeError(f"the output delimiter must be a single character, got \"{value}\"")
    return value

def add_table_arguments(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--input-file", "-i",
        dest="input_file",
        required=True,
        type=str,
        help="The DAIS coding sequence table (tab separated, no header)."
    )
    parser.add_argument(
        "--ref-file", "-r",
        dest="ref_file",
        required=True,
        type=str,
        help="The reference strains table (tab separated, with header)."
    )
    parser.add_argument(
        "--muts-file", "-m",
        dest="muts_file",
        required=True,
        type=str,
        help="The mutations of interest table (tab separated, no header)."
    )
    parser.add_argument(
        "--output-xsv", "-o",
        dest="output_xsv",
        required=False,
        default=None,
        type=str,
        help="Where to write the delimited output. Standard output is used if not provided."
    )
    parser.add_argument(
        "--output-delimiter", "-d",
        dest="output_delimiter",
        required=False,
        default=",",
        type=delimiter,
        help="The delimiter separating output fields. Defaults to ','."
    )
    parser.add_argument(
        "--threads", "-t",
        dest="threads",
        required=False,
        default=DEFAULT_MAX_THREADS,
        type=int,
        help="The number of threads used to align coding sequences of differing lengths."
    )

async def load_tables(args) -> tuple[list[SampleCodingSequence], list[ReferenceCodingSequence], MutationCatalog]:
    catalog = MutationCatalog([mutation async for mutation in read_mutations_of_interest(args.muts_file)])
    samples = [sample async for sample in read_sample_coding_sequences(args.input_file)]
    references = [reference async for reference in read_reference_coding_sequences(args.ref_file)]
    return samples, references, catalog
