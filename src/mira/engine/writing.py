import csv
import sys
from os import PathLike
from typing import AsyncIterable, Iterable, Sequence, TextIO, Union

from mira.engine.structures.variants import ChangeRecord

CHANGE_RECORD_HEADER = (
    "sample",
    "reference_strain",
    "gisaid_accession",
    "ctype",
    "dais_reference",
    "protein",
    "sample_codon",
    "reference_codon",
    "aa_mutation",
    "phenotypic_consequence"
)


def change_record_to_row(record: ChangeRecord) -> Sequence[str]:
    return (
        record.sample_id,
        record.ref_strain,
        record.gisaid_accession,
        record.ctype,
        record.dais_ref,
        record.protein,
        record.mut_codon,
        record.ref_codon,
        record.mutation_label,
        record.phenotypic_consequence
    )

async def write_change_records(records: Union[AsyncIterable[ChangeRecord], Iterable[ChangeRecord]], handle: TextIO, delimiter: str = ","):
    writer = csv.writer(handle, delimiter=delimiter, lineterminator="\n")
    writer.writerow(CHANGE_RECORD_HEADER)
    if isinstance(records, AsyncIterable):
        async for record in records:
            writer.writerow(change_record_to_row(record))
    else:
        for record in records:
            writer.writerow(change_record_to_row(record))

async def write_change_records_as_xsv(records: Union[AsyncIterable[ChangeRecord], Iterable[ChangeRecord]], output_path: Union[str, PathLike[str], None] = None, delimiter: str = ","):
    if output_path is None:
        await write_change_records(records, sys.stdout, delimiter)
        return
    with open(output_path, "w", newline="") as filehandle:
        await write_change_records(records, filehandle, delimiter)
