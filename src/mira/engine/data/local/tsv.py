import asyncio
import csv
from os import PathLike
from typing import Any, AsyncGenerator, Sequence, Union

from mira.engine.exceptions.inputs import MalformedInputFileException
from mira.engine.structures.genomics import ReferenceCodingSequence, SampleCodingSequence
from mira.engine.structures.variants import MutationOfInterest

DAIS_COLUMNS = (
    "sample_id",
    "ctype",
    "ref_strain",
    "protein",
    "nt_hash",
    "query_nt_seq",
    "query_aa_aln_seq",
    "cds_id",
    "insertion",
    "insert_shift",
    "cds_seq",
    "cds_aln",
    "query_nt_coordinates",
    "cds_nt_coordinates"
)

REFERENCE_COLUMNS = (
    "isolate_id",
    "isolate_name",
    "subtype",
    "passage_history",
    "nt_id",
    "ctype",
    "reference_id",
    "protein",
    "aa_aln",
    "cds_aln"
)

MUTATIONS_OF_INTEREST_COLUMNS = (
    "subtype",
    "protein",
    "aa_position",
    "aa",
    "description"
)


def read_tsv_rows(path: Union[str, PathLike[str]], columns: Sequence[str], has_headers: bool) -> list[tuple[int, dict[str, str]]]:
    """Rows of a tab separated file as column name mappings.

    Headerless files must carry exactly ``columns``; files with headers
    must name at least those columns.
    """
    rows = []
    with open(path, newline="", encoding="utf-8") as tsv_handle:
        reader = csv.reader(tsv_handle, delimiter="\t")
        try:
            header = list(columns)
            if has_headers:
                header = next(reader, [])
                missing_columns = [column for column in columns if column not in header]
                if len(missing_columns) > 0:
                    raise MalformedInputFileException(str(path), 1, f"missing column(s) {', '.join(missing_columns)}")
            for values in reader:
                if len(values) == 0:
                    continue
                if len(values) != len(header):
                    raise MalformedInputFileException(str(path), reader.line_num, f"expected {len(header)} fields, found {len(values)}")
                rows.append((reader.line_num, dict(zip(header, values))))
        except UnicodeDecodeError as error:
            raise MalformedInputFileException(str(path), reader.line_num + 1, "not valid UTF-8 text") from error
        except csv.Error as error:
            raise MalformedInputFileException(str(path), reader.line_num, str(error)) from error
    return rows

async def read_sample_coding_sequences(path: Union[str, PathLike[str]]) -> AsyncGenerator[SampleCodingSequence, Any]:
    rows = await asyncio.to_thread(read_tsv_rows, path, DAIS_COLUMNS, False)
    for _, row in rows:
        yield SampleCodingSequence(
            sample_id=row["sample_id"],
            ctype=row["ctype"],
            ref_strain=row["ref_strain"],
            protein=row["protein"],
            cds_aln=row["cds_aln"]
        )

async def read_reference_coding_sequences(path: Union[str, PathLike[str]]) -> AsyncGenerator[ReferenceCodingSequence, Any]:
    rows = await asyncio.to_thread(read_tsv_rows, path, REFERENCE_COLUMNS, True)
    for _, row in rows:
        yield ReferenceCodingSequence(
            isolate_id=row["isolate_id"],
            isolate_name=row["isolate_name"],
            subtype=row["subtype"],
            ctype=row["ctype"],
            reference_id=row["reference_id"],
            protein=row["protein"],
            cds_aln=row["cds_aln"]
        )

async def read_mutations_of_interest(path: Union[str, PathLike[str]]) -> AsyncGenerator[MutationOfInterest, Any]:
    rows = await asyncio.to_thread(read_tsv_rows, path, MUTATIONS_OF_INTEREST_COLUMNS, False)
    for _, row in rows:
        yield MutationOfInterest(
            subtype=row["subtype"],
            protein=row["protein"],
            aa_position=row["aa_position"],
            aa=row["aa"],
            description=row["description"]
        )
