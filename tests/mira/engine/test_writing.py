import tempfile
from csv import reader
from io import StringIO
from os import path
from typing import Iterable

import pytest

from mira.engine.structures.variants import ChangeRecord
from mira.engine.writing import CHANGE_RECORD_HEADER, write_change_records, write_change_records_as_xsv


@pytest.fixture
def dummy_change_record():
    return ChangeRecord(
        sample_id="s1_6",
        ref_strain="A/Michigan/45/2015",
        gisaid_accession="EPI_ISL_100",
        subtype="H1N1",
        ctype="A_NA_N1",
        dais_ref="CA09",
        protein="NA",
        ref_codon="CAC",
        mut_codon="TAC",
        aa_position=275,
        aa_ref="H",
        aa_mut="Y",
        phenotypic_consequence="reduced inhibition, oseltamivir"
    )

async def iterable_to_asynciterable(iterable: Iterable):
    for iterated in iterable:
        yield iterated

async def test_rows_follow_header(dummy_change_record: ChangeRecord):
    with tempfile.TemporaryDirectory() as temp_dir:
        output_path = path.join(temp_dir, "out.csv")
        await write_change_records_as_xsv([dummy_change_record], output_path)
        with open(output_path) as csv_handle:
            lines = list(reader(csv_handle))
    assert lines[0] == list(CHANGE_RECORD_HEADER)
    assert lines[1] == [
        "s1_6",
        "A/Michigan/45/2015",
        "EPI_ISL_100",
        "A_NA_N1",
        "CA09",
        "NA",
        "TAC",
        "CAC",
        "H:275:Y",
        "reduced inhibition, oseltamivir"
    ]

async def test_custom_delimiter_and_async_records(dummy_change_record: ChangeRecord):
    handle = StringIO()
    await write_change_records(iterable_to_asynciterable([dummy_change_record]), handle, "\t")
    lines = handle.getvalue().splitlines()
    assert lines[0] == "\t".join(CHANGE_RECORD_HEADER)
    assert lines[1].split("\t")[8] == "H:275:Y"

async def test_header_written_without_records():
    handle = StringIO()
    await write_change_records([], handle)
    assert handle.getvalue() == ",".join(CHANGE_RECORD_HEADER) + "\n"
