import tempfile
from csv import reader
from os import path

import pytest

from mira.cli import program, variants


def run_to_file(subcommand: str, *extra_arguments: str):
    with tempfile.TemporaryDirectory() as temp_dir:
        output_path = path.join(temp_dir, "out.csv")
        program.run([
            subcommand,
            "-i", "tests/resources/dais.tsv",
            "-r", "tests/resources/references.tsv",
            "-m", "tests/resources/mutations.tsv",
            "-o", output_path,
            *extra_arguments
        ])
        with open(output_path) as output_handle:
            return list(reader(output_handle, delimiter="\t" if "\\t" in extra_arguments else ","))

def test_variants_of_interest_writes_deduplicated_rows():
    lines = run_to_file("variants-of-interest", "-v", "INFLUENZA")
    assert lines[0][0] == "sample"
    assert lines[1:] == [[
        "s1_6",
        "A/Michigan/45/2015",
        "EPI_ISL_100",
        "A_NA_N1",
        "CA09",
        "NA",
        "TAC",
        "CAC",
        "H:10:Y",
        "AA substitution conferring oseltamivir resistance"
    ]]

def test_positions_of_interest_keeps_every_reference():
    lines = run_to_file("positions-of-interest", "-d", "\\t")
    assert [line[1] for line in lines[1:]] == ["A/Darwin/6/2021", "A/Michigan/45/2015"]

def test_malformed_input_exits_with_message(capsys):
    with pytest.raises(SystemExit) as raised:
        program.run([
            "variants-of-interest",
            "-i", "tests/resources/truncated_dais.tsv",
            "-r", "tests/resources/references.tsv",
            "-m", "tests/resources/mutations.tsv",
            "-v", "INFLUENZA"
        ])
    assert raised.value.code == 1
    assert "truncated_dais.tsv" in capsys.readouterr().err

def test_multi_character_delimiter_is_rejected():
    with pytest.raises(SystemExit):
        program.run([
            "positions-of-interest",
            "-i", "tests/resources/dais.tsv",
            "-r", "tests/resources/references.tsv",
            "-m", "tests/resources/mutations.tsv",
            "-d", "||"
        ])

def test_missing_input_exits_with_message(capsys):
    with pytest.raises(SystemExit) as raised:
        program.run([
            "positions-of-interest",
            "-i", "tests/resources/does_not_exist.tsv",
            "-r", "tests/resources/references.tsv",
            "-m", "tests/resources/mutations.tsv"
        ])
    assert raised.value.code == 1
    assert "does_not_exist.tsv" in capsys.readouterr().err

def test_virus_help_mentions_case_insensitive_match():
    assert "ignoring case" in variants.parser.format_help()
