import pytest

from mira.engine.analysis.genetic_code import STANDARD_GENETIC_CODE, GeneticCode


@pytest.mark.parametrize("codon,amino_acid", [
    ("ATG", "M"),
    ("ATA", "I"),
    ("atg", "M"),
    ("AUG", "M"),
    ("TAA", "*"),
    ("TGA", "*"),
    ("---", "-"),
    ("A-G", "~"),
    ("AT", "~"),
    ("NNN", "X"),
    ("GGN", "G"),
    ("A*G", "X"),
])
def test_translate_codon(codon: str, amino_acid: str):
    assert STANDARD_GENETIC_CODE.translate_codon(codon) == amino_acid

def test_alternative_table_is_injectable():
    mitochondrial = GeneticCode(2)
    assert mitochondrial.translate_codon("TGA") == "W"
    assert STANDARD_GENETIC_CODE.translate_codon("TGA") == "*"
