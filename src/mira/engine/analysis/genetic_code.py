from Bio.Data import CodonTable
from Bio.Data.CodonTable import TranslationError

GAP = "-"
PARTIAL_AMINO_ACID = "~"
MISSING_AMINO_ACID = "X"
STOP_AMINO_ACID = "*"


class GeneticCode:
    """Read-only codon to amino acid lookup.

    Fully gapped codons translate to ``-``, partially gapped ones to ``~``.
    Ambiguous codons resolve through Biopython's IUPAC tables when every
    expansion encodes the same residue and fall back to ``X`` otherwise.
    """

    def __init__(self, table_id: int = 1):
        self._table = CodonTable.ambiguous_dna_by_id[table_id]
        self._stop_codons = frozenset(self._table.stop_codons)

    @property
    def name(self) -> str:
        return "; ".join(self._table.names)

    def translate_codon(self, codon: str) -> str:
        codon = codon.upper().replace("U", "T")
        if len(codon) != 3:
            return PARTIAL_AMINO_ACID
        if codon == GAP * 3:
            return GAP
        if GAP in codon:
            return PARTIAL_AMINO_ACID
        if codon in self._stop_codons:
            return STOP_AMINO_ACID
        try:
            return self._table.forward_table[codon]
        except (KeyError, TranslationError):
            return MISSING_AMINO_ACID

STANDARD_GENETIC_CODE = GeneticCode(1)
