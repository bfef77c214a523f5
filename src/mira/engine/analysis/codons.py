import logging
from dataclasses import replace

from mira.engine.analysis.catalog import MutationCatalog
from mira.engine.analysis.genetic_code import PARTIAL_AMINO_ACID, STANDARD_GENETIC_CODE, GeneticCode
from mira.engine.structures.genomics import CodingSequencePair
from mira.engine.structures.variants import ChangeRecord

logger = logging.getLogger(__name__)


def split_codons(sequence: str) -> tuple[list[str], str]:
    full_length = len(sequence) - len(sequence) % 3
    codons = [sequence[index:index + 3] for index in range(0, full_length, 3)]
    return codons, sequence[full_length:]

def diff_codons(
        reference_sequence: str,
        query_sequence: str,
        pair: CodingSequencePair,
        catalog: MutationCatalog,
        genetic_code: GeneticCode = STANDARD_GENETIC_CODE,
        require_expected_aa: bool = True) -> list[ChangeRecord]:
    """Codon by codon comparison of two equal length sequences.

    Every differing codon is translated and offered to the catalog; only
    reportable records are returned, in position order. A differing tail
    of one or two bases is offered at the position following the last
    differing codon (position 1 when no full codon differs) with ``~`` as
    both residues.
    """
    if len(reference_sequence) != len(query_sequence):
        raise ValueError(f"Sequences must be of equal length to compare codons (got {len(reference_sequence)} and {len(query_sequence)}).")
    reference_codons, reference_tail = split_codons(reference_sequence)
    query_codons, query_tail = split_codons(query_sequence)

    records = []
    last_differing_position = 0
    for index, (reference_codon, query_codon) in enumerate(zip(reference_codons, query_codons)):
        if reference_codon == query_codon:
            continue
        last_differing_position = index + 1
        record = ChangeRecord.from_pair(
            pair,
            ref_codon=reference_codon,
            mut_codon=query_codon,
            aa_position=index + 1,
            aa_ref=genetic_code.translate_codon(reference_codon),
            aa_mut=genetic_code.translate_codon(query_codon)
        )
        annotated = _annotate(record, catalog, require_expected_aa)
        if annotated is not None:
            records.append(annotated)

    if reference_tail != query_tail:
        record = ChangeRecord.from_pair(
            pair,
            ref_codon=reference_tail,
            mut_codon=query_tail,
            aa_position=last_differing_position + 1,
            aa_ref=PARTIAL_AMINO_ACID,
            aa_mut=PARTIAL_AMINO_ACID
        )
        annotated = _annotate(record, catalog, require_expected_aa)
        if annotated is not None:
            records.append(annotated)
    return records

def _annotate(record: ChangeRecord, catalog: MutationCatalog, require_expected_aa: bool):
    phenotypic_consequence = catalog.annotate(record, require_expected_aa=require_expected_aa)
    if phenotypic_consequence is None:
        logger.debug("Dropping %s %s %s for %s, not a mutation of interest", record.subtype, record.protein, record.mutation_label, record.sample_id)
        return None
    return replace(record, phenotypic_consequence=phenotypic_consequence)
