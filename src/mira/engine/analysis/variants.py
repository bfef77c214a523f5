import logging
from collections import defaultdict
from typing import Iterable, Sequence, Union

from mira.engine.analysis.aligners import AsyncPairwiseAlignmentEngine, CodingSequenceAligner
from mira.engine.analysis.catalog import MutationCatalog
from mira.engine.analysis.codons import diff_codons
from mira.engine.analysis.deduplication import deduplicate_cross_strain, extract_sample_subtypes, requires_deduplication
from mira.engine.analysis.genetic_code import STANDARD_GENETIC_CODE, GeneticCode
from mira.engine.structures.genomics import CodingSequencePair, ReferenceCodingSequence, SampleCodingSequence
from mira.engine.structures.variants import ChangeRecord

logger = logging.getLogger(__name__)

DEFAULT_MAX_THREADS = 4


def pair_coding_sequences(samples: Iterable[SampleCodingSequence], references: Iterable[ReferenceCodingSequence]) -> list[CodingSequencePair]:
    """Every (sample, reference) pair sharing c-type, reference strain and protein, in scan order."""
    references_by_key: dict[tuple[str, str, str], list[ReferenceCodingSequence]] = defaultdict(list)
    for reference in references:
        references_by_key[(reference.ctype, reference.reference_id, reference.protein)].append(reference)
    pairs = []
    for sample in samples:
        for reference in references_by_key.get((sample.ctype, sample.ref_strain, sample.protein), ()):
            pairs.append(CodingSequencePair(sample, reference))
    return pairs

async def scan_coding_sequence_pairs(
        pairs: Sequence[CodingSequencePair],
        catalog: MutationCatalog,
        genetic_code: GeneticCode = STANDARD_GENETIC_CODE,
        require_expected_aa: bool = True,
        max_threads: int = DEFAULT_MAX_THREADS,
        aligner: Union[CodingSequenceAligner, None] = None) -> list[ChangeRecord]:
    """Change records of all pairs, in the same order a sequential scan produces.

    Equal length pairs are compared directly; the others are aligned on a
    thread pool first.
    """
    if aligner is None:
        aligner = CodingSequenceAligner()
    pair_records: dict[int, list[ChangeRecord]] = {}
    with AsyncPairwiseAlignmentEngine(aligner, max_threads) as alignment_engine:
        for scan_index, pair in enumerate(pairs):
            reference_sequence = pair.reference.cds_aln
            query_sequence = pair.sample.cds_aln
            if len(reference_sequence) == len(query_sequence):
                pair_records[scan_index] = diff_codons(reference_sequence, query_sequence, pair, catalog, genetic_code, require_expected_aa)
            else:
                alignment_engine.align(reference_sequence, query_sequence, scan_index=scan_index, pair=pair)

        async for alignment, associated_data in alignment_engine:
            scan_index = associated_data["scan_index"]
            pair = associated_data["pair"]
            if alignment.is_empty():
                logger.info("No alignment between %s and reference %s for %s", pair.sample.sample_id, pair.reference.isolate_name, pair.sample.protein)
                pair_records[scan_index] = []
                continue
            pair_records[scan_index] = diff_codons(alignment.reference, alignment.query, pair, catalog, genetic_code, require_expected_aa)

    return [record for scan_index in sorted(pair_records) for record in pair_records[scan_index]]

async def variants_of_interest_process(
        samples: Sequence[SampleCodingSequence],
        references: Sequence[ReferenceCodingSequence],
        catalog: MutationCatalog,
        virus: str,
        genetic_code: GeneticCode = STANDARD_GENETIC_CODE,
        max_threads: int = DEFAULT_MAX_THREADS) -> list[ChangeRecord]:
    pairs = pair_coding_sequences(samples, references)
    logger.info("Comparing %d sample/reference pairs against %d mutations of interest", len(pairs), len(catalog))
    records = await scan_coding_sequence_pairs(pairs, catalog, genetic_code, require_expected_aa=True, max_threads=max_threads)
    if requires_deduplication(virus):
        scanned_count = len(records)
        records = deduplicate_cross_strain(records, extract_sample_subtypes(samples))
        logger.info("Collapsed %d cross strain duplicate(s)", scanned_count - len(records))
    logger.info("Found %d variant(s) of interest", len(records))
    return records

async def positions_of_interest_process(
        samples: Sequence[SampleCodingSequence],
        references: Sequence[ReferenceCodingSequence],
        catalog: MutationCatalog,
        genetic_code: GeneticCode = STANDARD_GENETIC_CODE,
        max_threads: int = DEFAULT_MAX_THREADS) -> list[ChangeRecord]:
    pairs = pair_coding_sequences(samples, references)
    records = await scan_coding_sequence_pairs(pairs, catalog, genetic_code, require_expected_aa=False, max_threads=max_threads)
    logger.info("Found %d change(s) on positions of interest", len(records))
    return records
