import asyncio
import logging
import math
import re
from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import AbstractContextManager
from typing import Any, Set, Union
from queue import Queue

import numpy as np
from Bio.Align import PairwiseAligner, substitution_matrices

from mira.engine.analysis.genetic_code import GAP
from mira.engine.structures.alignment import EMPTY_ALIGNMENT, AlignmentStats, PairwiseAlignment

logger = logging.getLogger(__name__)

SCORING_ALPHABET = "ACGTN*"
AMBIGUOUS_SYMBOL = "N"
MATCH_SCORE = 1
MISMATCH_SCORE = 0
GAP_OPEN_SCORE = -1
GAP_EXTEND_SCORE = 0

_OUT_OF_ALPHABET = re.compile(f"[^{re.escape(SCORING_ALPHABET)}]")


def build_substitution_matrix() -> substitution_matrices.Array:
    weights = np.full((len(SCORING_ALPHABET), len(SCORING_ALPHABET)), MISMATCH_SCORE, dtype=float)
    for index, symbol in enumerate(SCORING_ALPHABET):
        if symbol != AMBIGUOUS_SYMBOL:
            weights[index, index] = MATCH_SCORE
    # The ambiguity symbol scores nothing, not even against itself.
    return substitution_matrices.Array(alphabet=SCORING_ALPHABET, dims=2, data=weights)

def build_cds_aligner() -> PairwiseAligner:
    aligner = PairwiseAligner()
    aligner.mode = "local"
    aligner.substitution_matrix = build_substitution_matrix()
    aligner.open_gap_score = GAP_OPEN_SCORE
    aligner.extend_gap_score = GAP_EXTEND_SCORE
    return aligner

def to_scoring_alphabet(sequence: str) -> str:
    return _OUT_OF_ALPHABET.sub(AMBIGUOUS_SYMBOL, sequence)

def render_gapped(reference: str, query: str, coordinates: np.ndarray) -> tuple[str, str]:
    reference_parts = []
    query_parts = []
    steps = np.diff(coordinates, axis=1)
    for (reference_position, query_position), (reference_step, query_step) in zip(coordinates.T[:-1], steps.T):
        if reference_step and query_step:
            reference_parts.append(reference[reference_position:reference_position + reference_step])
            query_parts.append(query[query_position:query_position + query_step])
        elif reference_step:
            reference_parts.append(reference[reference_position:reference_position + reference_step])
            query_parts.append(GAP * int(reference_step))
        else:
            reference_parts.append(GAP * int(query_step))
            query_parts.append(query[query_position:query_position + query_step])
    return "".join(reference_parts), "".join(query_parts)


class CodingSequenceAligner:
    """Local alignment of a sample CDS against a reference CDS.

    Symbols outside ``ACGTN*`` are scored as ``N`` but the rendered
    alignment carries the input symbols.
    """

    def __init__(self, aligner: Union[PairwiseAligner, None] = None):
        self._aligner = aligner if aligner is not None else build_cds_aligner()

    def score(self, reference: str, query: str) -> float:
        return self._aligner.score(to_scoring_alphabet(reference), to_scoring_alphabet(query))

    def align(self, reference: str, query: str) -> PairwiseAlignment:
        alignments = self._aligner.align(to_scoring_alphabet(reference), to_scoring_alphabet(query))
        assert math.isfinite(alignments.score), "Alignment score is not finite"
        if alignments.score <= 0:
            logger.debug("No positive scoring local alignment (reference length %d, query length %d)", len(reference), len(query))
            return EMPTY_ALIGNMENT
        try:
            top_alignment = alignments[0]
        except IndexError:
            return EMPTY_ALIGNMENT
        coordinates = top_alignment.coordinates
        aligned_reference, aligned_query = render_gapped(reference, query, coordinates)
        top_alignment_stats = top_alignment.counts()
        return PairwiseAlignment(
            aligned_reference,
            aligned_query,
            AlignmentStats(
                identities=top_alignment_stats.identities,
                mismatches=top_alignment_stats.mismatches,
                gaps=top_alignment_stats.gaps,
                score=top_alignment.score # type: ignore
            ))


class AsyncPairwiseAlignmentEngine(AbstractContextManager):
    def __enter__(self):
        self._thread_pool = ThreadPoolExecutor(self._max_threads, thread_name_prefix="async-pairwise-alignment")
        return self

    def __init__(self, aligner: CodingSequenceAligner, max_threads: int = 4):
        self._max_threads = max(1, max_threads)
        self._aligner = aligner
        self._work_left: Set[Future] = set()
        self._work_complete: Queue[Future] = Queue()

    def align(self, reference: str, query: str, **associated_data):
        work = self._thread_pool.submit(
            self.work, reference, query, **associated_data)
        self._work_left.add(work)
        work.add_done_callback(self._on_complete)

    def _on_complete(self, future: Future):
        # Queue before discarding so the engine never looks idle in between.
        self._work_complete.put(future)
        self._work_left.discard(future)

    def work(self, reference, query, **associated_data):
        return self._aligner.align(reference, query), associated_data

    async def next_completed(self) -> Union[tuple[PairwiseAlignment, dict[str, Any]], None]:
        if self._work_complete.empty() and len(self._work_left) == 0:
            return None
        completed = await asyncio.to_thread(self._work_complete.get)
        return completed.result()

    def __exit__(self, exc_type, exc_value, traceback):
        self.shutdown()

    def __aiter__(self):
        return self

    async def __anext__(self):
        result = await self.next_completed()
        if result is None:
            raise StopAsyncIteration
        return result

    def shutdown(self):
        self._thread_pool.shutdown(wait=True, cancel_futures=True)
