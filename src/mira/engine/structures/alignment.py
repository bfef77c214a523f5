from dataclasses import dataclass

@dataclass(frozen=True)
class AlignmentStats:
    identities: int
    mismatches: int
    gaps: int
    score: float

@dataclass(frozen=True)
class PairwiseAlignment:
    reference: str
    query: str
    alignment_stats: AlignmentStats

    def is_empty(self) -> bool:
        return len(self.reference) == 0

EMPTY_ALIGNMENT = PairwiseAlignment("", "", AlignmentStats(0, 0, 0, 0))
