import logging
from typing import Iterable, Mapping, Union

from mira.engine.analysis.genetic_code import GAP, MISSING_AMINO_ACID, PARTIAL_AMINO_ACID
from mira.engine.structures.variants import ChangeRecord, MutationOfInterest

logger = logging.getLogger(__name__)

PARTIAL_AMINO_ACID_TEXT = "partial amino acid"
COVERED_AMINO_ACID_TEXT = "amino acid covered"
MISSING_AMINO_ACID_TEXT = "amino acid information missing"

SENTINEL_PHENOTYPES: Mapping[str, str] = {
    PARTIAL_AMINO_ACID: PARTIAL_AMINO_ACID_TEXT,
    GAP: COVERED_AMINO_ACID_TEXT,
    MISSING_AMINO_ACID: MISSING_AMINO_ACID_TEXT,
    ".": MISSING_AMINO_ACID_TEXT,
}


class MutationCatalog:
    """Mutations of interest keyed by (subtype, protein, position text).

    Only the first entry loaded for a key is consulted.
    """

    def __init__(self, mutations: Iterable[MutationOfInterest]):
        self._mutations: dict[tuple[str, str, str], MutationOfInterest] = {}
        for mutation in mutations:
            key = (mutation.subtype, mutation.protein, mutation.aa_position)
            if key in self._mutations:
                logger.debug("Ignoring repeated catalog entry for %s %s %s", *key)
                continue
            self._mutations[key] = mutation

    def __len__(self):
        return len(self._mutations)

    def lookup(self, subtype: str, protein: str, aa_position: int) -> Union[MutationOfInterest, None]:
        # Positions compare as text so catalog formatting is honoured verbatim.
        return self._mutations.get((subtype, protein, str(aa_position)))

    def annotate(self, record: ChangeRecord, require_expected_aa: bool = True) -> Union[str, None]:
        """Phenotypic text for ``record`` or ``None`` when it is not reportable.

        With ``require_expected_aa`` off, any change on a catalogued position
        is reportable and unexpected residues get empty text.
        """
        mutation = self.lookup(record.subtype, record.protein, record.aa_position)
        if mutation is None:
            return None
        if record.aa_mut in SENTINEL_PHENOTYPES:
            return SENTINEL_PHENOTYPES[record.aa_mut]
        if record.aa_mut == mutation.aa:
            return mutation.description
        if require_expected_aa:
            return None
        return ""
