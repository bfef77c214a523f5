import logging
from collections import defaultdict
from typing import Iterable, Mapping, Sequence, Union

from mira.engine.structures.genomics import SampleCodingSequence, SampleSubtype
from mira.engine.structures.variants import ChangeRecord

logger = logging.getLogger(__name__)

INFLUENZA = "INFLUENZA"
NA_SEGMENT_NUMBER = "6"
NA_CTYPE_MARKER = "NA"
UNKNOWN_SUBTYPE = "unknown"

# NA lineage of the sample -> reference subtype label to keep.
LINEAGE_PREFERENCES: Mapping[str, str] = {
    "A_NA_N1": "H1N1",
    "A_NA_N2": "H3N2",
}


def requires_deduplication(virus: str) -> bool:
    return virus.strip().upper() == INFLUENZA

def extract_sample_subtypes(samples: Iterable[SampleCodingSequence]) -> dict[str, SampleSubtype]:
    """Subtype of every sample id, taken from the NA segment of its sample.

    Sample ids are expected as ``<sample name>_<segment number>``; every
    segment of a sample inherits the c-type of segment 6.
    """
    sample_ids: dict[str, None] = {}
    na_ctypes: dict[str, str] = {}
    for sample in samples:
        sample_ids.setdefault(sample.sample_id)
        if NA_CTYPE_MARKER in sample.ctype:
            na_ctypes[sample.sample_id] = sample.ctype

    segments: list[tuple[str, str, str]] = []
    for sample_id in sample_ids:
        sample_name, separator, segment_number = sample_id.rpartition("_")
        if not separator:
            continue
        segments.append((sample_id, sample_name, segment_number))

    na_subtypes: dict[str, str] = {}
    for sample_id, sample_name, segment_number in segments:
        if segment_number == NA_SEGMENT_NUMBER and na_ctypes.get(sample_id):
            na_subtypes[sample_name] = na_ctypes[sample_id]

    return {
        sample_id: SampleSubtype(
            sample_id=sample_id,
            sample_name=sample_name,
            segment_number=segment_number,
            subtype=na_subtypes.get(sample_name, UNKNOWN_SUBTYPE)
        )
        for sample_id, sample_name, segment_number in segments
    }

def select_representative(duplicates: Sequence[ChangeRecord], sample_subtype: Union[SampleSubtype, None]) -> Union[ChangeRecord, None]:
    """Member of a duplicate group to keep, or ``None`` when the whole group goes.

    N1 and N2 samples keep only a member from their own lineage; any other
    sample keeps the first member.
    """
    preferred_label = None
    if sample_subtype is not None:
        preferred_label = LINEAGE_PREFERENCES.get(sample_subtype.subtype)
    if preferred_label is None:
        return duplicates[0]
    for duplicate in duplicates:
        if preferred_label in duplicate.subtype:
            return duplicate
    return None

def deduplicate_cross_strain(records: Sequence[ChangeRecord], sample_subtypes: Mapping[str, SampleSubtype]) -> list[ChangeRecord]:
    """Collapse calls that differ only by the reference strain that produced them.

    The surviving record of each group takes the place of the group's first
    member so the overall scan order is kept.
    """
    duplicate_groups: dict[tuple, list[ChangeRecord]] = defaultdict(list)
    for record in records:
        duplicate_groups[record.structural_key()].append(record)

    resolved: set[tuple] = set()
    deduplicated = []
    for record in records:
        key = record.structural_key()
        if key in resolved:
            continue
        resolved.add(key)
        duplicates = duplicate_groups[key]
        if len(duplicates) == 1:
            deduplicated.append(record)
            continue
        representative = select_representative(duplicates, sample_subtypes.get(record.sample_id))
        if representative is None:
            logger.debug(
                "Dropped %d call(s) for %s %s %s, no reference strain of the sample lineage",
                len(duplicates),
                record.sample_id,
                record.protein,
                record.mutation_label
            )
            continue
        logger.debug(
            "Kept %s over %d other reference strain(s) for %s %s %s",
            representative.ref_strain,
            len(duplicates) - 1,
            record.sample_id,
            record.protein,
            record.mutation_label
        )
        deduplicated.append(representative)
    return deduplicated
