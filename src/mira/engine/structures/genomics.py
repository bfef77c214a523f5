from dataclasses import dataclass

@dataclass(frozen=True)
class SampleCodingSequence:
    sample_id: str
    ctype: str
    ref_strain: str
    protein: str
    cds_aln: str

@dataclass(frozen=True)
class ReferenceCodingSequence:
    isolate_id: str
    isolate_name: str
    subtype: str
    ctype: str
    reference_id: str
    protein: str
    cds_aln: str

@dataclass(frozen=True)
class CodingSequencePair:
    sample: SampleCodingSequence
    reference: ReferenceCodingSequence

@dataclass(frozen=True)
class SampleSubtype:
    sample_id: str
    sample_name: str
    segment_number: str
    subtype: str
