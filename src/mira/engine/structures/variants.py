from dataclasses import dataclass

from mira.engine.structures.genomics import CodingSequencePair

@dataclass(frozen=True)
class MutationOfInterest:
    subtype: str
    protein: str
    aa_position: str
    aa: str
    description: str

@dataclass(frozen=True)
class ChangeRecord:
    sample_id: str
    ref_strain: str
    gisaid_accession: str
    subtype: str
    ctype: str
    dais_ref: str
    protein: str
    ref_codon: str
    mut_codon: str
    aa_position: int
    aa_ref: str
    aa_mut: str
    phenotypic_consequence: str = ""

    @classmethod
    def from_pair(cls, pair: CodingSequencePair, ref_codon: str, mut_codon: str, aa_position: int, aa_ref: str, aa_mut: str) -> "ChangeRecord":
        return cls(
            sample_id=pair.sample.sample_id,
            ref_strain=pair.reference.isolate_name,
            gisaid_accession=pair.reference.isolate_id,
            subtype=pair.reference.subtype,
            ctype=pair.sample.ctype,
            dais_ref=pair.sample.ref_strain,
            protein=pair.sample.protein,
            ref_codon=ref_codon,
            mut_codon=mut_codon,
            aa_position=aa_position,
            aa_ref=aa_ref,
            aa_mut=aa_mut
        )

    @property
    def mutation_label(self) -> str:
        return f"{self.aa_ref}:{self.aa_position}:{self.aa_mut}"

    def structural_key(self) -> tuple:
        # Everything except which reference strain produced the call.
        return (
            self.sample_id,
            self.ctype,
            self.dais_ref,
            self.protein,
            self.ref_codon,
            self.mut_codon,
            self.aa_ref,
            self.aa_position,
            self.aa_mut,
            self.phenotypic_consequence
        )
