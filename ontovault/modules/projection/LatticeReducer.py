"""
ontovault Lattice Reducer

Most-specific-type computation over a subsumption lattice. The reduction is a
pure function of the candidate set and an oracle, so it can be exercised on
small synthetic lattices without a model store.
"""

from typing import AbstractSet, FrozenSet, Iterable, Protocol


class SubsumptionOracle(Protocol):
    """What the reducer needs to know about the type lattice"""

    def strict_supertypes(self, term: str) -> AbstractSet[str]:
        """Transitive supertypes of `term`, excluding `term` itself"""
        ...

    def subtypes(self, term: str) -> AbstractSet[str]:
        """Transitive subtypes of `term`, including `term` itself"""
        ...

    def is_generatable(self, term: str) -> bool:
        """True for concrete kinds that get documents (concepts, relation entities)"""
        ...


def minimize(candidates: Iterable[str], oracle: SubsumptionOracle) -> FrozenSet[str]:
    """Drop every candidate that is a strict supertype of another candidate."""
    candidates = frozenset(candidates)
    redundant = set()
    for candidate in candidates:
        redundant |= oracle.strict_supertypes(candidate)
    return candidates - redundant


def most_specific(candidates: Iterable[str], oracle: SubsumptionOracle) -> FrozenSet[str]:
    """
    Reduce a type set to its most specific members, then expand downwards.

    1. Minimize: keep only candidates that are not a strict supertype of
       another candidate.
    2. Expand: replace each remaining type by itself and all its transitive
       subtypes, keeping only generatable kinds.

    A reference picker built from the result accepts instances of the
    narrowest qualifying types and of anything more specific.

    Args:
        candidates: Candidate types
        oracle: Subsumption oracle over the candidates' lattice

    Returns:
        The expanded set; empty when `candidates` is empty
    """
    expanded = set()
    for term in minimize(candidates, oracle):
        expanded.update(t for t in oracle.subtypes(term) if oracle.is_generatable(t))
    return frozenset(expanded)
