"""
ontovault Range Resolver

Narrows the range of a property as seen from one entity.

Restrictions declared on the entity or any of its supertypes take precedence
over the property's declared range:
- an ALL restriction holds for every value, so it always applies
- a SOME restriction only pins the type of a value when the property is
  functional (at most one value exists)

Entity ranges are reduced to their most specific generatable types; scalar
ranges are returned as they are.
"""

from typing import FrozenSet, Iterable

from ontovault.shared.logging_utils import get_logger
from ontovault.modules.ontology.models.OntologySchema import (
    PropertyDefinition,
    PropertyKind,
    RestrictionKind,
)
from ontovault.modules.ontology.store.ModelStore import ModelStore
from ontovault.modules.projection.LatticeReducer import most_specific

logger = get_logger(__name__)


class RangeResolver:
    """Resolves property ranges per entity against a ModelStore"""

    def __init__(self, store: ModelStore):
        self.store = store

    def restricted_ranges(self, entity_iri: str, prop: PropertyDefinition) -> FrozenSet[str]:
        """Range targets of the applicable restrictions on the entity and its supertypes"""
        ranges = set()
        for owner in self.store.all_supertypes(entity_iri, reflexive=True):
            for axiom in self.store.restrictions(owner, prop.iri):
                if axiom.kind == RestrictionKind.ALL or (
                    axiom.kind == RestrictionKind.SOME and prop.functional
                ):
                    ranges.add(axiom.range)
        return frozenset(ranges)

    def resolve_range(self, entity_iri: str, prop: PropertyDefinition) -> FrozenSet[str]:
        """
        Applicable range of `prop` for instances of `entity_iri`.

        Args:
            entity_iri: The entity the property is viewed from
            prop: The property

        Returns:
            For relations, the most specific generatable entity types;
            for scalar properties, the raw scalar set
        """
        ranges = self.restricted_ranges(entity_iri, prop)
        if not ranges:
            ranges = frozenset(self.store.ranges(prop.iri))

        if prop.kind == PropertyKind.RELATION:
            resolved = most_specific(ranges, self.store)
        else:
            resolved = ranges

        logger.debug(
            "Range of %s for %s: %s",
            prop.abbreviated_iri,
            self.store.abbreviate(entity_iri),
            sorted(self.store.abbreviate(r) for r in resolved),
        )
        return resolved

    def resolve_types(self, candidates: Iterable[str]) -> FrozenSet[str]:
        """Most specific generatable types of an entity set (relation entity sources/targets)"""
        return most_specific(candidates, self.store)
