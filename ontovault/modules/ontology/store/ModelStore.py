"""
ontovault Model Store

Read-only query surface over a set of loaded vocabularies. All members are
identified by their full IRI; references inside a vocabulary are resolved once
against the vocabulary's own prefix, the prefixes of its imports and the
prefixes of the implicitly imported built-in vocabularies.

Specialization is kept as an adjacency map (entity or scalar -> direct
supertypes) with memoized transitive closures, so multiple inheritance is a
DAG query rather than a Python class hierarchy.
"""

from collections import deque
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from ontovault.modules.ontology.constants import IMPLICIT_IMPORTS
from ontovault.modules.ontology.models.OntologySchema import (
    Vocabulary,
    Member,
    EntityDefinition,
    ScalarDefinition,
    PropertyDefinition,
    AnnotationPropertyDefinition,
    RestrictionKind,
)


class ResolvedRestriction(BaseModel):
    """A restriction axiom with its references resolved to IRIs"""
    model_config = ConfigDict(frozen=True)

    entity: str
    property: str
    kind: RestrictionKind
    range: str


class ModelStore:
    """
    Indexes vocabularies and answers subsumption, domain/range, restriction
    and annotation queries.

    The store also acts as the subsumption oracle of the lattice reducer
    (strict_supertypes / subtypes / is_generatable).
    """

    def __init__(self, vocabularies: List[Vocabulary]):
        self._vocabularies: List[Vocabulary] = list(vocabularies)
        self._vocabulary_by_iri: Dict[str, Vocabulary] = {}
        self._members: Dict[str, Member] = {}
        self._owners: Dict[str, Vocabulary] = {}
        self._abbreviated: Dict[str, str] = {}
        self._prefix_maps: Dict[str, Dict[str, str]] = {}

        for vocabulary in self._vocabularies:
            self._vocabulary_by_iri.setdefault(vocabulary.iri, vocabulary)
            for member in vocabulary.members():
                if member.iri in self._members:
                    continue
                self._members[member.iri] = member
                self._owners[member.iri] = vocabulary
                self._abbreviated.setdefault(member.abbreviated_iri, member.iri)

        self._direct_supers: Dict[str, Tuple[str, ...]] = {}
        self._direct_subs: Dict[str, List[str]] = {}
        self._restrictions: Dict[str, List[ResolvedRestriction]] = {}
        self._domains: Dict[str, Tuple[str, ...]] = {}
        self._ranges: Dict[str, Tuple[str, ...]] = {}
        self._sources: Dict[str, Tuple[str, ...]] = {}
        self._targets: Dict[str, Tuple[str, ...]] = {}
        self._annotations: Dict[str, Dict[str, Any]] = {}
        self._property_order: List[str] = []
        self._properties_by_domain: Dict[str, List[str]] = {}

        self._super_closure: Dict[str, Tuple[str, ...]] = {}
        self._sub_closure: Dict[str, Tuple[str, ...]] = {}

        self._index()

    # ------------------------------------------------------------------
    # Indexing
    # ------------------------------------------------------------------

    def _index(self):
        for iri, member in self._members.items():
            vocabulary = self._owners[iri]

            self._annotations[iri] = {
                key: value
                for key, value in (
                    (self.resolve_reference(vocabulary, ref), value)
                    for ref, value in member.annotations.items()
                )
                if key is not None
            }

            if isinstance(member, (EntityDefinition, ScalarDefinition)):
                supers = self._resolve_all(vocabulary, member.specializes)
                self._direct_supers[iri] = supers
                for parent in supers:
                    self._direct_subs.setdefault(parent, []).append(iri)

            if isinstance(member, EntityDefinition):
                self._sources[iri] = self._resolve_all(vocabulary, member.sources)
                self._targets[iri] = self._resolve_all(vocabulary, member.targets)
                axioms = []
                for axiom in member.restrictions:
                    prop = self.resolve_reference(vocabulary, axiom.property)
                    target = self.resolve_reference(vocabulary, axiom.range)
                    if prop is not None and target is not None:
                        axioms.append(ResolvedRestriction(
                            entity=iri, property=prop, kind=axiom.kind, range=target
                        ))
                self._restrictions[iri] = axioms

            elif isinstance(member, PropertyDefinition):
                self._property_order.append(iri)
                self._domains[iri] = self._resolve_all(vocabulary, member.domains)
                self._ranges[iri] = self._resolve_all(vocabulary, member.ranges)
                for domain in self._domains[iri]:
                    self._properties_by_domain.setdefault(domain, []).append(iri)

    def _resolve_all(self, vocabulary: Vocabulary, refs: List[str]) -> Tuple[str, ...]:
        resolved = []
        for ref in refs:
            iri = self.resolve_reference(vocabulary, ref)
            if iri is not None and iri not in resolved:
                resolved.append(iri)
        return tuple(resolved)

    def prefix_map(self, vocabulary: Vocabulary) -> Dict[str, str]:
        """Prefixes usable in references made by `vocabulary`"""
        if vocabulary.iri not in self._prefix_maps:
            prefixes: Dict[str, str] = {}
            visible = [*IMPLICIT_IMPORTS, *vocabulary.imports]
            for iri in visible:
                imported = self._vocabulary_by_iri.get(iri)
                if imported is not None:
                    prefixes[imported.prefix] = imported.namespace
            prefixes[vocabulary.prefix] = vocabulary.namespace
            self._prefix_maps[vocabulary.iri] = prefixes
        return self._prefix_maps[vocabulary.iri]

    def resolve_reference(self, vocabulary: Vocabulary, ref: str) -> Optional[str]:
        """
        Resolve a reference written in `vocabulary` to a member IRI.

        Accepts full IRIs, abbreviated IRIs and bare local names.

        Returns:
            The member IRI, or None if no such member is loaded
        """
        if not ref:
            return None
        if "://" in ref:
            iri = ref
        elif ":" in ref:
            prefix, name = ref.split(":", 1)
            namespace = self.prefix_map(vocabulary).get(prefix)
            if namespace is None:
                return None
            iri = namespace + name
        else:
            iri = vocabulary.namespace + ref
        return iri if iri in self._members else None

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------

    @property
    def vocabularies(self) -> List[Vocabulary]:
        return list(self._vocabularies)

    def member(self, iri: str) -> Optional[Member]:
        return self._members.get(iri)

    def entity(self, iri: str) -> Optional[EntityDefinition]:
        member = self._members.get(iri)
        return member if isinstance(member, EntityDefinition) else None

    def scalar(self, iri: str) -> Optional[ScalarDefinition]:
        member = self._members.get(iri)
        return member if isinstance(member, ScalarDefinition) else None

    def semantic_property(self, iri: str) -> Optional[PropertyDefinition]:
        member = self._members.get(iri)
        return member if isinstance(member, PropertyDefinition) else None

    def annotation_property(self, iri: str) -> Optional[AnnotationPropertyDefinition]:
        member = self._members.get(iri)
        return member if isinstance(member, AnnotationPropertyDefinition) else None

    def is_entity(self, iri: str) -> bool:
        return isinstance(self._members.get(iri), EntityDefinition)

    def is_scalar(self, iri: str) -> bool:
        return isinstance(self._members.get(iri), ScalarDefinition)

    def owner(self, iri: str) -> Optional[Vocabulary]:
        return self._owners.get(iri)

    def abbreviate(self, iri: str) -> str:
        member = self._members.get(iri)
        return member.abbreviated_iri if member is not None else iri

    def lookup(self, identifier: str) -> Optional[str]:
        """Find a member by full or abbreviated IRI"""
        if identifier in self._members:
            return identifier
        return self._abbreviated.get(identifier)

    def properties(self) -> List[PropertyDefinition]:
        """Every semantic property in load order"""
        return [self._members[iri] for iri in self._property_order]

    # ------------------------------------------------------------------
    # Subsumption
    # ------------------------------------------------------------------

    def direct_supertypes(self, iri: str) -> Tuple[str, ...]:
        return self._direct_supers.get(iri, ())

    def all_supertypes(self, iri: str, reflexive: bool = True) -> Tuple[str, ...]:
        """
        Transitive supertypes in breadth-first order from `iri`.

        The order is deterministic: direct supertypes in declaration order,
        then theirs, each type listed once.
        """
        if iri not in self._super_closure:
            self._super_closure[iri] = _closure(iri, self._direct_supers)
        strict = self._super_closure[iri]
        return (iri, *strict) if reflexive else strict

    def all_subtypes(self, iri: str, reflexive: bool = True) -> Tuple[str, ...]:
        if iri not in self._sub_closure:
            self._sub_closure[iri] = _closure(iri, self._direct_subs)
        strict = self._sub_closure[iri]
        return (iri, *strict) if reflexive else strict

    def strict_supertypes(self, iri: str) -> FrozenSet[str]:
        return frozenset(self.all_supertypes(iri, reflexive=False))

    def subtypes(self, iri: str) -> FrozenSet[str]:
        return frozenset(self.all_subtypes(iri, reflexive=True))

    def is_subtype_of(self, sub: str, sup: str) -> bool:
        """Reflexive subsumption test"""
        return sup in self.all_supertypes(sub, reflexive=True)

    def is_generatable(self, iri: str) -> bool:
        entity = self.entity(iri)
        return entity is not None and entity.is_generatable

    # ------------------------------------------------------------------
    # Properties, restrictions, relation entities
    # ------------------------------------------------------------------

    def domains(self, property_iri: str) -> Tuple[str, ...]:
        return self._domains.get(property_iri, ())

    def ranges(self, property_iri: str) -> Tuple[str, ...]:
        return self._ranges.get(property_iri, ())

    def properties_with_domain(self, entity_iri: str) -> List[PropertyDefinition]:
        return [self._members[iri] for iri in self._properties_by_domain.get(entity_iri, [])]

    def restrictions(self, entity_iri: str, property_iri: Optional[str] = None) -> List[ResolvedRestriction]:
        """Restriction axioms attached directly to an entity, optionally for one property"""
        axioms = self._restrictions.get(entity_iri, [])
        if property_iri is None:
            return list(axioms)
        return [axiom for axiom in axioms if axiom.property == property_iri]

    def sources(self, relation_entity_iri: str) -> Tuple[str, ...]:
        return self._sources.get(relation_entity_iri, ())

    def targets(self, relation_entity_iri: str) -> Tuple[str, ...]:
        return self._targets.get(relation_entity_iri, ())

    # ------------------------------------------------------------------
    # Scalars and annotations
    # ------------------------------------------------------------------

    def is_enumerated(self, scalar_iri: str) -> bool:
        scalar = self.scalar(scalar_iri)
        return scalar is not None and scalar.is_enumerated

    def enumeration_literals(self, scalar_iri: str) -> List[str]:
        scalar = self.scalar(scalar_iri)
        return list(scalar.literals) if scalar is not None else []

    def annotation_value(self, iri: str, annotation: str) -> Optional[Any]:
        """
        Value of an annotation on a member.

        `annotation` may be a full or abbreviated IRI of an annotation property.
        """
        key = self.lookup(annotation)
        if key is None:
            return None
        return self._annotations.get(iri, {}).get(key)

    def is_annotated_by(self, iri: str, annotation: str) -> bool:
        key = self.lookup(annotation)
        return key is not None and key in self._annotations.get(iri, {})

    def __repr__(self) -> str:
        return f"ModelStore(vocabularies={len(self._vocabularies)}, members={len(self._members)})"


def _closure(start: str, edges: Dict[str, Any]) -> Tuple[str, ...]:
    order = []
    seen = {start}
    queue = deque(edges.get(start, ()))
    while queue:
        node = queue.popleft()
        if node in seen:
            continue
        seen.add(node)
        order.append(node)
        queue.extend(edges.get(node, ()))
    return tuple(order)
