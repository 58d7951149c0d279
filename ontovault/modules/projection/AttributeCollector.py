"""
ontovault Attribute Collector

Gathers the properties that apply to an entity:
1. properties whose domain contains the entity or one of its supertypes
2. properties with no domain, or with the universal top entity as domain

The result keeps that order, lists each property once, and fails when two
different properties would produce fields with the same name.
"""

from typing import Dict, List, Optional

from ontovault.exceptions import SchemaConflictError
from ontovault.shared.logging_utils import get_logger
from ontovault.modules.ontology.constants import THING_ASPECT
from ontovault.modules.ontology.models.OntologySchema import PropertyDefinition
from ontovault.modules.ontology.store.ModelStore import ModelStore

logger = get_logger(__name__)


class AttributeCollector:
    """Collects inherited and globally scoped properties per entity"""

    def __init__(self, store: ModelStore, top_entity: Optional[str] = THING_ASPECT):
        self.store = store
        self.top_entity = store.lookup(top_entity) if top_entity else None

    def global_properties(self) -> List[PropertyDefinition]:
        """Properties that apply to every entity"""
        return [
            prop for prop in self.store.properties()
            if not self.store.domains(prop.iri)
            or (self.top_entity is not None and self.top_entity in self.store.domains(prop.iri))
        ]

    def collect_properties(self, entity_iri: str) -> List[PropertyDefinition]:
        """
        Ordered, duplicate-free properties applicable to an entity.

        Args:
            entity_iri: The entity

        Returns:
            Properties from the supertype closure first, then global ones

        Raises:
            SchemaConflictError: If two distinct properties share a name
        """
        inherited = [
            prop
            for owner in self.store.all_supertypes(entity_iri, reflexive=True)
            for prop in self.store.properties_with_domain(owner)
        ]

        seen: Dict[str, PropertyDefinition] = {}
        properties = []
        for prop in [*inherited, *self.global_properties()]:
            first = seen.get(prop.name)
            if first is None:
                seen[prop.name] = prop
                properties.append(prop)
            elif first.iri != prop.iri:
                raise SchemaConflictError(
                    first.abbreviated_iri,
                    prop.abbreviated_iri,
                    self.store.abbreviate(entity_iri),
                )

        logger.debug(
            "Properties of %s: %s",
            self.store.abbreviate(entity_iri),
            [p.abbreviated_iri for p in properties],
        )
        return properties
