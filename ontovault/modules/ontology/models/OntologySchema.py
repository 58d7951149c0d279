"""
ontovault Ontology Schema Models

This module defines the vocabulary model that ontovault projects into note
field schemas. A vocabulary declares entities, scalars, semantic properties
and annotation properties under one namespace.

Key Principles:
- Members are named within their vocabulary; the full IRI is namespace + name
- Cross-references use abbreviated IRIs ("prefix:Name") or bare local names
- Entities form a specialization DAG (multiple inheritance is legal)
- Definitions are read-only facts once a vocabulary is loaded
"""

from typing import Dict, List, Optional, Any
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict, field_validator


class EntityKind(str, Enum):
    """Kinds of class-like terms"""
    CONCEPT = "concept"
    ASPECT = "aspect"
    RELATION_ENTITY = "relation_entity"


class PropertyKind(str, Enum):
    """Value kinds of semantic properties"""
    SCALAR = "scalar"      # Values are literals of a scalar type
    RELATION = "relation"  # Values are instances of entities


class RestrictionKind(str, Enum):
    """Kinds of property range restrictions"""
    ALL = "all"    # Every value must belong to the range
    SOME = "some"  # At least one value belongs to the range


# Entity kinds that get a class document and a template
GENERATABLE_KINDS = frozenset({EntityKind.CONCEPT, EntityKind.RELATION_ENTITY})


class RestrictionAxiom(BaseModel):
    """
    A range restriction attached to an entity.

    Narrows the range of `property` for the owning entity and all of its
    subtypes.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    property: str
    kind: RestrictionKind = RestrictionKind.ALL
    range: str


class Member(BaseModel):
    """Common part of every named vocabulary member"""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    description: str = ""
    annotations: Dict[str, Any] = Field(default_factory=dict)

    # Filled in by the loader once the owning vocabulary is known
    iri: str = ""
    prefix: str = ""

    @property
    def abbreviated_iri(self) -> str:
        return f"{self.prefix}:{self.name}" if self.prefix else self.name


class EntityDefinition(Member):
    """
    Definition of a class-like term.

    Relation entities additionally declare the entities they connect and may
    name a forward and a reverse relation property.
    """

    kind: EntityKind = EntityKind.CONCEPT
    specializes: List[str] = Field(default_factory=list)
    restrictions: List[RestrictionAxiom] = Field(default_factory=list)

    # Relation entity only
    sources: List[str] = Field(default_factory=list)
    targets: List[str] = Field(default_factory=list)
    functional: bool = False
    inverse_functional: bool = False
    forward: Optional[str] = None
    reverse: Optional[str] = None

    @property
    def is_relation_entity(self) -> bool:
        return self.kind == EntityKind.RELATION_ENTITY

    @property
    def is_generatable(self) -> bool:
        return self.kind in GENERATABLE_KINDS


class ScalarDefinition(Member):
    """
    Definition of a value type.

    A scalar with literals is an enumeration; the literal order is the
    declaration order and is preserved.
    """

    specializes: List[str] = Field(default_factory=list)
    literals: List[str] = Field(default_factory=list)

    @field_validator("literals", mode="before")
    @classmethod
    def _literals_as_text(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        return [_lexical_value(v) for v in value]

    @property
    def is_enumerated(self) -> bool:
        return len(self.literals) > 0


class PropertyDefinition(Member):
    """
    Definition of a semantic property.

    An empty domain list means the property applies to every entity.
    """

    kind: PropertyKind = PropertyKind.SCALAR
    functional: bool = False
    domains: List[str] = Field(default_factory=list)
    ranges: List[str] = Field(default_factory=list)

    # Set when the property is the forward/reverse relation of a relation entity
    relation_entity: Optional[str] = None

    @property
    def is_relation(self) -> bool:
        return self.kind == PropertyKind.RELATION


class AnnotationPropertyDefinition(Member):
    """Definition of an annotation key"""


class Vocabulary(BaseModel):
    """
    A vocabulary: one namespace of entities, scalars and properties.

    Vocabularies import other vocabularies by IRI; the prefixes of imported
    vocabularies can be used in abbreviated references.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    iri: str
    prefix: str
    separator: str = "#"
    description: str = ""
    imports: List[str] = Field(default_factory=list)

    entities: Dict[str, EntityDefinition] = Field(default_factory=dict)
    scalars: Dict[str, ScalarDefinition] = Field(default_factory=dict)
    properties: Dict[str, PropertyDefinition] = Field(default_factory=dict)
    annotation_properties: Dict[str, AnnotationPropertyDefinition] = Field(default_factory=dict)

    annotations: Dict[str, Any] = Field(default_factory=dict)

    # Where the vocabulary was read from, if it came from a file
    source: Optional[str] = None

    @property
    def namespace(self) -> str:
        return self.iri + self.separator

    def members(self) -> List[Member]:
        """All members in declaration order, grouped by kind"""
        return [
            *self.entities.values(),
            *self.scalars.values(),
            *self.properties.values(),
            *self.annotation_properties.values(),
        ]

    def __repr__(self) -> str:
        return (
            f"Vocabulary(iri='{self.iri}', prefix='{self.prefix}', "
            f"entities={len(self.entities)}, scalars={len(self.scalars)}, "
            f"properties={len(self.properties)})"
        )


def _lexical_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
