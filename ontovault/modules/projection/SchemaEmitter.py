"""
ontovault Schema Emitter

Builds the immutable class and template descriptors of one entity from its
collected properties.

Field type decision (first match wins):
- scalar ranging over a boolean, real or dateTime subtype -> Boolean / Number / DateTime
- scalar ranging over an enumerated scalar -> Select
- any other scalar -> Input
- relation with a non-empty resolved range -> File (functional) or MultiFile
- relation with an empty resolved range -> no field
"""

from typing import Dict, FrozenSet, List, Optional, Sequence

from ontovault.exceptions import SchemaConflictError
from ontovault.shared.logging_utils import get_logger
from ontovault.modules.ontology.constants import (
    BOOLEAN_SCALAR,
    REAL_SCALAR,
    DATETIME_SCALAR,
    HAS_ICON_ANNOTATION,
    LABEL_ANNOTATION,
    COMMENT_ANNOTATION,
)
from ontovault.modules.ontology.models.OntologySchema import PropertyDefinition, PropertyKind
from ontovault.modules.ontology.store.ModelStore import ModelStore
from ontovault.modules.projection.RangeResolver import RangeResolver
from ontovault.modules.projection.constants import (
    SOURCE_FIELD_NAME,
    TARGET_FIELD_NAME,
    TAGS_FIELD_NAME,
    SOURCE_FIELD_OFFSET,
    TARGET_FIELD_OFFSET,
)
from ontovault.modules.projection.models.VaultDocument import (
    FieldType,
    FieldDescriptor,
    BodySection,
    ClassDocument,
    TemplateDocument,
)

logger = get_logger(__name__)


def java_string_hash(text: str) -> int:
    """
    32-bit signed string hash compatible with java.lang.String#hashCode.

    The hash runs over UTF-16 code units, so characters outside the basic
    multilingual plane contribute their surrogate pair.
    """
    encoded = text.encode("utf-16-be")
    h = 0
    for i in range(0, len(encoded), 2):
        h = (31 * h + ((encoded[i] << 8) | encoded[i + 1])) & 0xFFFFFFFF
    return _to_int32(h)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def field_id(hash_value: int) -> str:
    return f"f{hash_value}"


class SchemaEmitter:
    """
    Emits ClassDocument and TemplateDocument descriptors.

    Args:
        store: Model store the entities come from
        resolver: Range resolver over the same store
        templates_path: Vault-relative template folder excluded from reference queries
    """

    def __init__(self, store: ModelStore, resolver: RangeResolver, templates_path: str):
        self.store = store
        self.resolver = resolver
        self.templates_path = templates_path

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def emit_class_descriptor(
        self,
        entity_iri: str,
        properties: List[PropertyDefinition],
        fields: Optional[Sequence[FieldDescriptor]] = None,
    ) -> ClassDocument:
        """
        Build the field schema of an entity.

        Args:
            entity_iri: The entity
            properties: Its collected properties, in collection order
            fields: Fields already emitted for the entity; emitted here when omitted

        Returns:
            ClassDocument with fields in property order, followed by the
            source/target fields of a relation entity
        """
        entity = self.store.entity(entity_iri)
        icon = self.store.annotation_value(entity_iri, HAS_ICON_ANNOTATION)
        return ClassDocument(
            entity=entity_iri,
            prefix=entity.prefix,
            name=entity.name,
            icon="" if icon is None else str(icon),
            fields=tuple(fields if fields is not None else self.emit_fields(entity_iri, properties)),
            sections=tuple(self._sections(entity_iri, properties)),
        )

    def emit_template_descriptor(
        self,
        entity_iri: str,
        properties: List[PropertyDefinition],
        fields: Optional[Sequence[FieldDescriptor]] = None,
    ) -> TemplateDocument:
        """Build the template header of an entity: one default value per emitted field."""
        entity = self.store.entity(entity_iri)
        if fields is None:
            fields = self.emit_fields(entity_iri, properties)
        return TemplateDocument(
            entity=entity_iri,
            prefix=entity.prefix,
            name=entity.name,
            defaults=tuple((f.name, f.default_value) for f in fields),
        )

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    def emit_fields(self, entity_iri: str, properties: List[PropertyDefinition]) -> List[FieldDescriptor]:
        """
        Fields of an entity: one per property with a usable range, then the
        source/target fields of a relation entity.

        Raises:
            SchemaConflictError: If a property uses a name the documents reserve
        """
        self.check_reserved_names(entity_iri, properties)

        fields = []
        for prop in properties:
            if prop.kind == PropertyKind.RELATION:
                descriptor = self._relation_field(entity_iri, prop)
            else:
                descriptor = self._scalar_field(entity_iri, prop)
            if descriptor is not None:
                fields.append(descriptor)

        entity = self.store.entity(entity_iri)
        if entity.is_relation_entity:
            name_hash = java_string_hash(entity.name)
            for role, field_name, offset, declared in (
                ("source", SOURCE_FIELD_NAME, SOURCE_FIELD_OFFSET, self.store.sources(entity_iri)),
                ("target", TARGET_FIELD_NAME, TARGET_FIELD_OFFSET, self.store.targets(entity_iri)),
            ):
                types = self.resolver.resolve_types(declared)
                if not types:
                    logger.warning(
                        "No generatable %s types for %s; field '%s' omitted",
                        role, entity.abbreviated_iri, field_name,
                    )
                    continue
                fields.append(self._reference_field(
                    field_name, _to_int32(name_hash + offset), entity.functional, types
                ))
        return fields

    def reserved_names(self, entity_iri: str) -> List[str]:
        """Field names generated for the entity itself"""
        if self.store.entity(entity_iri).is_relation_entity:
            return [TAGS_FIELD_NAME, SOURCE_FIELD_NAME, TARGET_FIELD_NAME]
        return [TAGS_FIELD_NAME]

    def check_reserved_names(self, entity_iri: str, properties: List[PropertyDefinition]):
        reserved = self.reserved_names(entity_iri)
        for prop in properties:
            if prop.name in reserved:
                raise SchemaConflictError(
                    prop.abbreviated_iri,
                    f"the generated field '{prop.name}'",
                    self.store.abbreviate(entity_iri),
                )

    def _scalar_field(self, entity_iri: str, prop: PropertyDefinition) -> FieldDescriptor:
        ranges = self.resolver.resolve_range(entity_iri, prop)
        scalar = min(ranges, key=self.store.abbreviate) if ranges else None
        field_type, options = self.scalar_field_type(scalar)
        return FieldDescriptor(
            name=prop.name,
            type=field_type,
            id=field_id(java_string_hash(prop.name)),
            multiple=not prop.functional,
            options=options,
        )

    def scalar_field_type(self, scalar_iri: Optional[str]):
        """Field type and Select options for a scalar range"""
        if scalar_iri is None:
            return FieldType.INPUT, None
        if self.store.is_subtype_of(scalar_iri, BOOLEAN_SCALAR):
            return FieldType.BOOLEAN, None
        if self.store.is_subtype_of(scalar_iri, REAL_SCALAR):
            return FieldType.NUMBER, None
        if self.store.is_subtype_of(scalar_iri, DATETIME_SCALAR):
            return FieldType.DATETIME, None
        if self.store.is_enumerated(scalar_iri):
            literals = self.store.enumeration_literals(scalar_iri)
            return FieldType.SELECT, {str(k): literal for k, literal in enumerate(literals, start=1)}
        return FieldType.INPUT, None

    def _relation_field(self, entity_iri: str, prop: PropertyDefinition) -> Optional[FieldDescriptor]:
        types = self.resolver.resolve_range(entity_iri, prop)
        if not types:
            logger.warning(
                "No generatable range for %s on %s; field '%s' omitted",
                prop.abbreviated_iri, self.store.abbreviate(entity_iri), prop.name,
            )
            return None
        return self._reference_field(prop.name, java_string_hash(prop.name), prop.functional, types)

    def _reference_field(self, name: str, hash_value: int, functional: bool, types: FrozenSet[str]) -> FieldDescriptor:
        return FieldDescriptor(
            name=name,
            type=FieldType.FILE if functional else FieldType.MULTI_FILE,
            id=field_id(hash_value),
            multiple=not functional,
            query=self.reference_query(types),
        )

    def reference_query(self, types: FrozenSet[str]) -> str:
        """Dataview query listing the notes tagged with any of `types`, outside the template folder"""
        tags = sorted({"#" + self._tag(t) for t in types})
        return "dv.pages('{} and !\"{}\"')".format(" or ".join(tags), self.templates_path)

    def _tag(self, entity_iri: str) -> str:
        entity = self.store.entity(entity_iri)
        return f"{entity.prefix}/{entity.name}"

    # ------------------------------------------------------------------
    # Body
    # ------------------------------------------------------------------

    def _sections(self, entity_iri: str, properties: List[PropertyDefinition]) -> List[BodySection]:
        sections = []
        by_name: Dict[str, PropertyDefinition] = {p.name: p for p in reversed(properties)}
        for name in sorted(by_name):
            prop = by_name[name]
            label = self.store.annotation_value(prop.iri, LABEL_ANNOTATION)
            comment = self.store.annotation_value(prop.iri, COMMENT_ANNOTATION)
            sections.append(BodySection(
                title=str(label) if label is not None else name,
                text=str(comment) if comment is not None else "",
            ))

        if self.store.entity(entity_iri).is_relation_entity:
            sections.append(BodySection(title="Sources", text="The sources of this relation"))
            sections.append(BodySection(title="Targets", text="The targets of this relation"))
        return sections
