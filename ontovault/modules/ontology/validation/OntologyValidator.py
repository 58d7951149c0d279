"""
ontovault Ontology Validator

Structural validation of a loaded vocabulary bundle. Projection only runs on a
bundle that passes validation, so the projection code can rely on every
reference resolving to a member of the right kind.

Key Responsibilities:
- Check that every reference resolves (imports, supertypes, domains, ranges,
  restrictions, relation entity sources and targets, annotation keys)
- Check that references point at members of the right kind
- Detect specialization cycles
- Accumulate every problem instead of stopping at the first one
"""

from collections import Counter
from typing import List

from pydantic import BaseModel, Field

from ontovault.modules.ontology.store.ModelStore import ModelStore
from ontovault.modules.ontology.models.OntologySchema import (
    Vocabulary,
    EntityDefinition,
    ScalarDefinition,
    PropertyDefinition,
    PropertyKind,
)


class ValidationResult(BaseModel):
    """Result of ontology validation"""
    valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    def add_error(self, error: str):
        """Add an error message"""
        self.errors.append(error)
        self.valid = False

    def add_warning(self, warning: str):
        """Add a warning message"""
        self.warnings.append(warning)

    def merge(self, other: "ValidationResult"):
        """Merge another validation result into this one"""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        if not other.valid:
            self.valid = False


class OntologyValidator:
    """
    Validates the vocabularies held by a ModelStore.

    Usage:
        result = OntologyValidator(store).validate()
        if not result.valid:
            raise ModelLoadError(result.errors)
    """

    def __init__(self, store: ModelStore):
        """
        Initialize validator with a model store.

        Args:
            store: The store whose vocabularies are validated
        """
        self.store = store

    def validate(self) -> ValidationResult:
        """
        Validate every vocabulary in the store.

        Returns:
            ValidationResult with all errors and warnings
        """
        result = ValidationResult(valid=True)

        iri_counts = Counter(v.iri for v in self.store.vocabularies)
        for iri, count in iri_counts.items():
            if count > 1:
                result.add_error(f"Vocabulary {iri} is loaded {count} times")

        for vocabulary in self.store.vocabularies:
            result.merge(self.validate_vocabulary(vocabulary))

        return result

    def validate_vocabulary(self, vocabulary: Vocabulary) -> ValidationResult:
        """
        Validate one vocabulary.

        Checks:
        1. Imports are loaded
        2. Member names are unique across member kinds
        3. Entities, scalars and properties reference valid members
        4. Annotation keys are annotation properties
        """
        result = ValidationResult(valid=True)
        where = vocabulary.source or vocabulary.iri

        # Check 1: Imports
        loaded = {v.iri for v in self.store.vocabularies}
        for imported in vocabulary.imports:
            if imported not in loaded:
                result.add_error(f"{where}: imported vocabulary {imported} is not loaded")

        # Check 2: Unique member names
        names = Counter(member.name for member in vocabulary.members())
        for name, count in names.items():
            if count > 1:
                result.add_error(
                    f"{where}: member name '{name}' is declared {count} times"
                )

        # Check 3: Members
        for entity in vocabulary.entities.values():
            self._validate_entity(vocabulary, entity, result)
        for scalar in vocabulary.scalars.values():
            self._validate_scalar(vocabulary, scalar, result)
        for prop in vocabulary.properties.values():
            self._validate_property(vocabulary, prop, result)

        # Check 4: Annotations
        for member in vocabulary.members():
            for key in member.annotations:
                iri = self.store.resolve_reference(vocabulary, key)
                if iri is None or self.store.annotation_property(iri) is None:
                    result.add_error(
                        f"{member.abbreviated_iri}: unknown annotation property '{key}'"
                    )

        return result

    def _validate_entity(self, vocabulary: Vocabulary, entity: EntityDefinition, result: ValidationResult):
        name = entity.abbreviated_iri

        for ref in entity.specializes:
            iri = self._resolve(vocabulary, ref, name, "supertype", result)
            if iri is not None and not self.store.is_entity(iri):
                result.add_error(f"{name}: supertype '{ref}' is not an entity")

        if self._in_cycle(entity.iri):
            result.add_error(f"{name}: specialization cycle through {name}")

        for axiom in entity.restrictions:
            prop_iri = self._resolve(vocabulary, axiom.property, name, "restricted property", result)
            range_iri = self._resolve(vocabulary, axiom.range, name, "restriction range", result)
            if prop_iri is None or range_iri is None:
                continue
            prop = self.store.semantic_property(prop_iri)
            if prop is None:
                result.add_error(f"{name}: restricted member '{axiom.property}' is not a semantic property")
                continue
            self._check_range_kind(prop, range_iri, f"{name}: restriction on '{axiom.property}'", result)

        if entity.is_relation_entity:
            for label, refs in (("source", entity.sources), ("target", entity.targets)):
                if not refs:
                    result.add_error(f"{name}: relation entity has no {label}s")
                for ref in refs:
                    iri = self._resolve(vocabulary, ref, name, label, result)
                    if iri is not None and not self.store.is_entity(iri):
                        result.add_error(f"{name}: {label} '{ref}' is not an entity")
        elif entity.sources or entity.targets or entity.forward or entity.reverse:
            result.add_warning(
                f"{name}: sources, targets and relations are ignored on a {entity.kind.value}"
            )

    def _validate_scalar(self, vocabulary: Vocabulary, scalar: ScalarDefinition, result: ValidationResult):
        name = scalar.abbreviated_iri

        for ref in scalar.specializes:
            iri = self._resolve(vocabulary, ref, name, "supertype", result)
            if iri is not None and not self.store.is_scalar(iri):
                result.add_error(f"{name}: supertype '{ref}' is not a scalar")

        if self._in_cycle(scalar.iri):
            result.add_error(f"{name}: specialization cycle through {name}")

        duplicates = [lit for lit, count in Counter(scalar.literals).items() if count > 1]
        for literal in duplicates:
            result.add_error(f"{name}: enumeration literal '{literal}' is listed more than once")

    def _validate_property(self, vocabulary: Vocabulary, prop: PropertyDefinition, result: ValidationResult):
        name = prop.abbreviated_iri

        for ref in prop.domains:
            iri = self._resolve(vocabulary, ref, name, "domain", result)
            if iri is not None and not self.store.is_entity(iri):
                result.add_error(f"{name}: domain '{ref}' is not an entity")

        if not prop.ranges:
            result.add_warning(f"{name}: property has no declared range")

        for ref in prop.ranges:
            iri = self._resolve(vocabulary, ref, name, "range", result)
            if iri is not None:
                self._check_range_kind(prop, iri, name, result)

    def _check_range_kind(self, prop: PropertyDefinition, range_iri: str, context: str, result: ValidationResult):
        target = self.store.abbreviate(range_iri)
        if prop.kind == PropertyKind.SCALAR and not self.store.is_scalar(range_iri):
            result.add_error(f"{context}: scalar property range {target} is not a scalar")
        elif prop.kind == PropertyKind.RELATION and not self.store.is_entity(range_iri):
            result.add_error(f"{context}: relation range {target} is not an entity")

    def _resolve(self, vocabulary: Vocabulary, ref: str, context: str, role: str, result: ValidationResult):
        iri = self.store.resolve_reference(vocabulary, ref)
        if iri is None:
            result.add_error(f"{context}: cannot resolve {role} '{ref}'")
        return iri

    def _in_cycle(self, iri: str) -> bool:
        """True when `iri` is reachable from one of its own supertypes"""
        if iri in self.store.direct_supertypes(iri):
            return True
        return any(
            iri in self.store.direct_supertypes(ancestor)
            for ancestor in self.store.all_supertypes(iri, reflexive=False)
        )
