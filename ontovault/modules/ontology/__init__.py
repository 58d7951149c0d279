"""
ontovault Ontology Module

This module provides the model store the projection reads from.

Key exports:
- Vocabulary and member definitions: the loaded model
- OntologyLoader: Load vocabularies from YAML/JSON
- load_bundle: Load a vocabulary and its imports through an XML catalog
- OntologyValidator: Structural validation of a loaded bundle
- ModelStore: Subsumption, domain/range, restriction and annotation queries
"""

from ontovault.modules.ontology.models.OntologySchema import (
    Vocabulary,
    EntityDefinition,
    ScalarDefinition,
    PropertyDefinition,
    AnnotationPropertyDefinition,
    RestrictionAxiom,
    EntityKind,
    PropertyKind,
    RestrictionKind,
)

from ontovault.modules.ontology.store.ModelStore import (
    ModelStore,
    ResolvedRestriction,
)

from ontovault.modules.ontology.validation.OntologyValidator import (
    OntologyValidator,
    ValidationResult,
)

from ontovault.modules.ontology.loaders.OntologyLoader import (
    OntologyLoader,
    load_builtin_vocabularies,
    build_model_store,
    load_bundle,
)

from ontovault.modules.ontology.loaders.Catalog import Catalog

__all__ = [
    # Schema models
    "Vocabulary",
    "EntityDefinition",
    "ScalarDefinition",
    "PropertyDefinition",
    "AnnotationPropertyDefinition",
    "RestrictionAxiom",
    # Enums
    "EntityKind",
    "PropertyKind",
    "RestrictionKind",
    # Store
    "ModelStore",
    "ResolvedRestriction",
    # Validation
    "OntologyValidator",
    "ValidationResult",
    # Loading
    "OntologyLoader",
    "load_builtin_vocabularies",
    "build_model_store",
    "load_bundle",
    "Catalog",
]
