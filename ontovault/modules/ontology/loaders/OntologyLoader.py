"""
ontovault Ontology Loader

This module loads vocabularies from YAML files (or plain dictionaries) and
assembles them, together with the packaged built-in vocabularies, into a
validated ModelStore.

Vocabulary file layout:

    iri: http://example.com/mission
    prefix: mission
    imports:
      - http://example.com/base
    entities:
      Component:
        kind: concept
        specializes: [base:IdentifiedThing]
        restrictions:
          - {property: hasMass, kind: all, range: xsd:decimal}
    scalars:
      Color:
        specializes: [xsd:string]
        literals: [red, green, blue]
    properties:
      hasMass:
        kind: scalar
        functional: true
        domains: [Component]
        ranges: [xsd:decimal]
"""

import yaml
import json
from pathlib import Path
from typing import Dict, Any, List, Optional, Iterable

from pydantic import ValidationError

from ontovault.exceptions import ModelLoadError
from ontovault.shared.logging_utils import get_logger
from ontovault.modules.ontology.models.OntologySchema import (
    Vocabulary,
    EntityDefinition,
    ScalarDefinition,
    PropertyDefinition,
    AnnotationPropertyDefinition,
    EntityKind,
    PropertyKind,
)
from ontovault.modules.ontology.loaders.Catalog import Catalog
from ontovault.modules.ontology.store.ModelStore import ModelStore
from ontovault.modules.ontology.validation.OntologyValidator import OntologyValidator

logger = get_logger(__name__)

BUILTIN_ONTOLOGIES_DIR = Path(__file__).parent.parent.parent.parent / "ontologies"

# Load order of the packaged vocabularies; later ones may reference earlier ones
BUILTIN_ONTOLOGY_FILES = ["owl.yaml", "xsd.yaml", "rdf.yaml", "rdfs.yaml", "obsidian.yaml"]

VOCABULARY_FILE_EXTENSIONS = ["yaml", "yml", "json"]


class OntologyLoader:
    """
    Loads vocabularies from files or dictionaries.

    Handles parsing of vocabulary documents; semantic checks are left to the
    OntologyValidator.
    """

    @staticmethod
    def load_from_yaml(file_path: str) -> Vocabulary:
        """
        Load a vocabulary from a YAML file.

        Args:
            file_path: Path to the YAML file

        Returns:
            Vocabulary instance

        Raises:
            ModelLoadError: If the file is missing, unreadable or malformed
        """
        path = Path(file_path)
        if not path.exists():
            raise ModelLoadError([f"Vocabulary file not found: {file_path}"])

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as error:
            raise ModelLoadError([f"Cannot read vocabulary file {file_path}: {error}"]) from error

        return OntologyLoader.load_from_dict(data, source=str(path))

    @staticmethod
    def load_from_json(file_path: str) -> Vocabulary:
        """
        Load a vocabulary from a JSON file.

        Args:
            file_path: Path to the JSON file

        Returns:
            Vocabulary instance
        """
        path = Path(file_path)
        if not path.exists():
            raise ModelLoadError([f"Vocabulary file not found: {file_path}"])

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as error:
            raise ModelLoadError([f"Cannot read vocabulary file {file_path}: {error}"]) from error

        return OntologyLoader.load_from_dict(data, source=str(path))

    @staticmethod
    def load_from_file(file_path: str) -> Vocabulary:
        """Load a vocabulary, picking the format from the file extension"""
        if str(file_path).endswith(".json"):
            return OntologyLoader.load_from_json(file_path)
        return OntologyLoader.load_from_yaml(file_path)

    @staticmethod
    def load_from_dict(data: Dict[str, Any], source: Optional[str] = None) -> Vocabulary:
        """
        Load a vocabulary from a dictionary.

        Args:
            data: Dictionary containing the vocabulary definition
            source: Optional description of where the data came from

        Returns:
            Vocabulary instance with member IRIs filled in

        Raises:
            ModelLoadError: If the vocabulary structure is invalid
        """
        where = source or "<dict>"
        if not isinstance(data, dict):
            raise ModelLoadError([f"{where}: vocabulary document must be a mapping"])

        problems = []
        iri = data.get('iri')
        prefix = data.get('prefix')
        if not iri:
            problems.append(f"{where}: vocabulary must have an 'iri' field")
        if not prefix:
            problems.append(f"{where}: vocabulary must have a 'prefix' field")
        if problems:
            raise ModelLoadError(problems)

        # "http://x/y#" and "http://x/y" with separator "#" name the same vocabulary
        separator = data.get('separator')
        if iri[-1] in '#/':
            separator = separator or iri[-1]
            iri = iri[:-1]
        separator = separator or '#'
        namespace = iri + separator

        entities: Dict[str, EntityDefinition] = {}
        scalars: Dict[str, ScalarDefinition] = {}
        properties: Dict[str, PropertyDefinition] = {}
        annotation_properties: Dict[str, AnnotationPropertyDefinition] = {}

        # Parse entities (relation entities may contribute properties)
        for name, entity_data in (data.get('entities') or {}).items():
            entity = OntologyLoader._parse_member(
                EntityDefinition, name, entity_data, where, problems
            )
            if entity is None:
                continue
            entities[name] = entity
            for relation in OntologyLoader._expand_relation_entity(entity):
                if relation.name in properties:
                    problems.append(
                        f"{where}: relation '{relation.name}' of entity '{name}' is already declared "
                        f"by entity '{properties[relation.name].relation_entity}'"
                    )
                    continue
                properties[relation.name] = relation

        # Parse scalars
        for name, scalar_data in (data.get('scalars') or {}).items():
            scalar = OntologyLoader._parse_member(
                ScalarDefinition, name, scalar_data, where, problems
            )
            if scalar is not None:
                scalars[name] = scalar

        # Parse semantic properties
        for name, property_data in (data.get('properties') or {}).items():
            if name in properties:
                problems.append(
                    f"{where}: property '{name}' is already declared as a relation "
                    f"of entity '{properties[name].relation_entity}'"
                )
                continue
            prop = OntologyLoader._parse_member(
                PropertyDefinition, name, property_data, where, problems
            )
            if prop is not None:
                properties[name] = prop

        # Parse annotation properties
        for name, annotation_data in (data.get('annotation_properties') or {}).items():
            annotation = OntologyLoader._parse_member(
                AnnotationPropertyDefinition, name, annotation_data, where, problems
            )
            if annotation is not None:
                annotation_properties[name] = annotation

        if problems:
            raise ModelLoadError(problems)

        # Fill in member identity
        for member in [*entities.values(), *scalars.values(),
                       *properties.values(), *annotation_properties.values()]:
            member.iri = namespace + member.name
            member.prefix = prefix

        return Vocabulary(
            iri=iri,
            prefix=prefix,
            separator=separator,
            description=data.get('description', ''),
            imports=[_strip_separator(i) for i in data.get('imports') or []],
            entities=entities,
            scalars=scalars,
            properties=properties,
            annotation_properties=annotation_properties,
            annotations=data.get('annotations') or {},
            source=source,
        )

    @staticmethod
    def _parse_member(model, name: str, data: Optional[Dict[str, Any]], where: str, problems: List[str]):
        """Parse one member, recording a problem instead of raising"""
        try:
            return model.model_validate({**(data or {}), 'name': name})
        except ValidationError as error:
            for detail in error.errors():
                location = ".".join(str(part) for part in detail['loc'])
                problems.append(f"{where}: {name}.{location}: {detail['msg']}")
            return None

    @staticmethod
    def _expand_relation_entity(entity: EntityDefinition) -> List[PropertyDefinition]:
        """
        Derive the forward and reverse relation properties of a relation entity.

        The forward relation goes from sources to targets; the reverse relation
        goes back and is functional when the entity is inverse functional.
        """
        if entity.kind != EntityKind.RELATION_ENTITY:
            return []

        relations = []
        if entity.forward:
            relations.append(PropertyDefinition(
                name=entity.forward,
                kind=PropertyKind.RELATION,
                functional=entity.functional,
                domains=list(entity.sources),
                ranges=list(entity.targets),
                relation_entity=entity.name,
            ))
        if entity.reverse:
            relations.append(PropertyDefinition(
                name=entity.reverse,
                kind=PropertyKind.RELATION,
                functional=entity.inverse_functional,
                domains=list(entity.targets),
                ranges=list(entity.sources),
                relation_entity=entity.name,
            ))
        return relations

    @staticmethod
    def save_to_yaml(vocabulary: Vocabulary, file_path: str):
        """
        Save a vocabulary to a YAML file.

        Args:
            vocabulary: The Vocabulary to save
            file_path: Path where to save the YAML file
        """
        data = OntologyLoader.vocabulary_to_dict(vocabulary)

        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(
                data,
                f,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True
            )

    @staticmethod
    def vocabulary_to_dict(vocabulary: Vocabulary) -> Dict[str, Any]:
        """
        Convert a Vocabulary to a dictionary that load_from_dict accepts.

        Relation properties derived from relation entities are not written
        back; they are regenerated from the entity on load.
        """
        identity = {'name', 'iri', 'prefix'}

        def dump(member, extra_exclude=()):
            return member.model_dump(
                mode='json',
                exclude=identity | set(extra_exclude),
                exclude_defaults=True,
            )

        return {
            'iri': vocabulary.iri + vocabulary.separator,
            'prefix': vocabulary.prefix,
            'description': vocabulary.description,
            'imports': list(vocabulary.imports),
            'entities': {name: dump(e) for name, e in vocabulary.entities.items()},
            'scalars': {name: dump(s) for name, s in vocabulary.scalars.items()},
            'properties': {
                name: dump(p, ['relation_entity'])
                for name, p in vocabulary.properties.items()
                if p.relation_entity is None
            },
            'annotation_properties': {
                name: dump(a) for name, a in vocabulary.annotation_properties.items()
            },
            'annotations': dict(vocabulary.annotations),
        }


def load_builtin_vocabularies() -> List[Vocabulary]:
    """
    Load the packaged built-in vocabularies (owl, xsd, rdf, rdfs, obsidian).

    Returns:
        Vocabularies in their fixed load order

    Raises:
        ModelLoadError: If a packaged vocabulary file is missing
    """
    vocabularies = []
    for file_name in BUILTIN_ONTOLOGY_FILES:
        path = BUILTIN_ONTOLOGIES_DIR / file_name
        if not path.exists():
            raise ModelLoadError([f"Built-in vocabulary not found at: {path}"])
        vocabularies.append(OntologyLoader.load_from_yaml(str(path)))
    return vocabularies


def build_model_store(vocabularies: Iterable[Vocabulary], validate: bool = True) -> ModelStore:
    """
    Assemble vocabularies into a ModelStore.

    The built-in vocabularies are always loaded first; a given vocabulary IRI
    is kept only once.

    Args:
        vocabularies: User vocabularies in load order
        validate: Run the OntologyValidator and fail on errors

    Returns:
        ModelStore over the built-in and user vocabularies

    Raises:
        ModelLoadError: If validation reports any error
    """
    loaded: Dict[str, Vocabulary] = {}
    for vocabulary in [*load_builtin_vocabularies(), *vocabularies]:
        if vocabulary.iri not in loaded:
            loaded[vocabulary.iri] = vocabulary

    store = ModelStore(list(loaded.values()))

    if validate:
        result = OntologyValidator(store).validate()
        for warning in result.warnings:
            logger.warning(warning)
        if not result.valid:
            raise ModelLoadError(result.errors)

    return store


def load_bundle(catalog_path: str, root_iri: str, validate: bool = True) -> ModelStore:
    """
    Load a vocabulary and its import closure through an XML catalog.

    Imports are followed depth-first; each IRI is read once. IRIs of packaged
    built-in vocabularies are never looked up in the catalog.

    Args:
        catalog_path: Path of the catalog.xml file
        root_iri: IRI of the root vocabulary
        validate: Run structural validation after loading

    Returns:
        Validated ModelStore

    Raises:
        ModelLoadError: If a vocabulary cannot be resolved, read or validated
    """
    catalog = Catalog.load(catalog_path)
    builtin_iris = {v.iri for v in load_builtin_vocabularies()}

    vocabularies: List[Vocabulary] = []
    seen = set(builtin_iris)
    problems = []

    def visit(iri: str, importer: Optional[str]):
        iri = _strip_separator(iri)
        if iri in seen:
            return
        seen.add(iri)

        path = resolve_vocabulary_path(catalog, iri)
        if path is None:
            where = f" (imported by {importer})" if importer else ""
            problems.append(f"Cannot resolve vocabulary IRI {iri}{where} using catalog {catalog_path}")
            return

        logger.info("Reading: %s", path)
        try:
            vocabulary = OntologyLoader.load_from_file(str(path))
        except ModelLoadError as error:
            problems.extend(error.problems)
            return
        if vocabulary.iri != iri:
            problems.append(f"{path}: declares IRI {vocabulary.iri} but was resolved from {iri}")
        vocabularies.append(vocabulary)

        for imported in vocabulary.imports:
            visit(imported, vocabulary.iri)

    visit(root_iri, None)
    if problems:
        raise ModelLoadError(problems)

    for vocabulary in vocabularies:
        logger.info("Validating: %s", vocabulary.source or vocabulary.iri)

    return build_model_store(vocabularies, validate=validate)


def resolve_vocabulary_path(catalog: Catalog, iri: str) -> Optional[Path]:
    """Map an IRI to an existing vocabulary file, trying known extensions"""
    resolved = catalog.resolve(iri)
    if resolved is None:
        return None
    if resolved.is_file():
        return resolved
    for extension in VOCABULARY_FILE_EXTENSIONS:
        candidate = resolved.with_name(f"{resolved.name}.{extension}")
        if candidate.is_file():
            return candidate
    return None


def _strip_separator(iri: str) -> str:
    return iri[:-1] if iri and iri[-1] in '#/' else iri
