"""
ontovault Projection Driver

Projects every user vocabulary of a model store into the vault:

    <classes_dir>/<prefix>/<Name>.md        written unconditionally
    <templates_dir>/<prefix>/New <Name>.md  regenerated header, user body kept

Per vocabulary, properties and fields are computed for all entities before any
file is written, so a name conflict aborts the run without partial output for
that vocabulary.
"""

from pathlib import Path
from typing import Dict, List, Optional, Set

from pydantic import BaseModel, Field

from ontovault.exceptions import OutputReadError, OutputWriteError, PrefixConflictError
from ontovault.shared.logging_utils import get_logger
from ontovault.version import get_ontovault_version
from ontovault.modules.ontology.constants import BUILT_IN_NAMESPACES, IGNORE_ANNOTATION
from ontovault.modules.ontology.loaders.OntologyLoader import load_bundle
from ontovault.modules.ontology.models.OntologySchema import (
    EntityDefinition,
    PropertyDefinition,
    Vocabulary,
)
from ontovault.modules.ontology.store.ModelStore import ModelStore
from ontovault.modules.projection.AttributeCollector import AttributeCollector
from ontovault.modules.projection.DocumentRenderer import (
    render_class_document,
    render_template_header,
)
from ontovault.modules.projection.RangeResolver import RangeResolver
from ontovault.modules.projection.RegenerationMerger import merge
from ontovault.modules.projection.SchemaEmitter import SchemaEmitter
from ontovault.modules.projection.constants import CLASS_FILE_SUFFIX, TEMPLATE_FILE_PREFIX
from ontovault.modules.projection.models.VaultDocument import FieldDescriptor
from ontovault.modules.projection.projection_config import ProjectionConfig

logger = get_logger(__name__)

BANNER = "=" * 65


class ProjectionReport(BaseModel):
    """Files touched by one projection run"""
    class_files: List[Path] = Field(default_factory=list)
    template_files: List[Path] = Field(default_factory=list)
    merged_template_files: List[Path] = Field(default_factory=list)

    @property
    def entity_count(self) -> int:
        return len(self.class_files)


class ProjectionDriver:
    """
    Writes class and template documents for a loaded model store.

    Args:
        store: Validated model store
        classes_dir: Folder receiving the class documents
        templates_dir: Folder receiving the templates
        templates_path: Vault-relative template folder used in reference queries;
            defaults to the name of `templates_dir`
    """

    def __init__(
        self,
        store: ModelStore,
        classes_dir: Path,
        templates_dir: Path,
        templates_path: Optional[str] = None,
    ):
        self.store = store
        self.classes_dir = Path(classes_dir)
        self.templates_dir = Path(templates_dir)
        self.collector = AttributeCollector(store)
        self.resolver = RangeResolver(store)
        self.emitter = SchemaEmitter(
            store, self.resolver, templates_path or self.templates_dir.name
        )

    def run(self) -> ProjectionReport:
        """
        Project all user vocabularies.

        Raises:
            PrefixConflictError: If two projected vocabularies share a prefix
            SchemaConflictError: If an entity gets two properties with one name
            OutputReadError: If an existing template cannot be read
            OutputWriteError: If a folder or file cannot be written
        """
        report = ProjectionReport()
        prefixes: Set[str] = set()

        for vocabulary in self.projected_vocabularies():
            if vocabulary.prefix in prefixes:
                raise PrefixConflictError(vocabulary.prefix)
            prefixes.add(vocabulary.prefix)
            self.project_vocabulary(vocabulary, report)

        return report

    def projected_vocabularies(self) -> List[Vocabulary]:
        """User vocabularies in load order"""
        return [
            v for v in self.store.vocabularies
            if v.namespace not in BUILT_IN_NAMESPACES
        ]

    def projected_entities(self, vocabulary: Vocabulary) -> List[EntityDefinition]:
        """Concepts and relation entities of a vocabulary that are not marked as ignored"""
        return [
            entity for entity in vocabulary.entities.values()
            if entity.is_generatable and not self.is_ignored(entity.iri)
        ]

    def is_ignored(self, entity_iri: str) -> bool:
        return (
            self.store.is_annotated_by(entity_iri, IGNORE_ANNOTATION)
            and self.store.annotation_value(entity_iri, IGNORE_ANNOTATION) is not False
        )

    def project_vocabulary(self, vocabulary: Vocabulary, report: ProjectionReport):
        entities = self.projected_entities(vocabulary)
        properties: Dict[str, List[PropertyDefinition]] = {}
        fields: Dict[str, List[FieldDescriptor]] = {}
        for entity in entities:
            properties[entity.iri] = self.collector.collect_properties(entity.iri)
            fields[entity.iri] = self.emitter.emit_fields(entity.iri, properties[entity.iri])

        for entity in entities:
            path = self.class_file(entity)
            logger.info("Writing: %s", path)
            document = self.emitter.emit_class_descriptor(
                entity.iri, properties[entity.iri], fields[entity.iri]
            )
            write_text(path, render_class_document(document))
            report.class_files.append(path)

        for entity in entities:
            path = self.template_file(entity)
            existing = read_text(path)
            logger.info("Writing: %s%s", path, " (exists)" if existing is not None else "")
            document = self.emitter.emit_template_descriptor(
                entity.iri, properties[entity.iri], fields[entity.iri]
            )
            write_text(path, merge(render_template_header(document), existing))
            report.template_files.append(path)
            if existing is not None:
                report.merged_template_files.append(path)

    def class_file(self, entity: EntityDefinition) -> Path:
        return self.classes_dir / entity.prefix / f"{entity.name}{CLASS_FILE_SUFFIX}"

    def template_file(self, entity: EntityDefinition) -> Path:
        return self.templates_dir / entity.prefix / f"{TEMPLATE_FILE_PREFIX}{entity.name}{CLASS_FILE_SUFFIX}"


def read_text(path: Path) -> Optional[str]:
    """Contents of an existing file, newlines untouched; None when it does not exist"""
    if not path.exists():
        return None
    try:
        with open(path, "r", encoding="utf-8", newline="") as file:
            return file.read()
    except (OSError, UnicodeDecodeError) as error:
        raise OutputReadError(str(path), error) from error


def write_text(path: Path, content: str):
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as file:
            file.write(content)
    except OSError as error:
        raise OutputWriteError(str(path), error) from error


def generate(config: ProjectionConfig) -> ProjectionReport:
    """
    Load the vocabulary bundle named by `config` and project it.

    Returns:
        ProjectionReport of the written files
    """
    logger.info(BANNER)
    logger.info("                          S T A R T")
    logger.info("                     ontovault %s", get_ontovault_version())
    logger.info(BANNER)

    store = load_bundle(str(config.catalog_path), config.root_iri)
    driver = ProjectionDriver(
        store,
        classes_dir=config.classes_dir,
        templates_dir=config.templates_dir,
        templates_path=config.templates_path,
    )
    report = driver.run()

    logger.info(BANNER)
    logger.info("                            E N D")
    logger.info(BANNER)
    return report
