from pathlib import Path
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

CATALOG_FILE_SUFFIX = "catalog.xml"


class ProjectionConfig(BaseModel):
    """Settings of one projection run.

    Attributes:
        catalog_path: OASIS XML catalog mapping vocabulary IRIs to files
        root_iri: IRI of the vocabulary whose import closure is projected
        classes_dir: Folder receiving the class documents
        templates_dir: Folder receiving the templates
        templates_path: Vault-relative template folder excluded from reference
            queries; defaults to the name of `templates_dir`
        debug: Log per-entity details
    """

    catalog_path: Path
    root_iri: str
    classes_dir: Path
    templates_dir: Path
    templates_path: Optional[str] = None
    debug: bool = False

    @field_validator("catalog_path")
    @classmethod
    def catalog_must_exist(cls, value: Path) -> Path:
        if not value.name.endswith(CATALOG_FILE_SUFFIX):
            raise ValueError(f"Catalog path {value} does not end with '{CATALOG_FILE_SUFFIX}'")
        if not value.is_file():
            raise ValueError(f"Catalog path {value} does not exist")
        return value

    @field_validator("root_iri")
    @classmethod
    def root_iri_must_be_set(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Root ontology IRI is empty")
        return value

    @model_validator(mode="after")
    def default_templates_path(self) -> "ProjectionConfig":
        if not self.templates_path:
            self.templates_path = self.templates_dir.name
        return self
