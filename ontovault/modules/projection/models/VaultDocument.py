"""
ontovault Vault Document Models

Immutable descriptors of the two documents generated per entity:
- ClassDocument: the field schema of the entity (a Metadata Menu fileClass)
- TemplateDocument: the skeleton used to create a new note of the entity

Descriptors carry semantics only; DocumentRenderer turns them into text.
"""

from typing import Any, Dict, List, Optional, Tuple
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class FieldType(str, Enum):
    """Field type tags understood by the note system"""
    BOOLEAN = "Boolean"
    NUMBER = "Number"
    DATETIME = "DateTime"
    SELECT = "Select"
    INPUT = "Input"
    FILE = "File"            # Single reference to another note
    MULTI_FILE = "MultiFile"  # Several references to other notes


class FieldDescriptor(BaseModel):
    """
    One field of a class document.

    `options` holds the Select literals keyed "1", "2", ... in declaration
    order; `query` holds the reference query of File/MultiFile fields.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    type: FieldType
    id: str
    multiple: bool = False
    query: Optional[str] = None
    options: Optional[Dict[str, str]] = None

    @property
    def default_value(self) -> Any:
        """Value a new note starts with"""
        return [] if self.multiple else None


class BodySection(BaseModel):
    """A titled paragraph in the body of a class document"""
    model_config = ConfigDict(frozen=True)

    title: str
    text: str = ""


class ClassDocument(BaseModel):
    """Field schema of one entity"""
    model_config = ConfigDict(frozen=True)

    entity: str
    prefix: str
    name: str
    icon: str = ""
    fields: Tuple[FieldDescriptor, ...] = ()
    sections: Tuple[BodySection, ...] = ()

    @property
    def tag(self) -> str:
        return f"{self.prefix}/{self.name}"

    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]


class TemplateDocument(BaseModel):
    """Header of the template used to create notes of one entity"""
    model_config = ConfigDict(frozen=True)

    entity: str
    prefix: str
    name: str
    defaults: Tuple[Tuple[str, Any], ...] = Field(default_factory=tuple)

    @property
    def tag(self) -> str:
        return f"{self.prefix}/{self.name}"
