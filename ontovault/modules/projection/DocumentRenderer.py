"""
ontovault Document Renderer

Turns vault document descriptors into Markdown text with a YAML front matter
header. Rendering is pure: the same descriptor always yields the same bytes.
"""

from typing import Any, Dict

import yaml

from ontovault.modules.projection.constants import (
    FRONT_MATTER_MARKER,
    CLASS_DOCUMENT_DEFAULTS,
    CLASS_DOCUMENT_EMPTY_KEYS,
    CLASS_DOCUMENT_LIST_KEYS,
    TAGS_FIELD_NAME,
)
from ontovault.modules.projection.models.VaultDocument import (
    ClassDocument,
    FieldDescriptor,
    FieldType,
    TemplateDocument,
)


class FrontMatterDumper(yaml.SafeDumper):
    """SafeDumper that writes null values as an empty scalar (`key:`)"""


def _represent_none(dumper: yaml.SafeDumper, _value: None):
    return dumper.represent_scalar("tag:yaml.org,2002:null", "")


FrontMatterDumper.add_representer(type(None), _represent_none)


def dump_front_matter(data: Dict[str, Any]) -> str:
    """YAML front matter block, delimiters included"""
    body = yaml.dump(
        data,
        Dumper=FrontMatterDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=4096,
    )
    return f"{FRONT_MATTER_MARKER}\n{body}{FRONT_MATTER_MARKER}\n"


def _field_mapping(field: FieldDescriptor) -> Dict[str, Any]:
    mapping: Dict[str, Any] = {"name": field.name, "type": field.type.value}
    if field.type == FieldType.SELECT:
        mapping["options"] = {
            "sourceType": "ValuesList",
            "valuesList": dict(field.options or {}),
        }
    elif field.query is not None:
        mapping["options"] = {"dvQueryString": field.query}
    mapping["path"] = ""
    mapping["id"] = field.id
    return mapping


def render_class_header(document: ClassDocument) -> str:
    data: Dict[str, Any] = dict(CLASS_DOCUMENT_DEFAULTS)
    data["icon"] = document.icon
    for key in CLASS_DOCUMENT_EMPTY_KEYS:
        data[key] = [] if key in CLASS_DOCUMENT_LIST_KEYS else None
    if document.fields:
        data["fields"] = [_field_mapping(f) for f in document.fields]
    return dump_front_matter(data)


def render_class_body(document: ClassDocument) -> str:
    parts = []
    for section in document.sections:
        parts.append(f"# {section.title}\n")
        parts.append(f"{section.text}\n\n" if section.text else "\n\n")
    return "".join(parts)


def render_class_document(document: ClassDocument) -> str:
    """Full class document: front matter followed by the property sections"""
    return render_class_header(document) + render_class_body(document)


def render_template_header(document: TemplateDocument) -> str:
    """Template front matter: the entity tag, then one default per field"""
    data: Dict[str, Any] = {TAGS_FIELD_NAME: [document.tag]}
    for name, default in document.defaults:
        data[name] = list(default) if isinstance(default, (list, tuple)) else default
    return dump_front_matter(data)
