"""
ontovault Projection Module

Projects a loaded ontology into Metadata Menu class documents and note
templates.

Components:
- LatticeReducer: most specific generatable types of a type set
- RangeResolver: property range per entity under restrictions
- AttributeCollector: inherited and global properties per entity
- SchemaEmitter: class and template descriptors
- DocumentRenderer: descriptors to Markdown
- RegenerationMerger: header splice preserving user content
- ProjectionDriver: vault output for a whole bundle
"""

from ontovault.modules.projection.LatticeReducer import SubsumptionOracle, minimize, most_specific
from ontovault.modules.projection.RangeResolver import RangeResolver
from ontovault.modules.projection.AttributeCollector import AttributeCollector
from ontovault.modules.projection.SchemaEmitter import SchemaEmitter, java_string_hash
from ontovault.modules.projection.RegenerationMerger import merge
from ontovault.modules.projection.ProjectionDriver import ProjectionDriver, ProjectionReport, generate
from ontovault.modules.projection.projection_config import ProjectionConfig

__all__ = [
    "SubsumptionOracle",
    "minimize",
    "most_specific",
    "RangeResolver",
    "AttributeCollector",
    "SchemaEmitter",
    "java_string_hash",
    "merge",
    "ProjectionDriver",
    "ProjectionReport",
    "generate",
    "ProjectionConfig",
]
