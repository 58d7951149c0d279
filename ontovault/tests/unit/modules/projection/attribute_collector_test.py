import pytest

from ontovault.exceptions import SchemaConflictError
from ontovault.modules.projection.AttributeCollector import AttributeCollector

NS = "http://example.com/mission#"


def names(properties):
    return [p.name for p in properties]


def test_collects_own_then_inherited_then_global_properties(build_store, mission_vocabulary):
    store = build_store(mission_vocabulary)
    collector = AttributeCollector(store)

    properties = collector.collect_properties(NS + "Assembly")

    assert names(properties) == [
        "launchedAt",
        "contains",
        "performs",
        "hasMass",
        "hasColor",
        "isDeployed",
        "hasId",
        "hasNote",
    ]


def test_subtype_properties_contain_supertype_properties(build_store, mission_vocabulary):
    store = build_store(mission_vocabulary)
    collector = AttributeCollector(store)

    component = {p.iri for p in collector.collect_properties(NS + "Component")}
    assembly = {p.iri for p in collector.collect_properties(NS + "Assembly")}

    assert component <= assembly


def test_relation_entity_properties_apply_to_sources(build_store, mission_vocabulary):
    store = build_store(mission_vocabulary)
    collector = AttributeCollector(store)

    assert "performs" in names(collector.collect_properties(NS + "Component"))
    assert "isPerformedBy" in names(collector.collect_properties(NS + "Function"))
    assert "performs" not in names(collector.collect_properties(NS + "Function"))


def test_owl_thing_domain_counts_as_global(build_store):
    store = build_store({
        "iri": "http://example.com/g#",
        "prefix": "g",
        "entities": {"A": {"kind": "concept"}},
        "properties": {
            "anywhere": {"kind": "scalar", "domains": ["owl:Thing"], "ranges": ["xsd:string"]},
        },
    })

    properties = AttributeCollector(store).collect_properties("http://example.com/g#A")

    assert names(properties) == ["anywhere"]


def test_diamond_inheritance_lists_property_once(build_store):
    store = build_store({
        "iri": "http://example.com/d#",
        "prefix": "d",
        "entities": {
            "Top": {"kind": "aspect"},
            "Left": {"kind": "aspect", "specializes": ["Top"]},
            "Right": {"kind": "aspect", "specializes": ["Top"]},
            "Bottom": {"kind": "concept", "specializes": ["Left", "Right"]},
        },
        "properties": {
            "shared": {"kind": "scalar", "domains": ["Top", "Left"], "ranges": ["xsd:string"]},
        },
    })

    properties = AttributeCollector(store).collect_properties("http://example.com/d#Bottom")

    assert names(properties) == ["shared"]


def test_same_name_from_two_vocabularies_is_a_conflict(build_store):
    base = {
        "iri": "http://example.com/base#",
        "prefix": "base",
        "entities": {"B": {"kind": "aspect"}},
        "properties": {"size": {"kind": "scalar", "domains": ["B"], "ranges": ["xsd:int"]}},
    }
    derived = {
        "iri": "http://example.com/derived#",
        "prefix": "derived",
        "imports": ["http://example.com/base#"],
        "entities": {"A": {"kind": "concept", "specializes": ["base:B"]}},
        "properties": {"size": {"kind": "scalar", "domains": ["A"], "ranges": ["xsd:string"]}},
    }
    store = build_store(base, derived)

    with pytest.raises(SchemaConflictError) as error:
        AttributeCollector(store).collect_properties("http://example.com/derived#A")

    message = str(error.value)
    assert "derived:size" in message
    assert "base:size" in message
    assert "derived:A" in message
    assert error.value.first_property == "derived:size"
    assert error.value.second_property == "base:size"
