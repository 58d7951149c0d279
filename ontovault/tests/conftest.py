import logging

import pytest

from ontovault.modules.ontology.loaders.OntologyLoader import OntologyLoader, build_model_store
from ontovault.shared.logging_utils import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo handlers and propagation changes made by CLI runs"""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def build_store():
    """Factory building a ModelStore (built-ins included) from vocabulary dictionaries"""

    def _build(*vocabularies, validate=True):
        loaded = [
            OntologyLoader.load_from_dict(data, source=f"<{data.get('prefix')}>")
            for data in vocabularies
        ]
        return build_model_store(loaded, validate=validate)

    return _build


@pytest.fixture
def mission_vocabulary():
    """A small vocabulary touching every kind of member"""
    return {
        "iri": "http://example.com/mission#",
        "prefix": "mission",
        "entities": {
            "IdentifiedThing": {"kind": "aspect"},
            "Component": {
                "kind": "concept",
                "specializes": ["IdentifiedThing"],
                "annotations": {"obsidian:hasIcon": "box"},
            },
            "Assembly": {"kind": "concept", "specializes": ["Component"]},
            "Function": {"kind": "concept", "specializes": ["IdentifiedThing"]},
            "Performs": {
                "kind": "relation_entity",
                "sources": ["Component"],
                "targets": ["Function"],
                "forward": "performs",
                "reverse": "isPerformedBy",
            },
            "Draft": {
                "kind": "concept",
                "annotations": {"obsidian:ignore": True},
            },
        },
        "scalars": {
            "Color": {"specializes": ["xsd:string"], "literals": ["red", "green", "blue"]},
        },
        "properties": {
            "hasId": {
                "kind": "scalar",
                "functional": True,
                "domains": ["IdentifiedThing"],
                "ranges": ["xsd:string"],
                "annotations": {"rdfs:label": "Identifier", "rdfs:comment": "Unique id"},
            },
            "hasMass": {
                "kind": "scalar",
                "functional": True,
                "domains": ["Component"],
                "ranges": ["xsd:decimal"],
            },
            "hasColor": {
                "kind": "scalar",
                "domains": ["Component"],
                "ranges": ["Color"],
            },
            "isDeployed": {
                "kind": "scalar",
                "functional": True,
                "domains": ["Component"],
                "ranges": ["xsd:boolean"],
            },
            "launchedAt": {
                "kind": "scalar",
                "functional": True,
                "domains": ["Assembly"],
                "ranges": ["xsd:dateTimeStamp"],
            },
            "hasNote": {
                "kind": "scalar",
                "ranges": ["xsd:string"],
            },
            "contains": {
                "kind": "relation",
                "domains": ["Assembly"],
                "ranges": ["Component"],
            },
        },
    }
