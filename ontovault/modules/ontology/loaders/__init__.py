from ontovault.modules.ontology.loaders.Catalog import Catalog
from ontovault.modules.ontology.loaders.OntologyLoader import (
    OntologyLoader,
    load_builtin_vocabularies,
    build_model_store,
    load_bundle,
)
