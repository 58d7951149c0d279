from ontovault.modules.ontology.validation.OntologyValidator import (
    OntologyValidator,
    ValidationResult,
)
