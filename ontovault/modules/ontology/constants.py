"""Well-known vocabularies and members the projection relies on."""

OWL_IRI = "http://www.w3.org/2002/07/owl"
XSD_IRI = "http://www.w3.org/2001/XMLSchema"
RDF_IRI = "http://www.w3.org/1999/02/22-rdf-syntax-ns"
RDFS_IRI = "http://www.w3.org/2000/01/rdf-schema"
SWRLB_IRI = "http://www.w3.org/2003/11/swrlb"
OBSIDIAN_IRI = "http://opencaesar.io/obsidian"

# Vocabularies never projected into documents
BUILT_IN_NAMESPACES = [
    XSD_IRI + "#",
    RDF_IRI + "#",
    RDFS_IRI + "#",
    OWL_IRI + "#",
    SWRLB_IRI + "#",
]

# Packaged vocabularies whose prefixes every vocabulary may use without importing them
IMPLICIT_IMPORTS = [OWL_IRI, XSD_IRI, RDF_IRI, RDFS_IRI, OBSIDIAN_IRI]

BOOLEAN_SCALAR = XSD_IRI + "#boolean"
DATETIME_SCALAR = XSD_IRI + "#dateTime"
REAL_SCALAR = OWL_IRI + "#real"
THING_ASPECT = OWL_IRI + "#Thing"

HAS_ICON_ANNOTATION = OBSIDIAN_IRI + "#hasIcon"
IGNORE_ANNOTATION = "obsidian:ignore"
LABEL_ANNOTATION = "rdfs:label"
COMMENT_ANNOTATION = "rdfs:comment"
