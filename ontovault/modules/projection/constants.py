"""Fixed values of the generated vault documents."""

# Front matter delimiter line
FRONT_MATTER_MARKER = "---"

# Structural defaults of a class document, in output order
CLASS_DOCUMENT_DEFAULTS = {
    "version": "2.1",
    "limit": 20,
    "mapWithTag": True,
}

CLASS_DOCUMENT_EMPTY_KEYS = [
    "tagNames",
    "filesPaths",
    "bookmarksGroups",
    "excludes",
    "extends",
    "savedViews",
    "favoriteView",
    "fieldsOrder",
]

# Keys among the empty ones that hold an empty list rather than nothing
CLASS_DOCUMENT_LIST_KEYS = {"savedViews", "fieldsOrder"}

# Body written below a new template's header
DEFAULT_TEMPLATE_BODY = "# Tags\n`= this.tags`\n"

# Template key holding the entity tag
TAGS_FIELD_NAME = "tags"

SOURCE_FIELD_NAME = "hasSource"
TARGET_FIELD_NAME = "hasTarget"

# Identifier offsets of the synthetic source/target fields from the entity name hash
SOURCE_FIELD_OFFSET = 1
TARGET_FIELD_OFFSET = 2

CLASS_FILE_SUFFIX = ".md"
TEMPLATE_FILE_PREFIX = "New "
