from ontovault.modules.projection.models.VaultDocument import (
    FieldType,
    FieldDescriptor,
    BodySection,
    ClassDocument,
    TemplateDocument,
)
