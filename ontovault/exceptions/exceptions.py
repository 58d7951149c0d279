from typing import List, Optional


class OntoVaultError(Exception):
    """Base class for ontovault errors."""

    def __init__(self, message: str, name: str = "OntoVaultError"):
        self.message = message
        self.name = name
        super().__init__(self.message)


class ModelLoadError(OntoVaultError):
    """
    The input model could not be read or failed structural validation.

    Carries every accumulated problem, not just the first one.
    """

    def __init__(self, problems: List[str], name: str = "ModelLoadError"):
        self.problems = list(problems)
        message = "\n".join(self.problems) if self.problems else "Model failed to load"
        super().__init__(message, name)


class PrefixConflictError(OntoVaultError):
    """Two processed vocabularies share a namespace prefix."""

    def __init__(self, prefix: str, name: str = "PrefixConflictError"):
        self.prefix = prefix
        super().__init__(
            f"The ontology prefix '{prefix}' is used more than once in this vocabulary bundle",
            name,
        )


class SchemaConflictError(OntoVaultError):
    """Two distinct properties project onto the same field name of one entity."""

    def __init__(
        self,
        first_property: str,
        second_property: str,
        entity: str,
        name: str = "SchemaConflictError",
    ):
        self.first_property = first_property
        self.second_property = second_property
        self.entity = entity
        super().__init__(
            f"Property {first_property} has the same name as {second_property} "
            f"in the context of entity {entity}",
            name,
        )


class OutputWriteError(OntoVaultError, OSError):
    """A generated file or its directory could not be written."""

    def __init__(
        self,
        path: str,
        cause: Optional[BaseException] = None,
        name: str = "OutputWriteError",
    ):
        self.path = str(path)
        self.cause = cause
        reason = f": {cause}" if cause is not None else ""
        super().__init__(f"Error writing to file {self.path}{reason}", name)


class OutputReadError(OntoVaultError, OSError):
    """A previously generated file could not be read back for merging."""

    def __init__(
        self,
        path: str,
        cause: Optional[BaseException] = None,
        name: str = "OutputReadError",
    ):
        self.path = str(path)
        self.cause = cause
        reason = f": {cause}" if cause is not None else ""
        super().__init__(f"Error reading file {self.path}{reason}", name)
