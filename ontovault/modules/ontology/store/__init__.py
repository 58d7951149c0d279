from ontovault.modules.ontology.store.ModelStore import ModelStore, ResolvedRestriction

__all__ = ["ModelStore", "ResolvedRestriction"]
