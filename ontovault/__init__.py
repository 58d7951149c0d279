from ontovault.version import get_ontovault_version

__version__ = get_ontovault_version()
