"""
ontovault Catalog

Resolves vocabulary IRIs to local files using an OASIS XML catalog, the same
catalog format OML and OWL tool chains use:

    <catalog xmlns="urn:oasis:names:tc:entity:xmlns:xml:catalog">
      <rewriteURI uriStartString="http://example.com/" rewritePrefix="src/example.com/"/>
    </catalog>

Supported entries: uri, rewriteURI, rewriteSystem, nextCatalog.
"""

import xml.etree.ElementTree as ElementTree
from pathlib import Path
from typing import List, Optional, Tuple
from urllib.parse import unquote, urlparse

from ontovault.exceptions import ModelLoadError


class Catalog:
    """An XML catalog and the catalogs it delegates to"""

    def __init__(
        self,
        path: Path,
        exact: List[Tuple[str, str]],
        rewrites: List[Tuple[str, str]],
        next_catalogs: List["Catalog"],
    ):
        self.path = path
        self._exact = exact
        self._rewrites = rewrites
        self._next_catalogs = next_catalogs

    @classmethod
    def load(cls, catalog_path: str, _visited: Optional[set] = None) -> "Catalog":
        """
        Parse a catalog file.

        Raises:
            ModelLoadError: If the file is missing or not a well-formed catalog
        """
        path = Path(catalog_path).resolve()
        visited = _visited if _visited is not None else set()
        visited.add(path)

        if not path.is_file():
            raise ModelLoadError([f"Catalog file not found: {catalog_path}"])
        try:
            root = ElementTree.parse(path).getroot()
        except ElementTree.ParseError as error:
            raise ModelLoadError([f"Cannot parse catalog {catalog_path}: {error}"]) from error

        exact, rewrites, next_catalogs = [], [], []
        for element in root.iter():
            tag = _local_name(element.tag)
            if tag == "uri":
                exact.append((element.get("name", ""), element.get("uri", "")))
            elif tag in ("rewriteURI", "rewriteSystem"):
                start = element.get("uriStartString") or element.get("systemIdStartString") or ""
                rewrites.append((start, element.get("rewritePrefix", "")))
            elif tag == "nextCatalog":
                next_path = _to_path(path.parent, element.get("catalog", ""))
                if next_path.resolve() not in visited:
                    next_catalogs.append(cls.load(str(next_path), visited))

        # Longest matching prefix wins
        rewrites.sort(key=lambda entry: len(entry[0]), reverse=True)
        return cls(path, exact, rewrites, next_catalogs)

    def resolve(self, iri: str) -> Optional[Path]:
        """
        Map an IRI to a file path (without checking that it exists).

        Returns:
            The rewritten path, or None when no entry matches
        """
        for name, uri in self._exact:
            if name == iri:
                return _to_path(self.path.parent, uri)

        for start, prefix in self._rewrites:
            if start and iri.startswith(start):
                return _to_path(self.path.parent, prefix + iri[len(start):])

        for catalog in self._next_catalogs:
            resolved = catalog.resolve(iri)
            if resolved is not None:
                return resolved

        return None

    def __repr__(self) -> str:
        return f"Catalog(path='{self.path}', rewrites={len(self._rewrites)})"


def _local_name(tag: str) -> str:
    return tag.split("}", 1)[1] if tag.startswith("{") else tag


def _to_path(base: Path, reference: str) -> Path:
    """Turn a catalog reference (relative path or file: URI) into a path"""
    if reference.startswith("file:"):
        return Path(unquote(urlparse(reference).path))
    return base / unquote(reference)
