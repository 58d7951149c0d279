import logging

import pytest

from ontovault.exceptions import (
    OntoVaultError,
    OutputReadError,
    OutputWriteError,
    PrefixConflictError,
    SchemaConflictError,
)
from ontovault.modules.projection.ProjectionDriver import ProjectionDriver, generate
from ontovault.modules.projection.projection_config import ProjectionConfig


def run_driver(store, tmp_path, templates_path=None):
    driver = ProjectionDriver(
        store,
        classes_dir=tmp_path / "Classes",
        templates_dir=tmp_path / "Templates",
        templates_path=templates_path,
    )
    return driver.run()


def read(path):
    with open(path, "r", encoding="utf-8", newline="") as file:
        return file.read()


def test_writes_class_and_template_per_generatable_entity(build_store, mission_vocabulary, tmp_path):
    report = run_driver(build_store(mission_vocabulary), tmp_path)

    classes = sorted(p.name for p in (tmp_path / "Classes" / "mission").iterdir())
    templates = sorted(p.name for p in (tmp_path / "Templates" / "mission").iterdir())

    # Aspects and ignored entities get no documents
    assert classes == ["Assembly.md", "Component.md", "Function.md", "Performs.md"]
    assert templates == ["New Assembly.md", "New Component.md", "New Function.md", "New Performs.md"]
    assert report.entity_count == 4
    assert report.merged_template_files == []


def test_built_in_vocabularies_are_not_projected(build_store, mission_vocabulary, tmp_path):
    run_driver(build_store(mission_vocabulary), tmp_path)

    assert [p.name for p in (tmp_path / "Classes").iterdir()] == ["mission"]


def test_new_template_gets_default_body(build_store, mission_vocabulary, tmp_path):
    run_driver(build_store(mission_vocabulary), tmp_path)

    text = read(tmp_path / "Templates" / "mission" / "New Function.md")
    assert text.startswith("---\ntags:\n- mission/Function\n")
    assert text.endswith("---\n# Tags\n`= this.tags`\n")


def test_regeneration_is_byte_identical(build_store, mission_vocabulary, tmp_path):
    store = build_store(mission_vocabulary)
    run_driver(store, tmp_path)
    first = {p: read(p) for p in tmp_path.rglob("*.md")}

    report = run_driver(store, tmp_path)
    second = {p: read(p) for p in tmp_path.rglob("*.md")}

    assert first == second
    assert len(report.merged_template_files) == 4


def test_regeneration_keeps_user_body(build_store, mission_vocabulary, tmp_path):
    store = build_store(mission_vocabulary)
    run_driver(store, tmp_path)
    template = tmp_path / "Templates" / "mission" / "New Component.md"
    with open(template, "a", encoding="utf-8") as file:
        file.write("- custom note\n")

    mission_vocabulary["properties"]["hasSerial"] = {
        "kind": "scalar",
        "functional": True,
        "domains": ["Component"],
        "ranges": ["xsd:string"],
    }
    run_driver(build_store(mission_vocabulary), tmp_path)

    text = read(template)
    assert "hasSerial:\n" in text
    assert text.endswith("---\n# Tags\n`= this.tags`\n- custom note\n")


def test_class_documents_are_overwritten(build_store, mission_vocabulary, tmp_path):
    store = build_store(mission_vocabulary)
    run_driver(store, tmp_path)
    class_file = tmp_path / "Classes" / "mission" / "Function.md"
    with open(class_file, "a", encoding="utf-8") as file:
        file.write("user edit\n")

    run_driver(store, tmp_path)

    assert "user edit" not in read(class_file)


def test_templates_path_defaults_to_templates_folder_name(build_store, mission_vocabulary, tmp_path):
    run_driver(build_store(mission_vocabulary), tmp_path)

    assert '!"Templates"' in read(tmp_path / "Classes" / "mission" / "Assembly.md")


def test_templates_path_override(build_store, mission_vocabulary, tmp_path):
    run_driver(build_store(mission_vocabulary), tmp_path, templates_path="meta/templates")

    assert '!"meta/templates"' in read(tmp_path / "Classes" / "mission" / "Assembly.md")


def test_duplicate_prefix_is_rejected(build_store, tmp_path):
    first = {"iri": "http://example.com/one#", "prefix": "dup", "entities": {"A": {"kind": "concept"}}}
    second = {"iri": "http://example.com/two#", "prefix": "dup", "entities": {"B": {"kind": "concept"}}}

    with pytest.raises(PrefixConflictError) as error:
        run_driver(build_store(first, second), tmp_path)

    assert "'dup'" in str(error.value)


def test_name_conflict_aborts_before_writing_vocabulary(build_store, tmp_path):
    store = build_store(
        {
            "iri": "http://example.com/base#",
            "prefix": "base",
            "entities": {"B": {"kind": "aspect"}},
            "properties": {"size": {"kind": "scalar", "domains": ["B"], "ranges": ["xsd:int"]}},
        },
        {
            "iri": "http://example.com/c#",
            "prefix": "c",
            "imports": ["http://example.com/base#"],
            "entities": {
                "A": {"kind": "concept", "specializes": ["base:B"]},
                "Other": {"kind": "concept"},
            },
            "properties": {"size": {"kind": "scalar", "domains": ["A"], "ranges": ["xsd:string"]}},
        },
    )
    with pytest.raises(SchemaConflictError):
        run_driver(store, tmp_path)

    assert not (tmp_path / "Classes" / "c").exists()


def test_write_failure_is_wrapped(build_store, mission_vocabulary, tmp_path):
    blocker = tmp_path / "Classes"
    blocker.write_text("not a folder", encoding="utf-8")

    with pytest.raises(OutputWriteError) as error:
        run_driver(build_store(mission_vocabulary), tmp_path)

    assert "Classes" in error.value.path
    assert isinstance(error.value, OSError)


def test_generate_from_catalog(tmp_path):
    source = tmp_path / "src" / "example.com"
    source.mkdir(parents=True)
    (source / "shop.yaml").write_text(
        "iri: http://example.com/shop#\n"
        "prefix: shop\n"
        "entities:\n"
        "  Product: {kind: concept}\n"
        "properties:\n"
        "  price: {kind: scalar, functional: true, domains: [Product], ranges: [xsd:double]}\n",
        encoding="utf-8",
    )
    catalog = tmp_path / "catalog.xml"
    catalog.write_text(
        '<?xml version="1.0"?>\n'
        '<catalog xmlns="urn:oasis:names:tc:entity:xmlns:xml:catalog">\n'
        '  <rewriteURI uriStartString="http://example.com/" rewritePrefix="src/example.com/"/>\n'
        "</catalog>\n",
        encoding="utf-8",
    )
    config = ProjectionConfig(
        catalog_path=catalog,
        root_iri="http://example.com/shop",
        classes_dir=tmp_path / "vault" / "Classes",
        templates_dir=tmp_path / "vault" / "Templates",
    )

    report = generate(config)

    assert report.class_files == [tmp_path / "vault" / "Classes" / "shop" / "Product.md"]
    assert "price:\n" in read(tmp_path / "vault" / "Templates" / "shop" / "New Product.md")


def test_unreadable_template_is_wrapped(build_store, mission_vocabulary, tmp_path):
    store = build_store(mission_vocabulary)
    run_driver(store, tmp_path)
    template = tmp_path / "Templates" / "mission" / "New Component.md"
    template.write_bytes(b"---\nx: 1\n---\n\xff\xfe bad")

    with pytest.raises(OutputReadError) as error:
        run_driver(store, tmp_path)

    assert isinstance(error.value, OntoVaultError)
    assert error.value.path == str(template)
    assert "New Component.md" in str(error.value)


def test_reserved_field_name_aborts_before_writing(build_store, tmp_path):
    store = build_store({
        "iri": "http://example.com/g#",
        "prefix": "g",
        "entities": {"A": {"kind": "concept"}, "B": {"kind": "concept"}},
        "properties": {
            "tags": {"kind": "scalar", "domains": ["B"], "ranges": ["xsd:string"]},
        },
    })

    with pytest.raises(SchemaConflictError):
        run_driver(store, tmp_path)

    assert not (tmp_path / "Classes" / "g").exists()


def test_omitted_field_is_reported_once_per_entity(build_store, tmp_path, caplog):
    store = build_store({
        "iri": "http://example.com/m#",
        "prefix": "m",
        "entities": {"Marker": {"kind": "aspect"}, "Part": {"kind": "concept"}},
        "properties": {
            "marks": {"kind": "relation", "domains": ["Part"], "ranges": ["Marker"]},
        },
    })

    with caplog.at_level(logging.WARNING, logger="ontovault"):
        run_driver(store, tmp_path)

    warnings = [r for r in caplog.records if "'marks' omitted" in r.getMessage()]
    assert len(warnings) == 1, f"{[r.getMessage() for r in warnings] = }"
