from ontovault.modules.projection.RangeResolver import RangeResolver

NS = "http://example.com/fleet#"


def fleet_vocabulary(functional=False, restriction_kind="all"):
    return {
        "iri": NS,
        "prefix": "fleet",
        "entities": {
            "Vehicle": {"kind": "concept"},
            "Car": {"kind": "concept", "specializes": ["Vehicle"]},
            "Truck": {"kind": "concept", "specializes": ["Vehicle"]},
            "Garage": {"kind": "concept"},
            "CarPark": {
                "kind": "concept",
                "specializes": ["Garage"],
                "restrictions": [
                    {"property": "holds", "kind": restriction_kind, "range": "Car"},
                ],
            },
            "SmallCarPark": {"kind": "concept", "specializes": ["CarPark"]},
        },
        "properties": {
            "holds": {
                "kind": "relation",
                "functional": functional,
                "domains": ["Garage"],
                "ranges": ["Vehicle"],
            },
            "hasCapacity": {
                "kind": "scalar",
                "functional": True,
                "domains": ["Garage"],
                "ranges": ["xsd:int", "xsd:integer"],
            },
        },
    }


def resolver_for(build_store, **options):
    store = build_store(fleet_vocabulary(**options))
    return store, RangeResolver(store)


def test_declared_range_applies_without_restrictions(build_store):
    store, resolver = resolver_for(build_store)
    holds = store.semantic_property(NS + "holds")

    assert resolver.resolve_range(NS + "Garage", holds) == {NS + "Vehicle", NS + "Car", NS + "Truck"}


def test_all_restriction_takes_precedence_over_declared_range(build_store):
    store, resolver = resolver_for(build_store)
    holds = store.semantic_property(NS + "holds")

    assert resolver.resolve_range(NS + "CarPark", holds) == {NS + "Car"}


def test_restriction_is_inherited_by_subtypes(build_store):
    store, resolver = resolver_for(build_store)
    holds = store.semantic_property(NS + "holds")

    assert resolver.resolve_range(NS + "SmallCarPark", holds) == {NS + "Car"}


def test_some_restriction_ignored_on_non_functional_property(build_store):
    store, resolver = resolver_for(build_store, functional=False, restriction_kind="some")
    holds = store.semantic_property(NS + "holds")

    assert resolver.restricted_ranges(NS + "CarPark", holds) == frozenset()
    assert resolver.resolve_range(NS + "CarPark", holds) == {NS + "Vehicle", NS + "Car", NS + "Truck"}


def test_some_restriction_applies_on_functional_property(build_store):
    store, resolver = resolver_for(build_store, functional=True, restriction_kind="some")
    holds = store.semantic_property(NS + "holds")

    assert resolver.resolve_range(NS + "CarPark", holds) == {NS + "Car"}


def test_scalar_ranges_are_not_reduced(build_store):
    store, resolver = resolver_for(build_store)
    capacity = store.semantic_property(NS + "hasCapacity")
    xsd = "http://www.w3.org/2001/XMLSchema#"

    assert resolver.resolve_range(NS + "Garage", capacity) == {xsd + "int", xsd + "integer"}


def test_resolve_types_reduces_entity_sets(build_store):
    _, resolver = resolver_for(build_store)

    assert resolver.resolve_types([NS + "Vehicle", NS + "Truck"]) == {NS + "Truck"}
    assert resolver.resolve_types([]) == frozenset()
