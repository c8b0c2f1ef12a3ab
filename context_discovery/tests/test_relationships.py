"""
Relationship inference and classification tests
"""

import pytest

from context_discovery.grouping import group_components
from context_discovery.relationships import (
    aggregate_relationships,
    classify_relationship,
    infer_relationships,
)
from context_discovery.types import (
    ApiReference,
    BoundedContext,
    ContextRelationshipType,
    RelationshipStrength,
)


def _context(context_id, domain=None, provides=(), consumes=()):
    return BoundedContext(
        id=context_id,
        displayName=context_id,
        domain=domain,
        providedApis=[ApiReference(name=n, entityRef=f"api:default/{n}", apiType=t) for n, t in provides],
        consumedApis=[ApiReference(name=n, entityRef=f"api:default/{n}", apiType=t) for n, t in consumes],
    )


def test_payment_order_scenario(make_component, make_api):
    components = [
        make_component("payment-gateway", system="payment-core", provides=["pay-api"]),
        make_component("order-api", system="order-core", consumes=["pay-api"]),
    ]
    contexts = group_components(components, [make_api("pay-api", api_type="openapi")])

    relationships = infer_relationships(contexts)

    assert len(relationships) == 1
    rel = relationships[0]
    assert rel.upstreamContextId == "payment-core"
    assert rel.downstreamContextId == "order-core"
    assert rel.relationshipType is ContextRelationshipType.OPEN_HOST_SERVICE
    assert rel.viaApis == ("pay-api",)
    assert rel.strength is RelationshipStrength.MEDIUM
    assert rel.id == "rel-1"


def test_self_consumption_is_not_a_relationship():
    contexts = [_context("core", provides=[("x", "openapi")], consumes=[("x", "openapi")])]

    assert infer_relationships(contexts) == []


def test_no_provider_no_relationship():
    contexts = [_context("a", consumes=[("orphan-api", "openapi")]), _context("b")]

    assert infer_relationships(contexts) == []


def test_multiple_apis_between_same_pair_are_not_merged():
    contexts = [
        _context("up", provides=[("one", "openapi"), ("two", "asyncapi")]),
        _context("down", consumes=[("one", "openapi"), ("two", "asyncapi")]),
    ]

    relationships = infer_relationships(contexts)

    assert [(r.id, r.viaApis) for r in relationships] == [
        ("rel-1", ("api:default/one",)),
        ("rel-2", ("api:default/two",)),
    ]
    assert relationships[1].relationshipType is ContextRelationshipType.CUSTOMER_SUPPLIER


def test_first_provider_in_context_order_wins():
    contexts = [
        _context("first", provides=[("dup", "openapi")]),
        _context("second", provides=[("dup", "openapi")]),
        _context("consumer", consumes=[("dup", "openapi")]),
    ]

    (rel,) = infer_relationships(contexts)
    assert rel.upstreamContextId == "first"


def test_consumer_that_is_first_provider_gets_no_edge():
    # "other" also provides dup, but only the first provider in context order counts
    contexts = [
        _context("self", provides=[("dup", "openapi")], consumes=[("dup", "openapi")]),
        _context("other", provides=[("dup", "openapi")]),
    ]

    assert infer_relationships(contexts) == []


def test_no_relationship_points_at_itself():
    contexts = [
        _context("a", domain="d", provides=[("a-api", "openapi")], consumes=[("b-api", "grpc"), ("a-api", "openapi")]),
        _context("b", domain="d", provides=[("b-api", "grpc")], consumes=[("a-api", "openapi"), ("b-api", "grpc")]),
    ]

    relationships = infer_relationships(contexts)

    assert len(relationships) == 2
    assert all(r.upstreamContextId != r.downstreamContextId for r in relationships)


@pytest.mark.parametrize("api_type", ["openapi", "grpc", "graphql", None])
def test_shared_domain_is_always_shared_kernel(api_type):
    upstream = _context("up", domain="banking-core")
    downstream = _context("down", domain="banking-core")
    api = ApiReference(name="x", entityRef="x", apiType=api_type)

    assert classify_relationship(upstream, downstream, api) is ContextRelationshipType.SHARED_KERNEL


def test_missing_domains_are_not_a_shared_kernel():
    api = ApiReference(name="x", entityRef="x", apiType="asyncapi")

    assert classify_relationship(_context("up"), _context("down"), api) is ContextRelationshipType.CUSTOMER_SUPPLIER


def test_open_host_service_for_published_protocols():
    upstream = _context("up", domain="payments")
    downstream = _context("down", domain="lending")

    grpc = ApiReference(name="x", entityRef="x", apiType="grpc")
    rest = ApiReference(name="y", entityRef="y", apiType="openapi")
    events = ApiReference(name="z", entityRef="z", apiType="asyncapi")

    assert classify_relationship(upstream, downstream, grpc) is ContextRelationshipType.OPEN_HOST_SERVICE
    assert classify_relationship(upstream, downstream, rest) is ContextRelationshipType.OPEN_HOST_SERVICE
    assert classify_relationship(upstream, downstream, events) is ContextRelationshipType.CUSTOMER_SUPPLIER


def test_taxonomy_has_all_eight_patterns():
    assert {t.value for t in ContextRelationshipType} == {
        "SHARED_KERNEL",
        "CUSTOMER_SUPPLIER",
        "CONFORMIST",
        "ANTICORRUPTION_LAYER",
        "OPEN_HOST_SERVICE",
        "PUBLISHED_LANGUAGE",
        "SEPARATE_WAYS",
        "PARTNERSHIP",
    }


def test_aggregate_relationships_groups_by_pair():
    contexts = [
        _context("up", provides=[("one", "openapi"), ("two", "asyncapi")]),
        _context("other", provides=[("three", "openapi")]),
        _context("down", consumes=[("one", "openapi"), ("three", "openapi"), ("two", "asyncapi")]),
    ]

    edges = aggregate_relationships(infer_relationships(contexts))

    assert [(e.upstreamContextId, e.downstreamContextId, e.count) for e in edges] == [
        ("up", "down", 2),
        ("other", "down", 1),
    ]
    assert edges[0].viaApis == ("api:default/one", "api:default/two")
    assert edges[0].relationshipTypes == (
        ContextRelationshipType.OPEN_HOST_SERVICE,
        ContextRelationshipType.CUSTOMER_SUPPLIER,
    )
