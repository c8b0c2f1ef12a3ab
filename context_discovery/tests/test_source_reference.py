"""
Source reference resolution tests
"""

from context_discovery.source_reference import (
    PROJECT_SLUG_ANNOTATION,
    REPOSITORY_URL_ANNOTATIONS,
    SOURCE_LOCATION_ANNOTATION,
    parse_github_url,
    resolve_source_reference,
    resolve_source_url,
)


def test_project_slug_builds_github_url():
    ref = resolve_source_reference({PROJECT_SLUG_ANNOTATION: "mybank/payment-gateway"})

    assert ref.url == "https://github.com/mybank/payment-gateway"
    assert ref.org == "mybank"
    assert ref.repo == "payment-gateway"
    assert ref.path is None


def test_project_slug_wins_over_source_location():
    url = resolve_source_url({
        SOURCE_LOCATION_ANNOTATION: "url:https://github.com/other/repo",
        PROJECT_SLUG_ANNOTATION: "mybank/payments",
    })
    assert url == "https://github.com/mybank/payments"


def test_source_location_prefixes_are_stripped():
    assert resolve_source_url({SOURCE_LOCATION_ANNOTATION: "url:https://github.com/acme/orders"}) == "https://github.com/acme/orders"
    assert resolve_source_url({SOURCE_LOCATION_ANNOTATION: "github:https://github.com/acme/orders"}) == "https://github.com/acme/orders"


def test_source_location_prefix_keeps_non_github_url():
    ref = resolve_source_reference({SOURCE_LOCATION_ANNOTATION: "url:https://gitlab.example.com/acme/orders"})

    assert ref.url == "https://gitlab.example.com/acme/orders"
    assert ref.org is None
    assert ref.repo is None


def test_bare_github_url_in_repository_annotation():
    url = resolve_source_url({"github.com/repository-url": "https://github.com/acme/billing.git"})
    assert url == "https://github.com/acme/billing.git"
    assert SOURCE_LOCATION_ANNOTATION in REPOSITORY_URL_ANNOTATIONS


def test_bare_source_location_wins_over_other_repository_annotations():
    url = resolve_source_url({
        "backstage.io/source-url": "https://github.com/acme/other",
        SOURCE_LOCATION_ANNOTATION: "https://github.com/acme/orders",
    })
    assert url == "https://github.com/acme/orders"


def test_link_annotations_are_not_a_source():
    annotations = {
        "backstage.io/view-url": "https://github.com/acme/other/blob/main/catalog-info.yaml",
        "backstage.io/edit-url": "https://github.com/acme/other/edit/main/catalog-info.yaml",
    }
    assert resolve_source_url(annotations) is None


def test_schemeless_github_location_gets_https():
    ref = resolve_source_reference({SOURCE_LOCATION_ANNOTATION: "github.com/acme/orders"})

    assert ref.url == "https://github.com/acme/orders"
    assert ref.org == "acme"
    assert ref.repo == "orders"
    assert resolve_source_url({SOURCE_LOCATION_ANNOTATION: "gitlab.com/acme/github.com"}) is None


def test_malformed_slug_falls_through():
    assert resolve_source_url({PROJECT_SLUG_ANNOTATION: "not a slug"}) is None


def test_no_annotations_means_no_source():
    assert resolve_source_url({}) is None
    assert resolve_source_url(None) is None
    ref = resolve_source_reference({"backstage.io/techdocs-ref": "dir:."})
    assert ref.url is None and ref.org is None


def test_parse_strips_git_suffix_and_handles_ssh():
    ref = parse_github_url("git@github.com:acme/billing.git")
    assert (ref.org, ref.repo) == ("acme", "billing")


def test_parse_tree_path():
    ref = parse_github_url("https://github.com/acme/platform/tree/main/services/payments/")

    assert ref.org == "acme"
    assert ref.repo == "platform"
    assert ref.path == "services/payments"


def test_parse_unmatched_url_is_soft_failure():
    ref = parse_github_url("https://github.com/acme")

    assert ref.url == "https://github.com/acme"
    assert ref.org is None
    assert ref.repo is None
