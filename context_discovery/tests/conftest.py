"""
Shared factories for engine tests
"""

import pytest

from context_discovery.types import CatalogEntity, EntityKind


@pytest.fixture
def make_component():
    """Component entity factory"""

    def _make(name, system=None, domain=None, owner=None, provides=(), consumes=(), annotations=None, component_type="service"):
        return CatalogEntity(
            kind=EntityKind.COMPONENT,
            name=name,
            groupKey=system,
            domainAnnotation=domain,
            ownerTeam=owner,
            sourceAnnotations=dict(annotations or {}),
            providesApiRefs=tuple(provides),
            consumesApiRefs=tuple(consumes),
            componentType=component_type,
        )

    return _make


@pytest.fixture
def make_api():
    """API entity factory"""

    def _make(name, api_type="openapi", system=None):
        return CatalogEntity(kind=EntityKind.API, name=name, apiType=api_type, groupKey=system)

    return _make


@pytest.fixture
def make_system():
    """System entity factory"""

    def _make(name, domain=None, description=None):
        return CatalogEntity(kind=EntityKind.SYSTEM, name=name, domain=domain, description=description)

    return _make
