"""
Context discovery — bounded context grouping

Partitions Component entities into bounded contexts keyed by their declared
system, falling back to the domain annotation and finally to a shared default
bucket for orphan components.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from .source_reference import resolve_source_reference
from .types import ApiReference, BoundedContext, CatalogEntity, ComponentReference

DEFAULT_CONTEXT_ID = "default-context"


def select_context_key(component: CatalogEntity) -> str:
    """
    Bounded context id for a component.

    Priority: declared system (group key) > domain annotation > DEFAULT_CONTEXT_ID.
    """
    for candidate in (component.groupKey, component.domainAnnotation):
        if candidate:
            return candidate
    return DEFAULT_CONTEXT_ID


def format_display_name(context_id: str) -> str:
    """``payment-core`` -> ``Payment Core``"""
    return " ".join(word[:1].upper() + word[1:] for word in context_id.split("-"))


def api_name_from_ref(api_ref: str) -> str:
    """Accepts both ``api:default/name`` and plain ``name`` references."""
    return api_ref.split("/")[-1]


class ContextGrouper:
    """Builds BoundedContext objects from a component/API snapshot."""

    def __init__(self, systems: Sequence[CatalogEntity] = ()):
        """
        Args:
            systems: optional System entities; used only to fill in the domain
                and description of contexts whose id matches a system name.
        """
        self._systems: Dict[str, CatalogEntity] = {}
        for system in systems:
            self._systems.setdefault(system.name, system)

    def group(self, components: Iterable[CatalogEntity], apis: Iterable[CatalogEntity]) -> List[BoundedContext]:
        api_index: Dict[str, CatalogEntity] = {}
        for api in apis:
            api_index.setdefault(api.name, api)

        contexts: Dict[str, BoundedContext] = {}
        for component in components:
            context_id = select_context_key(component)
            context = contexts.get(context_id)
            if context is None:
                context = BoundedContext(id=context_id, displayName=format_display_name(context_id))
                contexts[context_id] = context

            self._add_component(context, component)
            self._add_apis(context.providedApis, component.providesApiRefs, api_index)
            self._add_apis(context.consumedApis, component.consumesApiRefs, api_index)

            if component.domainAnnotation and not context.domain:
                context.domain = component.domainAnnotation
            if component.ownerTeam and not context.ownerTeam:
                context.ownerTeam = component.ownerTeam

        for context in contexts.values():
            self._apply_system(context)

        return list(contexts.values())

    # ==========================================
    # helpers
    # ==========================================

    @staticmethod
    def _add_component(context: BoundedContext, component: CatalogEntity) -> None:
        source = resolve_source_reference(component.sourceAnnotations)
        context.components.append(
            ComponentReference(
                name=component.name,
                entityRef=component.entity_ref,
                componentType=component.componentType,
                sourceUrl=source.url,
                sourceOrg=source.org,
                sourceRepo=source.repo,
                sourcePath=source.path,
            )
        )
        if source.url and not context.sourceUrl:
            context.sourceUrl = source.url

    @staticmethod
    def _add_apis(
        target: List[ApiReference],
        api_refs: Iterable[str],
        api_index: Dict[str, CatalogEntity],
    ) -> None:
        for api_ref in api_refs:
            api_name = api_name_from_ref(api_ref)
            api = api_index.get(api_name)
            # Unknown APIs are dropped: the catalog may be mid-refresh.
            if api is None:
                continue
            if any(existing.name == api_name for existing in target):
                continue
            target.append(ApiReference(name=api_name, entityRef=api_ref, apiType=api.apiType))

    def _apply_system(self, context: BoundedContext) -> None:
        system: Optional[CatalogEntity] = self._systems.get(context.id)
        if system is None:
            return
        if not context.domain and system.domain:
            context.domain = system.domain
        if not context.description and system.description:
            context.description = system.description


def group_components(
    components: Iterable[CatalogEntity],
    apis: Iterable[CatalogEntity],
    systems: Sequence[CatalogEntity] = (),
) -> List[BoundedContext]:
    return ContextGrouper(systems).group(components, apis)
