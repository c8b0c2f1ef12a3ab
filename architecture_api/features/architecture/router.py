"""
Architecture API (feature router)

- Bounded context discovery from the entity catalog
- Context relationships inferred from provided/consumed APIs
- Per-context analysis and dependency lists
"""

from __future__ import annotations

from fastapi import APIRouter

from .routes.context_map import router as context_map_router
from .routes.contexts import router as contexts_router

router = APIRouter(prefix="/api/architecture", tags=["architecture"])

router.include_router(context_map_router)
router.include_router(contexts_router)
