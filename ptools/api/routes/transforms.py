"""API routes for the transform catalog.

Serves transform definitions and their option schemas so a front end can
build a card (and its input controls) for each transform. Transforms are
executed by the client session, never by this service.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from ptools.options import OptionKind, OptionSpec
from ptools.transforms.registry import get_transform_registry
from ptools.transforms.schemas import TransformDetail, TransformSummary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transforms", tags=["transforms"])


# ── Helper ───────────────────────────────────────────────


def _get_or_404(name: str) -> TransformDetail:
    """Get a transform detail by name or raise 404."""
    registry = get_transform_registry()
    detail = registry.get_detail(name)
    if detail is None:
        available = registry.list_names()
        raise HTTPException(
            status_code=404,
            detail=f"Transform '{name}' not found. Available: {available}",
        )
    return detail


# ── List endpoint ────────────────────────────────────────


@router.get("", response_model=list[TransformSummary])
async def list_transforms(
    option_kind: Optional[OptionKind] = Query(
        None, description="Only transforms with an option of this kind"
    ),
):
    """List all transforms in display order."""
    registry = get_transform_registry()
    summaries = registry.list_summaries()
    if option_kind is None:
        return summaries

    return [
        s for s in summaries
        if any(spec.kind == option_kind for spec in registry.get(s.name).option_schema)
    ]


# ── Detail endpoints ─────────────────────────────────────


@router.get("/{name}", response_model=TransformDetail)
async def get_transform(name: str):
    """Get a single transform with its full option schema."""
    return _get_or_404(name)


@router.get("/{name}/options", response_model=list[OptionSpec])
async def get_transform_options(name: str):
    """Get just the option schema of a transform, in display order."""
    return _get_or_404(name).option_schema
