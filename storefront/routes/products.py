"""Catalog API routes for the storefront"""

from typing import Optional
from fastapi import APIRouter, HTTPException, Query, Depends

from ..core.session import SessionManager
from ..models.product import (
    ALL,
    Item,
    ItemView,
    FacetsResponse,
    CatalogSearchResponse,
)
from .deps import get_session_manager

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("", response_model=CatalogSearchResponse)
async def search_items(
    query: Optional[str] = Query(None, description="Search name, subtitle and tags"),
    category: str = Query(ALL, description="Category facet"),
    type: str = Query(ALL, description="Type facet"),
    sessions: SessionManager = Depends(get_session_manager),
):
    """
    Filter the catalog.

    Out-of-stock items are listed too; they just cannot be added.
    """
    catalog = sessions.catalog
    items = catalog.search_items(query=query, category=category, type=type)

    return CatalogSearchResponse(
        items=[ItemView.from_item(item) for item in items],
        total=len(items),
        query=query or "",
        category=category,
        type=type,
        facets=FacetsResponse(categories=catalog.categories(), types=catalog.types()),
    )


@router.get("/facets", response_model=FacetsResponse)
async def list_facets(sessions: SessionManager = Depends(get_session_manager)):
    """List category and type facets"""
    return FacetsResponse(
        categories=sessions.catalog.categories(),
        types=sessions.catalog.types(),
    )


@router.get("/{item_id}", response_model=Item)
async def get_item(
    item_id: str,
    sessions: SessionManager = Depends(get_session_manager),
):
    """Get an item by ID"""
    item = sessions.catalog.get_item(item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")
    return item
