from fastapi import APIRouter, Depends

from emoji_map.models.filters_model import (
    ApplyFiltersRequest,
    FilteredPlacesResponse,
    FiltersResponse,
    FiltersUpdate,
)
from emoji_map.repos.cache_repo import get_cache_repo
from emoji_map.services.session_state import FiltersSessionManager, filter_places

router = APIRouter(prefix="/api/filters", tags=["filters"])

def get_filters_manager(repo=Depends(get_cache_repo)) -> FiltersSessionManager:
    return FiltersSessionManager(repo)

@router.get("/{session_id}", response_model=FiltersResponse)
async def get_filters_endpoint(session_id: str, manager: FiltersSessionManager = Depends(get_filters_manager)):
    return FiltersResponse(session_id=session_id, state=await manager.get_state(session_id))

@router.put("/{session_id}", response_model=FiltersResponse)
async def update_filters_endpoint(
    session_id: str,
    update: FiltersUpdate,
    manager: FiltersSessionManager = Depends(get_filters_manager)
):
    return FiltersResponse(session_id=session_id, state=await manager.update_state(session_id, update))

@router.post("/{session_id}/toggle/{category}", response_model=FiltersResponse)
async def toggle_category_endpoint(
    session_id: str,
    category: str,
    manager: FiltersSessionManager = Depends(get_filters_manager)
):
    return FiltersResponse(session_id=session_id, state=await manager.toggle_category(session_id, category))

@router.delete("/{session_id}", response_model=FiltersResponse)
async def reset_filters_endpoint(session_id: str, manager: FiltersSessionManager = Depends(get_filters_manager)):
    """Reset filters to defaults. Viewport and user location survive."""
    return FiltersResponse(session_id=session_id, state=await manager.reset(session_id))

@router.post("/{session_id}/apply", response_model=FilteredPlacesResponse)
async def apply_filters_endpoint(
    session_id: str,
    request: ApplyFiltersRequest,
    manager: FiltersSessionManager = Depends(get_filters_manager)
):
    state = await manager.get_state(session_id)
    places = filter_places(request.places, state, set(request.favoriteIds))
    return FilteredPlacesResponse(data=places, count=len(places))
