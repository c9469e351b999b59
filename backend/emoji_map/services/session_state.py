"""
Per-session map filter state.

Each session's filters live in the cache store as
``{"version": n, "state": {...}}``. Older versions are upgraded on read by
``migrate_filters_state`` and written back.
"""
import logging

from emoji_map.core.categories import get_category
from emoji_map.core.config import settings
from emoji_map.core.logger import logs
from emoji_map.models.filters_model import (
    DEFAULT_PRICE_LEVELS,
    FILTERS_STATE_VERSION,
    FiltersState,
    FiltersUpdate,
)
from emoji_map.models.places_model import NormalizedPlace
from emoji_map.services.cache_helpers import read_cache, write_cache
from emoji_map.services.cache_keys import generate_filters_cache_key


def migrate_filters_state(persisted: dict | None, version: int) -> dict:
    """Upgrade a persisted state dict from ``version`` to the current one."""
    state = dict(persisted or {})

    if version == 0:
        state["openNow"] = state.get("openNow") or False
        state["priceLevel"] = state.get("priceLevel") or list(DEFAULT_PRICE_LEVELS)
        state["minimumRating"] = state.get("minimumRating") or None
        state["isAllCategoriesMode"] = len(state.get("selectedCategories") or []) == 0

    return state


# Clearable by sending null, every other field ignores an explicit null
NULLABLE_FIELDS = {"minimumRating", "userLocation"}


def place_category_names(place: NormalizedPlace) -> set[str]:
    """The category name for the resolved key plus the keyword that matched."""
    names = {place.category}
    category = get_category(place.categoryKey) if place.categoryKey is not None else None
    if category:
        names.add(category.name)
    return names


def filter_places(
    places: list[NormalizedPlace],
    state: FiltersState,
    favorite_ids: set[str] | None = None,
) -> list[NormalizedPlace]:
    """Apply favorites, category, open-now, price and rating filters."""
    favorite_ids = favorite_ids or set()
    kept = []

    for place in places:
        if state.showFavoritesOnly and place.id not in favorite_ids:
            continue

        if not state.isAllCategoriesMode and place.category and place_category_names(place).isdisjoint(state.selectedCategories):
            continue

        # Unknown opening hours are not excluded
        if state.openNow and place.openNow is False:
            continue

        if place.priceLevel is not None and place.priceLevel not in state.priceLevel:
            continue

        if state.minimumRating is not None and (place.rating or 0) < state.minimumRating:
            continue

        kept.append(place)
    return kept


class FiltersSessionManager:
    """
    Stores and updates filter state per session.
    Returns default state if the session is new.
    """

    def __init__(self, repo):
        self.repo = repo

    async def _save(self, session_id: str, state: FiltersState) -> FiltersState:
        await write_cache(
            self.repo,
            generate_filters_cache_key(session_id),
            {"version": FILTERS_STATE_VERSION, "state": state.model_dump(mode="json")},
            settings.FILTERS_STATE_TTL_SECONDS,
        )
        return state

    async def get_state(self, session_id: str) -> FiltersState:
        doc = await read_cache(self.repo, generate_filters_cache_key(session_id))
        if not isinstance(doc, dict):
            return FiltersState()

        version = doc.get("version", 0)
        state = FiltersState.model_validate(migrate_filters_state(doc.get("state"), version))

        if version != FILTERS_STATE_VERSION:
            logs.log(logging.INFO, f"Migrated filters for {session_id} from v{version} to v{FILTERS_STATE_VERSION}")
            await self._save(session_id, state)
        return state

    async def update_state(self, session_id: str, update: FiltersUpdate) -> FiltersState:
        current = await self.get_state(session_id)
        changes = {
            field: value
            for field, value in update.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_FIELDS
        }

        merged = {**current.model_dump(), **changes}
        merged["isAllCategoriesMode"] = len(merged["selectedCategories"]) == 0

        # A first user location also centres the map
        if "userLocation" in changes and changes["userLocation"] and "viewport" not in changes:
            if merged["viewport"]["center"] is None:
                merged["viewport"]["center"] = changes["userLocation"]

        return await self._save(session_id, FiltersState.model_validate(merged))

    async def toggle_category(self, session_id: str, category: str) -> FiltersState:
        state = await self.get_state(session_id)

        if category in state.selectedCategories:
            selected = [c for c in state.selectedCategories if c != category]
        else:
            selected = [*state.selectedCategories, category]

        return await self.update_state(session_id, FiltersUpdate(selectedCategories=selected))

    async def reset(self, session_id: str) -> FiltersState:
        """Back to defaults, keeping viewport and user location."""
        current = await self.get_state(session_id)
        state = FiltersState(viewport=current.viewport, userLocation=current.userLocation)
        return await self._save(session_id, state)

    async def clear_state(self, session_id: str) -> bool:
        return await self.repo.delete(generate_filters_cache_key(session_id))
