"""
State behind the schools directory page.

``DirectoryView`` keeps the full collection fetched from the API and the
current filters; ``visible`` is recomputed synchronously whenever either
changes. Display mode is presentation only and never triggers a recompute or
a refetch.
"""
import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional

from school_registry.directory.client import (
    DatabaseSetupRequiredError,
    SchoolRegistryClient,
    SchoolRegistryClientError,
)
from school_registry.directory.filters import ALL, DirectoryFilters, filter_options, filter_schools

logger = logging.getLogger(__name__)

VIEW_MODES = ("grid", "list")

DATABASE_SETUP_REQUIRED = "DATABASE_SETUP_REQUIRED"
LOAD_FAILED_MESSAGE = "Failed to load schools. Please try again later."


class DirectoryView:
    def __init__(self, schools: Optional[List[Dict[str, Any]]] = None):
        self.schools: List[Dict[str, Any]] = []
        self.filters = DirectoryFilters()
        self.view_mode = "grid"
        self.visible: List[Dict[str, Any]] = []
        self.error: Optional[str] = None
        self.set_schools(schools or [])

    def _recompute(self) -> None:
        self.visible = filter_schools(self.schools, self.filters)

    def load(self, client: SchoolRegistryClient) -> None:
        """Fetch the collection once; filtering afterwards never hits the network."""
        try:
            schools = client.list_schools()
        except DatabaseSetupRequiredError:
            self.error = DATABASE_SETUP_REQUIRED
            self.set_schools([])
            return
        except SchoolRegistryClientError as e:
            logger.error(f"Error fetching schools: {e}")
            self.error = LOAD_FAILED_MESSAGE
            self.set_schools([])
            return
        self.error = None
        self.set_schools(schools)

    def set_schools(self, schools: List[Dict[str, Any]]) -> None:
        self.schools = list(schools)
        self._recompute()

    def set_search(self, search: str) -> None:
        self.filters = replace(self.filters, search=search)
        self._recompute()

    def select_city(self, city: str) -> None:
        self.filters = replace(self.filters, city=city)
        self._recompute()

    def select_state(self, state: str) -> None:
        self.filters = replace(self.filters, state=state)
        self._recompute()

    def clear_filters(self) -> None:
        self.filters = DirectoryFilters()
        self._recompute()

    def set_view_mode(self, mode: str) -> None:
        if mode not in VIEW_MODES:
            raise ValueError(f"Unknown view mode: {mode}")
        self.view_mode = mode

    @property
    def cities(self) -> List[str]:
        return filter_options(self.schools)[0]

    @property
    def states(self) -> List[str]:
        return filter_options(self.schools)[1]

    @property
    def has_active_filters(self) -> bool:
        return bool(self.filters.search) or self.filters.city != ALL or self.filters.state != ALL

    def summary(self) -> str:
        return f"Showing {len(self.visible)} of {len(self.schools)} schools"
