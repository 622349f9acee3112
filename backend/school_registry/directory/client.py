import logging
from typing import Any, Dict, List, Optional

import httpx

from school_registry.directory.intake import SchoolForm

logger = logging.getLogger(__name__)

DATABASE_SETUP_REQUIRED = "DATABASE_SETUP_REQUIRED"


class SchoolRegistryClientError(Exception):
    pass


class DatabaseSetupRequiredError(SchoolRegistryClientError):
    """The server reports that the schools table hasn't been created."""


class FormValidationError(SchoolRegistryClientError):
    def __init__(self, errors: Dict[str, str]):
        super().__init__("Form has invalid fields: " + ", ".join(sorted(errors)))
        self.errors = errors


class SchoolRegistryClient:
    """Thin httpx wrapper around the schools endpoints."""

    def __init__(self, base_url: str, timeout: float = 30.0, transport: Optional[httpx.BaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout, connect=10.0),
            transport=transport,
        )
        logger.info(f"SchoolRegistryClient initialized with base_url: {self.base_url}")

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "SchoolRegistryClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def list_schools(self) -> List[Dict[str, Any]]:
        try:
            response = self._client.get("/api/schools")
        except httpx.RequestError as e:
            logger.error(f"Request error fetching schools: {type(e).__name__}: {e}")
            raise SchoolRegistryClientError("Failed to fetch schools") from e

        if response.status_code != 200:
            try:
                error_data = response.json()
            except ValueError:
                error_data = {}
            logger.error(f"HTTP {response.status_code} error while fetching schools: {response.text}")
            if error_data.get("code") == DATABASE_SETUP_REQUIRED:
                raise DatabaseSetupRequiredError(error_data.get("details") or "Database setup required")
            raise SchoolRegistryClientError("Failed to fetch schools")

        return response.json().get("schools") or []

    def add_school(self, form: SchoolForm) -> int:
        """
        Submit the form and return the new school's id.

        The form is validated first; nothing is sent when a field fails. On
        success the form is reset, which also discards the image preview.
        """
        errors = form.validate()
        if errors:
            raise FormValidationError(errors)

        files = None
        if form.image is not None:
            files = {"image": (form.image.filename, form.image.data, form.image.content_type)}

        try:
            response = self._client.post("/api/schools", data=form.values(), files=files)
        except httpx.RequestError as e:
            logger.error(f"Request error submitting school: {type(e).__name__}: {e}")
            raise SchoolRegistryClientError("Failed to add school. Please try again.") from e

        if response.status_code != 201:
            logger.error(f"HTTP {response.status_code} error while submitting school: {response.text}")
            raise SchoolRegistryClientError("Failed to add school. Please try again.")

        result = response.json()
        logger.info(f"School added successfully: {result}")
        form.reset()
        return result["id"]
