import logging
from typing import List, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from school_registry.models import School
from school_registry.schools.exceptions import SchoolValidationError, classify_store_error
from school_registry.schools.schemas import SchoolCreate
from school_registry.schools.storage import ImageStore
from school_registry.schools.validation import validate_school_form

logger = logging.getLogger(__name__)


class SchoolService:
    """Creates and lists school records."""

    def __init__(self, db: Session, image_store: ImageStore):
        self.db = db
        self.image_store = image_store

    def list_schools(self) -> List[School]:
        """
        Return every school, newest first.

        Raises a ``SchoolStoreError`` subclass when the store can't be reached
        or the schools table is missing.
        """
        try:
            self.db.execute(text("SELECT 1"))
            logger.info("Database connection successful")
            schools = (
                self.db.query(School)
                .order_by(School.created_at.desc(), School.id.desc())
                .all()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            error = classify_store_error(e)
            logger.error(f"Failed to fetch schools ({error.code}): {error.details}")
            raise error from e
        logger.info(f"Fetched {len(schools)} schools")
        return schools

    def create_school(
        self,
        school: SchoolCreate,
        image_data: Optional[bytes] = None,
        image_filename: Optional[str] = None,
        image_content_type: Optional[str] = None,
    ) -> School:
        """
        Validate, store the optional image, then insert the row.

        The image is written before the row. If the insert fails the image is
        removed again so no file is left without a record.
        """
        has_image = bool(image_data)
        errors = validate_school_form(
            school.model_dump(),
            image_content_type=(image_content_type or "") if has_image else None,
        )
        if errors:
            logger.warning(f"Rejected school submission: {errors}")
            raise SchoolValidationError(errors)

        image_path = None
        if has_image:
            image_path = self.image_store.save(image_data, image_filename or "image")

        db_school = School(**school.model_dump(), image_path=image_path)
        try:
            self.db.add(db_school)
            self.db.commit()
            self.db.refresh(db_school)
        except SQLAlchemyError as e:
            self.db.rollback()
            error = classify_store_error(e)
            logger.error(f"Failed to insert school '{school.name}' ({error.code}): {error.details}")
            if image_path:
                self.image_store.delete(image_path)
            raise error from e

        logger.info(f"Created school {db_school.id} '{db_school.name}'")
        return db_school
