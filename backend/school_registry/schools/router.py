import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from school_registry.database import get_db
from school_registry.schools.exceptions import ImageStorageError, SchoolStoreError, SchoolValidationError
from school_registry.schools.schemas import (
    ErrorResponse,
    SchoolCreate,
    SchoolCreatedResponse,
    SchoolListResponse,
    SchoolRead,
    ValidationErrorResponse,
)
from school_registry.schools.service import SchoolService
from school_registry.schools.storage import ImageStore

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/schools",
    tags=["schools"],
)


def get_image_store(request: Request) -> ImageStore:
    return request.app.state.image_store


def get_school_service(
    db: Session = Depends(get_db),
    image_store: ImageStore = Depends(get_image_store),
) -> SchoolService:
    return SchoolService(db, image_store)


@router.get(
    "",
    response_model=SchoolListResponse,
    responses={500: {"model": ErrorResponse}},
)
def list_schools(service: SchoolService = Depends(get_school_service)):
    """
    Return every registered school, newest first.

    Failures carry a ``code`` so the caller can tell a missing table
    (``DATABASE_SETUP_REQUIRED``) apart from connectivity problems.
    """
    logger.info("Attempting to fetch schools from database")
    try:
        schools = service.list_schools()
    except SchoolStoreError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to fetch schools", "details": e.details, "code": e.code},
        )
    return {"schools": [SchoolRead.model_validate(school) for school in schools]}


@router.post(
    "",
    response_model=SchoolCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ValidationErrorResponse}, 500: {"model": ErrorResponse}},
)
def create_school(
    name: str = Form(""),
    email: str = Form(""),
    phone: str = Form(""),
    address: str = Form(""),
    city: str = Form(""),
    state: str = Form(""),
    pincode: str = Form(""),
    image: Optional[UploadFile] = File(None),
    service: SchoolService = Depends(get_school_service),
):
    """Register a new school from a multipart form with an optional image."""
    school = SchoolCreate(
        name=name,
        email=email,
        phone=phone,
        address=address,
        city=city,
        state=state,
        pincode=pincode,
    )

    image_data = None
    image_filename = None
    image_content_type = None
    if image is not None:
        image_data = image.file.read()
        image_filename = image.filename
        image_content_type = image.content_type

    try:
        db_school = service.create_school(
            school,
            image_data=image_data,
            image_filename=image_filename,
            image_content_type=image_content_type,
        )
    except SchoolValidationError as e:
        return JSONResponse(
            status_code=422,
            content={"error": "Validation failed", "fields": e.fields},
        )
    except (SchoolStoreError, ImageStorageError) as e:
        logger.error(f"Failed to add school: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to add school"},
        )
    return {"message": "School added successfully", "id": db_school.id}
