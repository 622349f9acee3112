from dataclasses import dataclass, field
from typing import Dict, Optional

from school_registry.schools.validation import (
    SCHOOL_FIELDS,
    build_image_preview,
    validate_image,
    validate_school_form,
)


@dataclass
class SelectedImage:
    data: bytes
    filename: str
    content_type: str


@dataclass
class SchoolForm:
    """Client-side state of the add-school form."""

    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    pincode: str = ""
    image: Optional[SelectedImage] = None
    image_preview: Optional[str] = None
    errors: Dict[str, str] = field(default_factory=dict)

    def values(self) -> Dict[str, str]:
        return {name: getattr(self, name) for name in SCHOOL_FIELDS}

    def select_image(self, data: bytes, filename: str, content_type: str) -> Optional[str]:
        """
        Attach an image and build its local preview.

        Returns the validation message when the file isn't an image; the
        file is still kept so ``validate`` reports the same message.
        """
        self.image = SelectedImage(data=data, filename=filename, content_type=content_type)
        message = validate_image(content_type)
        self.image_preview = None if message else build_image_preview(data, content_type)
        return message

    def clear_image(self) -> None:
        self.image = None
        self.image_preview = None

    def validate(self) -> Dict[str, str]:
        content_type = self.image.content_type if self.image else None
        self.errors = validate_school_form(self.values(), image_content_type=content_type)
        return self.errors

    def reset(self) -> None:
        for name in SCHOOL_FIELDS:
            setattr(self, name, "")
        self.errors = {}
        self.clear_image()
