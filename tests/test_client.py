import httpx
import pytest

from school_registry.directory.client import (
    DatabaseSetupRequiredError,
    FormValidationError,
    SchoolRegistryClient,
    SchoolRegistryClientError,
)
from school_registry.directory.intake import SchoolForm
from conftest import valid_school_form

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def make_client(handler):
    return SchoolRegistryClient("http://registry.test", transport=httpx.MockTransport(handler))


def test_invalid_form_is_not_sent():
    calls = []
    client = make_client(lambda request: calls.append(request) or httpx.Response(201, json={"id": 1}))
    form = SchoolForm(**valid_school_form(pincode="12345"))

    with pytest.raises(FormValidationError) as excinfo:
        client.add_school(form)

    assert excinfo.value.errors == {"pincode": "Pincode must be 6 digits"}
    assert form.errors == {"pincode": "Pincode must be 6 digits"}
    assert calls == []


def test_add_school_posts_multipart_and_resets_form():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["content_type"] = request.headers["content-type"]
        seen["body"] = request.read()
        return httpx.Response(201, json={"message": "School added successfully", "id": 42})

    client = make_client(handler)
    form = SchoolForm(**valid_school_form())
    assert form.select_image(PNG_BYTES, "logo.png", "image/png") is None
    assert form.image_preview.startswith("data:image/png;base64,")

    assert client.add_school(form) == 42

    assert seen["method"] == "POST"
    assert seen["path"] == "/api/schools"
    assert seen["content_type"].startswith("multipart/form-data")
    assert b'name="pincode"' in seen["body"]
    assert b'filename="logo.png"' in seen["body"]
    assert form.values() == {field: "" for field in valid_school_form()}
    assert form.image is None
    assert form.image_preview is None


def test_failed_submission_keeps_form():
    client = make_client(lambda request: httpx.Response(500, json={"error": "Failed to add school"}))
    form = SchoolForm(**valid_school_form())

    with pytest.raises(SchoolRegistryClientError):
        client.add_school(form)

    assert form.name == "Greenwood High"


def test_non_image_selection_has_no_preview():
    form = SchoolForm(**valid_school_form())
    assert form.select_image(b"%PDF", "notes.pdf", "application/pdf") == "Please select an image file"
    assert form.image_preview is None
    assert form.validate() == {"image": "Please select an image file"}

    form.clear_image()
    assert form.validate() == {}


def test_list_schools_returns_collection():
    client = make_client(lambda request: httpx.Response(200, json={"schools": [{"id": 1, "name": "Oak Valley"}]}))
    assert client.list_schools() == [{"id": 1, "name": "Oak Valley"}]


def test_list_schools_distinguishes_setup_required():
    setup = make_client(lambda request: httpx.Response(
        500, json={"error": "Failed to fetch schools", "details": "relation \"schools\" does not exist", "code": "DATABASE_SETUP_REQUIRED"},
    ))
    with pytest.raises(DatabaseSetupRequiredError):
        setup.list_schools()

    down = make_client(lambda request: httpx.Response(
        500, json={"error": "Failed to fetch schools", "details": "timeout", "code": "DATABASE_UNAVAILABLE"},
    ))
    with pytest.raises(SchoolRegistryClientError) as excinfo:
        down.list_schools()
    assert not isinstance(excinfo.value, DatabaseSetupRequiredError)


def test_transport_errors_become_client_errors():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(SchoolRegistryClientError):
        make_client(handler).list_schools()
