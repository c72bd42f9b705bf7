import pytest
from fastapi import status
from fastapi.testclient import TestClient

from image_gateway.main import create_app
from tests.consts import TEST_API_TOKEN, TEST_BUCKET_NAME
from tests.fixtures.app_fixtures import make_settings

TEST_FILE = {"image": ("photo.png", b"some bytes", "image/png")}


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"X-API-Token": ""},
        {"X-API-Token": "wrong-token"},
        {"X-API-Token": TEST_API_TOKEN.upper()},
        {"Authorization": f"Bearer {TEST_API_TOKEN}"},
    ],
)
def test__upload__rejects_bad_token(client: TestClient, mocked_aws, headers: dict):
    response = client.post("/upload", headers=headers, files=TEST_FILE)

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.text == "Invalid API Token"
    assert "Contents" not in mocked_aws.list_objects_v2(Bucket=TEST_BUCKET_NAME)


def test__upload__rejects_bad_token_regardless_of_body(client: TestClient):
    response = client.post(
        "/upload",
        headers={"X-API-Token": "wrong-token", "Content-Type": "multipart/form-data"},
        content=b"not multipart at all",
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.text == "Invalid API Token"


def test__upload__header_name_is_case_insensitive(client: TestClient):
    response = client.post("/upload", headers={"x-api-token": TEST_API_TOKEN}, files=TEST_FILE)

    assert response.status_code == status.HTTP_200_OK


def test__upload__accepts_non_ascii_token_bytes(mocked_aws):
    app = create_app(settings=make_settings(api_token="pässwort"))
    with TestClient(app) as client:
        response = client.post(
            "/upload",
            headers={"X-API-Token": "pässwort".encode("utf-8")},
            files=TEST_FILE,
        )

    assert response.status_code == status.HTTP_200_OK
    assert response.text == "File uploaded successfully"


def test__upload__rejects_latin1_spelling_of_non_ascii_token(mocked_aws):
    app = create_app(settings=make_settings(api_token="pässwort"))
    with TestClient(app) as client:
        response = client.post(
            "/upload",
            headers={"X-API-Token": "pässwort".encode("latin-1")},
            files=TEST_FILE,
        )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
