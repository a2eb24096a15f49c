import json

import pytest
from fastapi.exceptions import RequestValidationError

from whisk.app.main import validation_exception_handler


@pytest.mark.asyncio
async def test_validation_handler_formats_errors():
    exc = RequestValidationError(
        errors=[
            {"loc": ("body", "url"), "msg": "field required"},
            {"loc": ("query", "page"), "msg": "value is not a valid integer"},
        ]
    )
    response = await validation_exception_handler(None, exc)
    assert response.status_code == 422
    body = json.loads(response.body)
    assert body["error_code"] == "validation_error"
    assert body["message"] == "Invalid request payload."
    assert "request_id" in body and body["request_id"]
    assert {"field": "body.url", "message": "field required"} in body["details"]
    assert {"field": "query.page", "message": "value is not a valid integer"} in body["details"]


@pytest.mark.asyncio
async def test_validation_handler_path_errors_are_malformatted_ids():
    exc = RequestValidationError(errors=[{"loc": ("path", "recipe_id"), "msg": "Input should be a valid integer"}])
    response = await validation_exception_handler(None, exc)
    assert response.status_code == 400
    assert json.loads(response.body)["error"] == "Malformatted ID"


def test_malformed_recipe_id_returns_400(client, headers):
    response = client.get("/recipes/not-a-number", headers=headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Malformatted ID"


def test_malformed_note_id_returns_400(client, headers):
    response = client.delete("/chat/notes/abc", headers=headers)
    assert response.status_code == 400
