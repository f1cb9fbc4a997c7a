import json
import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from hotel_listing.api.error_handlers import register_exception_handlers, translate_exception
from hotel_listing.core.logging import RequestIDMiddleware
from hotel_listing.core.logging.middleware import REQUEST_ID_HEADER
from hotel_listing.exceptions.base import BadRequestError, NotFoundError, RepositoryError
from hotel_listing.mapping import MappingError
from hotel_listing.models import Country
from hotel_listing.schemas import GetCountryDto


def build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/bad-request")
    async def bad_request():
        raise BadRequestError("Invalid Id used in request")

    @app.get("/bad-field")
    async def bad_field():
        raise BadRequestError("Invalid Record Id", fields=["id"])

    @app.get("/not-found")
    async def not_found():
        raise NotFoundError("Hotel", 7)

    @app.get("/storage")
    async def storage():
        raise RepositoryError("Failed to operate on Hotel", model="Hotel")

    @app.get("/unmapped")
    async def unmapped():
        raise MappingError(Country, GetCountryDto)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    @app.get("/ok")
    async def ok():
        return {"status": "ok"}

    return app


@pytest.fixture
def test_client() -> TestClient:
    return TestClient(build_app())


class TestExceptionMiddleware:

    def test_bad_request(self, test_client):
        """
        Behavior:
            - A BadRequestError escaping the route becomes a 400 with the ErrorDetails body.
        Importance:
            - This exact body is the contract clients parse.
        """
        response = test_client.get("/bad-request")

        assert response.status_code == 400
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {"ErrorType": "Bad Request", "ErrorMessage": "Invalid Id used in request"}
        assert "\n" not in response.text

    def test_not_found(self, test_client):
        response = test_client.get("/not-found")

        assert response.status_code == 404
        assert response.json() == {"ErrorType": "Not Found", "ErrorMessage": "Hotel (7) was not found"}

    @pytest.mark.parametrize("path", ["/storage", "/unmapped", "/boom"])
    def test_unclassified_is_failure(self, test_client, path):
        response = test_client.get(path)

        assert response.status_code == 500
        assert response.json()["ErrorType"] == "Failure"

    def test_success_untouched(self, test_client):
        response = test_client.get("/ok")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_error_response_carries_request_id(self, test_client):
        response = test_client.get("/not-found", headers={REQUEST_ID_HEADER: "req-123"})

        assert response.headers[REQUEST_ID_HEADER] == "req-123"

    def test_logs_path(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="hotel_listing.api.error_handlers"):
            test_client.get("/boom")

        record = next(r for r in caplog.records if r.name == "hotel_listing.api.error_handlers")
        assert record.levelno == logging.ERROR
        assert "/boom" in record.getMessage()
        assert record.exc_info is not None

    def test_domain_error_logged_at_info(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="hotel_listing.api.error_handlers"):
            test_client.get("/not-found")

        record = next(r for r in caplog.records if r.name == "hotel_listing.api.error_handlers")
        assert record.levelno == logging.INFO
        assert record.path == "/not-found"
        assert record.fields is None

    def test_bad_request_fields_are_logged(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="hotel_listing.api.error_handlers"):
            response = test_client.get("/bad-field")

        assert response.status_code == 400
        assert response.json() == {"ErrorType": "Bad Request", "ErrorMessage": "Invalid Record Id"}
        record = next(r for r in caplog.records if r.name == "hotel_listing.api.error_handlers")
        assert record.fields == ["id"]
        assert record.error_type == "Bad Request"


class TestTranslateException:

    def test_plain_exception(self):
        status, details = translate_exception(ValueError("nope"))

        assert status == 500
        assert json.loads(details.to_json()) == {"ErrorType": "Failure", "ErrorMessage": "nope"}

    def test_empty_message_falls_back_to_class_name(self):
        _, details = translate_exception(KeyError())

        assert details.error_message == "KeyError"
