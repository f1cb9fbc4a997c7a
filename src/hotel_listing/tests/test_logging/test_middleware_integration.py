import json
import logging

from fastapi import FastAPI
from starlette.testclient import TestClient

from hotel_listing.core.logging.builder import setup_logging
from hotel_listing.core.logging.middleware import REQUEST_ID_HEADER, RequestIDMiddleware


def build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)

    @app.get("/hello")
    def hello():
        logging.getLogger("hotel_listing").info("handling hello")
        return {"ok": True}

    return app


def test_generated_request_id_is_logged(dummy_settings, tmp_path, capsys, restore_logging):
    dummy_settings.LOG_TO_STDOUT = True
    dummy_settings.LOG_DIR = tmp_path / "logs"
    setup_logging(dummy_settings)

    resp = TestClient(build_app()).get("/hello")

    assert resp.status_code == 200
    rid = resp.headers.get(REQUEST_ID_HEADER)
    assert rid

    captured = capsys.readouterr()
    lines = (captured.out + captured.err).splitlines()
    records = []
    for line in lines:
        try:
            records.append(json.loads(line))
        except ValueError:
            continue

    assert any(r.get("request_id") == rid and r.get("message") == "handling hello" for r in records)


def test_incoming_request_id_is_echoed():
    resp = TestClient(build_app()).get("/hello", headers={REQUEST_ID_HEADER: "given-id"})

    assert resp.headers[REQUEST_ID_HEADER] == "given-id"
