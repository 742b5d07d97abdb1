"""
Tests for the FastAPI routes.

Status code contract under test: missing parameters -> 400, missing
server credential -> 500, any DART status (success or not) -> 200 with the
status embedded in the body, DART unreachable -> 500.
"""

import pytest
from unittest.mock import MagicMock, patch
from fastapi.testclient import TestClient

from api.config import Settings
from api.main import app, get_provider, get_settings
from sources.dart.base import UpstreamStatusError, UpstreamTransportError


@pytest.fixture
def cfg():
    s = Settings()
    s.DART_API_KEY = "test-key"
    return s


@pytest.fixture
def provider():
    return MagicMock()


@pytest.fixture
def client(cfg, provider):
    app.dependency_overrides[get_settings] = lambda: cfg
    app.dependency_overrides[get_provider] = lambda: provider
    yield TestClient(app)
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Health & CORS
# ---------------------------------------------------------------------------

class TestHealth:
    def test_health(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "healthy"
        assert body["api_key_configured"] is True
        assert "test-key" not in resp.text

    def test_health_without_key(self, client, cfg):
        cfg.DART_API_KEY = ""
        assert client.get("/").json()["api_key_configured"] is False


class TestCors:
    def test_plain_options_is_empty_200(self, client):
        resp = client.options("/api/dart")
        assert resp.status_code == 200
        assert resp.content == b""

    def test_preflight(self, client):
        resp = client.options("/api/dart", headers={
            "Origin": "https://example.com",
            "Access-Control-Request-Method": "GET",
        })
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "*"
        assert "GET" in resp.headers["access-control-allow-methods"]

    def test_get_carries_allow_origin(self, client, provider, sample_dart_items):
        provider.get_financial_statements.return_value = sample_dart_items
        resp = client.get("/api/dart", params={"company": "00126380", "year": "2023"},
                          headers={"Origin": "https://example.com"})
        assert resp.headers["access-control-allow-origin"] == "*"


# ---------------------------------------------------------------------------
# GET /api/dart
# ---------------------------------------------------------------------------

class TestDartSuccess:
    def test_envelope(self, client, provider, sample_dart_items):
        provider.get_financial_statements.return_value = sample_dart_items
        resp = client.get("/api/dart", params={"company": "00126380", "year": "2023"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "000"
        assert body["message"] == "정상 조회"
        assert body["company_code"] == "00126380"
        assert body["year"] == "2023"
        assert body["list"] == sample_dart_items
        assert body["summary"]["totalAssets"] == 455905980000000
        assert body["summary"]["debtRatio"] == "20.23"
        assert body["summary"]["roe"] == "4.26"

    def test_defaults_forwarded(self, client, provider):
        provider.get_financial_statements.return_value = []
        client.get("/api/dart", params={"company": "00126380", "year": "2023"})
        query = provider.get_financial_statements.call_args[0][0]
        assert query.api_key == "test-key"
        assert query.report_type == "11011"
        assert query.fs_div == "CFS"

    def test_optional_params_forwarded(self, client, provider):
        provider.get_financial_statements.return_value = []
        client.get("/api/dart", params={
            "company": "00126380", "year": "2023", "reportType": "11014", "fsDiv": "OFS",
        })
        query = provider.get_financial_statements.call_args[0][0]
        assert query.report_type == "11014"
        assert query.fs_div == "OFS"

    def test_empty_list_gives_null_summary(self, client, provider):
        provider.get_financial_statements.return_value = []
        body = client.get("/api/dart", params={"company": "1", "year": "2023"}).json()
        assert body["list"] == []
        assert body["summary"]["sales"] is None
        assert body["summary"]["debtRatio"] is None


class TestDartErrors:
    @pytest.mark.parametrize("params", [{"year": "2023"}, {"company": "00126380"}, {}])
    def test_missing_params_is_400(self, client, provider, params):
        resp = client.get("/api/dart", params=params)
        assert resp.status_code == 400
        body = resp.json()
        assert body["error"] is True
        assert body["message"] == "필수 파라미터가 누락되었습니다."
        provider.get_financial_statements.assert_not_called()

    def test_missing_key_is_500(self, client, cfg, provider):
        cfg.DART_API_KEY = ""
        resp = client.get("/api/dart", params={"company": "00126380", "year": "2023"})
        assert resp.status_code == 500
        assert resp.json()["message"] == "API 키가 설정되지 않았습니다."
        provider.get_financial_statements.assert_not_called()

    def test_upstream_status_is_200(self, client, provider):
        provider.get_financial_statements.side_effect = UpstreamStatusError("013", "조회된 데이타가 없습니다.")
        resp = client.get("/api/dart", params={"company": "00126380", "year": "1999"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "013"
        assert body["message"] == "조회된 데이터가 없습니다."
        assert body["company_code"] == "00126380"
        assert body["year"] == "1999"
        assert body["list"] == []
        assert "summary" not in body

    def test_transport_error_is_500(self, client, provider):
        provider.get_financial_statements.side_effect = UpstreamTransportError("Failed to reach DART: refused")
        resp = client.get("/api/dart", params={"company": "00126380", "year": "2023"})
        assert resp.status_code == 500
        body = resp.json()
        assert body["error"] is True
        assert body["message"] == "서버 오류가 발생했습니다."
        assert "refused" in body["details"]

    def test_unexpected_error_is_500(self, client, provider):
        provider.get_financial_statements.side_effect = RuntimeError("boom")
        resp = client.get("/api/dart", params={"company": "00126380", "year": "2023"})
        assert resp.status_code == 500
        assert resp.json()["details"] == "boom"


# ---------------------------------------------------------------------------
# Real provider, mocked HTTP
# ---------------------------------------------------------------------------

class TestDartEndToEnd:
    def test_through_real_provider(self, cfg, mock_response, dart_payload):
        app.dependency_overrides[get_settings] = lambda: cfg
        try:
            with patch("sources.dart.provider.RequestSession") as session_cls:
                session_cls.return_value.get.return_value = mock_response(json_data=dart_payload())
                resp = TestClient(app).get("/api/dart", params={"company": "00126380", "year": "2023"})
        finally:
            app.dependency_overrides.clear()

        assert resp.status_code == 200
        assert resp.json()["summary"]["sales"] == 258935494000000
        _, kwargs = session_cls.return_value.get.call_args
        assert kwargs["params"]["crtfc_key"] == "test-key"
        session_cls.return_value.close.assert_called_once()


class TestMalformedUpstreamBody:
    """Odd DART bodies still come back as a JSON envelope."""

    def _get(self, cfg, mock_response, json_data):
        app.dependency_overrides[get_settings] = lambda: cfg
        try:
            with patch("sources.dart.provider.RequestSession") as session_cls:
                session_cls.return_value.get.return_value = mock_response(json_data=json_data)
                resp = TestClient(app).get("/api/dart", params={"company": "00126380", "year": "2023"})
        finally:
            app.dependency_overrides.clear()
        assert resp.headers["content-type"].startswith("application/json")
        return resp

    def test_non_string_status(self, cfg, mock_response):
        resp = self._get(cfg, mock_response, {"status": 13, "message": 99})
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "13"
        assert body["message"] == "데이터가 없습니다."
        assert body["list"] == []
        assert "summary" not in body

    def test_non_object_rows(self, cfg, mock_response, dart_item):
        row = dart_item("자산총계", "1,000")
        resp = self._get(cfg, mock_response, {"status": "000", "list": ["junk", row]})
        assert resp.status_code == 200
        body = resp.json()
        assert body["list"] == [row]
        assert body["summary"]["totalAssets"] == 1000

    def test_non_string_account_name(self, cfg, mock_response):
        rows = [{"account_nm": 5, "thstrm_amount": "100"}, {"account_nm": "부채총계", "thstrm_amount": "40"}]
        resp = self._get(cfg, mock_response, {"status": "000", "list": rows})
        assert resp.status_code == 200
        summary = resp.json()["summary"]
        assert summary["sales"] is None
        assert summary["totalLiabilities"] == 40

    def test_failure_while_building_summary(self, cfg, mock_response, dart_payload):
        with patch("api.main.extract_summary", side_effect=TypeError("bad row")):
            resp = self._get(cfg, mock_response, dart_payload())
        assert resp.status_code == 500
        body = resp.json()
        assert body["error"] is True
        assert body["message"] == "서버 오류가 발생했습니다."
        assert body["details"] == "bad row"
