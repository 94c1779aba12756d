from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import httpx
import pytest
from typer.testing import CliRunner

from cli.app import app
from cli.client import ApiClient
from cli.config import load_config

SUMMARY_PAYLOAD: Dict[str, Any] = {
    "cropHealth": {"status": "Healthy", "displayScore": "NDVI 0.7", "severity": "Good"},
    "soil": {"health": "Good", "displaySummary": "Moisture 30%, pH 6.5", "severity": "Good"},
    "pest": {"risk": "High", "displayProbability": "60%", "severity": "Bad"},
    "weather": {"temperature": 35.0, "description": "Hot"},
    "recommendations": {
        "irrigation": "no irrigation needed",
        "fertilization": "balanced",
        "pestAction": "take immediate action",
    },
}


class StubClient:
    def __init__(self, config, summary: Dict[str, Any] | None = None) -> None:
        self.config = config
        self.summary_payload = summary if summary is not None else SUMMARY_PAYLOAD
        self.trend_rows: List[Dict[str, Any]] = [
            {"date": "2025-01-01", "moisture": 20.0, "ph": 5.5, "pest_prob": 0.2, "temp": 20.0, "ndvi": "0.3"},
            {"date": "2025-01-02", "moisture": 30.0, "ph": 6.5, "pest_prob": 0.6, "temp": 35.0, "ndvi": "0.7"},
        ]
        self.closed = False

    def get_summary(self) -> Dict[str, Any]:
        return self.summary_payload

    def get_trends(self) -> List[Dict[str, Any]]:
        return self.trend_rows

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


def _install_stub(monkeypatch, stub: StubClient) -> None:
    def factory(config):
        stub.config = config
        return stub

    monkeypatch.setattr("cli.app.ApiClient", factory)


def test_summary_command(monkeypatch, runner: CliRunner) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)

    result = runner.invoke(app, ["--base-url", "http://field.test:4000/", "summary"])

    assert result.exit_code == 0
    assert "Crop Health: Healthy (NDVI 0.7)" in result.stdout
    assert "Pest Management: take immediate action" in result.stdout
    assert stub.config.base_url == "http://field.test:4000"
    assert stub.closed is True


def test_summary_command_without_data(monkeypatch, runner: CliRunner) -> None:
    stub = StubClient(config=None, summary={"error": "No data in CSV"})
    _install_stub(monkeypatch, stub)

    result = runner.invoke(app, ["summary"])

    assert result.exit_code == 0
    assert "No data in CSV" in result.stdout


def test_trends_command(monkeypatch, runner: CliRunner) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)

    result = runner.invoke(app, ["trends"])

    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines[0] == "Sensor Trends"
    assert lines[2].startswith("2025-01-01")
    assert lines[3].startswith("2025-01-02")
    assert "2 readings" in result.stdout


def test_assess_command_reads_local_csv(runner: CliRunner, tmp_path: Path) -> None:
    csv_path = tmp_path / "data.csv"
    csv_path.write_text(
        "date,moisture,ph,pest_prob,temp,ndvi\n"
        "2025-01-01,20,5.5,0.2,20,0.3\n"
    )

    result = runner.invoke(app, ["assess", str(csv_path)])

    assert result.exit_code == 0
    assert "Crop Health: Stressed (NDVI 0.3)" in result.stdout
    assert "Fertilization: apply lime (raise pH)" in result.stdout


def test_assess_command_reports_invalid_reading(runner: CliRunner, tmp_path: Path) -> None:
    csv_path = tmp_path / "data.csv"
    csv_path.write_text("date,moisture,ph,pest_prob,temp,ndvi\n2025-01-01,20,acid,0.2,20,0.3\n")

    result = runner.invoke(app, ["assess", str(csv_path)])

    assert result.exit_code == 1
    assert "Crop Health" not in result.stdout


def test_assess_command_missing_file(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["assess", str(tmp_path / "absent.csv")])

    assert result.exit_code == 1


def test_load_config_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("API_BASE_URL", "http://farm.test/")
    monkeypatch.setenv("CLI_TIMEOUT", "-3")

    config = load_config()

    assert config.base_url == "http://farm.test"
    assert config.timeout == 10.0


def _install_transport(monkeypatch, handler) -> None:
    def factory(config):
        return ApiClient(config, transport=httpx.MockTransport(handler))

    monkeypatch.setattr("cli.app.ApiClient", factory)


def test_summary_command_reports_unprocessable_reading(monkeypatch, runner: CliRunner) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/summary"
        return httpx.Response(422, json={"detail": "row 3: field 'ph' is not a number (got 'acid')"})

    _install_transport(monkeypatch, handler)

    result = runner.invoke(app, ["summary"])

    assert result.exit_code == 1
    assert "Request failed with status 422" in result.output
    assert "field 'ph' is not a number" in result.output


def test_trends_command_reports_server_error_text(monkeypatch, runner: CliRunner) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="readings file missing")

    _install_transport(monkeypatch, handler)

    result = runner.invoke(app, ["trends"])

    assert result.exit_code == 1
    assert "Request failed with status 500: readings file missing" in result.output


def test_summary_command_reports_unreachable_server(monkeypatch, runner: CliRunner) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    _install_transport(monkeypatch, handler)

    result = runner.invoke(app, ["--base-url", "http://field.test:4000", "summary"])

    assert result.exit_code == 1
    assert "Could not reach http://field.test:4000" in result.output


def test_api_client_returns_json_payload() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"error": "No data in CSV"})

    client = ApiClient(
        load_config(base_url="http://field.test"),
        transport=httpx.MockTransport(handler),
    )
    try:
        assert client.get_summary() == {"error": "No data in CSV"}
    finally:
        client.close()
