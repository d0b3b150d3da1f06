"""Tests for the Grafana OTLP exporter."""

import json

import httpx

from triagedesk.shared.infrastructure.grafana import GrafanaOTLPExporter


def make_exporter(handler):
    return GrafanaOTLPExporter(
        host="https://otlp.example.net",
        api_key="secret",
        instance_id="12345",
        transport=httpx.MockTransport(handler),
    )


async def test_unconfigured_exporter_is_disabled():
    exporter = GrafanaOTLPExporter(host="", api_key="", instance_id="")

    assert exporter.is_enabled() is False
    assert await exporter.export_inquiry_metrics(automated=True, confidence=1.0, processing_ms=3) is False


async def test_inquiry_metrics_are_posted():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={})

    exporter = make_exporter(handler)
    exported = await exporter.export_inquiry_metrics(
        automated=True,
        confidence=0.8,
        processing_ms=12,
        template_id="tpl-1",
    )

    assert exported is True
    request = requests[0]
    assert str(request.url) == "https://otlp.example.net/otlp/v1/metrics"
    assert request.headers["Authorization"].startswith("Basic ")

    payload = json.loads(request.content)
    metrics = payload["resourceMetrics"][0]["scopeMetrics"][0]["metrics"]
    assert {m["name"] for m in metrics} == {
        "inquiry_match_confidence",
        "inquiry_automated",
        "inquiry_processing_ms",
    }
    confidence = next(m for m in metrics if m["name"] == "inquiry_match_confidence")
    assert confidence["gauge"]["dataPoints"][0]["asDouble"] == 0.8


async def test_gateway_error_is_reported_as_failure():
    exporter = make_exporter(lambda request: httpx.Response(500, text="boom"))

    assert await exporter.export_inquiry_metrics(automated=False, confidence=0.0, processing_ms=1) is False


async def test_request_latency_export():
    exporter = make_exporter(lambda request: httpx.Response(202))

    assert await exporter.export_request_latency("/api/inquiries", 201, 15) is True
