"""
Grafana OTLP Metrics Exporter
==============================

Pushes inquiry automation metrics to Grafana Cloud via OTLP.

Metrics exported:
- inquiry_match_confidence: Confidence of the chosen template (0 when unmatched)
- inquiry_automated: 1 when the inquiry received an automated reply, else 0
- inquiry_processing_ms: Time spent categorizing and matching the inquiry
"""

import base64
import time
from typing import Optional, Dict, Any, List

import httpx

from triagedesk.config import settings
from triagedesk.core import MetricsExportException
from triagedesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class GrafanaOTLPExporter:
    """
    Export automation metrics to Grafana Cloud via OTLP HTTP endpoint.

    Uses OpenTelemetry Protocol (OTLP) JSON format for metrics.
    """

    def __init__(
        self,
        host: Optional[str] = None,
        api_key: Optional[str] = None,
        instance_id: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize Grafana OTLP exporter.

        Args:
            host: Grafana OTLP gateway URL
            api_key: Grafana API key
            instance_id: Instance ID for authentication
            transport: Optional httpx transport (used by tests)
        """
        self._host = host or settings.grafana_host
        self._api_key = api_key or settings.grafana_api_key
        self._instance_id = instance_id or settings.grafana_instance_id
        self._transport = transport
        self._enabled = bool(self._host and self._api_key and self._instance_id)

        if self._enabled:
            auth_pair = f"{self._instance_id}:{self._api_key}"
            self._auth_encoded = base64.b64encode(auth_pair.encode()).decode()
            # Don't double-append the path if host already includes it
            if "/otlp/v1/metrics" not in self._host:
                self._url = f"{self._host.rstrip('/')}/otlp/v1/metrics"
            else:
                self._url = self._host
            logger.info(
                "Grafana OTLP exporter initialized",
                extra={"host": self._host, "instance_id": self._instance_id}
            )
        else:
            logger.info(
                "Grafana OTLP exporter not configured - metrics will not be exported",
                extra={
                    "host_configured": bool(self._host),
                    "api_key_configured": bool(self._api_key),
                    "instance_id_configured": bool(self._instance_id)
                }
            )

    def is_enabled(self) -> bool:
        """Check if exporter is properly configured."""
        return self._enabled

    @staticmethod
    def _attributes(values: Dict[str, Any]) -> List[dict]:
        return [
            {"key": key, "value": {"stringValue": str(value)}}
            for key, value in values.items()
        ]

    def build_payload(self, gauges: Dict[str, tuple], attributes: Dict[str, Any]) -> dict:
        """
        Build an OTLP metrics payload.

        Args:
            gauges: Mapping of metric name to (value, unit, description)
            attributes: Data point attributes

        Returns:
            OTLP JSON payload
        """
        timestamp_ns = int(time.time() * 1_000_000_000)
        point_attributes = self._attributes({"service": settings.app_name, **attributes})

        metrics = []
        for name, (value, unit, description) in gauges.items():
            point = {"timeUnixNano": timestamp_ns, "attributes": point_attributes}
            if isinstance(value, float):
                point["asDouble"] = value
            else:
                point["asInt"] = int(value)
            metrics.append({
                "name": name,
                "unit": unit,
                "description": description,
                "gauge": {"dataPoints": [point]}
            })

        return {
            "resourceMetrics": [
                {
                    "resource": {
                        "attributes": self._attributes({
                            "service.name": settings.app_name,
                            "service.version": settings.app_version,
                            "deployment.environment": settings.environment,
                        })
                    },
                    "scopeMetrics": [{"metrics": metrics}]
                }
            ]
        }

    async def _post(self, payload: dict) -> None:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Basic {self._auth_encoded}",
            "X-Grafana-Org-Id": str(self._instance_id)
        }
        async with httpx.AsyncClient(timeout=10.0, transport=self._transport) as client:
            response = await client.post(self._url, headers=headers, json=payload)

        if response.status_code not in (200, 202):
            raise MetricsExportException(
                f"OTLP gateway returned {response.status_code}",
                {"status_code": response.status_code, "response": response.text[:500]}
            )

    async def export_inquiry_metrics(
        self,
        automated: bool,
        confidence: float,
        processing_ms: int,
        template_id: Optional[str] = None,
        category_id: Optional[str] = None
    ) -> bool:
        """
        Export the outcome of one inquiry.

        Returns:
            True if export succeeded, False otherwise
        """
        if not self._enabled:
            return False

        payload = self.build_payload(
            {
                "inquiry_match_confidence": (float(confidence), "1", "Confidence of the chosen template"),
                "inquiry_automated": (1 if automated else 0, "1", "Inquiry received an automated reply"),
                "inquiry_processing_ms": (processing_ms, "ms", "Categorization and matching time"),
            },
            {
                "template_id": template_id or "none",
                "category_id": category_id or "none",
            }
        )

        try:
            await self._post(payload)
        except (httpx.HTTPError, MetricsExportException) as e:
            logger.warning(
                "Failed to export inquiry metrics to Grafana",
                extra={"error": str(e), "url": self._url}
            )
            return False

        logger.debug(
            "Inquiry metrics exported to Grafana",
            extra={"automated": automated, "confidence": confidence}
        )
        return True

    async def export_request_latency(
        self,
        endpoint: str,
        status_code: int,
        latency_ms: int,
        method: str = "POST"
    ) -> bool:
        """
        Export HTTP request latency metrics.

        Returns:
            True if export succeeded
        """
        if not self._enabled:
            return False

        payload = self.build_payload(
            {"http_request_latency_ms": (latency_ms, "ms", "HTTP request latency")},
            {"endpoint": endpoint, "method": method, "status_code": status_code}
        )

        try:
            await self._post(payload)
        except (httpx.HTTPError, MetricsExportException) as e:
            logger.warning(
                "Error exporting request latency to Grafana",
                extra={"error": str(e)}
            )
            return False
        return True


# Global exporter instance
_grafana_exporter: Optional[GrafanaOTLPExporter] = None


def get_grafana_exporter() -> GrafanaOTLPExporter:
    """Get or create global Grafana exporter instance."""
    global _grafana_exporter
    if _grafana_exporter is None:
        _grafana_exporter = GrafanaOTLPExporter()
    return _grafana_exporter


def init_grafana_exporter(
    host: str,
    api_key: str,
    instance_id: str
) -> GrafanaOTLPExporter:
    """Initialize Grafana exporter with credentials."""
    global _grafana_exporter
    _grafana_exporter = GrafanaOTLPExporter(
        host=host,
        api_key=api_key,
        instance_id=instance_id
    )
    return _grafana_exporter
