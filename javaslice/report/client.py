"""HTTP client for the external report-generation service."""

import json
from typing import Any

import httpx


class ReportServiceError(Exception):
    """The report service could not produce a result."""


class ReportClient:
    """Send one piece of Java source to the report service per request."""

    def __init__(
        self,
        base_url: str,
        endpoint: str = "/v1/reports",
        api_key: str | None = None,
        timeout: float = 120.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.endpoint = endpoint
        headers = {"content-type": "application/json"}
        if api_key:
            headers["authorization"] = f"Bearer {api_key}"

        self.client = httpx.Client(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: dict, **kwargs) -> "ReportClient":
        report_config = config.get("report", {})
        return cls(
            base_url=report_config.get("base_url", ""),
            endpoint=report_config.get("endpoint", "/v1/reports"),
            api_key=report_config.get("api_key"),
            timeout=report_config.get("timeout", 120.0),
            **kwargs,
        )

    def generate_report(self, payload: dict) -> Any:
        """POST ``payload`` and return the decoded JSON body (or raw text)."""
        try:
            response = self.client.post(self.endpoint, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ReportServiceError(
                f"Report service returned {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise ReportServiceError(f"Report service unreachable: {e}") from e

        try:
            return response.json()
        except json.JSONDecodeError:
            return response.text

    __call__ = generate_report

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "ReportClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
