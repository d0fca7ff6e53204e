"""
HTTP client for the remote catalog service.
Repositories use this instead of talking to httpx directly.
"""

from typing import Any, Dict, Optional

import httpx

from ..core.exceptions import CatalogServiceError
from ..utils.logging import setup_catalog_admin_logging

logger = setup_catalog_admin_logging("catalog_api_client")


class CatalogApiClient:
    """Client for the catalog REST API (categories and products)"""

    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            headers=headers,
            transport=transport,
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        correlation_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Send a request and return the decoded JSON body, raising on any failure"""
        headers = {}
        if correlation_id:
            headers["X-Correlation-ID"] = correlation_id

        try:
            response = await self.client.request(
                method,
                path,
                params=params,
                json=json,
                data=data,
                files=files,
                headers=headers,
            )
        except httpx.TimeoutException as e:
            logger.error(
                "Catalog service request timeout",
                extra={
                    "method": method,
                    "path": path,
                    "correlation_id": correlation_id,
                    "error": str(e),
                },
            )
            raise CatalogServiceError(
                f"Catalog service request timeout: {method} {path}"
            ) from e
        except httpx.RequestError as e:
            logger.error(
                "Catalog service connection error",
                extra={
                    "method": method,
                    "path": path,
                    "correlation_id": correlation_id,
                    "error": str(e),
                },
            )
            raise CatalogServiceError(
                f"Cannot connect to catalog service: {str(e)}"
            ) from e

        payload = self._decode(response)

        if response.is_error:
            message = self._error_message(payload, response.status_code)
            logger.warning(
                "Catalog service returned an error",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": response.status_code,
                    "correlation_id": correlation_id,
                    "error": message,
                },
            )
            raise CatalogServiceError(
                message, status_code=response.status_code, payload=payload
            )

        return payload

    @staticmethod
    def _decode(response: httpx.Response) -> Dict[str, Any]:
        if not response.content:
            return {}

        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            try:
                body = response.json()
            except ValueError as e:
                # Gateways in front of the catalog answer with plain error pages
                if response.is_error:
                    return {"message": response.text}
                raise CatalogServiceError(
                    "Catalog service returned malformed JSON",
                    status_code=response.status_code,
                ) from e
            return body if isinstance(body, dict) else {"data": body}

        return {"message": response.text}

    @staticmethod
    def _error_message(payload: Dict[str, Any], status_code: int) -> str:
        errors = payload.get("errors")
        first_error = None
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            first_error = errors[0].get("message")
        return (
            payload.get("message")
            or payload.get("error")
            or first_error
            or f"API request failed with status {status_code}"
        )

    async def close(self):
        """Close the HTTP client"""
        await self.client.aclose()
