"""
Catalog Admin Health Check Utilities
====================================

Self-contained health reporting for the catalog admin backend.
"""

import time
from typing import Any, Callable, Dict

_START_TIME = time.time()


class CatalogAdminHealthChecker:
    """Runs named health checks and aggregates their status"""

    def __init__(self, service_name: str = "catalog_admin") -> None:
        self.service_name = service_name
        self.checks: Dict[str, Callable[[], Dict[str, Any]]] = {}

    def add_check(self, name: str, check_func: Callable[[], Dict[str, Any]]) -> None:
        """Add a health check function"""
        self.checks[name] = check_func

    def run_checks(self) -> Dict[str, Any]:
        results = {}
        check_start_time = time.time()

        for name, check_func in self.checks.items():
            individual_start = time.time()
            try:
                result = check_func()
                result["duration_ms"] = round(
                    (time.time() - individual_start) * 1000, 2
                )
                results[name] = result
            except Exception as e:
                results[name] = {
                    "status": "error",
                    "error": str(e),
                    "duration_ms": round((time.time() - individual_start) * 1000, 2),
                }

        return {
            "service": self.service_name,
            "status": "healthy"
            if all(r.get("status") == "healthy" for r in results.values())
            else "unhealthy",
            "checks": results,
            "total_duration_ms": round((time.time() - check_start_time) * 1000, 2),
            "uptime_seconds": round(time.time() - _START_TIME, 2),
            "timestamp": time.time(),
        }


def create_catalog_admin_health_check(
    service_name: str = "catalog_admin",
    version: str = "1.0.0",
    catalog_api_url: str = "",
) -> Dict[str, Any]:
    """Create basic Catalog Admin health check"""
    health_checker = CatalogAdminHealthChecker(service_name)

    def basic_check() -> Dict[str, Any]:
        return {
            "status": "healthy",
            "message": "Catalog Admin is running",
            "version": version,
            "component": "core",
        }

    def catalog_config_check() -> Dict[str, Any]:
        if not catalog_api_url:
            return {
                "status": "unhealthy",
                "message": "Catalog API base URL is not configured",
                "component": "catalog_api",
            }
        return {
            "status": "healthy",
            "message": "Catalog API configured",
            "catalog_api_url": catalog_api_url,
            "component": "catalog_api",
        }

    health_checker.add_check("basic", basic_check)
    health_checker.add_check("catalog_api", catalog_config_check)
    return health_checker.run_checks()
