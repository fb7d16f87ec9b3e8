"""HTTP reachability checks for running services."""

import http.client
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .status import ServiceSnapshot
from .urls import endpoints_for

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 3.0


class HealthState(str, Enum):
    REACHABLE = "reachable"
    UNREACHABLE = "unreachable"
    DEGRADED = "degraded"  # responded, but not 2xx


@dataclass(frozen=True)
class HealthCheckResult:
    label: str
    url: str
    state: HealthState
    status_code: Optional[int] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.state == HealthState.REACHABLE


def health_targets(snapshot: ServiceSnapshot) -> list[tuple[str, str]]:
    """(label, url) pairs for the HTTP services the snapshot reports as running."""
    running = snapshot.ai.as_dict()
    targets = []
    for endpoint in endpoints_for("all"):
        if not endpoint.probe:
            continue
        if endpoint.stack == "ai" and not running.get(endpoint.slot or "", False):
            continue
        if endpoint.stack == "supabase" and not snapshot.supabase.running:
            continue
        targets.append((endpoint.label, endpoint.url))
    return targets


def check_endpoint(label: str, url: str, timeout: float = DEFAULT_TIMEOUT) -> HealthCheckResult:
    """Send a HEAD request and classify the outcome.

    2xx is reachable, any other HTTP status is degraded, and no response
    within ``timeout`` seconds (refused, DNS failure, timeout) or a reply
    that is not HTTP at all is unreachable.
    """
    req = urllib.request.Request(url, method="HEAD")
    try:
        with urllib.request.urlopen(req, timeout=timeout) as response:
            status = response.status
    except urllib.error.HTTPError as e:
        logger.debug(f"{label} answered {e.code}")
        return HealthCheckResult(label, url, HealthState.DEGRADED, status_code=e.code)
    except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as e:
        reason = getattr(e, "reason", e)
        logger.debug(f"{label} not responding: {reason}")
        return HealthCheckResult(label, url, HealthState.UNREACHABLE, detail=str(reason))

    if 200 <= status < 300:
        return HealthCheckResult(label, url, HealthState.REACHABLE, status_code=status)
    return HealthCheckResult(label, url, HealthState.DEGRADED, status_code=status)


def check_all(
    targets: list[tuple[str, str]],
    timeout: float = DEFAULT_TIMEOUT,
) -> list[HealthCheckResult]:
    """Probe each target independently, in declaration order."""
    return [check_endpoint(label, url, timeout) for label, url in targets]
