"""Status aggregation and command construction for the local stack."""

from .compose import ComposeInvocation, build_compose_command
from .health import HealthCheckResult, HealthState, check_all, check_endpoint, health_targets
from .manager import StackManager
from .profiles import Profile, detect_active_profile, resolve_profile
from .status import AIServices, ServiceSnapshot, StatusAggregator, SupabaseStatus

__all__ = [
    "AIServices",
    "ComposeInvocation",
    "HealthCheckResult",
    "HealthState",
    "Profile",
    "ServiceSnapshot",
    "StackManager",
    "StatusAggregator",
    "SupabaseStatus",
    "build_compose_command",
    "check_all",
    "check_endpoint",
    "detect_active_profile",
    "health_targets",
    "resolve_profile",
]
