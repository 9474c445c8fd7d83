import os
from typing import Any, Optional

_TRUE, _FALSE = {"True", "true", "yes", "1"}, {"False", "false", "no", "0"}


def _getenv(name: str, *default: Any) -> Any:
    try:
        v = os.environ[name]
        if v in _TRUE:
            return True
        elif v in _FALSE:
            return False
        else:
            return v
    except KeyError:
        pass
    if default:
        return default[0]
    raise KeyError(name)


# ------------------------------------------------
# ---- Defaults and environment variables ----
# ------------------------------------------------

#: Namespace to watch. Empty means all namespaces.
WATCH_NAMESPACE = _getenv("WATCH_NAMESPACE", "") or None

#: Seconds between resyncs of every watched object
RESYNC_PERIOD_SECONDS = int(_getenv("RESYNC_PERIOD_SECONDS", 300))

#: Maximum attempts of a conditional WeblogicServer update before giving up on conflicts
STATUS_UPDATE_MAX_ATTEMPTS = int(_getenv("STATUS_UPDATE_MAX_ATTEMPTS", 5))

#: Seconds to wait before re-fetching a WeblogicServer after a conflict
STATUS_UPDATE_RETRY_DELAY_SECONDS = float(
    _getenv("STATUS_UPDATE_RETRY_DELAY_SECONDS", 0.5)
)

#: Container image repository; the server version is used as the tag
WEBLOGIC_IMAGE_REPOSITORY = _getenv(
    "WEBLOGIC_IMAGE_REPOSITORY", "container-registry.oracle.com/middleware/weblogic"
)

#: Expose Prometheus metrics
METRICS_ENABLED = bool(_getenv("METRICS_ENABLED", True))

#: Port of the Prometheus metrics server
METRICS_PORT = int(_getenv("METRICS_PORT", 8000))

#: Kopf liveness endpoint, e.g. http://0.0.0.0:8080/healthz. Empty disables it.
LIVENESS_ENDPOINT = _getenv("LIVENESS_ENDPOINT", "") or None

#: Log verbosity
VERBOSE = bool(_getenv("VERBOSE", False))
DEBUG = bool(_getenv("DEBUG", False))


class Settings:
    """Operator settings"""

    watch_namespace: Optional[str] = WATCH_NAMESPACE
    resync_period_seconds: int = RESYNC_PERIOD_SECONDS
    status_update_max_attempts: int = STATUS_UPDATE_MAX_ATTEMPTS
    status_update_retry_delay_seconds: float = STATUS_UPDATE_RETRY_DELAY_SECONDS
    weblogic_image_repository: str = WEBLOGIC_IMAGE_REPOSITORY
    metrics_enabled: bool = METRICS_ENABLED
    metrics_port: int = METRICS_PORT
    liveness_endpoint: Optional[str] = LIVENESS_ENDPOINT
    verbose: bool = VERBOSE
    debug: bool = DEBUG

    def __init__(
        self,
        *args,
        watch_namespace: str = None,
        resync_period_seconds: int = None,
        status_update_max_attempts: int = None,
        status_update_retry_delay_seconds: float = None,
        weblogic_image_repository: str = None,
        metrics_enabled: bool = None,
        metrics_port: int = None,
        liveness_endpoint: str = None,
        verbose: bool = None,
        debug: bool = None,
        **kwargs,
    ):
        if watch_namespace is not None:
            self.watch_namespace = watch_namespace

        if resync_period_seconds is not None:
            self.resync_period_seconds = resync_period_seconds

        if status_update_max_attempts is not None:
            self.status_update_max_attempts = status_update_max_attempts

        if status_update_retry_delay_seconds is not None:
            self.status_update_retry_delay_seconds = status_update_retry_delay_seconds

        if weblogic_image_repository is not None:
            self.weblogic_image_repository = weblogic_image_repository

        if metrics_enabled is not None:
            self.metrics_enabled = metrics_enabled

        if metrics_port is not None:
            self.metrics_port = metrics_port

        if liveness_endpoint is not None:
            self.liveness_endpoint = liveness_endpoint

        if verbose is not None:
            self.verbose = verbose

        if debug is not None:
            self.debug = debug
