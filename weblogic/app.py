import asyncio
import logging
from typing import Optional
import kopf
from kubernetes_asyncio.client import Configuration
from weblogic.client import ClusterClient
from weblogic.handlers import probes, statefulset, weblogicserver
from weblogic.reconciler import Reconciler
from weblogic.sensors import init_metrics_server, SensorDelegate, PrometheusMonitor
from weblogic.types.settings import Settings

logger = logging.getLogger(__name__)


def connection_info(configuration: Configuration) -> kopf.ConnectionInfo:
    """Credentials for kopf's own watch connections, taken from the loaded kubeconfig."""
    api_key = configuration.api_key or {}
    prefixes = configuration.api_key_prefix or {}
    header = None
    for identifier in ("BearerToken", "authorization"):
        if api_key.get(identifier):
            prefix = prefixes.get(identifier)
            header = f"{prefix} {api_key[identifier]}" if prefix else api_key[identifier]
            break

    parts = header.split(" ", 1) if header else []
    if len(parts) == 2:
        scheme, token = parts
    elif len(parts) == 1:
        scheme, token = None, parts[0]
    else:
        scheme, token = None, None

    return kopf.ConnectionInfo(
        server=configuration.host,
        ca_path=configuration.ssl_ca_cert,
        insecure=not configuration.verify_ssl,
        username=configuration.username or None,
        password=configuration.password or None,
        scheme=scheme,
        token=token,
        certificate_path=configuration.cert_file,
        private_key_path=configuration.key_file,
    )


def build_sensor(settings: Settings) -> SensorDelegate:
    sensor_delegate = SensorDelegate()
    if settings.metrics_enabled:
        sensor_delegate.add(PrometheusMonitor())
        logger.info("Sensor infrastructure initialized with PrometheusMonitor")
    return sensor_delegate


def build_operator_settings(settings: Settings) -> kopf.OperatorSettings:
    operator_settings = kopf.OperatorSettings()
    # Post only warnings and errors as Kubernetes events
    operator_settings.posting.enabled = True
    operator_settings.posting.level = logging.WARNING
    return operator_settings


def build_registry(
    reconciler: Reconciler, client: ClusterClient, settings: Settings
) -> kopf.OperatorRegistry:
    """Registry holding every handler of one operator instance."""
    registry = kopf.OperatorRegistry()

    @kopf.on.login(registry=registry)
    def login(**kwargs):
        return connection_info(client.configuration)

    @kopf.on.startup(registry=registry)
    async def setup(logger: logging.Logger, **kwargs):
        if settings.watch_namespace:
            logger.info(f"Watching namespace {settings.watch_namespace}")
        else:
            logger.info("Watching all namespaces")

        if settings.metrics_enabled:
            try:
                init_metrics_server(settings.metrics_port)
            except Exception as e:
                logger.error(f"Failed to start metrics server: {e}")
                # Don't fail operator startup if metrics server fails
                logger.warning("Continuing without metrics server")

    @kopf.on.cleanup(registry=registry)
    async def cleanup(logger: logging.Logger, **kwargs):
        logger.info("Shutting down operator...")

    weblogicserver.register(registry, reconciler, settings)
    statefulset.register(registry, reconciler, settings)
    probes.register(registry)
    return registry


async def run(
    settings: Settings = None,
    stop_flag: Optional[asyncio.Event] = None,
    client: ClusterClient = None,
) -> None:
    """Watch WeblogicServers and StatefulSets until `stop_flag` is set or a signal arrives.

    Both event streams run inside one kopf operator. When it returns the
    cluster client is closed, unless it was passed in by the caller.
    """
    settings = settings or Settings()
    owns_client = client is None
    if owns_client:
        client = await ClusterClient.connect()

    reconciler = Reconciler(client, settings, sensor=build_sensor(settings))
    registry = build_registry(reconciler, client, settings)
    try:
        await kopf.operator(
            registry=registry,
            settings=build_operator_settings(settings),
            stop_flag=stop_flag,
            standalone=True,
            clusterwide=not settings.watch_namespace,
            namespaces=[settings.watch_namespace] if settings.watch_namespace else [],
            liveness_endpoint=settings.liveness_endpoint,
        )
    finally:
        if owns_client:
            await client.close()
            logger.info("Kubernetes API client closed")
    logger.info("Operator shutdown complete")


def main() -> None:
    settings = Settings()
    kopf.configure(verbose=settings.verbose, debug=settings.debug)
    asyncio.run(run(settings))
