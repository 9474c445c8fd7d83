"""WebLogic Operator Sensor Framework.

Hook-based instrumentation of the reconciliation engine. Sensors observe
reconciliations, dependent resource syncs, status writes and dropped events
without the engine knowing what they do with them.

Key components:
- OperatorSensor: Base class defining lifecycle hooks for operator events
- SensorDelegate: Fan-out pattern for routing events to multiple sensor backends
- PrometheusMonitor: Prometheus metrics exporter

Usage:
    from weblogic.sensors import OperatorSensor, SensorDelegate

    class CustomSensor(OperatorSensor):
        def on_reconcile_complete(self, server_name, namespace, state, success, error=None):
            print(f"Reconciled {server_name}: {success}")

    delegate = SensorDelegate()
    delegate.add(CustomSensor())
    delegate.add(PrometheusMonitor())
"""

from weblogic.sensors.base import OperatorSensor
from weblogic.sensors.delegate import SensorDelegate
from weblogic.sensors.prometheus import PrometheusMonitor
from weblogic.sensors.server import init_metrics_server

__all__ = [
    'OperatorSensor',
    'SensorDelegate',
    'PrometheusMonitor',
    'init_metrics_server',
]
