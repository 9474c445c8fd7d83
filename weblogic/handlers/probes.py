import datetime
import kopf


def register(registry: kopf.OperatorRegistry) -> None:
    # Liveness probe
    @kopf.on.probe(id="now", registry=registry)
    def get_current_timestamp(**kwargs):
        return datetime.datetime.now(datetime.timezone.utc).isoformat()
