from . import probes, statefulset, weblogicserver

__all__ = [
    "probes",
    "statefulset",
    "weblogicserver",
]
