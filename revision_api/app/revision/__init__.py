from .cidr import validate_outbound_ip_ranges
from .compose import container_from_manifest, make_revision_deployment, to_manifest
from .deployment import make_deployment
from .pod import make_pod_spec
from .queue import make_queue_container

__all__ = [
    "container_from_manifest",
    "make_deployment",
    "make_pod_spec",
    "make_queue_container",
    "make_revision_deployment",
    "to_manifest",
    "validate_outbound_ip_ranges",
]
