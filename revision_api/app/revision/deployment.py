import logging
from typing import Optional, Tuple

from kubernetes import client

from ..errors import InvalidIPRangeError
from ..models import NetworkConfig, Revision
from .cidr import validate_outbound_ip_ranges
from .constants import (
    ISTIO_OUTBOUND_IP_RANGE_ANNOTATION,
    POD_MAX_SURGE,
    POD_MAX_UNAVAILABLE,
    POD_REPLICA_COUNT,
    SIDECAR_ISTIO_INJECT_ANNOTATION,
)
from .names import get_revision_deployment_name
from .resources import make_resource_annotations, make_resource_labels, make_resource_selector

_logger = logging.getLogger(__name__)


def make_deployment(
    rev: Revision,
    namespace: str,
    network_config: NetworkConfig,
    logger: Optional[logging.Logger] = None,
) -> Tuple[client.V1Deployment, Optional[InvalidIPRangeError]]:
    """
    Build the deployment shell for a revision.

    The pod template carries metadata only; the caller fills in
    ``spec.template.spec``. A bad outbound IP range never fails the call:
    the annotation is left out, and the error is logged and returned.
    """
    logger = logger or _logger
    diagnostic = None

    pod_template_annotations = make_resource_annotations(rev)
    pod_template_annotations[SIDECAR_ISTIO_INJECT_ANNOTATION] = "true"

    # Inject the IP ranges for the istio sidecar only if the user did not set
    # the annotation and the configured value is non-empty and valid.
    # "*" intercepts calls to all IPs.
    ip_ranges = network_config.istio_outbound_ip_ranges
    if ISTIO_OUTBOUND_IP_RANGE_ANNOTATION not in pod_template_annotations and ip_ranges:
        try:
            validate_outbound_ip_ranges(ip_ranges)
        except InvalidIPRangeError as e:
            logger.error("Failed to parse IP ranges %s. Not setting the annotation. Error: %s", ip_ranges, e)
            diagnostic = e
        else:
            pod_template_annotations[ISTIO_OUTBOUND_IP_RANGE_ANNOTATION] = ip_ranges

    deployment = client.V1Deployment(
        api_version="apps/v1",
        kind="Deployment",
        metadata=client.V1ObjectMeta(
            name=get_revision_deployment_name(rev),
            namespace=namespace,
            labels=make_resource_labels(rev),
            annotations=make_resource_annotations(rev),
        ),
        spec=client.V1DeploymentSpec(
            replicas=POD_REPLICA_COUNT,
            selector=make_resource_selector(rev),
            strategy=client.V1DeploymentStrategy(
                type="RollingUpdate",
                rolling_update=client.V1RollingUpdateDeployment(
                    max_unavailable=POD_MAX_UNAVAILABLE,
                    max_surge=POD_MAX_SURGE,
                ),
            ),
            template=client.V1PodTemplateSpec(
                metadata=client.V1ObjectMeta(
                    labels=make_resource_labels(rev),
                    annotations=pod_template_annotations,
                ),
            ),
        ),
    )
    return deployment, diagnostic
