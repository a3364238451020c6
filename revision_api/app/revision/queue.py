from kubernetes import client

from ..models import ControllerConfig, Revision
from .constants import (
    QUEUE_ADMIN_PORT,
    QUEUE_ADMIN_PORT_NAME,
    QUEUE_CONTAINER_CPU,
    QUEUE_CONTAINER_NAME,
    QUEUE_HEALTH_PATH,
    QUEUE_PORT,
    QUEUE_PORT_NAME,
)
from .names import get_revision_autoscaler_name, lookup_owning_configuration_name


def make_queue_container(rev: Revision, controller_config: ControllerConfig) -> client.V1Container:
    """
    Build the queue proxy sidecar. All traffic to the user container enters
    through it; it also answers the pre-stop quit call on its admin port.
    """
    return client.V1Container(
        name=QUEUE_CONTAINER_NAME,
        image=controller_config.queue_sidecar_image,
        resources=client.V1ResourceRequirements(
            requests={"cpu": QUEUE_CONTAINER_CPU}
        ),
        ports=[
            client.V1ContainerPort(name=QUEUE_PORT_NAME, container_port=QUEUE_PORT),
            # Provides health checks and lifecycle hooks.
            client.V1ContainerPort(name=QUEUE_ADMIN_PORT_NAME, container_port=QUEUE_ADMIN_PORT),
        ],
        readiness_probe=client.V1Probe(
            http_get=client.V1HTTPGetAction(port=QUEUE_ADMIN_PORT, path=QUEUE_HEALTH_PATH),
        ),
        args=[f"-concurrencyQuantumOfTime={controller_config.concurrency_quantum_of_time}"],
        env=[
            client.V1EnvVar(name="ELA_NAMESPACE", value=rev.namespace),
            client.V1EnvVar(
                name="ELA_CONFIGURATION",
                value=lookup_owning_configuration_name(rev.owner_references),
            ),
            client.V1EnvVar(name="ELA_REVISION", value=rev.name),
            client.V1EnvVar(name="ELA_AUTOSCALER", value=get_revision_autoscaler_name(rev)),
            client.V1EnvVar(name="ELA_AUTOSCALER_PORT", value=str(controller_config.autoscaler_port)),
            client.V1EnvVar(
                name="ELA_POD",
                value_from=client.V1EnvVarSource(
                    field_ref=client.V1ObjectFieldSelector(field_path="metadata.name")
                ),
            ),
            client.V1EnvVar(name="ELA_LOGGING_CONFIG", value=controller_config.logging_config),
            client.V1EnvVar(name="ELA_LOGGING_LEVEL", value=controller_config.logging_level),
        ],
    )
