import copy
import logging
from typing import Optional

from kubernetes import client

from ..models import ControllerConfig, Revision
from .constants import (
    FLUENTD_CONFIG_MAP_NAME,
    FLUENTD_CONFIG_MAP_VOLUME_NAME,
    FLUENTD_CONFIG_MOUNT_PATH,
    FLUENTD_CONTAINER_CPU,
    FLUENTD_CONTAINER_NAME,
    FLUENTD_VAR_LOG_MOUNT_PATH,
    QUEUE_ADMIN_PORT,
    QUEUE_PORT,
    QUEUE_QUIT_PATH,
    USER_CONTAINER_CPU,
    USER_CONTAINER_NAME,
    USER_PORT,
    USER_PORT_NAME,
    VAR_LOG_MOUNT_PATH,
    VAR_LOG_VOLUME_NAME,
)
from .names import lookup_owning_configuration_name
from .queue import make_queue_container

logger = logging.getLogger(__name__)


def has_http_path(probe: Optional[client.V1Probe]) -> bool:
    if probe is None or probe.http_get is None:
        return False
    return bool(probe.http_get.path)


def make_user_container(rev: Revision) -> client.V1Container:
    """
    Copy the revision's container and apply the platform overrides.

    The name, CPU request, ports and pre-stop hook are always overwritten.
    Any lifecycle hook the user declared is discarded; the admission webhook
    rejects such containers before they get here.
    """
    user_container = copy.deepcopy(rev.container)
    # Adding or removing an overwritten field here? Keep
    # routers.admission_webhook.PLATFORM_OWNED_FIELDS in sync.
    user_container.name = USER_CONTAINER_NAME
    user_container.resources = client.V1ResourceRequirements(
        requests={"cpu": USER_CONTAINER_CPU}
    )
    user_container.ports = [
        client.V1ContainerPort(name=USER_PORT_NAME, container_port=USER_PORT)
    ]
    user_container.volume_mounts = list(user_container.volume_mounts or []) + [
        client.V1VolumeMount(name=VAR_LOG_VOLUME_NAME, mount_path=VAR_LOG_MOUNT_PATH)
    ]

    if user_container.lifecycle is not None:
        logger.warning(
            "Revision %s/%s declares a lifecycle hook; replacing it with the queue proxy pre-stop hook",
            rev.namespace, rev.name,
        )
    # The quit call makes the queue proxy fail its next readiness check so
    # no new traffic arrives, and holds the container up while in-flight
    # requests drain.
    user_container.lifecycle = client.V1Lifecycle(
        pre_stop=client.V1LifecycleHandler(
            http_get=client.V1HTTPGetAction(port=QUEUE_ADMIN_PORT, path=QUEUE_QUIT_PATH),
        )
    )

    # Route readiness checks through the queue proxy.
    if has_http_path(user_container.readiness_probe):
        user_container.readiness_probe.http_get.port = QUEUE_PORT

    return user_container


def make_fluentd_container(rev: Revision, controller_config: ControllerConfig) -> client.V1Container:
    return client.V1Container(
        name=FLUENTD_CONTAINER_NAME,
        image=controller_config.fluentd_sidecar_image,
        resources=client.V1ResourceRequirements(
            requests={"cpu": FLUENTD_CONTAINER_CPU}
        ),
        env=[
            client.V1EnvVar(name="FLUENTD_ARGS", value="--no-supervisor -q"),
            client.V1EnvVar(name="ELA_CONTAINER_NAME", value=USER_CONTAINER_NAME),
            client.V1EnvVar(
                name="ELA_CONFIGURATION",
                value=lookup_owning_configuration_name(rev.owner_references),
            ),
            client.V1EnvVar(name="ELA_REVISION", value=rev.name),
            client.V1EnvVar(name="ELA_NAMESPACE", value=rev.namespace),
            client.V1EnvVar(
                name="ELA_POD_NAME",
                value_from=client.V1EnvVarSource(
                    field_ref=client.V1ObjectFieldSelector(field_path="metadata.name")
                ),
            ),
        ],
        volume_mounts=[
            client.V1VolumeMount(name=VAR_LOG_VOLUME_NAME, mount_path=FLUENTD_VAR_LOG_MOUNT_PATH),
            client.V1VolumeMount(name=FLUENTD_CONFIG_MAP_VOLUME_NAME, mount_path=FLUENTD_CONFIG_MOUNT_PATH),
        ],
    )


def make_pod_spec(rev: Revision, controller_config: ControllerConfig) -> client.V1PodSpec:
    """
    Build the pod spec for a revision: the user container, the queue proxy
    and, when var log collection is enabled, the fluentd sidecar.
    ``rev`` is never modified.
    """
    var_log_volume = client.V1Volume(
        name=VAR_LOG_VOLUME_NAME,
        empty_dir=client.V1EmptyDirVolumeSource(),
    )

    pod_spec = client.V1PodSpec(
        containers=[make_user_container(rev), make_queue_container(rev, controller_config)],
        volumes=[var_log_volume],
        service_account_name=rev.service_account_name,
    )

    if controller_config.enable_var_log_collection:
        fluentd_config_map_volume = client.V1Volume(
            name=FLUENTD_CONFIG_MAP_VOLUME_NAME,
            config_map=client.V1ConfigMapVolumeSource(name=FLUENTD_CONFIG_MAP_NAME),
        )
        pod_spec.containers.append(make_fluentd_container(rev, controller_config))
        pod_spec.volumes.append(fluentd_config_map_volume)

    return pod_spec
