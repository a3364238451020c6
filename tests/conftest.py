"""
Shared fixtures: revisions, controller and network configs.
"""

import pytest
from kubernetes import client

from revision_api.app.models import ControllerConfig, NetworkConfig, OwnerReference, Revision


def make_container(**overrides) -> client.V1Container:
    args = dict(
        name="app",
        image="gcr.io/example/hello:latest",
        env=[client.V1EnvVar(name="TARGET", value="world")],
        resources=client.V1ResourceRequirements(
            requests={"cpu": "2", "memory": "512Mi"},
        ),
        ports=[client.V1ContainerPort(name="http", container_port=9000)],
    )
    args.update(overrides)
    return client.V1Container(**args)


def make_revision(**overrides) -> Revision:
    args = dict(
        name="hello-00001",
        namespace="default",
        uid="1234-5678",
        labels={"serving.knative.dev/configuration": "hello"},
        annotations={"example.com/owner": "team-a"},
        owner_references=[
            OwnerReference(kind="Configuration", name="hello", controller=True),
        ],
        service_account_name="builder",
        container=make_container(),
    )
    args.update(overrides)
    return Revision(**args)


@pytest.fixture
def revision() -> Revision:
    return make_revision()


@pytest.fixture
def controller_config() -> ControllerConfig:
    return ControllerConfig(queue_sidecar_image="gcr.io/example/queue:latest")


@pytest.fixture
def logging_controller_config() -> ControllerConfig:
    return ControllerConfig(
        queue_sidecar_image="gcr.io/example/queue:latest",
        enable_var_log_collection=True,
        fluentd_sidecar_image="gcr.io/example/fluentd:latest",
    )


@pytest.fixture
def network_config() -> NetworkConfig:
    return NetworkConfig(istio_outbound_ip_ranges="10.0.0.0/8,192.168.0.0/16")
