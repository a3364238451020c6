from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Any, List, Optional, Dict
from kubernetes import client


class Metadata(BaseModel):
    name: str = Field(..., min_length=1)
    namespace: str = Field(..., min_length=1)


class OwnerReference(BaseModel):
    api_version: str = "serving.knative.dev/v1alpha1"
    kind: str
    name: str
    uid: str = ""
    controller: bool = False


class Revision(Metadata):
    """
    A revision as handed to the synthesizers: identity plus the user's container.
    Treated as read-only; synthesis works on copies of ``container``.
    """
    uid: str = ""
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)
    owner_references: List[OwnerReference] = Field(default_factory=list)
    service_account_name: Optional[str] = None
    container: client.V1Container

    model_config = ConfigDict(arbitrary_types_allowed=True)


class ControllerConfig(BaseModel):
    queue_sidecar_image: str = Field(..., min_length=1)
    autoscaler_port: int = Field(8080, gt=0, lt=65536)
    concurrency_quantum_of_time: str = "100ms"
    logging_config: str = ""
    logging_level: str = "info"
    enable_var_log_collection: bool = False
    fluentd_sidecar_image: Optional[str] = None

    @model_validator(mode="after")
    def _fluentd_image_required(self):
        if self.enable_var_log_collection and not self.fluentd_sidecar_image:
            raise ValueError("fluentd_sidecar_image is required when var log collection is enabled")
        return self


class NetworkConfig(BaseModel):
    istio_outbound_ip_ranges: str = ""


class RevisionRequest(BaseModel):
    uid: str = ""
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)
    owner_references: List[OwnerReference] = Field(default_factory=list)
    service_account_name: Optional[str] = None
    container: Dict[str, Any]

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "labels": {"serving.knative.dev/configuration": "hello"},
            "owner_references": [{"kind": "Configuration", "name": "hello", "controller": True}],
            "service_account_name": "builder",
            "container": {
                "image": "gcr.io/example/hello:latest",
                "env": [{"name": "TARGET", "value": "world"}],
                "readinessProbe": {"httpGet": {"path": "/healthz"}},
            },
        }
    })


class ManifestResponse(BaseModel):
    deployment: Dict[str, Any]
    warnings: List[str] = Field(default_factory=list)
