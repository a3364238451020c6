from fastapi import APIRouter, Depends, HTTPException, Path, status

from ..config import get_controller_config, get_network_config
from ..errors import ConfigError
from ..models import ControllerConfig, ManifestResponse, NetworkConfig, Revision, RevisionRequest
from ..revision import container_from_manifest, make_revision_deployment, to_manifest

router = APIRouter(prefix="/v1alpha1", tags=["Revisions"])


# ---------- Dependencies ----------

def controller_config() -> ControllerConfig:
    try:
        return get_controller_config()
    except ConfigError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)


def network_config() -> NetworkConfig:
    return get_network_config()


# ---------- Routes ----------

@router.post(
    "/namespaces/{namespace}/revisions/{name}/manifest",
    response_model=ManifestResponse,
    summary="Render the deployment for a revision",
)
def render_revision_manifest(
    spec: RevisionRequest,
    namespace: str = Path(..., min_length=1),
    name: str = Path(..., min_length=1),
    ctrl_cfg: ControllerConfig = Depends(controller_config),
    net_cfg: NetworkConfig = Depends(network_config),
):
    """
    POST /v1alpha1/namespaces/{namespace}/revisions/{name}/manifest
    Returns the deployment manifest with its pod template filled in.
    Nothing is submitted to the cluster.
    """
    try:
        container = container_from_manifest(spec.container)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=f"invalid container: {e}")

    rev = Revision(
        name=name,
        namespace=namespace,
        uid=spec.uid,
        labels=spec.labels,
        annotations=spec.annotations,
        owner_references=spec.owner_references,
        service_account_name=spec.service_account_name,
        container=container,
    )
    deployment, diagnostic = make_revision_deployment(rev, namespace, ctrl_cfg, net_cfg)

    warnings = []
    if diagnostic is not None:
        warnings.append(f"outbound IP range annotation not set: {diagnostic}")
    if container.lifecycle is not None:
        warnings.append("user lifecycle hook replaced by the queue proxy pre-stop hook")
    return ManifestResponse(deployment=to_manifest(deployment), warnings=warnings)
