import re
from typing import Any, Dict, Optional, Tuple

from kubernetes import client

from ..errors import InvalidIPRangeError
from ..models import ControllerConfig, NetworkConfig, Revision
from .constants import USER_PORT
from .deployment import make_deployment
from .pod import make_pod_spec

_api_client = client.ApiClient()

_LIST_TYPE = re.compile(r"^list\[(.+)\]$")
_DICT_TYPE = re.compile(r"^dict\(([^,]+), (.+)\)$")
_PRIMITIVE_TYPES = {"str": str, "int": int, "float": float, "bool": bool}


def make_revision_deployment(
    rev: Revision,
    namespace: str,
    controller_config: ControllerConfig,
    network_config: NetworkConfig,
) -> Tuple[client.V1Deployment, Optional[InvalidIPRangeError]]:
    """Deployment for ``rev`` with its pod spec embedded in the pod template."""
    deployment, diagnostic = make_deployment(rev, namespace, network_config)
    deployment.spec.template.spec = make_pod_spec(rev, controller_config)
    return deployment, diagnostic


def to_manifest(obj: Any) -> Dict[str, Any]:
    """Serialize a client model into a plain dict with API field names."""
    return _api_client.sanitize_for_serialization(obj)


def _from_manifest(data: Any, type_name: str) -> Any:
    # type_name uses the client's openapi_types notation.
    if data is None:
        return None
    match = _LIST_TYPE.match(type_name)
    if match:
        if not isinstance(data, list):
            raise ValueError(f"expected a list for {type_name}, got {type(data).__name__}")
        return [_from_manifest(item, match.group(1)) for item in data]
    match = _DICT_TYPE.match(type_name)
    if match:
        if not isinstance(data, dict):
            raise ValueError(f"expected an object for {type_name}, got {type(data).__name__}")
        return {k: _from_manifest(v, match.group(2)) for k, v in data.items()}
    if type_name in ("object", "datetime", "date"):
        return data
    if type_name in _PRIMITIVE_TYPES:
        if isinstance(data, (dict, list)):
            raise ValueError(f"expected {type_name}, got {type(data).__name__}")
        return _PRIMITIVE_TYPES[type_name](data)

    klass = getattr(client, type_name)
    if not isinstance(data, dict):
        raise ValueError(f"expected an object for {type_name}, got {type(data).__name__}")
    kwargs = {
        attr: _from_manifest(data[klass.attribute_map[attr]], attr_type)
        for attr, attr_type in klass.openapi_types.items()
        if klass.attribute_map[attr] in data
    }
    return klass(**kwargs)


def container_from_manifest(data: Dict[str, Any]) -> client.V1Container:
    """
    Build a V1Container from a JSON container object, following the model
    classes' own ``openapi_types``/``attribute_map``. Raises ValueError when
    the object does not describe a valid container.
    """
    data = dict(data)
    # The name is always replaced by the platform; the model requires one.
    data.setdefault("name", "")
    # Admitted containers leave the readiness port unset; it defaults to the
    # user port and is pointed at the queue proxy when the probe has a path.
    probe = data.get("readinessProbe")
    if isinstance(probe, dict) and isinstance(probe.get("httpGet"), dict) and probe["httpGet"].get("port") is None:
        data["readinessProbe"] = dict(probe, httpGet=dict(probe["httpGet"], port=USER_PORT))
    return _from_manifest(data, "V1Container")
