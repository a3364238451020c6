import logging
from typing import Any, Dict

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ..errors import ContainerValidationError

router = APIRouter(prefix="/admission", tags=["AdmissionWebhook"])

logger = logging.getLogger(__name__)

# Container fields the pod synthesizer overwrites. Users may not set them.
PLATFORM_OWNED_FIELDS = ("name", "resources", "ports", "volumeMounts", "lifecycle")


def validate_container(container: Dict[str, Any]) -> None:
    """
    Reject a revision container that sets fields the platform owns, or that
    pins the port of its HTTP readiness check (readiness goes through the
    queue proxy).
    """
    for field in PLATFORM_OWNED_FIELDS:
        if container.get(field):
            raise ContainerValidationError(
                f"field {field!r} is managed by the platform and must not be set",
                field=field,
                value=container[field],
            )
    http_get = (container.get("readinessProbe") or {}).get("httpGet") or {}
    if http_get.get("port") not in (None, "", 0):
        raise ContainerValidationError(
            "readinessProbe.httpGet.port is managed by the platform and must not be set",
            field="readinessProbe.httpGet.port",
            value=http_get["port"],
        )


class AdmissionReview(BaseModel):
    request: dict


@router.post("/validate")
async def validate(request: Request):
    body = await request.json()
    admission = AdmissionReview(**body)
    uid = admission.request.get("uid")
    rev_spec = admission.request.get("object", {}).get("spec", {})
    container = rev_spec.get("container") or {}

    allowed = True
    message = ""
    try:
        validate_container(container)
    except ContainerValidationError as e:
        allowed = False
        message = e.message
        logger.info("Denied revision %s: %s", admission.request.get("name"), message)

    response = {
        "apiVersion": "admission.k8s.io/v1",
        "kind": "AdmissionReview",
        "response": {
            "uid": uid,
            "allowed": allowed,
        }
    }
    if not allowed:
        response["response"]["status"] = {
            "code": 403,
            "message": message,
        }
    return response
