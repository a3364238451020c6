from typing import Iterable

from ..models import OwnerReference, Revision

CONFIGURATION_KIND = "Configuration"


def get_revision_deployment_name(rev: Revision) -> str:
    return f"{rev.name}-deployment"


def get_revision_autoscaler_name(rev: Revision) -> str:
    return f"{rev.name}-autoscaler"


def lookup_owning_configuration_name(owner_references: Iterable[OwnerReference]) -> str:
    """Name of the first owning Configuration, or "" when there is none."""
    for ref in owner_references:
        if ref.kind == CONFIGURATION_KIND:
            return ref.name
    return ""
