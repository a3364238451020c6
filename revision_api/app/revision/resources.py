from typing import Dict

from kubernetes import client

from ..models import Revision
from .constants import APP_LABEL_KEY, REVISION_LABEL_KEY, REVISION_UID_LABEL_KEY


def make_resource_labels(rev: Revision) -> Dict[str, str]:
    """
    Labels shared by every object created for a revision: the revision's own
    labels plus the revision name/UID, and an app label if the user gave none.
    The revision name/UID labels always win, since the selector matches on them.
    """
    labels = dict(rev.labels)
    labels[REVISION_LABEL_KEY] = rev.name
    labels[REVISION_UID_LABEL_KEY] = rev.uid
    labels.setdefault(APP_LABEL_KEY, rev.name)
    return labels


def make_resource_annotations(rev: Revision) -> Dict[str, str]:
    # Always a fresh dict; callers mutate the result.
    return dict(rev.annotations)


def make_resource_selector(rev: Revision) -> client.V1LabelSelector:
    return client.V1LabelSelector(match_labels={REVISION_LABEL_KEY: rev.name})
