"""Conversion between the backend user representation and the editable model."""

import logging
from typing import Any

from application.constants import DIVISIONS_KEY, REVISION_KEY
from domain.schemas import REVISION_BASELINE, EditableUser, UserRecord

logger = logging.getLogger(__name__)


def project_user(record: UserRecord, *, revision_baseline: int = REVISION_BASELINE) -> EditableUser:
    """
    Flatten a populated UserRecord into the editable model.

    Nested division/OU documents are replaced by their ids. The server's
    revision marker is dropped and `revision_baseline` is used instead.
    Fields outside the editable model are not carried over.
    """
    if record.revision is not None and record.revision != revision_baseline:
        logger.debug(
            "Ignoring server revision %s for user %s (sending %s)",
            record.revision,
            record.id,
            revision_baseline,
        )

    return EditableUser(
        id=record.id,
        username=record.username,
        password=record.password,
        role=record.role,
        divisions=[d.id for d in record.divisions],
        ous=[ou.id for ou in record.ous],
        revision=revision_baseline,
    )


def build_update_payload(user: EditableUser, *, revision_baseline: int = REVISION_BASELINE) -> dict[str, Any]:
    """
    Serialize the editable user into the PUT body.

    Every division id is sent in its string form. The revision marker is
    always `revision_baseline`. Everything else is passed through; unset
    optional fields are omitted.
    """
    payload = user.model_dump(mode="json", by_alias=True, exclude_none=True)
    payload[DIVISIONS_KEY] = [str(division_id) for division_id in user.divisions]
    payload[REVISION_KEY] = revision_baseline
    return payload
