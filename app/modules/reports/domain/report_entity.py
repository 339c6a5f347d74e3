"""Report domain entity with the validate/merge/commit update protocol."""

import copy
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from app.modules.reports.constants import FIELDS_NOT_EDITABLE, LAST_EDIT_FORMAT
from app.modules.reports.domain.report_id import ReportId
from app.modules.reports.patch import ReportPatch
from app.modules.reports.validation import ReportValidation


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Report:
    """A report configuration document and its identity.

    The held document is only replaced once an update has passed every check,
    so a failed update leaves ``info`` exactly as it was.
    """

    def __init__(
        self,
        id: ReportId,
        info: dict[str, Any],
        clock: Callable[[], datetime] = utc_now,
    ):
        self._id = id
        self._info = info
        self._clock = clock

    @property
    def id(self) -> ReportId:
        return self._id

    @property
    def info(self) -> dict[str, Any]:
        return self._info

    def retrieve_info_data(self, data: dict[str, Any]) -> dict[str, Any]:
        """Full replace: overlay ``data`` on the current document, minus immutable fields."""
        replacement = {key: value for key, value in data.items() if key not in FIELDS_NOT_EDITABLE}
        return {**copy.deepcopy(self._info), **copy.deepcopy(replacement)}

    def update(
        self,
        hostname: str,
        subfolder: str | None,
        user_id: int | str,
        user_level: str,
        is_datalake_v2_active: bool,
        download_link_enabled: bool,
        is_patch: bool,
        data: dict[str, Any],
    ) -> None:
        """Validate and apply a full replace or a patch.

        Args:
            hostname: Caller hostname, stamped on active plannings.
            subfolder: Caller subfolder, stamped on active plannings.
            user_id: Editing user, stamped on ``lastEditBy``.
            user_level: Level of the editing user.
            is_datalake_v2_active: Tenant runs datalake v2.
            download_link_enabled: Download-permission-link feature flag.
            is_patch: Partial update (True) or full replace (False).
            data: Incoming payload.

        Raises:
            ReportException: When the payload or the merged document is invalid.
        """
        ReportValidation.validate(self._info, user_level, download_link_enabled, is_patch, data)

        if is_patch:
            new_info = ReportPatch.execute(copy.deepcopy(self._info), data)
        else:
            new_info = self.retrieve_info_data(data)

        ReportValidation.check_filters(new_info)
        ReportValidation.check_date_options(new_info)
        ReportValidation.check_enrollment(new_info)
        ReportValidation.check_mandatory_fields(is_datalake_v2_active, new_info)
        ReportValidation.check_mandatory_fields_for_specific_report(new_info)

        new_info["lastEdit"] = self._clock().astimezone(timezone.utc).strftime(LAST_EDIT_FORMAT)
        last_edit_by = new_info.get("lastEditBy")
        if not isinstance(last_edit_by, dict):
            last_edit_by = new_info["lastEditBy"] = {}
        last_edit_by["idUser"] = user_id
        for name in ("firstname", "lastname", "username", "avatar"):
            last_edit_by[name] = ""

        planning = new_info.get("planning")
        if isinstance(planning, dict) and planning.get("active") and isinstance(planning.get("option"), dict):
            planning["option"]["hostname"] = hostname
            planning["option"]["subfolder"] = subfolder or ""

        self._info = new_info
