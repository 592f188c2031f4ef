"""
Verification of the storage account logging pipeline.

Covers the diagnostic setting that routes logs to Log Analytics, and
the two ingestion pollers that confirm a probe request or an
administrative change made it into the logs. Ingestion is slow, so the
pollers wait ``minimum_ingestion_seconds`` before the first query and
then retry every ``polling_delay_seconds`` until
``maximum_ingestion_seconds`` have elapsed.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta
from typing import Callable

from ccc_abs.catalog import messages
from ccc_abs.cloud.base import CloudOperationError, DiagnosticSetting, LogQueryResult
from ccc_abs.cloud.http import HttpResponse
from ccc_abs.cloud.interfaces import (
    ActivityLogsClient,
    DiagnosticSettingsClient,
    LogsQueryClient,
)
from ccc_abs.config import LogPollingSettings
from ccc_abs.engine.protocol import set_result_failure
from ccc_abs.models import LogAnalyticsWorkspace, TestResult

logger = logging.getLogger(__name__)

DIAGNOSTIC_SETTINGS_TYPE = "microsoft.insights/diagnosticsettings"

WORKSPACE_ID_PATTERN = re.compile(
    r"^/subscriptions/[0-9a-z-]+?/resourceGroups/.+?"
    r"/providers/Microsoft\.OperationalInsights/workspaces/(.*?)$",
    re.IGNORECASE,
)

# Category groups that include read, write and delete logs
COVERING_CATEGORY_GROUPS = frozenset({"audit", "alllogs"})
REQUIRED_CATEGORIES = frozenset({"storageread", "storagewrite", "storagedelete"})

REQUIRED_LOG_FIELDS = ("TimeGenerated", "RequesterObjectId", "StatusCode")
QUERY_WINDOW = timedelta(minutes=2)
CORRELATION_HEADER = "x-ms-correlation-request-id"
REQUEST_ID_HEADER = "x-ms-request-id"


def workspace_name(workspace_id: str) -> str:
    """Short name of a Log Analytics workspace, or the full id when unparsable."""
    match = WORKSPACE_ID_PATTERN.match(workspace_id)
    if match and match.group(1):
        return match.group(1)
    return workspace_id


def covers_read_write_delete(setting: DiagnosticSetting) -> bool:
    """Check if the enabled logs of a setting cover read, write and delete."""
    categories: set[str] = set()
    for log in setting.logs:
        if not log.enabled:
            continue
        if log.category_group and log.category_group.lower() in COVERING_CATEGORY_GROUPS:
            return True
        if log.category:
            categories.add(log.category.lower())
    return REQUIRED_CATEGORIES <= categories


def format_timestamp(value: datetime) -> str:
    """RFC 3339 timestamp in UTC, as used in activity log filters."""
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


class LogVerifier:
    """
    Checks and pollers for the storage account logs.

    Args:
        diagnostic_settings: Diagnostic settings reader
        logs: Log Analytics query client
        activity_logs: Activity log reader
        polling: Poller timing
        sleep: Blocks for the given number of seconds
        now: Returns the current aware UTC time
    """

    def __init__(
        self,
        diagnostic_settings: DiagnosticSettingsClient,
        logs: LogsQueryClient,
        activity_logs: ActivityLogsClient,
        polling: LogPollingSettings,
        sleep: Callable[[float], None],
        now: Callable[[], datetime],
    ):
        self._diagnostic_settings = diagnostic_settings
        self._logs = logs
        self._activity_logs = activity_logs
        self.polling = polling
        self._sleep = sleep
        self._now = now

    def confirm_logging_to_log_analytics_is_configured(
        self, resource_id: str, result: TestResult
    ) -> None:
        """
        Pass when a diagnostic setting sends read, write and delete logs to
        a Log Analytics workspace.

        Args:
            resource_id: Resource whose diagnostic settings are checked
            result: Test result to evaluate into
        """
        try:
            settings = list(self._diagnostic_settings.list(resource_id))
        except CloudOperationError as e:
            set_result_failure(
                result, messages.DIAGNOSTIC_SETTING_NOT_FOUND.format(error=e)
            )
            return

        for setting in settings:
            if setting.type.lower() != DIAGNOSTIC_SETTINGS_TYPE:
                continue
            if not setting.workspace_id:
                continue
            if not covers_read_write_delete(setting):
                logger.debug(
                    f"Diagnostic setting {setting.name} does not cover read, write and delete"
                )
                continue

            name = workspace_name(setting.workspace_id)
            result.passed = True
            result.message = messages.LOG_ANALYTICS_CONFIGURED
            result.value = LogAnalyticsWorkspace(name=name, value=name)
            return

        set_result_failure(result, messages.LOG_ANALYTICS_NOT_CONFIGURED)

    def _wait_for_ingestion(self) -> None:
        logger.info(
            f"Waiting {self.polling.minimum_ingestion_seconds:.0f} seconds "
            "for logs to be ingested"
        )
        self._sleep(self.polling.initial_wait_seconds)

    def confirm_http_response_is_logged(
        self, response: HttpResponse, resource_id: str, result: TestResult
    ) -> None:
        """
        Poll Log Analytics until the probe request shows up in StorageBlobLogs.

        Args:
            response: Response of the probe request
            resource_id: Resource the logs are queried on
            result: Test result to evaluate into
        """
        request_id = response.header(REQUEST_ID_HEADER)
        if not request_id:
            set_result_failure(
                result,
                messages.NO_REQUEST_ID.format(header=REQUEST_ID_HEADER, url=response.url),
            )
            return

        query = (
            f"StorageBlobLogs | where StatusCode == {response.status_code} "
            f"and CorrelationId == '{request_id}'"
        )
        now = self._now()
        start, end = now - QUERY_WINDOW, now + QUERY_WINDOW

        self._wait_for_ingestion()

        for attempt in range(self.polling.retries):
            self._sleep(self.polling.polling_delay_seconds)
            try:
                query_result = self._logs.query_resource(resource_id, query, start, end)
            except CloudOperationError as e:
                set_result_failure(result, messages.LOG_QUERY_FAILED.format(error=e))
                return

            if query_result.error_code:
                set_result_failure(
                    result, messages.LOG_QUERY_ERROR.format(code=query_result.error_code)
                )
                return

            if len(query_result.tables) == 1 and query_result.tables[0].rows:
                self._check_required_fields(query_result, response, result)
                return

            logger.info(
                f"Log entry for request {request_id} not found after attempt {attempt + 1}"
            )

        set_result_failure(
            result,
            messages.RESPONSE_NOT_LOGGED.format(
                status_code=response.status_code, url=response.url
            ),
        )

    def _check_required_fields(
        self, query_result: LogQueryResult, response: HttpResponse, result: TestResult
    ) -> None:
        table = query_result.tables[0]
        try:
            indexes = [table.columns.index(name) for name in REQUIRED_LOG_FIELDS]
        except ValueError:
            set_result_failure(result, messages.LOG_MISSING_COLUMNS)
            return

        row = table.rows[0]
        for index in indexes:
            if index >= len(row) or row[index] in (None, ""):
                set_result_failure(result, messages.LOG_MISSING_VALUES)
                return

        result.passed = True
        result.message = messages.RESPONSE_LOGGED.format(
            status_code=response.status_code, host=response.host
        )

    def confirm_admin_activity_is_logged(
        self,
        headers: dict[str, str],
        activity_timestamp: datetime,
        result: TestResult,
    ) -> None:
        """
        Poll the activity log until the management call shows up.

        Args:
            headers: Response headers of the management call, lower-cased
            activity_timestamp: When the management call was made
            result: Test result to evaluate into
        """
        correlation_id = headers.get(CORRELATION_HEADER, "")
        if not correlation_id:
            set_result_failure(
                result, messages.NO_CORRELATION_ID.format(header=CORRELATION_HEADER)
            )
            return

        filter = (
            f"eventTimestamp ge '{format_timestamp(activity_timestamp - QUERY_WINDOW)}' "
            f"and correlationId eq '{correlation_id}'"
        )

        self._wait_for_ingestion()

        for attempt in range(self.polling.retries):
            self._sleep(self.polling.polling_delay_seconds)
            try:
                events = list(self._activity_logs.list(filter))
            except CloudOperationError as e:
                set_result_failure(
                    result, messages.ACTIVITY_LOG_QUERY_FAILED.format(error=e)
                )
                return

            if events:
                event = events[0]
                result.passed = True
                result.message = messages.ACTIVITY_LOGGED.format(
                    operation=event.operation_name, resource=event.resource_id
                )
                return

            logger.info(
                f"Activity for correlation id {correlation_id} not found "
                f"after attempt {attempt + 1}"
            )

        set_result_failure(result, messages.ACTIVITY_NOT_LOGGED)
