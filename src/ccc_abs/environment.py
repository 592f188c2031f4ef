"""
Run environment for the CCC assessment engine.

The Environment carries everything a test check needs: the target
snapshot, the run options, the cloud capability clients and the domain
helpers built on top of them. It is created once by the bootstrap and
passed to every test requirement, so tests never reach for globals.
"""

from __future__ import annotations

import random
import string
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from ccc_abs.cloud.http import HttpTransport
from ccc_abs.cloud.identity import TokenSource
from ccc_abs.cloud.interfaces import CloudClients
from ccc_abs.config import LogPollingSettings
from ccc_abs.helpers.blobs import BlobFixtures
from ccc_abs.helpers.delete_protection import DeleteProtection
from ccc_abs.helpers.log_verification import LogVerifier
from ccc_abs.helpers.regions import RegionRestrictions
from ccc_abs.helpers.tls import TlsProbe
from ccc_abs.helpers.versioning import BlobVersioning
from ccc_abs.models import TargetSnapshot


def random_string(length: int) -> str:
    """Random lowercase ASCII string, valid in account and container names."""
    return "".join(random.choices(string.ascii_lowercase, k=length))


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass
class Environment:
    """
    Collaborators shared by every test in a run.

    Attributes:
        target: Snapshot of the audited storage account
        allowed_regions: Regions the organization allows
        invasive: Whether tests that mutate the account may run
        clients: Cloud capability clients
        tokens: Bearer tokens for the storage data plane
        http: Transport for data plane probes
        tls: Transport security probes
        logs: Log configuration check and ingestion pollers
        versioning: Blob versioning checks and probes
        protection: Soft delete and immutability checks
        regions: Region restriction checks and probes
        blobs: Test container and blob fixtures
        polling: Log ingestion poller timing
        random_string: Generator for random resource names
        sleep: Blocks for the given number of seconds
        now: Returns the current aware UTC time
    """

    target: TargetSnapshot
    allowed_regions: list[str]
    invasive: bool
    clients: CloudClients
    tokens: TokenSource
    http: HttpTransport
    tls: TlsProbe
    logs: LogVerifier
    versioning: BlobVersioning
    protection: DeleteProtection
    regions: RegionRestrictions
    blobs: BlobFixtures
    polling: LogPollingSettings = field(default_factory=LogPollingSettings)
    random_string: Callable[[int], str] = random_string
    sleep: Callable[[float], None] = time.sleep
    now: Callable[[], datetime] = utc_now

    @classmethod
    def create(
        cls,
        target: TargetSnapshot,
        allowed_regions: list[str],
        invasive: bool,
        clients: CloudClients,
        tokens: TokenSource,
        http: HttpTransport | None = None,
        polling: LogPollingSettings | None = None,
        random_string: Callable[[int], str] = random_string,
        sleep: Callable[[float], None] = time.sleep,
        now: Callable[[], datetime] = utc_now,
    ) -> Environment:
        """
        Build an environment and wire the domain helpers to its collaborators.

        Args:
            target: Snapshot of the audited storage account
            allowed_regions: Regions the organization allows
            invasive: Whether tests that mutate the account may run
            clients: Cloud capability clients
            tokens: Bearer tokens for the storage data plane
            http: Transport for data plane probes
            polling: Log ingestion poller timing
            random_string: Generator for random resource names
            sleep: Blocks for the given number of seconds
            now: Returns the current aware UTC time

        Returns:
            Environment ready to run test requirements
        """
        http = http or HttpTransport()
        polling = polling or LogPollingSettings()

        return cls(
            target=target,
            allowed_regions=list(allowed_regions),
            invasive=invasive,
            clients=clients,
            tokens=tokens,
            http=http,
            tls=TlsProbe(http),
            logs=LogVerifier(
                diagnostic_settings=clients.diagnostic_settings,
                logs=clients.logs,
                activity_logs=clients.activity_logs,
                polling=polling,
                sleep=sleep,
                now=now,
            ),
            versioning=BlobVersioning(target.blob_service),
            protection=DeleteProtection(target.account, target.blob_service),
            regions=RegionRestrictions(
                accounts=clients.accounts,
                vaults=clients.recovery_vaults,
                storage_skus=clients.storage_skus,
                subscriptions=clients.subscriptions,
                resource_id=target.resource_id,
                allowed_regions=allowed_regions,
                random_string=random_string,
                sleep=sleep,
            ),
            blobs=BlobFixtures(
                containers=clients.blob_containers,
                block_blob_factory=clients.block_blob_factory,
                blob_listing_factory=clients.blob_listing_factory,
                resource_id=target.resource_id,
                primary_uri=target.primary_uri,
                random_string=random_string,
            ),
            polling=polling,
            random_string=random_string,
            sleep=sleep,
            now=now,
        )
