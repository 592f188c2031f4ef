"""
Domain helpers for the CCC assessment engine.

Each helper wraps the cloud capability clients for one concern (TLS,
logging pipeline, versioning, delete protection, regions, blob fixtures)
and writes its verdict into the TestResult it is given.
"""

from ccc_abs.helpers.blobs import BlobFixture, BlobFixtures
from ccc_abs.helpers.delete_protection import DeleteProtection
from ccc_abs.helpers.log_verification import LogVerifier
from ccc_abs.helpers.regions import RegionRestrictions
from ccc_abs.helpers.tls import TlsProbe
from ccc_abs.helpers.versioning import BlobVersioning

__all__ = [
    "BlobFixture",
    "BlobFixtures",
    "BlobVersioning",
    "DeleteProtection",
    "LogVerifier",
    "RegionRestrictions",
    "TlsProbe",
]
