"""
Test requirement table for Azure Blob Storage.

Every test requirement of the control catalog is declared here as a
TRDefinition. Ids follow ``CCC_<control>_TR<nn>`` and test ids append
``_T<nn>``. The order of ALL_DEFINITIONS is the order of the
``tlp_red`` tactic.
"""

from __future__ import annotations

from ccc_abs.catalog import (
    access,
    alerting,
    audit_logging,
    encryption,
    messages,
    object_storage,
    regions,
    replication,
    transport,
)
from ccc_abs.engine.definitions import TestCheck, TestStep, TRDefinition


def _test(
    tr_id: str,
    number: int,
    description: str,
    check: TestCheck,
    invasive: bool = False,
    after: int | None = None,
) -> TestStep:
    """Declare test ``number`` of a test requirement, optionally gated on an earlier test."""
    return TestStep(
        id=f"{tr_id}_T{number:02d}",
        description=description,
        check=check,
        invasive=invasive,
        run_if=f"{tr_id}_T{after:02d}" if after is not None else None,
    )


LOGGING_CONFIGURED = (
    "This test tests that logging of access attempts is configured for the storage account"
)
LOG_ANALYTICS_CONFIGURED = (
    "Confirms that logging to Log Analytics is configured for the Storage Account."
)
PUBLIC_NETWORK_RESTRICTED = (
    "Confirms data plane access is restricted to specific IP addresses, domains, or networks."
)
SHARED_KEY_DISABLED = "Confirms Shared Key access is disabled."
VERSIONING_CONFIGURED = "Confirms that versioning for blobs is configured for the Storage Account."
OVERWRITTEN_VERSION_ACCESSIBLE = (
    "Confirms that previous versions are accessible when a blob is overwritten."
)


# CCC.C01 Transport

C01_TR01 = TRDefinition(
    id="CCC_C01_TR01",
    control_id="CCC.C01",
    description=(
        "The service enforces the use of secure transport protocols for all network "
        "communications (e.g., TLS 1.2 or higher)."
    ),
    success_message=messages.C01_TR01_SUCCESS,
    failure_message=messages.C01_TR01_FAILURE,
    steps=(
        _test(
            "CCC_C01_TR01", 1, "Default TLS version is TLS 1.2 or TLS 1.3",
            transport.check_default_tls_version,
        ),
    ),
)

C01_TR02 = TRDefinition(
    id="CCC_C01_TR02",
    control_id="CCC.C01",
    description="The service automatically redirects incoming unencrypted HTTP requests to HTTPS.",
    success_message=messages.C01_TR02_SUCCESS,
    failure_message=messages.C01_TR02_FAILURE,
    steps=(
        _test(
            "CCC_C01_TR02", 1, "HTTP requests are not supported",
            transport.check_http_not_supported,
        ),
    ),
)

C01_TR03 = TRDefinition(
    id="CCC_C01_TR03",
    control_id="CCC.C01",
    description=(
        "The service rejects or blocks any attempts to establish outgoing connections using "
        "outdated or insecure protocols (e.g., SSL, TLS 1.0, or TLS 1.1)."
    ),
    success_message=messages.C01_TR03_SUCCESS,
    failure_message=messages.C01_TR03_FAILURE,
    steps=(
        _test(
            "CCC_C01_TR03", 1, "TLS Version 1.0 is not supported",
            transport.check_tls_1_0_not_supported,
        ),
        _test(
            "CCC_C01_TR03", 2, "TLS Version 1.1 is not supported",
            transport.check_tls_1_1_not_supported,
        ),
    ),
)

# CCC.C02 Encryption at rest

C02_TR01 = TRDefinition(
    id="CCC_C02_TR01",
    control_id="CCC.C02",
    description=(
        "The service encrypts all stored data at rest using industry-standard encryption "
        "algorithms (e.g., AES-256)."
    ),
    success_message=messages.C02_TR01_SUCCESS,
    failure_message=messages.C02_TR01_FAILURE,
    steps=(
        _test(
            "CCC_C02_TR01", 1, "Confirms encryption is enabled on the Azure Storage Account.",
            encryption.check_encryption_enabled,
        ),
    ),
)

C02_TR02 = TRDefinition(
    id="CCC_C02_TR02",
    control_id="CCC.C02",
    description=(
        "Admin users can verify and audit encryption status for stored data at rest, "
        "including verification of key management processes."
    ),
    success_message=messages.C02_TR02_SUCCESS,
    failure_message=messages.C02_TR02_FAILURE,
    steps=(
        _test(
            "CCC_C02_TR02", 1,
            "Confirms that encryption status for the Storage Account is available for audit.",
            encryption.check_encryption_auditable,
        ),
    ),
)

# CCC.C03 Authentication

C03_TR01 = TRDefinition(
    id="CCC_C03_TR01",
    control_id="CCC.C03",
    description=(
        "When an entity attempts to modify the service, the service MUST attempt to verify "
        "the client's identity through an authentication process."
    ),
    success_message=messages.C03_TR01_SUCCESS,
    failure_message=messages.C03_TR01_FAILURE,
    steps=(
        _test(
            "CCC_C03_TR01", 1, "Confirms that authentication is required to modify the service",
            access.check_authentication_required_to_modify,
        ),
    ),
)

C03_TR02 = TRDefinition(
    id="CCC_C03_TR02",
    control_id="CCC.C03",
    description=(
        "When an entity attempts to view information presented by the service, the service "
        "MUST attempt to verify the client's identity through an authentication process."
    ),
    success_message=messages.C03_TR02_SUCCESS,
    failure_message=messages.C03_TR02_FAILURE,
    steps=(
        _test(
            "CCC_C03_TR02", 1, "Confirms anonymous blob access is disabled.",
            access.check_anonymous_access_disabled,
        ),
        _test("CCC_C03_TR02", 2, SHARED_KEY_DISABLED, access.check_shared_key_access_disabled),
    ),
)

C03_TR03 = TRDefinition(
    id="CCC_C03_TR03",
    control_id="CCC.C03",
    description=(
        "When an entity attempts to view information on the service through a user "
        "interface, the authentication process MUST require multiple identifying factors "
        "from the user."
    ),
    statement=messages.MFA_AT_TENANT_LEVEL,
)

C03_TR04 = TRDefinition(
    id="CCC_C03_TR04",
    control_id="CCC.C03",
    description=(
        "When an entity attempts to modify the service through an API endpoint, the "
        "authentication process MUST be limited to a specific allowed network."
    ),
    statement=messages.CONTROL_PLANE_NETWORK_RESTRICTION_IMPOSSIBLE,
)

C03_TR05 = TRDefinition(
    id="CCC_C03_TR05",
    control_id="CCC.C03",
    description=(
        "When an entity attempts to view information on the service through an API "
        "endpoint, the authentication process MUST be limited to a specific allowed network."
    ),
    success_message=messages.C03_TR05_SUCCESS,
    failure_message=messages.C03_TR05_FAILURE,
    steps=(
        _test(
            "CCC_C03_TR05", 1,
            "Confirms that users can only authenticate to the data plane of the service from "
            "specific allowed networks.",
            access.check_public_network_access,
        ),
    ),
)

C03_TR06 = TRDefinition(
    id="CCC_C03_TR06",
    control_id="CCC.C03",
    description=(
        "When an entity attempts to modify the service through a user interface, the "
        "authentication process MUST require multiple identifying factors from the user."
    ),
    statement=messages.MFA_AT_TENANT_LEVEL,
)

# CCC.C04 Access and change logging

C04_TR01 = TRDefinition(
    id="CCC_C04_TR01",
    control_id="CCC.C04",
    description=(
        "When any access attempt is made to the service, the service MUST log the client "
        "identity, time, and result of the attempt."
    ),
    success_message=messages.C04_ACCESS_SUCCESS,
    failure_message=messages.C04_ACCESS_FAILURE,
    steps=(
        _test("CCC_C04_TR01", 1, LOGGING_CONFIGURED, audit_logging.check_logging_configured),
        _test(
            "CCC_C04_TR01", 2, "This test tests that an attempt to list containers is logged",
            audit_logging.check_authenticated_access_logged, after=1,
        ),
    ),
)

C04_TR02 = TRDefinition(
    id="CCC_C04_TR02",
    control_id="CCC.C04",
    description=(
        "When any access attempt is made to the view sensitive information, the service "
        "MUST log the client identity, time, and result of the attempt."
    ),
    success_message=messages.C04_ACCESS_SUCCESS,
    failure_message=messages.C04_ACCESS_FAILURE,
    steps=(
        _test("CCC_C04_TR02", 1, LOGGING_CONFIGURED, audit_logging.check_logging_configured),
        _test(
            "CCC_C04_TR02", 2, "This test tests that a successful login attempt is logged",
            audit_logging.check_authenticated_access_logged, after=1,
        ),
        _test(
            "CCC_C04_TR02", 3, "This test tests that a failed login attempt is logged",
            audit_logging.check_anonymous_access_logged, after=1,
        ),
    ),
)

C04_TR03 = TRDefinition(
    id="CCC_C04_TR03",
    control_id="CCC.C04",
    description=(
        "When any change is made to the service configuration, the service MUST log the "
        "change, including the client, time, previous state, and the new state following "
        "the change."
    ),
    success_message=messages.C04_TR03_SUCCESS,
    failure_message=messages.C04_TR03_FAILURE,
    steps=(
        _test(
            "CCC_C04_TR03", 1, "This test tests that a storage key rotation is logged",
            audit_logging.check_key_rotation_logged, invasive=True,
        ),
        _test(
            "CCC_C04_TR03", 2, "This test tests that a modification to user privileges is logged",
            audit_logging.check_role_assignment_logged, invasive=True,
        ),
    ),
)

# CCC.C05 Network access

C05_TR01 = TRDefinition(
    id="CCC_C05_TR01",
    control_id="CCC.C05",
    description=(
        "When access to sensitive resources is attempted, the service MUST block requests "
        "from untrusted sources, including IP addresses, domains, or networks that are not "
        "explicitly included in a pre-approved allowlist."
    ),
    success_message=messages.C05_TR01_SUCCESS,
    failure_message=messages.C05_TR01_FAILURE,
    steps=(
        _test("CCC_C05_TR01", 1, PUBLIC_NETWORK_RESTRICTED, access.check_public_network_access),
    ),
)

C05_TR02 = TRDefinition(
    id="CCC_C05_TR02",
    control_id="CCC.C05",
    description=(
        "When administrative access is attempted, the service MUST validate that the "
        "request originates from an explicitly allowed source as defined in the allowlist."
    ),
    success_message=messages.C05_TR02_SUCCESS,
    failure_message=messages.C05_TR02_FAILURE,
    steps=(
        _test(
            "CCC_C05_TR02", 1,
            "Confirms that control plane access to the storage account is limited to "
            "allowlisted networks.",
            access.check_control_plane_network_limited,
        ),
    ),
)

C05_TR03 = TRDefinition(
    id="CCC_C05_TR03",
    control_id="CCC.C05",
    description=(
        "When resources are accessed in a multi-tenant environment, the service MUST "
        "enforce isolation by allowing access only to explicitly allowlisted tenants."
    ),
    success_message=messages.C05_TR03_SUCCESS,
    failure_message=messages.C05_TR03_FAILURE,
    steps=(
        _test(
            "CCC_C05_TR03", 1,
            "Confirms that storage account can only be accessed from allowlisted external "
            "tenants.",
            access.check_cross_tenant_access_explicit,
        ),
    ),
)

C05_TR04 = TRDefinition(
    id="CCC_C05_TR04",
    control_id="CCC.C05",
    description=(
        "When an access attempt from an untrusted source is blocked, the service MUST log "
        "the event, including the source details, time, and reason for denial."
    ),
    success_message=messages.C05_TR04_SUCCESS,
    failure_message=messages.C05_TR04_FAILURE,
    steps=(
        _test("CCC_C05_TR04", 1, LOGGING_CONFIGURED, audit_logging.check_logging_configured),
    ),
)

# CCC.C06 Data residency

C06_TR01 = TRDefinition(
    id="CCC_C06_TR01",
    control_id="CCC.C06",
    description=(
        "The service prevents deployment in restricted regions or cloud availability "
        "zones, blocking any provisioning attempts in designated areas."
    ),
    success_message=messages.C06_TR01_SUCCESS,
    failure_message=messages.C06_TR01_FAILURE,
    steps=(
        _test(
            "CCC_C06_TR01", 1,
            "Confirms that an Azure Policy in is place that prevents deployment in restricted "
            "regions or cloud availability zones.",
            regions.check_allowed_locations_policy,
        ),
        _test(
            "CCC_C06_TR01", 2,
            "Confirms that attempted creation of resources in restricted regions fails.",
            regions.check_restricted_region_deployment_blocked, invasive=True, after=1,
        ),
    ),
)

C06_TR02 = TRDefinition(
    id="CCC_C06_TR02",
    control_id="CCC.C06",
    description=(
        "The service ensures that replication of data, backups, and disaster recovery "
        "operations do not occur in restricted regions or availability zones."
    ),
    success_message=messages.C06_TR02_SUCCESS,
    failure_message=messages.C06_TR02_FAILURE,
    steps=(
        _test(
            "CCC_C06_TR02", 1, "Confirms that data is not replicated to restricted regions.",
            regions.check_paired_regions_allowed,
        ),
        _test(
            "CCC_C06_TR02", 2,
            "Confirms that attempts to create backup vaults in a restricted regions fails.",
            regions.check_restricted_region_backup_blocked, invasive=True, after=1,
        ),
    ),
)

# CCC.C07 Enumeration alerting

C07_TR01 = TRDefinition(
    id="CCC_C07_TR01",
    control_id="CCC.C07",
    description=(
        "The service generates real-time alerts whenever non-human entities (e.g., "
        "automated scripts or processes) attempt to enumerate resources or services."
    ),
    success_message=messages.C07_TR01_SUCCESS,
    failure_message=messages.C07_TR01_FAILURE,
    steps=(
        _test(
            "CCC_C07_TR01", 1,
            "Confirms that Microsoft Defender for Cloud is enabled and alerting is enabled for "
            "Azure Storage, which will scan for and alert on unusual access inspection and "
            "unusual data exploration.",
            alerting.check_defender_for_storage_enabled,
        ),
    ),
)

# CCC.C08 Replication

C08_TR01 = TRDefinition(
    id="CCC_C08_TR01",
    control_id="CCC.C08",
    description=(
        "When data is stored, the service MUST ensure that data is replicated across "
        "multiple availability zones or regions."
    ),
    success_message=messages.C08_TR01_SUCCESS,
    failure_message=messages.C08_TR01_FAILURE,
    steps=(
        _test(
            "CCC_C08_TR01", 1,
            "Confirms that data is replicated across multiple availability zones or regions.",
            replication.check_replication_sku,
        ),
    ),
)

_C08_TR02_DESCRIPTION = (
    "When data is replicated across multiple zones or regions, the service MUST be able to "
    "verify the replication state, including the replication locations and data "
    "synchronization status."
)

C08_TR02 = TRDefinition(
    id="CCC_C08_TR02",
    control_id="CCC.C08",
    description=_C08_TR02_DESCRIPTION,
    success_message=messages.C08_TR02_SUCCESS,
    failure_message=messages.C08_TR02_FAILURE,
    steps=(
        _test(
            "CCC_C08_TR02", 1, _C08_TR02_DESCRIPTION, replication.check_secondary_available
        ),
        _test(
            "CCC_C08_TR02", 2,
            "Confirms that the last sync time of data being replicated across multiple "
            "regions or zones is within 15 minutes.",
            replication.check_last_sync_time,
        ),
    ),
)

# CCC.C09 Access log protection


def _c09(number: int, action: str) -> TRDefinition:
    tr_id = f"CCC_C09_TR{number:02d}"
    return TRDefinition(
        id=tr_id,
        control_id=f"CCC.C09.TR{number:02d}",
        description=(
            "When access logs are stored, the service MUST ensure that access logs cannot be "
            f"{action} without proper authorization."
        ),
        success_message=messages.C09_SUCCESS,
        failure_message=messages.C09_FAILURE,
        steps=(
            _test(tr_id, 1, LOG_ANALYTICS_CONFIGURED, audit_logging.check_logging_configured),
        ),
    )


C09_TR01 = _c09(1, "accessed")
C09_TR02 = _c09(2, "modified")
C09_TR03 = _c09(3, "deleted")

# CCC.C10 Replication destinations

C10_TR01 = TRDefinition(
    id="CCC_C10_TR01",
    control_id="CCC.C10.TR01",
    description=(
        "Prevent replication of data to untrusted destinations outside the organization's "
        "defined trust perimeter."
    ),
    success_message=messages.C10_TR01_SUCCESS,
    failure_message=messages.C10_TR01_FAILURE,
    steps=(
        _test(
            "CCC_C10_TR01", 1,
            "Confirms that object replication is limited to destinations reachable through "
            "the network access configured on the Storage Account.",
            access.check_object_replication_bounded,
        ),
    ),
)

# CCC.C11 Encryption keys

C11_TR01 = TRDefinition(
    id="CCC_C11_TR01",
    control_id="CCC.C11.TR01",
    description=(
        "When encryption keys are used, the service MUST verify that all encryption keys "
        "use approved cryptographic algorithms as per organizational standards."
    ),
    statement=messages.KEY_ALGORITHMS_ENFORCED,
)

C11_TR02 = TRDefinition(
    id="CCC_C11_TR02",
    control_id="CCC.C11.TR02",
    description=(
        "When encryption keys are used, the service MUST verify that encryption keys are "
        "rotated at a frequency compliant with organizational policies."
    ),
    success_message=messages.C11_TR02_SUCCESS,
    failure_message=messages.C11_TR02_FAILURE,
    steps=(
        _test(
            "CCC_C11_TR02", 1,
            "Confirms that built-in Azure Policy 'Keys should have a rotation policy ensuring "
            "that their rotation is scheduled within the specified number of days after "
            "creation' is assigned.",
            encryption.check_key_rotation_policy_assigned,
        ),
    ),
)

C11_TR03 = TRDefinition(
    id="CCC_C11_TR03",
    control_id="CCC.C11.TR03",
    description=(
        "When encrypting data, the service MUST verify that customer-managed encryption "
        "keys (CMEKs) are used."
    ),
    success_message=messages.C11_TR03_SUCCESS,
    failure_message=messages.C11_TR03_FAILURE,
    steps=(
        _test(
            "CCC_C11_TR03", 1,
            "Confirms that the built-in Azure Policy 'Storage accounts should use "
            "customer-managed key for encryption' is assigned to the Storage Account.",
            encryption.check_customer_managed_key_policy_assigned,
        ),
    ),
)

C11_TR04 = TRDefinition(
    id="CCC_C11_TR04",
    control_id="CCC.C11.TR04",
    description=(
        "When encryption keys are accessed, the service MUST verify that access to "
        "encryption keys is restricted to authorized personnel and services, following the "
        "principle of least privilege."
    ),
    statement=messages.KEY_ACCESS_IN_KEY_VAULT,
)

# CCC.ObjStor.C01 Untrusted KMS keys


def _objstor_c01(number: int, action: str, target: str) -> TRDefinition:
    return TRDefinition(
        id=f"CCC_ObjStor_C01_TR{number:02d}",
        control_id="CCC.ObjStor.C01",
        description=(
            f"When a request is made to {action} a protected {target}, the service MUST "
            "prevent any request using KMS keys not listed as trusted by the organization."
        ),
        statement=messages.UNTRUSTED_KMS_KEYS_NOT_ASSESSABLE,
    )


OBJSTOR_C01_TR01 = _objstor_c01(1, "read", "bucket")
OBJSTOR_C01_TR02 = _objstor_c01(2, "read", "object")
OBJSTOR_C01_TR03 = _objstor_c01(3, "write to", "bucket")
OBJSTOR_C01_TR04 = _objstor_c01(4, "write to", "object")

# CCC.ObjStor.C02 Uniform bucket permissions

OBJSTOR_C02_TR01 = TRDefinition(
    id="CCC_ObjStor_C02_TR01",
    control_id="CCC.ObjStor.C02",
    description=(
        "When a permission set is allowed for an object in a bucket, the service MUST allow "
        "the same permission set to access all objects in the same bucket."
    ),
    success_message=messages.OBJSTOR_C02_TR01_SUCCESS,
    failure_message=messages.OBJSTOR_C02_TR01_FAILURE,
    steps=(
        _test(
            "CCC_ObjStor_C02_TR01", 1, SHARED_KEY_DISABLED,
            access.check_shared_key_access_disabled,
        ),
    ),
    provisional=True,
)

OBJSTOR_C02_TR02 = TRDefinition(
    id="CCC_ObjStor_C02_TR02",
    control_id="CCC.ObjStor.C02",
    description=(
        "When a permission set is denied for an object in a bucket, the service MUST deny "
        "the same permission set to access all objects in the same bucket."
    ),
    success_message=messages.OBJSTOR_C02_TR02_SUCCESS,
    failure_message=messages.OBJSTOR_C02_TR02_FAILURE,
    steps=(
        _test(
            "CCC_ObjStor_C02_TR02", 1, SHARED_KEY_DISABLED,
            access.check_shared_key_access_disabled,
        ),
    ),
    provisional=True,
)

# CCC.ObjStor.C03 Bucket recovery and retention

OBJSTOR_C03_TR01 = TRDefinition(
    id="CCC_ObjStor_C03_TR01",
    control_id="CCC.ObjStor.C03",
    description=(
        "When an object storage bucket deletion is attempted, the bucket MUST be fully "
        "recoverable for a set time-frame after deletion is requested."
    ),
    success_message=messages.OBJSTOR_C03_TR01_SUCCESS,
    failure_message=messages.OBJSTOR_C03_TR01_FAILURE,
    steps=(
        _test(
            "CCC_ObjStor_C03_TR01", 1,
            "Confirms that soft delete is configured for containers in the Storage Account.",
            object_storage.check_container_soft_delete,
        ),
        _test(
            "CCC_ObjStor_C03_TR01", 2,
            "Confirms that soft deleted containers are available after being deleted.",
            object_storage.check_deleted_container_recoverable, invasive=True, after=1,
        ),
        _test(
            "CCC_ObjStor_C03_TR01", 3,
            "Confirms that soft delete is configured for blobs in the Storage Account.",
            object_storage.check_blob_soft_delete,
        ),
        _test(
            "CCC_ObjStor_C03_TR01", 4, "Confirms that deleted blobs can be restored.",
            object_storage.check_deleted_blob_recoverable, invasive=True, after=3,
        ),
    ),
)

OBJSTOR_C03_TR02 = TRDefinition(
    id="CCC_ObjStor_C03_TR02",
    control_id="CCC.ObjStor.C03",
    description=(
        "When an attempt is made to modify the retention policy for an object storage "
        "bucket, the service MUST prevent the policy from being modified."
    ),
    success_message=messages.OBJSTOR_C03_TR02_SUCCESS,
    failure_message=messages.OBJSTOR_C03_TR02_FAILURE,
    steps=(
        _test(
            "CCC_ObjStor_C03_TR02", 1,
            "Confirms that immutability policy is locked for the storage account and hence "
            "that retention policy cannot be unset.",
            object_storage.check_immutability_policy_locked,
        ),
    ),
)

# CCC.ObjStor.C04 Default retention

OBJSTOR_C04_TR01 = TRDefinition(
    id="CCC_ObjStor_C04_TR01",
    control_id="CCC.ObjStor.C04",
    description=(
        "When an object is uploaded to the object storage system, the object MUST "
        "automatically receive a default retention policy that prevents premature deletion "
        "or modification."
    ),
    success_message=messages.OBJSTOR_C04_TR01_SUCCESS,
    failure_message=messages.OBJSTOR_C04_TR01_FAILURE,
    steps=(
        _test(
            "CCC_ObjStor_C04_TR01", 1,
            "Confirms that immutability is enabled on the storage account for all blob storage.",
            object_storage.check_blob_immutability_enabled,
        ),
    ),
)

OBJSTOR_C04_TR02 = TRDefinition(
    id="CCC_ObjStor_C04_TR02",
    control_id="CCC.ObjStor.C04",
    description=(
        "When an attempt is made to delete or modify an object that is subject to an active "
        "retention policy, the service MUST prevent the action from being completed."
    ),
    success_message=messages.OBJSTOR_C04_TR02_SUCCESS,
    failure_message=messages.OBJSTOR_C04_TR02_FAILURE,
    steps=(
        _test(
            "CCC_ObjStor_C04_TR02", 1,
            "Confirms that deleting objects subject to a retention policy is prevented.",
            object_storage.check_retention_prevents_deletion, invasive=True,
        ),
    ),
)

# CCC.ObjStor.C05 Versioning

OBJSTOR_C05_TR01 = TRDefinition(
    id="CCC_ObjStor_C05_TR01",
    control_id="CCC.ObjStor.C05",
    description=(
        "When an object is uploaded to the object storage bucket, the object MUST be stored "
        "with a unique identifier."
    ),
    success_message=messages.OBJSTOR_C05_TR01_SUCCESS,
    failure_message=messages.OBJSTOR_C05_TR01_FAILURE,
    steps=(
        _test(
            "CCC_ObjStor_C05_TR01", 1, VERSIONING_CONFIGURED,
            object_storage.check_versioning_enabled,
        ),
    ),
)

OBJSTOR_C05_TR02 = TRDefinition(
    id="CCC_ObjStor_C05_TR02",
    control_id="CCC.ObjStor.C05",
    description=(
        "When an object is modified, the service MUST assign a new unique identifier to the "
        "modified object to differentiate it from the previous version."
    ),
    success_message=messages.OBJSTOR_C05_TR02_SUCCESS,
    failure_message=messages.OBJSTOR_C05_TR02_FAILURE,
    steps=(
        _test(
            "CCC_ObjStor_C05_TR02", 1, VERSIONING_CONFIGURED,
            object_storage.check_versioning_enabled,
        ),
        _test(
            "CCC_ObjStor_C05_TR02", 2, OVERWRITTEN_VERSION_ACCESSIBLE,
            object_storage.check_overwritten_blob_keeps_version, invasive=True, after=1,
        ),
    ),
)

OBJSTOR_C05_TR03 = TRDefinition(
    id="CCC_ObjStor_C05_TR03",
    control_id="CCC.ObjStor.C05",
    description=(
        "When an object is modified, the service MUST allow for recovery of previous "
        "versions of the object."
    ),
    success_message=messages.OBJSTOR_C05_TR03_SUCCESS,
    failure_message=messages.OBJSTOR_C05_TR03_FAILURE,
    steps=(
        _test(
            "CCC_ObjStor_C05_TR03", 1, VERSIONING_CONFIGURED,
            object_storage.check_versioning_enabled,
        ),
        _test(
            "CCC_ObjStor_C05_TR03", 2,
            "Confirms that previous versions are accessible when a blob is updated.",
            object_storage.check_overwritten_blob_keeps_version, invasive=True, after=1,
        ),
    ),
)

OBJSTOR_C05_TR04 = TRDefinition(
    id="CCC_ObjStor_C05_TR04",
    control_id="CCC.ObjStor.C05",
    description=(
        "When an object is deleted, the service MUST retain other versions of the object to "
        "allow for recovery of previous versions."
    ),
    success_message=messages.OBJSTOR_C05_TR04_SUCCESS,
    failure_message=messages.OBJSTOR_C05_TR04_FAILURE,
    steps=(
        _test(
            "CCC_ObjStor_C05_TR04", 1, VERSIONING_CONFIGURED,
            object_storage.check_versioning_enabled,
        ),
        _test(
            "CCC_ObjStor_C05_TR04", 2,
            "Confirms that previous version is accessible when a blob is deleted.",
            object_storage.check_deleted_blob_version_accessible, invasive=True, after=1,
        ),
    ),
)

# CCC.ObjStor.C06 Same-name uploads

OBJSTOR_C06_TR01 = TRDefinition(
    id="CCC_ObjStor_C06_TR01",
    control_id="CCC.ObjStor.C06",
    description=(
        "Verify that when two objects with the same name are uploaded to the bucket, the "
        "object with the same name is not overwritten and that both objects are stored with "
        "unique identifiers."
    ),
    success_message=messages.OBJSTOR_C06_TR01_SUCCESS,
    failure_message=messages.OBJSTOR_C06_TR01_FAILURE,
    steps=(
        _test(
            "CCC_ObjStor_C06_TR01", 1, VERSIONING_CONFIGURED,
            object_storage.check_versioning_enabled,
        ),
        _test(
            "CCC_ObjStor_C06_TR01", 2, OVERWRITTEN_VERSION_ACCESSIBLE,
            object_storage.check_overwritten_blob_keeps_version, invasive=True, after=1,
        ),
    ),
)

# CCC.ObjStor.C07 Access log location

OBJSTOR_C07_TR01 = TRDefinition(
    id="CCC_ObjStor_C07_TR01",
    control_id="CCC.ObjStor.C07",
    description="Access logs for all object storage buckets are stored in a separate bucket.",
    success_message=messages.OBJSTOR_C07_TR01_SUCCESS,
    failure_message=messages.OBJSTOR_C07_TR01_FAILURE,
    steps=(
        _test(
            "CCC_ObjStor_C07_TR01", 1,
            "Confirms that access logs are stored in Log Analytics, outside of the Storage "
            "Account.",
            audit_logging.check_logging_configured,
        ),
    ),
)


ALL_DEFINITIONS: tuple[TRDefinition, ...] = (
    C01_TR01,
    C01_TR02,
    C01_TR03,
    C02_TR01,
    C02_TR02,
    C03_TR01,
    C03_TR02,
    C03_TR03,
    C03_TR04,
    C03_TR05,
    C03_TR06,
    C04_TR01,
    C04_TR02,
    C04_TR03,
    C05_TR01,
    C05_TR02,
    C05_TR03,
    C05_TR04,
    C06_TR01,
    C06_TR02,
    C07_TR01,
    C08_TR01,
    C08_TR02,
    C09_TR01,
    C09_TR02,
    C09_TR03,
    C10_TR01,
    C11_TR01,
    C11_TR02,
    C11_TR03,
    C11_TR04,
    OBJSTOR_C01_TR01,
    OBJSTOR_C01_TR02,
    OBJSTOR_C01_TR03,
    OBJSTOR_C01_TR04,
    OBJSTOR_C02_TR01,
    OBJSTOR_C02_TR02,
    OBJSTOR_C03_TR01,
    OBJSTOR_C03_TR02,
    OBJSTOR_C04_TR01,
    OBJSTOR_C04_TR02,
    OBJSTOR_C05_TR01,
    OBJSTOR_C05_TR02,
    OBJSTOR_C05_TR03,
    OBJSTOR_C05_TR04,
    OBJSTOR_C06_TR01,
    OBJSTOR_C07_TR01,
)

DEFINITIONS_BY_ID: dict[str, TRDefinition] = {d.id: d for d in ALL_DEFINITIONS}
