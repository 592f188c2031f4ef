"""
Message constants for test results and test requirement verdicts.

Pass and fail messages are part of the report contract and are asserted
verbatim by consumers, so every message lives here. Templates use
``str.format`` placeholders.
"""

# Transport (CCC.C01)

TLS_1_3_USED = "TLS 1.3 is being used"
TLS_1_2_USED = "TLS 1.2 is being used"
TLS_1_1_USED = "TLS 1.1 is being used"
TLS_1_0_USED = "TLS 1.0 is being used"
TLS_UNKNOWN_VERSION = "error: Unknown TLS version"
TLS_NO_INFORMATION = "error: No TLS information found in response"
HTTP_NOT_SUPPORTED = "HTTP requests are not supported"
HTTP_SUPPORTED = "HTTP requests are supported"
INSECURE_TLS_NOT_SUPPORTED = "Insecure TLS version {version} not supported"
INSECURE_TLS_SUPPORTED = "Insecure TLS version {version} is supported"

C01_TR01_SUCCESS = "Default TLS version is TLS 1.2 or TLS 1.3"
C01_TR01_FAILURE = (
    "Default TLS version is not TLS 1.2 or TLS 1.3, see test results for more details"
)
C01_TR02_SUCCESS = "HTTP requests are not supported"
C01_TR02_FAILURE = "HTTP requests are supported, see test results for more details"
C01_TR03_SUCCESS = "All insecure TLS versions are not supported"
C01_TR03_FAILURE = (
    "One or more insecure TLS versions are supported, see test results for more details"
)

# Encryption (CCC.C02)

ENCRYPTION_MICROSOFT_KEYS = (
    "Encryption with Microsoft-managed keys is enabled on the Azure Storage Account."
)
ENCRYPTION_CUSTOMER_KEYS = (
    "Encryption with customer-managed keys is enabled on the Azure Storage Account."
)
ENCRYPTION_NOT_ENABLED = "Encryption is not enabled on the Azure Storage Account."
AUDIT_MICROSOFT_KEYS = (
    "Encryption uses Microsoft-managed keys and can be audited directly on the "
    "Azure Storage Account."
)
AUDIT_CUSTOMER_KEYS = (
    "Encryption uses customer-managed keys and can be audited in the Azure Key Vault: {uri}."
)
AUDIT_NOT_AVAILABLE = "Encryption status is not available for audit."

C02_TR01_SUCCESS = (
    "Data at rest is encrypted with industry-standard encryption algorithms (e.g., AES-256)."
)
C02_TR01_FAILURE = (
    "Data at rest is not encrypted with industry-standard encryption algorithms "
    "(e.g., AES-256), see test results for more details."
)
C02_TR02_SUCCESS = (
    "Encryption status for stored data at rest for the Storage Account is available for audit."
)
C02_TR02_FAILURE = (
    "Encryption status for the Storage Account is not available for audit, "
    "see test results for more details."
)

# Authentication and network access (CCC.C03, CCC.C05, CCC.C10)

AUTHENTICATION_ALWAYS_REQUIRED = (
    "Authentication is always required by Azure for a user to modify a Storage Account."
)
ANONYMOUS_ACCESS_ENABLED = "Public anonymous blob access is enabled for the storage account."
ANONYMOUS_ACCESS_DISABLED = "Public anonymous blob access is disabled for the storage account."
SHARED_KEY_ENABLED = "Shared Key access is enabled for the storage account."
SHARED_KEY_DISABLED = "Shared Key access is disabled for the storage account."

PUBLIC_NETWORK_DISABLED = "Public network access is disabled for the storage account."
PUBLIC_NETWORK_DENY_BY_DEFAULT = (
    "Public network access is enabled for the storage account, but the default action "
    "is set to deny for sources outside of the allowlist IPs (see result value)."
)
PUBLIC_NETWORK_ALLOW_BY_DEFAULT = (
    "Public network access is enabled for the storage account and the default action "
    "is not set to deny for sources outside of the allowlist."
)
PUBLIC_NETWORK_PERIMETER = (
    "Public network access to the storage account is secured by Network Security "
    "Perimeter, this plugin does not support assessment of network access via Network "
    "Security Perimeter."
)
PUBLIC_NETWORK_UNCLEAR = "Public network access status of {status} unclear."
PUBLIC_NETWORK_NOT_REPORTED = (
    "Public network access status is not reported for the storage account."
)
ALLOWED_IPS_EVIDENCE_NAME = "Allowlisted IPs and IP ranges"

MFA_AT_TENANT_LEVEL = (
    "MFA should be configured as required for all user logins at the tenant level. This "
    "cannot be checked on the resource level and requires tenant level permissions - "
    "please check the tenant level configuration."
)
CONTROL_PLANE_NETWORK_RESTRICTION_IMPOSSIBLE = (
    "Restricting control plane access to resources to specific networks is not possible in Azure."
)
CONTROL_PLANE_NETWORK_LIMIT_IMPOSSIBLE = (
    "Limiting control plane access by network is not possible in Azure."
)
CROSS_TENANT_ACCESS_EXPLICIT = (
    "Cross tenant access to all resources in Azure is only possible by users who have "
    "been explicitly added to the tenant."
)
OBJECT_REPLICATION_BOUNDED = (
    "Object replication outside of the network access enabled on the Storage Account is "
    "always blocked on Azure Storage Accounts. See the results of CCC_C05_TR01 for more "
    "details on the configured network access."
)

C03_TR01_SUCCESS = "Authentication is required to modify this service"
C03_TR01_FAILURE = (
    "Authentication is not required to modify this service, see test results for more details"
)
C03_TR02_SUCCESS = "Authentication is required to view information presented by this service"
C03_TR02_FAILURE = (
    "Authentication is not required to view information presented by this service, "
    "see test results for more details"
)
C03_TR05_SUCCESS = "Data plane authentication is limited to specific allowed networks"
C03_TR05_FAILURE = (
    "Data plane authentication is not limited to specific allowed networks, "
    "see test results for more details"
)
C05_TR01_SUCCESS = (
    "This service blocks access to sensitive resources and admin access from untrusted sources"
)
C05_TR01_FAILURE = (
    "This service does not block access to sensitive resources and admin access from "
    "untrusted sources, see test results for more details"
)
C05_TR02_SUCCESS = "Administrative access is limited to allowlisted sources"
C05_TR02_FAILURE = (
    "Administrative access is not limited to allowlisted sources, "
    "see test results for more details"
)
C05_TR03_SUCCESS = "Access to resources is limited to explicitly allowlisted tenants"
C05_TR03_FAILURE = (
    "Access to resources is not limited to explicitly allowlisted tenants, "
    "see test results for more details"
)
C05_TR04_SUCCESS = "Blocked access attempts from untrusted sources are logged"
C05_TR04_FAILURE = (
    "Blocked access attempts from untrusted sources are not logged, "
    "see test results for more details"
)
C10_TR01_SUCCESS = "Replication of data to untrusted destinations is prevented"
C10_TR01_FAILURE = (
    "Replication of data to untrusted destinations is not prevented, "
    "see test results for more details"
)

# Logging (CCC.C04, CCC.C09, CCC.ObjStor.C07)

LOG_ANALYTICS_CONFIGURED = "Storage account is configured to emit to log analytics workspace."
LOG_ANALYTICS_NOT_CONFIGURED = (
    "Storage account is not configured to emit to log analytics workspace destination."
)
DIAGNOSTIC_SETTING_NOT_FOUND = "Could not find diagnostic setting: {error}"
COULD_NOT_AUTHENTICATE = "Could not successfully authenticate with storage account"
COULD_NOT_FAIL_AUTHENTICATION = "Could not unsuccessfully authenticate with storage account"
LOG_QUERY_FAILED = "Failed to query logs: {error}"
LOG_QUERY_ERROR = "Error when querying logs: {code}"
LOG_MISSING_COLUMNS = (
    "Log result does not contain required fields: TimeGenerated, RequesterObjectId, StatusCode"
)
LOG_MISSING_VALUES = "Log result does not contain required fields"
RESPONSE_LOGGED = (
    "{status_code} response from {host} was logged with values for required fields: "
    "TimeGenerated, RequesterObjectId, StatusCode"
)
RESPONSE_NOT_LOGGED = "{status_code} response from {url} was not logged"
ACTIVITY_LOG_QUERY_FAILED = "Failed to query activity logs: {error}"
ACTIVITY_LOGGED = "{operation} on {resource} was logged"
ACTIVITY_NOT_LOGGED = "Admin activity on resources was not logged"
NO_REQUEST_ID = "No request id returned in the {header} header of the response from {url}"
NO_CORRELATION_ID = (
    "No correlation id returned in the {header} header of the management call"
)
REGENERATE_KEY_FAILED = "Could not regenerate key: {error}"
ASSIGN_PERMISSION_FAILED = "Could not assign permission: {error}"
REVOKE_PERMISSION_FAILED = "Could not revoke permission: {error}"

C04_ACCESS_SUCCESS = "All access attempts are logged"
C04_ACCESS_FAILURE = "Not all access attempts are logged, see test results for more details"
C04_TR03_SUCCESS = "All changes to configuration are logged"
C04_TR03_FAILURE = (
    "Not all changes to configuration are logged, see test results for more details"
)
C09_SUCCESS = (
    "Logging to Log Analytics is configured for the Storage Account, with access "
    "controlled by Azure RBAC on the Log Analytics workspace."
)
C09_FAILURE = (
    "Logging to Log Analytics is not configured for the Storage Account, it is "
    "recommended to store access logs in Log Analytics so that access control can be "
    "managed by Azure RBAC on the Log Analytics workspace."
)
OBJSTOR_C07_TR01_SUCCESS = "Access logs are stored outside of the Storage Account."
OBJSTOR_C07_TR01_FAILURE = (
    "Access logs are not stored outside of the Storage Account, "
    "see test results for more details."
)

# Regions (CCC.C06)

POLICY_PAGE_FAILED = "Could not get next page of policies: {error}"
LOCATIONS_PAGE_FAILED = "Could not get next page of locations: {error}"
SKUS_PAGE_FAILED = (
    "Could not get next page of storage SKUs, in order to list available regions "
    "with error: {error}"
)
ALLOWED_LOCATIONS_POLICY_IN_PLACE = (
    "Azure Policy is in place that prevents deployment in some regions."
)
ALLOWED_LOCATIONS_MATCH = (
    "{prefix} The only regions allowed by Policy are the provided allowed regions: {regions}."
)
ALLOWED_LOCATIONS_EXTRA = (
    "{prefix} There are other regions allowed Policy in addition to the provided allowed "
    "regions, the additional regions are: {regions}"
)
ALLOWED_LOCATIONS_MISSING = (
    "{prefix} Some of the provided allowed regions are not allowed by Policy, "
    "the missing regions are: {regions}"
)
ALLOWED_LOCATIONS_NOT_ASSIGNED = (
    "Built-in Azure Policy Allowed locations is not assigned to the resource, there could "
    "be a custom policy or policy set preventing deployment in restricted regions but this "
    "has not been validated."
)
NO_ALLOWED_REGIONS = (
    "No allowed regions are configured, so deployment to an allowed region cannot be "
    "confirmed."
)
CREATED_IN_RESTRICTED_REGION = "Successfully created Storage Account in restricted region {region}"
DELETE_ACCOUNT_FAILED = "Failed to delete Storage Account with error: {error}"
CREATE_IN_ALLOWED_REGION_FAILED = (
    "Failed to create Storage Account in allowed region {region}. Indicating there is "
    "another reason deployments to restricted regions are failing (e.g. incorrect "
    "permissions) other than regional restrictions. Error code: {code}."
)
CREATED_VAULT_IN_RESTRICTED_REGION = (
    "Successfully created Backup Vault in restricted region {region}"
)
DELETE_VAULT_FAILED = "Failed to delete Backup Vault with error: {error}"
CREATE_VAULT_IN_ALLOWED_REGION_FAILED = (
    "Failed to create Backup Vault in allowed region {region}. Indicating there is "
    "another reason deployments to restricted regions are failing (e.g. incorrect "
    "permissions) other than regional restrictions. Error code: {code}."
)
RESTRICTED_DEPLOYMENT_BLOCKED = (
    "Deployment to all restricted regions failed, and deployment to allowed regions "
    "succeeded (confirming that incorrect permissions are not what is blocking creation). "
    "This is the expected behavior."
)
PAIRED_REGION_RESTRICTED = (
    "Storage Accounts replicate data to the paired region when geo-replication is enabled, "
    "however the paired region of allowed region {region}, {paired}, is not an allowed "
    "region so any geo-replication to this region would replicated to a restricted region."
)
PAIRED_REGIONS_ALLOWED = (
    "All paired regions of allowed regions are also allowed regions, so geo-replication "
    "will not replicate data to restricted regions."
)

C06_TR01_SUCCESS = "This service successfully prevents deployment in restricted regions."
C06_TR01_FAILURE = (
    "This service does not prevent deployment in restricted regions, "
    "see test results for more details."
)
C06_TR02_SUCCESS = "This service does not replicate data to restricted regions."
C06_TR02_FAILURE = (
    "This service may replicate data to restricted regions, see test results for more details."
)

# Alerting (CCC.C07)

DEFENDER_SETTINGS_FAILED = "Error getting Defender for Storage settings: {error}"
DEFENDER_PRICING_FAILED = "Error getting Defender for Cloud pricing plans: {error}"
DEFENDER_ENABLED = (
    "Microsoft Defender for Cloud is enabled and alerting is enabled for the Storage Account."
)
DEFENDER_NOT_ENABLED = "Microsoft Defender for Cloud is not enabled for Storage Account."
DEFENDER_PLAN_NOT_ENABLED = (
    "Microsoft Defender for Storage plan is not enabled for the subscription."
)

C07_TR01_SUCCESS = (
    "This service generates alerts when non-human entities attempt to enumerate resources"
)
C07_TR01_FAILURE = (
    "This service does not generate alerts when non-human entities attempt to enumerate "
    "resources, see test results for more details"
)

# Replication (CCC.C08)

REPLICATED_ACROSS_ZONES = "Data is replicated across multiple availability zones."
REPLICATED_ACROSS_REGIONS = "Data is replicated across multiple regions."
NOT_REPLICATED = "Data is not replicated across multiple availability zones or regions."
REPLICATION_UNKNOWN = "Data replication type is unknown."
SECONDARY_NOT_ENABLED = "Secondary location is not enabled."
SECONDARY_AVAILABLE = "Secondary location is enabled and available."
SECONDARY_NOT_AVAILABLE = "Secondary location is enabled but not available."
LAST_SYNC_NOT_AVAILABLE = (
    "Last sync time is not available, this usually indicates geo-replication is not "
    "enabled - see previous test for details on replication configuration."
)
LAST_SYNC_RECENT = "Last sync time is within 15 minutes."
LAST_SYNC_STALE = "Last sync time is not within 15 minutes."
LAST_SYNC_EVIDENCE_NAME = "Last Sync Time (UTC)"

C08_TR01_SUCCESS = "Data is replicated across multiple availability zones or regions."
C08_TR01_FAILURE = (
    "Data is not replicated across multiple availability zones or regions, "
    "see test results for more details."
)
C08_TR02_SUCCESS = (
    "Data is replicated across multiple zones or regions and the replication state is verified."
)
C08_TR02_FAILURE = (
    "Data is not replicated across multiple zones or regions or the replication state "
    "is not verified."
)

# Encryption keys (CCC.C11)

KEY_ROTATION_POLICY_ASSIGNED = (
    "Azure Policy is assigned that requires keys be rotated for Storage Account encryption."
)
KEY_ROTATION_POLICY_NOT_ASSIGNED = (
    "Built-in policy that requires keys be rotated for Storage Account encryption is not assigned."
)
KEY_ROTATION_EVIDENCE_NAME = "MaximumDaysToRotateRequiredByPolicy"
CMK_POLICY_ASSIGNED = (
    "Azure Policy is assigned that requires customer-managed keys be used for Storage "
    "Account encryption."
)
CMK_POLICY_NOT_ASSIGNED = (
    "Built-in policy that requires customer-managed keys be used for Storage Account "
    "encryption is not assigned."
)
KEY_ALGORITHMS_ENFORCED = (
    "Azure enforces that customer-managed keys use industry standard algorithms and key "
    "lengths (RSA 2048/3072/4096 and EC keys must use NIST P-256, P-384, or P-521 curves). "
    "Further standards can be enforced with a custom Azure Policy if required, this TestSet "
    "currently does not support validating any custom Azure Policies."
)
KEY_ACCESS_IN_KEY_VAULT = (
    "Access to customer-managed keys is controlled by Azure RBAC on the Azure Key Vault "
    "holding the keys. This cannot be checked on the Storage Account and requires "
    "permissions on the Key Vault - please check the Key Vault access configuration."
)

C11_TR02_SUCCESS = (
    "Built-in Azure Policy is assigned which requires key rotation is scheduled within the "
    "specified number of days after creation."
)
C11_TR02_FAILURE = (
    "Built-in Azure Policy which requires key rotation is scheduled within the specified "
    "number of days after creation is not assigned. There may be a custom policy that "
    "enforces this requirement, this TestSet currently does not support validating any "
    "custom Azure Policies."
)
C11_TR03_SUCCESS = (
    "Built-in Azure Policy is assigned which requires customer-managed keys are used for "
    "Storage Account encryption."
)
C11_TR03_FAILURE = (
    "Built-in Azure Policy which requires customer-managed keys are used for Storage "
    "Account encryption is not assigned. There may be a custom policy that enforces this "
    "requirement, this TestSet currently does not support validating any custom Azure "
    "Policies."
)

# Object storage (CCC.ObjStor)

UNTRUSTED_KMS_KEYS_NOT_ASSESSABLE = (
    "Azure Storage Accounts do not accept encryption keys supplied per request, the keys "
    "used for encryption are configured on the Storage Account. Use of customer-managed "
    "keys is assessed by CCC_C11_TR03."
)

OBJSTOR_C02_TR01_SUCCESS = (
    "Permissions allowed for an object apply to all objects in the bucket"
)
OBJSTOR_C02_TR01_FAILURE = (
    "Permissions allowed for an object may not apply to all objects in the bucket, "
    "see test results for more details"
)
OBJSTOR_C02_TR02_SUCCESS = "Permissions denied for an object apply to all objects in the bucket"
OBJSTOR_C02_TR02_FAILURE = (
    "Permissions denied for an object may not apply to all objects in the bucket, "
    "see test results for more details"
)

CONTAINER_SOFT_DELETE_ENABLED = (
    "Soft delete is enabled for Storage Account Containers and permanent delete of soft "
    "deleted items is not allowed."
)
CONTAINER_SOFT_DELETE_PERMANENT_ALLOWED = (
    "Soft delete is enabled for Storage Account Containers, but permanent delete of soft "
    "deleted items is allowed."
)
CONTAINER_SOFT_DELETE_DISABLED = "Soft delete is not enabled for Storage Account Containers."
BLOB_SOFT_DELETE_ENABLED = (
    "Soft delete is enabled for Storage Account Blobs and permanent delete of soft deleted "
    "items is not allowed."
)
BLOB_SOFT_DELETE_PERMANENT_ALLOWED = (
    "Soft delete is enabled for Storage Account Blobs, but permanent delete of soft deleted "
    "items is allowed."
)
BLOB_SOFT_DELETE_DISABLED = "Soft delete is not enabled for Storage Account Blobs."
SOFT_DELETE_EVIDENCE_NAME = "Soft Delete Policy Retention Period in Days"
CONTAINER_SOFT_DELETE_WORKING = (
    "Soft delete is working as expected for Storage Account Containers."
)
CONTAINER_SOFT_DELETE_NOT_WORKING = (
    "Soft delete is not working as expected for Storage Account Containers."
)
BLOB_RESTORED = "Deleted blob successfully restored."

IMMUTABILITY_NOT_ENABLED = "Immutability is not enabled for Storage Account."
IMMUTABILITY_POLICY_NOT_SET = "Immutability policy is not set for the storage account."
IMMUTABILITY_POLICY_NOT_LOCKED = "Immutability policy is not locked."
IMMUTABILITY_POLICY_LOCKED = "Immutability policy is locked for the storage account."
BLOB_IMMUTABILITY_NOT_ENABLED = "Immutability is not enabled for Storage Account Blobs."
BLOB_IMMUTABILITY_NO_POLICY = (
    "Immutability is enabled for Storage Account Blobs, but no immutability policy is set."
)
BLOB_IMMUTABILITY_POLICY_DISABLED = (
    "Immutability is enabled for Storage Account Blobs, but immutability policy is disabled."
)
BLOB_IMMUTABILITY_POLICY_SET = (
    "Immutability is enabled for Storage Account Blobs, and an immutability policy is set."
)
IMMUTABILITY_EVIDENCE_NAME = "Immutability Policy State"

DELETION_PREVENTED = "Object deletion is prevented for objects subject to a retention policy."
DELETION_NOT_PREVENTED = (
    "Object deletion is not prevented for objects subject to a retention policy."
)
DELETE_FAILED_UNRELATED = (
    "Failed to delete blob with error unrelated to immutability: {error}"
)

VERSIONING_ENABLED = "Versioning is enabled for Storage Account Blobs."
VERSIONING_NOT_ENABLED = "Versioning is not enabled for Storage Account Blobs."
PREVIOUS_VERSIONS_ACCESSIBLE = "Previous versions are accessible when a blob is updated."
PREVIOUS_VERSIONS_NOT_ACCESSIBLE = (
    "Previous versions are not accessible when a blob is updated."
)
DELETED_VERSION_ACCESSIBLE = "Previous version is accessible when a blob is deleted."
DELETED_VERSION_NOT_ACCESSIBLE = "Previous version is not accessible when a blob is deleted."

OBJSTOR_C03_TR01_SUCCESS = (
    "Object storage buckets are recoverable for a set time-frame after deletion is requested."
)
OBJSTOR_C03_TR01_FAILURE = (
    "Object storage buckets are not recoverable for a set time-frame after deletion, "
    "see test results for more details."
)
OBJSTOR_C03_TR02_SUCCESS = "Retention policy for object storage buckets cannot be unset."
OBJSTOR_C03_TR02_FAILURE = (
    "Retention policy for object storage buckets can be unset, "
    "see test results for more details."
)
OBJSTOR_C04_TR01_SUCCESS = "Object storage buckets cannot be deleted after creation."
OBJSTOR_C04_TR01_FAILURE = (
    "Object storage buckets can be deleted after creation, see test results for more details."
)
OBJSTOR_C04_TR02_SUCCESS = (
    "Objects subject to an active retention policy cannot be deleted or modified."
)
OBJSTOR_C04_TR02_FAILURE = (
    "Objects subject to an active retention policy can be deleted or modified, "
    "see test results for more details."
)
OBJSTOR_C05_TR01_SUCCESS = "Objects are stored with a unique identifier."
OBJSTOR_C05_TR01_FAILURE = (
    "Objects are not stored with a unique identifier, see test results for more details."
)
OBJSTOR_C05_TR02_SUCCESS = "Modified objects are assigned a new unique identifier."
OBJSTOR_C05_TR02_FAILURE = (
    "Modified objects are not assigned a new unique identifier, "
    "see test results for more details."
)
OBJSTOR_C05_TR03_SUCCESS = "Previous versions of modified objects can be recovered."
OBJSTOR_C05_TR03_FAILURE = (
    "Previous versions of modified objects cannot be recovered, "
    "see test results for more details."
)
OBJSTOR_C05_TR04_SUCCESS = "Other versions of deleted objects are retained."
OBJSTOR_C05_TR04_FAILURE = (
    "Other versions of deleted objects are not retained, see test results for more details."
)
OBJSTOR_C06_TR01_SUCCESS = (
    "Objects uploaded with the same name are not overwritten and are stored with unique "
    "identifiers."
)
OBJSTOR_C06_TR01_FAILURE = (
    "Objects uploaded with the same name may be overwritten, "
    "see test results for more details."
)

# Test fixtures

TEST_CONTAINER_PREFIX = "privateer-test-container-"
TEST_BLOB_PREFIX = "privateer-test-blob-"
TEST_BLOB_CONTENT = "Privateer test blob content"
UPDATED_BLOB_CONTENT = "Updated " + TEST_BLOB_CONTENT

BLOCK_BLOB_CLIENT_FAILED = "Failed to create block blob client with error: {error}"
BLOB_CLIENT_FAILED = "Failed to create blob client with error: {error}"
CREATE_CONTAINER_FAILED = "Failed to create blob container with error: {error}"
DELETE_CONTAINER_FAILED = "Failed to delete blob container with error: {error}"
LIST_CONTAINERS_FAILED = "Failed to list blob containers with error: {error}"
UPLOAD_BLOB_FAILED = "Failed to upload blob with error: {error}"
UPDATE_BLOB_FAILED = "Failed to update blob with error: {error}"
DELETE_BLOB_FAILED = "Failed to delete blob with error: {error}"
UNDELETE_BLOB_FAILED = "Failed to undelete blob with error: {error}"
LIST_VERSIONS_FAILED = "Failed to list blob versions with error: {error}"
