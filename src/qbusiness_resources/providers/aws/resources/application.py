"""AWS::QBusiness::Application resource definition."""
from datetime import timedelta

from qbusiness_resources.domain.lifecycle.value_objects import BackoffPolicy, StabilizationCriteria
from qbusiness_resources.providers.aws.resources.base import ApiOperations, ResourceDefinition

TYPE_NAME = "AWS::QBusiness::Application"

APPLICATION = ResourceDefinition(
    type_name=TYPE_NAME,
    identifiers=("ApplicationId",),
    arn_segments=("application",),
    operations=ApiOperations(
        create="create_application",
        get="get_application",
        update="update_application",
        delete="delete_application",
        list="list_applications",
        list_result_key="applications",
    ),
    create_properties=(
        "DisplayName", "Description", "RoleArn", "IdentityType", "IamIdentityProviderArn",
        "IdentityCenterInstanceArn", "ClientIdsForOIDC", "EncryptionConfiguration",
        "AttachmentsConfiguration", "QAppsConfiguration", "PersonalizationConfiguration",
        "QuickSightConfiguration",
    ),
    update_properties=(
        "DisplayName", "Description", "RoleArn", "IdentityCenterInstanceArn",
        "AttachmentsConfiguration", "QAppsConfiguration", "PersonalizationConfiguration",
        "AutoSubscriptionConfiguration",
    ),
    read_properties=(
        "DisplayName", "Description", "RoleArn", "IdentityType", "IamIdentityProviderArn",
        "IdentityCenterApplicationArn", "ClientIdsForOIDC", "EncryptionConfiguration",
        "AttachmentsConfiguration", "QAppsConfiguration", "PersonalizationConfiguration",
        "AutoSubscriptionConfiguration", "QuickSightConfiguration", "Status",
        "CreatedAt", "UpdatedAt",
    ),
    list_properties=("DisplayName", "Status", "IdentityType", "CreatedAt", "UpdatedAt"),
    arn_property="ApplicationArn",
    criteria=StabilizationCriteria(
        terminal_success=frozenset({"ACTIVE"}),
        terminal_failure=frozenset({"FAILED"}),
    ),
    create_policy=BackoffPolicy.of(timeout=timedelta(hours=4), delay=timedelta(seconds=30)),
    update_policy=BackoffPolicy.of(timeout=timedelta(hours=2), delay=timedelta(minutes=2)),
    delete_policy=BackoffPolicy.of(timeout=timedelta(hours=4), delay=timedelta(minutes=2)),
)
