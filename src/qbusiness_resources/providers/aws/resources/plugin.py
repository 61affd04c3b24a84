"""AWS::QBusiness::Plugin resource definition."""
from datetime import timedelta

from qbusiness_resources.domain.lifecycle.value_objects import BackoffPolicy, StabilizationCriteria
from qbusiness_resources.providers.aws.resources.base import ApiOperations, ResourceDefinition

TYPE_NAME = "AWS::QBusiness::Plugin"

PLUGIN = ResourceDefinition(
    type_name=TYPE_NAME,
    identifiers=("ApplicationId", "PluginId"),
    arn_segments=("application", "plugin"),
    operations=ApiOperations(
        create="create_plugin",
        get="get_plugin",
        update="update_plugin",
        delete="delete_plugin",
        list="list_plugins",
        list_result_key="plugins",
    ),
    create_properties=(
        "DisplayName", "Type", "ServerUrl", "AuthConfiguration", "CustomPluginConfiguration",
    ),
    update_properties=(
        "DisplayName", "State", "ServerUrl", "AuthConfiguration", "CustomPluginConfiguration",
    ),
    read_properties=(
        "DisplayName", "Type", "ServerUrl", "AuthConfiguration", "CustomPluginConfiguration",
        "BuildStatus", "State", "CreatedAt", "UpdatedAt",
    ),
    list_properties=("DisplayName", "Type", "ServerUrl", "State", "BuildStatus"),
    arn_property="PluginArn",
    criteria=StabilizationCriteria(
        terminal_success=frozenset({"READY"}),
        terminal_failure=frozenset({"CREATE_FAILED", "UPDATE_FAILED", "DELETE_FAILED"}),
    ),
    status_key="buildStatus",
    create_policy=BackoffPolicy.of(timeout=timedelta(hours=4), delay=timedelta(seconds=5)),
    update_policy=BackoffPolicy.of(timeout=timedelta(hours=4), delay=timedelta(seconds=10)),
    # Plugins are created enabled; a requested state is applied afterwards.
    post_create_properties=("State",),
)
