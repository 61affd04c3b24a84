"""AWS::QBusiness::Index resource definition."""
from datetime import timedelta

from qbusiness_resources.domain.lifecycle.value_objects import BackoffPolicy, StabilizationCriteria
from qbusiness_resources.providers.aws.resources.base import ApiOperations, ResourceDefinition

TYPE_NAME = "AWS::QBusiness::Index"

INDEX = ResourceDefinition(
    type_name=TYPE_NAME,
    identifiers=("ApplicationId", "IndexId"),
    arn_segments=("application", "index"),
    operations=ApiOperations(
        create="create_index",
        get="get_index",
        update="update_index",
        delete="delete_index",
        list="list_indices",
        list_result_key="indices",
    ),
    create_properties=("DisplayName", "Description", "Type", "CapacityConfiguration"),
    update_properties=(
        "DisplayName", "Description", "CapacityConfiguration", "DocumentAttributeConfigurations",
    ),
    read_properties=(
        "DisplayName", "Description", "Type", "CapacityConfiguration",
        "DocumentAttributeConfigurations", "IndexStatistics", "Status", "CreatedAt", "UpdatedAt",
    ),
    list_properties=("DisplayName", "Status", "CreatedAt", "UpdatedAt"),
    arn_property="IndexArn",
    criteria=StabilizationCriteria(
        terminal_success=frozenset({"ACTIVE"}),
        terminal_failure=frozenset({"FAILED"}),
    ),
    create_policy=BackoffPolicy.of(timeout=timedelta(hours=4), delay=timedelta(seconds=15)),
    update_policy=BackoffPolicy.of(timeout=timedelta(hours=2), delay=timedelta(minutes=1)),
    delete_policy=BackoffPolicy.of(timeout=timedelta(hours=4), delay=timedelta(minutes=1)),
    # Document attributes can only be set once the index exists.
    post_create_properties=("DocumentAttributeConfigurations",),
)
