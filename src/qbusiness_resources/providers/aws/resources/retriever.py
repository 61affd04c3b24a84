"""AWS::QBusiness::Retriever resource definition."""
from datetime import timedelta

from qbusiness_resources.domain.lifecycle.value_objects import BackoffPolicy, StabilizationCriteria
from qbusiness_resources.providers.aws.resources.base import ApiOperations, ResourceDefinition

TYPE_NAME = "AWS::QBusiness::Retriever"

RETRIEVER = ResourceDefinition(
    type_name=TYPE_NAME,
    identifiers=("ApplicationId", "RetrieverId"),
    arn_segments=("application", "retriever"),
    operations=ApiOperations(
        create="create_retriever",
        get="get_retriever",
        update="update_retriever",
        delete="delete_retriever",
        list="list_retrievers",
        list_result_key="retrievers",
    ),
    create_properties=("DisplayName", "Type", "Configuration", "RoleArn"),
    update_properties=("DisplayName", "Configuration", "RoleArn"),
    read_properties=(
        "DisplayName", "Type", "Configuration", "RoleArn", "Status", "CreatedAt", "UpdatedAt",
    ),
    list_properties=("DisplayName", "Type", "Status"),
    arn_property="RetrieverArn",
    criteria=StabilizationCriteria(
        terminal_success=frozenset({"ACTIVE"}),
        terminal_failure=frozenset({"FAILED"}),
    ),
    create_policy=BackoffPolicy.of(timeout=timedelta(hours=4), delay=timedelta(seconds=5)),
    update_policy=BackoffPolicy.of(timeout=timedelta(hours=4), delay=timedelta(minutes=2)),
)
