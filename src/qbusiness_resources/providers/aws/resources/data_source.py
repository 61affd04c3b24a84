"""AWS::QBusiness::DataSource resource definition."""
from datetime import timedelta

from qbusiness_resources.domain.lifecycle.value_objects import BackoffPolicy, StabilizationCriteria
from qbusiness_resources.providers.aws.resources.base import ApiOperations, ResourceDefinition

TYPE_NAME = "AWS::QBusiness::DataSource"

DATA_SOURCE = ResourceDefinition(
    type_name=TYPE_NAME,
    identifiers=("ApplicationId", "IndexId", "DataSourceId"),
    arn_segments=("application", "index", "data-source"),
    operations=ApiOperations(
        create="create_data_source",
        get="get_data_source",
        update="update_data_source",
        delete="delete_data_source",
        list="list_data_sources",
        list_result_key="dataSources",
    ),
    create_properties=(
        "DisplayName", "Description", "Configuration", "VpcConfiguration", "SyncSchedule",
        "RoleArn", "DocumentEnrichmentConfiguration", "MediaExtractionConfiguration",
    ),
    update_properties=(
        "DisplayName", "Description", "Configuration", "VpcConfiguration", "SyncSchedule",
        "RoleArn", "DocumentEnrichmentConfiguration", "MediaExtractionConfiguration",
    ),
    read_properties=(
        "DisplayName", "Description", "Type", "Configuration", "VpcConfiguration",
        "SyncSchedule", "RoleArn", "DocumentEnrichmentConfiguration",
        "MediaExtractionConfiguration", "Status", "CreatedAt", "UpdatedAt",
    ),
    list_properties=("DisplayName", "Type", "Status", "CreatedAt", "UpdatedAt"),
    opaque_properties=("Configuration",),
    arn_property="DataSourceArn",
    criteria=StabilizationCriteria(
        terminal_success=frozenset({"ACTIVE"}),
        terminal_failure=frozenset({"FAILED"}),
        fail_on_error_detail=True,
    ),
    create_policy=BackoffPolicy.of(timeout=timedelta(hours=4), delay=timedelta(seconds=30)),
    update_policy=BackoffPolicy.of(timeout=timedelta(hours=4), delay=timedelta(minutes=1)),
    delete_policy=BackoffPolicy.of(timeout=timedelta(hours=24), delay=timedelta(minutes=1)),
)
