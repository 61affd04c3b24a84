"""AWS::QBusiness::DataAccessor resource definition.

Data accessors have no status; create, update and delete complete with the
API call itself.
"""
from qbusiness_resources.providers.aws.resources.base import ApiOperations, ResourceDefinition

TYPE_NAME = "AWS::QBusiness::DataAccessor"

DATA_ACCESSOR = ResourceDefinition(
    type_name=TYPE_NAME,
    identifiers=("ApplicationId", "DataAccessorId"),
    arn_segments=("application", "data-accessor"),
    operations=ApiOperations(
        create="create_data_accessor",
        get="get_data_accessor",
        update="update_data_accessor",
        delete="delete_data_accessor",
        list="list_data_accessors",
        list_result_key="dataAccessors",
    ),
    create_properties=("DisplayName", "Principal", "ActionConfigurations"),
    update_properties=("DisplayName", "ActionConfigurations"),
    read_properties=(
        "DisplayName", "Principal", "ActionConfigurations", "IdcApplicationArn",
        "CreatedAt", "UpdatedAt",
    ),
    list_properties=("DisplayName", "Principal", "IdcApplicationArn", "CreatedAt", "UpdatedAt"),
    arn_property="DataAccessorArn",
)
