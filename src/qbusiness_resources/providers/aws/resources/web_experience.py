"""AWS::QBusiness::WebExperience resource definition."""
from datetime import timedelta

from qbusiness_resources.domain.lifecycle.value_objects import BackoffPolicy, StabilizationCriteria
from qbusiness_resources.providers.aws.resources.base import ApiOperations, ResourceDefinition

TYPE_NAME = "AWS::QBusiness::WebExperience"

WEB_EXPERIENCE = ResourceDefinition(
    type_name=TYPE_NAME,
    identifiers=("ApplicationId", "WebExperienceId"),
    arn_segments=("application", "web-experience"),
    operations=ApiOperations(
        create="create_web_experience",
        get="get_web_experience",
        update="update_web_experience",
        delete="delete_web_experience",
        list="list_web_experiences",
        list_result_key="webExperiences",
    ),
    create_properties=(
        "Title", "Subtitle", "WelcomeMessage", "SamplePromptsControlMode", "RoleArn",
        "IdentityProviderConfiguration", "Origins", "CustomizationConfiguration",
        "BrowserExtensionConfiguration",
    ),
    update_properties=(
        "Title", "Subtitle", "WelcomeMessage", "SamplePromptsControlMode", "RoleArn",
        "IdentityProviderConfiguration", "Origins", "CustomizationConfiguration",
        "BrowserExtensionConfiguration",
    ),
    read_properties=(
        "Title", "Subtitle", "WelcomeMessage", "SamplePromptsControlMode", "RoleArn",
        "IdentityProviderConfiguration", "Origins", "CustomizationConfiguration",
        "BrowserExtensionConfiguration", "DefaultEndpoint", "Status", "CreatedAt", "UpdatedAt",
    ),
    list_properties=("DefaultEndpoint", "Status", "CreatedAt", "UpdatedAt"),
    arn_property="WebExperienceArn",
    criteria=StabilizationCriteria(
        terminal_success=frozenset({"ACTIVE", "PENDING_AUTH_CONFIG"}),
        terminal_failure=frozenset({"FAILED"}),
        required_field="defaultEndpoint",
    ),
    create_policy=BackoffPolicy.of(timeout=timedelta(hours=4), delay=timedelta(seconds=30)),
    update_policy=BackoffPolicy.of(timeout=timedelta(hours=2), delay=timedelta(minutes=2)),
    delete_policy=BackoffPolicy.of(timeout=timedelta(hours=4), delay=timedelta(minutes=2)),
)
