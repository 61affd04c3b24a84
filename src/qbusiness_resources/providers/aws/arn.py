"""ARN construction for QBusiness resources."""

from typing import TYPE_CHECKING

from qbusiness_resources.domain.core.exceptions import ValidationError
from qbusiness_resources.domain.lifecycle.value_objects import ResourceHandle

if TYPE_CHECKING:
    from qbusiness_resources.providers.aws.resources.base import ResourceDefinition

SERVICE = "qbusiness"


def build_arn(definition: "ResourceDefinition", partition: str, region: str,
              account_id: str, handle: ResourceHandle) -> str:
    """
    Build the ARN of a resource from its identifiers.

    Each identifier contributes one ``<segment>/<id>`` pair, for example
    ``arn:aws:qbusiness:us-east-1:123456789012:application/a1/index/i1``.

    Raises:
        ValidationError: If an identifier has not been assigned yet
    """
    parts = []
    for segment, name in zip(definition.arn_segments, definition.identifiers):
        value = handle.get(name)
        if not value:
            raise ValidationError(f"Cannot build ARN for {definition.type_name} without {name}")
        parts.append(f"{segment}/{value}")

    return f"arn:{partition}:{SERVICE}:{region}:{account_id}:{'/'.join(parts)}".lower()
