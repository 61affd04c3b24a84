"""Tag reconciler utility for resource handlers.

This utility provides the single tag merge and diff implementation shared by
every resource type. Tags come from three layers which are merged in order
system -> stack -> resource, later layers winning on key collision.
"""
from typing import Any, Dict, Iterable, List, Mapping, Optional

from qbusiness_resources.domain.lifecycle.value_objects import TagDelta, TagSet


class TagReconciler:
    """Utility for computing effective tag sets and minimal tag deltas."""

    @staticmethod
    def compute_effective_tags(system: Optional[Mapping[str, Optional[str]]] = None,
                               stack: Optional[Mapping[str, Optional[str]]] = None,
                               resource: Optional[Mapping[str, Optional[str]]] = None) -> TagSet:
        """Merge the three tag layers into one effective tag set.

        Args:
            system: Platform-injected tags, may be None
            stack: Tags supplied by the enclosing deployment, may be None
            resource: Tags declared on the resource model, may be None

        Returns:
            Dictionary of tag key to tag value
        """
        effective: TagSet = {}
        for layer in (system, stack):
            if layer:
                effective.update(layer)
        if resource:
            effective.update({k: v for k, v in resource.items() if v is not None})
        return effective

    @staticmethod
    def should_update(previous: Mapping[str, str], desired: Mapping[str, str]) -> bool:
        """Check whether any tagging call is needed at all."""
        return dict(previous) != dict(desired)

    @staticmethod
    def generate_tags_to_add(previous: Mapping[str, str], desired: Mapping[str, str]) -> TagSet:
        """Tags that are new or whose value changed."""
        return {
            key: value for key, value in desired.items()
            if key not in previous or previous[key] != value
        }

    @staticmethod
    def generate_tags_to_remove(previous: Mapping[str, str], desired: Mapping[str, str]) -> frozenset:
        """Keys present before but absent from the desired set."""
        return frozenset(key for key in previous if key not in desired)

    @staticmethod
    def diff(previous: Mapping[str, str], desired: Mapping[str, str]) -> TagDelta:
        """Compute the minimal delta from ``previous`` to ``desired``.

        A key that changes value appears only in ``to_add``.
        """
        if not TagReconciler.should_update(previous, desired):
            return TagDelta()
        return TagDelta(
            to_add=TagReconciler.generate_tags_to_add(previous, desired),
            to_remove=TagReconciler.generate_tags_to_remove(previous, desired),
        )

    @staticmethod
    def tags_from_model(model: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Optional[str]]]:
        """Read the ``Tags`` list of a resource model into a mapping.

        Returns None when the model declares no tags so that the layer is
        treated as absent.
        """
        if not model or model.get("Tags") is None:
            return None
        return {tag["Key"]: tag.get("Value") for tag in model["Tags"]}

    @staticmethod
    def to_model_tags(tags: Mapping[str, str]) -> List[Dict[str, str]]:
        """Convert a tag set to the resource model's ``Tags`` list."""
        return [{"Key": key, "Value": tags[key]} for key in sorted(tags)]

    @staticmethod
    def to_service_tags(tags: Mapping[str, str]) -> List[Dict[str, str]]:
        """Convert a tag set to the service's tag list format."""
        return [{"key": key, "value": value} for key, value in tags.items()]

    @staticmethod
    def from_service_tags(tags: Optional[Iterable[Mapping[str, str]]]) -> TagSet:
        """Convert the service's tag list format to a tag set."""
        return {tag["key"]: tag["value"] for tag in tags or []}
