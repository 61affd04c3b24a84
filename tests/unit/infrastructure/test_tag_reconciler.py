"""Unit tests for TagReconciler."""

import pytest

from qbusiness_resources.domain.lifecycle.value_objects import TagDelta
from qbusiness_resources.infrastructure.tagging.tag_reconciler import TagReconciler


@pytest.mark.unit
class TestComputeEffectiveTags:
    """Test merging of the three tag layers."""

    def test_later_layers_win(self):
        effective = TagReconciler.compute_effective_tags(
            system={"a": "1"},
            stack={"a": "2", "b": "1"},
            resource={"b": "2", "c": "1"},
        )
        assert effective == {"a": "2", "b": "2", "c": "1"}

    def test_absent_layers_are_empty(self):
        assert TagReconciler.compute_effective_tags(None, None, None) == {}
        assert TagReconciler.compute_effective_tags(stack={"env": "prod"}) == {"env": "prod"}

    def test_null_resource_values_are_dropped(self):
        effective = TagReconciler.compute_effective_tags(
            system={"aws:cloudformation:stack-name": "demo"},
            resource={"team": None, "owner": "me"},
        )
        assert effective == {"aws:cloudformation:stack-name": "demo", "owner": "me"}

    def test_null_resource_value_does_not_mask_lower_layer(self):
        effective = TagReconciler.compute_effective_tags(stack={"team": "search"}, resource={"team": None})
        assert effective == {"team": "search"}


@pytest.mark.unit
class TestDiff:
    """Test computation of tag deltas."""

    def test_added_changed_and_removed_keys(self):
        delta = TagReconciler.diff({"a": "1", "b": "1", "c": "1"}, {"a": "1", "b": "2", "d": "1"})
        assert delta.to_add == {"b": "2", "d": "1"}
        assert delta.to_remove == frozenset({"c"})

    def test_changed_value_is_only_added(self):
        delta = TagReconciler.diff({"k": "old"}, {"k": "new"})
        assert delta.to_add == {"k": "new"}
        assert delta.to_remove == frozenset()

    def test_equal_sets_produce_empty_delta(self):
        assert TagReconciler.diff({"a": "1"}, {"a": "1"}).is_empty
        assert not TagReconciler.should_update({"a": "1"}, {"a": "1"})

    def test_diff_is_idempotent_once_applied(self):
        previous = {"a": "1", "b": "1"}
        desired = {"b": "2", "c": "3"}
        delta = TagReconciler.diff(previous, desired)

        applied = {k: v for k, v in previous.items() if k not in delta.to_remove}
        applied.update(delta.to_add)

        assert applied == desired
        assert TagReconciler.diff(applied, desired).is_empty

    def test_delta_rejects_overlapping_keys(self):
        with pytest.raises(ValueError):
            TagDelta(to_add={"a": "1"}, to_remove=frozenset({"a"}))


@pytest.mark.unit
class TestTagConversions:
    """Test conversions between model, service and tag set shapes."""

    def test_tags_from_model(self):
        model = {"Tags": [{"Key": "env", "Value": "prod"}, {"Key": "team", "Value": None}]}
        assert TagReconciler.tags_from_model(model) == {"env": "prod", "team": None}

    def test_tags_from_model_without_tags(self):
        assert TagReconciler.tags_from_model({"DisplayName": "x"}) is None
        assert TagReconciler.tags_from_model(None) is None

    def test_to_model_tags_is_sorted(self):
        assert TagReconciler.to_model_tags({"b": "2", "a": "1"}) == [
            {"Key": "a", "Value": "1"},
            {"Key": "b", "Value": "2"},
        ]

    def test_service_tag_shape(self):
        service_tags = TagReconciler.to_service_tags({"env": "prod"})
        assert service_tags == [{"key": "env", "value": "prod"}]
        assert TagReconciler.from_service_tags(service_tags) == {"env": "prod"}
        assert TagReconciler.from_service_tags(None) == {}
