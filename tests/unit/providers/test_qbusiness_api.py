"""Unit tests for QBusinessResourceApi."""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from qbusiness_resources.providers.aws.qbusiness_api import QBusinessResourceApi
from qbusiness_resources.providers.aws.resources import INDEX

ARN = "arn:aws:qbusiness:us-east-1:123456789012:application/a/index/i"


@pytest.mark.unit
@pytest.mark.aws
class TestQBusinessResourceApi:
    """Test cases for the boto3 adapter."""

    def setup_method(self):
        self.client = MagicMock()
        self.api = QBusinessResourceApi(self.client, INDEX)

    def test_operations_dispatch_to_definition_names(self):
        self.client.create_index.return_value = {"indexId": "i", "ResponseMetadata": {"HTTPStatusCode": 200}}

        response = self.api.create({"applicationId": "a", "displayName": "docs"})

        self.client.create_index.assert_called_once_with(applicationId="a", displayName="docs")
        assert response == {"indexId": "i"}

        self.api.get({"applicationId": "a", "indexId": "i"})
        self.api.update({"applicationId": "a", "indexId": "i"})
        self.api.delete({"applicationId": "a", "indexId": "i"})
        self.api.list({"applicationId": "a"})

        self.client.get_index.assert_called_once_with(applicationId="a", indexId="i")
        self.client.update_index.assert_called_once_with(applicationId="a", indexId="i")
        self.client.delete_index.assert_called_once_with(applicationId="a", indexId="i")
        self.client.list_indices.assert_called_once_with(applicationId="a")

    def test_errors_propagate(self):
        error = ClientError({"Error": {"Code": "ConflictException", "Message": "busy"}}, "UpdateIndex")
        self.client.update_index.side_effect = error

        with pytest.raises(ClientError):
            self.api.update({"applicationId": "a", "indexId": "i"})

    def test_list_tags(self):
        self.client.list_tags_for_resource.return_value = {"tags": [{"key": "env", "value": "prod"}]}

        assert self.api.list_tags(ARN) == {"env": "prod"}
        self.client.list_tags_for_resource.assert_called_once_with(resourceARN=ARN)

    def test_add_and_remove_tags(self):
        self.api.add_tags(ARN, {"env": "prod"})
        self.api.remove_tags(ARN, frozenset({"b", "a"}))

        self.client.tag_resource.assert_called_once_with(
            resourceARN=ARN, tags=[{"key": "env", "value": "prod"}]
        )
        self.client.untag_resource.assert_called_once_with(resourceARN=ARN, tagKeys=["a", "b"])

    def test_empty_tag_payloads_skip_the_call(self):
        self.api.add_tags(ARN, {})
        self.api.remove_tags(ARN, [])

        self.client.tag_resource.assert_not_called()
        self.client.untag_resource.assert_not_called()
