"""Application resource policy parsing.

Permissions have no describe call of their own; they exist as statements in
the application's resource-based policy returned by ``get_policy``, for
example::

    {
        "Version": "2012-10-17",
        "Statement": [{
            "Sid": "cross-account-retrieval",
            "Effect": "Allow",
            "Principal": {"AWS": "arn:aws:iam::111122223333:role/assistant"},
            "Action": "qbusiness:SearchRelevantContent",
            "Resource": ["arn:aws:qbusiness:us-west-2:444455556666:application/a1"]
        }]
    }
"""
import json
from typing import Any, Dict, List, Optional

from qbusiness_resources.domain.core.exceptions import HandlerFailure
from qbusiness_resources.domain.lifecycle.value_objects import FailureCause


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _principals(statement: Dict[str, Any]) -> List[str]:
    principal = statement.get("Principal")
    if isinstance(principal, dict):
        return [p for values in principal.values() for p in _as_list(values)]
    return _as_list(principal)


def permission_models_from_policy(policy: str, application_id: str) -> List[Dict[str, Any]]:
    """
    Translate every statement of a policy document into a Permission model.

    Args:
        policy: Policy document as returned by ``get_policy``
        application_id: Application the policy belongs to

    Returns:
        One model per statement, in document order

    Raises:
        HandlerFailure: If a statement does not name exactly one principal
    """
    document = json.loads(policy)
    models = []
    for statement in _as_list(document.get("Statement")):
        principals = _principals(statement)
        # A Permission carries a single principal per statement.
        if len(principals) != 1:
            raise HandlerFailure(
                FailureCause.SERVICE_ERROR,
                f"Policy statement {statement.get('Sid')} has {len(principals)} principals, "
                f"only 1 allowed",
            )
        models.append({
            "ApplicationId": application_id,
            "StatementId": statement.get("Sid"),
            "Actions": _as_list(statement.get("Action")),
            "Principal": principals[0],
        })
    return models


def statement_from_policy(policy: str, statement_id: str,
                          application_id: str) -> Optional[Dict[str, Any]]:
    """Find the Permission model for one statement id, if the policy has it."""
    for model in permission_models_from_policy(policy, application_id):
        if model["StatementId"] == statement_id:
            return model
    return None
