"""Example usage of the validator node and the field validator.

Runs a webhook payload through the Custom Trigger and then through the
Validator Node in both modes.
"""

import asyncio

from core.validator import validate_raw_fields
from nodes.base import ExecutionContext, NodeOperationError, return_json_array
from nodes.custom_trigger import CustomTrigger, WebhookRequest
from nodes.validator_node import MODE_ANNOTATE, MODE_GATE, ValidatorNode


SIGNUP_FIELDS = [
    {"name": "email", "validationType": "string", "required": True,
     "stringData": "ada@example.com", "stringFormat": "email"},
    {"name": "age", "validationType": "number", "numberData": 17,
     "numberValidationType": "min", "minValue": 18},
    {"name": "plan", "validationType": "enum", "stringData": "pro",
     "enumValues": "free, pro, team"},
    {"name": "newsletter", "validationType": "boolean", "required": True,
     "booleanData": False},
]


def example_plain_validation():
    """Validate field descriptors without any node around them."""
    result = validate_raw_fields(SIGNUP_FIELDS)
    print(f"Valid: {result.is_valid}")
    for error in result.errors:
        print(f"  {error.describe()}")
    return result


async def example_annotate_mode():
    """Trigger a workflow and annotate the item with validation results."""
    trigger = CustomTrigger()
    response = await trigger.webhook(
        WebhookRequest(method="POST", body={"user": "ada"})
    )
    print(f"Webhook replied {response.reply.status_code}: {response.reply.body}")

    ctx = ExecutionContext(
        items=response.workflow_data[0],
        parameters={"nodeMode": MODE_ANNOTATE, "inputs": {"inputFields": SIGNUP_FIELDS}},
    )
    output = await ValidatorNode().execute(ctx)
    print(f"Annotated item: {output[0][0].json}")
    return output


async def example_gate_mode():
    """Gate mode stops at the first invalid item."""
    ctx = ExecutionContext(
        items=return_json_array([{"user": "ada"}, {"user": "grace"}]),
        parameters={"nodeMode": MODE_GATE, "inputs": {"inputFields": SIGNUP_FIELDS}},
        node_name="Signup Validator",
    )
    try:
        await ValidatorNode().execute(ctx)
    except NodeOperationError as exc:
        print(f"Workflow stopped: {exc.message}")


if __name__ == "__main__":
    print("=" * 60)
    print("Validator Node Examples")
    print("=" * 60)
    print()

    print("Example 1: Plain Validation")
    print("-" * 60)
    example_plain_validation()
    print()

    print("Example 2: Annotate Mode")
    print("-" * 60)
    asyncio.run(example_annotate_mode())
    print()

    print("Example 3: Gate Mode")
    print("-" * 60)
    asyncio.run(example_gate_mode())
    print()
