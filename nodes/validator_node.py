from __future__ import annotations

from typing import Any, Dict, List

from loguru import logger
from pydantic import ValidationError

from core.fields import parse_input_fields
from core.logging import ITEM_REJECTED, audit_log
from core.validator import validate_input_fields
from nodes.base import (
    ExecutionContext,
    NodeDescription,
    NodeExecutionData,
    NodeOperationError,
    NodeProperty,
    PropertyOption,
)

MODE_ANNOTATE = "output-validation"
MODE_GATE = "output-items"


def _field_properties() -> List[NodeProperty]:
    return [
        NodeProperty(
            displayName="Validation Name",
            name="name",
            type="string",
            default="",
            placeholder="Enter validation name",
            description="Name of the validation",
        ),
        NodeProperty(
            displayName="Validation Type",
            name="validationType",
            type="options",
            options=[
                PropertyOption(name="Boolean", value="boolean"),
                PropertyOption(name="Date", value="date"),
                PropertyOption(name="Enum", value="enum"),
                PropertyOption(name="Number", value="number"),
                PropertyOption(name="String", value="string"),
            ],
            default="string",
            description="The type of validation to perform",
        ),
        NodeProperty(
            displayName="Required",
            name="required",
            type="boolean",
            default=False,
            description="Whether the input field is required",
        ),
        NodeProperty(
            displayName="String Data",
            name="stringData",
            type="string",
            default="",
            description="Data to be validated as a string",
            displayOptions={"show": {"validationType": ["string", "enum"]}},
        ),
        NodeProperty(
            displayName="String Format",
            name="stringFormat",
            type="options",
            options=[
                PropertyOption(name="Email", value="email"),
                PropertyOption(name="None", value="none"),
                PropertyOption(name="Pattern", value="pattern"),
                PropertyOption(name="URL", value="url"),
                PropertyOption(name="UUID", value="uuid"),
            ],
            default="none",
            description="Validate the string as an email, URL, UUID, or against a custom pattern",
            displayOptions={"show": {"validationType": ["string"]}},
        ),
        NodeProperty(
            displayName="Pattern",
            name="pattern",
            type="string",
            default="",
            placeholder="Enter regex pattern",
            description="Regex pattern for validation",
            displayOptions={"show": {"stringFormat": ["pattern"]}},
        ),
        NodeProperty(
            displayName="Number Data",
            name="numberData",
            type="number",
            default=0,
            description="Data to be validated as a number",
            displayOptions={"show": {"validationType": ["number"]}},
        ),
        NodeProperty(
            displayName="Number Validation Type",
            name="numberValidationType",
            type="options",
            options=[
                PropertyOption(name="None", value="none"),
                PropertyOption(name="Minimum", value="min"),
                PropertyOption(name="Maximum", value="max"),
                PropertyOption(name="Range", value="range"),
            ],
            default="none",
            description="Check the number against a minimum, maximum, or range",
            displayOptions={"show": {"validationType": ["number"]}},
        ),
        NodeProperty(
            displayName="Min Value",
            name="minValue",
            type="number",
            description="Minimum value for number validation",
            displayOptions={
                "show": {"validationType": ["number"], "numberValidationType": ["min", "range"]}
            },
        ),
        NodeProperty(
            displayName="Max Value",
            name="maxValue",
            type="number",
            description="Maximum value for number validation",
            displayOptions={
                "show": {"validationType": ["number"], "numberValidationType": ["max", "range"]}
            },
        ),
        NodeProperty(
            displayName="Boolean Data",
            name="booleanData",
            type="boolean",
            default=False,
            description="Data to be validated as a boolean",
            displayOptions={"show": {"validationType": ["boolean"]}},
        ),
        NodeProperty(
            displayName="Date Data",
            name="dateData",
            type="string",
            default="",
            placeholder="Enter date data",
            description="Data to be validated as a date",
            displayOptions={"show": {"validationType": ["date"]}},
        ),
        NodeProperty(
            displayName="Enum Values",
            name="enumValues",
            type="string",
            default="",
            placeholder="Enter comma-separated enum values",
            description="Comma-separated list of valid enum values",
            displayOptions={"show": {"validationType": ["enum"]}},
        ),
    ]


class ValidatorNode:
    """Validates configured input fields for every incoming item."""

    description = NodeDescription(
        displayName="Validator Node",
        name="validatorNode",
        group=["function"],
        version=1,
        description="Validates input data against specified criteria",
        defaults={"name": "Validator Node"},
        icon="file:validation.svg",
        inputs=["main"],
        outputs=["main"],
        properties=[
            NodeProperty(
                displayName="Node Mode",
                name="nodeMode",
                type="options",
                options=[
                    PropertyOption(
                        name="Output Validation Results",
                        value=MODE_ANNOTATE,
                        description="Node will output validation results",
                    ),
                    PropertyOption(
                        name="Output Items",
                        value=MODE_GATE,
                        description="Node will output items from input and error on validation failure",
                    ),
                ],
                default=MODE_ANNOTATE,
            ),
            NodeProperty(
                displayName="Inputs",
                name="inputs",
                type="fixedCollection",
                default={},
                placeholder="Add Input",
                typeOptions={"multipleValues": True},
                options=[
                    {
                        "name": "inputFields",
                        "displayName": "Input Fields",
                        "values": [prop.model_dump(exclude_none=True) for prop in _field_properties()],
                    }
                ],
            ),
        ],
    )

    async def execute(self, ctx: ExecutionContext) -> List[List[NodeExecutionData]]:
        items = ctx.get_input_data()
        mode = ctx.get_node_parameter("nodeMode", 0, MODE_ANNOTATE)
        if mode not in (MODE_ANNOTATE, MODE_GATE):
            raise NodeOperationError(ctx.node_name, f"Unknown node mode: {mode}")

        return_data: List[NodeExecutionData] = []
        for item_index, item in enumerate(items):
            raw_fields = ctx.get_node_parameter("inputs.inputFields", item_index, []) or []
            try:
                fields = parse_input_fields(raw_fields)
            except ValidationError as exc:
                raise NodeOperationError(
                    ctx.node_name,
                    f"Invalid input field configuration for item {item_index}: "
                    f"{exc.error_count()} error(s)",
                    item_index=item_index,
                ) from exc

            result = validate_input_fields(fields)
            logger.debug(
                "validated item {} fields={} valid={}",
                item_index,
                len(fields),
                result.is_valid,
            )

            if mode == MODE_GATE:
                if not result.is_valid:
                    message = f"Item failed validation. {result.error_summary()}"
                    logger.warning("{}: {}", ctx.node_name, message)
                    audit_log(
                        ITEM_REJECTED,
                        actor=ctx.node_name,
                        details={
                            "itemIndex": item_index,
                            "errors": [error.model_dump() for error in result.errors],
                        },
                        status="rejected",
                    )
                    raise NodeOperationError(ctx.node_name, message, item_index=item_index)
                return_data.append(item)
            else:
                return_data.append(_annotate(item, result.to_json()))

        return ctx.prepare_output_data(return_data)


def _annotate(item: NodeExecutionData, outcome: Dict[str, Any]) -> NodeExecutionData:
    payload = dict(item.json)
    payload.pop("errors", None)
    payload.update(outcome)
    return NodeExecutionData(json=payload, binary=item.binary, pairedItem=item.pairedItem)
