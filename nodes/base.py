"""Host-side types shared by the nodes: items, descriptions, execution context."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Sequence

from pydantic import BaseModel, Field


class NodeOperationError(Exception):
    """Raised by a node to abort processing of the current unit of work."""

    def __init__(self, node_name: str, message: str, item_index: Optional[int] = None) -> None:
        super().__init__(message)
        self.node_name = node_name
        self.message = message
        self.item_index = item_index

    def to_dict(self) -> Dict[str, Any]:
        return {
            "node": self.node_name,
            "message": self.message,
            "itemIndex": self.item_index,
        }


@dataclass
class NodeExecutionData:
    """One work item flowing between nodes."""

    json: Dict[str, Any] = field(default_factory=dict)
    binary: Optional[Dict[str, Any]] = None
    pairedItem: Optional[Dict[str, int]] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"json": self.json}
        if self.binary is not None:
            payload["binary"] = self.binary
        if self.pairedItem is not None:
            payload["pairedItem"] = self.pairedItem
        return payload

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NodeExecutionData":
        if "json" in data and isinstance(data["json"], dict):
            return cls(
                json=dict(data["json"]),
                binary=data.get("binary"),
                pairedItem=data.get("pairedItem"),
            )
        # bare payloads are treated as the item's json
        return cls(json=dict(data))


def return_json_array(data: Sequence[Dict[str, Any]]) -> List[NodeExecutionData]:
    """Wrap plain dicts as work items."""
    return [NodeExecutionData(json=dict(entry)) for entry in data]


class PropertyOption(BaseModel):
    name: str
    value: Any
    description: Optional[str] = None


class NodeProperty(BaseModel):
    displayName: str
    name: str
    type: str
    default: Any = None
    description: Optional[str] = None
    placeholder: Optional[str] = None
    options: Optional[List[Any]] = None
    values: Optional[List["NodeProperty"]] = None
    typeOptions: Optional[Dict[str, Any]] = None
    displayOptions: Optional[Dict[str, Dict[str, List[str]]]] = None


class WebhookDescription(BaseModel):
    name: str = "default"
    httpMethod: Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"] = "POST"
    responseMode: Literal["onReceived", "lastNode"] = "onReceived"
    path: str


class NodeDescription(BaseModel):
    displayName: str
    name: str
    group: List[str]
    version: int = 1
    description: str
    defaults: Dict[str, Any] = Field(default_factory=dict)
    icon: Optional[str] = None
    inputs: List[str] = Field(default_factory=list)
    outputs: List[str] = Field(default_factory=lambda: ["main"])
    properties: List[NodeProperty] = Field(default_factory=list)
    webhooks: List[WebhookDescription] = Field(default_factory=list)


_MISSING = object()


class ExecutionContext:
    """
    What a node sees while executing: its input items and its parameters.

    Parameters are looked up by dotted path ("inputs.inputFields"). A value in
    item_parameters[item_index] wins over the node-level parameter, which is
    how per-item expression results reach the node.
    """

    def __init__(
        self,
        items: Sequence[NodeExecutionData],
        parameters: Optional[Dict[str, Any]] = None,
        item_parameters: Optional[Dict[int, Dict[str, Any]]] = None,
        node_name: str = "Node",
    ) -> None:
        self._items = list(items)
        self._parameters = parameters or {}
        self._item_parameters = item_parameters or {}
        self.node_name = node_name

    def get_input_data(self) -> List[NodeExecutionData]:
        return list(self._items)

    def get_node_parameter(self, name: str, item_index: int = 0, default: Any = None) -> Any:
        override = _lookup(self._item_parameters.get(item_index, {}), name)
        if override is not _MISSING:
            return override
        value = _lookup(self._parameters, name)
        return default if value is _MISSING else value

    @staticmethod
    def prepare_output_data(items: List[NodeExecutionData]) -> List[List[NodeExecutionData]]:
        return [items]


def _lookup(params: Dict[str, Any], path: str) -> Any:
    current: Any = params
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current
