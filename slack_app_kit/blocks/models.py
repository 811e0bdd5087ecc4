"""Pydantic models describing Block Kit payloads.

Blocks and interactive elements form discriminated unions keyed on their
``type`` field. Serialisation drops absent and empty-valued fields alike
(``None``, ``""``, ``False``, ``0``, empty lists and mappings), which is how
Slack expects optional Block Kit attributes to be left out.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_serializer


def _is_empty(value: Any) -> bool:
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    return value is None or value is False or value == 0


class BlockKitModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler):
        data = handler(self)
        return {key: value for key, value in data.items() if not _is_empty(value)}

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON-ready mapping Slack expects."""
        return self.model_dump(mode="json")


# Composition objects


class PlainText(BlockKitModel):
    type: Literal["plain_text"] = "plain_text"
    text: str = ""
    emoji: bool = False


class Markdown(BlockKitModel):
    type: Literal["mrkdwn"] = "mrkdwn"
    text: str = ""
    verbatim: bool = False


TextObject = Annotated[Union[PlainText, Markdown], Field(discriminator="type")]


class Option(BlockKitModel):
    text: PlainText
    value: str = ""


# Interactive elements


class Button(BlockKitModel):
    type: Literal["button"] = "button"
    text: PlainText
    value: str = ""
    action_id: str = ""
    style: Literal["primary", "danger"] | None = None
    url: str | None = None


class PlainTextInput(BlockKitModel):
    type: Literal["plain_text_input"] = "plain_text_input"
    action_id: str = ""
    multiline: bool = False
    max_length: int = 0
    placeholder: PlainText | None = None
    initial_value: str | None = None


class StaticSelect(BlockKitModel):
    type: Literal["static_select"] = "static_select"
    action_id: str = ""
    placeholder: PlainText | None = None
    options: List[Option] = Field(default_factory=list)
    initial_option: Option | None = None


class MultiStaticSelect(BlockKitModel):
    type: Literal["multi_static_select"] = "multi_static_select"
    action_id: str = ""
    placeholder: PlainText | None = None
    options: List[Option] = Field(default_factory=list)
    initial_options: List[Option] = Field(default_factory=list)


class MultiConversationsSelect(BlockKitModel):
    type: Literal["multi_conversations_select"] = "multi_conversations_select"
    action_id: str = ""
    placeholder: PlainText | None = None
    initial_conversations: List[str] = Field(default_factory=list)


class DatePicker(BlockKitModel):
    type: Literal["datepicker"] = "datepicker"
    action_id: str = ""
    placeholder: PlainText | None = None
    initial_date: str = ""


class TimePicker(BlockKitModel):
    type: Literal["timepicker"] = "timepicker"
    action_id: str = ""
    placeholder: PlainText | None = None
    initial_time: str = ""


class Checkboxes(BlockKitModel):
    type: Literal["checkboxes"] = "checkboxes"
    action_id: str = ""
    options: List[Option] = Field(default_factory=list)
    initial_options: List[Option] = Field(default_factory=list)


class RadioButtons(BlockKitModel):
    type: Literal["radio_buttons"] = "radio_buttons"
    action_id: str = ""
    options: List[Option] = Field(default_factory=list)
    initial_option: Option | None = None


class ImageElement(BlockKitModel):
    type: Literal["image"] = "image"
    image_url: str
    alt_text: str


Element = Annotated[
    Union[
        Button,
        PlainTextInput,
        StaticSelect,
        MultiStaticSelect,
        MultiConversationsSelect,
        DatePicker,
        TimePicker,
        Checkboxes,
        RadioButtons,
        ImageElement,
    ],
    Field(discriminator="type"),
]

ContextElement = Annotated[Union[PlainText, Markdown, ImageElement], Field(discriminator="type")]


# Layout blocks


class HeaderBlock(BlockKitModel):
    type: Literal["header"] = "header"
    text: PlainText
    block_id: str = ""


class SectionBlock(BlockKitModel):
    type: Literal["section"] = "section"
    text: TextObject | None = None
    fields: List[TextObject] = Field(default_factory=list)
    accessory: Element | None = None
    block_id: str = ""


class DividerBlock(BlockKitModel):
    type: Literal["divider"] = "divider"
    block_id: str = ""


class ContextBlock(BlockKitModel):
    type: Literal["context"] = "context"
    elements: List[ContextElement] = Field(default_factory=list)
    block_id: str = ""


class ActionsBlock(BlockKitModel):
    type: Literal["actions"] = "actions"
    elements: List[Element] = Field(default_factory=list)
    block_id: str = ""


class InputBlock(BlockKitModel):
    type: Literal["input"] = "input"
    element: Element
    label: PlainText
    dispatch_action: bool = False
    optional: bool = False
    block_id: str = ""


class ImageBlock(BlockKitModel):
    type: Literal["image"] = "image"
    image_url: str
    alt_text: str
    title: PlainText | None = None
    block_id: str = ""


Block = Annotated[
    Union[HeaderBlock, SectionBlock, DividerBlock, ContextBlock, ActionsBlock, InputBlock, ImageBlock],
    Field(discriminator="type"),
]

BLOCK_ADAPTER: TypeAdapter[Any] = TypeAdapter(Block)
BLOCK_LIST_ADAPTER: TypeAdapter[Any] = TypeAdapter(List[Block])


# Surfaces


class Modal(BlockKitModel):
    type: Literal["modal"] = "modal"
    title: PlainText
    submit: PlainText | None = None
    close: PlainText | None = None
    blocks: List[Block] = Field(default_factory=list)
    callback_id: str = ""
    notify_on_close: bool = False
    private_metadata: str = ""


class Message(BlockKitModel):
    """Body of a message reply, e.g. a slash command response."""

    text: str = ""
    blocks: List[Block] = Field(default_factory=list)
    response_type: Literal["ephemeral", "in_channel"] | None = None
    replace_original: bool = False


def to_payload(value: Any) -> Any:
    """Turn Block Kit models, possibly nested in lists or mappings, into plain JSON-ready data."""
    if isinstance(value, BlockKitModel):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [to_payload(item) for item in value]
    if isinstance(value, dict):
        return {key: to_payload(item) for key, item in value.items()}
    return value


def parse_block(data: Dict[str, Any]):
    """Validate a raw block mapping into its typed model."""
    return BLOCK_ADAPTER.validate_python(data)


def parse_blocks(data: List[Dict[str, Any]]):
    return BLOCK_LIST_ADAPTER.validate_python(data)
