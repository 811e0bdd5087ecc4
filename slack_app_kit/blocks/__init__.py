"""Block Kit models and builders."""

from .builders import (
    build_actions,
    build_button,
    build_checkboxes_input,
    build_context,
    build_conversations_select_input,
    build_date_picker_input,
    build_divider,
    build_header,
    build_image,
    build_modal,
    build_option,
    build_radio_input,
    build_static_select_input,
    build_text_input,
    build_time_picker_input,
)
from .models import (
    ActionsBlock,
    Block,
    BlockKitModel,
    Button,
    Checkboxes,
    ContextBlock,
    DatePicker,
    DividerBlock,
    Element,
    HeaderBlock,
    ImageBlock,
    ImageElement,
    InputBlock,
    Markdown,
    Message,
    Modal,
    MultiConversationsSelect,
    MultiStaticSelect,
    Option,
    PlainText,
    PlainTextInput,
    RadioButtons,
    SectionBlock,
    StaticSelect,
    TimePicker,
    parse_block,
    parse_blocks,
    to_payload,
)

__all__ = [
    "ActionsBlock",
    "Block",
    "BlockKitModel",
    "Button",
    "Checkboxes",
    "ContextBlock",
    "DatePicker",
    "DividerBlock",
    "Element",
    "HeaderBlock",
    "ImageBlock",
    "ImageElement",
    "InputBlock",
    "Markdown",
    "Message",
    "Modal",
    "MultiConversationsSelect",
    "MultiStaticSelect",
    "Option",
    "PlainText",
    "PlainTextInput",
    "RadioButtons",
    "SectionBlock",
    "StaticSelect",
    "TimePicker",
    "parse_block",
    "parse_blocks",
    "to_payload",
    "build_actions",
    "build_button",
    "build_checkboxes_input",
    "build_context",
    "build_conversations_select_input",
    "build_date_picker_input",
    "build_divider",
    "build_header",
    "build_image",
    "build_modal",
    "build_option",
    "build_radio_input",
    "build_static_select_input",
    "build_text_input",
    "build_time_picker_input",
]
