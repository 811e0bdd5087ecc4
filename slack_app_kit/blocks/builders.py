"""Convenience constructors for common Block Kit structures."""

from __future__ import annotations

from typing import Iterable, Sequence

from .models import (
    ActionsBlock,
    Button,
    Checkboxes,
    ContextBlock,
    DatePicker,
    DividerBlock,
    HeaderBlock,
    ImageBlock,
    InputBlock,
    Modal,
    MultiConversationsSelect,
    MultiStaticSelect,
    Option,
    PlainText,
    PlainTextInput,
    RadioButtons,
    StaticSelect,
    TimePicker,
)


def _plain(text: str | None, *, emoji: bool = True) -> PlainText | None:
    if not text:
        return None
    return PlainText(text=text, emoji=emoji)


def build_button(text: str, value: str, action_id: str, *, style: str | None = None) -> Button:
    return Button(text=PlainText(text=text, emoji=True), value=value, action_id=action_id, style=style)


def build_modal(
    title: str,
    callback_id: str,
    blocks: Iterable,
    *,
    submit_text: str = "Submit",
    close_text: str = "Cancel",
    notify_on_close: bool = False,
    private_metadata: str = "",
) -> Modal:
    """Build a modal view; set *notify_on_close* to receive ``view_closed`` events."""
    return Modal(
        title=PlainText(text=title),
        submit=PlainText(text=submit_text),
        close=PlainText(text=close_text),
        blocks=list(blocks),
        callback_id=callback_id,
        notify_on_close=notify_on_close,
        private_metadata=private_metadata,
    )


def build_actions(elements: Iterable, *, block_id: str = "") -> ActionsBlock:
    return ActionsBlock(elements=list(elements), block_id=block_id)


def build_text_input(
    label: str,
    action_id: str,
    *,
    multiline: bool = False,
    dispatch_action: bool = False,
    max_length: int = 0,
    placeholder: str | None = None,
) -> InputBlock:
    return InputBlock(
        dispatch_action=dispatch_action,
        element=PlainTextInput(
            action_id=action_id,
            multiline=multiline,
            max_length=max_length,
            placeholder=_plain(placeholder),
        ),
        label=PlainText(text=label, emoji=True),
    )


def build_option(text: str, value: str) -> Option:
    return Option(text=PlainText(text=text, emoji=True), value=value)


def build_static_select_input(
    label: str,
    placeholder: str,
    options: Sequence[Option],
    action_id: str,
    *,
    initial_option: Option | None = None,
    multi: bool = False,
) -> InputBlock:
    """Build a single or multi static select input.

    For multi selects *initial_option* becomes the sole initially selected option.
    """

    if multi:
        element = MultiStaticSelect(
            action_id=action_id,
            placeholder=_plain(placeholder),
            options=list(options),
            initial_options=[initial_option] if initial_option else [],
        )
    else:
        element = StaticSelect(
            action_id=action_id,
            placeholder=_plain(placeholder),
            options=list(options),
            initial_option=initial_option,
        )
    return InputBlock(element=element, label=PlainText(text=label, emoji=True))


def build_conversations_select_input(
    label: str,
    placeholder: str,
    action_id: str,
    *,
    initial_conversations: Sequence[str] = (),
) -> InputBlock:
    return InputBlock(
        element=MultiConversationsSelect(
            action_id=action_id,
            placeholder=_plain(placeholder),
            initial_conversations=list(initial_conversations),
        ),
        label=PlainText(text=label, emoji=True),
    )


def build_date_picker_input(
    label: str,
    action_id: str,
    *,
    placeholder: str | None = None,
    initial_date: str = "",
) -> InputBlock:
    return InputBlock(
        element=DatePicker(action_id=action_id, placeholder=_plain(placeholder), initial_date=initial_date),
        label=PlainText(text=label, emoji=True),
    )


def build_time_picker_input(
    label: str,
    action_id: str,
    *,
    placeholder: str | None = None,
    initial_time: str = "",
) -> InputBlock:
    return InputBlock(
        element=TimePicker(action_id=action_id, placeholder=_plain(placeholder), initial_time=initial_time),
        label=PlainText(text=label, emoji=True),
    )


def build_checkboxes_input(
    label: str,
    options: Sequence[Option],
    action_id: str,
    *,
    initial_options: Sequence[Option] = (),
) -> InputBlock:
    return InputBlock(
        element=Checkboxes(action_id=action_id, options=list(options), initial_options=list(initial_options)),
        label=PlainText(text=label, emoji=True),
    )


def build_radio_input(label: str, options: Sequence[Option], action_id: str) -> InputBlock:
    return InputBlock(
        element=RadioButtons(action_id=action_id, options=list(options)),
        label=PlainText(text=label, emoji=True),
    )


def build_header(text: str) -> HeaderBlock:
    return HeaderBlock(text=PlainText(text=text, emoji=True))


def build_divider() -> DividerBlock:
    return DividerBlock()


def build_context(text: str) -> ContextBlock:
    return ContextBlock(elements=[PlainText(text=text)])


def build_image(title: str, image_url: str, alt_text: str) -> ImageBlock:
    return ImageBlock(title=_plain(title), image_url=image_url, alt_text=alt_text)
