"""
SmartForm browser UI.

A gradio app with three tabs:
1. Builder - compose a form and save it to get a share link
2. Dashboard - list saved forms, see analytics, export CSV
3. Fill - open a form by share slug and submit a response

The owner's id token is typed into the app and passed explicitly to
every API call; nothing is kept in ambient storage.
"""

import logging
import mimetypes
import tempfile
from typing import Any

import gradio as gr

from smartform.api_client import Credentials, SmartFormClient
from smartform.builder import FormBuilder
from smartform.config import get_config
from smartform.dashboard import Dashboard
from smartform.exceptions import SmartFormError
from smartform.fill import FormFillSession
from smartform.models.field_definitions import FIELD_TYPE_LABELS, FieldType
from smartform.models.submission import FileUpload
from smartform.rendering import RenderedInput

logger = logging.getLogger("smartform-ui")

FIELD_TYPE_CHOICES = [(label, kind.value) for kind, label in FIELD_TYPE_LABELS.items()]


def make_client(token: str) -> SmartFormClient:
    return SmartFormClient(credentials=Credentials(id_token=token or ""))


# Builder handlers


def _field_choices(builder: FormBuilder) -> list[tuple[str, str]]:
    return [
        (f"{index + 1}. {field.label} [{field.type.value}]", field.id)
        for index, field in enumerate(builder.fields)
    ]


def builder_view(builder: FormBuilder, selected_id: str | None, message: str = ""):
    """Outputs shared by every builder action: state, preview, field picker, message."""
    ids = [field.id for field in builder.fields]
    if selected_id not in ids:
        selected_id = ids[-1] if ids else None
    preview = builder.to_schema().to_payload()
    return (
        builder,
        preview,
        gr.update(choices=_field_choices(builder), value=selected_id),
        message,
    )


def field_settings(builder: FormBuilder | None, field_id: str | None):
    """Load the selected field into the settings inputs."""
    if builder is None or not field_id:
        return "", "", False, ""
    field = builder.get_field(field_id)
    options = "\n".join(f"{i}: {option.label}" for i, option in enumerate(field.options or []))
    return field.label, field.placeholder or "", field.required, options


def add_field(builder: FormBuilder | None, kind: str):
    builder = builder or FormBuilder()
    field = builder.add_field(kind)
    return builder_view(builder, field.id)


def apply_field_settings(builder, field_id, label, placeholder, required):
    try:
        builder.update_field(field_id, label=label, placeholder=placeholder or None, required=required)
    except (SmartFormError, AttributeError) as e:
        return builder_view(builder or FormBuilder(), field_id, f"Error: {e}")
    return builder_view(builder, field_id)


def move_selected(builder, field_id, direction: int):
    try:
        index = [field.id for field in builder.fields].index(field_id)
        builder.move_field(index, direction)
    except (AttributeError, ValueError):
        return builder_view(builder or FormBuilder(), field_id, "Select a field first")
    return builder_view(builder, field_id)


def duplicate_selected(builder, field_id):
    try:
        copy = builder.duplicate_field(field_id)
    except (SmartFormError, AttributeError) as e:
        return builder_view(builder or FormBuilder(), field_id, f"Error: {e}")
    return builder_view(builder, copy.id)


def delete_selected(builder, field_id):
    try:
        builder.delete_field(field_id)
    except (SmartFormError, AttributeError) as e:
        return builder_view(builder or FormBuilder(), field_id, f"Error: {e}")
    return builder_view(builder, None)


def edit_option(builder, field_id, action: str, index, label: str):
    """Add, rename or remove an option of the selected choice field."""
    try:
        if action == "add":
            builder.add_option(field_id, label or "New option")
        elif action == "rename":
            builder.set_option_label(field_id, int(index), label)
        elif action == "remove":
            builder.remove_option(field_id, int(index))
    except (SmartFormError, AttributeError, IndexError, TypeError) as e:
        return builder_view(builder or FormBuilder(), field_id, f"Error: {e}")
    return builder_view(builder, field_id)


async def save_form(builder, title, description, token, field_id):
    builder = builder or FormBuilder()
    builder.title = title
    builder.description = description or ""
    try:
        await builder.save(make_client(token))
    except SmartFormError:
        pass  # builder.message already carries the server's error
    return builder_view(builder, field_id, builder.message)


# Dashboard handlers


def _dashboard(state: Dashboard | None, token: str) -> Dashboard:
    if state is None:
        state = Dashboard(make_client(token))
    state.client.credentials.id_token = token or ""
    return state


async def refresh_forms(state: Dashboard | None, token: str):
    dashboard = _dashboard(state, token)
    forms = await dashboard.load_forms()
    rows = [[form.title, form.share_slug, dashboard.share_url(form.share_slug)] for form in forms]
    slugs = [(form.title, form.share_slug) for form in forms]
    return dashboard, rows, gr.update(choices=slugs, value=None), dashboard.message


async def show_analytics(state: Dashboard | None, token: str, slug: str | None):
    dashboard = _dashboard(state, token)
    if not slug:
        return dashboard, "Select a form to see analytics", ""
    analytics = await dashboard.select(slug)
    if analytics is None:
        return dashboard, dashboard.message, ""
    title = dashboard.selected.title if dashboard.selected else slug
    summary = f"**{title}**\n\n# {analytics.count}\n\nTotal submissions"
    return dashboard, summary, "\n\n".join(dashboard.format_recent())


async def export_csv(state: Dashboard | None, token: str, slug: str | None):
    dashboard = _dashboard(state, token)
    if not slug:
        return dashboard, None, "Select a form first"
    text = await dashboard.export_csv(slug)
    if text is None:
        return dashboard, None, dashboard.message
    with tempfile.NamedTemporaryFile(
        "w", suffix=".csv", prefix=f"{slug}-", delete=False, encoding="utf-8"
    ) as f:
        f.write(text)
    return dashboard, f.name, ""


def logout(state: Dashboard | None):
    if state is not None:
        state.logout()
    return state, "", [], gr.update(choices=[], value=None), "Logged out"


# Fill handlers


async def load_fill_form(token: str, slug: str):
    slug = (slug or "").strip()
    if not slug:
        return None, "Enter a share slug"
    try:
        session = await FormFillSession.open(make_client(token), slug)
    except SmartFormError as e:
        return None, f"Error: {e.message}"
    return session, ""


def apply_input(session: FormFillSession | None, item: RenderedInput, value: Any) -> None:
    """Store one widget's value in the fill session."""
    if session is None:
        return
    if item.kind is FieldType.FILE:
        upload = None
        if value:
            content_type = mimetypes.guess_type(value)[0]
            upload = FileUpload.from_path(value, content_type=content_type)
        session.attach_file(item.name, upload)
    elif item.kind in (FieldType.RADIO, FieldType.DROPDOWN):
        session.select_choice(item.name, value)
    else:
        session.set_value(item.name, value)


def input_handler(item: RenderedInput):
    """Change listener bound to one rendered input."""

    def handle(value, session):
        apply_input(session, item, value)

    return handle


def format_errors(session: FormFillSession) -> str:
    lines = []
    for field_id, message in session.errors.items():
        field = session.form.get_field(field_id)
        lines.append(f"- **{field.label if field else field_id}**: {message}")
    return "\n".join(lines)


async def submit_fill(session: FormFillSession | None, token: str):
    """
    Submit the loaded form.

    After a successful submission a fresh session replaces the old one, so
    the inputs render empty again.
    """
    if session is None:
        return None, "Load a form first", ""
    outcome = await session.submit(make_client(token))
    message, errors = session.message, format_errors(session)
    if outcome.submitted:
        session = FormFillSession(session.form)
    return session, message, errors


def _component_for(item: RenderedInput):
    common = {"label": item.label + (" *" if item.required else ""), "info": item.helper_text}
    if item.input_type == "textarea":
        return gr.Textbox(placeholder=item.placeholder, lines=item.rows or 4, **common)
    if item.input_type == "number":
        return gr.Number(**common)
    if item.input_type == "file":
        return gr.File(type="filepath", **common)
    if item.input_type == "select":
        return gr.Dropdown(choices=item.choices, value=None, **common)
    if item.input_type == "checkbox-group":
        return gr.CheckboxGroup(choices=item.choices, **common)
    if item.input_type == "radio-group":
        return gr.Radio(choices=item.choices, **common)
    if item.input_type == "date":
        return gr.Textbox(placeholder="YYYY-MM-DD", **common)
    return gr.Textbox(placeholder=item.placeholder, **common)


def build_app() -> gr.Blocks:
    """Create the gradio Blocks app."""
    config = get_config()

    with gr.Blocks(title="SmartForm Builder") as app:
        gr.Markdown("# SmartForm Builder\n\nCreate forms, share links, collect responses.")
        token_input = gr.Textbox(
            label="Owner ID token",
            value=config.id_token,
            type="password",
            info="Needed to save forms and to use the dashboard",
        )

        with gr.Tab("Builder"):
            builder_state = gr.State(None)
            with gr.Row():
                with gr.Column(scale=2):
                    title_input = gr.Textbox(label="Title", value=config.default_form_title)
                    description_input = gr.Textbox(label="Description", placeholder="Form description")
                    field_picker = gr.Dropdown(label="Field", choices=[])
                    with gr.Row():
                        label_input = gr.Textbox(label="Label")
                        placeholder_input = gr.Textbox(label="Placeholder")
                        required_input = gr.Checkbox(label="Required")
                    with gr.Row():
                        apply_btn = gr.Button("Apply")
                        up_btn = gr.Button("Up")
                        down_btn = gr.Button("Down")
                        duplicate_btn = gr.Button("Duplicate")
                        delete_btn = gr.Button("Delete", variant="stop")
                    options_view = gr.Textbox(label="Options", interactive=False, lines=3)
                    with gr.Row():
                        option_index = gr.Number(label="Option #", precision=0, value=0)
                        option_label = gr.Textbox(label="Option label")
                    with gr.Row():
                        add_option_btn = gr.Button("Add option")
                        rename_option_btn = gr.Button("Rename option")
                        remove_option_btn = gr.Button("Remove option")
                with gr.Column(scale=1):
                    kind_input = gr.Dropdown(label="Add a field", choices=FIELD_TYPE_CHOICES, value="text")
                    add_btn = gr.Button("Add field")
                    save_btn = gr.Button("Save & Share", variant="primary")
                    builder_message = gr.Markdown()
                    preview = gr.JSON(label="Schema")

            view_outputs = [builder_state, preview, field_picker, builder_message]
            settings_outputs = [label_input, placeholder_input, required_input, options_view]

            add_btn.click(add_field, [builder_state, kind_input], view_outputs)
            apply_btn.click(
                apply_field_settings,
                [builder_state, field_picker, label_input, placeholder_input, required_input],
                view_outputs,
            )
            up_btn.click(lambda b, f: move_selected(b, f, -1), [builder_state, field_picker], view_outputs)
            down_btn.click(lambda b, f: move_selected(b, f, 1), [builder_state, field_picker], view_outputs)
            duplicate_btn.click(duplicate_selected, [builder_state, field_picker], view_outputs)
            delete_btn.click(delete_selected, [builder_state, field_picker], view_outputs)
            option_inputs = [builder_state, field_picker, option_index, option_label]
            add_option_btn.click(lambda b, f, i, l: edit_option(b, f, "add", i, l), option_inputs, view_outputs)
            rename_option_btn.click(lambda b, f, i, l: edit_option(b, f, "rename", i, l), option_inputs, view_outputs)
            remove_option_btn.click(lambda b, f, i, l: edit_option(b, f, "remove", i, l), option_inputs, view_outputs)
            field_picker.change(field_settings, [builder_state, field_picker], settings_outputs)
            preview.change(field_settings, [builder_state, field_picker], settings_outputs)
            save_btn.click(
                save_form,
                [builder_state, title_input, description_input, token_input, field_picker],
                view_outputs,
            )

        with gr.Tab("Dashboard"):
            dashboard_state = gr.State(None)
            with gr.Row():
                refresh_btn = gr.Button("Refresh forms")
                logout_btn = gr.Button("Log out")
            forms_table = gr.Dataframe(headers=["Title", "Slug", "Share URL"], interactive=False)
            with gr.Row():
                slug_picker = gr.Dropdown(label="Form", choices=[])
                analytics_btn = gr.Button("Analytics")
                csv_btn = gr.Button("Export CSV")
            dashboard_message = gr.Markdown()
            analytics_view = gr.Markdown("Select a form to see analytics")
            recent_view = gr.Code(label="Recent entries", language="json")
            csv_file = gr.File(label="CSV export")

            refresh_btn.click(
                refresh_forms,
                [dashboard_state, token_input],
                [dashboard_state, forms_table, slug_picker, dashboard_message],
            )
            analytics_btn.click(
                show_analytics,
                [dashboard_state, token_input, slug_picker],
                [dashboard_state, analytics_view, recent_view],
            )
            csv_btn.click(
                export_csv,
                [dashboard_state, token_input, slug_picker],
                [dashboard_state, csv_file, dashboard_message],
            )
            logout_btn.click(
                logout,
                [dashboard_state],
                [dashboard_state, token_input, forms_table, slug_picker, dashboard_message],
            )

        with gr.Tab("Fill"):
            fill_state = gr.State(None)
            with gr.Row():
                slug_input = gr.Textbox(label="Share slug")
                load_btn = gr.Button("Load form")
            fill_message = gr.Markdown()

            @gr.render(inputs=[fill_state])
            def render_fill(session):
                if session is None:
                    return
                gr.Markdown(f"## {session.form.title}\n\n{session.form.description}")
                for item in session.render():
                    component = _component_for(item)
                    component.change(input_handler(item), [component, fill_state], None)

            submit_btn = gr.Button("Submit", variant="primary")
            fill_errors = gr.Markdown()

            load_btn.click(load_fill_form, [token_input, slug_input], [fill_state, fill_message])
            submit_btn.click(submit_fill, [fill_state, token_input], [fill_state, fill_message, fill_errors])

    return app


def main():
    """Launch the UI."""
    logging.basicConfig(level=logging.INFO)
    config = get_config()
    build_app().launch(server_name="0.0.0.0", server_port=config.ui_port)


if __name__ == "__main__":
    main()
