"""
SmartForm: build forms, share them, collect responses.

Simple Usage:
    from smartform import FormBuilder, SmartFormClient, Credentials

    client = SmartFormClient(credentials=Credentials(id_token="..."))

    builder = FormBuilder(title="Event signup")
    email = builder.add_field("email")
    builder.update_field(email.id, label="Your email", required=True)
    topics = builder.add_field("checkbox")

    result = await builder.save(client)
    print(result.share_url)

Filling a form:
    from smartform import FormFillSession

    session = await FormFillSession.open(client, result.share_slug)
    session.set_value(email.id, "me@example.com")
    session.toggle_choice(topics.id, "option1")

    outcome = await session.submit(client)  # only sent when valid
    print(outcome.errors or outcome.message)

Validation on its own:
    from smartform import validate_response

    result = validate_response(schema, {"f1": "x@y"})
    result.to_error_dict()  # {"f1": "Invalid email"}
"""

from smartform.api_client import (
    Credentials,
    SmartFormClient,
)
from smartform.builder import FormBuilder
from smartform.dashboard import Dashboard
from smartform.exceptions import (
    ApiError,
    BuilderError,
    FieldNotFoundError,
    NetworkError,
    SmartFormError,
)
from smartform.fill import FormFillSession, SubmitOutcome
from smartform.models.field_definitions import (
    FieldOption,
    FieldType,
    FormField,
)
from smartform.models.form_schema import (
    FormSchema,
    PersistedForm,
)
from smartform.models.validation_result import (
    FieldValidationError,
    ValidationResult,
)
from smartform.rendering import render_field, render_form
from smartform.validation import validate_response

__all__ = [
    # Main interface
    "FormBuilder",
    "FormFillSession",
    "SubmitOutcome",
    "Dashboard",
    # API
    "Credentials",
    "SmartFormClient",
    # Models
    "FieldOption",
    "FieldType",
    "FormField",
    "FormSchema",
    "PersistedForm",
    # Validation
    "validate_response",
    "ValidationResult",
    "FieldValidationError",
    # Rendering
    "render_field",
    "render_form",
    # Errors
    "SmartFormError",
    "ApiError",
    "NetworkError",
    "BuilderError",
    "FieldNotFoundError",
]

__version__ = "0.1.0"
