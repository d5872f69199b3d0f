"""Data error kinds and their message templates.

Python 3.13+. Zero external dependencies.
"""

from enum import StrEnum

__all__ = ["DataErrorKind", "message_template"]


class DataErrorKind(StrEnum):
    """Flat taxonomy of data-loading failures.

    Inherits from ``StrEnum`` so that log aggregation receives plain strings
    (``"missing_locale"``) rather than the ``"DataErrorKind.X"`` repr.

    Kinds:
        MISSING_DATA_KEY: No data registered under the requested key
        MISSING_LOCALE: The key needs a locale and none in the chain had data
        NEEDS_LOCALE: A locale-dependent key was requested without a locale
        EXTRANEOUS_LOCALE: A singleton key was requested with a locale
        FILTERED_RESOURCE: Data exists but a filter excluded the request
        MISMATCHED_TYPE: Downcast target differs from the erased type
        MISSING_PAYLOAD: A payload was expected but the response had none
        INVALID_STATE: Internal invariant or data-integrity violation
        CUSTOM: Collaborator-supplied failure wrapped opaquely
        IO: Failure propagated from a byte-source collaborator
        UNAVAILABLE_BUFFER_FORMAT: Buffer format has no registered decoder
    """

    MISSING_DATA_KEY = "missing_data_key"
    MISSING_LOCALE = "missing_locale"
    NEEDS_LOCALE = "needs_locale"
    EXTRANEOUS_LOCALE = "extraneous_locale"
    FILTERED_RESOURCE = "filtered_resource"
    MISMATCHED_TYPE = "mismatched_type"
    MISSING_PAYLOAD = "missing_payload"
    INVALID_STATE = "invalid_state"
    CUSTOM = "custom"
    IO = "io"
    UNAVAILABLE_BUFFER_FORMAT = "unavailable_buffer_format"


_TEMPLATES: dict[DataErrorKind, str] = {
    DataErrorKind.MISSING_DATA_KEY: "Missing data for key",
    DataErrorKind.MISSING_LOCALE: "Missing data for locale",
    DataErrorKind.NEEDS_LOCALE: "Request needs a locale",
    DataErrorKind.EXTRANEOUS_LOCALE: "Request has an extraneous locale",
    DataErrorKind.FILTERED_RESOURCE: "Resource blocked by filter",
    DataErrorKind.MISMATCHED_TYPE: (
        "Mismatched types: tried to downcast with {type_name}, but actual type is different"
    ),
    DataErrorKind.MISSING_PAYLOAD: "Missing payload",
    DataErrorKind.INVALID_STATE: "Invalid state",
    DataErrorKind.CUSTOM: "Custom",
    DataErrorKind.IO: "I/O error: {io_name}",
    DataErrorKind.UNAVAILABLE_BUFFER_FORMAT: (
        "Unavailable buffer format: {buffer_format} (no decoder is registered for it)"
    ),
}


def message_template(kind: DataErrorKind) -> str:
    """Return the message template for an error kind.

    Templates may reference ``{type_name}``, ``{io_name}`` and
    ``{buffer_format}``; DataError fills them from its own fields.
    """
    return _TEMPLATES[kind]
