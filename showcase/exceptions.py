import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _message(detail) -> str:
    if isinstance(detail, dict):
        if "detail" in detail:
            return _message(detail["detail"])
        key, value = next(iter(detail.items()), ("", ""))
        return f"{key}: {_message(value)}" if key != "non_field_errors" else _message(value)
    if isinstance(detail, list):
        return _message(detail[0]) if detail else ""
    return str(detail)


def envelope_exception_handler(exc, context):
    """Wrap API errors as ``{"success": false, "error": ...}``.

    Field-level details stay available under ``details`` for the admin tool.
    """
    if isinstance(exc, DjangoValidationError):
        return Response(
            {"success": False, "error": " ".join(exc.messages), "details": exc.messages},
            status=status.HTTP_400_BAD_REQUEST,
        )
    response = exception_handler(exc, context)
    if response is None:
        view = context.get("view")
        logger.exception("Unhandled error in %s", type(view).__name__ if view else "view")
        return None
    response.data = {"success": False, "error": _message(response.data), "details": response.data}
    return response
