"""
DRF exception handler.

Translates ledger service errors into JSON responses:

    LedgerValidationError -> 400
    NotFoundError         -> 404
    BusinessRuleError     -> 422

with the body ``{"error": message, "field": field or null, "status": code}``.
Anything DRF already knows (serializer errors, 404s, bad methods) keeps
DRF's own response; everything else becomes a bare 500.
"""

import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler

from apps.ledger.services.exceptions import LedgerServiceError

logger = logging.getLogger(__name__)


def ledger_exception_handler(exc, context):
    if isinstance(exc, LedgerServiceError):
        return Response(
            {
                'error': exc.message,
                'field': exc.field,
                'status': exc.status_code,
            },
            status=exc.status_code,
        )

    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get('view')
    logger.exception(
        'Unhandled error in %s', view.__class__.__name__ if view else 'unknown view'
    )
    return Response(
        {'error': 'Internal server error', 'status': 500},
        status=500,
    )
