"""
Enhanced error handling and logging utilities
"""

import logging
import traceback
import uuid
from datetime import datetime

from django.http import JsonResponse
from rest_framework import status
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.views import exception_handler

from core.exceptions import ProcessingError, TubelyBaseException

logger = logging.getLogger('tubely.errors')


class ErrorTracker:
    """Track and log errors with unique IDs for better debugging"""

    @staticmethod
    def generate_error_id():
        """Generate unique error ID"""
        return str(uuid.uuid4())[:8]

    @staticmethod
    def log_error(error_id, error, request=None, extra_data=None):
        """Log error with detailed information"""
        error_data = {
            'error_id': error_id,
            'error_type': type(error).__name__,
            'error_message': str(error),
            'timestamp': datetime.now().isoformat(),
        }

        if request is not None:
            user = getattr(request, 'user', None)
            error_data.update({
                'path': request.path,
                'method': request.method,
                'user': user.pk if user is not None and user.is_authenticated else None,
                'ip_address': request.META.get('REMOTE_ADDR', ''),
            })

        if isinstance(error, ProcessingError) and error.diagnostics:
            error_data['diagnostics'] = error.diagnostics

        if extra_data:
            error_data['extra'] = extra_data

        if getattr(error, 'status_code', status.HTTP_500_INTERNAL_SERVER_ERROR) >= 500:
            error_data['traceback'] = traceback.format_exc()
            logger.error("Error %s: %s", error_id, error_data)
        else:
            logger.warning("Request rejected %s: %s", error_id, error_data)

        return error_id


def _short_message(exc):
    """Pick the user-facing message for a handled exception"""
    if isinstance(exc, TubelyBaseException) and not exc.expose_detail:
        return str(exc.default_detail)

    detail = getattr(exc, 'detail', None)
    if isinstance(detail, dict):
        # simplejwt wraps its message as {'detail': ..., 'code': ..., 'messages': [...]}
        if 'detail' in detail:
            return str(detail['detail'])
        return 'Validation failed'
    if isinstance(detail, list):
        return str(detail[0]) if detail else 'Validation failed'
    if detail is not None:
        return str(detail)
    return str(exc)


def enhanced_exception_handler(exc, context):
    """Enhanced exception handler with error tracking"""

    error_id = ErrorTracker.generate_error_id()
    request = context.get('request')

    ErrorTracker.log_error(error_id, exc, request)

    response = exception_handler(exc, context)

    if response is not None:
        error_data = {
            'success': False,
            'error': _short_message(exc),
            'error_id': error_id,
        }
        if isinstance(exc, DRFValidationError) and isinstance(exc.detail, dict):
            error_data['details'] = exc.detail

        response.data = error_data
        return response

    return JsonResponse({
        'success': False,
        'error': 'Internal server error',
        'error_id': error_id,
    }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
