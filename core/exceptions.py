"""
Custom exceptions for Tubely
"""

from rest_framework import status
from rest_framework.exceptions import APIException


class TubelyBaseException(APIException):
    """Base exception for all Tubely specific errors"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'A Tubely error occurred.'
    default_code = 'tubely_error'

    # Server-side failures render only ``default_detail``; the detail passed
    # in at raise time is logged, never returned to the client.
    expose_detail = True


class AuthError(TubelyBaseException):
    """Missing or invalid bearer token"""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Missing or invalid auth token.'
    default_code = 'auth_error'


class NotOwnerError(AuthError):
    """Authenticated caller does not own the target video"""
    default_detail = 'Not the video owner.'
    default_code = 'not_owner'


class ValidationError(TubelyBaseException):
    """Malformed request input"""
    default_detail = 'Validation failed.'
    default_code = 'validation_error'


class PayloadTooLargeError(ValidationError):
    """Request body exceeds the configured upload limit"""
    default_detail = 'Upload exceeds the maximum allowed size.'
    default_code = 'payload_too_large'


class NotFoundError(TubelyBaseException):
    """Unknown video id"""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Video not found.'
    default_code = 'not_found'


class ProcessingError(TubelyBaseException):
    """External media tool could not be run or its output was unusable"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Could not process video.'
    default_code = 'processing_error'
    expose_detail = False

    def __init__(self, detail=None, code=None, diagnostics=''):
        super().__init__(detail, code)
        self.diagnostics = diagnostics


class StorageError(TubelyBaseException):
    """Object storage transport or service failure"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Could not upload video.'
    default_code = 'storage_error'
    expose_detail = False


class PersistenceError(TubelyBaseException):
    """Metadata store update failure"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Could not update video record.'
    default_code = 'persistence_error'
    expose_detail = False
