"""Error types and AWS error classification for the usergroup-manager function."""

import logging
from enum import Enum
from typing import Optional

from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    EndpointConnectionError,
    NoCredentialsError,
    PartialCredentialsError,
)

logger = logging.getLogger(__name__)


class FunctionError(Exception):
    """Base exception for composition function errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause


class RequestError(FunctionError):
    """The request is missing something the function needs."""

    pass


class ResourceNotFoundError(RequestError):
    """The request carries no observed composite resource."""

    pass


class FieldPathError(RequestError):
    """A dotted field path could not be resolved on a resource."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot get field {path!r}: {reason}")
        self.path = path
        self.reason = reason


class CredentialsError(RequestError):
    """Named credentials are absent or incomplete."""

    pass


class AWSConfigError(FunctionError):
    """An AWS session or client could not be built."""

    pass


class ListingError(FunctionError):
    """The remote listing call failed."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message, cause=cause)
        self.category = classify_aws_error(cause) if cause is not None else ErrorCategory.INTERNAL


class ResourceSerializationError(FunctionError):
    """A resource could not be represented as a JSON document."""

    pass


class ErrorCategory(str, Enum):
    """Categories of AWS failures, used for logging only."""

    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    THROTTLING = "throttling"
    CONNECTION = "connection"
    RESOURCE_NOT_FOUND = "resource_not_found"
    SERVICE_ERROR = "service_error"
    INTERNAL = "internal"


_AUTHENTICATION_CODES = {
    "InvalidClientTokenId",
    "UnrecognizedClientException",
    "SignatureDoesNotMatch",
    "ExpiredToken",
    "ExpiredTokenException",
}
_AUTHORIZATION_CODES = {"AccessDenied", "AccessDeniedException", "UnauthorizedOperation"}
_THROTTLING_CODES = {"Throttling", "ThrottlingException", "TooManyRequestsException"}
_NOT_FOUND_CODES = {"UserNotFound", "UserNotFoundFault", "ResourceNotFoundException"}


def classify_aws_error(exception: BaseException) -> ErrorCategory:
    """
    Map an exception raised by botocore onto an error category.

    Args:
        exception: Exception raised by a boto3 client call

    Returns:
        The matching ErrorCategory, INTERNAL when nothing matches
    """
    if isinstance(exception, ClientError):
        error_code = exception.response.get("Error", {}).get("Code", "Unknown")
        if error_code in _AUTHENTICATION_CODES:
            return ErrorCategory.AUTHENTICATION
        if error_code in _AUTHORIZATION_CODES:
            return ErrorCategory.AUTHORIZATION
        if error_code in _THROTTLING_CODES:
            return ErrorCategory.THROTTLING
        if error_code in _NOT_FOUND_CODES:
            return ErrorCategory.RESOURCE_NOT_FOUND
        return ErrorCategory.SERVICE_ERROR

    if isinstance(exception, (NoCredentialsError, PartialCredentialsError)):
        return ErrorCategory.AUTHENTICATION
    if isinstance(exception, EndpointConnectionError):
        return ErrorCategory.CONNECTION
    if isinstance(exception, BotoCoreError):
        return ErrorCategory.SERVICE_ERROR

    return ErrorCategory.INTERNAL


def describe_aws_error(exception: BaseException) -> str:
    """Return the AWS error message carried by an exception, or its string form."""
    if isinstance(exception, ClientError):
        error = exception.response.get("Error", {})
        code = error.get("Code", "Unknown")
        message = error.get("Message") or str(exception)
        return f"{code}: {message}"
    return str(exception)
