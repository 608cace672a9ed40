"""Unified exception hierarchy for restrecord.

All library exceptions inherit from RestRecordException, enabling unified
error handling: catch the base class to handle every failure, or catch a
specific subclass for targeted handling.

Categories:
- BusinessException: local rule violations (e.g. an illegal filter operator)
- InfrastructureException: transport and remote service failures
- ExternalServiceException: the backend answered, but not with success
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from restrecord.kernel.types import OperationResponse


# =============================================================================
# Base Exception
# =============================================================================


class RestRecordException(Exception):
    """Base exception for all restrecord errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "FILTER_OPERATOR").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(RestRecordException):
    """Local rule violations detected before anything is sent."""


class ValidationMismatchException(BusinessException):
    """A filter predicate was built with an operator illegal for its value type."""


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(RestRecordException):
    """Failures on the network path.

    Carries the :class:`OperationResponse` that describes the failure: the
    server's own message list when it sent one, otherwise a synthesized
    single error message.
    """

    def __init__(
        self,
        message: str,
        response: OperationResponse | None = None,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message, code=code, context=context)
        self.response = response


class TransportFailureException(InfrastructureException):
    """No response reached the client (network loss, DNS, timeout)."""


class ExternalServiceException(InfrastructureException):
    """The remote service answered with a non-success status."""


class ServerException(ExternalServiceException):
    """A 2xx status was not achieved.

    Args:
        status_code: The HTTP status returned by the server.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        response: OperationResponse | None = None,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message, response=response, code=code, context=context)
        self.status_code = status_code


class UnauthorizedException(ServerException):
    """Status 401: the credential was rejected and has been invalidated."""
