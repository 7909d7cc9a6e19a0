"""Helpers for reading a RunFunctionRequest."""

from ..errors import CredentialsError, ResourceNotFoundError
from .models import Credentials, RunFunctionRequest
from .resource import Composite


def get_observed_composite_resource(req: RunFunctionRequest) -> Composite:
    """
    Get the observed composite resource from a request.

    Raises:
        ResourceNotFoundError: If the request has no observed composite
    """
    if req.observed.composite is None:
        raise ResourceNotFoundError("request has no observed composite resource")
    return req.observed.composite


def get_credentials(req: RunFunctionRequest, name: str) -> Credentials:
    """
    Get the named credentials from a request.

    Raises:
        CredentialsError: If no credentials with that name were supplied
    """
    if name not in req.credentials:
        raise CredentialsError(f"{name}: credentials not found")
    return req.credentials[name]
