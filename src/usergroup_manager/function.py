"""Composition function that discovers ElastiCache users.

The function reads the observed composite resource, lists every ElastiCache
user visible to the supplied AWS credentials and publishes their IDs in two
places: the pipeline context (for the function that manages the user group)
and the composite's status.

ElastiCache users carry no tags that tie them to a cache, so no cache-id
filtering happens here; every user with an ID is collected.
"""

import logging
from datetime import timedelta
from typing import Any, Callable, Dict, List, Optional

from .aws_clients import AWSClientManager, ElastiCacheUserLister, StaticCredentials, UserLister
from .errors import AWSConfigError, CredentialsError, FunctionError, ListingError
from .sdk import request, response
from .sdk.models import RunFunctionRequest, RunFunctionResponse
from .sdk.resource import Composite
from .utils.config import Config

logger = logging.getLogger(__name__)

REGION_PATH = "spec.parameters.region"
CONDITION_REASON = "UsersDiscovered"

UserListerFactory = Callable[[str, StaticCredentials], UserLister]


def create_elasticache_lister(region: str, credentials: StaticCredentials) -> UserLister:
    """
    Create a user lister backed by the ElastiCache API.

    Raises:
        AWSConfigError: If the session or client cannot be built
    """
    client_manager = AWSClientManager(region=region, credentials=credentials)
    return ElastiCacheUserLister(client_manager.get_elasticache_client())


class UserGroupManagerFunction:
    """Discovers ElastiCache users and publishes their IDs."""

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        lister_factory: Optional[UserListerFactory] = None,
    ):
        """
        Initialize the function.

        Args:
            config: Function configuration, see Config.get_function_config()
            lister_factory: Builds a UserLister for a region and credentials
        """
        self.config = config if config is not None else Config().get_function_config()
        self.lister_factory = lister_factory or create_elasticache_lister

    def run_function(self, req: RunFunctionRequest) -> RunFunctionResponse:
        """
        Run the discovery for one request.

        Failures never raise; they are reported as a fatal result on the
        returned response, with nothing else published.

        Args:
            req: The function request

        Returns:
            RunFunctionResponse for the request
        """
        logger.info("Running usergroup-manager function", extra={"tag": req.meta.tag})

        rsp = response.to(req, ttl=timedelta(seconds=self.config["response_ttl_seconds"]))

        try:
            oxr = request.get_observed_composite_resource(req)
        except FunctionError as e:
            response.fatal(rsp, e)
            return rsp

        logger.debug(
            "Observed composite",
            extra={"kind": oxr.resource.kind or "", "composite": oxr.resource.name or ""},
        )

        try:
            region = oxr.resource.get_string(REGION_PATH).strip()
        except FunctionError:
            region = ""
        if not region:
            region = self.config["default_region"]
            logger.info("Region not specified, using default", extra={"default": region})

        try:
            credentials = StaticCredentials.from_credentials(
                request.get_credentials(req, self.config["credentials_name"])
            )
        except CredentialsError as e:
            response.fatal(rsp, CredentialsError(f"failed to get AWS credentials: {e}", cause=e))
            return rsp

        try:
            lister = self.lister_factory(region, credentials)
        except AWSConfigError as e:
            response.fatal(rsp, AWSConfigError(f"failed to load AWS config: {e}", cause=e))
            return rsp

        try:
            users = lister.list_users()
        except ListingError as e:
            logger.error(
                "Failed to describe ElastiCache users",
                extra={"region": region, "category": e.category.value},
            )
            response.fatal(
                rsp, ListingError(f"failed to describe ElastiCache users: {e}", cause=e.cause)
            )
            return rsp

        user_ids: List[str] = []
        for user in users:
            if user.user_id:
                user_ids.append(user.user_id)
                logger.info(
                    "Discovered user",
                    extra={"userId": user.user_id, "userName": user.user_name or ""},
                )

        logger.info("Total users discovered", extra={"count": len(user_ids)})

        response.set_context_key(rsp, self.config["context_key"], list(user_ids))

        desired = oxr.resource.deep_copy()
        try:
            desired.set_value(
                "status", {"discoveredUsers": len(user_ids), "userIDs": list(user_ids)}
            )
            response.set_desired_composite_resource(
                rsp, Composite(resource=desired, connection_details=dict(oxr.connection_details))
            )
        except FunctionError as e:
            logger.info("Failed to update XR status", extra={"error": str(e)})

        response.condition_true(
            rsp,
            self.config["condition_type"],
            CONDITION_REASON,
            f"Discovered {len(user_ids)} ElastiCache users",
        ).target_composite_and_claim()

        return rsp
