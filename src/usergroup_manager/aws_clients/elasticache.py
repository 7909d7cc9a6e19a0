"""ElastiCache-backed user listing."""

import logging
from typing import Any, List

from botocore.exceptions import BotoCoreError, ClientError

from ..errors import ListingError, describe_aws_error
from .interfaces import CacheUser, UserLister

logger = logging.getLogger(__name__)


class ElastiCacheUserLister(UserLister):
    """Lists users with a single ElastiCache DescribeUsers call."""

    def __init__(self, client: Any):
        """
        Args:
            client: boto3 ElastiCache client
        """
        self.client = client

    def list_users(self) -> List[CacheUser]:
        # Only the first page is read; large user sets are not paginated
        try:
            response = self.client.describe_users()
        except (ClientError, BotoCoreError) as e:
            raise ListingError(describe_aws_error(e), cause=e)

        return [
            CacheUser(user_id=user.get("UserId"), user_name=user.get("UserName"))
            for user in response.get("Users", [])
        ]
