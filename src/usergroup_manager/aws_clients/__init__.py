"""AWS client management and the ElastiCache user listing client."""

from .credentials import StaticCredentials
from .elasticache import ElastiCacheUserLister
from .interfaces import CacheUser, UserLister
from .manager import AWSClientManager

__all__ = [
    "AWSClientManager",
    "CacheUser",
    "ElastiCacheUserLister",
    "StaticCredentials",
    "UserLister",
]
