"""Test fixtures package for usergroup-manager.

- aws_clients: boto3 client mocks and a fake user lister
- requests: sample function requests and credential bundles

Usage:
    from tests.fixtures.aws_clients import FakeUserLister, mock_elasticache_client
    from tests.fixtures.requests import sample_request_data, valid_credentials
"""
