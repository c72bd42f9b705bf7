import pytest
from botocore.exceptions import NoRegionError

from image_gateway.aws_clients import AWS_CONFIG_ERROR, S3ClientProvider, create_s3_client
from image_gateway.errors import InternalError
from tests.fixtures.app_fixtures import make_settings


def test_create_s3_client_uses_configured_region(mocked_aws):
    client = create_s3_client(make_settings(aws_region="eu-west-1"))

    assert client.meta.region_name == "eu-west-1"


def test_create_s3_client_uses_custom_endpoint(mocked_aws):
    client = create_s3_client(make_settings(aws_endpoint_url="http://localhost:5000"))

    assert client.meta.endpoint_url == "http://localhost:5000"


def test_provider_reuses_client(mocked_aws):
    provider = S3ClientProvider(make_settings())

    assert provider.get_client() is provider.get_client()


def test_provider_translates_config_errors_and_retries(monkeypatch):
    calls = []

    def fail(settings):
        calls.append(settings)
        raise NoRegionError()

    monkeypatch.setattr("image_gateway.aws_clients.create_s3_client", fail)
    provider = S3ClientProvider(make_settings())

    for _ in range(2):
        with pytest.raises(InternalError) as exc_info:
            provider.get_client()
        assert exc_info.value.message == AWS_CONFIG_ERROR

    assert len(calls) == 2
