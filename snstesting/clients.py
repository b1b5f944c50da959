import logging
import typing

import boto3

from botocore.config import Config

from .config import SubscriberConfig

_logger = logging.getLogger(__name__)


def build_client_config(config: SubscriberConfig) -> Config:
    """
    The read timeout bounds every blocking call, so it has to leave room for the long poll of a receive.
    """
    read_timeout = max(config.aws.read_timeout, config.wait_time_seconds + 5)
    return Config(connect_timeout=config.aws.connect_timeout, read_timeout=read_timeout)


def build_clients(config: SubscriberConfig) -> typing.Tuple[typing.Any, typing.Any]:
    """Creates the SNS and SQS clients described by the configuration"""
    session = boto3.session.Session(profile_name=config.aws.profile, region_name=config.aws.region)
    client_config = build_client_config(config)
    _logger.debug("Building SNS and SQS clients for region %s", session.region_name)

    sns = session.client("sns", endpoint_url=config.aws.endpoint_url, config=client_config)
    sqs = session.client("sqs", endpoint_url=config.aws.endpoint_url, config=client_config)
    return sns, sqs
