from unittest import mock

import pytest

from snstesting.config import get_config
from tests.support.helpers_tests import QUEUE_ARN
from tests.support.helpers_tests import QUEUE_URL
from tests.support.helpers_tests import SUBSCRIPTION_ARN
from tests.support.helpers_tests import TOPIC_ARN


@pytest.fixture
def config():
    """Configuration with every default, independent from the environment running the tests"""
    return get_config(env={})


@pytest.fixture
def sns():
    fake_sns = mock.MagicMock(name="sns")
    fake_sns.list_topics.return_value = {"Topics": [{"TopicArn": TOPIC_ARN}]}
    fake_sns.subscribe.return_value = {"SubscriptionArn": SUBSCRIPTION_ARN}
    fake_sns.unsubscribe.return_value = {}
    return fake_sns


@pytest.fixture
def sqs():
    fake_sqs = mock.MagicMock(name="sqs")
    fake_sqs.create_queue.return_value = {"QueueUrl": QUEUE_URL}
    fake_sqs.get_queue_attributes.return_value = {"Attributes": {"QueueArn": QUEUE_ARN}}
    fake_sqs.set_queue_attributes.return_value = {}
    fake_sqs.delete_queue.return_value = {}
    fake_sqs.receive_message.return_value = {}
    return fake_sqs
