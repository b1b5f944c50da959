"""
pytest integration, registered through the ``pytest11`` entry point.

Any snstesting failure becomes an immediate test failure: these are environment or configuration
problems rather than something a test is expected to handle.
"""
import typing

import pytest

from .clients import build_clients
from .config import SubscriberConfig
from .config import get_config
from .errors import SNSTestingError
from .subscriber import Subscriber
from .utils.shared_types import ReceiveFn


def new(
    request: pytest.FixtureRequest,
    topic_name: str,
    sns: typing.Any = None,
    sqs: typing.Any = None,
    config: typing.Optional[SubscriberConfig] = None,
) -> ReceiveFn:
    """
    Subscribes to ``topic_name`` for the duration of the requesting test and returns a function
    receiving the next message. Clients are built from the configuration unless given.

    In case more control is needed over the subscription, use ``Subscriber.create``.
    """
    config = config or get_config()
    if sns is None or sqs is None:
        default_sns, default_sqs = build_clients(config)
        sns = sns or default_sns
        sqs = sqs or default_sqs

    try:
        subscriber = Subscriber.create(sns, sqs, topic_name, config=config)
    except SNSTestingError as setup_error:
        pytest.fail(f"snstesting setup failed: {setup_error}", pytrace=False)

    def cleanup():
        try:
            subscriber.cleanup()
        except SNSTestingError as cleanup_error:
            pytest.fail(f"snstesting cleanup failed: {cleanup_error}", pytrace=False)

    request.addfinalizer(cleanup)

    def receive() -> str:
        try:
            return subscriber.receive()
        except SNSTestingError as receive_error:
            pytest.fail(f"snstesting receive failed: {receive_error}", pytrace=False)

    return receive


def subscriber_factory(request: pytest.FixtureRequest) -> typing.Callable[..., ReceiveFn]:
    def factory(topic_name: str, **kwargs) -> ReceiveFn:
        return new(request, topic_name, **kwargs)

    return factory


@pytest.fixture
def sns_subscriber(request):
    """Factory fixture: ``receive = sns_subscriber("my-topic")``"""
    return subscriber_factory(request)
