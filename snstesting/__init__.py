"""
snstesting simplifies checking what messages arrive at any SNS topic from the inside of your
integration tests. Temporary queues are prefixed with ``snstesting_``.

*****************************************
USAGE
-----
With pytest the ``sns_subscriber`` fixture is available as soon as the package is installed.
Any failure fails the test, and the temporary queue is removed when the test finishes.

.. code-block:: python
    def test_order_created_is_announced(sns_subscriber):
        receive = sns_subscriber("orders-topic")

        create_order()

        assert "order-123" in receive()

*****************************************
SUBSCRIBER
-----
For more control, create the Subscriber yourself and handle the errors.

.. code-block:: python
    sns, sqs = boto3.client("sns"), boto3.client("sqs")

    with Subscriber.create(sns, sqs, "orders-topic") as subscriber:
        create_order()
        body = subscriber.receive()
        print(subscriber.session.queue_url)

*****************************************
CONFIGURATION
-----
SNSTESTING_VISIBILITY_TIMEOUT, SNSTESTING_WAIT_TIME_SECONDS, SNSTESTING_QUEUE_PREFIX,
SNSTESTING_INSTRUMENT and SNSTESTING_AWS_* environment variables, see ``SubscriberConfig``.
"""
from .config import SubscriberConfig
from .config import get_config
from .errors import AggregateError
from .errors import BackendError
from .errors import SNSTestingError
from .errors import TopicNotFound
from .provisioner import Session
from .provisioner import resolve_topic_arn
from .provisioner import setup
from .provisioner import teardown
from .receiver import receive
from .subscriber import Subscriber
from .subscriber import new_subscriber
from .version import __version__

__all__ = [
    "AggregateError",
    "BackendError",
    "SNSTestingError",
    "Session",
    "Subscriber",
    "SubscriberConfig",
    "TopicNotFound",
    "__version__",
    "get_config",
    "new_subscriber",
    "receive",
    "resolve_topic_arn",
    "setup",
    "teardown",
]
