import dataclasses
import functools
import logging
import random
import typing

from opentelemetry import trace
from opentelemetry.trace import SpanKind
from opentelemetry.trace import Tracer

from .api import SNSAPI
from .api import SQSAPI
from .config import SubscriberConfig
from .config import get_config
from .errors import AggregateError
from .errors import BackendError
from .errors import SNSTestingError
from .errors import TopicNotFound
from .errors import combine_errors
from .utils.backend import backend_call
from .utils.names import generate_queue_name
from .utils.policy import render_queue_policy
from .utils.span import SNS_SYSTEM
from .utils.span import SNSTESTING_QUEUE_NAME
from .utils.span import SNSTESTING_SUBSCRIPTION_ARN
from .utils.span import SQS_SYSTEM
from .utils.span import get_span
from .utils.span import get_tracer

_logger = logging.getLogger(__name__)

QUEUE_ARN_ATTRIBUTE = "QueueArn"
POLICY_ATTRIBUTE = "Policy"
SQS_PROTOCOL = "sqs"


@dataclasses.dataclass(frozen=True)
class Session:
    """
    The live binding between an existing SNS topic and a temporary SQS queue.

    A Session is only handed out once every resource below exists: the queue, its access policy and
    the subscription of the queue to the topic.
    """

    topic_name: str
    topic_arn: str
    queue_name: str
    queue_url: str
    queue_arn: str
    subscription_arn: str


@backend_call
def _list_topics(sns: SNSAPI, next_token: typing.Optional[str] = None) -> typing.Dict:
    if next_token is None:
        return sns.list_topics()
    return sns.list_topics(NextToken=next_token)


@backend_call
def _create_queue(sqs: SQSAPI, queue_name: str) -> str:
    return sqs.create_queue(QueueName=queue_name)["QueueUrl"]


@backend_call
def _delete_queue(sqs: SQSAPI, queue_url: str) -> None:
    sqs.delete_queue(QueueUrl=queue_url)


@backend_call
def _get_queue_arn(sqs: SQSAPI, queue_url: str) -> str:
    output = sqs.get_queue_attributes(QueueUrl=queue_url, AttributeNames=[QUEUE_ARN_ATTRIBUTE])
    return output["Attributes"][QUEUE_ARN_ATTRIBUTE]


@backend_call
def _set_queue_policy(sqs: SQSAPI, queue_url: str, policy: str) -> None:
    sqs.set_queue_attributes(QueueUrl=queue_url, Attributes={POLICY_ATTRIBUTE: policy})


@backend_call
def _subscribe(sns: SNSAPI, topic_arn: str, queue_arn: str) -> str:
    output = sns.subscribe(TopicArn=topic_arn, Protocol=SQS_PROTOCOL, Endpoint=queue_arn)
    return output["SubscriptionArn"]


@backend_call
def _unsubscribe(sns: SNSAPI, subscription_arn: str) -> None:
    sns.unsubscribe(SubscriptionArn=subscription_arn)


class _Rollback:
    """
    Collects the cleanup actions for whatever setup already created and, if the guarded block fails,
    runs them in reverse order.

    A failing remote call is re-raised labelled with the ``step`` that was in progress, merged with any
    error the cleanup itself produced. Anything else (an interrupt, a cancelled test run) still triggers
    the cleanup and then propagates untouched.
    """

    def __init__(self):
        self._actions: typing.List[typing.Callable[[], None]] = []
        self.step: typing.Optional[str] = None

    def push(self, action: typing.Callable[[], None]) -> None:
        self._actions.append(action)

    def unwind(self) -> typing.List[SNSTestingError]:
        errors = []
        while self._actions:
            action = self._actions.pop()
            try:
                action()
            except SNSTestingError as rollback_error:
                errors.append(rollback_error)
        return errors

    def __enter__(self) -> "_Rollback":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        if exc_value is None:
            return False

        _logger.info("Setup failed during %s, rolling back", self.step)
        errors = self.unwind()

        if isinstance(exc_value, BackendError):
            prefix = f"{self.step} failure"
            if errors:
                raise AggregateError([exc_value, *errors], prefix=prefix) from exc_value
            raise BackendError(f"{prefix}: {exc_value}", operation=exc_value.operation) from exc_value

        for error in errors:
            _logger.warning("Rollback after %s did not complete", self.step, exc_info=error)
        return False


def resolve_topic_arn(sns: SNSAPI, topic_name: str) -> str:
    """
    Walks every page of ``ListTopics`` and returns the first topic ARN containing ``topic_name``.

    SNS offers no lookup by name. Re-creating the topic to learn its ARN would work too, but risks
    overwriting attributes of a topic the test does not own.
    """
    next_token = None
    while True:
        output = _list_topics(sns, next_token)

        for topic in output.get("Topics", []):
            topic_arn = topic.get("TopicArn")
            if topic_arn is not None and topic_name in topic_arn:
                return topic_arn

        next_token = output.get("NextToken")
        if not next_token:
            raise TopicNotFound(topic_name)


def setup(
    sns: SNSAPI,
    sqs: SQSAPI,
    topic_name: str,
    config: typing.Optional[SubscriberConfig] = None,
    rng: typing.Optional[random.Random] = None,
    tracer: typing.Optional[Tracer] = None,
) -> Session:
    """
    Subscribes a brand new SQS queue to the SNS topic matching ``topic_name``.

    Every failure after the topic lookup names the step it happened in, e.g. ``"subscribe failure: ..."``.
    A failing ``create_queue`` is labelled ``"create queue failure: ..."`` too, though it has nothing to
    roll back.

    Args:
        sns: SNS client, usually ``boto3.client("sns")``.
        sqs: SQS client, usually ``boto3.client("sqs")``.
        topic_name: Name (or any unique part of the ARN) of an existing topic.
        config: Defaults to the configuration read from the environment.
        rng: Random source for the queue name suffix.
        tracer: Tracer for the ``setup`` span.

    Returns:
        The established Session.

    Raises:
        TopicNotFound: No listed topic matches ``topic_name``.
        BackendError: A remote call failed and the queue, if any, was removed again.
        AggregateError: A remote call failed and removing the queue failed as well.
    """
    config = config or get_config()
    tracer = tracer or get_tracer(config.instrument)

    span = get_span(
        tracer=tracer,
        span_name=f"setup {topic_name}",
        span_kind=SpanKind.CLIENT,
        system=SNS_SYSTEM,
        destination=topic_name,
    )
    with trace.use_span(span, end_on_exit=True):
        topic_arn = resolve_topic_arn(sns, topic_name)

        queue_name = generate_queue_name(config.queue_prefix, rng)
        try:
            queue_url = _create_queue(sqs, queue_name)
        except BackendError as create_error:
            raise BackendError(f"create queue failure: {create_error}", create_error.operation) from create_error
        _logger.info("Created temporary queue %s for topic %s", queue_name, topic_arn)

        with _Rollback() as rollback:
            rollback.push(functools.partial(_delete_queue, sqs, queue_url))

            rollback.step = "get queue attributes"
            queue_arn = _get_queue_arn(sqs, queue_url)

            # deleting the queue is enough to undo this one
            rollback.step = "set queue attributes"
            _set_queue_policy(sqs, queue_url, render_queue_policy(topic_arn, queue_arn))

            rollback.step = "subscribe"
            subscription_arn = _subscribe(sns, topic_arn, queue_arn)

        if span.is_recording():
            span.set_attributes({SNSTESTING_QUEUE_NAME: queue_name, SNSTESTING_SUBSCRIPTION_ARN: subscription_arn})
        _logger.info("Subscribed queue %s to topic %s", queue_arn, topic_arn)

        return Session(
            topic_name=topic_name,
            topic_arn=topic_arn,
            queue_name=queue_name,
            queue_url=queue_url,
            queue_arn=queue_arn,
            subscription_arn=subscription_arn,
        )


def _attempt(remote_call: typing.Callable, *args) -> typing.Optional[SNSTestingError]:
    try:
        remote_call(*args)
    except SNSTestingError as error:
        return error
    return None


def teardown(
    sns: SNSAPI,
    sqs: SQSAPI,
    session: Session,
    config: typing.Optional[SubscriberConfig] = None,
    tracer: typing.Optional[Tracer] = None,
) -> None:
    """
    Unsubscribes the temporary queue from the topic and deletes it.

    Both operations are always attempted. Whatever failed is raised as one AggregateError.
    """
    config = config or get_config()
    tracer = tracer or get_tracer(config.instrument)

    span = get_span(
        tracer=tracer,
        span_name=f"teardown {session.queue_name}",
        span_kind=SpanKind.CLIENT,
        system=SQS_SYSTEM,
        destination=session.queue_name,
    )
    with trace.use_span(span, end_on_exit=True):
        error = combine_errors(
            _attempt(_unsubscribe, sns, session.subscription_arn),
            _attempt(_delete_queue, sqs, session.queue_url),
        )
        if error is not None:
            raise error

        _logger.info("Removed temporary queue %s", session.queue_name)
