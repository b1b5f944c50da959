import logging
import typing

from opentelemetry import trace
from opentelemetry.semconv._incubating.attributes.messaging_attributes import MessagingOperationTypeValues
from opentelemetry.trace import SpanKind
from opentelemetry.trace import Tracer

from .api import SQSAPI
from .config import SubscriberConfig
from .config import get_config
from .provisioner import Session
from .utils.backend import backend_call
from .utils.shared_types import ReceiveHookT
from .utils.span import SQS_SYSTEM
from .utils.span import enrich_span_with_message
from .utils.span import get_span
from .utils.span import get_tracer

_logger = logging.getLogger(__name__)


@backend_call
def _receive_message(sqs: SQSAPI, queue_url: str, visibility_timeout: int, wait_time_seconds: int) -> typing.Dict:
    return sqs.receive_message(
        QueueUrl=queue_url,
        MaxNumberOfMessages=1,
        VisibilityTimeout=visibility_timeout,
        WaitTimeSeconds=wait_time_seconds,
    )


def receive(
    sqs: SQSAPI,
    session: Session,
    config: typing.Optional[SubscriberConfig] = None,
    hook: ReceiveHookT = None,
    tracer: typing.Optional[Tracer] = None,
) -> str:
    """
    Polls the temporary queue once and returns the body of the message that arrived, or an empty
    string if nothing arrived within the wait window. The body is returned untouched, for a topic
    without raw delivery it is the SNS JSON envelope.
    """
    config = config or get_config()
    tracer = tracer or get_tracer(config.instrument)

    span = get_span(
        tracer=tracer,
        span_name=f"receive {session.queue_name}",
        span_kind=SpanKind.CONSUMER,
        system=SQS_SYSTEM,
        destination=session.queue_name,
        operation=str(MessagingOperationTypeValues.RECEIVE.value),
    )
    with trace.use_span(span, end_on_exit=True):
        output = _receive_message(sqs, session.queue_url, config.visibility_timeout, config.wait_time_seconds)

        messages = output.get("Messages") or []
        if not messages:
            _logger.debug("No message arrived at %s within %ss", session.queue_name, config.wait_time_seconds)
            return ""

        message = messages[0]
        body = message["Body"]
        enrich_span_with_message(span, message)
        if hook:
            try:
                hook(span, body)
            except Exception as hook_exception:  # pylint: disable=W0703
                _logger.exception(hook_exception)
        return body
