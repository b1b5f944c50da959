import typing

from opentelemetry import trace
from opentelemetry.semconv._incubating.attributes.messaging_attributes import MESSAGING_DESTINATION_NAME
from opentelemetry.semconv._incubating.attributes.messaging_attributes import MESSAGING_MESSAGE_BODY_SIZE
from opentelemetry.semconv._incubating.attributes.messaging_attributes import MESSAGING_MESSAGE_ID
from opentelemetry.semconv._incubating.attributes.messaging_attributes import MESSAGING_OPERATION_TYPE
from opentelemetry.semconv._incubating.attributes.messaging_attributes import MESSAGING_SYSTEM
from opentelemetry.trace import Span
from opentelemetry.trace import SpanKind
from opentelemetry.trace import Tracer
from opentelemetry.trace import TracerProvider

from ..version import __version__

SNS_SYSTEM = "aws_sns"
SQS_SYSTEM = "aws_sqs"

SNSTESTING_QUEUE_NAME = "snstesting.queue.name"
SNSTESTING_SUBSCRIPTION_ARN = "snstesting.subscription.arn"


def get_tracer(instrument: bool = True, tracer_provider: typing.Optional[TracerProvider] = None) -> Tracer:
    """Tracer used by snstesting, a no-op one when instrumentation is switched off"""
    if not instrument:
        return trace.NoOpTracer()
    return trace.get_tracer("snstesting", __version__, tracer_provider)


def enrich_span(
    span: Span,
    system: str,
    destination: str,
    operation: typing.Optional[str] = None,
) -> None:
    """Helper function add SpanAttributes"""
    attributes = {
        MESSAGING_SYSTEM: system,
        MESSAGING_DESTINATION_NAME: destination,
    }
    if operation is not None:
        attributes.update({MESSAGING_OPERATION_TYPE: operation})
    span.set_attributes(attributes)


def enrich_span_with_message(span: Span, message: typing.Dict) -> None:
    """Helper function add SpanAttributes describing a received SQS message"""
    if not span.is_recording():
        return
    span.set_attributes(
        {
            MESSAGING_MESSAGE_ID: str(message.get("MessageId")),
            MESSAGING_MESSAGE_BODY_SIZE: len(message.get("Body", "").encode("utf-8")),
        }
    )


def get_span(
    tracer: Tracer,
    span_name: str,
    span_kind: SpanKind,
    system: str,
    destination: str,
    operation: typing.Optional[str] = None,
) -> Span:
    """Helper function to mount span and call function to set SpanAttributes"""
    span = tracer.start_span(name=span_name, kind=span_kind)
    if span.is_recording():
        enrich_span(span=span, system=system, destination=destination, operation=operation)
    return span
