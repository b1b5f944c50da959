from unittest import mock

import pytest

from opentelemetry.semconv._incubating.attributes.messaging_attributes import MESSAGING_DESTINATION_NAME
from opentelemetry.semconv._incubating.attributes.messaging_attributes import MESSAGING_MESSAGE_BODY_SIZE
from opentelemetry.semconv._incubating.attributes.messaging_attributes import MESSAGING_MESSAGE_ID
from opentelemetry.semconv._incubating.attributes.messaging_attributes import MESSAGING_OPERATION_TYPE
from opentelemetry.semconv._incubating.attributes.messaging_attributes import MESSAGING_SYSTEM
from opentelemetry.trace import SpanKind

from snstesting.utils.span import enrich_span_with_message
from snstesting.utils.span import get_span


class TestSpan:
    @pytest.mark.parametrize(
        "test_params",
        [
            {
                "system": "aws_sqs",
                "destination": "fake_queue",
                "operation": "receive",
                "span_kind": SpanKind.CONSUMER,
                "span_name": "fake_span_name",
            },
            {
                "system": "aws_sns",
                "destination": "fake_topic",
                "span_kind": SpanKind.CLIENT,
                "span_name": "fake_span_name",
            },
        ],
    )
    def test_should_enrich_span_with_messaging_attributes(self, test_params):
        # Arrange
        expected_span_attributes = {
            MESSAGING_SYSTEM: test_params["system"],
            MESSAGING_DESTINATION_NAME: test_params["destination"],
        }
        if "operation" in test_params:
            expected_span_attributes[MESSAGING_OPERATION_TYPE] = test_params["operation"]

        mocked_span = mock.MagicMock()
        mocked_tracer = mock.MagicMock()
        mocked_tracer.start_span.return_value = mocked_span

        # Act
        span = get_span(
            tracer=mocked_tracer,
            span_name=test_params["span_name"],
            span_kind=test_params["span_kind"],
            system=test_params["system"],
            destination=test_params["destination"],
            operation=test_params.get("operation"),
        )

        # Assert
        assert span is mocked_span
        mocked_tracer.start_span.assert_called_once_with(name="fake_span_name", kind=test_params["span_kind"])
        mocked_span.set_attributes.assert_called_once_with(expected_span_attributes)

    def test_should_not_set_attributes_on_non_recording_span(self):
        # Arrange
        mocked_span = mock.MagicMock()
        mocked_span.is_recording.return_value = False
        mocked_tracer = mock.MagicMock()
        mocked_tracer.start_span.return_value = mocked_span

        # Act
        get_span(
            tracer=mocked_tracer,
            span_name="fake_span_name",
            span_kind=SpanKind.CLIENT,
            system="aws_sns",
            destination="fake_topic",
        )
        enrich_span_with_message(mocked_span, {"MessageId": "1", "Body": "body"})

        # Assert
        mocked_span.set_attributes.assert_not_called()

    def test_should_enrich_span_with_message_id_and_body_size(self):
        # Arrange
        mocked_span = mock.MagicMock()

        # Act
        enrich_span_with_message(mocked_span, {"MessageId": "fake_id", "Body": "fake body"})

        # Assert
        mocked_span.set_attributes.assert_called_once_with(
            {MESSAGING_MESSAGE_ID: "fake_id", MESSAGING_MESSAGE_BODY_SIZE: 9}
        )
