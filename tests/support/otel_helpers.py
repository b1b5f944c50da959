import pytest

from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace import export
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from snstesting.utils.span import get_tracer


class FinishedTestSpans(list):
    """Helper class to find finished spans in tests to make assertions"""

    def by_name(self, name):
        for span in self:
            if span.name == name:
                return span
        pytest.fail(f"Did not find span with name {name}")
        return None

    def by_attr(self, key, value):
        for span in self:
            if span.attributes.get(key) == value:
                return span
        pytest.fail(f"Did not find span with attrs {key}={value}")
        return None


class TestBase:
    """Base test class with a tracer exporting into memory, cleared after every test"""

    tracer_provider = None
    memory_exporter = None
    tracer = None

    def setup_class(self):
        result = self.create_tracer_provider()
        self.tracer_provider, self.memory_exporter = result
        self.tracer = get_tracer(True, self.tracer_provider)

    def teardown_method(self):
        self.memory_exporter.clear()

    def get_finished_spans(self):
        return FinishedTestSpans(self.memory_exporter.get_finished_spans())

    @staticmethod
    def create_tracer_provider(**kwargs):
        """Provider exporting finished spans into memory, returned together with its exporter"""
        tracer_provider = TracerProvider(**kwargs)
        memory_exporter = InMemorySpanExporter()
        tracer_provider.add_span_processor(export.SimpleSpanProcessor(memory_exporter))

        return tracer_provider, memory_exporter
