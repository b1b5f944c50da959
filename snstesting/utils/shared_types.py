import typing

from opentelemetry.trace.span import Span

ReceiveHookT = typing.Optional[typing.Callable[[Span, str], None]]
ReceiveFn = typing.Callable[[], str]
