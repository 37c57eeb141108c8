from opentelemetry import context, trace
from opentelemetry.baggage.propagation import W3CBaggagePropagator
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from fluent_request.hooks import PreparedRequest, RequestHook


class TracedRequestHook(RequestHook):
    """Propagates the current trace context and baggage as request headers"""

    def before_request(self, request: PreparedRequest) -> PreparedRequest:

        span = trace.get_current_span()

        if span.get_span_context().is_valid:
            ctx = context.get_current()
            headers: dict[str, str] = {}
            W3CBaggagePropagator().inject(headers, ctx)
            TraceContextTextMapPropagator().inject(headers, ctx)

            for key, value in headers.items():
                request.headers.append((key, value))

        return request
