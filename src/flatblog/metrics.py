"""Shared OTel metrics instruments for the service."""

from opentelemetry import metrics

METER_NAME = "flatblog"

meter = metrics.get_meter(METER_NAME)

# Backend metrics
posts_created_total = meter.create_counter(
    name="posts_created_total",
    description="Posts appended to the store",
    unit="1",
)

posts_listed_total = meter.create_counter(
    name="posts_listed_total",
    description="Successful GET /posts responses",
    unit="1",
)

store_errors_total = meter.create_counter(
    name="store_errors_total",
    description="Store and codec failures answered with 422",
    unit="1",
)

# Client metrics
client_messages_total = meter.create_counter(
    name="client_messages_total",
    description="Messages processed by the client state machine",
    unit="1",
)
