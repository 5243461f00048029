"""Prometheus counters for wire decoding."""

from prometheus_client import Counter

params_decoded = Counter(
    'mcp_wire_params_decoded_total', 'Params objects decoded', ['kind']
)
malformed_meta_dropped = Counter(
    'mcp_wire_malformed_meta_dropped_total', 'Non-object _meta values discarded during decode'
)
content_decoded = Counter(
    'mcp_wire_content_decoded_total', 'Content values decoded', ['type']
)
decode_failures = Counter(
    'mcp_wire_decode_failures_total', 'Decode failures', ['kind', 'reason']
)
