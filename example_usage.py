#!/usr/bin/env python3
"""Example usage of the MCP wire codec."""

import json

from mcp_wire.protocol import (
    Annotations,
    MCPMethods,
    MCPNotification,
    NotificationParams,
    ToolCallResult,
    decode_content,
    decode_params,
    encode_message,
    new_image_content,
    new_text_content,
)


def example_params():
    """Example: splitting and flattening params."""
    print("📦 Params Example")

    params = decode_params('{"_meta": {"traceId": "abc"}, "level": "info", "logger": "db"}')
    print(f"meta: {params.meta}")
    print(f"additional fields: {params.additional_fields}")

    params.additional_fields["data"] = {"rows": 3}
    notification = MCPNotification(method=MCPMethods.MESSAGE, params=params)
    print(f"Wire: {encode_message(notification)}\n")


def example_empty_params():
    """Example: empty params are left out of the envelope."""
    print("🕳️  Empty Params Example")

    notification = MCPNotification(method=MCPMethods.INITIALIZED, params=NotificationParams())
    print(f"Wire: {encode_message(notification)}\n")


def example_content():
    """Example: building and decoding content."""
    print("🖼️  Content Example")

    image = new_image_content("iVBORw0KGgo=", "image/png")
    image.annotations = Annotations(audience=["user"], priority=0.8)

    result = ToolCallResult(content=[new_text_content("Here is the chart"), image])
    print(f"Tool result: {json.dumps(result.to_result().to_wire(), indent=2)}")

    decoded = decode_content('{"type": "audio", "data": "UklGRg==", "mimeType": "audio/wav"}')
    print(f"Decoded variant: {type(decoded).__name__}\n")


def main():
    """Run all examples."""
    print("🔧 MCP Wire Usage Examples\n")
    print("=" * 50)

    example_params()
    example_empty_params()
    example_content()

    print("💡 Tips:")
    print("1. Use 'python main.py --kind params file.json' to split params")
    print("2. Use 'python main.py --kind content' to check content objects")
    print("3. Set MCP_WIRE_INDENT=2 for pretty output")


if __name__ == "__main__":
    main()
