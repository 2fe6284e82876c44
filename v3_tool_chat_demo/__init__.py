"""v3 tool chat - the v2 loop plus tool calls.

    user -> assistant(tool_calls) -> tool result(s) -> assistant -> ...

When the model asks for a tool, the loop runs it through the registry,
appends the result right after the request and asks the model again
before reading more input.

    | Tool        | Backing                 |
    |-------------|-------------------------|
    | get_weather | canned data, few cities |
    | send_email  | SMTP from environment   |
"""
