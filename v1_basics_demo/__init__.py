"""v1 basics - one chat completion against an OpenAI-compatible endpoint.

    messages = [system, user, assistant, user]
        -> client.chat.completions.create(model, messages)
        -> print choices[0].message.content
        -> data/response_<epoch-millis>.json

No history is kept between runs and no tools are offered. The raw response
is written to disk so its full shape (choices, usage, ids) can be inspected.
"""
