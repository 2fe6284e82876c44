"""v2 chat bot - a REPL that remembers the conversation.

    [system] -> user -> assistant -> user -> assistant -> ...

Every request carries the whole history, so the model sees all earlier
turns. Typing the exit token ends the session without another request.
"""
