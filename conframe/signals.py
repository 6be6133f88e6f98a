# Conframe CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals used by the Conframe interactive loop.

Signals inherit from `FlowSignal`, a subclass of `BaseException`, so they bypass
the `except Exception` blocks that report command failures to the user.

Signals:
- QuitSignal: Terminate the interactive session.
"""


class FlowSignal(BaseException):
    """Base class for all flow control signals in Conframe.

    These are not errors. They're used to leave the interactive loop from
    inside a running command.
    """


class QuitSignal(FlowSignal):
    """Raised to signal an immediate exit from the interactive loop."""

    def __init__(self, message: str = "Quit signal received."):
        super().__init__(message)
