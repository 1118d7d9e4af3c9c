from typing import Any, Protocol, runtime_checkable

from pairflow.protocols.core_protocols.base import Labelable
from pairflow.protocols.core_protocols.streams import Stream


@runtime_checkable
class Operator(Labelable, Protocol):
    """
    A unit of computation that turns one or more input streams into a single
    output stream.

    Operators are plain callables. Invoking an operator validates its inputs
    synchronously and then links the output stage; no element is pulled from
    the inputs until the output stream is traversed.

    Execution modes:
    - __call__(): validates inputs, then forwards
    - forward(): links the output stage without validation
    """

    def __call__(self, *streams: Stream[Any], label: str | None = None) -> Stream[Any]:
        """
        Validate the input streams and link the output stream.

        Args:
            *streams: Input streams
            label: Optional label for the output stream

        Returns:
            Stream: The output stream

        Raises:
            InputValidationError: If the inputs are not acceptable
            InvalidStateError: If an input stream was already consumed
        """
        ...

    def validate_inputs(self, *streams: Stream[Any]) -> None:
        """
        Check the inputs without consuming them.
        """
        ...

    def forward(self, *streams: Stream[Any]) -> Stream[Any]:
        """
        Link the output stream. Inputs are assumed to be valid.
        """
        ...
