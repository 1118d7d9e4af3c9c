import logging
from abc import abstractmethod
from collections.abc import Collection
from typing import Any

from pairflow.core.base import LabeledConfigurableBase
from pairflow.errors import InvalidStateError
from pairflow.protocols import core_protocols as cp

logger = logging.getLogger(__name__)


class Operator(LabeledConfigurableBase):
    """
    Base class for all operators.

    An operator is a callable that takes a (possibly empty) collection of streams
    as input and returns a new stream as output (the output stream is always singular).
    Calling an operator validates the inputs synchronously and then links the
    output stage; no element is read from the inputs until the output stream
    is traversed.
    """

    @abstractmethod
    def validate_inputs(self, *streams: Any) -> None:
        """
        Validate the input streams before linking the output. Must not consume them.
        """
        ...

    @abstractmethod
    def forward(self, *streams: Any) -> cp.Stream[Any]:
        """
        Link the output stream. Called only after validate_inputs() succeeded.
        """
        ...

    def __call__(self, *streams: Any, label: str | None = None) -> cp.Stream[Any]:
        self.validate_inputs(*streams)
        output_stream = self.forward(*streams)
        if label is not None:
            output_stream.label = label
        logger.debug(f"{self!r} linked {output_stream!r}")
        return output_stream

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

    def __str__(self) -> str:
        if self._label is not None:
            return f"{self.__class__.__name__}({self._label})"
        return self.__class__.__name__


def check_not_consumed(stream: cp.Stream[Any]) -> None:
    if stream.is_consumed:
        raise InvalidStateError(
            f"{stream!r} has already been operated upon or closed"
        )


class UnaryOperator(Operator):
    """
    Base class for operators over exactly one stream.
    """

    def check_unary_input(
        self,
        streams: Collection[cp.Stream[Any]],
    ) -> None:
        """
        Check that the inputs to the unary operator are valid.
        """
        if len(streams) != 1:
            raise ValueError("UnaryOperator requires exactly one input stream.")
        (stream,) = streams
        check_not_consumed(stream)

    def validate_inputs(self, *streams: cp.Stream[Any]) -> None:
        self.check_unary_input(streams)
        return self.op_validate_inputs(streams[0])

    def forward(self, *streams: cp.Stream[Any]) -> cp.Stream[Any]:
        """
        Forward method for unary operators.
        It expects exactly one stream as input.
        """
        return self.op_forward(streams[0])

    def op_validate_inputs(self, stream: cp.Stream[Any]) -> None:
        """
        Hook for operator specific input checks. Accepts any unconsumed stream by default.
        """
        pass

    @abstractmethod
    def op_forward(self, stream: cp.Stream[Any]) -> cp.Stream[Any]:
        """
        This method should be implemented by subclasses to define the specific behavior of the unary operator.
        It consumes the input stream and returns the derived stage.
        """
        ...


class BinaryOperator(Operator):
    """
    Base class for operators over exactly two streams.
    """

    def check_binary_inputs(
        self,
        streams: Collection[Any],
    ) -> None:
        """
        Check that the inputs to the binary operator are valid.
        This method is called before the forward method to ensure that the inputs are valid.
        """
        if len(streams) != 2:
            raise ValueError("BinaryOperator requires exactly two input streams.")

    def validate_inputs(self, *streams: Any) -> None:
        self.check_binary_inputs(streams)
        left_stream, right_stream = streams
        return self.op_validate_inputs(left_stream, right_stream)

    def forward(self, *streams: Any) -> cp.Stream[Any]:
        """
        Forward method for binary operators.
        It expects exactly two streams as input.
        """
        left_stream, right_stream = streams
        return self.op_forward(left_stream, right_stream)

    @abstractmethod
    def op_validate_inputs(self, left_stream: Any, right_stream: Any) -> None:
        """
        This method should be implemented by subclasses to validate the inputs to the operator.
        It takes two streams as input and raises an error if the inputs are not valid.
        """
        ...

    @abstractmethod
    def op_forward(self, left_stream: Any, right_stream: Any) -> cp.Stream[Any]:
        """
        This method should be implemented by subclasses to define the specific behavior of the binary operator.
        It takes two streams as input and returns a new stream as output.
        """
        ...
