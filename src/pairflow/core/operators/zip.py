import logging
from typing import Any

from pairflow.core.operators.base import BinaryOperator, check_not_consumed
from pairflow.core.pair import Pair
from pairflow.core.sources.zipped_source import ZippedSource
from pairflow.errors import InvalidArgumentError, MissingArgumentError
from pairflow.protocols import core_protocols as cp

logger = logging.getLogger(__name__)


class Zip(BinaryOperator):
    """
    Pairs up two streams element by element.

    The output holds Pair(a, b) for the i-th elements a and b of the two
    inputs and ends as soon as either input ends, so it is infinite only when
    both inputs are. Its characteristics are merged from the inputs (see
    merge_characteristics).

    Invoking the operator binds both inputs right away: each input hands out
    its traversal handle and is consumed from then on, even though no
    element has been read yet. Values are read only when the output is
    traversed, so changes to a backing collection made before that point
    are visible.

    The output starts a new, sequential pipeline: it is never parallel,
    whatever the inputs requested, and closing it does not close the inputs.

    Inputs that are not streams (lists, sets, generators, ...) are wrapped
    with `pairflow.from_iterable` after validation.
    """

    def op_validate_inputs(self, left_stream: Any, right_stream: Any) -> None:
        if left_stream is None or right_stream is None:
            raise MissingArgumentError("Two streams are required, got None.")
        if left_stream is right_stream:
            raise InvalidArgumentError("Two different streams are required.")
        for stream in (left_stream, right_stream):
            if isinstance(stream, cp.Stream):
                check_not_consumed(stream)

    def op_forward(self, left_stream: Any, right_stream: Any) -> cp.Stream[Pair]:
        from pairflow.core.streams import Stream, as_stream

        left_stream = as_stream(left_stream, pairflow_config=self.pairflow_config)
        right_stream = as_stream(right_stream, pairflow_config=self.pairflow_config)

        source1 = left_stream.split_source()
        source2 = right_stream.split_source()
        logger.debug(f"Bound {left_stream!r} and {right_stream!r} for zipping")

        return Stream(
            ZippedSource(source1, source2),
            parallel=False,
            pairflow_config=self.pairflow_config,
        )

    def __repr__(self) -> str:
        return "Zip()"


def zip(
    source1: "cp.Stream[Any] | Any",
    source2: "cp.Stream[Any] | Any",
    label: str | None = None,
) -> cp.Stream[Pair]:
    """
    Pair two streams element-wise into a stream of Pair, truncated to the
    shorter input.

    Args:
        source1: Stream (or iterable) supplying Pair.m1
        source2: Stream (or iterable) supplying Pair.m2
        label: Optional label for the output stream

    Returns:
        Stream[Pair]: Lazy, sequential stream of pairs

    Raises:
        MissingArgumentError: If either source is None
        InvalidArgumentError: If both sources are the same object
        InvalidStateError: If either stream was already consumed or closed

    Examples:
        >>> import pairflow
        >>> pairflow.zip(pairflow.of(1, 2, 3), pairflow.of("a", "b")).join_str(", ")
        '(1, a), (2, b)'
    """
    return Zip()(source1, source2, label=label)
