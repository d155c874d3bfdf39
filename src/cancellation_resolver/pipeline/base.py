"""Base protocol for pipeline handlers."""

from typing import Protocol, TypeVar

from cancellation_resolver.core.exceptions import CancellationResolverError
from cancellation_resolver.core.types import Result

# Contravariant input (handlers can accept supertypes), invariant output
T_In = TypeVar("T_In", contravariant=True)
T_Out = TypeVar("T_Out")
T_Error = TypeVar("T_Error", bound=CancellationResolverError)


class BaseAsyncHandler(Protocol[T_In, T_Out, T_Error]):
    """Protocol for asynchronous pipeline handlers.

    Each handler performs a single transformation on the command object and
    reports failures as values instead of raising.
    """

    async def handle(self, command: T_In) -> Result[T_Out, T_Error]:
        """Process a command object.

        Args:
            command: The state produced by the previous pipeline stage.

        Returns:
            A Result object containing either the next state or an error.
        """
        ...
