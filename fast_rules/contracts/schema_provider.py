from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fast_rules.core.http import Visibility
    from fast_rules.core.types import TypeNode


class SchemaProvider(ABC):
    """
    Contract for the host that owns the type graph.

    The collector asks it for the type that actually travels in the request
    for a given parameter or body at the operation's request visibility.
    """

    @abstractmethod
    def effective_payload_type(self, node: "TypeNode", visibility: "Visibility") -> "TypeNode":
        """
        Resolve the payload type of a parameter or body.

        Args:
            node: The declared parameter property or body type.
            visibility: Request visibility of the operation.

        Returns:
            The node to walk. Implementations return ``node`` unchanged when
            there is nothing to resolve.
        """
        raise NotImplementedError
