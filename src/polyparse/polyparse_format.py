"""
Provides the `Formatter` class for rendering parse results back into text.

Classes and Features:
    - Emitter (Protocol): Interface for all output emitters. Requires `__init__` and `get_output`.
    - TextEmitter: Renders objects in the input grammar, so that output can be parsed again.
    - Formatter: Selects an emitter by target name and dispatches each object to the
      emitter's `emit_<format_kind>` method.

Formattable objects carry a `format_kind` attribute: `polynomial`, `ring`, `term_order`,
`polynomial_list` or `module_list`.

Example:
    >>> formatter = Formatter("text")
    >>> formatter.format(polynomial)
    'x^2 - 2 x * y + 7/2'

Raises:
    ValueError: If the target is not supported.
    TypeError: If an object has no `format_kind`.
    NotImplementedError: If the emitter lacks an `emit_*` method for a kind.
"""

from typing import Any, Protocol

from polyparse.emitters.text_emitter import TextEmitter


class Emitter(Protocol):  # pragma: no cover
    """Protocol for all polyparse output emitters.

    Methods:
        __init__(): Initializes the emitter.
        get_output(): Returns the complete emitted text as a string.
    """

    def __init__(self) -> None: ...  # pragma: no cover

    def get_output(self) -> str: ...  # pragma: no cover


EmitterType = type[Emitter]
"""Alias for a concrete Emitter class type."""


class Formatter:
    """Dispatches formattable objects to the emitter for an output target.

    Attributes:
        emitter (Emitter): The selected emitter instance for the output target.
    """

    def __init__(self, target: str = "text") -> None:
        """Initializes the formatter with the desired output target.

        Args:
            target: The output format name ("text").

        Raises:
            ValueError: If the target is not supported.
        """
        emitters: dict[str, EmitterType] = {
            "text": TextEmitter,
            "txt": TextEmitter,
        }
        target = target.lower()
        if target not in emitters:
            raise ValueError(f"Unknown format target: {target!r}")
        self.emitter: Emitter = emitters[target]()

    def format(self, *objects: Any) -> str:
        """Renders the objects in order, one per output line.

        Raises:
            TypeError: If an object is not formattable.
        """
        for obj in objects:
            if not hasattr(obj, "format_kind"):
                raise TypeError(f"Cannot format object of type {type(obj).__name__}")
            self._visit(obj)
        return self.emitter.get_output()

    def _visit(self, obj: Any) -> None:
        method_name = f"emit_{obj.format_kind}"
        if hasattr(self.emitter, method_name):
            getattr(self.emitter, method_name)(obj)
        else:
            raise NotImplementedError(
                f"No emitter method for kind '{obj.format_kind}'"
            )


def format_text(obj: Any) -> str:
    """Renders one object in the input grammar."""
    return Formatter("text").format(obj)


__all__ = ["Emitter", "Formatter", "format_text"]
