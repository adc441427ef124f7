"""
Exception hierarchy for the fragmenter.

- FragmenterError: base class, carries an optional component name.
- ConfigurationError: invalid transformer, matcher, strategy, sink or config
  setup, detected at construction or first use.
- QuadSourceError: a source could not produce quads (missing file, parse
  failure, memory pre-flight refusal).
- QuadSinkError: a sink could not accept a quad.
- FragmentationError: quads break an assumption of a strategy or transformer,
  e.g. a blank node that is never linked to an IRI.

Errors raised by user-provided sources or transformers are never wrapped in
these types; they propagate to the caller of ``Fragmenter.fragment()`` as-is.
"""

from typing import Optional


class FragmenterError(Exception):
    """
    Base class for all fragmenter errors.

    Attributes:
        message: Human-readable description of the failure.
        component: Optional name of the component that raised it.
    """

    def __init__(self, message: str, component: Optional[str] = None):
        self.message = message
        self.component = component
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.component:
            return f"{self.message} (component: {self.component})"
        return self.message


class ConfigurationError(FragmenterError, ValueError):
    """Raised when a component is configured with invalid options."""


class QuadSourceError(FragmenterError):
    """Raised when a quad source cannot produce its quads."""


class QuadSinkError(FragmenterError):
    """Raised when a quad sink cannot accept a quad."""


class FragmentationError(FragmenterError):
    """Raised when the quad stream does not have the shape a strategy or transformer relies on."""
