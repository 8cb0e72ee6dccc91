"""Error types raised by bindfx.

Every failure carries a machine-checkable ``code``. Subclasses exist so
callers can catch a single kind without inspecting the code.
"""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    UNSUPPORTED_TARGET = 0x1
    NON_REACTIVE_STATE = 0x2
    INVALID_OBJECT_PATH = 0x3
    DUPLICATE_BINDING = 0x4
    INVALID_ELEMENT_IDENTIFIER = 0x5
    BAD_REGISTRY = 0x6


_MESSAGES = {
    ErrorCode.UNSUPPORTED_TARGET: '"{}" is not a supported target for bind()',
    ErrorCode.NON_REACTIVE_STATE: "Attempted to bind to a non-reactive state object",
    ErrorCode.INVALID_OBJECT_PATH: 'Unable to resolve object path "{}"',
    ErrorCode.DUPLICATE_BINDING: '"{}" target is already bound; unbind() it first',
    ErrorCode.INVALID_ELEMENT_IDENTIFIER: 'No target matches identifier "{}"',
    ErrorCode.BAD_REGISTRY: "Write intercepted on a state with no registry",
}


class BindFxError(Exception):
    """Base class. ``code`` identifies the failure kind."""

    code: ErrorCode

    def __init__(self, *params: object) -> None:
        super().__init__(_MESSAGES[self.code].format(*params))
        self.params = params


class UnsupportedTarget(BindFxError):
    code = ErrorCode.UNSUPPORTED_TARGET

    def __init__(self, type_name: str) -> None:
        super().__init__(type_name)
        self.type_name = type_name


class NonReactiveState(BindFxError):
    code = ErrorCode.NON_REACTIVE_STATE


class InvalidObjectPath(BindFxError):
    code = ErrorCode.INVALID_OBJECT_PATH

    def __init__(self, path: str) -> None:
        super().__init__(path)
        self.path = path


class DuplicateBinding(BindFxError):
    code = ErrorCode.DUPLICATE_BINDING

    def __init__(self, type_name: str) -> None:
        super().__init__(type_name)
        self.type_name = type_name


class InvalidElementIdentifier(BindFxError):
    code = ErrorCode.INVALID_ELEMENT_IDENTIFIER

    def __init__(self, identifier: str) -> None:
        super().__init__(identifier)
        self.identifier = identifier


class BadRegistry(BindFxError):
    """A wrapper's registry is gone. Signals misuse after release(), or a bug."""

    code = ErrorCode.BAD_REGISTRY


def type_name(obj: object) -> str:
    """Descriptive type name for error messages."""
    if obj is None:
        return "None"
    return type(obj).__name__
