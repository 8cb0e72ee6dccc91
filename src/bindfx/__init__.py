"""bindfx: observable dict state with watchers and target bindings."""

from importlib.metadata import version as _version

__version__ = _version("bindfx")

from bindfx.errors import (
    BindFxError,
    ErrorCode,
    UnsupportedTarget,
    NonReactiveState,
    InvalidObjectPath,
    DuplicateBinding,
    InvalidElementIdentifier,
    BadRegistry,
)
from bindfx.watch import REJECT, Replace
from bindfx.observable import ReactiveState, to_plain
from bindfx.adapter import (
    TargetAdapter,
    TargetResolver,
    SimpleAdapter,
    TextTarget,
    InputTarget,
    MappingResolver,
)
from bindfx.domain import (
    Domain,
    configure,
    get_domain,
    make_reactive,
    is_reactive,
    bind,
    unbind,
    watch,
    release,
)
# textual NOT auto-imported — opt-in only

__all__ = [
    "BindFxError",
    "ErrorCode",
    "UnsupportedTarget",
    "NonReactiveState",
    "InvalidObjectPath",
    "DuplicateBinding",
    "InvalidElementIdentifier",
    "BadRegistry",
    "REJECT",
    "Replace",
    "ReactiveState",
    "to_plain",
    "TargetAdapter",
    "TargetResolver",
    "SimpleAdapter",
    "TextTarget",
    "InputTarget",
    "MappingResolver",
    "Domain",
    "configure",
    "get_domain",
    "make_reactive",
    "is_reactive",
    "bind",
    "unbind",
    "watch",
    "release",
]
