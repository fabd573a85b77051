"""
Property Name Resolution.

Turns a property accessor into the string key the settings object uses in
its change notifications. Supported accessors:

    "text_box"                  # the name itself
    lambda s: s.text_box        # a single direct attribute read
    AppSettings.ref("text_box") # a PropertyRef built from the settings schema

Callables are never inspected at the bytecode level: they are invoked once
with a recording proxy that only allows one plain attribute read. Nothing is
cached, so resolving holds no reference to the accessor.
"""
from dataclasses import dataclass
from typing import Any, Callable, FrozenSet, Optional, Union

from settingsbinder.core.errors import UnsupportedAccessorKind


@dataclass(frozen=True)
class PropertyRef:
    """Name constant for one property of a settings class."""
    owner: type
    name: str

    def __str__(self) -> str:
        return self.name


Accessor = Union[str, PropertyRef, Callable[[Any], Any]]


class _ReadResult:
    """Value handed back by the recorder. Any use of it other than being returned fails."""
    __slots__ = ("_name",)

    def __init__(self, name: str):
        object.__setattr__(self, "_name", name)

    def __getattribute__(self, item):
        raise UnsupportedAccessorKind(
            object.__getattribute__(self, "_name"), f"chained access '.{item}'"
        )

    def __setattr__(self, key, value):
        raise UnsupportedAccessorKind(object.__getattribute__(self, "_name"), "assignment")

    def __call__(self, *args, **kwargs):
        raise UnsupportedAccessorKind(object.__getattribute__(self, "_name"), "call")

    def __bool__(self):
        raise UnsupportedAccessorKind(object.__getattribute__(self, "_name"), "truth test")

    def __getitem__(self, key):
        raise UnsupportedAccessorKind(object.__getattribute__(self, "_name"), "indexing")

    def __iter__(self):
        raise UnsupportedAccessorKind(object.__getattribute__(self, "_name"), "iteration")


class _AccessRecorder:
    """Stand-in settings object that records attribute reads."""
    __slots__ = ("_reads",)

    def __init__(self):
        object.__setattr__(self, "_reads", [])

    def __getattribute__(self, item):
        object.__getattribute__(self, "_reads").append(item)
        return _ReadResult(item)

    def __setattr__(self, key, value):
        raise UnsupportedAccessorKind(key, "accessor assigns instead of reading")

    def __getitem__(self, key):
        raise UnsupportedAccessorKind(key, "indexing instead of attribute read")

    def __call__(self, *args, **kwargs):
        raise UnsupportedAccessorKind(args, "settings object called")


def _check_identifier(name: str, accessor: Any) -> str:
    if not name:
        raise UnsupportedAccessorKind(accessor, "empty property name")
    if not name.isidentifier():
        raise UnsupportedAccessorKind(accessor, f"'{name}' is not an identifier")
    if name.startswith("_"):
        raise UnsupportedAccessorKind(accessor, f"'{name}' is private")
    return name


def _resolve_callable(accessor: Callable[[Any], Any]) -> str:
    recorder = _AccessRecorder()
    try:
        result = accessor(recorder)
    except UnsupportedAccessorKind:
        raise
    except Exception as e:
        raise UnsupportedAccessorKind(accessor, f"{type(e).__name__}: {e}") from e

    reads = object.__getattribute__(recorder, "_reads")
    if not reads:
        raise UnsupportedAccessorKind(accessor, "no property is read")
    if len(reads) > 1:
        raise UnsupportedAccessorKind(accessor, f"reads several properties {reads}")
    if type(result) is not _ReadResult or object.__getattribute__(result, "_name") != reads[0]:
        raise UnsupportedAccessorKind(accessor, "must return the property it reads")
    return _check_identifier(reads[0], accessor)


def schema_names(settings_type: Optional[type]) -> Optional[FrozenSet[str]]:
    """Declared property names of a settings class, or None when it has no schema."""
    if settings_type is None:
        return None
    names = getattr(settings_type, "property_names", None)
    if callable(names):
        return frozenset(names())
    fields = getattr(settings_type, "model_fields", None)
    if isinstance(fields, dict):
        return frozenset(fields)
    return None


def resolve_property_name(accessor: Accessor, settings_type: Optional[type] = None) -> str:
    """
    Resolve an accessor to the property name it denotes.

    Args:
        accessor: Property name, PropertyRef, or single-read callable.
        settings_type: Optional settings class; when it declares a schema the
            name must be part of it.

    Raises:
        UnsupportedAccessorKind: If the accessor is not a direct property read
            or names an unknown property.
    """
    if isinstance(accessor, PropertyRef):
        name = _check_identifier(accessor.name, accessor)
    elif isinstance(accessor, str):
        name = _check_identifier(accessor, accessor)
    elif callable(accessor):
        name = _resolve_callable(accessor)
    else:
        raise UnsupportedAccessorKind(accessor, f"unsupported type {type(accessor).__name__}")

    known = schema_names(settings_type)
    if known is not None and name not in known:
        raise UnsupportedAccessorKind(
            accessor, f"'{name}' is not a property of {settings_type.__name__}"
        )
    return name
