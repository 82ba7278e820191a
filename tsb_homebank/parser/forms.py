"""
Form discovery on top of the tree queries.

Form controls are modelled as ``FormElement`` variants.  Callers only use
the ``name`` / ``id`` / ``value`` accessors, so adding a ``Select`` or
``TextArea`` variant means adding a subclass and registering it in
``_CONTROL_TYPES``; nothing that consumes form elements has to change.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from .tree import TreeIterator, attr, find_elements, tag_name


class FormElement(ABC):
    """A control inside an HTML form."""

    @property
    @abstractmethod
    def name(self) -> str | None: ...

    @property
    @abstractmethod
    def id(self) -> str | None: ...

    @property
    @abstractmethod
    def value(self) -> str | None: ...

    def matches(self, marker: str) -> bool:
        """True when the control's name or id equals *marker*."""
        return self.name == marker or self.id == marker


@dataclass(frozen=True)
class Input(FormElement):
    """An ``<input>`` control; absent attributes are ``None``."""
    name: str | None = None
    id: str | None = None
    value: str | None = None

    @classmethod
    def from_node(cls, node) -> "Input":
        return cls(
            name=attr(node, "name"),
            id=attr(node, "id"),
            value=attr(node, "value"),
        )


# tag name -> variant
_CONTROL_TYPES: dict[str, type] = {
    "input": Input,
}


def find_forms(root) -> list:
    """All ``<form>`` elements under *root*, in traversal order."""
    return find_elements(root, "form")


def find_inputs(root) -> list[FormElement]:
    """All ``<input>`` elements under *root*, as ``Input`` values."""
    return [Input.from_node(node) for node in find_elements(root, "input")]


def find_controls(root) -> list[FormElement]:
    """Every control of a registered kind under *root*, in traversal order."""
    controls: list[FormElement] = []
    for node in TreeIterator(root):
        variant = _CONTROL_TYPES.get(tag_name(node))
        if variant is not None:
            controls.append(variant.from_node(node))
    return controls


def find_form_by_id(root, form_id: str):
    """First ``<form>`` whose ``id`` attribute equals *form_id*, or ``None``."""
    for form in find_forms(root):
        if attr(form, "id") == form_id:
            return form
    return None


def form_fields(form, overrides: dict[str, str] | None = None) -> list[tuple[str, str]]:
    """
    Build the parameters a browser would submit for *form*.

    Each named control contributes ``(name, value)`` with its current value
    (``""`` when it has none); names present in *overrides* take the
    override instead.  Controls without a name cannot be submitted and are
    dropped.
    """
    overrides = overrides or {}
    fields: list[tuple[str, str]] = []
    for control in find_controls(form):
        if control.name is None:
            continue
        if control.name in overrides:
            fields.append((control.name, overrides[control.name]))
        else:
            fields.append((control.name, control.value if control.value is not None else ""))
    return fields
