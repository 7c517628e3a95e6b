"""Attribute bags shared by graphs, nodes and edges."""

from __future__ import annotations


class Parameterised:
    """An ordered mapping of DOT attribute names to values.

    Names and values are written to the DOT text verbatim, so they must
    already be valid DOT ids (quoted where needed). Insertion order is kept
    so that serialization is reproducible.
    """

    def __init__(self) -> None:
        self._params: dict[str, str] = {}

    def set_param(self, name: str, value: str) -> None:
        self._params[name] = value

    def get_param(self, name: str) -> str | None:
        """Return the value of `name`, or None if it is not set."""
        return self._params.get(name)

    def get_params(self) -> list[str]:
        """Return the names of all parameters that have been set."""
        return list(self._params)

    def remove_param(self, name: str) -> None:
        self._params.pop(name, None)

    def has_params(self) -> bool:
        return bool(self.get_params())

    @property
    def params(self) -> dict[str, str]:
        """Copy of the parameters in insertion order."""
        return {name: self.get_param(name) or "" for name in self.get_params()}
