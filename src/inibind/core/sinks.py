from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, MutableMapping, Optional, Protocol, Tuple

from loguru import logger

from inibind.core.errors import SinkError
from inibind.core.models import Scope, is_legal_identifier

TOC_MARKER = "true"


class NamespaceSink(Protocol):
    """
    Host capability the projector writes into.

    The projector only ever calls these four methods; how collections are
    materialized is up to the host.
    """

    def register_toc_entry(self, section_name: str) -> None: ...

    def open_section(self, composite_id: str, scope: Scope) -> None: ...

    def bind(self, composite_id: str, key: str, value: str) -> None: ...

    def is_legal_identifier(self, candidate: str) -> bool: ...


@dataclass(frozen=True)
class Declaration:
    name: str
    scope: Scope
    values: Dict[str, str]


class MappingSink:
    """
    Materializes the namespace into plain Python mappings.

    `global_ns` plays the role of module globals, `local_ns` the role of a
    function's locals. Each collection is a dict; the TOC maps section
    names to "true".
    """

    def __init__(
        self,
        global_ns: Optional[MutableMapping[str, Any]] = None,
        local_ns: Optional[MutableMapping[str, Any]] = None,
        *,
        readonly: Iterable[str] = (),
    ) -> None:
        self.global_ns: MutableMapping[str, Any] = {} if global_ns is None else global_ns
        self.local_ns = local_ns
        self.readonly = frozenset(readonly)
        self.toc_name: Optional[str] = None
        self._declared: List[Tuple[str, Scope]] = []

    # -- collection management --------------------------------------------

    def _scoped(self, name: str, scope: Scope) -> MutableMapping[str, Any]:
        if scope == Scope.LOCAL:
            if self.local_ns is None:
                raise SinkError(
                    f"{name}: local scope requested outside a function context",
                    target=name,
                )
            return self.local_ns
        return self.global_ns

    def _make_collection(self, name: str, scope: Scope) -> Dict[str, str]:
        if name in self.readonly:
            raise SinkError(f"{name}: readonly variable", target=name)

        ns = self._scoped(name, scope)
        existing = ns.get(name)
        if isinstance(existing, dict):
            coll = existing
        elif existing is None:
            coll = {}
            ns[name] = coll
        else:
            raise SinkError(
                f"{name}: cannot convert {type(existing).__name__} to associative array",
                target=name,
            )

        if (name, scope) not in self._declared:
            self._declared.append((name, scope))
        return coll

    def _lookup(self, name: str) -> Dict[str, str]:
        # locals shadow globals, as with shell variable lookup
        for ns in (self.local_ns, self.global_ns):
            if ns is not None and isinstance(ns.get(name), dict):
                return ns[name]
        raise SinkError(f"Could not find {name}", target=name)

    def open_toc(self, root: str, scope: Scope) -> None:
        self._make_collection(root, scope)
        self.toc_name = root

    # -- NamespaceSink ------------------------------------------------------

    def register_toc_entry(self, section_name: str) -> None:
        if self.toc_name is None:
            raise SinkError("TOC collection was never opened", target="<toc>")
        self._lookup(self.toc_name)[section_name] = TOC_MARKER

    def open_section(self, composite_id: str, scope: Scope) -> None:
        self._make_collection(composite_id, scope)
        logger.debug("opened {} ({})", composite_id, scope.value)

    def bind(self, composite_id: str, key: str, value: str) -> None:
        self._lookup(composite_id)[key] = value

    def is_legal_identifier(self, candidate: str) -> bool:
        return is_legal_identifier(candidate)

    # -- inspection ---------------------------------------------------------

    def toc(self) -> Dict[str, str]:
        if self.toc_name is None:
            return {}
        return self._lookup(self.toc_name)

    def section(self, composite_id: str) -> Dict[str, str]:
        return self._lookup(composite_id)

    def declarations(self) -> List[Declaration]:
        """Collections in creation order, TOC first."""
        out: List[Declaration] = []
        for name, scope in self._declared:
            values = self._scoped(name, scope)[name]
            out.append(Declaration(name=name, scope=scope, values=dict(values)))
        return out


class ShellSink(MappingSink):
    """
    MappingSink for output that is eval'd by bash.

    Bash rejects an empty associative-array subscript, so empty section
    names and empty keys are refused here instead of being dropped by eval.
    """

    def register_toc_entry(self, section_name: str) -> None:
        if not section_name:
            raise SinkError(
                f"{self.toc_name}: empty section name is not a valid array subscript",
                target=self.toc_name or "<toc>",
            )
        super().register_toc_entry(section_name)

    def bind(self, composite_id: str, key: str, value: str) -> None:
        if not key:
            raise SinkError(
                f"{composite_id}: empty key is not a valid array subscript",
                target=composite_id,
            )
        super().bind(composite_id, key, value)


@dataclass
class RecordingSink:
    """Keeps every call in order. Useful for asserting what the projector emits."""

    legal: Any = is_legal_identifier
    calls: List[Tuple[Any, ...]] = field(default_factory=list)

    def register_toc_entry(self, section_name: str) -> None:
        self.calls.append(("toc", section_name))

    def open_section(self, composite_id: str, scope: Scope) -> None:
        self.calls.append(("open", composite_id, scope))

    def bind(self, composite_id: str, key: str, value: str) -> None:
        self.calls.append(("bind", composite_id, key, value))

    def is_legal_identifier(self, candidate: str) -> bool:
        return self.legal(candidate)

    def of_kind(self, kind: str) -> List[Tuple[Any, ...]]:
        return [c for c in self.calls if c[0] == kind]
