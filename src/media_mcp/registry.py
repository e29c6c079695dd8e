"""In-memory tool registry.

The registry is filled once at startup and only read afterwards, so lookups need no
locking. Tool references are resolved through an explicit table supplied by the
caller rather than by importing modules by name.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field

from media_mcp.errors import DuplicateToolName, ToolLoadError, ToolNotFound
from media_mcp.tools import ToolDescriptor

logger = logging.getLogger("media_mcp.registry")

ToolResolver = Callable[[str], object]


@dataclass
class LoadReport:
    """Outcome of :meth:`ToolRegistry.load_from`.

    Attributes:
        registered: Names of the tools registered, in load order.
        errors: One error per reference that could not be loaded.
    """

    registered: list[str] = field(default_factory=list)
    errors: list[ToolLoadError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        """Raise the first load error, if any."""
        if self.errors:
            raise self.errors[0]


class ToolRegistry:
    """Ordered mapping of tool names to descriptors."""

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._tools: dict[str, ToolDescriptor] = {}

    def register(self, descriptor: ToolDescriptor) -> None:
        """Register a tool descriptor.

        Raises:
            DuplicateToolName: If a tool with the same name is already registered.
                The registry is left unchanged.
        """
        if descriptor.name in self._tools:
            raise DuplicateToolName(descriptor.name)
        self._tools[descriptor.name] = descriptor

    def load_from(
        self,
        references: Iterable[str],
        resolve: ToolResolver,
        *,
        strict: bool = False,
    ) -> LoadReport:
        """Resolve and register tools from an ordered list of references.

        A reference that fails to resolve, resolves to a malformed tool module or
        collides with an existing name is recorded in the report and loading
        continues with the next reference.

        Args:
            references: Registration references, in the order to register them.
            resolve: Maps a reference to a :class:`ToolDescriptor` or to a tool
                module object accepted by :meth:`ToolDescriptor.from_api_tool`.
            strict: Raise the first :class:`ToolLoadError` instead of collecting.

        Returns:
            LoadReport listing registered names and load errors.
        """
        report = LoadReport()
        for reference in references:
            try:
                descriptor = self._resolve(reference, resolve)
                self.register(descriptor)
            except Exception as exc:
                error = ToolLoadError(reference, exc)
                if strict:
                    raise error from exc
                logger.warning("%s", error)
                report.errors.append(error)
                continue
            report.registered.append(descriptor.name)
        if report.registered:
            logger.info(
                "Registered %d tools: %s", len(report.registered), report.registered
            )
        return report

    @staticmethod
    def _resolve(reference: str, resolve: ToolResolver) -> ToolDescriptor:
        resolved = resolve(reference)
        if isinstance(resolved, ToolDescriptor):
            return resolved
        return ToolDescriptor.from_api_tool(resolved)

    def list_tools(self) -> list[ToolDescriptor]:
        """Return registered descriptors in registration order."""
        return list(self._tools.values())

    def names(self) -> list[str]:
        """Return registered tool names in registration order."""
        return list(self._tools)

    def get(self, name: str) -> ToolDescriptor:
        """Look up a descriptor by name.

        Raises:
            ToolNotFound: If no tool with that name is registered.
        """
        try:
            return self._tools[name]
        except KeyError:
            raise ToolNotFound(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(self.list_tools())

    def __len__(self) -> int:
        return len(self._tools)
