"""Per-declaration metadata store.

Entries are keyed by declaration name and created on first lookup. Registration is
expected to run once, single-threaded, while the application starts; nothing here
is locked.
"""

import logging
from typing import Any

from .errors import (
    ResolverAlreadyRegistered,
    ResolverTypeConflict,
    TypeAlreadyRegistered,
    TypeResolverConflict,
)
from .ir import ArgMetadata, FieldMetadata, RegistryEntry, TypeRoleMetadata

logger = logging.getLogger(__name__)


class MetadataRegistry:
    """Holds one RegistryEntry per declared type or resolver.

    Example:
        registry = MetadataRegistry()
        registry.declare_output_type("User")
        registry.add_field("User", FieldMetadata(owner="User", name="id", scalar="Int"))

        entry = registry.lookup("User")
        entry.fields[0].name  # "id"
    """

    def __init__(self):
        self._entries: dict[str, RegistryEntry] = {}

    def lookup(self, name: str) -> RegistryEntry:
        """Return the entry for a name, creating an empty one if needed."""
        entry = self._entries.get(name)
        if entry is None:
            entry = self._entries[name] = RegistryEntry(name=name)
        return entry

    def has(self, name: str) -> bool:
        return name in self._entries

    def declare_output_type(self, name: str, declaration: type | None = None) -> RegistryEntry:
        return self._set_role(TypeRoleMetadata(name=name, is_input=False, declaration=declaration))

    def declare_input_type(self, name: str, declaration: type | None = None) -> RegistryEntry:
        return self._set_role(TypeRoleMetadata(name=name, is_input=True, declaration=declaration))

    def _set_role(self, role: TypeRoleMetadata) -> RegistryEntry:
        entry = self.lookup(role.name)
        if entry.is_resolver:
            raise TypeResolverConflict(role.name)
        if entry.role is not None:
            raise TypeAlreadyRegistered(role.name)
        entry.role = role
        logger.debug("Registered %s type '%s'", "input" if role.is_input else "output", role.name)
        return entry

    def add_field(self, name: str, field: FieldMetadata) -> RegistryEntry:
        entry = self.lookup(name)
        entry.fields.append(field)
        return entry

    def add_arg(self, name: str, arg: ArgMetadata) -> RegistryEntry:
        """Store an argument at its parameter index, padding skipped positions."""
        entry = self.lookup(name)
        args = entry.args.setdefault(arg.method, [])
        if arg.index >= len(args):
            args.extend([None] * (arg.index + 1 - len(args)))
        args[arg.index] = arg
        return entry

    def bind_resolver(self, name: str, instance: Any) -> RegistryEntry:
        entry = self.lookup(name)
        if entry.role is not None:
            raise ResolverTypeConflict(name)
        if entry.is_resolver:
            raise ResolverAlreadyRegistered(name)
        entry.resolver = instance
        logger.debug("Bound resolver '%s'", name)
        return entry

    def all(self) -> dict[str, RegistryEntry]:
        """Return every entry, keyed by name."""
        return dict(self._entries)

    def clear(self):
        """Forget every declaration."""
        self._entries = {}


default_registry = MetadataRegistry()
