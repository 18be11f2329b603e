# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Per-command flag visibility state.

Every `Command` owns one `FlagScope` holding three flag sets:

- global: flags visible to the command and all of its descendants. Once a
  command inherits, its global set is the very same `FlagSet` object as the
  root's, so a global flag defined or parsed anywhere is seen everywhere.
- local: flags visible only at this exact command. Never shared.
- effective: local ∪ global, the set actually used to parse arguments.
  It is rebuilt on every access so it always reflects the latest local and
  global definitions, with local winning on a name clash.

All three sets are created on first use, and all write their diagnostics to
the scope's error buffer.

Not thread-safe: build the command tree from one thread before resolving.
"""
from __future__ import annotations

import io

from arbor.flags import Flag, FlagSet


class FlagScope:
    """Global, local and effective flag sets of one command."""

    def __init__(self, name: str) -> None:
        self.name: str = name
        self.error_buffer: io.StringIO = io.StringIO()
        self.global_flags: FlagSet | None = None
        self.local_flags: FlagSet | None = None
        self.effective_flags: FlagSet | None = None
        self._merged: dict[int, Flag] = {}
        self._owns_global: bool = False

    def _new_flag_set(self) -> FlagSet:
        return FlagSet(self.name, output=self.error_buffer)

    def ensure_global(self) -> FlagSet:
        if self.global_flags is None:
            self.global_flags = self._new_flag_set()
            self._owns_global = True
        return self.global_flags

    def set_global(self, flags: FlagSet) -> None:
        self.global_flags = flags
        self._owns_global = True

    def owned_global(self) -> FlagSet | None:
        """The global set this scope defined itself, if it has not inherited one."""
        if self._owns_global:
            return self.global_flags
        return None

    def ensure_local(self) -> FlagSet:
        if self.local_flags is None:
            self.local_flags = self._new_flag_set()
        return self.local_flags

    def ensure_effective(self) -> FlagSet:
        if self.effective_flags is None:
            self.effective_flags = self._new_flag_set()
        return self.effective_flags

    def inherit(self, shared: FlagSet) -> None:
        """
        Point the global set at `shared`.

        Definitions made on a global set this scope owned before it was
        attached to a tree are carried over into `shared`. A set inherited
        earlier is only replaced.
        """
        if self.global_flags is shared:
            return
        owned = self.owned_global()
        if owned is not None:
            shared.add_flag_set(owned)
        self.global_flags = shared
        self._owns_global = False

    @staticmethod
    def _defines(flags: FlagSet | None, flag: Flag) -> bool:
        return flags is not None and flags.lookup(flag.name) is flag

    def merge(self) -> FlagSet:
        """
        Rebuild the effective set from local then global definitions.

        Flags defined directly on the effective set are adopted into the local
        set first, so they survive the rebuild.
        """
        effective = self.ensure_effective()
        direct = [
            flag
            for flag in effective
            if id(flag) not in self._merged
            and not self._defines(self.local_flags, flag)
            and not self._defines(self.global_flags, flag)
        ]
        if direct:
            local_flags = self.ensure_local()
            for flag in direct:
                local_flags.add_flag(flag)

        effective.clear()
        effective.add_flag_set(self.local_flags)
        effective.add_flag_set(self.global_flags)
        self._merged = {id(flag): flag for flag in effective}
        return effective

    def buffered_output(self) -> str:
        return self.error_buffer.getvalue()
