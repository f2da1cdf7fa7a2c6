"""Keymap registry storing actions, bindings, and resolving key strokes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Mapping, Optional, Sequence

from markdown_engine.actions import ActionContext, ActionResult
from markdown_engine.runtime.telemetry import record_event, span

from .models import ActionRef, Binding, KeyStroke

DEFAULT_SCOPE = "editor"


@dataclass(slots=True)
class RegistryStats:
    """Snapshot describing registry state."""

    action_count: int
    binding_count: int
    scopes: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved binding paired with its action."""

    binding: Binding
    action: ActionRef


class KeymapConflictError(RuntimeError):
    """Raised when a new binding conflicts with existing entries."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        message = (
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        super().__init__(message)
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeymapRegistry:
    """Owns action references and single-stroke bindings per scope."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._scope_index: Dict[str, Dict[str, set[str]]] = {}
        self._logger_name = logger_name

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if not replace and action.id in self._actions:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "scope": binding.scope},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            conflicts = self.detect_conflicts(binding, ignore=(binding.id,))
            if conflicts and not replace:
                handle.add_metadata(
                    "conflicts", ",".join(conflict.id for conflict in conflicts)
                )
                raise KeymapConflictError(binding, conflicts)

            if binding.id in self._bindings:
                if not replace:
                    raise ValueError(f"Binding id '{binding.id}' already registered")
                self._drop(self._bindings[binding.id])
            for conflict in conflicts:
                self._drop(conflict)

            self._bindings[binding.id] = binding
            self._index_binding(binding)
            return binding

    def iter_bindings(self, scope: Optional[str] = None) -> Iterator[Binding]:
        if scope is None:
            yield from self._bindings.values()
            return
        for bucket in self._scope_index.get(scope, {}).values():
            for binding_id in sorted(bucket):
                yield self._bindings[binding_id]

    def bindings_for_action(self, action_id: str) -> list[Binding]:
        return [b for b in self._bindings.values() if b.action_id == action_id]

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            scopes=tuple(sorted(self._scope_index)),
        )

    def detect_conflicts(
        self, binding: Binding, *, ignore: Sequence[str] | None = None
    ) -> list[Binding]:
        ignored = set(ignore or ())
        conflicts: list[Binding] = []
        bucket = self._scope_index.get(binding.scope, {}).get(binding.stroke.token, set())
        for match_id in sorted(bucket):
            if match_id in ignored:
                continue
            existing = self._bindings[match_id]
            if _contexts_overlap(binding, existing):
                conflicts.append(existing)
        return conflicts

    def resolve(
        self,
        stroke: KeyStroke,
        *,
        scope: str = DEFAULT_SCOPE,
        flags: Optional[Mapping[str, bool]] = None,
    ) -> Optional[ResolutionMatch]:
        """Return the highest-priority binding for ``stroke`` whose flags allow it."""

        flag_map = flags or {}
        candidates = [
            self._bindings[binding_id]
            for binding_id in self._scope_index.get(scope, {}).get(stroke.token, set())
        ]
        allowed = [binding for binding in candidates if binding.allows(flag_map)]
        if not allowed:
            return None
        binding = max(allowed, key=lambda item: (item.priority, item.id))
        return ResolutionMatch(binding=binding, action=self._actions[binding.action_id])

    def dispatch(
        self,
        context: ActionContext,
        stroke: KeyStroke,
        *,
        scope: str = DEFAULT_SCOPE,
        flags: Optional[Mapping[str, bool]] = None,
    ) -> ActionResult:
        match = self.resolve(stroke, scope=scope, flags=flags)
        if match is None:
            return ActionResult(consumed=False, status="unbound", message=stroke.token)
        record_event(
            "keymaps.dispatch",
            level="debug",
            data={"stroke": stroke.token, "action": match.action.id},
            logger_name=self._logger_name,
        )
        return self.run_action(context, match.action.id, match=match)

    def run_action(
        self, context: ActionContext, action_id: str, *, match: object = None
    ) -> ActionResult:
        action = self.get_action(action_id)
        with span(
            f"action::{action.id}",
            logger_name=self._logger_name,
            component="actions",
            metadata={"buffer": context.buffer.name},
        ):
            result = action(context, match)
        if not isinstance(result, ActionResult):
            raise TypeError(f"Action '{action.id}' returned {type(result).__name__}")
        return result

    def _index_binding(self, binding: Binding) -> None:
        by_token = self._scope_index.setdefault(binding.scope, {})
        by_token.setdefault(binding.stroke.token, set()).add(binding.id)

    def _drop(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        scope_bucket = self._scope_index.get(binding.scope)
        if not scope_bucket:
            return
        ids = scope_bucket.get(binding.stroke.token)
        if ids is not None:
            ids.discard(binding.id)
            if not ids:
                scope_bucket.pop(binding.stroke.token, None)
        if not scope_bucket:
            self._scope_index.pop(binding.scope, None)


def _contexts_overlap(left: Binding, right: Binding) -> bool:
    if not left.when and not right.when:
        return True
    if not left.when or not right.when:
        return False

    left_map = left.when_map
    right_map = right.when_map
    for flag, expected in left_map.items():
        if flag in right_map and right_map[flag] != expected:
            return False
    return left_map == right_map


__all__ = [
    "DEFAULT_SCOPE",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "ResolutionMatch",
]
