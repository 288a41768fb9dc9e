"""
Entity Controller

One controller owns the lifecycle of one resource collection: loading, search,
create/update/delete, selection and the create/edit/detail dialogs. Resource
screens configure it with an EntityConfig instead of reimplementing any of it.

Every state change goes through ``dispatch`` and the pure reducer in
UI.state.entity_state. The controller adds what the reducer cannot do: talking
to the API, catching its failures, and guarding against overlapping calls.

Concurrency:
- Dash may run callbacks on several threads. State transitions are applied
  under a lock; network calls run outside it.
- A mutating call for a key ('create' or an entity id) that is already in
  flight is rejected without touching the network.
- Each refresh takes a generation token; a response belonging to a refresh
  that has since been superseded is dropped.

Failures never escape the network operations: an ApiError keeps its kind
(transport or business), anything else is logged with its traceback and
recorded as "unknown". Either way loading ends and the in-flight key is
released.
"""

import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, Dict, List, Optional

from api.envelope import ApiError, unwrap, unwrap_items
from UI.state.entity_state import (
    Action,
    ActionType,
    EntityState,
    filtered_entities,
    initial_state,
    is_all_selected,
    is_indeterminate,
    mutation_key,
    reduce,
)

logger = logging.getLogger(__name__)

Entity = Dict[str, Any]
FormData = Dict[str, Any]

HISTORY_LIMIT = 50
DEFAULT_CONFIRM_TEMPLATE = "Are you sure you want to delete {name}?"
UNKNOWN_ERROR_KIND = "unknown"


@dataclass(frozen=True)
class EntityConfig:
    """
    Everything resource-specific an EntityController needs.

    The four API callables may return an ApiResponse, a raw envelope dict, or
    raise an ApiError. ``load`` must produce a paged envelope (``data.items``).
    """
    load: Callable[[], Any]
    create: Callable[[FormData], Any]
    update: Callable[[int, FormData], Any]
    delete: Callable[[int], Any]
    entity_id: Callable[[Entity], int]
    entity_name: Callable[[Entity], str]
    matches: Callable[[Entity, str], bool]
    initial_form_data: FormData = field(default_factory=dict)
    load_error: str = "Could not load the records"
    save_error: str = "Could not save the record"
    delete_error: str = "Could not delete the record"
    confirm_template: str = DEFAULT_CONFIRM_TEMPLATE


class EntityController:

    def __init__(self, config: EntityConfig, state: Optional[EntityState] = None):
        self.config = config
        self._state = state if state is not None else initial_state(config)
        self._lock = threading.RLock()
        self.history: Deque[Dict[str, Any]] = deque(maxlen=HISTORY_LIMIT)

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def state(self) -> EntityState:
        return self._state

    def dispatch(self, action: Action) -> EntityState:
        with self._lock:
            self._state = reduce(self._state, action, self.config)
            self.history.append(action.to_dict())
            return self._state

    @property
    def filtered(self) -> List[Entity]:
        return filtered_entities(self._state, self.config)

    @property
    def all_selected(self) -> bool:
        return is_all_selected(self._state, self.config)

    @property
    def indeterminate(self) -> bool:
        return is_indeterminate(self._state, self.config)

    def delete_prompt(self, display_name: str) -> str:
        return self.config.confirm_template.format(name=display_name)

    # ------------------------------------------------------------------
    # Network operations
    # ------------------------------------------------------------------

    def refresh(self) -> bool:
        """
        Reload the whole collection.

        On failure the previous collection stays on screen and the load error
        message is set. Returns True if the new collection was applied.
        """
        generation = self.dispatch(Action(ActionType.LOAD_STARTED)).generation

        try:
            items = unwrap_items(self.config.load())
            self._warn_on_duplicate_ids(items)
            state = self.dispatch(Action(ActionType.LOAD_SUCCEEDED, {
                "generation": generation,
                "items": items,
            }))
        except Exception as e:
            kind = self._log_failure("Error loading entities", e)
            self.dispatch(Action(ActionType.LOAD_FAILED, {
                "generation": generation,
                "message": self.config.load_error,
                "kind": kind,
            }))
            return False

        if state.generation != generation:
            logger.info("Discarded stale load result (generation %s, current %s)",
                        generation, state.generation)
            return False
        return True

    def submit(self, form_event: Any = None) -> bool:
        """
        Save the current form: update when an entity is bound for editing,
        create otherwise.

        ``form_event`` is whatever the UI delivers with the submit (a click
        count in Dash); it is accepted for symmetry and not inspected.

        On failure the dialog stays open with the draft intact.
        """
        with self._lock:
            editing = self._state.editing_entity
            entity_id = self.config.entity_id(editing) if editing is not None else None
            key = mutation_key(entity_id)
            if key in self._state.in_flight:
                logger.warning("Ignoring submit: a save for %s is already in progress", key)
                return False
            form_data = dict(self._state.form_data)
            self.dispatch(Action(ActionType.SUBMIT_STARTED, {"key": key}))

        try:
            if entity_id is not None:
                unwrap(self.config.update(entity_id, form_data))
            else:
                unwrap(self.config.create(form_data))
        except Exception as e:
            self._submit_failed(key, f"Error saving entity {key}", e)
            return False

        self.refresh()
        self.dispatch(Action(ActionType.SUBMIT_SUCCEEDED, {"key": key}))
        return True

    def update_entity(self, entity: Entity, build_form: Callable[[Entity], FormData]) -> bool:
        """
        Save a change to one entity straight from a row action, without the
        dialog. Open dialogs are left alone.

        Args:
            entity: the entity to change
            build_form: ``entity -> form data`` sent as the update payload

        Returns:
            bool: True if the update was accepted
        """
        entity_id = self.config.entity_id(entity)
        with self._lock:
            key = mutation_key(entity_id)
            if key in self._state.in_flight:
                logger.warning("Ignoring update: a save for %s is already in progress", key)
                return False
            self.dispatch(Action(ActionType.SUBMIT_STARTED, {"key": key}))

        try:
            unwrap(self.config.update(entity_id, build_form(entity)))
        except Exception as e:
            self._submit_failed(key, f"Error updating entity {key}", e)
            return False

        self.dispatch(Action(ActionType.MUTATION_SETTLED, {"key": key}))
        self.refresh()
        return True

    def remove(self, entity_id: int, display_name: str,
               confirm: Callable[[str], bool]) -> bool:
        """
        Delete an entity after the user confirms.

        Args:
            entity_id: id of the entity to delete
            display_name: label shown in the confirmation prompt
            confirm: asked with the prompt text, returns True to proceed

        Returns:
            bool: True if the entity was deleted
        """
        if not confirm(self.delete_prompt(display_name)):
            return False
        return self._delete(entity_id)

    def request_delete(self, entity_id: int, display_name: str) -> str:
        """Record a pending delete and return the prompt to show."""
        self.dispatch(Action(ActionType.DELETE_REQUESTED, {"id": entity_id, "name": display_name}))
        return self.delete_prompt(display_name)

    def confirm_delete(self) -> bool:
        pending = self._state.pending_delete
        if not pending:
            return False
        return self._delete(pending["id"])

    def dismiss_delete(self) -> None:
        self.dispatch(Action(ActionType.DELETE_DISMISSED))

    def _delete(self, entity_id: int) -> bool:
        with self._lock:
            key = mutation_key(entity_id)
            if key in self._state.in_flight:
                logger.warning("Ignoring delete: a request for %s is already in progress", key)
                self.dispatch(Action(ActionType.DELETE_DISMISSED))
                return False
            self.dispatch(Action(ActionType.DELETE_STARTED, {"id": entity_id}))

        try:
            unwrap(self.config.delete(entity_id))
        except Exception as e:
            kind = self._log_failure(f"Error deleting entity {entity_id}", e)
            self.dispatch(Action(ActionType.DELETE_FAILED, {
                "id": entity_id,
                "message": self.config.delete_error,
                "kind": kind,
            }))
            return False

        self.dispatch(Action(ActionType.DELETE_SUCCEEDED, {"id": entity_id}))
        self.refresh()
        return True

    def _submit_failed(self, key: str, context: str, error: Exception) -> None:
        kind = self._log_failure(context, error)
        self.dispatch(Action(ActionType.SUBMIT_FAILED, {
            "key": key,
            "message": self.config.save_error,
            "kind": kind,
        }))

    @staticmethod
    def _log_failure(context: str, error: Exception) -> str:
        """Log a failed call and return its error kind."""
        if isinstance(error, ApiError):
            logger.error("%s (%s): %s", context, error.kind, error.detail or error.message)
            return error.kind
        # Anything else is a bug or a malformed response; keep the traceback
        logger.exception("%s (%s): %s", context, UNKNOWN_ERROR_KIND, error)
        return UNKNOWN_ERROR_KIND

    # ------------------------------------------------------------------
    # Local operations
    # ------------------------------------------------------------------

    def begin_create(self) -> None:
        self.dispatch(Action(ActionType.BEGIN_CREATE))

    def begin_edit(self, entity: Entity, mapper: Optional[Callable[[Entity], FormData]] = None) -> None:
        # Without a mapper the entity itself is the draft
        form_data = mapper(entity) if mapper is not None else dict(entity)
        self.dispatch(Action(ActionType.BEGIN_EDIT, {"entity": entity, "form_data": form_data}))

    def cancel(self) -> None:
        self.dispatch(Action(ActionType.CANCEL))

    def view(self, entity: Entity) -> None:
        self.dispatch(Action(ActionType.VIEW, {"entity": entity}))

    def close_view(self) -> None:
        self.dispatch(Action(ActionType.CLOSE_VIEW))

    def set_search_term(self, term: Optional[str]) -> None:
        self.dispatch(Action(ActionType.SEARCH_CHANGED, {"term": term or ""}))

    def set_form_data(self, form_data: FormData) -> None:
        self.dispatch(Action(ActionType.FORM_CHANGED, {"form_data": form_data}))

    def update_form_field(self, key: str, value: Any) -> None:
        self.dispatch(Action(ActionType.FORM_FIELD_CHANGED, {"key": key, "value": value}))

    def toggle_all(self, checked: bool) -> None:
        self.dispatch(Action(ActionType.TOGGLE_ALL, {"checked": bool(checked)}))

    def toggle_one(self, entity_id: int) -> None:
        self.dispatch(Action(ActionType.TOGGLE_ONE, {"id": entity_id}))

    def find(self, entity_id: int) -> Optional[Entity]:
        for entity in self._state.entities:
            if self.config.entity_id(entity) == entity_id:
                return entity
        return None

    # ------------------------------------------------------------------

    def _warn_on_duplicate_ids(self, items: List[Entity]) -> None:
        ids = [self.config.entity_id(item) for item in items]
        if len(ids) != len(set(ids)):
            logger.warning("Load returned duplicate ids; keeping the first occurrence of each")
