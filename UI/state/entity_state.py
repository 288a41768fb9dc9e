"""
Entity Management State

Serializable state and a pure transition function for one resource screen
(properties, tenants, leases, payments).

All changes to a screen's state are expressed as Action records and applied by
``reduce``. Nothing else mutates an EntityState: it is a frozen dataclass and
every transition returns a new instance. This keeps every change auditable and
lets tests replay a sequence of actions without a network or a browser.

The reducer needs three resource-specific rules, read from the ``rules``
argument (an EntityConfig satisfies this):

- ``entity_id(entity) -> int``
- ``matches(entity, normalized_term) -> bool``
- ``initial_form_data``
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from UI.utils.text_utils import filter_entities


class ModalMode:
    """Which dialog, if any, is showing. Exactly one value at a time."""
    CLOSED = "closed"
    CREATE = "create"
    EDIT = "edit"
    DETAIL = "detail"

    ALL = (CLOSED, CREATE, EDIT, DETAIL)


class ActionType:
    LOAD_STARTED = "load/started"
    LOAD_SUCCEEDED = "load/succeeded"
    LOAD_FAILED = "load/failed"

    SUBMIT_STARTED = "submit/started"
    SUBMIT_SUCCEEDED = "submit/succeeded"
    SUBMIT_FAILED = "submit/failed"
    MUTATION_SETTLED = "submit/settled"

    DELETE_REQUESTED = "delete/requested"
    DELETE_DISMISSED = "delete/dismissed"
    DELETE_STARTED = "delete/started"
    DELETE_SUCCEEDED = "delete/succeeded"
    DELETE_FAILED = "delete/failed"

    BEGIN_CREATE = "modal/begin-create"
    BEGIN_EDIT = "modal/begin-edit"
    VIEW = "modal/view"
    CLOSE_VIEW = "modal/close-view"
    CANCEL = "modal/cancel"

    SEARCH_CHANGED = "search/changed"
    FORM_CHANGED = "form/changed"
    FORM_FIELD_CHANGED = "form/field-changed"

    TOGGLE_ALL = "selection/toggle-all"
    TOGGLE_ONE = "selection/toggle-one"


@dataclass(frozen=True)
class Action:
    type: str
    payload: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "payload": dict(self.payload)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Action":
        return cls(type=data["type"], payload=dict(data.get("payload") or {}))


CREATE_KEY = "create"


def mutation_key(entity_id: Optional[int]) -> str:
    """In-flight key of a mutating call: 'create' or the entity id."""
    return CREATE_KEY if entity_id is None else str(entity_id)


@dataclass(frozen=True)
class EntityState:
    entities: Tuple[Dict[str, Any], ...] = ()
    loading: bool = True
    error: Optional[str] = None
    error_kind: Optional[str] = None
    modal: str = ModalMode.CLOSED
    bound_entity: Optional[Dict[str, Any]] = None
    search_term: str = ""
    form_data: Dict[str, Any] = field(default_factory=dict)
    selected_ids: Tuple[int, ...] = ()
    pending_delete: Optional[Dict[str, Any]] = None
    in_flight: Tuple[str, ...] = ()
    generation: int = 0

    @property
    def show_form(self) -> bool:
        return self.modal in (ModalMode.CREATE, ModalMode.EDIT)

    @property
    def editing_entity(self) -> Optional[Dict[str, Any]]:
        return self.bound_entity if self.modal == ModalMode.EDIT else None

    @property
    def viewing_entity(self) -> Optional[Dict[str, Any]]:
        return self.bound_entity if self.modal == ModalMode.DETAIL else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entities": [dict(e) for e in self.entities],
            "loading": self.loading,
            "error": self.error,
            "error_kind": self.error_kind,
            "modal": self.modal,
            "bound_entity": dict(self.bound_entity) if self.bound_entity is not None else None,
            "search_term": self.search_term,
            "form_data": dict(self.form_data),
            "selected_ids": list(self.selected_ids),
            "pending_delete": dict(self.pending_delete) if self.pending_delete else None,
            "in_flight": list(self.in_flight),
            "generation": self.generation,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EntityState":
        modal = data.get("modal", ModalMode.CLOSED)
        if modal not in ModalMode.ALL:
            raise ValueError(f"Unknown modal mode: {modal!r}")
        return cls(
            entities=tuple(dict(e) for e in data.get("entities", [])),
            loading=bool(data.get("loading", True)),
            error=data.get("error"),
            error_kind=data.get("error_kind"),
            modal=modal,
            bound_entity=data.get("bound_entity"),
            search_term=data.get("search_term", ""),
            form_data=dict(data.get("form_data") or {}),
            selected_ids=tuple(int(i) for i in data.get("selected_ids", [])),
            pending_delete=data.get("pending_delete"),
            in_flight=tuple(data.get("in_flight", [])),
            generation=int(data.get("generation", 0)),
        )


def initial_state(rules) -> EntityState:
    return EntityState(form_data=dict(rules.initial_form_data))


# ---------------------------------------------------------------------------
# Derived values
# ---------------------------------------------------------------------------

def filtered_entities(state: EntityState, rules) -> List[Dict[str, Any]]:
    return filter_entities(state.entities, state.search_term, rules.matches)


def filtered_ids(state: EntityState, rules) -> List[int]:
    return [rules.entity_id(e) for e in filtered_entities(state, rules)]


def is_all_selected(state: EntityState, rules) -> bool:
    visible = set(filtered_ids(state, rules))
    return bool(visible) and visible.issubset(state.selected_ids)


def is_indeterminate(state: EntityState, rules) -> bool:
    visible = set(filtered_ids(state, rules))
    selected = set(state.selected_ids)
    return bool(selected) and selected < visible


# ---------------------------------------------------------------------------
# Transition helpers
# ---------------------------------------------------------------------------

def _prune_selection(state: EntityState, rules) -> EntityState:
    visible = set(filtered_ids(state, rules))
    kept = tuple(i for i in state.selected_ids if i in visible)
    if kept == state.selected_ids:
        return state
    return replace(state, selected_ids=kept)


def _unique_by_id(entities, rules) -> Tuple[Dict[str, Any], ...]:
    seen = set()
    unique = []
    for entity in entities:
        entity_id = rules.entity_id(entity)
        if entity_id in seen:
            continue
        seen.add(entity_id)
        unique.append(dict(entity))
    return tuple(unique)


def _add_in_flight(state: EntityState, key: str) -> Tuple[str, ...]:
    return state.in_flight if key in state.in_flight else state.in_flight + (key,)


def _remove_in_flight(state: EntityState, key: str) -> Tuple[str, ...]:
    return tuple(k for k in state.in_flight if k != key)


def _closed(state: EntityState, rules) -> EntityState:
    return replace(
        state,
        modal=ModalMode.CLOSED,
        bound_entity=None,
        form_data=dict(rules.initial_form_data),
    )


# ---------------------------------------------------------------------------
# Reducer
# ---------------------------------------------------------------------------

def reduce(state: EntityState, action: Action, rules) -> EntityState:
    """
    Apply one action to a state.

    Args:
        state: current state
        action: the transition to apply
        rules: resource rules (entity_id, matches, initial_form_data)

    Returns:
        EntityState: the new state (``state`` itself when nothing changes)
    """
    kind = action.type
    p = action.payload

    # Loading ------------------------------------------------------------
    if kind == ActionType.LOAD_STARTED:
        return replace(state, loading=True, error=None, error_kind=None,
                       generation=state.generation + 1)

    if kind == ActionType.LOAD_SUCCEEDED:
        if p.get("generation") != state.generation:
            return state
        new_state = replace(state, entities=_unique_by_id(p.get("items", []), rules),
                            loading=False)
        return _prune_selection(new_state, rules)

    if kind == ActionType.LOAD_FAILED:
        if p.get("generation") != state.generation:
            return state
        # Previous collection is kept on purpose
        return replace(state, loading=False, error=p.get("message"), error_kind=p.get("kind"))

    # Create / update ------------------------------------------------------
    if kind == ActionType.SUBMIT_STARTED:
        return replace(state, loading=True, in_flight=_add_in_flight(state, p["key"]))

    if kind == ActionType.SUBMIT_SUCCEEDED:
        closed = _closed(state, rules)
        return replace(closed, loading=False, in_flight=_remove_in_flight(state, p["key"]))

    if kind == ActionType.SUBMIT_FAILED:
        return replace(state, loading=False, error=p.get("message"), error_kind=p.get("kind"),
                       in_flight=_remove_in_flight(state, p["key"]))

    if kind == ActionType.MUTATION_SETTLED:
        # Saved outside the dialog; leave any open dialog as it is
        return replace(state, loading=False, in_flight=_remove_in_flight(state, p["key"]))

    # Delete ---------------------------------------------------------------
    if kind == ActionType.DELETE_REQUESTED:
        return replace(state, pending_delete={"id": p["id"], "name": p.get("name", "")})

    if kind == ActionType.DELETE_DISMISSED:
        return replace(state, pending_delete=None)

    if kind == ActionType.DELETE_STARTED:
        return replace(state, loading=True, pending_delete=None,
                       in_flight=_add_in_flight(state, mutation_key(p["id"])))

    if kind == ActionType.DELETE_SUCCEEDED:
        selected = tuple(i for i in state.selected_ids if i != p["id"])
        return replace(state, loading=False, selected_ids=selected,
                       in_flight=_remove_in_flight(state, mutation_key(p["id"])))

    if kind == ActionType.DELETE_FAILED:
        return replace(state, loading=False, error=p.get("message"), error_kind=p.get("kind"),
                       in_flight=_remove_in_flight(state, mutation_key(p["id"])))

    # Dialogs --------------------------------------------------------------
    if kind == ActionType.BEGIN_CREATE:
        if state.modal == ModalMode.CREATE:
            return state
        return replace(state, modal=ModalMode.CREATE, bound_entity=None,
                       form_data=dict(rules.initial_form_data))

    if kind == ActionType.BEGIN_EDIT:
        return replace(state, modal=ModalMode.EDIT, bound_entity=dict(p["entity"]),
                       form_data=dict(p["form_data"]))

    if kind == ActionType.VIEW:
        if state.show_form:
            # An open form keeps its draft; the detail view waits.
            return state
        return replace(state, modal=ModalMode.DETAIL, bound_entity=dict(p["entity"]))

    if kind == ActionType.CLOSE_VIEW:
        if state.modal != ModalMode.DETAIL:
            return state
        return replace(state, modal=ModalMode.CLOSED, bound_entity=None)

    if kind == ActionType.CANCEL:
        return _closed(state, rules)

    # Search and form ------------------------------------------------------
    if kind == ActionType.SEARCH_CHANGED:
        term = p.get("term") or ""
        return _prune_selection(replace(state, search_term=term), rules)

    if kind == ActionType.FORM_CHANGED:
        return replace(state, form_data=dict(p["form_data"]))

    if kind == ActionType.FORM_FIELD_CHANGED:
        form_data = dict(state.form_data)
        form_data[p["key"]] = p.get("value")
        return replace(state, form_data=form_data)

    # Selection ------------------------------------------------------------
    if kind == ActionType.TOGGLE_ALL:
        selected = tuple(filtered_ids(state, rules)) if p.get("checked") else ()
        return replace(state, selected_ids=selected)

    if kind == ActionType.TOGGLE_ONE:
        entity_id = p["id"]
        if entity_id in state.selected_ids:
            selected = tuple(i for i in state.selected_ids if i != entity_id)
        elif entity_id in filtered_ids(state, rules):
            selected = state.selected_ids + (entity_id,)
        else:
            return state
        return replace(state, selected_ids=selected)

    raise ValueError(f"Unknown action type: {kind!r}")
