"""
Component ids for entity screens.

Every resource screen renders the same components, so ids are
pattern-matching dicts scoped by ``resource``. Callbacks use MATCH on the
resource key and ALL on per-row keys.

Components that only exist some of the time (select-all checkbox, column
checklist, overlay backdrop) carry ``index=SINGLE`` so callbacks can listen
to them with ALL and receive an empty list while they are absent.
"""

SINGLE = "single"


class EntityIds:
    # Page-level
    MOUNT = 'entity-mount'
    LOAD_VERSION = 'entity-load-version'
    INTENT_VERSION = 'entity-intent-version'
    ERROR = 'entity-error'
    NEW_BUTTON = 'entity-new-button'

    # Table controls
    SEARCH = 'entity-search'
    COLUMN_FILTER_BUTTON = 'entity-column-filter-button'
    COLUMN_PANEL = 'entity-column-panel'
    COLUMN_CHECKLIST = 'entity-column-checklist'
    TABLE_BODY = 'entity-table-body'
    TABLE_STATE = 'entity-table-state'
    OVERLAY = 'entity-overlay'
    OVERLAY_BACKDROP = 'entity-overlay-backdrop'

    # Rows
    SELECT_ALL = 'entity-select-all'
    ROW_SELECT = 'entity-row-select'
    ROW_MENU = 'entity-row-menu'
    ROW_ACTION = 'entity-row-action'
    ROW_CUSTOM_ACTION = 'entity-row-custom-action'

    # Dialogs
    FORM_MODAL = 'entity-form-modal'
    FORM_TITLE = 'entity-form-title'
    FORM_BODY = 'entity-form-body'
    FORM_FIELD = 'entity-form-field'
    FORM_SUBMIT = 'entity-form-submit'
    FORM_CANCEL = 'entity-form-cancel'
    DETAIL_MODAL = 'entity-detail-modal'
    DETAIL_TITLE = 'entity-detail-title'
    DETAIL_BODY = 'entity-detail-body'
    DETAIL_CLOSE = 'entity-detail-close'
    CONFIRM_DELETE = 'entity-confirm-delete'


def component_id(kind: str, resource: str, **keys) -> dict:
    """Build a pattern-matching id, e.g. component_id(EntityIds.ROW_MENU, 'tenants', index=4)."""
    cid = {'type': kind, 'resource': resource}
    cid.update(keys)
    return cid
