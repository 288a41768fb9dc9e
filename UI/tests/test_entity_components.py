"""
Tests for the entity table, form and detail components.
"""

import re
import unittest
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import html

from UI.components.entity_detail_modal import DetailField, render_detail_fields
from UI.components.entity_form_modal import FormField, coerce_field_value, collect_form_data, render_form_fields
from UI.components.entity_table import (
    CustomAction,
    render_cell,
    render_column_panel,
    render_overlay,
    render_row_actions,
    render_table_body,
)
from UI.pages.entity.ids import EntityIds
from UI.state import table_state as ts

COLUMNS = [
    ts.ColumnSpec("nombre", "Name", lambda e: e.get("nombre"), max_length=5),
    ts.ColumnSpec("rentado", "Rented", lambda e: e.get("rentado")),
    ts.ColumnSpec("badge", "Badge", lambda e: html.Span(e.get("nombre"))),
]

ENTITIES = [
    {"id": 1, "nombre": "Casa Grande", "rentado": True},
    {"id": 2, "nombre": "Depto", "rentado": False},
]


def walk(component):
    """Yield a component and all its descendants."""
    yield component
    children = getattr(component, "children", None)
    if children is None:
        return
    if not isinstance(children, (list, tuple)):
        children = [children]
    for child in children:
        if hasattr(child, "to_plotly_json"):
            yield from walk(child)


def ids_of(component, kind):
    return [c.id for c in walk(component)
            if isinstance(getattr(c, "id", None), dict) and c.id.get("type") == kind]


def body(**overrides):
    options = dict(
        entities=ENTITIES,
        filtered=ENTITIES,
        selected_ids=[],
        all_selected=False,
        indeterminate=False,
        columns=COLUMNS,
        table_state=ts.initial(COLUMNS),
        entity_id=lambda e: e["id"],
        entity_name=lambda e: e["nombre"],
        empty_message="No properties registered",
        empty_search_message="No properties match the search",
        select_all_label="Select all properties",
    )
    options.update(overrides)
    return render_table_body("properties", **options)


class TestCells(unittest.TestCase):

    def test_text_is_truncated(self):
        self.assertEqual(render_cell(COLUMNS[0], ENTITIES[0]), "Casa ...")

    def test_bool_is_shown_as_text(self):
        self.assertEqual(render_cell(COLUMNS[1], ENTITIES[0]), "True")

    def test_components_are_not_truncated(self):
        self.assertIsInstance(render_cell(COLUMNS[2], ENTITIES[0]), html.Span)

    def test_none_is_blank(self):
        self.assertEqual(render_cell(COLUMNS[0], {"id": 3}), "")


class TestTableBody(unittest.TestCase):

    def test_empty_collection_message(self):
        rendered = body(entities=[], filtered=[])
        self.assertIn("No properties registered", str(rendered.to_plotly_json()))

    def test_empty_search_message(self):
        rendered = body(filtered=[])
        self.assertIn("No properties match the search", str(rendered.to_plotly_json()))

    def test_one_row_checkbox_per_filtered_entity(self):
        rendered = body(filtered=ENTITIES[:1])
        rows = ids_of(rendered, EntityIds.ROW_SELECT)
        self.assertEqual([r["index"] for r in rows], [1])

    def test_select_all_reflects_indeterminate(self):
        rendered = body(selected_ids=[1], indeterminate=True)
        checkbox = [c for c in walk(rendered) if isinstance(c, dbc.Checkbox)
                    and c.id.get("type") == EntityIds.SELECT_ALL][0]
        self.assertFalse(checkbox.value)
        self.assertEqual(checkbox.input_class_name, "indeterminate")

    def test_hidden_columns_are_not_rendered(self):
        state = ts.set_visible_columns(ts.initial(COLUMNS), ["rentado"], COLUMNS)
        headers = [c.children for c in walk(body(table_state=state)) if isinstance(c, html.Th)]
        self.assertNotIn("Name", headers)
        self.assertIn("Rented", headers)

    def test_open_menu_lists_custom_actions_first(self):
        state = ts.toggle_menu(ts.initial(COLUMNS), 2)
        custom = [CustomAction("archive", "Archive", lambda e, c: None)]
        rendered = body(table_state=state, custom_actions=custom)
        custom_ids = ids_of(rendered, EntityIds.ROW_CUSTOM_ACTION)
        action_ids = ids_of(rendered, EntityIds.ROW_ACTION)
        self.assertEqual(custom_ids, [{"type": EntityIds.ROW_CUSTOM_ACTION, "resource": "properties",
                                       "index": 2, "action": "archive"}])
        self.assertEqual([a["action"] for a in action_ids], ["view", "edit", "delete"])
        self.assertTrue(all(a["index"] == 2 for a in action_ids))


class TestMenusAndPanels(unittest.TestCase):

    def test_closed_menu_shows_only_trigger(self):
        rendered = render_row_actions("tenants", {"id": 4}, 4, "Ana", is_open=False)
        self.assertEqual(ids_of(rendered, EntityIds.ROW_ACTION), [])
        self.assertEqual(len(ids_of(rendered, EntityIds.ROW_MENU)), 1)

    def test_open_menu_is_raised_above_other_rows(self):
        rendered = body(table_state=ts.toggle_menu(ts.initial(COLUMNS), 2))
        containers = {}
        for c in walk(rendered):
            if "actions-menu-container" in (getattr(c, "className", None) or ""):
                containers[ids_of(c, EntityIds.ROW_MENU)[0]["index"]] = c.className
        self.assertEqual(containers, {1: "actions-menu-container",
                                      2: "actions-menu-container open"})

    def test_table_does_not_clip_menus(self):
        table = [c for c in walk(body()) if isinstance(c, dbc.Table)][0]
        self.assertNotIn("responsive", table.to_plotly_json()["props"])

    def test_menu_triggers_sit_above_backdrop(self):
        css = (Path(__file__).resolve().parents[1] / "assets" / "console.css").read_text()

        def z_index(selector):
            match = re.search(re.escape(selector) + r"\s*\{[^}]*z-index:\s*(\d+)", css)
            return int(match.group(1))

        backdrop = z_index(".overlay-backdrop")
        self.assertGreater(z_index(".column-filter-anchor"), backdrop)
        self.assertGreater(z_index(".actions-menu-container"), backdrop)
        self.assertGreater(z_index(".actions-menu-container.open"), z_index(".actions-menu-container"))

    def test_overlay_only_when_something_is_open(self):
        self.assertIsNone(render_overlay("tenants", ts.initial(COLUMNS)))
        state = ts.toggle_filter_panel(ts.initial(COLUMNS))
        self.assertIsNotNone(render_overlay("tenants", state))

    def test_column_panel_disables_last_column(self):
        state = ts.toggle_filter_panel(ts.set_visible_columns(ts.initial(COLUMNS), ["nombre"], COLUMNS))
        panel = render_column_panel("tenants", COLUMNS, state)
        checklist = [c for c in walk(panel) if getattr(c, "options", None)][0]
        disabled = {o["value"]: o["disabled"] for o in checklist.options}
        self.assertTrue(disabled["nombre"])
        self.assertFalse(disabled["rentado"])

    def test_column_panel_hidden_when_closed(self):
        self.assertIsNone(render_column_panel("tenants", COLUMNS, ts.initial(COLUMNS)))


class TestFormAndDetail(unittest.TestCase):

    FIELDS = [
        FormField("nombre", "Name", required=True),
        FormField("meses", "Months", type="number", step="1"),
        FormField("montoMensual", "Rent", type="number", step="0.01"),
        FormField("activo", "Active", type="checkbox"),
        FormField("propiedadId", "Property", type="select",
                  options=lambda: [{"label": "Casa", "value": 3}]),
    ]

    def test_unknown_field_type_is_rejected(self):
        with self.assertRaises(ValueError):
            FormField("x", "X", type="color")

    def test_values_are_coerced(self):
        self.assertEqual(coerce_field_value(self.FIELDS[1], "12"), 12)
        self.assertEqual(coerce_field_value(self.FIELDS[2], "1200"), 1200.0)
        self.assertEqual(coerce_field_value(self.FIELDS[1], ""), 0)
        self.assertIs(coerce_field_value(self.FIELDS[3], None), False)
        self.assertEqual(coerce_field_value(self.FIELDS[4], "3"), 3)

    def test_collect_keeps_keys_without_widget(self):
        ids = [{"type": EntityIds.FORM_FIELD, "resource": "leases", "field": "nombre"}]
        data = collect_form_data(self.FIELDS, ids, ["Contrato 1"], base={"nombre": "", "personas": 2})
        self.assertEqual(data, {"nombre": "Contrato 1", "personas": 2})

    def test_render_marks_required_fields(self):
        rendered = html.Div(render_form_fields("leases", self.FIELDS, {"nombre": "x"}))
        text = str(rendered.to_plotly_json())
        self.assertIn("Name *", text)
        self.assertEqual(len(ids_of(rendered, EntityIds.FORM_FIELD)), len(self.FIELDS))

    def test_detail_fields_use_renderers(self):
        fields = [DetailField("montoMensual", "Rent", lambda v: f"${v}"), DetailField("nota", "Note")]
        rows = render_detail_fields(fields, {"montoMensual": 10})
        values = [row.children[1].children for row in rows]
        self.assertEqual(values, ["$10", "-"])

    def test_detail_without_entity_is_empty(self):
        self.assertEqual(render_detail_fields([DetailField("a", "A")], None), [])


if __name__ == '__main__':
    unittest.main()
