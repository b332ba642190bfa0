"""NiceGUI entrypoint for the account tables web runtime."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Any, Dict, List, Set

from nicegui import ui

from acctab.utils.logging import configure_root, level_name
from acctab.viewmodels.settings_vm import parse_settings_json
from acctab.web_ui.runtime import NiceGuiNotifier, WebRuntime


def _table_columns(vm) -> List[Dict[str, Any]]:
    return [
        {"name": col.field_name, "label": col.label, "field": col.field_name, "align": "left"}
        for col in vm.columns
    ]


def _build_ui(runtime: WebRuntime) -> None:
    """Register the NiceGUI pages for the runtime."""

    @ui.page("/")
    async def index() -> None:
        notifier = NiceGuiNotifier(ui.notify)
        selected_by_level: Dict[str, Set[str]] = {}
        vm = runtime.create_tables_vm(notifier)

        def on_select(category: str, rows: List[Dict[str, Any]]) -> None:
            selected_by_level[category] = {str(row.get("Id")) for row in rows}
            merged = set().union(*selected_by_level.values())
            vm.handle_row_selection(merged)

        def on_filter(field_name: str, value: Any) -> None:
            vm.handle_filter_change(field_name, value or "")
            render_tables.refresh()

        def on_sort(field_name: Any, direction: Any) -> None:
            vm.handle_sort(str(field_name), direction)
            render_tables.refresh()

        def on_next() -> None:
            vm.next_page()
            render_tables.refresh()

        def on_prev() -> None:
            vm.prev_page()
            render_tables.refresh()

        async def on_update() -> None:
            await vm.submit_update()
            if not vm.selected_ids:
                selected_by_level.clear()
            render_tables.refresh()

        async def on_reload() -> None:
            await vm.refresh()
            render_tables.refresh()

        @ui.refreshable
        def render_tables() -> None:
            with ui.row().classes("w-full q-gutter-md no-wrap"):
                for category in vm.categories:
                    with ui.card().classes("col"):
                        ui.label(category).classes("text-h6")
                        table = ui.table(
                            columns=_table_columns(vm),
                            rows=vm.page_row_dicts(category),
                            row_key="Id",
                            selection="multiple",
                            on_select=lambda e, c=category: on_select(c, e.selection),
                        ).classes("w-full")
                        table.selected = [
                            row for row in table.rows if row["Id"] in selected_by_level.get(category, set())
                        ]
                        ui.label(f"Page {vm.page_number} of {vm.total_pages(category)}").classes(
                            "text-caption"
                        )

        with ui.column().classes("w-full q-pa-md"):
            with ui.row().classes("w-full justify-between items-center"):
                ui.label("Accounts").classes("text-h5")
                ui.label(runtime.status_message).classes("text-caption")
            with ui.row().classes("q-gutter-sm items-end"):
                ui.input("Name", on_change=lambda e: on_filter("name", e.value))
                ui.input("Phone", on_change=lambda e: on_filter("phone", e.value))
                ui.input("Owner Id", on_change=lambda e: on_filter("owner", e.value))
                sort_field = ui.select(
                    {col.field_name: col.label for col in vm.columns if col.sortable},
                    value=vm.sort.field,
                    label="Sort by",
                    on_change=lambda e: on_sort(e.value, sort_dir.value),
                )
                sort_dir = ui.toggle(
                    {"asc": "Asc", "desc": "Desc"},
                    value=vm.sort.direction.value,
                    on_change=lambda e: on_sort(sort_field.value, e.value),
                )
            render_tables()
            with ui.row().classes("q-gutter-sm"):
                ui.button("Previous", on_click=on_prev)
                ui.button("Next", on_click=on_next)
                ui.button("Update selected", on_click=on_update, color="primary").bind_enabled_from(
                    vm.state, "busy", backward=lambda busy: not busy
                )
                ui.button("Reload", on_click=on_reload)
                ui.spinner().bind_visibility_from(vm.state, "busy")

        await vm.refresh()
        render_tables.refresh()


def _parse_args() -> argparse.Namespace:
    """Parse CLI args for web runtime startup."""
    parser = argparse.ArgumentParser(description="Run the account tables NiceGUI web UI.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--settings", help="Path to a settings JSON file.")
    parser.add_argument("--reload", action="store_true")
    parser.add_argument("--smoke-test", action="store_true")
    return parser.parse_args()


def main() -> None:
    """CLI entrypoint for the NiceGUI runtime."""
    args = _parse_args()
    level = configure_root()
    runtime = WebRuntime()
    if args.settings:
        payload = parse_settings_json(Path(args.settings).read_text(encoding="utf-8"))
        runtime.apply_settings_payload(payload)
    if args.smoke_test:
        payload = runtime.settings_payload()
        print("web-smoke-ok", level_name(level), payload.get("api_base_url") or "<demo>")
        return
    _build_ui(runtime)
    ui.run(
        host=args.host,
        port=args.port,
        title="Account Tables",
        reload=args.reload,
        show=False,
        storage_secret=os.environ.get("ACCTAB_WEB_STORAGE_SECRET", "acctab-web-ui-secret"),
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
