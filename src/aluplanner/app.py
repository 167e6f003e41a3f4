from __future__ import annotations

import logging

import flet as ft

from aluplanner.config.settings import Settings, settings
from aluplanner.services.planner_service import PlannerService
from aluplanner.services.repository import Repository
from aluplanner.services.store import ClientStorageStore, JsonFileStore, PersistentStore
from aluplanner.state.app_state import AppState

logger = logging.getLogger(__name__)


def build_planner(store: PersistentStore, config: Settings = settings) -> PlannerService:
    return PlannerService(Repository(store), config=config)


def build_app_state(page: ft.Page, config: Settings = settings) -> AppState:
    """Bind the planner to the device's client storage for this page."""
    store = ClientStorageStore(page.client_storage)
    return AppState(planner=build_planner(store, config))


def build_file_planner(config: Settings = settings) -> PlannerService:
    return build_planner(JsonFileStore(config.store_path), config)


def main(page: ft.Page) -> None:
    page.title = "ALU Planner"
    app_state = build_app_state(page)
    page.data = app_state

    student = app_state.planner.get_student()
    if student is None:
        logger.info("No student on this device yet")
        page.add(ft.Text("No account found. Please sign up first."))
        return

    summary = app_state.planner.get_dashboard()
    page.add(
        ft.Column(
            [
                ft.Text(summary.academic_week, size=24, weight=ft.FontWeight.BOLD),
                ft.Text(f"Pending assignments: {summary.pending_count}"),
                ft.Text(f"Due this week: {len(summary.upcoming)}"),
                ft.Text(f"Sessions today: {len(summary.today)}"),
                ft.Text(f"Attendance: {summary.attendance_percentage:.0f}% ({summary.attendance_status})"),
            ]
        )
    )


def run() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    ft.app(
        target=main,
        view=ft.AppView.WEB_BROWSER if settings.web_mode else ft.AppView.FLET_APP,
        port=settings.port,
    )


if __name__ == "__main__":
    run()
