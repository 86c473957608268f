"""
Analytics Panel Component

Graph type selector, refresh button and the rendered payload.
"""

import flet as ft
from typing import Any

from crms.application.use_cases import AnalyticsFetcher
from crms.domain.value_objects import ChartPayload, StatsPayload
from crms.domain.value_objects.analytics import GRAPH_TYPES
from ..styles import Theme
from .stats_panel import stat_card


def _series(trace: dict) -> list[tuple[str, float]]:
    """Label/value pairs of one chart trace (bar/line use x/y, pie labels/values)."""
    labels = trace.get("labels") or trace.get("x") or []
    values = trace.get("values") or trace.get("y") or []
    pairs = []
    for label, value in zip(labels, values):
        try:
            pairs.append((str(label), float(value)))
        except (TypeError, ValueError):
            continue
    return pairs


def render_chart(payload: ChartPayload) -> ft.Column:
    """Horizontal bars for every trace; the layout only contributes titles."""
    title = payload.layout.get("title")
    if isinstance(title, dict):
        title = title.get("text")

    traces = payload.data if isinstance(payload.data, list) else [payload.data]
    rows: list[Any] = [ft.Text(title or GRAPH_TYPES.get(payload.graph_type, ""), size=18, weight=ft.FontWeight.BOLD)]

    for trace in traces:
        if not isinstance(trace, dict):
            continue
        pairs = _series(trace)
        peak = max((value for _, value in pairs), default=0) or 1
        if trace.get("name"):
            rows.append(ft.Text(trace["name"], weight=ft.FontWeight.W_600))
        for label, value in pairs:
            rows.append(ft.Row([
                ft.Text(label, width=160),
                ft.ProgressBar(value=value / peak, color=Theme.PRIMARY, bgcolor=Theme.CARD, expand=True),
                ft.Text(f"{value:g}", width=60),
            ], spacing=Theme.SPACING_SM))

    if len(rows) == 1:
        rows.append(ft.Text("No data to display", color=Theme.TEXT_SECONDARY))
    return ft.Column(rows, spacing=Theme.SPACING_SM)


def render_stats(payload: StatsPayload) -> ft.Column:
    """Counter cards plus the recent referrals table."""
    cards = ft.ResponsiveRow([
        stat_card("Total Referrals", payload.count("total"), Theme.PRIMARY),
        stat_card("Pending", payload.count("pending"), Theme.WARNING),
        stat_card("Accepted", payload.count("accepted"), Theme.SUCCESS),
        stat_card("Rejected", payload.count("rejected"), Theme.ERROR),
    ], spacing=Theme.SPACING_MD)

    table = ft.DataTable(
        columns=[
            ft.DataColumn(ft.Text("Name")),
            ft.DataColumn(ft.Text("Email")),
            ft.DataColumn(ft.Text("Status")),
            ft.DataColumn(ft.Text("Referred By")),
        ],
        rows=[
            ft.DataRow(cells=[
                ft.DataCell(ft.Text(row.name)),
                ft.DataCell(ft.Text(row.email)),
                ft.DataCell(ft.Text(row.status)),
                ft.DataCell(ft.Text(row.referred_by or "-")),
            ])
            for row in payload.recent_referrals
        ],
        border=ft.border.all(1, Theme.BORDER),
        border_radius=Theme.RADIUS_MD,
    )

    return ft.Column([
        cards,
        ft.Text("Recent Referrals", size=18, weight=ft.FontWeight.BOLD),
        table,
    ], spacing=Theme.SPACING_MD)


def create_analytics_panel() -> tuple[ft.Container, dict]:
    """
    Create the analytics panel.

    Features:
    - Graph type selector
    - Manual refresh (bypasses the cache)
    - Stats grid or chart for the selected type
    """
    type_dropdown = ft.Dropdown(
        label="Graph",
        options=[ft.dropdown.Option(key, label) for key, label in GRAPH_TYPES.items()],
        border_radius=Theme.RADIUS_MD,
        width=260,
    )
    refresh_button = ft.IconButton(icon=ft.Icons.REFRESH, tooltip="Refresh data")
    loading = ft.ProgressRing(visible=False, width=20, height=20)
    body = ft.Container()

    container = ft.Container(
        content=ft.Column([
            ft.Row([type_dropdown, refresh_button, loading], spacing=Theme.SPACING_SM),
            body,
        ], spacing=Theme.SPACING_MD),
        **Theme.card_style(),
    )

    controls = {
        "type": type_dropdown,
        "refresh": refresh_button,
        "loading": loading,
        "body": body,
    }
    return container, controls


class AnalyticsPanel:
    """Wrapper class binding the panel to an AnalyticsFetcher."""

    def __init__(self, fetcher: AnalyticsFetcher):
        self.fetcher = fetcher
        self.container, self._controls = create_analytics_panel()
        self._controls["type"].value = fetcher.graph_type
        self._controls["type"].on_change = self._on_type_change
        self._controls["refresh"].on_click = self._on_refresh

    async def _on_type_change(self, e) -> None:
        await self.fetcher.fetch_data(e.control.value)

    async def _on_refresh(self, e) -> None:
        await self.fetcher.refresh_data()

    def render(self) -> None:
        """Show whatever the fetcher currently holds."""
        c = self._controls
        c["loading"].visible = self.fetcher.loading
        c["refresh"].disabled = self.fetcher.loading
        c["type"].disabled = self.fetcher.loading

        if self.fetcher.stats is not None:
            c["body"].content = render_stats(self.fetcher.stats)
        elif self.fetcher.chart is not None:
            c["body"].content = render_chart(self.fetcher.chart)
        elif self.fetcher.loading:
            c["body"].content = ft.Text("Loading analytics...", color=Theme.TEXT_SECONDARY)
        else:
            c["body"].content = ft.Text("No data available", color=Theme.TEXT_SECONDARY)

    def __getattr__(self, name):
        return getattr(self.container, name)
