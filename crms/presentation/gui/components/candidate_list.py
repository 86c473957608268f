"""
Candidate List Component

Searchable, paginated referral cards. Admins also get per-card status
selection, deletion with confirmation and bulk status updates.
"""

import flet as ft
from functools import partial
from typing import Any

from crms.application.use_cases import CandidateStore
from crms.domain.entities import Referral, ReferralStatus
from crms.domain.value_objects import SearchFilter
from ..styles import Theme


def _status_badge(status: ReferralStatus) -> ft.Container:
    color = Theme.status_color(status)
    return ft.Container(
        content=ft.Text(status.value, size=12, color=color, weight=ft.FontWeight.BOLD),
        border=ft.border.all(1, color),
        border_radius=Theme.RADIUS_LG,
        padding=ft.padding.symmetric(horizontal=Theme.SPACING_SM, vertical=2),
    )


def _status_options() -> list[ft.dropdown.Option]:
    return [ft.dropdown.Option(status.value) for status in ReferralStatus]


def create_candidate_list(is_admin: bool) -> tuple[ft.Container, dict]:
    """
    Create the static part of the list: search row, bulk bar, grid, pager.

    Cards are filled in by CandidateList.render().
    """
    search_input = ft.TextField(
        label="Search",
        prefix_icon=ft.Icons.SEARCH,
        border_radius=Theme.RADIUS_MD,
        expand=True,
    )
    category_dropdown = ft.Dropdown(
        label="Search by",
        value=SearchFilter().category,
        options=[ft.dropdown.Option(key, label) for key, label in SearchFilter.CATEGORIES.items()],
        border_radius=Theme.RADIUS_MD,
        width=180,
    )

    bulk_status = ft.Dropdown(
        label="Set status",
        options=_status_options(),
        border_radius=Theme.RADIUS_MD,
        width=180,
    )
    bulk_button = ft.ElevatedButton("Apply to selected", icon=ft.Icons.DONE_ALL, style=Theme.button_style("primary"))
    selected_text = ft.Text("0 selected", color=Theme.TEXT_SECONDARY)
    bulk_bar = ft.Row(
        [selected_text, bulk_status, bulk_button],
        spacing=Theme.SPACING_SM,
        visible=is_admin,
    )

    loading_text = ft.Text("Loading candidates...", visible=False)
    grid = ft.ResponsiveRow(controls=[], spacing=Theme.SPACING_MD, run_spacing=Theme.SPACING_MD)

    prev_button = ft.IconButton(icon=ft.Icons.CHEVRON_LEFT, tooltip="Previous page")
    next_button = ft.IconButton(icon=ft.Icons.CHEVRON_RIGHT, tooltip="Next page")
    page_text = ft.Text("Page 1 of 1")
    pager = ft.Row([prev_button, page_text, next_button], alignment=ft.MainAxisAlignment.CENTER)

    container = ft.Container(
        content=ft.Column([
            ft.Row([search_input, category_dropdown], spacing=Theme.SPACING_SM),
            bulk_bar,
            loading_text,
            grid,
            pager,
        ], spacing=Theme.SPACING_MD),
        **Theme.card_style(),
    )

    controls = {
        "search": search_input,
        "category": category_dropdown,
        "bulk_status": bulk_status,
        "bulk_button": bulk_button,
        "selected_text": selected_text,
        "loading": loading_text,
        "grid": grid,
        "prev": prev_button,
        "next": next_button,
        "page_text": page_text,
        "pager": pager,
    }

    return container, controls


class CandidateList:
    """Wrapper class binding the list controls to a CandidateStore."""

    def __init__(self, page: ft.Page, store: CandidateStore, is_admin: bool = False):
        self.page = page
        self.store = store
        self.is_admin = is_admin
        self.container, self._controls = create_candidate_list(is_admin)
        self._selected: set[str] = set()
        self._pending_delete: str | None = None

        self._confirm_dialog = ft.AlertDialog(
            modal=True,
            title=ft.Text("Delete candidate"),
            content=ft.Text("Are you sure you want to delete this candidate?"),
            actions=[
                ft.TextButton("Cancel", on_click=self._close_dialog),
                ft.TextButton("Delete", on_click=self._confirm_delete, style=ft.ButtonStyle(color=Theme.ERROR)),
            ],
            actions_alignment=ft.MainAxisAlignment.END,
        )
        page.overlay.append(self._confirm_dialog)

        c = self._controls
        c["search"].on_change = self._on_search
        c["category"].on_change = self._on_search
        c["bulk_button"].on_click = self._on_bulk_update
        c["prev"].on_click = lambda e: self._go(-1)
        c["next"].on_click = lambda e: self._go(1)

    # ==================== Event handlers ====================

    def _on_search(self, e) -> None:
        self.store.filter(self._controls["search"].value or "", self._controls["category"].value)

    def _go(self, delta: int) -> None:
        current = self.store.page()
        self.store.page(current.number + delta)
        self.render()
        self.page.update()

    async def _on_status_change(self, referral_id: str, e) -> None:
        await self.store.update_status(referral_id, e.control.value)

    def _on_select(self, referral_id: str, checked: bool) -> None:
        if checked:
            self._selected.add(referral_id)
        else:
            self._selected.discard(referral_id)
        self._controls["selected_text"].value = f"{len(self._selected)} selected"
        self._controls["selected_text"].update()

    async def _on_bulk_update(self, e) -> None:
        result = await self.store.bulk_update_status(self._selected, self._controls["bulk_status"].value)
        if result.ok:
            self._selected.clear()
            self._controls["bulk_status"].value = None
            self.render()
            self.page.update()

    def _ask_delete(self, referral_id: str) -> None:
        self._pending_delete = referral_id
        self._confirm_dialog.open = True
        self.page.update()

    def _close_dialog(self, e=None) -> None:
        self._pending_delete = None
        self._confirm_dialog.open = False
        self.page.update()

    async def _confirm_delete(self, e) -> None:
        referral_id = self._pending_delete
        self._close_dialog()
        if referral_id is not None:
            self._selected.discard(referral_id)
            await self.store.delete(referral_id)

    # ==================== Rendering ====================

    def _card(self, referral: Referral) -> ft.Container:
        details: list[Any] = [
            ft.Text(referral.name, size=16, weight=ft.FontWeight.BOLD),
            ft.Text(referral.job_title, color=Theme.TEXT_SECONDARY),
            ft.Text(referral.email, size=13),
        ]
        if referral.phone:
            details.append(ft.Text(referral.phone, size=13))
        if referral.experience:
            details.append(ft.Text(f"Experience: {referral.experience}", size=13))
        if referral.resume_url:
            details.append(ft.TextButton("View Resume", url=referral.resume_url, icon=ft.Icons.DESCRIPTION))

        status_row: list[Any] = [_status_badge(referral.status)]
        if self.is_admin:
            status_row.append(ft.Dropdown(
                value=referral.status.value,
                options=_status_options(),
                width=150,
                dense=True,
                disabled=self.store.loading,
                on_change=partial(self._on_status_change, referral.id),
            ))
        details.append(ft.Row(status_row, spacing=Theme.SPACING_SM))

        if self.is_admin:
            details.insert(0, ft.Checkbox(
                value=referral.id in self._selected,
                on_change=lambda e, rid=referral.id: self._on_select(rid, e.control.value),
            ))
            details.append(ft.ElevatedButton(
                "Delete",
                icon=ft.Icons.DELETE,
                style=Theme.button_style("error"),
                disabled=self.store.loading,
                on_click=lambda e, rid=referral.id: self._ask_delete(rid),
            ))
        else:
            details.append(ft.Text(
                "Status updates are managed by administrators.",
                size=12,
                italic=True,
                color=Theme.TEXT_SECONDARY,
            ))

        return ft.Container(
            content=ft.Column(details, spacing=Theme.SPACING_XS),
            col={"sm": 12, "md": 6, "lg": 4},
            bgcolor=Theme.CARD,
            border_radius=Theme.RADIUS_LG,
            padding=Theme.SPACING_MD,
        )

    def render(self) -> None:
        """Rebuild the cards of the current page from the store."""
        c = self._controls
        current = self.store.page()

        c["loading"].visible = self.store.loading
        c["bulk_button"].disabled = self.store.loading
        c["selected_text"].value = f"{len(self._selected)} selected"

        if current.items:
            c["grid"].controls = [self._card(referral) for referral in current.items]
        elif not self.store.loading:
            c["grid"].controls = [ft.Text("No referrals found", color=Theme.TEXT_SECONDARY)]
        else:
            c["grid"].controls = []

        c["page_text"].value = f"Page {current.number} of {current.total_pages}"
        c["prev"].disabled = not current.has_previous
        c["next"].disabled = not current.has_next
        c["pager"].visible = current.total_pages > 1

    def __getattr__(self, name):
        return getattr(self.container, name)
