"""Dashboard View — admin registrations dashboard.

Shows a loading indicator while the admin gate resolves, then the stat
tiles, the search / department filters, one page of the registrations
table with View / Edit / Delete actions, the pagination footer and the
Export button.

**Thin UI Rule**: Zero business logic.  Filtering, paging, stats,
mutations and export all live in the services; this view renders what
they return and dispatches every network call to a worker thread.
"""

from __future__ import annotations

import threading
from tkinter import filedialog
from typing import Callable, Optional

import customtkinter as ctk

from app.auth import SessionManager
from app.logger import StructuredLogger
from app.models.enums import ALL_DEPARTMENTS, DEPARTMENTS, GateState
from app.models.registration import Registration
from app.models.service_models import Page, ServiceResult
from app.services.auth_service import AuthService
from app.services.export_service import EXPORT_OK, RegistrationExportService
from app.services.photo_service import PhotoService
from app.services.registration_admin import (
    DELETE_OK,
    UPDATE_OK,
    RegistrationAdminService,
)
from app.ui.components.confirm_dialog import ConfirmDialog
from app.ui.components.detail_dialog import DetailDialog
from app.ui.components.edit_dialog import EditDialog
from app.ui.components.stats_cards import StatsCards
from app.ui.components.toast import Toast
from app.ui.theme import (
    ACCENT_HOVER,
    ACCENT_PRIMARY,
    CONTENT_BG,
    CONTENT_CARD_BG,
    CORNER_RADIUS,
    DANGER_PRIMARY,
    FONT_BODY,
    FONT_BUTTON,
    FONT_HEADING,
    FONT_LABEL,
    FONT_SMALL,
    HEADER_BG,
    HEADER_HEIGHT,
    HEADER_TEXT,
    INPUT_BG,
    INPUT_BORDER,
    INPUT_HEIGHT,
    NEUTRAL_BUTTON,
    NEUTRAL_HOVER,
    PADDING_LG,
    PADDING_MD,
    PADDING_SM,
    ROW_ALT_BG,
    TEXT_LIGHT,
    TEXT_PRIMARY,
    TEXT_SECONDARY,
)
from app.utils.formatting import format_table_date

_ALL_LABEL: str = "All Departments"

# (header, weight) per table column
_COLUMNS: tuple[tuple[str, int], ...] = (
    ("NAME", 3),
    ("MOBILE", 2),
    ("EMAIL", 3),
    ("DEPARTMENT", 2),
    ("REGISTERED", 2),
    ("ACTIONS", 3),
)


class DashboardView(ctk.CTkFrame):
    """Admin dashboard over the cached registration set.

    Parameters
    ----------
    parent:
        The root ``CTk`` window.
    session:
        Session holder; read for the header label and the gate state.
    auth_service:
        Resolves admin access and performs sign-out.
    admin_service:
        Fetch / view / edit / delete workflows plus the browser cache.
    export_service:
        Workbook export.
    photo_service:
        Photo download for the detail dialog.
    on_redirect:
        Called when the gate resolves to ``REDIRECT`` or after sign-out.
    logger:
        Structured logger instance.
    """

    def __init__(
        self,
        parent: ctk.CTk,
        session: SessionManager,
        auth_service: AuthService,
        admin_service: RegistrationAdminService,
        export_service: RegistrationExportService,
        photo_service: PhotoService,
        on_redirect: Callable[[], None],
        logger: StructuredLogger,
    ) -> None:
        super().__init__(parent, fg_color=CONTENT_BG)
        self._session = session
        self._auth = auth_service
        self._admin = admin_service
        self._export = export_service
        self._photos = photo_service
        self._on_redirect = on_redirect
        self._logger = logger

        self._browser = admin_service.browser
        self._search_job: Optional[str] = None
        self._body: Optional[ctk.CTkFrame] = None

        self._loading_label = ctk.CTkLabel(
            self,
            text="Loading...",
            font=FONT_HEADING,
            text_color=TEXT_SECONDARY,
        )
        self._loading_label.place(relx=0.5, rely=0.5, anchor="center")
        self._toast = Toast(self)

        self._resolve_gate()

    # ==================================================================
    # Gate
    # ==================================================================

    def _resolve_gate(self) -> None:
        """Resolve admin access off-thread; PENDING shows the loader."""
        if self._session.gate_state is GateState.ALLOW:
            self._on_gate_resolved(GateState.ALLOW)
            return

        def _worker() -> None:
            state = self._auth.resolve_admin_access()
            self.after(0, self._on_gate_resolved, state)

        threading.Thread(target=_worker, name="admin-gate", daemon=True).start()

    def _on_gate_resolved(self, state: GateState) -> None:
        if not self.winfo_exists():
            return
        if state is not GateState.ALLOW:
            self._logger.info("Admin gate redirect (state: %s)", state)
            self._on_redirect()
            return
        self._loading_label.place_forget()
        self._build_ui()
        self._fetch()

    # ==================================================================
    # Widget creation
    # ==================================================================

    def _build_ui(self) -> None:
        self._build_header()

        self._body = ctk.CTkFrame(self, fg_color="transparent")
        self._body.pack(fill="both", expand=True, padx=PADDING_LG, pady=PADDING_MD)

        self._stats = StatsCards(self._body)
        self._stats.pack(fill="x", pady=(0, PADDING_MD))

        self._build_toolbar(self._body)

        table = ctk.CTkFrame(self._body, fg_color=CONTENT_CARD_BG, corner_radius=CORNER_RADIUS)
        table.pack(fill="both", expand=True)

        header_row = ctk.CTkFrame(table, fg_color="transparent")
        header_row.pack(fill="x", padx=PADDING_MD, pady=(PADDING_SM, 0))
        self._configure_columns(header_row)
        for column, (title, _) in enumerate(_COLUMNS):
            ctk.CTkLabel(
                header_row,
                text=title,
                font=FONT_LABEL,
                text_color=TEXT_SECONDARY,
                anchor="w",
            ).grid(row=0, column=column, sticky="w")

        self._rows = ctk.CTkScrollableFrame(table, fg_color="transparent")
        self._rows.pack(fill="both", expand=True, padx=PADDING_SM, pady=PADDING_SM)

        self._build_footer(table)

    def _build_header(self) -> None:
        header = ctk.CTkFrame(self, fg_color=HEADER_BG, height=HEADER_HEIGHT, corner_radius=0)
        header.pack(fill="x")
        header.pack_propagate(False)

        ctk.CTkLabel(
            header,
            text="Admin Dashboard",
            font=FONT_HEADING,
            text_color=TEXT_LIGHT,
        ).pack(side="left", padx=PADDING_LG)

        self._signout_button = ctk.CTkButton(
            header,
            text="Sign Out",
            font=FONT_BODY,
            fg_color="transparent",
            border_width=1,
            border_color=HEADER_TEXT,
            text_color=HEADER_TEXT,
            width=90,
            command=self._handle_sign_out,
        )
        self._signout_button.pack(side="right", padx=PADDING_LG)

        user = self._session.current_user
        ctk.CTkLabel(
            header,
            text=user.label if user else "",
            font=FONT_SMALL,
            text_color=HEADER_TEXT,
        ).pack(side="right")

    def _build_toolbar(self, parent: ctk.CTkFrame) -> None:
        toolbar = ctk.CTkFrame(parent, fg_color="transparent")
        toolbar.pack(fill="x", pady=(0, PADDING_SM))

        self._search_entry = ctk.CTkEntry(
            toolbar,
            placeholder_text="Search by name, mobile or email",
            font=FONT_BODY,
            fg_color=INPUT_BG,
            border_color=INPUT_BORDER,
            text_color=TEXT_PRIMARY,
            height=INPUT_HEIGHT,
            width=320,
            corner_radius=CORNER_RADIUS,
        )
        self._search_entry.pack(side="left")
        self._search_entry.bind("<KeyRelease>", self._on_search_changed)

        self._department_var = ctk.StringVar(value=_ALL_LABEL)
        ctk.CTkOptionMenu(
            toolbar,
            values=[_ALL_LABEL, *DEPARTMENTS],
            variable=self._department_var,
            font=FONT_BODY,
            height=INPUT_HEIGHT,
            width=200,
            command=self._on_department_changed,
        ).pack(side="left", padx=(PADDING_SM, 0))

        self._export_button = ctk.CTkButton(
            toolbar,
            text="Export to Excel",
            font=FONT_BUTTON,
            fg_color=ACCENT_PRIMARY,
            hover_color=ACCENT_HOVER,
            text_color=TEXT_LIGHT,
            height=INPUT_HEIGHT,
            command=self._handle_export,
        )
        self._export_button.pack(side="right")

    def _build_footer(self, parent: ctk.CTkFrame) -> None:
        footer = ctk.CTkFrame(parent, fg_color="transparent")
        footer.pack(fill="x", padx=PADDING_MD, pady=(0, PADDING_SM))

        self._showing_label = ctk.CTkLabel(
            footer,
            text="",
            font=FONT_SMALL,
            text_color=TEXT_SECONDARY,
        )
        self._showing_label.pack(side="left")

        self._next_button = self._nav_button(footer, "Next", 1)
        self._next_button.pack(side="right")
        self._page_label = ctk.CTkLabel(
            footer,
            text="",
            font=FONT_SMALL,
            text_color=TEXT_PRIMARY,
        )
        self._page_label.pack(side="right", padx=PADDING_SM)
        self._prev_button = self._nav_button(footer, "Previous", -1)
        self._prev_button.pack(side="right")

    def _nav_button(self, parent: ctk.CTkFrame, text: str, step: int) -> ctk.CTkButton:
        return ctk.CTkButton(
            parent,
            text=text,
            font=FONT_SMALL,
            width=80,
            fg_color=NEUTRAL_BUTTON,
            hover_color=NEUTRAL_HOVER,
            text_color=TEXT_PRIMARY,
            command=lambda: self._go_to(self._browser.page + step),
        )

    @staticmethod
    def _configure_columns(frame: ctk.CTkFrame) -> None:
        for column, (_, weight) in enumerate(_COLUMNS):
            frame.grid_columnconfigure(column, weight=weight, uniform="col")

    # ==================================================================
    # Rendering
    # ==================================================================

    def _render(self) -> None:
        if self._body is None or not self.winfo_exists():
            return
        self._stats.update_stats(self._browser.stats())
        self._render_page(self._browser.current_page())

    def _render_page(self, page: Page) -> None:
        for child in self._rows.winfo_children():
            child.destroy()

        if not page.items:
            ctk.CTkLabel(
                self._rows,
                text="No registrations found",
                font=FONT_BODY,
                text_color=TEXT_SECONDARY,
            ).pack(pady=PADDING_LG)

        for index, record in enumerate(page.items):
            self._render_row(index, record)

        self._showing_label.configure(
            text=f"Showing {page.start_index}-{page.end_index} of {page.total_items}",
        )
        self._page_label.configure(text=f"Page {page.page} of {page.total_pages}")
        self._prev_button.configure(state="normal" if page.has_previous else "disabled")
        self._next_button.configure(state="normal" if page.has_next else "disabled")

    def _render_row(self, index: int, record: Registration) -> None:
        row = ctk.CTkFrame(
            self._rows,
            fg_color=ROW_ALT_BG if index % 2 else "transparent",
            corner_radius=4,
        )
        row.pack(fill="x", pady=1)
        self._configure_columns(row)

        for column, text in enumerate((
            record.full_name,
            record.mobile_number,
            record.email,
            record.department,
            format_table_date(record.created_at),
        )):
            ctk.CTkLabel(
                row,
                text=text,
                font=FONT_SMALL,
                text_color=TEXT_PRIMARY,
                anchor="w",
            ).grid(row=0, column=column, sticky="w", padx=(PADDING_SM, 0), pady=4)

        actions = ctk.CTkFrame(row, fg_color="transparent")
        actions.grid(row=0, column=len(_COLUMNS) - 1, sticky="w")
        for text, colour, handler in (
            ("View", ACCENT_PRIMARY, self._handle_view),
            ("Edit", TEXT_PRIMARY, self._handle_edit),
            ("Delete", DANGER_PRIMARY, self._handle_delete),
        ):
            ctk.CTkButton(
                actions,
                text=text,
                width=56,
                height=26,
                font=FONT_SMALL,
                fg_color=NEUTRAL_BUTTON,
                hover_color=NEUTRAL_HOVER,
                text_color=colour,
                command=lambda rid=record.id, h=handler: h(rid),
            ).pack(side="left", padx=(0, 4))

    # ==================================================================
    # Filters & paging
    # ==================================================================

    def _on_search_changed(self, _event: object = None) -> None:
        if self._search_job is not None:
            self.after_cancel(self._search_job)
        self._search_job = self.after(200, self._apply_search)

    def _apply_search(self) -> None:
        self._search_job = None
        self._browser.set_search(self._search_entry.get())
        self._render()

    def _on_department_changed(self, label: str) -> None:
        self._browser.set_department(ALL_DEPARTMENTS if label == _ALL_LABEL else label)
        self._render()

    def _go_to(self, page: int) -> None:
        self._render_page(self._browser.go_to_page(page))

    # ==================================================================
    # Network actions (worker threads)
    # ==================================================================

    def _run(self, name: str, work: Callable[[], ServiceResult], done: Callable[[ServiceResult], None]) -> None:
        def _worker() -> None:
            try:
                result = work()
            except Exception as exc:
                self._logger.error("%s failed: %s", name, exc)
                result = ServiceResult(success=False, error=str(exc))
            self.after(0, done, result)

        threading.Thread(target=_worker, name=name, daemon=True).start()

    def _fetch(self) -> None:
        self._export_button.configure(state="disabled")

        def _done(result: ServiceResult) -> None:
            if not self.winfo_exists():
                return
            self._export_button.configure(state="normal")
            if not result.success:
                self._toast.error(result.error or "")
            self._render()

        self._run("fetch-registrations", self._admin.fetch_all, _done)

    def _handle_view(self, record_id: str) -> None:
        result = self._admin.view(record_id)
        if not result.success or result.data is None:
            self._toast.error(result.error or "")
            return
        DetailDialog(self, result.data, self._photos, self._logger)

    def _handle_edit(self, record_id: str) -> None:
        result = self._admin.edit_form(record_id)
        if not result.success or result.data is None:
            self._toast.error(result.error or "")
            return
        EditDialog(
            self,
            record_id=record_id,
            initial_values=result.data,
            admin_service=self._admin,
            on_saved=self._on_saved,
            logger=self._logger,
        )

    def _on_saved(self, _record: Registration) -> None:
        self._toast.success(UPDATE_OK)
        self._render()

    def _handle_delete(self, record_id: str) -> None:
        result = self._admin.request_delete(record_id)
        if not result.success or result.data is None:
            self._toast.error(result.error or "")
            return
        ConfirmDialog(
            self,
            title="Delete Registration",
            message=(
                f"Delete the registration for {result.data.full_name}? "
                "This also removes the photo and cannot be undone."
            ),
            confirm_label="Delete",
            on_confirm=self._confirm_delete,
            on_cancel=self._admin.cancel_delete,
        )

    def _confirm_delete(self) -> None:
        def _done(result: ServiceResult) -> None:
            if not self.winfo_exists():
                return
            if result.success:
                self._toast.success(DELETE_OK)
            else:
                self._toast.error(result.error or "")
            self._render()

        self._run("delete-registration", self._admin.confirm_delete, _done)

    def _handle_export(self) -> None:
        destination = filedialog.asksaveasfilename(
            title="Export registrations",
            defaultextension=".xlsx",
            initialfile=self._export.default_filename(),
            filetypes=[("Excel workbook", "*.xlsx")],
        )
        if not destination:
            return

        records = self._browser.records
        self._export_button.configure(state="disabled")

        def _done(result: ServiceResult) -> None:
            if not self.winfo_exists():
                return
            self._export_button.configure(state="normal")
            if result.success:
                self._toast.success(EXPORT_OK)
            else:
                self._toast.error(result.error or "")

        self._run("export-registrations", lambda: self._export.export(records, destination), _done)

    def _handle_sign_out(self) -> None:
        self._signout_button.configure(state="disabled")

        def _worker() -> None:
            self._auth.logout()
            self.after(0, self._on_redirect)

        threading.Thread(target=_worker, name="sign-out", daemon=True).start()

    # ==================================================================
    # Lifecycle
    # ==================================================================

    def destroy(self) -> None:
        """Cancel the pending search debounce before destroying the widget."""
        if self._search_job is not None:
            self.after_cancel(self._search_job)
            self._search_job = None
        super().destroy()
