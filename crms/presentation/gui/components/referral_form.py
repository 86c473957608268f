"""
Referral Form Component

Candidate details, job title, experience and resume (link or file).
"""

import flet as ft
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

from crms.domain.value_objects import ReferralInput
from ..styles import Theme


def create_referral_form(
    page: ft.Page,
    on_submit: Callable[[dict[str, Any]], Awaitable[bool]],
    upload_dir: Optional[Path] = None,
) -> tuple[ft.Container, dict]:
    """
    Create the referral submission form.

    Features:
    - Required name, email and job title
    - Optional phone, experience and resume link
    - Resume file picker (PDF/DOC/DOCX)

    ``on_submit`` gets the raw field values and returns True when the
    referral was accepted, which resets the form.
    """
    _resume_file: Optional[Path] = None

    name_input = ft.TextField(label="Candidate Name *", border_radius=Theme.RADIUS_MD)
    email_input = ft.TextField(label="Candidate Email *", border_radius=Theme.RADIUS_MD, expand=True)
    phone_input = ft.TextField(label="Phone", border_radius=Theme.RADIUS_MD, expand=True)
    job_dropdown = ft.Dropdown(
        label="Job Title *",
        options=[ft.dropdown.Option(title) for title in ReferralInput.JOB_TITLES],
        border_radius=Theme.RADIUS_MD,
        expand=True,
    )
    experience_dropdown = ft.Dropdown(
        label="Experience (years)",
        options=[ft.dropdown.Option(option) for option in ReferralInput.EXPERIENCE_OPTIONS],
        border_radius=Theme.RADIUS_MD,
        expand=True,
    )
    resume_url_input = ft.TextField(
        label="Resume Link",
        hint_text="https://drive.example.com/resume.pdf",
        border_radius=Theme.RADIUS_MD,
    )
    file_name = ft.Text("No file selected", color=Theme.TEXT_SECONDARY)

    def _on_file_picked(e: ft.FilePickerResultEvent) -> None:
        """Keep the picked file; in the browser it is uploaded first."""
        nonlocal _resume_file

        if not e.files:
            return
        picked = e.files[0]
        _resume_file = None
        file_name.value = picked.name

        if picked.path:
            _resume_file = Path(picked.path)
        elif upload_dir is not None:
            file_name.value = f"Uploading {picked.name}..."
            submit_button.disabled = True
            file_picker.upload([
                ft.FilePickerUploadFile(picked.name, upload_url=page.get_upload_url(picked.name, 600)),
            ])
        page.update()

    def _on_upload(e: ft.FilePickerUploadEvent) -> None:
        """Attach the uploaded copy only once it is complete on disk."""
        nonlocal _resume_file

        if e.error:
            file_name.value = f"Upload failed: {e.error}"
            submit_button.disabled = False
        elif e.progress is not None and e.progress >= 1.0 and upload_dir is not None:
            _resume_file = upload_dir / e.file_name
            file_name.value = e.file_name
            submit_button.disabled = False
        else:
            return
        page.update()

    submit_button = ft.ElevatedButton("Submit Referral", icon=ft.Icons.SEND, style=Theme.button_style("primary"))

    file_picker = ft.FilePicker(on_result=_on_file_picked, on_upload=_on_upload)
    page.overlay.append(file_picker)

    def _reset() -> None:
        nonlocal _resume_file
        for field in (name_input, email_input, phone_input, resume_url_input):
            field.value = ""
        job_dropdown.value = None
        experience_dropdown.value = None
        _resume_file = None
        file_name.value = "No file selected"

    async def _on_submit(e) -> None:
        accepted = await on_submit({
            "name": name_input.value or "",
            "email": email_input.value or "",
            "phone": phone_input.value or "",
            "job_title": job_dropdown.value or "",
            "experience": experience_dropdown.value,
            "resume_url": resume_url_input.value or "",
            "resume_file": _resume_file,
        })
        if accepted:
            _reset()
            container.update()

    submit_button.on_click = _on_submit

    container = ft.Container(
        content=ft.Column([
            ft.Text("Refer a Candidate", size=22, weight=ft.FontWeight.BOLD),
            name_input,
            ft.Row([email_input, phone_input], spacing=Theme.SPACING_SM),
            ft.Row([job_dropdown, experience_dropdown], spacing=Theme.SPACING_SM),
            resume_url_input,
            ft.Row([
                ft.OutlinedButton(
                    "Attach Resume",
                    icon=ft.Icons.UPLOAD_FILE,
                    on_click=lambda e: file_picker.pick_files(
                        allowed_extensions=["pdf", "doc", "docx"],
                        allow_multiple=False,
                    ),
                ),
                file_name,
            ], spacing=Theme.SPACING_SM),
            submit_button,
        ], spacing=Theme.SPACING_MD),
        width=640,
        **Theme.card_style(),
    )

    return container, {"submit": submit_button}
