"""Video upload form handler."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Union

from ...clients import APIError, UnauthorizedError, VidshareAPIClient
from ...constants import LOGIN_PATH, MAX_TITLE_LENGTH, VISIBILITY_CHOICES
from ...schemas import Video
from ...services import SessionManager
from .base import PageState, gate, superseded

logger = logging.getLogger(__name__)

UploadFile = Union[bytes, str, Path, BinaryIO]


@dataclass(slots=True)
class UploadForm:
    title: str = ""
    file: UploadFile | None = None
    filename: str | None = None
    recipe: str = ""
    visibility: str = "public"

    def validate(self) -> str | None:
        """Return the first validation message, or ``None`` when the form is complete."""

        if self.file is None:
            return "Please select a video file"
        if not self.title.strip():
            return "Title is required"
        if len(self.title.strip()) > MAX_TITLE_LENGTH:
            return f"Title must be at most {MAX_TITLE_LENGTH} characters"
        if self.visibility not in VISIBILITY_CHOICES:
            return "Visibility must be public or private"
        return None


async def submit_upload(session: SessionManager, api: VidshareAPIClient, form: UploadForm) -> PageState[Video]:
    blocked = gate(session)
    if blocked is not None:
        return blocked

    problem = form.validate()
    if problem:
        return PageState.failed(problem)

    generation = session.generation
    try:
        video = await api.upload_video(
            title=form.title.strip(),
            file=form.file,
            filename=form.filename,
            recipe=form.recipe.strip() or None,
            visibility=form.visibility,
        )
    except UnauthorizedError:
        if session.generation != generation:
            return superseded(session)
        session.revoke("server rejected credential")
        return PageState.redirect(LOGIN_PATH)
    except APIError as exc:
        return PageState.failed(exc.detail or "Failed to upload video")
    except OSError:
        logger.warning("Could not read upload source %r", form.filename or form.file)
        return PageState.failed("Unable to read the selected file")

    logger.info("Uploaded video %s", video.id)
    state: PageState[Video] = PageState.redirect(f"/videos/{video.id}")
    state.data = video
    return state


__all__ = ["UploadForm", "submit_upload"]
