"""Note service for CRUD operations."""

import logging
from datetime import datetime

from sqlalchemy import or_
from sqlmodel import Session, func, select

from app.models.note import Note
from app.models.template import Template
from app.schemas.calendar import CalendarEvent, EventAttendee
from app.utils.datetime import local_now, to_storage, utc_now
from app.utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled Note"


def format_attendees(attendees: list[EventAttendee]) -> str:
    """Comma separated attendee names, falling back to email."""
    if not attendees:
        return "No attendees"
    return ", ".join(a.display_name or a.email for a in attendees)


def _dated(body: str) -> str:
    return f"{local_now().strftime('%Y-%m-%d')}\n\n{body}"


class NoteService:
    """Service for note CRUD operations."""

    def __init__(self, session: Session):
        """
        Initialize the note service.

        Args:
            session: Database session
        """
        self.session = session

    def create_note(
        self,
        user_id: int,
        title: str | None = None,
        content: str | None = None,
        template_id: int | None = None,
    ) -> Note:
        """
        Create a new note, optionally from a template.

        Blank notes and template notes get today's date at the top of the
        content. Explicit title/content override the template's.

        Args:
            user_id: Owner user ID
            title: Optional title
            content: Optional initial content
            template_id: Optional template to copy from

        Returns:
            Created Note instance

        Raises:
            NotFoundError: If the template does not exist for this user
        """
        template = None
        if template_id is not None:
            template = self.session.get(Template, template_id)
            if not template or template.user_id != user_id:
                raise NotFoundError("Template")

        if content is None:
            content = _dated(template.content if template else "")

        note = Note(
            user_id=user_id,
            title=title or (template.name if template else DEFAULT_TITLE),
            content=content,
            template_id=template.id if template else None,
        )
        self.session.add(note)
        self.session.commit()
        self.session.refresh(note)
        return note

    def create_note_from_event(self, user_id: int, event: CalendarEvent) -> Note:
        """
        Create a meeting note pre-filled from a calendar event.

        Args:
            user_id: Owner user ID
            event: Calendar event payload

        Returns:
            Created Note instance
        """
        start = event.start.date_time
        end = event.end.date_time
        lines = [
            f"Meeting: {event.summary}",
            f"Time: {start.strftime('%Y-%m-%d %H:%M')} - {end.strftime('%H:%M')}",
            f"Attendees: {format_attendees(event.attendees)}",
        ]
        if event.description:
            lines.extend(["", event.description])
        lines.extend(["", "Notes:", ""])

        return self.create_note(user_id, title=event.summary, content="\n".join(lines))

    def get_note(self, note_id: int, user_id: int) -> Note:
        """
        Get a single note by ID, ensuring user ownership.

        Args:
            note_id: Note ID to fetch
            user_id: Owner user ID for verification

        Returns:
            Note instance

        Raises:
            NotFoundError: If note not found or doesn't belong to user
        """
        note = self.session.get(Note, note_id)
        if not note or note.user_id != user_id:
            raise NotFoundError("Note")
        return note

    def list_notes(
        self,
        user_id: int,
        skip: int = 0,
        limit: int = 50,
        search: str | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> tuple[list[Note], int]:
        """
        List notes for a user, most recently updated first.

        Args:
            user_id: Owner user ID
            skip: Number of records to skip
            limit: Maximum records to return
            search: Case-insensitive substring of title or content
            date_from: Inclusive lower bound on updated_at
            date_to: Inclusive upper bound on updated_at

        Returns:
            Tuple of (notes list, total count)
        """
        conditions: list = [Note.user_id == user_id]

        if search:
            search_term = f"%{search}%"
            conditions.append(
                or_(
                    Note.title.ilike(search_term),  # type: ignore[attr-defined]
                    Note.content.ilike(search_term),  # type: ignore[attr-defined]
                )
            )

        if date_from:
            conditions.append(Note.updated_at >= to_storage(date_from))

        if date_to:
            conditions.append(Note.updated_at <= to_storage(date_to))

        count_statement = select(func.count()).select_from(Note).where(*conditions)
        total = self.session.exec(count_statement).one()

        statement = (
            select(Note)
            .where(*conditions)
            .order_by(Note.updated_at.desc())  # type: ignore[attr-defined]
            .offset(skip)
            .limit(limit)
        )
        notes = list(self.session.exec(statement).all())
        return notes, total

    def update_note(
        self,
        note_id: int,
        user_id: int,
        title: str | None = None,
        content: str | None = None,
    ) -> Note:
        """
        Update a note's title or content.

        Any change clears the stored embedding; the caller schedules its
        regeneration.

        Args:
            note_id: Note ID to update
            user_id: Owner user ID for verification
            title: Optional new title
            content: Optional new content

        Returns:
            Updated Note instance

        Raises:
            NotFoundError: If note not found or doesn't belong to user
        """
        note = self.get_note(note_id, user_id)

        changed = False
        if title is not None and title != note.title:
            note.title = title
            changed = True

        if content is not None and content != note.content:
            note.content = content
            changed = True

        if changed:
            note.embedding = None
            note.updated_at = utc_now()
            self.session.add(note)
            self.session.commit()
            self.session.refresh(note)
        return note

    def delete_note(self, note_id: int, user_id: int) -> bool:
        """
        Delete a note.

        Args:
            note_id: Note ID to delete
            user_id: Owner user ID for verification

        Returns:
            True if deleted

        Raises:
            NotFoundError: If note not found or doesn't belong to user
        """
        note = self.get_note(note_id, user_id)
        self.session.delete(note)
        self.session.commit()
        logger.info(f"Deleted note {note_id} for user {user_id}")
        return True

    def list_templates(self, user_id: int) -> list[Template]:
        """Templates owned by the user, alphabetical."""
        statement = (
            select(Template)
            .where(Template.user_id == user_id)
            .order_by(Template.name)
        )
        return list(self.session.exec(statement).all())

    def create_template(self, user_id: int, name: str, content: str = "") -> Template:
        """Create a reusable note template."""
        template = Template(user_id=user_id, name=name, content=content)
        self.session.add(template)
        self.session.commit()
        self.session.refresh(template)
        return template

    def get_template(self, template_id: int, user_id: int) -> Template:
        """
        Get a template by ID, ensuring user ownership.

        Raises:
            NotFoundError: If template not found or doesn't belong to user
        """
        template = self.session.get(Template, template_id)
        if not template or template.user_id != user_id:
            raise NotFoundError("Template")
        return template

    def update_template(
        self,
        template_id: int,
        user_id: int,
        name: str | None = None,
        content: str | None = None,
    ) -> Template:
        """
        Rename a template or replace its content.

        Notes already created from it are not touched.

        Raises:
            NotFoundError: If template not found or doesn't belong to user
        """
        template = self.get_template(template_id, user_id)

        if name is not None:
            template.name = name
        if content is not None:
            template.content = content

        template.updated_at = utc_now()
        self.session.add(template)
        self.session.commit()
        self.session.refresh(template)
        return template

    def delete_template(self, template_id: int, user_id: int) -> bool:
        """
        Delete a template, detaching the notes created from it.

        Raises:
            NotFoundError: If template not found or doesn't belong to user
        """
        template = self.get_template(template_id, user_id)

        notes = self.session.exec(select(Note).where(Note.template_id == template_id)).all()
        for note in notes:
            note.template_id = None
            self.session.add(note)

        self.session.delete(template)
        self.session.commit()
        logger.info(f"Deleted template {template_id} for user {user_id}")
        return True
