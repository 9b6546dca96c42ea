"""Notes CRUD endpoints."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Query, status

from app.api.deps import CurrentUserIdDep, OpenAIServiceDep, RetrievalConfigDep, SessionDep
from app.schemas.calendar import CalendarEvent
from app.schemas.note import NoteCreate, NoteListResponse, NoteResponse, NoteUpdate
from app.schemas.template import TemplateCreate, TemplateResponse, TemplateUpdate
from app.services.note_service import NoteService
from app.tasks.embedding_tasks import refresh_note_embedding
from app.utils.exceptions import NotFoundError

router = APIRouter(prefix="/api", tags=["notes"])


@router.get("/notes", response_model=NoteListResponse)
def list_notes(
    session: SessionDep,
    user_id: CurrentUserIdDep,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
    search: str | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
) -> NoteListResponse:
    """
    List the current user's notes, most recently updated first.
    """
    note_service = NoteService(session)
    notes, total = note_service.list_notes(
        user_id,
        skip=skip,
        limit=limit,
        search=search,
        date_from=date_from,
        date_to=date_to,
    )
    return NoteListResponse(
        notes=[NoteResponse.from_note(n) for n in notes],
        total=total,
    )


@router.post("/notes", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
def create_note(
    note_data: NoteCreate,
    session: SessionDep,
    user_id: CurrentUserIdDep,
    background_tasks: BackgroundTasks,
    provider: OpenAIServiceDep,
    config: RetrievalConfigDep,
) -> NoteResponse:
    """
    Create a blank note, or one based on a template.

    The embedding is computed in the background.
    """
    note_service = NoteService(session)
    try:
        note = note_service.create_note(
            user_id,
            title=note_data.title,
            content=note_data.content,
            template_id=note_data.template_id,
        )
    except NotFoundError as e:
        raise e.to_http_exception()

    assert note.id is not None
    background_tasks.add_task(refresh_note_embedding, note.id, provider, config.ai_enabled)
    return NoteResponse.from_note(note)


@router.post(
    "/notes/from-event", response_model=NoteResponse, status_code=status.HTTP_201_CREATED
)
def create_note_from_event(
    event: CalendarEvent,
    session: SessionDep,
    user_id: CurrentUserIdDep,
    background_tasks: BackgroundTasks,
    provider: OpenAIServiceDep,
    config: RetrievalConfigDep,
) -> NoteResponse:
    """
    Create a meeting note from a calendar event.
    """
    note = NoteService(session).create_note_from_event(user_id, event)
    assert note.id is not None
    background_tasks.add_task(refresh_note_embedding, note.id, provider, config.ai_enabled)
    return NoteResponse.from_note(note)


@router.get("/notes/{note_id}", response_model=NoteResponse)
def get_note(note_id: int, session: SessionDep, user_id: CurrentUserIdDep) -> NoteResponse:
    """
    Get a single note by ID.
    """
    try:
        return NoteResponse.from_note(NoteService(session).get_note(note_id, user_id))
    except NotFoundError as e:
        raise e.to_http_exception()


@router.patch("/notes/{note_id}", response_model=NoteResponse)
def update_note(
    note_id: int,
    update_data: NoteUpdate,
    session: SessionDep,
    user_id: CurrentUserIdDep,
    background_tasks: BackgroundTasks,
    provider: OpenAIServiceDep,
    config: RetrievalConfigDep,
) -> NoteResponse:
    """
    Update a note's title or content.

    Any edit invalidates the embedding and schedules its regeneration.
    """
    note_service = NoteService(session)
    try:
        note = note_service.update_note(
            note_id,
            user_id,
            title=update_data.title,
            content=update_data.content,
        )
    except NotFoundError as e:
        raise e.to_http_exception()

    if note.embedding is None:
        background_tasks.add_task(refresh_note_embedding, note_id, provider, config.ai_enabled)
    return NoteResponse.from_note(note)


@router.delete("/notes/{note_id}")
def delete_note(note_id: int, session: SessionDep, user_id: CurrentUserIdDep) -> dict:
    """
    Delete a note.
    """
    try:
        NoteService(session).delete_note(note_id, user_id)
    except NotFoundError as e:
        raise e.to_http_exception()
    return {"success": True}


@router.get("/templates", response_model=list[TemplateResponse])
def list_templates(session: SessionDep, user_id: CurrentUserIdDep) -> list[TemplateResponse]:
    """List the current user's templates."""
    templates = NoteService(session).list_templates(user_id)
    return [TemplateResponse.model_validate(t) for t in templates]


@router.post(
    "/templates", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED
)
def create_template(
    template_data: TemplateCreate, session: SessionDep, user_id: CurrentUserIdDep
) -> TemplateResponse:
    """Create a note template."""
    template = NoteService(session).create_template(
        user_id, template_data.name, template_data.content
    )
    return TemplateResponse.model_validate(template)


@router.patch("/templates/{template_id}", response_model=TemplateResponse)
def update_template(
    template_id: int,
    update_data: TemplateUpdate,
    session: SessionDep,
    user_id: CurrentUserIdDep,
) -> TemplateResponse:
    """Rename a template or replace its content."""
    try:
        template = NoteService(session).update_template(
            template_id, user_id, name=update_data.name, content=update_data.content
        )
    except NotFoundError as e:
        raise e.to_http_exception()
    return TemplateResponse.model_validate(template)


@router.delete("/templates/{template_id}")
def delete_template(template_id: int, session: SessionDep, user_id: CurrentUserIdDep) -> dict:
    """
    Delete a template.

    Notes created from it keep their content.
    """
    try:
        NoteService(session).delete_template(template_id, user_id)
    except NotFoundError as e:
        raise e.to_http_exception()
    return {"success": True}
