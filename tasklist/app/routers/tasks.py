"""Task API and HTML routers for the todo application."""

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from tasklist.app.deps import get_task_orchestrator
from tasklist.app.schemas import ActionResponse, IndexContext, TaskListResponse, TodoForm
from tasklist.app.services.orchestrator import Outcome, TaskOrchestrator
from tasklist.app.web.flash import clear_flash, read_flash, set_flash
from tasklist.app.web.templates import get_templates
from tasklist.ports.task_store import StoreResult

pages_router = APIRouter()
api_router = APIRouter(prefix="/api", tags=["tasks"])
templates = get_templates()


def _render_index(request: Request, context: IndexContext) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "index.html",
        {"msg": context.msg, "tasks": context.tasks},
    )


def _redirect_home(outcome: Outcome) -> RedirectResponse:
    response = RedirectResponse(url="/", status_code=303)
    if outcome.message:
        set_flash(response, outcome.flash_name, outcome.message)
    return response


def _redirect_or_render(request: Request, outcome: Outcome) -> Response:
    if outcome.context is not None:
        response = _render_index(request, outcome.context)
        # The error replaces any pending message; it must not resurface later
        if read_flash(request) is not None:
            clear_flash(response)
        return response
    return _redirect_home(outcome)


@pages_router.get("/", response_class=HTMLResponse)
def index(request: Request, orchestrator: TaskOrchestrator = Depends(get_task_orchestrator)):
    """Render the task list, consuming any pending flash message."""

    flash = read_flash(request)
    response = _render_index(request, orchestrator.index(flash))
    if flash is not None:
        clear_flash(response)
    return response


@pages_router.post("/todo")
def new(
    description: str = Form(default=""),
    orchestrator: TaskOrchestrator = Depends(get_task_orchestrator),
):
    # Every create outcome, including failures, goes back through a redirect
    return _redirect_home(orchestrator.create(TodoForm(description=description)))


@pages_router.put("/todo/{task_id}")
def toggle(
    request: Request,
    task_id: int,
    orchestrator: TaskOrchestrator = Depends(get_task_orchestrator),
):
    return _redirect_or_render(request, orchestrator.toggle(task_id))


@pages_router.delete("/todo/{task_id}")
def delete(
    request: Request,
    task_id: int,
    orchestrator: TaskOrchestrator = Depends(get_task_orchestrator),
):
    return _redirect_or_render(request, orchestrator.delete(task_id))


@pages_router.post("/todo/{task_id}")
def method_override(
    request: Request,
    task_id: int,
    method: str = Form(default="", alias="_method"),
    orchestrator: TaskOrchestrator = Depends(get_task_orchestrator),
):
    """HTML forms can only POST; dispatch on the hidden ``_method`` field."""

    verb = method.strip().lower()
    if verb == "put":
        return _redirect_or_render(request, orchestrator.toggle(task_id))
    if verb == "delete":
        return _redirect_or_render(request, orchestrator.delete(task_id))
    raise HTTPException(status_code=405, detail="Method Not Allowed")


def _raise_for_outcome(outcome: Outcome) -> None:
    if outcome.ok:
        return
    if outcome.result is None:
        raise HTTPException(status_code=400, detail=outcome.message)
    if outcome.result is StoreResult.NOT_FOUND:
        raise HTTPException(status_code=404, detail=outcome.message)
    raise HTTPException(status_code=500, detail=outcome.message)


@api_router.get("/tasks", response_model=TaskListResponse)
def list_tasks(orchestrator: TaskOrchestrator = Depends(get_task_orchestrator)):
    """List every task, newest first."""

    items = orchestrator.list_tasks()
    return TaskListResponse(items=items, total=len(items))


@api_router.post("/tasks", response_model=ActionResponse, status_code=201)
def create_task(payload: TodoForm, orchestrator: TaskOrchestrator = Depends(get_task_orchestrator)):
    outcome = orchestrator.create(payload)
    _raise_for_outcome(outcome)
    return ActionResponse(ok=True, message=outcome.message)


@api_router.put("/tasks/{task_id}/toggle", response_model=ActionResponse)
def toggle_task(task_id: int, orchestrator: TaskOrchestrator = Depends(get_task_orchestrator)):
    outcome = orchestrator.toggle(task_id)
    _raise_for_outcome(outcome)
    return ActionResponse(ok=True, message=outcome.message)


@api_router.delete("/tasks/{task_id}", response_model=ActionResponse)
def delete_task(task_id: int, orchestrator: TaskOrchestrator = Depends(get_task_orchestrator)):
    outcome = orchestrator.delete(task_id)
    _raise_for_outcome(outcome)
    return ActionResponse(ok=True, message=outcome.message)


__all__ = ["api_router", "pages_router"]
