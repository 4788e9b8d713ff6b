from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..crud.projects import create_project, delete_project, get_project, list_projects, update_project
from ..db.session import get_db
from ..schemas.project import ProjectCreate, ProjectOut, ProjectUpdate

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


def _project_to_schema(project) -> ProjectOut:
    return ProjectOut.model_validate(project, from_attributes=True).model_copy(
        update={"client_name": project.client.name if project.client else None}
    )


@router.get("", response_model=list[ProjectOut])
def api_list_projects(
    client_id: int | None = Query(default=None),
    limit: int = Query(default=200, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
):
    projects = list_projects(db, client_id=client_id, limit=limit, offset=offset)
    return [_project_to_schema(project) for project in projects]


@router.post("", response_model=ProjectOut, status_code=201)
def api_create_project(payload: ProjectCreate, db: Session = Depends(get_db)):
    try:
        project = create_project(db, payload.model_dump(exclude_unset=True))
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _project_to_schema(get_project(db, project.id) or project)


@router.get("/{project_id}", response_model=ProjectOut)
def api_get_project(project_id: int, db: Session = Depends(get_db)):
    project = get_project(db, project_id)
    if not project:
        raise HTTPException(404, "Not found")
    return _project_to_schema(project)


@router.patch("/{project_id}", response_model=ProjectOut)
def api_update_project(project_id: int, payload: ProjectUpdate, db: Session = Depends(get_db)):
    project = get_project(db, project_id)
    if not project:
        raise HTTPException(404, "Not found")
    try:
        updated = update_project(db, project, payload.model_dump(exclude_unset=True))
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _project_to_schema(updated)


@router.delete("/{project_id}")
def api_delete_project(project_id: int, db: Session = Depends(get_db)):
    project = get_project(db, project_id)
    if not project:
        raise HTTPException(404, "Not found")
    delete_project(db, project)
    return {"status": "deleted"}
