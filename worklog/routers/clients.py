from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..crud.clients import create_client, delete_client, get_client, list_clients, update_client
from ..db.session import get_db
from ..schemas.client import ClientCreate, ClientOut, ClientUpdate

router = APIRouter(prefix="/api/v1/clients", tags=["clients"])


@router.get("", response_model=list[ClientOut])
def api_list_clients(
    search: str | None = Query(default=None),
    limit: int = Query(default=200, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
):
    return list_clients(db, search=search, limit=limit, offset=offset)


@router.post("", response_model=ClientOut, status_code=201)
def api_create_client(payload: ClientCreate, db: Session = Depends(get_db)):
    try:
        return create_client(db, payload.model_dump(exclude_unset=True))
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.get("/{client_id}", response_model=ClientOut)
def api_get_client(client_id: int, db: Session = Depends(get_db)):
    client = get_client(db, client_id)
    if not client:
        raise HTTPException(404, "Not found")
    return client


@router.patch("/{client_id}", response_model=ClientOut)
def api_update_client(client_id: int, payload: ClientUpdate, db: Session = Depends(get_db)):
    client = get_client(db, client_id)
    if not client:
        raise HTTPException(404, "Not found")
    try:
        return update_client(db, client, payload.model_dump(exclude_unset=True))
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.delete("/{client_id}")
def api_delete_client(client_id: int, db: Session = Depends(get_db)):
    client = get_client(db, client_id)
    if not client:
        raise HTTPException(404, "Not found")
    delete_client(db, client)
    return {"status": "deleted"}
