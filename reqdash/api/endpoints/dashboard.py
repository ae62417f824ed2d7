# api/endpoints/dashboard.py

from fastapi import APIRouter, Depends, HTTPException, Response, status
from typing import List
from reqdash.schemas.dashboard import DashboardSnapshot
from reqdash.schemas.project import ProjectRead
from reqdash.schemas.query import PageSelection, ProjectSelection, SearchUpdate
from reqdash.services.dashboard import DashboardSession
from reqdash.services.fetch_orchestrator import PROJECTS_ERROR
from reqdash.session import get_dashboard

router = APIRouter()

@router.get("/", response_model=DashboardSnapshot)
def read_dashboard(dashboard: DashboardSession = Depends(get_dashboard)):
    return dashboard.snapshot()

@router.get("/projects", response_model=List[ProjectRead])
async def load_projects(dashboard: DashboardSession = Depends(get_dashboard)):
    projects = await dashboard.load_projects()
    if projects is None:
        raise HTTPException(status_code=502, detail=PROJECTS_ERROR)
    return projects

@router.put("/project", response_model=DashboardSnapshot)
async def select_project(
    selection: ProjectSelection,
    dashboard: DashboardSession = Depends(get_dashboard),
):
    dashboard.select_project(selection.project_id)
    await dashboard.settle()
    return dashboard.snapshot()

@router.put("/search", response_model=DashboardSnapshot)
async def set_search(
    update: SearchUpdate,
    dashboard: DashboardSession = Depends(get_dashboard),
):
    dashboard.set_search(update.text)
    await dashboard.settle()
    return dashboard.snapshot()

@router.post("/filters/{category}/{value}", response_model=DashboardSnapshot)
async def toggle_filter(
    category: str,
    value: str,
    dashboard: DashboardSession = Depends(get_dashboard),
):
    try:
        dashboard.toggle_filter(category, value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    await dashboard.settle()
    return dashboard.snapshot()

@router.put("/page", response_model=DashboardSnapshot)
async def go_to_page(
    selection: PageSelection,
    dashboard: DashboardSession = Depends(get_dashboard),
):
    try:
        dashboard.go_to_page(selection.page)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    await dashboard.settle()
    return dashboard.snapshot()

@router.get("/export")
def export_csv(dashboard: DashboardSession = Depends(get_dashboard)):
    document = dashboard.export()
    if document is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return Response(
        content=document.content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
    )
