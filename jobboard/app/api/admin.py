from fastapi import APIRouter, Depends

from ..services.job_catalog import JobCatalog
from ..utils.dependencies import get_catalog
from ..utils.roles import admin_only

router = APIRouter(prefix="/api/admin", tags=["Admin"], dependencies=[Depends(admin_only)])


@router.get("/jobs")
def list_all_jobs(catalog: JobCatalog = Depends(get_catalog)):
    """Every job, active or not."""
    return {"success": True, "jobs": [job.to_record() for job in catalog.list_all()]}


@router.get("/stats")
def dashboard_stats(catalog: JobCatalog = Depends(get_catalog)):
    return {"success": True, "stats": catalog.stats()}
