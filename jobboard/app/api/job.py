import logging

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field

from ..services.job_catalog import JobCatalog
from ..utils.dependencies import get_catalog
from ..utils.roles import admin_only

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs", tags=["Jobs"])


class JobCreate(BaseModel):
    # Everything optional here; required-field rules live in JobCatalog.create so the
    # error names every missing field at once.
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str | None = None
    company: str | None = None
    location: str | None = None
    salary: str | None = None
    type: str | None = None
    experience: str | None = None
    description: str | None = None
    requirements: str | list[str] | None = None  # newline-separated text or list
    benefits: str | list[str] | None = None
    apply_link: str | None = Field(default=None, alias="applyLink")


class JobStatusUpdate(BaseModel):
    status: str | None = None


@router.get("")
def list_jobs(
    job_type: str | None = Query(default=None, alias="type"),
    location: str | None = None,
    experience: str | None = None,
    salary: str | None = Query(default=None, description="Salary band: 0-5, 5-10, 10-20 or 20+"),
    catalog: JobCatalog = Depends(get_catalog),
):
    jobs = catalog.list_public(
        job_type=job_type,
        location=location,
        experience=experience,
        salary=salary,
    )
    return {"success": True, "jobs": [job.to_record() for job in jobs]}


@router.get("/{job_id}")
def get_job(job_id: str, catalog: JobCatalog = Depends(get_catalog)):
    job = catalog.get_public(job_id)
    return {"success": True, "job": job.to_record()}


@router.post("", status_code=201)
def create_job(
    payload: JobCreate,
    user=Depends(admin_only),
    catalog: JobCatalog = Depends(get_catalog),
):
    job = catalog.create(payload.model_dump(by_alias=True), posted_by=user.get("sub"))
    return {
        "success": True,
        "message": "Job posted successfully",
        "job": job.to_record(),
    }


@router.patch("/{job_id}/status")
def update_job_status(
    job_id: str,
    payload: JobStatusUpdate,
    user=Depends(admin_only),
    catalog: JobCatalog = Depends(get_catalog),
):
    job = catalog.set_status(job_id, payload.status)
    return {
        "success": True,
        "message": "Job status updated",
        "job": job.to_record(),
    }


@router.delete("/{job_id}")
def delete_job(
    job_id: str,
    user=Depends(admin_only),
    catalog: JobCatalog = Depends(get_catalog),
):
    catalog.delete(job_id)
    return {"success": True, "message": "Job deleted successfully"}
