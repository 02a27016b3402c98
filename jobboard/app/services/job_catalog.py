import logging
import re
from datetime import datetime, timezone
from uuid import uuid4

from ..database import RecordStore
from ..models.job import Job
from ..utils.error_handlers import NotFoundError, get_error_message
from ..utils.validation import (
    split_lines,
    validate_apply_link,
    validate_job_status,
    validate_required_fields,
    validate_string_field,
)

logger = logging.getLogger(__name__)

JOBS = "jobs"

REQUIRED_JOB_FIELDS = ("title", "company", "location", "salary", "type", "experience", "description")
TEXT_FIELD_LIMITS = {
    "title": 200,
    "company": 200,
    "location": 200,
    "salary": 100,
    "type": 50,
    "experience": 100,
    "description": 20000,
}

# Salary bands offered by the job board filter, in the same unit as the listing (e.g. LPA).
SALARY_BANDS = {
    "0-5": (None, 5),
    "5-10": (5, 10),
    "10-20": (10, 20),
    "20+": (20, None),
}
_SALARY_NUMBER = re.compile(r"(\d+)")


def salary_floor(salary: str | None) -> int | None:
    """First number in a free-text salary such as '₹18-25 LPA' (-> 18)."""
    if not salary:
        return None
    match = _SALARY_NUMBER.search(salary)
    return int(match.group(1)) if match else None


def salary_in_band(salary: str | None, band: str) -> bool:
    if band not in SALARY_BANDS:
        return True
    floor = salary_floor(salary)
    # Listings without a parseable salary are never hidden by the salary filter.
    if floor is None:
        return True
    low, high = SALARY_BANDS[band]
    if low is not None and floor < low:
        return False
    if high is not None and floor > high:
        return False
    return True


class JobCatalog:
    """
    CRUD over the jobs collection.

    Authorization is the caller's job: the API layer only reaches the mutating
    methods after the admin dependency has passed.
    """

    def __init__(self, store: RecordStore):
        self.store = store

    def _all(self) -> list[Job]:
        return [Job.model_validate(record) for record in self.store.load(JOBS)]

    def list_public(
        self,
        *,
        job_type: str | None = None,
        location: str | None = None,
        experience: str | None = None,
        salary: str | None = None,
    ) -> list[Job]:
        """Active jobs in insertion order, optionally narrowed by the board's filters."""
        jobs = [job for job in self._all() if job.is_active]
        if job_type:
            jobs = [job for job in jobs if job.type == job_type]
        if location:
            jobs = [job for job in jobs if job.location == location]
        if experience:
            jobs = [job for job in jobs if experience in job.experience]
        if salary:
            jobs = [job for job in jobs if salary_in_band(job.salary, salary)]
        return jobs

    def list_all(self) -> list[Job]:
        return self._all()

    def get_by_id(self, job_id: str) -> Job:
        for job in self._all():
            if job.id == job_id:
                return job
        raise NotFoundError(get_error_message("job_not_found"))

    def get_public(self, job_id: str) -> Job:
        job = self.get_by_id(job_id)
        if not job.is_active:
            raise NotFoundError(get_error_message("job_not_found"))
        return job

    def create(self, fields: dict, posted_by: str) -> Job:
        validate_required_fields(fields, REQUIRED_JOB_FIELDS)
        cleaned = {
            name: validate_string_field(fields.get(name), name, max_length=limit, required=True)
            for name, limit in TEXT_FIELD_LIMITS.items()
        }

        job = Job(
            id=uuid4().hex,
            **cleaned,
            requirements=split_lines(fields.get("requirements")),
            benefits=split_lines(fields.get("benefits")),
            apply_link=validate_apply_link(fields.get("applyLink")),
            posted_by=posted_by or "admin",
            status="active",
            applicants=0,
            created_at=datetime.now(timezone.utc).isoformat(),
        )

        with self.store.transaction(JOBS) as records:
            records.append(job.to_record())

        logger.info("Created job %s (%s at %s)", job.id, job.title, job.company)
        return job

    def set_status(self, job_id: str, status: str) -> Job:
        status = validate_job_status(status)
        with self.store.transaction(JOBS) as records:
            for record in records:
                if record.get("id") == job_id:
                    record["status"] = status
                    job = Job.model_validate(record)
                    break
            else:
                raise NotFoundError(get_error_message("job_not_found"))

        logger.info("Set job %s status to %s", job_id, status)
        return job

    def delete(self, job_id: str) -> None:
        with self.store.transaction(JOBS) as records:
            remaining = [record for record in records if record.get("id") != job_id]
            if len(remaining) == len(records):
                raise NotFoundError(get_error_message("job_not_found"))
            records[:] = remaining

        logger.info("Deleted job %s", job_id)

    def stats(self) -> dict:
        jobs = self._all()
        active = sum(1 for job in jobs if job.is_active)
        return {
            "totalJobs": len(jobs),
            "activeJobs": active,
            "inactiveJobs": len(jobs) - active,
        }
