"""Sample listings written to an empty jobs collection when SEED_SAMPLE_JOBS is on."""
from datetime import datetime, timezone

SAMPLE_JOBS = [
    {
        "id": "1",
        "title": "Senior Software Engineer",
        "company": "Tech Mahindra",
        "location": "Whitefield",
        "salary": "₹18-25 LPA",
        "type": "Full-time",
        "experience": "5+ years",
        "description": (
            "We are looking for a Senior Software Engineer with expertise in Java and Spring Boot. "
            "You will design and develop high-volume, low-latency applications and support "
            "continuous improvement of our platform."
        ),
        "requirements": [
            "5+ years Java experience",
            "Spring Boot expertise",
            "Microservices architecture",
            "REST API design",
        ],
        "benefits": ["Health insurance", "Flexible hours", "Annual bonus", "Learning budget"],
        "applyLink": "https://techmahindra.com/careers",
        "postedBy": "admin",
        "status": "active",
        "applicants": 24,
    },
    {
        "id": "2",
        "title": "Frontend Developer (React)",
        "company": "Infosys",
        "location": "Electronic City",
        "salary": "₹10-15 LPA",
        "type": "Full-time",
        "experience": "2-4 years",
        "description": (
            "Join our frontend team to build user interfaces with React. You will build reusable "
            "components and translate designs and wireframes into high-quality code."
        ),
        "requirements": [
            "2+ years React experience",
            "JavaScript ES6+",
            "Redux/Context API",
            "HTML5/CSS3",
        ],
        "benefits": ["Remote work", "Competitive salary", "Skill development", "Great culture"],
        "applyLink": "https://infosys.com/careers",
        "postedBy": "admin",
        "status": "active",
        "applicants": 18,
    },
]


def sample_job_records() -> list[dict]:
    created_at = datetime.now(timezone.utc).isoformat()
    return [{**job, "createdAt": created_at} for job in SAMPLE_JOBS]
