"""Job search across public job-board APIs.

Each source returns a list of ``ScrapedJob`` records in its own way; the
adapter merges them, normalizes them into ``JobListing`` and removes
duplicates. A failing source contributes nothing and never aborts the
search.
"""
import asyncio
import random
import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable, Dict, List, Optional, Sequence

from clawdjob.core.config import get_settings
from clawdjob.core.logging import setup_logging
from clawdjob.core.schemas import JobListing, JobPlatform, new_id, utcnow
from clawdjob.core.web_scraper import WebScraper, html_to_text

logger = setup_logging('job_sources')

REMOTEOK_URL = 'https://remoteok.com/api'
ARBEITNOW_URL = 'https://www.arbeitnow.com/api/job-board-api'
AUTHENTIC_JOBS_URL = 'https://authenticjobs.com/api/'

MAX_DESCRIPTION_LENGTH = 2000
MAX_REQUIREMENTS = 5

ASSISTANT_TITLE_WORDS = ('assistant', 'support', 'coordinator', 'admin')

REQUIREMENT_KEYWORDS = (
    'required', 'must have', 'experience', 'skills', 'proficient',
    'knowledge of', 'familiar with', 'ability to', 'years of',
)

MOCK_COMPANIES = [
    'TechCorp Solutions', 'Digital Ventures', 'CloudNine Systems', 'InnovateTech',
    'DataFlow Inc', 'RemoteFirst Co', 'Agile Dynamics', 'ByteWise',
    'Quantum Labs', 'NexGen Digital', 'Pixel Perfect', 'CodeCraft',
]

MOCK_TITLES = [
    'Remote Technical Assistant',
    'Virtual Assistant - Tech Support',
    'AI Operations Assistant',
    'Digital Administrative Assistant',
    'Remote Research Assistant',
    'Technical Support Coordinator',
    'Executive Virtual Assistant',
    'Data Entry & Admin Assistant',
]

MOCK_REQUIREMENTS = [
    'Excellent written and verbal communication',
    '2+ years of experience in similar role',
    'Proficiency with Google Workspace or Microsoft 365',
    'Strong organizational skills',
    'Ability to work independently',
]


@dataclass
class ScrapedJob:
    """A job as reported by one source, before normalization."""
    title: str
    company: str
    location: str
    description: str
    url: str
    platform: JobPlatform = JobPlatform.OTHER
    salary: Optional[str] = None


def _text(value: Any, default: str = '') -> str:
    if value is None:
        return default
    return str(value).strip() or default


def _salary(entry: Dict[str, Any]) -> Optional[str]:
    if entry.get('salary'):
        return _text(entry['salary'])
    low, high = entry.get('salary_min'), entry.get('salary_max')
    if isinstance(low, int) and isinstance(high, int) and low and high:
        return f"${low:,} - ${high:,}/year"
    return None


def search_remoteok(scraper: WebScraper) -> List[ScrapedJob]:
    """Assistant and support roles from RemoteOK's public feed."""
    data = scraper.get_json(REMOTEOK_URL)
    if not isinstance(data, list):
        return []

    jobs = []
    for entry in data:
        if not isinstance(entry, dict) or not entry.get('position'):
            continue
        title = entry['position'].lower()
        if not any(word in title for word in ASSISTANT_TITLE_WORDS):
            continue
        jobs.append(ScrapedJob(
            title=_text(entry['position']),
            company=_text(entry.get('company'), 'Unknown Company'),
            location=_text(entry.get('location'), 'Remote'),
            description=html_to_text(entry.get('description') or ''),
            url=entry.get('url') or f"https://remoteok.com/remote-jobs/{entry.get('slug', '')}",
            platform=JobPlatform.REMOTEOK,
            salary=_salary(entry),
        ))
        if len(jobs) >= 10:
            break
    return jobs


def search_arbeitnow(scraper: WebScraper) -> List[ScrapedJob]:
    """Remote assistant roles from the Arbeitnow job board API."""
    data = scraper.get_json(ARBEITNOW_URL, params={'search': 'assistant', 'remote': 'true'})
    if not isinstance(data, dict):
        return []

    jobs = []
    for entry in (data.get('data') or [])[:10]:
        if not entry.get('title') or not entry.get('url'):
            continue
        jobs.append(ScrapedJob(
            title=_text(entry['title']),
            company=_text(entry.get('company_name'), 'Unknown Company'),
            location=_text(entry.get('location'), 'Remote'),
            description=html_to_text(entry.get('description') or ''),
            url=entry['url'],
        ))
    return jobs


def search_authentic_jobs(scraper: WebScraper) -> List[ScrapedJob]:
    """Listings from the Authentic Jobs API."""
    data = scraper.get_json(
        AUTHENTIC_JOBS_URL,
        params={'api_key': 'free', 'format': 'json', 'type': 6},
    )
    if not isinstance(data, dict):
        return []

    listings = (data.get('listings') or {}).get('listing') or []
    jobs = []
    for entry in listings[:5]:
        company = entry.get('company')
        if isinstance(company, dict):
            company_name = company.get('name')
            location = company.get('location') or entry.get('location')
        else:
            company_name = company
            location = entry.get('location')
        if isinstance(location, dict):
            location = location.get('name')

        if not entry.get('title') or not entry.get('url'):
            continue
        jobs.append(ScrapedJob(
            title=_text(entry['title']),
            company=_text(company_name, 'Unknown Company'),
            location=_text(location, 'Remote'),
            description=html_to_text(entry.get('description') or ''),
            url=entry['url'],
        ))
    return jobs


DEFAULT_SOURCES: Sequence[Callable[[WebScraper], List[ScrapedJob]]] = (
    search_remoteok,
    search_arbeitnow,
    search_authentic_jobs,
)


def extract_requirements(description: str) -> List[str]:
    """Pick up to five requirement-like sentences from a job description."""
    requirements = []
    for line in re.split(r'[.\n]', description):
        lower = line.lower()
        if any(keyword in lower for keyword in REQUIREMENT_KEYWORDS) and 20 < len(line) < 200:
            requirements.append(line.strip())
    return requirements[:MAX_REQUIREMENTS]


def to_job_listing(scraped: ScrapedJob) -> JobListing:
    """Normalize a scraped job into the common record."""
    now = utcnow()
    return JobListing(
        id=new_id('job'),
        title=scraped.title,
        company=scraped.company,
        location=scraped.location,
        salary=scraped.salary,
        description=scraped.description[:MAX_DESCRIPTION_LENGTH],
        requirements=extract_requirements(scraped.description),
        platform=scraped.platform,
        url=scraped.url,
        posted_at=now,
        discovered_at=now,
    )


def deduplicate(jobs: Sequence[ScrapedJob]) -> List[ScrapedJob]:
    """Keep the first job for each case-insensitive (title, company) pair."""
    seen = set()
    unique = []
    for job in jobs:
        key = (job.title.lower(), job.company.lower())
        if key not in seen:
            seen.add(key)
            unique.append(job)
    return unique


def _run_source(
    source: Callable[[WebScraper], List[ScrapedJob]],
    scraper: Optional[WebScraper],
) -> List[ScrapedJob]:
    """Run one source, on its own session unless ``scraper`` is given."""
    if scraper is not None:
        return source(scraper)

    # requests sessions are not thread-safe; one per worker thread
    own_scraper = WebScraper(timeout=get_settings().http_timeout)
    try:
        return source(own_scraper)
    finally:
        own_scraper.close()


async def search_jobs(
    sources: Optional[Sequence[Callable[[WebScraper], List[ScrapedJob]]]] = None,
    scraper: Optional[WebScraper] = None,
) -> List[JobListing]:
    """Search every source concurrently and merge the results.

    Never raises: a source that errors contributes zero jobs. The result
    may be empty. A caller-supplied ``scraper`` is shared by all sources
    and must tolerate concurrent use.
    """
    sources = DEFAULT_SOURCES if sources is None else sources

    logger.info("Starting job search across platforms...")
    results = await asyncio.gather(
        *(asyncio.to_thread(_run_source, source, scraper) for source in sources),
        return_exceptions=True,
    )
    collected: List[ScrapedJob] = []
    for source, result in zip(sources, results):
        if isinstance(result, BaseException):
            logger.error(f"Source {source.__name__} failed: {str(result)}")
            continue
        collected.extend(result)

    logger.info(f"Found {len(collected)} jobs total")
    return [to_job_listing(job) for job in deduplicate(collected)]


def generate_mock_jobs(count: int = 5) -> List[JobListing]:
    """Synthetic listings used when no live source returns anything."""
    now = utcnow()
    jobs = []
    for i in range(count):
        company = random.choice(MOCK_COMPANIES)
        title = random.choice(MOCK_TITLES)
        low = 40 + random.randrange(30)
        high = 70 + random.randrange(30)

        jobs.append(JobListing(
            id=f"mock-{int(now.timestamp() * 1000)}-{i}",
            title=title,
            company=company,
            location='Remote',
            salary=f"${low}k - ${high}k/year",
            description=(
                f"We are looking for a {title} to join our growing team at {company}. "
                "This is a fully remote position with flexible hours. The ideal candidate "
                "will have excellent communication skills, attention to detail, and "
                "experience with modern productivity tools."
            ),
            requirements=list(MOCK_REQUIREMENTS),
            platform=JobPlatform.OTHER,
            url=f"https://example.com/jobs/{i}",
            posted_at=now - timedelta(seconds=random.random() * 7 * 24 * 60 * 60),
            discovered_at=now,
        ))
    return jobs
