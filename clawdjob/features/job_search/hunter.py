"""The hunt cycle: search, score, apply.

One cycle walks the agent through ``searching -> applying -> waiting``
(or back to ``idle`` when nothing new turned up) and records every step
in the activity log. Only one cycle runs at a time per process; a call
made while another is in flight returns a skipped result immediately.
"""
import asyncio
import threading
from typing import Any, Awaitable, Callable, Dict, List, Optional

from clawdjob.core.config import get_settings
from clawdjob.core.logging import setup_logging
from clawdjob.core.schemas import (
    ActivityLog,
    ActivityType,
    Agent,
    AgentStatus,
    Application,
    ApplicationStatus,
    HuntResult,
    JobListing,
)
from clawdjob.core.storage import Storage, get_storage
from clawdjob.features.job_search.analysis import JobAnalyzer, get_job_analyzer
from clawdjob.features.job_search.sources import generate_mock_jobs, search_jobs

logger = setup_logging('job_hunter')

JobSearch = Callable[[], Awaitable[List[JobListing]]]


class HuntGuard:
    """Single-flight guard for hunt cycles within one process.

    It does not exclude cycles running in other processes against the
    same store.
    """

    def __init__(self):
        self._lock = threading.Lock()

    def acquire(self) -> bool:
        """Claim the guard; False if a cycle is already running."""
        return self._lock.acquire(blocking=False)

    def release(self) -> None:
        self._lock.release()

    @property
    def running(self) -> bool:
        return self._lock.locked()


hunt_guard = HuntGuard()


class JobHunter:
    """Runs hunt cycles for one agent against one store."""

    def __init__(
        self,
        storage: Storage,
        analyzer: JobAnalyzer,
        search: Optional[JobSearch] = None,
        guard: Optional[HuntGuard] = None,
        delay_seconds: float = 1.0,
        max_applications: int = 3,
        mock_job_count: int = 5,
    ):
        self.storage = storage
        self.analyzer = analyzer
        self.search = search or search_jobs
        self.guard = guard or hunt_guard
        self.delay_seconds = delay_seconds
        self.max_applications = max_applications
        self.mock_job_count = mock_job_count

    @property
    def agent(self) -> Agent:
        return self.analyzer.agent

    def _log(
        self,
        activity_type: ActivityType,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> ActivityLog:
        logger.info(message)
        return self.storage.add_activity_log(ActivityLog(
            agent_id=self.agent.id,
            type=activity_type,
            message=message,
            details=details,
        ))

    async def _find_jobs(self, cycle_logs: List[ActivityLog]) -> List[JobListing]:
        try:
            jobs = await self.search()
            if not jobs:
                jobs = generate_mock_jobs(self.mock_job_count)
                cycle_logs.append(self._log(
                    ActivityType.THINKING, 'No live jobs found, using demo data for testing'
                ))
        except Exception as e:
            logger.error(f"Error fetching jobs: {str(e)}")
            jobs = generate_mock_jobs(self.mock_job_count)
            cycle_logs.append(self._log(ActivityType.ERROR, 'Error fetching jobs, using demo data'))
        return jobs

    async def create_application(self, job: JobListing) -> Application:
        """Write a cover letter for ``job`` and store an ``applied`` application."""
        self._log(
            ActivityType.APPLICATION_STARTED,
            f"Starting application for {job.title} at {job.company}",
        )

        self._log(ActivityType.COVER_LETTER_GENERATED, 'Generating personalized cover letter...')
        cover_letter = await self.analyzer.generate_cover_letter(job)

        application = Application(
            agent_id=self.agent.id,
            job_id=job.id,
            job=job,
            status=ApplicationStatus.APPLIED,
            cover_letter=cover_letter,
        )
        self.storage.save_application(application)

        self._log(
            ActivityType.APPLICATION_SUBMITTED,
            f"Application submitted for {job.title} at {job.company}",
            {'applicationId': application.id, 'jobId': job.id},
        )
        return application

    async def run_cycle(self) -> HuntResult:
        """Run one hunt cycle unless another one is already in flight."""
        if not self.guard.acquire():
            logger.info("Hunt cycle already running, skipping")
            return HuntResult(skipped=True)

        try:
            return await self._run_cycle()
        except Exception as e:
            logger.error(f"Hunt cycle failed: {str(e)}")
            self._reset_state()
            raise
        finally:
            self.guard.release()

    def _reset_state(self) -> None:
        """Put the agent back to idle after an aborted cycle."""
        try:
            self.storage.set_agent_state(status=AgentStatus.IDLE, current_task=None)
        except Exception as e:
            logger.error(f"Error resetting agent state: {str(e)}")

    async def _run_cycle(self) -> HuntResult:
        cycle_logs: List[ActivityLog] = []

        self.storage.set_agent_state(
            status=AgentStatus.SEARCHING, current_task='Searching for new job listings...'
        )
        cycle_logs.append(self._log(ActivityType.SEARCH_STARTED, 'Starting new job search cycle...'))

        jobs = await self._find_jobs(cycle_logs)
        cycle_logs.append(self._log(ActivityType.JOB_FOUND, f"Found {len(jobs)} potential job listings"))

        applied_urls = {app.job.url for app in self.storage.get_applications()}
        new_jobs = []
        for job in jobs:
            if job.url not in applied_urls:
                applied_urls.add(job.url)
                new_jobs.append(job)

        if not new_jobs:
            cycle_logs.append(self._log(
                ActivityType.THINKING, 'No new jobs to apply to - all listings already processed'
            ))
            self.storage.set_agent_state(
                status=AgentStatus.IDLE, current_task='Waiting for new listings...'
            )
            return HuntResult(jobs_found=len(jobs), applications_submitted=0, logs=cycle_logs)

        self.storage.set_agent_state(
            status=AgentStatus.APPLYING, current_task='Analyzing job listings...'
        )

        submitted = 0
        for job in new_jobs[:self.max_applications]:
            self.storage.save_discovered_job(job)
            cycle_logs.append(self._log(
                ActivityType.JOB_ANALYZED, f"Analyzing: {job.title} at {job.company}"
            ))

            analysis = await self.analyzer.analyze_job_fit(job)

            if analysis.should_apply:
                cycle_logs.append(self._log(
                    ActivityType.THINKING,
                    f"Good fit (score: {analysis.score}/100) - preparing application",
                ))
                try:
                    await self.create_application(job)
                    submitted += 1
                    cycle_logs.append(self._log(
                        ActivityType.APPLICATION_SUBMITTED,
                        f"✓ Applied to {job.title} at {job.company}",
                    ))
                except Exception as e:
                    cycle_logs.append(self._log(
                        ActivityType.ERROR, f"Failed to submit application: {str(e)}"
                    ))
            else:
                reason = analysis.reasons[0] if analysis.reasons else 'not a good fit'
                cycle_logs.append(self._log(
                    ActivityType.THINKING, f"Skipping (score: {analysis.score}/100) - {reason}"
                ))

            if self.delay_seconds > 0:
                await asyncio.sleep(self.delay_seconds)

        self.storage.set_agent_state(
            status=AgentStatus.WAITING, current_task='Waiting for responses...'
        )
        cycle_logs.append(self._log(
            ActivityType.STATUS_UPDATE, f"Cycle complete: {submitted} applications submitted"
        ))

        return HuntResult(jobs_found=len(jobs), applications_submitted=submitted, logs=cycle_logs)


def get_job_hunter(storage: Optional[Storage] = None) -> JobHunter:
    """Hunter wired to the configured storage, agent and timings."""
    settings = get_settings()
    return JobHunter(
        storage=storage or get_storage(),
        analyzer=get_job_analyzer(),
        delay_seconds=settings.hunt_delay_seconds,
        max_applications=settings.max_applications_per_cycle,
        mock_job_count=settings.mock_job_count,
    )


async def run_hunt_cycle() -> HuntResult:
    """Run one hunt cycle with the configured components."""
    return await get_job_hunter().run_cycle()
