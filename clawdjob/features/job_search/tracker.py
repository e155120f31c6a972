"""Application tracking: stats and the agent's status blurb."""
from typing import Iterable

from clawdjob.core.schemas import AgentStats, Application, ApplicationStatus
from clawdjob.core.storage import Storage

PENDING_STATUSES = {ApplicationStatus.APPLIED, ApplicationStatus.VIEWED}
INTERVIEW_STATUSES = {ApplicationStatus.INTERVIEW_SCHEDULED, ApplicationStatus.INTERVIEWED}


def compute_stats(applications: Iterable[Application]) -> AgentStats:
    """Count applications per status bucket.

    ``pending`` covers both applied and viewed. No bucket covers
    ``withdrawn``, so the buckets can sum to less than the total.
    """
    apps = list(applications)

    def count(*statuses: ApplicationStatus) -> int:
        return sum(1 for app in apps if app.status in statuses)

    stats = AgentStats(
        total_applications=len(apps),
        pending=count(*PENDING_STATUSES),
        in_review=count(ApplicationStatus.IN_REVIEW),
        interviews=count(*INTERVIEW_STATUSES),
        offers=count(ApplicationStatus.OFFER_RECEIVED),
        rejections=count(ApplicationStatus.REJECTED),
        no_response=count(ApplicationStatus.NO_RESPONSE),
    )
    if stats.total_applications > 0:
        stats.success_rate = (stats.interviews + stats.offers) / stats.total_applications * 100
    return stats


def calculate_stats(storage: Storage, agent_id: str) -> AgentStats:
    """Stats over the stored applications of ``agent_id``."""
    return compute_stats(app for app in storage.get_applications() if app.agent_id == agent_id)


def get_agent_thoughts(storage: Storage) -> str:
    """Short first-person summary of what the agent is tracking."""
    apps = storage.get_applications()
    pending = sum(1 for app in apps if app.status == ApplicationStatus.APPLIED)
    interviews = sum(1 for app in apps if app.status == ApplicationStatus.INTERVIEW_SCHEDULED)

    thoughts = [f"Currently tracking {len(apps)} applications."]
    if pending > 0:
        thoughts.append(f"Waiting on {pending} responses.")
    if interviews > 0:
        thoughts.append(f"{interviews} interview(s) scheduled!")
    thoughts.append("Continuously searching for new opportunities...")
    return ' '.join(thoughts)
