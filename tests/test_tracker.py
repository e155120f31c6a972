"""Tests for application stats."""
import pytest

from clawdjob.core.schemas import ApplicationStatus
from clawdjob.features.job_search.tracker import calculate_stats, compute_stats, get_agent_thoughts
from tests.factories import make_application


def test_empty_stats():
    stats = compute_stats([])
    assert stats.total_applications == 0
    assert stats.success_rate == 0


def test_stats_buckets():
    statuses = [
        ApplicationStatus.APPLIED,
        ApplicationStatus.VIEWED,
        ApplicationStatus.IN_REVIEW,
        ApplicationStatus.INTERVIEW_SCHEDULED,
        ApplicationStatus.INTERVIEWED,
        ApplicationStatus.OFFER_RECEIVED,
        ApplicationStatus.REJECTED,
        ApplicationStatus.WITHDRAWN,
        ApplicationStatus.NO_RESPONSE,
    ]
    stats = compute_stats(make_application(i, status) for i, status in enumerate(statuses))

    assert stats.total_applications == 9
    assert stats.pending == 2
    assert stats.in_review == 1
    assert stats.interviews == 2
    assert stats.offers == 1
    assert stats.rejections == 1
    assert stats.no_response == 1
    assert stats.success_rate == pytest.approx(100 * 3 / 9)


def test_stats_wire_names():
    data = compute_stats([make_application(1)]).to_json_dict()
    assert set(data) == {
        "totalApplications", "pending", "inReview", "interviews",
        "offers", "rejections", "noResponse", "successRate",
    }


def test_calculate_stats_filters_agent(storage):
    storage.save_application(make_application(1, ApplicationStatus.OFFER_RECEIVED))
    other = make_application(2)
    other.agent_id = "agent-002"
    storage.save_application(other)

    stats = calculate_stats(storage, "agent-001")
    assert stats.total_applications == 1
    assert stats.success_rate == 100


def test_agent_thoughts(storage):
    assert get_agent_thoughts(storage) == (
        "Currently tracking 0 applications. Continuously searching for new opportunities..."
    )

    storage.save_application(make_application(1))
    storage.save_application(make_application(2, ApplicationStatus.INTERVIEW_SCHEDULED))
    thoughts = get_agent_thoughts(storage)
    assert "Currently tracking 2 applications." in thoughts
    assert "Waiting on 1 responses." in thoughts
    assert "1 interview(s) scheduled!" in thoughts
