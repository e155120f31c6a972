"""Tests for job fit scoring and cover letters."""
import asyncio
from unittest.mock import AsyncMock, Mock, patch

from clawdjob.core.schemas import JobFitAnalysis
from clawdjob.features.job_search.analysis import APPLY_THRESHOLD, JobAnalyzer, get_job_analyzer
from tests.factories import make_job


def test_heuristic_fit_without_api_key(agent):
    analyzer = JobAnalyzer(agent)
    for _ in range(50):
        analysis = asyncio.run(analyzer.analyze_job_fit(make_job(1)))
        assert 60 <= analysis.score < 95
        assert analysis.should_apply == (analysis.score > APPLY_THRESHOLD)
        assert analysis.reasons


def test_template_cover_letter_without_api_key(agent):
    letter = asyncio.run(JobAnalyzer(agent).generate_cover_letter(make_job(1, company="CodeCraft")))
    assert "at CodeCraft" in letter
    assert agent.name in letter


def test_model_fit_result_is_returned(agent):
    analyzer = JobAnalyzer(agent, api_key="sk-test")
    expected = JobFitAnalysis(score=88, reasons=["Strong support background"], should_apply=True)
    fit_agent = Mock()
    fit_agent.generate = AsyncMock(return_value=expected)

    with patch.object(JobAnalyzer, "_get_fit_agent", return_value=fit_agent):
        analysis = asyncio.run(analyzer.analyze_job_fit(make_job(1)))

    assert analysis == expected
    prompt = fit_agent.generate.await_args.args[0]
    assert "Remote Technical Assistant" in prompt
    assert ", ".join(agent.skills) in prompt


def test_model_failure_falls_back(agent):
    analyzer = JobAnalyzer(agent, api_key="sk-test")
    failing = Mock()
    failing.generate = AsyncMock(side_effect=RuntimeError("overloaded"))

    with patch.object(JobAnalyzer, "_get_fit_agent", return_value=failing), \
            patch.object(JobAnalyzer, "_get_letter_agent", return_value=failing):
        analysis = asyncio.run(analyzer.analyze_job_fit(make_job(1)))
        letter = asyncio.run(analyzer.generate_cover_letter(make_job(1)))

    assert analysis.score == 75
    assert analysis.should_apply is True
    assert letter.startswith("Dear Hiring Manager,")


def test_model_cover_letter(agent):
    analyzer = JobAnalyzer(agent, api_key="sk-test")
    letter_agent = Mock()
    letter_agent.generate = AsyncMock(return_value="Hello ByteWise!")

    with patch.object(JobAnalyzer, "_get_letter_agent", return_value=letter_agent):
        assert asyncio.run(analyzer.generate_cover_letter(make_job(1))) == "Hello ByteWise!"


def test_get_job_analyzer_uses_settings(settings):
    analyzer = get_job_analyzer()
    assert analyzer.llm_enabled is False
    assert analyzer.agent.email == settings.email_address
