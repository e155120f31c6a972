"""Job fit scoring and cover letter generation.

With an Anthropic API key configured both operations are a single model
round trip. Without one, or when the call fails, they fall back to local
heuristics: a random score and the template cover letter.
"""
import random
from typing import Optional

from clawdjob.core.config import get_settings
from clawdjob.core.identity import generate_agent_identity, generate_cover_letter as template_cover_letter
from clawdjob.core.llm_agent import BaseLLMAgent
from clawdjob.core.logging import setup_logging
from clawdjob.core.schemas import Agent, JobFitAnalysis, JobListing

logger = setup_logging('job_analysis')

APPLY_THRESHOLD = 70

FIT_PROMPT = """Analyze this job posting for fit with a candidate who has these skills: {skills}.

Job Title: {title}
Company: {company}
Description: {description}

Give a score from 0 to 100, a few short reasons, and whether the candidate should apply."""

COVER_LETTER_PROMPT = """Write a professional cover letter for the following job application.

Applicant: {name}
Email: {email}
Skills: {skills}
Experience: {years} years

Job Title: {title}
Company: {company}
Job Description: {description}

Write a compelling, personalized cover letter. Be professional but show personality. Keep it concise (under 300 words)."""


class JobAnalyzer:
    """Scores jobs and writes cover letters on behalf of one agent."""

    def __init__(self, agent: Agent, api_key: Optional[str] = None, model_name: Optional[str] = None):
        self.agent = agent
        self.api_key = api_key
        self.model_name = model_name or get_settings().llm_model
        self._fit_agent: Optional[BaseLLMAgent] = None
        self._letter_agent: Optional[BaseLLMAgent] = None

    @property
    def llm_enabled(self) -> bool:
        return bool(self.api_key)

    def _get_fit_agent(self) -> BaseLLMAgent:
        if self._fit_agent is None:
            self._fit_agent = BaseLLMAgent(
                feature_name='job_fit',
                output_type=JobFitAnalysis,
                model_name=self.model_name,
                api_key=self.api_key,
            )
        return self._fit_agent

    def _get_letter_agent(self) -> BaseLLMAgent:
        if self._letter_agent is None:
            self._letter_agent = BaseLLMAgent(
                feature_name='cover_letter',
                output_type=str,
                model_name=self.model_name,
                api_key=self.api_key,
            )
        return self._letter_agent

    def heuristic_fit(self) -> JobFitAnalysis:
        """Random score in [60, 95), applying above the threshold."""
        score = 60 + random.randrange(35)
        return JobFitAnalysis(
            score=score,
            reasons=['Good match for remote work', 'Skills align with requirements'],
            should_apply=score > APPLY_THRESHOLD,
        )

    async def analyze_job_fit(self, job: JobListing) -> JobFitAnalysis:
        """Score how well ``job`` suits the agent."""
        if not self.llm_enabled:
            return self.heuristic_fit()

        try:
            return await self._get_fit_agent().generate(FIT_PROMPT.format(
                skills=', '.join(self.agent.skills),
                title=job.title,
                company=job.company,
                description=job.description,
            ))
        except Exception as e:
            logger.error(f"Error analyzing job: {str(e)}")
            return JobFitAnalysis(
                score=75,
                reasons=['Unable to analyze, applying based on keyword match'],
                should_apply=True,
            )

    async def generate_cover_letter(self, job: JobListing) -> str:
        """Personalized cover letter for ``job``."""
        if not self.llm_enabled:
            return template_cover_letter(self.agent, job)

        try:
            letter = await self._get_letter_agent().generate(COVER_LETTER_PROMPT.format(
                name=self.agent.name,
                email=self.agent.email,
                skills=', '.join(self.agent.skills),
                years=self.agent.years_experience,
                title=job.title,
                company=job.company,
                description=job.description,
            ))
            if letter:
                return letter
        except Exception as e:
            logger.error(f"Error generating cover letter: {str(e)}")

        return template_cover_letter(self.agent, job)


def get_job_analyzer() -> JobAnalyzer:
    """Analyzer for the configured agent persona."""
    settings = get_settings()
    agent = generate_agent_identity(settings.agent_seed, email=settings.email_address)
    return JobAnalyzer(agent, api_key=settings.anthropic_api_key, model_name=settings.llm_model)
