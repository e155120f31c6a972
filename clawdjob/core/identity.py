"""Deterministic persona of the job-hunting agent.

The identity is derived from a seed with a small linear congruential
generator so every process of a deployment presents the same agent.
"""
from typing import Callable, List, Optional

from clawdjob.core.schemas import Agent, JobListing

AGENT_ID = 'agent-001'

FIRST_NAMES = [
    'Alex', 'Jordan', 'Taylor', 'Morgan', 'Casey', 'Riley', 'Quinn', 'Avery',
    'Skyler', 'Dakota', 'Reese', 'Phoenix', 'Sage', 'River', 'Rowan', 'Blake',
    'Cameron', 'Drew', 'Emery', 'Finley', 'Harper', 'Hayden', 'Jamie', 'Jesse',
    'Kai', 'Lane', 'Logan', 'Marley', 'Parker', 'Peyton', 'Reagan', 'Sawyer',
]

LAST_NAMES = [
    'Chen', 'Rodriguez', 'Patel', 'Kim', 'Nguyen', 'Martinez', 'Anderson',
    'Taylor', 'Thomas', 'Moore', 'Jackson', 'Martin', 'Lee', 'Thompson',
    'White', 'Harris', 'Clark', 'Lewis', 'Walker', 'Hall', 'Young', 'Allen',
    'King', 'Wright', 'Scott', 'Green', 'Baker', 'Adams', 'Nelson', 'Hill',
]

SKILLS = [
    'Technical Writing',
    'Data Analysis',
    'Project Coordination',
    'Research & Documentation',
    'Process Automation',
    'API Integration',
    'Quality Assurance',
    'Customer Support',
    'System Administration',
    'Database Management',
    'Report Generation',
    'Workflow Optimization',
    'Communication',
    'Problem Solving',
    'Attention to Detail',
]

PERSONALITIES = [
    'Enthusiastic and detail-oriented professional with a passion for technology and automation.',
    'Analytical thinker who thrives in fast-paced environments and loves solving complex problems.',
    'Dedicated team player with excellent communication skills and a drive for continuous learning.',
    'Results-driven professional committed to delivering high-quality work and exceeding expectations.',
    'Innovative problem-solver with a strong foundation in technical support and process improvement.',
]

AVATAR_URL = (
    "https://api.dicebear.com/8.x/bottts-neutral/svg?seed={seed}"
    "&backgroundColor=0a0a0f&baseColor=00ff9d"
)


def seeded_random(seed: int) -> Callable[[], float]:
    """Return a generator of floats in [0, 1] fully determined by ``seed``."""
    state = seed

    def next_value() -> float:
        nonlocal state
        state = (state * 1103515245 + 12345) & 0x7fffffff
        return state / 0x7fffffff

    return next_value


def _pick(items: List[str], random: Callable[[], float]) -> str:
    # random() can return exactly 1.0
    return items[min(int(random() * len(items)), len(items) - 1)]


def _shuffled(items: List[str], random: Callable[[], float]) -> List[str]:
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = min(int(random() * (i + 1)), i)
        result[i], result[j] = result[j], result[i]
    return result


def generate_avatar(first_name: str, last_name: str) -> str:
    """DiceBear avatar URL unique to the agent name."""
    return AVATAR_URL.format(seed=f"{first_name}{last_name}".lower())


def generate_agent_identity(seed: int = 42, email: Optional[str] = None) -> Agent:
    """Generate the agent persona for ``seed``.

    Args:
        seed: Seed of the pseudo-random generator
        email: Contact address of the agent; defaults to the demo address

    Returns:
        The same Agent (apart from ``created_at``) for the same seed
    """
    random = seeded_random(seed)

    first_name = _pick(FIRST_NAMES, random)
    last_name = _pick(LAST_NAMES, random)

    num_skills = 5 + min(int(random() * 3), 2)
    skills = _shuffled(SKILLS, random)[:num_skills]

    personality = _pick(PERSONALITIES, random)
    years_experience = 2 + min(int(random() * 4), 3)

    return Agent(
        id=AGENT_ID,
        name=f"{first_name} {last_name}",
        first_name=first_name,
        last_name=last_name,
        email=email or 'agent@clawdjob.ai',
        avatar=generate_avatar(first_name, last_name),
        skills=skills,
        personality=personality,
        years_experience=years_experience,
    )


def generate_resume(agent: Agent) -> str:
    """Plain-text resume of the agent."""
    skills = "\n".join(f"• {skill}" for skill in agent.skills)
    return f"""{agent.name}
{agent.email} | Remote | Available Immediately

PROFESSIONAL SUMMARY
{agent.personality} {agent.years_experience}+ years of experience in technical assistance and support roles.

SKILLS
{skills}

EXPERIENCE

Technical Assistant | Freelance
Remote | 2022 - Present
• Provided comprehensive technical support and assistance to various clients
• Managed documentation, data analysis, and process automation tasks
• Coordinated projects and maintained clear communication with stakeholders
• Implemented workflow improvements resulting in increased efficiency

Virtual Assistant | Remote Support Services
Remote | 2021 - 2022
• Handled administrative tasks, scheduling, and correspondence
• Conducted research and compiled reports for decision-making
• Maintained databases and organized digital assets
• Supported team members with technical troubleshooting

EDUCATION
Bachelor's in Information Technology
Online University | 2020

CERTIFICATIONS
• Google IT Support Professional Certificate
• CompTIA A+ (in progress)

AVAILABILITY
Immediate | Full-time or Part-time | Remote preferred"""


def generate_cover_letter(agent: Agent, job: JobListing) -> str:
    """Fixed-template cover letter used when no model is available."""
    highlights = "\n".join(f"• {skill}" for skill in agent.skills[:4])
    return f"""Dear Hiring Manager,

I am writing to express my strong interest in the {job.title} position at {job.company}. With {agent.years_experience}+ years of experience in technical assistance and a proven track record of delivering high-quality support, I am confident in my ability to contribute effectively to your team.

{agent.personality}

My experience includes:
{highlights}

I am particularly drawn to this opportunity because it aligns perfectly with my skills and career goals. I am excited about the prospect of bringing my expertise to {job.company} and contributing to your team's success.

I am available for an interview at your convenience and look forward to discussing how my background and skills would be a great fit for this role.

Thank you for considering my application.

Best regards,
{agent.name}
{agent.email}"""
