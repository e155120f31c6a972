from setuptools import setup, find_packages

setup(
    name="clawdjob",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*", "clawdjob.app.tests"]),
    python_requires=">=3.9",
    install_requires=[
        "fastapi",
        "uvicorn",
        "pydantic>=2",
        "sqlalchemy>=2",
        "python-dotenv",
        "beautifulsoup4",
        "requests>=2.32.2",
        "pydantic-ai>=0.2.0",
    ],
    extras_require={
        "dev": [
            "pytest",
            "httpx",
            "black",
            "isort",
            "mypy",
        ],
    },
    entry_points={
        "console_scripts": [
            "clawdjob-agent=clawdjob.scripts.run_agent:main",
            "clawdjob-api=clawdjob.scripts.run_agent:serve",
        ],
    },
    author="",
    author_email="",
    description="Autonomous job hunting agent with a live dashboard API",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    keywords="job search, automation, ai, agent",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
    ],
)
