from setuptools import setup, find_packages

setup(
    name="event-scheduler",
    version="0.1.0",
    description="In-process, time-driven event scheduler with advance warnings",
    python_requires=">=3.10",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "python-dotenv>=1.0.0",
        "loguru>=0.7.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
