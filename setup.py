"""Package setup for tsb_homebank."""

from setuptools import setup, find_packages

setup(
    name="tsb-homebank",
    version="1.0.0",
    description="Sign-on client for the TSB Bank homebank portal",
    packages=find_packages(include=["tsb_homebank", "tsb_homebank.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "beautifulsoup4>=4.12.0",
        "html5lib>=1.1",
        "urllib3>=2.0.0",
    ],
    extras_require={
        "ui": [
            "colorlog>=6.8.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "tsb-homebank=tsb_homebank.cli:main",
        ],
    },
)
