from setuptools import setup, find_packages

setup(
    name="mobile-build-runner",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "pydantic>=2.0",
        "python-dotenv",
        "PyYAML",
        "structlog",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "mobile-build-runner=mobile_build_runner.core.cli:main_entry",
        ],
    },
    description="Read custom command line build arguments and request mobile builds.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
)
