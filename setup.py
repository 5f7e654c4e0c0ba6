from pathlib import Path

from setuptools import find_packages, setup  # isort: skip


HERE = Path(__file__).resolve().parent


def load_module_readme():
    readme = HERE / "README.md"
    return readme.read_text(encoding="utf-8") if readme.exists() else ""


setup(
    name="sqltrace",
    version="0.1.0",
    description="Structured telemetry for database drivers",
    long_description=load_module_readme(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests*", "benchmarks*", "scripts*"]),
    package_data={
        "sqltrace": ["py.typed"],
    },
    zip_safe=False,
    python_requires=">=3.8",
    install_requires=[
        "attrs>=20",
        "wrapt>=1.14",
    ],
    extras_require={
        "tests": [
            "hypothesis",
            "mock",
            "pytest",
        ],
    },
    classifiers=[
        "Programming Language :: Python",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Database",
        "Topic :: System :: Logging",
    ],
)
