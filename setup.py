import re

import setuptools
from setuptools import find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("typed_http_client/version.py", "r", encoding="utf-8") as fh:
    __version__ = re.search(r'__version__ = "(.+)"', fh.read()).group(1)


def read_requirements(path):
    if not isinstance(path, list):
        path = [path]
    requirements = []
    for p in path:
        with open(p) as fh:
            requirements.extend([line.strip() for line in fh if line.strip()])
    return requirements


setuptools.setup(
    name="typed-http-client",
    version=__version__,
    description="Executes prepared HTTP requests and decodes responses into typed results.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(
        where=".",
        exclude=(
            "requirements",
            "tests",
            "tests.*",
        ),
    ),
    install_requires=read_requirements(["requirements/requirements.http.txt"]),
    extras_require={
        "test": read_requirements(["requirements/requirements.test.unit.txt"]),
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Typing :: Typed",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
)
