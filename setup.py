"""  # lint-amnesty, pylint: disable=django-not-configured
Setup script for the LS2 course copy package.
"""

from setuptools import find_packages, setup

setup(
    name="ls2-copy",
    version='0.1.0',
    description="Web service functions copying sections, activities, blocks and filters between courses",
    install_requires=[
        "setuptools",
        "Django",
        "djangorestframework",
        "edx-django-utils",
        "edx-drf-extensions",
        "lxml",
        "path",
        "PyYAML",
    ],
    extras_require={
        "test": [
            "ddt",
            "factory-boy",
            "pytest",
            "pytest-django",
        ],
    },
    python_requires=">=3.11",
    packages=find_packages(include=["ls2_copy", "ls2_copy.*"]),
    entry_points={
        "console_scripts": [
            "ls2-copy-manage = manage:main",
        ],
    },
    py_modules=["manage"],
)
