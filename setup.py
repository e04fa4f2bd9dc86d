"""
python -m build
twine upload dist/*
"""

import os
from setuptools import setup, find_packages


def corerest_setup():
    with open("requirements.txt", "rt") as fp:
        install_requires = fp.read().strip().split("\n")

    about = {}
    with open(os.path.join("corerest", "__about__.py"), "rt") as fp:
        exec(fp.read(), about)
    version = about["__version__"]

    setup(
        name="corerest",
        packages=find_packages(exclude=["tests"]),
        version=version,
        license="MIT",
        description=about["__description__"],
        long_description=open("README.rst").read(),
        keywords=["SqlAlchemy", "Flask", "REST", "CRUD"],
        python_requires=">=3.9, <4",
        install_requires=install_requires,
        classifiers=[
            "Development Status :: 3 - Alpha",
            "License :: OSI Approved :: MIT License",
            "Intended Audience :: Developers",
            "Framework :: Flask",
            "Topic :: Software Development :: Libraries",
            "Environment :: Web Environment",
            "Programming Language :: Python :: 3",
        ],
        extras_require={"test": ["pytest>=7"]},
    )


corerest_setup()  # pragma: no cover
