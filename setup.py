#!/usr/bin/env python
from setuptools import setup

setup(
    name="txretry",
    version="23.0.0",
    description="Retryability classification of MongoDB errors for Twisted drivers",
    author="Alexandre Fiori, Bret Curtis",
    author_email="fiorix@gmail.com, psi29a@gmail.com",
    url="https://github.com/twisted/txmongo",
    keywords=["mongo", "mongodb", "pymongo", "retryable writes", "change streams", "txmongo"],
    packages=["txretry", "txretry.utils"],
    install_requires=["twisted>=21.2.0", "pymongo>=4.0"],
    license="Apache License, Version 2.0",
    include_package_data=True,
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: MacOS :: MacOS X",
        "Operating System :: Microsoft :: Windows",
        "Operating System :: POSIX",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: Implementation :: CPython",
        "Programming Language :: Python :: Implementation :: PyPy",
        "Framework :: Twisted",
        "Topic :: Database"]
    )
